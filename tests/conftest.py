import io

import pytest
from PIL import Image


@pytest.fixture
def image_bytes():
    """Factory: encode a solid-colour image of the given size and mode."""

    def make(size=(2, 2), color=(0, 0, 0), mode="RGB", fmt="PNG"):
        buf = io.BytesIO()
        Image.new(mode, size, color=color).save(buf, format=fmt)
        return buf.getvalue()

    return make


@pytest.fixture
def gradient_bytes():
    """A 256x4 horizontal grayscale ramp, one column per luminance value."""
    img = Image.new("L", (256, 4))
    img.putdata([x for _ in range(4) for x in range(256)])
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()

"""ASCII Viewer - Convert images to ASCII art and self-scaling HTML viewers."""

__version__ = "0.1.0"

"""
CLI entry points are lazy wrappers so `python -m ascii_viewer.<module>`
does not find the submodule already in `sys.modules`.
"""

from .errors import AsciiViewerError, ConfigurationError, DecodeError
from .presets import Palette, RenderOptions, Theme


def image_to_ascii_main(*args, **kwargs):
    from .image_to_ascii import main as _m

    return _m(*args, **kwargs)


def viewer_main(*args, **kwargs):
    from .viewer import main as _m

    return _m(*args, **kwargs)


def render_image(*args, **kwargs):
    from .pipeline import render_image as _r

    return _r(*args, **kwargs)


__all__ = [
    "AsciiViewerError",
    "ConfigurationError",
    "DecodeError",
    "Palette",
    "RenderOptions",
    "Theme",
    "image_to_ascii_main",
    "render_image",
    "viewer_main",
]

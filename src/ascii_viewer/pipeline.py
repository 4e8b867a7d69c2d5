"""Bytes in, ASCII text and viewer document out."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .image_to_ascii import AsciiGrid, convert, decode
from .presets import RenderOptions
from .viewer import render_viewer

LOG = logging.getLogger("ascii_viewer.pipeline")


@dataclass(frozen=True)
class ConversionResult:
    grid: AsciiGrid
    html: str

    @property
    def text(self) -> str:
        return self.grid.text

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self.grid.dimensions


def render_image(
    data: bytes,
    options: RenderOptions,
    logger: Optional[logging.Logger] = None,
) -> ConversionResult:
    """
    Run the whole conversion for one image.

    Raises DecodeError or ConfigurationError; nothing is returned on failure.
    """
    log = logger or LOG
    log.debug("Decoding %d bytes", len(data))
    img = decode(data)
    log.debug("Decoded %s image %dx%d", img.mode, img.width, img.height)

    grid = convert(img, options, logger=log)
    doc = render_viewer(grid, options.background, options.foreground)
    return ConversionResult(grid=grid, html=doc)

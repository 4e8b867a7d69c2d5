#!/usr/bin/env python3
"""Convert raster images to a grid of ASCII characters."""

import argparse
import io
import logging
import math
import os
import sys
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import ConfigurationError, DecodeError
from .logging_setup import LEVELS, setup_logging
from .presets import DEFAULT_ASPECT_CORRECTION, DEFAULT_WIDTH, Palette, RenderOptions, Theme

LOG = logging.getLogger("ascii_viewer.image_to_ascii")

# modes that convert("L") maps losslessly enough; everything else goes through RGB
_GRAY_SOURCE_MODES = ("1", "L", "LA", "La")
# more than 8 bits per sample; rescaled rather than clipped
_WIDE_MODES = ("I", "F")


# -----------------------------
# Data model
# -----------------------------

@dataclass(frozen=True)
class AsciiGrid:
    lines: Tuple[str, ...]

    def __post_init__(self):
        if not self.lines or not self.lines[0]:
            raise ValueError("ASCII grid needs at least one row and one column")
        width = len(self.lines[0])
        if any(len(line) != width for line in self.lines):
            raise ValueError(f"every grid row must be {width} characters wide")

    @property
    def columns(self) -> int:
        return len(self.lines[0])

    @property
    def rows(self) -> int:
        return len(self.lines)

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self.columns, self.rows

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


# -----------------------------
# Decode / resample
# -----------------------------

def decode(data: bytes) -> Image.Image:
    """
    Decode an encoded image (PNG, JPEG, GIF, BMP, WebP, ...) held in memory.

    Alpha is dropped here; only luminance matters downstream. Raises
    DecodeError for empty, truncated or unrecognised input.
    """
    if not data:
        raise DecodeError("no image data")

    try:
        img = Image.open(io.BytesIO(data))
        img.load()  # Image.open is lazy; force the full decode so truncation surfaces here
        if img.mode in _WIDE_MODES or img.mode.startswith("I;16"):
            img = to_8bit(img)
        elif img.mode not in ("L", "RGB"):
            img = img.convert("L" if img.mode in _GRAY_SOURCE_MODES else "RGB")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"cannot decode image: {e}") from e

    if img.width < 1 or img.height < 1:
        raise DecodeError(f"degenerate image size {img.width}x{img.height}")
    return img


def to_8bit(img: Image.Image) -> Image.Image:
    """
    Rescale a 16/32-bit integer or float image to 8-bit "L".

    I;16 samples are divided by 257 (65535 -> 255). "I" images are treated
    as 8-bit when every sample fits, as 16-bit up to 65535 and as full
    32-bit otherwise. "F" samples are taken to lie in 0..1.
    """
    arr = np.asarray(img)
    if img.mode == "F":
        scaled = np.clip(arr, 0.0, 1.0) * 255.0
    else:
        arr = np.clip(arr.astype(np.float64), 0, None)
        peak = float(arr.max()) if arr.size else 0.0
        if img.mode.startswith("I;16") or 255 < peak <= 65535:
            scaled = arr / 257.0
        elif peak > 65535:
            scaled = arr / (2 ** 32 - 1) * 255.0
        else:
            scaled = arr
    return Image.fromarray(np.clip(np.floor(scaled + 0.5), 0, 255).astype(np.uint8))


def round_half_away(x: float) -> int:
    if x < 0:
        return -int(math.floor(-x + 0.5))
    return int(math.floor(x + 0.5))


def target_height(src_w: int, src_h: int, width: int, aspect_correction: float) -> int:
    return max(1, round_half_away(src_h * width / src_w * aspect_correction))


def resample(img: Image.Image, width: int, aspect_correction: float) -> Image.Image:
    if width <= 0:
        raise ConfigurationError(f"target width must be positive, got {width}")
    height = target_height(img.width, img.height, width, aspect_correction)
    return img.resize((width, height), resample=Image.Resampling.LANCZOS)


def to_grayscale(img: Image.Image) -> Image.Image:
    # Rec. 709 luma, truncated: L = (R*2126 + G*7152 + B*722) // 10000
    if img.mode == "L":
        return img.copy()
    rgb = np.asarray(img.convert("RGB"), dtype=np.uint32)
    luma = (rgb[..., 0] * 2126 + rgb[..., 1] * 7152 + rgb[..., 2] * 722) // 10000
    return Image.fromarray(luma.astype(np.uint8))


# -----------------------------
# Character mapping
# -----------------------------

def palette_index(luminance: float, size: int, invert: bool = False) -> int:
    if size < 1:
        raise ConfigurationError("character palette must not be empty")
    index = round_half_away(luminance / 255 * (size - 1))
    index = min(max(index, 0), size - 1)
    if invert:
        index = size - 1 - index
    return index


def quantize(luminance: float, palette: Sequence[str], invert: bool = False) -> str:
    return palette[palette_index(luminance, len(palette), invert)]


def build_lookup(palette: Sequence[str], invert: bool = False) -> np.ndarray:
    """Character for every possible 8-bit luminance value, as a (256,) array."""
    chars = np.array(list(palette), dtype=str)
    indices = np.array([palette_index(v, len(chars), invert) for v in range(256)], dtype=np.intp)
    return chars[indices]


def convert(
    img: Image.Image,
    options: RenderOptions,
    logger: Optional[logging.Logger] = None,
) -> AsciiGrid:
    log = logger or LOG

    if options.full_resolution:
        log.info("Using full resolution (%dx%d)", img.width, img.height)
        source = img.copy()
    else:
        log.info("Resizing image to width: %d", options.width)
        source = resample(img, options.width, options.aspect_correction)

    gray = np.asarray(to_grayscale(source), dtype=np.uint8)
    cells = build_lookup(options.palette, options.invert)[gray]

    grid = AsciiGrid(tuple("".join(row) for row in cells))
    log.debug("Converted to %dx%d characters", grid.columns, grid.rows)
    return grid


# -----------------------------
# CLI
# -----------------------------

def read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="ascii-viewer image",
        description="Convert an image to ASCII art and a self-scaling HTML viewer",
    )
    ap.add_argument("input", help="Input image path ('-' reads bytes from stdin)")
    ap.add_argument(
        "-o", "--output-dir", default=None,
        help="Directory for the .txt/.html artifacts (default: print to stdout)",
    )
    ap.add_argument(
        "-w", "--width", type=int, default=DEFAULT_WIDTH,
        help="Output columns (ignored with --full-resolution)",
    )
    ap.add_argument(
        "--full-resolution", action="store_true",
        help="One character per source pixel, no resampling",
    )
    ap.add_argument(
        "--detailed", action="store_true",
        help="Use the 70-character ramp instead of the 10-character one",
    )
    ap.add_argument("--theme", choices=["dark", "light"], default="dark", help="Viewer colour theme")
    ap.add_argument(
        "--aspect", type=float, default=DEFAULT_ASPECT_CORRECTION,
        help="Row/column aspect correction for non-square character cells",
    )
    ap.add_argument(
        "--format", choices=["txt", "html", "both"], default="both",
        help="Artifacts to write (stdout prints txt unless html is requested)",
    )
    ap.add_argument("--log-level", default="WARNING", choices=LEVELS, help="Logging level (default: WARNING)")
    ap.add_argument("--log", default=None, help="Also write a debug log to FILE")

    args = ap.parse_args(argv)
    setup_logging(args.log_level, args.log)

    # deferred: pipeline imports this module
    from .export import write_artifacts
    from .pipeline import render_image

    try:
        data = read_input(args.input)
    except OSError as e:
        LOG.error("Cannot read %s: %s", args.input, e)
        return 1

    try:
        options = RenderOptions.from_presets(
            width=args.width,
            full_resolution=args.full_resolution,
            palette=Palette.DETAILED if args.detailed else Palette.SIMPLE,
            theme=Theme[args.theme.upper()],
            aspect_correction=args.aspect,
        )
        result = render_image(data, options)
    except DecodeError as e:
        LOG.error("Rejected input %s: %s", args.input, e)
        return 2
    except ConfigurationError as e:
        LOG.critical("Invalid render options: %s", e)
        return 3

    formats = ("txt", "html") if args.format == "both" else (args.format,)
    if args.output_dir:
        filename = "image" if args.input == "-" else os.path.basename(args.input)
        for path in write_artifacts(result, args.output_dir, filename, formats=formats):
            LOG.info("Wrote %s", path)
    elif formats == ("html",):
        sys.stdout.write(result.html)
    else:
        print(result.text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""Standalone HTML viewer that keeps a whole ASCII grid on screen."""

import argparse
import html
import logging
import sys
from typing import List, Optional, Sequence

from .image_to_ascii import AsciiGrid
from .logging_setup import LEVELS, setup_logging
from .presets import Theme

LOG = logging.getLogger("ascii_viewer.viewer")

# width of a monospace glyph relative to its font size
FONT_ASPECT_RATIO = 0.6
FONT_STACK = "'Courier New', Courier, monospace"


def escape(text: str) -> str:
    # html.escape() emits &#x27; for quotes; keep the decimal entity
    return html.escape(text, quote=False).replace('"', "&quot;").replace("'", "&#39;")


def fit_font_size(viewport_w: float, viewport_h: float, columns: int, rows: int) -> float:
    """Same computation as the viewer script, for callers that pre-size the grid."""
    by_width = (viewport_w / columns) * FONT_ASPECT_RATIO
    by_height = viewport_h / rows
    return min(by_width, by_height)


def resize_script(columns: int, rows: int) -> str:
    return (
        "<script>\n"
        "  (function() {\n"
        "    const artElement = document.getElementById('ascii-art');\n"
        f"    const artCols = {columns}; const artRows = {rows};\n"
        f"    const FONT_ASPECT_RATIO = {FONT_ASPECT_RATIO};\n"
        "    function resizeArt() {\n"
        "      const fontSizeForWidth = (window.innerWidth / artCols) * FONT_ASPECT_RATIO;\n"
        "      const fontSizeForHeight = window.innerHeight / artRows;\n"
        "      artElement.style.fontSize = Math.min(fontSizeForWidth, fontSizeForHeight) + 'px';\n"
        "    }\n"
        "    window.addEventListener('resize', resizeArt);\n"
        "    document.addEventListener('DOMContentLoaded', resizeArt);\n"
        "  })();\n"
        "</script>\n"
    )


def render_viewer(
    grid: AsciiGrid,
    background: str,
    foreground: str,
    title: str = "ASCII Art Viewer",
) -> str:
    columns, rows = grid.dimensions
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n'
        '  <meta charset="UTF-8">\n'
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"  <title>{escape(title)}</title>\n"
        "  <style>\n"
        "    html, body {\n"
        "      margin: 0; padding: 0; width: 100%; height: 100%;\n"
        "      display: flex; justify-content: center; align-items: center;\n"
        f"      background-color: {background};\n"
        "      overflow: hidden;\n"
        "    }\n"
        "    pre {\n"
        f"      color: {foreground};\n"
        f"      font-family: {FONT_STACK};\n"
        "      white-space: pre;\n"
        "      font-size: 10px;\n"
        "      line-height: 0.8em;\n"
        "    }\n"
        "  </style>\n"
        "</head>\n<body>\n"
        f'<pre id="ascii-art">{escape(grid.text)}</pre>\n'
        + resize_script(columns, rows)
        + "</body>\n</html>\n"
    )


# -----------------------------
# CLI
# -----------------------------

def read_ascii_file(path: str) -> List[str]:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return [ln.rstrip("\r\n") for ln in f]


def grid_from_lines(lines: Sequence[str]) -> AsciiGrid:
    """Pad ragged lines to the widest one so the grid is rectangular."""
    width = max((len(ln) for ln in lines), default=0)
    return AsciiGrid(tuple(ln.ljust(width) for ln in lines))


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="ascii-viewer viewer",
        description="Wrap an existing ASCII art text file in a self-scaling HTML viewer",
    )
    ap.add_argument("input", help="ASCII art text file")
    ap.add_argument("-o", "--output", default=None, help="Output .html file (default: stdout)")
    ap.add_argument("--theme", choices=["dark", "light"], default="dark", help="Colour theme")
    ap.add_argument("--title", default="ASCII Art Viewer", help="Document title")
    ap.add_argument("--log-level", default="WARNING", choices=LEVELS, help="Logging level (default: WARNING)")

    args = ap.parse_args(argv)
    setup_logging(args.log_level)

    try:
        lines = read_ascii_file(args.input)
    except OSError as e:
        LOG.error("Cannot read %s: %s", args.input, e)
        return 1

    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        LOG.error("%s contains no ASCII art", args.input)
        return 1

    grid = grid_from_lines(lines)
    LOG.debug("Loaded ASCII: %d columns x %d rows", grid.columns, grid.rows)
    theme = Theme[args.theme.upper()]
    doc = render_viewer(grid, theme.background, theme.foreground, title=args.title)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as out:
            out.write(doc)
        LOG.info("Wrote %s", args.output)
    else:
        sys.stdout.write(doc)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

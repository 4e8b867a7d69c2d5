"""Tests for viewer module."""

import re

import pytest
from ascii_viewer.image_to_ascii import AsciiGrid
from ascii_viewer.viewer import (
    FONT_ASPECT_RATIO,
    escape,
    fit_font_size,
    grid_from_lines,
    main,
    render_viewer,
)

# --- Fixtures ---


@pytest.fixture
def grid():
    return AsciiGrid(("<a>&", "\"'@ "))


# --- Tests ---


class TestEscape:
    def test_all_reserved_characters(self):
        assert escape("<a>&\"'") == "&lt;a&gt;&amp;&quot;&#39;"

    def test_repeated_occurrences(self):
        assert escape("&&<<''") == "&amp;&amp;&lt;&lt;&#39;&#39;"

    def test_ampersand_not_double_escaped(self):
        assert escape("&lt;") == "&amp;lt;"

    def test_plain_text_untouched(self):
        assert escape(" .:-=+*#%@\n") == " .:-=+*#%@\n"


class TestRenderViewer:
    def test_colors_embedded(self, grid):
        doc = render_viewer(grid, "#1a1a1a", "#e0e0e0")
        assert "background-color: #1a1a1a;" in doc
        assert "color: #e0e0e0;" in doc

    def test_grid_escaped_in_single_pre(self, grid):
        doc = render_viewer(grid, "#000", "#fff")
        assert doc.count("<pre") == 1
        assert '<pre id="ascii-art">&lt;a&gt;&amp;\n&quot;&#39;@ </pre>' in doc

    def test_script_has_dimensions(self, grid):
        doc = render_viewer(grid, "#000", "#fff")
        assert "const artCols = 4; const artRows = 2;" in doc
        assert f"const FONT_ASPECT_RATIO = {FONT_ASPECT_RATIO};" in doc
        assert "window.addEventListener('resize', resizeArt);" in doc
        assert "document.addEventListener('DOMContentLoaded', resizeArt);" in doc

    def test_monospace_font_stack(self, grid):
        assert re.search(r"font-family: [^;]*monospace;", render_viewer(grid, "#000", "#fff"))

    def test_title_escaped(self, grid):
        doc = render_viewer(grid, "#000", "#fff", title="<cat>")
        assert "<title>&lt;cat&gt;</title>" in doc

    def test_standalone_document(self, grid):
        doc = render_viewer(grid, "#000", "#fff")
        assert doc.startswith("<!DOCTYPE html>")
        assert doc.rstrip().endswith("</html>")
        assert "<link" not in doc
        assert "src=" not in doc


class TestFitFontSize:
    def test_width_bound(self):
        # 1000 / 100 * 0.6 = 6 < 800 / 10
        assert fit_font_size(1000, 800, 100, 10) == pytest.approx(6.0)

    def test_height_bound(self):
        # 600 / 50 = 12 < 1920 / 20 * 0.6
        assert fit_font_size(1920, 600, 20, 50) == pytest.approx(12.0)

    def test_idempotent(self):
        first = fit_font_size(1280, 720, 150, 42)
        assert fit_font_size(1280, 720, 150, 42) == first

    @pytest.mark.parametrize("vw,vh", [(320, 568), (1920, 1080), (3840, 400)])
    def test_grid_fits_viewport(self, vw, vh):
        cols, rows = 150, 60
        size = fit_font_size(vw, vh, cols, rows)
        assert cols * size * FONT_ASPECT_RATIO <= vw + 1e-9
        assert rows * size <= vh + 1e-9


class TestGridFromLines:
    def test_ragged_lines_padded(self):
        grid = grid_from_lines(["ab", "abcd", ""])
        assert grid.lines == ("ab  ", "abcd", "    ")
        assert grid.dimensions == (4, 3)


class TestMain:
    def test_writes_html(self, tmp_path):
        src = tmp_path / "art.txt"
        src.write_text("@@\n..\n", encoding="utf-8")
        out = tmp_path / "art.html"
        assert main([str(src), "-o", str(out), "--theme", "light"]) == 0
        doc = out.read_text(encoding="utf-8")
        assert "#f0f0f0" in doc and "#111111" in doc
        assert "const artCols = 2; const artRows = 2;" in doc

    def test_stdout(self, tmp_path, capsys):
        src = tmp_path / "art.txt"
        src.write_text("x<y\n", encoding="utf-8")
        assert main([str(src)]) == 0
        assert "x&lt;y" in capsys.readouterr().out

    def test_empty_file(self, tmp_path, capsys):
        src = tmp_path / "empty.txt"
        src.write_text("\n\n", encoding="utf-8")
        assert main([str(src)]) == 1
        assert "contains no ASCII art" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.txt")]) == 1
        assert "Cannot read" in capsys.readouterr().err

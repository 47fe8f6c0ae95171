"""
Tests for the matrix display helpers.
"""

import pytest

from integer_matrix import IntMatrix
from matrix_display import MatrixDisplay, format_latex, format_matrix, format_result


class TestFormatting:
    """Text and LaTeX rendering"""

    def test_format_matrix(self):
        m = IntMatrix.from_rows([[1, 2], [3, 4]])
        assert format_matrix(m) == "1 | 2\n3 | 4\n"

    def test_format_matrix_custom_separator(self):
        m = IntMatrix.from_rows([[1, -2], [0, 4]])
        assert format_matrix(m, separator=" ") == "1 -2\n0 4\n"

    def test_format_result(self):
        assert format_result(-3) == "Determinant is: -3"

    def test_format_latex_inline(self):
        latex = format_latex(IntMatrix.from_rows([[1, 2], [3, 4]]))
        assert latex.startswith("$") and not latex.startswith("$$")
        assert "1 & 2" in latex

    def test_format_latex_with_determinant(self):
        latex = format_latex(IntMatrix.from_rows([[1, 2], [3, 4]]), determinant=-2, inline=False)
        assert latex.startswith("$$\\det")
        assert latex.endswith("= -2$$")


class TestMatrixDisplay:
    """The MatrixDisplay bundle"""

    def test_determinant_computed_lazily(self):
        display = MatrixDisplay(IntMatrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 10]]))
        assert display.determinant == -3

    def test_precomputed_determinant_kept(self):
        display = MatrixDisplay(IntMatrix.identity(3), determinant=1, name="I3")
        assert display.determinant == 1

    def test_summary(self):
        display = MatrixDisplay(IntMatrix.identity(3), name="I3")
        assert display.summary() == (
            "I3 (3x3)\n"
            "Zero entries: 6 of 9\n"
            "1 | 0 | 0\n0 | 1 | 0\n0 | 0 | 1\n"
            "Determinant is: 1\n"
        )

    def test_show(self, capsys):
        MatrixDisplay(IntMatrix.from_rows([[2]]), name="one").show()
        out = capsys.readouterr().out
        assert "Determinant is: 2" in out

    def test_export_to_file(self, tmp_path):
        display = MatrixDisplay(IntMatrix.from_rows([[1, 2], [3, 4]]), name="demo")
        target = tmp_path / "demo.txt"
        written = display.export_to_file(str(target))
        assert written == str(target)
        content = target.read_text(encoding="utf-8")
        assert "Determinant is: -2" in content
        assert "LaTeX:" in content

    def test_export_default_filename(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        display = MatrixDisplay(IntMatrix.identity(2), name="my matrix/1")
        written = display.export_to_file()
        assert written == "my_matrix_1.txt"
        assert (tmp_path / written).exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

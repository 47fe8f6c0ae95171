"""
Output display utilities for the determinant engine.

Plain-text rendering of a generated matrix and its determinant (the form the
command-line runner prints), LaTeX rendering through SymPy, and a small
MatrixDisplay bundle that can print a summary or export it to a file.
"""

import re
from typing import Optional

import sympy as sp

from integer_matrix import IntMatrix


def format_matrix(matrix: IntMatrix, separator: str = " | ") -> str:
    """
    Render a matrix one row per line, entries joined by ``separator``.

    Every line, including the last, ends with a newline.
    """
    return "".join(separator.join(str(value) for value in row) + "\n" for row in matrix.rows)


def format_result(value: int) -> str:
    return f"Determinant is: {value}"


def format_latex(matrix: IntMatrix, determinant: Optional[int] = None, inline: bool = True) -> str:
    """
    Format a matrix (optionally with its determinant) as LaTeX.

    Args:
        matrix: Matrix to render
        determinant: If given, render ``\\det(M) = value`` instead of just M
        inline: If True, wrap in $...$; if False, use $$...$$ for display mode

    Returns:
        LaTeX formatted string
    """
    latex_str = sp.latex(matrix.to_sympy())
    if determinant is not None:
        latex_str = f"\\det {latex_str} = {determinant}"

    if inline:
        return f"${latex_str}$"
    else:
        return f"$${latex_str}$$"


class MatrixDisplay:
    """
    A matrix together with its determinant, ready for printing or export.

    Parameters
    ----------
    matrix : IntMatrix
        The matrix to display
    determinant : int, optional
        Precomputed determinant. Computed on first access when omitted.
    name : str, optional
        Label used in summaries and export filenames

    Examples
    --------
    >>> m = IntMatrix.from_rows([[1, 2], [3, 4]])
    >>> MatrixDisplay(m, name="demo").summary().splitlines()[0]
    'demo (2x2)'
    """

    def __init__(self, matrix: IntMatrix, determinant: Optional[int] = None, name: str = "Matrix"):
        self.matrix = matrix
        self.name = name
        self._determinant = determinant

    @property
    def determinant(self) -> int:
        if self._determinant is None:
            self._determinant = self.matrix.determinant()
        return self._determinant

    def summary(self) -> str:
        n = self.matrix.dimension
        zero_count = sum(self.matrix.zero_counts())
        return (
            f"{self.name} ({n}x{n})\n"
            f"Zero entries: {zero_count} of {n * n}\n"
            f"{format_matrix(self.matrix)}"
            f"{format_result(self.determinant)}\n"
        )

    def show(self) -> None:
        print(self.summary(), end="")

    def get_latex(self, inline: bool = False) -> str:
        return format_latex(self.matrix, self.determinant, inline=inline)

    def export_to_file(self, filename: Optional[str] = None) -> str:
        """
        Export the summary and LaTeX form to a text file.

        Parameters
        ----------
        filename : str, optional
            Output filename. If not provided, generates one from the display name.

        Returns
        -------
        str
            The filename that was written
        """
        def _sanitize_filename(text: str) -> str:
            sanitized = re.sub(r"[^A-Za-z0-9._-]", "_", text)
            sanitized = re.sub(r"_+", "_", sanitized).strip("._-")
            return sanitized or "matrix"

        if filename is None:
            filename = f"{_sanitize_filename(self.name)}.txt"

        with open(filename, 'w', encoding='utf-8') as f:
            f.write(self.summary())
            f.write(f"\n{'=' * 80}\n")
            f.write(f"LaTeX:\n{self.get_latex()}\n")

        return filename

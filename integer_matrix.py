"""
Integer Matrix Module

Square matrices of signed 64-bit integers used by the determinant engine.
An IntMatrix is built once, either from an element constructor indexed by
(row, column) or from explicit rows, and is never mutated afterwards. Every
transform (transpose, column reversal, rotation, minor extraction) returns a
fresh matrix that shares no storage with its source.

Usage Example:
--------------
    from integer_matrix import IntMatrix

    m = IntMatrix(3, lambda row, column: row * 3 + column + 1)
    print(m.rows)            # ((1, 2, 3), (4, 5, 6), (7, 8, 9))
    print(m.rotate().rows)   # ((7, 4, 1), (8, 5, 2), (9, 6, 3))
    print(m.determinant())   # 0
"""

from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
import sympy as sp


INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)

Rows = List[List[int]]
ElementConstructor = Callable[[int, int], int]


class InvalidDimensionError(ValueError):
    """Raised when a matrix dimension is smaller than 1."""


class MalformedMatrixError(ValueError):
    """Raised when rows are ragged or the matrix is not square."""


class DeterminantOverflowError(OverflowError):
    """Raised when checked 64-bit arithmetic leaves the int64 range."""


# ------------------------------ Row utilities --------------------------------
# Plain nested-list versions; the evaluator recurses on these directly.

def count_zeros(values: Sequence[int]) -> int:
    """Number of entries equal to zero in a row or column."""
    return sum(1 for value in values if value == 0)


def transpose_rows(rows: Rows) -> Rows:
    return [list(column) for column in zip(*rows)]


def reverse_columns_rows(rows: Rows) -> Rows:
    return [list(reversed(row)) for row in rows]


def rotate_rows(rows: Rows) -> Rows:
    """Transpose then reverse columns, i.e. a clockwise quarter turn."""
    return reverse_columns_rows(transpose_rows(rows))


def delete_column_rows(rows: Rows, column_index: int) -> Rows:
    return [row[:column_index] + row[column_index + 1:] for row in rows]


def delete_row_and_column_rows(rows: Rows, row_index: int, column_index: int) -> Rows:
    """Minor of ``rows`` with one row and one column removed (new lists)."""
    n = len(rows)
    if not 0 <= row_index < n:
        raise IndexError(f"row_index {row_index} out of range for dimension {n}")
    if not 0 <= column_index < n:
        raise IndexError(f"column_index {column_index} out of range for dimension {n}")
    remaining = rows[:row_index] + rows[row_index + 1:]
    return delete_column_rows(remaining, column_index)


def check_int64(value, where: str = "value") -> int:
    """
    Coerce ``value`` to a Python int and check it fits a signed 64-bit slot.

    Accepts Python and numpy integers. Floats and other types raise TypeError,
    out-of-range integers raise ValueError.
    """
    if isinstance(value, (bool, np.bool_)):
        value = int(value)
    if not isinstance(value, (int, np.integer)):
        raise TypeError(
            f"{where} must be an integer, got {type(value).__name__} ({value!r})"
        )
    value = int(value)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(
            f"{where} = {value} does not fit in a signed 64-bit integer"
        )
    return value


def validate_square(rows: Sequence[Sequence[int]]) -> int:
    """
    Check that ``rows`` forms a non-empty square matrix and return its dimension.

    Raises:
        InvalidDimensionError: if there are no rows
        MalformedMatrixError: if any row length differs from the row count
    """
    n = len(rows)
    if n < 1:
        raise InvalidDimensionError("Matrix must have at least one row (dimension >= 1)")
    for i, row in enumerate(rows):
        if len(row) != n:
            raise MalformedMatrixError(
                f"Matrix must be square: row {i} has {len(row)} entries, "
                f"expected {n} (the number of rows)"
            )
    return n


# ------------------------------- Matrix type ---------------------------------
class IntMatrix:
    """
    Immutable square matrix of signed 64-bit integers.

    Attributes
    ----------
    dimension : int
        Number of rows (and columns)
    rows : Tuple[Tuple[int, ...], ...]
        Read-only row access for display and inspection
    """

    __slots__ = ("_rows",)

    def __init__(self, dimension: int, element_constructor: ElementConstructor):
        """
        Build an N×N matrix where cell (row, column) = element_constructor(row, column).

        Parameters
        ----------
        dimension : int
            Matrix size N (must be >= 1)
        element_constructor : Callable[[int, int], int]
            Called once per cell in row-major order with (row, column)

        Raises
        ------
        TypeError
            If dimension is not an int, element_constructor is not callable,
            or an element is not an integer
        InvalidDimensionError
            If dimension < 1
        ValueError
            If an element does not fit in 64 bits
        """
        if isinstance(dimension, bool) or not isinstance(dimension, (int, np.integer)):
            raise TypeError(f"dimension must be an integer, got {type(dimension).__name__}")
        dimension = int(dimension)
        if dimension < 1:
            raise InvalidDimensionError(f"dimension must be >= 1 (got {dimension})")
        if not callable(element_constructor):
            raise TypeError(
                f"element_constructor must be callable, got {type(element_constructor).__name__}"
            )

        rows = []
        for i in range(dimension):
            row = []
            for j in range(dimension):
                row.append(check_int64(element_constructor(i, j), f"element ({i}, {j})"))
            rows.append(tuple(row))
        self._rows: Tuple[Tuple[int, ...], ...] = tuple(rows)

    # -- alternative constructors --------------------------------------------
    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "IntMatrix":
        """Build a matrix from explicit nested rows, validating squareness."""
        if isinstance(rows, IntMatrix):
            return rows
        if isinstance(rows, np.ndarray):
            if rows.ndim != 2:
                raise MalformedMatrixError(f"Expected a 2-D array, got {rows.ndim} dimension(s)")
            rows = rows.tolist()
        rows = [list(row) for row in rows]
        n = validate_square(rows)
        return cls(n, lambda i, j: rows[i][j])

    @classmethod
    def identity(cls, dimension: int) -> "IntMatrix":
        return cls(dimension, lambda i, j: 1 if i == j else 0)

    @classmethod
    def random(cls, dimension: int, seed: Optional[int] = None,
               rng: Optional[np.random.Generator] = None) -> "IntMatrix":
        """
        Random matrix as drawn by the runner for --dimension: cell (r, c) is
        drawn uniformly from [0, 2*(r + c)), and is 0 when that range is empty.

        Args:
            dimension: Matrix size
            seed: Seed for a fresh numpy Generator (ignored if rng is given)
            rng: Existing numpy Generator to draw from
        """
        if rng is None:
            rng = np.random.default_rng(seed)

        def element(row: int, column: int) -> int:
            upper = 2 * (row + column)
            if upper <= 0:
                return 0
            return int(rng.integers(0, upper))

        return cls(dimension, element)

    # -- read access -----------------------------------------------------------
    @property
    def dimension(self) -> int:
        return len(self._rows)

    @property
    def rows(self) -> Tuple[Tuple[int, ...], ...]:
        return self._rows

    def row(self, index: int) -> Tuple[int, ...]:
        return self._rows[index]

    def column(self, index: int) -> Tuple[int, ...]:
        return tuple(row[index] for row in self._rows)

    def __getitem__(self, key: Union[int, Tuple[int, int]]):
        if isinstance(key, tuple):
            i, j = key
            return self._rows[i][j]
        return self._rows[key]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        return iter(self._rows)

    def __eq__(self, other) -> bool:
        if not isinstance(other, IntMatrix):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"IntMatrix(dimension={self.dimension}, rows={[list(r) for r in self._rows]})"

    # -- transforms ------------------------------------------------------------
    def to_list(self) -> Rows:
        """Independent nested-list copy of the entries."""
        return [list(row) for row in self._rows]

    def transpose(self) -> "IntMatrix":
        return IntMatrix.from_rows(transpose_rows(self.to_list()))

    def reverse_columns(self) -> "IntMatrix":
        """Mirror about the vertical axis: M'[i][j] = M[i][N-1-j]."""
        return IntMatrix.from_rows(reverse_columns_rows(self.to_list()))

    def rotate(self) -> "IntMatrix":
        return IntMatrix.from_rows(rotate_rows(self.to_list()))

    def delete_row_and_column(self, row_index: int, column_index: int) -> "IntMatrix":
        """
        Minor of dimension N-1 with the given row and column removed.

        Raises:
            IndexError: if either index is outside [0, N)
            InvalidDimensionError: if called on a 1×1 matrix (the minor is empty)
        """
        return IntMatrix.from_rows(
            delete_row_and_column_rows(self.to_list(), row_index, column_index)
        )

    def zero_counts(self) -> List[int]:
        return [count_zeros(row) for row in self._rows]

    # -- conversions -----------------------------------------------------------
    def to_sympy(self) -> sp.Matrix:
        return sp.Matrix(self.to_list())

    def to_numpy(self) -> np.ndarray:
        return np.array(self.to_list(), dtype=np.int64)

    # -- determinant -------------------------------------------------------------
    def determinant(self) -> int:
        """
        Exact determinant via cofactor expansion with default settings.

        Shorthand for ``DeterminantComputer().compute_determinant(self)``;
        use a DeterminantComputer directly for other settings or statistics.
        """
        # determinant_computer imports this module at load time
        from determinant_computer import DeterminantComputer

        return DeterminantComputer().compute_determinant(self)

"""
Determinant Computer Module

Exact integer determinants by recursive cofactor (Laplace) expansion.

The recursion expands along one row per frame and bottoms out in a closed-form
rule for 3×3 matrices (with explicit 1×1 and 2×2 cases so every dimension
>= 1 terminates). Before each expansion an orientation heuristic compares
the zero counts of the matrix rows against those of its quarter-turn
rotation (transpose, then reverse columns) and expands whichever orientation
holds the sparsest row, skipping zero coefficients without recursing.

Usage Example:
--------------
    from integer_matrix import IntMatrix
    from determinant_computer import DeterminantComputer

    m = IntMatrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 10]])
    det_comp = DeterminantComputer()
    print(det_comp.compute_determinant(m))   # -3

    # One-shot: build from a generator and return (matrix, determinant)
    matrix, det = DeterminantComputer.determinant_from_generator(
        4, lambda row, column: 5 if row == column == 2 else int(row == column)
    )
"""

import time
from typing import Dict, Optional, Sequence, Tuple, Union

import numpy as np

from integer_matrix import (
    INT64_MAX,
    INT64_MIN,
    DeterminantOverflowError,
    ElementConstructor,
    IntMatrix,
    Rows,
    count_zeros,
    delete_column_rows,
    rotate_rows,
)


MatrixLike = Union[IntMatrix, np.ndarray, Sequence[Sequence[int]]]


def rotation_sign(dimension: int) -> int:
    """
    Determinant factor introduced by a quarter-turn rotation.

    Transposing leaves the determinant unchanged; reversing N columns is a
    permutation made of N // 2 swaps.
    """
    return -1 if (dimension // 2) % 2 else 1


class DeterminantComputer:
    """
    Recursive cofactor-expansion engine for square integer matrices.

    Parameters
    ----------
    row_selection : str
        How the expansion row is picked once an orientation is chosen:
        "max_zeros" (default) takes the row with the most zero entries, lowest
        index on ties; "random" picks uniformly at random.
    use_orientation_heuristic : bool
        If False, always expand the matrix as given (never rotate).
    check_overflow : bool
        If True, the final determinant is checked against the signed 64-bit
        range and DeterminantOverflowError is raised when it does not fit.
        Intermediate values are exact Python integers, so the outcome never
        depends on the expansion order. If False the exact result is returned.
    seed : int, optional
        Seed for the random row selection.
    show_progress : bool
        Print a short line before and after each top-level computation.
    """

    ROW_SELECTION_MODES = ("max_zeros", "random")

    def __init__(self, row_selection: str = "max_zeros", use_orientation_heuristic: bool = True,
                 check_overflow: bool = True, seed: Optional[int] = None,
                 show_progress: bool = False):
        if row_selection not in self.ROW_SELECTION_MODES:
            raise ValueError(
                f"row_selection must be one of {self.ROW_SELECTION_MODES}, got {row_selection!r}"
            )
        self.row_selection = row_selection
        self.use_orientation_heuristic = use_orientation_heuristic
        self.check_overflow = check_overflow
        self.show_progress = show_progress
        self._rng = np.random.default_rng(seed)

        # Performance timing statistics
        self._timing_stats = {
            'compute_determinant': 0.0,
            'choose_orientation': 0.0,
            'shortcut_3x3': 0.0,
        }
        self._timing_counts = {key: 0 for key in self._timing_stats.keys()}

        # Expansion counters
        self._counters = {
            'expansions': 0,
            'rotations': 0,
            'zero_terms_skipped': 0,
            'shortcut_evaluations': 0,
            'small_base_cases': 0,
        }

    # ------------------------------------------------------------------ API --
    @staticmethod
    def determinant_from_generator(
        dimension: int,
        element_constructor: ElementConstructor,
        **options,
    ) -> Tuple[IntMatrix, int]:
        """
        Convenience one-shot API: build a matrix from an element constructor
        and compute its determinant.

        Args:
            dimension: Matrix size N >= 1
            element_constructor: Callable (row, column) -> int
            **options: Keyword arguments forwarded to DeterminantComputer

        Returns:
            (matrix, determinant); the matrix is returned for display
        """
        matrix = IntMatrix(dimension, element_constructor)
        return matrix, DeterminantComputer(**options).compute_determinant(matrix)

    def compute_determinant(self, matrix: MatrixLike) -> int:
        """
        Compute the exact determinant of a square integer matrix.

        Parameters:
        -----------
        matrix : IntMatrix, numpy.ndarray or nested sequence
            The matrix. Raw nested sequences and arrays are validated here.

        Returns:
        --------
        int
            The determinant

        Raises:
        -------
        TypeError
            If matrix is of an unsupported type or holds non-integers
        InvalidDimensionError
            If the matrix is empty
        MalformedMatrixError
            If rows are ragged or the matrix is not square
        DeterminantOverflowError
            If check_overflow is enabled and the determinant does not fit in int64

        Examples:
        ---------
        >>> DeterminantComputer().compute_determinant([[1, 2], [3, 4]])
        -2
        """
        matrix = self._as_int_matrix(matrix)
        n = matrix.dimension

        if self.show_progress:
            print(f"Computing determinant of {n}x{n} matrix...")

        start = time.perf_counter()
        try:
            result = self._checked(self._determinant(matrix.to_list()))
        finally:
            elapsed = time.perf_counter() - start
            self._record_time('compute_determinant', elapsed)

        if self.show_progress:
            print(f"  determinant = {result} ({elapsed:.4f} s)")
        return result

    def choose_orientation(self, rows: Rows) -> Tuple[Rows, int, bool]:
        """
        Decide whether to expand ``rows`` as given or its quarter-turn rotation.

        The rotation is chosen when its sparsest row has at least as many zeros
        as the sparsest original row. The expansion row index is then picked
        within the chosen orientation according to ``row_selection``.

        Returns:
            (working_rows, row_index, rotated)
        """
        start = time.perf_counter()
        try:
            if not rows:
                return rows, 0, False

            if not self.use_orientation_heuristic:
                return rows, self._select_row(rows), False

            rotated_rows = rotate_rows(rows)
            max_row_zeros = max(count_zeros(row) for row in rows)
            max_rotated_zeros = max(count_zeros(row) for row in rotated_rows)

            if max_rotated_zeros >= max_row_zeros:
                return rotated_rows, self._select_row(rotated_rows), True
            return rows, self._select_row(rows), False
        finally:
            self._record_time('choose_orientation', time.perf_counter() - start)

    def verify_determinant(self, matrix: MatrixLike) -> Tuple[int, int, bool]:
        """
        Cross-check the cofactor expansion against SymPy's exact Bareiss
        elimination.

        Returns:
            (cofactor_value, sympy_value, values_match)
        """
        matrix = self._as_int_matrix(matrix)
        value = self.compute_determinant(matrix)
        reference = int(matrix.to_sympy().det(method='bareiss'))
        return value, reference, value == reference

    # ----------------------------------------------------------- recursion --
    def _determinant(self, rows: Rows) -> int:
        n = len(rows)
        if n == 3:
            return self._determinant_3x3(rows)
        if n == 2:
            self._counters['small_base_cases'] += 1
            a, b = rows[0]
            c, d = rows[1]
            return a * d - b * c
        if n == 1:
            self._counters['small_base_cases'] += 1
            return rows[0][0]

        self._counters['expansions'] += 1
        working, row_index, rotated = self.choose_orientation(rows)
        if rotated:
            self._counters['rotations'] += 1

        expansion_row = working[row_index]
        rest_of_matrix = working[:row_index] + working[row_index + 1:]

        total = 0
        for column_index, coefficient in enumerate(expansion_row):
            if coefficient == 0:
                self._counters['zero_terms_skipped'] += 1
                continue
            sign = 1 if (row_index + column_index) % 2 == 0 else -1
            minor = delete_column_rows(rest_of_matrix, column_index)
            total += sign * coefficient * self._determinant(minor)

        if rotated:
            total = rotation_sign(n) * total
        return total

    def _determinant_3x3(self, rows: Rows) -> int:
        """Rule of three along the first column, skipping zero coefficients."""
        start = time.perf_counter()
        try:
            self._counters['shortcut_evaluations'] += 1

            total = 0
            for i, row in enumerate(rows):
                coefficient = row[0]
                if coefficient == 0:
                    self._counters['zero_terms_skipped'] += 1
                    continue
                remaining = rows[:i] + rows[i + 1:]
                cofactor = remaining[0][1] * remaining[1][2] - remaining[0][2] * remaining[1][1]
                term = coefficient * cofactor
                total = total + term if i % 2 == 0 else total - term

            return total
        finally:
            self._record_time('shortcut_3x3', time.perf_counter() - start)

    def _select_row(self, rows: Rows) -> int:
        if self.row_selection == "random":
            return int(self._rng.integers(0, len(rows)))
        zero_counts = [count_zeros(row) for row in rows]
        return zero_counts.index(max(zero_counts))

    def _checked(self, value: int) -> int:
        if self.check_overflow and not INT64_MIN <= value <= INT64_MAX:
            raise DeterminantOverflowError(
                f"Determinant {value} does not fit in a signed 64-bit integer; "
                f"use check_overflow=False for an exact big-integer result"
            )
        return value

    @staticmethod
    def _as_int_matrix(matrix: MatrixLike) -> IntMatrix:
        if isinstance(matrix, IntMatrix):
            return matrix
        if isinstance(matrix, (list, tuple, np.ndarray)):
            return IntMatrix.from_rows(matrix)
        raise TypeError(
            f"matrix must be an IntMatrix, numpy array or nested list, "
            f"got {type(matrix).__name__}"
        )

    # ---------------------------------------------------------- statistics --
    def _record_time(self, key: str, elapsed: float) -> None:
        self._timing_stats[key] += elapsed
        self._timing_counts[key] += 1

    def get_expansion_statistics(self) -> Dict[str, int]:
        """
        Get counters describing the work done so far.

        Returns:
            Dictionary with:
            - expansions: General-case frames (N > 3)
            - rotations: Frames that expanded the rotated orientation
            - zero_terms_skipped: Zero coefficients skipped without recursing
            - shortcut_evaluations: 3×3 closed-form evaluations
            - small_base_cases: 1×1 and 2×2 evaluations
        """
        return dict(self._counters)

    def get_timing_statistics(self) -> Dict[str, Dict[str, float]]:
        """
        Get performance timing statistics.

        Returns:
            Dictionary with timing statistics for each operation including:
            - total_time: Total time spent in this operation
            - call_count: Number of times this operation was called
            - avg_time: Average time per call
        """
        stats = {}
        for key in self._timing_stats.keys():
            total_time = self._timing_stats[key]
            count = self._timing_counts[key]
            avg_time = total_time / count if count > 0 else 0.0
            stats[key] = {
                'total_time': total_time,
                'call_count': count,
                'avg_time': avg_time
            }
        return stats

    def reset_statistics(self):
        """Reset timing statistics and expansion counters to zero."""
        for key in self._timing_stats.keys():
            self._timing_stats[key] = 0.0
            self._timing_counts[key] = 0
        for key in self._counters.keys():
            self._counters[key] = 0

    def print_performance_report(self):
        """Print a formatted performance report with timing and expansion statistics."""
        print("\n" + "=" * 60)
        print("PERFORMANCE REPORT")
        print("=" * 60)

        print("\nExpansion Statistics:")
        print("-" * 60)
        counters = self.get_expansion_statistics()
        print(f"  General expansions:         {counters['expansions']}")
        print(f"  Rotations applied:          {counters['rotations']}")
        print(f"  Zero terms skipped:         {counters['zero_terms_skipped']}")
        print(f"  3x3 shortcut evaluations:   {counters['shortcut_evaluations']}")
        print(f"  1x1/2x2 base cases:         {counters['small_base_cases']}")

        print("\nTiming Statistics:")
        print("-" * 60)
        timing_stats = self.get_timing_statistics()
        print(f"{'Operation':<30} {'Calls':<10} {'Total (s)':<12} {'Avg (s)':<12}")
        print("-" * 60)
        for op, stats in sorted(timing_stats.items(), key=lambda x: x[1]['total_time'], reverse=True):
            if stats['call_count'] > 0:
                print(f"{op:<30} {stats['call_count']:<10} {stats['total_time']:<12.4f} {stats['avg_time']:<12.6f}")

        print("=" * 60 + "\n")

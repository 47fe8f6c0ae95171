"""
Command-line runner for the integer determinant engine.

Generates (or reads) a square integer matrix, prints it one row per line with
" | " separators, and prints its determinant.

Usage example (local):
  python determinant_runner.py --dimension 5 --seed 7 --report
  python determinant_runner.py --rows "1,2,3;4,5,6;7,8,10" --verify
  python determinant_runner.py --dimension 6 --out-prefix results/run1 --latex

Outputs (only with --out-prefix):
- <prefix>.matrix.txt:   rendered matrix and result line
- <prefix>.meta.json:    metadata (dimension, seed, determinant, statistics)
- <prefix>.matrix.tex:   LaTeX (optional with --latex)
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List, Optional

from integer_matrix import IntMatrix
from determinant_computer import DeterminantComputer
from matrix_display import format_latex, format_matrix, format_result


MIN_DIMENSION = 3
MAX_DIMENSION = 9


def _parse_rows(text: str) -> List[List[int]]:
    """Parse "1,2;3,4" into [[1, 2], [3, 4]]."""
    rows = []
    for chunk in text.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        rows.append([int(x.strip()) for x in chunk.split(",")])
    if not rows:
        raise ValueError("no rows given")
    return rows


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Compute an exact integer determinant by cofactor expansion.")
    source = ap.add_mutually_exclusive_group(required=True)
    source.add_argument("--dimension", type=int, help=f"generate a random matrix ({MIN_DIMENSION}-{MAX_DIMENSION})")
    source.add_argument("--rows", help='explicit matrix, e.g. "1,2,3;4,5,6;7,8,10"')
    ap.add_argument("--any-dimension", action="store_true", help="accept any --dimension >= 1")
    ap.add_argument("--seed", type=int, default=None, help="seed for matrix generation and random row selection")
    ap.add_argument("--row-selection", choices=DeterminantComputer.ROW_SELECTION_MODES, default="max_zeros")
    ap.add_argument("--no-rotation", action="store_true", help="disable the orientation heuristic")
    ap.add_argument("--unchecked", action="store_true", help="exact big-integer result instead of checked int64")
    ap.add_argument("--verify", action="store_true", help="cross-check against SymPy")
    ap.add_argument("--report", action="store_true", help="print a performance report")
    ap.add_argument("--latex", action="store_true", help="print LaTeX (and write matrix.tex with --out-prefix)")
    ap.add_argument("--out-prefix", default=None)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.rows is not None:
        try:
            matrix = IntMatrix.from_rows(_parse_rows(args.rows))
        except (TypeError, ValueError) as e:
            ap.error(f"Error parsing --rows: {e}. Expected format: '1,2;3,4'")
    else:
        low = 1 if args.any_dimension else MIN_DIMENSION
        high = None if args.any_dimension else MAX_DIMENSION
        if args.dimension < low or (high is not None and args.dimension > high):
            bound = f">= {low}" if high is None else f"between {low} and {high}"
            ap.error(f"--dimension must be {bound} (got {args.dimension})")
        matrix = IntMatrix.random(args.dimension, seed=args.seed)

    det_comp = DeterminantComputer(
        row_selection=args.row_selection,
        use_orientation_heuristic=not args.no_rotation,
        check_overflow=not args.unchecked,
        seed=args.seed,
    )

    print(format_matrix(matrix), end="")
    try:
        if args.verify:
            det, reference, ok = det_comp.verify_determinant(matrix)
        else:
            det = det_comp.compute_determinant(matrix)
    except (ArithmeticError, ValueError) as e:
        print(f"Error computing determinant: {e}", file=sys.stderr)
        return 1

    print(format_result(det))
    if args.verify:
        status = "match" if ok else "MISMATCH"
        print(f"SymPy reference: {reference} ({status})")
    if args.latex:
        print(format_latex(matrix, det, inline=False))
    if args.report:
        det_comp.print_performance_report()

    if args.out_prefix:
        out_dir = os.path.dirname(args.out_prefix)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)

        meta = {
            "dimension": matrix.dimension,
            "seed": args.seed,
            "row_selection": args.row_selection,
            "rotation": not args.no_rotation,
            "checked": not args.unchecked,
            "determinant": det,
            "statistics": det_comp.get_expansion_statistics(),
        }
        with open(f"{args.out_prefix}.matrix.txt", "w", encoding="utf-8") as f:
            f.write(format_matrix(matrix))
            f.write(format_result(det) + "\n")
        with open(f"{args.out_prefix}.meta.json", "w", encoding="utf-8") as f:
            json.dump(meta, f, indent=2)
        if args.latex:
            with open(f"{args.out_prefix}.matrix.tex", "w", encoding="utf-8") as f:
                f.write(format_latex(matrix, det, inline=False))

    if args.verify and not ok:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

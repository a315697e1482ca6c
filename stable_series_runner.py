"""
Command-line runner for stable character series.

Prints the Laurent series in q^{-1} for every Young diagram family with a
bounded number of boxes, and for the wedge powers of the standard
representation. Optionally writes a comma-separated table of coefficient
magnitudes (the signs alternate predictably, so only magnitudes are kept).

Usage example (local):
  python stable_series_runner.py --max-boxes 5 --min-degree -12
  python stable_series_runner.py --max-boxes 0 --wedge 4 --latex
  python stable_series_runner.py --max-boxes 6 --csv results/table.csv --depth 20 --report

Outputs:
- stdout:          one block per diagram / wedge power
- <csv path>:      "[k_1, k_2, ...]",|c_0|,|c_-1|,...,|c_-depth|   (optional with --csv)
"""

import argparse
import logging
import os
from typing import List, Optional, Sequence

from character_pipeline import CharacterPipeline
from integer_functions import all_partitions
from laurent_polynomial import LaurentPolynomial

logger = logging.getLogger(__name__)


def format_partition(part: Sequence[int]) -> str:
    return "[" + ", ".join(str(v) for v in part) + "]"


def diagrams_below(max_boxes: int):
    """Every Young diagram with 1 <= boxes < max_boxes, smallest first."""
    for boxes in range(1, max_boxes):
        for part in all_partitions(boxes):
            yield part


def csv_line(part: Sequence[int], series: LaurentPolynomial, depth: int) -> str:
    """Quoted diagram followed by |coefficient| of q^0, q^-1, ..., q^-depth."""
    values = [str(abs(series[-e])) for e in range(depth + 1)]
    return f"\"{format_partition(part)}\"," + ",".join(values)


def build_csv_lines(pipeline: CharacterPipeline, max_boxes: int, depth: int) -> List[str]:
    lines = []
    for part in diagrams_below(max_boxes):
        series = pipeline.young_to_poly(part, -depth)
        lines.append(csv_line(part, series, depth))
    return lines


def main(argv: Optional[Sequence[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Print stable character series of Young diagram families.")
    ap.add_argument("--max-boxes", type=int, default=7, help="diagrams with 1 <= boxes < MAX_BOXES")
    ap.add_argument("--wedge", type=int, default=0, help="wedge powers 1 <= i < WEDGE")
    ap.add_argument("--min-degree", type=int, default=-30, help="lowest degree of q printed")
    ap.add_argument("--latex", action="store_true", help="print series in LaTeX form")
    ap.add_argument("--csv", default=None, help="also write a coefficient-magnitude table to this path")
    ap.add_argument("--depth", type=int, default=30, help="number of negative degrees in the CSV table")
    ap.add_argument("--report", action="store_true", help="print a performance report at the end")
    ap.add_argument("--verbose", action="store_true", help="debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.min_degree > 0:
        ap.error(f"--min-degree must be <= 0 (got {args.min_degree})")
    if args.depth < 0:
        ap.error(f"--depth must be nonnegative (got {args.depth})")

    pipeline = CharacterPipeline(min_degree=args.min_degree, show_performance_warnings=args.verbose)

    for part in diagrams_below(args.max_boxes):
        print(format_partition(part))
        print(pipeline.young_to_poly(part).to_rev_string(latex=args.latex))
        print()

    for i in range(1, args.wedge):
        print(f"{i}th wedge power")
        print(pipeline.wedge_powers(i).to_rev_string(latex=args.latex))
        print()

    if args.csv:
        out_dir = os.path.dirname(args.csv)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        lines = build_csv_lines(pipeline, args.max_boxes, args.depth)
        with open(args.csv, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
        logger.info("wrote %d rows to %s", len(lines), args.csv)

    if args.report:
        pipeline.print_performance_report()


if __name__ == "__main__":
    main()

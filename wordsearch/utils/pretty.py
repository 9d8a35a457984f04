"""Pretty-print helpers for word search grids."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from ..core.models import BatchResult, PuzzleResult


def format_grid(rows: Sequence[str]) -> str:
    width = len(rows[0]) if rows else 0
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r, row in enumerate(rows):
        row_render = " ".join(f"{symbol:>2}" for symbol in row)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_puzzle(result: PuzzleResult, *, stream=None) -> None:
    """Print one puzzle with coordinates and its placement report."""

    stream = stream or sys.stderr
    print(f"Puzzle {result.number} (seed {result.seed}, {result.elapsed:.3f}s)", file=stream)
    if not result.ok:
        print(f"  failed: {result.error}", file=stream)
        return
    print(format_grid(result.rows), file=stream)
    print(f"  Placed:  {', '.join(sorted(result.placed_words)) or '-'}", file=stream)
    if result.missing_words:
        print(f"  Missing: {', '.join(sorted(result.missing_words))}", file=stream)


def print_batch_summary(batch: BatchResult, *, stream=None) -> None:
    stream = stream or sys.stderr
    for result in batch.puzzles:
        pretty_print_puzzle(result, stream=stream)
        print(file=stream)
    print(
        f"{len(batch.succeeded)}/{len(batch.puzzles)} puzzles generated in {batch.elapsed:.3f}s",
        file=stream,
    )

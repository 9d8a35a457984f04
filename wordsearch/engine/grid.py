"""Grid representation and helper utilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from ..core.constants import EMPTY, Bounds, Step
from ..core.exceptions import BuildStateError, ConfigurationError
from ..core.models import PlacedWord


@dataclass
class GridConfig:
    """Dimensions of a letter grid."""

    rows: int
    cols: int

    def bounds(self) -> Bounds:
        if self.rows <= 0 or self.cols <= 0:
            raise ConfigurationError(f"Grid size must be positive, got {self.rows}x{self.cols}")
        return Bounds(rows=self.rows, cols=self.cols)


class LetterGrid:
    """Fixed-size matrix of single-letter cells."""

    def __init__(self, config: GridConfig) -> None:
        self.config = config
        self.bounds = config.bounds()
        self.cells: List[List[Optional[str]]] = [
            [EMPTY for _ in range(self.bounds.cols)] for _ in range(self.bounds.rows)
        ]
        self._frozen = False

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def get(self, row: int, col: int) -> Optional[str]:
        return self.cells[row][col]

    def set(self, row: int, col: int, letter: str) -> None:
        self._ensure_writable()
        self.cells[row][col] = letter

    def clear(self, row: int, col: int) -> None:
        self._ensure_writable()
        self.cells[row][col] = EMPTY

    def is_empty(self, row: int, col: int) -> bool:
        return self.cells[row][col] is EMPTY

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _ensure_writable(self) -> None:
        if self._frozen:
            raise BuildStateError("Grid is read-only once construction completes")

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def coordinates(self) -> Iterator[Tuple[int, int]]:
        """Yield every cell in row-major order."""

        for row in range(self.bounds.rows):
            for col in range(self.bounds.cols):
                yield row, col

    def empty_cells(self) -> List[Tuple[int, int]]:
        return [(row, col) for row, col in self.coordinates() if self.is_empty(row, col)]

    def run_cells(self, row: int, col: int, step: Step, length: int) -> Optional[List[Tuple[int, int]]]:
        """Cells of a straight run, or ``None`` if any of them falls off the grid."""

        dr, dc = step
        end_row = row + dr * (length - 1)
        end_col = col + dc * (length - 1)
        if not (self.bounds.contains(row, col) and self.bounds.contains(end_row, end_col)):
            return None
        return [(row + dr * i, col + dc * i) for i in range(length)]

    def read_run(self, row: int, col: int, step: Step, length: int) -> Optional[str]:
        cells = self.run_cells(row, col, step, length)
        if cells is None:
            return None
        letters = [self.cells[r][c] for r, c in cells]
        if any(letter is EMPTY for letter in letters):
            return None
        return "".join(letters)

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def can_place(self, word: str, row: int, col: int, step: Step) -> bool:
        """Bounds and collision check for writing ``word`` from ``(row, col)``.

        Every cell must lie inside the grid and be either empty or already hold
        the letter the word needs there, so words may cross on shared letters.
        """

        if not word:
            return False
        cells = self.run_cells(row, col, step, len(word))
        if cells is None:
            return False
        for letter, (r, c) in zip(word, cells):
            existing = self.cells[r][c]
            if existing is not EMPTY and existing != letter:
                return False
        return True

    def write_word(self, word: str, row: int, col: int, step: Step) -> PlacedWord:
        """Write ``word`` without re-checking :meth:`can_place`."""

        self._ensure_writable()
        placement = PlacedWord(word=word, start_row=row, start_col=col, step=step)
        for letter, (r, c) in zip(word, placement.cells):
            self.cells[r][c] = letter
        return placement

    def write_cells(self, assignments: Iterable[Tuple[Tuple[int, int], str]]) -> None:
        self._ensure_writable()
        for (row, col), letter in assignments:
            self.cells[row][col] = letter

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_full(self) -> bool:
        return all(letter is not EMPTY for row in self.cells for letter in row)

    def rows(self, empty_symbol: str = " ") -> List[str]:
        return ["".join(empty_symbol if letter is EMPTY else letter for letter in row) for row in self.cells]

    @classmethod
    def from_rows(cls, rows: Sequence[str], empty_symbol: str = ".") -> "LetterGrid":
        """Build a grid from text rows; ``empty_symbol`` marks unfilled cells."""

        if not rows or any(len(row) != len(rows[0]) for row in rows):
            raise ConfigurationError("Rows must be non-empty and of equal length")
        grid = cls(GridConfig(rows=len(rows), cols=len(rows[0])))
        for r, row in enumerate(rows):
            for c, letter in enumerate(row):
                grid.cells[r][c] = EMPTY if letter == empty_symbol else letter
        return grid

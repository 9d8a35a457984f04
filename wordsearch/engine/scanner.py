"""Banned-word detection over straight runs in all eight directions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, List

from ..core.constants import EMPTY, SCAN_STEPS, Step
from .grid import LetterGrid


@dataclass(frozen=True)
class BannedHit:
    word: str
    row: int
    col: int
    step: Step


class BannedWordScanner:
    """Finds banned words written forwards, backwards or diagonally.

    ``contains_banned_word`` checks every cell, word and direction. The
    cheaper ``forms_banned_word_through`` only looks at runs crossing a single
    cell; on a grid that was clean before that cell was written the two give
    the same answer.
    """

    def __init__(self, banned: Iterable[str]) -> None:
        self.banned: FrozenSet[str] = frozenset(word for word in banned if word)

    def __bool__(self) -> bool:
        return bool(self.banned)

    def matches_at(self, grid: LetterGrid, word: str, row: int, col: int, step: Step) -> bool:
        dr, dc = step
        length = len(word)
        if not grid.bounds.contains(row, col):
            return False
        if not grid.bounds.contains(row + dr * (length - 1), col + dc * (length - 1)):
            return False
        cells = grid.cells
        for i, letter in enumerate(word):
            if cells[row + dr * i][col + dc * i] != letter:
                return False
        return True

    def contains_banned_word(self, grid: LetterGrid) -> bool:
        for row, col in grid.coordinates():
            for word in self.banned:
                for step in SCAN_STEPS:
                    if self.matches_at(grid, word, row, col, step):
                        return True
        return False

    def find_banned_words(self, grid: LetterGrid) -> List[BannedHit]:
        hits: List[BannedHit] = []
        for row, col in grid.coordinates():
            for word in sorted(self.banned):
                for step in SCAN_STEPS:
                    if self.matches_at(grid, word, row, col, step):
                        hits.append(BannedHit(word=word, row=row, col=col, step=step))
        return hits

    def forms_banned_word_through(self, grid: LetterGrid, row: int, col: int) -> bool:
        letter = grid.get(row, col)
        if letter is EMPTY:
            return False
        for word in self.banned:
            for offset, expected in enumerate(word):
                if expected != letter:
                    continue
                for dr, dc in SCAN_STEPS:
                    if self.matches_at(grid, word, row - dr * offset, col - dc * offset, (dr, dc)):
                        return True
        return False

    def forms_banned_word_along(self, grid: LetterGrid, cells: Iterable[tuple]) -> bool:
        return any(self.forms_banned_word_through(grid, row, col) for row, col in cells)

"""Deterministic rule validation for generated word search grids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from ..core.exceptions import ValidationError
from ..core.models import PlacedWord
from ..utils.logger import get_logger
from .grid import LetterGrid
from .scanner import BannedWordScanner


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class GridValidator:
    """Runs deterministic validation over the final grid."""

    def __init__(self, alphabet: Sequence[str], scanner: BannedWordScanner) -> None:
        self.alphabet = set(alphabet)
        self.scanner = scanner

    def validate(self, grid: LetterGrid, placed_words: Iterable[PlacedWord] = ()) -> ValidationResult:
        placed_words = list(placed_words)
        messages: List[str] = []
        try:
            self._check_fully_populated(grid)
            self._check_placed_words(grid, placed_words)
            self._check_letters_valid(grid, placed_words)
            self._check_no_banned_words(grid)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_fully_populated(self, grid: LetterGrid) -> None:
        for row, col in grid.coordinates():
            if grid.is_empty(row, col):
                raise ValidationError(f"Unfilled cell at ({row},{col})")

    def _check_placed_words(self, grid: LetterGrid, placed_words: List[PlacedWord]) -> None:
        for placement in placed_words:
            text = grid.read_run(placement.start_row, placement.start_col, placement.step, len(placement.word))
            if text != placement.word:
                raise ValidationError(
                    f"Placed word '{placement.word}' missing at "
                    f"({placement.start_row},{placement.start_col}) step {placement.step}"
                )

    def _check_letters_valid(self, grid: LetterGrid, placed_words: List[PlacedWord]) -> None:
        allowed = set(self.alphabet)
        for placement in placed_words:
            allowed.update(placement.word)
        for row, col in grid.coordinates():
            letter = grid.get(row, col)
            if letter not in allowed:
                raise ValidationError(f"Invalid letter '{letter}' at ({row},{col})")

    def _check_no_banned_words(self, grid: LetterGrid) -> None:
        hits = self.scanner.find_banned_words(grid)
        if hits:
            first = hits[0]
            raise ValidationError(
                f"Banned word '{first.word}' found at ({first.row},{first.col}) "
                f"step {first.step} ({len(hits)} hit(s) total)"
            )

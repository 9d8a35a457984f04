"""Word search grid construction.

Two-phase approach:
  1. Placement: shuffle the requested words and drop each one at a random
     start cell and direction, with a bounded number of attempts per word.
  2. Fill: give every remaining cell a random alphabet letter, rejecting any
     letter that would spell a banned word in one of the eight directions.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, Tuple

from ..core.constants import (
    DEFAULT_MAX_FILL_ATTEMPTS,
    DEFAULT_MAX_PLACEMENT_ATTEMPTS,
    DEFAULT_SOLVER_TIMEOUT,
    PLACEMENT_STEPS,
    BuildState,
    ScanMode,
)
from ..core.exceptions import BuildStateError, ConfigurationError, UnsatisfiableFillError, ValidationError
from ..core.models import PlacedWord, PlacementOutcome, PlacementResult
from ..utils.logger import get_logger
from .grid import GridConfig, LetterGrid
from .scanner import BannedWordScanner
from .solver import solve_fill
from .validator import GridValidator


LOGGER = get_logger(__name__)


@dataclass
class BuilderConfig:
    rows: int
    cols: int
    alphabet: Sequence[str]
    words: Sequence[str] = field(default_factory=list)
    banned: Sequence[str] = field(default_factory=list)
    seed: Optional[int] = None
    max_placement_attempts: int = DEFAULT_MAX_PLACEMENT_ATTEMPTS
    max_fill_attempts: int = DEFAULT_MAX_FILL_ATTEMPTS
    scan_mode: ScanMode = ScanMode.LOCAL
    solver_fallback: bool = True
    solver_timeout: float = DEFAULT_SOLVER_TIMEOUT
    validate: bool = True

    def to_grid_config(self) -> GridConfig:
        return GridConfig(rows=self.rows, cols=self.cols)


class GridBuilder:
    """Builds one puzzle grid; owns its grid and random source."""

    def __init__(
        self,
        config: BuilderConfig,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        check_alphabet(config.alphabet)
        self.config = config
        self.alphabet: List[str] = list(config.alphabet)
        self.rng = rng or random.Random(config.seed)
        self.logger = logger or LOGGER
        self.grid = LetterGrid(config.to_grid_config())
        self.scanner = BannedWordScanner(config.banned)
        self.validator = GridValidator(self.alphabet, self.scanner)
        self.scan_mode = parse_scan_mode(config.scan_mode)
        self.state = BuildState.EMPTY
        self.placements: List[PlacedWord] = []
        self.results: List[PlacementResult] = []

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self) -> List[PlacementResult]:
        if self.state != BuildState.EMPTY:
            raise BuildStateError(f"generate() called on a builder in state {self.state.value}")

        self.logger.debug("Shuffling words...")
        words = list(self.config.words)
        self.rng.shuffle(words)
        for word in words:
            self.results.append(self.place_word(word))
        self.state = BuildState.WORDS_PLACED

        self.fill()

        if self.config.validate:
            validation = self.validator.validate(self.grid, self.placements)
            if not validation.ok:
                raise ValidationError(f"Grid validation failed: {validation.messages}")
        self.grid.freeze()

        placed = sum(1 for result in self.results if result.placed)
        self.logger.info(
            "Grid %dx%d complete: %d/%d words placed",
            self.grid.bounds.rows, self.grid.bounds.cols, placed, len(words),
        )
        return self.results

    def rows(self) -> List[str]:
        return self.grid.rows()

    # ------------------------------------------------------------------
    # Word placement
    # ------------------------------------------------------------------
    def place_word(self, word: str) -> PlacementResult:
        if self.state != BuildState.EMPTY:
            raise BuildStateError("Words can only be placed before the grid is filled")
        if word in self.scanner.banned:
            self.logger.debug("Skipping banned word: %s", word)
            return PlacementResult(word=word, outcome=PlacementOutcome.BANNED)
        if not word:
            self.logger.warning("Skipping empty word entry")
            return PlacementResult(word=word, outcome=PlacementOutcome.SKIPPED)

        self.logger.debug("Placing word: %s", word)
        rows, cols = self.grid.bounds.rows, self.grid.bounds.cols
        max_attempts = self.config.max_placement_attempts
        for attempt in range(1, max_attempts + 1):
            step = self.rng.choice(PLACEMENT_STEPS)
            row = self.rng.randrange(rows)
            col = self.rng.randrange(cols)
            if not self.grid.can_place(word, row, col, step):
                continue
            placement = self._write_if_clean(word, row, col, step)
            if placement is None:
                continue
            self.placements.append(placement)
            self.logger.debug(
                "Placed %s at (%d,%d) step %s after %d attempt(s)", word, row, col, step, attempt
            )
            return PlacementResult(
                word=word, outcome=PlacementOutcome.PLACED, attempts=attempt, placement=placement
            )

        self.logger.warning("Failed to place word: %s after %d attempts.", word, max_attempts)
        return PlacementResult(word=word, outcome=PlacementOutcome.EXHAUSTED, attempts=max_attempts)

    def _write_if_clean(self, word: str, row: int, col: int, step: Tuple[int, int]) -> Optional[PlacedWord]:
        """Write the word, undoing it if it would spell a banned word."""

        fresh = [cell for cell in self.grid.run_cells(row, col, step, len(word)) if self.grid.is_empty(*cell)]
        placement = self.grid.write_word(word, row, col, step)
        if self.scanner and self.scanner.forms_banned_word_along(self.grid, placement.cells):
            for r, c in fresh:
                self.grid.clear(r, c)
            return None
        return placement

    # ------------------------------------------------------------------
    # Fill
    # ------------------------------------------------------------------
    def fill(self) -> None:
        if self.state != BuildState.WORDS_PLACED:
            raise BuildStateError("Fill requires word placement to complete first")

        self.logger.debug("Filling the grid... (%d empty cells)", len(self.grid.empty_cells()))
        rows = self.grid.bounds.rows
        stuck = None
        for row in range(rows):
            for col in range(self.grid.bounds.cols):
                if self.grid.is_empty(row, col) and not self._fill_cell(row, col):
                    stuck = (row, col)
                    break
            if stuck:
                break
            self.logger.debug("Filled row %d/%d", row + 1, rows)

        if stuck:
            self._resolve_stuck_fill(*stuck)
        self.state = BuildState.FILLED

    def _fill_cell(self, row: int, col: int) -> bool:
        distinct = set(self.alphabet)
        rejected: Set[str] = set()
        for _ in range(self.config.max_fill_attempts):
            letter = self.rng.choice(self.alphabet)
            self.grid.set(row, col, letter)
            if not self._banned_present(row, col):
                return True
            self.grid.clear(row, col)
            rejected.add(letter)
            if rejected == distinct:
                break
        self.logger.debug("Cell (%d,%d) rejected letters %s", row, col, sorted(rejected))
        return False

    def _banned_present(self, row: int, col: int) -> bool:
        if not self.scanner:
            return False
        if self.scan_mode == ScanMode.GLOBAL:
            return self.scanner.contains_banned_word(self.grid)
        return self.scanner.forms_banned_word_through(self.grid, row, col)

    def _resolve_stuck_fill(self, row: int, col: int) -> None:
        if not self.config.solver_fallback:
            raise UnsatisfiableFillError(
                f"No alphabet letter avoids banned words at ({row},{col})"
            )

        self.logger.warning("Random fill stuck at (%d,%d); retrying fill with CP-SAT", row, col)
        word_cells = {cell for placement in self.placements for cell in placement.cells}
        free = [cell for cell in self.grid.coordinates() if cell not in word_cells]
        for r, c in free:
            self.grid.clear(r, c)

        assignment = solve_fill(
            self.grid,
            free,
            self.alphabet,
            self.scanner.banned,
            rng=self.rng,
            timeout=self.config.solver_timeout,
        )
        if assignment is None:
            raise UnsatisfiableFillError(
                f"Fill constraints are unsatisfiable for {len(free)} free cells "
                f"with alphabet {''.join(sorted(set(self.alphabet)))}"
            )
        self.grid.write_cells(assignment.items())


def parse_scan_mode(value) -> ScanMode:
    try:
        return ScanMode(value)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown scan mode: {value!r}") from exc


def check_alphabet(alphabet: Sequence[str]) -> None:
    if not alphabet:
        raise ConfigurationError("Alphabet must contain at least one letter")
    for letter in alphabet:
        if not isinstance(letter, str) or len(letter) != 1:
            raise ConfigurationError(f"Alphabet entries must be single characters, got {letter!r}")

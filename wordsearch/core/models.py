"""Data models supporting the word search generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .constants import Step


@dataclass(frozen=True)
class PlacedWord:
    """A word written into the grid along a straight run."""

    word: str
    start_row: int
    start_col: int
    step: Step

    @property
    def cells(self) -> List[Tuple[int, int]]:
        dr, dc = self.step
        return [(self.start_row + dr * i, self.start_col + dc * i) for i in range(len(self.word))]


class PlacementOutcome(str, Enum):
    """Result of trying to place one requested word."""

    PLACED = "PLACED"
    EXHAUSTED = "EXHAUSTED"
    BANNED = "BANNED"
    SKIPPED = "SKIPPED"


@dataclass
class PlacementResult:
    word: str
    outcome: PlacementOutcome
    attempts: int = 0
    placement: Optional[PlacedWord] = None

    @property
    def placed(self) -> bool:
        return self.outcome == PlacementOutcome.PLACED


@dataclass
class PuzzleResult:
    """Outcome of one puzzle generation inside a batch."""

    number: int
    seed: Optional[int]
    rows: List[str] = field(default_factory=list)
    placements: List[PlacementResult] = field(default_factory=list)
    elapsed: float = 0.0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def placed_words(self) -> List[str]:
        return [result.word for result in self.placements if result.placed]

    @property
    def missing_words(self) -> List[str]:
        return [result.word for result in self.placements if result.outcome == PlacementOutcome.EXHAUSTED]


@dataclass
class BatchResult:
    puzzles: List[PuzzleResult] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def succeeded(self) -> List[PuzzleResult]:
        return [puzzle for puzzle in self.puzzles if puzzle.ok]

    @property
    def failed(self) -> List[PuzzleResult]:
        return [puzzle for puzzle in self.puzzles if not puzzle.ok]

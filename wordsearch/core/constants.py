"""Shared constants and enumerations for the word search generator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


Step = Tuple[int, int]

# Sentinel stored in cells that have not received a letter yet.
EMPTY: Optional[str] = None

# Words are only ever placed along these six steps; the two anti-diagonals
# are reserved for the banned-word scan.
PLACEMENT_STEPS: Tuple[Step, ...] = ((0, 1), (1, 0), (1, 1), (0, -1), (-1, 0), (-1, -1))
SCAN_STEPS: Tuple[Step, ...] = PLACEMENT_STEPS + ((1, -1), (-1, 1))

DEFAULT_MAX_PLACEMENT_ATTEMPTS = 100
DEFAULT_MAX_FILL_ATTEMPTS = 10_000
DEFAULT_SOLVER_TIMEOUT = 30.0


class BuildState(str, Enum):
    """Lifecycle of a single grid construction."""

    EMPTY = "EMPTY"
    WORDS_PLACED = "WORDS_PLACED"
    FILLED = "FILLED"


class ScanMode(str, Enum):
    """How the fill phase checks for banned words after each letter."""

    LOCAL = "local"
    GLOBAL = "global"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

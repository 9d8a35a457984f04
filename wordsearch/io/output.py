"""Plain-text puzzle output.

Each puzzle is written as one block::

    Puzzle 1:
    ABCD
    EFGH

Blocks from concurrent puzzles are appended whole, never interleaved.
"""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence, TextIO

from ..core.exceptions import OutputError
from ..core.models import PuzzleResult
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def format_puzzle(number: int, rows: Sequence[str]) -> str:
    lines = [f"Puzzle {number}:", *rows]
    return "\n".join(lines) + "\n\n"


class PuzzleSink(ABC):
    """Destination for finished puzzle blocks."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def reset(self) -> None:
        """Prepare the destination for a new batch."""

    def write_puzzle(self, result: PuzzleResult) -> None:
        block = format_puzzle(result.number, result.rows)
        with self._lock:
            self._write(block)

    @abstractmethod
    def _write(self, block: str) -> None:
        """Append one formatted block to the destination."""


class StreamSink(PuzzleSink):
    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self.stream = stream or sys.stdout

    def _write(self, block: str) -> None:
        self.stream.write(block)
        self.stream.flush()


class FileSink(PuzzleSink):
    """Appends puzzle blocks to a text file, truncated at batch start."""

    def __init__(self, path: Path | str) -> None:
        super().__init__()
        self.path = Path(path)

    def reset(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("", encoding="utf-8")
        except OSError as exc:
            raise OutputError(f"Cannot prepare output file {self.path}: {exc}") from exc
        LOGGER.debug("Cleared output file %s", self.path)

    def _write(self, block: str) -> None:
        try:
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(block)
        except OSError as exc:
            raise OutputError(f"Error opening output file {self.path}: {exc}") from exc

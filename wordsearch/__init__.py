"""Word search puzzle generator with banned-word exclusion.

This package exposes the public API surface via:

- ``wordsearch.engine.builder.GridBuilder``: builds one puzzle grid.
- ``wordsearch.engine.runner.PuzzleRunner``: generates a batch of puzzles concurrently.
- ``wordsearch.io.output`` sinks: write finished puzzles as text blocks.
"""

from .engine.builder import BuilderConfig, GridBuilder
from .engine.runner import PuzzleRunner, RunnerConfig

__all__ = [
    "BuilderConfig",
    "GridBuilder",
    "PuzzleRunner",
    "RunnerConfig",
]

__version__ = "0.1.0"

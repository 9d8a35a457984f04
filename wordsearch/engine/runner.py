"""Concurrent generation of independent puzzles."""

from __future__ import annotations

import logging
import random
import time
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..core.constants import (
    DEFAULT_MAX_FILL_ATTEMPTS,
    DEFAULT_MAX_PLACEMENT_ATTEMPTS,
    DEFAULT_SOLVER_TIMEOUT,
    ScanMode,
)
from ..core.exceptions import ConfigurationError, OutputError, WordSearchError
from ..core.models import BatchResult, PuzzleResult
from ..io.output import PuzzleSink
from ..utils.logger import get_logger
from .builder import BuilderConfig, GridBuilder, check_alphabet, parse_scan_mode


LOGGER = get_logger(__name__)


@dataclass
class RunnerConfig:
    rows: int
    cols: int
    alphabet: Sequence[str]
    words: Sequence[str] = field(default_factory=list)
    banned: Sequence[str] = field(default_factory=list)
    puzzle_count: int = 1
    seed: Optional[int] = None
    max_workers: Optional[int] = None
    use_processes: bool = False
    max_placement_attempts: int = DEFAULT_MAX_PLACEMENT_ATTEMPTS
    max_fill_attempts: int = DEFAULT_MAX_FILL_ATTEMPTS
    scan_mode: ScanMode = ScanMode.LOCAL
    solver_fallback: bool = True
    solver_timeout: float = DEFAULT_SOLVER_TIMEOUT

    def validate(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ConfigurationError(f"Grid size must be positive, got {self.rows}x{self.cols}")
        if self.puzzle_count <= 0:
            raise ConfigurationError(f"Puzzle count must be positive, got {self.puzzle_count}")
        if self.max_workers is not None and self.max_workers <= 0:
            raise ConfigurationError(f"Worker count must be positive, got {self.max_workers}")
        check_alphabet(self.alphabet)
        parse_scan_mode(self.scan_mode)

    def to_builder_config(self, seed_override: Optional[int] = None) -> BuilderConfig:
        return BuilderConfig(
            rows=self.rows,
            cols=self.cols,
            alphabet=list(self.alphabet),
            words=list(self.words),
            banned=list(self.banned),
            seed=seed_override,
            max_placement_attempts=self.max_placement_attempts,
            max_fill_attempts=self.max_fill_attempts,
            scan_mode=self.scan_mode,
            solver_fallback=self.solver_fallback,
            solver_timeout=self.solver_timeout,
        )


def build_puzzle(number: int, config: BuilderConfig) -> PuzzleResult:
    """Generate one puzzle; generation failures are captured in the result."""

    LOGGER.info("Generating puzzle %d...", number)
    started = time.perf_counter()
    result = PuzzleResult(number=number, seed=config.seed)
    try:
        builder = GridBuilder(config)
        result.placements = builder.generate()
        result.rows = builder.rows()
    except WordSearchError as exc:
        result.error = str(exc)
    result.elapsed = time.perf_counter() - started
    return result


class PuzzleRunner:
    """Fans puzzle jobs out to a worker pool and collects them."""

    def __init__(
        self,
        config: RunnerConfig,
        sink: Optional[PuzzleSink] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config
        self.sink = sink
        self.logger = logger or LOGGER

    def run(self) -> BatchResult:
        self.config.validate()
        seeds = self._puzzle_seeds()
        self._prepare_sink()

        batch = BatchResult()
        started = time.perf_counter()
        with self._executor() as executor:
            futures = {
                executor.submit(build_puzzle, number, self.config.to_builder_config(seed)): (number, seed)
                for number, seed in enumerate(seeds, start=1)
            }
            for future in as_completed(futures):
                number, seed = futures[future]
                try:
                    result = future.result()
                except Exception as exc:
                    self.logger.exception("Puzzle %d worker crashed", number)
                    result = PuzzleResult(number=number, seed=seed, error=f"{type(exc).__name__}: {exc}")
                self._collect(result)
                batch.puzzles.append(result)

        batch.elapsed = time.perf_counter() - started
        batch.puzzles.sort(key=lambda puzzle: puzzle.number)
        self.logger.info(
            "All puzzles generated in %.3f seconds (%d ok, %d failed).",
            batch.elapsed, len(batch.succeeded), len(batch.failed),
        )
        return batch

    def _puzzle_seeds(self) -> List[Optional[int]]:
        if self.config.seed is None:
            return [None] * self.config.puzzle_count
        seeder = random.Random(self.config.seed)
        return [seeder.randint(0, 2**32 - 1) for _ in range(self.config.puzzle_count)]

    def _executor(self) -> Executor:
        workers = self.config.max_workers or min(self.config.puzzle_count, 32)
        if self.config.use_processes:
            return ProcessPoolExecutor(max_workers=workers)
        return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="puzzle")

    def _prepare_sink(self) -> None:
        if self.sink is None:
            return
        try:
            self.sink.reset()
        except OutputError as exc:
            self.logger.error("%s", exc)

    def _collect(self, result: PuzzleResult) -> None:
        if not result.ok:
            self.logger.error("Puzzle %d failed: %s", result.number, result.error)
            return
        if result.missing_words:
            self.logger.warning(
                "Puzzle %d is missing %d word(s): %s",
                result.number, len(result.missing_words), ", ".join(sorted(result.missing_words)),
            )
        if self.sink is None:
            return
        try:
            self.sink.write_puzzle(result)
        except OutputError as exc:
            result.error = str(exc)
            self.logger.error("Puzzle %d could not be written: %s", result.number, exc)

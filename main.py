"""CLI entrypoint for the word search puzzle generator."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from wordsearch.core.constants import (
    DEFAULT_MAX_FILL_ATTEMPTS,
    DEFAULT_MAX_PLACEMENT_ATTEMPTS,
    DEFAULT_SOLVER_TIMEOUT,
    ScanMode,
)
from wordsearch.core.exceptions import WordSearchError
from wordsearch.data.normalization import clean_words, parse_letters
from wordsearch.data.word_lists import load_word_list
from wordsearch.engine.runner import PuzzleRunner, RunnerConfig
from wordsearch.io.config_file import load_config_file
from wordsearch.io.output import FileSink, StreamSink
from wordsearch.io.prompt import prompt_for_request
from wordsearch.utils.logger import configure_logging, get_logger, parse_level
from wordsearch.utils.pretty import print_batch_summary


LOGGER = get_logger("wordsearch.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate word search puzzles that never contain banned words",
    )
    parser.add_argument("--config", type=Path, help="JSON file with default values for these options")
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Prompt for rows, columns, letters, words, banned words, count and output file",
    )
    parser.add_argument("--rows", type=int, help="Grid height in cells")
    parser.add_argument("--cols", type=int, help="Grid width in cells")
    parser.add_argument(
        "--letters",
        type=str,
        help="Fill alphabet, e.g. 'ABCDEFGHIJKLMNOPQRSTUVWXYZ' or 'A B C D'",
    )
    parser.add_argument("--words", nargs="+", metavar="WORD", default=[], help="Words to hide")
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one word per line (# comments ignored), or a .tsv/.csv with a 'word' column",
    )
    parser.add_argument("--banned", nargs="+", metavar="WORD", default=[], help="Words that must never appear")
    parser.add_argument("--banned-file", type=Path, metavar="FILE", help="Banned words, same formats as --words-file")
    parser.add_argument("--puzzles", type=int, default=1, help="Number of puzzles to generate")
    parser.add_argument("--output", type=Path, help="Output text file (default: stdout)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--workers", type=int, default=None, help="Maximum concurrent puzzles")
    parser.add_argument(
        "--processes",
        action="store_true",
        help="Run puzzles in worker processes instead of threads",
    )
    parser.add_argument(
        "--scan-mode",
        type=str,
        choices=[mode.value for mode in ScanMode],
        default=ScanMode.LOCAL.value,
        help="Check only runs through each new letter (local) or the whole grid (global)",
    )
    parser.add_argument(
        "--placement-attempts",
        type=int,
        default=DEFAULT_MAX_PLACEMENT_ATTEMPTS,
        help="Random placement attempts per word",
    )
    parser.add_argument(
        "--fill-attempts",
        type=int,
        default=DEFAULT_MAX_FILL_ATTEMPTS,
        help="Random letter draws per cell before the fill is declared stuck",
    )
    parser.add_argument(
        "--no-solver",
        action="store_true",
        help="Fail instead of retrying a stuck fill with the CP-SAT solver",
    )
    parser.add_argument(
        "--solver-timeout",
        type=float,
        default=DEFAULT_SOLVER_TIMEOUT,
        help="CP-SAT deterministic time limit (machine-independent seconds)",
    )
    parser.add_argument("--uppercase", action="store_true", help="Uppercase letters, words and banned words")
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Print each grid with coordinates and placed words to stderr",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def parse_args(parser: argparse.ArgumentParser, argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse ``argv``, taking defaults from ``--config`` when given."""

    preliminary, _ = parser.parse_known_args(argv)
    if preliminary.config:
        try:
            parser.set_defaults(**load_config_file(preliminary.config))
        except WordSearchError as exc:
            parser.error(str(exc))
    return parser.parse_args(argv)


def collect_words(inline: List[str], path: Optional[Path], uppercase: bool) -> List[str]:
    words = clean_words(inline, uppercase=uppercase)
    if path:
        words.extend(load_word_list(path, uppercase=uppercase))
    return words


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parse_args(parser, argv)
    configure_logging(parse_level(args.log_level))

    try:
        if args.interactive:
            answers = prompt_for_request(uppercase=args.uppercase)
            args.rows, args.cols = answers.rows, answers.cols
            args.letters = "".join(answers.letters)
            args.words = list(args.words) + answers.words
            args.banned = list(args.banned) + answers.banned
            args.puzzles = answers.puzzle_count
            args.output = Path(answers.output_path)

        if args.rows is None or args.cols is None:
            parser.error("--rows and --cols are required (or use --interactive / --config)")
        letters = parse_letters(args.letters or "", uppercase=args.uppercase)
        if not letters:
            parser.error("No letters provided: pass --letters")

        words = collect_words(args.words, args.words_file, args.uppercase)
        banned = collect_words(args.banned, args.banned_file, args.uppercase)

        config = RunnerConfig(
            rows=args.rows,
            cols=args.cols,
            alphabet=letters,
            words=words,
            banned=banned,
            puzzle_count=args.puzzles,
            seed=args.seed,
            max_workers=args.workers,
            use_processes=args.processes,
            max_placement_attempts=args.placement_attempts,
            max_fill_attempts=args.fill_attempts,
            scan_mode=args.scan_mode,
            solver_fallback=not args.no_solver,
            solver_timeout=args.solver_timeout,
        )
        sink = FileSink(args.output) if args.output else StreamSink()
        batch = PuzzleRunner(config, sink=sink).run()
    except WordSearchError as exc:
        LOGGER.error("%s", exc)
        return 2

    if args.preview:
        print_batch_summary(batch)
    return 1 if batch.failed else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

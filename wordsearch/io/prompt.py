"""Interactive console prompts for puzzle parameters."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, List, Optional

from ..core.exceptions import ConfigurationError
from ..data.normalization import parse_letters


END_OF_LIST = "done"


@dataclass
class PromptAnswers:
    rows: int
    cols: int
    letters: List[str]
    words: List[str] = field(default_factory=list)
    banned: List[str] = field(default_factory=list)
    puzzle_count: int = 1
    output_path: str = ""


class _TokenReader:
    """Whitespace tokens across input lines, like reading a console stream."""

    def __init__(self, input_fn: Callable[[str], str]) -> None:
        self._input = input_fn
        self._pending: Deque[str] = deque()

    def line(self, prompt: str) -> str:
        """Rest of the current line if tokens remain on it, else the next line."""

        if self._pending:
            rest = " ".join(self._pending)
            self._pending.clear()
            return rest
        return self._read(prompt)

    def token(self, prompt: str) -> str:
        while not self._pending:
            self._pending.extend(self._read(prompt).split())
            prompt = ""
        return self._pending.popleft()

    def integer(self, prompt: str, label: str) -> int:
        value = self.token(prompt)
        try:
            return int(value)
        except ValueError as exc:
            raise ConfigurationError(f"{label} must be an integer, got {value!r}") from exc

    def words_until_done(self, prompt: str) -> List[str]:
        words: List[str] = []
        while True:
            word = self.token(prompt)
            prompt = ""
            if word == END_OF_LIST:
                return words
            words.append(word)

    def _read(self, prompt: str) -> str:
        try:
            return self._input(prompt)
        except EOFError as exc:
            raise ConfigurationError("Input ended before all puzzle parameters were given") from exc


def prompt_for_request(
    input_fn: Optional[Callable[[str], str]] = None, uppercase: bool = False
) -> PromptAnswers:
    """Ask for every puzzle parameter in turn.

    Word lists are whitespace separated and end with the token ``done``.
    """

    reader = _TokenReader(input_fn or input)
    rows = reader.integer("Enter number of rows (e.g., 30): ", "Rows")
    cols = reader.integer("Enter number of columns (e.g., 25): ", "Columns")
    letters = parse_letters(reader.line("Enter letters (e.g., A B C D): "), uppercase=uppercase)
    if not letters:
        raise ConfigurationError("No letters provided")
    words = reader.words_until_done("Enter words (type 'done' when finished): ")
    banned = reader.words_until_done("Enter banned words (type 'done' when finished): ")
    puzzle_count = reader.integer("Enter number of puzzles to generate: ", "Puzzle count")
    output_path = reader.token("Enter output file name: ")
    if uppercase:
        words = [word.upper() for word in words]
        banned = [word.upper() for word in banned]
    return PromptAnswers(
        rows=rows,
        cols=cols,
        letters=letters,
        words=words,
        banned=banned,
        puzzle_count=puzzle_count,
        output_path=output_path,
    )

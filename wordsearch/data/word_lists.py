"""Word list loading for requested and banned words."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import List

from ..core.exceptions import WordListLoadError
from ..utils.logger import get_logger
from .normalization import clean_words


LOGGER = get_logger(__name__)

WORD_COLUMN = "word"
_DELIMITERS = {".tsv": "\t", ".csv": ","}


def load_word_list(path: Path | str, uppercase: bool = False) -> List[str]:
    """Read words from ``path``.

    ``.tsv`` and ``.csv`` files must have a header with a ``word`` column; any
    other file holds one word per line, with blank lines and ``#`` comments
    skipped.
    """

    source = Path(path)
    if not source.exists():
        raise WordListLoadError(f"Missing word list: {source}")

    delimiter = _DELIMITERS.get(source.suffix.lower())
    try:
        if delimiter is None:
            raw = _read_lines(source)
        else:
            raw = _read_table(source, delimiter)
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise WordListLoadError(f"Cannot read word list {source}: {exc}") from exc

    words = clean_words(raw, uppercase=uppercase)
    LOGGER.debug("Loaded %d words from %s", len(words), source)
    return words


def _read_lines(source: Path) -> List[str]:
    entries: List[str] = []
    for line in source.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries


def _read_table(source: Path, delimiter: str) -> List[str]:
    with source.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle, delimiter=delimiter)
        if not reader.fieldnames or WORD_COLUMN not in reader.fieldnames:
            raise WordListLoadError(f"{source} has no '{WORD_COLUMN}' column")
        return [row.get(WORD_COLUMN) or "" for row in reader]

"""JSON configuration files for puzzle batches.

Example::

    {
      "rows": 15,
      "cols": 15,
      "letters": "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
      "words": ["PYTHON", "GRID"],
      "banned": ["BAD"],
      "puzzles": 4,
      "seed": 7,
      "output": "puzzles.txt"
    }

``letters`` may be a string or a list of single characters.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from ..core.exceptions import ConfigurationError
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

KNOWN_KEYS = {
    "rows",
    "cols",
    "letters",
    "words",
    "banned",
    "words_file",
    "banned_file",
    "puzzles",
    "seed",
    "output",
    "workers",
    "processes",
    "scan_mode",
    "placement_attempts",
    "fill_attempts",
    "no_solver",
    "solver_timeout",
    "uppercase",
    "log_level",
}


def load_config_file(path: Path | str) -> Dict[str, Any]:
    """Return the settings in ``path``, keyed like the CLI's long options."""

    source = Path(path)
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {source}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in {source}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigurationError(f"Config file {source} must hold a JSON object")

    unknown = sorted(set(payload) - KNOWN_KEYS)
    if unknown:
        LOGGER.warning("Ignoring unknown config keys in %s: %s", source, ", ".join(unknown))
    settings = {key: value for key, value in payload.items() if key in KNOWN_KEYS}
    if isinstance(settings.get("letters"), list):
        settings["letters"] = "".join(str(letter) for letter in settings["letters"])
    return settings

"""Custom exception hierarchy for word search generation."""


class WordSearchError(Exception):
    """Base exception for generator failures."""


class ConfigurationError(WordSearchError):
    """Raised when puzzle parameters cannot produce a grid."""


class WordListLoadError(WordSearchError):
    """Raised when a word list file cannot be read or parsed."""


class BuildStateError(WordSearchError):
    """Raised when builder steps run out of order or a frozen grid is written."""


class UnsatisfiableFillError(WordSearchError):
    """Raised when no fill letter can avoid forming a banned word."""


class ValidationError(WordSearchError):
    """Raised when the finished grid fails its integrity checks."""


class OutputError(WordSearchError):
    """Raised when a puzzle cannot be written to its destination."""


class SolverTimeoutError(WordSearchError):
    """Raised when the fill solver reaches its work limit without an answer."""

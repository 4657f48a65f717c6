"""Error taxonomy shared by the codec, locator and trimmer."""

from __future__ import annotations


class TrimmingError(Exception):
    pass


class FormatError(TrimmingError):
    """Header fields inconsistent or truncated, or an unreadable amplitude line."""


class NoDataError(TrimmingError):
    """The resolved data subchunk is empty."""


class WaveIOError(TrimmingError, OSError):
    """Opening, reading or writing a file failed."""


class EmptyInputError(TrimmingError, ValueError):
    """An envelope or sample sequence was empty where an element is required."""


__all__ = ["TrimmingError", "FormatError", "NoDataError", "WaveIOError", "EmptyInputError"]

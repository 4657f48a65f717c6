"""Per-chunk peak amplitude ("envelope") of a sample stream."""

from __future__ import annotations

from pathlib import Path

import numpy as np

from ..errors import FormatError, WaveIOError

DEFAULT_CHUNK_SIZE = 1024


def extract_envelope(samples: np.ndarray, chunk_size: int = DEFAULT_CHUNK_SIZE) -> np.ndarray:
    """Return the maximum sample of each consecutive ``chunk_size`` block.

    A trailing partial block contributes one more entry, so the result has
    ``ceil(len(samples) / chunk_size)`` entries. Negative peaks are clamped
    to zero.
    """

    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    data = np.asarray(samples, dtype=np.int64).ravel()
    if data.size == 0:
        return np.zeros(0, dtype=np.int64)
    starts = np.arange(0, data.size, chunk_size)
    peaks = np.maximum.reduceat(data, starts)
    return np.maximum(peaks, 0)


def read_amplitude_file(path: str | Path) -> np.ndarray:
    """Load an envelope stored as one integer per line."""

    path = Path(path)
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise WaveIOError(f"Cannot read amplitude file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise FormatError(f"Amplitude file {path} is not text: {exc}") from exc

    values: list[int] = []
    for lineno, line in enumerate(lines, 1):
        text = line.strip()
        if not text:
            continue
        try:
            value = int(text)
        except ValueError:
            raise FormatError(f"{path.name}:{lineno}: not an integer: {text!r}") from None
        if value < 0:
            raise FormatError(f"{path.name}:{lineno}: negative amplitude {value}")
        values.append(value)
    return np.array(values, dtype=np.int64)


__all__ = ["DEFAULT_CHUNK_SIZE", "extract_envelope", "read_amplitude_file"]

"""Heuristic start/end detection over a smoothed envelope.

The exhalation is assumed to contain the loudest chunk. The start is found by
walking back from that peak until the envelope stops falling (any earlier
rise is treated as noise). The end is the point where the envelope has stayed
below a fraction of the peak for a run of consecutive chunks.
"""

from __future__ import annotations

import numpy as np

from ..errors import EmptyInputError
from .types import IndexedPoint


def arg_max(envelope: np.ndarray) -> int:
    """Index of the first occurrence of the largest entry."""

    data = np.asarray(envelope)
    if data.size == 0:
        raise EmptyInputError("Cannot locate the peak of an empty envelope")
    return int(np.argmax(data))


def find_start(smoothed: np.ndarray, max_index: int) -> IndexedPoint:
    data = _checked(smoothed, max_index)
    j = max_index
    while j > 0:
        if data[j - 1] > data[j]:
            break
        j -= 1
    return IndexedPoint(index=j, value=int(data[j]))


def find_end(
    smoothed: np.ndarray,
    max_index: int,
    percent: float = 0.1,
    allowed_silence: int = 10,
) -> IndexedPoint:
    data = _checked(smoothed, max_index)
    threshold = percent * data[max_index]
    silent = 0
    last = len(data) - 1
    i = max_index
    while i < last:
        if data[i] < threshold:
            silent += 1
            if silent >= allowed_silence:
                break
        else:
            silent = 0
        i += 1
    return IndexedPoint(index=i, value=int(data[i]))


def locate_trim_points(
    smoothed: np.ndarray,
    percent: float = 0.1,
    allowed_silence: int = 10,
) -> tuple[IndexedPoint, int, IndexedPoint]:
    """Return ``(start, max_index, end)`` with ``start <= max_index <= end``."""

    max_index = arg_max(smoothed)
    start = find_start(smoothed, max_index)
    end = find_end(smoothed, max_index, percent=percent, allowed_silence=allowed_silence)
    return start, max_index, end


def _checked(smoothed: np.ndarray, max_index: int) -> list[int]:
    data = [int(value) for value in np.asarray(smoothed).ravel()]
    if not data:
        raise EmptyInputError("Envelope is empty")
    if not 0 <= max_index < len(data):
        raise IndexError(f"max_index {max_index} outside envelope of length {len(data)}")
    return data


__all__ = ["arg_max", "find_start", "find_end", "locate_trim_points"]

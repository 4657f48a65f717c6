"""Dataclasses shared across audio helpers."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from ..errors import TrimmingError


class ReadMode(enum.Enum):
    """How a wave payload is held once parsed."""

    ANALYSIS = "analysis"
    REWRITE = "rewrite"


@dataclass(slots=True)
class WaveHeader:
    """RIFF/WAVE header fields in on-disk order."""

    chunk_id: bytes
    file_size: int
    format: bytes
    fmt_id: bytes
    fmt_size: int
    audio_format: int
    num_channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    data_id: bytes
    data_size: int
    fmt_extra: bytes = b""


@dataclass(slots=True)
class WaveContainer:
    """A parsed recording; ``payload`` is int16 samples or raw bytes depending on ``mode``."""

    header: WaveHeader
    mode: ReadMode
    payload: Union[np.ndarray, bytes]

    @property
    def samples(self) -> np.ndarray:
        if self.mode is not ReadMode.ANALYSIS:
            raise TypeError("Container was read for rewriting; samples are not decoded")
        return self.payload  # type: ignore[return-value]

    @property
    def raw_data(self) -> bytes:
        if self.mode is not ReadMode.REWRITE:
            raise TypeError("Container was read for analysis; raw bytes are not kept")
        return self.payload  # type: ignore[return-value]


@dataclass(slots=True)
class ParseResult:
    """Either a parsed container or the error that stopped parsing."""

    container: Optional[WaveContainer] = None
    error: Optional[TrimmingError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.container is not None

    def unwrap(self) -> WaveContainer:
        if self.error is not None:
            raise self.error
        if self.container is None:
            raise TrimmingError("Parse produced neither a container nor an error")
        return self.container


@dataclass(frozen=True, slots=True)
class IndexedPoint:
    """Position and amplitude of an envelope entry."""

    index: int
    value: int


@dataclass(frozen=True, slots=True)
class TrimWindow:
    """Half-open sample range ``[start, end)`` kept in the output."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end <= self.start:
            raise ValueError(f"Invalid trim window [{self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start


__all__ = [
    "ReadMode",
    "WaveHeader",
    "WaveContainer",
    "ParseResult",
    "IndexedPoint",
    "TrimWindow",
]

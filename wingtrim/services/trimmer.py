"""End-to-end trimming of a breath recording."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

from ..audio.envelope import extract_envelope
from ..audio.noise_filter import smooth_envelope
from ..audio.rescale import sample_window
from ..audio.trim_points import locate_trim_points
from ..audio.types import IndexedPoint, ReadMode, TrimWindow
from ..audio.wave_codec import parse_wave, write_trimmed
from ..config import TrimSettings, get_settings
from ..errors import EmptyInputError, TrimmingError
from ..metrics import TRIM_COUNTER, TRIM_DURATION, TRIMMED_RATIO

LOGGER = logging.getLogger("wingtrim.trimmer")

STATUS_OK = 0
STATUS_FAILED = 1


@dataclass(slots=True)
class TrimResult:
    """Outcome of one trimming run."""

    status: int
    output_path: Optional[Path] = None
    window: Optional[TrimWindow] = None
    start: Optional[IndexedPoint] = None
    peak_index: Optional[int] = None
    end: Optional[IndexedPoint] = None
    sample_count: int = 0
    error: Optional[TrimmingError] = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK


def find_envelope_points(
    envelope: np.ndarray, settings: TrimSettings
) -> tuple[IndexedPoint, int, IndexedPoint]:
    """Smooth ``envelope`` and return ``(start, peak_index, end)`` in envelope indices."""

    smoothed = smooth_envelope(envelope, settings.smooth_threshold)
    return locate_trim_points(
        smoothed,
        percent=settings.end_percent,
        allowed_silence=settings.allowed_silence,
    )


class WaveTrimmer:
    """Find the exhalation in a recording and write a trimmed copy."""

    def __init__(self, settings: TrimSettings | None = None) -> None:
        self.settings = settings or get_settings()

    def run(self, input_path: str | Path, output_path: str | Path) -> TrimResult:
        started = time.perf_counter()
        parsed = parse_wave(input_path, ReadMode.ANALYSIS)
        if not parsed.ok:
            return self._failed(input_path, parsed.error, started)
        samples = parsed.unwrap().samples

        try:
            start, peak_index, end, window = self._analyse(samples)
            rewrite = parse_wave(input_path, ReadMode.REWRITE).unwrap()
            written = write_trimmed(output_path, rewrite, window, source=input_path)
        except TrimmingError as exc:
            return self._failed(input_path, exc, started)

        TRIM_COUNTER.labels(status="success").inc()
        TRIM_DURATION.observe(time.perf_counter() - started)
        TRIMMED_RATIO.observe(1.0 - window.length / len(samples))
        LOGGER.info(
            "Trimmed %s to samples [%d, %d) of %d -> %s",
            input_path,
            window.start,
            window.end,
            len(samples),
            written,
        )
        return TrimResult(
            status=STATUS_OK,
            output_path=written,
            window=window,
            start=start,
            peak_index=peak_index,
            end=end,
            sample_count=len(samples),
        )

    def find_window(self, samples: np.ndarray) -> TrimWindow:
        """Trim window for an in-memory mono sample stream."""

        return self._analyse(samples)[3]

    def _analyse(self, samples: np.ndarray) -> tuple[IndexedPoint, int, IndexedPoint, TrimWindow]:
        if len(samples) == 0:
            raise EmptyInputError("No samples to analyse")
        envelope = extract_envelope(samples, self.settings.chunk_size)
        start, peak_index, end = find_envelope_points(envelope, self.settings)
        LOGGER.debug(
            "Envelope of %d chunks: start=%d peak=%d end=%d",
            len(envelope),
            start.index,
            peak_index,
            end.index,
        )
        window = sample_window(start.index, end.index, len(envelope), len(samples), self.settings)
        return start, peak_index, end, window

    def _failed(self, input_path: str | Path, error: TrimmingError | None, started: float) -> TrimResult:
        TRIM_COUNTER.labels(status="error").inc()
        TRIM_DURATION.observe(time.perf_counter() - started)
        LOGGER.warning("Trimming %s failed: %s", input_path, error)
        return TrimResult(status=STATUS_FAILED, error=error)


def trim(input_path: str | Path, output_path: str | Path, settings: TrimSettings | None = None) -> int:
    """Host entry point: 0 when the trimmed file was written, non-zero otherwise."""

    return WaveTrimmer(settings).run(input_path, output_path).status


__all__ = [
    "STATUS_OK",
    "STATUS_FAILED",
    "TrimResult",
    "WaveTrimmer",
    "find_envelope_points",
    "trim",
]

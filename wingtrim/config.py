"""Trimming pipeline settings, one value per stage."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .errors import WaveIOError


class TrimSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    # Samples per envelope entry.
    chunk_size: int = Field(default=1024, ge=1)
    # Envelope entries at or below this value are treated as noise.
    smooth_threshold: int = Field(default=100, ge=0)
    # Fraction of the peak under which an entry counts as silence.
    end_percent: float = Field(default=0.1, gt=0.0, le=1.0)
    # Consecutive silent entries that close the window.
    allowed_silence: int = Field(default=10, ge=1)
    # Chunks of margin added on each side of the window.
    padding_chunks: int = Field(default=2, ge=0)


def load_settings(path: str | Path | None = None) -> TrimSettings:
    if path is None:
        return TrimSettings()
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise WaveIOError(f"Cannot read settings file {path}: {exc}") from exc
    return TrimSettings.model_validate_json(raw)


@lru_cache()
def get_settings() -> TrimSettings:
    return TrimSettings()


__all__ = ["TrimSettings", "load_settings", "get_settings"]

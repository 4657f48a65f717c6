"""Pytest configuration helpers."""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest


def _ensure_repo_on_path() -> None:
    """Allow tests to import from repo modules without setting PYTHONPATH."""
    repo_root = Path(__file__).resolve().parents[1]
    path_str = str(repo_root)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)


_ensure_repo_on_path()

from wave_fixtures import wave_bytes  # noqa: E402


@pytest.fixture()
def breath_amplitudes() -> list[int]:
    """16 quiet chunks with one blip, a 13-chunk exhalation, then 24 quiet chunks."""
    lead = [40] * 16
    lead[5] = 300
    burst = [500, 1000, 2000, 4000, 8000, 7000, 6000, 5000, 4000, 3000, 2000, 1500, 1000]
    return lead + burst + [40] * 24


@pytest.fixture()
def make_wave(tmp_path):
    def _make(name: str, left: np.ndarray, right: np.ndarray | None = None, **kwargs) -> Path:
        path = tmp_path / name
        path.write_bytes(wave_bytes(left, right, **kwargs))
        return path

    return _make

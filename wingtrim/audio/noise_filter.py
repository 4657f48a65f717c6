"""Noise floor applied to amplitude envelopes."""

from __future__ import annotations

import numpy as np


def smooth_envelope(envelope: np.ndarray, threshold: int) -> np.ndarray:
    """Zero every entry that is not strictly above ``threshold``."""

    data = np.asarray(envelope, dtype=np.int64)
    return np.where(data > threshold, data, 0)


__all__ = ["smooth_envelope"]

"""Map envelope indices back to sample indices and widen the window."""

from __future__ import annotations

from ..config import TrimSettings
from ..errors import EmptyInputError
from .types import TrimWindow


def rescale(index: int, old_size: int, new_size: int) -> int:
    """Proportionally map ``index`` from a sequence of ``old_size`` to one of ``new_size``."""

    if old_size <= 0:
        raise ValueError(f"old_size must be positive, got {old_size}")
    # Exact floor of index / old_size * new_size.
    return (index * new_size) // old_size


def pad_start(index: int, chunk_size: int, padding_chunks: int = 2) -> int:
    return max(0, index - padding_chunks * chunk_size)


def pad_end(index: int, chunk_size: int, total_sample_count: int, padding_chunks: int = 2) -> int:
    return min(total_sample_count, index + padding_chunks * chunk_size)


def sample_window(
    start_index: int,
    end_index: int,
    envelope_size: int,
    sample_count: int,
    settings: TrimSettings,
) -> TrimWindow:
    """Convert envelope-domain trim points into a padded sample-domain window."""

    if sample_count <= 0:
        raise EmptyInputError("Cannot build a trim window over zero samples")
    chunk = settings.chunk_size
    scaled_size = envelope_size * chunk
    start = pad_start(rescale(start_index, envelope_size, scaled_size), chunk, settings.padding_chunks)
    end = pad_end(rescale(end_index, envelope_size, scaled_size), chunk, scaled_size, settings.padding_chunks)
    # The last envelope entry may cover a partial chunk.
    end = min(end, sample_count)
    start = min(start, sample_count - 1)
    if end <= start:
        end = start + 1
    return TrimWindow(start=start, end=end)


__all__ = ["rescale", "pad_start", "pad_end", "sample_window"]

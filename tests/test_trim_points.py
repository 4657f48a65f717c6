import numpy as np
import pytest

from wingtrim.audio.noise_filter import smooth_envelope
from wingtrim.audio.trim_points import arg_max, find_end, find_start, locate_trim_points
from wingtrim.errors import EmptyInputError


def test_reference_envelope():
    smoothed = smooth_envelope(np.array([5, 20, 15, 90, 85, 80, 2, 1, 1, 1, 1, 1, 1]), 10)

    max_index = arg_max(smoothed)
    start = find_start(smoothed, max_index)
    end = find_end(smoothed, max_index, percent=0.1, allowed_silence=10)

    assert max_index == 3
    assert (start.index, start.value) == (2, 15)
    assert (end.index, end.value) == (12, 0)


def test_arg_max_prefers_first_peak():
    envelope = np.array([3, 9, 1, 9, 9])
    assert arg_max(envelope) == 1


def test_arg_max_of_empty_envelope():
    with pytest.raises(EmptyInputError):
        arg_max(np.array([], dtype=np.int64))


def test_start_stops_after_last_dip_before_peak():
    smoothed = np.array([0, 400, 0, 0, 500, 900, 3000, 2000])
    assert find_start(smoothed, 6).index == 2


def test_start_runs_to_beginning_without_dip():
    smoothed = np.array([0, 0, 150, 600, 3000, 100])
    point = find_start(smoothed, 4)
    assert point.index == 0
    assert point.value == 0


def test_start_is_first_descending_step_before_peak():
    smoothed = np.array([900, 100, 1000])
    assert find_start(smoothed, 2).index == 1


def test_end_after_sustained_silence():
    smoothed = np.array([1000, 50, 200, 50, 50, 50, 50, 0, 0])
    # threshold is 100; the dip at index 1 is reset by index 2
    end = find_end(smoothed, 0, percent=0.1, allowed_silence=3)
    assert end.index == 5


def test_end_counter_resets_on_loud_entry():
    smoothed = np.array([1000, 0, 0, 500, 0, 0, 500, 0, 0])
    assert find_end(smoothed, 0, percent=0.1, allowed_silence=3).index == 8


def test_end_when_peak_is_last_entry():
    smoothed = np.array([0, 10, 20])
    assert find_end(smoothed, 2).index == 2


def test_entries_equal_to_threshold_are_not_silent():
    smoothed = np.array([1000, 100, 100, 100, 0])
    assert find_end(smoothed, 0, percent=0.1, allowed_silence=1).index == 4


def test_finders_reject_out_of_range_peak():
    with pytest.raises(IndexError):
        find_start(np.array([1, 2]), 5)
    with pytest.raises(EmptyInputError):
        find_end(np.array([], dtype=np.int64), 0)


def test_locate_orders_points():
    rng = np.random.default_rng(11)
    for _ in range(50):
        smoothed = smooth_envelope(rng.integers(0, 2000, size=rng.integers(1, 80)), 300)
        start, max_index, end = locate_trim_points(smoothed)
        assert 0 <= start.index <= max_index <= end.index < len(smoothed)

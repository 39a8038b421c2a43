# unit tests for the pure numeric core, no i/o involved

import math
import random
import pytest
from weatherprofile.analyzer import SeriesAnalyzer, gaussian_kernel
from weatherprofile.models import EmptySeriesError, InvalidWindowError, Series


def make_series(values):
    return Series(samples=tuple(float(v) for v in values), coordinates=tuple(float(i) for i in range(len(values))))


def test_summarize_end_to_end_values():
    s = SeriesAnalyzer().summarize(make_series([0, 10, 20, 10, 0]))
    assert (s.min, s.min_index, s.max, s.max_index) == (0, 0, 20, 2)
    assert s.mean == pytest.approx(8)


def test_summarize_ties_keep_first_index():
    s = SeriesAnalyzer().summarize(make_series([5, 1, 9, 1]))
    assert s.min_index == 1
    assert s.max_index == 2

    flat = SeriesAnalyzer().summarize(make_series([3, 3, 3]))
    assert flat.min_index == 0 and flat.max_index == 0


def test_summarize_mean_between_extremes():
    rng = random.Random(7)
    analyzer = SeriesAnalyzer()
    for n in (1, 2, 5, 365):
        values = [rng.uniform(-20, 40) for _ in range(n)]
        s = analyzer.summarize(make_series(values))
        assert s.min <= s.mean <= s.max

    # repeated 0.1 sums to slightly more than 0.1 * n
    s = analyzer.summarize(make_series([0.1] * 3))
    assert s.min <= s.mean <= s.max


def test_summarize_empty_series_raises():
    with pytest.raises(EmptySeriesError):
        SeriesAnalyzer().summarize(Series(samples=(), coordinates=()))


def test_smooth_window_one_is_identity():
    series = make_series([1.5, -2.0, 0.25, 7.0])
    smoothed = SeriesAnalyzer().smooth(series, 1)
    assert smoothed == series


def test_smooth_keeps_length_and_coordinates():
    series = make_series([math.sin(i / 5.0) * 10 for i in range(40)])
    analyzer = SeriesAnalyzer()
    for window in (1, 3, 5, 31, 39):
        smoothed = analyzer.smooth(series, window)
        assert len(smoothed) == len(series)
        assert smoothed.coordinates == series.coordinates


def test_smooth_constant_series_unchanged():
    # replicate padding means edges see the same value, so a flat series stays flat
    smoothed = SeriesAnalyzer().smooth(make_series([4.0] * 10), 5)
    assert smoothed.samples == pytest.approx([4.0] * 10)


def test_smooth_uses_replicate_edges():
    series = make_series([0, 0, 0, 0, 10])
    analyzer = SeriesAnalyzer()
    kernel = gaussian_kernel(3, 3 / 6.0)
    smoothed = analyzer.smooth(series, 3)
    # last index: neighbours are [0, 10, 10 (clamped)]
    assert smoothed.samples[-1] == pytest.approx(kernel[1] * 10 + kernel[2] * 10)
    assert smoothed.samples[0] == pytest.approx(0.0)


def test_smooth_reduces_spike():
    series = make_series([0] * 10 + [30] + [0] * 10)
    smoothed = SeriesAnalyzer().smooth(series, 7)
    assert max(smoothed.samples) < 30
    assert sum(smoothed.samples) == pytest.approx(30)


def test_smooth_explicit_sigma_overrides_factor():
    series = make_series([0, 0, 9, 0, 0])
    analyzer = SeriesAnalyzer()
    narrow = analyzer.smooth(series, 5, sigma=0.5)
    wide = analyzer.smooth(series, 5, sigma=5.0)
    assert narrow.samples[2] > wide.samples[2]


@pytest.mark.parametrize("window", [0, -3, 2, 4, 7, 1.0, True])
def test_smooth_rejects_invalid_windows(window):
    with pytest.raises(InvalidWindowError):
        SeriesAnalyzer().smooth(make_series([1, 2, 3, 4, 5]), window)


def test_smooth_rejects_non_positive_sigma():
    with pytest.raises(InvalidWindowError):
        SeriesAnalyzer().smooth(make_series([1, 2, 3]), 3, sigma=0)
    with pytest.raises(InvalidWindowError):
        SeriesAnalyzer(sigma_factor=-1)


def test_gaussian_kernel_is_normalized_and_symmetric():
    kernel = gaussian_kernel(31, 31 / 6.0)
    assert len(kernel) == 31
    assert kernel.sum() == pytest.approx(1.0)
    assert list(kernel) == pytest.approx(list(kernel[::-1]))
    assert kernel.argmax() == 15


def test_mean_line_two_points_at_mean():
    series = Series(samples=(0.0, 10.0, 20.0, 10.0, 0.0), coordinates=(10.0, 11.0, 12.0, 13.0, 14.0))
    line = SeriesAnalyzer().mean_line(series)
    assert len(line) == 2
    assert line.samples == pytest.approx((8.0, 8.0))
    assert line.coordinates == (10.0, 14.0)

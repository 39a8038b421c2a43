# pure numeric core: summary statistics, gaussian smoothing and the mean reference line
# no state beyond the sigma configuration, every call is independent

from __future__ import annotations
import logging
from typing import Optional
import numpy as np
from .config import DEFAULT_SIGMA_FACTOR
from .models import EmptySeriesError, InvalidWindowError, Series, SummaryResult

logger = logging.getLogger(__name__)


def gaussian_kernel(window_size: int, sigma: float) -> np.ndarray:
    # weights for offsets -(w-1)/2 .. (w-1)/2, normalized to sum to 1
    if sigma <= 0:
        raise InvalidWindowError(f"sigma must be positive (got {sigma})")
    half = (window_size - 1) // 2
    offsets = np.arange(-half, half + 1, dtype=float)
    weights = np.exp(-(offsets ** 2) / (2.0 * sigma ** 2))
    return weights / weights.sum()


class SeriesAnalyzer:

    def __init__(self, sigma_factor: float = DEFAULT_SIGMA_FACTOR):
        if sigma_factor <= 0:
            raise InvalidWindowError(f"sigma_factor must be positive (got {sigma_factor})")
        self.sigma_factor = sigma_factor

    def summarize(self, series: Series) -> SummaryResult:
        if len(series) == 0:
            raise EmptySeriesError("cannot summarize an empty series")

        # single left-to-right scan, strict comparisons keep the first index on ties
        lo = hi = series.samples[0]
        lo_index = hi_index = 0
        total = 0.0
        for i, value in enumerate(series.samples):
            if value < lo:
                lo, lo_index = value, i
            if value > hi:
                hi, hi_index = value, i
            total += value

        # rounding can push the mean of a flat series just past its extremes
        mean = min(max(total / len(series), lo), hi)
        return SummaryResult(min=lo, min_index=lo_index, max=hi, max_index=hi_index, mean=mean)

    def smooth(self, series: Series, window_size: int, sigma: Optional[float] = None) -> Series:
        if isinstance(window_size, bool) or not isinstance(window_size, int):
            raise InvalidWindowError(f"window size must be an integer (got {window_size!r})")
        if window_size <= 0 or window_size % 2 == 0:
            raise InvalidWindowError(f"window size must be odd and positive (got {window_size})")
        if window_size > len(series):
            raise InvalidWindowError(
                f"window size {window_size} exceeds series length {len(series)}"
            )

        if sigma is None:
            sigma = window_size * self.sigma_factor
        kernel = gaussian_kernel(window_size, sigma)
        half = (window_size - 1) // 2

        # replicate the edge samples so every input index gets one output value
        padded = np.pad(np.asarray(series.samples, dtype=float), half, mode="edge")
        smoothed = np.convolve(padded, kernel, mode="valid")
        logger.debug("smoothed %d samples with window=%d sigma=%.3f", len(series), window_size, sigma)
        return Series(samples=tuple(float(v) for v in smoothed), coordinates=series.coordinates)

    def mean_line(self, series: Series) -> Series:
        # horizontal reference line spanning the first to the last coordinate
        mean = self.summarize(series).mean
        return Series(
            samples=(mean, mean),
            coordinates=(series.coordinates[0], series.coordinates[-1]),
        )

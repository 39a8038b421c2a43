# value objects and the error family shared by the store and the analyzer
# everything here is immutable so results can be handed to any consumer safely

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


class SeriesError(ValueError):
    # base for every validation failure raised by the pure core
    pass


class MalformedInputError(SeriesError):
    pass


class EmptySeriesError(SeriesError):
    pass


class InvalidWindowError(SeriesError):
    pass


@dataclass(frozen=True)
class Series:
    # ordered samples with parallel coordinates (day offsets for temperature data)
    samples: Tuple[float, ...]
    coordinates: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.samples)


@dataclass(frozen=True)
class SeriesMetadata:
    # descriptive only, never used in any computation
    city: str
    year: int
    source: str


@dataclass(frozen=True)
class SummaryResult:
    min: float
    min_index: int
    max: float
    max_index: int
    mean: float


@dataclass(frozen=True)
class AnalysisReport:
    # everything a report printer or chart renderer needs, computed once per run
    metadata: SeriesMetadata
    series: Series
    summary: SummaryResult
    smoothed: Series
    mean_line: Series
    window_size: int

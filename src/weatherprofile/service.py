# orchestration: provider payload -> raw table -> store -> analyzer -> report lines
# the pure steps (parse, analyze, format) never touch the network, only fetch_city_year does

from __future__ import annotations
import datetime
import logging
from typing import Any, Dict, List, Optional
from .analyzer import SeriesAnalyzer
from .client import DAILY_VARIABLE, ArchiveClient
from .config import DEFAULT_WINDOW_SIZE, SOURCE_NAME
from .models import AnalysisReport, MalformedInputError, Series, SeriesMetadata
from .store import SeriesStore

logger = logging.getLogger(__name__)


# transform raw provider payload into the raw table shape the store understands
def parse_archive(data, city: str, year: int, source: str = SOURCE_NAME) -> Dict[str, Any]:
    # open-meteo shape: data["daily"]["time"][i] = "YYYY-MM-DD", data["daily"][DAILY_VARIABLE][i]
    try:
        times = data["daily"]["time"]
        values = data["daily"][DAILY_VARIABLE]
    except (KeyError, TypeError) as exc:
        raise MalformedInputError("Unsupported payload shape for parse_archive()") from exc
    if len(times) != len(values):
        raise MalformedInputError(f"payload has {len(times)} dates but {len(values)} values")

    jan_first = datetime.date(year, 1, 1)
    days: List[int] = []
    temperatures: List[float] = []
    for stamp, value in zip(times, values):
        # the archive reports gaps as null, skip them and keep the day offsets honest
        if value is None:
            continue
        try:
            day = datetime.date.fromisoformat(stamp)
        except (TypeError, ValueError) as exc:
            raise MalformedInputError(f"invalid date in payload: {stamp!r}") from exc
        try:
            temperature = float(value)
        except (TypeError, ValueError) as exc:
            raise MalformedInputError(f"invalid temperature for {stamp}: {value!r}") from exc
        days.append((day - jan_first).days)
        temperatures.append(temperature)

    skipped = len(values) - len(temperatures)
    if skipped:
        logger.warning("skipped %d days without a value for %s %d", skipped, city, year)
    return {"days": days, "temperatures": temperatures, "city": city, "year": year, "source": source}


def analyze(
    raw: Dict[str, Any],
    window_size: int = DEFAULT_WINDOW_SIZE,
    analyzer: Optional[SeriesAnalyzer] = None,
) -> AnalysisReport:
    # single run: load -> summarize -> smooth -> mean line
    series, metadata = SeriesStore().load(raw)
    return analyze_series(series, metadata, window_size=window_size, analyzer=analyzer)


def analyze_series(
    series: Series,
    metadata: SeriesMetadata,
    window_size: int = DEFAULT_WINDOW_SIZE,
    analyzer: Optional[SeriesAnalyzer] = None,
) -> AnalysisReport:
    analyzer = analyzer or SeriesAnalyzer()
    report = AnalysisReport(
        metadata=metadata,
        series=series,
        summary=analyzer.summarize(series),
        smoothed=analyzer.smooth(series, window_size),
        mean_line=analyzer.mean_line(series),
        window_size=window_size,
    )
    logger.info("analyzed %d samples for %s %d", len(series), metadata.city, metadata.year)
    return report


def format_report(report: AnalysisReport) -> List[str]:
    s = report.summary
    coords = report.series.coordinates
    return [
        f"Weather of {report.metadata.city} from {report.metadata.year}:",
        "",
        f"Minimum Temperature: {s.min:.2f}°C (day {coords[s.min_index]:g})",
        f"Maximum Temperature: {s.max:.2f}°C (day {coords[s.max_index]:g})",
        f"Mean Temperature:    {s.mean:.2f}°C",
        "",
        f"Source: {report.metadata.source}",
    ]


# single city path: fetch -> parse
def fetch_city_year(client: ArchiveClient, city: str, latitude: float, longitude: float, year: int) -> Dict[str, Any]:
    payload = client.get_daily_means(latitude, longitude, year)
    return parse_archive(payload, city, year)


# the year that finished last before `run_end`; scheduled runs pass the end of their data interval
def completed_year(run_end: Optional[datetime.datetime] = None) -> int:
    run_end = run_end or datetime.datetime.now()
    return run_end.year - 1

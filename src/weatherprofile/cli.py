# connects input (json file or city -> archive query) to the service and prints the report

from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional
from .analyzer import SeriesAnalyzer
from .client import ArchiveAPIError, ArchiveClient
from .config import CITIES, DEFAULT_SIGMA_FACTOR, DEFAULT_WINDOW_SIZE, DEFAULT_YEAR
from .models import AnalysisReport, SeriesError
from .service import analyze, analyze_series, fetch_city_year, format_report
from .store import SeriesStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weather-profile",
        description="Summarise and smooth one year of daily mean temperatures.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--input", help="raw table JSON file (days, temperatures, city, year, source)")
    source.add_argument("--city", default="Waldkirch", help="city to fetch from the weather archive")
    parser.add_argument("--latitude", type=float, help="latitude, required for cities not in the built-in list")
    parser.add_argument("--longitude", type=float, help="longitude, required for cities not in the built-in list")
    parser.add_argument("--year", type=int, default=DEFAULT_YEAR)
    parser.add_argument("--window", type=int, default=DEFAULT_WINDOW_SIZE, help="odd smoothing window in samples")
    parser.add_argument("--sigma-factor", type=float, default=DEFAULT_SIGMA_FACTOR, help="sigma = window * factor")
    parser.add_argument("--plot", help="write the chart to this image file")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _run(args: argparse.Namespace) -> AnalysisReport:
    analyzer = SeriesAnalyzer(args.sigma_factor)
    if args.input:
        series, metadata = SeriesStore().load_json(args.input)
        return analyze_series(series, metadata, window_size=args.window, analyzer=analyzer)

    if args.latitude is not None and args.longitude is not None:
        lat, lon = args.latitude, args.longitude
    elif args.city in CITIES:
        lat, lon = CITIES[args.city]
    else:
        raise SeriesError(f"unknown city {args.city!r}, pass --latitude and --longitude")
    raw = fetch_city_year(ArchiveClient(), args.city, lat, lon, args.year)
    return analyze(raw, window_size=args.window, analyzer=analyzer)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        report = _run(args)
    except (SeriesError, ArchiveAPIError, OSError) as exc:
        # validation, provider and file errors are fatal, report them without a traceback
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print("")
    for line in format_report(report):
        print(line)

    if args.plot:
        # imported lazily so text-only runs never load matplotlib
        from .renderer import render_chart
        try:
            path = render_chart(report, args.plot)
        except (OSError, ValueError) as exc:
            # unwritable path or an image format matplotlib does not know
            print(f"error: cannot write chart {args.plot}: {exc}", file=sys.stderr)
            return 1
        logger.info("chart written to %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())

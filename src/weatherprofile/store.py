# turns a raw table (dict of parallel arrays plus scalar metadata) into validated value objects
# no side effects beyond returning immutable data, except load_json which reads one file

from __future__ import annotations
import json
import logging
import math
from numbers import Real
from pathlib import Path
from typing import Any, Mapping, Tuple
from .models import MalformedInputError, Series, SeriesMetadata

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("temperatures", "days", "city", "year", "source")


class SeriesStore:

    def load(self, raw: Mapping[str, Any]) -> Tuple[Series, SeriesMetadata]:
        if not isinstance(raw, Mapping):
            raise MalformedInputError(f"raw table must be a mapping (got {type(raw).__name__})")
        missing = [k for k in REQUIRED_KEYS if k not in raw]
        if missing:
            raise MalformedInputError(f"raw table is missing keys: {', '.join(missing)}")

        temperatures = _as_list(raw["temperatures"], "temperatures")
        samples = tuple(_as_number(v, "temperatures", i) for i, v in enumerate(temperatures))
        coordinates = self._coordinates(raw["days"], len(samples))

        if len(samples) != len(coordinates):
            raise MalformedInputError(
                f"temperatures and days differ in length ({len(samples)} != {len(coordinates)})"
            )
        if not samples:
            raise MalformedInputError("series is empty")

        metadata = SeriesMetadata(
            city=_as_text(raw["city"], "city"),
            year=_as_year(raw["year"]),
            source=_as_text(raw["source"], "source"),
        )
        logger.debug("loaded %d samples for %s %d", len(samples), metadata.city, metadata.year)
        return Series(samples=samples, coordinates=coordinates), metadata

    def load_json(self, path: Path | str) -> Tuple[Series, SeriesMetadata]:
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedInputError(f"invalid JSON in {path}: {exc}") from exc
        return self.load(raw)

    @staticmethod
    def _coordinates(days: Any, n: int) -> Tuple[float, ...]:
        # a bare count means the samples sit at 0..N-1
        if isinstance(days, int) and not isinstance(days, bool):
            if days != n:
                raise MalformedInputError(f"day count {days} does not match {n} temperatures")
            return tuple(float(i) for i in range(n))
        return tuple(_as_number(v, "days", i) for i, v in enumerate(_as_list(days, "days")))


def _as_list(value: Any, key: str) -> list:
    if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
        raise MalformedInputError(f"'{key}' must be a list of numbers")
    return list(value)


def _as_number(value: Any, key: str, index: int) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise MalformedInputError(f"'{key}'[{index}] is not a number: {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise MalformedInputError(f"'{key}'[{index}] is not finite: {value!r}")
    return number


def _as_text(value: Any, key: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise MalformedInputError(f"'{key}' must be a non-empty string")
    return value


def _as_year(value: Any) -> int:
    # older tables carry the year as a string, accept both
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError as exc:
            raise MalformedInputError(f"'year' must be an integer (got {value!r})") from exc
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise MalformedInputError(f"'year' must be an integer (got {value!r})")

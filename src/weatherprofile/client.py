# OOP boundary for external i/o
# all http/keys/retries live here, so the store and analyzer stay pure and testable

from __future__ import annotations
import datetime
import logging
import os
from typing import Any, Dict
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from dotenv import load_dotenv

load_dotenv()  # in production, environment variables are injected by docker, kubernetes, cloud provider

logger = logging.getLogger(__name__)

DAILY_VARIABLE = "temperature_2m_mean"


class ArchiveAPIError(RuntimeError):
    # single error type used to propagate clear messages from this layer
    pass


class ArchiveClient:
    # encapsulates provider details like base URL, params, optional auth, retries
    BASE_URL = "https://archive-api.open-meteo.com/v1/archive"
    DEFAULT_TIMEOUT = 30.0
    FIRST_YEAR = 1940  # start of the ERA5 reanalysis behind the archive

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 3,
        backoff_factor: float = 0.5,
        user_agent: str = "weather-profile/0.1",
    ):
        # customer endpoints need a key, the public one works without
        self.base_url = base_url or os.getenv("OPEN_METEO_ARCHIVE_URL") or self.BASE_URL
        self.api_key = api_key or os.getenv("OPEN_METEO_API_KEY")
        self.timeout = timeout
        self.user_agent = user_agent
        self._sess: requests.Session | None = None

        # retry policy for transient network, server or rate-limit issues
        self._retry = Retry(
            total=max_retries,
            backoff_factor=backoff_factor,        # exponential backoff (0.5, 1.0, 2.0, ...)
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=("GET",),
            raise_on_status=False,
        )

    def _build_session(self) -> requests.Session:
        # central place to configure http behavior like headers, adapters, retries
        s = requests.Session()
        s.headers.update({"User-Agent": self.user_agent})
        adapter = HTTPAdapter(max_retries=self._retry)
        s.mount("http://", adapter)
        s.mount("https://", adapter)
        return s

    def _session(self) -> requests.Session:
        if self._sess is None:
            self._sess = self._build_session()
        return self._sess

    def get_daily_means(self, latitude: float, longitude: float, year: int) -> Dict[str, Any]:
        # fetch one calendar year of daily mean temperatures and validate the minimal shape
        last_year = datetime.date.today().year - 1
        if not (self.FIRST_YEAR <= year <= last_year):
            raise ArchiveAPIError(f"'year' must be between {self.FIRST_YEAR} and {last_year} (got {year})")
        if not (-90.0 <= latitude <= 90.0) or not (-180.0 <= longitude <= 180.0):
            raise ArchiveAPIError(f"invalid coordinates ({latitude}, {longitude})")

        params = {
            "latitude": latitude,
            "longitude": longitude,
            "start_date": f"{year}-01-01",
            "end_date": f"{year}-12-31",
            "daily": DAILY_VARIABLE,
            "timezone": "auto",
        }
        if self.api_key:
            params["apikey"] = self.api_key

        where = f"({latitude}, {longitude}) in {year}"
        logger.info("requesting daily means for %s", where)
        try:
            resp = self._session().get(self.base_url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            # wrap requests exceptions with context for easier debugging
            raise ArchiveAPIError(f"Request error for {where}: {exc}") from exc

        if resp.status_code >= 400:
            # include a short response snippet to speed up triage
            snippet = (resp.text or "")[:300]
            raise ArchiveAPIError(f"HTTP {resp.status_code} for {where}. Body: {snippet}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise ArchiveAPIError(f"Invalid JSON for {where}: {exc}") from exc

        # ensure the data meets the basic requirements expected by the service layer
        try:
            _ = data["daily"]["time"]
            _ = data["daily"][DAILY_VARIABLE]
        except (KeyError, TypeError) as exc:
            raise ArchiveAPIError(f"Unexpected API shape: missing daily.time or daily.{DAILY_VARIABLE}") from exc

        return data

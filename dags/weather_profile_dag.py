# dags/weather_profile_dag.py
from __future__ import annotations
from datetime import datetime, timedelta
from typing import List
from airflow.decorators import dag, task
from airflow.exceptions import AirflowFailException
from weatherprofile.client import ArchiveAPIError, ArchiveClient
from weatherprofile.config import CITIES, DEFAULT_WINDOW_SIZE
from weatherprofile.models import SeriesError
from weatherprofile.service import analyze, completed_year, fetch_city_year, format_report

ORDER = ["Waldkirch", "Freiburg"]


@dag(
    dag_id="weather_profile",
    start_date=datetime(2025, 1, 1),
    schedule="0 6 1 1 *",  # once a year, the previous year is complete by then
    catchup=False,
    default_args={"owner": "weather-eng", "retries": 1, "retry_delay": timedelta(minutes=5)},
    tags=["weather", "temperature-profile"],
)
def weather_profile():
    @task(pool="open_meteo", execution_timeout=timedelta(minutes=2))
    def profile_city(city: str, data_interval_end=None) -> dict:
        # the yearly interval ends on january 1st, so the year before its end is complete
        year = completed_year(data_interval_end)
        lat, lon = CITIES[city]

        try:
            raw = fetch_city_year(ArchiveClient(), city, lat, lon, year)
        except ArchiveAPIError as e:
            # includes HTTP status/body snippets from our client
            raise AirflowFailException(f"profile_city({city}) client error: {e}")

        try:
            report = analyze(raw, window_size=DEFAULT_WINDOW_SIZE)
        except SeriesError as e:
            raise AirflowFailException(f"profile_city({city}) analysis error: {e}")

        # xcom payloads must be json, keep only what publish needs
        return {"city": city, "lines": format_report(report)}

    results = profile_city.expand(city=ORDER)

    @task
    def publish(rows: List[dict]) -> None:
        by = {r["city"]: r for r in rows}
        for city in ORDER:
            print("\n".join(by[city]["lines"]))
            print("")

    publish(results)


dag = weather_profile()

# defaults shared by the cli, the dag and the service layer

from __future__ import annotations
from typing import Dict, Tuple

# 31 daily samples, i.e. +/-15 days around each day
DEFAULT_WINDOW_SIZE = 31

# sigma = window * factor keeps +/-3 sigma inside the window
DEFAULT_SIGMA_FACTOR = 1.0 / 6.0

DEFAULT_YEAR = 2017

# (latitude, longitude) for cities that can be fetched by name
CITIES: Dict[str, Tuple[float, float]] = {
    "Waldkirch": (48.0939, 7.9614),
    "Freiburg": (47.9990, 7.8421),
    "Salt Lake City": (40.7608, -111.8910),
    "Los Angeles": (34.0522, -118.2437),
    "Boise": (43.6150, -116.2023),
}

SOURCE_NAME = "Open-Meteo historical weather API (ERA5)"

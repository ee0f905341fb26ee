"""
NWS hourly forecast

Two chained calls, each stage feeding the next:
1. GET {nws_base}/points/{lat},{lon}       -> properties.forecastHourly (URL)
2. GET <forecastHourly>                     -> properties.periods[]
3. project periods -> ForecastRow table     -> chart

Stage 2 cannot run without the URL from stage 1, so a missing
forecastHourly raises MissingFieldError. Everything inside a period is
optional and goes through pluck defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

import pandas as pd

from ..config import Settings
from ..core.errors import InvalidArgument, MissingFieldError
from ..core.http import Executor, RequestsExecutor, fetch_json
from ..core.pluck import pluck
from ..core.project import (
    Column,
    Projection,
    optional_number,
    parse_number,
    parse_text,
    parse_timestamp,
    project,
)
from ..core.request import RequestDescriptor, build

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForecastRow:
    time: datetime
    temperature: float
    precipitation_probability: Optional[float]
    short_forecast: str


FORECAST_COLUMNS = {
    "time": Column(("startTime",), parse_timestamp),
    "temperature": Column(("temperature",), parse_number),
    "precipitation_probability": Column(("probabilityOfPrecipitation", "value"), optional_number),
    "short_forecast": Column(("shortForecast",), parse_text, ""),
}


def points_request(lat: float, lon: float, base: str = Settings.nws_base) -> RequestDescriptor:
    """
    NWS points lookup. Coordinates are rounded to 4 decimals; the API
    redirects anything more precise.
    """
    if isinstance(lat, bool) or isinstance(lon, bool):
        raise InvalidArgument("lat/lon must be numbers")
    try:
        lat_f, lon_f = float(lat), float(lon)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"lat/lon must be numbers, got {lat!r}, {lon!r}") from e
    if not -90 <= lat_f <= 90:
        raise InvalidArgument(f"latitude out of range: {lat_f}")
    if not -180 <= lon_f <= 180:
        raise InvalidArgument(f"longitude out of range: {lon_f}")

    return build(base, ["points", f"{round(lat_f, 4)},{round(lon_f, 4)}"])


def project_periods(periods: list) -> Projection:
    return project(periods, FORECAST_COLUMNS)


def forecast_rows(projection: Projection) -> List[ForecastRow]:
    """Typed rows for every period that parsed cleanly, in forecast order."""
    return [ForecastRow(**row.values) for row in projection.ok_rows]


def forecast_frame(projection: Projection, hours: Optional[int] = None) -> pd.DataFrame:
    """
    DataFrame of the clean rows, optionally limited to the first `hours`.

    Columns: time, temperature, precipitation_probability, short_forecast
    """
    df = projection.to_frame(drop_failed=True)
    if len(df) > 0:
        df["time"] = pd.to_datetime(df["time"], utc=True)
        df["temperature"] = pd.to_numeric(df["temperature"])
        df["precipitation_probability"] = pd.to_numeric(df["precipitation_probability"])
    if hours is not None:
        df = df.head(hours)
    return df.reset_index(drop=True)


class WeatherClient:
    """
    National Weather Service hourly forecast client.

    Usage:
        client = WeatherClient()
        projection = client.get_hourly_forecast(39.7456, -97.0892)
        df = forecast_frame(projection, hours=48)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        executor: Optional[Executor] = None,
    ):
        self.settings = settings or Settings()
        self.executor = executor or RequestsExecutor(user_agent=self.settings.user_agent)

    def get_forecast_hourly_url(self, lat: float, lon: float) -> str:
        descriptor = points_request(lat, lon, base=self.settings.nws_base)
        data = fetch_json(self.executor, descriptor, self.settings.timeout)

        url = pluck(data, ["properties", "forecastHourly"], None, str)
        if not url:
            raise MissingFieldError("properties.forecastHourly", url=descriptor.url)
        return url

    def get_hourly_periods(self, lat: float, lon: float) -> list:
        hourly_url = self.get_forecast_hourly_url(lat, lon)
        data = fetch_json(self.executor, RequestDescriptor.from_url(hourly_url), self.settings.timeout)

        periods = pluck(data, ["properties", "periods"], [], list)
        logger.info("[weather] %s periods for (%s, %s)", len(periods), lat, lon)
        return periods

    def get_hourly_forecast(self, lat: float, lon: float) -> Projection:
        projection = project_periods(self.get_hourly_periods(lat, lon))
        if projection.failed_rows:
            logger.warning(
                "[weather] %s of %s periods failed to parse",
                len(projection.failed_rows),
                len(projection),
            )
        return projection

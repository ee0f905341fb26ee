"""
Weather: NWS points -> hourly forecast -> table -> chart
"""

from .charts import plot_forecast, save_forecast_chart
from .forecast import (
    FORECAST_COLUMNS,
    ForecastRow,
    WeatherClient,
    forecast_frame,
    forecast_rows,
    points_request,
    project_periods,
)

__all__ = [
    "FORECAST_COLUMNS",
    "ForecastRow",
    "WeatherClient",
    "forecast_frame",
    "forecast_rows",
    "plot_forecast",
    "points_request",
    "project_periods",
    "save_forecast_chart",
]

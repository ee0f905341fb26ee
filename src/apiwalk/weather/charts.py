"""
Forecast chart: temperature over time, precipitation chance on a twin axis.
"""

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

logger = logging.getLogger(__name__)


def plot_forecast(df: pd.DataFrame, title: str = "Hourly forecast"):
    """
    Line chart of a forecast_frame() table.

    Args:
        df: DataFrame with columns [time, temperature] and optionally
            precipitation_probability
        title: Chart title

    Returns:
        matplotlib Figure
    """
    missing = [col for col in ("time", "temperature") if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    # naive UTC for plotting
    times = pd.to_datetime(df["time"], utc=True).dt.tz_localize(None)

    fig, ax = plt.subplots(figsize=(12, 5))
    ax.plot(times, df["temperature"], color="tab:red", label="Temperature")
    ax.set_title(title)
    ax.set_xlabel("Time (UTC)")
    ax.set_ylabel("Temperature")

    if "precipitation_probability" in df.columns and df["precipitation_probability"].notna().any():
        ax_precip = ax.twinx()
        ax_precip.plot(
            times,
            df["precipitation_probability"],
            color="tab:blue",
            linestyle="--",
            label="Precipitation (%)",
        )
        ax_precip.set_ylabel("Chance of precipitation (%)")
        ax_precip.set_ylim(0, 100)

    fig.autofmt_xdate()
    fig.tight_layout()
    return fig


def save_forecast_chart(df: pd.DataFrame, path: Path, title: str = "Hourly forecast") -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fig = plot_forecast(df, title)
    try:
        fig.savefig(path, dpi=100)
    finally:
        plt.close(fig)

    logger.info("[weather] chart saved: %s", path)
    return path

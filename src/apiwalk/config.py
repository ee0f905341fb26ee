"""
Configuration

Both APIs are keyless, so defaults work out of the box. Override via env or
a .env file. Only the clients and the CLI read settings, never the core.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .core.http import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT


@dataclass(frozen=True)
class Settings:
    """Endpoints and request settings for the walkthrough clients"""
    parliament_now_base: str = "https://now-api.parliament.uk/api/"
    parliament_members_base: str = "https://members-api.parliament.uk/api/"
    nws_base: str = "https://api.weather.gov"
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    chart_dir: str = "charts"

    def chart_path(self, name: str = "forecast.png") -> Path:
        return Path(self.chart_dir) / name


def _env_float(name: str, fallback: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return fallback
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_settings() -> Settings:
    """
    Load settings from environment.

    Reads (all optional):
        APIWALK_USER_AGENT, APIWALK_TIMEOUT, APIWALK_CHART_DIR,
        PARLIAMENT_NOW_BASE, PARLIAMENT_MEMBERS_BASE, NWS_BASE
    """
    load_dotenv()

    defaults = Settings()
    return Settings(
        parliament_now_base=os.getenv("PARLIAMENT_NOW_BASE", defaults.parliament_now_base),
        parliament_members_base=os.getenv("PARLIAMENT_MEMBERS_BASE", defaults.parliament_members_base),
        nws_base=os.getenv("NWS_BASE", defaults.nws_base),
        user_agent=os.getenv("APIWALK_USER_AGENT", defaults.user_agent),
        timeout=_env_float("APIWALK_TIMEOUT", defaults.timeout),
        chart_dir=os.getenv("APIWALK_CHART_DIR", defaults.chart_dir),
    )

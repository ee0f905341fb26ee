from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import matplotlib
import pandas as pd

matplotlib.use("Agg")  # Non-interactive backend, charts are written to files

import typer  # noqa: E402
from rich.console import Console  # noqa: E402
from rich.markup import escape  # noqa: E402
from rich.table import Table  # noqa: E402

from .config import load_settings  # noqa: E402
from .core.errors import ApiWalkError  # noqa: E402
from .core.http import RequestsExecutor  # noqa: E402
from .parliament import ANNUNCIATORS, ParliamentClient  # noqa: E402
from .weather import WeatherClient, forecast_frame, save_forecast_chart  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")
logger = logging.getLogger(__name__)
app = typer.Typer(add_completion=False)
console = Console()


def _strip_ipykernel_args(argv: list[str]) -> list[str]:
    """Jupyter/ipykernel injects `-f <connection_file>` into sys.argv."""
    out = [argv[0]]
    i = 1
    while i < len(argv):
        a = argv[i]
        if a in ("-f", "--f"):
            i += 2  # skip flag + value
            continue
        if a.startswith("--f="):
            i += 1
            continue
        out.append(a)
        i += 1
    return out


def _fail(err: ApiWalkError) -> None:
    logger.error("%s: %s", type(err).__name__, err)
    console.print(f"[red]{type(err).__name__}[/red]: {escape(str(err))}")
    raise typer.Exit(code=1)


@app.command()
def annunciator(
    house: str = typer.Option("CommonsMain", help=f"One of {', '.join(ANNUNCIATORS)}"),
    date: str = typer.Option("current", help="'current' or an ISO-8601 timestamp"),
    all_members: bool = typer.Option(False, "--all", help="List every member on the annunciator"),
):
    """Who is on the chamber annunciator, and how many written questions they have asked."""
    settings = load_settings()

    with RequestsExecutor(user_agent=settings.user_agent) as executor:
        client = ParliamentClient(settings, executor=executor)
        try:
            if all_members:
                members = client.list_annunciator_members(house, date)
            else:
                members = [client.get_annunciator_member(house, date)]

            table = Table(title=f"{house} annunciator ({date})")
            table.add_column("Member", style="cyan")
            table.add_column("ID", style="green")
            table.add_column("Written questions", style="green")

            for member in members:
                count = None
                if member.found:
                    count = client.get_written_question_count(member.member_id).total_results
                table.add_row(
                    member.name_full_title,
                    "-" if member.member_id is None else str(member.member_id),
                    "-" if count is None else str(count),
                )
        except ApiWalkError as e:
            _fail(e)

    console.print(table)


@app.command()
def forecast(
    lat: float = 39.7456,
    lon: float = -97.0892,
    hours: int = 48,
    output: Optional[Path] = None,
    show_rows: int = 12,
):
    """Hourly NWS forecast: print a table and save a temperature chart."""
    settings = load_settings()
    output = output or settings.chart_path()

    with RequestsExecutor(user_agent=settings.user_agent) as executor:
        client = WeatherClient(settings, executor=executor)
        try:
            projection = client.get_hourly_forecast(lat, lon)
        except ApiWalkError as e:
            _fail(e)

    df = forecast_frame(projection, hours=hours)

    table = Table(title=f"Hourly forecast ({lat}, {lon})")
    table.add_column("Time", style="cyan")
    table.add_column("Temp", style="green")
    table.add_column("Precip %", style="green")
    table.add_column("Forecast")
    for row in df.head(show_rows).itertuples(index=False):
        precip = "-" if pd.isna(row.precipitation_probability) else f"{row.precipitation_probability:.0f}"
        table.add_row(row.time.isoformat(), f"{row.temperature:.0f}", precip, row.short_forecast)
    console.print(table)

    for row in projection.failed_rows:
        console.print(f"[yellow]period {row.index} skipped[/yellow]: " + escape("; ".join(str(e) for e in row.errors.values())))

    if len(df) == 0:
        console.print("[yellow]No forecast periods to plot[/yellow]")
        raise typer.Exit(code=1)

    path = save_forecast_chart(df, output, title=f"Hourly forecast ({lat}, {lon})")
    console.print(f"Chart saved to [bold]{path}[/bold]")


def main() -> None:
    sys.argv = _strip_ipykernel_args(sys.argv)
    app()


if __name__ == "__main__":
    main()

"""Command-line interface for browsing activity history."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from .catalog import CATALOG
from .config import SortKey, SortOrder, SortSettings, TimeRange
from .history import HistoryError, load_history
from .models import CompletedActivity
from .paths import get_history_path, get_log_path, get_preferences_path
from .preferences import Preferences, PreferencesError, load_preferences
from .reporting import SummaryPrinter, count_clears, count_daily_clears
from .server_runner import run_dashboard
from .view import build_view

app = typer.Typer(help="Filter, sort and summarize completed activity history.")

HISTORY_OPTION = typer.Option(
    None, "--history", path_type=Path, help="Location of the activity history JSON file."
)
PREFERENCES_OPTION = typer.Option(
    None, "--preferences", path_type=Path, help="Location of the preferences JSON file."
)


@app.callback(no_args_is_help=True)
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
    log_file: bool = typer.Option(
        False, "--log-file", help="Also write logs to the application log file."
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    if log_file:
        handler = logging.FileHandler(get_log_path(), encoding="utf-8")
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        logging.getLogger().addHandler(handler)


@app.command()
def history(
    history_path: Optional[Path] = HISTORY_OPTION,
    preferences_path: Optional[Path] = PREFERENCES_OPTION,
    sort_by: Optional[SortKey] = typer.Option(
        None, "--sort-by", help="Sort by time, duration or activity name."
    ),
    order: Optional[SortOrder] = typer.Option(None, "--order", help="asc or desc."),
    time_range: Optional[TimeRange] = typer.Option(
        None, "--range", help="all, today, week or month (reset based)."
    ),
) -> None:
    """Print the filtered and sorted activity history."""
    activities = _read_history(history_path)
    preferences = _read_preferences(preferences_path)
    stored = preferences.to_sort_settings()
    sorting = SortSettings(
        sort_by=sort_by or stored.sort_by,
        sort_order=order or stored.sort_order,
        time_range=time_range or stored.time_range,
    )
    view = build_view(activities, preferences.to_filter_settings(), sorting)
    printer = SummaryPrinter(view, echo=typer.echo)
    printer.print_activities(CATALOG.display_name)


@app.command()
def clears(history_path: Optional[Path] = HISTORY_OPTION) -> None:
    """Print clears since the last daily reset and overall."""
    activities = _read_history(history_path)
    typer.echo(f"Daily clears: {count_daily_clears(activities)}")
    typer.echo(f"Total clears: {count_clears(activities)}")


@app.command()
def summary(history_path: Optional[Path] = HISTORY_OPTION) -> None:
    """Print a high-level summary of the recorded history."""
    SummaryPrinter(_read_history(history_path), echo=typer.echo).print_summary()


@app.command()
def catalog() -> None:
    """List the known raids and dungeons."""
    typer.echo("Raids:")
    for raid in CATALOG.unique_raids():
        hashes = ", ".join(str(activity_hash) for activity_hash in raid.all_hashes)
        typer.echo(f"  {raid.name:<30} {hashes}")
    typer.echo("Dungeons:")
    for dungeon in CATALOG.unique_dungeons():
        typer.echo(f"  {dungeon.name:<30} {dungeon.hash}")


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the dashboard."),
    port: int = typer.Option(
        8766, "--port", min=1, max=65535, help="TCP port for the dashboard."
    ),
    history_path: Optional[Path] = HISTORY_OPTION,
    preferences_path: Optional[Path] = PREFERENCES_OPTION,
    open_browser: bool = typer.Option(
        True,
        "--open-browser/--no-open-browser",
        help="Automatically launch the dashboard in your default browser.",
    ),
) -> None:
    """Start the local dashboard API."""
    run_dashboard(
        host=host,
        port=port,
        history_path=history_path or get_history_path(),
        preferences_path=preferences_path or get_preferences_path(),
        open_browser=open_browser,
    )


def _read_history(path: Optional[Path]) -> list[CompletedActivity]:
    try:
        return load_history(path or get_history_path())
    except HistoryError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _read_preferences(path: Optional[Path]) -> Preferences:
    try:
        return load_preferences(path or get_preferences_path())
    except PreferencesError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

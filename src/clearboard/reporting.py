"""Clear counts and console reporting utilities."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

from .classification import classify_activity
from .models import CompletedActivity
from .resets import daily_reset

UNCLASSIFIED_LABEL = "Other"


def count_daily_clears(
    activities: Iterable[CompletedActivity], now: Optional[datetime] = None
) -> int:
    """Count completed activities since the most recent daily reset.

    Activity type is ignored, so records that cannot be classified still count.
    """
    reset = daily_reset(now)
    return sum(
        1 for activity in activities if activity.completed and activity.period_utc >= reset
    )


def count_clears(activities: Iterable[CompletedActivity]) -> int:
    return sum(1 for activity in activities if activity.completed)


class SummaryPrinter:
    """Render human-readable summaries of an activity history in the console."""

    def __init__(
        self,
        activities: Sequence[CompletedActivity],
        *,
        echo: Callable[[str], None] = print,
    ) -> None:
        self.activities = list(activities)
        self._echo = echo

    def print_summary(self, now: Optional[datetime] = None) -> None:
        if not self.activities:
            self._echo("No activity history recorded.")
            return

        total_seconds = sum(activity.duration_seconds for activity in self.activities)
        self._echo(f"Activities:   {len(self.activities)}")
        self._echo(f"Total clears: {count_clears(self.activities)}")
        self._echo(f"Daily clears: {count_daily_clears(self.activities, now)}")
        self._echo(f"Time played:  {format_duration(total_seconds)}")
        self._echo("")

        self._echo("By activity type:")
        for label, clears, attempts in aggregate_by_type(self.activities):
            self._echo(f"  {label:<14} {clears:>5} / {attempts:<5} cleared")

    def print_activities(self, resolve_name: Callable[[int], Optional[str]]) -> None:
        rows = self.activities
        if not rows:
            self._echo("No activities match the current filters.")
            return
        for activity in rows:
            name = resolve_name(activity.activity_hash) or f"#{activity.activity_hash}"
            status = "cleared" if activity.completed else "incomplete"
            self._echo(
                f"{activity.period_utc.strftime('%Y-%m-%d %H:%M')}  "
                f"{name[:36]:<36} {format_time(activity.duration_seconds):>9}  {status}"
            )


def aggregate_by_type(activities: Iterable[CompletedActivity]) -> list[tuple[str, int, int]]:
    """Return ``(type label, clears, attempts)`` sorted by attempts."""
    clears: defaultdict[str, int] = defaultdict(int)
    attempts: defaultdict[str, int] = defaultdict(int)
    for activity in activities:
        activity_type = classify_activity(activity.modes)
        label = activity_type.value if activity_type else UNCLASSIFIED_LABEL
        attempts[label] += 1
        if activity.completed:
            clears[label] += 1
    ordered = sorted(attempts.items(), key=lambda item: item[1], reverse=True)
    return [(label, clears[label], count) for label, count in ordered]


def format_duration(seconds: float) -> str:
    total_seconds = int(round(seconds))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_time(seconds: int) -> str:
    """Format as ``MM:SS``, or ``H:MM:SS`` once an hour has passed."""
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    prefix = f"{hours}:" if hours > 0 else ""
    return f"{prefix}{minutes:02d}:{seconds:02d}"

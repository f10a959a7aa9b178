"""Loading, merging and retention of activity history documents."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from .catalog import CATALOG, ActivityCatalog
from .classification import (
    DUNGEON_ACTIVITY_MODE,
    LOST_SECTOR_ACTIVITY_MODE,
    RAID_ACTIVITY_MODE,
    STRIKE_ACTIVITY_MODE,
)
from .models import CompletedActivity, as_utc
from .resets import weekly_reset

logger = logging.getLogger(__name__)


class HistoryError(ValueError):
    """Raised when an activity history document cannot be parsed."""


class ActivityRecord(BaseModel):
    """Wire shape of one history entry, as supplied by the fetch layer."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    period: datetime
    instance_id: str
    completed: bool
    activity_duration: str = ""
    activity_duration_seconds: int = Field(default=0, ge=0)
    activity_hash: int
    modes: list[int] = Field(default_factory=list)
    completion_reason: int = 0
    starting_phase_index: Optional[int] = None
    activity_was_started_from_beginning: Optional[bool] = None

    def to_activity(self) -> CompletedActivity:
        return CompletedActivity(
            period=as_utc(self.period),
            instance_id=self.instance_id,
            completed=self.completed,
            activity_duration=self.activity_duration,
            duration_seconds=self.activity_duration_seconds,
            activity_hash=self.activity_hash,
            modes=tuple(self.modes),
            completion_reason=self.completion_reason,
            started_from_beginning=self.activity_was_started_from_beginning,
            starting_phase_index=self.starting_phase_index,
        )

    @classmethod
    def from_activity(cls, activity: CompletedActivity) -> "ActivityRecord":
        return cls(
            period=activity.period_utc,
            instance_id=activity.instance_id,
            completed=activity.completed,
            activity_duration=activity.activity_duration,
            activity_duration_seconds=activity.duration_seconds,
            activity_hash=activity.activity_hash,
            modes=list(activity.modes),
            completion_reason=activity.completion_reason,
            starting_phase_index=activity.starting_phase_index,
            activity_was_started_from_beginning=activity.started_from_beginning,
        )


_RECORDS = TypeAdapter(list[ActivityRecord])


def parse_history(payload: Any) -> list[CompletedActivity]:
    """Convert a JSON-compatible list of records into activities, newest first."""
    try:
        records = _RECORDS.validate_python(payload)
    except ValidationError as exc:
        raise HistoryError(f"Invalid activity history: {exc}") from exc
    activities = [record.to_activity() for record in records]
    return newest_first(activities)


def load_history(path: Path) -> list[CompletedActivity]:
    path = Path(path)
    if not path.exists():
        logger.info("No activity history at %s.", path)
        return []
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise HistoryError(f"Could not read activity history from {path}: {exc}") from exc
    activities = parse_history(payload)
    logger.info("Loaded %d activities from %s", len(activities), path)
    return activities


def save_history(path: Path, activities: Iterable[CompletedActivity]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [
        ActivityRecord.from_activity(activity).model_dump(mode="json", by_alias=True)
        for activity in activities
    ]
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def newest_first(activities: Iterable[CompletedActivity]) -> list[CompletedActivity]:
    return sorted(activities, key=lambda activity: activity.period_utc, reverse=True)


def merge_histories(
    existing: Iterable[CompletedActivity], incoming: Iterable[CompletedActivity]
) -> list[CompletedActivity]:
    """Union of two histories without duplicate play-throughs, newest first.

    Records are considered the same when both instance id and period match;
    on a duplicate the already-known record wins.
    """
    merged: list[CompletedActivity] = []
    seen: set[tuple[str, datetime]] = set()
    for activity in (*existing, *incoming):
        key = (activity.instance_id, activity.period_utc)
        if key in seen:
            continue
        seen.add(key)
        merged.append(activity)
    logger.debug("Merged histories into %d unique activities", len(merged))
    return newest_first(merged)


def has_new_activities(
    cached: Sequence[CompletedActivity], recent: Sequence[CompletedActivity]
) -> bool:
    """Whether ``recent`` holds anything newer than the newest cached record.

    ``cached`` is expected newest first, as returned by ``merge_histories``.
    """
    if not cached or not recent:
        return bool(recent)
    latest = cached[0]
    for activity in recent:
        if activity.period_utc > latest.period_utc:
            return True
        if activity.period_utc == latest.period_utc and activity.instance_id != latest.instance_id:
            return True
    return False


def should_keep_activity(
    activity: CompletedActivity,
    weekly_reset_at: datetime,
    catalog: ActivityCatalog = CATALOG,
) -> bool:
    """Raids and dungeons are kept forever, strikes and lost sectors for a week."""
    modes = set(activity.modes)
    if (
        RAID_ACTIVITY_MODE in modes
        or DUNGEON_ACTIVITY_MODE in modes
        or catalog.is_raid(activity.activity_hash)
        or catalog.is_dungeon(activity.activity_hash)
    ):
        return True
    if STRIKE_ACTIVITY_MODE in modes or LOST_SECTOR_ACTIVITY_MODE in modes:
        return activity.period_utc >= weekly_reset_at
    return False


def apply_retention(
    activities: Iterable[CompletedActivity], now: Optional[datetime] = None
) -> list[CompletedActivity]:
    cutoff = weekly_reset(now)
    return [activity for activity in activities if should_keep_activity(activity, cutoff)]

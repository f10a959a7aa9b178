"""Compose filtering and sorting into the displayed history list."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Optional

from .catalog import CATALOG, ActivityCatalog
from .classification import classify_activity
from .config import FilterSettings, SortSettings
from .filtering import filter_activities
from .models import CompletedActivity
from .sorting import NameLookup, sort_activities


def build_view(
    activities: Iterable[CompletedActivity],
    filters: FilterSettings,
    sorting: SortSettings,
    *,
    name_lookup: Optional[NameLookup] = None,
    catalog: ActivityCatalog = CATALOG,
    now: Optional[datetime] = None,
) -> list[CompletedActivity]:
    filtered = filter_activities(activities, filters, catalog)
    return sort_activities(
        filtered,
        sorting,
        name_lookup=name_lookup if name_lookup is not None else catalog.display_name,
        now=now,
    )


def activity_payload(
    activity: CompletedActivity, catalog: ActivityCatalog = CATALOG
) -> dict[str, Any]:
    activity_type = classify_activity(activity.modes)
    return {
        "instance_id": activity.instance_id,
        "period": activity.period_utc.isoformat(),
        "activity_hash": activity.activity_hash,
        "activity_name": catalog.display_name(activity.activity_hash),
        "activity_type": activity_type.value if activity_type else None,
        "completed": activity.completed,
        "activity_duration": activity.activity_duration,
        "duration_seconds": activity.duration_seconds,
        "fresh_start": activity.is_fresh_start,
        "completion_reason": activity.completion_reason,
    }

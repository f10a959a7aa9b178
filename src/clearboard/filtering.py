"""Filter activity history by type, selection, completion and duration."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from .catalog import CATALOG, ActivityCatalog
from .classification import classify_activity
from .config import FilterSettings
from .models import ActivityType, CompletedActivity

logger = logging.getLogger(__name__)


def filter_activities(
    activities: Iterable[CompletedActivity],
    settings: FilterSettings,
    catalog: ActivityCatalog = CATALOG,
) -> list[CompletedActivity]:
    """Return the activities matching ``settings``, preserving input order."""
    source = list(activities)
    kept = [
        activity for activity in source if _matches(activity, settings, catalog)
    ]
    logger.debug("Filtered %d activities down to %d", len(source), len(kept))
    return kept


def _matches(
    activity: CompletedActivity, settings: FilterSettings, catalog: ActivityCatalog
) -> bool:
    activity_type = classify_activity(activity.modes)
    if activity_type is None:
        return False
    if not _type_matches(activity, activity_type, settings, catalog):
        return False

    fresh_start = activity.is_fresh_start
    if fresh_start is True and not settings.show_fresh_start:
        return False
    if fresh_start is False and not settings.show_checkpoint:
        return False

    if activity.completed and not settings.show_completed:
        return False
    if not activity.completed and not settings.show_incomplete:
        return False

    if (
        settings.min_duration_seconds is not None
        and activity.duration_seconds < settings.min_duration_seconds
    ):
        return False
    if (
        settings.max_duration_seconds is not None
        and activity.duration_seconds > settings.max_duration_seconds
    ):
        return False
    return True


def _type_matches(
    activity: CompletedActivity,
    activity_type: ActivityType,
    settings: FilterSettings,
    catalog: ActivityCatalog,
) -> bool:
    if activity_type is ActivityType.RAID:
        if not settings.show_raids:
            return False
        if not _has_selection(settings.specific_raids):
            return True
        return _raid_selected(activity.activity_hash, settings.specific_raids, catalog)
    if activity_type is ActivityType.DUNGEON:
        if not settings.show_dungeons:
            return False
        if not _has_selection(settings.specific_dungeons):
            return True
        return settings.specific_dungeons.get(activity.activity_hash) is True
    if activity_type is ActivityType.STRIKE:
        return settings.show_strikes
    return settings.show_lost_sectors


def _has_selection(selection: Mapping[int, bool]) -> bool:
    # An empty or all-false selection means "every instance of this type".
    return any(enabled is True for enabled in selection.values())


def _raid_selected(
    activity_hash: int, selection: Mapping[int, bool], catalog: ActivityCatalog
) -> bool:
    name = catalog.raid_name(activity_hash)
    if name is None:
        return selection.get(activity_hash) is True
    return any(
        selection.get(candidate) is True
        for candidate in catalog.hashes_sharing_raid_name(name)
    )

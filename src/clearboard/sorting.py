"""Restrict activity history to a reset window and order it."""

from __future__ import annotations

import logging
import unicodedata
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from .catalog import CATALOG
from .config import SortKey, SortOrder, SortSettings
from .models import CompletedActivity
from .resets import range_cutoff

logger = logging.getLogger(__name__)

NameLookup = Union[Mapping[int, str], Callable[[int], Optional[str]]]


def sort_activities(
    activities: Iterable[CompletedActivity],
    settings: SortSettings,
    name_lookup: Optional[NameLookup] = None,
    now: Optional[datetime] = None,
) -> list[CompletedActivity]:
    """Return a new list limited to ``settings.time_range`` and sorted.

    The sort is stable in both directions, so activities with equal keys keep
    their input order.
    """
    cutoff = range_cutoff(settings.time_range, now)
    if cutoff is None:
        selected = list(activities)
    else:
        selected = [activity for activity in activities if activity.period_utc >= cutoff]

    key = _sort_key(settings.sort_by, _resolver(name_lookup))
    ordered = sorted(selected, key=key, reverse=settings.sort_order is SortOrder.DESC)
    logger.debug(
        "Sorted %d activities by %s (%s, range=%s)",
        len(ordered),
        settings.sort_by.value,
        settings.sort_order.value,
        settings.time_range.value,
    )
    return ordered


def _resolver(name_lookup: Optional[NameLookup]) -> Callable[[int], Optional[str]]:
    if name_lookup is None:
        return CATALOG.display_name
    if callable(name_lookup):
        return name_lookup
    return name_lookup.get


def _sort_key(
    sort_by: SortKey, resolve_name: Callable[[int], Optional[str]]
) -> Callable[[CompletedActivity], Any]:
    if sort_by is SortKey.DURATION:
        return lambda activity: activity.duration_seconds
    if sort_by is SortKey.ACTIVITY:
        return lambda activity: collation_key(resolve_name(activity.activity_hash) or "")
    return lambda activity: activity.period_utc


def collation_key(name: str) -> tuple[str, str]:
    """Case- and accent-insensitive ordering key for activity names.

    Accents and case only break ties, so "Échoes" sorts between "ascent"
    and "Zenith" whatever the process locale is.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base.casefold(), name.casefold()

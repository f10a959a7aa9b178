"""Map game-mode tags to activity types."""

from __future__ import annotations

from typing import Iterable, Optional

from .models import ActivityType

RAID_ACTIVITY_MODE = 4
DUNGEON_ACTIVITY_MODE = 82
STRIKE_ACTIVITY_MODE = 18
LOST_SECTOR_ACTIVITY_MODE = 87

MODE_ACTIVITY_TYPES: dict[int, ActivityType] = {
    RAID_ACTIVITY_MODE: ActivityType.RAID,
    DUNGEON_ACTIVITY_MODE: ActivityType.DUNGEON,
    STRIKE_ACTIVITY_MODE: ActivityType.STRIKE,
    LOST_SECTOR_ACTIVITY_MODE: ActivityType.LOST_SECTOR,
}


def classify_activity(modes: Optional[Iterable[int]]) -> Optional[ActivityType]:
    """Return the type of the first recognized mode tag, in list order.

    Records often carry several modes (a raid is also a generic PvE activity);
    the earliest recognized tag wins even if a more specific one follows.
    """
    if not modes:
        return None
    for mode in modes:
        activity_type = MODE_ACTIVITY_TYPES.get(mode)
        if activity_type is not None:
            return activity_type
    return None

"""Domain models for completed activity history."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class ActivityType(str, Enum):
    """Activity categories derived from game-mode tags."""

    RAID = "Raid"
    DUNGEON = "Dungeon"
    STRIKE = "Strike"
    LOST_SECTOR = "Lost Sector"


@dataclass(frozen=True, slots=True)
class CompletedActivity:
    """A single finished (or abandoned) play-through of an activity."""

    period: datetime
    instance_id: str
    completed: bool
    activity_duration: str
    duration_seconds: int
    activity_hash: int
    modes: tuple[int, ...] = ()
    completion_reason: int = 0
    started_from_beginning: Optional[bool] = None
    starting_phase_index: Optional[int] = None

    @property
    def period_utc(self) -> datetime:
        return as_utc(self.period)

    @property
    def is_fresh_start(self) -> Optional[bool]:
        """True for a fresh start, False for a checkpoint, None when unknown."""
        if self.started_from_beginning is not None:
            return self.started_from_beginning
        if self.starting_phase_index is not None:
            return self.starting_phase_index == 0
        return None


def as_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

"""Filter and sort settings consumed by the activity view."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class SortKey(str, Enum):
    TIME = "time"
    DURATION = "duration"
    ACTIVITY = "activity"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class TimeRange(str, Enum):
    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True, slots=True)
class FilterSettings:
    """Fully populated filter configuration.

    Defaults are applied by the preferences layer before the settings reach
    the filter, so every field here is required.
    """

    show_raids: bool
    show_dungeons: bool
    show_strikes: bool
    show_lost_sectors: bool
    show_completed: bool
    show_incomplete: bool
    show_fresh_start: bool
    show_checkpoint: bool
    min_duration_seconds: Optional[int]
    max_duration_seconds: Optional[int]
    specific_raids: Mapping[int, bool]
    specific_dungeons: Mapping[int, bool]

    def __post_init__(self) -> None:
        # Freeze the selection mappings so callers cannot mutate shared settings.
        object.__setattr__(
            self, "specific_raids", MappingProxyType(dict(self.specific_raids))
        )
        object.__setattr__(
            self, "specific_dungeons", MappingProxyType(dict(self.specific_dungeons))
        )

    @classmethod
    def show_everything(cls) -> "FilterSettings":
        return cls(
            show_raids=True,
            show_dungeons=True,
            show_strikes=True,
            show_lost_sectors=True,
            show_completed=True,
            show_incomplete=True,
            show_fresh_start=True,
            show_checkpoint=True,
            min_duration_seconds=None,
            max_duration_seconds=None,
            specific_raids={},
            specific_dungeons={},
        )


@dataclass(frozen=True, slots=True)
class SortSettings:
    sort_by: SortKey
    sort_order: SortOrder
    time_range: TimeRange

    @classmethod
    def from_values(cls, sort_by: str, sort_order: str, time_range: str) -> "SortSettings":
        """Build settings from raw strings, raising ValueError on unknown values."""
        return cls(
            sort_by=SortKey(sort_by),
            sort_order=SortOrder(sort_order),
            time_range=TimeRange(time_range),
        )

"""User preferences document and its conversion into view settings."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

from .config import FilterSettings, SortKey, SortOrder, SortSettings, TimeRange

logger = logging.getLogger(__name__)


class PreferencesError(ValueError):
    """Raised when a stored preferences document cannot be used."""


class _Document(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ColorPreferences(_Document):
    completed_dot_color: str = "#33ee33"
    incomplete_dot_color: str = "#ee3333"
    notification_background_color: str = "#12171c"
    text_background_color: str = "rgba(0, 0, 0, 0.7)"
    text_color: str = "#ffffff"
    map_background_color: str = "#12171c"


class FilterPreferences(_Document):
    show_raids: bool = True
    show_dungeons: bool = True
    show_strikes: bool = True
    show_lost_sectors: bool = True
    show_completed: bool = True
    show_incomplete: bool = True
    show_fresh_start: bool = True
    show_checkpoint: bool = True
    min_duration_seconds: Optional[int] = Field(default=None, ge=0)
    max_duration_seconds: Optional[int] = Field(default=None, ge=0)
    specific_raids: dict[int, bool] = Field(default_factory=dict)
    specific_dungeons: dict[int, bool] = Field(default_factory=dict)

    @field_validator("specific_raids", "specific_dungeons", mode="before")
    @classmethod
    def empty_selection_for_none(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_settings(self) -> FilterSettings:
        return FilterSettings(
            show_raids=self.show_raids,
            show_dungeons=self.show_dungeons,
            show_strikes=self.show_strikes,
            show_lost_sectors=self.show_lost_sectors,
            show_completed=self.show_completed,
            show_incomplete=self.show_incomplete,
            show_fresh_start=self.show_fresh_start,
            show_checkpoint=self.show_checkpoint,
            min_duration_seconds=self.min_duration_seconds,
            max_duration_seconds=self.max_duration_seconds,
            specific_raids=self.specific_raids,
            specific_dungeons=self.specific_dungeons,
        )


class SortPreferences(_Document):
    sort_by: SortKey = SortKey.TIME
    sort_order: SortOrder = SortOrder.DESC
    time_range: TimeRange = TimeRange.ALL

    @field_validator("sort_by", "sort_order", "time_range", mode="before")
    @classmethod
    def default_for_unknown(cls, value: Any, info: ValidationInfo) -> Any:
        enum_type = {"sort_by": SortKey, "sort_order": SortOrder, "time_range": TimeRange}[
            info.field_name
        ]
        try:
            return enum_type(value)
        except ValueError:
            default = cls.model_fields[info.field_name].default
            logger.warning(
                "Ignoring unknown %s %r; using %r", info.field_name, value, default.value
            )
            return default

    def to_settings(self) -> SortSettings:
        return SortSettings(
            sort_by=self.sort_by,
            sort_order=self.sort_order,
            time_range=self.time_range,
        )


class Preferences(_Document):
    enable_overlay: bool = False
    display_daily_clears: bool = True
    display_clear_notifications: bool = True
    display_milliseconds: bool = False
    colors: ColorPreferences = Field(default_factory=ColorPreferences)
    filters: FilterPreferences = Field(default_factory=FilterPreferences)
    sorting: SortPreferences = Field(default_factory=SortPreferences)

    def to_filter_settings(self) -> FilterSettings:
        return self.filters.to_settings()

    def to_sort_settings(self) -> SortSettings:
        return self.sorting.to_settings()

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def parse_preferences(payload: Any) -> Preferences:
    """Merge a (possibly partial) preferences document over the defaults."""
    if payload is None:
        return Preferences()
    try:
        return Preferences.model_validate(payload)
    except ValidationError as exc:
        raise PreferencesError(f"Invalid preferences: {exc}") from exc


def load_preferences(path: Path) -> Preferences:
    """Read preferences from disk, falling back to defaults if absent."""
    path = Path(path)
    if not path.exists():
        logger.info("No preferences at %s; using defaults.", path)
        return Preferences()
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise PreferencesError(f"Could not read preferences from {path}: {exc}") from exc
    return parse_preferences(payload)


def save_preferences(path: Path, preferences: Preferences) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(preferences.to_document(), indent=2), encoding="utf-8")
    logger.info("Saved preferences to %s", path)

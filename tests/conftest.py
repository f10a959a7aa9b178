"""Shared fixtures for building activity histories."""

from itertools import count

import pytest

from clearboard.config import FilterSettings
from clearboard.models import CompletedActivity

from factories import NOW, RAID, VOW_OF_THE_DISCIPLE


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_activity():
    ids = count(1)

    def _make(
        *,
        modes=(RAID,),
        activity_hash=VOW_OF_THE_DISCIPLE,
        completed=True,
        seconds=1800,
        period=NOW,
        fresh=None,
        phase=None,
        instance_id=None,
    ):
        return CompletedActivity(
            period=period,
            instance_id=instance_id or str(next(ids)),
            completed=completed,
            activity_duration=f"{seconds // 60}m {seconds % 60}s",
            duration_seconds=seconds,
            activity_hash=activity_hash,
            modes=tuple(modes),
            completion_reason=0 if completed else 2,
            started_from_beginning=fresh,
            starting_phase_index=phase,
        )

    return _make


@pytest.fixture
def show_all():
    return FilterSettings.show_everything()

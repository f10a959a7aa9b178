"""Tests for clearboard.filtering: each gate and their combination."""

from dataclasses import replace

import pytest

from clearboard.catalog import ActivityCatalog
from clearboard.config import FilterSettings
from clearboard.filtering import filter_activities

from factories import (
    DUALITY,
    DUNGEON,
    GARDEN_A,
    GARDEN_B,
    LAST_WISH,
    LOST_SECTOR,
    PROPHECY,
    RAID,
    STRIKE,
    VOW_OF_THE_DISCIPLE,
)


def settings(**overrides):
    return replace(FilterSettings.show_everything(), **overrides)


class TestTypeGate:
    def test_show_all_keeps_classifiable_and_drops_the_rest(self, make_activity, show_all):
        raid = make_activity(modes=[RAID])
        unknown = make_activity(modes=[5, 7])
        strike = make_activity(modes=[STRIKE], activity_hash=1)
        empty = make_activity(modes=[])
        sector = make_activity(modes=[LOST_SECTOR], activity_hash=2)
        dungeon = make_activity(modes=[DUNGEON], activity_hash=DUALITY)

        result = filter_activities([raid, unknown, strike, empty, sector, dungeon], show_all)

        assert result == [raid, strike, sector, dungeon]

    @pytest.mark.parametrize(
        "toggle, modes",
        [
            ("show_raids", [RAID]),
            ("show_dungeons", [DUNGEON]),
            ("show_strikes", [STRIKE]),
            ("show_lost_sectors", [LOST_SECTOR]),
        ],
    )
    def test_type_toggle_off_excludes(self, make_activity, toggle, modes):
        activity = make_activity(modes=modes)
        assert filter_activities([activity], settings(**{toggle: False})) == []
        assert filter_activities([activity], settings()) == [activity]

    def test_classification_uses_first_mode(self, make_activity):
        strike_first = make_activity(modes=[STRIKE, RAID])
        assert filter_activities([strike_first], settings(show_strikes=False)) == []
        assert filter_activities([strike_first], settings(show_raids=False)) == [strike_first]

    def test_input_is_not_mutated(self, make_activity, show_all):
        history = [make_activity(), make_activity(modes=[9])]
        snapshot = list(history)
        filter_activities(history, show_all)
        assert history == snapshot

    def test_order_is_preserved(self, make_activity):
        history = [
            make_activity(seconds=seconds, completed=seconds % 2 == 0)
            for seconds in (900, 301, 1200, 40, 77, 3600)
        ]
        result = filter_activities(history, settings(show_incomplete=False))
        assert result == [history[0], history[2], history[3], history[5]]


class TestSpecificRaids:
    def test_selection_is_name_canonical(self, make_activity):
        garden_a = make_activity(activity_hash=GARDEN_A)
        garden_b = make_activity(activity_hash=GARDEN_B)
        vow = make_activity(activity_hash=VOW_OF_THE_DISCIPLE)

        result = filter_activities(
            [garden_a, garden_b, vow], settings(specific_raids={GARDEN_A: True})
        )

        assert result == [garden_a, garden_b]

    def test_selecting_the_other_hash_works_too(self, make_activity):
        garden_a = make_activity(activity_hash=GARDEN_A)
        result = filter_activities([garden_a], settings(specific_raids={GARDEN_B: True}))
        assert result == [garden_a]

    @pytest.mark.parametrize("selection", [{}, {GARDEN_A: False, LAST_WISH: False}])
    def test_empty_or_all_false_selection_shows_every_raid(self, make_activity, selection):
        history = [make_activity(activity_hash=GARDEN_A), make_activity(activity_hash=LAST_WISH)]
        assert filter_activities(history, settings(specific_raids=selection)) == history

    def test_selection_cannot_resurrect_disabled_type(self, make_activity):
        raid = make_activity(activity_hash=LAST_WISH)
        result = filter_activities(
            [raid], settings(show_raids=False, specific_raids={LAST_WISH: True})
        )
        assert result == []

    def test_uncatalogued_raid_matches_by_hash(self, make_activity):
        known = make_activity(activity_hash=123)
        other = make_activity(activity_hash=456)
        result = filter_activities([known, other], settings(specific_raids={123: True}))
        assert result == [known]

    def test_raid_selection_does_not_narrow_other_types(self, make_activity):
        strike = make_activity(modes=[STRIKE], activity_hash=1)
        dungeon = make_activity(modes=[DUNGEON], activity_hash=DUALITY)
        result = filter_activities([strike, dungeon], settings(specific_raids={LAST_WISH: True}))
        assert result == [strike, dungeon]

    def test_custom_catalog(self, make_activity):
        catalog = ActivityCatalog(raids={1: "Alpha", 2: "Alpha", 3: "Beta"}, dungeons={})
        history = [make_activity(activity_hash=h) for h in (1, 2, 3)]
        result = filter_activities(history, settings(specific_raids={2: True}), catalog)
        assert result == history[:2]


class TestSpecificDungeons:
    def test_direct_hash_match(self, make_activity):
        duality = make_activity(modes=[DUNGEON], activity_hash=DUALITY)
        prophecy = make_activity(modes=[DUNGEON], activity_hash=PROPHECY)
        result = filter_activities(
            [duality, prophecy], settings(specific_dungeons={PROPHECY: True, DUALITY: False})
        )
        assert result == [prophecy]

    def test_all_false_selection_shows_every_dungeon(self, make_activity):
        duality = make_activity(modes=[DUNGEON], activity_hash=DUALITY)
        result = filter_activities([duality], settings(specific_dungeons={PROPHECY: False}))
        assert result == [duality]


class TestCompletionMethod:
    def test_started_from_beginning_flag(self, make_activity):
        fresh = make_activity(fresh=True)
        checkpoint = make_activity(fresh=False)
        history = [fresh, checkpoint]
        assert filter_activities(history, settings(show_fresh_start=False)) == [checkpoint]
        assert filter_activities(history, settings(show_checkpoint=False)) == [fresh]

    def test_flag_takes_precedence_over_phase_index(self, make_activity):
        activity = make_activity(fresh=True, phase=3)
        assert filter_activities([activity], settings(show_checkpoint=False)) == [activity]
        assert filter_activities([activity], settings(show_fresh_start=False)) == []

    def test_phase_index_fallback(self, make_activity):
        fresh = make_activity(phase=0)
        checkpoint = make_activity(phase=2)
        history = [fresh, checkpoint]
        assert filter_activities(history, settings(show_fresh_start=False)) == [checkpoint]
        assert filter_activities(history, settings(show_checkpoint=False)) == [fresh]

    def test_unknown_method_is_exempt(self, make_activity):
        activity = make_activity()
        result = filter_activities(
            [activity], settings(show_fresh_start=False, show_checkpoint=False)
        )
        assert result == [activity]


class TestCompletionStatusAndDuration:
    def test_completion_status(self, make_activity):
        done = make_activity(completed=True)
        failed = make_activity(completed=False)
        history = [done, failed]
        assert filter_activities(history, settings(show_completed=False)) == [failed]
        assert filter_activities(history, settings(show_incomplete=False)) == [done]
        assert filter_activities(
            history, settings(show_completed=False, show_incomplete=False)
        ) == []

    def test_duration_bounds_are_inclusive(self, make_activity):
        history = [make_activity(seconds=s) for s in (599, 600, 900, 1200, 1201)]
        result = filter_activities(
            history, settings(min_duration_seconds=600, max_duration_seconds=1200)
        )
        assert [a.duration_seconds for a in result] == [600, 900, 1200]

    def test_zero_minimum_is_a_real_bound(self, make_activity):
        history = [make_activity(seconds=0), make_activity(seconds=10)]
        assert filter_activities(history, settings(max_duration_seconds=0)) == history[:1]
        assert filter_activities(history, settings(min_duration_seconds=0)) == history


class TestEndToEnd:
    @pytest.fixture
    def records(self, make_activity):
        r1 = make_activity(
            modes=[RAID], activity_hash=VOW_OF_THE_DISCIPLE, completed=True,
            seconds=3000, fresh=True,
        )
        r2 = make_activity(
            modes=[DUNGEON], activity_hash=DUALITY, completed=False,
            seconds=500, fresh=False,
        )
        r3 = make_activity(modes=[STRIKE], activity_hash=1, completed=True, seconds=200)
        return r1, r2, r3

    def test_minimum_duration_excludes_short_strike(self, records):
        r1, r2, r3 = records
        config = settings(
            show_dungeons=False, show_incomplete=False, min_duration_seconds=1000
        )
        assert filter_activities([r1, r2, r3], config) == [r1]

    def test_without_minimum_keeps_raid_and_strike(self, records):
        r1, r2, r3 = records
        config = settings(show_dungeons=False, show_incomplete=False)
        assert filter_activities([r1, r2, r3], config) == [r1, r3]


class TestFilterSettings:
    def test_selection_mappings_are_required(self):
        with pytest.raises(TypeError):
            FilterSettings(
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
            )

    def test_show_everything_has_empty_selections(self):
        config = FilterSettings.show_everything()
        assert dict(config.specific_raids) == {}
        assert dict(config.specific_dungeons) == {}

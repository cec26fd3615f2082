import pytest

from title_race_core import Event, SeasonSchedule, points_for
from title_race_core.schedule import bonus_for


def test_points_tables_by_format():
    race = Event("Brazil")
    sprint = Event("Qatar Sprint", short=True)
    assert [points_for(race, r) for r in range(1, 12)] == [25, 18, 15, 12, 10, 8, 6, 4, 2, 1, 0]
    assert [points_for(sprint, r) for r in range(1, 10)] == [8, 7, 6, 5, 4, 3, 2, 1, 0]
    assert points_for(race, 0) == 0


def test_event_ceilings_and_selectable_range():
    assert Event("Brazil").max_points == 26
    assert Event("Brazil Sprint", short=True).max_points == 8
    assert Event("Brazil").max_selectable_position == 10
    assert Event("Brazil Sprint", short=True).max_selectable_position == 8


def test_bonus_only_for_flagged_top_ten_at_standard_event():
    race = Event("Qatar")
    assert bonus_for(race, 10, True) == 1
    assert bonus_for(race, 11, True) == 0
    assert bonus_for(race, 1, False) == 0
    assert bonus_for(Event("Qatar Sprint", short=True), 1, True) == 0


def test_schedule_keeps_order_and_lookups():
    schedule = SeasonSchedule(
        [
            Event("Brazil Sprint", short=True, locked=True),
            Event("Brazil"),
            Event("Las Vegas"),
        ]
    )
    assert [e.name for e in schedule.events()] == ["Brazil Sprint", "Brazil", "Las Vegas"]
    assert len(schedule) == 3
    assert "Brazil" in schedule
    assert "Monaco" not in schedule
    assert schedule.get("Las Vegas") == Event("Las Vegas")
    assert schedule.get("Monaco") is None
    assert [e.name for e in schedule.locked_events()] == ["Brazil Sprint"]
    assert schedule.total_points() == 8 + 26 + 26


def test_schedule_rejects_duplicate_names():
    with pytest.raises(ValueError):
        SeasonSchedule([Event("Qatar"), Event("Qatar", short=True)])

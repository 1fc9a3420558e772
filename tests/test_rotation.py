import pytest

from programme.errors import ValidationError
from programme.models import RotationConfig, Subject
from programme.rotation import (
    group_progress, plan_group_rotation, plan_station_rotation, workshop_groups,
)

from conftest import make_rotation, make_stations

GROUPS = "ABCDEF"


def assert_partition(schedule):
    for rnd in schedule.rounds:
        placed = sorted(rnd.groups)
        assert placed == sorted(schedule.groups), f"round {rnd.index}: {placed}"
        for session in rnd.sessions:
            assert session.groups


class TestGroupRotation:
    def test_four_by_four(self):
        schedule = plan_group_rotation(make_rotation(4))
        assert len(schedule.rounds) == 4
        first = schedule.round(1)
        assert [s.label for s in first.sessions] == ["A", "B", "C", "D"]
        second = schedule.round(2)
        assert second.session_for("Workshop 1").label == "B"
        assert second.session_for("Workshop 4").label == "A"

    def test_every_group_visits_every_workshop(self):
        schedule = plan_group_rotation(make_rotation(4))
        for name in schedule.sub_activities:
            assert schedule.groups_for(name) == ["A", "B", "C", "D"]

    @pytest.mark.parametrize("n_workshops", range(1, 9))
    @pytest.mark.parametrize("n_groups", range(1, 7))
    def test_partition(self, n_workshops, n_groups):
        config = make_rotation(n_workshops, rounds=6, groups=tuple(GROUPS[:n_groups]))
        assert_partition(plan_group_rotation(config))

    def test_fewer_workshops_combines_groups(self):
        schedule = plan_group_rotation(make_rotation(2, rounds=2))
        labels = [s.label for s in schedule.round(1).sessions]
        assert labels == ["A+B", "C+D"]

    def test_deterministic(self):
        config = make_rotation(3, rounds=5, groups=tuple("ABCDE"))
        assert plan_group_rotation(config) == plan_group_rotation(config)

    def test_blank_and_repeated_names_dropped(self):
        config = RotationConfig(sub_activity_names=("Airway", " ", "Airway", "ECG"), rounds=2)
        assert plan_group_rotation(config).sub_activities == ("Airway", "ECG")

    def test_no_workshops_gives_empty_schedule(self):
        schedule = plan_group_rotation(RotationConfig(sub_activity_names=(), rounds=4))
        assert schedule.rounds == ()

    def test_time_windows(self):
        schedule = plan_group_rotation(make_rotation(4, start_time="09:00", round_duration=40))
        assert [r.time_window for r in schedule.rounds] == [
            "09:00-09:40", "09:40-10:20", "10:20-11:00", "11:00-11:40"]

    def test_rejects_zero_rounds(self):
        with pytest.raises(ValidationError):
            plan_group_rotation(RotationConfig(("Airway",), rounds=0))

    def test_rejects_duplicate_groups(self):
        with pytest.raises(ValidationError) as exc:
            plan_group_rotation(make_rotation(2, groups=("A", "A")))
        assert "unique" in str(exc.value)

    def test_round_lookup(self):
        with pytest.raises(KeyError):
            plan_group_rotation(make_rotation(2)).round(9)


class TestStationRotation:
    def test_latin_square(self):
        schedule = plan_station_rotation(make_stations(4, 4))
        for i in range(4):
            station = f"Station {i + 1}"
            assert schedule.groups_for(station) == ["A", "B", "C", "D"]
        assert schedule.round(3).session_for("Station 1").label == "C"

    def test_two_stations_pair_groups(self):
        schedule = plan_station_rotation(make_stations(2, 4, station_names=("Sim", "Skills")))
        assert schedule.round(1).session_for("Sim").label == "A+B"
        assert schedule.round(1).session_for("Skills").label == "C+D"
        assert schedule.round(2).session_for("Sim").label == "C+D"
        assert schedule.round(2).session_for("Skills").label == "A+B"
        assert schedule.round(3).session_for("Sim").label == "A+B"

    @pytest.mark.parametrize("n_stations", range(1, 9))
    @pytest.mark.parametrize("n_groups", range(1, 7))
    def test_partition(self, n_stations, n_groups):
        config = make_stations(n_stations, 6, groups=tuple(GROUPS[:n_groups]))
        assert_partition(plan_station_rotation(config))

    def test_unnamed_stations_get_numbered(self):
        schedule = plan_station_rotation(make_stations(3, 1, station_names=("Sim", "")))
        assert schedule.sub_activities == ("Sim", "Station 2", "Station 3")

    def test_zero_stations_or_slots(self):
        assert plan_station_rotation(make_stations(0, 4)).rounds == ()
        assert plan_station_rotation(make_stations(4, 0)).rounds == ()

    def test_rejects_duplicate_station_names(self):
        with pytest.raises(ValidationError):
            plan_station_rotation(make_stations(2, 2, station_names=("Sim", "Sim")))


def _rotation_subject(name, schedule, **kw):
    return Subject(name=name, type="workshop", is_workshop_rotation=True,
                   rotation_schedule=schedule, **kw)


class TestStoredSchedules:
    def test_workshop_groups(self):
        schedule = plan_group_rotation(make_rotation(2, rounds=2)).to_dict()
        assert workshop_groups(_rotation_subject("Workshop 1", schedule)) == ["A", "B", "C", "D"]

    def test_legacy_plus_joined_groups(self):
        legacy = [
            {"rotation": 1, "group": "A+B"},
            {"rotation": 2, "group": "C+D"},
        ]
        assert workshop_groups(_rotation_subject("Airway", legacy)) == ["A", "B", "C", "D"]

    def test_not_a_rotation(self):
        assert workshop_groups(Subject(name="Lecture")) == []

    def test_group_progress(self):
        schedule = plan_group_rotation(make_rotation(4, rounds=1)).to_dict()
        subjects = [
            _rotation_subject("Workshop 1", schedule),
            _rotation_subject("Workshop 2", schedule),
            _rotation_subject("Workshop 3", schedule, deleted=True),
        ]
        progress = group_progress(subjects, ["A", "B", "C", "D", "E"])
        assert progress["A"] == {"Workshop 1"}
        assert progress["B"] == {"Workshop 2"}
        assert progress["C"] == set()
        assert progress["E"] == set()

import pytest

from programme.errors import ValidationError
from programme.rotation import workshop_groups
from programme.subjects import (
    derived_duration, expand_workshop_subjects, plan_subject, stored_assessment_slots,
    with_derived_duration, with_fixed_name,
)

from conftest import ASSESSMENT, ROTATION, make_subject


def test_derived_durations():
    assert derived_duration(make_subject(type="assessment", number_of_time_slots=4, time_slot_duration=30,
                                         lead_assist_duration=40)) == 140
    assert derived_duration(make_subject(type="practical-session", number_of_time_slots=3,
                                         time_slot_duration=30)) == 90
    assert derived_duration(make_subject()) is None


def test_typed_duration_wins():
    subject = make_subject(type="scenario-practice", duration=60)
    assert with_derived_duration(subject) is subject
    filled = with_derived_duration(make_subject(type="scenario-practice", duration=None))
    assert filled.duration == 120


def test_fixed_names():
    assert with_fixed_name(make_subject(type="lunch", name="")).name == "Lunch"
    assert with_fixed_name(make_subject(type="lunch", name="Working lunch")).name == "Working lunch"
    assert with_fixed_name(make_subject(name="")).name == ""


def test_plan_workshop_rotation():
    planned = plan_subject(make_subject(**ROTATION))
    assert planned.total_rotations == 4
    assert [r["round"] for r in planned.rotation_schedule] == [1, 2, 3, 4]
    assert planned.rotation_schedule[0]["time_window"] == "09:00-09:40"


def test_expand_workshop_rotation():
    subjects = expand_workshop_subjects(make_subject(**ROTATION))
    assert [s.name for s in subjects] == ["Airway", "ECG", "IV Access", "Splinting"]
    assert [s.workshop_index for s in subjects] == [1, 2, 3, 4]
    assert {s.total_workshops for s in subjects} == {4}
    assert subjects[1].description == "Workshop: ECG"
    for s in subjects:
        assert workshop_groups(s) == ["A", "B", "C", "D"]


def test_expand_with_course_groups():
    subjects = expand_workshop_subjects(make_subject(**ROTATION), ["Red", "Blue"])
    assert workshop_groups(subjects[0]) == ["Blue", "Red"]


def test_plan_assessment():
    planned = plan_subject(make_subject(**ASSESSMENT))
    slots = stored_assessment_slots(planned)
    assert len(slots) == 4
    assert slots[0].start_time == "09:00"
    assert slots[0].stations[0].station_name == "Resus"


def test_plan_station_session():
    planned = plan_subject(make_subject(type="practical-session", number_of_stations=2, number_of_time_slots=2,
                                        time_slot_duration=30, station_names=["Sim", "Skills"]))
    assert planned.rotation_schedule[0]["sessions"][0] == {"sub_activity": "Sim", "groups": ["A", "B"]}


def test_plan_plain_session_unchanged():
    subject = make_subject()
    assert plan_subject(subject) is subject


def test_plan_rejects_bad_assessment():
    with pytest.raises(ValidationError):
        plan_subject(make_subject(**dict(ASSESSMENT, number_of_time_slots=3)))

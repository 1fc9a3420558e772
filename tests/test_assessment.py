from collections import Counter

import pytest

from programme.assessment import (
    derive_candidate_assignments, derive_candidate_pairs, plan_assessment_slots,
)
from programme.errors import ValidationError
from programme.models import AssessmentTimeSlot, Role

from conftest import make_assessment


def seats(slot):
    return sorted(c.candidate_number for st in slot.stations for c in st.candidate_assignments)


class TestSlots:
    def test_each_slot_seats_every_candidate_once(self):
        slots = plan_assessment_slots(make_assessment())
        assert len(slots) == 4
        for slot in slots:
            assert seats(slot) == list(range(1, 9))

    def test_first_slot_pairs(self):
        first = plan_assessment_slots(make_assessment())[0]
        pairs = [tuple(c.candidate_number for c in st.candidate_assignments) for st in first.stations]
        assert pairs == [(1, 2), (3, 4), (5, 6), (7, 8)]

    def test_pairs_rotate_through_every_station(self):
        slots = plan_assessment_slots(make_assessment())
        seen = Counter()
        for slot in slots:
            for st in slot.stations:
                first = st.candidate_assignments[0].candidate_number
                seen[(first, st.station_index)] += 1
        assert len(seen) == 16
        assert set(seen.values()) == {1}

    def test_station_offsets(self):
        slots = plan_assessment_slots(make_assessment())
        station1 = [slot.stations[0].candidate_assignments[0].candidate_number for slot in slots]
        assert station1 == [1, 7, 5, 3]

    def test_roles_by_phase(self):
        slots = plan_assessment_slots(make_assessment())
        assert [slot.phase for slot in slots] == [1, 1, 2, 2]
        roles = [tuple(c.role for c in slot.stations[0].candidate_assignments) for slot in slots]
        assert roles == [
            (Role.LEAD, Role.ASSIST),
            (Role.ASSIST, Role.LEAD),
            (Role.ASSESSED, Role.OBSERVE),
            (Role.OBSERVE, Role.ASSESSED),
        ]

    def test_halves_swap_with_concurrent_activity(self):
        slots = plan_assessment_slots(make_assessment())
        assert [s.scenario_range for s in slots] == ["1-8", "1-8", "9-16", "9-16"]
        assert [s.concurrent_activity.candidate_range for s in slots] == ["9-16", "9-16", "1-8", "1-8"]
        assert slots[0].concurrent_activity.name == "Case Review"

    def test_start_times_follow_phase_durations(self):
        slots = plan_assessment_slots(make_assessment(
            start_time="09:00", lead_assist_duration=30, assessed_observe_duration=20))
        assert [s.start_time for s in slots] == ["09:00", "09:30", "10:00", "10:20"]
        assert slots[3].time_window == "10:20-10:40"
        assert [s.duration for s in slots] == [30, 30, 20, 20]

    def test_without_start_time(self):
        slots = plan_assessment_slots(make_assessment())
        assert slots[1].start_time == "Time Slot 2"
        assert slots[1].time_window == "Time Slot 2"

    def test_station_names(self):
        slots = plan_assessment_slots(make_assessment(
            number_of_stations=2, station_names=("Resus", "")))
        assert [st.station_name for st in slots[0].stations] == ["Resus", "Station 2"]

    def test_custom_candidate_ranges(self):
        slots = plan_assessment_slots(make_assessment(
            number_of_stations=2, candidate_range_first="21-24", candidate_range_second="25-28"))
        assert slots[0].scenario_range == "21-24"
        assert slots[2].concurrent_activity.candidate_range == "21-24"

    @pytest.mark.parametrize("n_stations", range(2, 9))
    @pytest.mark.parametrize("n_slots", [2, 4, 6])
    def test_every_slot_seats_each_candidate_once(self, n_stations, n_slots):
        config = make_assessment(number_of_stations=n_stations, number_of_time_slots=n_slots)
        slots = plan_assessment_slots(config)
        assert len(slots) == n_slots
        for slot in slots:
            assert seats(slot) == list(range(1, 2 * n_stations + 1))
        assignments = derive_candidate_assignments(slots)
        assert len(assignments) == 2 * n_stations * n_slots

    def test_stored_round_trip(self):
        slot = plan_assessment_slots(make_assessment())[2]
        assert AssessmentTimeSlot.from_dict(slot.to_dict()) == slot


class TestRejects:
    def test_zero_stations_is_empty(self):
        assert plan_assessment_slots(make_assessment(number_of_stations=0)) == []

    def test_missing_concurrent_activity(self):
        with pytest.raises(ValidationError) as exc:
            plan_assessment_slots(make_assessment(concurrent_activity_name="  "))
        assert "concurrent activity" in str(exc.value)

    def test_odd_slot_count(self):
        with pytest.raises(ValidationError):
            plan_assessment_slots(make_assessment(number_of_time_slots=3))

    def test_overlapping_ranges(self):
        with pytest.raises(ValidationError) as exc:
            plan_assessment_slots(make_assessment(candidate_range_first="1-8", candidate_range_second="5-12"))
        assert "overlap" in str(exc.value)

    def test_range_of_wrong_size(self):
        with pytest.raises(ValidationError):
            plan_assessment_slots(make_assessment(candidate_range_first="1-6"))


class TestDerived:
    def test_candidate_pairs(self):
        pairs = derive_candidate_pairs(plan_assessment_slots(make_assessment(start_time="13:00")))
        assert len(pairs) == 16
        first = pairs[0]
        assert (first.time_slot, first.station, first.candidate1, first.candidate2) == (1, 1, 1, 2)
        assert first.start_time == "13:00"

    def test_candidate_assignments(self):
        assignments = derive_candidate_assignments(plan_assessment_slots(make_assessment()))
        assert len(assignments) == 8 * 4
        for slot in range(1, 5):
            numbers = sorted(a.candidate_number for a in assignments if a.time_slot == slot)
            assert numbers == list(range(1, 9))

    def test_absolute_candidate_follows_phase(self):
        assignments = derive_candidate_assignments(plan_assessment_slots(make_assessment()))
        seat1 = [a.absolute_candidate for a in assignments if a.candidate_number == 1]
        assert seat1 == [1, 1, 9, 9]
        cohort = {a.absolute_candidate for a in assignments}
        assert cohort == set(range(1, 17))

import pytest

from programme.timeslots import (
    add_minutes, compute_slot_window, format_candidate_range, format_hhmm,
    minutes_between, parse_candidate_range, parse_hhmm,
)


class TestClock:
    def test_parse(self):
        assert parse_hhmm("09:30") == 570
        assert parse_hhmm("9:05") == 545
        assert parse_hhmm("13:00:00") == 780

    @pytest.mark.parametrize("value", [None, "", "930", "25:00", "10:60", "ab:cd", 930])
    def test_parse_rejects(self, value):
        assert parse_hhmm(value) is None

    def test_format_wraps_past_midnight(self):
        assert format_hhmm(23 * 60 + 30 + 45) == "00:15"

    def test_add_and_between(self):
        assert add_minutes("09:00", 90) == "10:30"
        assert add_minutes("nope", 10) is None
        assert minutes_between("10:00", "09:30") == -30


class TestSlotWindow:
    def test_fourth_slot(self):
        assert compute_slot_window("09:00", 3, 30) == "10:30-11:00"

    def test_first_slot(self):
        assert compute_slot_window("13:15", 0, 45) == "13:15-14:00"

    def test_missing_start_falls_back_to_label(self):
        assert compute_slot_window(None, 2, 30) == "Time Slot 3"
        assert compute_slot_window("", 0, 30) == "Time Slot 1"

    def test_bad_duration_falls_back_to_label(self):
        assert compute_slot_window("09:00", 1, 0) == "Time Slot 2"
        assert compute_slot_window("09:00", 1, None) == "Time Slot 2"


class TestCandidateRange:
    def test_parse(self):
        assert list(parse_candidate_range("9-16")) == list(range(9, 17))
        assert list(parse_candidate_range(" 5 ")) == [5]

    @pytest.mark.parametrize("value", ["", "a-b", "8-1", "0-4"])
    def test_parse_rejects(self, value):
        with pytest.raises(ValueError):
            parse_candidate_range(value)

    def test_format(self):
        assert format_candidate_range(range(1, 9)) == "1-8"

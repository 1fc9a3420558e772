"""
Clock arithmetic for programme time slots.

Times are "HH:MM" strings on a 24-hour clock. Nothing here knows about dates:
slot windows that run past midnight simply wrap around.
"""

from typing import Optional

MINUTES_PER_DAY = 24 * 60


def parse_hhmm(value) -> Optional[int]:
    """Return minutes after midnight for "HH:MM" (or "H:MM", "HH:MM:SS"), else None."""
    if not isinstance(value, str):
        return None
    parts = value.strip().split(":")
    if len(parts) < 2:
        return None
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        return None
    return hours * 60 + minutes


def format_hhmm(minutes: int) -> str:
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def add_minutes(start_time: str, minutes: int) -> Optional[str]:
    start = parse_hhmm(start_time)
    if start is None:
        return None
    return format_hhmm(start + minutes)


def minutes_between(start_time: str, end_time: str) -> Optional[int]:
    """Signed minutes from start_time to end_time, or None if either is unparseable."""
    start, end = parse_hhmm(start_time), parse_hhmm(end_time)
    if start is None or end is None:
        return None
    return end - start


def _valid_duration(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def compute_slot_window(start_time, slot_index: int, slot_duration_minutes) -> str:
    """
    Window of the slot_index-th slot (0-based) of slot_duration_minutes each,
    counted from start_time, e.g. ("09:00", 3, 30) -> "10:30-11:00".

    Falls back to a positional label ("Time Slot 4") when the start time or
    duration is missing or unusable; the form calls this while it is still
    being filled in.
    """
    start = parse_hhmm(start_time)
    if start is None or not _valid_duration(slot_duration_minutes):
        return f"Time Slot {slot_index + 1}"
    slot_start = start + slot_index * slot_duration_minutes
    return f"{format_hhmm(slot_start)}-{format_hhmm(slot_start + slot_duration_minutes)}"


def window_from_offset(start_time, offset_minutes: int, duration_minutes, slot_index: int) -> str:
    """Like compute_slot_window, for slots of unequal length (offset already summed)."""
    start = parse_hhmm(start_time)
    if start is None or not _valid_duration(duration_minutes):
        return f"Time Slot {slot_index + 1}"
    slot_start = start + offset_minutes
    return f"{format_hhmm(slot_start)}-{format_hhmm(slot_start + duration_minutes)}"


def parse_candidate_range(value: str) -> range:
    """Parse "1-8" (or a single "5") into a range of candidate numbers."""
    text = (value or "").strip()
    if not text:
        raise ValueError("Candidate range is empty")
    first, sep, last = text.partition("-")
    try:
        lo = int(first)
        hi = int(last) if sep else lo
    except ValueError as exc:
        raise ValueError(f"Candidate range '{value}' must look like '1-8'") from exc
    if lo < 1 or hi < lo:
        raise ValueError(f"Candidate range '{value}' is empty or starts below 1")
    return range(lo, hi + 1)


def format_candidate_range(numbers: range) -> str:
    return f"{numbers.start}-{numbers.stop - 1}"

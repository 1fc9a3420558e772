"""
Pre-planning validation.

Every check returns human-readable messages; an empty list means the subject
(or planner configuration) may go ahead. Messages that begin with "Warning:"
flag something suspicious that is still allowed.
"""

from typing import Iterable, List, Optional, Tuple, Union

from .catalogue import PRACTICAL_SESSION, STATION_TYPES, SUBJECT_TYPES
from .configs import assessment_config_from_subject
from .models import AssessmentConfig, RotationConfig, StationConfig, Subject
from .timeslots import minutes_between, parse_hhmm

WARNING = "Warning:"

REQUIRED_FIELDS = [
    ("name", "Name"),
    ("type", "Type"),
    ("start_time", "Start time"),
    ("end_time", "End time"),
    ("duration", "Duration"),
    ("day", "Day"),
]

SubjectLike = Union[Subject, dict]


def blocking_violations(messages: Iterable[str]) -> List[str]:
    """Drop the non-fatal warnings."""
    return [m for m in messages if not m.startswith(WARNING)]


def _as_subject(value: SubjectLike) -> Subject:
    return value if isinstance(value, Subject) else Subject.from_dict(value)


def _is_count(value, minimum: int = 0) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= minimum


def _duplicates(names: Iterable[str]) -> List[str]:
    seen, dupes = set(), []
    for name in names:
        if name in seen and name not in dupes:
            dupes.append(name)
        seen.add(name)
    return dupes


def _group_violations(groups) -> List[str]:
    violations = []
    if not groups:
        violations.append("At least one group is required")
    dupes = _duplicates(groups)
    if dupes:
        violations.append(f"Group names must be unique (repeated: {', '.join(dupes)})")
    return violations


# ---------------------------------------------------------------------------
# Planner configurations
# ---------------------------------------------------------------------------

def validate_rotation_config(config: RotationConfig) -> List[str]:
    violations = _group_violations(config.groups)
    if not _is_count(config.rounds, 1):
        violations.append("Number of rotations must be at least 1")
    return violations


def validate_station_config(config: StationConfig) -> List[str]:
    violations = _group_violations(config.groups)
    if not _is_count(config.number_of_stations):
        violations.append("Number of stations must be a whole number")
    if not _is_count(config.number_of_time_slots):
        violations.append("Number of time slots must be a whole number")
    named = [n.strip() for n in config.station_names if n and n.strip()]
    dupes = _duplicates(named)
    if dupes:
        violations.append(f"Station names must be unique (repeated: {', '.join(dupes)})")
    return violations


def validate_assessment_config(config: AssessmentConfig) -> List[str]:
    violations = []
    stations, slots = config.number_of_stations, config.number_of_time_slots
    if not _is_count(stations, 2):
        violations.append("Assessment needs at least 2 stations")
    if not _is_count(slots, 2):
        violations.append("Assessment needs at least 2 time slots")
    elif slots % 2:
        violations.append(
            f"Assessment time slots must split into two equal phases ({slots} is odd)")
    if not _is_count(config.lead_assist_duration, 1):
        violations.append("Lead/Assist slot duration must be a positive number of minutes")
    if not _is_count(config.assessed_observe_duration, 1):
        violations.append("Assessed/Observe slot duration must be a positive number of minutes")
    if not (config.concurrent_activity_name or "").strip():
        violations.append("Assessment requires a concurrent activity name")

    named = [n.strip() for n in config.station_names if n and n.strip()]
    dupes = _duplicates(named)
    if dupes:
        violations.append(f"Station names must be unique (repeated: {', '.join(dupes)})")

    if _is_count(stations, 2):
        violations.extend(_candidate_range_violations(config))
    return violations


def _candidate_range_violations(config: AssessmentConfig) -> List[str]:
    violations = []
    ranges = []
    for label, getter in (("first", config.first_range), ("second", config.second_range)):
        try:
            numbers = getter()
        except ValueError as exc:
            violations.append(str(exc))
            continue
        if len(numbers) != config.total_candidates:
            violations.append(
                f"The {label} candidate range {numbers.start}-{numbers.stop - 1} must hold "
                f"{config.total_candidates} candidates (two per station)")
        ranges.append(numbers)
    if len(ranges) == 2 and set(ranges[0]) & set(ranges[1]):
        violations.append("Candidate ranges overlap: a candidate cannot be assessed "
                          "and at the concurrent activity at the same time")
    return violations


# ---------------------------------------------------------------------------
# Subjects
# ---------------------------------------------------------------------------

def _window(subject: Subject):
    return parse_hhmm(subject.start_time), parse_hhmm(subject.end_time)


def _window_label(subject: Subject) -> str:
    return f"{subject.start_time}-{subject.end_time}"


def _check_required(subject: Subject) -> List[str]:
    violations = []
    for attr, label in REQUIRED_FIELDS:
        value = getattr(subject, attr)
        if value is None or (isinstance(value, str) and not value.strip()):
            violations.append(f"{label} is required")
    if subject.type and subject.type not in SUBJECT_TYPES:
        violations.append(f"Unknown subject type '{subject.type}'")
    return violations


def _check_times(subject: Subject) -> Tuple[List[str], Optional[int]]:
    """Returns (violations, window length in minutes or None)."""
    violations = []
    start, end = _window(subject)
    if subject.start_time and start is None:
        violations.append(f"Start time '{subject.start_time}' is not a valid HH:MM time")
    if subject.end_time and end is None:
        violations.append(f"End time '{subject.end_time}' is not a valid HH:MM time")

    window = None
    if start is not None and end is not None:
        length = minutes_between(subject.start_time, subject.end_time)
        if length < 0:
            violations.append(
                f"End time {subject.end_time} must be after start time {subject.start_time} "
                f"(it ends before it starts)")
        elif length == 0:
            violations.append(
                f"End time {subject.end_time} must be after start time {subject.start_time}")
        else:
            window = length

    if subject.duration is not None:
        if not _is_count(subject.duration, 1):
            violations.append("Duration must be a positive number of minutes")
        elif window is not None and subject.duration != window:
            violations.append(
                f"Duration {subject.duration} minutes does not match the "
                f"{window}-minute window {_window_label(subject)}")
    return violations, window


def _check_workshop_rotation(subject: Subject, window: Optional[int]) -> List[str]:
    violations = []
    names = [n.strip() for n in subject.selected_workshop_subjects or [] if n and n.strip()]
    if not names:
        violations.append("Select at least one workshop subject")
    elif len(names) != subject.number_of_workshops:
        violations.append(
            f"All {subject.number_of_workshops} workshop slots must be filled "
            f"({len(names)} selected)")
    dupes = _duplicates(names)
    if dupes:
        violations.append(f"Workshop subjects must be different (repeated: {', '.join(dupes)})")
    if not _is_count(subject.number_of_rotations, 1):
        violations.append("Number of rotations must be at least 1")
    if not _is_count(subject.workshop_duration, 1):
        violations.append("Workshop duration must be a positive number of minutes")
    elif window is not None and _is_count(subject.number_of_rotations, 1):
        needed = subject.number_of_rotations * subject.workshop_duration
        if needed > window:
            violations.append(
                f"{subject.number_of_rotations} rotations of {subject.workshop_duration} minutes "
                f"need {needed} minutes but the window is {window}")
    return violations


def _check_station_names(subject: Subject) -> List[str]:
    violations = []
    names = list(subject.station_names or [])[:max(subject.number_of_stations, 0)]
    filled = [n.strip() for n in names if n and n.strip()]
    if len(filled) < subject.number_of_stations:
        violations.append(f"All {subject.number_of_stations} station names must be filled")
    dupes = _duplicates(filled)
    if dupes:
        violations.append(f"Station names must be unique (repeated: {', '.join(dupes)})")
    return violations


def _check_station_session(subject: Subject, window: Optional[int]) -> List[str]:
    violations = []
    if not _is_count(subject.number_of_stations, 1):
        violations.append("At least one station is required")
    if not _is_count(subject.number_of_time_slots, 1):
        violations.append("At least one time slot is required")
    if not _is_count(subject.time_slot_duration, 1):
        violations.append("Time slot duration must be a positive number of minutes")
    elif window is not None and _is_count(subject.number_of_time_slots, 1):
        needed = subject.number_of_time_slots * subject.time_slot_duration
        if needed > window:
            violations.append(
                f"{subject.number_of_time_slots} time slots of {subject.time_slot_duration} "
                f"minutes need {needed} minutes but the window is {window}")
    if subject.type == PRACTICAL_SESSION and _is_count(subject.number_of_stations, 1):
        violations.extend(_check_station_names(subject))
    return violations


def _check_assessment(subject: Subject, window: Optional[int]) -> List[str]:
    config = assessment_config_from_subject(subject)
    violations = validate_assessment_config(config)
    if _is_count(config.number_of_stations, 2):
        for message in _check_station_names(subject):
            if message not in violations:
                violations.append(message)
    if window is not None and not violations:
        half = config.phase_length
        needed = half * config.lead_assist_duration + half * config.assessed_observe_duration
        if needed > window:
            violations.append(
                f"Assessment slots need {needed} minutes but the window is {window}")
    return violations


def _check_structure(subject: Subject, window: Optional[int]) -> List[str]:
    if subject.is_workshop and subject.is_workshop_rotation:
        return _check_workshop_rotation(subject, window)
    if subject.is_assessment:
        return _check_assessment(subject, window)
    if subject.type in STATION_TYPES:
        return _check_station_session(subject, window)
    return []


def _same_record(a: Subject, b: Subject) -> bool:
    return a.id is not None and a.id == b.id


def _same_block(a: Subject, b: Subject) -> bool:
    """Both are saved workshops expanded from one rotation."""
    if a.workshop_index is None or b.workshop_index is None:
        return False
    return (list(a.selected_workshop_subjects or []) == list(b.selected_workshop_subjects or [])
            and a.total_workshops == b.total_workshops)


def _others_on_day(subject: Subject, existing: Iterable[Subject]) -> List[Subject]:
    out = []
    for other in existing:
        if other.deleted or _same_record(subject, other) or other.day != subject.day:
            continue
        if subject.course_id is not None and other.course_id is not None \
                and other.course_id != subject.course_id:
            continue
        out.append(other)
    return out


def _check_conflicts(subject: Subject, others: List[Subject]) -> List[str]:
    violations = []
    start, end = _window(subject)
    if start is None or end is None or end <= start:
        return violations
    for other in others:
        o_start, o_end = _window(other)
        if o_start is None or o_end is None:
            continue
        if (start, end) == (o_start, o_end):
            # concurrent workshops are expected to share a window
            if subject.is_workshop and other.is_workshop:
                continue
            violations.append(
                f"{WARNING} '{subject.name}' overlaps exactly with '{other.name}' "
                f"({_window_label(other)}) on day {subject.day}; only workshops are "
                f"expected to share a time window")
        elif start < o_end and o_start < end:
            violations.append(
                f"'{subject.name}' ({_window_label(subject)}) overlaps with "
                f"'{other.name}' ({_window_label(other)}) on day {subject.day}")
    return violations


def _check_duplicates(subject: Subject, others: List[Subject]) -> List[str]:
    violations = []
    if subject.is_workshop and subject.is_workshop_rotation:
        names = {n.strip() for n in subject.selected_workshop_subjects or [] if n and n.strip()}
        for other in others:
            if not other.is_workshop_rotation or _same_block(subject, other):
                continue
            if (other.start_time, other.end_time) != (subject.start_time, subject.end_time):
                continue
            if other.name in names:
                violations.append(
                    f"Workshop '{other.name}' is already scheduled on day {subject.day} "
                    f"at {_window_label(subject)}")
    if subject.is_assessment:
        for other in others:
            if other.is_assessment:
                violations.append(
                    f"{WARNING} day {subject.day} already has an assessment "
                    f"('{other.name}'); one assessment per day is recommended")
                break
    return violations


def validate(subject: SubjectLike, existing_subjects: Iterable[SubjectLike] = ()) -> List[str]:
    """
    Check a subject before it is planned and saved.

    existing_subjects are the course's other programme subjects (dicts from
    the record store or Subject objects); deleted ones are ignored.
    Returns violation messages in a fixed order; empty means valid.
    """
    subject = _as_subject(subject)
    existing = [_as_subject(s) for s in existing_subjects]

    violations = _check_required(subject)
    time_violations, window = _check_times(subject)
    violations.extend(time_violations)
    violations.extend(_check_structure(subject, window))

    others = _others_on_day(subject, existing)
    violations.extend(_check_conflicts(subject, others))
    violations.extend(_check_duplicates(subject, others))
    return violations

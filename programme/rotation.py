"""
Group rotation planners.

Both planners answer the same question: in each round (workshop rotation) or
time slot (station rotation), which group(s) go where. The rule they share is
that every group is in exactly one place per round; when there are fewer
places than groups, groups are combined rather than split.
"""

from collections import Counter
from typing import Dict, Iterable, List, Set

from .errors import PlanningError, ValidationError
from .models import (
    RotationConfig, RotationRound, RotationSchedule, RotationSession,
    StationConfig, Subject,
)
from .timeslots import compute_slot_window
from .validate import validate_rotation_config, validate_station_config


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def _ordered(indices: Iterable[int], groups: List[str]) -> tuple:
    return tuple(groups[i] for i in sorted(indices))


def _one_group_each(n_places: int, groups: List[str], rnd: int) -> Dict[int, List[int]]:
    """
    At least as many places as groups: group g goes to place (g - (rnd-1)) mod n.
    With n == len(groups) this is place i hosting group (i + rnd-1) mod G.
    Places left over in a round stay empty.
    """
    placement: Dict[int, List[int]] = {}
    for g in range(len(groups)):
        placement[(g - (rnd - 1)) % n_places] = [g]
    return placement


def _combined_groups(n_places: int, groups: List[str], rnd: int) -> Dict[int, List[int]]:
    """
    Fewer workshops than groups. Workshop i starts at group (rnd-1 + i) mod G and
    walks forward over unclaimed groups, taking up to ceil(G / W) of them but
    always leaving at least one group for each workshop still to come.
    """
    n_groups = len(groups)
    per_place = _ceil_div(n_groups, n_places)
    claimed: Set[int] = set()
    placement: Dict[int, List[int]] = {}
    for i in range(n_places):
        still_to_fill = n_places - i - 1
        take = min(per_place, n_groups - len(claimed) - still_to_fill)
        picked = []
        idx = (rnd - 1 + i) % n_groups
        while len(picked) < take:
            if idx not in claimed:
                claimed.add(idx)
                picked.append(idx)
            idx = (idx + 1) % n_groups
        placement[i] = picked
    return placement


def _paired_halves(slot: int) -> Dict[int, List[int]]:
    """Two stations, four groups: A+B / C+D swap stations every slot."""
    first, second = [0, 1], [2, 3]
    if slot % 2 == 1:
        return {0: first, 1: second}
    return {0: second, 1: first}


def _strided_groups(n_places: int, groups: List[str], slot: int) -> Dict[int, List[int]]:
    """
    Fewer stations than groups. Station s takes groups
    (s + slot-1 + i*S) mod G for i < ceil(G / S), skipping any group already
    placed in this slot.
    """
    n_groups = len(groups)
    per_place = _ceil_div(n_groups, n_places)
    claimed: Set[int] = set()
    placement: Dict[int, List[int]] = {}
    for s in range(n_places):
        picked = []
        for i in range(per_place):
            idx = (s + (slot - 1) + i * n_places) % n_groups
            if idx in claimed:
                continue
            claimed.add(idx)
            picked.append(idx)
        placement[s] = picked
    return placement


def _check_partition(schedule: RotationSchedule) -> None:
    expected = Counter(schedule.groups)
    for rnd in schedule.rounds:
        placed = Counter(rnd.groups)
        if placed != expected:
            raise PlanningError(
                f"Round {rnd.index}: groups placed {sorted(placed.elements())} "
                f"do not cover {sorted(expected.elements())} exactly once")
        if any(not s.groups for s in rnd.sessions):
            raise PlanningError(f"Round {rnd.index}: a session has no group")


def _build_round(index: int, names: List[str], groups: List[str],
                 placement: Dict[int, List[int]], window: str) -> RotationRound:
    sessions = tuple(
        RotationSession(name, _ordered(placement[i], groups))
        for i, name in enumerate(names)
        if placement.get(i)
    )
    return RotationRound(index=index, sessions=sessions, time_window=window)


def plan_group_rotation(config: RotationConfig) -> RotationSchedule:
    """
    Workshop rotation: which group(s) attend which workshop in each round.

    Raises ValidationError for an unusable group list or round count.
    No usable workshop names gives an empty schedule.
    """
    violations = validate_rotation_config(config)
    if violations:
        raise ValidationError(violations)

    names = config.clean_names()
    groups = list(config.groups)
    if not names:
        return RotationSchedule(groups=tuple(groups))

    rounds = []
    for rnd in range(1, config.rounds + 1):
        if len(names) >= len(groups):
            placement = _one_group_each(len(names), groups, rnd)
        else:
            placement = _combined_groups(len(names), groups, rnd)
        window = compute_slot_window(config.start_time, rnd - 1, config.round_duration)
        rounds.append(_build_round(rnd, names, groups, placement, window))

    schedule = RotationSchedule(rounds=tuple(rounds), groups=tuple(groups), sub_activities=tuple(names))
    _check_partition(schedule)
    return schedule


def plan_station_rotation(config: StationConfig) -> RotationSchedule:
    """
    Station rotation (Latin square): which group(s) occupy which station in
    each time slot. Zero stations or slots gives an empty schedule.
    """
    violations = validate_station_config(config)
    if violations:
        raise ValidationError(violations)

    groups = list(config.groups)
    n_stations = config.number_of_stations
    if n_stations < 1 or config.number_of_time_slots < 1:
        return RotationSchedule(groups=tuple(groups))

    labels = [config.station_label(i) for i in range(n_stations)]
    rounds = []
    for slot in range(1, config.number_of_time_slots + 1):
        if n_stations == 2 and len(groups) == 4:
            placement = _paired_halves(slot)
        elif n_stations >= len(groups):
            placement = _one_group_each(n_stations, groups, slot)
        else:
            placement = _strided_groups(n_stations, groups, slot)
        window = compute_slot_window(config.start_time, slot - 1, config.time_slot_duration)
        rounds.append(_build_round(slot, labels, groups, placement, window))

    schedule = RotationSchedule(rounds=tuple(rounds), groups=tuple(groups), sub_activities=tuple(labels))
    _check_partition(schedule)
    return schedule


# ---------------------------------------------------------------------------
# Reading stored rotation schedules
# ---------------------------------------------------------------------------

def _entry_groups(entry: dict) -> List[str]:
    """Groups of a stored session; older records hold "A+B" in a single 'group' key."""
    if entry.get("groups"):
        return list(entry["groups"])
    group = entry.get("group") or ""
    return [g for g in group.split("+") if g]


def _sessions_for(subject: Subject) -> Iterable[dict]:
    for entry in subject.rotation_schedule or []:
        if "sessions" in entry:
            for session in entry["sessions"]:
                name = session.get("sub_activity") or session.get("workshop")
                if name == subject.name:
                    yield session
        else:
            # per-workshop schedule: each entry already belongs to this subject
            yield entry


def workshop_groups(subject: Subject) -> List[str]:
    """Sorted groups that attend this workshop subject in any round."""
    if not subject.is_workshop_rotation or not subject.rotation_schedule:
        return []
    out = set()
    for session in _sessions_for(subject):
        out.update(_entry_groups(session))
    return sorted(out)


def group_progress(subjects: Iterable[Subject], groups: Iterable[str] = None) -> Dict[str, Set[str]]:
    """Map each group to the workshop names it already attends across the course."""
    progress: Dict[str, Set[str]] = {g: set() for g in (groups or [])}
    for subject in subjects:
        if subject.deleted or not subject.is_workshop_rotation:
            continue
        for group in workshop_groups(subject):
            progress.setdefault(group, set()).add(subject.name)
    return progress

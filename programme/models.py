"""
Data models for the programme planner.

Configurations are built from the subject form (or a stored subject record),
consumed once by a planner, and the resulting schedule is an immutable
snapshot. Edits never mutate a schedule; they regenerate it.
"""

import re
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .catalogue import (
    DEFAULT_GROUPS, DEFAULT_ROTATIONS, DEFAULT_SLOT_MINUTES, DEFAULT_STATIONS,
    DEFAULT_TIME_SLOTS, DEFAULT_WORKSHOP_MINUTES, ASSESSMENT, SESSION, WORKSHOP,
)
from .timeslots import parse_candidate_range


class Role(str, Enum):
    LEAD = "Lead"
    ASSIST = "Assist"
    ASSESSED = "Assessed"
    OBSERVE = "Observe"


# ---------------------------------------------------------------------------
# Subject records (what the course programme stores)
# ---------------------------------------------------------------------------

# Record-store keys that don't follow the plain camelCase -> snake_case rule
_LEGACY_KEYS = {
    "scenarioCandidatesFirst": "candidate_range_first",
    "scenarioCandidatesSecond": "candidate_range_second",
    "timeSlots": "time_slots",
}

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _LEGACY_KEYS.get(key) or _CAMEL_RE.sub("_", key).lower()


@dataclass
class Subject:
    """One item of a course programme on a given day."""
    name: str = ""
    type: str = SESSION
    day: Optional[int] = 1
    start_time: Optional[str] = None     # "HH:MM"
    end_time: Optional[str] = None
    duration: Optional[int] = None       # minutes; must equal end - start
    description: str = ""
    id: Optional[int] = None
    course_id: Optional[int] = None
    deleted: bool = False

    # Workshop rotation
    is_workshop_rotation: bool = False
    number_of_workshops: int = DEFAULT_ROTATIONS
    workshop_duration: int = DEFAULT_WORKSHOP_MINUTES
    number_of_rotations: int = DEFAULT_ROTATIONS
    selected_workshop_subjects: List[str] = field(default_factory=list)
    workshop_index: Optional[int] = None
    total_workshops: Optional[int] = None
    total_rotations: Optional[int] = None

    # Stations (scenario practice, practical session, assessment)
    number_of_stations: int = DEFAULT_STATIONS
    number_of_time_slots: int = DEFAULT_TIME_SLOTS
    time_slot_duration: int = DEFAULT_SLOT_MINUTES
    station_names: List[str] = field(default_factory=list)
    station_rooms: List[str] = field(default_factory=list)

    # Assessment
    lead_assist_duration: Optional[int] = None
    assessed_observe_duration: Optional[int] = None
    concurrent_activity_name: str = ""
    candidate_range_first: Optional[str] = None    # e.g. "1-8"
    candidate_range_second: Optional[str] = None   # e.g. "9-16"

    # Generated schedule snapshots
    rotation_schedule: Optional[list] = None
    time_slots: Optional[list] = None

    @classmethod
    def from_dict(cls, data: Dict) -> "Subject":
        """Build from a stored record; accepts snake_case or camelCase keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = key if key in known else _snake(key)
            if name in known and value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    @property
    def is_workshop(self) -> bool:
        return self.type == WORKSHOP

    @property
    def is_assessment(self) -> bool:
        return self.type == ASSESSMENT


# ---------------------------------------------------------------------------
# Group / station rotation
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RotationConfig:
    """Workshop-style rotation: every group visits the named sub-activities round by round."""
    sub_activity_names: Tuple[str, ...]
    rounds: int
    groups: Tuple[str, ...] = tuple(DEFAULT_GROUPS)
    start_time: Optional[str] = None
    round_duration: Optional[int] = None   # minutes per round

    def clean_names(self) -> List[str]:
        """Sub-activity names with blanks and repeats removed, order kept."""
        seen = []
        for name in self.sub_activity_names:
            if name is None:
                continue
            name = name.strip()
            if name and name not in seen:
                seen.append(name)
        return seen


@dataclass(frozen=True)
class StationConfig:
    """Practical / scenario rotation: groups move between fixed stations slot by slot."""
    number_of_stations: int
    number_of_time_slots: int
    groups: Tuple[str, ...] = tuple(DEFAULT_GROUPS)
    station_names: Tuple[str, ...] = ()
    start_time: Optional[str] = None
    time_slot_duration: Optional[int] = None

    def station_label(self, index: int) -> str:
        if index < len(self.station_names):
            name = (self.station_names[index] or "").strip()
            if name:
                return name
        return f"Station {index + 1}"


@dataclass(frozen=True)
class RotationSession:
    sub_activity: str
    groups: Tuple[str, ...]

    @property
    def label(self) -> str:
        return "+".join(self.groups)

    def to_dict(self) -> dict:
        return {"sub_activity": self.sub_activity, "groups": list(self.groups)}


@dataclass(frozen=True)
class RotationRound:
    index: int                               # 1-based round / time slot
    sessions: Tuple[RotationSession, ...]
    time_window: str = ""

    @property
    def groups(self) -> List[str]:
        return [g for s in self.sessions for g in s.groups]

    def session_for(self, sub_activity: str) -> Optional[RotationSession]:
        for s in self.sessions:
            if s.sub_activity == sub_activity:
                return s
        return None

    def to_dict(self) -> dict:
        return {
            "round": self.index,
            "time_window": self.time_window,
            "sessions": [s.to_dict() for s in self.sessions],
        }


@dataclass(frozen=True)
class RotationSchedule:
    rounds: Tuple[RotationRound, ...] = ()
    groups: Tuple[str, ...] = ()
    sub_activities: Tuple[str, ...] = ()

    def round(self, index: int) -> RotationRound:
        for r in self.rounds:
            if r.index == index:
                return r
        raise KeyError(f"No round {index} in schedule")

    def groups_for(self, sub_activity: str) -> List[str]:
        """Every group that attends sub_activity in any round, sorted."""
        out = set()
        for r in self.rounds:
            s = r.session_for(sub_activity)
            if s:
                out.update(s.groups)
        return sorted(out)

    def to_dict(self) -> List[dict]:
        return [r.to_dict() for r in self.rounds]


# ---------------------------------------------------------------------------
# Assessment
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AssessmentConfig:
    """
    Formal assessment: S stations, an even number of slots split into a
    Lead/Assist phase then an Assessed/Observe phase. Two candidates per
    station per slot; the other half of the cohort is at the concurrent
    activity.
    """
    number_of_stations: int
    number_of_time_slots: int = DEFAULT_TIME_SLOTS
    lead_assist_duration: int = DEFAULT_SLOT_MINUTES
    assessed_observe_duration: int = DEFAULT_SLOT_MINUTES
    station_names: Tuple[str, ...] = ()
    concurrent_activity_name: str = ""
    start_time: Optional[str] = None
    candidate_range_first: Optional[str] = None
    candidate_range_second: Optional[str] = None

    @property
    def total_candidates(self) -> int:
        """Candidates at the stations in any one slot."""
        return self.number_of_stations * 2

    @property
    def cohort_size(self) -> int:
        return self.total_candidates * 2

    @property
    def phase_length(self) -> int:
        return self.number_of_time_slots // 2

    def first_range(self) -> range:
        if self.candidate_range_first:
            return parse_candidate_range(self.candidate_range_first)
        return range(1, self.total_candidates + 1)

    def second_range(self) -> range:
        if self.candidate_range_second:
            return parse_candidate_range(self.candidate_range_second)
        return range(self.total_candidates + 1, self.cohort_size + 1)

    def station_label(self, index: int) -> str:
        if index < len(self.station_names):
            name = (self.station_names[index] or "").strip()
            if name:
                return name
        return f"Station {index + 1}"


@dataclass(frozen=True)
class CandidateAssignment:
    candidate_number: int
    role: Role


@dataclass(frozen=True)
class StationAssignment:
    station_index: int                       # 0-based
    station_name: str
    candidate_assignments: Tuple[CandidateAssignment, CandidateAssignment]

    def to_dict(self) -> dict:
        return {
            "station_index": self.station_index,
            "station_name": self.station_name,
            "candidates": [
                {"candidate_number": c.candidate_number, "role": c.role.value}
                for c in self.candidate_assignments
            ],
        }


@dataclass(frozen=True)
class ConcurrentActivity:
    name: str
    candidate_range: str                     # "9-16"
    duration: int


@dataclass(frozen=True)
class AssessmentTimeSlot:
    slot_index: int                          # 1-based
    start_time: str                          # "HH:MM" or "Time Slot n"
    time_window: str
    duration: int
    phase: int                               # 1 = Lead/Assist, 2 = Assessed/Observe
    scenario_range: str                      # cohort numbers behind seats 1..2S
    stations: Tuple[StationAssignment, ...]
    concurrent_activity: ConcurrentActivity

    def to_dict(self) -> dict:
        return {
            "slot_index": self.slot_index,
            "start_time": self.start_time,
            "time_window": self.time_window,
            "duration": self.duration,
            "phase": self.phase,
            "scenario_range": self.scenario_range,
            "stations": [s.to_dict() for s in self.stations],
            "concurrent_activity": {
                "name": self.concurrent_activity.name,
                "candidate_range": self.concurrent_activity.candidate_range,
                "duration": self.concurrent_activity.duration,
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AssessmentTimeSlot":
        """Rebuild a slot stored by to_dict()."""
        stations = tuple(
            StationAssignment(
                station_index=s["station_index"],
                station_name=s["station_name"],
                candidate_assignments=tuple(
                    CandidateAssignment(c["candidate_number"], Role(c["role"]))
                    for c in s["candidates"]
                ),
            )
            for s in data["stations"]
        )
        concurrent = data["concurrent_activity"]
        return cls(
            slot_index=data["slot_index"],
            start_time=data["start_time"],
            time_window=data["time_window"],
            duration=data["duration"],
            phase=data["phase"],
            scenario_range=data["scenario_range"],
            stations=stations,
            concurrent_activity=ConcurrentActivity(
                name=concurrent["name"],
                candidate_range=concurrent["candidate_range"],
                duration=concurrent["duration"],
            ),
        )


@dataclass(frozen=True)
class CandidatePair:
    time_slot: int
    station: int                             # 1-based
    station_name: str
    candidate1: int
    candidate2: int
    start_time: str


@dataclass(frozen=True)
class CandidateSlotAssignment:
    candidate_number: int                    # seat 1..2S
    time_slot: int
    station: int
    station_name: str
    role: Role
    start_time: str
    absolute_candidate: int                  # cohort number for this phase

"""
Assessment slot planner.

An assessment runs S stations over an even number of slots split in two
phases: Lead/Assist, then Assessed/Observe. Each station takes one pair of
candidates per slot, so 2S candidates are at the stations while the other half
of the cohort is at the concurrent activity. Halves swap between the phases.

Seats are numbered 1..2S and paired (1, 2), (3, 4), ... Pair p sits at
station (p + k) mod S in slot k, so with four stations station s hosts pairs
offset by 0, +3, +2, +1 across the four slots and no pair repeats a station.
Within a phase the active role alternates between the two members of a pair.
"""

from typing import List

from .errors import ValidationError
from .models import (
    AssessmentConfig, AssessmentTimeSlot, CandidateAssignment, CandidatePair,
    CandidateSlotAssignment, ConcurrentActivity, Role, StationAssignment,
)
from .timeslots import add_minutes, format_candidate_range, parse_candidate_range, window_from_offset
from .validate import validate_assessment_config

PHASE_ROLES = {
    1: (Role.LEAD, Role.ASSIST),
    2: (Role.ASSESSED, Role.OBSERVE),
}


def _pair_at(station: int, slot: int, n_stations: int) -> int:
    return (station - slot) % n_stations


def _station_assignment(config: AssessmentConfig, station: int, slot: int, position: int,
                        phase: int) -> StationAssignment:
    pair = _pair_at(station, slot, config.number_of_stations)
    first, second = pair * 2 + 1, pair * 2 + 2
    active, passive = PHASE_ROLES[phase]
    if position % 2 == 0:
        roles = (active, passive)
    else:
        roles = (passive, active)
    return StationAssignment(
        station_index=station,
        station_name=config.station_label(station),
        candidate_assignments=(
            CandidateAssignment(first, roles[0]),
            CandidateAssignment(second, roles[1]),
        ),
    )


def plan_assessment_slots(config: AssessmentConfig) -> List[AssessmentTimeSlot]:
    """
    Every slot of the assessment with its station pairings and roles.

    A configuration with no stations gives an empty plan; anything else the
    validator rejects raises ValidationError.
    """
    if config.number_of_stations == 0:
        return []
    violations = validate_assessment_config(config)
    if violations:
        raise ValidationError(violations)

    halves = {1: (config.first_range(), config.second_range()),
              2: (config.second_range(), config.first_range())}
    phase_length = config.phase_length

    slots = []
    offset = 0
    for k in range(config.number_of_time_slots):
        phase = 1 if k < phase_length else 2
        position = k - (phase - 1) * phase_length
        duration = config.lead_assist_duration if phase == 1 else config.assessed_observe_duration
        at_stations, at_concurrent = halves[phase]

        stations = tuple(
            _station_assignment(config, s, k, position, phase)
            for s in range(config.number_of_stations)
        )
        slots.append(AssessmentTimeSlot(
            slot_index=k + 1,
            start_time=add_minutes(config.start_time, offset) or f"Time Slot {k + 1}",
            time_window=window_from_offset(config.start_time, offset, duration, k),
            duration=duration,
            phase=phase,
            scenario_range=format_candidate_range(at_stations),
            stations=stations,
            concurrent_activity=ConcurrentActivity(
                name=config.concurrent_activity_name.strip(),
                candidate_range=format_candidate_range(at_concurrent),
                duration=duration,
            ),
        ))
        offset += duration
    return slots


def derive_candidate_pairs(schedule: List[AssessmentTimeSlot]) -> List[CandidatePair]:
    """One entry per station per slot, as the assessment-recording screen lists them."""
    pairs = []
    for slot in schedule:
        for station in slot.stations:
            first, second = station.candidate_assignments
            pairs.append(CandidatePair(
                time_slot=slot.slot_index,
                station=station.station_index + 1,
                station_name=station.station_name,
                candidate1=first.candidate_number,
                candidate2=second.candidate_number,
                start_time=slot.start_time,
            ))
    return pairs


def derive_candidate_assignments(schedule: List[AssessmentTimeSlot]) -> List[CandidateSlotAssignment]:
    """Flattened: one entry per candidate per slot, used for completion tracking."""
    out = []
    for slot in schedule:
        cohort = parse_candidate_range(slot.scenario_range)
        for station in slot.stations:
            for assignment in station.candidate_assignments:
                out.append(CandidateSlotAssignment(
                    candidate_number=assignment.candidate_number,
                    time_slot=slot.slot_index,
                    station=station.station_index + 1,
                    station_name=station.station_name,
                    role=assignment.role,
                    start_time=slot.start_time,
                    absolute_candidate=cohort[assignment.candidate_number - 1],
                ))
    return out

"""Build planner configurations from stored subject records."""

from typing import Sequence

from .catalogue import DEFAULT_GROUPS
from .models import AssessmentConfig, RotationConfig, StationConfig, Subject


def rotation_config_from_subject(subject: Subject, groups: Sequence[str] = DEFAULT_GROUPS) -> RotationConfig:
    return RotationConfig(
        sub_activity_names=tuple(subject.selected_workshop_subjects or ()),
        rounds=subject.number_of_rotations,
        groups=tuple(groups),
        start_time=subject.start_time,
        round_duration=subject.workshop_duration,
    )


def station_config_from_subject(subject: Subject, groups: Sequence[str] = DEFAULT_GROUPS) -> StationConfig:
    return StationConfig(
        number_of_stations=subject.number_of_stations,
        number_of_time_slots=subject.number_of_time_slots,
        groups=tuple(groups),
        station_names=tuple(subject.station_names or ()),
        start_time=subject.start_time,
        time_slot_duration=subject.time_slot_duration,
    )


def assessment_config_from_subject(subject: Subject) -> AssessmentConfig:
    # Phase durations fall back to the plain slot length
    return AssessmentConfig(
        number_of_stations=subject.number_of_stations,
        number_of_time_slots=subject.number_of_time_slots,
        lead_assist_duration=subject.lead_assist_duration or subject.time_slot_duration,
        assessed_observe_duration=subject.assessed_observe_duration or subject.time_slot_duration,
        station_names=tuple(subject.station_names or ()),
        concurrent_activity_name=subject.concurrent_activity_name or "",
        start_time=subject.start_time,
        candidate_range_first=subject.candidate_range_first,
        candidate_range_second=subject.candidate_range_second,
    )

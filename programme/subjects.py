"""
Planning for whole programme subjects.

This is the single place the API's preview and save paths go through: fill in
derived durations, run the planner matching the subject type and attach the
generated schedule snapshot to a copy of the subject.
"""

from dataclasses import replace
from typing import List, Optional, Sequence

from .assessment import plan_assessment_slots
from .catalogue import DEFAULT_GROUPS, FIXED_NAMES, STATION_TYPES
from .configs import (
    assessment_config_from_subject, rotation_config_from_subject,
    station_config_from_subject,
)
from .models import AssessmentTimeSlot, RotationSchedule, Subject
from .rotation import plan_group_rotation, plan_station_rotation


def derived_duration(subject: Subject) -> Optional[int]:
    """Total minutes implied by a station or assessment subject's slot structure."""
    if subject.is_assessment:
        half = subject.number_of_time_slots // 2
        lead = subject.lead_assist_duration or subject.time_slot_duration
        assessed = subject.assessed_observe_duration or subject.time_slot_duration
        return half * lead + half * assessed
    if subject.type in STATION_TYPES:
        return subject.number_of_time_slots * subject.time_slot_duration
    return None


def with_derived_duration(subject: Subject) -> Subject:
    if subject.duration is not None:
        return subject
    duration = derived_duration(subject)
    return replace(subject, duration=duration) if duration is not None else subject


def plan_subject(subject: Subject, groups: Sequence[str] = DEFAULT_GROUPS) -> Subject:
    """Copy of subject with rotation_schedule or time_slots generated."""
    if subject.is_workshop and subject.is_workshop_rotation:
        schedule = plan_group_rotation(rotation_config_from_subject(subject, groups))
        return replace(subject, rotation_schedule=schedule.to_dict(),
                       total_rotations=len(schedule.rounds))
    if subject.is_assessment:
        slots = plan_assessment_slots(assessment_config_from_subject(subject))
        return replace(subject, time_slots=[s.to_dict() for s in slots])
    if subject.type in STATION_TYPES:
        schedule = plan_station_rotation(station_config_from_subject(subject, groups))
        return replace(subject, rotation_schedule=schedule.to_dict())
    return subject


def expand_workshop_subjects(subject: Subject, groups: Sequence[str] = DEFAULT_GROUPS) -> List[Subject]:
    """
    A workshop rotation is stored as one subject per workshop, each sharing
    the window and the full rotation schedule.
    """
    schedule: RotationSchedule = plan_group_rotation(rotation_config_from_subject(subject, groups))
    names = list(schedule.sub_activities)
    return [
        replace(
            subject,
            name=name,
            description=f"Workshop: {name}",
            workshop_index=i + 1,
            total_workshops=len(names),
            total_rotations=len(schedule.rounds),
            rotation_schedule=schedule.to_dict(),
        )
        for i, name in enumerate(names)
    ]


def stored_assessment_slots(subject: Subject) -> List[AssessmentTimeSlot]:
    return [AssessmentTimeSlot.from_dict(d) for d in subject.time_slots or []]


def with_fixed_name(subject: Subject) -> Subject:
    """Scenario practice, breaks and lunch carry a fixed name when none is typed."""
    if (subject.name or "").strip() or subject.type not in FIXED_NAMES:
        return subject
    return replace(subject, name=FIXED_NAMES[subject.type])

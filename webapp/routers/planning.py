"""Preview endpoints: run a planner or the validator without saving anything."""
import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from programme.assessment import (
    derive_candidate_assignments, derive_candidate_pairs, plan_assessment_slots,
)
from programme.errors import ValidationError
from programme.models import AssessmentConfig, RotationConfig, StationConfig, Subject
from programme.rotation import plan_group_rotation, plan_station_rotation
from programme.subjects import with_derived_duration, with_fixed_name
from programme.timeslots import compute_slot_window
from programme.validate import WARNING, blocking_violations, validate
from webapp.database import get_db
from webapp.routers.subjects import course_subjects
from webapp.schemas import (
    AssessmentPlanOut, AssessmentPlanRequest, RotationPlanOut, StationPlanRequest,
    ValidateRequest, ValidateResponse, WorkshopPlanRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _rotation_out(schedule):
    return {
        "groups": list(schedule.groups),
        "sub_activities": list(schedule.sub_activities),
        "rounds": schedule.to_dict(),
    }


@router.post("/workshops", response_model=RotationPlanOut)
def preview_workshop_rotation(data: WorkshopPlanRequest):
    config = RotationConfig(
        sub_activity_names=tuple(data.workshops),
        rounds=data.rounds,
        groups=tuple(data.groups),
        start_time=data.start_time,
        round_duration=data.round_duration,
    )
    try:
        return _rotation_out(plan_group_rotation(config))
    except ValidationError as exc:
        raise HTTPException(422, {"violations": exc.violations})


@router.post("/stations", response_model=RotationPlanOut)
def preview_station_rotation(data: StationPlanRequest):
    config = StationConfig(
        number_of_stations=data.number_of_stations,
        number_of_time_slots=data.number_of_time_slots,
        groups=tuple(data.groups),
        station_names=tuple(data.station_names),
        start_time=data.start_time,
        time_slot_duration=data.time_slot_duration,
    )
    try:
        return _rotation_out(plan_station_rotation(config))
    except ValidationError as exc:
        raise HTTPException(422, {"violations": exc.violations})


@router.post("/assessment", response_model=AssessmentPlanOut)
def preview_assessment(data: AssessmentPlanRequest):
    values = data.model_dump()
    values["station_names"] = tuple(values["station_names"])
    config = AssessmentConfig(**values)
    try:
        slots = plan_assessment_slots(config)
    except ValidationError as exc:
        raise HTTPException(422, {"violations": exc.violations})
    assignments = []
    for a in derive_candidate_assignments(slots):
        entry = asdict(a)
        entry["role"] = a.role.value
        assignments.append(entry)
    return {
        "time_slots": [s.to_dict() for s in slots],
        "candidate_pairs": [asdict(p) for p in derive_candidate_pairs(slots)],
        "candidate_assignments": assignments,
    }


@router.post("/validate", response_model=ValidateResponse)
def validate_subject(data: ValidateRequest, db: Session = Depends(get_db)):
    """Check a subject form against the course programme; warnings never block."""
    subject = with_fixed_name(with_derived_duration(Subject(**data.model_dump())))
    existing = []
    if data.course_id:
        existing = [r.to_subject() for r in course_subjects(db, data.course_id)]
    messages = validate(subject, existing)
    blocking = blocking_violations(messages)
    if blocking:
        logger.debug("Subject '%s' has %d blocking violation(s)", subject.name, len(blocking))
    return {
        "valid": not blocking,
        "violations": blocking,
        "warnings": [m for m in messages if m.startswith(WARNING)],
    }


@router.get("/slot-window")
def slot_window(slot_index: int, start_time: Optional[str] = None, duration: Optional[int] = None):
    """Label for one slot of a station session, e.g. "10:30-11:00"."""
    return {"slot_index": slot_index, "window": compute_slot_window(start_time, slot_index, duration)}

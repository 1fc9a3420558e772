import logging
from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from programme.assessment import derive_candidate_assignments, derive_candidate_pairs
from programme.catalogue import ASSESSMENT
from programme.errors import ValidationError
from programme.models import Subject
from programme.rotation import workshop_groups
from programme.subjects import (
    expand_workshop_subjects, plan_subject, stored_assessment_slots,
    with_derived_duration, with_fixed_name,
)
from programme.validate import WARNING, blocking_violations, validate
from webapp.database import get_db
from webapp.models import ProgrammeSubject
from webapp.routers.courses import get_course
from webapp.schemas import (
    CandidateAssignmentOut, CandidatePairOut, SubjectCreate, SubjectOut,
    SubjectSaveResponse, SubjectUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def course_subjects(db: Session, course_id: int) -> List[ProgrammeSubject]:
    return db.query(ProgrammeSubject).filter(
        ProgrammeSubject.course_id == course_id,
        ProgrammeSubject.deleted == False,  # noqa: E712
    ).order_by(ProgrammeSubject.day, ProgrammeSubject.start_time, ProgrammeSubject.id).all()


def _get_subject(db: Session, subject_id: int) -> ProgrammeSubject:
    row = db.query(ProgrammeSubject).filter(
        ProgrammeSubject.id == subject_id,
        ProgrammeSubject.deleted == False,  # noqa: E712
    ).first()
    if not row:
        raise HTTPException(404, "Subject not found")
    return row


def _unprocessable(violations: List[str]) -> HTTPException:
    return HTTPException(422, {"violations": violations})


@router.get("/", response_model=list[SubjectOut])
def list_subjects(course_id: Optional[int] = None, day: Optional[int] = None, db: Session = Depends(get_db)):
    q = db.query(ProgrammeSubject).filter(ProgrammeSubject.deleted == False)  # noqa: E712
    if course_id:
        q = q.filter(ProgrammeSubject.course_id == course_id)
    if day is not None:
        q = q.filter(ProgrammeSubject.day == day)
    return q.order_by(ProgrammeSubject.day, ProgrammeSubject.start_time, ProgrammeSubject.id).all()


@router.post("/", response_model=SubjectSaveResponse)
def create_subject(data: SubjectCreate, db: Session = Depends(get_db)):
    """
    Validate the subject against the course programme, run its planner and
    store it. A workshop rotation is stored as one subject per workshop.
    Blocking violations reject the save with 422; warnings come back with
    the saved subjects.
    """
    course = get_course(db, data.course_id)
    subject = with_fixed_name(with_derived_duration(Subject(**data.model_dump())))
    existing = [r.to_subject() for r in course_subjects(db, course.id)]

    messages = validate(subject, existing)
    blocking = blocking_violations(messages)
    if blocking:
        logger.info("Rejected %s '%s' on day %s: %s", subject.type, subject.name, subject.day, "; ".join(blocking))
        raise _unprocessable(blocking)
    warnings = [m for m in messages if m.startswith(WARNING)]

    try:
        if subject.is_workshop and subject.is_workshop_rotation:
            planned = expand_workshop_subjects(subject, course.groups)
        else:
            planned = [plan_subject(subject, course.groups)]
    except ValidationError as exc:
        raise _unprocessable(exc.violations)

    rows = [ProgrammeSubject.from_subject(s) for s in planned]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    logger.info("Saved %d subject(s) for course %s day %s", len(rows), course.name, subject.day)
    for message in warnings:
        logger.warning(message)
    return {"subjects": rows, "warnings": warnings}


@router.get("/{subject_id}", response_model=SubjectOut)
def read_subject(subject_id: int, db: Session = Depends(get_db)):
    return _get_subject(db, subject_id)


@router.patch("/{subject_id}", response_model=SubjectOut)
def update_subject(subject_id: int, data: SubjectUpdate, db: Session = Depends(get_db)):
    row = _get_subject(db, subject_id)
    if data.name is not None:
        if not data.name.strip():
            raise _unprocessable(["Name is required"])
        row.name = data.name.strip()
    if data.description is not None:
        row.description = data.description
    db.commit()
    db.refresh(row)
    return row


@router.delete("/{subject_id}")
def delete_subject(subject_id: int, db: Session = Depends(get_db)):
    """Soft delete: the record stays but no longer counts for conflicts."""
    row = _get_subject(db, subject_id)
    row.deleted = True
    db.commit()
    logger.info("Deleted subject %s '%s'", row.id, row.name)
    return {"ok": True}


@router.get("/{subject_id}/groups")
def read_workshop_groups(subject_id: int, db: Session = Depends(get_db)):
    row = _get_subject(db, subject_id)
    return {"subject_id": row.id, "groups": workshop_groups(row.to_subject())}


def _assessment_slots(db: Session, subject_id: int):
    row = _get_subject(db, subject_id)
    if row.type != ASSESSMENT:
        raise HTTPException(400, "Subject is not an assessment")
    return stored_assessment_slots(row.to_subject())


@router.get("/{subject_id}/candidate-pairs", response_model=list[CandidatePairOut])
def read_candidate_pairs(subject_id: int, db: Session = Depends(get_db)):
    return [asdict(p) for p in derive_candidate_pairs(_assessment_slots(db, subject_id))]


@router.get("/{subject_id}/candidate-assignments", response_model=list[CandidateAssignmentOut])
def read_candidate_assignments(subject_id: int, db: Session = Depends(get_db)):
    out = []
    for a in derive_candidate_assignments(_assessment_slots(db, subject_id)):
        entry = asdict(a)
        entry["role"] = a.role.value
        out.append(entry)
    return out

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from programme.rotation import group_progress
from webapp.database import get_db
from webapp.models import Course, ProgrammeSubject
from webapp.schemas import CourseCreate, CourseOut, GroupProgressOut

router = APIRouter()


def get_course(db: Session, course_id: int) -> Course:
    course = db.query(Course).filter(Course.id == course_id).first()
    if not course:
        raise HTTPException(404, "Course not found")
    return course


@router.get("/", response_model=list[CourseOut])
def list_courses(db: Session = Depends(get_db)):
    return db.query(Course).order_by(Course.name).all()


@router.post("/", response_model=CourseOut)
def create_course(data: CourseCreate, db: Session = Depends(get_db)):
    if db.query(Course).filter(Course.name == data.name).first():
        raise HTTPException(400, f"Course {data.name} already exists")
    groups = [g.strip() for g in data.groups if g and g.strip()]
    if not groups or len(set(groups)) != len(groups):
        raise HTTPException(400, "Course groups must be non-empty and unique")
    course = Course(name=data.name, start_date=data.start_date, groups=groups)
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


@router.get("/{course_id}", response_model=CourseOut)
def read_course(course_id: int, db: Session = Depends(get_db)):
    return get_course(db, course_id)


@router.delete("/{course_id}")
def delete_course(course_id: int, db: Session = Depends(get_db)):
    course = get_course(db, course_id)
    db.query(ProgrammeSubject).filter(ProgrammeSubject.course_id == course_id).delete()
    db.delete(course)
    db.commit()
    return {"ok": True}


@router.get("/{course_id}/group-progress", response_model=GroupProgressOut)
def course_group_progress(course_id: int, db: Session = Depends(get_db)):
    """Which workshops each group already attends, from the saved rotation subjects."""
    course = get_course(db, course_id)
    rows = db.query(ProgrammeSubject).filter(
        ProgrammeSubject.course_id == course_id,
        ProgrammeSubject.deleted == False,  # noqa: E712
    ).all()
    progress = group_progress([r.to_subject() for r in rows], course.groups)
    return {"course_id": course_id, "progress": {g: sorted(names) for g, names in progress.items()}}

"""SQLAlchemy models for courses and their programme subjects."""
from dataclasses import fields
from datetime import datetime

from sqlalchemy import (
    Column, Integer, String, Boolean, ForeignKey, JSON, DateTime, Text,
)
from sqlalchemy.orm import relationship

from programme.catalogue import DEFAULT_GROUPS
from programme.models import Subject

from webapp.database import Base


class Course(Base):
    __tablename__ = "courses"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    start_date = Column(String(20))  # e.g. "2026-03-02"
    groups = Column(JSON, default=lambda: list(DEFAULT_GROUPS))  # ["A", "B", "C", "D"]
    created_at = Column(DateTime, default=datetime.utcnow)

    subjects = relationship("ProgrammeSubject", back_populates="course")


class ProgrammeSubject(Base):
    __tablename__ = "programme_subjects"
    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    type = Column(String(30), nullable=False)  # session, workshop, assessment, ...
    day = Column(Integer, nullable=False, default=1)
    start_time = Column(String(5))  # "HH:MM"
    end_time = Column(String(5))
    duration = Column(Integer)
    description = Column(Text, default="")
    deleted = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Workshop rotation
    is_workshop_rotation = Column(Boolean, default=False)
    number_of_workshops = Column(Integer, default=4)
    workshop_duration = Column(Integer, default=40)
    number_of_rotations = Column(Integer, default=4)
    selected_workshop_subjects = Column(JSON, default=list)
    workshop_index = Column(Integer, nullable=True)  # 1-based within its rotation block
    total_workshops = Column(Integer, nullable=True)
    total_rotations = Column(Integer, nullable=True)

    # Stations
    number_of_stations = Column(Integer, default=4)
    number_of_time_slots = Column(Integer, default=4)
    time_slot_duration = Column(Integer, default=30)
    station_names = Column(JSON, default=list)
    station_rooms = Column(JSON, default=list)

    # Assessment
    lead_assist_duration = Column(Integer, nullable=True)
    assessed_observe_duration = Column(Integer, nullable=True)
    concurrent_activity_name = Column(String(200), default="")
    candidate_range_first = Column(String(20), nullable=True)  # "1-8"
    candidate_range_second = Column(String(20), nullable=True)

    # Generated schedules (snapshots; regenerated, never edited)
    rotation_schedule = Column(JSON, nullable=True)
    time_slots = Column(JSON, nullable=True)

    course = relationship("Course", back_populates="subjects")

    def to_subject(self) -> Subject:
        """Planner view of this record."""
        values = {}
        for f in fields(Subject):
            value = getattr(self, f.name, None)
            if value is not None:
                values[f.name] = value
        return Subject(**values)

    @classmethod
    def from_subject(cls, subject: Subject) -> "ProgrammeSubject":
        values = {f.name: getattr(subject, f.name) for f in fields(Subject) if f.name != "id"}
        return cls(**values)

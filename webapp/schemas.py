"""Pydantic schemas for API."""
from typing import Optional, List, Dict, Any
from pydantic import BaseModel

from programme.catalogue import DEFAULT_GROUPS


class CourseBase(BaseModel):
    name: str
    start_date: Optional[str] = None
    groups: List[str] = list(DEFAULT_GROUPS)


class CourseCreate(CourseBase):
    pass


class CourseOut(CourseBase):
    id: int

    class Config:
        from_attributes = True


class SubjectBase(BaseModel):
    name: str = ""
    type: str = "session"
    day: Optional[int] = 1
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration: Optional[int] = None
    description: str = ""

    is_workshop_rotation: bool = False
    number_of_workshops: int = 4
    workshop_duration: int = 40
    number_of_rotations: int = 4
    selected_workshop_subjects: List[str] = []

    number_of_stations: int = 4
    number_of_time_slots: int = 4
    time_slot_duration: int = 30
    station_names: List[str] = []
    station_rooms: List[str] = []

    lead_assist_duration: Optional[int] = None
    assessed_observe_duration: Optional[int] = None
    concurrent_activity_name: str = ""
    candidate_range_first: Optional[str] = None  # "1-8"
    candidate_range_second: Optional[str] = None


class SubjectCreate(SubjectBase):
    course_id: int


class SubjectUpdate(BaseModel):
    # Only the text fields are editable; anything structural is re-created
    name: Optional[str] = None
    description: Optional[str] = None


class SubjectOut(SubjectBase):
    id: int
    course_id: int
    deleted: bool = False
    workshop_index: Optional[int] = None
    total_workshops: Optional[int] = None
    total_rotations: Optional[int] = None
    rotation_schedule: Optional[List[Dict[str, Any]]] = None
    time_slots: Optional[List[Dict[str, Any]]] = None

    class Config:
        from_attributes = True


class SubjectSaveResponse(BaseModel):
    subjects: List[SubjectOut]
    warnings: List[str] = []

    class Config:
        from_attributes = True


class ValidateRequest(SubjectBase):
    course_id: Optional[int] = None
    id: Optional[int] = None  # set when re-checking a saved subject
    workshop_index: Optional[int] = None
    total_workshops: Optional[int] = None


class ValidateResponse(BaseModel):
    valid: bool
    violations: List[str] = []
    warnings: List[str] = []


class WorkshopPlanRequest(BaseModel):
    workshops: List[str]
    rounds: int = 4
    groups: List[str] = list(DEFAULT_GROUPS)
    start_time: Optional[str] = None
    round_duration: Optional[int] = None


class StationPlanRequest(BaseModel):
    number_of_stations: int = 4
    number_of_time_slots: int = 4
    groups: List[str] = list(DEFAULT_GROUPS)
    station_names: List[str] = []
    start_time: Optional[str] = None
    time_slot_duration: Optional[int] = None


class AssessmentPlanRequest(BaseModel):
    number_of_stations: int = 4
    number_of_time_slots: int = 4
    lead_assist_duration: int = 30
    assessed_observe_duration: int = 30
    station_names: List[str] = []
    concurrent_activity_name: str
    start_time: Optional[str] = None
    candidate_range_first: Optional[str] = None
    candidate_range_second: Optional[str] = None


class RotationPlanOut(BaseModel):
    groups: List[str]
    sub_activities: List[str]
    rounds: List[Dict[str, Any]]


class CandidatePairOut(BaseModel):
    time_slot: int
    station: int
    station_name: str
    candidate1: int
    candidate2: int
    start_time: str


class CandidateAssignmentOut(BaseModel):
    candidate_number: int
    time_slot: int
    station: int
    station_name: str
    role: str
    start_time: str
    absolute_candidate: int


class AssessmentPlanOut(BaseModel):
    time_slots: List[Dict[str, Any]]
    candidate_pairs: List[CandidatePairOut]
    candidate_assignments: List[CandidateAssignmentOut]


class GroupProgressOut(BaseModel):
    course_id: int
    progress: Dict[str, List[str]]  # group -> workshops attended

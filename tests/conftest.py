import os
import tempfile

import pytest

# The app binds its engine at import time; point it at a throwaway file first
_DB_DIR = tempfile.mkdtemp(prefix="programme-tests-")
os.environ["PROGRAMME_DATABASE_URL"] = "sqlite:///" + os.path.join(_DB_DIR, "test.db")

from programme.models import AssessmentConfig, RotationConfig, StationConfig, Subject  # noqa: E402

ASSESSMENT = dict(
    name="Final Assessment", type="assessment", start_time="09:00", end_time="11:00", duration=120,
    number_of_stations=4, number_of_time_slots=4, time_slot_duration=30,
    station_names=["Resus", "Trauma", "Paeds", "Medical"], concurrent_activity_name="Case Review",
)

ROTATION = dict(
    name="Workshops", type="workshop", is_workshop_rotation=True,
    start_time="09:00", end_time="11:40", duration=160,
    number_of_workshops=4, number_of_rotations=4, workshop_duration=40,
    selected_workshop_subjects=["Airway", "ECG", "IV Access", "Splinting"],
)


def make_subject(**overrides) -> Subject:
    data = dict(
        name="Lecture", type="session", day=1,
        start_time="09:00", end_time="10:00", duration=60,
    )
    data.update(overrides)
    return Subject(**data)


def make_rotation(n_workshops=4, rounds=None, groups=("A", "B", "C", "D"), **kw) -> RotationConfig:
    names = tuple(f"Workshop {i + 1}" for i in range(n_workshops))
    return RotationConfig(sub_activity_names=names, rounds=rounds or n_workshops, groups=tuple(groups), **kw)


def make_stations(n_stations=4, n_slots=4, groups=("A", "B", "C", "D"), **kw) -> StationConfig:
    return StationConfig(number_of_stations=n_stations, number_of_time_slots=n_slots, groups=tuple(groups), **kw)


def make_assessment(**overrides) -> AssessmentConfig:
    data = dict(number_of_stations=4, number_of_time_slots=4, concurrent_activity_name="Case Review")
    data.update(overrides)
    return AssessmentConfig(**data)


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from webapp.database import Base, engine
    from webapp.main import app

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def course(client):
    resp = client.post("/api/courses/", json={"name": "Spring Course", "start_date": "2026-03-02"})
    assert resp.status_code == 200
    return resp.json()

"""FastAPI application for the course programme planner."""
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from webapp.database import engine, Base
from webapp.routers import catalogue, courses, planning, subjects

logging.basicConfig(
    level=os.environ.get("PROGRAMME_LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Course Programme Planner",
    description="Workshop rotations, station sessions and assessment slots for course programmes",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins in development
    allow_credentials=False,  # Must be False when allow_origins is "*"
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(courses.router, prefix="/api/courses", tags=["courses"])
app.include_router(subjects.router, prefix="/api/subjects", tags=["subjects"])
app.include_router(planning.router, prefix="/api/planning", tags=["planning"])
app.include_router(catalogue.router, prefix="/api/catalogue", tags=["catalogue"])


@app.get("/")
def root():
    return {"message": "Course Programme Planner API", "docs": "/docs"}

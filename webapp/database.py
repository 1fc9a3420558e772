"""Database setup for SQLite."""
import os
import sys
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

if getattr(sys, 'frozen', False):
    # Running in a PyInstaller bundle
    APP_DATA = Path.home() / "Documents" / "ProgrammePlanner"
    APP_DATA.mkdir(parents=True, exist_ok=True)
    DB_PATH = APP_DATA / "programme.db"
else:
    DB_PATH = Path(__file__).resolve().parent / "programme.db"

DATABASE_URL = os.environ.get("PROGRAMME_DATABASE_URL", f"sqlite:///{DB_PATH}")

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    echo=False,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

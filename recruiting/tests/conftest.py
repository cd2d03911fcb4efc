"""
Shared fixtures: an in-memory SQLite database and a store bound to it.
"""

import os

# Tests always run against a throwaway in-memory database
os.environ["DATABASE_URL"] = "sqlite://"

import pytest

from db import Base, SessionLocal, engine
import recruiting.models  # noqa: F401
from recruiting.config import Settings
from recruiting.logic.adapter import RecruitingStore


@pytest.fixture
def session():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(session):
    return RecruitingStore(session)


@pytest.fixture
def settings():
    return Settings(
        dismiss_cooldown_days=14,
        recreate_window_days=7,
        surface_limit=3,
        cron_secret="test-cron-secret",
    )

"""Tests for the settings data layer."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from sprintboard.domain.db import get_session, init_database
from sprintboard.domain.models import Base, BoardSetting
from sprintboard.domain.repositories import (
    SPRINT_START_KEY,
    BoardSettingRepository,
    TeamCapacityRepository,
)


@pytest.fixture
def db_session():
    """Create in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


def test_capacity_set_and_read(db_session):
    TeamCapacityRepository.set_capacity(db_session, "Bob", 40)
    TeamCapacityRepository.set_capacity(db_session, "Alice", 60)
    TeamCapacityRepository.set_capacity(db_session, "Bob", 50)
    assert TeamCapacityRepository.as_dict(db_session) == {"Alice": 60.0, "Bob": 50.0}


def test_capacity_replace_all(db_session):
    TeamCapacityRepository.set_capacity(db_session, "Old", 10)
    TeamCapacityRepository.replace_all(db_session, {"New": 20})
    assert TeamCapacityRepository.as_dict(db_session) == {"New": 20.0}


def test_setting_get_and_set(db_session):
    assert BoardSettingRepository.get(db_session, "sprint_start") is None
    assert BoardSettingRepository.get(db_session, "sprint_start", "2026-01-01") == "2026-01-01"
    BoardSettingRepository.set(db_session, "sprint_start", "2026-03-01")
    BoardSettingRepository.set(db_session, "sprint_start", "2026-04-01")
    assert BoardSettingRepository.get(db_session, "sprint_start") == "2026-04-01"


def test_visible_fields(db_session):
    assert BoardSettingRepository.get_visible_fields(db_session) == []
    BoardSettingRepository.set_visible_fields(db_session, ["Sprint", "Labels"])
    assert BoardSettingRepository.get_visible_fields(db_session) == ["Sprint", "Labels"]


def test_unreadable_visible_fields_ignored(db_session):
    db_session.add(BoardSetting(key="visible_fields", value="{oops"))
    db_session.commit()
    assert BoardSettingRepository.get_visible_fields(db_session) == []


def test_init_database_creates_directory_and_seeds_sprint_start(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'nested' / 'board.db'}"
    init_database(db_url, sprint_start="2026-04-01")
    assert (tmp_path / "nested" / "board.db").exists()

    session = get_session(db_url)
    try:
        assert BoardSettingRepository.get(session, SPRINT_START_KEY) == "2026-04-01"
    finally:
        session.close()


def test_init_database_keeps_stored_sprint_start(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'board.db'}"
    init_database(db_url, sprint_start="2026-04-01")
    init_database(db_url, sprint_start="2027-01-01")

    session = get_session(db_url)
    try:
        assert BoardSettingRepository.get(session, SPRINT_START_KEY) == "2026-04-01"
    finally:
        session.close()

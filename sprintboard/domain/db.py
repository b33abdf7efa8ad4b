"""Settings database setup and sessions."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from .models import Base
from .repositories import SPRINT_START_KEY, BoardSettingRepository

DEFAULT_DB_URL = "sqlite:///sprintboard.db"


def _ensure_sqlite_dir(db_url: str) -> None:
    url = make_url(db_url)
    if url.get_backend_name() != "sqlite":
        return
    if not url.database or url.database == ":memory:":
        return
    Path(url.database).parent.mkdir(parents=True, exist_ok=True)


def create_db_engine(db_url: str = DEFAULT_DB_URL, echo: bool = False):
    """Engine for ``db_url``; a file-backed SQLite database gets its directory created."""
    _ensure_sqlite_dir(db_url)
    return create_engine(db_url, echo=echo)


def init_database(db_url: str = DEFAULT_DB_URL, sprint_start: Optional[str] = None) -> None:
    """
    Create the settings tables.

    When ``sprint_start`` is given and no start date is stored yet, it is
    recorded so later loads see the configured calendar.
    """
    engine = create_db_engine(db_url)
    Base.metadata.create_all(engine)
    if sprint_start is not None:
        with sessionmaker(bind=engine)() as session:
            if BoardSettingRepository.get(session, SPRINT_START_KEY) is None:
                BoardSettingRepository.set(session, SPRINT_START_KEY, sprint_start)
    print(f"[INFO] Database initialized: {db_url}")


def get_session_factory(db_url: str = DEFAULT_DB_URL):
    """Session factory; tables are created if missing."""
    engine = create_db_engine(db_url)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)


def get_session(db_url: str = DEFAULT_DB_URL) -> Session:
    return get_session_factory(db_url)()

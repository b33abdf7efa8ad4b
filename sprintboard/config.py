"""Board configuration (YAML or JSON)."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from .domain.db import DEFAULT_DB_URL
from .domain.issue import DEFAULT_PROJECT_KEY, DEFAULT_SPRINT_START

DEFAULT_CAPACITY_HOURS = 80.0
MAX_SPRINT = 100


@dataclass
class BoardConfig:
    tasks_path: str = "tasks.csv"
    db_url: str = DEFAULT_DB_URL
    default_project_key: str = DEFAULT_PROJECT_KEY
    default_sprint_start: str = DEFAULT_SPRINT_START
    sprint_length_days: int = 14
    default_capacity_hours: float = DEFAULT_CAPACITY_HOURS
    # Placement scan ceiling; issues that fit nowhere below it land on it
    max_sprint: int = MAX_SPRINT


def _validate(cfg: BoardConfig) -> None:
    if int(cfg.sprint_length_days) <= 0:
        raise ValueError("sprint_length_days must be positive")
    if int(cfg.max_sprint) < 1:
        raise ValueError("max_sprint must be at least 1")
    if float(cfg.default_capacity_hours) < 0:
        raise ValueError("default_capacity_hours must not be negative")
    if not cfg.default_project_key:
        raise ValueError("default_project_key must not be empty")


def load_config(path: str | Path | None = None) -> BoardConfig:
    """
    Load configuration from a YAML or JSON file.

    Relative ``tasks_path`` values are resolved against the config file's directory.
    Without a path, defaults are returned.
    """
    if path is None:
        return BoardConfig()

    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text) if text.strip() else {}
    else:
        data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(BoardConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    cfg = BoardConfig(**data)
    cfg.sprint_length_days = int(cfg.sprint_length_days)
    cfg.max_sprint = int(cfg.max_sprint)
    cfg.default_capacity_hours = float(cfg.default_capacity_hours)
    cfg.default_sprint_start = str(cfg.default_sprint_start)
    _validate(cfg)

    tasks_path = Path(cfg.tasks_path)
    if not tasks_path.is_absolute():
        cfg.tasks_path = str(path.parent / tasks_path)
    return cfg

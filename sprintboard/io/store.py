"""Load and save the board state backed by an export file."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from sqlalchemy.orm import Session

from sprintboard.domain.issue import DEFAULT_PROJECT_KEY, DEFAULT_SPRINT_START, BoardState
from sprintboard.domain.repositories import (
    SPRINT_START_KEY,
    BoardSettingRepository,
    TeamCapacityRepository,
)

from .csv_codec import parse_csv, serialize_csv
from .record_adapter import DEFAULT_HEADERS, ColumnIndex, load_issues, merge_rows


class TaskStore:
    """
    Owns the backing export file and the rows last read from it.
    
    ``load_state`` remembers headers and rows so ``save_state`` can put
    untouched columns and row order back. Writes are last-write-wins; callers
    that share the file must serialize access themselves.
    """
    
    def __init__(
        self,
        tasks_path: str | Path,
        session: Optional[Session] = None,
        default_project_key: str = DEFAULT_PROJECT_KEY,
        default_sprint_start: str = DEFAULT_SPRINT_START,
    ):
        """
        Args:
            tasks_path: Path of the export file
            session: Optional settings session for capacity and sprint start
            default_project_key: Project key when no issue provides one
            default_sprint_start: Sprint 1 start when none is stored
        """
        self.tasks_path = Path(tasks_path)
        self.session = session
        self.default_project_key = default_project_key
        self.default_sprint_start = default_sprint_start
        self.headers: List[str] = []
        self.rows: List[List[str]] = []
        self.columns = ColumnIndex()
    
    def _read_table(self) -> None:
        if not self.tasks_path.exists():
            self.headers, self.rows = [], []
            return
        # Line endings belong to the codec; bad bytes decode to U+FFFD
        with open(self.tasks_path, encoding="utf-8", errors="replace", newline="") as f:
            table = parse_csv(f.read())
        self.headers, self.rows = table.headers, table.rows
        self.columns = ColumnIndex.from_headers(self.headers)
    
    def load_state(self) -> BoardState:
        """Read the export (empty board if the file is missing)."""
        self._read_table()
        loaded = load_issues(self.headers, self.rows, self.default_project_key)
        self.columns = loaded.columns
        
        state = BoardState(
            next_id=loaded.next_id,
            project_key=loaded.project_key,
            sprint_start=self.default_sprint_start,
            team_capacity={},
            issues=loaded.issues,
        )
        if self.session is not None:
            state.team_capacity = TeamCapacityRepository.as_dict(self.session)
            state.sprint_start = BoardSettingRepository.get(
                self.session, SPRINT_START_KEY, self.default_sprint_start
            )
        print(f"[INFO] Loaded {len(state.issues)} issues from {self.tasks_path}")
        return state
    
    def save_state(self, state: BoardState) -> None:
        """Write ``state`` back, merging with the rows from the last load."""
        if not self.headers:
            self._read_table()
        if not self.headers:
            self.headers = list(DEFAULT_HEADERS)
            self.rows = []
            self.columns = ColumnIndex.from_headers(self.headers)
        
        self.rows = merge_rows(state.issues, self.headers, self.rows, self.columns)
        self.tasks_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.tasks_path, "w", encoding="utf-8", newline="") as f:
            f.write(serialize_csv(self.headers, self.rows))
        
        if self.session is not None:
            TeamCapacityRepository.replace_all(self.session, state.team_capacity)
            BoardSettingRepository.set(self.session, SPRINT_START_KEY, state.sprint_start)
        print(f"[INFO] Wrote {len(self.rows)} issues to {self.tasks_path}")

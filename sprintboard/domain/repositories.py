"""Repository classes for settings access."""

from __future__ import annotations

import json
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from .models import BoardSetting, TeamMember

SPRINT_START_KEY = "sprint_start"
VISIBLE_FIELDS_KEY = "visible_fields"


class TeamCapacityRepository:
    """Repository for the team capacity table."""
    
    @staticmethod
    def get_all(session: Session) -> List[TeamMember]:
        """Get all team members ordered by name."""
        return session.query(TeamMember).order_by(TeamMember.name).all()
    
    @staticmethod
    def as_dict(session: Session) -> Dict[str, float]:
        """Capacity table as ``{name: hours}``."""
        return {m.name: float(m.capacity_hours) for m in TeamCapacityRepository.get_all(session)}
    
    @staticmethod
    def set_capacity(session: Session, name: str, hours: float) -> TeamMember:
        """Create or update one member's capacity."""
        member = session.get(TeamMember, name)
        if member is None:
            member = TeamMember(name=name, capacity_hours=float(hours))
            session.add(member)
        else:
            member.capacity_hours = float(hours)
        session.commit()
        return member
    
    @staticmethod
    def replace_all(session: Session, capacity: Dict[str, float]) -> None:
        """Replace the whole table with ``capacity``."""
        session.query(TeamMember).delete(synchronize_session=False)
        session.add_all(
            [TeamMember(name=name, capacity_hours=float(hours)) for name, hours in capacity.items()]
        )
        session.commit()


class BoardSettingRepository:
    """Repository for key-value board settings."""
    
    @staticmethod
    def get(session: Session, key: str, default: Optional[str] = None) -> Optional[str]:
        setting = session.get(BoardSetting, key)
        return setting.value if setting is not None else default
    
    @staticmethod
    def set(session: Session, key: str, value: str) -> None:
        setting = session.get(BoardSetting, key)
        if setting is None:
            session.add(BoardSetting(key=key, value=value))
        else:
            setting.value = value
        session.commit()
    
    @staticmethod
    def get_visible_fields(session: Session) -> List[str]:
        """Column names the board shows beside the modelled fields."""
        raw = BoardSettingRepository.get(session, VISIBLE_FIELDS_KEY)
        if not raw:
            return []
        try:
            fields = json.loads(raw)
        except json.JSONDecodeError:
            print(f"[WARN] Ignoring unreadable {VISIBLE_FIELDS_KEY} setting")
            return []
        return [str(f) for f in fields] if isinstance(fields, list) else []
    
    @staticmethod
    def set_visible_fields(session: Session, fields: List[str]) -> None:
        BoardSettingRepository.set(session, VISIBLE_FIELDS_KEY, json.dumps(list(fields)))

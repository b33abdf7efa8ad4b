"""Domain entities, vocabularies and the settings data layer."""

from .issue import BoardState, Issue
from .models import Base, BoardSetting, TeamMember
from .repositories import BoardSettingRepository, TeamCapacityRepository

__all__ = [
    "Issue",
    "BoardState",
    "Base",
    "TeamMember",
    "BoardSetting",
    "TeamCapacityRepository",
    "BoardSettingRepository",
]

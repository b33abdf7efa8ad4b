"""SQLAlchemy models for board settings."""

from __future__ import annotations

from sqlalchemy import Column, Float, String, Text
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class TeamMember(Base):
    """Per-sprint capacity of one assignee."""
    
    __tablename__ = "team_members"
    
    name = Column(String(200), primary_key=True)
    capacity_hours = Column(Float, nullable=False)
    
    def __repr__(self) -> str:
        return f"<TeamMember(name='{self.name}', capacity={self.capacity_hours})>"


class BoardSetting(Base):
    """Free-form board setting (sprint start, visible fields, ...)."""
    
    __tablename__ = "board_settings"
    
    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)  # JSON for structured values
    
    def __repr__(self) -> str:
        return f"<BoardSetting(key='{self.key}', value='{self.value}')>"

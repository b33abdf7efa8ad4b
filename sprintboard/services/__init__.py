"""Services for planning logic."""

from .calendar import format_window, sprint_window
from .capacity import CapacityLedger, capacity_for

__all__ = [
    "CapacityLedger",
    "capacity_for",
    "sprint_window",
    "format_window",
]

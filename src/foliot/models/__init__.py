"""Data models."""

from .duration import Duration
from .entries import ClockinMarker, ClockStatus, Entry, EntryRow, MonthlySummary

__all__ = ["Duration", "Entry", "ClockinMarker", "ClockStatus", "EntryRow", "MonthlySummary"]

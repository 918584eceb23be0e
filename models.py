"""Record types for the FyningTime import.

``Legacy*`` records mirror the old schema's text columns. ``Normalized*``
records are shaped like the KTime tables and are what the script is built
from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum
from typing import Optional


# --- LEGACY SCHEMA ---
@dataclass(frozen=True)
class LegacyWorkday:
    legacy_id: int
    date_text: str
    target_hours_text: str
    break_minutes_text: str


@dataclass(frozen=True)
class LegacyWorktime:
    legacy_id: int
    workday_id: int
    type: str
    timestamp_text: str


@dataclass(frozen=True)
class LegacyVacation:
    legacy_id: int
    start_date_text: str
    end_date_text: str


# --- CURRENT SCHEMA ---
class VacationType(Enum):
    VACATION = "VACATION"
    SICK_LEAVE = "SICK_LEAVE"
    BUSINESS_TRIP = "BUSINESS_TRIP"
    OTHER = "OTHER"


@dataclass(frozen=True)
class NormalizedWorkday:
    date: date
    target_hours: float
    break_minutes: int


@dataclass(frozen=True)
class NormalizedInterval:
    workday_date: date
    start_time: time
    end_time: time
    break_minutes: int

    def duration_hours(self) -> float:
        """Net worked hours; negative when the end lies before the start."""
        start = self.start_time.hour * 60 + self.start_time.minute
        end = self.end_time.hour * 60 + self.end_time.minute
        return (end - start - self.break_minutes) / 60


@dataclass(frozen=True)
class NormalizedVacation:
    start_date: date
    end_date: Optional[date]
    type: VacationType
    notes: Optional[str] = None


@dataclass(frozen=True)
class FailedRow:
    """A legacy row that could not become a normalized record."""

    table: str
    legacy_id: int
    reason: str


@dataclass(frozen=True)
class MigrationPreview:
    """Everything one analysis run would migrate, in legacy row order."""

    workdays: tuple[NormalizedWorkday, ...] = ()
    worktimes: tuple[NormalizedInterval, ...] = ()
    vacations: tuple[NormalizedVacation, ...] = ()
    failed: tuple[FailedRow, ...] = field(default=())

    @property
    def is_empty(self) -> bool:
        return not (self.workdays or self.worktimes or self.vacations)

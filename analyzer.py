"""Turns legacy FyningTime rows into a MigrationPreview."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, time
from typing import Optional

from errors import AnalysisError
from interpreters import (
    extract_date_from_timestamp,
    extract_time_from_timestamp,
    parse_break_time_to_minutes,
    parse_time_to_hours,
)
from legacy_reader import LegacyReader, decode_vacation, decode_workday, decode_worktime
from models import (
    FailedRow,
    LegacyWorktime,
    MigrationPreview,
    NormalizedInterval,
    NormalizedVacation,
    NormalizedWorkday,
    VacationType,
)

logger = logging.getLogger(__name__)

START_MARKERS = {"start", "begin", "in"}
END_MARKERS = {"end", "stop", "out"}


def _parse_date(text: str) -> Optional[date]:
    iso = extract_date_from_timestamp(text)
    if not iso:
        return None
    try:
        return date.fromisoformat(iso)
    except ValueError:
        return None


class MigrationAnalyzer:
    """Reads every legacy table once and builds the preview.

    Nothing is written; the only side effect is reading from ``reader``.
    """

    def __init__(self, reader: LegacyReader, default_vacation_type: VacationType = VacationType.OTHER):
        self.reader = reader
        self.default_vacation_type = default_vacation_type

    def analyze(self) -> MigrationPreview:
        if not self.reader.is_connected:
            raise AnalysisError("Analysis needs an open legacy database connection")

        failed: list[FailedRow] = []
        try:
            workdays, by_id = self._workdays(failed)
            worktimes = self._worktimes(by_id, {w.date for w in workdays}, failed)
            vacations = self._vacations(failed)
        except sqlite3.Error as exc:
            raise AnalysisError(f"Reading the legacy database failed: {exc}") from exc

        for row in failed:
            logger.warning("Skipped %s row %s: %s", row.table, row.legacy_id, row.reason)
        logger.info(
            "Analyzed legacy data: %d workdays, %d intervals, %d vacations, %d skipped",
            len(workdays), len(worktimes), len(vacations), len(failed),
        )
        return MigrationPreview(tuple(workdays), tuple(worktimes), tuple(vacations), tuple(failed))

    def _workdays(self, failed):
        workdays = []
        by_id = {}
        for raw in self.reader.read_workdays():
            legacy = decode_workday(raw)
            day = _parse_date(legacy.date_text)
            if day is None:
                failed.append(FailedRow("workdays", legacy.legacy_id, f"unreadable date {legacy.date_text!r}"))
                continue
            workday = NormalizedWorkday(
                date=day,
                target_hours=parse_time_to_hours(legacy.target_hours_text),
                break_minutes=parse_break_time_to_minutes(legacy.break_minutes_text),
            )
            workdays.append(workday)
            by_id[legacy.legacy_id] = workday
        return workdays, by_id

    def _worktimes(self, by_id, known_dates, failed):
        groups: dict[int, list[LegacyWorktime]] = {}
        for raw in self.reader.read_worktimes():
            legacy = decode_worktime(raw)
            groups.setdefault(legacy.workday_id, []).append(legacy)

        intervals = []
        for workday_id, events in groups.items():
            workday = by_id.get(workday_id)
            if workday is None:
                for event in events:
                    failed.append(FailedRow("worktimes", event.legacy_id, f"unknown workday {workday_id}"))
                continue

            break_minutes = workday.break_minutes
            for start, end in self._pair(events, failed):
                interval_date = _parse_date(start.timestamp_text)
                if interval_date not in known_dates:
                    # overnight shifts start on the previous date
                    interval_date = workday.date
                intervals.append(NormalizedInterval(
                    workday_date=interval_date,
                    start_time=time.fromisoformat(extract_time_from_timestamp(start.timestamp_text)),
                    end_time=time.fromisoformat(extract_time_from_timestamp(end.timestamp_text)),
                    break_minutes=break_minutes,
                ))
                # the day's break belongs to its first interval only
                break_minutes = 0
        return intervals

    @staticmethod
    def _pair(events, failed):
        """Yield (start, end) event pairs in row order, recording strays."""
        pending = None
        for event in events:
            marker = event.type.strip().lower()
            if marker in START_MARKERS:
                if pending is not None:
                    failed.append(FailedRow("worktimes", pending.legacy_id, "start without matching end"))
                pending = event
            elif marker in END_MARKERS:
                if pending is None:
                    failed.append(FailedRow("worktimes", event.legacy_id, "end without matching start"))
                    continue
                yield pending, event
                pending = None
            else:
                failed.append(FailedRow("worktimes", event.legacy_id, f"unknown event type {event.type!r}"))
        if pending is not None:
            failed.append(FailedRow("worktimes", pending.legacy_id, "start without matching end"))

    def _vacations(self, failed):
        vacations = []
        for raw in self.reader.read_vacations():
            legacy = decode_vacation(raw)
            start = _parse_date(legacy.start_date_text)
            if start is None:
                failed.append(FailedRow("vacations", legacy.legacy_id,
                                        f"unreadable start date {legacy.start_date_text!r}"))
                continue
            end = None
            if legacy.end_date_text.strip():
                end = _parse_date(legacy.end_date_text)
                if end is None:
                    failed.append(FailedRow("vacations", legacy.legacy_id,
                                            f"unreadable end date {legacy.end_date_text!r}"))
                    continue
            vacations.append(NormalizedVacation(start, end, self.default_vacation_type))
        return vacations

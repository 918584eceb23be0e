"""Render a MigrationPreview as a SQL script for the KTime store.

Each record becomes one ``INSERT ... SELECT ... WHERE NOT EXISTS`` statement,
so running the script a second time inserts nothing. Work intervals and
vacations find their day by date because KTime assigns ids on insert; a
vacation starting on a date without a workday gets a non-work day row first.
"""

from __future__ import annotations

from datetime import date, time

from errors import EmptyPreviewError
from models import MigrationPreview, NormalizedInterval, NormalizedVacation, NormalizedWorkday

HEADER = "-- FyningTime to KTime migration. Review before running."


def quote_literal(value) -> str:
    """Render ``value`` as a SQLite literal."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, date):
        value = value.isoformat()
    elif isinstance(value, time):
        value = value.strftime("%H:%M")
    return "'" + str(value).replace("'", "''") + "'"


def _day_id(day: date) -> str:
    return f"(SELECT id FROM CurrentDays WHERE date = {quote_literal(day)} ORDER BY id LIMIT 1)"


def _day_sql(day: date, is_work_day: bool, target_hours: float) -> str:
    values = ", ".join(quote_literal(v) for v in (day, is_work_day, target_hours, None))
    return (
        "INSERT INTO CurrentDays (date, is_work_day, target_hours, notes) "
        f"SELECT {values} "
        f"WHERE NOT EXISTS (SELECT 1 FROM CurrentDays WHERE date = {quote_literal(day)});"
    )


def _workday_sql(workday: NormalizedWorkday) -> str:
    return _day_sql(workday.date, True, workday.target_hours)


def _interval_sql(interval: NormalizedInterval) -> str:
    day_id = _day_id(interval.workday_date)
    start = quote_literal(interval.start_time)
    end = quote_literal(interval.end_time)
    values = ", ".join([day_id, start, end, quote_literal(interval.break_minutes), "NULL"])
    return (
        "INSERT INTO WorkTimes (current_day_id, start_time, end_time, break_duration, notes) "
        f"SELECT {values} "
        "WHERE NOT EXISTS (SELECT 1 FROM WorkTimes "
        f"WHERE current_day_id = {day_id} AND start_time = {start} AND end_time = {end});"
    )


def _vacation_sql(vacation: NormalizedVacation) -> str:
    day_id = _day_id(vacation.start_date)
    end = quote_literal(vacation.end_date)
    values = ", ".join([day_id, end, quote_literal(vacation.type.value), quote_literal(vacation.notes)])
    return (
        "INSERT INTO Vacations (current_day_id, end_date, type, notes) "
        f"SELECT {values} "
        "WHERE NOT EXISTS (SELECT 1 FROM Vacations "
        f"WHERE current_day_id = {day_id} AND end_date IS {end});"
    )


def _vacation_days(preview: MigrationPreview) -> list[date]:
    """Vacation start dates that have no workday; KTime needs a day row for them."""
    known = {w.date for w in preview.workdays}
    days = []
    for vacation in preview.vacations:
        if vacation.start_date not in known:
            known.add(vacation.start_date)
            days.append(vacation.start_date)
    return days


def generate(preview: MigrationPreview) -> str:
    """Return the migration script; raises EmptyPreviewError for an empty preview."""
    if preview.is_empty:
        raise EmptyPreviewError("Nothing to migrate: the preview holds no records.")

    lines = [HEADER, "BEGIN TRANSACTION;", ""]
    sections = (
        ("Workdays", preview.workdays, _workday_sql),
        ("Vacation days", _vacation_days(preview), lambda day: _day_sql(day, False, 0.0)),
        ("Work intervals", preview.worktimes, _interval_sql),
        ("Vacations", preview.vacations, _vacation_sql),
    )
    for title, records, render in sections:
        lines.append(f"-- {title}: {len(records)}")
        lines.extend(render(record) for record in records)
        lines.append("")
    lines.append("COMMIT;")
    return "\n".join(lines) + "\n"

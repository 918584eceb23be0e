import pytest

from errors import (
    AnalysisError,
    ConfigurationError,
    EmptyPreviewError,
    LegacyConnectionError,
    NoDataFoundError,
    ScriptWriteError,
)
from migrate import MigrationSession, migrate
from models import VacationType
from storage import fetch_days, fetch_settings, fetch_vacations, fetch_work_times


def insert_tables(script_path):
    return [line.split()[2] for line in script_path.read_text().splitlines() if line.startswith("INSERT INTO")]


def test_end_to_end_scenario(sample_db, tmp_path):
    script_path = tmp_path / "fyningtime2ktime.migration.sql"
    preview, path = migrate(sample_db, script_path=script_path)

    assert len(preview.workdays) == 1
    assert preview.workdays[0].target_hours == 8.0
    assert preview.workdays[0].break_minutes == 30
    interval = preview.worktimes[0]
    assert (interval.start_time.strftime("%H:%M"), interval.end_time.strftime("%H:%M")) == ("09:30", "17:45")
    assert preview.vacations[0].type is VacationType.OTHER

    # 2023-07-01 has no workday, so KTime needs a day row before the vacation
    assert insert_tables(script_path) == ["CurrentDays", "CurrentDays", "WorkTimes", "Vacations"]
    assert path == script_path


def test_end_to_end_vacation_on_workday_date(make_legacy_db, tmp_path):
    legacy = make_legacy_db(
        workdays=[(1, "2023-07-01", "8h0m0s", "30m")],
        worktimes=[(1, 1, "start", "2023-07-01 09:30:00+0200"), (2, 1, "end", "2023-07-01 17:45:00+0200")],
        vacations=[(1, "2023-07-01", "2023-07-14")],
    )
    script_path = tmp_path / "out.sql"
    migrate(legacy, script_path=script_path)
    assert insert_tables(script_path) == ["CurrentDays", "WorkTimes", "Vacations"]


def test_apply_writes_live_store(sample_db, tmp_path):
    db_path = str(tmp_path / "ktime.db")
    migrate(sample_db, script_path=tmp_path / "out.sql", apply=True, db_path=db_path)
    # a second run must not duplicate anything
    migrate(sample_db, script_path=tmp_path / "out.sql", apply=True, db_path=db_path)

    days = fetch_days(db_path)
    assert [(d["date"], d["is_work_day"], d["target_hours"]) for d in days] == [
        ("2023-05-15", 1, 8.0),
        ("2023-07-01", 0, 0.0),
    ]
    work = fetch_work_times(db_path)
    assert [(w["date"], w["start_time"], w["end_time"], w["break_duration"]) for w in work] == [
        ("2023-05-15", "09:30", "17:45", 30)
    ]
    vacations = fetch_vacations(db_path)
    assert [(v["start_date"], v["end_date"], v["type"]) for v in vacations] == [
        ("2023-07-01", "2023-07-14", "OTHER")
    ]
    assert fetch_settings(db_path)["fyningtime_migrated_from"].endswith("fyningtime.db")


def test_unknown_configured_vacation_type():
    with pytest.raises(ConfigurationError, match="HOLIDAY"):
        MigrationSession(default_vacation_type="HOLIDAY")


def test_unwritable_script_path(sample_db, tmp_path):
    session = MigrationSession(script_path=tmp_path / "missing-dir" / "out.sql")
    session.select_file(sample_db)
    session.analyze()
    with pytest.raises(ScriptWriteError, match="Could not write"):
        session.execute()
    assert not session.reader.is_connected


def test_empty_database_is_not_migrated(make_legacy_db, tmp_path):
    script_path = tmp_path / "out.sql"
    with pytest.raises(EmptyPreviewError, match="No data found"):
        migrate(make_legacy_db(), script_path=script_path)
    assert not script_path.exists()


def test_missing_file_message(tmp_path):
    with pytest.raises(LegacyConnectionError, match="not found"):
        migrate(tmp_path / "missing.db", script_path=tmp_path / "out.sql")


def test_session_requires_file_and_preview(tmp_path):
    session = MigrationSession(script_path=tmp_path / "out.sql")
    with pytest.raises(AnalysisError, match="select a database"):
        session.analyze()
    with pytest.raises(AnalysisError, match="analyze the database"):
        session.execute()


def test_session_closes_connection_on_every_path(sample_db, make_legacy_db, tmp_path):
    session = MigrationSession(script_path=tmp_path / "out.sql")

    session.select_file(make_legacy_db(name="empty.db"))
    with pytest.raises(NoDataFoundError):
        session.analyze()
    assert not session.reader.is_connected

    session.select_file(sample_db)
    session.analyze()
    assert session.reader.is_connected
    session.execute()
    assert not session.reader.is_connected


def test_select_file_discards_previous_preview(sample_db, tmp_path):
    session = MigrationSession(script_path=tmp_path / "out.sql")
    session.select_file(sample_db)
    session.analyze()
    session.select_file(tmp_path / "other.db")
    assert session.preview is None
    assert not session.reader.is_connected


def test_configured_vacation_type(sample_db, tmp_path):
    session = MigrationSession(script_path=tmp_path / "out.sql", default_vacation_type="VACATION")
    session.select_file(sample_db)
    assert session.analyze().vacations[0].type is VacationType.VACATION
    session.close()

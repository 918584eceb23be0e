"""
Import a FyningTime database into KTime.

A migration runs in two steps. ``analyze`` reads the legacy file and builds a
preview without writing anything. ``execute`` turns that preview into a SQL
script saved next to the working directory for manual review; applying it to
the live store is a separate, explicit step.
"""
import logging
import os

from analyzer import MigrationAnalyzer
from config import DB_PATH, DEFAULT_VACATION_TYPE, SCRIPT_FILENAME
from errors import AnalysisError, ConfigurationError, NoDataFoundError, ScriptWriteError
from legacy_reader import LegacyReader
from models import VacationType
from sql_script import generate
from storage import apply_script, save_setting

logger = logging.getLogger(__name__)


class MigrationSession:
    """One legacy file, one preview, one script."""

    def __init__(self, script_path=SCRIPT_FILENAME, default_vacation_type=DEFAULT_VACATION_TYPE):
        self.script_path = script_path
        try:
            self.default_vacation_type = VacationType(default_vacation_type)
        except ValueError as exc:
            choices = ", ".join(t.value for t in VacationType)
            raise ConfigurationError(
                f"Unknown default_vacation_type {default_vacation_type!r}, expected one of {choices}"
            ) from exc
        self.reader = LegacyReader()
        self.selected_path = ""
        self.preview = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def select_file(self, path):
        self.close()
        self.selected_path = os.fspath(path)
        self.preview = None

    def analyze(self):
        """Connect to the selected file and build the preview."""
        if not self.selected_path:
            raise AnalysisError("Please select a database file first.")

        self.preview = None
        try:
            self.reader.connect(self.selected_path)
            preview = MigrationAnalyzer(self.reader, self.default_vacation_type).analyze()
        except Exception:
            self.close()
            raise

        if preview.is_empty:
            self.close()
            raise NoDataFoundError(
                f"No data found in {self.selected_path}, or its format is not compatible."
            )
        self.preview = preview
        return preview

    def execute(self):
        """Write the migration script for the current preview and return its path."""
        try:
            if self.preview is None:
                raise AnalysisError("Please analyze the database first.")
            script = generate(self.preview)
            try:
                with open(self.script_path, 'w', encoding='utf-8') as f:
                    f.write(script)
            except OSError as exc:
                raise ScriptWriteError(f"Could not write migration script {self.script_path}: {exc}") from exc
        finally:
            self.close()
        logger.info("Migration SQL saved to %s", self.script_path)
        return self.script_path

    def close(self):
        self.reader.close()


def migrate(legacy_path, script_path=SCRIPT_FILENAME, apply=False, db_path=DB_PATH):
    """Analyze ``legacy_path``, write the script and optionally apply it."""
    with MigrationSession(script_path) as session:
        session.select_file(legacy_path)
        preview = session.analyze()
        path = session.execute()

    if apply:
        with open(path, 'r', encoding='utf-8') as f:
            apply_script(f.read(), db_path)
        save_setting("fyningtime_migrated_from", os.path.abspath(legacy_path), db_path)
    return preview, path

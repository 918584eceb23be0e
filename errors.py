"""Errors raised by the FyningTime migration engine.

Every error carries a message meant to be shown to the user as is.
"""


class MigrationError(Exception):
    """Base class for migration failures."""


class LegacyConnectionError(MigrationError):
    """The legacy file is missing, unreadable, or not a FyningTime database."""


class AnalysisError(MigrationError):
    """Analysis ran without a connection or the legacy data was malformed."""


class EmptyPreviewError(MigrationError):
    """There is nothing to migrate."""


class NoDataFoundError(EmptyPreviewError):
    """The legacy database was readable but held no migratable rows."""


class ConfigurationError(MigrationError):
    """A configured value is not usable."""


class ScriptWriteError(MigrationError):
    """The migration script could not be written."""

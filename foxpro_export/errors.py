#!/usr/bin/env python3
"""
Error kinds raised while exporting a FoxPro database.

Everything derives from ExportError so the CLI can tell data-layer failures
apart from anything unexpected. UsageError is reported separately (usage line,
exit status 2).
"""


class ExportError(Exception):
    """Base class for every failure the exporter reports."""


class DatabaseConnectionError(ExportError, ConnectionError):
    """The database could not be opened, or the connection was lost."""


class SchemaIntrospectionError(ExportError):
    """Listing tables or columns through the provider's schema rowsets failed."""


class UnsupportedTypeError(ExportError):
    """A raw type code or type tag has no known mapping."""


class NullValueError(ExportError):
    """A data cell was NULL where a value was required."""


class UsageError(ExportError):
    """Command-line arguments failed validation."""

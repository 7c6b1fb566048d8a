from __future__ import annotations


class WinAdminError(Exception):
    """Base class for all winadmin errors."""


class InputError(WinAdminError):
    """The input file could not be read or is missing required columns."""


class OperationFailed(WinAdminError):
    """The operating system rejected a create/delete request."""


class Unavailable(WinAdminError):
    """An instrumentation source could not be queried."""


class AuditLogUnavailable(Unavailable):
    """The Security event log could not be opened or read."""

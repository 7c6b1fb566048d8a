from __future__ import annotations

import logging
from datetime import datetime

from winadmin.errors import AuditLogUnavailable
from winadmin.providers.base import SecurityAuditLog

logger = logging.getLogger(__name__)

FAILED_LOGON_EVENT_ID = 4625


class WindowsSecurityAuditLog(SecurityAuditLog):
    """Reads the Windows event log newest-first through win32evtlog."""

    def __init__(self, log_name: str = "Security") -> None:
        self.log_name = log_name

    def count_events_since(self, event_id: int, since: datetime) -> int:
        try:
            import pywintypes  # type: ignore[import-not-found]
            import win32evtlog  # type: ignore[import-not-found]
        except ImportError as exc:
            raise AuditLogUnavailable("win32evtlog is not available on this host") from exc

        try:
            handle = win32evtlog.OpenEventLog(None, self.log_name)
        except pywintypes.error as exc:
            raise AuditLogUnavailable(f"cannot open {self.log_name} log: {exc.strerror}") from exc

        cutoff = since.timestamp()
        flags = win32evtlog.EVENTLOG_BACKWARDS_READ | win32evtlog.EVENTLOG_SEQUENTIAL_READ
        count = 0
        try:
            while True:
                records = win32evtlog.ReadEventLog(handle, flags, 0)
                if not records:
                    break
                for record in records:
                    # newest first: everything after this is older
                    if record.TimeGenerated.timestamp() < cutoff:
                        return count
                    if record.EventID & 0xFFFF == event_id:
                        count += 1
        except pywintypes.error as exc:
            raise AuditLogUnavailable(f"cannot read {self.log_name} log: {exc.strerror}") from exc
        finally:
            win32evtlog.CloseEventLog(handle)

        logger.debug("Counted %d events with id %d in %s", count, event_id, self.log_name)
        return count

from __future__ import annotations

import logging
import os

import psutil

from winadmin.models import DiskStats, MemoryStats
from winadmin.providers.base import SystemMetrics

logger = logging.getLogger(__name__)


def system_drive() -> str:
    return os.environ.get("SystemDrive", "C:")


class PsutilSystemMetrics(SystemMetrics):
    """psutil-backed metrics with a Win32 primary source for disk capacity."""

    def __init__(self, drive: str | None = None) -> None:
        self.drive = drive or system_drive()

    def cpu_percent(self, interval: float) -> float:
        return round(psutil.cpu_percent(interval=interval), 1)

    def memory_stats(self) -> MemoryStats:
        mem = psutil.virtual_memory()
        return MemoryStats(total_bytes=mem.total, free_bytes=mem.available)

    def disk_stats(self) -> DiskStats | None:
        root = self.drive.rstrip("\\") + "\\"
        for source in (self._disk_from_win32, self._disk_from_psutil):
            stats = source(root)
            if stats is not None and stats.total_bytes > 0:
                return stats
        return None

    def _disk_from_win32(self, root: str) -> DiskStats | None:
        try:
            import win32api  # type: ignore[import-not-found]

            _free_to_caller, total, total_free = win32api.GetDiskFreeSpaceEx(root)
        except Exception:
            logger.debug("GetDiskFreeSpaceEx failed for %s", root, exc_info=True)
            return None
        return DiskStats(drive=self.drive, total_bytes=total, free_bytes=total_free)

    def _disk_from_psutil(self, root: str) -> DiskStats | None:
        try:
            usage = psutil.disk_usage(root)
        except OSError:
            logger.debug("psutil.disk_usage failed for %s", root, exc_info=True)
            return None
        return DiskStats(drive=self.drive, total_bytes=usage.total, free_bytes=usage.free)

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from winadmin.models import DiskStats, MemoryStats, ProfileInfo


class AccountDirectory(ABC):
    """Local account database of the host.

    Mutating methods raise :class:`~winadmin.errors.OperationFailed` when the
    operating system rejects the request.
    """

    @abstractmethod
    def exists(self, username: str) -> bool: ...

    @abstractmethod
    def create(self, username: str, password: str, full_name: str, description: str) -> None: ...

    @abstractmethod
    def set_enabled(self, username: str, enabled: bool) -> None: ...

    @abstractmethod
    def get_sid(self, username: str) -> str: ...

    @abstractmethod
    def delete(self, username: str) -> None: ...


class ProfileStore(ABC):
    """User profiles (folder + registry entry) keyed by account SID."""

    @abstractmethod
    def find(self, sid: str) -> ProfileInfo | None: ...

    @abstractmethod
    def delete(self, profile: ProfileInfo) -> None: ...


class SystemMetrics(ABC):
    """CPU, memory and boot-drive capacity of the local machine."""

    drive: str = "C:"  # boot drive the disk figures refer to

    @abstractmethod
    def cpu_percent(self, interval: float) -> float: ...

    @abstractmethod
    def memory_stats(self) -> MemoryStats: ...

    @abstractmethod
    def disk_stats(self) -> DiskStats | None:
        """Boot drive capacity, or ``None`` when no source reports a total."""
        ...


class SecurityAuditLog(ABC):
    @abstractmethod
    def count_events_since(self, event_id: int, since: datetime) -> int:
        """Count *event_id* records newer than *since*.

        Raises :class:`~winadmin.errors.AuditLogUnavailable` if the log
        cannot be read.
        """
        ...


class NetworkProbe(ABC):
    """Best-effort network checks. Implementations never raise."""

    @abstractmethod
    def reachable(self, target: str) -> bool: ...

    @abstractmethod
    def latency_samples(self, target: str, count: int) -> list[float]: ...

    @abstractmethod
    def default_gateway(self) -> str | None: ...

    @abstractmethod
    def public_ip(self, url: str, timeout: float) -> str | None: ...

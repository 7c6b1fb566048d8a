"""In-memory fakes of the OS capability interfaces."""

from __future__ import annotations

from datetime import datetime

import pytest

from winadmin.errors import AuditLogUnavailable, OperationFailed
from winadmin.models import DiskStats, MemoryStats, ProfileInfo
from winadmin.providers.base import (
    AccountDirectory,
    NetworkProbe,
    ProfileStore,
    SecurityAuditLog,
    SystemMetrics,
)


class FakeAccountDirectory(AccountDirectory):
    def __init__(self) -> None:
        self.accounts: dict[str, dict] = {}
        self.fail_create: dict[str, str] = {}
        self.fail_delete: dict[str, str] = {}
        self.deleted: list[str] = []
        self._next_rid = 1001

    def add(self, username: str, enabled: bool = True) -> str:
        sid = f"S-1-5-21-1000-2000-3000-{self._next_rid}"
        self._next_rid += 1
        self.accounts[username] = {
            "sid": sid,
            "enabled": enabled,
            "password": "",
            "full_name": "",
            "description": "",
        }
        return sid

    def exists(self, username: str) -> bool:
        return username in self.accounts

    def create(self, username: str, password: str, full_name: str, description: str) -> None:
        if username in self.fail_create:
            raise OperationFailed(self.fail_create[username])
        if username in self.accounts:
            raise OperationFailed("The account already exists.")
        self.add(username, enabled=False)
        self.accounts[username].update(
            password=password, full_name=full_name, description=description
        )

    def set_enabled(self, username: str, enabled: bool) -> None:
        self.accounts[username]["enabled"] = enabled

    def get_sid(self, username: str) -> str:
        return self.accounts[username]["sid"]

    def delete(self, username: str) -> None:
        if username in self.fail_delete:
            raise OperationFailed(self.fail_delete[username])
        del self.accounts[username]
        self.deleted.append(username)


class FakeProfileStore(ProfileStore):
    def __init__(self) -> None:
        self.profiles: dict[str, ProfileInfo] = {}
        self.fail_delete: set[str] = set()
        self.deleted: list[str] = []

    def add(self, sid: str, path: str, loaded: bool = False) -> None:
        self.profiles[sid] = ProfileInfo(sid=sid, path=path, loaded=loaded)

    def find(self, sid: str) -> ProfileInfo | None:
        return self.profiles.get(sid)

    def delete(self, profile: ProfileInfo) -> None:
        if profile.sid in self.fail_delete:
            raise OperationFailed("The process cannot access the file because it is being used by another process.")
        del self.profiles[profile.sid]
        self.deleted.append(profile.sid)


class FakeSystemMetrics(SystemMetrics):
    def __init__(self) -> None:
        self.cpu = 12.34
        self.memory = MemoryStats(total_bytes=16 * 1024**3, free_bytes=4 * 1024**3)
        self.disk: DiskStats | None = DiskStats(
            drive="C:", total_bytes=500 * 1024**3, free_bytes=125 * 1024**3
        )
        self.cpu_intervals: list[float] = []

    def cpu_percent(self, interval: float) -> float:
        self.cpu_intervals.append(interval)
        return self.cpu

    def memory_stats(self) -> MemoryStats:
        return self.memory

    def disk_stats(self) -> DiskStats | None:
        return self.disk


class FakeAuditLog(SecurityAuditLog):
    def __init__(self, events: list[tuple[int, datetime]] | None = None, denied: bool = False) -> None:
        self.events = events or []
        self.denied = denied

    def count_events_since(self, event_id: int, since: datetime) -> int:
        if self.denied:
            raise AuditLogUnavailable("Access is denied.")
        return sum(1 for eid, ts in self.events if eid == event_id and ts >= since)


class FakeNetworkProbe(NetworkProbe):
    def __init__(self) -> None:
        self.ping_ok = True
        self.samples = [10.0, 12.0, 14.0, 15.0]
        self.gateway: str | None = "192.168.1.1"
        self.ip: str | None = "203.0.113.7"
        self.fail_gateway = False

    def reachable(self, target: str) -> bool:
        return self.ping_ok

    def latency_samples(self, target: str, count: int) -> list[float]:
        return self.samples[:count]

    def default_gateway(self) -> str | None:
        if self.fail_gateway:
            raise RuntimeError("route table unavailable")
        return self.gateway

    def public_ip(self, url: str, timeout: float) -> str | None:
        return self.ip


@pytest.fixture
def accounts() -> FakeAccountDirectory:
    return FakeAccountDirectory()


@pytest.fixture
def profiles() -> FakeProfileStore:
    return FakeProfileStore()


@pytest.fixture
def metrics() -> FakeSystemMetrics:
    return FakeSystemMetrics()


@pytest.fixture
def audit_log() -> FakeAuditLog:
    return FakeAuditLog()


@pytest.fixture
def network() -> FakeNetworkProbe:
    return FakeNetworkProbe()

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

GB = 1024 ** 3
NA = "n/a"


def to_gb(num_bytes: float) -> float:
    return round(num_bytes / GB, 1)


def usage_percent(used: float, total: float) -> float:
    """Percentage of *total* taken by *used*, 0.0 when total is zero."""
    if total <= 0:
        return 0.0
    return round(used / total * 100, 1)


class MemoryStats(BaseModel):
    total_bytes: int
    free_bytes: int

    model_config = {"frozen": True}


class DiskStats(BaseModel):
    drive: str
    total_bytes: int
    free_bytes: int

    model_config = {"frozen": True}


class HealthSnapshot(BaseModel):
    """Point-in-time health sample of the local machine.

    Metrics that could not be collected are ``None`` and render as ``n/a``.
    """

    timestamp: datetime = Field(default_factory=datetime.now)
    host: str
    user: str

    cpu_percent: float | None = None

    memory_used_gb: float | None = None
    memory_total_gb: float | None = None
    memory_percent: float | None = None

    system_drive: str = "C:"
    disk_used_gb: float | None = None
    disk_total_gb: float | None = None
    disk_percent: float | None = None

    failed_logons: int | None = None
    failed_logon_window_hours: int = 24

    probe_target: str = "8.8.8.8"
    ping_ok: bool = False
    avg_latency_ms: float | None = None
    default_gateway: str | None = None
    public_ip: str | None = None

    model_config = {"frozen": True}

    def to_row(self) -> dict[str, object]:
        """Flat record for the CSV report; unavailable values are empty cells."""
        row: dict[str, object] = {
            "Timestamp": self.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            "Host": self.host,
            "User": self.user,
            "CPU_Percent": self.cpu_percent,
            "Mem_Used_GB": self.memory_used_gb,
            "Mem_Total_GB": self.memory_total_gb,
            "Mem_Percent": self.memory_percent,
            "Disk_Used_GB": self.disk_used_gb,
            "Disk_Total_GB": self.disk_total_gb,
            "Disk_Percent": self.disk_percent,
            "Failed_Logons": self.failed_logons,
            "Ping_OK": self.ping_ok,
            "Avg_Latency_ms": self.avg_latency_ms,
            "Default_Gateway": self.default_gateway,
            "Public_IP": self.public_ip,
        }
        return {k: "" if v is None else v for k, v in row.items()}

    def render_report(self) -> str:
        if self.memory_total_gb is None:
            memory = NA
        else:
            memory = f"{self.memory_used_gb} / {self.memory_total_gb} GB ({self.memory_percent}%)"

        if self.disk_total_gb is None:
            disk = NA
        else:
            disk = f"{self.disk_used_gb} / {self.disk_total_gb} GB ({self.disk_percent}%)"

        if self.failed_logons is None:
            logons = f"{NA} (no access to Security log)"
        else:
            logons = str(self.failed_logons)

        latency = "failed/blocked" if self.avg_latency_ms is None else f"{self.avg_latency_ms} ms"

        lines = [
            "===== System Health Report =====",
            f"Time:            {self.timestamp:%Y-%m-%d %H:%M:%S}",
            f"Host:            {self.host}",
            f"User:            {self.user}",
            "",
            f"CPU:             {NA if self.cpu_percent is None else f'{self.cpu_percent}%'}",
            f"Memory:          {memory}",
            f"Disk ({self.system_drive}):       {disk}",
            f"Failed logons ({self.failed_logon_window_hours}h): {logons}",
            "",
            f"Ping {self.probe_target}:    {'OK' if self.ping_ok else 'FAILED'}",
            f"Avg latency:     {latency}",
            f"Default gateway: {self.default_gateway or NA}",
        ]
        if self.public_ip:
            lines.append(f"Public IP:       {self.public_ip}")
        return "\n".join(lines) + "\n"

from __future__ import annotations

import csv
import getpass
import logging
import socket
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, TypeVar

from winadmin.config import Settings, settings
from winadmin.errors import Unavailable
from winadmin.models import HealthSnapshot
from winadmin.models.health import to_gb, usage_percent
from winadmin.providers.audit_log import FAILED_LOGON_EVENT_ID
from winadmin.providers.base import NetworkProbe, SecurityAuditLog, SystemMetrics

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _best_effort(label: str, func: Callable[[], T], default: T) -> T:
    try:
        return func()
    except Exception as exc:
        logger.warning("Could not collect %s: %s", label, exc)
        logger.debug("%s collection traceback", label, exc_info=True)
        return default


def _memory_fields(metrics: SystemMetrics) -> dict:
    stats = metrics.memory_stats()
    used = max(stats.total_bytes - stats.free_bytes, 0)
    return {
        "memory_used_gb": to_gb(used),
        "memory_total_gb": to_gb(stats.total_bytes),
        "memory_percent": usage_percent(used, stats.total_bytes),
    }


def _disk_fields(metrics: SystemMetrics) -> dict:
    stats = metrics.disk_stats()
    if stats is None or stats.total_bytes <= 0:
        return {}
    used = max(stats.total_bytes - stats.free_bytes, 0)
    return {
        "system_drive": stats.drive,
        "disk_used_gb": to_gb(used),
        "disk_total_gb": to_gb(stats.total_bytes),
        "disk_percent": usage_percent(used, stats.total_bytes),
    }


def _failed_logons(audit_log: SecurityAuditLog, since: datetime) -> int | None:
    try:
        return audit_log.count_events_since(FAILED_LOGON_EVENT_ID, since)
    except Unavailable as exc:
        logger.warning("Failed-logon count unavailable: %s", exc)
        return None


def _average_latency(network: NetworkProbe, target: str, count: int) -> float | None:
    samples = network.latency_samples(target, count)
    if not samples:
        return None
    return round(sum(samples) / len(samples), 1)


def collect_snapshot(
    metrics: SystemMetrics,
    audit_log: SecurityAuditLog,
    network: NetworkProbe,
    config: Settings = settings,
    host: str | None = None,
    user: str | None = None,
    now: datetime | None = None,
) -> HealthSnapshot:
    """Sample every metric once. No metric failure escapes this function."""
    now = now or datetime.now()
    window = config.failed_logon_window_hours
    target = config.probe_target

    fields: dict = {
        "timestamp": now,
        "host": host or socket.gethostname(),
        "user": user or _best_effort("user name", getpass.getuser, "unknown"),
        "failed_logon_window_hours": window,
        "system_drive": metrics.drive,
        "probe_target": target,
    }
    fields["cpu_percent"] = _best_effort(
        "CPU usage", lambda: round(metrics.cpu_percent(config.cpu_sample_seconds), 1), None
    )
    fields.update(_best_effort("memory usage", lambda: _memory_fields(metrics), {}))
    fields.update(_best_effort("disk usage", lambda: _disk_fields(metrics), {}))
    fields["failed_logons"] = _best_effort(
        "failed logons", lambda: _failed_logons(audit_log, now - timedelta(hours=window)), None
    )

    fields["ping_ok"] = _best_effort("ping", lambda: network.reachable(target), False)
    fields["avg_latency_ms"] = _best_effort(
        "latency", lambda: _average_latency(network, target, config.latency_probes), None
    )
    fields["default_gateway"] = _best_effort("default gateway", network.default_gateway, None)
    fields["public_ip"] = _best_effort(
        "public IP",
        lambda: network.public_ip(config.public_ip_url, config.public_ip_timeout),
        None,
    )

    return HealthSnapshot(**fields)


def write_reports(snapshot: HealthSnapshot, out_dir: str | Path) -> tuple[Path, Path]:
    """Write the text and single-row CSV reports; returns their paths."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    stem = f"health_{snapshot.host}_{snapshot.timestamp:%Y%m%d_%H%M%S}"
    txt_path = out_dir / f"{stem}.txt"
    csv_path = out_dir / f"{stem}.csv"

    txt_path.write_text(snapshot.render_report(), encoding="utf-8")

    row = snapshot.to_row()
    with open(csv_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(row))
        writer.writeheader()
        writer.writerow(row)

    logger.info("Health report written to %s and %s", txt_path, csv_path)
    return txt_path, csv_path

from __future__ import annotations

import ipaddress
import json
import logging
import re
import subprocess

import httpx

from winadmin.providers.base import NetworkProbe

logger = logging.getLogger(__name__)

# Reply lines carry TTL= in every locale; the time label does not
# ("time=14ms", "Zeit=14ms", "temps=14 ms"), so only the value is matched.
_REPLY_TIME = re.compile(r"([=<])\s*(\d+(?:\.\d+)?)\s*ms\b", re.IGNORECASE)

_ROUTE_QUERY = (
    "Get-NetRoute -DestinationPrefix '0.0.0.0/0' -ErrorAction SilentlyContinue | "
    "Select-Object NextHop, RouteMetric, InterfaceMetric | ConvertTo-Json -Compress"
)


def parse_reply_times(output: str) -> list[float]:
    """Round-trip times of the echo replies in ping.exe output.

    "<1ms" is reported as 0.0.
    """
    times: list[float] = []
    for line in output.splitlines():
        if "TTL=" not in line.upper():
            continue
        match = _REPLY_TIME.search(line)
        if match is None:
            continue
        sign, value = match.groups()
        times.append(0.0 if sign == "<" else float(value))
    return times


def select_default_gateway(routes: list[dict]) -> str | None:
    """Next hop of the lowest-metric default route, ignoring on-link routes."""
    candidates = []
    for route in routes:
        next_hop = (route.get("NextHop") or "").strip()
        if not next_hop or next_hop in ("0.0.0.0", "::"):
            continue
        metric = int(route.get("RouteMetric") or 0) + int(route.get("InterfaceMetric") or 0)
        candidates.append((metric, next_hop))
    if not candidates:
        return None
    return min(candidates)[1]


def _run(args: list[str], timeout: float) -> subprocess.CompletedProcess[str] | None:
    try:
        return subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=timeout,
            creationflags=getattr(subprocess, "CREATE_NO_WINDOW", 0),
        )
    except (OSError, subprocess.TimeoutExpired):
        logger.debug("Command failed: %s", " ".join(args), exc_info=True)
        return None


class WindowsNetworkProbe(NetworkProbe):
    """Network checks built on ping.exe, PowerShell and an HTTP lookup."""

    def reachable(self, target: str) -> bool:
        result = _run(["ping", "-n", "1", "-w", "1000", target], timeout=5)
        # ping.exe exits 0 on "Destination host unreachable" too; require a real reply
        return result is not None and result.returncode == 0 and "TTL=" in result.stdout.upper()

    def latency_samples(self, target: str, count: int) -> list[float]:
        result = _run(["ping", "-n", str(count), target], timeout=5 + count * 2)
        if result is None:
            return []
        return parse_reply_times(result.stdout)

    def default_gateway(self) -> str | None:
        result = _run(["powershell", "-NoProfile", "-Command", _ROUTE_QUERY], timeout=15)
        if result is None or not result.stdout.strip():
            return None
        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError:
            logger.debug("Unparseable route output: %r", result.stdout)
            return None
        # ConvertTo-Json emits a bare object for a single route
        routes = [data] if isinstance(data, dict) else data
        return select_default_gateway(routes)

    def public_ip(self, url: str, timeout: float) -> str | None:
        try:
            response = httpx.get(url, timeout=timeout)
            response.raise_for_status()
            return str(ipaddress.ip_address(response.text.strip()))
        except (httpx.HTTPError, ValueError):
            logger.debug("Public IP lookup via %s failed", url, exc_info=True)
            return None

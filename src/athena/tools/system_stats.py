"""get_system_stats tool: CPU, memory, and uptime of the host."""

from __future__ import annotations

import asyncio
import json
import platform
import socket
import sys
import time
from pathlib import Path
from typing import Any

import psutil

from athena.tools.arguments import SystemStatsArgs, parse_arguments

_GB = 1024**3


def _to_gb(num_bytes: int) -> float:
    return round(num_bytes / _GB, 2)


def _cpu_model() -> str:
    # psutil has no portable CPU model name
    path = Path("/proc/cpuinfo")
    if path.is_file():
        for line in path.read_text().splitlines():
            if line.startswith("model name"):
                return line.split(":", 1)[1].strip()
    return platform.processor() or "unknown"


def collect_stats() -> dict[str, Any]:
    """Snapshot of host CPU and memory figures."""
    cpu_count = psutil.cpu_count() or 1
    load1, load5, load15 = psutil.getloadavg()
    mem = psutil.virtual_memory()

    return {
        "cpuCount": cpu_count,
        "cpuModel": _cpu_model(),
        "cpuUsage": min(round(100 * load1 / cpu_count), 100),
        "loadAverage": {"1min": load1, "5min": load5, "15min": load15},
        "totalMemory": _to_gb(mem.total),
        "freeMemory": _to_gb(mem.available),
        "uptime": round((time.time() - psutil.boot_time()) / 3600, 2),
        "platform": sys.platform,
        "architecture": platform.machine(),
        "hostname": socket.gethostname(),
    }


def _process_stats() -> dict[str, Any]:
    proc = psutil.Process()
    with proc.oneshot():
        rss = proc.memory_info().rss
        started = proc.create_time()
    return {
        "memory": {"rss": f"{round(rss / 1024 / 1024)}MB"},
        "processUptime": f"{round(time.time() - started)}s",
        "pythonVersion": platform.python_version(),
    }


def _snapshot(detailed: bool) -> dict[str, Any]:
    stats = collect_stats()
    if detailed:
        stats.update(_process_stats())
    return stats


async def get_system_stats(arguments: dict[str, Any]) -> str:
    args = parse_arguments(SystemStatsArgs, "get_system_stats", arguments)
    # psutil and /proc reads block
    stats = await asyncio.to_thread(_snapshot, args.detailed)
    return json.dumps(stats, indent=2)

"""Self check report and the default rate limit setting."""

from __future__ import annotations

import math
import re

import psutil

__all__ = [
    "pack_limit",
    "unpack_limit",
    "parse_limit_command",
    "cpu_percent",
    "mem_percent",
    "disk_report",
    "status_report",
]

_LIMIT_RE = re.compile(r"^设置默认限速为每\s*(\d+)\s*(分钟|秒)\s*(\d+)\s*次触发$")
_FIELD_LIMIT = 65536


def _round(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _fmt(value: float) -> str:
    return f"{value:g}"


def pack_limit(interval: int, burst: int) -> int:
    """Pack an interval in seconds and a burst count into one stored integer."""
    if not 0 < interval < _FIELD_LIMIT:
        raise ValueError("interval too big")
    if not 0 < burst < _FIELD_LIMIT:
        raise ValueError("burst too big")
    return (interval & 0xFFFF) | ((burst << 16) & 0xFFFF0000)


def unpack_limit(data: int) -> tuple[int, int]:
    """The interval in seconds and the burst count held in a stored integer."""
    return data & 0xFFFF, (data >> 16) & 0xFFFF


def parse_limit_command(text: str) -> tuple[int, int]:
    """Read "设置默认限速为每 m 分钟|秒 n 次触发" into (seconds, burst)."""
    match = _LIMIT_RE.match(text)
    if match is None:
        raise ValueError("not a rate limit command")
    interval = int(match.group(1))
    if match.group(2) == "分钟":
        interval *= 60
    if not 0 < interval < _FIELD_LIMIT:
        raise ValueError("interval too big")
    burst = int(match.group(3))
    if not 0 < burst < _FIELD_LIMIT:
        raise ValueError("burst too big")
    return interval, burst


def cpu_percent() -> float:
    """CPU usage over one second, rounded; -1 when it cannot be read."""
    try:
        value = psutil.cpu_percent(interval=1, percpu=False)
    except (OSError, psutil.Error):
        return -1.0
    return _round(value)


def mem_percent() -> float:
    """Memory usage, rounded; -1 when it cannot be read."""
    try:
        value = psutil.virtual_memory().percent
    except (OSError, psutil.Error):
        return -1.0
    return _round(value)


def disk_report() -> str:
    """One line per used mount point with its size in MiB and usage."""
    try:
        partitions = psutil.disk_partitions(all=True)
    except (OSError, psutil.Error) as exc:
        return str(exc)
    lines = []
    for partition in partitions:
        try:
            usage = psutil.disk_usage(partition.mountpoint)
        except (OSError, psutil.Error) as exc:
            lines.append(f"\n  - {exc}")
            continue
        used = int(_round(usage.percent))
        if used > 0:
            lines.append(
                f"\n  - {partition.mountpoint}({usage.total // 1024 // 1024}M) {used}%"
            )
    return "".join(lines)


def status_report() -> str:
    """The full self check text."""
    return (
        f"* CPU占用: {_fmt(cpu_percent())}%\n"
        f"* RAM占用: {_fmt(mem_percent())}%\n"
        f"* 硬盘使用: {disk_report()}"
    )
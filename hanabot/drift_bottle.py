"""Drift bottles: messages thrown into a shared sea and picked up at random."""

from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path

__all__ = ["MIN_LENGTH", "Bottle", "make_bottle", "Sea"]

# A bottle must carry at least this many characters.
MIN_LENGTH = 10

_ISO_POLY = 0xD800000000000000
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _make_table() -> tuple[int, ...]:
    table = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            crc = (crc >> 1) ^ _ISO_POLY if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_TABLE = _make_table()


def _crc64(data: bytes) -> int:
    crc = _MASK64
    for byte in data:
        crc = _TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ _MASK64


def _signed(value: int) -> int:
    return value - (1 << 64) if value & (1 << 63) else value


@dataclass(frozen=True)
class Bottle:
    """Who threw a message, from which group, when, and what it says."""

    id: int
    qq: int
    name: str
    msg: str
    grp: int
    time: str

    def describe(self, botname: str) -> str:
        """The text shown when the bottle is picked up."""
        return (
            f"{botname}试着帮你捞出来了这个~\nID:{self.id}"
            f"\n投递人: {self.name}({self.qq})"
            f"\n群号: {self.grp}"
            f"\n时间: {self.time}"
            f"\n内容: \n{self.msg}"
        )


def make_bottle(qq: int, grp: int, time: str, name: str, msg: str) -> Bottle:
    """A bottle whose id is the CRC-64 of everything it holds."""
    if len(msg) < MIN_LENGTH:
        raise ValueError("需要投递的内容过少( ")
    key = f"{grp}_{qq}_{time}_{name}_{msg}".encode("utf-8")
    return Bottle(id=_signed(_crc64(key)), qq=qq, name=name, msg=msg, grp=grp, time=time)


class Sea:
    """All thrown bottles, kept in SQLite."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS global ("
                "id INTEGER PRIMARY KEY NOT NULL, qq INTEGER, Name TEXT, "
                "msg TEXT, grp INTEGER, time TEXT)"
            )

    def throw(self, bottle: Bottle) -> None:
        """Put a bottle into the sea; one with the same id is replaced."""
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO global (id, qq, Name, msg, grp, time) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (bottle.id, bottle.qq, bottle.name, bottle.msg, bottle.grp, bottle.time),
            )

    def pick(self) -> Bottle:
        """A bottle chosen at random; LookupError when the sea is empty."""
        with self._lock:
            row = self._conn.execute(
                "SELECT id, qq, Name, msg, grp, time FROM global ORDER BY RANDOM() LIMIT 1"
            ).fetchone()
        if row is None:
            raise LookupError("the sea is empty")
        bottle_id, qq, name, msg, grp, time = row
        return Bottle(id=bottle_id, qq=qq, name=name, msg=msg, grp=grp, time=time)

    def __len__(self) -> int:
        with self._lock:
            return self._conn.execute("SELECT COUNT(*) FROM global").fetchone()[0]

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> Sea:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
"""Banned words per group and the bans they caused."""

from __future__ import annotations

import sqlite3
import threading
import time
from pathlib import Path
from typing import NamedTuple

__all__ = [
    "BAN_DURATION",
    "PendingBans",
    "AntiAbuseDB",
    "normalize_message",
]

# How long a user stays banned after using a banned word, in seconds.
BAN_DURATION = 600
_MINUTE = 60
_BAN_TABLE = "__bantime__"
_DIGITS36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_STRIPPED = str.maketrans("", "", "\n\r\t;")


def normalize_message(msg: str) -> str:
    """The message without line breaks, tabs and semicolons."""
    return msg.translate(_STRIPPED)


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    value = abs(value)
    digits = []
    while value:
        value, rest = divmod(value, 36)
        digits.append(_DIGITS36[rest])
    return sign + "".join(reversed(digits))


def _group_table(gid: int) -> str:
    return f'"{_base36(gid)}"'


class PendingBans(NamedTuple):
    """Bans still running (user id to seconds left) and users whose ban is over."""

    active: dict[int, int]
    expired: list[int]


class AntiAbuseDB:
    """Banned words, one SQLite table per group, and the times of bans."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.RLock()

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> AntiAbuseDB:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _has_table(self, name: str) -> bool:
        row = self._conn.execute(
            "SELECT 1 FROM sqlite_master WHERE type='table' AND name=?", (name,)
        ).fetchone()
        return row is not None

    def _create_group(self, gid: int) -> None:
        self._conn.execute(
            f"CREATE TABLE IF NOT EXISTS {_group_table(gid)} (word TEXT PRIMARY KEY NOT NULL)"
        )

    def _create_bans(self) -> None:
        self._conn.execute(
            f"CREATE TABLE IF NOT EXISTS {_BAN_TABLE} "
            "(id INTEGER PRIMARY KEY NOT NULL, time INTEGER)"
        )

    def is_in_anti_list(self, gid: int, msg: str) -> bool:
        """True when the message contains a banned word of the group."""
        with self._lock:
            if not self._has_table(_base36(gid)):
                return False
            row = self._conn.execute(
                f"SELECT 1 FROM {_group_table(gid)} WHERE instr(?, word) > 0 LIMIT 1",
                (msg,),
            ).fetchone()
        return row is not None

    def insert_word(self, gid: int, word: str) -> None:
        with self._lock, self._conn:
            self._create_group(gid)
            self._conn.execute(
                f"INSERT OR REPLACE INTO {_group_table(gid)} (word) VALUES (?)", (word,)
            )

    def delete_word(self, gid: int, word: str) -> None:
        """Remove a word; LookupError when the group has no banned words at all."""
        with self._lock, self._conn:
            count = 0
            if self._has_table(_base36(gid)):
                count = self._conn.execute(
                    f"SELECT COUNT(*) FROM {_group_table(gid)}"
                ).fetchone()[0]
            if count == 0:
                raise LookupError("本群还没有违禁词~")
            self._conn.execute(f"DELETE FROM {_group_table(gid)} WHERE word=?", (word,))

    def list_words(self, gid: int) -> str:
        """The group's banned words as "[a | b | c]"."""
        with self._lock:
            if not self._has_table(_base36(gid)):
                return "[]"
            words = [
                row[0]
                for row in self._conn.execute(
                    f"SELECT word FROM {_group_table(gid)} ORDER BY rowid"
                )
            ]
        if not words:
            return "[]"
        return "[" + " | ".join(words) + "]"

    def record_ban(self, uid: int, when: int | float | None = None) -> None:
        """Remember that a user was banned at the given unix time."""
        stamp = int(time.time() if when is None else when)
        with self._lock, self._conn:
            self._create_bans()
            self._conn.execute(
                f"INSERT OR REPLACE INTO {_BAN_TABLE} (id, time) VALUES (?, ?)", (uid, stamp)
            )

    def remove_ban(self, uid: int) -> None:
        with self._lock, self._conn:
            if self._has_table(_BAN_TABLE):
                self._conn.execute(f"DELETE FROM {_BAN_TABLE} WHERE id=?", (uid,))

    def pending_bans(self, now: int | float | None = None) -> PendingBans:
        """Sort stored bans into running and finished ones; finished ones are dropped."""
        current = int(time.time() if now is None else now)
        active: dict[int, int] = {}
        expired: list[int] = []
        with self._lock, self._conn:
            if not self._has_table(_BAN_TABLE):
                return PendingBans(active, expired)
            rows = self._conn.execute(
                f"SELECT id, time FROM {_BAN_TABLE} ORDER BY rowid"
            ).fetchall()
            for uid, stamp in rows:
                remaining = stamp + BAN_DURATION - current
                if remaining < _MINUTE:
                    expired.append(uid)
                else:
                    active[uid] = remaining
            self._conn.execute(
                f"DELETE FROM {_BAN_TABLE} WHERE time <= ?",
                (current + _MINUTE - BAN_DURATION,),
            )
        return PendingBans(active, expired)
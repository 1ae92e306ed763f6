"""Push subscriptions, known uploaders and the list of virtual uploaders."""

from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

__all__ = ["Subscription", "PushStore", "Vup", "VupStore"]

_CHUNK = 500


@dataclass(frozen=True)
class Subscription:
    """One uploader followed by one group or private chat."""

    id: int
    bilibili_uid: int
    group_id: int
    live_disable: int = 0
    dynamic_disable: int = 0


class _Store:
    def __init__(self, path: str | Path) -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()

    def close(self) -> None:
        self._conn.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class PushStore(_Store):
    """Subscriptions to dynamics and live broadcasts, kept in SQLite."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        super().__init__(path)
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS bilibili_push ("
                "id INTEGER PRIMARY KEY AUTOINCREMENT, bilibili_uid INTEGER, "
                "group_id INTEGER, live_disable INTEGER DEFAULT 0, "
                "dynamic_disable INTEGER DEFAULT 0)"
            )
            self._conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_buid_gid ON bilibili_push (bilibili_uid, group_id)"
            )
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS bilibili_up "
                "(bilibili_uid INTEGER PRIMARY KEY, name TEXT)"
            )

    def _upsert(self, buid: int, gid: int, **fields: int) -> None:
        with self._lock, self._conn:
            row = self._conn.execute(
                "SELECT id FROM bilibili_push WHERE bilibili_uid = ? AND group_id = ?",
                (buid, gid),
            ).fetchone()
            if row is None:
                self._conn.execute(
                    "INSERT INTO bilibili_push "
                    "(bilibili_uid, group_id, live_disable, dynamic_disable) VALUES (?, ?, ?, ?)",
                    (buid, gid, fields.get("live_disable", 0), fields.get("dynamic_disable", 0)),
                )
                return
            assignments = ", ".join(f"{name} = ?" for name in fields)
            self._conn.execute(
                f"UPDATE bilibili_push SET {assignments} WHERE bilibili_uid = ? AND group_id = ?",
                (*fields.values(), buid, gid),
            )

    def subscribe(self, buid: int, gid: int) -> None:
        self._upsert(buid, gid, live_disable=0, dynamic_disable=0)

    def unsubscribe(self, buid: int, gid: int) -> None:
        self._upsert(buid, gid, live_disable=1, dynamic_disable=1)

    def unsubscribe_dynamic(self, buid: int, gid: int) -> None:
        self._upsert(buid, gid, dynamic_disable=1)

    def unsubscribe_live(self, buid: int, gid: int) -> None:
        self._upsert(buid, gid, live_disable=1)

    def _select(self, where: str, params: tuple = ()) -> list[Subscription]:
        with self._lock:
            rows = self._conn.execute(
                "SELECT id, bilibili_uid, group_id, live_disable, dynamic_disable "
                f"FROM bilibili_push WHERE {where} ORDER BY id",
                params,
            ).fetchall()
        return [Subscription(*row) for row in rows]

    @staticmethod
    def _distinct_uids(subs: Iterable[Subscription]) -> list[int]:
        return list(dict.fromkeys(sub.bilibili_uid for sub in subs))

    def live_uids(self) -> list[int]:
        """Uploaders whose live broadcasts someone follows, without repeats."""
        return self._distinct_uids(self._select("live_disable = 0"))

    def dynamic_uids(self) -> list[int]:
        """Uploaders whose dynamics someone follows, without repeats."""
        return self._distinct_uids(self._select("dynamic_disable = 0"))

    def groups_by_live(self, buid: int) -> list[int]:
        return [s.group_id for s in self._select("bilibili_uid = ? AND live_disable = 0", (buid,))]

    def groups_by_dynamic(self, buid: int) -> list[int]:
        return [
            s.group_id for s in self._select("bilibili_uid = ? AND dynamic_disable = 0", (buid,))
        ]

    def pushes_by_group(self, gid: int) -> list[Subscription]:
        """Subscriptions of a group that still push anything."""
        return self._select(
            "group_id = ? AND (live_disable = 0 OR dynamic_disable = 0)", (gid,)
        )

    def insert_up(self, buid: int, name: str) -> None:
        """Remember an uploader's name; a known uploader keeps the name it has."""
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT OR IGNORE INTO bilibili_up (bilibili_uid, name) VALUES (?, ?)",
                (buid, name),
            )

    def all_ups(self) -> dict[int, str]:
        with self._lock:
            rows = self._conn.execute("SELECT bilibili_uid, name FROM bilibili_up").fetchall()
        return dict(rows)


@dataclass(frozen=True)
class Vup:
    """A virtual uploader and the room they broadcast in."""

    mid: int
    uname: str = ""
    roomid: int = 0


class VupStore(_Store):
    """Known virtual uploaders, kept in SQLite."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        super().__init__(path)
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS vup "
                "(mid INTEGER PRIMARY KEY, uname TEXT, roomid INTEGER)"
            )

    def insert_vup(self, mid: int, uname: str, roomid: int) -> None:
        """Add an uploader unless one with this id is already known."""
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT OR IGNORE INTO vup (mid, uname, roomid) VALUES (?, ?, ?)",
                (mid, uname, roomid),
            )

    def filter_vups(self, ids: Iterable[int]) -> list[Vup]:
        """The known uploaders among the given ids, ordered by id."""
        wanted = list(dict.fromkeys(ids))
        found: list[Vup] = []
        with self._lock:
            for start in range(0, len(wanted), _CHUNK):
                chunk = wanted[start:start + _CHUNK]
                marks = ", ".join("?" * len(chunk))
                rows = self._conn.execute(
                    f"SELECT mid, uname, roomid FROM vup WHERE mid IN ({marks})", chunk
                ).fetchall()
                found.extend(Vup(*row) for row in rows)
        return sorted(found, key=lambda vup: vup.mid)
"""Short couple stories with the names filled in."""

from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path

__all__ = ["CpStory", "StoryDB", "fill_story", "split_names"]

ATTACKER_MARK = "<攻>"
RECEIVER_MARK = "<受>"


@dataclass(frozen=True)
class CpStory:
    """A story and the two names it was written with."""

    id: int = 0
    gong: str = ""
    shou: str = ""
    story: str = ""


class StoryDB:
    """Stories kept in an SQLite table."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS cp_story "
                "(id INTEGER PRIMARY KEY, gong TEXT, shou TEXT, story TEXT)"
            )

    def add(self, story: CpStory) -> None:
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO cp_story (id, gong, shou, story) VALUES (?, ?, ?, ?)",
                (story.id, story.gong, story.shou, story.story),
            )

    def random_story(self) -> CpStory:
        """A story picked at random; LookupError when there are none."""
        with self._lock:
            row = self._conn.execute(
                "SELECT id, gong, shou, story FROM cp_story ORDER BY RANDOM() LIMIT 1"
            ).fetchone()
        if row is None:
            raise LookupError("no story")
        return CpStory(*row)

    def close(self) -> None:
        self._conn.close()

    def __len__(self) -> int:
        with self._lock:
            return self._conn.execute("SELECT COUNT(*) FROM cp_story").fetchone()[0]

    def __enter__(self) -> StoryDB:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def fill_story(story: CpStory, gong: str, shou: str) -> str:
    """The story text with the markers and original names replaced."""
    text = story.story.replace(ATTACKER_MARK, gong).replace(RECEIVER_MARK, shou)
    if story.gong:
        text = text.replace(story.gong, gong)
    if story.shou:
        text = text.replace(story.shou, gong)
    return text


def split_names(args: str) -> tuple[str, str]:
    """The two space separated names of a request."""
    params = args.split(" ")
    if len(params) < 2:
        raise ValueError("请用空格分开两个人名")
    return params[0], params[1]
"""Break up chains of repeated group messages."""

from __future__ import annotations

import random
import threading

THROTTLE = 3


class RepeatBreaker:
    """Counts identical consecutive messages per group and interrupts the chain."""

    def __init__(self, throttle: int = THROTTLE, rng: random.Random | None = None) -> None:
        if not 0 <= throttle <= 9:
            raise ValueError("throttle must be between 0 and 9")
        self.throttle = throttle
        self._rng = random.Random() if rng is None else rng
        self._state: dict[int, tuple[int, str]] = {}
        self._lock = threading.Lock()

    def feed(self, group_id: int, raw: str) -> str | None:
        """Record a message; return the text to send when the chain is broken."""
        with self._lock:
            previous = self._state.get(group_id)
            if previous is None or not raw or previous[1] != raw:
                self._state[group_id] = (0, raw)
                return None
            count = previous[0]
            if count < self.throttle:
                self._state[group_id] = (count + 1, raw)
                return None
            del self._state[group_id]
        if len(raw.encode("utf-8")) > 2:
            chars = list(raw)
            self._rng.shuffle(chars)
            return "".join(chars)
        return f"{count}: {raw}"
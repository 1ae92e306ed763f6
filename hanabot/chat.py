"""Basic chat reactions: name calls, pokes and the group air conditioner."""

from __future__ import annotations

import random
import threading
import time
from typing import Callable

DEFAULT_TEMPERATURE = 26


def greeting(nickname: str, rng: random.Random | None = None) -> str:
    """A random answer to being called by name."""
    generator = random if rng is None else rng
    return generator.choice(
        [
            nickname + "在此，有何贵干~",
            "(っ●ω●)っ在~",
            "这里是" + nickname + "(っ●ω●)っ",
            nickname + "不在呢~",
        ]
    )


class AirConditioner:
    """A pretend air conditioner kept per group."""

    def __init__(self) -> None:
        self._temperature: dict[int, int] = {}
        self._switch: dict[int, bool] = {}

    def turn_on(self, group_id: int) -> str:
        self._switch[group_id] = True
        return "❄️哔~"

    def turn_off(self, group_id: int) -> str:
        self._switch[group_id] = False
        self._temperature.pop(group_id, None)
        return "💤哔~"

    def set_temperature(self, group_id: int, value: int | str) -> str:
        """Set the temperature if the conditioner is on; report the state either way."""
        self._temperature.setdefault(group_id, DEFAULT_TEMPERATURE)
        if self._switch.get(group_id, False):
            self._temperature[group_id] = int(value)
        return self.status(group_id)

    def status(self, group_id: int) -> str:
        temperature = self._temperature.setdefault(group_id, DEFAULT_TEMPERATURE)
        head = "❄️风速中" if self._switch.get(group_id, False) else "💤"
        return f"{head}\n群温度 {temperature}℃"


class _Bucket:
    def __init__(self, capacity: float, rate: float, now: float) -> None:
        self.capacity = capacity
        self.rate = rate
        self.tokens = capacity
        self.stamp = now

    def acquire(self, n: int, now: float) -> bool:
        self.tokens = min(self.capacity, self.tokens + (now - self.stamp) * self.rate)
        self.stamp = now
        if self.tokens >= n:
            self.tokens -= n
            return True
        return False


class PokeLimiter:
    """Answers pokes, limited per group by a token bucket."""

    def __init__(
        self,
        interval: float = 300.0,
        burst: int = 8,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.interval = interval
        self.burst = burst
        self._clock = clock
        self._buckets: dict[int, _Bucket] = {}
        self._lock = threading.Lock()

    def _bucket(self, group_id: int, now: float) -> _Bucket:
        bucket = self._buckets.get(group_id)
        if bucket is None:
            bucket = _Bucket(self.burst, self.burst / self.interval, now)
            self._buckets[group_id] = bucket
        return bucket

    def respond(self, group_id: int, nickname: str) -> str | None:
        """The reply to a poke, or None when poked too often."""
        with self._lock:
            now = self._clock()
            bucket = self._bucket(group_id, now)
            if bucket.acquire(3, now):
                return f"请不要戳{nickname} >_<"
            if bucket.acquire(1, now):
                return f"喂(#`O′) 戳{nickname}干嘛！"
            return None
"""Help the undecided pick between options."""

from __future__ import annotations

import random

SEPARATOR = "还是"


def choose(args: str, nickname: str, rng: random.Random | None = None) -> str:
    """List the options found in ``args`` and announce one chosen at random."""
    generator = random if rng is None else rng
    options = args.split(SEPARATOR)
    numbered = "\n".join(f"{number}, {option}" for number, option in enumerate(options, 1))
    result = generator.choice(options)
    return f"> {nickname}\n你的选项有:\n{numbered}\n你最终会选: {result}"
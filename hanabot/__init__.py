"""Chat-bot building blocks: group utilities, banned words, drift bottles and bilibili helpers."""

__version__ = "0.1.0"
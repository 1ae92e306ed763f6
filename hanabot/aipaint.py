"""Server settings of the AI painting service."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

__all__ = ["ServerConfig"]


@dataclass
class ServerConfig:
    """Base URL, token and interval of the painting server, kept in a JSON file."""

    file: str | Path
    base_url: str = ""
    token: str = ""
    interval: int = 0

    def update(self, base_url: str, token: str, interval: int) -> None:
        """Change the settings (empty strings keep the old value) and save them."""
        if base_url:
            self.base_url = base_url
        if token:
            self.token = token
        self.interval = interval
        with open(self.file, "w", encoding="utf-8") as fp:
            json.dump(
                {"base_url": self.base_url, "token": self.token, "interval": self.interval},
                fp,
                ensure_ascii=False,
            )
            fp.write("\n")

    def load(self) -> None:
        """Read the settings from the file unless they are already complete."""
        if self.base_url and self.token and self.interval != 0:
            return
        path = Path(self.file)
        if not path.exists():
            raise FileNotFoundError("no server config")
        with path.open(encoding="utf-8") as fp:
            data = json.load(fp)
        if not isinstance(data, dict):
            raise ValueError("server config must be a JSON object")
        if "base_url" in data:
            self.base_url = str(data["base_url"])
        if "token" in data:
            self.token = str(data["token"])
        if "interval" in data:
            self.interval = int(data["interval"])
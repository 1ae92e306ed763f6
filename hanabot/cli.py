"""Command line entry point: flags, configuration files and log formatting."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any

from .banner import render_banner

__all__ = [
    "BotConfig",
    "ColorFormatter",
    "config_from_dict",
    "parse_args",
    "build_config",
    "load_config",
    "save_config",
    "main",
]

DEFAULT_URL = "127.0.0.1:6700"
DEFAULT_NICKNAME = "花酱"
DEFAULT_PREFIX = "/"
DEFAULT_LATENCY_MS = 233
DEFAULT_RING_SIZE = 4096
DEFAULT_MAX_PROCESS_MIN = 4

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_NS_PER_US = 1000

COLOR_PANIC = "\x1b[1;31m"
COLOR_FATAL = "\x1b[1;31m"
COLOR_ERROR = "\x1b[31m"
COLOR_WARN = "\x1b[33m"
COLOR_INFO = "\x1b[37m"
COLOR_DEBUG = "\x1b[32m"
COLOR_TRACE = "\x1b[36m"
COLOR_RESET = "\x1b[0m"

_LEVEL_COLORS = {
    logging.CRITICAL: COLOR_FATAL,
    logging.ERROR: COLOR_ERROR,
    logging.WARNING: COLOR_WARN,
    logging.INFO: COLOR_INFO,
    logging.DEBUG: COLOR_DEBUG,
}

log = logging.getLogger("hanabot")


def _duration_to_ns(value: timedelta) -> int:
    return (value // timedelta(microseconds=1)) * _NS_PER_US


def _ns_to_duration(value: int) -> timedelta:
    return timedelta(microseconds=value // _NS_PER_US)


@dataclass
class BotConfig:
    """Settings of the bot and the websocket clients it connects with."""

    nicknames: list[str] = field(default_factory=list)
    command_prefix: str = ""
    super_users: list[int] = field(default_factory=list)
    ring_len: int = 0
    latency: timedelta = field(default_factory=timedelta)
    max_process_time: timedelta = field(default_factory=timedelta)
    ws: list[tuple[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """The configuration in its JSON file layout."""
        return {
            "zero": {
                "nickname": list(self.nicknames),
                "command_prefix": self.command_prefix,
                "super_users": list(self.super_users),
                "ring_len": self.ring_len,
                "latency": _duration_to_ns(self.latency),
                "max_process_time": _duration_to_ns(self.max_process_time),
            },
            "ws": [{"Url": url, "AccessToken": token} for url, token in self.ws],
        }


def config_from_dict(data: Any) -> BotConfig:
    """Build a configuration from its JSON file layout; missing fields stay empty."""
    if not isinstance(data, dict):
        raise ValueError("configuration must be a JSON object")
    zero = data.get("zero") or {}
    clients = data.get("ws") or []
    if not isinstance(zero, dict) or not isinstance(clients, list):
        raise ValueError("malformed configuration")
    ws: list[tuple[str, str]] = []
    for client in clients:
        if not isinstance(client, dict):
            raise ValueError("malformed websocket client entry")
        ws.append((str(client.get("Url", "")), str(client.get("AccessToken", ""))))
    return BotConfig(
        nicknames=[str(name) for name in zero.get("nickname") or []],
        command_prefix=str(zero.get("command_prefix", "")),
        super_users=[int(uid) for uid in zero.get("super_users") or []],
        ring_len=int(zero.get("ring_len", 0)),
        latency=_ns_to_duration(int(zero.get("latency", 0))),
        max_process_time=_ns_to_duration(int(zero.get("max_process_time", 0))),
        ws=ws,
    )


class ColorFormatter(logging.Formatter):
    """Coloured one-line log format: ``[LEVEL] message``."""

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno < logging.DEBUG:
            color = COLOR_TRACE
        else:
            color = _LEVEL_COLORS.get(record.levelno, COLOR_INFO)
        return f"{color}[{record.levelname.upper()}] {record.getMessage()} \n{COLOR_RESET}"


def _uint(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse the command line flags."""
    parser = argparse.ArgumentParser(prog="hanabot")
    parser.add_argument("-d", dest="debug", action="store_true",
                        help="Enable debug level log and higher.")
    parser.add_argument("-w", dest="warn", action="store_true",
                        help="Enable warning level log and higher.")
    parser.add_argument("-t", dest="token", default="", help="Set AccessToken of WSClient.")
    parser.add_argument("-u", dest="url", default=DEFAULT_URL, help="Set Url of WSClient.")
    parser.add_argument("-n", dest="nickname", default=DEFAULT_NICKNAME,
                        help="Set default nickname.")
    parser.add_argument("-p", dest="prefix", default=DEFAULT_PREFIX, help="Set command prefix.")
    parser.add_argument("-c", dest="config", default="", help="Run from config file.")
    parser.add_argument("-s", dest="save", default="",
                        help="Save default config to file and exit.")
    parser.add_argument("-l", dest="latency", type=_uint, default=DEFAULT_LATENCY_MS,
                        help="Response latency (ms).")
    parser.add_argument("-r", dest="ring", type=_uint, default=DEFAULT_RING_SIZE,
                        help="Receiving buffer ring size.")
    parser.add_argument("-x", dest="max_process", type=_uint, default=DEFAULT_MAX_PROCESS_MIN,
                        help="Max process time (min).")
    parser.add_argument("superusers", nargs="*", help="Super user ids.")
    return parser.parse_args(argv)


def _parse_super_users(values: list[str]) -> list[int]:
    users = []
    for value in values:
        try:
            uid = int(value, 10)
        except ValueError:
            continue
        if _INT64_MIN <= uid <= _INT64_MAX:
            users.append(uid)
    return users


def build_config(args: argparse.Namespace) -> BotConfig:
    """The configuration described by parsed command line flags."""
    return BotConfig(
        nicknames=[args.nickname, DEFAULT_NICKNAME],
        command_prefix=args.prefix,
        super_users=_parse_super_users(args.superusers),
        ring_len=args.ring,
        latency=timedelta(milliseconds=args.latency),
        max_process_time=timedelta(minutes=args.max_process),
        ws=[(args.url, args.token)],
    )


def load_config(path: str | Path) -> BotConfig:
    """Read a configuration file."""
    with open(path, encoding="utf-8") as fp:
        return config_from_dict(json.load(fp))


def save_config(config: BotConfig, path: str | Path) -> None:
    """Write a configuration file."""
    with open(path, "w", encoding="utf-8") as fp:
        json.dump(config.to_dict(), fp, ensure_ascii=False)
        fp.write("\n")


def _configure_logging(debug: bool, warn: bool) -> None:
    handler = logging.StreamHandler()
    if sys.platform == "win32":
        handler.setFormatter(ColorFormatter())
        handler.terminator = ""
    else:
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    log.handlers[:] = [handler]
    log.propagate = False
    if warn:
        log.setLevel(logging.WARNING)
    elif debug:
        log.setLevel(logging.DEBUG)
    else:
        log.setLevel(logging.INFO)


def main(argv: list[str] | None = None) -> int:
    """Run the command line program."""
    args = parse_args(argv)
    _configure_logging(args.debug, args.warn)
    print(render_banner(""), end="")
    if args.config:
        config = load_config(args.config)
        log.info("[main] 从 %s 读取配置文件", args.config)
    else:
        config = build_config(args)
        if args.save:
            save_config(config, args.save)
            log.info("[main] 配置文件已保存到 %s", args.save)
            return 0
    nickname = config.nicknames[0] if config.nicknames else ""
    log.info("[main] %s 已就绪, 命令前缀 %s", nickname, config.command_prefix)
    return 0


if __name__ == "__main__":
    sys.exit(main())
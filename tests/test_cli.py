import json
import logging
from datetime import timedelta

import pytest

from hanabot.cli import (
    BotConfig,
    ColorFormatter,
    build_config,
    config_from_dict,
    load_config,
    main,
    parse_args,
    save_config,
)


def test_parse_args_defaults():
    args = parse_args([])
    assert args.prefix == "/"
    assert args.nickname == "花酱"
    assert args.latency == 233
    assert args.ring == 4096
    assert args.max_process == 4
    assert args.token == ""


def test_negative_uint_flag_rejected():
    with pytest.raises(SystemExit):
        parse_args(["-l", "-5"])


def test_build_config_from_flags():
    args = parse_args(["-n", "bot", "-p", "#", "-l", "100", "-x", "2", "123", "abc", "456"])
    config = build_config(args)
    assert config.nicknames == ["bot", "花酱"]
    assert config.command_prefix == "#"
    assert config.super_users == [123, 456]
    assert config.latency == timedelta(milliseconds=100)
    assert config.max_process_time == timedelta(minutes=2)
    assert config.ring_len == 4096


def test_build_config_websocket_client():
    args = parse_args(["-u", "localhost:9000", "-t", "token"])
    config = build_config(args)
    assert config.ws == [("localhost:9000", "token")]


def test_dict_round_trip():
    config = BotConfig(
        nicknames=["a", "b"],
        command_prefix="/",
        super_users=[1, 2],
        ring_len=4096,
        latency=timedelta(milliseconds=233),
        max_process_time=timedelta(minutes=4),
        ws=[("localhost:9000", "token")],
    )
    assert config_from_dict(config.to_dict()) == config


def test_to_dict_layout():
    config = BotConfig(latency=timedelta(milliseconds=233), ws=[("u", "token")])
    data = config.to_dict()
    assert data["zero"]["latency"] == 233_000_000
    assert data["ws"] == [{"Url": "u", "AccessToken": "token"}]


def test_config_from_dict_missing_fields():
    config = config_from_dict({})
    assert config == BotConfig()


def test_config_from_dict_rejects_non_object():
    with pytest.raises(ValueError):
        config_from_dict([1, 2])


def test_save_and_load(tmp_path):
    path = tmp_path / "config.json"
    config = build_config(parse_args(["-n", "花花", "42"]))
    save_config(config, path)
    assert load_config(path) == config
    assert json.loads(path.read_text(encoding="utf-8"))["zero"]["nickname"] == ["花花", "花酱"]


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.json")


def test_color_formatter_warning():
    record = logging.LogRecord("x", logging.WARNING, "f", 1, "hello %s", ("w",), None)
    assert ColorFormatter().format(record) == "\x1b[33m[WARNING] hello w \n\x1b[0m"


def test_color_formatter_error_and_debug():
    formatter = ColorFormatter()
    err = logging.LogRecord("x", logging.ERROR, "f", 1, "bad", (), None)
    dbg = logging.LogRecord("x", logging.DEBUG, "f", 1, "dbg", (), None)
    assert formatter.format(err).startswith("\x1b[31m[ERROR] bad")
    assert formatter.format(dbg).startswith("\x1b[32m[DEBUG] dbg")


def test_main_saves_config(tmp_path):
    path = tmp_path / "saved.json"
    assert main(["-s", str(path), "-p", "!"]) == 0
    assert load_config(path).command_prefix == "!"


def test_main_runs_from_config(tmp_path):
    path = tmp_path / "run.json"
    save_config(BotConfig(nicknames=["x"], command_prefix="/"), path)
    assert main(["-c", str(path)]) == 0


def test_main_missing_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        main(["-c", str(tmp_path / "none.json")])
from types import SimpleNamespace
from unittest import mock

import pytest

from hanabot.aifalse import (
    cpu_percent,
    disk_report,
    mem_percent,
    pack_limit,
    parse_limit_command,
    status_report,
    unpack_limit,
)


@pytest.mark.parametrize("interval,burst", [(1, 1), (60, 8), (65535, 65535), (300, 3)])
def test_pack_round_trip(interval, burst):
    assert unpack_limit(pack_limit(interval, burst)) == (interval, burst)


@pytest.mark.parametrize("interval,burst", [(0, 1), (65536, 1), (1, 0), (1, 65536), (-1, 5)])
def test_pack_rejects_out_of_range(interval, burst):
    with pytest.raises(ValueError):
        pack_limit(interval, burst)


def test_unpack_zero():
    assert unpack_limit(0) == (0, 0)


def test_parse_seconds():
    assert parse_limit_command("设置默认限速为每 10 秒 5 次触发") == (10, 5)


def test_parse_minutes():
    assert parse_limit_command("设置默认限速为每2分钟3次触发") == (120, 3)


def test_parse_interval_too_big():
    with pytest.raises(ValueError, match="interval too big"):
        parse_limit_command("设置默认限速为每1100分钟3次触发")


def test_parse_burst_too_big():
    with pytest.raises(ValueError, match="burst too big"):
        parse_limit_command("设置默认限速为每1秒70000次触发")


def test_parse_no_match():
    with pytest.raises(ValueError):
        parse_limit_command("设置默认限速")


def test_cpu_percent_rounds_half_away():
    with mock.patch("hanabot.aifalse.psutil.cpu_percent", return_value=12.5):
        assert cpu_percent() == 13.0


def test_cpu_percent_error():
    with mock.patch("hanabot.aifalse.psutil.cpu_percent", side_effect=OSError("x")):
        assert cpu_percent() == -1


def test_mem_percent():
    with mock.patch(
        "hanabot.aifalse.psutil.virtual_memory", return_value=SimpleNamespace(percent=40.4)
    ):
        assert mem_percent() == 40.0


def test_disk_report_lines():
    parts = [SimpleNamespace(mountpoint="/"), SimpleNamespace(mountpoint="/proc")]
    usages = {
        "/": SimpleNamespace(percent=50.0, total=7 * 1024 * 1024),
        "/proc": SimpleNamespace(percent=0.0, total=0),
    }
    with mock.patch("hanabot.aifalse.psutil.disk_partitions", return_value=parts), \
            mock.patch("hanabot.aifalse.psutil.disk_usage", side_effect=usages.__getitem__):
        assert disk_report() == "\n  - /(7M) 50%"


def test_disk_report_usage_error():
    parts = [SimpleNamespace(mountpoint="/x")]
    with mock.patch("hanabot.aifalse.psutil.disk_partitions", return_value=parts), \
            mock.patch("hanabot.aifalse.psutil.disk_usage", side_effect=OSError("boom")):
        assert disk_report() == "\n  - boom"


def test_status_report_layout():
    with mock.patch("hanabot.aifalse.psutil.cpu_percent", return_value=20.0), \
            mock.patch("hanabot.aifalse.psutil.virtual_memory",
                       return_value=SimpleNamespace(percent=30.0)), \
            mock.patch("hanabot.aifalse.psutil.disk_partitions", return_value=[]):
        report = status_report()
    assert report == "* CPU占用: 20%\n* RAM占用: 30%\n* 硬盘使用: "
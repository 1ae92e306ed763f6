import pytest

from hanabot.drift_bottle import Bottle, Sea, _crc64, make_bottle

MSG = "this is a message from the sea"


def test_crc64_iso_check_value():
    assert _crc64(b"123456789") == 0xB90956C775A41001


def test_make_bottle_is_deterministic():
    first = make_bottle(1, 2, "2022-11-15 11:13:42", "alice", MSG)
    second = make_bottle(1, 2, "2022-11-15 11:13:42", "alice", MSG)
    assert first == second
    assert -(2**63) <= first.id < 2**63


def test_make_bottle_id_depends_on_content():
    first = make_bottle(1, 2, "t", "alice", MSG)
    second = make_bottle(1, 3, "t", "alice", MSG)
    assert first.id != second.id
    assert second.grp == 3


def test_make_bottle_rejects_short_message():
    with pytest.raises(ValueError):
        make_bottle(1, 2, "t", "alice", "short")


def test_describe_contains_fields():
    bottle = Bottle(id=7, qq=11, name="alice", msg=MSG, grp=22, time="t0")
    described = bottle.describe("花酱")
    assert described.startswith("花酱试着帮你捞出来了这个~\nID:7")
    assert "\n投递人: alice(11)" in described
    assert "\n群号: 22" in described
    assert described.endswith("\n内容: \n" + MSG)


def test_throw_and_pick_round_trip():
    with Sea() as sea:
        bottle = make_bottle(1, 2, "t", "alice", MSG)
        sea.throw(bottle)
        assert sea.pick() == bottle


def test_pick_empty_sea():
    with Sea() as sea:
        with pytest.raises(LookupError):
            sea.pick()


def test_same_bottle_replaced():
    with Sea() as sea:
        bottle = make_bottle(1, 2, "t", "alice", MSG)
        sea.throw(bottle)
        sea.throw(bottle)
        sea.throw(make_bottle(3, 4, "t", "bob", MSG))
        assert len(sea) == 2


def test_persisted_in_file(tmp_path):
    path = tmp_path / "sea.db"
    bottle = make_bottle(5, 6, "t", "carol", MSG)
    with Sea(path) as sea:
        sea.throw(bottle)
    with Sea(path) as sea:
        assert sea.pick() == bottle
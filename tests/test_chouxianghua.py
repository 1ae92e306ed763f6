import pytest

from hanabot.chouxianghua import AbstractDictionary, translate


@pytest.fixture
def dictionary():
    return AbstractDictionary(
        {"你": "ni", "好": "hao"},
        {"nihao": "👋", "ni": "🫵"},
    )


def test_lookups(dictionary):
    assert dictionary.pinyin_of("你") == "ni"
    assert dictionary.pinyin_of("们") == ""
    assert dictionary.emoji_of("nihao") == "👋"
    assert dictionary.emoji_of("zzz") == ""


def test_pair_is_replaced(dictionary):
    assert translate("你好", dictionary) == "👋"


def test_single_characters(dictionary):
    assert translate("好你", dictionary) == "好🫵"


def test_unknown_second_character_is_swallowed_by_pair(dictionary):
    assert translate("你们", dictionary) == "🫵"


def test_text_without_entries_is_unchanged(dictionary):
    assert translate("abc 123", dictionary) == "abc 123"
    assert translate("", dictionary) == ""
import random

from hanabot.choose import choose


def test_options_are_listed_in_order():
    out = choose("A还是B还是C", "alice", random.Random(1))
    lines = out.split("\n")
    assert lines[0] == "> alice"
    assert lines[1] == "你的选项有:"
    assert lines[2:5] == ["1, A", "2, B", "3, C"]


def test_result_is_one_of_the_options():
    for seed in range(20):
        last = choose("A还是B", "bob", random.Random(seed)).split("\n")[-1]
        assert last.startswith("你最终会选: ")
        assert last[len("你最终会选: "):] in {"A", "B"}


def test_single_option_is_always_chosen():
    out = choose("pizza", "carol", random.Random(3))
    assert out.endswith("你最终会选: pizza")


def test_same_seed_same_choice():
    first = choose("x还是y还是z", "d", random.Random(7))
    second = choose("x还是y还是z", "d", random.Random(7))
    assert first == second
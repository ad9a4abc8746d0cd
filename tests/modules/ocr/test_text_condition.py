import pytest

from vzflow.modules.ocr import TextBlock, TextCondition, TextMatchMode, join_text


def test_any_requires_one_substring():
    cond = TextCondition.any(["continue", "next"])

    assert cond.evaluate("press continue to proceed")
    assert not cond.evaluate("select your country")


def test_all_requires_every_substring():
    cond = TextCondition.all(["language", "english"])

    assert cond.evaluate("choose language\nenglish")
    assert not cond.evaluate("choose language")


def test_none_rejects_any_substring():
    cond = TextCondition.none(["error"])

    assert cond.evaluate("welcome")
    assert not cond.evaluate("an error occurred")


def test_matching_is_case_insensitive():
    assert TextCondition.any(["Hello"]).evaluate("HELLO WORLD")


def test_empty_needle_lists():
    assert not TextCondition.any([]).evaluate("anything")
    assert TextCondition.all([]).evaluate("anything")
    assert TextCondition.none([]).evaluate("anything")


def test_coerce_plain_string():
    cond = TextCondition.coerce("Get Started")

    assert cond.mode == TextMatchMode.ANY
    assert cond.strings == ("Get Started",)
    assert TextCondition.coerce(cond) is cond
    assert str(cond) == "any(Get Started)"


def test_join_text_lowercases_blocks():
    blocks = [TextBlock("Hello", (0, 0, 0, 0)), TextBlock("World", (0, 0, 0, 0))]

    assert join_text(blocks) == "hello\nworld"


def test_text_block_center():
    cx, cy = TextBlock("x", (0.1, 0.2, 0.4, 0.2)).center

    assert cx == pytest.approx(0.3)
    assert cy == pytest.approx(0.3)

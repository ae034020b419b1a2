import pytest

from src.application.services.payload_coercion import (
    coerce_choice,
    coerce_number,
    coerce_score,
    decode_reply,
    extract_json,
)


def test_extract_json():
    assert extract_json('{"a": 1}') == {"a": 1}
    assert extract_json('```\n{"a": 2}\n```') == {"a": 2}
    with pytest.raises(ValueError):
        extract_json("no json here")


@pytest.mark.parametrize(
    "value,expected",
    [("40%", 40.0), (" 12.5 ", 12.5), (7, 7.0), ("abc", 0.0), (None, 0.0), (True, 0.0), ("nan", 0.0), ("inf", 0.0)],
)
def test_coerce_number(value, expected):
    assert coerce_number(value) == expected


def test_coerce_score_clamps():
    assert coerce_score(140) == 100.0
    assert coerce_score(-3) == 0.0
    assert coerce_score("55") == 55.0


def test_coerce_choice_is_case_insensitive_with_default():
    assert coerce_choice("bullish", ("Bullish", "Bearish", "Neutral"), "Neutral") == "Bullish"
    assert coerce_choice("sideways", ("Bullish", "Bearish", "Neutral"), "Neutral") == "Neutral"
    assert coerce_choice(None, ("Low", "High"), "Low") == "Low"


def test_decode_reply():
    assert decode_reply('```json\n{"a": 1}\n```') == ({"a": 1}, None)
    document, reason = decode_reply("[1]")
    assert document is None
    assert "list" in reason

"""Tests for model output parsing."""

import json

import pytest

from agenda_detector.exceptions import MalformedResponse
from agenda_detector.schemas.evidence import ContradictionList, LinguisticAnalysis
from agenda_detector.services.parsing import decode_response, parse_llm_json


def test_parse_fenced_block():
    """Test extraction from a fenced json block surrounded by prose."""
    text = "prefix\n```json\n{\"a\":1}\n```\nsuffix"

    assert parse_llm_json(text) == {"a": 1}


def test_parse_fenced_block_without_language_tag():
    """Test extraction from a plain fenced block."""
    text = "Here you go:\n```\n[1, 2]\n```"

    assert parse_llm_json(text) == [1, 2]


@pytest.mark.parametrize(
    "value",
    [
        {"a": 1, "b": [1, 2, {"c": None}]},
        [{"a": 1}, {"b": 2}],
        ["{}", "x"],
        "plain {braces} string",
        42,
        None,
        [],
    ],
)
def test_parse_valid_json_unchanged(value):
    """Test that already valid JSON parses to the same value."""
    assert parse_llm_json(json.dumps(value)) == value


def test_parse_bare_object_in_prose():
    """Test extraction of an object embedded in prose."""
    text = 'Sure! {"framing": "neutral"} Hope this helps.'

    assert parse_llm_json(text) == {"framing": "neutral"}


def test_parse_bare_array_in_prose():
    """Test that an array starting before any object is taken whole."""
    text = 'Results: [{"a": 1}, {"b": 2}] done'

    assert parse_llm_json(text) == [{"a": 1}, {"b": 2}]


def test_parse_invalid_raises_with_raw_text():
    """Test failure carries the raw text."""
    text = "I could not find anything useful."

    with pytest.raises(MalformedResponse) as exc_info:
        parse_llm_json(text)

    assert exc_info.value.raw_text == text


def test_decode_bare_array_into_wrapper():
    """Test that a bare array is accepted for list-shaped output."""
    result = decode_response("[]", ContradictionList, list_key="contradictions")

    assert result.contradictions == []


def test_decode_schema_mismatch():
    """Test that a missing required field is rejected, not coerced."""
    text = json.dumps({"euphemisms": ["x"]})

    with pytest.raises(MalformedResponse) as exc_info:
        decode_response(text, LinguisticAnalysis)

    assert exc_info.value.raw_text == text

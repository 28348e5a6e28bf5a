"""Extraction and validation of JSON embedded in model output."""

import json
import logging
import re
from typing import Any, Iterator, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from agenda_detector.exceptions import MalformedResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

FENCED_BLOCK = re.compile(r"```(?:json)?[ \t]*\n([\s\S]*?)\n[ \t]*```")
BARE_OBJECT = re.compile(r"\{[\s\S]*\}")
BARE_ARRAY = re.compile(r"\[[\s\S]*\]")


def _candidates(text: str) -> Iterator[str]:
    """Yield candidate JSON strings in the order they should be tried."""
    # Text that is already valid JSON contains every other candidate
    yield text.strip()

    for match in FENCED_BLOCK.finditer(text):
        yield match.group(1)

    bare = []
    for pattern in (BARE_OBJECT, BARE_ARRAY):
        match = pattern.search(text)
        if match:
            bare.append((match.start(), match.group(0)))
    for _, candidate in sorted(bare):
        yield candidate


def parse_llm_json(text: str) -> Any:
    """
    Extract a JSON value from model output.

    Handles raw JSON, fenced ```json blocks and JSON surrounded by prose.

    Args:
        text: Raw model output

    Returns:
        The first candidate that parses

    Raises:
        MalformedResponse: If no candidate parses
    """
    for candidate in _candidates(text):
        if not candidate:
            continue
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue

    logger.error(f"Failed to parse LLM JSON response: {text[:500]}")
    raise MalformedResponse("The model returned an invalid JSON format.", raw_text=text)


def decode_response(text: str, model: Type[ModelT], list_key: Optional[str] = None) -> ModelT:
    """
    Parse model output and validate it against a schema.

    Args:
        text: Raw model output
        model: Pydantic model the value must satisfy
        list_key: For list-shaped outputs, the field a bare array is placed under

    Returns:
        Validated model instance

    Raises:
        MalformedResponse: If parsing or validation fails
    """
    value = parse_llm_json(text)
    if list_key is not None and isinstance(value, list):
        value = {list_key: value}

    try:
        return model.model_validate(value)
    except ValidationError as e:
        logger.error(f"LLM output failed {model.__name__} validation: {e}")
        raise MalformedResponse(
            f"The model response did not match the expected {model.__name__} schema "
            f"({e.error_count()} error(s)).",
            raw_text=text,
        ) from e

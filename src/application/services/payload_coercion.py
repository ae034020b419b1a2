"""
Lenient coercion helpers shared by the parsers of LLM-produced JSON.

Every helper is total: a value that cannot be coerced maps to a default
instead of raising, except extract_json, which is the one place a reply is
rejected outright.
"""

import json
import logging
import math
import re
from typing import Any, Iterable, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


class LenientModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Numbers, numeric strings and "40%" become floats; NaN, inf and junk become *default*."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip().rstrip("%").strip()
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def coerce_score(value: Any) -> float:
    """A 0-100 score, clamped."""
    return min(100.0, max(0.0, coerce_number(value)))


def coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "y", "1")
    return bool(value) if value is not None else False


def coerce_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def coerce_choice(value: Any, choices: Iterable[str], default: str) -> str:
    """Match *value* case-insensitively against *choices*; return the canonical spelling."""
    text = coerce_optional_str(value)
    if text is None:
        return default
    for choice in choices:
        if choice.lower() == text.lower():
            return choice
    return default


def string_list(items: Any) -> list[str]:
    if not isinstance(items, list):
        return []
    return [str(i).strip() for i in items if i is not None and str(i).strip()]


_M = TypeVar("_M", bound=BaseModel)


def validate_items(model: type[_M], items: Any, field_name: str) -> list[_M]:
    """Validate each element of *items*, dropping the ones that do not fit *model*."""
    if not isinstance(items, list):
        return []
    valid: list[_M] = []
    for index, item in enumerate(items):
        try:
            valid.append(model.model_validate(item))
        except ValidationError as exc:
            logger.debug("Dropping %s[%d]: %s", field_name, index, exc.errors()[0]["msg"])
    return valid


def extract_json(text: str) -> Any:
    """Parse JSON from an LLM reply, unwrapping a markdown code fence if present.

    Raises:
        ValueError: if no JSON document can be decoded.
    """
    match = _CODE_FENCE.search(text)
    candidate = match.group(1) if match else text
    try:
        return json.loads(candidate.strip())
    except json.JSONDecodeError:
        if not match:
            raise ValueError("Reply is not valid JSON")
    try:
        return json.loads(text.strip())
    except json.JSONDecodeError as exc:
        raise ValueError("Reply is not valid JSON") from exc


def decode_reply(payload: Any) -> tuple[Optional[dict], Optional[str]]:
    """Return ``(document, None)`` for a JSON object, else ``(None, reason)``."""
    if isinstance(payload, str):
        try:
            payload = extract_json(payload)
        except ValueError as exc:
            return None, str(exc)
    if not isinstance(payload, dict):
        return None, f"Expected a JSON object, got {type(payload).__name__}"
    return payload, None

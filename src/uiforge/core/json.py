"""JSON helpers for oracle payloads and emitted source literals."""

from typing import Any
import json

import msgspec
import orjson
from json_repair import repair_json

_DECODER = msgspec.json.Decoder()


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def _strip_fences(text: str) -> str:
    """Drop a surrounding markdown code fence, if any."""
    if "```" not in text:
        return text
    start = text.find("```json")
    start = start + 7 if start != -1 else text.find("```") + 3
    end = text.find("```", start)
    return text[start:end].strip() if end != -1 else text[start:].strip()


def extract_json(text: str, repair: bool = True) -> dict[str, Any]:
    """
    Extract and parse the JSON object embedded in a text response.

    Tries msgspec first, then the standard library, then json_repair.

    Args:
        text: Text containing a JSON object (possibly fenced or with chatter around it)
        repair: Attempt to repair invalid JSON with json_repair

    Raises:
        JSONParseError: If no object can be recovered
    """
    working = _strip_fences(text.strip())
    start = working.find("{")
    end = working.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise JSONParseError("No JSON object found in text")
    candidate = working[start : end + 1]

    try:
        result = _DECODER.decode(candidate.encode("utf-8"))
    except msgspec.DecodeError as e:
        if not repair:
            raise JSONParseError(f"Invalid JSON: {e}", e) from e
        try:
            result = json.loads(repair_json(candidate))
        except Exception as repair_error:
            raise JSONParseError(f"JSON repair failed: {repair_error}", repair_error) from repair_error

    if not isinstance(result, dict):
        raise JSONParseError(f"Expected object, got {type(result).__name__}")
    return result


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to a JSON string.

    Compact output goes through orjson; indented output (or values orjson
    rejects, such as integers beyond 64 bits) falls back to the stdlib.
    """
    indent = kwargs.get("indent", 0)
    if not indent:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except (TypeError, orjson.JSONEncodeError):
            pass
    return json.dumps(obj, indent=indent or None, ensure_ascii=False)


def validate_json_depth(obj: Any, max_depth: int = 20, current_depth: int = 0) -> None:
    """
    Reject payloads nested deeper than max_depth.

    Raises:
        JSONParseError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise JSONParseError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)

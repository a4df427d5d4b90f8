"""Defensive parsing of model replies that are supposed to be JSON.

The model is asked for JSON but often wraps it in markdown fences, leaves
trailing commas, forgets to quote keys or values, or stops mid-object.
`parse` tries progressively harder to recover an array of objects and, when
everything fails, synthesizes a single placeholder so callers always get
something to show. `parse_recipe_pair` is the strict counterpart used where a
malformed pair must surface as an error instead.
"""

import json
import logging
import re
from typing import Any

from mixologist.exceptions import ParseError

logger = logging.getLogger(__name__)

FALLBACK_TITLE = "Mixologist Suggestion"
FALLBACK_SNIPPET = "I encountered an issue processing your request. Please try a different search term."
FALLBACK_WHY = "Response reconstructed from partial data due to parsing error."

_FENCE = re.compile(r"```(?:json|JSON)?\s*([\s\S]*?)\s*```")
_JSON_FENCE = re.compile(r"```json\s*([\s\S]*?)\s*```")
_STRING_LITERAL = re.compile(r'"(?:\\.|[^"\\])*"')
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_UNQUOTED_KEY = re.compile(r"([{,]\s*)([a-zA-Z_$][a-zA-Z0-9_$]*)\s*:")
_BARE_VALUE = re.compile(r":\s*([^\",\[\]{}]+?)(\s*[,}\]])")
_JSON_LITERAL = re.compile(r'^(-?\d+\.?\d*|true|false|null|".*")$')
_TITLE = re.compile(r'"title":\s*"([^"]+)"', re.IGNORECASE)
_SNIPPET = re.compile(r'"snippet":\s*"([^"]+)"', re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Replace every fenced block with its interior."""
    return _FENCE.sub(r"\1", text)


def locate_json(text: str) -> str | None:
    """Slice from the first `[` to the last `]`, or `{`..`}` if there is no array."""
    start = text.find("[")
    end = text.rfind("]")
    if start == -1:
        start = text.find("{")
        end = text.rfind("}")
    if start == -1 or end == -1 or start >= end:
        return None
    return text[start : end + 1]


def _quote_bare_value(match: re.Match) -> str:
    value = match.group(1).strip()
    ending = match.group(2)
    if _JSON_LITERAL.match(value):
        return f":{value}{ending}"
    escaped = value.replace('"', '\\"')
    return f':"{escaped}"{ending}'


def _repair_segment(segment: str) -> str:
    segment = _TRAILING_COMMA.sub(r"\1", segment)
    segment = _UNQUOTED_KEY.sub(r'\1"\2":', segment)
    return _BARE_VALUE.sub(_quote_bare_value, segment)


def repair(text: str) -> str:
    """Fix common JSON malformations outside of string literals.

    Drops trailing commas before `}`/`]`, quotes identifier keys, and quotes
    bare scalar values that are not numbers, booleans or null.
    """
    pieces: list[str] = []
    last = 0
    for match in _STRING_LITERAL.finditer(text):
        pieces.append(_repair_segment(text[last : match.start()]))
        pieces.append(match.group(0))
        last = match.end()
    pieces.append(_repair_segment(text[last:]))
    return "".join(pieces)


def _as_list(value: Any) -> list[Any] | None:
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        return [value]
    return None


def _decode(raw_text: str) -> list[Any] | None:
    """Fence strip, slice, parse, then repair and parse once more."""
    cleaned = strip_code_fences(raw_text).strip()
    # A reply that is already valid JSON is taken whole, so an object with
    # an array field is not sliced down to that array.
    try:
        whole = _as_list(json.loads(cleaned))
    except json.JSONDecodeError:
        logger.debug("reply is not bare JSON, locating structure")
    else:
        if whole is not None:
            return whole

    candidate = locate_json(cleaned)
    if candidate is None:
        logger.debug("no JSON structure found in %d chars", len(raw_text))
        return None

    try:
        return _as_list(json.loads(candidate))
    except json.JSONDecodeError as e:
        logger.debug("direct parse failed, attempting repair: %s", e)

    try:
        return _as_list(json.loads(repair(candidate)))
    except json.JSONDecodeError as e:
        logger.debug("parse after repair failed: %s", e)
        return None


def _reconstruct(raw_text: str) -> dict[str, Any]:
    title = _TITLE.search(raw_text)
    snippet = _SNIPPET.search(raw_text)
    return {
        "title": title.group(1) if title else FALLBACK_TITLE,
        "snippet": snippet.group(1) if snippet else FALLBACK_SNIPPET,
        "filePath": None,
        "why": FALLBACK_WHY,
    }


def parse(raw_text: str) -> list[dict[str, Any]]:
    """Recover a non-empty list of objects from a model reply. Never raises."""
    raw_text = raw_text or ""
    items = _decode(raw_text)
    objects = [item for item in items or [] if isinstance(item, dict)]
    if objects:
        return objects

    logger.warning("all parsing attempts failed for %d-char reply, reconstructing", len(raw_text))
    return [_reconstruct(raw_text)]


def parse_object(raw_text: str) -> dict[str, Any] | None:
    """Recover a single JSON object, or None."""
    cleaned = strip_code_fences(raw_text or "")
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end <= start:
        return None

    candidate = cleaned[start : end + 1]
    for text in (candidate, repair(candidate)):
        try:
            value = json.loads(text)
        except json.JSONDecodeError:
            continue
        return value if isinstance(value, dict) else None
    return None


def _is_filled(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def validate_recipe_pair(items: Any) -> bool:
    """Exactly two objects, each with non-empty title and snippet and a filePath key."""
    if not isinstance(items, list) or len(items) != 2:
        return False
    return all(
        isinstance(item, dict)
        and _is_filled(item.get("title"))
        and _is_filled(item.get("snippet"))
        and "filePath" in item
        for item in items
    )


def parse_recipe_pair(raw_text: str) -> list[dict[str, Any]]:
    """Strictly parse a two-recipe reply.

    Raises:
        ParseError: If no attempt yields a valid pair
    """
    items = _decode(raw_text)
    if validate_recipe_pair(items):
        return items

    match = _JSON_FENCE.search(raw_text)
    if match:
        try:
            fenced = json.loads(match.group(1))
        except json.JSONDecodeError:
            fenced = None
        if validate_recipe_pair(fenced):
            return fenced

    try:
        untouched = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Model reply is not valid JSON: {e}") from e
    if not validate_recipe_pair(untouched):
        raise ParseError("Model reply does not contain exactly two complete recipes")
    return untouched

"""Structure-preserving transforms over JSON-like values.

A JSON value here is one of: str, int/float, bool, None, list, dict with
str keys. `transform_value` returns a new value of identical shape where
only the strings have been replaced by `fn(string)`. Numbers, booleans and
None are copied as-is and never passed to `fn`.

Failures are all-or-nothing: if `fn` raises for any leaf, the whole
transform raises and no partially transformed tree is returned.
"""

from __future__ import annotations

import json
from typing import Callable, Union

from legaldoc import logger as logger_mod
from legaldoc.errors import InputError

log = logger_mod.get_logger()

JSONValue = Union[str, int, float, bool, None, list["JSONValue"], dict[str, "JSONValue"]]

StringTransform = Callable[[str], str]


def transform_value(value: JSONValue, fn: StringTransform) -> JSONValue:
    # bool is a subclass of int, so it has to be matched first
    if isinstance(value, str):
        return fn(value)
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, list):
        return [transform_value(item, fn) for item in value]
    if isinstance(value, dict):
        return {key: transform_value(item, fn) for key, item in value.items()}

    raise InputError(f"Unsupported value type in JSON tree: {type(value).__name__}")


def _reject_constant(name: str) -> None:
    # NaN and Infinity are not JSON
    raise ValueError(f"Not a JSON value: {name}")


def parse_document(raw: str) -> tuple[bool, JSONValue]:
    """Return (True, parsed) when `raw` is serialized JSON, else (False, raw)."""

    try:
        return True, json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        return False, raw


def transform_document(document: JSONValue, fn: StringTransform) -> JSONValue:
    """Transform a document that may arrive as a serialized JSON string.

    A string that parses as JSON is walked structurally; any other string is
    treated as a single leaf.
    """

    if isinstance(document, str):
        is_json, parsed = parse_document(document)
        if not is_json:
            return fn(document)
        log.debug("Input string parsed as JSON; transforming structurally")
        return transform_value(parsed, fn)

    return transform_value(document, fn)


def translate_analysis(document: JSONValue, assistant, target_language: str) -> JSONValue:
    """Translate every string in an analysis result into `target_language`.

    `assistant` is a `DocumentAssistant`; long strings are chunked and every
    call is retried by it.
    """

    if not isinstance(target_language, str) or not target_language.strip():
        raise InputError("target_language must be a non-empty string")

    return transform_document(
        document, lambda text: assistant.translate(text, target_language)
    )


__all__ = [
    "JSONValue",
    "StringTransform",
    "parse_document",
    "transform_document",
    "transform_value",
    "translate_analysis",
]

from __future__ import annotations

import json
import re
from typing import Any

from jsonschema import validate
from jsonschema.exceptions import ValidationError as _SchemaValidationError

from .errors import LLMValidationError

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?\s*```$", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove a single markdown code fence wrapping the whole response."""

    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    if match:
        return match.group(1).strip()
    return stripped


def parse_json(text: str) -> Any:
    """Parse JSON from a model response.

    Assumes the model was instructed to return JSON only; a surrounding
    code fence is tolerated.
    """

    try:
        return json.loads(strip_code_fences(text))
    except Exception as e:  # noqa: BLE001
        raise LLMValidationError(f"Failed to parse JSON: {e}", raw_text=text) from e


def validate_json(instance: Any, schema: dict[str, Any], *, raw_text: str) -> None:
    try:
        validate(instance=instance, schema=schema)
    except _SchemaValidationError as e:
        raise LLMValidationError(
            f"JSON schema validation failed: {e.message}", raw_text=raw_text
        ) from e

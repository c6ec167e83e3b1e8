from __future__ import annotations

import json
import re
from typing import Any

_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` block, which some models add despite instructions."""

    return _FENCE_PATTERN.sub("", text.strip())


def parse_json_object(text: str) -> dict[str, Any]:
    """
    Parse model output that must be a single JSON object.

    Empty output parses as an empty object so schema checks report it.
    Raises ValueError for invalid JSON or any non-object top level.
    """

    cleaned = strip_code_fences(text)
    if not cleaned:
        return {}

    parsed = json.loads(cleaned)
    if not isinstance(parsed, dict):
        raise ValueError("model output must be a JSON object")
    return parsed

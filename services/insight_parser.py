import json
import re
from typing import Any, Dict

from services.errors import InsightParseError

REQUIRED_FIELDS = ("leadScore", "insight")

# Bounds the work on pathological output; each failed start costs a decode attempt.
MAX_FAILED_CANDIDATES = 50

_OBJECT_START = re.compile(r"\{")
_decoder = json.JSONDecoder()


def extract_insight(text: str) -> Dict[str, Any]:
    """Pull the insight object out of free-form model output.

    Models tend to wrap the JSON in prose or markdown fences, so each ``{``
    is tried as the start of an object and the first one that decodes to a
    dict holding both ``leadScore`` and ``insight`` wins. The whole decoded
    object is returned, extra keys included.
    """
    if not text:
        raise InsightParseError(text or "")

    failures = 0
    for match in _OBJECT_START.finditer(text):
        try:
            candidate, _ = _decoder.raw_decode(text, match.start())
        except (json.JSONDecodeError, RecursionError):
            failures += 1
            if failures >= MAX_FAILED_CANDIDATES:
                break
            continue
        if isinstance(candidate, dict) and all(field in candidate for field in REQUIRED_FIELDS):
            return candidate

    raise InsightParseError(text)

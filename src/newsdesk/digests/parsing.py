"""Lenient JSON extraction for agent output.

Agent responses are free text produced by an LLM: usually JSON, sometimes
wrapped in a markdown fence or followed by commentary, occasionally
double-encoded. parse_payload() recovers what it can and returns None for
everything else.
"""

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*\n(.*?)```", re.DOTALL | re.IGNORECASE)

# Guards against pathological nesting of JSON-in-a-string
_MAX_DECODE_DEPTH = 2


def parse_payload(raw: Any) -> Any | None:
    """Parse agent output into a structured value. Never raises.

    Mappings and lists are returned unchanged. Strings are decoded as JSON,
    tolerating a surrounding code fence and trailing prose. Anything else,
    or text with no recoverable JSON, yields None.
    """
    if isinstance(raw, dict | list):
        return raw
    if not isinstance(raw, str):
        return None
    return _parse_text(raw, depth=0)


def _parse_text(text: str, depth: int) -> Any | None:
    text = text.strip()
    if not text:
        return None

    match = _FENCE_RE.search(text)
    if match:
        text = match.group(1).strip()

    value = _decode(text)
    if value is None:
        logger.debug("payload_unparsable", extra={"payload.length": len(text)})
        return None

    # Agents sometimes return a JSON document serialized into a JSON string
    if isinstance(value, str) and depth < _MAX_DECODE_DEPTH:
        nested = _parse_text(value, depth + 1)
        return nested if nested is not None else value
    return value


def _decode(text: str) -> Any | None:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        pass

    # raw_decode stops at the end of the first valid JSON value, which
    # handles commentary before and after the payload
    decoder = json.JSONDecoder()
    for opener in ("{", "["):
        start = text.find(opener)
        while start >= 0:
            try:
                value, _ = decoder.raw_decode(text, start)
                return value
            except json.JSONDecodeError:
                start = text.find(opener, start + 1)
            except RecursionError:
                # Too deeply nested; later openers sit inside the same nesting
                return None
    return None

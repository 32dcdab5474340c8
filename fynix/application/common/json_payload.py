"""Extraction of JSON payloads from free-form model output."""

import json
import re
from typing import Any

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)
_PAYLOAD_START = re.compile(r"[{\[]")


def strip_code_fences(text: str) -> str:
    return _CODE_FENCE.sub("", text).strip()


def extract_json_payload(text: str) -> Any | None:
    """
    Pull the first JSON document out of a model reply.

    Models wrap JSON in prose or markdown fences. The whole reply is tried
    first, then decoding starts at every ``{`` or ``[`` until one parses.

    Args:
        text: Raw model output

    Returns:
        The decoded JSON value, or None when the text contains none
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        return None
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    decoder = json.JSONDecoder()
    for match in _PAYLOAD_START.finditer(cleaned):
        try:
            payload, _ = decoder.raw_decode(cleaned, match.start())
        except json.JSONDecodeError:
            continue
        return payload
    return None

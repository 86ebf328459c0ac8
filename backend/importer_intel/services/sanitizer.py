"""Tolerant JSON extraction from free-form model output.

The model is asked for raw JSON but regularly wraps it in markdown fences or
conversational prose. Extraction takes the first ``{`` through the last ``}``
of the de-fenced text. That is right for a single top-level object; two sibling
objects in one reply decode as garbage and surface as a malformed response.
"""

import json
import logging

from importer_intel.errors import MalformedResponseError

logger = logging.getLogger("intel.sanitizer")


def clean_json_string(text: str) -> str:
    """Strip code fences and slice the outermost brace pair, if any."""
    cleaned = text.replace("```json", "").replace("```", "").strip()

    first_brace = cleaned.find("{")
    last_brace = cleaned.rfind("}")
    if first_brace != -1 and last_brace != -1:
        cleaned = cleaned[first_brace : last_brace + 1]

    return cleaned


def extract_json(raw: str | None) -> dict:
    """Decode the JSON object embedded in ``raw``.

    Returns ``{}`` when the text holds no braces at all.

    Raises:
        MalformedResponseError: braces were found but the slice is not valid
            JSON (or not an object).
    """
    if not raw or "{" not in raw or "}" not in raw:
        return {}

    text = clean_json_string(raw)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse model response as JSON: %s", e)
        raise MalformedResponseError(str(e)) from e

    if not isinstance(data, dict):
        raise MalformedResponseError(f"expected a JSON object, got {type(data).__name__}")
    return data


def extract_json_or_empty(raw: str | None) -> dict:
    """Like :func:`extract_json` but degrades to ``{}`` on malformed text.

    Used for secondary lookups where a conversational, non-JSON reply is
    expected now and then.
    """
    try:
        return extract_json(raw)
    except MalformedResponseError as e:
        logger.warning("Discarding malformed response: %s", e.detail)
        return {}

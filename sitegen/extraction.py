# sitegen/extraction.py
import json
import logging
from typing import Any

from .errors import ExtractionError, ShapeError
from .models import CodeBundle

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 500
BUNDLE_FIELDS = ("html", "css", "js")


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def extract_json(text: str) -> Any:
    """
    Pulls the JSON object out of a model reply by slicing from the first '{'
    to the last '}' and parsing that span.

    Braces are not balanced: anything between the outermost braces is parsed
    as-is, so prose containing braces on either side of the object breaks it.
    The retry endpoint relies on exactly these failure modes.
    """
    logger.debug("Raw response received, attempting to extract JSON")

    start = text.find("{")
    end = text.rfind("}")

    if start == -1 or end == -1 or end < start:
        logger.error("Could not find a JSON object structure in the response")
        logger.info("Raw text (first %d chars): %s", PREVIEW_LENGTH, text[:PREVIEW_LENGTH])
        raise ExtractionError("No JSON structure found in the model response.")

    json_string = text[start:end + 1]

    try:
        parsed = json.loads(json_string, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        logger.error("Failed to parse the extracted JSON string: %s", e)
        logger.info("Extracted string (first %d chars): %s", PREVIEW_LENGTH, json_string[:PREVIEW_LENGTH])
        raise ExtractionError(
            f"Malformed JSON in the model response: {e}. "
            f"Extracted: {json_string[:PREVIEW_LENGTH]}",
            fragment=json_string,
        )

    logger.debug("Successfully parsed extracted JSON")
    return parsed


def validate_bundle(parsed: Any) -> CodeBundle:
    """Checks that `parsed` carries non-empty `html`, `css` and `js` strings."""
    if not isinstance(parsed, dict):
        raise ShapeError("Parsed JSON is not an object.")

    bad = [
        name for name in BUNDLE_FIELDS
        if not isinstance(parsed.get(name), str) or not parsed[name]
    ]
    if bad:
        raise ShapeError(
            "Parsed JSON is missing required keys (html, css, js) or the keys "
            f"have empty values: {', '.join(bad)}"
        )

    return CodeBundle(html=parsed["html"], css=parsed["css"], js=parsed["js"])

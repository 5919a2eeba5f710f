"""
JSON extraction from model replies.

Models often wrap the requested JSON in narration or markdown fences.
Decoding is attempted at every ``{`` in order; the first position that
decodes to a JSON object wins. Stray or unbalanced braces in the
narration, before or after the object, are skipped over.
"""

from __future__ import annotations

import json
from typing import Optional

from scanmyfood.domain.analysis.models import AnalysisResult
from scanmyfood.domain.shared.errors import ExtractionError, ParseError

_decoder = json.JSONDecoder()


def extract_json_object(text: str) -> AnalysisResult:
    """Return the first complete JSON object embedded in ``text``.

    Args:
        text: Raw model reply

    Returns:
        Parsed object, unmodified

    Raises:
        ExtractionError: If the text has no ``{`` followed by a ``}``
        ParseError: If braces exist but no position decodes to an object

    Example:
        >>> extract_json_object('blah {"a":1} blah')
        {'a': 1}
        >>> extract_json_object('{note: {"a": 1}}')
        {'a': 1}
    """
    text = text or ""
    index = text.find("{")
    if index == -1 or text.rfind("}") < index:
        raise ExtractionError("No JSON object found in model response")

    first_error: Optional[str] = None
    while index != -1:
        try:
            # Decoding at "{" can only yield an object
            value, _ = _decoder.raw_decode(text, index)
            return value  # type: ignore[no-any-return]
        except json.JSONDecodeError as exc:
            if first_error is None:
                first_error = f"Invalid JSON in model response: {exc.msg} (char {exc.pos})"
        index = text.find("{", index + 1)

    raise ParseError(first_error or "Invalid JSON in model response")

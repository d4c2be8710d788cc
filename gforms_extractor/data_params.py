"""
Lenient parser for the data-params attribute Google Forms puts on each question.

The attribute holds a JavaScript-ish array literal with HTML-encoded quotes,
a "%.@." marker in front of the first bracket and elided array entries. The
cleanup below is a fixed sequence of regex rewrites; anything it cannot
recover is reported as unavailable metadata.
"""

import json
import logging
import re
from typing import Any, Optional

from .exceptions import NormalizationFailure

logger = logging.getLogger(__name__)

# Applied in order; each rewrite assumes the output of the previous one.
_CLEANUP_STEPS = (
    (re.compile(r'&quot;'), '"'),
    (re.compile(r'^%.@\.\['), '[['),
    (re.compile(r'\]\s*$'), ']'),
    (re.compile(r',(\s*[}\]])'), r'\1'),
    (re.compile(r',(?=\s*[,}\]])'), ',null'),
)


def clean_data_params(raw: str) -> str:
    """Rewrite a raw data-params string into JSON text."""
    cleaned = raw
    for pattern, replacement in _CLEANUP_STEPS:
        cleaned = pattern.sub(replacement, cleaned)
    return cleaned


def load_data_params(raw: str) -> Any:
    """Clean and decode data-params, raising NormalizationFailure on bad input."""
    cleaned = None
    try:
        cleaned = clean_data_params(raw)
        return json.loads(cleaned)
    except (TypeError, ValueError, RecursionError) as e:
        raise NormalizationFailure(cleaned, e) from e


def parse_data_params(raw: str) -> Optional[Any]:
    """Best-effort decode of data-params; returns None when it can't be recovered."""
    try:
        return load_data_params(raw)
    except NormalizationFailure as failure:
        logger.warning(f"{failure}")
        logger.warning(f"Params were: {failure.cleaned}")
        return None

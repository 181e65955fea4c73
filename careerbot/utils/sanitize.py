"""
Input sanitization for text that ends up in prompts or outbound requests.

Every user-supplied string (chat questions, LinkedIn URLs, profile fields)
passes through ``sanitize_input`` first.
"""

import re
from typing import Any

MAX_INPUT_LENGTH = 2000

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_WHITESPACE_RE = re.compile(r"\s+")
_TAG_RE = re.compile(r"</?[A-Za-z][^<>]*>|<!--.*?-->", re.DOTALL)
_SCRIPT_BLOCK_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_SCHEME_RE = re.compile(r"\b(?:javascript|vbscript)\s*:|\bdata:\w+/[\w.+-]+", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r"\bon[a-z]+\s*=", re.IGNORECASE)


def sanitize_input(text: Any) -> str:
    """
    Clean free text before use in a prompt or request.

    Args:
        text: Raw user input (non-strings are treated as empty)

    Returns:
        Cleaned text, or "" for blank / invalid input
    """
    if not isinstance(text, str) or not text.strip():
        return ""

    cleaned = _CONTROL_RE.sub("", text)
    cleaned = _SCRIPT_BLOCK_RE.sub(" ", cleaned)
    cleaned = _TAG_RE.sub(" ", cleaned)
    cleaned = _SCHEME_RE.sub("", cleaned)
    cleaned = _EVENT_HANDLER_RE.sub("", cleaned)
    # Angle brackets outside a tag (comparisons, broken markup) are kept as entities
    cleaned = cleaned.replace("<", "&lt;").replace(">", "&gt;")
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()

    return cleaned[:MAX_INPUT_LENGTH]


def sanitize_url(url: Any) -> str:
    """Sanitize a URL; only http(s) URLs survive."""
    if not isinstance(url, str):
        return ""
    candidate = _CONTROL_RE.sub("", url).strip()
    if not re.match(r"^https?://[^\s<>\"']+$", candidate, re.IGNORECASE):
        return ""
    return candidate[:MAX_INPUT_LENGTH]

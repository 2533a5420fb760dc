"""
utils/text.py
-------------
Cleanup of untrusted text coming from the Telegram webhook.
"""

import re

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_text(value: str | None) -> str:
    """
    Strip markup and normalize whitespace in a single-line text field.

    HTML tags are removed, line breaks and tabs become spaces, runs of
    whitespace collapse to one space and the result is trimmed.
    """
    if not value:
        return ""
    cleaned = _TAG_RE.sub("", value)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned)
    return cleaned.strip()

"""
Ad copy parsing - turns a free-form completion into structured AdCopy.

Both functions are simple delimiter/length heuristics and never
raise on under-populated text: missing parts come back as empty strings.
"""

import unicodedata
from typing import List

from ..core.models import AdCopy

SEGMENT_SEPARATOR = "\n\n"
KEYWORD_LIMIT = 5
KEYWORD_MIN_LENGTH = 6


def _strip_punctuation(token: str) -> str:
    """Strip leading and trailing Unicode punctuation (categories P*)."""
    start, end = 0, len(token)
    while start < end and unicodedata.category(token[start]).startswith("P"):
        start += 1
    while end > start and unicodedata.category(token[end - 1]).startswith("P"):
        end -= 1
    return token[start:end]


def extract_keywords(
    text: str,
    limit: int = KEYWORD_LIMIT,
    min_length: int = KEYWORD_MIN_LENGTH,
) -> List[str]:
    """
    Pick keywords from generated copy.

    Tokens are split on whitespace and kept when their raw length is at least
    ``min_length``; the first ``limit`` survivors are returned in their
    original order with surrounding punctuation removed.

    Example:
        >>> extract_keywords("Amazing comfort, lightweight design. Order today!")
        ['Amazing', 'comfort', 'lightweight', 'design', 'today']
    """
    candidates = [token for token in text.split() if len(token) >= min_length]
    return [_strip_punctuation(token) for token in candidates[:limit]]


def parse_ad_copy(text: str) -> AdCopy:
    """
    Split a completion into headline, description and call-to-action.

    Segments are separated by blank lines. The first segment is the headline,
    the second the description, and the last non-blank segment the
    call-to-action; absent parts are empty strings. A single-segment response
    therefore yields the same text as headline and call-to-action.

    Args:
        text: Raw completion text

    Returns:
        AdCopy with keywords extracted from the full text
    """
    segments = text.split(SEGMENT_SEPARATOR)

    headline = segments[0] if segments else ""
    description = segments[1] if len(segments) > 1 else ""
    call_to_action = next((s for s in reversed(segments) if s.strip()), "")

    return AdCopy(
        headline=headline,
        description=description,
        call_to_action=call_to_action,
        keywords=extract_keywords(text),
    )

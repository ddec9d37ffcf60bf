"""
Keyword and regex fallbacks.

Used when no language model is available, or to keep processing cheap:
topic matching by keyword substrings, and regex extraction of numbers
with units, dates and regulation references.
"""

import logging
import re
from typing import Iterable

from .models import SimpleEntity, Topic

logger = logging.getLogger(__name__)

CONTEXT_CHARS = 50

_NUMBER_PATTERN = re.compile(
    r"(\d+(?:\.\d+)?)\s*(years?|months?|days?|°C|°F|%|kg|mg|ml)",
    re.IGNORECASE,
)
_DATE_PATTERN = re.compile(r"\b(\d{4}[-/]\d{2}[-/]\d{2}|\d{1,2}[-/]\d{1,2}[-/]\d{4})\b")
_REGULATION_PATTERN = re.compile(
    r"\b(ISO\s+\d+(?::\d+)?|Article\s+\d+(?:\.\d+)?|Section\s+\d+)\b",
    re.IGNORECASE,
)


def classify_by_keywords(content: str, topics: Iterable[Topic]) -> list[str]:
    """Return ids of topics with at least one keyword in the content."""
    content_lower = content.lower()
    return [
        topic.id
        for topic in topics
        if any(kw and kw.lower() in content_lower for kw in topic.keywords)
    ]


def _context(text: str, start: int, end: int) -> str:
    return text[max(0, start - CONTEXT_CHARS) : min(len(text), end + CONTEXT_CHARS)]


def extract_simple_entities(
    content: str,
    max_per_type: int = 30,
    max_content_chars: int = 50_000,
) -> list[SimpleEntity]:
    """
    Extract entities with regular expressions.

    Args:
        content: Text to scan; only the first ``max_content_chars`` are used.
        max_per_type: Cap on matches per entity type.

    Returns:
        Entities of type "number" (with ``metadata["unit"]``), "date" and
        "regulation", each with 50 characters of context on both sides.
    """
    if len(content) > max_content_chars:
        logger.warning(
            "Content too large for regex (%d chars), processing only first %d chars",
            len(content), max_content_chars,
        )
        content = content[:max_content_chars]

    entities: list[SimpleEntity] = []

    for i, match in enumerate(_NUMBER_PATTERN.finditer(content)):
        if i >= max_per_type:
            break
        entities.append(SimpleEntity(
            type="number",
            value=match.group(1),
            context=_context(content, match.start(), match.end()),
            metadata={"unit": match.group(2)},
        ))

    for entity_type, pattern in (("date", _DATE_PATTERN), ("regulation", _REGULATION_PATTERN)):
        for i, match in enumerate(pattern.finditer(content)):
            if i >= max_per_type:
                break
            entities.append(SimpleEntity(
                type=entity_type,
                value=match.group(1),
                context=_context(content, match.start(), match.end()),
            ))

    return entities

"""
Section Extractor for the Chunking Pipeline

Partitions a document into heading-delimited sections before it is split
into chunks. Headings are recognized line by line:

- Markdown headings: one to six ``#`` followed by text ("## Payment Terms")
- Numbered sections: an integer, a period and text ("3. Termination")

The sections always tile the document: every character belongs to exactly
one section, and text before the first heading forms an unheaded preamble.

Usage:
    from chunking.sections import extract_sections

    sections = extract_sections("# Intro\\nHello.\\n\\n# Body\\nMore.")
    # [Section(heading="Intro", start=0, ...), Section(heading="Body", start=16, ...)]
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from .models import Chunk

# Heading lines. Horizontal whitespace only, so a heading never spills
# into the following line.
_HEADING_PATTERN = re.compile(
    r"^(?:#{1,6}[ \t]+\S.*|\d+\.[ \t]+\S.*)$",
    re.MULTILINE,
)

_MARKER_PREFIX = re.compile(r"^(?:#+|\d+\.)[ \t]*")

# Characters dropped when building a grouping key.
_KEY_NOISE = re.compile(r"[#\[\]*_`0-9]")
_WHITESPACE = re.compile(r"\s+")


class SectionKind(str, Enum):
    """Known section labels; anything else is LABELED."""
    PREAMBLE = "preamble"
    INTRODUCTION = "introduction"
    OVERVIEW = "overview"
    DEFINITIONS = "definitions"
    TERMS = "terms"
    PAYMENT = "payment"
    PRIVACY = "privacy"
    CONCLUSION = "conclusion"
    APPENDIX = "appendix"
    LABELED = "labeled"


_KIND_ALIASES: dict[str, SectionKind] = {
    "intro": SectionKind.INTRODUCTION,
    "introduction": SectionKind.INTRODUCTION,
    "preface": SectionKind.INTRODUCTION,
    "background": SectionKind.INTRODUCTION,
    "overview": SectionKind.OVERVIEW,
    "summary": SectionKind.OVERVIEW,
    "abstract": SectionKind.OVERVIEW,
    "executive summary": SectionKind.OVERVIEW,
    "definitions": SectionKind.DEFINITIONS,
    "glossary": SectionKind.DEFINITIONS,
    "terms and definitions": SectionKind.DEFINITIONS,
    "terms": SectionKind.TERMS,
    "terms and conditions": SectionKind.TERMS,
    "general terms": SectionKind.TERMS,
    "payment": SectionKind.PAYMENT,
    "payment terms": SectionKind.PAYMENT,
    "pricing": SectionKind.PAYMENT,
    "fees": SectionKind.PAYMENT,
    "commissions": SectionKind.PAYMENT,
    "privacy": SectionKind.PRIVACY,
    "data privacy": SectionKind.PRIVACY,
    "data protection": SectionKind.PRIVACY,
    "privacy policy": SectionKind.PRIVACY,
    "conclusion": SectionKind.CONCLUSION,
    "conclusions": SectionKind.CONCLUSION,
    "closing": SectionKind.CONCLUSION,
    "outro": SectionKind.CONCLUSION,
    "appendix": SectionKind.APPENDIX,
    "annex": SectionKind.APPENDIX,
    "attachments": SectionKind.APPENDIX,
}


def normalize_heading(line: str) -> str:
    """Strip the heading marker ("## ", "3. ") and surrounding whitespace."""
    return _MARKER_PREFIX.sub("", line.strip()).strip()


def heading_key(heading: Optional[str]) -> str:
    """
    Build the grouping key for a heading.

    Lowercases the label, drops marker characters and digits and collapses
    whitespace, so "## 2. Payment Terms" and "Payment terms" share a key.
    The preamble (no heading) has the empty key.
    """
    if not heading:
        return ""
    key = _KEY_NOISE.sub("", heading.lower())
    key = key.replace(".", " ")
    return _WHITESPACE.sub(" ", key).strip()


def classify_section(key: str) -> SectionKind:
    """Map a grouping key onto a known section kind."""
    if not key:
        return SectionKind.PREAMBLE
    return _KIND_ALIASES.get(key, SectionKind.LABELED)


@dataclass(frozen=True)
class Section:
    """A maximal run of text governed by one heading (or the preamble)."""
    content: str
    heading: Optional[str]
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.content)

    @property
    def key(self) -> str:
        return heading_key(self.heading)

    @property
    def kind(self) -> SectionKind:
        if self.heading and not self.key:
            # e.g. "# 2024", a heading made only of digits
            return SectionKind.LABELED
        return classify_section(self.key)


@dataclass(frozen=True)
class SectionLabel:
    kind: SectionKind
    key: str
    heading: Optional[str]

    @property
    def display_name(self) -> str:
        return self.heading or "General"


@dataclass
class SectionGroup:
    label: SectionLabel
    chunks: list[Chunk]


def extract_sections(document: str) -> list[Section]:
    """
    Split a document into heading-delimited sections.

    Args:
        document: Raw document text.

    Returns:
        Sections in document order. Their contents concatenate back to the
        document. A document without headings (including the empty
        document) yields a single unheaded section.
    """
    matches = list(_HEADING_PATTERN.finditer(document))
    if not matches:
        return [Section(content=document, heading=None, start=0)]

    sections: list[Section] = []
    first_start = matches[0].start()
    if first_start > 0:
        sections.append(Section(content=document[:first_start], heading=None, start=0))

    for i, match in enumerate(matches):
        start = match.start()
        end = matches[i + 1].start() if i + 1 < len(matches) else len(document)
        sections.append(Section(
            content=document[start:end],
            heading=normalize_heading(match.group()),
            start=start,
        ))

    return sections


def group_by_section(chunks: Iterable[Chunk]) -> list[SectionGroup]:
    """
    Group chunks by the normalized key of their heading.

    Groups keep first-seen order; the first heading seen for a key becomes
    the group's display heading.
    """
    groups: dict[str, SectionGroup] = {}
    for chunk in chunks:
        key = heading_key(chunk.heading)
        group = groups.get(key)
        if group is None:
            label = SectionLabel(kind=classify_section(key), key=key, heading=chunk.heading)
            group = SectionGroup(label=label, chunks=[])
            groups[key] = group
        group.chunks.append(chunk)
    return list(groups.values())

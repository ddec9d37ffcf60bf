"""
Natural break-point search.

Given a search window ``content[start:end]``, find a position near the end
of the window where a chunk can end without cutting through a paragraph,
sentence, line or word. Candidates are only accepted in the second half of
the window, so a chunk never collapses to a sliver.
"""

PARAGRAPH_BREAK = "\n\n"
SENTENCE_ENDINGS = (". ", ".\n", "! ", "!\n", "? ", "?\n")
LINE_BREAK = "\n"
WORD_BREAK = " "


def find_natural_break(content: str, start: int, end: int) -> int:
    """
    Find the best position to end a chunk inside ``(start, end]``.

    Preference order: paragraph break, sentence ending, line break, word
    boundary. The returned position is just past the separator.

    Args:
        content: The section text being split.
        start: Window start (inclusive).
        end: Window end (exclusive), the hard-cut fallback.

    Returns:
        Absolute position in ``content``; ``end`` if no candidate qualifies.
    """
    window = content[start:end]
    half = len(window) / 2

    pos = window.rfind(PARAGRAPH_BREAK)
    if pos >= 0 and pos >= half:
        return start + pos + len(PARAGRAPH_BREAK)

    best = -1
    for ending in SENTENCE_ENDINGS:
        pos = window.rfind(ending)
        if pos >= 0 and pos >= half:
            best = max(best, pos + len(ending))
    if best > 0:
        return start + best

    for separator in (LINE_BREAK, WORD_BREAK):
        pos = window.rfind(separator)
        if pos >= 0 and pos >= half:
            return start + pos + len(separator)

    return end

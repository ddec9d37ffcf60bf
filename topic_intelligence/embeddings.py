"""
Similarity scoring over processed chunks.

Embedding vectors come from ``AIClient.embed``; this module only compares
them. When no chunk carries an embedding, ranking falls back to keyword
overlap.
"""

import math
import re
from typing import Iterable, Optional, Sequence

from .models import ProcessedChunk, SearchHit

HYBRID_COSINE_WEIGHT = 0.7
HYBRID_KEYWORD_WEIGHT = 0.3


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity; 0.0 for mismatched lengths or zero vectors."""
    if len(a) != len(b) or not a:
        return 0.0
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if not norm_a or not norm_b:
        return 0.0
    return dot / (norm_a * norm_b)


def query_words(query: str) -> list[str]:
    return [w for w in re.split(r"\s+", query.lower()) if len(w) > 2]


def keyword_score(words: list[str], text: str) -> float:
    """Share of query words that occur in the text."""
    if not words:
        return 0.0
    content = text.lower()
    return sum(1 for w in words if w in content) / len(words)


def rank_chunks(
    query: str,
    chunks: Iterable[ProcessedChunk],
    query_embedding: Optional[Sequence[float]] = None,
    top_k: int = 10,
    threshold: float = 0.0,
    hybrid: bool = False,
) -> list[SearchHit]:
    """
    Rank chunks against a query.

    With a query embedding, chunks that carry embeddings are scored by
    cosine similarity, or by ``0.7 * cosine + 0.3 * keyword`` (floored at 0)
    in hybrid mode. Without one, every chunk is scored by keyword overlap.
    """
    words = query_words(query)
    scored: list[tuple[float, ProcessedChunk]] = []

    for item in chunks:
        keyword = keyword_score(words, item.chunk.content)
        if query_embedding is not None:
            if not item.embedding:
                continue
            cosine = cosine_similarity(query_embedding, item.embedding)
            if hybrid:
                score = max(0.0, HYBRID_COSINE_WEIGHT * cosine + HYBRID_KEYWORD_WEIGHT * keyword)
            else:
                score = cosine
        else:
            score = keyword
        if score >= threshold:
            scored.append((score, item))

    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [
        SearchHit(
            chunk_id=item.chunk_id,
            content=item.chunk.content,
            similarity=score,
            heading=item.chunk.heading,
            document_id=item.document_id,
        )
        for score, item in scored[:top_k]
    ]

"""
Token counting for chunk statistics.

Chunks are sized in characters; token counts are only reported, so callers
can budget the embedding and classification requests made on the chunks.
The encoding follows the consuming model where tiktoken knows it
(``gpt-4o-mini``, ``text-embedding-3-small``); anything else is counted
with cl100k_base.

Usage:
    from chunking.token_counter import count_tokens, count_tokens_batch

    n = count_tokens("Commissions are paid monthly.")
    counts = count_tokens_batch(chunk_texts, model="text-embedding-3-small")
"""

import logging
from functools import lru_cache
from typing import Optional, Sequence

import tiktoken

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "cl100k_base"


@lru_cache(maxsize=8)
def get_encoding(model: Optional[str] = None) -> tiktoken.Encoding:
    """Encoding for a model name, loaded once per name."""
    if model:
        try:
            return tiktoken.encoding_for_model(model)
        except KeyError:
            logger.debug("No tiktoken encoding for %s, using %s", model, DEFAULT_ENCODING)
    return tiktoken.get_encoding(DEFAULT_ENCODING)


def count_tokens(text: str, model: Optional[str] = None) -> int:
    if not text:
        return 0
    return len(get_encoding(model).encode(text))


def count_tokens_batch(texts: Sequence[str], model: Optional[str] = None) -> list[int]:
    """
    Count tokens for several texts with one encoding.

    Returns:
        One count per input text; empty texts count 0 and never load an
        encoding on their own.
    """
    if not any(texts):
        return [0] * len(texts)
    encoding = get_encoding(model)
    return [len(encoding.encode(t)) if t else 0 for t in texts]

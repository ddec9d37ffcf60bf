"""
Pytest fixtures for the chunking and topic intelligence tests.
"""

import pytest

from chunking.models import Chunk, ChunkMetadata


@pytest.fixture(autouse=True)
def fake_token_counter(monkeypatch):
    """Count whitespace-separated words instead of loading a tiktoken encoding."""
    monkeypatch.setattr(
        "chunking.chunker.count_tokens_batch",
        lambda texts: [len(t.split()) for t in texts],
    )


@pytest.fixture
def contract_text():
    """A small contract with a preamble and markdown sections."""
    return (
        "Affiliate agreement between Acme Corp and the Partner.\n\n"
        "# Introduction\n"
        "This agreement governs the affiliate program. It starts on 2024-01-01.\n\n"
        "## Payment Terms\n"
        "Commissions of 15% are paid within 30 days. See Section 4 for details.\n\n"
        "## Data Privacy\n"
        "Partners must comply with Article 17 of the GDPR.\n"
    )


def make_chunk(index: int, content: str, heading=None, start: int = 0) -> Chunk:
    return Chunk(
        content=content,
        index=index,
        heading=heading,
        metadata=ChunkMetadata(
            start_char=start,
            end_char=start + len(content),
            section=heading,
        ),
    )

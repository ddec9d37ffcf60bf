"""
Chunking Module - Structure-aware sliding window chunking

Splits a text document into overlapping chunks that follow its headings
and end on natural break points, with exact source offsets for every
chunk.

Quick Start:
    from chunking import chunk_document, ChunkOptions

    chunks = chunk_document(text, ChunkOptions(max_chunk_size=800, overlap=50))
    for chunk in chunks:
        print(chunk.index, chunk.heading, chunk.start_char, chunk.end_char)
"""

__version__ = "1.0.0"

from .breakpoints import find_natural_break
from .chunker import DocumentChunker, chunk_document, chunk_with_context, read_document
from .config import ChunkingServiceConfig
from .exceptions import (
    ChunkingError,
    DocumentDecodeError,
    DocumentNotFoundError,
    DocumentTooLargeError,
)
from .models import (
    Chunk,
    ChunkingResult,
    ChunkingStats,
    ChunkMetadata,
    ChunkOptions,
)
from .sections import (
    Section,
    SectionGroup,
    SectionKind,
    SectionLabel,
    classify_section,
    extract_sections,
    group_by_section,
    heading_key,
)
from .service import ChunkingService
from .token_counter import count_tokens

__all__ = [
    "__version__",
    "chunk_document",
    "chunk_with_context",
    "read_document",
    "find_natural_break",
    "extract_sections",
    "group_by_section",
    "heading_key",
    "classify_section",
    "DocumentChunker",
    "ChunkingService",
    "ChunkingServiceConfig",
    "ChunkingError",
    "DocumentNotFoundError",
    "DocumentDecodeError",
    "DocumentTooLargeError",
    "Chunk",
    "ChunkOptions",
    "ChunkingResult",
    "ChunkingStats",
    "ChunkMetadata",
    "Section",
    "SectionGroup",
    "SectionKind",
    "SectionLabel",
    "count_tokens",
]

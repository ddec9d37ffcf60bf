"""
Document Chunker - Core chunking logic

Splits a text document into overlapping, position-tracked chunks for
downstream classification and embedding.

Algorithm:
1. Partition the document into heading sections (or keep it whole).
2. Per section, carve out a window of at most max_chunk_size characters.
3. Snap the window end to a natural break point (paragraph, sentence,
   line, word) in the second half of the window; otherwise cut hard.
4. Emit the trimmed window as a chunk with absolute offsets.
5. Start the next window `overlap` characters before the previous end,
   but always strictly after the previous start.

The splitter is total: it raises nothing and terminates for every input,
including empty text, whitespace-only text and overlap >= max_chunk_size.

Usage:
    from chunking import chunk_document, ChunkOptions

    chunks = chunk_document(text, ChunkOptions(max_chunk_size=800, overlap=50))
    for chunk in chunks:
        print(chunk.index, chunk.heading, chunk.start_char, chunk.end_char)
"""

import logging
import math
from pathlib import Path
from typing import Optional

from .breakpoints import find_natural_break
from .exceptions import DocumentDecodeError, DocumentNotFoundError
from .models import Chunk, ChunkingResult, ChunkingStats, ChunkMetadata, ChunkOptions
from .sections import Section, extract_sections
from .token_counter import count_tokens_batch

logger = logging.getLogger(__name__)


def chunk_document(document: str, options: Optional[ChunkOptions] = None) -> list[Chunk]:
    """
    Split a document into an ordered sequence of chunks.

    Args:
        document: The full document text.
        options: Chunking options (defaults: 1000 chars, 100 overlap).

    Returns:
        Chunks with contiguous indices starting at 0 and absolute
        offsets into ``document``.
    """
    _, chunks = _chunk_sections(document, options or ChunkOptions())
    return chunks


def read_document(path: str) -> str:
    """
    Read a UTF-8 text file.

    Raises:
        DocumentNotFoundError: If the file does not exist.
        DocumentDecodeError: If the file is not valid UTF-8.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise DocumentNotFoundError(path)
    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentDecodeError(path, exc) from exc


def _chunk_sections(
    document: str,
    options: ChunkOptions,
) -> tuple[list[Section], list[Chunk]]:
    """Partition the document and split every section; returns both."""
    if options.preserve_sections:
        sections = extract_sections(document)
    else:
        sections = [Section(content=document, heading=None, start=0)]

    chunks: list[Chunk] = []
    for section in sections:
        _split_section(section, options, chunks)

    logger.debug(
        "Split %d chars into %d sections and %d chunks",
        len(document), len(sections), len(chunks),
    )
    return sections, chunks


def chunk_with_context(
    document: str,
    max_size: int = 1000,
    overlap_ratio: float = 0.1,
) -> list[Chunk]:
    """Chunk with an overlap derived from the window size (default 10%)."""
    overlap = math.floor(max_size * overlap_ratio)
    return chunk_document(document, ChunkOptions(
        max_chunk_size=max_size,
        overlap=overlap,
        preserve_headings=True,
        preserve_sections=True,
    ))


def _split_section(section: Section, options: ChunkOptions, chunks: list[Chunk]) -> None:
    """Append the chunks of one section to ``chunks``."""
    content = section.content
    length = len(content)
    heading = section.heading if options.preserve_headings else None
    # Options built with model_construct skip validation.
    size = max(1, options.max_chunk_size)
    overlap = max(0, options.overlap)
    start_pos = 0

    while start_pos < length:
        end_pos = min(start_pos + size, length)

        actual_end = end_pos
        if end_pos < length:
            actual_end = find_natural_break(content, start_pos, end_pos)

        text = content[start_pos:actual_end].strip()
        if text:
            chunks.append(Chunk(
                content=text,
                index=len(chunks),
                heading=heading,
                metadata=ChunkMetadata(
                    start_char=section.start + start_pos,
                    end_char=section.start + actual_end,
                    section=heading,
                ),
            ))

        # The window already reached the end of the section.
        if actual_end >= length:
            break

        next_pos = actual_end - overlap
        if next_pos <= start_pos:
            # Overlap would stall or rewind the cursor.
            next_pos = actual_end
        start_pos = next_pos


class DocumentChunker:
    """
    Splits documents into chunks and wraps them in a ChunkingResult with
    statistics.
    """

    def __init__(self, options: Optional[ChunkOptions] = None):
        self.options = options or ChunkOptions()

    def chunk_text(
        self,
        text: str,
        document_id: str = "document",
        source_file: Optional[str] = None,
    ) -> ChunkingResult:
        """
        Chunk a text document.

        Args:
            text: The document text.
            document_id: Identifier stored on the result.
            source_file: Path the text was read from, if any.

        Returns:
            ChunkingResult with all chunks and statistics.
        """
        sections, chunks = _chunk_sections(text, self.options)
        return ChunkingResult(
            document_id=document_id,
            source_file=source_file,
            options=self.options,
            chunks=chunks,
            stats=self._compute_stats(chunks, len(sections), len(text)),
        )

    def chunk_file(self, path: str) -> ChunkingResult:
        """
        Read a UTF-8 text file and chunk it.

        Raises:
            DocumentNotFoundError: If the file does not exist.
            DocumentDecodeError: If the file is not valid UTF-8.
        """
        text = read_document(path)
        return self.chunk_text(
            text,
            document_id=self._make_document_id(path),
            source_file=path,
        )

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _make_document_id(self, source_file: str) -> str:
        """Generate a document ID from the source file path."""
        normalized = source_file.replace("\\", "/")
        return Path(normalized).stem

    def _compute_stats(
        self,
        chunks: list[Chunk],
        total_sections: int,
        total_chars: int,
    ) -> ChunkingStats:
        if not chunks:
            return ChunkingStats(total_sections=total_sections, total_chars=total_chars)

        lengths = [len(c.content) for c in chunks]
        return ChunkingStats(
            total_chunks=len(chunks),
            total_sections=total_sections,
            total_chars=total_chars,
            avg_chunk_chars=sum(lengths) / len(lengths),
            min_chunk_chars=min(lengths),
            max_chunk_chars=max(lengths),
            total_tokens=sum(count_tokens_batch([c.content for c in chunks])),
        )

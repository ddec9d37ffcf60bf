"""
Data Models for the Chunking Pipeline

Defines:
1. ChunkOptions - Window size, overlap and structure switches
2. ChunkMetadata - Absolute source offsets linking a chunk to the document
3. Chunk - A single trimmed text segment with metadata
4. ChunkingResult - Complete chunking output with statistics

Design Principles:
- Pydantic v2 for validation and serialization
- Out-of-range options are clamped, not rejected: the splitter must stay total
- Chunks are immutable values; nothing mutates them after creation
- Save/load pattern for JSON persistence

Usage:
    options = ChunkOptions(max_chunk_size=800, overlap=50)
    chunks = chunk_document(text, options)
"""

import json
import math
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Document ids name storage directories; no separators or leading dots.
DOCUMENT_ID_PATTERN = r"^[\w][\w.-]*$"


class ChunkOptions(BaseModel):
    """
    Configuration for the chunk splitter.

    Field aliases are the camelCase names used in JSON request bodies.
    Out-of-range values are clamped instead of raising: a non-positive
    ``max_chunk_size`` becomes 1 and a negative ``overlap`` becomes 0.
    An overlap at or above the window size is left as is; the splitter's
    forward-progress rule keeps it from stalling. Floats are truncated;
    infinities and NaN are rejected.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    max_chunk_size: int = Field(
        1000,
        alias="maxChunkSize",
        description="Target upper bound, in characters, of a chunk's source window",
    )
    overlap: int = Field(
        100,
        description="Characters by which the next window retreats from the previous end",
    )
    preserve_headings: bool = Field(
        True,
        alias="preserveHeadings",
        description="Attach the owning section heading to each chunk",
    )
    preserve_sections: bool = Field(
        True,
        alias="preserveSections",
        description="Partition the document into heading sections before splitting",
    )

    @field_validator("max_chunk_size", "overlap", mode="before")
    @classmethod
    def _truncate_float(cls, value: Any) -> Any:
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError("must be a finite number")
            return int(value)
        return value

    @field_validator("max_chunk_size")
    @classmethod
    def _clamp_size(cls, value: int) -> int:
        return max(1, value)

    @field_validator("overlap")
    @classmethod
    def _clamp_overlap(cls, value: int) -> int:
        return max(0, value)


class ChunkMetadata(BaseModel):
    """Position of a chunk within the original document."""
    model_config = ConfigDict(frozen=True)

    start_char: int = Field(
        ...,
        description="Absolute offset of the chunk window start",
        ge=0,
    )
    end_char: int = Field(
        ...,
        description="Absolute offset one past the chunk window end",
        ge=0,
    )
    section: Optional[str] = Field(
        None,
        description="Heading of the owning section",
    )
    page_number: Optional[int] = Field(
        None,
        description="Source page, when an extraction step provides one",
    )


class Chunk(BaseModel):
    """
    A contiguous, trimmed slice of a document, ready for classification
    or embedding.
    """
    model_config = ConfigDict(frozen=True)

    content: str = Field(
        ...,
        description="Trimmed chunk text",
        min_length=1,
    )
    index: int = Field(
        ...,
        description="Position in the emitted sequence (0-indexed)",
        ge=0,
    )
    heading: Optional[str] = Field(
        None,
        description="Heading of the section this chunk belongs to",
    )
    metadata: ChunkMetadata

    @property
    def start_char(self) -> int:
        return self.metadata.start_char

    @property
    def end_char(self) -> int:
        return self.metadata.end_char

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class ChunkingStats(BaseModel):
    """Statistics about the chunking process."""
    total_chunks: int = 0
    total_sections: int = 0
    total_chars: int = 0
    avg_chunk_chars: float = 0.0
    min_chunk_chars: int = 0
    max_chunk_chars: int = 0
    total_tokens: int = 0


class ChunkingResult(BaseModel):
    """
    Complete result of chunking a document.

    Contains all chunks with metadata and processing statistics.
    """
    document_id: str = Field(
        ...,
        description="Unique document identifier",
    )
    source_file: Optional[str] = Field(
        None,
        description="Path of the text file the document was read from",
    )
    options: ChunkOptions = Field(
        default_factory=ChunkOptions,
        description="Options used for chunking",
    )
    chunks: list[Chunk] = Field(
        default_factory=list,
        description="All chunks in document order",
    )
    stats: ChunkingStats = Field(
        default_factory=ChunkingStats,
        description="Chunking statistics",
    )
    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="When chunking was performed",
    )

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)

    def get_chunk(self, index: int) -> Optional[Chunk]:
        """Find a chunk by its index."""
        for chunk in self.chunks:
            if chunk.index == index:
                return chunk
        return None

    def get_neighbors(self, index: int) -> tuple[Optional[Chunk], Optional[Chunk]]:
        """Get the previous and next chunks for context expansion."""
        if self.get_chunk(index) is None:
            return None, None
        return self.get_chunk(index - 1), self.get_chunk(index + 1)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    def save(self, path: str) -> None:
        """Save chunking result to a JSON file."""
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: str) -> "ChunkingResult":
        """Load chunking result from a JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(data)


class ChunkRequest(BaseModel):
    """Body of ``POST /chunk``."""
    model_config = ConfigDict(populate_by_name=True)

    text: str
    document_id: str = Field("document", alias="documentId", pattern=DOCUMENT_ID_PATTERN)
    options: Optional[ChunkOptions] = None
    save: bool = False


class ChunkResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    document_id: str = Field(..., alias="documentId")
    total_chunks: int = Field(..., alias="totalChunks")
    chunks: list[Chunk] = Field(default_factory=list)
    stats: ChunkingStats = Field(default_factory=ChunkingStats)
    output_path: Optional[str] = Field(None, alias="outputPath")

"""
Data Models for the Topic Intelligence collaborators.

Everything here describes what the language model (or the keyword
fallbacks) returns about chunk content. Nothing flows back into chunking.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from chunking.models import Chunk


class Topic(BaseModel):
    """A known topic used for keyword classification."""
    id: str
    name: str
    description: str = ""
    keywords: list[str] = Field(default_factory=list)


class TopicClassification(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    topic_name: str = Field(..., alias="topicName", min_length=1)
    confidence: float = Field(0.0, ge=0, le=100)
    keywords: list[str] = Field(default_factory=list)
    description: str = ""


class EntityMention(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    value: str
    context: str = ""
    unit: Optional[str] = None
    definition: Optional[str] = None


class EntityExtraction(BaseModel):
    numbers: list[EntityMention] = Field(default_factory=list)
    regulations: list[EntityMention] = Field(default_factory=list)
    terms: list[EntityMention] = Field(default_factory=list)
    dates: list[EntityMention] = Field(default_factory=list)
    percentages: list[EntityMention] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return (
            len(self.numbers) + len(self.regulations) + len(self.terms)
            + len(self.dates) + len(self.percentages)
        )

    def to_simple_entities(self) -> list["SimpleEntity"]:
        """Flatten into typed entities ("number", "regulation", "term", ...)."""
        entities: list[SimpleEntity] = []
        for entity_type, mentions in (
            ("number", self.numbers),
            ("regulation", self.regulations),
            ("term", self.terms),
            ("date", self.dates),
            ("percentage", self.percentages),
        ):
            for mention in mentions:
                metadata = {}
                if mention.unit:
                    metadata["unit"] = mention.unit
                if mention.definition:
                    metadata["definition"] = mention.definition
                entities.append(SimpleEntity(
                    type=entity_type,
                    value=mention.value,
                    context=mention.context,
                    metadata=metadata,
                ))
        return entities


class SectionPattern(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    heading: str
    frequency: int = 0
    example_content: str = Field("", alias="exampleContent")


class SimpleEntity(BaseModel):
    """An entity found by the regex fallback extractor."""
    type: str
    value: str
    context: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class EmbeddingResult(BaseModel):
    embedding: list[float]
    tokens: int = 0


class ProcessedChunk(BaseModel):
    document_id: str
    chunk: Chunk
    embedding: list[float] = Field(default_factory=list)

    @property
    def chunk_id(self) -> str:
        return f"{self.document_id}_chunk_{self.chunk.index:04d}"


class ProcessedDocument(BaseModel):
    document_id: str
    chunks: list[ProcessedChunk] = Field(default_factory=list)
    topic_ids: list[str] = Field(default_factory=list)
    entities: list[SimpleEntity] = Field(default_factory=list)
    embeddings_used: bool = False


class SearchHit(BaseModel):
    chunk_id: str
    content: str
    similarity: float
    heading: Optional[str] = None
    document_id: Optional[str] = None


class PriorityRule(BaseModel):
    rule: str
    priority: int


class SampleSection(BaseModel):
    heading: str
    kind: str
    content: str
    source_chunk_ids: list[str] = Field(default_factory=list)


class TopicPack(BaseModel):
    name: str
    terminology_map: dict[str, str] = Field(default_factory=dict)
    priority_rules: list[PriorityRule] = Field(default_factory=list)
    sample_sections: list[SampleSection] = Field(default_factory=list)

"""
Topic Intelligence Service

Orchestrates the collaborators around the chunker for one document:
chunk, embed, classify by keywords and extract entities. Also provides
search over processed chunks and topic pack assembly.

The AI client is passed in; the service owns no global state.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from chunking.chunker import chunk_document

from .client import AIClient
from .config import TopicIntelligenceConfig
from .exceptions import APIError
from .embeddings import rank_chunks
from .keywords import classify_by_keywords, extract_simple_entities
from .models import (
    ProcessedChunk,
    ProcessedDocument,
    SearchHit,
    SimpleEntity,
    Topic,
    TopicPack,
)
from .topic_pack import build_topic_pack

logger = logging.getLogger(__name__)


class TopicIntelligenceService:
    def __init__(
        self,
        client: Optional[AIClient] = None,
        config: Optional[TopicIntelligenceConfig] = None,
    ):
        self.client = client
        self.config = config or TopicIntelligenceConfig()

    @property
    def embeddings_enabled(self) -> bool:
        return self.config.embeddings_enabled and self.client is not None

    def process_document(
        self,
        document_id: str,
        text: str,
        topics: Iterable[Topic] = (),
    ) -> ProcessedDocument:
        """
        Chunk a document and attach embeddings, topics and entities.

        Embedding failures downgrade the run to keyword-only chunks; they
        never abort it.
        """
        limit = self.config.max_content_chars
        if len(text) > limit:
            logger.warning(
                "File content too large: %d chars. Truncating to %d chars", len(text), limit
            )
            text = text[:limit]

        chunks = chunk_document(text, self.config.chunk_options)
        if len(chunks) > self.config.max_chunks:
            logger.warning(
                "Too many chunks (%d), limiting to %d", len(chunks), self.config.max_chunks
            )
            chunks = chunks[: self.config.max_chunks]
        logger.info("Created %d chunks for document %s", len(chunks), document_id)

        embeddings = self._embed_chunks(
            [f"{c.heading}\n{c.content}" if c.heading else c.content for c in chunks]
        )
        processed = [
            ProcessedChunk(
                document_id=document_id,
                chunk=chunk,
                embedding=embeddings[i] if embeddings else [],
            )
            for i, chunk in enumerate(chunks)
        ]

        topic_ids = classify_by_keywords(text, topics)
        logger.info("Classified into %d topics using keywords", len(topic_ids))

        entities: list[SimpleEntity] = []
        if processed:
            entities = extract_simple_entities(text)
            if len(entities) > self.config.max_entities:
                logger.warning(
                    "Too many entities (%d), limiting to %d",
                    len(entities), self.config.max_entities,
                )
                entities = entities[: self.config.max_entities]

        return ProcessedDocument(
            document_id=document_id,
            chunks=processed,
            topic_ids=topic_ids,
            entities=entities,
            embeddings_used=bool(embeddings),
        )

    def search(
        self,
        query: str,
        chunks: Sequence[ProcessedChunk],
        top_k: int = 10,
        threshold: float = 0.0,
    ) -> list[SearchHit]:
        """
        Rank processed chunks against a query.

        Uses embeddings when enabled and present on the chunks, otherwise
        keyword overlap.
        """
        candidates = list(chunks[: self.config.chunk_limit_for_search])
        has_embeddings = any(c.embedding for c in candidates)

        query_embedding = None
        if self.embeddings_enabled and has_embeddings:
            logger.info("Search using embeddings (hybrid=%s)", self.config.hybrid_mode)
            query_embedding = self.client.embed([query])[0].embedding
        else:
            logger.info("Search using keyword fallback")

        return rank_chunks(
            query,
            candidates,
            query_embedding=query_embedding,
            top_k=top_k,
            threshold=threshold,
            hybrid=self.config.hybrid_mode,
        )

    def build_topic_pack(
        self,
        topic_name: str,
        documents: Iterable[ProcessedDocument],
    ) -> TopicPack:
        documents = list(documents)
        chunks = [c for doc in documents for c in doc.chunks]
        entities = [e for doc in documents for e in doc.entities]
        logger.info("Building topic pack for %s from %d chunks", topic_name, len(chunks))
        return build_topic_pack(topic_name, chunks, entities)

    def _embed_chunks(self, texts: list[str]) -> list[list[float]]:
        if not texts or not self.embeddings_enabled:
            return []
        vectors: list[list[float]] = []
        try:
            for i in range(0, len(texts), self.config.batch_size):
                batch = texts[i : i + self.config.batch_size]
                vectors.extend(r.embedding for r in self.client.embed(batch))
        except APIError as exc:
            logger.warning(
                "Embedding generation failed; falling back to keyword-only chunks: %s", exc
            )
            return []
        logger.info("Generated embeddings for %d chunks", len(texts))
        return vectors

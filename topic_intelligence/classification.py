"""
Topic Classification & Entity Extraction

Labels chunk or document content with topics and entities through the
language model. Results flow one way: nothing here changes the chunks.

A failed model call is logged and yields an empty result, so one bad
response never corrupts the rest of a processing run. Items the model
returns in the wrong shape are dropped individually.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from .client import AIClient
from .exceptions import APIError, format_error_chain
from .models import (
    EntityExtraction,
    EntityMention,
    SectionPattern,
    Topic,
    TopicClassification,
)
from .prompts import (
    MAX_PATTERN_DOCUMENTS,
    PATTERN_EXCERPT_CHARS,
    build_classify_prompt,
    build_entities_prompt,
    build_patterns_prompt,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

ENTITY_FIELDS = ("numbers", "regulations", "terms", "dates", "percentages")


def _validate_items(model: type[M], items: Any) -> list[M]:
    """Validate a list of raw items, skipping invalid ones."""
    if not isinstance(items, list):
        return []
    valid: list[M] = []
    for item in items:
        try:
            valid.append(model.model_validate(item))
        except ValidationError as exc:
            logger.debug("Dropping malformed %s: %s", model.__name__, exc)
    return valid


class TopicClassifier:
    """
    Classifies content into topics and extracts entities.

    Usage:
        classifier = TopicClassifier(client)
        topics = classifier.classify_topics(chunk.content, existing_topics)
        entities = classifier.extract_entities(chunk.content)
    """

    def __init__(self, client: AIClient):
        self.client = client

    def classify_topics(
        self,
        content: str,
        existing_topics: Iterable[Topic] = (),
    ) -> list[TopicClassification]:
        """
        Classify content into 1-3 topics.

        Args:
            content: Text to classify (only the first 4000 chars are sent).
            existing_topics: Topics the model should prefer.

        Returns:
            Topic classifications; empty if the call failed.
        """
        topics = list(existing_topics)
        if topics:
            topics_list = "\n".join(f"- {t.name}: {t.description}" for t in topics)
        else:
            topics_list = "No existing topics defined yet."

        try:
            data = self.client.chat_json(
                build_classify_prompt(content, topics_list), temperature=0.3
            )
        except APIError as exc:
            logger.error("Failed to classify topics:\n%s", format_error_chain(exc))
            return []

        return _validate_items(TopicClassification, data.get("topics"))

    def extract_entities(self, content: str) -> EntityExtraction:
        """
        Extract numbers, regulations, terms, dates and percentages.

        Returns:
            EntityExtraction; all lists empty if the call failed.
        """
        try:
            data = self.client.chat_json(build_entities_prompt(content), temperature=0.2)
        except APIError as exc:
            logger.error("Failed to extract entities:\n%s", format_error_chain(exc))
            return EntityExtraction()

        return EntityExtraction(**{
            name: _validate_items(EntityMention, data.get(name))
            for name in ENTITY_FIELDS
        })

    def extract_section_patterns(
        self,
        documents: Sequence[tuple[str, str]],
    ) -> list[SectionPattern]:
        """
        Find section headings that recur across documents.

        Args:
            documents: (title, content) pairs; only the first 10 are used,
                each as a 500-character excerpt.
        """
        if not documents:
            return []

        summaries = "\n\n".join(
            f"Document {i + 1}: {title}\n{content[:PATTERN_EXCERPT_CHARS]}..."
            for i, (title, content) in enumerate(documents[:MAX_PATTERN_DOCUMENTS])
        )

        try:
            data = self.client.chat_json(build_patterns_prompt(summaries), temperature=0.2)
        except APIError as exc:
            logger.error("Failed to extract section patterns:\n%s", format_error_chain(exc))
            return []

        return _validate_items(SectionPattern, data.get("patterns"))

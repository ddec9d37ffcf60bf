"""
Topic Intelligence - Collaborators that consume chunker output

Topic classification, entity extraction, embeddings and search built on
an explicitly constructed OpenAI client with a retry policy.

Quick Start:
    from topic_intelligence import AIClient, AIClientConfig, TopicClassifier

    with AIClient(AIClientConfig.from_env()) as client:
        classifier = TopicClassifier(client)
        topics = classifier.classify_topics(chunk.content)
"""

from .classification import TopicClassifier
from .client import AIClient, TokenUsage
from .config import AIClientConfig, TopicIntelligenceConfig
from .embeddings import cosine_similarity, rank_chunks
from .exceptions import (
    APIConnectionError,
    APIError,
    APIRateLimitError,
    APIResponseError,
    RetryExhaustedError,
    TopicIntelligenceError,
    format_error_chain,
)
from .keywords import classify_by_keywords, extract_simple_entities
from .models import (
    EntityExtraction,
    EntityMention,
    ProcessedChunk,
    ProcessedDocument,
    SearchHit,
    SectionPattern,
    SimpleEntity,
    Topic,
    TopicClassification,
    TopicPack,
)
from .retry import RetryPolicy, is_rate_limit_error
from .service import TopicIntelligenceService
from .topic_pack import build_topic_pack

__all__ = [
    "AIClient",
    "AIClientConfig",
    "TokenUsage",
    "TopicClassifier",
    "TopicIntelligenceConfig",
    "TopicIntelligenceService",
    "RetryPolicy",
    "is_rate_limit_error",
    "cosine_similarity",
    "rank_chunks",
    "classify_by_keywords",
    "extract_simple_entities",
    "build_topic_pack",
    "TopicIntelligenceError",
    "APIError",
    "APIConnectionError",
    "APIRateLimitError",
    "APIResponseError",
    "RetryExhaustedError",
    "format_error_chain",
    "EntityExtraction",
    "EntityMention",
    "ProcessedChunk",
    "ProcessedDocument",
    "SearchHit",
    "SectionPattern",
    "SimpleEntity",
    "Topic",
    "TopicClassification",
    "TopicPack",
]

from dataclasses import dataclass, field
import os
from typing import Optional

from chunking.models import ChunkOptions

from .retry import RetryPolicy


@dataclass
class AIClientConfig:
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    chat_model: str = "gpt-4o-mini"
    embedding_model: str = "text-embedding-3-small"
    timeout: float = 60.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)

    @classmethod
    def from_env(cls) -> "AIClientConfig":
        timeout = os.environ.get("AI_INTEGRATIONS_TIMEOUT")
        return cls(
            api_key=(
                os.environ.get("AI_INTEGRATIONS_OPENAI_API_KEY")
                or os.environ.get("OPENAI_API_KEY")
            ),
            base_url=os.environ.get("AI_INTEGRATIONS_OPENAI_BASE_URL") or None,
            chat_model=os.environ.get("AI_INTEGRATIONS_CHAT_MODEL", cls.chat_model),
            embedding_model=os.environ.get(
                "AI_INTEGRATIONS_EMBEDDING_MODEL", cls.embedding_model
            ),
            timeout=float(timeout) if timeout else cls.timeout,
        )


@dataclass
class TopicIntelligenceConfig:
    embeddings_enabled: bool = True
    batch_size: int = 50
    hybrid_mode: bool = False
    chunk_limit_for_search: int = 300
    max_content_chars: int = 100_000
    max_chunks: int = 100
    max_entities: int = 100
    chunk_options: ChunkOptions = field(
        default_factory=lambda: ChunkOptions(max_chunk_size=800, overlap=50)
    )

    @classmethod
    def from_env(cls) -> "TopicIntelligenceConfig":
        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            return int(value) if value else default

        return cls(
            embeddings_enabled=os.environ.get("TOPIC_INTELLIGENCE_EMBEDDINGS") != "off",
            batch_size=_int("TOPIC_INTELLIGENCE_BATCH", cls.batch_size),
            hybrid_mode=os.environ.get("TOPIC_INTELLIGENCE_HYBRID") == "on",
            chunk_limit_for_search=_int(
                "TOPIC_INTELLIGENCE_CHUNK_LIMIT", cls.chunk_limit_for_search
            ),
        )

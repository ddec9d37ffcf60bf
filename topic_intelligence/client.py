"""
OpenAI client for the topic intelligence collaborators.

The client is constructed explicitly, once per process, and passed to
whatever needs it; there is no module-level instance. It provides:
- JSON chat completions for classification and entity extraction
- Batched embeddings
- Retry through a RetryPolicy (rate limits and quota errors only by default)
- Mapping of OpenAI errors onto the local exception hierarchy
- Token usage tracking

Usage:
    with AIClient(AIClientConfig.from_env()) as client:
        data = client.chat_json("Classify this document ...")
        vectors = client.embed(["first chunk", "second chunk"])
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

import openai
from openai import OpenAI

from .config import AIClientConfig
from .exceptions import (
    APIConnectionError,
    APIError,
    APIRateLimitError,
    APIResponseError,
    RetryExhaustedError,
)
from .json_utils import safe_parse_json
from .models import EmbeddingResult
from .retry import is_rate_limit_error

logger = logging.getLogger(__name__)

T = TypeVar("T")

# OpenAI accepts up to 2048 inputs per embeddings request.
EMBEDDING_BATCH_SIZE = 100


@dataclass
class TokenUsage:
    """Cumulative token usage across calls."""

    input_tokens: int = 0
    output_tokens: int = 0
    request_count: int = 0

    def add(self, input_tokens: int, output_tokens: int = 0) -> None:
        self.input_tokens += input_tokens
        self.output_tokens += output_tokens
        self.request_count += 1

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class AIClient:
    """
    Thin wrapper around ``openai.OpenAI`` with retry and error mapping.

    Args:
        config: Client configuration (model names, key, retry policy).
        openai_client: Pre-built OpenAI client, mainly for tests.
    """

    def __init__(
        self,
        config: Optional[AIClientConfig] = None,
        openai_client: Optional[Any] = None,
    ):
        self.config = config or AIClientConfig.from_env()
        if openai_client is None:
            if not self.config.api_key:
                raise ValueError(
                    "OpenAI API key required. Set AI_INTEGRATIONS_OPENAI_API_KEY "
                    "or OPENAI_API_KEY environment variable."
                )
            openai_client = OpenAI(
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                max_retries=0,  # retries are handled by the RetryPolicy
            )
        self._client = openai_client
        self.usage = TokenUsage()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        close = getattr(self._client, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "AIClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Calls
    # -------------------------------------------------------------------------

    def chat_json(self, prompt: str, temperature: float = 0.3) -> dict[str, Any]:
        """
        Run a single-message chat completion in JSON mode.

        Returns:
            The parsed JSON object.

        Raises:
            APIError: The call failed or was refused.
            APIResponseError: The response was empty or not a JSON object.
        """
        response = self._run(lambda: self._client.chat.completions.create(
            model=self.config.chat_model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            response_format={"type": "json_object"},
        ))

        choice = response.choices[0]
        raw_content = choice.message.content or ""
        usage = getattr(response, "usage", None)
        if usage is not None:
            self.usage.add(usage.prompt_tokens, usage.completion_tokens)

        if choice.finish_reason == "content_filter":
            raise APIResponseError("Response blocked by content filter", raw_content)
        if not raw_content.strip():
            raise APIResponseError("Empty response from API", raw_content)

        parsed = safe_parse_json(raw_content)
        if not parsed:
            raise APIResponseError("No JSON object in response", raw_content)
        return parsed

    def embed(self, texts: list[str]) -> list[EmbeddingResult]:
        """
        Embed texts, batching requests.

        Returns:
            One EmbeddingResult per input text, in input order.
        """
        results: list[EmbeddingResult] = []
        for i in range(0, len(texts), EMBEDDING_BATCH_SIZE):
            batch = texts[i : i + EMBEDDING_BATCH_SIZE]
            response = self._run(lambda: self._client.embeddings.create(
                model=self.config.embedding_model,
                input=batch,
                encoding_format="float",
            ))
            usage = getattr(response, "usage", None)
            tokens = usage.total_tokens if usage is not None else 0
            self.usage.add(tokens)
            data = sorted(response.data, key=lambda item: item.index)
            if len(data) != len(batch):
                raise APIResponseError(
                    f"Expected {len(batch)} embeddings, got {len(data)}"
                )
            results.extend(
                EmbeddingResult(embedding=item.embedding, tokens=tokens) for item in data
            )
        return results

    def _run(self, fn: Callable[[], T]) -> T:
        """Call the API under the retry policy and map errors."""
        try:
            return self.config.retry.call(fn)
        except RetryExhaustedError as exc:
            logger.error("Retries exhausted: %s", exc)
            raise self._map_error(exc.last_error) from exc
        except openai.OpenAIError as exc:
            raise self._map_error(exc) from exc

    @staticmethod
    def _map_error(error: Optional[Exception]) -> APIError:
        if isinstance(error, APIError):
            return error
        if isinstance(error, openai.RateLimitError):
            return APIRateLimitError(original_error=error)
        if isinstance(error, openai.APIConnectionError):
            return APIConnectionError(original_error=error)
        if isinstance(error, openai.APIStatusError):
            return APIError(str(error), error, error.status_code)
        if error is not None and is_rate_limit_error(error):
            return APIRateLimitError(original_error=error)
        return APIError("Max retries exceeded", error)

"""Tests for chunking.token_counter."""

import pytest

from chunking.token_counter import DEFAULT_ENCODING, count_tokens, count_tokens_batch, get_encoding


@pytest.fixture(scope="module", autouse=True)
def require_encoding():
    # Encodings are downloaded on first use; skip when offline.
    try:
        get_encoding()
    except Exception as exc:
        pytest.skip(f"tiktoken encoding unavailable: {exc}")


class TestGetEncoding:
    def test_default(self):
        assert get_encoding().name == DEFAULT_ENCODING

    def test_unknown_model_falls_back(self):
        assert get_encoding("not-a-real-model").name == DEFAULT_ENCODING

    def test_cached(self):
        assert get_encoding() is get_encoding()


class TestCountTokens:
    def test_empty_string(self):
        assert count_tokens("") == 0

    def test_simple_english(self):
        assert count_tokens("Hello world") >= 2

    def test_legal_reference(self):
        assert count_tokens("Article 17 of the GDPR") >= 4

    def test_longer_text(self):
        text = (
            "Commissions are paid within thirty days after the end of the month "
            "in which the referred customer completed a qualifying purchase."
        )
        assert 15 < count_tokens(text) < 60

    def test_returns_int(self):
        assert isinstance(count_tokens("Test"), int)


class TestCountTokensBatch:
    def test_empty_list(self):
        assert count_tokens_batch([]) == []

    def test_only_empty_texts(self):
        assert count_tokens_batch(["", ""]) == [0, 0]

    def test_matches_single_counts(self):
        texts = ["First sentence.", "", "Second, longer sentence here."]
        assert count_tokens_batch(texts) == [count_tokens(t) for t in texts]

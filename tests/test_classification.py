"""Tests for topic_intelligence.classification with a mocked client."""

from unittest.mock import MagicMock

import pytest

from topic_intelligence.classification import TopicClassifier
from topic_intelligence.exceptions import APIError, APIRateLimitError
from topic_intelligence.models import EntityExtraction, Topic


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def classifier(client):
    return TopicClassifier(client)


class TestClassifyTopics:
    def test_parses_topics(self, classifier, client):
        client.chat_json.return_value = {"topics": [
            {"topicName": "Affiliate Programs", "confidence": 92,
             "keywords": ["commission"], "description": "Partner payouts"},
            {"topicName": "Privacy", "confidence": 40},
        ]}

        topics = classifier.classify_topics("Commissions are paid monthly.")

        assert [t.topic_name for t in topics] == ["Affiliate Programs", "Privacy"]
        assert topics[0].confidence == 92
        assert topics[0].keywords == ["commission"]

    def test_drops_malformed_items(self, classifier, client):
        client.chat_json.return_value = {"topics": [
            {"topicName": "Valid", "confidence": 50},
            {"confidence": 50},
            {"topicName": "Too confident", "confidence": 250},
            "not an object",
        ]}
        topics = classifier.classify_topics("text")
        assert [t.topic_name for t in topics] == ["Valid"]

    def test_missing_topics_key(self, classifier, client):
        client.chat_json.return_value = {"something": "else"}
        assert classifier.classify_topics("text") == []

    def test_api_error_returns_empty(self, classifier, client, caplog):
        client.chat_json.side_effect = APIRateLimitError()
        assert classifier.classify_topics("text") == []
        assert "Failed to classify topics" in caplog.text

    def test_existing_topics_in_prompt(self, classifier, client):
        client.chat_json.return_value = {"topics": []}
        classifier.classify_topics(
            "text",
            [Topic(id="t1", name="Refunds", description="Returns and refunds")],
        )
        prompt = client.chat_json.call_args.args[0]
        assert "- Refunds: Returns and refunds" in prompt

    def test_content_truncated_in_prompt(self, classifier, client):
        client.chat_json.return_value = {"topics": []}
        classifier.classify_topics("a" * 4000 + "TAIL")
        prompt = client.chat_json.call_args.args[0]
        assert "a" * 4000 in prompt
        assert "TAIL" not in prompt


class TestExtractEntities:
    def test_parses_entities(self, classifier, client):
        client.chat_json.return_value = {
            "numbers": [{"value": 30, "unit": "days", "context": "paid within 30 days"}],
            "regulations": [{"value": "Article 17", "context": "GDPR"}],
            "terms": [{"value": "Partner", "definition": "The affiliate", "context": ""}],
            "dates": [],
            "percentages": [{"value": "15%", "context": "commission"}],
        }

        entities = classifier.extract_entities("text")

        assert entities.total == 4
        assert entities.numbers[0].value == "30"
        assert entities.terms[0].definition == "The affiliate"

        simple = entities.to_simple_entities()
        assert [e.type for e in simple] == ["number", "regulation", "term", "percentage"]
        assert simple[0].metadata == {"unit": "days"}
        assert simple[2].metadata == {"definition": "The affiliate"}

    def test_api_error_returns_empty(self, classifier, client):
        client.chat_json.side_effect = APIError("boom")
        result = classifier.extract_entities("text")
        assert result == EntityExtraction()
        assert result.total == 0


class TestExtractSectionPatterns:
    def test_no_documents(self, classifier, client):
        assert classifier.extract_section_patterns([]) == []
        client.chat_json.assert_not_called()

    def test_parses_patterns(self, classifier, client):
        client.chat_json.return_value = {"patterns": [
            {"heading": "Payment Terms", "frequency": 3, "exampleContent": "Paid monthly"},
        ]}
        patterns = classifier.extract_section_patterns([("Doc A", "content")])
        assert patterns[0].heading == "Payment Terms"
        assert patterns[0].example_content == "Paid monthly"

    def test_limits_documents_and_excerpts(self, classifier, client):
        client.chat_json.return_value = {"patterns": []}
        documents = [(f"Doc {i}", "b" * 600) for i in range(12)]

        classifier.extract_section_patterns(documents)

        prompt = client.chat_json.call_args.args[0]
        assert "Document 10: Doc 9" in prompt
        assert "Document 11" not in prompt
        assert "b" * 501 not in prompt

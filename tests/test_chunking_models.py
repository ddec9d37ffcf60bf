"""Tests for chunking.models."""

import json

import pytest
from pydantic import ValidationError

from chunking.models import (
    Chunk,
    ChunkingResult,
    ChunkingStats,
    ChunkMetadata,
    ChunkOptions,
    ChunkRequest,
    ChunkResponse,
)
from conftest import make_chunk


class TestChunkOptions:
    def test_defaults(self):
        options = ChunkOptions()
        assert options.max_chunk_size == 1000
        assert options.overlap == 100
        assert options.preserve_headings is True
        assert options.preserve_sections is True

    def test_camel_case_aliases(self):
        options = ChunkOptions.model_validate({
            "maxChunkSize": 800,
            "overlap": 50,
            "preserveHeadings": False,
            "preserveSections": False,
        })
        assert options.max_chunk_size == 800
        assert options.overlap == 50
        assert options.preserve_headings is False
        assert options.preserve_sections is False

    def test_field_names_accepted(self):
        options = ChunkOptions(max_chunk_size=500, preserve_sections=False)
        assert options.max_chunk_size == 500
        assert options.preserve_sections is False

    @pytest.mark.parametrize("size", [0, -1, -1000])
    def test_non_positive_size_clamped_to_one(self, size):
        assert ChunkOptions(max_chunk_size=size).max_chunk_size == 1

    def test_negative_overlap_clamped_to_zero(self):
        assert ChunkOptions(overlap=-10).overlap == 0

    @pytest.mark.parametrize("raw,expected", [("0", 1), ("-5", 1), ("250", 250)])
    def test_numeric_string_size_clamped(self, raw, expected):
        options = ChunkOptions.model_validate({"maxChunkSize": raw})
        assert options.max_chunk_size == expected

    def test_numeric_string_overlap_clamped(self):
        assert ChunkOptions.model_validate({"overlap": "-3"}).overlap == 0

    def test_float_truncated(self):
        options = ChunkOptions(max_chunk_size=2.9, overlap=0.5)
        assert options.max_chunk_size == 2
        assert options.overlap == 0

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_rejected(self, value):
        with pytest.raises(ValidationError):
            ChunkOptions(max_chunk_size=value)
        with pytest.raises(ValidationError):
            ChunkOptions(overlap=value)

    def test_overflowing_json_number_rejected(self):
        with pytest.raises(ValidationError):
            ChunkOptions.model_validate(json.loads('{"maxChunkSize": 1e400}'))

    def test_overlap_above_size_kept(self):
        options = ChunkOptions(max_chunk_size=100, overlap=500)
        assert options.overlap == 500

    def test_non_numeric_rejected(self):
        with pytest.raises(ValidationError):
            ChunkOptions(max_chunk_size="large")

    def test_frozen(self):
        options = ChunkOptions()
        with pytest.raises(ValidationError):
            options.overlap = 5


class TestChunk:
    def test_offsets_from_metadata(self):
        chunk = Chunk(
            content="Hello",
            index=0,
            metadata=ChunkMetadata(start_char=10, end_char=17),
        )
        assert chunk.start_char == 10
        assert chunk.end_char == 17
        assert chunk.heading is None
        assert chunk.metadata.page_number is None

    def test_empty_content_rejected(self):
        with pytest.raises(ValidationError):
            Chunk(content="", index=0, metadata=ChunkMetadata(start_char=0, end_char=1))

    def test_negative_index_rejected(self):
        with pytest.raises(ValidationError):
            make_chunk(-1, "text")

    def test_negative_offset_rejected(self):
        with pytest.raises(ValidationError):
            ChunkMetadata(start_char=-1, end_char=5)

    def test_to_dict(self):
        data = make_chunk(2, "Body text", heading="Body", start=40).to_dict()
        assert data["content"] == "Body text"
        assert data["index"] == 2
        assert data["heading"] == "Body"
        assert data["metadata"] == {
            "start_char": 40,
            "end_char": 49,
            "section": "Body",
            "page_number": None,
        }


class TestChunkingResult:
    @pytest.fixture
    def result(self):
        return ChunkingResult(
            document_id="doc001",
            source_file="docs/doc001.txt",
            options=ChunkOptions(max_chunk_size=200, overlap=20),
            chunks=[
                make_chunk(0, "First", start=0),
                make_chunk(1, "Second", start=6),
                make_chunk(2, "Third", start=13),
            ],
            stats=ChunkingStats(total_chunks=3, total_sections=1, total_chars=18),
        )

    def test_total_chunks(self, result):
        assert result.total_chunks == 3

    def test_get_chunk(self, result):
        assert result.get_chunk(1).content == "Second"
        assert result.get_chunk(9) is None

    def test_get_neighbors(self, result):
        prev, nxt = result.get_neighbors(1)
        assert prev.content == "First"
        assert nxt.content == "Third"

    def test_get_neighbors_at_edges(self, result):
        prev, nxt = result.get_neighbors(0)
        assert prev is None
        assert nxt.content == "Second"
        assert result.get_neighbors(2)[1] is None

    def test_get_neighbors_unknown_index(self, result):
        assert result.get_neighbors(42) == (None, None)

    def test_to_json(self, result):
        data = json.loads(result.to_json())
        assert data["document_id"] == "doc001"
        assert data["options"]["max_chunk_size"] == 200
        assert len(data["chunks"]) == 3

    def test_save_and_load(self, result, tmp_path):
        path = tmp_path / "result.json"
        result.save(str(path))

        loaded = ChunkingResult.load(str(path))
        assert loaded.document_id == result.document_id
        assert loaded.options == result.options
        assert loaded.chunks == result.chunks
        assert loaded.stats == result.stats

    def test_empty_result(self):
        result = ChunkingResult(document_id="empty")
        assert result.total_chunks == 0
        assert result.get_neighbors(0) == (None, None)


class TestRequestResponse:
    def test_request_defaults(self):
        request = ChunkRequest(text="hello")
        assert request.document_id == "document"
        assert request.options is None
        assert request.save is False

    def test_request_camel_case(self):
        request = ChunkRequest.model_validate({
            "text": "hello",
            "documentId": "contract-7",
            "options": {"maxChunkSize": 300},
        })
        assert request.document_id == "contract-7"
        assert request.options.max_chunk_size == 300

    @pytest.mark.parametrize("document_id", ["../etc", "a/b", "", ".hidden"])
    def test_request_rejects_unsafe_document_id(self, document_id):
        with pytest.raises(ValidationError):
            ChunkRequest(text="hello", document_id=document_id)

    def test_response_serializes_aliases(self):
        response = ChunkResponse(document_id="doc", total_chunks=0)
        data = response.model_dump(by_alias=True)
        assert data["documentId"] == "doc"
        assert data["totalChunks"] == 0
        assert data["outputPath"] is None

import logging
from pathlib import Path
from typing import Optional

from .chunker import DocumentChunker, read_document
from .config import ChunkingServiceConfig
from .exceptions import DocumentTooLargeError
from .models import ChunkingResult, ChunkOptions
from .storage import ChunkingStorage

logger = logging.getLogger(__name__)


class ChunkingService:
    def __init__(self, config: ChunkingServiceConfig | None = None):
        self.config = config or ChunkingServiceConfig()
        self.chunker = DocumentChunker(self.config.options)
        self.storage = ChunkingStorage(self.config.data_dir)

    def chunk_text(
        self,
        text: str,
        document_id: str = "document",
        options: Optional[ChunkOptions] = None,
    ) -> ChunkingResult:
        text = self._enforce_size_budget(text)
        chunker = DocumentChunker(options) if options else self.chunker
        return chunker.chunk_text(text, document_id=document_id)

    def chunk_file(self, path: str) -> ChunkingResult:
        text = self._enforce_size_budget(read_document(path))
        return self.chunker.chunk_text(
            text,
            document_id=Path(path.replace("\\", "/")).stem,
            source_file=path,
        )

    def chunk_and_save(
        self,
        text: str,
        document_id: str = "document",
        options: Optional[ChunkOptions] = None,
    ) -> tuple[ChunkingResult, str]:
        result = self.chunk_text(text, document_id=document_id, options=options)
        paths = self.storage.save(result)
        return result, str(paths.chunk_file)

    def load_latest(self, document_id: str) -> Optional[ChunkingResult]:
        return self.storage.load_latest(document_id)

    def _enforce_size_budget(self, text: str) -> str:
        limit = self.config.max_document_chars
        if len(text) <= limit:
            return text
        if not self.config.truncate_oversized:
            raise DocumentTooLargeError(len(text), limit)
        logger.warning(
            "Document too large: %d chars. Truncating to %d chars", len(text), limit
        )
        return text[:limit]

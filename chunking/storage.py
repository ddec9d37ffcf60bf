"""
Persistence of chunking results.

Layout:
    <data_dir>/<document_id>/chunks/<document_id>_<timestamp>.json

Every save writes a new file; the newest file of a document is its current
result. Timestamps carry microseconds, so consecutive saves never collide
and sort chronologically by name.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from .models import ChunkingResult

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S_%f"


@dataclass
class ChunkingPaths:
    document_id: str
    chunk_dir: Path
    chunk_file: Path


class ChunkingStorage:
    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)

    def chunk_dir(self, document_id: str) -> Path:
        return self.data_dir / document_id / "chunks"

    def build_paths(self, document_id: str) -> ChunkingPaths:
        """Create the document's chunk directory and name a new result file."""
        chunk_dir = self.chunk_dir(document_id)
        chunk_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.utcnow().strftime(TIMESTAMP_FORMAT)
        return ChunkingPaths(
            document_id=document_id,
            chunk_dir=chunk_dir,
            chunk_file=chunk_dir / f"{document_id}_{stamp}.json",
        )

    def save(self, result: ChunkingResult) -> ChunkingPaths:
        paths = self.build_paths(result.document_id)
        result.save(str(paths.chunk_file))
        logger.info("Saved %d chunks to %s", result.total_chunks, paths.chunk_file)
        return paths

    def list_results(self, document_id: str) -> list[Path]:
        """Saved result files of a document, oldest first."""
        directory = self.chunk_dir(document_id)
        if not directory.is_dir():
            return []
        return sorted(directory.glob(f"{document_id}_*.json"))

    def load_latest(self, document_id: str) -> Optional[ChunkingResult]:
        files = self.list_results(document_id)
        if not files:
            return None
        return ChunkingResult.load(str(files[-1]))

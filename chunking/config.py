from dataclasses import dataclass, field
import os

from .models import ChunkOptions


@dataclass
class ChunkingServiceConfig:
    data_dir: str = "data/chunking"
    options: ChunkOptions = field(default_factory=ChunkOptions)
    max_document_chars: int = 1_000_000
    truncate_oversized: bool = False

    @classmethod
    def from_env(cls) -> "ChunkingServiceConfig":
        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            return int(value) if value else default

        def _bool(name: str, default: bool) -> bool:
            value = os.environ.get(name)
            if not value:
                return default
            return value.strip().lower() in ("1", "true", "yes", "on")

        defaults = ChunkOptions()
        return cls(
            data_dir=os.environ.get("CHUNKING_DATA_DIR", cls.data_dir),
            options=ChunkOptions(
                max_chunk_size=_int("CHUNKING_MAX_CHUNK_SIZE", defaults.max_chunk_size),
                overlap=_int("CHUNKING_OVERLAP", defaults.overlap),
            ),
            max_document_chars=_int("CHUNKING_MAX_DOCUMENT_CHARS", cls.max_document_chars),
            truncate_oversized=_bool("CHUNKING_TRUNCATE_OVERSIZED", cls.truncate_oversized),
        )

import re

from fastapi import FastAPI, HTTPException

from .config import ChunkingServiceConfig
from .exceptions import ChunkingError, DocumentTooLargeError
from .models import DOCUMENT_ID_PATTERN, ChunkingResult, ChunkRequest, ChunkResponse
from .service import ChunkingService

_DOCUMENT_ID = re.compile(DOCUMENT_ID_PATTERN)


def create_app(config: ChunkingServiceConfig | None = None) -> FastAPI:
    service = ChunkingService(config or ChunkingServiceConfig.from_env())
    app = FastAPI(
        title="Chunking Service",
        version="1.0.0",
        description="Structure-aware document chunking with overlap and source offsets.",
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.post("/chunk", response_model=ChunkResponse)
    def chunk(request: ChunkRequest) -> ChunkResponse:
        try:
            output_path = None
            if request.save:
                result, output_path = service.chunk_and_save(
                    request.text, request.document_id, request.options
                )
            else:
                result = service.chunk_text(
                    request.text, request.document_id, request.options
                )
            return ChunkResponse(
                document_id=result.document_id,
                total_chunks=result.total_chunks,
                chunks=result.chunks,
                stats=result.stats,
                output_path=output_path,
            )
        except DocumentTooLargeError as exc:
            raise HTTPException(status_code=413, detail=str(exc)) from exc
        except ChunkingError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except Exception as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    @app.get("/chunks/{document_id}", response_model=ChunkingResult)
    def latest_chunks(document_id: str) -> ChunkingResult:
        if not _DOCUMENT_ID.fullmatch(document_id):
            raise HTTPException(status_code=400, detail="Invalid document id")
        result = service.load_latest(document_id)
        if result is None:
            raise HTTPException(status_code=404, detail=f"No saved chunks for {document_id}")
        return result

    return app


app = create_app()

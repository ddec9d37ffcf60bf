#!/usr/bin/env python3
"""
Document Chunker - Split text documents into overlapping, offset-tracked chunks.

Main entry point. Chunks a UTF-8 text file and writes the result as JSON,
or serves the chunking API.

Usage:
    python main.py chunk contract.txt --max-chunk-size 800 --overlap 50
    python main.py chunk notes.md --no-sections --output notes-chunks.json
    python main.py serve --port 8002
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from chunking import ChunkingService, ChunkingServiceConfig, ChunkOptions
from chunking.exceptions import ChunkingError
from chunking.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def cmd_chunk(args: argparse.Namespace) -> int:
    config = ChunkingServiceConfig.from_env()
    config.options = ChunkOptions(
        max_chunk_size=args.max_chunk_size,
        overlap=args.overlap,
        preserve_headings=not args.no_headings,
        preserve_sections=not args.no_sections,
    )
    service = ChunkingService(config)

    try:
        result = service.chunk_file(args.input)
    except ChunkingError as exc:
        logger.error(str(exc))
        return 1

    output = Path(args.output) if args.output else Path(args.input).with_suffix(".chunks.json")
    result.save(str(output))

    stats = result.stats
    logger.info(
        "Chunked %s: %d sections, %d chunks (avg %.0f chars, %d tokens) -> %s",
        args.input, stats.total_sections, stats.total_chunks,
        stats.avg_chunk_chars, stats.total_tokens, output,
    )
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("chunking.app:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Split text documents into overlapping, position-tracked chunks",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    chunk = subparsers.add_parser("chunk", help="Chunk a UTF-8 text file")
    chunk.add_argument("input", help="Path to the text file")
    chunk.add_argument("--max-chunk-size", type=int, default=1000,
                       help="Window size in characters (default: 1000)")
    chunk.add_argument("--overlap", type=int, default=100,
                       help="Overlap in characters (default: 100)")
    chunk.add_argument("--no-sections", action="store_true",
                       help="Do not split the document at headings")
    chunk.add_argument("--no-headings", action="store_true",
                       help="Do not attach headings to chunks")
    chunk.add_argument("-o", "--output", help="Output JSON path")
    chunk.set_defaults(func=cmd_chunk)

    serve = subparsers.add_parser("serve", help="Run the chunking API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8002)
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

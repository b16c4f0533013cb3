"""CLI entry point for codeindex."""

import argparse
import dataclasses
import logging
import sys
from datetime import datetime
from pathlib import Path

from codeindex.chunkers import LineChunker
from codeindex.config import DEFAULT_STORE_PATH, IndexConfig
from codeindex.embedders import SentenceTransformerEmbedder
from codeindex.errors import CodeIndexError
from codeindex.indexing import IndexingPipeline
from codeindex.models import QueryResult, ResultStatus
from codeindex.query import QueryEngine
from codeindex.scanners import FileScanner
from codeindex.storage import SQLiteCollectionStore

logger = logging.getLogger(__name__)


def index(source: str, output: str, config: IndexConfig, reset: bool = False) -> None:
    """Index a source folder into a .codeindex store.

    Args:
        source: Path to the codebase root
        output: Path for the store file (created if missing)
        config: Chunking, scanning and embedding settings
        reset: Drop previously indexed chunks first
    """
    source_path = Path(source)
    output_path = Path(output)

    # Source must exist before the store file is created
    if not source_path.is_dir():
        logger.error(f"Codebase folder not found: {source}")
        sys.exit(1)

    # Initialize components
    logger.info("Loading embedding model...")
    embedder = SentenceTransformerEmbedder(config.embedding_model)
    store = SQLiteCollectionStore(output_path)
    pipeline = IndexingPipeline(
        store,
        embedder,
        FileScanner(config.extensions, config.excluded_dirs),
        LineChunker(config.max_chunk_size),
        collection_name=config.collection_name,
    )

    logger.info(f"Indexing {source} -> {output}")
    report = pipeline.index_codebase(source_path, reset=reset)

    # Store metadata
    store.set_metadata("source", str(source_path.absolute()))
    store.set_metadata("indexed_at", datetime.now().isoformat())
    store.set_metadata("embedding_model", embedder.model_name)
    store.set_metadata("max_chunk_size", str(config.max_chunk_size))

    for document_name, reason in report.failures:
        logger.warning(f"  skipped {document_name}: {reason}")
    logger.info("")
    logger.info(
        f"Indexed {report.files_indexed} files, {report.chunks_indexed} chunks -> {output_path}"
    )


def _open_engine(store_path: str, config: IndexConfig) -> QueryEngine:
    path = Path(store_path)
    if not path.exists():
        logger.error(f"Index store not found: {store_path}")
        sys.exit(1)

    return QueryEngine(
        SQLiteCollectionStore(path),
        SentenceTransformerEmbedder(config.embedding_model),
        collection_name=config.collection_name,
    )


def _emit(result: QueryResult) -> None:
    print(result.text.rstrip("\n"))
    if result.status is ResultStatus.ERROR:
        sys.exit(1)


def serve(store_path: str, config: IndexConfig, transport: str = "stdio") -> None:
    """Start MCP server for an index store.

    Args:
        store_path: Path to .codeindex file
        config: Collection and embedding settings
        transport: Transport protocol (stdio or sse)
    """
    path = Path(store_path)
    if not path.exists():
        logger.error(f"Index store not found: {store_path}")
        sys.exit(1)

    # Import here to avoid loading MCP unless needed
    from typing import Literal, cast

    from codeindex.server import create_mcp_server

    logger.info(f"Serving {store_path} via {transport}")
    mcp = create_mcp_server(path, config)
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def info(store_path: str, config: IndexConfig) -> None:
    """Show information about an index store.

    Args:
        store_path: Path to .codeindex file
        config: Supplies the collection to report on
    """
    path = Path(store_path)
    if not path.exists():
        logger.error(f"Index store not found: {store_path}")
        sys.exit(1)

    store = SQLiteCollectionStore(path)

    metadata = {}
    for key in ["source", "indexed_at", "embedding_model", "max_chunk_size"]:
        value = store.get_metadata(key)
        if value:
            metadata[key] = value

    collections = store.list_collections()

    print(f"Index: {path.name}")
    print(f"  Size: {path.stat().st_size / 1024:.1f} KB")
    print("")
    print("Metadata:")
    for key, value in metadata.items():
        print(f"  {key}: {value}")
    print("")
    print("Collections:")
    for name in collections:
        chunks = store.all_chunks(name)
        documents = {chunk.document_name for chunk in chunks}
        marker = " (default)" if name == config.collection_name else ""
        print(f"  {name}{marker}: {len(documents)} files, {len(chunks)} chunks")


def _add_store_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--store",
        default=DEFAULT_STORE_PATH,
        help=f"Path to the index store (default: {DEFAULT_STORE_PATH})",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codeindex",
        description="codeindex - semantic search over a source tree",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--collection", help="Collection name (default: codebase)")
    parser.add_argument("--model", help="sentence-transformers model name")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # index command
    index_parser = subparsers.add_parser(
        "index",
        help="Index a source folder into a store",
    )
    index_parser.add_argument("source", help="Codebase root folder")
    index_parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_STORE_PATH,
        help=f"Output store path (default: {DEFAULT_STORE_PATH})",
    )
    index_parser.add_argument(
        "--max-chunk-size",
        type=int,
        help="Soft size limit for chunks in characters (default: 1000)",
    )
    index_parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop the existing collection before indexing",
    )

    # search command
    search_parser = subparsers.add_parser("search", help="Semantic search over indexed code")
    search_parser.add_argument("query", help="Natural language query")
    search_parser.add_argument(
        "-n",
        "--max-results",
        type=int,
        default=5,
        help="Maximum number of results (default: 5)",
    )
    _add_store_argument(search_parser)

    # ls command
    ls_parser = subparsers.add_parser("ls", help="List indexed files")
    ls_parser.add_argument("directory", nargs="?", help="Only list files under this path prefix")
    _add_store_argument(ls_parser)

    # show command
    show_parser = subparsers.add_parser("show", help="Print the indexed contents of a file")
    show_parser.add_argument("file_name", help="File name or partial path")
    _add_store_argument(show_parser)

    # analyze command
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Show a file together with related files",
    )
    analyze_parser.add_argument("file_name", help="File name or partial path")
    _add_store_argument(analyze_parser)

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start MCP server for an index store",
    )
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )
    _add_store_argument(serve_parser)

    # info command
    info_parser = subparsers.add_parser(
        "info",
        help="Show information about an index store",
    )
    _add_store_argument(info_parser)

    return parser


def _resolve_config(args: argparse.Namespace) -> IndexConfig:
    config = IndexConfig.from_env()
    overrides = {}
    if args.collection:
        overrides["collection_name"] = args.collection
    if args.model:
        overrides["embedding_model"] = args.model
    if getattr(args, "max_chunk_size", None) is not None:
        overrides["max_chunk_size"] = args.max_chunk_size
    return dataclasses.replace(config, **overrides)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        config = _resolve_config(args)

        if args.command == "index":
            index(args.source, args.output, config, reset=args.reset)
        elif args.command == "search":
            _emit(_open_engine(args.store, config).search(args.query, args.max_results))
        elif args.command == "ls":
            _emit(_open_engine(args.store, config).list_files(args.directory))
        elif args.command == "show":
            _emit(_open_engine(args.store, config).get_file_info(args.file_name))
        elif args.command == "analyze":
            _emit(_open_engine(args.store, config).analyze_structure(args.file_name))
        elif args.command == "serve":
            serve(args.store, config, args.transport)
        elif args.command == "info":
            info(args.store, config)
    except CodeIndexError as exc:
        logger.error(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()

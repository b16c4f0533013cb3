"""FastMCP server implementation for codeindex."""

from pathlib import Path

from mcp.server.fastmcp import FastMCP

from codeindex.config import IndexConfig
from codeindex.embedders import SentenceTransformerEmbedder
from codeindex.protocols import EmbeddingProvider
from codeindex.query import QueryEngine
from codeindex.storage import SQLiteCollectionStore


def create_mcp_server(
    store_path: Path,
    config: IndexConfig | None = None,
    embedder: EmbeddingProvider | None = None,
) -> FastMCP:
    """Create an MCP server for a specific index store.

    Args:
        store_path: Path to the .codeindex store file to serve
        config: Collection name and embedding model to use
        embedder: Override for the embedding provider (defaults to the
                  sentence-transformers model named in config)

    Returns:
        Configured FastMCP server instance
    """
    config = config or IndexConfig()
    mcp = FastMCP(
        name="codeindex",
    )

    # Initialize store and embedder (loaded once per server)
    store = SQLiteCollectionStore(store_path)
    engine = QueryEngine(
        store,
        embedder or SentenceTransformerEmbedder(config.embedding_model),
        collection_name=config.collection_name,
    )

    @mcp.tool()
    def search_codebase(query: str, max_results: int = 5) -> str:
        """Search the codebase for relevant information.

        Args:
            query: Natural language description of the code you are looking for
            max_results: Maximum number of snippets to return (default: 5)

        Returns:
            Matching code snippets, best match first
        """
        return str(engine.search(query, max_results))

    @mcp.tool()
    def list_files(directory: str = "") -> str:
        """List all files in the codebase or in a specific directory.

        Args:
            directory: Optional path prefix (e.g. "src/") to filter results

        Returns:
            Files grouped by directory
        """
        return str(engine.list_files(directory or None))

    @mcp.tool()
    def get_file_info(file_name: str) -> str:
        """Get the indexed contents of a file.

        Args:
            file_name: The filename or partial path to search for

        Returns:
            Contents of every file whose path contains file_name
        """
        return str(engine.get_file_info(file_name))

    @mcp.tool()
    def analyze_code_structure(file_name: str) -> str:
        """Analyze a file together with the files related to it.

        Args:
            file_name: The filename or partial path to analyze

        Returns:
            Related files followed by the file contents
        """
        return str(engine.analyze_structure(file_name))

    return mcp

"""Database schema for .codeindex store files."""

SCHEMA = """
-- Named collections of chunks
CREATE TABLE IF NOT EXISTS collections (
    name TEXT PRIMARY KEY,
    created_at TEXT NOT NULL
);

-- Chunks keyed per collection, embeddings stored as float32 blobs
CREATE TABLE IF NOT EXISTS chunks (
    collection TEXT NOT NULL,
    key TEXT NOT NULL,
    document_name TEXT NOT NULL,
    sequence_number INTEGER NOT NULL,
    text TEXT NOT NULL,
    embedding BLOB NOT NULL,
    dimension INTEGER NOT NULL,
    PRIMARY KEY (collection, key),
    FOREIGN KEY (collection) REFERENCES collections(name)
);

-- Metadata table: stores index run metadata
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT
);

-- Indexes for efficient queries
CREATE INDEX IF NOT EXISTS idx_chunks_document ON chunks(collection, document_name);
"""

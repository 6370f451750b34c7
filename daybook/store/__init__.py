"""Store layer - provides persistence for the application.

This module re-exports the blob stores, the entity codec and schema helpers.
"""

# Re-export blob stores
from daybook.store.blobs import BlobStore, SqliteBlobStore

# Re-export codec functions
from daybook.store.codec import (
    TASKS_KEY,
    TRANSACTIONS_KEY,
    decode_tasks,
    decode_transactions,
    encode_tasks,
    encode_transactions,
)
from daybook.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Blob stores
    "BlobStore",
    "SqliteBlobStore",
    # Codec
    "TASKS_KEY",
    "TRANSACTIONS_KEY",
    "decode_tasks",
    "decode_transactions",
    "encode_tasks",
    "encode_transactions",
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
]

"""
SQLite-backed storage of (id, text, embedding) records for one store instance.

Every public method takes the instance lock for its whole duration and turns
store errors into plain results: False, an empty list, 0 or None.
"""

import math
import sqlite3
import threading
from pathlib import Path
from typing import List, Optional, Sequence

from ..core.config import ensure_store_directory, resolve_store_path
from ..core.db import init_schema, open_connection
from ..core.errors import (
    DimensionMismatchError,
    InvalidDocumentError,
    SerializationError,
    StoreError,
    StoreIOError,
    StoreNotInitializedError,
)
from ..util.logging import logger
from .serialization import deserialize_vector, serialize_vector
from .types import DocumentRecord


class SQLiteRecordStore:
    """Durable keyed storage of document records with a fixed dimension."""

    def __init__(self, name: str, dimension: int, store_dir: str = None):
        """
        Open or create the store file for ``name``.

        Args:
            name: Store name, used as the database file stem
            dimension: Embedding dimension shared by every record
            store_dir: Directory for store files, defaults to STORE_DIR
        """
        self.name = name
        self.dimension = dimension
        self.db_path: Optional[Path] = None
        self._conn: Optional[sqlite3.Connection] = None
        self._initialized = False
        self._lock = threading.Lock()

        logger.info(f"Initializing vector database: {name}, dim: {dimension}")

        try:
            if not isinstance(dimension, int) or dimension < 1:
                raise ValueError(f"embedding dimension must be a positive integer, got {dimension!r}")

            self.db_path = resolve_store_path(name, store_dir)
            ensure_store_directory(str(self.db_path.parent))
            self._conn = open_connection(self.db_path)
            init_schema(self._conn)
        except (ValueError, OSError, sqlite3.Error) as e:
            logger.error(f"Failed to initialize store '{name}': {e}")
            self._release_connection()
            return

        self._initialized = True
        logger.log_store_operation("init", name, {"path": str(self.db_path), "dimension": dimension})

    def is_initialized(self) -> bool:
        return self._initialized

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        """Release the database connection. The store is unusable afterwards."""
        with self._lock:
            if self._conn is not None:
                self._release_connection()
                logger.log_store_operation("close", self.name)
            self._initialized = False

    def _release_connection(self) -> None:
        if self._conn is None:
            return
        try:
            self._conn.close()
        except sqlite3.Error as e:
            logger.warning(f"Error closing store '{self.name}': {e}")
        self._conn = None

    def _require_initialized(self) -> None:
        if not self._initialized or self._conn is None:
            raise StoreNotInitializedError(f"Store '{self.name}' is not initialized")

    def _write(self, sql: str, params: Sequence = ()) -> int:
        """Run a mutating statement and commit it. Returns the affected row count."""
        try:
            cursor = self._conn.execute(sql, params)
            self._conn.commit()
            return cursor.rowcount
        except sqlite3.Error as e:
            try:
                self._conn.rollback()
            except sqlite3.Error as rollback_error:
                logger.warning(f"Rollback failed for store '{self.name}': {rollback_error}")
            raise StoreIOError(str(e)) from e

    def _read(self, sql: str, params: Sequence = ()) -> list:
        try:
            return self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StoreIOError(str(e)) from e

    def _to_record(self, doc_id: str, text: str, embedding: str) -> Optional[DocumentRecord]:
        """Deserialize a row, or return None when it should be skipped."""
        try:
            vector = deserialize_vector(embedding)
        except SerializationError as e:
            logger.warning(f"Skipping document '{doc_id}' in store '{self.name}': {e}")
            return None

        if len(vector) != self.dimension:
            logger.debug(f"Skipping document '{doc_id}': embedding has {len(vector)} values, expected {self.dimension}")
            return None

        return DocumentRecord(id=doc_id, text=text, vector=vector)

    def upsert(self, doc_id: str, text: str, vector: Sequence[float]) -> bool:
        """Insert a record, replacing any existing record with the same id."""
        with self._lock:
            try:
                self._require_initialized()
                if not doc_id:
                    raise InvalidDocumentError("document id cannot be empty")
                if not text:
                    raise InvalidDocumentError("document text cannot be empty")
                if len(vector) != self.dimension:
                    raise DimensionMismatchError(self.dimension, len(vector))
                if not all(math.isfinite(value) for value in vector):
                    raise InvalidDocumentError("embedding contains non-finite values")

                self._write(
                    "INSERT OR REPLACE INTO documents (id, text, embedding) VALUES (?, ?, ?)",
                    (doc_id, text, serialize_vector(vector))
                )
            except (DimensionMismatchError, InvalidDocumentError) as e:
                logger.log_store_operation("upsert", self.name, {"doc_id": doc_id, "error": str(e)}, status="rejected")
                return False
            except StoreError as e:
                logger.error(f"Failed to insert document '{doc_id}' into '{self.name}': {e}")
                return False

        logger.log_store_operation("upsert", self.name, {"doc_id": doc_id})
        return True

    def get(self, doc_id: str) -> Optional[DocumentRecord]:
        """Get a single record by id."""
        with self._lock:
            try:
                self._require_initialized()
                rows = self._read("SELECT id, text, embedding FROM documents WHERE id = ?", (doc_id,))
            except StoreError as e:
                logger.error(f"Failed to get document '{doc_id}' from '{self.name}': {e}")
                return None

            if not rows:
                return None
            return self._to_record(*rows[0])

    def contains(self, doc_id: str) -> bool:
        """Check whether a record with this id exists."""
        with self._lock:
            try:
                self._require_initialized()
                rows = self._read("SELECT 1 FROM documents WHERE id = ? LIMIT 1", (doc_id,))
            except StoreError as e:
                logger.error(f"Failed to check document '{doc_id}' in '{self.name}': {e}")
                return False
            return bool(rows)

    def scan_all(self) -> List[DocumentRecord]:
        """Return every valid record in insertion order.

        Rows with malformed embeddings or the wrong number of values are
        skipped so one bad row cannot abort the scan.
        """
        with self._lock:
            try:
                self._require_initialized()
                rows = self._read("SELECT id, text, embedding FROM documents ORDER BY rowid")
            except StoreError as e:
                logger.error(f"Failed to scan store '{self.name}': {e}")
                return []

            records = []
            for row in rows:
                record = self._to_record(*row)
                if record is not None:
                    records.append(record)

            if len(records) != len(rows):
                logger.log_store_operation("scan", self.name, {"rows": len(rows), "skipped": len(rows) - len(records)}, status="degraded")
            return records

    def delete(self, doc_id: str) -> bool:
        """Delete a record by id. Deleting a missing id succeeds."""
        with self._lock:
            try:
                self._require_initialized()
                deleted = self._write("DELETE FROM documents WHERE id = ?", (doc_id,))
            except StoreError as e:
                logger.error(f"Failed to delete document '{doc_id}' from '{self.name}': {e}")
                return False

        logger.log_store_operation("delete", self.name, {"doc_id": doc_id, "deleted": deleted})
        return True

    def count(self) -> int:
        """Number of stored rows."""
        with self._lock:
            try:
                self._require_initialized()
                rows = self._read("SELECT COUNT(*) FROM documents")
            except StoreError as e:
                logger.error(f"Failed to count documents in '{self.name}': {e}")
                return 0
            return rows[0][0] if rows else 0

    def clear_all(self) -> bool:
        """Remove every row, keeping the schema."""
        with self._lock:
            try:
                self._require_initialized()
                removed = self._write("DELETE FROM documents")
            except StoreError as e:
                logger.error(f"Failed to clear store '{self.name}': {e}")
                return False

        logger.log_store_operation("clear", self.name, {"removed": removed})
        return True

    def compact(self) -> bool:
        """Reclaim disk space. Slow on large files; keep it off hot paths."""
        with self._lock:
            try:
                self._require_initialized()
                self._write("VACUUM")
            except StoreError as e:
                logger.error(f"Failed to compact store '{self.name}': {e}")
                return False

        logger.log_store_operation("compact", self.name)
        return True

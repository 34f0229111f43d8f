"""
Document store: embeds text, keeps it in a SQLite record store and answers
similarity searches over it.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..core.config import DEFAULT_TOP_K
from ..core.db import health_check
from ..core.errors import DimensionMismatchError
from ..util.logging import logger, truncate_text
from .embeddings import IEmbeddingProvider
from .ranking import SimilarityRanker
from .record_store import SQLiteRecordStore
from .types import DocumentRecord, SearchResult


class DocumentStore:
    """
    High-level document store composed from an embedding provider, a record
    store and a similarity ranker. Results from the record store are returned
    unchanged; there is no retry or fallback.
    """

    def __init__(self, records: SQLiteRecordStore, embedder: IEmbeddingProvider):
        self.records = records
        self.embedder = embedder
        self.name = records.name
        self.dimension = records.dimension
        self.ranker = SimilarityRanker(self.dimension)

    @classmethod
    def open(cls, name: str, embedder: IEmbeddingProvider, dimension: int = None, store_dir: str = None) -> "DocumentStore":
        """
        Open or create a named store.

        Args:
            name: Store name
            embedder: Provider used for documents and queries
            dimension: Embedding dimension, defaults to the embedder's dimension
            store_dir: Directory for store files, defaults to STORE_DIR
        """
        if dimension is None:
            dimension = embedder.get_dimension()
        return cls(SQLiteRecordStore(name, dimension, store_dir=store_dir), embedder)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def is_initialized(self) -> bool:
        return self.records.is_initialized()

    def close(self) -> None:
        self.records.close()

    def _embed(self, text: str) -> Optional[List[float]]:
        try:
            return self.embedder.embed_text(text)
        except Exception as e:
            # The embedder is an external collaborator; its failures stay here
            logger.error(f"Embedding failed for store '{self.name}': {e}")
            return None

    def add_document(self, doc_id: str, text: str) -> bool:
        """Embed ``text`` and upsert it under ``doc_id``."""
        if not self.is_initialized():
            logger.error(f"Store '{self.name}' is not initialized")
            return False

        embedding = self._embed(text)
        if embedding is None:
            return False

        return self.records.upsert(doc_id, text, embedding)

    def add_documents(self, docs: Iterable[Tuple[str, str]]) -> List[str]:
        """
        Add multiple documents.

        Args:
            docs: Iterable of (doc_id, text) pairs

        Returns:
            List of document IDs that were written
        """
        indexed_ids = []
        for doc_id, text in docs:
            if self.add_document(doc_id, text):
                indexed_ids.append(doc_id)
            else:
                logger.warning(f"Document '{doc_id}' was not added to '{self.name}' ({truncate_text(text)!r})")
        return indexed_ids

    def search(self, query_text: str, top_k: int = DEFAULT_TOP_K) -> List[SearchResult]:
        """
        Query the store and return the top-k most similar documents.

        Args:
            query_text: Query text
            top_k: Maximum number of results

        Returns:
            Results sorted by descending score; empty on any failure
        """
        if not self.is_initialized():
            logger.error(f"Store '{self.name}' is not initialized")
            return []

        query_vector = self._embed(query_text)
        if query_vector is None:
            return []

        try:
            self.ranker.check_query(query_vector)
        except DimensionMismatchError as e:
            logger.error(f"Invalid query embedding for store '{self.name}': {e}")
            return []

        records = self.records.scan_all()
        results = self.ranker.rank(query_vector, records, top_k)

        logger.log_search(self.name, top_k, len(results), scanned=len(records))
        return results

    def get_document(self, doc_id: str) -> Optional[DocumentRecord]:
        return self.records.get(doc_id)

    def delete_document(self, doc_id: str) -> bool:
        return self.records.delete(doc_id)

    def count(self) -> int:
        return self.records.count()

    def clear(self) -> bool:
        return self.records.clear_all()

    def compact(self) -> bool:
        return self.records.compact()

    def health(self) -> Dict[str, Any]:
        """
        Return store health information.

        Returns:
            Health status dict with size, dimension and provider details
        """
        initialized = self.is_initialized()
        schema_ok = initialized and health_check(self.records.db_path)
        return {
            'status': 'healthy' if schema_ok else 'unhealthy',
            'name': self.name,
            'dimension': self.dimension,
            'size': self.count() if initialized else 0,
            'schema_ok': schema_ok,
            'embedding_provider': self.embedder.__class__.__name__,
            'path': str(self.records.db_path) if self.records.db_path else None,
            'last_checked': datetime.now().isoformat()
        }

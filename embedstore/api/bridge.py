"""
Handle table for host layers.

Stores are addressed by name and embedding models by opaque integer handles,
so nothing beyond plain strings, numbers, lists and dicts crosses the
boundary. Handle 0 always means "no model".
"""

import threading
from typing import Dict, List, Optional

from ..core.config import DEFAULT_TOP_K, get_embedding_provider
from ..util.logging import logger, truncate_text
from ..vector.document_store import DocumentStore
from ..vector.embeddings import IEmbeddingProvider
from ..vector.record_store import SQLiteRecordStore


class StoreBridge:
    """Owns the store and model instances handed out to a host."""

    def __init__(self, store_dir: str = None):
        self.store_dir = store_dir
        self._stores: Dict[str, SQLiteRecordStore] = {}
        self._models: Dict[int, IEmbeddingProvider] = {}
        self._next_handle = 1
        # Guards the tables only; never held while calling into a store
        self._lock = threading.Lock()
        # Serializes store creation so a name never gets two open stores
        self._create_lock = threading.Lock()

    def _get_store(self, db_name: str) -> Optional[SQLiteRecordStore]:
        with self._lock:
            store = self._stores.get(db_name)
        if store is None:
            logger.error(f"Vector database not found: {db_name}")
        return store

    def _get_model(self, handle: int) -> Optional[IEmbeddingProvider]:
        with self._lock:
            model = self._models.get(handle)
        if model is None:
            logger.error(f"Embedding model not loaded: {handle}")
        return model

    def _document_store(self, handle: int, db_name: str) -> Optional[DocumentStore]:
        model = self._get_model(handle)
        store = self._get_store(db_name)
        if model is None or store is None:
            return None
        return DocumentStore(store, model)

    def has_database(self, db_name: str) -> bool:
        with self._lock:
            return db_name in self._stores

    def has_model(self, handle: int) -> bool:
        with self._lock:
            return handle in self._models

    def model_count(self) -> int:
        with self._lock:
            return len(self._models)

    def database_names(self) -> List[str]:
        with self._lock:
            return sorted(self._stores)

    # Stores

    def create_vector_database(self, db_name: str, embedding_dimension: int) -> bool:
        """Open or create a store. Returns whether it is initialized."""
        with self._create_lock:
            with self._lock:
                existing = self._stores.get(db_name)
            if existing is not None:
                if existing.dimension == embedding_dimension and existing.is_initialized():
                    return True
                existing.close()

            store = SQLiteRecordStore(db_name, embedding_dimension, store_dir=self.store_dir)
            with self._lock:
                self._stores[db_name] = store

        logger.log_bridge_operation(
            "create_database",
            {"db_name": db_name, "dimension": embedding_dimension},
            status="success" if store.is_initialized() else "failed"
        )
        return store.is_initialized()

    def is_database_initialized(self, db_name: str) -> bool:
        with self._lock:
            store = self._stores.get(db_name)
        return store is not None and store.is_initialized()

    def database_dimension(self, db_name: str) -> int:
        store = self._get_store(db_name)
        return store.dimension if store is not None else 0

    def close_database(self, db_name: str) -> bool:
        with self._lock:
            store = self._stores.pop(db_name, None)
        if store is None:
            return False
        store.close()
        logger.log_bridge_operation("close_database", {"db_name": db_name})
        return True

    # Embedding models

    def load_embedding_model(self, model_name: str = None, provider: str = None, dimension: int = None) -> int:
        """Load an embedding model and return its handle, or 0 on failure."""
        try:
            model = get_embedding_provider(provider, dimension=dimension, model_name=model_name)
            # Forces lazy models to load now so failures surface here
            model_dimension = model.get_dimension()
        except Exception as e:
            logger.log_bridge_operation(
                "load_model",
                {"provider": provider, "model_name": model_name, "error": str(e)},
                status="failed"
            )
            return 0

        with self._lock:
            handle = self._next_handle
            self._next_handle += 1
            self._models[handle] = model

        logger.log_bridge_operation(
            "load_model",
            {"handle": handle, "provider": model.__class__.__name__, "dimension": model_dimension}
        )
        return handle

    def embedding_dimension(self, handle: int) -> int:
        model = self._get_model(handle)
        return model.get_dimension() if model is not None else 0

    def unload_embedding_model(self, handle: int) -> bool:
        with self._lock:
            model = self._models.pop(handle, None)
        if model is None:
            return False
        logger.log_bridge_operation("unload_model", {"handle": handle})
        return True

    # Documents

    def add_to_knowledge_base(self, handle: int, content: str, document_id: str, db_name: str) -> bool:
        store = self._document_store(handle, db_name)
        if store is None:
            return False
        return store.add_document(document_id, content)

    def search_similar_documents(self, handle: int, query: str, db_name: str, top_k: int = DEFAULT_TOP_K) -> List[dict]:
        store = self._document_store(handle, db_name)
        if store is None:
            return []

        results = store.search(query, top_k)
        logger.debug(f"Search {truncate_text(query)!r} on {db_name} returned {len(results)} documents")
        return [result.to_dict() for result in results]

    def delete_document(self, db_name: str, document_id: str) -> bool:
        store = self._get_store(db_name)
        return store.delete(document_id) if store is not None else False

    def document_count(self, db_name: str) -> int:
        store = self._get_store(db_name)
        return store.count() if store is not None else 0

    def clear_database(self, db_name: str) -> bool:
        store = self._get_store(db_name)
        return store.clear_all() if store is not None else False

    def compact_database(self, db_name: str) -> bool:
        store = self._get_store(db_name)
        return store.compact() if store is not None else False

    def dispose(self) -> None:
        """Close every store and drop every model."""
        with self._lock:
            stores = list(self._stores.values())
            self._stores.clear()
            self._models.clear()

        for store in stores:
            store.close()
        logger.log_bridge_operation("dispose", {"stores_closed": len(stores)})

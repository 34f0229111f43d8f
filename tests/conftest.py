"""
Shared fixtures for document store tests.
"""

import pytest

from embedstore.vector.document_store import DocumentStore
from embedstore.vector.embeddings import CharacterEmbedding
from embedstore.vector.record_store import SQLiteRecordStore


@pytest.fixture
def store_dir(tmp_path):
    """Temporary directory for store files."""
    path = tmp_path / "stores"
    path.mkdir()
    return str(path)


@pytest.fixture
def record_store(store_dir):
    """A 4-dimensional record store."""
    store = SQLiteRecordStore("records", 4, store_dir=store_dir)
    yield store
    store.close()


@pytest.fixture
def embedder():
    return CharacterEmbedding(dimension=4)


@pytest.fixture
def document_store(store_dir, embedder):
    """A 4-dimensional document store using the character embedding."""
    store = DocumentStore.open("documents", embedder, store_dir=store_dir)
    yield store
    store.close()

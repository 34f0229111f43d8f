"""
Tests for the handle bridge used by host layers.
"""

import threading
import time
from unittest.mock import patch

import pytest

from embedstore.api.bridge import StoreBridge
from embedstore.vector.record_store import SQLiteRecordStore


@pytest.fixture
def bridge(store_dir):
    bridge = StoreBridge(store_dir=store_dir)
    yield bridge
    bridge.dispose()


@pytest.fixture
def model(bridge):
    return bridge.load_embedding_model(provider="char", dimension=4)


def test_create_database(bridge):
    assert bridge.create_vector_database("kb", 4)
    assert bridge.is_database_initialized("kb")
    assert bridge.database_dimension("kb") == 4
    assert bridge.database_names() == ["kb"]


def test_create_database_twice_reuses_store(bridge, model):
    bridge.create_vector_database("kb", 4)
    bridge.add_to_knowledge_base(model, "cat", "a", "kb")

    assert bridge.create_vector_database("kb", 4)
    assert bridge.document_count("kb") == 1


def test_concurrent_create_opens_one_store(bridge):
    """Racing creates for one name share a single open store."""
    created = []

    def slow_store(*args, **kwargs):
        time.sleep(0.05)
        store = SQLiteRecordStore(*args, **kwargs)
        created.append(store)
        return store

    results = []
    start = threading.Barrier(4)

    def create():
        start.wait()
        results.append(bridge.create_vector_database("kb", 4))

    with patch("embedstore.api.bridge.SQLiteRecordStore", side_effect=slow_store):
        threads = [threading.Thread(target=create) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    assert results == [True] * 4
    assert len(created) == 1
    assert bridge.database_names() == ["kb"]
    assert created[0].is_initialized()


def test_create_database_invalid(bridge):
    assert not bridge.create_vector_database("kb", 0)
    assert not bridge.is_database_initialized("kb")
    assert not bridge.is_database_initialized("never-created")


def test_model_handles(bridge):
    first = bridge.load_embedding_model(provider="char", dimension=4)
    second = bridge.load_embedding_model(provider="hash", dimension=8)

    assert first > 0 and second > 0 and first != second
    assert bridge.embedding_dimension(first) == 4
    assert bridge.embedding_dimension(second) == 8
    assert bridge.model_count() == 2

    assert bridge.unload_embedding_model(first)
    assert not bridge.unload_embedding_model(first)
    assert bridge.embedding_dimension(first) == 0


def test_load_unknown_provider_returns_zero(bridge):
    assert bridge.load_embedding_model(provider="word2vec") == 0
    assert bridge.model_count() == 0


def test_add_and_search(bridge, model):
    bridge.create_vector_database("kb", 4)
    for doc_id, text in [("a", "cat"), ("b", "dog"), ("c", "car")]:
        assert bridge.add_to_knowledge_base(model, text, doc_id, "kb")

    results = bridge.search_similar_documents(model, "feline", "kb", 2)

    assert [r["id"] for r in results] == ["b", "c"]
    assert set(results[0]) == {"id", "text", "score"}
    assert isinstance(results[0]["score"], float)


def test_unknown_model_or_database(bridge, model):
    bridge.create_vector_database("kb", 4)

    assert not bridge.add_to_knowledge_base(999, "cat", "a", "kb")
    assert not bridge.add_to_knowledge_base(model, "cat", "a", "missing")
    assert bridge.search_similar_documents(999, "cat", "kb", 1) == []
    assert bridge.search_similar_documents(model, "cat", "missing", 1) == []
    assert bridge.document_count("missing") == 0
    assert not bridge.delete_document("missing", "a")
    assert not bridge.clear_database("missing")
    assert not bridge.compact_database("missing")


def test_model_dimension_mismatch_rejected(bridge):
    wide = bridge.load_embedding_model(provider="char", dimension=8)
    bridge.create_vector_database("kb", 4)

    assert not bridge.add_to_knowledge_base(wide, "cat", "a", "kb")
    assert bridge.search_similar_documents(wide, "cat", "kb", 1) == []


def test_delete_clear_compact(bridge, model):
    bridge.create_vector_database("kb", 4)
    bridge.add_to_knowledge_base(model, "cat", "a", "kb")
    bridge.add_to_knowledge_base(model, "dog", "b", "kb")

    assert bridge.delete_document("kb", "a")
    assert bridge.document_count("kb") == 1
    assert bridge.compact_database("kb")
    assert bridge.clear_database("kb")
    assert bridge.document_count("kb") == 0


def test_close_database(bridge):
    bridge.create_vector_database("kb", 4)

    assert bridge.close_database("kb")
    assert not bridge.close_database("kb")
    assert not bridge.has_database("kb")


def test_dispose_closes_everything(store_dir):
    bridge = StoreBridge(store_dir=store_dir)
    bridge.create_vector_database("one", 4)
    bridge.create_vector_database("two", 4)
    bridge.load_embedding_model(provider="char", dimension=4)

    bridge.dispose()

    assert bridge.database_names() == []
    assert bridge.model_count() == 0

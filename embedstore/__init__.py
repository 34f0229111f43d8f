"""
embedstore - on-device embedding-indexed document store.
"""

from .core.config import VERSION as __version__
from .vector import (
    CharacterEmbedding,
    DeterministicHashEmbedding,
    DocumentRecord,
    DocumentStore,
    IEmbeddingProvider,
    SearchResult,
    SentenceTransformerEmbedding,
    SQLiteRecordStore,
)

__all__ = [
    'CharacterEmbedding',
    'DeterministicHashEmbedding',
    'DocumentRecord',
    'DocumentStore',
    'IEmbeddingProvider',
    'SearchResult',
    'SentenceTransformerEmbedding',
    'SQLiteRecordStore',
]

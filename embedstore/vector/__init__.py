"""
Embedding-indexed document storage: embedding providers, the SQLite record
store, cosine ranking and the document store that composes them.
"""

from .types import DocumentRecord, SearchResult
from .embeddings import (
    IEmbeddingProvider,
    CharacterEmbedding,
    DeterministicHashEmbedding,
    SentenceTransformerEmbedding,
)
from .serialization import serialize_vector, deserialize_vector
from .ranking import cosine_similarity, SimilarityRanker
from .record_store import SQLiteRecordStore
from .document_store import DocumentStore

__all__ = [
    'DocumentRecord',
    'SearchResult',
    'IEmbeddingProvider',
    'CharacterEmbedding',
    'DeterministicHashEmbedding',
    'SentenceTransformerEmbedding',
    'serialize_vector',
    'deserialize_vector',
    'cosine_similarity',
    'SimilarityRanker',
    'SQLiteRecordStore',
    'DocumentStore',
]

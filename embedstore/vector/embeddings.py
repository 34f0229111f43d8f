"""
Embedding providers. Any provider meeting the IEmbeddingProvider contract can
back a document store: deterministic output, truncation instead of rejection
for long inputs, and unit-length vectors whenever the norm is nonzero.
"""

from abc import ABC, abstractmethod
import hashlib
import threading
from typing import List, Sequence

import numpy as np
from sentence_transformers import SentenceTransformer

from ..core.config import MAX_INPUT_TOKENS
from ..util.logging import logger


def l2_normalize(vector: Sequence[float]) -> List[float]:
    """Scale a vector to unit length. Zero vectors are returned unchanged."""
    array = np.asarray(vector, dtype=np.float64)
    norm = np.linalg.norm(array)
    if norm == 0:
        return array.tolist()
    return (array / norm).tolist()


class IEmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    @abstractmethod
    def embed_text(self, text: str) -> List[float]:
        """Generate embedding vector for given text."""
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        pass


class CharacterEmbedding(IEmbeddingProvider):
    """Deterministic placeholder that folds UTF-8 bytes into the vector.

    Each byte of the (truncated) input is a token. Token ``i`` adds
    ``byte / 256`` to component ``i % dimension`` and the result is
    L2-normalized, so expected similarities can be worked out by hand.
    """

    def __init__(self, dimension: int = 384, max_tokens: int = MAX_INPUT_TOKENS):
        if dimension < 1:
            raise ValueError("dimension must be >= 1")
        self.dimension = dimension
        self.max_tokens = max_tokens

    def tokenize(self, text: str) -> List[int]:
        return list(text.encode("utf-8")[:self.max_tokens])

    def embed_text(self, text: str) -> List[float]:
        """Generate deterministic embedding vector from the byte stream."""
        vector = np.zeros(self.dimension, dtype=np.float64)
        for i, token in enumerate(self.tokenize(text)):
            vector[i % self.dimension] += token / 256.0

        return l2_normalize(vector)

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        return self.dimension


class DeterministicHashEmbedding(IEmbeddingProvider):
    """Deterministic hash-based embedding provider for testing purposes.

    This implementation uses a consistent hashing approach to generate
    reproducible embeddings from text, which is useful for testing
    without requiring external model dependencies. Unlike the character
    embedding, similar texts do not produce similar vectors.
    """

    def __init__(self, dimension: int = 384, max_tokens: int = MAX_INPUT_TOKENS):
        if dimension < 1:
            raise ValueError("dimension must be >= 1")
        self.dimension = dimension
        self.max_tokens = max_tokens

    def embed_text(self, text: str) -> List[float]:
        """Generate deterministic embedding vector using hash function."""
        data = text.encode("utf-8")[:self.max_tokens]

        vector = []
        block = 0
        while len(vector) < self.dimension:
            # Each block hashes the input with a counter prefix
            hex_dig = hashlib.md5(block.to_bytes(4, "big") + data).hexdigest()
            for i in range(0, len(hex_dig), 8):
                if len(vector) >= self.dimension:
                    break
                value = int(hex_dig[i:i + 8], 16)
                # Map to [-1, 1]
                vector.append((value / (2**32)) * 2 - 1)
            block += 1

        return l2_normalize(vector)

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        return self.dimension


class SentenceTransformerEmbedding(IEmbeddingProvider):
    """Sentence transformers embedding provider using pre-trained models.

    The model is loaded on first use. Inference runs under an internal lock
    that is independent of any store lock.
    """

    def __init__(self, model_name: str = "all-MiniLM-L6-v2", max_tokens: int = MAX_INPUT_TOKENS):
        self.model_name = model_name
        self.max_tokens = max_tokens
        self._model = None
        self._dimension = None
        self._lock = threading.Lock()

    @property
    def model(self):
        if self._model is None:
            logger.info(f"Loading embedding model {self.model_name}")
            model = SentenceTransformer(self.model_name)
            if model.max_seq_length is None or model.max_seq_length > self.max_tokens:
                model.max_seq_length = self.max_tokens
            self._model = model
        return self._model

    def embed_text(self, text: str) -> List[float]:
        """Generate embedding vector using sentence transformers."""
        with self._lock:
            embedding = self.model.encode(text, convert_to_numpy=True)
        return l2_normalize(embedding)

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        if self._dimension is None:
            with self._lock:
                dimension = self.model.get_sentence_embedding_dimension()
                if dimension is None:
                    # Get dimension by encoding a dummy string
                    dimension = len(self.model.encode("test", convert_to_numpy=True))
                self._dimension = int(dimension)
        return self._dimension

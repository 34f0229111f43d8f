"""
Cosine similarity scoring and brute-force top-K ranking.

Every search is a linear scan over the stored vectors. That is fine for
on-device corpora of hundreds to a few thousand documents and is the point
to extend with an approximate index for anything larger.
"""

from typing import Iterable, List, Sequence

import numpy as np

from ..core.errors import DimensionMismatchError
from .types import DocumentRecord, SearchResult


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """
    Compute cosine similarity between two vectors.

    Args:
        vec_a: First vector
        vec_b: Second vector

    Returns:
        Cosine similarity score between -1 and 1. Returns 0.0 when the
        vectors are empty, differ in length, or either has zero norm.
    """
    a = np.asarray(vec_a, dtype=np.float64).ravel()
    b = np.asarray(vec_b, dtype=np.float64).ravel()

    if a.size == 0 or a.size != b.size:
        return 0.0

    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0 or not np.isfinite(norm_a * norm_b):
        return 0.0

    score = float(np.dot(a, b) / (norm_a * norm_b))
    return max(-1.0, min(1.0, score))


class SimilarityRanker:
    """Scores records against a query vector and returns the best matches."""

    def __init__(self, dimension: int):
        self.dimension = dimension

    def check_query(self, query_vector: Sequence[float]) -> None:
        if len(query_vector) != self.dimension:
            raise DimensionMismatchError(self.dimension, len(query_vector))

    def rank(self, query_vector: Sequence[float], records: Iterable[DocumentRecord], top_k: int) -> List[SearchResult]:
        """Return the ``top_k`` records most similar to the query.

        Ties keep the order in which records were supplied.

        Raises:
            DimensionMismatchError: if the query length differs from the dimension
        """
        self.check_query(query_vector)

        if top_k <= 0:
            return []

        scored = [
            SearchResult(id=record.id, text=record.text, score=cosine_similarity(query_vector, record.vector))
            for record in records
        ]

        # sorted() is stable, so equal scores stay in scan order
        scored = sorted(scored, key=lambda result: result.score, reverse=True)
        return scored[:top_k]

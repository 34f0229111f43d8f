"""
Tests for cosine similarity and top-K ranking.
"""

import math

import pytest

from embedstore.core.errors import DimensionMismatchError
from embedstore.vector.ranking import cosine_similarity, SimilarityRanker
from embedstore.vector.types import DocumentRecord


def test_cosine_similarity_symmetric():
    a = [0.3, -1.2, 4.0, 0.5]
    b = [1.0, 2.0, -0.5, 3.0]

    assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))


def test_cosine_similarity_self():
    a = [0.3, -1.2, 4.0, 0.5]

    assert cosine_similarity(a, a) == pytest.approx(1.0)


def test_cosine_similarity_known_values():
    assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)
    assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(-1.0)
    assert cosine_similarity([1.0, 1.0], [1.0, 0.0]) == pytest.approx(1 / math.sqrt(2))


def test_cosine_similarity_degenerate_inputs():
    """Zero norms, empty vectors and mismatched lengths score 0.0."""
    assert cosine_similarity([0.0, 0.0], [1.0, 2.0]) == 0.0
    assert cosine_similarity([1.0, 2.0], [0.0, 0.0]) == 0.0
    assert cosine_similarity([], []) == 0.0
    assert cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0]) == 0.0


def _records(*vectors):
    return [DocumentRecord(id=f"doc{i}", text=f"text {i}", vector=list(v)) for i, v in enumerate(vectors)]


def test_rank_orders_by_descending_score():
    ranker = SimilarityRanker(2)
    records = _records([0.0, 1.0], [1.0, 0.0], [1.0, 1.0])

    results = ranker.rank([1.0, 0.0], records, top_k=3)

    assert [r.id for r in results] == ["doc1", "doc2", "doc0"]
    assert results[0].score == pytest.approx(1.0)
    assert results[0].text == "text 1"


def test_rank_limits_to_top_k():
    ranker = SimilarityRanker(2)
    records = _records([1.0, 0.0], [0.9, 0.1], [0.5, 0.5], [0.0, 1.0])

    assert len(ranker.rank([1.0, 0.0], records, top_k=2)) == 2
    assert len(ranker.rank([1.0, 0.0], records, top_k=10)) == 4


def test_rank_non_positive_k_is_empty():
    ranker = SimilarityRanker(2)
    records = _records([1.0, 0.0])

    assert ranker.rank([1.0, 0.0], records, top_k=0) == []
    assert ranker.rank([1.0, 0.0], records, top_k=-3) == []


def test_rank_ties_keep_scan_order():
    ranker = SimilarityRanker(2)
    records = _records([2.0, 0.0], [0.0, 1.0], [1.0, 0.0], [3.0, 0.0])

    results = ranker.rank([1.0, 0.0], records, top_k=4)

    assert [r.id for r in results] == ["doc0", "doc2", "doc3", "doc1"]


def test_rank_rejects_wrong_query_dimension():
    ranker = SimilarityRanker(3)

    with pytest.raises(DimensionMismatchError) as exc_info:
        ranker.rank([1.0, 0.0], _records([1.0, 0.0, 0.0]), top_k=1)

    assert exc_info.value.expected == 3
    assert exc_info.value.actual == 2


def test_rank_empty_records():
    assert SimilarityRanker(2).rank([1.0, 0.0], [], top_k=5) == []

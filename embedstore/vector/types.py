"""
Record and result types shared by the store, ranker and façade.
"""

from dataclasses import dataclass, asdict
from typing import List


@dataclass
class DocumentRecord:
    """Represents a stored document with its embedding."""

    id: str
    """Unique identifier for the document within a store"""

    text: str
    """The document content"""

    vector: List[float]
    """The embedding of the content"""


@dataclass
class SearchResult:
    """Represents a search result from a document store."""

    id: str
    """Identifier for the matching document"""

    text: str
    """Content of the matching document"""

    score: float
    """Cosine similarity of the match (-1 to 1)"""

    def to_dict(self) -> dict:
        return asdict(self)

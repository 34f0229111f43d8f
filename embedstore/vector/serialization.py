"""
On-disk text format for embeddings: fixed six-digit decimals joined by commas.
"""

import math
from typing import List, Sequence

from ..core.errors import SerializationError

PRECISION = 6
SEPARATOR = ","


def serialize_vector(vector: Sequence[float]) -> str:
    """Serialize a vector as ``v0,v1,...`` with six fractional digits."""
    return SEPARATOR.join(f"{float(value):.{PRECISION}f}" for value in vector)


def deserialize_vector(data: str) -> List[float]:
    """Parse a serialized vector.

    Raises:
        SerializationError: if any token is not a finite decimal number
    """
    if data is None:
        raise SerializationError("embedding is NULL")
    if not data.strip():
        return []

    vector = []
    for position, token in enumerate(data.split(SEPARATOR)):
        try:
            value = float(token)
        except ValueError:
            raise SerializationError(f"Error parsing embedding value {token!r} at position {position}")
        if not math.isfinite(value):
            raise SerializationError(f"Non-finite embedding value {token!r} at position {position}")
        vector.append(value)

    return vector

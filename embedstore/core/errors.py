"""
Exception hierarchy for the document store.

These are raised inside the store components and converted to plain
success/failure results at each component's public boundary.
"""


class StoreError(Exception):
    """Base exception for document store failures."""
    pass


class StoreNotInitializedError(StoreError):
    """Backing file could not be opened or its schema could not be created."""
    pass


class DimensionMismatchError(StoreError):
    """A vector's length does not equal the store's embedding dimension."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid embedding dimension: expected {expected}, got {actual}")


class InvalidDocumentError(StoreError):
    """A document id or text is empty."""
    pass


class SerializationError(StoreError):
    """A stored embedding could not be parsed back into a vector."""
    pass


class StoreIOError(StoreError):
    """The storage engine failed to execute a statement."""
    pass

"""
Store configuration. Values come from the environment (and a local .env file).
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Storage location
STORE_DIR = os.getenv("STORE_DIR", "./data/stores")
STORE_EXTENSION = os.getenv("STORE_EXTENSION", ".db")

# Embedding configuration
EMBED_PROVIDER = os.getenv("EMBED_PROVIDER", "char")  # char|hash|sentence-transformers
EMBED_MODEL_NAME = os.getenv("EMBED_MODEL_NAME", "all-MiniLM-L6-v2")
EMBED_DIM = int(os.getenv("EMBED_DIM", "384"))
MAX_INPUT_TOKENS = int(os.getenv("MAX_INPUT_TOKENS", "512"))

# Search configuration
DEFAULT_TOP_K = int(os.getenv("DEFAULT_TOP_K", "5"))

VALID_EMBED_PROVIDERS = ["char", "hash", "sentence-transformers"]

# Version string
VERSION = "0.3.0"


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def get_store_dir() -> str:
    """Get the directory that holds store files."""
    return os.getenv("STORE_DIR", STORE_DIR)


def ensure_store_directory(store_dir: str = None) -> Path:
    """Ensure the store directory exists."""
    path = Path(store_dir or get_store_dir())
    path.mkdir(parents=True, exist_ok=True)
    return path


def resolve_store_path(name: str, store_dir: str = None) -> Path:
    """Build the database file path for a named store."""
    if not name or not name.strip():
        raise ValueError("store name cannot be empty")
    if "/" in name or "\\" in name or name in (".", ".."):
        raise ValueError(f"invalid store name: {name!r}")

    return Path(store_dir or get_store_dir()) / f"{name}{STORE_EXTENSION}"


def get_embedding_provider(name: str = None, dimension: int = None, model_name: str = None):
    """Get configured embedding provider implementation."""
    from ..vector.embeddings import (
        CharacterEmbedding,
        DeterministicHashEmbedding,
        SentenceTransformerEmbedding,
    )

    provider = (name or os.getenv("EMBED_PROVIDER", EMBED_PROVIDER)).lower()
    dim = dimension or int(os.getenv("EMBED_DIM", str(EMBED_DIM)))

    if provider == "char":
        return CharacterEmbedding(dimension=dim)
    elif provider == "hash":
        return DeterministicHashEmbedding(dimension=dim)
    elif provider == "sentence-transformers":
        return SentenceTransformerEmbedding(model_name or os.getenv("EMBED_MODEL_NAME", EMBED_MODEL_NAME))
    else:
        raise ValueError(f"Unknown embedding provider: {provider}")


def validate_config():
    """Validate store configuration and return any issues."""
    issues = []

    provider = os.getenv("EMBED_PROVIDER", EMBED_PROVIDER).lower()
    if provider not in VALID_EMBED_PROVIDERS:
        issues.append(f"Invalid EMBED_PROVIDER: {provider}")

    if EMBED_DIM < 1:
        issues.append("EMBED_DIM must be >= 1")

    if MAX_INPUT_TOKENS < 1:
        issues.append("MAX_INPUT_TOKENS must be >= 1")

    if DEFAULT_TOP_K < 1:
        issues.append("DEFAULT_TOP_K must be >= 1")

    return issues

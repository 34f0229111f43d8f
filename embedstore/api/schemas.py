"""
Request and response models for the HTTP host surface.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from ..core.config import DEFAULT_TOP_K, VALID_EMBED_PROVIDERS


class HealthResponse(BaseModel):
    status: str
    version: str
    databases: List[str]
    models_loaded: int


class CreateDatabaseRequest(BaseModel):
    name: str
    embedding_dimension: int = Field(gt=0)

    @field_validator('name')
    @classmethod
    def name_must_be_valid(cls, v):
        if not v.strip():
            raise ValueError('name cannot be empty')
        if '/' in v or '\\' in v:
            raise ValueError('name cannot contain path separators')
        return v


class DatabaseStatusResponse(BaseModel):
    name: str
    initialized: bool
    embedding_dimension: int
    document_count: int


class OperationResponse(BaseModel):
    success: bool


class LoadModelRequest(BaseModel):
    provider: Optional[str] = None
    model_name: Optional[str] = None
    dimension: Optional[int] = Field(default=None, gt=0)

    @field_validator('provider')
    @classmethod
    def provider_must_be_valid(cls, v):
        if v is not None and v not in VALID_EMBED_PROVIDERS:
            raise ValueError(f'provider must be one of: {VALID_EMBED_PROVIDERS}')
        return v


class ModelResponse(BaseModel):
    handle: int
    embedding_dimension: int


class AddDocumentRequest(BaseModel):
    model_handle: int
    document_id: str
    content: str

    @field_validator('document_id')
    @classmethod
    def document_id_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('document_id cannot be empty')
        return v

    @field_validator('content')
    @classmethod
    def content_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('content cannot be empty')
        return v


class SearchRequest(BaseModel):
    model_handle: int
    query: str
    top_k: int = DEFAULT_TOP_K


class DocumentMatch(BaseModel):
    id: str
    text: str
    score: float


class SearchResponse(BaseModel):
    results: List[DocumentMatch]

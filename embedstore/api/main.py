"""
HTTP host surface over the store bridge.
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException

from ..core.config import VERSION, debug_enabled
from .bridge import StoreBridge
from .schemas import (
    AddDocumentRequest,
    CreateDatabaseRequest,
    DatabaseStatusResponse,
    DocumentMatch,
    HealthResponse,
    LoadModelRequest,
    ModelResponse,
    OperationResponse,
    SearchRequest,
    SearchResponse,
)

_bridge = StoreBridge()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    _bridge.dispose()


# Initialize the FastAPI application
app = FastAPI(
    lifespan=lifespan,
    title="Embedstore API",
    version=VERSION,
    description="On-device embedding-indexed document store",
    docs_url="/docs" if debug_enabled() else None,
    redoc_url="/redoc" if debug_enabled() else None
)


def get_bridge() -> StoreBridge:
    return _bridge


def _require_database(bridge: StoreBridge, name: str) -> None:
    if not bridge.has_database(name):
        raise HTTPException(status_code=404, detail=f"Database not found: {name}")


def _require_model(bridge: StoreBridge, handle: int) -> None:
    if not bridge.has_model(handle):
        raise HTTPException(status_code=404, detail=f"Embedding model not loaded: {handle}")


def _status(bridge: StoreBridge, name: str) -> DatabaseStatusResponse:
    return DatabaseStatusResponse(
        name=name,
        initialized=bridge.is_database_initialized(name),
        embedding_dimension=bridge.database_dimension(name),
        document_count=bridge.document_count(name)
    )


@app.get("/health", response_model=HealthResponse)
def health_check_endpoint(bridge: StoreBridge = Depends(get_bridge)):
    """Check system health."""
    names = bridge.database_names()
    healthy = all(bridge.is_database_initialized(name) for name in names)
    return HealthResponse(
        status="healthy" if healthy else "degraded",
        version=VERSION,
        databases=names,
        models_loaded=bridge.model_count()
    )


@app.post("/databases", response_model=DatabaseStatusResponse)
def create_database(request: CreateDatabaseRequest, bridge: StoreBridge = Depends(get_bridge)):
    """Open or create a vector database."""
    if not bridge.create_vector_database(request.name, request.embedding_dimension):
        raise HTTPException(status_code=500, detail=f"Failed to initialize database: {request.name}")
    return _status(bridge, request.name)


@app.get("/databases/{name}", response_model=DatabaseStatusResponse)
def get_database(name: str, bridge: StoreBridge = Depends(get_bridge)):
    _require_database(bridge, name)
    return _status(bridge, name)


@app.delete("/databases/{name}", response_model=OperationResponse)
def close_database(name: str, bridge: StoreBridge = Depends(get_bridge)):
    _require_database(bridge, name)
    return OperationResponse(success=bridge.close_database(name))


@app.post("/databases/{name}/documents", response_model=OperationResponse)
def add_document(name: str, request: AddDocumentRequest, bridge: StoreBridge = Depends(get_bridge)):
    """Embed a document and add it to the database."""
    _require_database(bridge, name)
    _require_model(bridge, request.model_handle)

    if not bridge.add_to_knowledge_base(request.model_handle, request.content, request.document_id, name):
        raise HTTPException(status_code=400, detail=f"Document rejected: {request.document_id}")
    return OperationResponse(success=True)


@app.delete("/databases/{name}/documents/{doc_id}", response_model=OperationResponse)
def delete_document(name: str, doc_id: str, bridge: StoreBridge = Depends(get_bridge)):
    _require_database(bridge, name)
    return OperationResponse(success=bridge.delete_document(name, doc_id))


@app.delete("/databases/{name}/documents", response_model=OperationResponse)
def clear_database(name: str, bridge: StoreBridge = Depends(get_bridge)):
    _require_database(bridge, name)
    return OperationResponse(success=bridge.clear_database(name))


@app.post("/databases/{name}/search", response_model=SearchResponse)
def search_documents(name: str, request: SearchRequest, bridge: StoreBridge = Depends(get_bridge)):
    """Search the database using cosine similarity."""
    _require_database(bridge, name)
    _require_model(bridge, request.model_handle)

    results = bridge.search_similar_documents(request.model_handle, request.query, name, request.top_k)
    return SearchResponse(results=[DocumentMatch(**result) for result in results])


@app.post("/databases/{name}/compact", response_model=OperationResponse)
def compact_database(name: str, bridge: StoreBridge = Depends(get_bridge)):
    _require_database(bridge, name)
    return OperationResponse(success=bridge.compact_database(name))


@app.post("/models", response_model=ModelResponse)
def load_model(request: LoadModelRequest, bridge: StoreBridge = Depends(get_bridge)):
    """Load an embedding model and return its handle."""
    handle = bridge.load_embedding_model(request.model_name, request.provider, request.dimension)
    if handle == 0:
        raise HTTPException(status_code=500, detail="Failed to load embedding model")
    return ModelResponse(handle=handle, embedding_dimension=bridge.embedding_dimension(handle))


@app.get("/models/{handle}", response_model=ModelResponse)
def get_model(handle: int, bridge: StoreBridge = Depends(get_bridge)):
    _require_model(bridge, handle)
    return ModelResponse(handle=handle, embedding_dimension=bridge.embedding_dimension(handle))


@app.delete("/models/{handle}", response_model=OperationResponse)
def unload_model(handle: int, bridge: StoreBridge = Depends(get_bridge)):
    _require_model(bridge, handle)
    return OperationResponse(success=bridge.unload_embedding_model(handle))



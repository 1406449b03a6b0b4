"""
JSON Storage HTTP API

HTTP host for the storage node.

Endpoints:
    POST /api/v1/execute    - Run one operation over a batch of items
    GET  /api/v1/health     - Health check
    GET  /api/v1/tools      - List available tools

Usage:
    uvicorn json_storage.api:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional, Dict, Any, List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .core import Config, Operation, StoreError, StoreIOError
from .tools import ToolRegistry, create_registry
from .tools.json_storage import VERSION

logger = logging.getLogger(__name__)


# =============================================================================
# Request/Response Models
# =============================================================================

class ItemModel(BaseModel):
    """One batch item."""
    key: str = Field(..., description="Store key")
    value: Optional[str] = Field(None, description="Value to save (save only)")


class ExecuteRequest(BaseModel):
    """Request to run one operation over a batch."""
    operation: Operation = Field(Operation.SAVE, description="save, read or delete")
    file_path: Optional[str] = Field(None, description="JSON store path (default from config)")
    items: List[ItemModel] = Field(default_factory=list)
    continue_on_fail: Optional[bool] = Field(None, description="Return an error record instead of failing")


class ExecuteResponse(BaseModel):
    """One record per input item, in order."""
    items: List[Dict[str, Any]]


class ToolInfo(BaseModel):
    """Information about a tool."""
    name: str
    description: str
    parameters: List[Dict[str, Any]] = []


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str = VERSION
    default_file_path: Optional[str] = None


# =============================================================================
# Application Setup
# =============================================================================

# Global instances (set on startup)
_config: Optional[Config] = None
_registry: Optional[ToolRegistry] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - setup and teardown."""
    global _config, _registry

    _config = Config.from_env()
    _registry = create_registry(_config)
    logger.info(f"JSON Storage API started (default store: {_config.file_path})")

    yield

    logger.info("JSON Storage API stopped")


app = FastAPI(
    title="JSON Storage",
    description="Key-value node backed by a flat JSON file",
    version=VERSION,
    lifespan=lifespan,
)


# =============================================================================
# Endpoints
# =============================================================================

@app.get("/health")
@app.get("/api/v1/health")
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        default_file_path=_config.file_path if _config else None,
    )


@app.get("/api/v1/tools")
async def list_tools() -> List[ToolInfo]:
    """List available tools."""
    if not _registry:
        raise HTTPException(status_code=503, detail="Registry not initialized")

    return [
        ToolInfo(
            name=d.name,
            description=d.description,
            parameters=d.parameters,
        )
        for d in _registry.get_all_definitions().values()
    ]


@app.post("/api/v1/execute")
def execute(request: ExecuteRequest) -> ExecuteResponse:
    """Run the storage node over the request batch."""
    if not _registry:
        raise HTTPException(status_code=503, detail="Registry not initialized")

    tool = _registry.get("json_storage")
    try:
        result = tool.execute(
            operation=request.operation,
            file_path=request.file_path,
            items=[item.model_dump() for item in request.items],
            continue_on_fail=request.continue_on_fail,
        )
    except StoreIOError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return ExecuteResponse(items=result["items"])


# =============================================================================
# Main
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    config = Config.from_env()
    uvicorn.run(app, host=config.api_host, port=config.api_port)

import logging
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, Field

from searxng_node.config import configure_logging
from searxng_node.context import LocalExecutionContext
from searxng_node.models import SearxngCredentials
from searxng_node.node import SearxngNode

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)

# FastAPI Request/Response Models
class ExecuteRequest(BaseModel):
    items: List[Any] = Field(..., description="Input records, one search per record")
    parameters: Dict[str, Any] = Field(default_factory=dict, description="Node parameter values")
    credentials: Optional[SearxngCredentials] = Field(default=None, description="Overrides the configured instance")
    continue_on_fail: bool = False

class ExecuteResponse(BaseModel):
    data: List[Dict[str, Any]]

class HealthResponse(BaseModel):
    status: str

node = SearxngNode()

app = FastAPI(
    title="Searxng Node Host",
    description="Runs the Searxng search node over HTTP",
    version="1.0.0"
)

@app.post("/execute", response_model=ExecuteResponse)
async def execute_node(request: ExecuteRequest) -> ExecuteResponse:
    """Execute the node over a batch of input records"""
    context = LocalExecutionContext(
        items=request.items,
        parameters=request.parameters,
        credentials=request.credentials,
        continue_on_fail=request.continue_on_fail
    )

    try:
        data = await node.execute(context)
    except Exception as e:
        logger.error(f"Node execution failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Node execution failed: {str(e)}"
        )

    return ExecuteResponse(data=data)

@app.get("/description")
async def describe_node() -> Dict[str, Any]:
    """Declarative field metadata for rendering the node"""
    return node.description

@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy")

@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "message": "Searxng Node Host",
        "version": "1.0.0",
        "endpoints": {
            "execute": "POST /execute",
            "description": "GET /description",
            "health": "GET /health"
        }
    }

if __name__ == "__main__":
    import os
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(
        "host.fastapi_app:app",
        host="0.0.0.0",
        port=port,
        reload=False,
        log_level="info"
    )

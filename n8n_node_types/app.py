"""
FastAPI service exposing node type normalization to the workflow validator
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import logging
from typing import Dict, Any
from datetime import datetime

from . import __version__
from .config import CORS_ORIGINS, HOST, PORT, configure_logging
from .models.schemas import (
    HealthStatus,
    NodeTypeBatchRequest,
    NodeTypeBatchResponse,
    NodeTypeClassification,
    NodeTypeNormalizationResult,
    NodeTypeRequest,
)
from .services.node_type_normalizer import NodeTypeNormalizer
from .services import node_type_utils

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="n8n Node Types API",
    description="Normalize and classify n8n node type identifiers",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
async def root():
    return {"message": "n8n Node Types API", "status": "running"}

@app.get("/api/health", response_model=HealthStatus)
async def health_check():
    """Health check endpoint"""
    return HealthStatus(status="healthy", timestamp=datetime.now(), version=__version__)

@app.post("/api/node-types/normalize", response_model=NodeTypeNormalizationResult)
async def normalize_node_type(request: NodeTypeRequest):
    """Normalize a single node type and report what changed"""
    try:
        return NodeTypeNormalizer.normalize_with_details(request.node_type)
    except Exception as e:
        logger.exception("Normalization failed for %r", request.node_type)
        raise HTTPException(status_code=500, detail=f"Normalization failed: {str(e)}")

@app.post("/api/node-types/normalize-batch", response_model=NodeTypeBatchResponse)
async def normalize_node_types(request: NodeTypeBatchRequest):
    """Normalize many node types at once"""
    try:
        return NodeTypeBatchResponse(results=NodeTypeNormalizer.normalize_batch(request.node_types))
    except Exception as e:
        logger.exception("Batch normalization failed")
        raise HTTPException(status_code=500, detail=f"Batch normalization failed: {str(e)}")

@app.post("/api/node-types/classify", response_model=NodeTypeClassification)
async def classify_node_type(request: NodeTypeRequest):
    """Package, format and trigger details for a node type"""
    node_type = request.node_type
    try:
        is_trigger = node_type_utils.is_trigger_node(node_type)
        return NodeTypeClassification(
            original=node_type,
            normalized=node_type_utils.normalize_node_type(node_type),
            node_name=node_type_utils.extract_node_name(node_type),
            package_name=node_type_utils.get_node_package(node_type),
            is_base=node_type_utils.is_base_node(node_type),
            is_langchain=node_type_utils.is_lang_chain_node(node_type),
            is_valid_format=node_type_utils.is_valid_node_type_format(node_type),
            is_trigger=is_trigger,
            is_activatable_trigger=node_type_utils.is_activatable_trigger(node_type),
            trigger_description=node_type_utils.get_trigger_type_description(node_type) if is_trigger else None,
            variations=node_type_utils.get_node_type_variations(node_type)
        )
    except Exception as e:
        logger.exception("Classification failed for %r", node_type)
        raise HTTPException(status_code=500, detail=f"Classification failed: {str(e)}")

@app.post("/api/workflows/normalize")
async def normalize_workflow(workflow: Dict[str, Any]):
    """Normalize every node type in a workflow, leaving other fields untouched"""
    try:
        return NodeTypeNormalizer.normalize_workflow_node_types(workflow)
    except Exception as e:
        logger.exception("Workflow normalization failed")
        raise HTTPException(status_code=500, detail=f"Workflow normalization failed: {str(e)}")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "n8n_node_types.app:app",
        host=HOST,
        port=PORT,
        reload=True,
        log_level="info"
    )

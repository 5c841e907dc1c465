"""
Pydantic models for node-type normalization results, workflows and API schemas
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any
from datetime import datetime
from enum import Enum

class NodePackage(str, Enum):
    BASE = "base"
    LANGCHAIN = "langchain"
    COMMUNITY = "community"
    UNKNOWN = "unknown"

class NodeTypeNormalizationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    original: Any = Field(..., description="Node type as given by the caller")
    normalized: Any = Field(..., description="Node type in full form")
    was_normalized: bool = Field(..., description="True when the full form differs from the input")
    package: NodePackage = Field(..., description="Package family of the normalized type")

class WorkflowNode(BaseModel):
    """Minimal node shape; every other field is kept as an extra"""
    model_config = ConfigDict(extra="allow")

    type: Optional[str] = Field(default=None, description="Node type in any format")

class Workflow(BaseModel):
    """Minimal workflow shape; connections, settings etc. pass through as extras"""
    model_config = ConfigDict(extra="allow")

    nodes: List[WorkflowNode] = Field(default_factory=list)

class NodeTypeRequest(BaseModel):
    node_type: str = Field(..., description="Node type in any format")

class NodeTypeBatchRequest(BaseModel):
    node_types: List[str] = Field(..., description="Node types in any format")

class NodeTypeBatchResponse(BaseModel):
    results: Dict[str, str] = Field(..., description="Original -> normalized node types")

class NodeTypeClassification(BaseModel):
    original: str
    normalized: str
    node_name: str
    package_name: Optional[str] = None
    is_base: bool
    is_langchain: bool
    is_valid_format: bool
    is_trigger: bool
    is_activatable_trigger: bool
    trigger_description: Optional[str] = Field(default=None, description="Only set for trigger nodes")
    variations: List[str] = Field(default=[], description="Spellings to try for lookups")

class HealthStatus(BaseModel):
    status: str = Field(..., description="Overall service status")
    timestamp: datetime
    version: str

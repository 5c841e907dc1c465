"""
Node type normalization and classification for n8n workflows
"""

from .models.schemas import NodePackage, NodeTypeNormalizationResult, Workflow, WorkflowNode
from .services.node_type_normalizer import NodeTypeNormalizer
from .services.node_type_utils import (
    denormalize_node_type,
    extract_node_name,
    get_node_package,
    get_node_type_variations,
    get_trigger_type_description,
    is_activatable_trigger,
    is_base_node,
    is_lang_chain_node,
    is_trigger_node,
    is_valid_node_type_format,
    normalize_node_type,
)

__version__ = "1.0.0"

__all__ = [
    "NodePackage",
    "NodeTypeNormalizationResult",
    "NodeTypeNormalizer",
    "Workflow",
    "WorkflowNode",
    "denormalize_node_type",
    "extract_node_name",
    "get_node_package",
    "get_node_type_variations",
    "get_trigger_type_description",
    "is_activatable_trigger",
    "is_base_node",
    "is_lang_chain_node",
    "is_trigger_node",
    "is_valid_node_type_format",
    "normalize_node_type",
]

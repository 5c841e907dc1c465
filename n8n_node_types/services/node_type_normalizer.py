"""
Universal Node Type Normalizer

Converts node types to FULL form, the canonical spelling used by both the
node database and the n8n workflow API:

- n8n-nodes-base.webhook
- @n8n/n8n-nodes-langchain.agent

normalize_to_full_form() accepts any spelling and returns the full form:

    'nodes-base.webhook'     -> 'n8n-nodes-base.webhook'
    'n8n-nodes-base.webhook' -> 'n8n-nodes-base.webhook' (unchanged)

Every method is total: bad input is handed back, never raised on.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Dict

from ..models.schemas import NodePackage, NodeTypeNormalizationResult, Workflow, WorkflowNode

logger = logging.getLogger(__name__)

BASE_FULL_PREFIX = "n8n-nodes-base."
BASE_SHORT_PREFIX = "nodes-base."
LANGCHAIN_FULL_PREFIX = "@n8n/n8n-nodes-langchain."
LANGCHAIN_UNSCOPED_PREFIX = "n8n-nodes-langchain."
LANGCHAIN_SHORT_PREFIX = "nodes-langchain."

FULL_FORM_PREFIXES = (BASE_FULL_PREFIX, LANGCHAIN_FULL_PREFIX, LANGCHAIN_UNSCOPED_PREFIX)
SHORT_FORM_PREFIXES = (BASE_SHORT_PREFIX, LANGCHAIN_SHORT_PREFIX)

# Checked in order, first match wins
SHORT_TO_FULL = (
    (BASE_SHORT_PREFIX, BASE_FULL_PREFIX),
    (LANGCHAIN_SHORT_PREFIX, LANGCHAIN_FULL_PREFIX),
)


def _is_node_type(value: Any) -> bool:
    return bool(value) and isinstance(value, str)


class NodeTypeNormalizer:
    """Stateless conversions between short and full node-type spellings"""

    @staticmethod
    def normalize_to_full_form(type_: Any) -> Any:
        """
        Normalize a node type to FULL form (n8n-nodes-base.*).

        Args:
            type_: Node type in any format

        Returns:
            The full form, or the input unchanged for community, unknown,
            empty or non-string values

        Example:
            normalize_to_full_form('nodes-langchain.agent')
            # -> '@n8n/n8n-nodes-langchain.agent'
        """
        if not _is_node_type(type_):
            return type_

        if type_.startswith(FULL_FORM_PREFIXES):
            return type_

        for short_prefix, full_prefix in SHORT_TO_FULL:
            if type_.startswith(short_prefix):
                return full_prefix + type_[len(short_prefix):]

        # Community nodes or unknown
        return type_

    @classmethod
    def normalize_with_details(cls, type_: Any) -> NodeTypeNormalizationResult:
        """
        Normalize and report whether anything changed and which package the
        node belongs to.

        Example:
            normalize_with_details('nodes-base.webhook')
            # -> original='nodes-base.webhook',
            #    normalized='n8n-nodes-base.webhook',
            #    was_normalized=True, package=NodePackage.BASE
        """
        normalized = cls.normalize_to_full_form(type_)
        return NodeTypeNormalizationResult(
            original=type_,
            normalized=normalized,
            was_normalized=type_ != normalized,
            package=cls.detect_package(normalized),
        )

    @staticmethod
    def detect_package(type_: Any) -> NodePackage:
        """Detect the package family of a node type in either form"""
        if not _is_node_type(type_):
            return NodePackage.UNKNOWN
        if type_.startswith((BASE_SHORT_PREFIX, BASE_FULL_PREFIX)):
            return NodePackage.BASE
        if type_.startswith((LANGCHAIN_SHORT_PREFIX, LANGCHAIN_FULL_PREFIX, LANGCHAIN_UNSCOPED_PREFIX)):
            return NodePackage.LANGCHAIN
        if "." in type_:
            return NodePackage.COMMUNITY
        return NodePackage.UNKNOWN

    @classmethod
    def normalize_batch(cls, types: Iterable[Any]) -> Dict[Any, Any]:
        """
        Batch normalize node types.

        Returns a dict of original -> normalized in first-seen order.
        Duplicates collapse onto one key.
        """
        result: Dict[Any, Any] = {}
        if isinstance(types, (str, bytes, Mapping)) or not isinstance(types, Iterable):
            return result

        for type_ in types:
            try:
                result[type_] = cls.normalize_to_full_form(type_)
            except TypeError:
                # unhashable item
                continue
        return result

    @classmethod
    def normalize_workflow_node_types(cls, workflow: Any) -> Any:
        """
        Normalize every node type in a workflow.

        Returns a shallow copy with a new nodes list; each node is a shallow
        copy with its ``type`` normalized and all other fields untouched.
        Accepts a plain dict or a ``Workflow`` model and returns the same
        kind of value. Anything without a list of nodes is returned as is.

        Example:
            workflow = {
                "nodes": [
                    {"type": "nodes-base.webhook", "id": "1", "name": "Webhook"},
                    {"type": "nodes-base.set", "id": "2", "name": "Set"},
                ],
                "connections": {},
            }
            normalized = NodeTypeNormalizer.normalize_workflow_node_types(workflow)
            # normalized["nodes"][0]["type"] -> 'n8n-nodes-base.webhook'
        """
        if isinstance(workflow, Workflow):
            nodes = [cls._normalize_node(node) for node in workflow.nodes]
            return workflow.model_copy(update={"nodes": nodes})

        if not isinstance(workflow, Mapping):
            return workflow

        nodes = workflow.get("nodes")
        if not isinstance(nodes, (list, tuple)):
            return workflow

        normalized_nodes = [cls._normalize_node(node) for node in nodes]
        logger.debug(
            "Normalized %d node types in workflow %r",
            len(normalized_nodes),
            workflow.get("name", workflow.get("id")),
        )
        return {**workflow, "nodes": normalized_nodes}

    @classmethod
    def _normalize_node(cls, node: Any) -> Any:
        if isinstance(node, WorkflowNode):
            return node.model_copy(update={"type": cls.normalize_to_full_form(node.type)})
        if isinstance(node, Mapping) and "type" in node:
            return {**node, "type": cls.normalize_to_full_form(node["type"])}
        if isinstance(node, Mapping):
            return dict(node)
        return node

    @staticmethod
    def is_full_form(type_: Any) -> bool:
        """True for n8n-nodes-base.*, @n8n/n8n-nodes-langchain.* and n8n-nodes-langchain.*"""
        if not _is_node_type(type_):
            return False
        return type_.startswith(FULL_FORM_PREFIXES)

    @staticmethod
    def is_short_form(type_: Any) -> bool:
        """True for the legacy nodes-base.* and nodes-langchain.* spellings"""
        if not _is_node_type(type_):
            return False
        return type_.startswith(SHORT_FORM_PREFIXES)

    @classmethod
    def to_workflow_format(cls, type_: Any) -> Any:
        """
        Convert a database-format node type to the workflow format.

        Same result as normalize_to_full_form(); kept for callers that think
        in terms of database -> workflow conversion.
        """
        return cls.normalize_to_full_form(type_)

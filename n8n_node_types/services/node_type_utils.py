"""
Node type helpers built on top of NodeTypeNormalizer

Every function works on the full form and never raises; empty or
non-string input gets a falsy answer (False, '', None, []) or the
'Unknown trigger type' label.
"""

from typing import Any, Callable, List, Optional, Tuple

from .node_type_normalizer import (
    BASE_FULL_PREFIX,
    BASE_SHORT_PREFIX,
    LANGCHAIN_FULL_PREFIX,
    LANGCHAIN_SHORT_PREFIX,
    LANGCHAIN_UNSCOPED_PREFIX,
    NodeTypeNormalizer,
)

UNKNOWN_TRIGGER_TYPE = "Unknown trigger type"

SPECIFIC_TRIGGERS = frozenset({
    "n8n-nodes-base.start",
    "n8n-nodes-base.manualTrigger",
    "n8n-nodes-base.formTrigger",
})

# (predicate(normalized, lowered), label), scanned top to bottom
TRIGGER_DESCRIPTIONS: List[Tuple[Callable[[str, str], bool], str]] = [
    (lambda normalized, lower: "executeworkflow" in lower,
     "Execute Workflow Trigger (invoked by other workflows)"),
    (lambda normalized, lower: "webhook" in lower,
     "Webhook Trigger (HTTP requests)"),
    (lambda normalized, lower: "schedule" in lower or "cron" in lower,
     "Schedule Trigger (time-based)"),
    (lambda normalized, lower: "manual" in lower or normalized == "n8n-nodes-base.start",
     "Manual Trigger (manual execution)"),
    (lambda normalized, lower: any(word in lower for word in ("email", "imap", "gmail")),
     "Email Trigger (polling)"),
    (lambda normalized, lower: "form" in lower,
     "Form Trigger (form submissions)"),
    (lambda normalized, lower: "trigger" in lower,
     "Trigger (event-based)"),
]


def _is_node_type(value: Any) -> bool:
    return bool(value) and isinstance(value, str)


def normalize_node_type(type_: Any) -> Any:
    """Normalize a node type to full form"""
    return NodeTypeNormalizer.normalize_to_full_form(type_)


def denormalize_node_type(type_: Any, package_type: str) -> Any:
    """
    Convert a full-form node type back to its short database spelling.

    'base' strips the n8n- prefix of base nodes; any other package type
    rewrites the scoped langchain prefix. Types that do not carry the
    expected prefix come back unchanged.
    """
    if not _is_node_type(type_):
        return type_

    if package_type == "base":
        full_prefix, short_prefix = BASE_FULL_PREFIX, BASE_SHORT_PREFIX
    else:
        full_prefix, short_prefix = LANGCHAIN_FULL_PREFIX, LANGCHAIN_SHORT_PREFIX

    if type_.startswith(full_prefix):
        return short_prefix + type_[len(full_prefix):]
    return type_


def extract_node_name(type_: Any) -> str:
    """'n8n-nodes-base.webhook' -> 'webhook'"""
    if not _is_node_type(type_):
        return ""
    return normalize_node_type(type_).split(".")[-1]


def get_node_package(type_: Any) -> Optional[str]:
    """'nodes-base.webhook' -> 'n8n-nodes-base'; None when there is no package part"""
    if not _is_node_type(type_) or "." not in type_:
        return None
    return normalize_node_type(type_).split(".")[0] or None


def is_base_node(type_: Any) -> bool:
    if not _is_node_type(type_):
        return False
    return normalize_node_type(type_).startswith(BASE_FULL_PREFIX)


def is_lang_chain_node(type_: Any) -> bool:
    if not _is_node_type(type_):
        return False
    return normalize_node_type(type_).startswith((LANGCHAIN_FULL_PREFIX, LANGCHAIN_UNSCOPED_PREFIX))


def is_valid_node_type_format(type_: Any) -> bool:
    """
    Check the raw spelling is '<package>.<name>' with exactly one dot.

    Scoped types such as '@n8n/n8n-nodes-langchain.agent' pass; the check
    does not normalize first.
    """
    if not _is_node_type(type_):
        return False
    parts = type_.split(".")
    if len(parts) != 2:
        return False
    return len(parts[0]) > 0 and len(parts[1]) > 0


def get_node_type_variations(type_: Any) -> List[str]:
    """
    Spellings worth trying when looking a node type up.

    A qualified type yields its full form plus the matching short form.
    A bare name such as 'webhook' yields all four package spellings.
    """
    if not _is_node_type(type_):
        return []

    variations = []
    if "." in type_:
        normalized = normalize_node_type(type_)
        variations.append(normalized)
        if normalized.startswith(BASE_FULL_PREFIX):
            variations.append(denormalize_node_type(normalized, "base"))
        elif normalized.startswith(LANGCHAIN_FULL_PREFIX):
            variations.append(denormalize_node_type(normalized, "langchain"))
    else:
        variations.extend([
            f"{BASE_FULL_PREFIX}{type_}",
            f"{BASE_SHORT_PREFIX}{type_}",
            f"{LANGCHAIN_FULL_PREFIX}{type_}",
            f"{LANGCHAIN_SHORT_PREFIX}{type_}",
        ])

    return list(dict.fromkeys(variations))


def is_trigger_node(node_type: Any) -> bool:
    """
    True for nodes that start a workflow.

    Anything named *trigger*, webhooks (but not 'Respond to Webhook'), and
    the manual start nodes.
    """
    if not _is_node_type(node_type):
        return False

    normalized = normalize_node_type(node_type)
    lower_type = normalized.lower()

    if "trigger" in lower_type:
        return True
    if "webhook" in lower_type and "respond" not in lower_type:
        return True
    return normalized in SPECIFIC_TRIGGERS


def is_activatable_trigger(node_type: Any) -> bool:
    """
    True for triggers that can activate a workflow.

    Currently every trigger node qualifies.
    """
    return is_trigger_node(node_type)


def get_trigger_type_description(node_type: Any) -> str:
    """Human readable label for a trigger node, e.g. 'Webhook Trigger (HTTP requests)'"""
    if not _is_node_type(node_type):
        return UNKNOWN_TRIGGER_TYPE

    normalized = normalize_node_type(node_type)
    lower_type = normalized.lower()

    for matches, description in TRIGGER_DESCRIPTIONS:
        if matches(normalized, lower_type):
            return description
    return UNKNOWN_TRIGGER_TYPE

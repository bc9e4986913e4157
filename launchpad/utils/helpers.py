"""Helpers for reading and writing nested mappings with dotted keys.

Both the runtime config store and local storage address values as
``"scm.username"`` or ``"connections.production#0"``.
"""

from typing import Any

_MISSING = object()


def get_dotted(data: Any, key: str, default: Any = None) -> Any:
    """Look up a dotted key in nested dicts and lists.

    Numeric segments index into lists.

    Example:
        >>> get_dotted({"a": {"b": [10, 20]}}, "a.b.1")
        20
    """
    node = data
    for segment in key.split("."):
        if isinstance(node, dict):
            node = node.get(segment, _MISSING)
        elif isinstance(node, list) and segment.isdigit() and int(segment) < len(node):
            node = node[int(segment)]
        else:
            return default
        if node is _MISSING:
            return default
    return node


def set_dotted(data: dict[str, Any], key: str, value: Any) -> None:
    """Set a dotted key, creating intermediate dicts as needed."""
    *parents, leaf = key.split(".")
    node = data
    for segment in parents:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child
    node[leaf] = value

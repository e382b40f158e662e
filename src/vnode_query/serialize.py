"""Serialization of VNode trees and query traces for diagnostics."""

from __future__ import annotations

import json
from typing import Any


def _is_node(value: Any) -> bool:
    return hasattr(value, "vnode_selector")


def _plain_value(value: Any) -> Any:
    # Anything json cannot encode as-is is replaced by its repr
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple)):
        return [_plain_value(item) for item in value]
    if isinstance(value, dict):
        if all(isinstance(key, str) for key in value):
            return {key: _plain_value(item) for key, item in value.items()}
        return repr(value)
    return repr(value)


def node_to_dict(node: Any) -> dict[str, Any]:
    """Convert a node to plain JSON-compatible data.

    Callable properties (event handlers) are listed by name only.
    """
    if node.vnode_selector == "":
        return {"text": getattr(node, "text", None)}

    out: dict[str, Any] = {"vnodeSelector": node.vnode_selector}
    properties: dict[str, Any] = node.properties or {}
    if properties:
        plain: dict[str, Any] = {}
        handlers: list[str] = []
        for key, value in properties.items():
            if callable(value):
                handlers.append(key)
            elif key != "bind":
                plain[str(key)] = _plain_value(value)
        if plain:
            out["properties"] = plain
        if handlers:
            out["handlers"] = handlers
    text = getattr(node, "text", None)
    if text:
        out["text"] = text
    if node.children:
        out["children"] = [node_to_dict(child) for child in node.children]
    return out


def _trace_entry(entry: Any) -> Any:
    if entry is None or isinstance(entry, (str, int, float, bool)):
        return entry
    if _is_node(entry):
        return node_to_dict(entry)
    if callable(entry):
        name = getattr(entry, "__qualname__", None) or getattr(entry, "__name__", None)
        return f"<predicate {name or repr(entry)}>"
    return repr(entry)


def trace_to_json(trace: tuple[Any, ...] | list[Any], indent: int | None = None) -> str:
    """Render a query trace (nodes, selectors, `child:N`/`result:N` steps) as JSON."""
    return json.dumps([_trace_entry(entry) for entry in trace], indent=indent, default=repr)


def to_test_format(node: Any, indent: int = 0) -> str:
    """Convert node to an indented outline, one node per line.

    Uses '| ' prefixes like html5lib test output:

        | <div.a>
        |   "text"
    """
    if node is None:
        return "| (none)"
    if node.vnode_selector == "":
        return f'| {" " * indent}"{getattr(node, "text", None) or ""}"'

    line = f"| {' ' * indent}<{node.vnode_selector}>"
    sections = [line]
    text = getattr(node, "text", None)
    if text:
        sections.append(f'| {" " * (indent + 2)}"{text}"')
    for child in node.children or []:
        sections.append(to_test_format(child, indent + 2))
    return "\n".join(sections)

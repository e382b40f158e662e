from __future__ import annotations

from typing import Any


class VNode:
    """A virtual DOM node as produced by a render function.

    `vnode_selector` is the hyperscript selector (`"div.class#id"`), or the
    empty string for text nodes, which carry their value in `text`. Nodes are
    treated as immutable once built; render functions produce fresh trees.
    """

    __slots__ = ("children", "properties", "text", "vnode_selector")

    vnode_selector: str
    properties: dict[str, Any] | None
    children: list[VNode] | None
    text: str | None

    def __init__(
        self,
        vnode_selector: str,
        properties: dict[str, Any] | None = None,
        children: list[VNode] | None = None,
        text: str | None = None,
    ) -> None:
        self.vnode_selector = vnode_selector
        self.properties = properties
        self.children = children
        self.text = text

    def __repr__(self) -> str:
        if self.vnode_selector == "":
            return f"VNode(text={self.text!r})"
        return f"VNode({self.vnode_selector!r})"


def text_node(text: str) -> VNode:
    return VNode("", None, None, text)


def _flatten_children(items: Any, out: list[Any]) -> None:
    for item in items:
        if item is None:
            continue
        if isinstance(item, (list, tuple)):
            _flatten_children(item, out)
        else:
            out.append(item)


def h(selector: str, properties: Any = None, children: Any = None) -> VNode:
    """
    Build a VNode using hyperscript notation.

    `properties` may be omitted, in which case the second argument is taken as
    the children. Children may be VNodes, strings, numbers, None (skipped) or
    nested lists.

    Args:
        selector: Tag name optionally followed by `.class` and `#id` segments
        properties: Property bag (attributes, `on*` handlers, `bind`)
        children: Child nodes or text

    Returns:
        A new VNode
    """
    if children is None and isinstance(properties, (list, tuple, str, VNode)):
        children = properties
        properties = None
    if isinstance(children, (str, VNode)):
        children = [children]

    flat: list[Any] = []
    if children:
        _flatten_children(children, flat)

    # A lone string child becomes the element's own text
    if len(flat) == 1 and isinstance(flat[0], str):
        return VNode(selector, properties, None, flat[0])

    nodes: list[VNode] = []
    for child in flat:
        if isinstance(child, VNode):
            nodes.append(child)
        else:
            nodes.append(text_node(str(child)))
    return VNode(selector, properties, nodes or None, None)

# Selector matching and descendant traversal for vnode_query
# Supports single-token selectors: a tag name, a .class or an #id

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .errors import SelectorError

VNodePredicate = Callable[[Any], bool]
Selector = "str | VNodePredicate"


class TokenMatcher:
    """Matches a single selector token against a node's selector string.

    Class and id tokens never match the leading (tag) segment, a tag token
    only matches the leading segment. The token must end where a segment ends,
    so `div` does not match `divider` and `.a` does not match `.ab`.
    """

    __slots__ = ("leading", "token")

    token: str
    leading: bool

    def __init__(self, token: str) -> None:
        self.token = token
        self.leading = not token.startswith((".", "#"))

    def __call__(self, node: Any) -> bool:
        vnode_selector: str = node.vnode_selector
        index = vnode_selector.find(self.token)
        if self.leading:
            if index != 0:
                return False
        elif index <= 0:
            return False
        end = index + len(self.token)
        return end == len(vnode_selector) or vnode_selector[end] in ".#"

    def __repr__(self) -> str:
        return f"TokenMatcher({self.token!r})"


def compile_selector(selector: Any) -> VNodePredicate:
    """
    Turn a selector into a predicate over nodes.

    Args:
        selector: A single-token selector string or a predicate function

    Returns:
        A predicate accepting a node

    Raises:
        SelectorError: If the selector is neither a string nor callable
    """
    if isinstance(selector, str):
        return TokenMatcher(selector)
    if callable(selector):
        return selector
    raise SelectorError(selector)


def matches(node: Any, selector: Any) -> bool:
    """Check if a node matches a selector string or predicate."""
    return bool(compile_selector(selector)(node))


def find_all(root: Any, predicate: VNodePredicate) -> list[Any]:
    """
    Collect the descendants of root that satisfy predicate.

    Searches descendants of root in document order (depth-first, pre-order),
    not including root itself. Children of a matching node are searched too.

    Args:
        root: The node to search from, or None
        predicate: A compiled selector

    Returns:
        A list of matching nodes (empty when root is None)
    """
    results: list[Any] = []
    if root is not None:
        _collect_descendants(root, predicate, results)
    return results


def _collect_descendants(node: Any, predicate: VNodePredicate, results: list[Any]) -> None:
    """Recursively search for matching nodes in descendants."""
    # Only recurse into children (not the node itself)
    children = node.children
    if not children:
        return
    for child in children:
        if predicate(child):
            results.append(child)
        _collect_descendants(child, predicate, results)


def find(root: Any, predicate: VNodePredicate) -> Any | None:
    """Return the first descendant of root in document order matching predicate."""
    results = find_all(root, predicate)
    if results:
        return results[0]
    return None

"""Lazy, re-executable queries over VNode trees.

A query is re-executed each time one of its methods or properties is used.
It does NOT cache the result: each query holds a resolver function composed
from its parent's resolver, so results always reflect the latest render.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

from .errors import NodeNotFoundError
from .selector import compile_selector, find, find_all
from .serialize import to_test_format, trace_to_json
from .simulator import Simulator

if TYPE_CHECKING:
    from .selector import Selector

Resolver = Callable[[], Any]
ListResolver = Callable[[], list[Any]]
Trace = Callable[[], tuple[Any, ...]]


def _collect_text_content(node: Any, parts: list[str]) -> None:
    if node.vnode_selector == "":
        parts.append(getattr(node, "text", None) or "")
        return

    text: str | None = getattr(node, "text", None)
    if text:
        parts.append(text)
    if node.children:
        for child in node.children:
            _collect_text_content(child, parts)


def _child_at(node: Any, index: int) -> Any | None:
    if node is None:
        return None
    children = node.children or []
    if 0 <= index < len(children):
        return children[index]
    return None


def _item_at(nodes: list[Any], index: int) -> Any | None:
    if 0 <= index < len(nodes):
        return nodes[index]
    return None


class QueryBase:
    """Operations shared by NodeQuery and the TestProjector."""

    __slots__ = ()

    def _resolve(self) -> Any:
        raise NotImplementedError

    def _trace(self) -> tuple[Any, ...]:
        raise NotImplementedError

    def query(self, selector: Selector) -> NodeQuery:
        """
        Create a query for the first descendant matching selector.

        Args:
            selector: A tag name, `.className`, `#id` or a predicate function

        Returns:
            A new NodeQuery starting at the result of this query

        Raises:
            SelectorError: If the selector is invalid
        """
        predicate = compile_selector(selector)
        resolve = self._resolve
        trace = self._trace
        return NodeQuery(lambda: find(resolve(), predicate), lambda: (*trace(), selector))

    def query_all(self, selector: Selector) -> NodeListQuery:
        """Create a query for all descendants matching selector, in document order."""
        predicate = compile_selector(selector)
        resolve = self._resolve
        trace = self._trace
        return NodeListQuery(lambda: find_all(resolve(), predicate), lambda: (*trace(), selector))


class NodeQuery(QueryBase):
    """A query that yields a single VNode."""

    __slots__ = ("_resolver", "_target_dom_node", "_tracer")

    _resolver: Resolver
    _tracer: Trace
    _target_dom_node: Any

    def __init__(self, resolver: Resolver, trace: Trace | None = None) -> None:
        self._resolver = resolver
        self._tracer = trace or tuple
        self._target_dom_node = None

    def _resolve(self) -> Any:
        return self._resolver()

    def _trace(self) -> tuple[Any, ...]:
        return self._tracer()

    def __repr__(self) -> str:
        return f"NodeQuery({self.debug()})"

    def debug(self, indent: int | None = None) -> str:
        """Return a JSON representation of the trace that produced this query."""
        return trace_to_json(self._trace(), indent=indent)

    def execute(self) -> Any:
        """
        Execute the query and return the resulting VNode.

        Raises:
            NodeNotFoundError: If the query does not match a VNode
        """
        result = self._resolve()
        if result is None:
            trace = self._trace()
            raise NodeNotFoundError(trace, trace_to_json(trace, indent=2))
        return result

    def exists(self) -> bool:
        """Execute the query and return True if a VNode is found."""
        return self._resolve() is not None

    def get_child(self, index: int) -> NodeQuery:
        """Return a query for the child at index of the result of this query."""
        resolve = self._resolve
        trace = self._trace
        return NodeQuery(lambda: _child_at(resolve(), index), lambda: (*trace(), f"child:{index}"))

    @property
    def text_content(self) -> str:
        """The text of this node and all descendants, like HTMLElement.textContent."""
        parts: list[str] = []
        _collect_text_content(self.execute(), parts)
        return "".join(parts)

    @property
    def vnode_selector(self) -> str:
        return self.execute().vnode_selector

    @property
    def properties(self) -> dict[str, Any]:
        return self.execute().properties or {}

    @property
    def children(self) -> list[Any]:
        return self.execute().children or []

    @property
    def simulate(self) -> Simulator:
        """A Simulator for firing common user interactions at this node's handlers."""
        return Simulator(self.execute().properties, self._target_dom_node)

    def set_target_dom_node(self, target: Any = None) -> None:
        """Register an object to act as the target DOM node of simulated events."""
        self._target_dom_node = target

    def get_target_dom_node(self) -> Any:
        return self._target_dom_node

    def outline(self) -> str:
        """Return the resolved subtree as an indented outline."""
        return to_test_format(self.execute())


class NodeListQuery:
    """A query that yields multiple VNodes."""

    __slots__ = ("_resolver", "_tracer")

    _resolver: ListResolver
    _tracer: Trace

    def __init__(self, resolver: ListResolver, trace: Trace | None = None) -> None:
        self._resolver = resolver
        self._tracer = trace or tuple

    def __repr__(self) -> str:
        return f"NodeListQuery({trace_to_json(self._tracer())})"

    def execute(self) -> list[Any]:
        """Execute the query and return the matching VNodes."""
        return list(self._resolver())

    def get_result(self, index: int) -> NodeQuery:
        """Return a query for the result of this query at index."""
        resolver = self._resolver
        trace = self._tracer
        return NodeQuery(lambda: _item_at(resolver(), index), lambda: (*trace(), f"result:{index}"))

    @property
    def length(self) -> int:
        return len(self.execute())

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, index: int) -> NodeQuery:
        return self.get_result(index)

    def __iter__(self) -> Iterator[NodeQuery]:
        for index in range(self.length):
            yield self.get_result(index)

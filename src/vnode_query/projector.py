"""TestProjector: the entry point binding a render function to queries."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from .errors import NotInitializedError
from .query import NodeQuery, QueryBase
from .vnode import VNode

logger = logging.getLogger(__name__)

RenderFunction = Callable[[], Any]


class TestProjector(QueryBase):
    """
    Runs queries against the output of a render function.

    The render function is called again every time a query is executed, so
    queries created once (for example in `setUp`) always see the current
    state of the application.

    `query()` and `query_all()` start at a synthetic node whose only child is
    the rendered VNode, so the rendered VNode itself can be matched. `root`
    resolves to the rendered VNode.
    """

    __slots__ = ("_render_function", "root")

    # Keep pytest from collecting this class as a test case
    __test__ = False

    _render_function: RenderFunction | None
    root: NodeQuery

    def __init__(self, render: RenderFunction | None = None) -> None:
        self._render_function = render
        self.root = NodeQuery(self._render, self._trace)

    def __repr__(self) -> str:
        state = "initialized" if self.is_initialized else "uninitialized"
        return f"<TestProjector {state}>"

    @property
    def is_initialized(self) -> bool:
        return self._render_function is not None

    def initialize(self, render: RenderFunction) -> None:
        """Bind (or rebind) the render function used to produce the VNode tree."""
        logger.debug("Initializing TestProjector with %r", render)
        self._render_function = render

    def uninitialize(self) -> None:
        """Remove the render function; executing queries fails until initialized again."""
        logger.debug("Uninitializing TestProjector")
        self._render_function = None

    def _render(self) -> Any:
        if self._render_function is None:
            raise NotInitializedError()
        return self._render_function()

    def _resolve(self) -> VNode:
        rendered = self._render()
        return VNode("", None, [rendered] if rendered is not None else None)

    def _trace(self) -> tuple[Any, ...]:
        return (self._render(),)


def create_test_projector(render: RenderFunction | None = None) -> TestProjector:
    """
    Create a TestProjector.

    Args:
        render: The function producing the VNode tree. When omitted, `initialize()`
            must be called before any query is executed.

    Returns:
        A new TestProjector
    """
    return TestProjector(render)

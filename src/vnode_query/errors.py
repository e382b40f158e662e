"""Exceptions and centralized error messages for vnode_query.

Every failure the package reports is raised synchronously at the call that
caused it and is never retried or swallowed internally.
"""

from __future__ import annotations

from typing import Any


def generate_error_message(code: str, **context: Any) -> str:
    """Generate a human-readable error message from an error code.

    Args:
        code: The error code string (kebab-case format)
        **context: Values substituted into the message template

    Returns:
        Human-readable error message string
    """
    messages = {
        # Selector errors
        "invalid-selector": "Invalid selector {selector!r}",
        # Query errors
        "node-not-found": "Query did not match a VNode: {trace}",
        # Projector errors
        "not-initialized": "TestProjector is not initialized",
        # Simulator errors
        "missing-handler": "Cannot simulate {event_name}: the VNode has no {handler_name} handler",
        "invalid-key": "Expected a key code or a non-empty string, got {key!r}",
    }

    template = messages.get(code)
    if template is None:
        return code
    return template.format(**context)


class VNodeQueryError(Exception):
    """Base class for all errors raised by vnode_query."""


class SelectorError(VNodeQueryError, ValueError):
    """Raised when a selector is neither a string nor a predicate."""

    selector: Any

    def __init__(self, selector: Any) -> None:
        self.selector = selector
        super().__init__(generate_error_message("invalid-selector", selector=selector))


class NodeNotFoundError(VNodeQueryError, LookupError):
    """Raised when a query is executed and does not resolve to a node.

    The `trace` attribute holds the entries describing how the query was built,
    the message contains their serialized form.
    """

    trace: tuple[Any, ...]

    def __init__(self, trace: tuple[Any, ...], rendered_trace: str) -> None:
        self.trace = trace
        super().__init__(generate_error_message("node-not-found", trace=rendered_trace))


class NotInitializedError(VNodeQueryError, RuntimeError):
    """Raised when a TestProjector is resolved without a render function."""

    def __init__(self) -> None:
        super().__init__(generate_error_message("not-initialized"))


class MissingHandlerError(VNodeQueryError, AttributeError):
    """Raised when an interaction is simulated on a node without a matching handler."""

    event_name: str
    handler_name: str

    def __init__(self, event_name: str, handler_name: str) -> None:
        self.event_name = event_name
        self.handler_name = handler_name
        super().__init__(
            generate_error_message("missing-handler", event_name=event_name, handler_name=handler_name)
        )

"""Simulation of user interactions against a VNode's event handlers.

The simulator builds event-like objects and calls the matching `on*` handler
from the node's property bag. It is a small facade for common interactions
and is not meant to be exhaustive: anything else can be simulated by calling
`query.properties["on..."](event)` directly.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping, MutableMapping
from types import MethodType, SimpleNamespace
from typing import Any

from .errors import MissingHandlerError, generate_error_message

logger = logging.getLogger(__name__)


class SimulatedEvent:
    """A synthesized event passed to exactly one handler call.

    Interaction-specific fields (`which`, `key_code`, `page_x`, `delta_y`, ...)
    are plain attributes set after construction.
    """

    target: Any
    current_target: Any
    default_prevented: bool
    propagation_stopped: bool

    def __init__(self, target: Any = None, **fields: Any) -> None:
        self.target = target
        self.current_target = target
        self.default_prevented = False
        self.propagation_stopped = False
        for name, value in fields.items():
            setattr(self, name, value)

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in vars(self).items())
        return f"SimulatedEvent({fields})"


def get_key_code(key_code_or_char: int | str) -> int:
    """Return a numeric key code, using the first character's code point for strings."""
    if isinstance(key_code_or_char, int):
        return key_code_or_char
    if isinstance(key_code_or_char, str):
        if not key_code_or_char:
            raise ValueError(generate_error_message("invalid-key", key=key_code_or_char))
        return ord(key_code_or_char[0])
    raise TypeError(generate_error_message("invalid-key", key=key_code_or_char))


def create_key_event(key_code: int, target: Any) -> SimulatedEvent:
    return SimulatedEvent(target, which=key_code, key_code=key_code)


def create_mouse_event(target: Any, parameters: Mapping[str, Any] | None = None) -> SimulatedEvent:
    event = SimulatedEvent(target)
    if parameters:
        for name, value in parameters.items():
            setattr(event, name, value)
    return event


def create_wheel_event(target: Any, deltas: Mapping[str, Any] | None) -> SimulatedEvent:
    deltas = deltas or {}
    return SimulatedEvent(target, delta_x=deltas.get("delta_x"), delta_y=deltas.get("delta_y"))


def _accepts_context(handler: Callable[..., Any]) -> bool:
    # Plain functions declaring (self, event) without defaults receive the invocation context
    if not inspect.isfunction(handler):
        return False
    try:
        parameters = inspect.signature(handler).parameters.values()
    except (TypeError, ValueError):  # pragma: no cover
        return False
    positional = [
        p
        for p in parameters
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        and p.default is inspect.Parameter.empty
    ]
    return len(positional) == 2


def invoke_handler(handler: Callable[..., Any], context: Any, event: SimulatedEvent) -> None:
    """Call handler with event, bound to context when it declares a receiver."""
    if _accepts_context(handler):
        MethodType(handler, context)(event)
    else:
        handler(event)


def _set_value(target: Any, value: str) -> None:
    if isinstance(target, MutableMapping):
        target["value"] = value
    else:
        target.value = value


class Simulator:
    """Fires simulated events at the handlers of a single node.

    Handlers are looked up in the property bag as `on` + event name. They are
    invoked with `properties["bind"]` as context when present, otherwise with
    the property bag itself.
    """

    __slots__ = ("default_target", "properties")

    properties: dict[str, Any]
    default_target: Any

    def __init__(self, properties: dict[str, Any] | None, default_target: Any = None) -> None:
        self.properties = properties if properties is not None else {}
        self.default_target = default_target

    @property
    def context(self) -> Any:
        bind = self.properties.get("bind")
        if bind is not None:
            return bind
        return self.properties

    def _target(self, target: Any) -> Any:
        if target is not None:
            return target
        return self.default_target

    def _dispatch(self, event_name: str, event: SimulatedEvent) -> SimulatedEvent:
        handler_name = "on" + event_name
        handler = self.properties.get(handler_name)
        if handler is None:
            raise MissingHandlerError(event_name, handler_name)
        logger.debug("Simulating %s with %r", event_name, event)
        invoke_handler(handler, self.context, event)
        return event

    def _dispatch_if_present(self, event_name: str, event: SimulatedEvent) -> None:
        handler = self.properties.get("on" + event_name)
        if handler is not None:
            logger.debug("Simulating %s with %r", event_name, event)
            invoke_handler(handler, self.context, event)

    def key_down(self, key_code: int | str, target: Any = None) -> SimulatedEvent:
        """Will invoke properties["onkeydown"]."""
        return self._dispatch("keydown", create_key_event(get_key_code(key_code), self._target(target)))

    def key_up(self, key_code: int | str, target: Any = None) -> SimulatedEvent:
        """Will invoke properties["onkeyup"]."""
        return self._dispatch("keyup", create_key_event(get_key_code(key_code), self._target(target)))

    def mouse_down(self, target: Any = None, parameters: Mapping[str, Any] | None = None) -> SimulatedEvent:
        """Will invoke properties["onmousedown"]."""
        return self._dispatch("mousedown", create_mouse_event(self._target(target), parameters))

    def mouse_up(self, target: Any = None, parameters: Mapping[str, Any] | None = None) -> SimulatedEvent:
        """Will invoke properties["onmouseup"]."""
        return self._dispatch("mouseup", create_mouse_event(self._target(target), parameters))

    def mouse_over(self, target: Any = None, parameters: Mapping[str, Any] | None = None) -> SimulatedEvent:
        """Will invoke properties["onmouseover"]."""
        return self._dispatch("mouseover", create_mouse_event(self._target(target), parameters))

    def mouse_out(self, target: Any = None, parameters: Mapping[str, Any] | None = None) -> SimulatedEvent:
        """Will invoke properties["onmouseout"]."""
        return self._dispatch("mouseout", create_mouse_event(self._target(target), parameters))

    def click(self, target: Any = None, parameters: Mapping[str, Any] | None = None) -> SimulatedEvent:
        """Will invoke properties["onclick"]."""
        return self._dispatch("click", create_mouse_event(self._target(target), parameters))

    def input(self, target: Any = None) -> SimulatedEvent:
        """Will invoke properties["oninput"]."""
        return self._dispatch("input", SimulatedEvent(self._target(target)))

    def change(self, target: Any = None) -> SimulatedEvent:
        """Will invoke properties["onchange"]."""
        return self._dispatch("change", SimulatedEvent(self._target(target)))

    def focus(self, target: Any = None) -> SimulatedEvent:
        """Will invoke properties["onfocus"]."""
        return self._dispatch("focus", SimulatedEvent(self._target(target)))

    def blur(self, target: Any = None) -> SimulatedEvent:
        """Will invoke properties["onblur"]."""
        return self._dispatch("blur", SimulatedEvent(self._target(target)))

    def mouse_wheel(self, deltas: Mapping[str, Any] | None, target: Any = None) -> SimulatedEvent:
        """Will invoke properties["onmousewheel"] with `delta_x`/`delta_y` set from deltas."""
        return self._dispatch("mousewheel", create_wheel_event(self._target(target), deltas))

    def key_press(
        self,
        key_code_or_char: int | str,
        value_before: str,
        value_after: str,
        target: Any = None,
    ) -> None:
        """
        Simulate typing a single key into an input.

        Sets the target's value to `value_before`, fires `onkeydown`, then, unless
        the keydown event had its default prevented, sets the value to
        `value_after` and fires `oninput`. `onkeyup` always fires last. Handlers
        that are not registered are skipped.

        Args:
            key_code_or_char: A key code or a string whose first character is used
            value_before: The value of the input before the key is typed
            value_after: The value of the input after the key is typed
            target: The fake DOM node; defaults to the registered target or a new object
        """
        element = self._target(target)
        if element is None:
            element = SimpleNamespace()
        key_code = get_key_code(key_code_or_char)

        _set_value(element, value_before)
        key_down_event = create_key_event(key_code, element)
        self._dispatch_if_present("keydown", key_down_event)

        if not key_down_event.default_prevented:
            _set_value(element, value_after)
            self._dispatch_if_present("input", SimulatedEvent(element))

        self._dispatch_if_present("keyup", create_key_event(key_code, element))

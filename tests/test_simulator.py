from __future__ import annotations

import unittest
from types import SimpleNamespace
from typing import Any
from unittest import mock

from vnode_query import MissingHandlerError, NodeQuery, SimulatedEvent, Simulator, VNode, create_test_projector, h


def create_query(vnode: VNode) -> NodeQuery:
    return create_test_projector(lambda: vnode).root


def last_event(handler: mock.Mock) -> Any:
    return handler.call_args[0][0]


class TestSimpleEvents(unittest.TestCase):
    def test_input(self) -> None:
        handle_input = mock.Mock()
        vnode = h("input", {"type": "text", "oninput": handle_input})
        create_query(vnode).simulate.input({"value": "Text1"})
        handle_input.assert_called_once()
        assert last_event(handle_input).target == {"value": "Text1"}

    def test_blur(self) -> None:
        element = SimpleNamespace()
        handle_blur = mock.Mock()
        create_query(h("input", {"onblur": handle_blur})).simulate.blur(element)
        assert last_event(handle_blur).target is element

    def test_focus(self) -> None:
        element = SimpleNamespace()
        handle_focus = mock.Mock()
        create_query(h("input", {"onfocus": handle_focus})).simulate.focus(element)
        assert last_event(handle_focus).target is element

    def test_change(self) -> None:
        element = SimpleNamespace()
        handle_change = mock.Mock()
        create_query(h("input", {"onchange": handle_change})).simulate.change(element)
        assert last_event(handle_change).target is element
        assert last_event(handle_change).current_target is element

    def test_key_down(self) -> None:
        element = SimpleNamespace()
        handle_key_down = mock.Mock()
        create_query(h("input", {"onkeydown": handle_key_down})).simulate.key_down(13, element)
        event = last_event(handle_key_down)
        assert event.which == 13
        assert event.key_code == 13
        assert event.target is element

    def test_key_down_with_character(self) -> None:
        handle_key_down = mock.Mock()
        create_query(h("input", {"onkeydown": handle_key_down})).simulate.key_down("a")
        assert last_event(handle_key_down).which == 97

    def test_key_up(self) -> None:
        handle_key_up = mock.Mock()
        create_query(h("input", {"onkeyup": handle_key_up})).simulate.key_up(13)
        assert last_event(handle_key_up).which == 13

    def test_invalid_key(self) -> None:
        simulate = create_query(h("input", {"onkeydown": mock.Mock()})).simulate
        with self.assertRaises(ValueError):
            simulate.key_down("")
        with self.assertRaises(TypeError):
            simulate.key_down(None)

    def test_mouse_down_with_parameters(self) -> None:
        element = SimpleNamespace()
        handle_mouse_down = mock.Mock()
        create_query(h("input", {"onmousedown": handle_mouse_down})).simulate.mouse_down(
            element, {"page_x": 100, "page_y": 200}
        )
        event = last_event(handle_mouse_down)
        assert event.target is element
        assert event.page_x == 100
        assert event.page_y == 200

    def test_mouse_up(self) -> None:
        handle_mouse_up = mock.Mock()
        create_query(h("input", {"onmouseup": handle_mouse_up})).simulate.mouse_up()
        handle_mouse_up.assert_called_once()

    def test_mouse_over(self) -> None:
        element = SimpleNamespace()
        handle_mouse_over = mock.Mock()
        create_query(h("input", {"onmouseover": handle_mouse_over})).simulate.mouse_over(element)
        assert last_event(handle_mouse_over).target is element

    def test_mouse_out(self) -> None:
        element = SimpleNamespace()
        handle_mouse_out = mock.Mock()
        create_query(h("input", {"onmouseout": handle_mouse_out})).simulate.mouse_out(element)
        assert last_event(handle_mouse_out).target is element

    def test_click(self) -> None:
        handle_click = mock.Mock()
        create_query(h("button", {"onclick": handle_click}, ["Go"])).simulate.click()
        handle_click.assert_called_once()

    def test_right_mouse_button_click(self) -> None:
        handle_click = mock.Mock()
        create_query(h("button", {"onclick": handle_click})).simulate.click(SimpleNamespace(), {"which": 2})
        assert last_event(handle_click).which == 2

    def test_mouse_wheel(self) -> None:
        element = SimpleNamespace()
        handle_mouse_wheel = mock.Mock()
        create_query(h("div", {"onmousewheel": handle_mouse_wheel})).simulate.mouse_wheel({"delta_y": -3}, element)
        event = last_event(handle_mouse_wheel)
        assert event.target is element
        assert event.delta_x is None
        assert event.delta_y == -3

    def test_events_can_be_prevented_and_stopped(self) -> None:
        def handle_click(event: SimulatedEvent) -> None:
            event.prevent_default()
            event.stop_propagation()

        event = create_query(h("input", {"onclick": handle_click})).simulate.click(SimpleNamespace())
        assert event.default_prevented is True
        assert event.propagation_stopped is True

    def test_fresh_event_is_not_prevented(self) -> None:
        event = create_query(h("input", {"onfocus": mock.Mock()})).simulate.focus()
        assert event.default_prevented is False
        assert event.propagation_stopped is False

    def test_missing_handler_raises(self) -> None:
        with self.assertRaises(MissingHandlerError) as ctx:
            create_query(h("button")).simulate.click()
        assert ctx.exception.event_name == "click"
        assert ctx.exception.handler_name == "onclick"
        assert "onclick" in str(ctx.exception)


class TestTargetResolution(unittest.TestCase):
    def test_registered_target_is_used_by_default(self) -> None:
        element = SimpleNamespace()
        handle_click = mock.Mock()
        query = create_query(h("button", {"onclick": handle_click}))
        query.set_target_dom_node(element)
        query.simulate.click()
        assert last_event(handle_click).target is element

    def test_explicit_target_wins(self) -> None:
        registered = SimpleNamespace()
        explicit = SimpleNamespace()
        handle_click = mock.Mock()
        query = create_query(h("button", {"onclick": handle_click}))
        query.set_target_dom_node(registered)
        query.simulate.click(explicit)
        assert last_event(handle_click).target is explicit

    def test_no_target(self) -> None:
        handle_click = mock.Mock()
        create_query(h("button", {"onclick": handle_click})).simulate.click()
        assert last_event(handle_click).target is None


class TestKeyPress(unittest.TestCase):
    def test_fires_key_down_and_key_up(self) -> None:
        element = SimpleNamespace()
        seen: list[tuple[str, int, str]] = []

        def handle_key_down(event: SimulatedEvent) -> None:
            seen.append(("keydown", event.which, event.target.value))

        def handle_key_up(event: SimulatedEvent) -> None:
            seen.append(("keyup", event.which, event.target.value))

        vnode = h("input", {"type": "text", "onkeydown": handle_key_down, "onkeyup": handle_key_up})
        create_query(vnode).simulate.key_press("a", "", "a", element)
        assert seen == [("keydown", 97, ""), ("keyup", 97, "a")]

    def test_fires_input(self) -> None:
        handle_input = mock.Mock()
        create_query(h("input", {"type": "text", "oninput": handle_input})).simulate.key_press(97, "", "a")
        assert last_event(handle_input).target.value == "a"

    def test_writes_value_into_mappings(self) -> None:
        element: dict[str, str] = {}
        handle_input = mock.Mock()
        create_query(h("input", {"oninput": handle_input})).simulate.key_press("b", "a", "ab", element)
        assert element == {"value": "ab"}

    def test_prevented_key_down_suppresses_input(self) -> None:
        element = SimpleNamespace(value="initial")
        handle_key_down = mock.Mock(side_effect=lambda event: event.prevent_default())
        handle_input = mock.Mock()
        handle_key_up = mock.Mock()
        vnode = h(
            "input",
            {"type": "text", "onkeydown": handle_key_down, "onkeyup": handle_key_up, "oninput": handle_input},
        )
        create_query(vnode).simulate.key_press("a", "initial", "should not be this", element)
        assert handle_key_down.call_count == 1
        handle_input.assert_not_called()
        assert handle_key_up.call_count == 1
        assert element.value == "initial"

    def test_failing_key_down_aborts_sequence(self) -> None:
        element = SimpleNamespace()
        handle_input = mock.Mock()
        handle_key_up = mock.Mock()
        vnode = h(
            "input",
            {"onkeydown": mock.Mock(side_effect=RuntimeError("boom")), "oninput": handle_input, "onkeyup": handle_key_up},
        )
        with self.assertRaises(RuntimeError):
            create_query(vnode).simulate.key_press("a", "", "a", element)
        handle_input.assert_not_called()
        handle_key_up.assert_not_called()
        assert element.value == ""

    def test_without_handlers(self) -> None:
        element = SimpleNamespace()
        assert create_query(h("input")).simulate.key_press("x", "", "x", element) is None
        assert element.value == "x"


class TestInvocationContext(unittest.TestCase):
    def simulate_all_events(self, vnode: VNode) -> None:
        simulate = create_query(vnode).simulate
        simulate.blur()
        simulate.change()
        simulate.click()
        simulate.focus()
        simulate.input()
        simulate.key_down(0)
        simulate.key_up(0)
        simulate.key_press(0, "before", "after")
        simulate.mouse_down()
        simulate.mouse_out()
        simulate.mouse_over()
        simulate.mouse_up()
        simulate.mouse_wheel({})

    def all_handlers(self, handler: Any) -> dict[str, Any]:
        names = [
            "onblur",
            "onchange",
            "onclick",
            "onfocus",
            "oninput",
            "onkeydown",
            "onkeyup",
            "onmousedown",
            "onmouseout",
            "onmouseover",
            "onmouseup",
            "onmousewheel",
        ]
        return dict.fromkeys(names, handler)

    def test_context_defaults_to_properties(self) -> None:
        contexts: list[Any] = []

        def handler(self: Any, event: SimulatedEvent) -> None:
            contexts.append(self)

        properties = self.all_handlers(handler)
        self.simulate_all_events(h("div", properties))
        # key_press fires keydown, input and keyup
        assert len(contexts) == 15
        assert all(context is properties for context in contexts)

    def test_context_is_bind_when_present(self) -> None:
        contexts: list[Any] = []

        def handler(self: Any, event: SimulatedEvent) -> None:
            contexts.append(self)

        component = SimpleNamespace()
        properties = self.all_handlers(handler)
        properties["bind"] = component
        self.simulate_all_events(h("div", properties))
        assert len(contexts) == 15
        assert all(context is component for context in contexts)

    def test_single_argument_handlers_receive_only_the_event(self) -> None:
        events: list[SimulatedEvent] = []
        create_query(h("button", {"onclick": events.append, "bind": object()})).simulate.click()
        assert len(events) == 1
        assert isinstance(events[0], SimulatedEvent)

    def test_handlers_with_default_arguments_receive_only_the_event(self) -> None:
        clicked: list[tuple[int, Any]] = []
        buttons = [h("button", {"onclick": lambda event, i=i: clicked.append((i, event))}) for i in range(2)]
        create_test_projector(lambda: h("div", buttons)).query_all("button").get_result(1).simulate.click()
        assert len(clicked) == 1
        assert clicked[0][0] == 1
        assert isinstance(clicked[0][1], SimulatedEvent)

    def test_unbound_method_is_bound_to_component(self) -> None:
        class Counter:
            def __init__(self) -> None:
                self.count = 0

            def handle_click(self, event: SimulatedEvent) -> None:
                self.count += 1

        counter = Counter()
        vnode = h("button", {"bind": counter, "onclick": Counter.handle_click})
        create_query(vnode).simulate.click()
        assert counter.count == 1


class TestSimulatorDirectly(unittest.TestCase):
    def test_simulator_without_properties(self) -> None:
        with self.assertRaises(MissingHandlerError):
            Simulator(None).blur()

    def test_event_repr(self) -> None:
        assert "which=13" in repr(SimulatedEvent(None, which=13))

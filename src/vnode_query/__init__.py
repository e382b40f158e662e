from .errors import (
    MissingHandlerError,
    NodeNotFoundError,
    NotInitializedError,
    SelectorError,
    VNodeQueryError,
)
from .projector import TestProjector, create_test_projector
from .query import NodeListQuery, NodeQuery
from .selector import compile_selector, find, find_all, matches
from .simulator import SimulatedEvent, Simulator
from .vnode import VNode, h

__all__ = [
    "MissingHandlerError",
    "NodeListQuery",
    "NodeNotFoundError",
    "NodeQuery",
    "NotInitializedError",
    "SelectorError",
    "SimulatedEvent",
    "Simulator",
    "TestProjector",
    "VNode",
    "VNodeQueryError",
    "compile_selector",
    "create_test_projector",
    "find",
    "find_all",
    "h",
    "matches",
]

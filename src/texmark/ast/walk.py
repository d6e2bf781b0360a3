#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texmark/ast/walk.py
"""Depth-first traversal driver for document trees.

``walk`` calls a handler once when entering a node and once when leaving
it. The handler steers the traversal by returning a ``WalkStatus``:

- ``CONTINUE`` descends into the children,
- ``SKIP_CHILDREN`` (on entry) skips the subtree but still leaves the node,
- ``STOP`` ends the whole walk immediately.

"""

from __future__ import annotations

from enum import Enum
from typing import Callable

from texmark.ast.nodes import Node


class WalkStatus(Enum):
    """Directive returned by a walk handler."""

    CONTINUE = "continue"
    SKIP_CHILDREN = "skip_children"
    STOP = "stop"


WalkHandler = Callable[[Node, bool], WalkStatus]


def walk(node: Node, handler: WalkHandler) -> WalkStatus:
    """Walk ``node`` and its descendants depth-first.

    Parameters
    ----------
    node : Node
        Root of the subtree to walk
    handler : callable
        Called as ``handler(node, entering)`` for every node

    Returns
    -------
    WalkStatus
        ``STOP`` if any handler stopped the walk, otherwise the status
        returned when leaving ``node``

    """
    status = handler(node, True)
    if status is WalkStatus.STOP:
        return status

    if status is not WalkStatus.SKIP_CHILDREN:
        # Snapshot so a handler can never change what gets visited
        for child in tuple(node.children):
            if walk(child, handler) is WalkStatus.STOP:
                return WalkStatus.STOP

    return handler(node, False)

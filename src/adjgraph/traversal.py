from __future__ import annotations

"""
Traversal work-list algorithms shared by the graph engines.

The algorithms operate on opaque integer handles (arena handles for the
adjacency list, table positions for the adjacency matrix). Visited state is
owned by the engine and reached through the ``is_visited``/``mark`` callables,
so the engine decides where the markers live and when they are reset.

All functions are generators: the returned sequence is lazy, finite and can
be consumed only once.
"""

from collections import deque
from typing import Callable, Iterable, Iterator

Neighbours = Callable[[int], Iterable[int]]
IsVisited = Callable[[int], bool]
Mark = Callable[[int], None]


def preorder_depth_first(
    start: int,
    neighbours: Neighbours,
    is_visited: IsVisited,
    mark: Mark,
) -> Iterator[int]:
    """
    Depth-first pre-order, identical to the recursive formulation.

    A vertex is marked when it is emitted. Instead of a call stack the
    function keeps one neighbour iterator per open vertex, so the depth of
    the search is bounded by memory rather than the interpreter recursion
    limit.
    """
    mark(start)
    yield start

    stack = [iter(neighbours(start))]
    while stack:
        for handle in stack[-1]:
            if not is_visited(handle):
                mark(handle)
                yield handle
                stack.append(iter(neighbours(handle)))
                break
        else:
            stack.pop()


def stack_depth_first(
    start: int,
    neighbours: Neighbours,
    is_visited: IsVisited,
    mark: Mark,
) -> Iterator[int]:
    """
    Depth-first order driven by a LIFO work-list.

    Neighbours are marked when pushed and pushed in storage order, so the
    last neighbour found is expanded first.
    """
    mark(start)
    stack = [start]
    while stack:
        current = stack.pop()
        yield current
        for handle in neighbours(current):
            if not is_visited(handle):
                mark(handle)
                stack.append(handle)


def breadth_first(
    start: int,
    neighbours: Neighbours,
    is_visited: IsVisited,
    mark: Mark,
) -> Iterator[int]:
    """
    Level-order traversal driven by a FIFO work-list.

    Vertices are marked at enqueue time so none is queued twice.
    """
    mark(start)
    queue = deque([start])
    while queue:
        current = queue.popleft()
        yield current
        for handle in neighbours(current):
            if not is_visited(handle):
                mark(handle)
                queue.append(handle)


__all__ = ["preorder_depth_first", "stack_depth_first", "breadth_first"]

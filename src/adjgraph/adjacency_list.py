from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterator, List, Optional, Sequence

from ._logging import getLogger
from .base import Arc, Graph
from .config import get_settings
from .traversal import preorder_depth_first

logger = getLogger(__name__)


@dataclass(slots=True)
class Neighbour:
    """Outgoing arc held by a vertex: target handle and optional weight."""
    handle: int
    weight: Optional[float] = None


@dataclass(slots=True)
class VertexRecord:
    key: Hashable
    neighbours: List[Neighbour] = field(default_factory=list)
    visited: bool = False


class AdjacencyListGraph(Graph):
    """
    Sparse graph: each vertex owns an ordered list of outgoing arcs.

    Structure:
      - Vertex records live in an arena keyed by integer handles. Handles are
        never reused, so a neighbour entry cannot alias a later vertex.
      - ``_handles`` maps key -> handle for vertex lookup.
      - Arc lookup is a linear scan of the source's neighbour list (O(degree)).
      - Removing a vertex scans every neighbour list (O(V * degree)).

    There is no capacity limit.
    """

    __slots__ = ("_arena", "_handles", "_next_handle")

    def __init__(self, weighted: bool = False) -> None:
        super().__init__(weighted)
        self._arena: Dict[int, VertexRecord] = {}
        self._handles: Dict[Hashable, int] = {}
        self._next_handle = 0

    # ------------------------------------------------------------------ #
    # Storage primitives
    # ------------------------------------------------------------------ #
    def _locate(self, key: Hashable) -> Optional[int]:
        return self._handles.get(key)

    def _key_of(self, handle: int) -> Hashable:
        return self._arena[handle].key

    def _insert_vertex(self, key: Hashable) -> bool:
        handle = self._next_handle
        self._next_handle += 1
        self._arena[handle] = VertexRecord(key)
        self._handles[key] = handle
        return True

    def _delete_vertex(self, handle: int) -> None:
        dropped = 0
        for record in self._arena.values():
            before = len(record.neighbours)
            record.neighbours = [n for n in record.neighbours if n.handle != handle]
            dropped += before - len(record.neighbours)

        record = self._arena.pop(handle)
        dropped += len(record.neighbours)
        del self._handles[record.key]
        logger.debug("Removed vertex %r and %d arcs", record.key, dropped)

    def _find(self, src: int, dest: int) -> Optional[Neighbour]:
        for neighbour in self._arena[src].neighbours:
            if neighbour.handle == dest:
                return neighbour
        return None

    def _has_arc_at(self, src: int, dest: int) -> bool:
        return self._find(src, dest) is not None

    def _weight_at(self, src: int, dest: int) -> Optional[float]:
        neighbour = self._find(src, dest)
        return None if neighbour is None else neighbour.weight

    def _put_arc(self, src: int, dest: int, weight: Optional[float]) -> None:
        neighbour = self._find(src, dest)
        if neighbour is None:
            self._arena[src].neighbours.append(Neighbour(dest, weight))
        else:
            neighbour.weight = weight

    def _drop_arc(self, src: int, dest: int) -> None:
        record = self._arena[src]
        record.neighbours = [n for n in record.neighbours if n.handle != dest]

    def _neighbour_handles(self, handle: int) -> Sequence[int]:
        return tuple(n.handle for n in self._arena[handle].neighbours)

    # ------------------------------------------------------------------ #
    # Traversal markers
    # ------------------------------------------------------------------ #
    def _reset_marks(self) -> None:
        for record in self._arena.values():
            record.visited = False

    def _is_visited(self, handle: int) -> bool:
        return self._arena[handle].visited

    def _mark(self, handle: int) -> None:
        self._arena[handle].visited = True

    def _depth_first(self, start: int) -> Iterator[int]:
        return preorder_depth_first(
            start, self._neighbour_handles, self._is_visited, self._mark
        )

    # ------------------------------------------------------------------ #
    # Read-only structure
    # ------------------------------------------------------------------ #
    def vertex_count(self) -> int:
        return len(self._arena)

    def vertices(self) -> List[Hashable]:
        return [record.key for record in self._arena.values()]

    def arcs(self) -> Iterator[Arc]:
        for record in self._arena.values():
            for neighbour in record.neighbours:
                yield record.key, self._arena[neighbour.handle].key, neighbour.weight

    def to_string(self) -> str:
        """
        One line per vertex: ``key -> n1, n2``.

        Weighted graphs append the weight in parentheses after each neighbour.
        """
        precision = get_settings().render.list_precision
        lines = ["Adjacency list:"]
        for record in self._arena.values():
            parts = []
            for neighbour in record.neighbours:
                text = str(self._arena[neighbour.handle].key)
                if self._weighted:
                    text += f" ({neighbour.weight:.{precision}f})"
                parts.append(text)
            line = f"{record.key} ->"
            if parts:
                line += " " + ", ".join(parts)
            lines.append(line)
        return "\n".join(lines) + "\n"


__all__ = ["AdjacencyListGraph"]

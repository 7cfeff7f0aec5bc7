from __future__ import annotations

from typing import Hashable, Iterator, List, Optional, Sequence

import numpy as np

from ._logging import getLogger
from .base import Arc, Graph
from .config import get_settings
from .traversal import stack_depth_first

logger = getLogger(__name__)


class AdjacencyMatrixGraph(Graph):
    """
    Dense graph with a fixed vertex capacity.

    Structure:
      - ``_vertices``: ordered key table; the position of a key is its row and
        column in the matrix. Keys are resolved by linear search (O(V)).
      - Unweighted: ``_adjacency`` is a (capacity x capacity) BOOL array.
      - Weighted: ``_weights`` is a (capacity x capacity) float64 array, NaN
        meaning "no arc".
      - The diagonal is initialised to True / 0.0. It is a storage detail:
        self relations are rejected by every call and never reported.

    Removing a vertex shifts the later rows up and columns left, clears the
    freed last row and column and releases one slot of capacity.
    """

    __slots__ = ("_capacity", "_vertices", "_adjacency", "_weights", "_visited")

    def __init__(self, capacity: Optional[int] = None, weighted: bool = False) -> None:
        super().__init__(weighted)
        if capacity is None:
            capacity = get_settings().matrix.default_capacity
        capacity = int(capacity)
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")

        self._capacity = capacity
        self._vertices: List[Hashable] = []
        self._adjacency: Optional[np.ndarray] = None
        self._weights: Optional[np.ndarray] = None

        if weighted:
            self._weights = np.full((capacity, capacity), np.nan, dtype=np.float64)
            np.fill_diagonal(self._weights, 0.0)
        else:
            self._adjacency = np.zeros((capacity, capacity), dtype=np.bool_)
            np.fill_diagonal(self._adjacency, True)

        self._visited = np.zeros(capacity, dtype=np.bool_)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return len(self._vertices) == self._capacity

    @property
    def _store(self) -> np.ndarray:
        return self._weights if self._weighted else self._adjacency  # type: ignore[return-value]

    def _absent(self):
        return np.nan if self._weighted else False

    def _self_present(self):
        return 0.0 if self._weighted else True

    # ------------------------------------------------------------------ #
    # Storage primitives
    # ------------------------------------------------------------------ #
    def _locate(self, key: Hashable) -> Optional[int]:
        for index, candidate in enumerate(self._vertices):
            if candidate == key:
                return index
        return None

    def _key_of(self, handle: int) -> Hashable:
        return self._vertices[handle]

    def _insert_vertex(self, key: Hashable) -> bool:
        if self.is_full:
            logger.debug("add_vertex rejected: capacity %d exhausted", self._capacity)
            return False
        self._vertices.append(key)
        return True

    def _delete_vertex(self, handle: int) -> None:
        store = self._store
        n = len(self._vertices)
        last = n - 1

        dropped = int(
            sum(self._has_arc_at(handle, i) for i in range(n) if i != handle)
            + sum(self._has_arc_at(i, handle) for i in range(n) if i != handle)
        )

        # Shift rows [handle+1, n) up and columns [handle+1, n) left. The
        # right-hand sides are copied so the moves never read shifted data.
        store[handle:last, :n] = store[handle + 1:n, :n].copy()
        store[:n, handle:last] = store[:n, handle + 1:n].copy()

        store[last, :] = self._absent()
        store[:, last] = self._absent()
        store[last, last] = self._self_present()

        key = self._vertices.pop(handle)
        logger.debug("Removed vertex %r at position %d and %d arcs", key, handle, dropped)

    def _has_arc_at(self, src: int, dest: int) -> bool:
        if self._weighted:
            return not np.isnan(self._weights[src, dest])  # type: ignore[index]
        return bool(self._adjacency[src, dest])  # type: ignore[index]

    def _weight_at(self, src: int, dest: int) -> Optional[float]:
        if not self._weighted:
            return None
        value = self._weights[src, dest]  # type: ignore[index]
        return None if np.isnan(value) else float(value)

    def _put_arc(self, src: int, dest: int, weight: Optional[float]) -> None:
        if self._weighted:
            self._weights[src, dest] = weight  # type: ignore[index]
        else:
            self._adjacency[src, dest] = True  # type: ignore[index]

    def _drop_arc(self, src: int, dest: int) -> None:
        self._store[src, dest] = self._absent()

    def _neighbour_handles(self, handle: int) -> Sequence[int]:
        n = len(self._vertices)
        return tuple(i for i in range(n) if i != handle and self._has_arc_at(handle, i))

    # ------------------------------------------------------------------ #
    # Traversal markers
    # ------------------------------------------------------------------ #
    def _reset_marks(self) -> None:
        self._visited[:] = False

    def _is_visited(self, handle: int) -> bool:
        return bool(self._visited[handle])

    def _mark(self, handle: int) -> None:
        self._visited[handle] = True

    def _depth_first(self, start: int) -> Iterator[int]:
        return stack_depth_first(
            start, self._neighbour_handles, self._is_visited, self._mark
        )

    # ------------------------------------------------------------------ #
    # Read-only structure
    # ------------------------------------------------------------------ #
    def vertex_count(self) -> int:
        return len(self._vertices)

    def vertices(self) -> List[Hashable]:
        return list(self._vertices)

    def arcs(self) -> Iterator[Arc]:
        n = len(self._vertices)
        for s in range(n):
            for d in range(n):
                if s != d and self._has_arc_at(s, d):
                    yield self._vertices[s], self._vertices[d], self._weight_at(s, d)

    def to_string(self) -> str:
        """
        Table with a header row of keys and one row per vertex.

        Cells show ``T``/``F`` on unweighted graphs and the weight (or the
        configured absent marker) on weighted graphs. Only occupied positions
        are rendered.
        """
        render = get_settings().render
        n = len(self._vertices)
        labels = [str(key) for key in self._vertices]

        rows: List[List[str]] = []
        for s in range(n):
            cells = []
            for d in range(n):
                if self._weighted:
                    value = self._weights[s, d]  # type: ignore[index]
                    if np.isnan(value):
                        cells.append(render.absent_marker)
                    else:
                        cells.append(f"{value:.{render.matrix_precision}f}")
                else:
                    cells.append("T" if self._adjacency[s, d] else "F")  # type: ignore[index]
            rows.append(cells)

        width = max([len(text) for text in labels] + [len(c) for row in rows for c in row] + [1])
        label_width = max([len(text) for text in labels] + [0])

        lines = [" " * label_width + " " + " ".join(text.rjust(width) for text in labels)]
        for label, cells in zip(labels, rows):
            lines.append(label.ljust(label_width) + " " + " ".join(c.rjust(width) for c in cells))
        return "\n".join(line.rstrip() for line in lines) + "\n"


__all__ = ["AdjacencyMatrixGraph"]

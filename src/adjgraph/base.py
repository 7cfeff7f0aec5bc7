from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Hashable, Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np
import graphblas as gb
from graphblas import Matrix

from ._logging import getLogger
from .errors import VertexNotFoundError
from .traversal import breadth_first

logger = getLogger(__name__)

Arc = Tuple[Hashable, Hashable, Optional[float]]


class Graph(ABC):
    """
    Capability contract shared by the adjacency-list and adjacency-matrix engines.

    Relations:
      - An arc is a directed relation ``src -> dest``, weighted iff the graph is.
      - An edge is not stored; it is the presence of both ``src -> dest`` and
        ``dest -> src`` (with equal weights on a weighted graph).

    Error discipline:
      - Mutations return ``bool`` and weight queries return ``float | None``.
        Mode mismatches, absent vertices or relations, duplicates, ``None``
        keys, self relations and exhausted capacity all make the call fail
        without side effects.
      - Calls with no sentinel result (traversals, ``neighbours``) raise
        :class:`VertexNotFoundError` for an absent vertex.

    Engines address vertices through integer handles and implement the
    storage primitives below; every public rule lives in this class.
    """

    __slots__ = ("_weighted",)

    def __init__(self, weighted: bool = False) -> None:
        self._weighted = bool(weighted)

    @classmethod
    def from_arcs(
        cls,
        arcs: Iterable[Sequence[Any]],
        *,
        weighted: bool = False,
        **kwargs: Any,
    ) -> Graph:
        """
        Build a graph from ``(src, dest)`` or ``(src, dest, weight)`` tuples.

        Missing vertices are added on first sight. Arcs the graph rejects
        (duplicates, self relations, a full matrix) are skipped and logged.
        Extra keyword arguments go to the engine constructor.
        """
        graph = cls(weighted=weighted, **kwargs)
        for item in arcs:
            if len(item) == 2:
                src, dest = item
                weight = None
            elif len(item) == 3:
                src, dest, weight = item
            else:
                raise ValueError(f"Arc tuples must have 2 or 3 items, got {item!r}")

            for key in (src, dest):
                if key not in graph:
                    graph.add_vertex(key)
            if not graph.add_arc(src, dest, weight):
                logger.warning("from_arcs: skipped arc %r -> %r", src, dest)
        return graph

    # ------------------------------------------------------------------ #
    # Storage primitives (engine specific)
    # ------------------------------------------------------------------ #
    @abstractmethod
    def _locate(self, key: Hashable) -> Optional[int]:
        """Return the handle of `key`, or None when absent."""

    @abstractmethod
    def _key_of(self, handle: int) -> Hashable: ...

    @abstractmethod
    def _insert_vertex(self, key: Hashable) -> bool:
        """Store a new vertex known not to be present yet."""

    @abstractmethod
    def _delete_vertex(self, handle: int) -> None:
        """Remove a vertex and every arc that references it."""

    @abstractmethod
    def _has_arc_at(self, src: int, dest: int) -> bool: ...

    @abstractmethod
    def _weight_at(self, src: int, dest: int) -> Optional[float]: ...

    @abstractmethod
    def _put_arc(self, src: int, dest: int, weight: Optional[float]) -> None:
        """Insert the arc, or overwrite the weight of an existing one in place."""

    @abstractmethod
    def _drop_arc(self, src: int, dest: int) -> None: ...

    @abstractmethod
    def _neighbour_handles(self, handle: int) -> Sequence[int]: ...

    @abstractmethod
    def _reset_marks(self) -> None: ...

    @abstractmethod
    def _is_visited(self, handle: int) -> bool: ...

    @abstractmethod
    def _mark(self, handle: int) -> None: ...

    @abstractmethod
    def _depth_first(self, start: int) -> Iterator[int]: ...

    # ------------------------------------------------------------------ #
    # Read-only structure (engine specific)
    # ------------------------------------------------------------------ #
    @abstractmethod
    def vertex_count(self) -> int: ...

    @abstractmethod
    def vertices(self) -> List[Hashable]:
        """Vertex keys in storage order."""

    @abstractmethod
    def arcs(self) -> Iterator[Arc]:
        """Yield every stored arc as ``(src, dest, weight)``."""

    @abstractmethod
    def to_string(self) -> str: ...

    # ------------------------------------------------------------------ #
    # Mode and request checks
    # ------------------------------------------------------------------ #
    @property
    def is_weighted(self) -> bool:
        return self._weighted

    def _accepts(self, op: str, weight: Optional[float]) -> bool:
        if self._weighted and weight is None:
            logger.debug("%s rejected: weighted graph needs a weight", op)
            return False
        if not self._weighted and weight is not None:
            logger.debug("%s rejected: unweighted graph takes no weight", op)
            return False
        if weight is not None and math.isnan(float(weight)):
            logger.debug("%s rejected: weight is NaN", op)
            return False
        return True

    def _resolve_pair(
        self, op: str, src: Hashable, dest: Hashable
    ) -> Optional[Tuple[int, int]]:
        if src is None or dest is None:
            logger.debug("%s rejected: None key", op)
            return None
        if src == dest:
            logger.debug("%s rejected: self relation on %r", op, src)
            return None
        s = self._locate(src)
        d = self._locate(dest)
        if s is None or d is None:
            logger.debug("%s rejected: vertex missing (%r -> %r)", op, src, dest)
            return None
        return s, d

    def _require(self, key: Hashable) -> int:
        handle = None if key is None else self._locate(key)
        if handle is None:
            raise VertexNotFoundError(key)
        return handle

    def _is_edge_at(self, s: int, d: int) -> bool:
        if not (self._has_arc_at(s, d) and self._has_arc_at(d, s)):
            return False
        return not self._weighted or self._weight_at(s, d) == self._weight_at(d, s)

    # ------------------------------------------------------------------ #
    # Vertices
    # ------------------------------------------------------------------ #
    def add_vertex(self, key: Hashable) -> bool:
        if key is None:
            logger.debug("add_vertex rejected: None key")
            return False
        if self._locate(key) is not None:
            logger.debug("add_vertex rejected: duplicate key %r", key)
            return False
        return self._insert_vertex(key)

    def remove_vertex(self, key: Hashable) -> bool:
        handle = None if key is None else self._locate(key)
        if handle is None:
            logger.debug("remove_vertex rejected: %r not found", key)
            return False
        self._delete_vertex(handle)
        return True

    def has_vertex(self, key: Hashable) -> bool:
        return key is not None and self._locate(key) is not None

    def neighbours(self, key: Hashable) -> List[Hashable]:
        """Destinations of the outgoing arcs of `key`, in storage order."""
        handle = self._require(key)
        return [self._key_of(h) for h in self._neighbour_handles(handle)]

    # ------------------------------------------------------------------ #
    # Arcs
    # ------------------------------------------------------------------ #
    def add_arc(self, src: Hashable, dest: Hashable, weight: Optional[float] = None) -> bool:
        if not self._accepts("add_arc", weight):
            return False
        pair = self._resolve_pair("add_arc", src, dest)
        if pair is None:
            return False
        s, d = pair
        if self._has_arc_at(s, d):
            logger.debug("add_arc rejected: %r -> %r exists", src, dest)
            return False
        self._put_arc(s, d, None if weight is None else float(weight))
        return True

    def remove_arc(self, src: Hashable, dest: Hashable) -> bool:
        pair = self._resolve_pair("remove_arc", src, dest)
        if pair is None:
            return False
        s, d = pair
        if not self._has_arc_at(s, d):
            logger.debug("remove_arc rejected: %r -> %r not found", src, dest)
            return False
        self._drop_arc(s, d)
        return True

    def update_arc(self, src: Hashable, dest: Hashable, weight: float) -> bool:
        if not self._weighted:
            logger.debug("update_arc rejected: unweighted graph")
            return False
        if not self._accepts("update_arc", weight):
            return False
        pair = self._resolve_pair("update_arc", src, dest)
        if pair is None:
            return False
        s, d = pair
        if not self._has_arc_at(s, d):
            logger.debug("update_arc rejected: %r -> %r not found", src, dest)
            return False
        self._put_arc(s, d, float(weight))
        return True

    def get_arc_weight(self, src: Hashable, dest: Hashable) -> Optional[float]:
        if not self._weighted:
            return None
        pair = self._resolve_pair("get_arc_weight", src, dest)
        if pair is None:
            return None
        return self._weight_at(*pair)

    def has_arc(self, src: Hashable, dest: Hashable) -> bool:
        pair = self._resolve_pair("has_arc", src, dest)
        return pair is not None and self._has_arc_at(*pair)

    # ------------------------------------------------------------------ #
    # Edges (pairs of opposite arcs)
    # ------------------------------------------------------------------ #
    def add_edge(self, src: Hashable, dest: Hashable, weight: Optional[float] = None) -> bool:
        """
        Make `src` and `dest` mutually related.

        - neither arc present: both are created with `weight`;
        - one arc present: it is kept, its weight synced to `weight`, and the
          reverse arc is created;
        - both present: the call fails and nothing is overwritten.
        """
        if not self._accepts("add_edge", weight):
            return False
        pair = self._resolve_pair("add_edge", src, dest)
        if pair is None:
            return False
        s, d = pair
        if self._has_arc_at(s, d) and self._has_arc_at(d, s):
            logger.debug("add_edge rejected: %r <-> %r exists", src, dest)
            return False
        value = None if weight is None else float(weight)
        self._put_arc(s, d, value)
        self._put_arc(d, s, value)
        return True

    def remove_edge(self, src: Hashable, dest: Hashable) -> bool:
        pair = self._resolve_pair("remove_edge", src, dest)
        if pair is None:
            return False
        s, d = pair
        if not (self._has_arc_at(s, d) and self._has_arc_at(d, s)):
            logger.debug("remove_edge rejected: %r <-> %r not found", src, dest)
            return False
        self._drop_arc(s, d)
        self._drop_arc(d, s)
        return True

    def update_edge(self, src: Hashable, dest: Hashable, weight: float) -> bool:
        if not self._weighted:
            logger.debug("update_edge rejected: unweighted graph")
            return False
        if not self._accepts("update_edge", weight):
            return False
        pair = self._resolve_pair("update_edge", src, dest)
        if pair is None:
            return False
        s, d = pair
        if not self._is_edge_at(s, d):
            logger.debug("update_edge rejected: %r <-> %r is not an edge", src, dest)
            return False
        self._put_arc(s, d, float(weight))
        self._put_arc(d, s, float(weight))
        return True

    def get_edge_weight(self, src: Hashable, dest: Hashable) -> Optional[float]:
        if not self._weighted:
            return None
        pair = self._resolve_pair("get_edge_weight", src, dest)
        if pair is None or not self._is_edge_at(*pair):
            return None
        return self._weight_at(*pair)

    def has_edge(self, src: Hashable, dest: Hashable) -> bool:
        pair = self._resolve_pair("has_edge", src, dest)
        return pair is not None and self._is_edge_at(*pair)

    # ------------------------------------------------------------------ #
    # Traversal
    # ------------------------------------------------------------------ #
    def dfs(self, start: Hashable) -> Iterator[Hashable]:
        """
        Depth-first visitation order from `start`.

        Raises VertexNotFoundError immediately when `start` is absent. Visited
        markers are reset on every call; the graph must not be mutated or
        traversed again while the returned iterator is being consumed.
        """
        handle = self._require(start)
        self._reset_marks()
        return self._keys(self._depth_first(handle))

    def bfs(self, start: Hashable) -> Iterator[Hashable]:
        """Breadth-first visitation order from `start`; same contract as dfs."""
        handle = self._require(start)
        self._reset_marks()
        return self._keys(
            breadth_first(handle, self._neighbour_handles, self._is_visited, self._mark)
        )

    def _keys(self, handles: Iterator[int]) -> Iterator[Hashable]:
        for handle in handles:
            yield self._key_of(handle)

    # ------------------------------------------------------------------ #
    # Export and introspection
    # ------------------------------------------------------------------ #
    def arc_count(self) -> int:
        return sum(1 for _ in self.arcs())

    def to_graphblas(self) -> Matrix:
        """
        Export the relations as a square GraphBLAS matrix.

        Row/column ``i`` is the i-th key of :meth:`vertices`. Values are BOOL
        (always True) on unweighted graphs and FP64 weights otherwise.
        """
        keys = self.vertices()
        position = {key: i for i, key in enumerate(keys)}

        rows: List[int] = []
        cols: List[int] = []
        values: List[Any] = []
        for src, dest, weight in self.arcs():
            rows.append(position[src])
            cols.append(position[dest])
            values.append(True if weight is None else weight)

        if self._weighted:
            dtype = gb.dtypes.FP64
            val_arr = np.asarray(values, dtype=np.float64)
        else:
            dtype = gb.dtypes.BOOL
            val_arr = np.asarray(values, dtype=np.bool_)

        return gb.Matrix.from_coo(
            np.asarray(rows, dtype=np.int64),
            np.asarray(cols, dtype=np.int64),
            val_arr,
            dtype=dtype,
            nrows=len(keys),
            ncols=len(keys),
        )

    def __len__(self) -> int:
        return self.vertex_count()

    def __contains__(self, key: object) -> bool:
        return self.has_vertex(key)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(weighted={self._weighted}, "
            f"vertices={self.vertex_count()}, "
            f"arcs={self.arc_count()})"
        )

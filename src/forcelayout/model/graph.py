from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Union

import numpy as np

from forcelayout.errors import MalformedInputError
from forcelayout.model.io import NodeRecord

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class DependencyGraph:
    """
    Directed dependency graph with dense node indices.

    Node ``i`` is the i-th record the graph was built from. Edges are stored
    as an ``(m, 2)`` array of ``(source, target)`` indices, source being the
    record that lists the dependency. Parallel edges and self-loops are kept.
    """
    def __init__(
        self,
        names: list[str],
        edges: npt.NDArray[np.int64],
        groups: Optional[list[Optional[str]]] = None,
    ) -> None:
        self._names = list(names)
        self._index = {name: i for i, name in enumerate(self._names)}
        if len(self._index) != len(self._names):
            duplicate = next(n for n in self._names if self._names.count(n) > 1)
            raise MalformedInputError(f"Duplicate node name '{duplicate}'.", reference=duplicate)

        self._groups = list(groups) if groups is not None else [None] * len(self._names)
        if len(self._groups) != len(self._names):
            raise ValueError("One group tag is required per node.")

        edges = np.asarray(edges, dtype=np.int64).reshape(-1, 2)
        if edges.size and (edges.min() < 0 or edges.max() >= len(self._names)):
            raise MalformedInputError("Edge references a node index outside the graph.")
        self._edges = edges
        self._edges.setflags(write=False)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(nodes={self.n_nodes}, edges={self.n_edges})"

    @classmethod
    def empty(cls) -> DependencyGraph:
        """A graph without nodes, for callers that continue after bad input."""
        return cls(names=[], edges=np.empty((0, 2), dtype=np.int64))

    @classmethod
    def from_records(
        cls,
        records: Iterable[Union[NodeRecord, dict[str, Any]]],
        exclude: Iterable[str] = (),
    ) -> DependencyGraph:
        """
        Build the graph, resolving every dependency name to a node index.

        Args:
            records: Node records (or raw record dicts).
            exclude: Node names whose incident edges are skipped. The nodes
                themselves stay in the graph.

        Raises:
            MalformedInputError: A dependency does not name any record, or two
                records share a name.
        """
        records = [r if isinstance(r, NodeRecord) else NodeRecord.from_dict(r) for r in records]
        excluded = set(exclude)

        # 1) Nodes first, so dependencies may point forward in the list
        index: dict[str, int] = {}
        for i, record in enumerate(records):
            if record.name in index:
                raise MalformedInputError(
                    f"Duplicate node name '{record.name}'.", reference=record.name, node=record.name
                )
            index[record.name] = i

        # 2) Edges
        sources: list[int] = []
        targets: list[int] = []
        skipped = 0
        for record in records:
            for dep in record.dependencies:
                if dep not in index:
                    raise MalformedInputError(
                        f"Node '{record.name}' depends on unknown node '{dep}'.",
                        reference=dep,
                        node=record.name,
                    )
                if record.name in excluded or dep in excluded:
                    skipped += 1
                    continue
                sources.append(index[record.name])
                targets.append(index[dep])

        edges = np.column_stack((
            np.asarray(sources, dtype=np.int64),
            np.asarray(targets, dtype=np.int64),
        ))
        graph = cls(
            names=[r.name for r in records],
            edges=edges,
            groups=[r.group for r in records],
        )
        logger.info(f"Built graph with {graph.n_nodes} nodes and {graph.n_edges} edges.")
        if skipped:
            logger.info(f"Skipped {skipped} edges touching excluded nodes.")
        return graph

    @property
    def n_nodes(self) -> int:
        return len(self._names)

    @property
    def n_edges(self) -> int:
        return int(self._edges.shape[0])

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._names)

    @property
    def groups(self) -> tuple[Optional[str], ...]:
        """Presentation tags; never read by the layout math."""
        return tuple(self._groups)

    @property
    def edges(self) -> npt.NDArray[np.int64]:
        """Read-only ``(m, 2)`` array of ``(source, target)`` indices."""
        return self._edges

    @property
    def name_index(self) -> Mapping[str, int]:
        """Read-only name to index map."""
        return MappingProxyType(self._index)

    def index_of(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise KeyError(f"No node named '{name}'.") from None

    def name_of(self, index: int) -> str:
        return self._names[index]

    def edge_names(self) -> list[tuple[str, str]]:
        return [(self._names[a], self._names[b]) for a, b in self._edges]

    def degree(self) -> npt.NDArray[np.int64]:
        """Number of edge endpoints per node (a self-loop counts twice)."""
        return np.bincount(self._edges.ravel(), minlength=self.n_nodes).astype(np.int64)

"""
Render Adapter Boundary
=======================
Read-only data handed to whatever draws the layout.

The engine draws nothing. A renderer asks the simulation for a
``LayoutFrame`` once per frame and reads node names, positions and edges
from it. ``edge_segments`` precomputes the geometry a sprite-based edge
renderer needs (midpoint, length, rotation). ``GroupPalette`` hands out one
color per group tag; group tags never influence the physics.
"""
from __future__ import annotations

import colorsys
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional

import numpy as np

from forcelayout import config

if TYPE_CHECKING:
    import numpy.typing as npt

    from forcelayout.physics.simulation import Simulation


def _readonly(array: npt.NDArray) -> npt.NDArray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class EdgeSegments:
    """Per-edge drawing geometry, every array indexed like ``LayoutFrame.edges``."""
    start: npt.NDArray[np.float64]
    end: npt.NDArray[np.float64]
    midpoint: npt.NDArray[np.float64]
    length: npt.NDArray[np.float64]
    angle: npt.NDArray[np.float64]


@dataclass(frozen=True)
class LayoutFrame:
    tick: int
    names: tuple[str, ...]
    groups: tuple[Optional[str], ...]
    positions: npt.NDArray[np.float64]
    edges: npt.NDArray[np.int64]
    index: Mapping[str, int] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.index and self.names:
            object.__setattr__(self, "index", MappingProxyType({n: i for i, n in enumerate(self.names)}))

    @classmethod
    def from_simulation(cls, simulation: Simulation) -> LayoutFrame:
        graph = simulation.graph
        return cls(
            tick=simulation.tick_count,
            names=graph.names,
            groups=graph.groups,
            positions=_readonly(simulation.positions.copy()),
            edges=graph.edges,
            index=graph.name_index,
        )

    def position_of(self, name: str) -> tuple[float, float]:
        try:
            i = self.index[name]
        except KeyError:
            raise KeyError(f"No node named '{name}'.") from None
        return float(self.positions[i, 0]), float(self.positions[i, 1])

    def edge_segments(self) -> EdgeSegments:
        start = self.positions[self.edges[:, 0]]
        end = self.positions[self.edges[:, 1]]
        diff = start - end
        return EdgeSegments(
            start=start,
            end=end,
            midpoint=(start + end) / 2.0,
            length=np.hypot(diff[:, 0], diff[:, 1]),
            angle=np.arctan2(diff[:, 1], diff[:, 0]),
        )

    def bounds(self) -> tuple[float, float, float, float]:
        """``(min_x, min_y, max_x, max_y)`` of all nodes; zeros for an empty frame."""
        if self.positions.shape[0] == 0:
            return 0.0, 0.0, 0.0, 0.0
        lo = self.positions.min(axis=0)
        hi = self.positions.max(axis=0)
        return float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1])


class GroupPalette:
    """
    Stable random color per group tag.

    The first time a tag is seen it gets a random hue; the same tag always
    returns the same color afterwards. Colors are RGB tuples in [0, 1].
    """
    def __init__(
        self,
        seed: Optional[int] = None,
        saturation: float = config.GROUP_SATURATION,
        lightness: float = config.GROUP_LIGHTNESS,
    ) -> None:
        self._rng = np.random.default_rng(seed)
        self._saturation = saturation
        self._lightness = lightness
        self._colors: dict[Optional[str], tuple[float, float, float]] = {}

    def __len__(self) -> int:
        return len(self._colors)

    def __contains__(self, group: Optional[str]) -> bool:
        return group in self._colors

    def color_of(self, group: Optional[str]) -> tuple[float, float, float]:
        if group not in self._colors:
            hue = float(self._rng.uniform(0.0, 1.0))
            self._colors[group] = colorsys.hls_to_rgb(hue, self._lightness, self._saturation)
        return self._colors[group]

    def colors_for(self, groups: tuple[Optional[str], ...]) -> list[tuple[float, float, float]]:
        return [self.color_of(g) for g in groups]

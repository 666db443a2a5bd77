from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import numpy as np

from forcelayout import config

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class LayoutState:
    """
    Positions and displacement accumulator of every node.

    Both arrays have shape ``(n_nodes, 2)`` and are indexed like the graph's
    nodes. Only the integrator writes ``positions``; only the force kernels
    write ``displacement``.
    """
    def __init__(self, positions: npt.NDArray[np.float64]) -> None:
        positions = np.array(positions, dtype=np.float64).reshape(-1, 2)
        self.positions: npt.NDArray[np.float64] = positions
        self.displacement: npt.NDArray[np.float64] = np.zeros_like(positions)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(n_nodes={self.n_nodes})"

    @classmethod
    def random(
        cls,
        n_nodes: int,
        spread: float = config.INITIAL_SPREAD,
        seed: Optional[int] = None,
    ) -> LayoutState:
        """Uniformly random positions in the square ``[-spread, spread]^2``."""
        rng = np.random.default_rng(seed)
        positions = rng.uniform(-spread, spread, size=(n_nodes, 2))
        logger.debug(f"Placed {n_nodes} nodes in a square of half-width {spread}")
        return cls(positions)

    @property
    def n_nodes(self) -> int:
        return int(self.positions.shape[0])

    def reset_displacement(self) -> None:
        self.displacement.fill(0.0)

    def snapshot(self) -> npt.NDArray[np.float64]:
        """Copy of the positions that the kernels of one tick read from."""
        return self.positions.copy()

    def radii(self) -> npt.NDArray[np.float64]:
        """Distance of every node from the origin."""
        return np.hypot(self.positions[:, 0], self.positions[:, 1])

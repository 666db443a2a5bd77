"""
Simulation Context
==================
Advances the layout one tick at a time.

Why is this file needed?
------------------------
1. Context: The graph, the layout state and the parameter store are owned by
   one ``Simulation`` object that is handed to every kernel call, instead of
   living in module globals.
2. Barrier: A tick reads ONE parameter snapshot and ONE position snapshot.
   All kernels accumulate from that snapshot; positions are written only by
   the integrator, in a single pass after every kernel has finished.

Note: This module should be pure NumPy/numba and should NOT draw anything.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

import numpy as np

from forcelayout import config
from forcelayout.model.parameters import ParameterStore
from forcelayout.model.state import LayoutState
from forcelayout.physics.integrator import integrate
from forcelayout.physics.kernels import (
    accumulate_attraction,
    accumulate_centering,
    accumulate_repulsion,
)
from forcelayout.view.frame import LayoutFrame

if TYPE_CHECKING:
    import numpy.typing as npt

    from forcelayout.model.graph import DependencyGraph
    from forcelayout.model.parameters import ForceParameters

logger = logging.getLogger(__name__)

# Called after every tick of ``Simulation.run``; returning False stops the run
TickCallback = Callable[["Simulation"], Optional[bool]]


class Simulation:
    """
    Force-directed layout of one dependency graph.

    Args:
        graph: The graph to lay out.
        parameters: Store the tunables are read from. A fresh store with the
            default values is created when omitted.
        state: Initial layout. Random positions are drawn when omitted.
        seed: Seed for the random initial positions.
        spread: Half-width of the square the random positions are drawn from.
    """
    def __init__(
        self,
        graph: DependencyGraph,
        parameters: Optional[ParameterStore] = None,
        state: Optional[LayoutState] = None,
        seed: Optional[int] = None,
        spread: float = config.INITIAL_SPREAD,
    ) -> None:
        self.graph = graph
        self.parameters = parameters if parameters is not None else ParameterStore()

        if state is None:
            state = LayoutState.random(graph.n_nodes, spread=spread, seed=seed)
        elif state.n_nodes != graph.n_nodes:
            raise ValueError(
                f"Layout state has {state.n_nodes} nodes, graph has {graph.n_nodes}."
            )
        self.state = state

        # Writable, contiguous copy for the kernels
        self._edges: npt.NDArray[np.int64] = np.ascontiguousarray(graph.edges, dtype=np.int64).copy()

        self.tick_count: int = 0
        self.last_parameters: Optional[ForceParameters] = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(graph={self.graph!r}, tick={self.tick_count})"

    @property
    def positions(self) -> npt.NDArray[np.float64]:
        return self.state.positions

    def set_positions(self, positions: npt.NDArray[np.float64]) -> None:
        """Overwrite all positions, e.g. to restart from a host-provided layout."""
        positions = np.asarray(positions, dtype=np.float64)
        if positions.shape != self.state.positions.shape:
            raise ValueError(
                f"Expected positions of shape {self.state.positions.shape}, got {positions.shape}."
            )
        self.state.positions[:] = positions

    def accumulate_forces(
        self,
        snapshot: npt.NDArray[np.float64],
        params: ForceParameters,
    ) -> npt.NDArray[np.float64]:
        """
        Zero the accumulator and add every force computed from ``snapshot``.

        Returns:
            The accumulator (``state.displacement``).
        """
        displacement = self.state.displacement
        self.state.reset_displacement()

        accumulate_attraction(snapshot, displacement, self._edges, params.attraction, params.k)
        accumulate_repulsion(snapshot, displacement, params.repulsion, params.k)
        accumulate_centering(snapshot, displacement, params.center)
        return displacement

    def tick(self) -> None:
        """Advance every node once."""
        params = self.parameters.snapshot()
        snapshot = self.state.snapshot()

        self.accumulate_forces(snapshot, params)
        integrate(self.state.positions, self.state.displacement, params.max_step, params.max_diameter)

        self.last_parameters = params
        self.tick_count += 1
        logger.debug(f"Tick {self.tick_count} done")

    def run(self, n_ticks: int, callback: Optional[TickCallback] = None) -> int:
        """
        Run up to ``n_ticks`` ticks.

        Args:
            n_ticks: Number of ticks to run.
            callback: Called after every tick with this simulation. Returning
                ``False`` stops the run early.

        Returns:
            The number of ticks actually run.
        """
        done = 0
        for _ in range(n_ticks):
            self.tick()
            done += 1
            if callback is not None and callback(self) is False:
                logger.info(f"Run stopped by callback after {done} ticks.")
                break
        return done

    def frame(self) -> LayoutFrame:
        """Read-only view of the current layout for the renderer."""
        return LayoutFrame.from_simulation(self)

# kernels.py
from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt
import numba as nb

# ---- JIT'd force kernels ----
#
# Every kernel reads a position snapshot of shape (n, 2) and ADDS its
# contribution into ``displacement`` (same shape). None of them writes
# positions, so they can run in any order within a tick.
#
# error_model="numpy": a zero k gives inf/nan instead of ZeroDivisionError.


@nb.njit(cache=True, fastmath=True, parallel=True, error_model="numpy")
def accumulate_repulsion(
    positions: npt.NDArray[np.float64],
    displacement: npt.NDArray[np.float64],
    repulsion: float,
    k: float,
) -> None:
    """
    Pairwise repulsion between all distinct nodes, O(n^2).

    For a pair (a, b) at distance d the magnitude is ``repulsion * k^2 / d``,
    pushing a away from b and b away from a. Coincident nodes contribute
    nothing.

    Rows are split across threads; each thread only sums into the row of the
    node it owns, so no update is lost.

    Args:
        positions:    Position snapshot, shape (n, 2).
        displacement: Accumulator, shape (n, 2), modified in-place.
        repulsion:    Repulsion coefficient.
        k:            Ideal distance.
    """
    n = positions.shape[0]
    c = repulsion * k * k
    for i in nb.prange(n):
        xi = positions[i, 0]
        yi = positions[i, 1]
        sx = 0.0
        sy = 0.0
        for j in range(n):
            if j == i:
                continue
            dx = positions[j, 0] - xi
            dy = positions[j, 1] - yi
            dist = math.sqrt(dx * dx + dy * dy)
            if dist > 0.0:
                f = c / dist
                sx -= f * dx / dist
                sy -= f * dy / dist
        displacement[i, 0] += sx
        displacement[i, 1] += sy


@nb.njit(cache=True, fastmath=True, error_model="numpy")
def accumulate_attraction(
    positions: npt.NDArray[np.float64],
    displacement: npt.NDArray[np.float64],
    edges: npt.NDArray[np.int64],
    attraction: float,
    k: float,
) -> None:
    """
    Spring attraction along every edge.

    For an edge (a, b) at distance d the magnitude is ``attraction * d / k``,
    pulling both endpoints toward each other. Parallel edges each add their
    own pull. Zero-length edges (self-loops, coincident endpoints) add nothing.

    Args:
        positions:    Position snapshot, shape (n, 2).
        displacement: Accumulator, shape (n, 2), modified in-place.
        edges:        (m, 2) array of (source, target) node indices.
        attraction:   Attraction coefficient.
        k:            Ideal distance.
    """
    for e in range(edges.shape[0]):
        a = edges[e, 0]
        b = edges[e, 1]
        dx = positions[a, 0] - positions[b, 0]
        dy = positions[a, 1] - positions[b, 1]
        dist = math.sqrt(dx * dx + dy * dy)
        if dist > 0.0:
            f = attraction * dist / k
            ux = dx / dist
            uy = dy / dist
            displacement[a, 0] -= f * ux
            displacement[a, 1] -= f * uy
            displacement[b, 0] += f * ux
            displacement[b, 1] += f * uy


@nb.njit(cache=True, fastmath=True)
def accumulate_centering(
    positions: npt.NDArray[np.float64],
    displacement: npt.NDArray[np.float64],
    center: float,
) -> None:
    """Soft quadratic pull toward the origin: ``-center * p * |p|``."""
    for i in range(positions.shape[0]):
        x = positions[i, 0]
        y = positions[i, 1]
        r = math.sqrt(x * x + y * y)
        displacement[i, 0] -= center * x * r
        displacement[i, 1] -= center * y * r

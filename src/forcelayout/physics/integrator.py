from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt
import numba as nb


@nb.njit(cache=True, error_model="numpy")
def integrate(
    positions: npt.NDArray[np.float64],
    displacement: npt.NDArray[np.float64],
    max_step: float,
    max_diameter: float,
) -> None:
    """
    Apply the accumulated displacement to every node.

    Per node the displacement is shortened to at most ``max_step`` (never
    lengthened), added to the position and cleared. The position is then
    pulled radially back onto the circle of radius ``max_diameter / 2`` if it
    ended up outside of it.

    Args:
        positions:    Node positions, shape (n, 2), modified in-place.
        displacement: Accumulated displacement, shape (n, 2), zeroed in-place.
        max_step:     Largest distance a node may travel in one tick.
        max_diameter: Diameter of the containment circle.
    """
    radius = max_diameter / 2.0
    for i in range(positions.shape[0]):
        dx = displacement[i, 0]
        dy = displacement[i, 1]
        length = math.sqrt(dx * dx + dy * dy)
        if length > 0.0:
            step = min(length, max_step)
            positions[i, 0] += dx / length * step
            positions[i, 1] += dy / length * step

        displacement[i, 0] = 0.0
        displacement[i, 1] = 0.0

        # Containment clamp
        x = positions[i, 0]
        y = positions[i, 1]
        r = math.sqrt(x * x + y * y)
        if r > radius:
            positions[i, 0] = x / r * radius
            positions[i, 1] = y / r * radius

"""
Layout Physics
==============
Force kernels, the integrator and the tick loop.

Note: This package should be pure NumPy/numba and should NOT draw anything.
"""
from forcelayout.physics.simulation import Simulation

__all__ = ["Simulation"]

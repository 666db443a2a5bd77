"""
Configuration & Default Constants
=================================
This module serves as the central registry for default physical parameters,
their suggested control ranges and file paths.

Why is this file needed?
------------------------
1. Tuning: The force constants were found by hand on large package graphs.
   Keeping them here means a host application can change the defaults
   without touching the kernels.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find the default node-record payload when the host is frozen into an .exe.

Exports:
    DEFAULT_PARAMETERS (dict): Initial value of every tunable.
    PARAMETER_RANGES (dict): Suggested (min, max) for control surfaces.
    INITIAL_SPREAD (float): Half-width of the square used for initial positions.
    DEFAULT_GRAPH_PATH (str): Absolute path to the default payload file.
"""
import sys
import os
import math
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # config.py is in src/forcelayout/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Order matters: it is the order control surfaces list the tunables in.
PARAMETER_NAMES: tuple[str, ...] = (
    "repulsion",
    "attraction",
    "center",
    "k",
    "max_step",
    "max_diameter",
)

DEFAULT_PARAMETERS: dict[str, float] = {
    "repulsion": 300.0,
    "attraction": 0.01,
    "center": 0.00001,
    # Ideal spacing for ~2000 nodes spread over a 10000 wide square
    "k": 10000.0 / 2.0 * math.sqrt(3.1415 / 2000.0),
    "max_step": 10.0,
    "max_diameter": 30000.0,
}

PARAMETER_RANGES: dict[str, tuple[float, float]] = {
    "repulsion": (90.0, 10000.0),
    "attraction": (0.01, 10.0),
    "center": (0.000001, 0.1),
    "k": (0.1, 1000.0),
    "max_step": (0.1, 100.0),
    "max_diameter": (1000.0, 500000.0),
}

# Initial positions are drawn from [-INITIAL_SPREAD, INITIAL_SPREAD]^2
INITIAL_SPREAD: float = 50000.0

# Group colors (HSL)
GROUP_SATURATION: float = 0.7
GROUP_LIGHTNESS: float = 0.5

DEFAULT_GRAPH_PATH: str = get_resource_path("packages-map.json")

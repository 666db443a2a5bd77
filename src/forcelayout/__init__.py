"""Force-directed layout engine for large dependency graphs."""
from forcelayout.errors import LayoutError, MalformedInputError, UnknownParameterError
from forcelayout.model.graph import DependencyGraph
from forcelayout.model.io import NodeRecord, collect_records, load_records, parse_records
from forcelayout.model.parameters import ForceParameters, ParameterStore
from forcelayout.model.state import LayoutState
from forcelayout.physics.simulation import Simulation
from forcelayout.view.frame import GroupPalette, LayoutFrame

__all__ = [
    "DependencyGraph",
    "ForceParameters",
    "GroupPalette",
    "LayoutError",
    "LayoutFrame",
    "LayoutState",
    "MalformedInputError",
    "NodeRecord",
    "ParameterStore",
    "Simulation",
    "UnknownParameterError",
    "collect_records",
    "load_records",
    "parse_records",
]

from __future__ import annotations

import numpy as np

from forcelayout.model.graph import DependencyGraph
from forcelayout.model.parameters import ParameterStore
from forcelayout.model.state import LayoutState
from forcelayout.physics.simulation import Simulation


def pair_simulation(
    a: tuple[float, float],
    b: tuple[float, float],
    connected: bool,
    **params: float,
) -> Simulation:
    deps = ["b"] if connected else []
    graph = DependencyGraph.from_records([
        {"Name": "a", "dep": deps},
        {"Name": "b", "dep": []},
    ])
    values = {"max_diameter": 1.0e6, "max_step": 10.0}
    values.update(params)
    state = LayoutState(np.array([a, b], dtype=np.float64))
    return Simulation(graph, parameters=ParameterStore(**values), state=state)


def separation(simulation: Simulation) -> float:
    p = simulation.positions
    return float(np.hypot(*(p[0] - p[1])))


def chain_records(n: int) -> list[dict]:
    records = [{"Name": f"n{i}", "dep": [f"n{i + 1}"], "introduced_in": f"g{i % 3}"} for i in range(n - 1)]
    records.append({"Name": f"n{n - 1}", "dep": []})
    return records

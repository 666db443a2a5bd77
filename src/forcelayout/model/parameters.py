"""
Parameter Store
===============
Holds the six tunables of the force model.

Why is this file needed?
------------------------
1. Live tuning: A control surface (sliders, a REPL, a script) may change any
   value while the simulation runs.
2. Consistency: A tick must see all six values from the same moment. Writers
   go through a lock and every tick reads one immutable ``ForceParameters``
   snapshot, so an update of several values lands either entirely before or
   entirely after a tick.

Values are coerced to float but never range-checked. Callers that need
validation can use ``ForceParameters.clamped()``.

Classes:
    ForceParameters: Frozen snapshot of the tunables.
    ParameterStore: Mutable, thread-safe holder.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, asdict, replace
from typing import Any, Optional

from forcelayout import config
from forcelayout.errors import UnknownParameterError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForceParameters:
    repulsion: float = config.DEFAULT_PARAMETERS["repulsion"]
    attraction: float = config.DEFAULT_PARAMETERS["attraction"]
    center: float = config.DEFAULT_PARAMETERS["center"]
    k: float = config.DEFAULT_PARAMETERS["k"]
    max_step: float = config.DEFAULT_PARAMETERS["max_step"]
    max_diameter: float = config.DEFAULT_PARAMETERS["max_diameter"]

    def to_dict(self) -> dict[str, float]:
        return asdict(self)

    def clamped(self, ranges: Optional[dict[str, tuple[float, float]]] = None) -> ForceParameters:
        """Return a copy with every value clamped into its suggested range."""
        ranges = ranges or config.PARAMETER_RANGES
        values = {}
        for name, value in self.to_dict().items():
            lo, hi = ranges[name]
            values[name] = min(max(value, lo), hi)
        return ForceParameters(**values)


def _check_name(name: str) -> None:
    if name not in config.PARAMETER_NAMES:
        raise UnknownParameterError(name)


class ParameterStore:
    """
    Mutable holder of the force parameters.

    Every accessor takes the lock, so readers on other threads never see a
    half-applied ``update``.
    """
    def __init__(self, initial: Optional[ForceParameters] = None, **overrides: float) -> None:
        self._lock = threading.Lock()
        self._values = initial or ForceParameters()
        if overrides:
            self.update(**overrides)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.snapshot()})"

    def snapshot(self) -> ForceParameters:
        with self._lock:
            return self._values

    def get(self, name: str) -> float:
        _check_name(name)
        with self._lock:
            return getattr(self._values, name)

    def set(self, name: str, value: float) -> None:
        self.update(**{name: value})

    def update(self, **values: Any) -> None:
        """Set several tunables at once."""
        for name in values:
            _check_name(name)
        coerced = {name: float(value) for name, value in values.items()}
        with self._lock:
            self._values = replace(self._values, **coerced)
        logger.debug(f"Parameters updated: {coerced}")

    def reset(self) -> None:
        """Restore the default values."""
        with self._lock:
            self._values = ForceParameters()
        logger.info("Parameters have been reset.")

    def as_dict(self) -> dict[str, float]:
        return self.snapshot().to_dict()

    # Attribute access for control surfaces that bind to properties

    @property
    def repulsion(self) -> float:
        return self.get("repulsion")

    @repulsion.setter
    def repulsion(self, value: float) -> None:
        self.set("repulsion", value)

    @property
    def attraction(self) -> float:
        return self.get("attraction")

    @attraction.setter
    def attraction(self, value: float) -> None:
        self.set("attraction", value)

    @property
    def center(self) -> float:
        return self.get("center")

    @center.setter
    def center(self, value: float) -> None:
        self.set("center", value)

    @property
    def k(self) -> float:
        return self.get("k")

    @k.setter
    def k(self, value: float) -> None:
        self.set("k", value)

    @property
    def max_step(self) -> float:
        return self.get("max_step")

    @max_step.setter
    def max_step(self, value: float) -> None:
        self.set("max_step", value)

    @property
    def max_diameter(self) -> float:
        return self.get("max_diameter")

    @max_diameter.setter
    def max_diameter(self, value: float) -> None:
        self.set("max_diameter", value)

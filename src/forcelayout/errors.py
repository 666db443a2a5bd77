"""
Exception types raised by the layout engine.

Only malformed input and unknown parameter names are ever raised. Degenerate
geometry (coincident nodes, zero-length edges) is absorbed by the kernels.
"""
from __future__ import annotations

from typing import Optional


class LayoutError(Exception):
    """Base class for all errors raised by forcelayout."""


class MalformedInputError(LayoutError, ValueError):
    """
    Node records cannot be turned into a graph.

    Attributes:
        reference: The offending name (unresolved dependency or duplicate node).
        node: Name of the record that contains the reference, if known.
    """
    def __init__(self, message: str, reference: Optional[str] = None, node: Optional[str] = None) -> None:
        super().__init__(message)
        self.reference = reference
        self.node = node


class UnknownParameterError(LayoutError, KeyError):
    """A tunable name that the parameter store does not know."""
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown layout parameter '{self.name}'."

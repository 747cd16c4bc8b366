"""Error types raised by persistree.

Only the operations that can introduce a new shape into a tree raise
errors. Reads, traversals and out-of-range lookups never do.
"""

from typing import Any


class TreeError(Exception):
    """Base class for shape validation failures.

    Attributes:
        value: The rejected value
        diagnostic: Human-readable description of the structural mismatch
    """

    message = "Invalid tree"

    def __init__(self, value: Any, diagnostic: str):
        self.value = value
        self.diagnostic = diagnostic
        super().__init__(f"{self.message}: {diagnostic}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(value={self.value!r}, diagnostic={self.diagnostic!r})"


class InvalidStructure(TreeError):
    """Raised when a freshly constructed tree fails the shape check."""

    message = "Invalid tree structure"


class InvalidChild(TreeError):
    """Raised when a new child fails the shape check during add_child."""

    message = "Invalid child node"


class InvalidValue(TreeError):
    """Raised when a value replacement fails the shape check."""

    message = "Invalid node value"


class ConfigurationError(ValueError):
    """Raised when a TraversalConfig is inconsistent."""
    pass

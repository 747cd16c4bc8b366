"""TreeAdapter abstraction for persistree.

Traversers and collectors never touch node fields directly. They ask an
adapter for a node's children and value, so the same algorithms walk
``Tree`` values and plain nested mappings alike.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Iterator

from .node import Tree


class TreeAdapter(ABC):
    """Abstract adapter for navigating a specific kind of tree.

    Trees handled by persistree carry no parent links, so navigation is
    downward only.
    """

    @abstractmethod
    def get_children(self, node: Any) -> Iterator[Any]:
        """Get an iterator over the children of ``node``, in order.

        Args:
            node: The parent node

        Returns:
            Iterator yielding child nodes
        """
        pass

    @abstractmethod
    def get_value(self, node: Any) -> Any:
        """Return the payload stored in ``node``."""
        pass

    def is_leaf(self, node: Any) -> bool:
        """Check if ``node`` has no children.

        Default implementation pulls at most one child from get_children.
        """
        for _ in self.get_children(node):
            return False
        return True

    def child_count(self, node: Any) -> int:
        return sum(1 for _ in self.get_children(node))


class PersistentTreeAdapter(TreeAdapter):
    """Adapter for :class:`~persistree.core.node.Tree` values."""

    def get_children(self, node: Tree) -> Iterator[Tree]:
        return iter(node.children)

    def get_value(self, node: Tree) -> Any:
        return node.value

    def is_leaf(self, node: Tree) -> bool:
        return not node.children

    def child_count(self, node: Tree) -> int:
        return len(node.children)


class MappingTreeAdapter(TreeAdapter):
    """Adapter for nested ``{"value": ..., "children": [...]}`` mappings.

    A missing or ``None`` children entry is treated as a leaf. The mapping
    is expected to have passed the shape check already.
    """

    def get_children(self, node: Mapping) -> Iterator[Mapping]:
        return iter(node.get("children") or ())

    def get_value(self, node: Mapping) -> Any:
        return node["value"]

"""Tree traversal strategies for persistree.

Traversers implement the different orders for walking a tree. They work
through a TreeAdapter, so any tree shape the adapters understand can be
walked the same way.

Traversers do not deduplicate nodes: a subtree that is shared and appears
twice in a tree is visited twice, once per position.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Deque, Iterator, List, Optional, Tuple

from .adapter import TreeAdapter, PersistentTreeAdapter


class TreeTraverser(ABC):
    """Abstract base class for tree traversal strategies."""

    def __init__(self, adapter: Optional[TreeAdapter] = None):
        """Initialize traverser with an adapter.

        Args:
            adapter: TreeAdapter for navigating the tree
                (defaults to PersistentTreeAdapter)
        """
        self.adapter = adapter or PersistentTreeAdapter()

    @abstractmethod
    def traverse(self,
                 root: Any,
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple[Any, int]]:
        """Traverse the tree starting from root.

        Args:
            root: Starting node for traversal
            max_depth: Maximum depth to traverse (None = unlimited)
            min_depth: Minimum depth before yielding nodes

        Yields:
            Tuples of (node, depth) where the root has depth 0
        """
        pass

    def values(self, root: Any, **kwargs) -> List[Any]:
        """Return the node values in this traverser's order."""
        return [self.adapter.get_value(node) for node, _ in self.traverse(root, **kwargs)]

    def _should_yield(self, depth: int, min_depth: int, max_depth: Optional[int]) -> bool:
        if depth < min_depth:
            return False
        if max_depth is not None and depth > max_depth:
            return False
        return True

    def _should_explore(self, depth: int, max_depth: Optional[int]) -> bool:
        if max_depth is None:
            return True
        return depth < max_depth


class BreadthFirstTraverser(TreeTraverser):
    """Breadth-first (level-order) traversal strategy.

    Visits all nodes at depth N before visiting nodes at depth N+1.
    """

    def traverse(self,
                 root: Any,
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple[Any, int]]:
        """Traverse tree breadth-first using a FIFO frontier."""
        frontier: Deque[Tuple[Any, int]] = deque([(root, 0)])

        while frontier:
            node, depth = frontier.popleft()

            if self._should_yield(depth, min_depth, max_depth):
                yield (node, depth)

            if self._should_explore(depth, max_depth):
                for child in self.adapter.get_children(node):
                    frontier.append((child, depth + 1))


class DepthFirstPreOrderTraverser(TreeTraverser):
    """Depth-first pre-order traversal strategy.

    Visits a parent before its children, children left to right.
    """

    def traverse(self,
                 root: Any,
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple[Any, int]]:
        """Traverse tree depth-first using a LIFO stack."""
        stack: List[Tuple[Any, int]] = [(root, 0)]

        while stack:
            node, depth = stack.pop()

            if self._should_yield(depth, min_depth, max_depth):
                yield (node, depth)

            if self._should_explore(depth, max_depth):
                children = list(self.adapter.get_children(node))
                # Pushed in reverse so the leftmost child is popped first
                for child in reversed(children):
                    stack.append((child, depth + 1))


class DepthFirstPostOrderTraverser(TreeTraverser):
    """Depth-first post-order traversal strategy.

    Visits children before their parent. Good for aggregating subtree
    values bottom-up.
    """

    def traverse(self,
                 root: Any,
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple[Any, int]]:
        """Traverse tree depth-first, yielding each node after its subtree."""
        # (node, depth, expanded): a node is yielded on its second pop
        stack: List[Tuple[Any, int, bool]] = [(root, 0, False)]

        while stack:
            node, depth, expanded = stack.pop()

            if not expanded and self._should_explore(depth, max_depth):
                stack.append((node, depth, True))
                children = list(self.adapter.get_children(node))
                for child in reversed(children):
                    stack.append((child, depth + 1, False))
                continue

            if self._should_yield(depth, min_depth, max_depth):
                yield (node, depth)


class LevelOrderTraverser(TreeTraverser):
    """Level-order traversal that completes each level before the next.

    Yields the same order as BreadthFirstTraverser but builds one level
    list at a time, which makes it easy to stop between levels.
    """

    def traverse(self,
                 root: Any,
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple[Any, int]]:
        current_level: List[Any] = [root]
        current_depth = 0

        while current_level and (max_depth is None or current_depth <= max_depth):
            next_level: List[Any] = []

            for node in current_level:
                if self._should_yield(current_depth, min_depth, max_depth):
                    yield (node, current_depth)

                if self._should_explore(current_depth, max_depth):
                    next_level.extend(self.adapter.get_children(node))

            current_level = next_level
            current_depth += 1


def create_traverser(strategy: str, adapter: Optional[TreeAdapter] = None) -> TreeTraverser:
    """Create a traverser instance by strategy name.

    Args:
        strategy: Name of traversal strategy (bfs, dfs_pre, dfs_post, level)
        adapter: TreeAdapter for the tree structure

    Returns:
        TreeTraverser instance

    Raises:
        ValueError: If strategy name is not recognized
    """
    strategies = {
        'bfs': BreadthFirstTraverser,
        'breadth_first': BreadthFirstTraverser,
        'dfs': DepthFirstPreOrderTraverser,
        'dfs_pre': DepthFirstPreOrderTraverser,
        'pre_order': DepthFirstPreOrderTraverser,
        'dfs_post': DepthFirstPostOrderTraverser,
        'post_order': DepthFirstPostOrderTraverser,
        'level': LevelOrderTraverser,
        'level_order': LevelOrderTraverser,
    }

    strategy_lower = strategy.lower()
    if strategy_lower not in strategies:
        raise ValueError(
            f"Unknown traversal strategy: {strategy}. "
            f"Choose from: {', '.join(strategies.keys())}"
        )

    return strategies[strategy_lower](adapter)

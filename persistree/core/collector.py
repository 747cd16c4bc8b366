"""Data collection strategies for persistree.

DataCollectors define what information to extract from each node during
a traversal, so one traversal can serve different purposes.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple

from .adapter import TreeAdapter, PersistentTreeAdapter


class DataCollector(ABC):
    """Abstract base class for data collection strategies."""

    def __init__(self, adapter: Optional[TreeAdapter] = None):
        """Initialize collector with an adapter.

        Args:
            adapter: TreeAdapter for node access
                (defaults to PersistentTreeAdapter)
        """
        self.adapter = adapter or PersistentTreeAdapter()

    @abstractmethod
    def collect(self, node: Any, depth: int) -> Any:
        """Collect data from a node.

        Args:
            node: The node to collect data from
            depth: Current depth in traversal

        Returns:
            Collected data (type depends on collector)
        """
        pass


class ValueCollector(DataCollector):
    """Collects only the node payload."""

    def collect(self, node: Any, depth: int) -> Any:
        return self.adapter.get_value(node)


class FullNodeCollector(DataCollector):
    """Collects the node object itself."""

    def collect(self, node: Any, depth: int) -> Any:
        return node


class ChildCountCollector(DataCollector):
    """Collects node payloads with child count information.

    Useful for tree structure analysis.
    """

    def collect(self, node: Any, depth: int) -> Dict[str, Any]:
        child_count = self.adapter.child_count(node)
        return {
            'value': self.adapter.get_value(node),
            'depth': depth,
            'child_count': child_count,
            'is_leaf': child_count == 0,
        }


class AggregateCollector(DataCollector):
    """Base class for collectors that aggregate values over subtrees.

    Subclasses implement the aggregation (sum, max, ...). Results are
    cached per node object, so structurally shared subtrees are only
    aggregated once per collector. The cache keeps those nodes alive for
    as long as the collector lives, or until clear_cache() is called.
    """

    def __init__(self,
                 adapter: Optional[TreeAdapter] = None,
                 key: Optional[Callable[[Any], Any]] = None):
        """Initialize with the quantity to aggregate.

        Args:
            adapter: TreeAdapter for tree navigation
            key: Function mapping a node value to the quantity aggregated
                (defaults to the value itself)
        """
        super().__init__(adapter)
        self.key = key or (lambda value: value)
        self._cache: Dict[int, Tuple[Any, Dict[str, Any]]] = {}

    @abstractmethod
    def aggregate(self, values: List[Any]) -> Any:
        """Aggregate multiple values into one."""
        pass

    def collect(self, node: Any, depth: int) -> Dict[str, Any]:
        """Collect aggregated data from node and its subtree.

        Returns a fresh dict on every call; the cached copy is never handed
        out.
        """
        if id(node) not in self._cache:
            self._aggregate_subtree(node)
        _, cached = self._cache[id(node)]
        return dict(cached, depth=depth)

    def clear_cache(self) -> None:
        """Forget every aggregated subtree, releasing the nodes held for them."""
        self._cache.clear()

    def _aggregate_subtree(self, root: Any) -> None:
        # Post-order over an explicit stack: a node is aggregated on its
        # second pop, when every child already has a cache entry.
        stack: List[Tuple[Any, bool]] = [(root, False)]
        while stack:
            node, expanded = stack.pop()
            if id(node) in self._cache:
                continue
            children = list(self.adapter.get_children(node))
            if not expanded:
                stack.append((node, True))
                stack.extend((child, False) for child in reversed(children))
                continue

            own_value = self.key(self.adapter.get_value(node))
            values = [own_value]
            values.extend(self._cache[id(child)][1]['aggregated'] for child in children)
            result = {
                'value': self.adapter.get_value(node),
                'own_value': own_value,
                'aggregated': self.aggregate(values),
            }
            # ids are only unique among live objects, so the node is held too
            self._cache[id(node)] = (node, result)


class SumCollector(AggregateCollector):
    """Sums a quantity across subtrees, e.g. the total amount under a node."""

    def aggregate(self, values: List[Any]) -> Any:
        return sum(v for v in values if v is not None)


class MaxCollector(AggregateCollector):
    """Finds the maximum of a quantity in subtrees."""

    def aggregate(self, values: List[Any]) -> Any:
        valid_values = [v for v in values if v is not None]
        return max(valid_values) if valid_values else None


class CustomCollector(DataCollector):
    """Collector that uses a user-provided function.

    Allows custom data collection logic without subclassing.
    """

    def __init__(self,
                 adapter: Optional[TreeAdapter],
                 collect_func: Callable[[Any, int], Any]):
        """Initialize with custom collection function.

        Args:
            adapter: TreeAdapter for tree navigation
            collect_func: Function(node, depth) -> Any
        """
        super().__init__(adapter)
        self.collect_func = collect_func

    def collect(self, node: Any, depth: int) -> Any:
        return self.collect_func(node, depth)

"""Execution planning for persistree.

The ExecutionPlan validates a TraversalConfig and assembles the traverser
and collector that carry it out.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from ._logging import null_logger
from .config import DataRequirement, TraversalConfig, TraversalStrategy
from .core.adapter import PersistentTreeAdapter, TreeAdapter
from .core.collector import (
    ChildCountCollector,
    DataCollector,
    FullNodeCollector,
    ValueCollector,
)
from .core.traverser import TreeTraverser, create_traverser
from .errors import ConfigurationError

logger = null_logger(__name__)


class PruningAdapter(TreeAdapter):
    """Adapter that hides the children of nodes an exclude filter rejects.

    Errors raised by the exclude filter go to ``error_handler``, which
    re-raises or records them. A node whose filter raised is treated as
    pruned.
    """

    def __init__(self,
                 base_adapter: TreeAdapter,
                 config: TraversalConfig,
                 error_handler: Optional[Callable[[Any, Exception], None]] = None):
        self._base_adapter = base_adapter
        self._filter = config.filter
        self._error_handler = error_handler

    def get_children(self, node: Any) -> Iterator[Any]:
        try:
            prune = self._filter.should_prune(node)
        except Exception as e:
            if self._error_handler is None:
                raise
            self._error_handler(node, e)
            return iter(())
        if prune:
            return iter(())
        return self._base_adapter.get_children(node)

    def get_value(self, node: Any) -> Any:
        return self._base_adapter.get_value(node)


class ExecutionPlan:
    """Validated execution plan for a traversal.

    Validation happens in the constructor, so a bad configuration fails
    before any node is visited.
    """

    def __init__(self, config: TraversalConfig, adapter: Optional[TreeAdapter] = None):
        """Create and validate an execution plan.

        Args:
            config: Traversal configuration
            adapter: Tree adapter (defaults to PersistentTreeAdapter)

        Raises:
            ConfigurationError: If the configuration is inconsistent
        """
        self.config = config
        self.adapter = adapter or PersistentTreeAdapter()

        config_errors = config.validate()
        if config_errors:
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )

        if config.filter.prune_on_exclude and config.filter.exclude_filter is not None:
            self.adapter = PruningAdapter(self.adapter, config, self._handle_error)

        self.traverser = self._select_traverser()
        self.collector = self._select_collector()

        self.nodes_processed = 0
        self.errors_encountered: List[Tuple[Any, Exception]] = []

        logger.debug("Execution plan ready: %s", self.get_summary())

    def _select_traverser(self) -> TreeTraverser:
        if self.config.strategy == TraversalStrategy.CUSTOM:
            return self.config.custom_traverser

        strategy_map = {
            TraversalStrategy.BREADTH_FIRST: "bfs",
            TraversalStrategy.DEPTH_FIRST_PRE: "dfs_pre",
            TraversalStrategy.DEPTH_FIRST_POST: "dfs_post",
            TraversalStrategy.LEVEL_ORDER: "level",
        }
        return create_traverser(strategy_map[self.config.strategy], self.adapter)

    def _select_collector(self) -> DataCollector:
        if self.config.data_requirements == DataRequirement.CUSTOM:
            return self.config.custom_collector

        collector_map = {
            DataRequirement.VALUE: ValueCollector,
            DataRequirement.FULL_NODE: FullNodeCollector,
            DataRequirement.CHILDREN_COUNT: ChildCountCollector,
        }
        return collector_map[self.config.data_requirements](self.adapter)

    def _handle_error(self, node: Any, error: Exception) -> None:
        """Record an error from a filter or collector, or re-raise it."""
        if self.config.on_error is None:
            raise error
        logger.debug("Skipping node after %s: %s", type(error).__name__, error)
        self.errors_encountered.append((node, error))
        self.config.on_error(node, error)

    def execute(self, root: Any) -> Iterator[Tuple[Any, Any]]:
        """Execute the traversal plan.

        Args:
            root: Root node to start traversal from

        Yields:
            Tuples of (node, collected_data)
        """
        self.nodes_processed = 0
        self.errors_encountered = []

        for node, depth in self.traverser.traverse(
            root,
            max_depth=self.config.depth.traversal_limit(),
            min_depth=self.config.depth.min_depth if self.config.depth.specific_depths is None else 0
        ):
            if not self.config.depth.should_yield(depth):
                continue

            try:
                if not self.config.filter.should_include(node):
                    continue
                data = self.collector.collect(node, depth)
            except Exception as e:
                self._handle_error(node, e)
                continue

            self.nodes_processed += 1
            if not self.config.limits.check_node_limit(self.nodes_processed):
                break

            yield (node, data)

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of execution plan, for debugging and logging."""
        return {
            'strategy': self.config.strategy.value,
            'data_requirements': self.config.data_requirements.value,
            'max_depth': self.config.depth.max_depth,
            'min_depth': self.config.depth.min_depth,
            'max_nodes': self.config.limits.max_nodes,
            'adapter': self.adapter.__class__.__name__,
            'traverser': self.traverser.__class__.__name__,
            'collector': self.collector.__class__.__name__,
        }

"""Configuration system for persistree traversals.

This module defines how callers describe a traversal: the order, the
depth window, node filters, what to collect per node and how many nodes
to process at most.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Set


class TraversalStrategy(Enum):
    """Order in which nodes are visited."""
    BREADTH_FIRST = "bfs"           # Level by level
    DEPTH_FIRST_PRE = "dfs_pre"     # Parent before children
    DEPTH_FIRST_POST = "dfs_post"   # Children before parent
    LEVEL_ORDER = "level"           # Grouped by level
    CUSTOM = "custom"               # User-supplied traverser


class DataRequirement(Enum):
    """What to collect from each visited node."""
    VALUE = "value"                     # Node payload only
    FULL_NODE = "full"                  # The node object itself
    CHILDREN_COUNT = "children_count"   # Payload, depth and child count
    CUSTOM = "custom"                   # User-supplied collector


@dataclass
class FilterConfig:
    """Node predicates applied during traversal."""

    include_filter: Optional[Callable[[Any], bool]] = None
    exclude_filter: Optional[Callable[[Any], bool]] = None

    # Excluded nodes keep their subtrees reachable unless pruning is on
    prune_on_exclude: bool = False

    def should_include(self, node) -> bool:
        """Check if a node passes the filters.

        Exclusion takes precedence over inclusion.
        """
        if self.exclude_filter and self.exclude_filter(node):
            return False

        if self.include_filter:
            return self.include_filter(node)

        return True

    def should_prune(self, node) -> bool:
        """Check if the subtree below an excluded node should be skipped."""
        if not self.prune_on_exclude:
            return False
        return bool(self.exclude_filter and self.exclude_filter(node))


@dataclass
class DepthConfig:
    """Depth window for yielding nodes. The root is at depth 0."""

    min_depth: int = 0
    max_depth: Optional[int] = None
    specific_depths: Optional[Set[int]] = None

    def should_yield(self, depth: int) -> bool:
        if self.specific_depths is not None:
            return depth in self.specific_depths

        if depth < self.min_depth:
            return False
        if self.max_depth is not None and depth > self.max_depth:
            return False

        return True

    def traversal_limit(self) -> Optional[int]:
        """Deepest level a traverser has to reach, or None for unlimited."""
        if self.specific_depths:
            return max(self.specific_depths)
        return self.max_depth


@dataclass
class LimitConfig:
    """Resource limits for a traversal."""

    max_nodes: Optional[int] = None  # Stop after this many yielded nodes

    def check_node_limit(self, node_count: int) -> bool:
        """Return True while node_count is within the limit."""
        if self.max_nodes is None:
            return True
        return node_count <= self.max_nodes


@dataclass
class TraversalConfig:
    """Complete configuration for a traversal.

    The ExecutionPlan validates this configuration before any node is
    visited.
    """

    strategy: TraversalStrategy = TraversalStrategy.BREADTH_FIRST
    custom_traverser: Optional[Any] = None

    depth: DepthConfig = field(default_factory=DepthConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)

    data_requirements: DataRequirement = DataRequirement.VALUE
    custom_collector: Optional[Any] = None

    limits: LimitConfig = field(default_factory=LimitConfig)

    # Called with (node, exception) when a filter or collector raises.
    # Without it the exception propagates.
    on_error: Optional[Callable[[Any, Exception], None]] = None

    @classmethod
    def shallow_scan(cls, max_depth: int = 1) -> 'TraversalConfig':
        """Config visiting the root and its first ``max_depth`` levels."""
        return cls(
            strategy=TraversalStrategy.BREADTH_FIRST,
            depth=DepthConfig(max_depth=max_depth),
        )

    @classmethod
    def deep_scan(cls, data_requirement: DataRequirement = DataRequirement.VALUE) -> 'TraversalConfig':
        """Config for a full post-order walk, suited to bottom-up aggregation."""
        return cls(
            strategy=TraversalStrategy.DEPTH_FIRST_POST,
            data_requirements=data_requirement,
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.depth.min_depth < 0:
            errors.append("min_depth cannot be negative")

        if self.depth.max_depth is not None:
            if self.depth.max_depth < 0:
                errors.append("max_depth cannot be negative")
            if self.depth.max_depth < self.depth.min_depth:
                errors.append("max_depth cannot be less than min_depth")

        if self.depth.specific_depths is not None:
            if any(d < 0 for d in self.depth.specific_depths):
                errors.append("specific_depths cannot contain negative depths")

        if self.limits.max_nodes is not None and self.limits.max_nodes <= 0:
            errors.append("max_nodes must be positive")

        if self.strategy == TraversalStrategy.CUSTOM and self.custom_traverser is None:
            errors.append("custom_traverser required when strategy is CUSTOM")

        if self.data_requirements == DataRequirement.CUSTOM and self.custom_collector is None:
            errors.append("custom_collector required when data_requirements is CUSTOM")

        return errors

"""Core building blocks for persistree.

The Tree value type and its shape check, plus the adapter, traverser and
collector abstractions the traversal framework is built from.
"""

from .node import Tree
from .validation import explain_shape, is_valid_shape
from .adapter import TreeAdapter, PersistentTreeAdapter, MappingTreeAdapter
from .traverser import (
    TreeTraverser,
    BreadthFirstTraverser,
    DepthFirstPreOrderTraverser,
    DepthFirstPostOrderTraverser,
    LevelOrderTraverser,
    create_traverser,
)
from .collector import (
    DataCollector,
    ValueCollector,
    FullNodeCollector,
    ChildCountCollector,
    AggregateCollector,
    SumCollector,
    MaxCollector,
    CustomCollector,
)

__all__ = [
    "Tree",
    "explain_shape",
    "is_valid_shape",
    "TreeAdapter",
    "PersistentTreeAdapter",
    "MappingTreeAdapter",
    "TreeTraverser",
    "BreadthFirstTraverser",
    "DepthFirstPreOrderTraverser",
    "DepthFirstPostOrderTraverser",
    "LevelOrderTraverser",
    "create_traverser",
    "DataCollector",
    "ValueCollector",
    "FullNodeCollector",
    "ChildCountCollector",
    "AggregateCollector",
    "SumCollector",
    "MaxCollector",
    "CustomCollector",
]

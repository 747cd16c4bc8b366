"""persistree - immutable, validated trees with traversal algorithms.

A Tree is a value. Adding or removing a child, or replacing a node's
value, returns a new Tree and shares every untouched subtree with the
original:

    from persistree import create_tree, pre_order

    root = create_tree(1).add_child(2).add_child(3)
    pre_order(root)            # [1, 2, 3]
    root.remove_child(0)       # Tree(1, (Tree(3),)); root is unchanged

Only construction and value replacement validate shape. Reads and
traversals trust their input.
"""

__version__ = "0.1.0"

# Core components
from .core.node import Tree
from .core.validation import explain_shape, is_valid_shape
from .core.adapter import TreeAdapter, PersistentTreeAdapter, MappingTreeAdapter
from .core.traverser import (
    TreeTraverser,
    BreadthFirstTraverser,
    DepthFirstPreOrderTraverser,
    DepthFirstPostOrderTraverser,
    LevelOrderTraverser,
)
from .core.collector import (
    DataCollector,
    ValueCollector,
    FullNodeCollector,
    ChildCountCollector,
    SumCollector,
    MaxCollector,
    CustomCollector,
)

# Errors
from .errors import (
    TreeError,
    InvalidStructure,
    InvalidChild,
    InvalidValue,
    ConfigurationError,
)

# Configuration and planning
from .config import (
    TraversalConfig,
    TraversalStrategy,
    DataRequirement,
    DepthConfig,
    FilterConfig,
    LimitConfig,
)
from .planning import ExecutionPlan

# High-level API
from .api import (
    create_tree,
    tree_from_dict,
    add_child,
    add_subtree,
    remove_child,
    update_value,
    child_at,
    tree_depth,
    tree_size,
    map_values,
    pre_order,
    post_order,
    breadth_first,
    find_node,
    find_by_value,
    find_nodes,
    traverse_tree,
    collect_tree_data,
    count_nodes,
    get_leaf_nodes,
    get_value_paths,
    get_tree_stats,
    sum_values,
    max_value,
    fold_tree,
)

__all__ = [
    "__version__",
    # Core
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
    "DataCollector",
    "ValueCollector",
    "FullNodeCollector",
    "ChildCountCollector",
    "SumCollector",
    "MaxCollector",
    "CustomCollector",
    # Errors
    "TreeError",
    "InvalidStructure",
    "InvalidChild",
    "InvalidValue",
    "ConfigurationError",
    # Config
    "TraversalConfig",
    "TraversalStrategy",
    "DataRequirement",
    "DepthConfig",
    "FilterConfig",
    "LimitConfig",
    "ExecutionPlan",
    # API
    "create_tree",
    "tree_from_dict",
    "add_child",
    "add_subtree",
    "remove_child",
    "update_value",
    "child_at",
    "tree_depth",
    "tree_size",
    "map_values",
    "pre_order",
    "post_order",
    "breadth_first",
    "find_node",
    "find_by_value",
    "find_nodes",
    "traverse_tree",
    "collect_tree_data",
    "count_nodes",
    "get_leaf_nodes",
    "get_value_paths",
    "get_tree_stats",
    "sum_values",
    "max_value",
    "fold_tree",
]

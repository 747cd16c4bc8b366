"""High-level API for persistree.

Plain functions over Tree values. The first group mirrors the Tree
methods (construction, mutation as new values, reads). The second group
wraps the traversal framework for common questions: walk in some order,
find, count, aggregate.

Traversal functions take an optional ``adapter`` so they also work on
nested mappings through MappingTreeAdapter.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, TypeVar, Union

from .config import DataRequirement, TraversalConfig, TraversalStrategy
from .core.adapter import PersistentTreeAdapter, TreeAdapter
from .core.collector import MaxCollector, SumCollector
from .core.node import Tree, fold_up
from .core.traverser import (
    BreadthFirstTraverser,
    DepthFirstPostOrderTraverser,
    DepthFirstPreOrderTraverser,
)
from .planning import ExecutionPlan

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


# Construction and mutation

def create_tree(value: T) -> Tree[T]:
    """Create a single-node tree.

    Raises:
        InvalidStructure: If the node fails the shape check
    """
    return Tree.create(value)


def tree_from_dict(data: Any) -> Tree:
    """Build a tree from nested ``{"value": ..., "children": [...]}`` mappings.

    Raises:
        InvalidStructure: If ``data`` fails the shape check
    """
    return Tree.from_dict(data)


def add_child(tree: Tree[T], child_value: T) -> Tree[T]:
    """Return ``tree`` with a new leaf holding ``child_value`` appended.

    Raises:
        InvalidChild: If the new leaf fails the shape check
    """
    return tree.add_child(child_value)


def add_subtree(tree: Tree[T], subtree: Tree[T]) -> Tree[T]:
    """Return ``tree`` with ``subtree`` appended as its last child.

    Raises:
        InvalidChild: If ``subtree`` is not a valid Tree
    """
    return tree.graft(subtree)


def remove_child(tree: Tree[T], index: int) -> Tree[T]:
    """Return ``tree`` without the child at ``index``; out of range is a no-op."""
    return tree.remove_child(index)


def update_value(tree: Tree[T], new_value: T) -> Tree[T]:
    """Return ``tree`` holding ``new_value``.

    Raises:
        InvalidValue: If the updated node fails the shape check
    """
    return tree.update_value(new_value)


def child_at(tree: Tree[T], index: int) -> Optional[Tree[T]]:
    return tree.child_at(index)


def tree_depth(tree: Tree) -> int:
    return tree.depth()


def tree_size(tree: Tree) -> int:
    return tree.size()


def map_values(tree: Tree[T], transform: Callable[[T], U]) -> Tree[U]:
    """Return a same-shaped tree with ``transform`` applied to every value."""
    return tree.map_values(transform)


# Orders

def pre_order(tree: Any, adapter: Optional[TreeAdapter] = None) -> List[Any]:
    """Values in pre-order: node first, then each child's subtree in order."""
    return DepthFirstPreOrderTraverser(adapter).values(tree)


def post_order(tree: Any, adapter: Optional[TreeAdapter] = None) -> List[Any]:
    """Values in post-order: each child's subtree in order, then the node."""
    return DepthFirstPostOrderTraverser(adapter).values(tree)


def breadth_first(tree: Any, adapter: Optional[TreeAdapter] = None) -> List[Any]:
    """Values in level order."""
    return BreadthFirstTraverser(adapter).values(tree)


# Search

def find_node(tree: Any,
              predicate: Callable[[Any], bool],
              adapter: Optional[TreeAdapter] = None) -> Optional[Any]:
    """Return the first node in pre-order for which ``predicate(node)`` holds.

    The search stops at the first match. Returns None when nothing matches.

    Example:
        >>> find_node(root, lambda node: node.value == 3)
        Tree(value=3, children=())
    """
    for node, _ in DepthFirstPreOrderTraverser(adapter).traverse(tree):
        if predicate(node):
            return node
    return None


def find_by_value(tree: Any, value: Any, adapter: Optional[TreeAdapter] = None) -> Optional[Any]:
    """Return the first node in pre-order whose value equals ``value``."""
    adapter = adapter or PersistentTreeAdapter()
    return find_node(tree, lambda node: adapter.get_value(node) == value, adapter)


def find_nodes(tree: Any,
               predicate: Callable[[Any], bool],
               **kwargs) -> Iterator[Any]:
    """Find every node that matches a predicate.

    Args:
        tree: Root of the tree
        predicate: Function that returns True for matching nodes
        **kwargs: Traversal options (see traverse_tree)

    Yields:
        Matching nodes in traversal order
    """
    kwargs['include_filter'] = predicate
    yield from traverse_tree(tree, **kwargs)


# Configurable traversal

def traverse_tree(
    tree: Any,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.BREADTH_FIRST,
    max_depth: Optional[int] = None,
    min_depth: int = 0,
    include_filter: Optional[Callable[[Any], bool]] = None,
    exclude_filter: Optional[Callable[[Any], bool]] = None,
    adapter: Optional[TreeAdapter] = None,
    **kwargs
) -> Iterator[Any]:
    """Simple interface for configurable tree traversal.

    Args:
        tree: Root of the tree
        strategy: Traversal strategy (bfs, dfs_pre, dfs_post, level)
        max_depth: Deepest level to visit, the root being level 0
        min_depth: Shallowest level to yield
        include_filter: Yield only nodes for which this returns True
        exclude_filter: Skip nodes for which this returns True
        adapter: TreeAdapter for the tree (defaults to PersistentTreeAdapter)
        **kwargs: Additional config options (prune_on_exclude, max_nodes,
            specific_depths, on_error)

    Yields:
        Nodes that match the criteria

    Example:
        >>> [node.value for node in traverse_tree(root, strategy="dfs_post", max_depth=1)]
        [2, 3, 4, 5, 6, 1]
    """
    config = _build_config(
        strategy=strategy,
        max_depth=max_depth,
        min_depth=min_depth,
        include_filter=include_filter,
        exclude_filter=exclude_filter,
        **kwargs
    )
    plan = ExecutionPlan(config, adapter)

    for node, _ in plan.execute(tree):
        yield node


def collect_tree_data(
    tree: Any,
    data_requirement: DataRequirement = DataRequirement.VALUE,
    adapter: Optional[TreeAdapter] = None,
    **kwargs
) -> Iterator[Any]:
    """Traverse the tree and collect data from each visited node.

    Args:
        tree: Root of the tree
        data_requirement: What to collect
        adapter: TreeAdapter for the tree
        **kwargs: Traversal options (see traverse_tree)

    Yields:
        Tuples of (node, collected_data)
    """
    config = _build_config(data_requirement=data_requirement, **kwargs)
    yield from ExecutionPlan(config, adapter).execute(tree)


def count_nodes(tree: Any, **kwargs) -> int:
    """Count nodes that match the traversal options (see traverse_tree)."""
    count = 0
    for _ in traverse_tree(tree, **kwargs):
        count += 1
    return count


def get_leaf_nodes(tree: Any, adapter: Optional[TreeAdapter] = None, **kwargs) -> Iterator[Any]:
    """Yield nodes without children, in traversal order."""
    adapter = adapter or PersistentTreeAdapter()
    for node in traverse_tree(tree, adapter=adapter, **kwargs):
        if adapter.is_leaf(node):
            yield node


def get_value_paths(tree: Any, adapter: Optional[TreeAdapter] = None) -> Iterator[List[Any]]:
    """Yield the list of values from the root down to each node, in pre-order.

    Example:
        >>> list(get_value_paths(create_tree("a").add_child("b")))
        [['a'], ['a', 'b']]
    """
    adapter = adapter or PersistentTreeAdapter()
    stack = [(tree, [])]
    while stack:
        node, prefix = stack.pop()
        path = prefix + [adapter.get_value(node)]
        yield path
        children = list(adapter.get_children(node))
        stack.extend((child, path) for child in reversed(children))


def get_tree_stats(tree: Any, adapter: Optional[TreeAdapter] = None) -> Dict[str, Any]:
    """Get statistics about a tree.

    Returns:
        Dictionary with ``total_nodes``, ``leaf_nodes``, ``internal_nodes``,
        ``depth`` (levels, a leaf counts 1), ``max_branching`` and
        ``nodes_per_level`` (level -> count, root at level 0)
    """
    stats = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'depth': 0,
        'max_branching': 0,
        'nodes_per_level': {},
    }

    for _, info in collect_tree_data(
        tree,
        data_requirement=DataRequirement.CHILDREN_COUNT,
        adapter=adapter,
    ):
        stats['total_nodes'] += 1
        if info['is_leaf']:
            stats['leaf_nodes'] += 1
        stats['depth'] = max(stats['depth'], info['depth'] + 1)
        stats['max_branching'] = max(stats['max_branching'], info['child_count'])
        level = info['depth']
        stats['nodes_per_level'][level] = stats['nodes_per_level'].get(level, 0) + 1

    stats['internal_nodes'] = stats['total_nodes'] - stats['leaf_nodes']
    return stats


# Aggregation

def sum_values(tree: Any,
               key: Optional[Callable[[Any], Any]] = None,
               adapter: Optional[TreeAdapter] = None) -> Any:
    """Sum every value in the tree, or ``key(value)`` when a key is given.

    Example:
        >>> sum_values(ledger, key=lambda entry: entry[1])
        5000.0
    """
    return SumCollector(adapter, key=key).collect(tree, 0)['aggregated']


def max_value(tree: Any,
              key: Optional[Callable[[Any], Any]] = None,
              adapter: Optional[TreeAdapter] = None) -> Any:
    """Largest value in the tree (or largest ``key(value)``), ignoring None."""
    return MaxCollector(adapter, key=key).collect(tree, 0)['aggregated']


def fold_tree(tree: Any,
              func: Callable[[Any, List[R]], R],
              adapter: Optional[TreeAdapter] = None) -> R:
    """Aggregate bottom-up: ``func(value, [results of each child])``.

    Example:
        >>> fold_tree(root, lambda value, below: 1 + max(below, default=0))  # depth
        2
    """
    adapter = adapter or PersistentTreeAdapter()
    return fold_up(
        tree,
        lambda node: list(adapter.get_children(node)),
        lambda node, below: func(adapter.get_value(node), below),
    )


# Helper functions

def _parse_strategy(strategy: Union[TraversalStrategy, str]) -> TraversalStrategy:
    """Parse strategy from string or enum."""
    if isinstance(strategy, TraversalStrategy):
        return strategy

    strategy_map = {
        'bfs': TraversalStrategy.BREADTH_FIRST,
        'breadth_first': TraversalStrategy.BREADTH_FIRST,
        'dfs': TraversalStrategy.DEPTH_FIRST_PRE,
        'dfs_pre': TraversalStrategy.DEPTH_FIRST_PRE,
        'pre_order': TraversalStrategy.DEPTH_FIRST_PRE,
        'dfs_post': TraversalStrategy.DEPTH_FIRST_POST,
        'post_order': TraversalStrategy.DEPTH_FIRST_POST,
        'level': TraversalStrategy.LEVEL_ORDER,
        'level_order': TraversalStrategy.LEVEL_ORDER,
    }

    strategy_lower = strategy.lower() if isinstance(strategy, str) else str(strategy)
    if strategy_lower in strategy_map:
        return strategy_map[strategy_lower]

    raise ValueError(f"Unknown traversal strategy: {strategy}")


def _build_config(**kwargs) -> TraversalConfig:
    """Build a TraversalConfig from keyword arguments.

    Raises:
        TypeError: If an option is not recognized
    """
    config = TraversalConfig()

    if 'strategy' in kwargs:
        config.strategy = _parse_strategy(kwargs.pop('strategy'))

    if 'custom_traverser' in kwargs:
        config.custom_traverser = kwargs.pop('custom_traverser')
        config.strategy = TraversalStrategy.CUSTOM

    if 'max_depth' in kwargs:
        config.depth.max_depth = kwargs.pop('max_depth')

    if 'min_depth' in kwargs:
        config.depth.min_depth = kwargs.pop('min_depth')

    if 'specific_depths' in kwargs:
        config.depth.specific_depths = kwargs.pop('specific_depths')

    if 'include_filter' in kwargs:
        config.filter.include_filter = kwargs.pop('include_filter')

    if 'exclude_filter' in kwargs:
        config.filter.exclude_filter = kwargs.pop('exclude_filter')

    if 'prune_on_exclude' in kwargs:
        config.filter.prune_on_exclude = kwargs.pop('prune_on_exclude')

    if 'data_requirement' in kwargs:
        config.data_requirements = kwargs.pop('data_requirement')

    if 'custom_collector' in kwargs:
        config.custom_collector = kwargs.pop('custom_collector')
        config.data_requirements = DataRequirement.CUSTOM

    if 'max_nodes' in kwargs:
        config.limits.max_nodes = kwargs.pop('max_nodes')

    if 'on_error' in kwargs:
        config.on_error = kwargs.pop('on_error')

    if kwargs:
        raise TypeError(f"Unknown traversal options: {', '.join(sorted(kwargs))}")

    return config

"""Test fixtures for persistree consumers.

Ready-made trees and an invariant checker, so test suites of projects
that build on persistree do not each have to rebuild them.
"""

from typing import Any, List

from ..api import breadth_first, post_order, pre_order
from ..core.node import Tree


def build_sample_tree() -> Tree[int]:
    """Root 1 with leaves 2, 3, 4."""
    return Tree.create(1).add_child(2).add_child(3).add_child(4)


def build_nested_tree() -> Tree[int]:
    """The sample tree with leaves 5 and 6 appended to the root.

    Pre-order ``[1, 2, 3, 4, 5, 6]``, post-order ``[2, 3, 4, 5, 6, 1]``,
    depth 2, size 6.
    """
    return build_sample_tree().add_child(5).add_child(6)


def build_ledger_tree() -> Tree[tuple]:
    """Two-level ledger of ``(name, amount)`` entries.

    Structure:
    Finance (0.0)
    ├── Income (0.0)
    │   ├── Salary (5000.0)
    │   └── Investments (2000.0)
    └── Expenses (0.0)
        ├── Rent (-1200.0)
        └── Groceries (-800.0)

    Amounts total 5000.0.
    """
    income = Tree.create(("Income", 0.0)).add_child(("Salary", 5000.0)).add_child(("Investments", 2000.0))
    expenses = Tree.create(("Expenses", 0.0)).add_child(("Rent", -1200.0)).add_child(("Groceries", -800.0))
    return Tree.create(("Finance", 0.0)).graft(income).graft(expenses)


def build_chain(length: int, start: int = 0) -> Tree[int]:
    """Degenerate tree of ``length`` nodes, each the only child of the previous.

    Values run from ``start`` at the root to ``start + length - 1`` at the leaf.
    Levels are linked with the raw constructor, not grafted one at a time.
    """
    if length < 1:
        raise ValueError("length must be at least 1")
    tree = Tree.create(start + length - 1)
    for value in range(start + length - 2, start - 1, -1):
        tree = Tree(value, (tree,))
    return tree


def build_complete_tree(branching: int, levels: int, start: int = 0) -> Tree[int]:
    """Complete tree with ``levels`` levels and ``branching`` children per inner node.

    Values are assigned in breadth-first order starting at ``start``.
    """
    if levels < 1:
        raise ValueError("levels must be at least 1")

    def _build(index: int, level: int) -> Tree[int]:
        node = Tree.create(start + index)
        if level + 1 < levels:
            for offset in range(1, branching + 1):
                node = node.graft(_build(index * branching + offset, level + 1))
        return node

    return _build(0, 0)


def check_tree_invariants(tree: Tree) -> List[str]:
    """Check the size, depth and traversal-length relations of a tree.

    Returns:
        List of violated relations (empty if all hold)
    """
    problems: List[str] = []

    expected_size = 1 + sum(child.size() for child in tree.children)
    if tree.size() != expected_size:
        problems.append(f"size {tree.size()} != 1 + sum of child sizes ({expected_size})")

    if tree.depth() < 1:
        problems.append(f"depth {tree.depth()} is below 1")
    if tree.is_leaf() and tree.depth() != 1:
        problems.append(f"leaf depth {tree.depth()} != 1")

    for name, order in (("pre_order", pre_order), ("post_order", post_order),
                        ("breadth_first", breadth_first)):
        visited: List[Any] = order(tree)
        if len(visited) != tree.size():
            problems.append(f"{name} visited {len(visited)} nodes, size is {tree.size()}")

    return problems

"""Tests for the high-level functional API.

Includes the worked scenario: root 1 gets children 2, 3, 4 and then
5, 6, all appended to the root itself.
"""

import pytest

from persistree import (
    Tree,
    InvalidChild,
    InvalidStructure,
    MappingTreeAdapter,
    add_child,
    add_subtree,
    breadth_first,
    child_at,
    create_tree,
    find_by_value,
    find_node,
    fold_tree,
    get_leaf_nodes,
    get_tree_stats,
    get_value_paths,
    map_values,
    max_value,
    post_order,
    pre_order,
    remove_child,
    sum_values,
    tree_depth,
    tree_from_dict,
    tree_size,
    update_value,
)
from persistree.testing import build_ledger_tree


@pytest.fixture
def scenario_tree():
    tree = create_tree(1)
    tree = add_child(tree, 2)
    tree = add_child(tree, 3)
    tree = add_child(tree, 4)
    tree = add_child(tree, 5)
    tree = add_child(tree, 6)
    return tree


@pytest.fixture
def branching_tree():
    return tree_from_dict({
        "value": "a",
        "children": [
            {"value": "b", "children": [{"value": "d"}, {"value": "e"}]},
            {"value": "c", "children": [{"value": "f"}]},
        ],
    })


class TestScenario:
    """The worked example on a flat six-node tree."""

    def test_pre_order(self, scenario_tree):
        assert pre_order(scenario_tree) == [1, 2, 3, 4, 5, 6]

    def test_post_order(self, scenario_tree):
        assert post_order(scenario_tree) == [2, 3, 4, 5, 6, 1]

    def test_breadth_first(self, scenario_tree):
        assert breadth_first(scenario_tree) == [1, 2, 3, 4, 5, 6]

    def test_depth_and_size(self, scenario_tree):
        assert tree_depth(scenario_tree) == 2
        assert tree_size(scenario_tree) == 6

    def test_find_node(self, scenario_tree):
        found = find_node(scenario_tree, lambda node: node.value == 3)
        assert found == Tree(3)
        assert found.value == 3
        assert found.children == ()
        assert found is scenario_tree.children[1]

    def test_map_values_doubles(self, scenario_tree):
        doubled = map_values(scenario_tree, lambda v: v * 2)
        assert pre_order(doubled) == [2, 4, 6, 8, 10, 12]
        assert pre_order(scenario_tree) == [1, 2, 3, 4, 5, 6]


class TestMutators:
    """Function forms of the Tree mutators."""

    def test_remove_child(self, scenario_tree):
        assert pre_order(remove_child(scenario_tree, 0)) == [1, 3, 4, 5, 6]
        assert remove_child(scenario_tree, 10) == scenario_tree

    def test_update_value(self, scenario_tree):
        updated = update_value(scenario_tree, 100)
        assert pre_order(updated) == [100, 2, 3, 4, 5, 6]

    def test_child_at(self, scenario_tree):
        assert child_at(scenario_tree, 4) == Tree(6)
        assert child_at(scenario_tree, 5) is None

    def test_add_subtree(self, branching_tree):
        combined = add_subtree(create_tree("root"), branching_tree)
        assert pre_order(combined) == ["root", "a", "b", "d", "e", "c", "f"]
        assert combined.children[0] is branching_tree

    def test_add_subtree_rejects_mapping(self):
        with pytest.raises(InvalidChild):
            add_subtree(create_tree(1), {"value": 2})

    def test_tree_from_dict_rejects_bad_input(self):
        with pytest.raises(InvalidStructure):
            tree_from_dict({"value": 1, "children": [3]})


class TestOrders:
    """Traversal orders on a branching tree."""

    def test_pre_order(self, branching_tree):
        assert pre_order(branching_tree) == ["a", "b", "d", "e", "c", "f"]

    def test_post_order(self, branching_tree):
        assert post_order(branching_tree) == ["d", "e", "b", "f", "c", "a"]

    def test_breadth_first(self, branching_tree):
        assert breadth_first(branching_tree) == ["a", "b", "c", "d", "e", "f"]

    def test_orders_on_mappings(self, branching_tree):
        data = branching_tree.to_dict()
        adapter = MappingTreeAdapter()
        assert pre_order(data, adapter) == pre_order(branching_tree)
        assert post_order(data, adapter) == post_order(branching_tree)
        assert breadth_first(data, adapter) == breadth_first(branching_tree)


class TestSearch:
    """find_node and find_by_value."""

    def test_first_match_in_pre_order(self, branching_tree):
        # "e" (under b) comes before "f" (under c) in pre-order, though both are leaves
        found = find_node(branching_tree, lambda node: node.is_leaf() and node.value > "d")
        assert found.value == "e"

    def test_root_match(self, branching_tree):
        assert find_node(branching_tree, lambda node: True) is branching_tree

    def test_no_match(self, branching_tree):
        assert find_node(branching_tree, lambda node: node.value == "z") is None

    def test_short_circuits(self, branching_tree):
        seen = []

        def predicate(node):
            seen.append(node.value)
            return node.value == "d"

        find_node(branching_tree, predicate)
        assert seen == ["a", "b", "d"]

    def test_find_by_value(self):
        ledger = build_ledger_tree()
        rent = find_by_value(ledger, ("Rent", -1200.0))
        assert rent == Tree(("Rent", -1200.0))

    def test_find_by_value_on_mapping(self, branching_tree):
        found = find_by_value(branching_tree.to_dict(), "c", MappingTreeAdapter())
        assert found == {"value": "c", "children": [{"value": "f", "children": []}]}


class TestHelpers:
    """Aggregation and structure helpers."""

    def test_sum_values(self):
        ledger = build_ledger_tree()
        assert sum_values(ledger, key=lambda entry: entry[1]) == pytest.approx(5000.0)

    def test_sum_values_plain(self, scenario_tree):
        assert sum_values(scenario_tree) == 21

    def test_max_value(self, scenario_tree):
        assert max_value(scenario_tree) == 6
        assert max_value(scenario_tree, key=lambda v: -v) == -1

    def test_fold_tree_depth(self, branching_tree):
        depth = fold_tree(branching_tree, lambda value, below: 1 + max(below, default=0))
        assert depth == tree_depth(branching_tree) == 3

    def test_fold_tree_render(self, branching_tree):
        render = fold_tree(
            branching_tree,
            lambda value, below: value + ("(" + ",".join(below) + ")" if below else ""),
        )
        assert render == "a(b(d,e),c(f))"

    def test_value_paths(self, branching_tree):
        assert list(get_value_paths(branching_tree)) == [
            ["a"],
            ["a", "b"],
            ["a", "b", "d"],
            ["a", "b", "e"],
            ["a", "c"],
            ["a", "c", "f"],
        ]

    def test_leaf_nodes(self, branching_tree):
        assert [leaf.value for leaf in get_leaf_nodes(branching_tree)] == ["d", "e", "f"]
        assert [leaf.value for leaf in get_leaf_nodes(branching_tree, strategy="dfs_post")] == ["d", "e", "f"]

    def test_tree_stats(self, branching_tree):
        stats = get_tree_stats(branching_tree)
        assert stats == {
            'total_nodes': 6,
            'leaf_nodes': 3,
            'internal_nodes': 3,
            'depth': 3,
            'max_branching': 2,
            'nodes_per_level': {0: 1, 1: 2, 2: 3},
        }

    def test_tree_stats_single_node(self):
        stats = get_tree_stats(create_tree("x"))
        assert stats['total_nodes'] == 1
        assert stats['leaf_nodes'] == 1
        assert stats['depth'] == 1

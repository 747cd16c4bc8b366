#!/usr/bin/env python3
"""
Basic persistree example.

This example demonstrates:
- Building a tree through validated, value-returning mutators
- The three traversal orders
- That earlier versions of a tree stay intact
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from persistree import (
    breadth_first,
    create_tree,
    find_node,
    map_values,
    post_order,
    pre_order,
)


def main():
    """Build the six-node example tree and walk it."""
    root = create_tree(1)
    for value in (2, 3, 4):
        root = root.add_child(value)
    sample = root

    nested = sample.add_child(5).add_child(6)

    print("Pre-order:    ", pre_order(nested))
    print("Post-order:   ", post_order(nested))
    print("Breadth-first:", breadth_first(nested))
    print("Depth:", nested.depth(), " Size:", nested.size())

    print("-" * 50)
    print("Found:", find_node(nested, lambda node: node.value == 3))
    print("Doubled:", pre_order(map_values(nested, lambda v: v * 2)))

    print("-" * 50)
    print("Earlier version still has", sample.child_count(), "children")
    print("Without child 0:", pre_order(nested.remove_child(0)))


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Ledger totals with persistree.

Each node holds a (name, amount) entry. The example prints the total under
every category, looks up a single entry by name, and shows that updating
one amount leaves the previous ledger untouched.
"""

import sys
import time
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from persistree import DepthFirstPreOrderTraverser, SumCollector, find_node, sum_values
from persistree.testing import build_ledger_tree


def amount(entry):
    return entry[1]


def main():
    start = time.perf_counter()
    ledger = build_ledger_tree()

    totals = SumCollector(key=amount)
    for node, depth in DepthFirstPreOrderTraverser().traverse(ledger):
        name, _ = node.value
        print(f"{'  ' * depth}{name}: {totals.collect(node, depth)['aggregated']:.2f}")

    print("-" * 50)
    rent = find_node(ledger, lambda node: node.value[0] == "Rent")
    print("Rent entry:", rent)

    # Rent sits at children[1].children[0]; rebuild the path to it
    expenses = ledger.child_at(1)
    new_expenses = expenses.remove_child(0).graft(rent.update_value(("Rent", -1000.0)))
    new_ledger = ledger.remove_child(1).graft(new_expenses)

    print(f"Old total: {sum_values(ledger, key=amount):.2f}")
    print(f"New total: {sum_values(new_ledger, key=amount):.2f}")
    print(f"Income subtree shared: {new_ledger.child_at(0) is ledger.child_at(0)}")

    elapsed_ms = (time.perf_counter() - start) * 1000
    print(f"Elapsed: {elapsed_ms:.2f}ms")


if __name__ == "__main__":
    main()

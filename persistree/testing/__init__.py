"""Testing utilities for persistree consumers."""

from .fixtures import (
    build_sample_tree,
    build_nested_tree,
    build_ledger_tree,
    build_chain,
    build_complete_tree,
    check_tree_invariants,
)

__all__ = [
    'build_sample_tree',
    'build_nested_tree',
    'build_ledger_tree',
    'build_chain',
    'build_complete_tree',
    'check_tree_invariants',
]

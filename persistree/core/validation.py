"""Structural shape check for tree nodes.

A candidate is a valid tree node when it carries a ``value`` field and,
if it carries ``children`` at all, that field is an ordered sequence
whose elements are themselves valid nodes. The check is purely
structural: the payload stored in ``value`` is never inspected.

Two candidate styles are understood:

- node objects, which expose ``value`` and ``children`` as attributes
  (``Tree`` instances)
- mappings such as ``{"value": 1, "children": [{"value": 2}]}``

Children of a node object must be node objects. Children of a mapping
may be either style.
"""

from collections.abc import Mapping
from typing import Any, List, Set, Tuple

ROOT_PATH = "root"
DIAGNOSTIC_SEPARATOR = "; "

# Strings and byte strings are sequences but never sequences of nodes.
ORDERED_SEQUENCE_TYPES = (list, tuple)


def _get_field(candidate: Any, name: str) -> Tuple[bool, Any]:
    """Return (present, field_value) for a node object or a mapping."""
    if isinstance(candidate, Mapping):
        if name in candidate:
            return True, candidate[name]
        return False, None
    if hasattr(candidate, name):
        return True, getattr(candidate, name)
    return False, None


def _check_tree(root: Any, problems: List[str]) -> None:
    # Explicit stack so deep chains stay within the interpreter's recursion
    # limit. A (candidate, path, allow_mapping, leaving) entry with leaving
    # set pops the candidate off the active ancestor set.
    active: Set[int] = set()
    stack: List[Tuple[Any, str, bool, bool]] = [(root, ROOT_PATH, True, False)]

    while stack:
        candidate, path, allow_mapping, leaving = stack.pop()
        if leaving:
            active.discard(id(candidate))
            continue
        if id(candidate) in active:
            problems.append(f"{path}: node is its own ancestor (cycle)")
            continue

        is_mapping = isinstance(candidate, Mapping)
        if is_mapping and not allow_mapping:
            problems.append(f"{path}: children of a node object must be node objects, got a mapping")
            continue

        has_value, _ = _get_field(candidate, "value")
        if not has_value:
            problems.append(f"{path}: missing 'value' field (got {type(candidate).__name__})")

        has_children, children = _get_field(candidate, "children")
        if not has_children or children is None:
            continue
        if not isinstance(children, ORDERED_SEQUENCE_TYPES):
            problems.append(
                f"{path}.children: expected an ordered sequence (list or tuple), "
                f"got {type(children).__name__}"
            )
            continue

        active.add(id(candidate))
        stack.append((candidate, path, allow_mapping, True))
        # Reversed so children are checked, and reported, in order
        for index in reversed(range(len(children))):
            stack.append((children[index], f"{path}.children[{index}]", is_mapping, False))


def explain_shape(candidate: Any) -> List[str]:
    """Describe every structural problem found in a candidate node.

    Args:
        candidate: A node object or a mapping

    Returns:
        List of diagnostics, each prefixed with the path to the offending
        node (e.g. ``root.children[1]: missing 'value' field``). An empty
        list means the candidate is a valid tree.
    """
    problems: List[str] = []
    _check_tree(candidate, problems)
    return problems


def is_valid_shape(candidate: Any) -> bool:
    """Return True if the candidate passes the shape check."""
    return not explain_shape(candidate)


def format_diagnostic(problems: List[str]) -> str:
    """Join diagnostics into the single string carried by tree errors."""
    return DIAGNOSTIC_SEPARATOR.join(problems)

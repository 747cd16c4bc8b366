"""Immutable tree value for persistree.

A Tree is a value, not a container that gets written into. Every operation
that looks like a mutation returns a new Tree and leaves the receiver
untouched. Subtrees that an operation does not touch are shared between
the old and the new value, so earlier references stay valid.

Only the operations that can introduce a new shape (``create``,
``add_child``, ``graft``, ``update_value`` and ``from_dict``) run the
shape check. Reads and traversals trust their input.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from .._logging import null_logger
from ..errors import InvalidChild, InvalidStructure, InvalidValue, TreeError
from .validation import explain_shape, format_diagnostic

logger = null_logger(__name__)

T = TypeVar("T")
U = TypeVar("U")


def _validated(candidate: Any, error_cls: Type[TreeError], rejected: Any) -> Any:
    """Return candidate if it passes the shape check, else raise error_cls."""
    problems = explain_shape(candidate)
    if problems:
        diagnostic = format_diagnostic(problems)
        logger.debug("%s rejected %r: %s", error_cls.__name__, rejected, diagnostic)
        raise error_cls(rejected, diagnostic)
    return candidate


def _check_index(index: Any) -> None:
    if not isinstance(index, int):
        raise TypeError(f"child index must be an int, got {type(index).__name__}")


def fold_up(root: Any,
            children_of: Callable[[Any], Sequence[Any]],
            combine: Callable[[Any, List[Any]], Any]) -> Any:
    """Combine a tree bottom-up: ``combine(node, [results of its children])``.

    Walks with an explicit stack, so depth is not bounded by the recursion
    limit.
    """
    results: List[Any] = []
    stack: List[Tuple[Any, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        children = children_of(node)
        if not expanded:
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(children))
            continue
        start = len(results) - len(children)
        below = results[start:]
        del results[start:]
        results.append(combine(node, below))
    return results[0]


@dataclass(frozen=True)
class Tree(Generic[T]):
    """A rooted tree node with an ordered tuple of children.

    Equality is structural: two trees are equal when their values and
    children are equal. ``children`` is always stored as a tuple; a list
    or ``None`` passed to the constructor is normalized.

    Build trees through :meth:`create` and the mutators rather than the
    raw constructor, which does not validate.

    Example:
        >>> root = Tree.create(1).add_child(2).add_child(3)
        >>> root.size()
        3
        >>> root.child_at(1)
        Tree(value=3, children=())
    """

    value: T
    children: Tuple["Tree[T]", ...] = ()

    def __post_init__(self):
        if self.children is None:
            object.__setattr__(self, "children", ())
        elif isinstance(self.children, list):
            object.__setattr__(self, "children", tuple(self.children))

    # Construction

    @classmethod
    def create(cls, value: T) -> "Tree[T]":
        """Build a validated single-node tree.

        Raises:
            InvalidStructure: If the new node fails the shape check
        """
        return _validated(cls(value), InvalidStructure, value)

    @classmethod
    def from_dict(cls, data: Any) -> "Tree":
        """Build a tree from nested ``{"value": ..., "children": [...]}`` mappings.

        Tree instances found anywhere in ``data`` are reused as-is.

        Raises:
            InvalidStructure: If ``data`` fails the shape check
        """
        _validated(data, InvalidStructure, data)
        return cls._build(data)

    @classmethod
    def _build(cls, data: Any) -> "Tree":
        def children_of(node: Any) -> Sequence[Any]:
            if isinstance(node, Tree):
                return ()
            if isinstance(node, Mapping):
                return node.get("children") or ()
            return getattr(node, "children", None) or ()

        def combine(node: Any, children: List["Tree"]) -> "Tree":
            if isinstance(node, Tree):
                return node
            value = node["value"] if isinstance(node, Mapping) else node.value
            return cls(value, tuple(children))

        return fold_up(data, children_of, combine)

    def to_dict(self) -> Dict[str, Any]:
        """Return the tree as nested plain dicts, the inverse of from_dict."""
        return fold_up(
            self,
            lambda node: node.children,
            lambda node, children: {"value": node.value, "children": children},
        )

    # Mutation as new values

    def add_child(self, child_value: T) -> "Tree[T]":
        """Return a copy of this node with a new leaf appended to its children.

        Raises:
            InvalidChild: If the new leaf fails the shape check
        """
        leaf = _validated(type(self)(child_value), InvalidChild, child_value)
        return replace(self, children=self.children + (leaf,))

    def graft(self, subtree: "Tree[T]") -> "Tree[T]":
        """Return a copy of this node with an existing tree appended as a child.

        The subtree itself is shared, not copied.

        Raises:
            InvalidChild: If ``subtree`` is not a valid Tree
        """
        if not isinstance(subtree, Tree):
            diagnostic = f"expected a Tree, got {type(subtree).__name__}"
            logger.debug("InvalidChild rejected %r: %s", subtree, diagnostic)
            raise InvalidChild(subtree, diagnostic)
        _validated(subtree, InvalidChild, subtree)
        return replace(self, children=self.children + (subtree,))

    def remove_child(self, index: int) -> "Tree[T]":
        """Return a copy of this node without the child at ``index``.

        An index outside ``[0, child_count())`` is a no-op and returns this
        same tree. Negative indices do not count from the end.

        Raises:
            TypeError: If ``index`` is not an int
        """
        _check_index(index)
        if 0 <= index < len(self.children):
            return replace(self, children=self.children[:index] + self.children[index + 1:])
        return self

    def update_value(self, new_value: T) -> "Tree[T]":
        """Return a copy of this node holding ``new_value``, same children.

        Raises:
            InvalidValue: If the updated node fails the shape check
        """
        return _validated(replace(self, value=new_value), InvalidValue, new_value)

    # Reads

    def child_at(self, index: int) -> Optional["Tree[T]"]:
        """Return the child at ``index``, or None when out of range.

        Raises:
            TypeError: If ``index`` is not an int
        """
        _check_index(index)
        if 0 <= index < len(self.children):
            return self.children[index]
        return None

    def child_count(self) -> int:
        return len(self.children)

    def is_leaf(self) -> bool:
        return not self.children

    def depth(self) -> int:
        """Number of levels in the tree; a leaf has depth 1."""
        deepest = 0
        stack = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children)
        return deepest

    def size(self) -> int:
        """Number of nodes in the tree, this node included."""
        count = 0
        stack = [self]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children)
        return count

    def map_values(self, transform: Callable[[T], U]) -> "Tree[U]":
        """Return a same-shaped tree with every value passed through transform."""
        return fold_up(
            self,
            lambda node: node.children,
            lambda node, children: replace(node, value=transform(node.value), children=tuple(children)),
        )

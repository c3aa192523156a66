"""Per-player store of claimed cells with the equidistant-children win check."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

Shape = tuple[int, "Shape | None", "Shape | None"]


class Node:
    """One claimed value and the subtrees it owns."""

    __slots__ = ("value", "left", "right")

    def __init__(self, value: int, left: Node | None = None, right: Node | None = None):
        self.value = value
        self.left = left
        self.right = right

    @property
    def has_equidistant_children(self) -> bool:
        if self.left is None or self.right is None:
            return False
        return self.value - self.left.value == self.right.value - self.value

    def __repr__(self) -> str:
        return f"Node({self.value})"


class MoveSet:
    """Binary search tree of one player's cells, reshuffled after each insert.

    After every insertion the whole tree gets one post-order pass of local
    rotations: a node with a single child is rotated towards that child, and
    a node with two children is rotated only if a child sits on the wrong
    side. This is not a height-balancing scheme. It keeps three claimed
    values that straddle their midpoint grouped as parent and two children,
    which is what :meth:`has_won` looks for. Shapes are only shallow for the
    handful of values a 3x3 board produces.

    Rotations preserve in-order sequence, so the tree stays a valid BST and
    iteration yields values in ascending order.
    """

    def __init__(self, values: Iterable[int] = ()):
        self._root: Node | None = None
        self._size = 0
        for value in values:
            self.insert(value)

    @property
    def root(self) -> Node | None:
        return self._root

    def insert(self, value: int) -> bool:
        """Insert ``value`` and rebalance. Returns False when it was present."""
        value = int(value)
        if value in self:
            return False
        self._root = self._insert(self._root, value)
        self._size += 1
        self._root = self._rebalance(self._root)
        return True

    def has_won(self) -> bool:
        """Return True if some node's two children are equally far from it."""
        return self._find_equidistant(self._root) is not None

    def winning_triple(self) -> tuple[int, int, int] | None:
        """Return ``(left, node, right)`` for the first equidistant node found."""
        node = self._find_equidistant(self._root)
        if node is None:
            return None
        assert node.left is not None and node.right is not None
        return (node.left.value, node.value, node.right.value)

    def values(self) -> frozenset[int]:
        return frozenset(self)

    def shape(self) -> Shape | None:
        """Return the tree as nested ``(value, left, right)`` tuples."""
        return self._shape(self._root)

    def height(self) -> int:
        return self._height(self._root)

    def copy(self) -> MoveSet:
        """Return an independent tree with the same shape."""
        clone = MoveSet()
        clone._root = self._copy(self._root)
        clone._size = self._size
        return clone

    def to_dict(self) -> dict[str, Any]:
        return {"values": sorted(self), "tree": self._node_dict(self._root)}

    def render(self) -> str:
        """Draw the tree one node per line, children indented under parents."""
        lines: list[str] = []
        self._render(self._root, "", True, lines)
        return "\n".join(lines)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[int]:
        stack: list[Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.value
            node = node.right

    def __contains__(self, value: object) -> bool:
        node = self._root
        while node is not None:
            if value == node.value:
                return True
            node = node.left if value < node.value else node.right  # type: ignore[operator]
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MoveSet):
            return NotImplemented
        return self.shape() == other.shape()

    def __repr__(self) -> str:
        return f"MoveSet({sorted(self)!r})"

    def _insert(self, node: Node | None, value: int) -> Node:
        if node is None:
            return Node(value)
        if value < node.value:
            node.left = self._insert(node.left, value)
        elif value > node.value:
            node.right = self._insert(node.right, value)
        return node

    def _rebalance(self, node: Node | None) -> Node | None:
        if node is None:
            return None

        node.left = self._rebalance(node.left)
        node.right = self._rebalance(node.right)

        if node.left is not None and node.right is None:
            node = self._rotate_right(node)
        elif node.right is not None and node.left is None:
            node = self._rotate_left(node)
        elif node.left is not None and node.right is not None:
            if node.left.value > node.value:
                node = self._rotate_right(node)
            if node.right is not None and node.right.value < node.value:
                node = self._rotate_left(node)
        return node

    @staticmethod
    def _rotate_left(node: Node) -> Node:
        new_root = node.right
        assert new_root is not None
        node.right = new_root.left
        new_root.left = node
        return new_root

    @staticmethod
    def _rotate_right(node: Node) -> Node:
        new_root = node.left
        assert new_root is not None
        node.left = new_root.right
        new_root.right = node
        return new_root

    def _find_equidistant(self, node: Node | None) -> Node | None:
        if node is None:
            return None
        if node.has_equidistant_children:
            return node
        return self._find_equidistant(node.left) or self._find_equidistant(node.right)

    def _shape(self, node: Node | None) -> Shape | None:
        if node is None:
            return None
        return (node.value, self._shape(node.left), self._shape(node.right))

    def _height(self, node: Node | None) -> int:
        if node is None:
            return 0
        return 1 + max(self._height(node.left), self._height(node.right))

    def _copy(self, node: Node | None) -> Node | None:
        if node is None:
            return None
        return Node(node.value, self._copy(node.left), self._copy(node.right))

    def _node_dict(self, node: Node | None) -> dict[str, Any] | None:
        if node is None:
            return None
        return {
            "value": node.value,
            "left": self._node_dict(node.left),
            "right": self._node_dict(node.right),
        }

    def _render(self, node: Node | None, indent: str, last: bool, lines: list[str]) -> None:
        if node is None:
            return
        lines.append(f"{indent}+- {node.value}")
        indent += "   " if last else "|  "
        self._render(node.left, indent, False, lines)
        self._render(node.right, indent, True, lines)

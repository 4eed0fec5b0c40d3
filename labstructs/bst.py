"""An unbalanced binary search tree that keeps duplicate keys as releases."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def digit_count(key: int) -> int:
    """Number of decimal digits of key; zero has none."""
    key = abs(key)
    count = 0
    while key:
        count += 1
        key //= 10
    return count


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


@dataclass(eq=False)
class Node:
    key: int
    info: str
    left: Optional["Node"] = field(default=None, repr=False)
    right: Optional["Node"] = field(default=None, repr=False)
    parent: Optional["Node"] = field(default=None, repr=False)
    thread: Optional["Node"] = field(default=None, repr=False)

    def __str__(self) -> str:
        return f"{self.key}. {self.info}"


def _first_postorder(node: Node) -> Node:
    while True:
        nxt = node.left if node.left is not None else node.right
        if nxt is None:
            return node
        node = nxt


class BinarySearchTree:
    """Equal keys go to the right, so earlier releases lie nearer the root."""

    def __init__(self) -> None:
        self.root: Optional[Node] = None
        self._size = 0
        self._threads_stale = True

    def is_empty(self) -> bool:
        return self.root is None

    def __len__(self) -> int:
        return self._size

    def insert(self, key: int, info: str) -> Node:
        node = Node(key, info)
        parent = None
        current = self.root
        while current is not None:
            parent = current
            current = current.left if key < current.key else current.right
        node.parent = parent
        if parent is None:
            self.root = node
        elif key < parent.key:
            parent.left = node
        else:
            parent.right = node
        self._size += 1
        self._threads_stale = True
        return node

    def _path(self, key: int) -> Iterator[Node]:
        current = self.root
        while current is not None:
            yield current
            current = current.left if key < current.key else current.right

    def count(self, key: int) -> int:
        return sum(1 for node in self._path(key) if node.key == key)

    def find(self, key: int, release: int = 0) -> Node:
        seen = 0
        for node in self._path(key):
            if node.key == key:
                if seen == release:
                    return node
                seen += 1
        raise KeyError((key, release))

    def minimum_key(self) -> int:
        if self.root is None:
            raise ValueError("tree is empty")
        node = self.root
        while node.left is not None:
            node = node.left
        return node.key

    def successor(self, node: Node) -> Optional[Node]:
        """The next node in key order, or None for the last one."""
        if node.right is not None:
            current = node.right
            while current.left is not None:
                current = current.left
            return current
        parent = node.parent
        while parent is not None and node is parent.right:
            node = parent
            parent = node.parent
        return parent

    def delete(self, node: Node) -> Node:
        """Remove node from the tree; the detached node returned holds its key and info."""
        if node.left is None or node.right is None:
            target = node
        else:
            target = self.successor(node)
        child = target.left if target.left is not None else target.right
        parent = target.parent
        if child is not None:
            child.parent = parent
        if parent is None:
            self.root = child
        elif parent.left is target:
            parent.left = child
        else:
            parent.right = child
        if target is not node:
            node.key, target.key = target.key, node.key
            node.info, target.info = target.info, node.info
        target.left = target.right = target.parent = target.thread = None
        self._size -= 1
        self._threads_stale = True
        return target

    def postorder(self) -> Iterator[Node]:
        if self.root is None:
            return
        stack = [self.root]
        visited: List[Node] = []
        while stack:
            node = stack.pop()
            visited.append(node)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        yield from reversed(visited)

    def _preorder(self) -> Iterator[Node]:
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            yield node
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def with_digit_count(self, digits: int) -> Iterator[Node]:
        """Nodes in postorder whose key has the given number of digits."""
        return (node for node in self.postorder() if digit_count(node.key) == digits)

    def release_of(self, node: Node) -> int:
        """How many nodes with the same key precede node on its search path."""
        count = 0
        current = self.root
        while current is not node:
            if current is None:
                raise ValueError("node is not in this tree")
            if current.key == node.key:
                count += 1
            current = current.left if node.key < current.key else current.right
        return count

    def _link_threads(self) -> None:
        root = self.root
        root.thread = _first_postorder(root)
        current = root.thread
        while current is not root:
            parent = current.parent
            if parent.right is current or parent.right is None:
                current.thread = parent
            else:
                current.thread = _first_postorder(parent.right)
            current = current.thread
        self._threads_stale = False

    def threaded_order(self) -> Iterator[Node]:
        """Walk the postorder threads, ending at the root."""
        if self.root is None:
            return
        if self._threads_stale:
            self._link_threads()
        node = self.root.thread
        while node is not self.root:
            yield node
            node = node.thread
        yield self.root

    def render(self) -> str:
        """A sideways picture of the tree, right subtrees on top."""
        parts: List[str] = []
        stack: list = [(self.root, 0)]
        while stack:
            entry = stack.pop()
            if isinstance(entry, str):
                parts.append(entry)
                continue
            node, depth = entry
            if node is None:
                parts.append("\n")
                continue
            stack.append("\n")
            stack.append((node.left, depth + 3))
            stack.append(" " * depth + f"{node.key:3d}. {node.info}\n")
            stack.append((node.right, depth + 3))
        return "".join(parts)

    def to_dot(self) -> str:
        """Graphviz source naming each node key-release."""
        lines = ["digraph {\n"]
        for node in self._preorder():
            release = self.release_of(node)
            for child in (node.left, node.right):
                if child is not None:
                    lines.append(
                        f'\t"{node.key}-{release}" -> "{child.key}-{self.release_of(child)}"\n'
                    )
        lines.append("}")
        return "".join(lines)

    def load_pairs(self, lines: Iterable[str]) -> int:
        """Insert alternating key and info lines; returns the number inserted."""
        added = 0
        key = 0
        for index, line in enumerate(lines):
            text = line.rstrip("\r\n")
            if index % 2 == 0:
                key = _atoi(text)
            else:
                self.insert(key, text)
                added += 1
        return added
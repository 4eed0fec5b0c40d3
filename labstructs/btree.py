"""A B-tree of string keys, each key holding every info added under it."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

MIN_DEGREE = 2
MAX_ITEMS = 2 * MIN_DEGREE - 1
SEPARATOR = ";"


def key_weight(text: str) -> int:
    """Sum of the character codes of text."""
    return sum(ord(char) for char in text)


def position_info(filename: str, line: int, offset: int) -> str:
    """Describe where a word sits: file name, line number and offset, ';'-joined."""
    return f"{filename}{SEPARATOR}{line}{SEPARATOR}{offset}"


@dataclass(eq=False)
class Item:
    """A key and its infos, oldest first; release n is the n-th info added."""

    key: str
    infos: List[str] = field(default_factory=list)

    def remove_release(self, release: int) -> str:
        """Remove and return release number ``release`` (1-based, oldest is 1)."""
        if not 1 <= release <= len(self.infos):
            raise IndexError(f"{self.key!r} has no release {release}")
        return self.infos.pop(release - 1)

    def __str__(self) -> str:
        return f"{self.key}:" + "".join(f" {info} " for info in reversed(self.infos))


@dataclass(eq=False)
class BNode:
    items: List[Item] = field(default_factory=list)
    children: List["BNode"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_full(self) -> bool:
        return len(self.items) == MAX_ITEMS

    def index_of(self, key: str) -> int:
        """Position of the first item whose key is not less than key."""
        return bisect_left([item.key for item in self.items], key)


class BTree:
    """A B-tree of minimum degree 2 (at most three keys per node)."""

    def __init__(self) -> None:
        self.root = BNode()

    def is_empty(self) -> bool:
        return not self.root.items

    def search(self, key: str) -> Optional[Item]:
        node: Optional[BNode] = self.root
        while node is not None:
            index = node.index_of(key)
            if index < len(node.items) and node.items[index].key == key:
                return node.items[index]
            node = None if node.is_leaf else node.children[index]
        return None

    def insert(self, key: str, info: str) -> Item:
        """Add info under key, creating the key when it is new."""
        existing = self.search(key)
        if existing is not None:
            existing.infos.append(info)
            return existing
        if self.root.is_full:
            old_root = self.root
            self.root = BNode(children=[old_root])
            self._split_child(self.root, 0)
        item = Item(key, [info])
        node = self.root
        while not node.is_leaf:
            index = node.index_of(key)
            if node.children[index].is_full:
                self._split_child(node, index)
                if key > node.items[index].key:
                    index += 1
            node = node.children[index]
        node.items.insert(node.index_of(key), item)
        return item

    @staticmethod
    def _split_child(parent: BNode, index: int) -> None:
        child = parent.children[index]
        right = BNode(
            items=child.items[MIN_DEGREE:],
            children=child.children[MIN_DEGREE:],
        )
        median = child.items[MIN_DEGREE - 1]
        child.items = child.items[: MIN_DEGREE - 1]
        child.children = child.children[:MIN_DEGREE]
        parent.items.insert(index, median)
        parent.children.insert(index + 1, right)

    def remove(self, key: str) -> Item:
        """Remove key with all its infos and return its item."""
        removed = self._remove(self.root, key)
        if not self.root.items and not self.root.is_leaf:
            self.root = self.root.children[0]
        return removed

    def _remove(self, node: BNode, key: str) -> Item:
        index = node.index_of(key)
        if index < len(node.items) and node.items[index].key == key:
            if node.is_leaf:
                return node.items.pop(index)
            found = node.items[index]
            left, right = node.children[index], node.children[index + 1]
            if len(left.items) >= MIN_DEGREE:
                predecessor = self._rightmost(left)
                node.items[index] = predecessor
                self._remove(left, predecessor.key)
                return found
            if len(right.items) >= MIN_DEGREE:
                successor = self._leftmost(right)
                node.items[index] = successor
                self._remove(right, successor.key)
                return found
            self._merge(node, index)
            return self._remove(left, key)
        if node.is_leaf:
            raise KeyError(key)
        child = node.children[index]
        if len(child.items) == MIN_DEGREE - 1:
            if index > 0 and len(node.children[index - 1].items) >= MIN_DEGREE:
                left = node.children[index - 1]
                child.items.insert(0, node.items[index - 1])
                node.items[index - 1] = left.items.pop()
                if not left.is_leaf:
                    child.children.insert(0, left.children.pop())
            elif index < len(node.items) and len(node.children[index + 1].items) >= MIN_DEGREE:
                right = node.children[index + 1]
                child.items.append(node.items[index])
                node.items[index] = right.items.pop(0)
                if not right.is_leaf:
                    child.children.append(right.children.pop(0))
            else:
                if index == len(node.items):
                    index -= 1
                self._merge(node, index)
            child = node.children[index]
        return self._remove(child, key)

    @staticmethod
    def _merge(node: BNode, index: int) -> None:
        left = node.children[index]
        right = node.children.pop(index + 1)
        left.items.append(node.items.pop(index))
        left.items.extend(right.items)
        left.children.extend(right.children)

    @staticmethod
    def _leftmost(node: BNode) -> Item:
        while not node.is_leaf:
            node = node.children[0]
        return node.items[0]

    @staticmethod
    def _rightmost(node: BNode) -> Item:
        while not node.is_leaf:
            node = node.children[-1]
        return node.items[-1]

    def min_item(self) -> Item:
        if self.is_empty():
            raise ValueError("tree is empty")
        return self._leftmost(self.root)

    def max_item(self) -> Item:
        if self.is_empty():
            raise ValueError("tree is empty")
        return self._rightmost(self.root)

    def _preorder(self) -> Iterator[BNode]:
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def traverse(self, bound: Optional[str] = None) -> Iterator[Item]:
        """Items node by node in preorder; with a bound, only keys below it."""
        for node in self._preorder():
            for item in node.items:
                if bound is None or item.key < bound:
                    yield item

    def special_search(self, key: str) -> List[Item]:
        """The extreme item(s) whose key weight lies farthest from key's weight.

        Equal nonzero distances give [max, min]; an answer equal to key itself
        gives an empty list.
        """
        smallest, largest = self.min_item(), self.max_item()
        weight = key_weight(key)
        to_min = abs(weight - key_weight(smallest.key))
        to_max = abs(weight - key_weight(largest.key))
        if to_min == to_max and to_min != 0:
            return [largest, smallest]
        chosen = smallest if to_min > to_max else largest
        return [] if chosen.key == key else [chosen]

    def render(self) -> str:
        """A text drawing of the nodes, one per line, under a '0' header."""
        lines = ["0"]
        self._render(self.root, "|-- ", "|   ", lines)
        return "\n".join(lines) + "\n"

    def _render(self, node: BNode, prefix: str, child_prefix: str, lines: List[str]) -> None:
        lines.append(prefix + "".join(f"{item.key} " for item in node.items))
        last = len(node.items)
        for index, child in enumerate(node.children):
            if index == last:
                self._render(child, child_prefix + "^-- ", child_prefix + "    ", lines)
            else:
                self._render(child, child_prefix + "|-- ", child_prefix + "|   ", lines)

    def to_dot(self) -> str:
        """Graphviz source; each node is named by its keys joined with '-'."""
        lines = ["digraph {\n"]
        for node in self._preorder():
            if not node.items:
                continue
            label = "-".join(item.key for item in node.items)
            for child in node.children:
                if child.items:
                    child_label = "-".join(item.key for item in child.items)
                    lines.append(f'\t"{label}" -> "{child_label}"\n')
        lines.append("}")
        return "".join(lines)

    def load_pairs(self, lines: Iterable[str]) -> int:
        """Insert alternating key and info lines; returns the number inserted."""
        added = 0
        key = ""
        for index, line in enumerate(lines):
            text = line.rstrip("\r\n")
            if index % 2 == 0:
                key = text
            else:
                self.insert(key, text)
                added += 1
        return added

    def index_words(self, lines: Iterable[str], filename: str) -> int:
        """Insert every space-separated word with its position; returns the word count."""
        added = 0
        for number, line in enumerate(lines):
            offset = 0
            for word in line.rstrip("\r\n").split(" "):
                if not word:
                    continue
                self.insert(word, position_info(filename, number, offset))
                offset += len(word) + 1
                added += 1
        return added
"""An open-addressing cache placed in front of a B-tree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from itertools import takewhile
from math import gcd
from typing import Iterator, List, Optional, Tuple, Union

from .btree import BTree, Item

HASH_NUMBER = 37
_HASH_MODULUS = 2**64


def string_hash(key: str) -> int:
    """Polynomial hash with multiplier 37 over the signed UTF-8 bytes, modulo 2**64."""
    value = 0
    for byte in key.encode("utf-8"):
        signed = byte - 256 if byte > 127 else byte
        value = (HASH_NUMBER * value + signed) % _HASH_MODULUS
    return value


def find_step(capacity: int) -> int:
    """The smallest probe step of at least 2 that is coprime with capacity, else 1."""
    if capacity <= 0:
        raise ValueError("capacity must be positive")
    for step in range(2, capacity):
        if gcd(step, capacity) == 1:
            return step
    return 1


class EntryState(IntEnum):
    DELETED = 0
    RECORDED = 1
    SEARCHED = 2


@dataclass
class Entry:
    key: str
    info: str
    state: EntryState
    age: int = 0

    @property
    def recorded(self) -> bool:
        return self.state is EntryState.RECORDED

    @property
    def deleted(self) -> bool:
        return self.state is EntryState.DELETED

    def __str__(self) -> str:
        return (
            f"1, {self.key} -- {self.info} | {int(self.recorded)} | "
            f"{int(self.deleted)} | {self.age}"
        )


class TreeCache:
    """A fixed-size hash table of recent tree operations, flushed into the tree on eviction."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self.step = find_step(capacity)
        self._slots: List[Optional[Entry]] = [None] * capacity

    def _probe(self, start: int = 0) -> Iterator[int]:
        index = start
        for _ in range(self.capacity):
            yield index
            index = (index + self.step) % self.capacity

    def insert(self, key: str, info: str, state: EntryState) -> Optional[int]:
        """Place an entry at the first free probed slot; None when the cache is full."""
        for index in self._probe(string_hash(key) % self.capacity):
            if self._slots[index] is None:
                self._slots[index] = Entry(key, info, EntryState(state))
                return index
        return None

    def _youngest(self) -> int:
        busy = list(takewhile(lambda i: self._slots[i] is not None, self._probe()))
        if not busy:
            return 0
        return min(busy, key=lambda i: self._slots[i].age)

    @staticmethod
    def _apply(tree: BTree, entry: Entry) -> None:
        if entry.recorded:
            tree.insert(entry.key, entry.info)
        elif entry.deleted:
            try:
                tree.remove(entry.key)
            except KeyError:
                pass

    def evict(self, tree: BTree) -> int:
        """Free the slot of the least aged entry, applying it to the tree; returns the slot."""
        index = self._youngest()
        entry = self._slots[index]
        if entry is not None:
            self._apply(tree, entry)
        self._slots[index] = None
        return index

    def store(self, tree: BTree, key: str, info: str, state: EntryState) -> int:
        """Insert an entry, evicting one first if the cache is full."""
        index = self.insert(key, info, state)
        if index is None:
            index = self.evict(tree)
            self._slots[index] = Entry(key, info, EntryState(state))
        return index

    def find(self, tree: BTree, key: str) -> Tuple[Optional[Item], bool]:
        """Look in the cache, then the tree; the flag tells whether the cache answered."""
        for index in self._probe():
            entry = self._slots[index]
            if entry is None:
                continue
            entry.age += 1
            if entry.key == key and not entry.deleted:
                return Item(key, [entry.info]), True
        return tree.search(key), False

    def remove(self, key: str) -> bool:
        """Drop the first entry with key; returns whether one was found."""
        for index in self._probe():
            entry = self._slots[index]
            if entry is None:
                continue
            entry.age += 1
            if entry.key == key:
                self._slots[index] = None
                return True
        return False

    def contains_deleted(self, key: str) -> bool:
        return any(
            entry is not None and entry.key == key and entry.deleted for entry in self._slots
        )

    def entries(self) -> List[Entry]:
        """Busy entries in probe order."""
        return [self._slots[i] for i in self._probe() if self._slots[i] is not None]

    def describe(self) -> str:
        """One line per entry; each listed entry ages by one."""
        lines = []
        for entry in self.entries():
            entry.age += 1
            lines.append(f"{entry}\n")
        return "".join(lines)

    def traverse(self, tree: BTree, bound: Optional[str] = None) -> Iterator[Union[Item, Entry]]:
        """Tree items below bound, then cache entries below bound."""
        yield from tree.traverse(bound)
        for entry in self._slots:
            if entry is not None and (bound is None or entry.key < bound):
                yield entry

    def flush(self, tree: BTree) -> None:
        """Apply every entry to the tree and empty the cache."""
        for index, entry in enumerate(self._slots):
            if entry is not None:
                self._apply(tree, entry)
                self._slots[index] = None
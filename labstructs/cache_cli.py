"""Interactive menu over a B-tree with a cache in front of it."""

from __future__ import annotations

import argparse
from typing import Callable, Dict, Optional, Sequence

from .btree import BTree
from .cache import EntryState, TreeCache
from .console import Console, EndOfInput

MENU = ("0. Quit", "1. Add", "2. Delete", "3. Detour", "4. Find", "5. Print")


def _add(console: Console, tree: BTree, cache: TreeCache) -> None:
    console.write("Enter element's key:\n")
    key = console.read_line(">")
    console.write("Enter element information:\n")
    info = console.read_line(">")
    tree.insert(key, info)
    cache.store(tree, key, info, EntryState.SEARCHED)
    console.write("Recording was successfully\n")


def _delete(console: Console, tree: BTree, cache: TreeCache) -> None:
    console.write("Enter the key of the element you are looking for delete:\n")
    key = console.read_line(">")
    if tree.search(key) is None:
        console.write("No elements with that key\n")
        return
    tree.remove(key)
    while cache.remove(key):
        pass


def _detour(console: Console, tree: BTree, cache: TreeCache) -> None:
    if tree.is_empty():
        console.write("Tree is empty, detour not possible!\n")
        return
    bound = console.read_line(">")
    console.write("Detour:\n")
    for entry in cache.traverse(tree, bound):
        console.write(f"{entry}\n")


def _find(console: Console, tree: BTree, cache: TreeCache) -> None:
    console.write("Enter the key of the element you are looking for:\n")
    key = console.read_line(">")
    item, from_cache = cache.find(tree, key)
    if item is None:
        console.write("No elements with that key!\n")
        return
    console.write("That element was found:\n")
    console.write(f"{item}\n")
    if not from_cache:
        cache.store(tree, key, item.infos[-1], EntryState.SEARCHED)


def _print(console: Console, tree: BTree, cache: TreeCache) -> None:
    console.write("Your tree:\n")
    console.write(tree.render() + "\n")
    console.write(cache.describe())


_ACTIONS: Dict[int, Callable[[Console, BTree, TreeCache], None]] = {
    1: _add,
    2: _delete,
    3: _detour,
    4: _find,
    5: _print,
}


def run_session(console: Console, tree: BTree, cache: TreeCache) -> None:
    """Serve menu choices until the user quits or input runs out."""
    try:
        while (choice := console.menu(MENU)) != 0:
            _ACTIONS[choice](console, tree, cache)
    except EndOfInput:
        pass


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="btree-cache", description="B-tree behind a cache.")
    parser.add_argument("capacity", nargs="?", type=int, help="cache size; asked for when omitted")
    args = parser.parse_args(argv)
    console = Console()
    capacity = args.capacity
    if capacity is None:
        console.write("Enter size of cache:\n")
        try:
            capacity = console.read_positive_int()
        except EndOfInput:
            return 1
    if capacity <= 0:
        console.write("Cache size must be positive!\n")
        return 1
    tree = BTree()
    cache = TreeCache(capacity)
    run_session(console, tree, cache)
    cache.flush(tree)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
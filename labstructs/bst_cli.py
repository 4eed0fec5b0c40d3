"""Interactive menu over a binary search tree with duplicate keys."""

from __future__ import annotations

import argparse
import subprocess
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

from .bst import BinarySearchTree
from .console import Console, EndOfInput

MENU = (
    "0. Quit",
    "1. Add",
    "2. Delete key",
    "3. Detour tree",
    "4. Find key",
    "5. Special find",
    "6. Import from file",
    "7. Print tree",
    "8. Print tree list",
    "9. Create a .dot file",
)

RELEASE_ERROR = "Enter the correct number of release!"
DOT_FILE = "file.dot"
IMAGE_FILE = "result.png"


def _add(console: Console, tree: BinarySearchTree) -> None:
    console.write("Enter element key:\n")
    key = console.read_positive_int()
    console.write("Enter element info:\n")
    info = console.read_nonempty_line(">")
    tree.insert(key, info)
    console.write("Element was successfully written to the tree\n")


def _delete(console: Console, tree: BinarySearchTree) -> None:
    if tree.is_empty():
        console.write("Tree is empty, delete not possible!\n")
        return
    console.write("Enter the key of the element you are looking for delete:\n")
    key = console.read_positive_int()
    if tree.count(key) == 0:
        console.write("No elements with that key!\n")
        return
    removed = tree.delete(tree.find(key, 0))
    console.write(f"That element was deleted: {removed}\n")


def _detour(console: Console, tree: BinarySearchTree) -> None:
    if tree.is_empty():
        console.write("Tree is empty, detour not possible!\n")
        return
    console.write("Enter number of digits:\n")
    digits = console.read_positive_int()
    console.write("Detour:\n")
    for node in tree.with_digit_count(digits):
        console.write(f"{node}\n")


def _show_release(console: Console, tree: BinarySearchTree, key: int) -> None:
    count = tree.count(key)
    console.write(f"Contains {count} elements with that key\n")
    console.write(f"Max number of release == {count - 1}\n")
    console.write("Enter number of release, which one would you like to find:\n")
    release = console.read_int_between(0, count - 1, RELEASE_ERROR)
    node = tree.find(key, release)
    console.write("that element was found:\n")
    console.write(f"{node}\n")


def _find(console: Console, tree: BinarySearchTree) -> None:
    if tree.is_empty():
        console.write("Tree is empty, search not possible!\n")
        return
    console.write("Enter the key of the element you are looking for:\n")
    key = console.read_positive_int()
    if tree.count(key) == 0:
        console.write("No elements with that key!\n")
        return
    _show_release(console, tree, key)


def _special_find(console: Console, tree: BinarySearchTree) -> None:
    if tree.is_empty():
        console.write("Tree is empty, search not possible!\n")
        return
    _show_release(console, tree, tree.minimum_key())


def _import(console: Console, tree: BinarySearchTree) -> None:
    filename = console.read_nonempty_line(">")
    try:
        with open(filename, "r", encoding="utf-8") as source:
            tree.load_pairs(source)
    except OSError:
        console.write("Error with the file opening!\n")
        return
    console.write("Recording was successfull!\n")


def _print_tree(console: Console, tree: BinarySearchTree) -> None:
    if tree.is_empty():
        console.write("Tree is empty\n")
    console.write("Your tree:\n")
    console.write(tree.render())


def _print_list(console: Console, tree: BinarySearchTree) -> None:
    if tree.is_empty():
        console.write("Tree is empty!\n")
        return
    console.write("Your tree:\n")
    for node in tree.postorder():
        console.write(f"{node}\n")


def _dot_file(console: Console, tree: BinarySearchTree) -> None:
    if tree.is_empty():
        console.write("Tree is empty!\n")
        return
    Path(DOT_FILE).write_text(tree.to_dot(), encoding="utf-8")
    try:
        subprocess.run(["dot", "-Tpng", DOT_FILE, "-o", IMAGE_FILE], check=False)
    except FileNotFoundError:
        console.write("Graphviz dot is not available!\n")


_ACTIONS: Dict[int, Callable[[Console, BinarySearchTree], None]] = {
    1: _add,
    2: _delete,
    3: _detour,
    4: _find,
    5: _special_find,
    6: _import,
    7: _print_tree,
    8: _print_list,
    9: _dot_file,
}


def run_session(console: Console, tree: BinarySearchTree) -> None:
    """Serve menu choices until the user quits or input runs out."""
    try:
        while (choice := console.menu(MENU)) != 0:
            _ACTIONS[choice](console, tree)
    except EndOfInput:
        pass


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="bst", description="Binary search tree with releases.")
    parser.parse_args(argv)
    run_session(Console(), BinarySearchTree())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
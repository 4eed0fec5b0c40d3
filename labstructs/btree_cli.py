"""Interactive menu over a B-tree of string keys."""

from __future__ import annotations

import argparse
import subprocess
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

from .btree import BTree
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
    "8. Print graph",
    "9. Process file",
)

RELEASE_ERROR = "Enter the correct number of release!"
DOT_FILE = "file.dot"
IMAGE_FILE = "result.png"


def _add(console: Console, tree: BTree) -> None:
    console.write("Enter element key:\n")
    key = console.read_nonempty_line(">")
    console.write("Enter element info;\n")
    info = console.read_nonempty_line(">")
    tree.insert(key, info)
    console.write("Element was successfully written to the tree\n")


def _delete(console: Console, tree: BTree) -> None:
    if tree.is_empty():
        console.write("Tree is empty, delete not possible!\n")
        return
    console.write("Enter the key of the element you are looking for delete\n")
    key = console.read_nonempty_line(">")
    item = tree.search(key)
    if item is None:
        console.write("There is no elements with that key!\n")
        return
    count = len(item.infos)
    if count == 1:
        tree.remove(key)
        console.write("Element was successfully delete!\n")
        return
    console.write(f"Contains {count} information with that key\n")
    console.write(f"Max number of release == {count}\n")
    console.write("Enter number of release, which one would you like to delete:\n")
    release = console.read_int_between(1, count, RELEASE_ERROR)
    item.remove_release(release)
    console.write("element was successfuly delete\n")


def _detour(console: Console, tree: BTree) -> None:
    if tree.is_empty():
        console.write("Tree is empty, detour not possible!\n")
        return
    bound = console.read_nonempty_line(">")
    console.write("Detour:\n")
    for item in tree.traverse(bound):
        console.write(f"{item}\n")


def _find(console: Console, tree: BTree) -> None:
    if tree.is_empty():
        console.write("Tree is empty, search not possible!\n")
        return
    console.write("Enter the key of the element you are looking for:\n")
    key = console.read_nonempty_line(">")
    item = tree.search(key)
    if item is None:
        console.write("No elements with that key!\n")
        return
    console.write("That elements was found:\n")
    console.write(f"{item}\n")


def _special_find(console: Console, tree: BTree) -> None:
    if tree.is_empty():
        console.write("Tree is empty, search not possible!\n")
        return
    console.write("Enter the key\n")
    key = console.read_nonempty_line(">")
    found = tree.special_search(key)
    if not found:
        console.write("There are no elements different from this one\n")
        return
    console.write("That elements were found:\n")
    for item in found:
        console.write(f"{item}\n")


def _print_tree(console: Console, tree: BTree) -> None:
    if tree.is_empty():
        console.write("Tree is empty!\n")
    console.write("Your tree:\n")
    console.write(tree.render() + "\n")


def _import(console: Console, tree: BTree) -> None:
    console.write("Enter the file name:\n")
    filename = console.read_nonempty_line(">")
    try:
        with open(filename, "r", encoding="utf-8") as source:
            tree.load_pairs(source)
    except OSError:
        console.write("Error with the file opening!\n")
        return
    console.write("Recording was successfull!\n")


def _run_tool(console: Console, command: Sequence[str]) -> None:
    try:
        subprocess.run(list(command), check=False)
    except FileNotFoundError:
        console.write(f"{command[0]} is not available!\n")


def _dot_file(console: Console, tree: BTree) -> None:
    if tree.is_empty():
        console.write("Tree is empty!\n")
        return
    Path(DOT_FILE).write_text(tree.to_dot(), encoding="utf-8")
    _run_tool(console, ["dot", "-Tpng", DOT_FILE, "-o", IMAGE_FILE])
    _run_tool(console, ["catimg", IMAGE_FILE])


def _process_file(console: Console, tree: BTree) -> None:
    console.write("Enter the file name:\n")
    filename = console.read_nonempty_line(">")
    try:
        with open(filename, "r", encoding="utf-8") as source:
            tree.index_words(source, filename)
    except OSError:
        console.write("Error with the file opening!\n")
        return
    console.write("Recording was successfully!\n")


_ACTIONS: Dict[int, Callable[[Console, BTree], None]] = {
    1: _add,
    2: _delete,
    3: _detour,
    4: _find,
    5: _special_find,
    6: _import,
    7: _print_tree,
    8: _dot_file,
    9: _process_file,
}


def run_session(console: Console, tree: BTree) -> None:
    """Serve menu choices until the user quits or input runs out."""
    try:
        while (choice := console.menu(MENU)) != 0:
            _ACTIONS[choice](console, tree)
    except EndOfInput:
        pass


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="btree", description="B-tree of string keys.")
    parser.parse_args(argv)
    run_session(Console(), BTree())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
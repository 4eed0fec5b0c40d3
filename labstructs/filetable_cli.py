"""Interactive menu over a file-backed keyed table."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

from .console import Console, EndOfInput
from .filetable import FileTable

MENU = (
    "0. Quit",
    "1. Add",
    "2. Find one",
    "3. Find all",
    "4. Delete all",
    "5. Clean table",
    "6. Show table",
)

RELEASE_ERROR = "Enter the correct number of release!"


def _add(console: Console, table: FileTable) -> None:
    console.write("Enter element key:\n")
    key = console.read_positive_int()
    console.write("Enter element info:\n")
    info = console.read_nonempty_line(">")
    if table.contains(key, info):
        console.write("There is a such an element!\n")
        return
    table.add(key, info)
    console.write("Element was successfully written to the table\n")


def _find_one(console: Console, table: FileTable) -> None:
    if table.is_empty():
        console.write("Table is empty! Search not possible!\n")
        return
    console.write("Enter the key of the element you are looking for:\n")
    key = console.read_positive_int()
    count = table.count_releases(key)
    if count == 0:
        console.write("No element with that key!\n")
        return
    console.write(f"Contains {count} elements with that key\n")
    console.write(f"Max number of release == {count - 1}\n")
    console.write("Enter number of release, which one would you like to find:\n")
    release = console.read_int_between(0, count - 1, RELEASE_ERROR)
    try:
        record = table.find(key, release)
    except KeyError:
        console.write("No element with that release!\n")
        return
    console.write("That element was found:\n")
    console.write(f"\t{record}\n")


def _find_all(console: Console, table: FileTable) -> None:
    if table.is_empty():
        console.write("Table is empty, search not possible\n")
        return
    console.write("Enter the key of the elements you are looking for:\n")
    key = console.read_positive_int()
    records = table.find_all(key)
    if not records:
        console.write("No elements with that key!\n")
        return
    console.write("That elements were found:\n")
    for record in records:
        console.write(f"\t{record}\n")


def _delete_all(console: Console, table: FileTable) -> None:
    if table.is_empty():
        console.write("Table is empty, delete not possible!\n")
        return
    console.write("Enter the key of the elements you are looking for delete:\n")
    key = console.read_positive_int()
    if table.count_releases(key) == 0:
        console.write("No elements with that key!\n")
        return
    removed = table.delete_all(key)
    console.write("That elements were deleted:\n")
    for record in removed:
        console.write(f"\t{record}\n")


def _clean(console: Console, table: FileTable) -> None:
    if table.is_empty():
        console.write("Table is empty, cleaning not possible!\n")
        return
    if table.clean() == 0:
        console.write("Cleaning was successfull, but nothing has changed!\n")
        return
    console.write("Cleaning was successfull!\n")


def _show(console: Console, table: FileTable) -> None:
    if table.is_empty():
        console.write("Table is empty!\n")
        return
    for index in range(table.size):
        console.write(f"hash{index}#\n")
        for record in table.bucket(index):
            console.write(f"\t{record}\n")


_ACTIONS: Dict[int, Callable[[Console, FileTable], None]] = {
    1: _add,
    2: _find_one,
    3: _find_all,
    4: _delete_all,
    5: _clean,
    6: _show,
}


def run_session(console: Console, table: FileTable) -> None:
    """Serve menu choices until the user quits or input runs out."""
    try:
        while (choice := console.menu(MENU)) != 0:
            _ACTIONS[choice](console, table)
    except EndOfInput:
        pass


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="filetable", description="Keyed table kept in a binary file.")
    parser.add_argument("path", nargs="?", help="table file; asked for when omitted")
    args = parser.parse_args(argv)
    console = Console()
    try:
        path = args.path
        if path is None:
            console.write("Enter the file name:\n")
            path = console.read_line(">")
        if Path(path).exists():
            table = FileTable(path)
            console.write("Opened an existing file!\n")
        else:
            console.write("Enter the table size:\n")
            table = FileTable(path, console.read_positive_int())
            console.write("New file opened!\n")
    except EndOfInput:
        return 1
    except (OSError, ValueError) as error:
        console.write(f"{error}\n")
        return 1
    with table:
        run_session(console, table)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
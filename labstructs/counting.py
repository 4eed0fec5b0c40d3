"""Count occurrences of integers read from a binary file, using a search tree."""

from __future__ import annotations

import argparse
import os
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .console import Console, EndOfInput

_INT = struct.Struct("<i")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

PathLike = Union[str, os.PathLike]


@dataclass(eq=False)
class _CountNode:
    key: int
    count: int = 1
    left: Optional["_CountNode"] = field(default=None, repr=False)
    right: Optional["_CountNode"] = field(default=None, repr=False)


class CountingTree:
    """A binary search tree holding each key once with its occurrence count."""

    def __init__(self) -> None:
        self.root: Optional[_CountNode] = None

    def add(self, key: int) -> bool:
        """Count key; returns True when it was not present before."""
        if self.root is None:
            self.root = _CountNode(key)
            return True
        current = self.root
        while True:
            if key == current.key:
                current.count += 1
                return False
            if key < current.key:
                if current.left is None:
                    current.left = _CountNode(key)
                    return True
                current = current.left
            else:
                if current.right is None:
                    current.right = _CountNode(key)
                    return True
                current = current.right

    def postorder(self) -> Iterator[Tuple[int, int]]:
        """Yield (key, count) pairs, children before parents."""
        if self.root is None:
            return
        stack = [self.root]
        visited: List[_CountNode] = []
        while stack:
            node = stack.pop()
            visited.append(node)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        for node in reversed(visited):
            yield node.key, node.count


def write_numbers(path: PathLike, numbers: Iterable[int]) -> None:
    """Write numbers as little-endian 32-bit integers."""
    chunks = []
    for number in numbers:
        if not _INT_MIN <= number <= _INT_MAX:
            raise ValueError(f"{number} does not fit in a 32-bit integer")
        chunks.append(_INT.pack(number))
    Path(path).write_bytes(b"".join(chunks))


def read_numbers(path: PathLike) -> List[int]:
    """Read the little-endian 32-bit integers of a file; a trailing fragment is ignored."""
    data = Path(path).read_bytes()
    usable = len(data) - len(data) % _INT.size
    return [value for (value,) in _INT.iter_unpack(data[:usable])]


def write_report(path: PathLike, tree: CountingTree) -> None:
    with open(path, "w", encoding="utf-8") as out:
        for key, count in tree.postorder():
            out.write(f"{key} --- {count}\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="number-dictionary", description="Count integers stored in a binary file."
    )
    parser.add_argument("source", nargs="?", help="binary file of integers")
    parser.add_argument("report", nargs="?", help="text file for the counts")
    args = parser.parse_args(argv)
    console = Console()
    try:
        source = args.source if args.source is not None else console.read_line(">")
        try:
            numbers = read_numbers(source)
        except OSError:
            return 1
        report = args.report if args.report is not None else console.read_line(">")
    except EndOfInput:
        return 1
    tree = CountingTree()
    for number in numbers:
        tree.add(number)
    write_report(report, tree)
    return 0


def make_file_main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="make-number-file", description="Write integers to a binary file."
    )
    parser.add_argument("path", nargs="?", help="file to write; asked for when omitted")
    parser.add_argument("numbers", nargs="*", type=int)
    args = parser.parse_args(argv)
    if args.path is not None:
        path, numbers = args.path, args.numbers
    else:
        console = Console()
        try:
            console.write("Enter the file name:\n")
            path = console.read_line(">")
            console.write("Enter the count of numbers, whom you will write in file:\n")
            count = console.read_int_between(0, None, "Enter a non-negative count!")
            console.write(f"Enter the {count} numbers\n")
            numbers = [
                console.read_int_between(None, None, "Enter an integer value!")
                for _ in range(count)
            ]
        except EndOfInput:
            return 1
    write_numbers(path, numbers)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
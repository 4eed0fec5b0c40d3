"""Timing of insertion, deletion and search in the search trees."""

from __future__ import annotations

import argparse
import os
import random
import time
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .bst import BinarySearchTree
from .btree import BTree
from .console import Console, EndOfInput

RAND_MAX = 2**31 - 1
OPERATIONS = 1000
REPEATS = 10

BST_SIZES = (
    1000, 2000, 3000, 5000, 10000, 15000, 30000, 50000, 60000, 70000,
    90000, 110000, 130000, 150000, 200000, 250000, 500000, 1000000, 5000000,
)
BTREE_SIZES = (
    1000, 2000, 3000, 5000, 10000, 15000, 30000, 50000, 60000, 70000,
    90000, 110000, 130000, 150000, 200000, 250000, 500000, 750000, 1000000,
)


def random_string(rng: random.Random) -> str:
    """Three printable characters with codes from 33 to 124."""
    return "".join(chr(rng.randrange(92) + 33) for _ in range(3))


def _random_key(rng: random.Random) -> int:
    return rng.randint(0, RAND_MAX)


def bst_add(tree: BinarySearchTree, count: int, rng: random.Random) -> float:
    start = time.process_time()
    for _ in range(count):
        tree.insert(_random_key(rng), "")
    return time.process_time() - start


def bst_delete(tree: BinarySearchTree, count: int, rng: random.Random) -> float:
    start = time.process_time()
    for _ in range(count):
        try:
            node = tree.find(_random_key(rng), 0)
        except KeyError:
            continue
        tree.delete(node)
    return time.process_time() - start


def bst_find(tree: BinarySearchTree, count: int, rng: random.Random) -> float:
    start = time.process_time()
    for _ in range(count):
        try:
            tree.find(_random_key(rng), 0)
        except KeyError:
            pass
    return time.process_time() - start


def btree_add(tree: BTree, count: int, rng: random.Random) -> float:
    start = time.process_time()
    for _ in range(count):
        key = random_string(rng)
        tree.insert(key, random_string(rng))
    return time.process_time() - start


def btree_delete(tree: BTree, count: int, rng: random.Random) -> float:
    """Remove the newest info of each random key that is present."""
    start = time.process_time()
    for _ in range(count):
        item = tree.search(random_string(rng))
        if item is not None and item.infos:
            item.remove_release(len(item.infos))
    return time.process_time() - start


def btree_find(tree: BTree, count: int, rng: random.Random) -> float:
    start = time.process_time()
    for _ in range(count):
        tree.search(random_string(rng))
    return time.process_time() - start


_STRUCTURES: Dict[str, Tuple[Callable[[], object], Callable, Dict[str, Callable]]] = {
    "bst": (
        BinarySearchTree,
        bst_add,
        {"add": bst_add, "delete": bst_delete, "find": bst_find},
    ),
    "btree": (
        BTree,
        btree_add,
        {"add": btree_add, "delete": btree_delete, "find": btree_find},
    ),
}


def measure(
    structure: str,
    operation: str,
    sizes: Iterable[int],
    repeats: int,
    rng: random.Random,
) -> List[Tuple[int, float]]:
    """Average seconds for OPERATIONS operations on trees of each size."""
    if structure not in _STRUCTURES:
        raise ValueError(f"unknown structure {structure!r}")
    factory, populate, operations = _STRUCTURES[structure]
    if operation not in operations:
        raise ValueError(f"unknown operation {operation!r}")
    if repeats <= 0:
        raise ValueError("repeats must be positive")
    timed = operations[operation]
    rows = []
    for size in sizes:
        total = 0.0
        for _ in range(repeats):
            tree = factory()
            populate(tree, size, rng)
            total += timed(tree, OPERATIONS, rng)
        rows.append((size, total / repeats))
    return rows


def write_csv(path: Union[str, os.PathLike], rows: Iterable[Tuple[int, float]]) -> None:
    Path(path).write_text("".join(f"{size},{seconds:f}\n" for size, seconds in rows), encoding="utf-8")


_CHOICES = ("add", "delete", "find")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="tree-benchmark", description="Time search tree operations.")
    parser.add_argument("--structure", choices=sorted(_STRUCTURES), default="bst")
    parser.add_argument("--operation", choices=_CHOICES)
    parser.add_argument("--sizes", type=int, nargs="+")
    parser.add_argument("--repeats", type=int, default=REPEATS)
    parser.add_argument("--output")
    args = parser.parse_args(argv)
    console = Console()
    try:
        operation = args.operation
        if operation is None:
            console.write("1. Time add\n2. Time delete\n3. Time find\n")
            console.write("Choose one of the showed alternatives:\n")
            operation = _CHOICES[console.read_int_between(1, 3, "Choose 1, 2 or 3!") - 1]
        sizes = args.sizes or (BST_SIZES if args.structure == "bst" else BTREE_SIZES)
        rows = []
        for row in measure(args.structure, operation, sizes, args.repeats, random.Random()):
            console.write(f"{row[0]},{row[1]:f}\n")
            rows.append(row)
        output = args.output if args.output is not None else console.read_line(">")
    except EndOfInput:
        return 1
    write_csv(output, rows)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
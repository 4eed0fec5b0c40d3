import random

import pytest

from labstructs.benchmark import (
    bst_add,
    bst_delete,
    bst_find,
    btree_add,
    btree_delete,
    btree_find,
    main,
    measure,
    random_string,
    write_csv,
)
from labstructs.bst import BinarySearchTree
from labstructs.btree import BTree


def test_random_string_shape():
    rng = random.Random(3)
    for _ in range(200):
        text = random_string(rng)
        assert len(text) == 3
        assert all(33 <= ord(char) <= 124 for char in text)


def test_bst_add_then_delete_same_keys():
    tree = BinarySearchTree()
    elapsed = bst_add(tree, 50, random.Random(7))
    assert len(tree) == 50
    assert elapsed >= 0
    bst_delete(tree, 50, random.Random(7))
    assert tree.is_empty()


def test_bst_find_leaves_tree_unchanged():
    tree = BinarySearchTree()
    bst_add(tree, 20, random.Random(1))
    before = [node.key for node in tree.postorder()]
    bst_find(tree, 100, random.Random(2))
    assert [node.key for node in tree.postorder()] == before


def test_btree_add_counts_infos():
    tree = BTree()
    btree_add(tree, 30, random.Random(4))
    assert sum(len(item.infos) for item in tree.traverse()) == 30


def test_btree_delete_removes_present_infos():
    tree = BTree()
    keys_rng = random.Random(5)
    for _ in range(3):
        tree.insert(random_string(keys_rng), "x")
    btree_delete(tree, 3, random.Random(5))
    assert sum(len(item.infos) for item in tree.traverse()) == 0


def test_btree_find_leaves_tree_unchanged():
    tree = BTree()
    btree_add(tree, 10, random.Random(8))
    before = tree.render()
    btree_find(tree, 50, random.Random(9))
    assert tree.render() == before


def test_measure_rows_follow_sizes():
    rows = measure("btree", "find", [3, 5], 2, random.Random(0))
    assert [size for size, _ in rows] == [3, 5]
    assert all(seconds >= 0 for _, seconds in rows)


@pytest.mark.parametrize(
    "structure, operation, repeats",
    [("heap", "add", 1), ("bst", "sort", 1), ("bst", "add", 0)],
)
def test_measure_rejects_bad_arguments(structure, operation, repeats):
    with pytest.raises(ValueError):
        measure(structure, operation, [1], repeats, random.Random(0))


def test_write_csv_format(tmp_path):
    path = tmp_path / "times.csv"
    write_csv(path, [(1000, 0.5), (2000, 0.25)])
    assert path.read_text(encoding="utf-8") == "1000,0.500000\n2000,0.250000\n"


def test_main_writes_output(tmp_path):
    path = tmp_path / "out.csv"
    code = main(
        ["--structure", "bst", "--operation", "add", "--sizes", "4", "6",
         "--repeats", "1", "--output", str(path)]
    )
    lines = path.read_text(encoding="utf-8").splitlines()
    assert code == 0
    assert [line.split(",")[0] for line in lines] == ["4", "6"]
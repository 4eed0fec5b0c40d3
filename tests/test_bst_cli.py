import io
from pathlib import Path
from unittest import mock

from labstructs.bst import BinarySearchTree
from labstructs.bst_cli import run_session


def _run(text, tree=None):
    tree = tree if tree is not None else BinarySearchTree()
    out = io.StringIO()
    from labstructs.console import Console

    run_session(Console(io.StringIO(text), out), tree)
    return out.getvalue(), tree


def test_add_inserts_element():
    output, tree = _run("1\n5\nfive\n0\n")
    assert tree.find(5).info == "five"
    assert "Element was successfully written to the tree" in output


def test_find_release():
    tree = BinarySearchTree()
    tree.insert(5, "a")
    tree.insert(5, "b")
    output, _ = _run("4\n5\n1\n0\n", tree)
    assert "Contains 2 elements with that key" in output
    assert "that element was found:\n5. b\n" in output


def test_find_missing_key():
    tree = BinarySearchTree()
    tree.insert(5, "a")
    output, _ = _run("4\n6\n0\n", tree)
    assert "No elements with that key!" in output


def test_delete_removes_key():
    tree = BinarySearchTree()
    tree.insert(5, "a")
    tree.insert(3, "b")
    output, tree = _run("2\n5\n0\n", tree)
    assert tree.count(5) == 0
    assert len(tree) == 1
    assert "That element was deleted: 5. a" in output


def test_delete_on_empty_tree():
    output, tree = _run("2\n0\n")
    assert "Tree is empty, delete not possible!" in output
    assert tree.is_empty()


def test_detour_by_digit_count():
    tree = BinarySearchTree()
    tree.insert(5, "a")
    tree.insert(12, "b")
    tree.insert(123, "c")
    output, _ = _run("3\n2\n0\n", tree)
    listed = output.split("Detour:\n")[1]
    assert "12. b" in listed
    assert "5. a" not in listed
    assert "123. c" not in listed


def test_special_find_uses_minimum():
    tree = BinarySearchTree()
    for key, info in ((7, "x"), (3, "y"), (9, "z")):
        tree.insert(key, info)
    output, _ = _run("5\n0\n0\n", tree)
    assert "that element was found:\n3. y\n" in output


def test_import_from_file(tmp_path):
    source = tmp_path / "pairs.txt"
    source.write_text("10\nten\n20\ntwenty\n", encoding="utf-8")
    output, tree = _run(f"6\n{source}\n0\n")
    assert tree.find(20).info == "twenty"
    assert tree.find(10).info == "ten"
    assert "Recording was successfull!" in output


def test_import_missing_file(tmp_path):
    output, tree = _run(f"6\n{tmp_path / 'absent.txt'}\n0\n")
    assert "Error with the file opening!" in output
    assert tree.is_empty()


def test_print_list_is_postorder():
    tree = BinarySearchTree()
    for key, info in ((5, "a"), (3, "b"), (8, "c")):
        tree.insert(key, info)
    output, _ = _run("8\n0\n", tree)
    expected = "".join(f"{node}\n" for node in tree.postorder())
    assert "Your tree:\n" + expected in output


def test_print_tree_renders():
    tree = BinarySearchTree()
    tree.insert(5, "a")
    tree.insert(2, "b")
    output, _ = _run("7\n0\n", tree)
    assert tree.render() in output


def test_dot_file_written_and_rendered(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    tree = BinarySearchTree()
    tree.insert(5, "a")
    tree.insert(2, "b")
    with mock.patch("labstructs.bst_cli.subprocess.run") as run_mock:
        _run("9\n0\n", tree)
    assert Path("file.dot").read_text(encoding="utf-8") == tree.to_dot()
    assert run_mock.call_args[0][0] == ["dot", "-Tpng", "file.dot", "-o", "result.png"]


def test_end_of_input_mid_action():
    output, tree = _run("1\n5\n")
    assert tree.is_empty()
    assert "Enter element info:" in output
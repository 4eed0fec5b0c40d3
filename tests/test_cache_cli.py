import io

from labstructs.btree import BTree
from labstructs.cache import EntryState, TreeCache
from labstructs.cache_cli import MENU, main, run_session
from labstructs.console import Console


def _run(text, tree=None, cache=None):
    tree = tree if tree is not None else BTree()
    cache = cache if cache is not None else TreeCache(5)
    out = io.StringIO()
    run_session(Console(io.StringIO(text), out), tree, cache)
    return tree, cache, out.getvalue()


def test_menu_shows_six_choices():
    tree, cache, output = _run("0\n")
    assert len(MENU) == 6
    for option in MENU:
        assert option in output
    assert "0. Quit" in output
    assert tree.is_empty()
    assert cache.entries() == []


def test_add_goes_to_tree_and_cache():
    tree, cache, output = _run("1\nk\nv\n0\n")
    assert tree.search("k").infos == ["v"]
    assert [(e.key, e.info, e.state) for e in cache.entries()] == [("k", "v", EntryState.SEARCHED)]
    assert "Recording was successfully" in output


def test_find_answered_from_cache():
    _, _, output = _run("1\nk\nv\n4\nk\n0\n")
    assert "k: v " in output


def test_find_from_tree_fills_cache():
    tree = BTree()
    tree.insert("k", "old")
    tree.insert("k", "new")
    _, cache, output = _run("4\nk\n0\n", tree)
    assert str(tree.search("k")) in output
    assert [(e.key, e.info) for e in cache.entries()] == [("k", "new")]


def test_find_missing_key():
    _, cache, output = _run("4\nnone\n0\n")
    assert "No elements with that key!" in output
    assert cache.entries() == []


def test_delete_removes_from_tree_and_cache():
    tree, cache, _ = _run("1\nk\nv\n1\nj\nw\n2\nk\n0\n")
    assert tree.search("k") is None
    assert [e.key for e in cache.entries()] == ["j"]


def test_delete_missing_key():
    _, _, output = _run("2\nk\n0\n")
    assert "No elements with that key" in output


def test_eviction_keeps_tree_complete():
    tree, cache, _ = _run("1\na\n1\n1\nb\n2\n0\n", cache=TreeCache(1))
    assert len(cache.entries()) == 1
    assert tree.search("a").infos == ["1"]
    assert tree.search("b").infos == ["2"]


def test_detour_on_empty_tree():
    _, _, output = _run("3\n0\n")
    assert "Tree is empty, detour not possible!" in output


def test_detour_lists_below_bound():
    _, _, output = _run("1\na\n1\n1\nc\n2\n3\nb\n0\n")
    detour = output.split("Detour:\n", 1)[1]
    assert "a: 1 " in detour
    assert "c: 2 " not in detour


def test_print_ages_entries():
    _, cache, output = _run("1\nk\nv\n5\n0\n")
    assert cache.entries()[0].age == 1
    assert "Your tree:" in output


def test_main_with_capacity(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("1\nk\nv\n0\n"))
    assert main(["3"]) == 0


def test_main_rejects_non_positive_capacity(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main(["0"]) == 1
import io
import sys

import pytest

from labstructs.console import Console
from labstructs.filetable import FileTable, Record, hash_key
from labstructs.filetable_cli import main, run_session


@pytest.fixture
def table(tmp_path):
    tab = FileTable(tmp_path / "table.bin", 3)
    yield tab
    tab.close()


def run(table, text):
    out = io.StringIO()
    run_session(Console(io.StringIO(text), out), table)
    return out.getvalue()


def test_add_then_find_all(table):
    output = run(table, "1\n5\nhello\n3\n5\n0\n")
    assert "Element was successfully written to the table" in output
    assert "\t5. hello -- 0\n" in output
    assert list(table) == [Record(5, "hello", 0)]


def test_duplicate_add_is_rejected(table):
    output = run(table, "1\n5\nhello\n1\n5\nhello\n")
    assert "There is a such an element!" in output
    assert len(table) == 1


def test_empty_info_is_asked_again(table):
    output = run(table, "1\n5\n\nhello\n")
    assert "Information cannot be empty!" in output
    assert list(table) == [Record(5, "hello", 0)]


def test_find_one_on_empty_table(table):
    output = run(table, "2\n")
    assert "Table is empty! Search not possible!" in output


def test_find_one_by_release(table):
    output = run(table, "1\n5\na\n1\n5\nb\n2\n5\n1\n")
    assert "Contains 2 elements with that key" in output
    assert "Max number of release == 1" in output
    assert "\t5. b -- 1\n" in output


def test_find_missing_key(table):
    output = run(table, "1\n5\na\n3\n6\n")
    assert "No elements with that key!" in output


def test_delete_all(table):
    output = run(table, "1\n5\na\n1\n5\nb\n1\n6\nc\n4\n5\n")
    assert "That elements were deleted:" in output
    assert list(table) == [Record(6, "c", 0)]


def test_clean_keeps_newest(table):
    output = run(table, "1\n5\na\n1\n5\nb\n5\n")
    assert "Cleaning was successfull!" in output
    assert list(table) == [Record(5, "b", 0)]


def test_clean_without_change(table):
    output = run(table, "1\n5\na\n5\n")
    assert "Cleaning was successfull, but nothing has changed!" in output
    assert list(table) == [Record(5, "a", 0)]


def test_show_table_lists_buckets(table):
    output = run(table, "1\n5\na\n6\n")
    for index in range(3):
        assert f"hash{index}#\n" in output
    bucket = hash_key(5, 3)
    after = output.split(f"hash{bucket}#\n", 1)[1]
    assert after.startswith("\t5. a -- 0\n")


def test_end_of_input_mid_dialog_stops(table):
    output = run(table, "1\n5\n")
    assert "Enter element info:" in output
    assert table.is_empty()


def test_main_creates_new_file(tmp_path, monkeypatch, capsys):
    path = tmp_path / "new.bin"
    monkeypatch.setattr(sys, "stdin", io.StringIO("4\n1\n7\nabc\n0\n"))
    assert main([str(path)]) == 0
    assert "New file opened!" in capsys.readouterr().out
    with FileTable(path) as reopened:
        assert reopened.size == 4
        assert list(reopened) == [Record(7, "abc", 0)]


def test_main_opens_existing_file(tmp_path, monkeypatch, capsys):
    path = tmp_path / "old.bin"
    with FileTable(path, 2) as created:
        created.add(3, "x")
    monkeypatch.setattr(sys, "stdin", io.StringIO("3\n3\n0\n"))
    assert main([str(path)]) == 0
    output = capsys.readouterr().out
    assert "Opened an existing file!" in output
    assert "\t3. x -- 0\n" in output


def test_main_without_input_fails(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    assert main([str(tmp_path / "none.bin")]) == 1
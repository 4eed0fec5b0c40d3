import io

import pytest

from labstructs.console import (
    EMPTY_INFO_ERROR,
    MENU_ERROR,
    POSITIVE_INT_ERROR,
    Console,
    EndOfInput,
    iter_nonempty_lines,
)


def make(text):
    out = io.StringIO()
    return Console(io.StringIO(text), out), out


def test_read_line_strips_terminator_and_writes_prompt():
    console, out = make("hello world\n")
    assert console.read_line(">") == "hello world"
    assert out.getvalue() == ">"


def test_read_line_at_end_raises():
    console, _ = make("")
    with pytest.raises(EndOfInput):
        console.read_line()


def test_read_nonempty_line_skips_blank_lines():
    console, out = make("\n\nvalue\n")
    assert console.read_nonempty_line() == "value"
    assert out.getvalue().count(EMPTY_INFO_ERROR) == 2


def test_read_nonempty_line_end_of_input():
    console, _ = make("\n")
    with pytest.raises(EndOfInput):
        console.read_nonempty_line()


def test_read_positive_int_rejects_bad_tokens():
    console, out = make("abc -4 0\n17\n")
    assert console.read_positive_int() == 17
    assert out.getvalue().count(POSITIVE_INT_ERROR) == 3


def test_read_positive_int_end_of_input():
    console, _ = make("x\n")
    with pytest.raises(EndOfInput):
        console.read_positive_int()


def test_tokens_share_a_line():
    console, _ = make("3 7\n")
    assert console.read_positive_int() == 3
    assert console.read_positive_int() == 7


def test_read_int_between_bounds():
    console, out = make("5 -1 2\n")
    assert console.read_int_between(0, 2, "bad") == 2
    assert out.getvalue().count("bad") == 2


def test_read_line_discards_pending_tokens():
    console, _ = make("4 9\nname\n")
    assert console.read_positive_int() == 4
    assert console.read_line() == "name"


def test_menu_returns_choice_and_prints_options():
    console, out = make("1\n")
    assert console.menu(["0. Quit", "1. Add"]) == 1
    assert "1. Add" in out.getvalue()


def test_menu_rejects_out_of_range():
    console, out = make("9\nfoo\n0\n")
    assert console.menu(["0. Quit", "1. Add"]) == 0
    assert out.getvalue().count(MENU_ERROR) == 2


def test_menu_end_of_input_quits():
    console, _ = make("")
    assert console.menu(["0. Quit", "1. Add"]) == 0


def test_iter_nonempty_lines():
    stream = io.StringIO("a\n\nb\r\nc")
    assert list(iter_nonempty_lines(stream)) == ["a", "b", "c"]
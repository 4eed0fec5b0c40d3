import io
from unittest import mock

from labstructs.console import Console
from labstructs.graph import Graph, VertexType
from labstructs.graph_cli import DOT_FILE, IMAGE_FILE, MENU, run_session


def _run(text, graph=None):
    graph = graph if graph is not None else Graph()
    out = io.StringIO()
    run_session(Console(io.StringIO(text), out), graph)
    return graph, out.getvalue()


def _line_graph():
    graph = Graph()
    graph.add_vertex(1, 1, VertexType.ENTER)
    graph.add_vertex(1, 2, VertexType.CONNECT)
    graph.add_vertex(1, 3, VertexType.EXIT)
    graph.add_edge(1, 1, 1, 2)
    graph.add_edge(1, 2, 1, 3)
    return graph


def test_menu_shows_twelve_choices():
    graph, output = _run("0\n")
    assert len(MENU) == 12
    for option in MENU:
        assert option in output
    assert "11. Dop process" in output
    assert len(graph) == 0


def test_add_vertex():
    graph, output = _run("1\n1\n1\n0\n0\n")
    assert graph.find(1, 1).kind is VertexType.ENTER
    assert "Successfully!" in output


def test_add_duplicate_vertex():
    graph, output = _run("1\n1 1\n2\n1\n1 1\n0\n0\n")
    assert len(graph) == 1
    assert "Duplicate point!" in output


def test_add_edge_not_close():
    graph = Graph()
    graph.add_vertex(1, 1, VertexType.ENTER)
    graph.add_vertex(3, 3, VertexType.EXIT)
    _, output = _run("2\n1 1\n3 3\n0\n", graph)
    assert "Vertices not close!" in output
    assert graph.find(1, 1).edges == []


def test_add_edge_links_vertices():
    graph = Graph()
    graph.add_vertex(1, 1, VertexType.ENTER)
    graph.add_vertex(1, 2, VertexType.EXIT)
    _run("2\n1 1\n1 2\n0\n", graph)
    assert graph.find(1, 1).edges == [graph.find(1, 2)]


def test_delete_missing_vertex():
    _, output = _run("3\n5 5\n0\n")
    assert "Cant find vertex" in output


def test_delete_edge():
    graph = _line_graph()
    _run("4\n1 1\n1 2\n0\n", graph)
    assert graph.find(1, 1).edges == []


def test_change_type():
    graph = _line_graph()
    _run("5\n1 2\n1\n0\n", graph)
    assert graph.find(1, 2).kind is VertexType.EXIT


def test_print_graph_uses_describe():
    graph = _line_graph()
    _, output = _run("6\n0\n", graph)
    assert graph.describe() in output


def test_reachability_success_and_failure():
    graph = _line_graph()
    _, output = _run("7\n1 1\n0\n", graph)
    assert "Successfully!" in output
    graph.delete_edge(1, 2, 1, 3)
    _, output = _run("7\n1 1\n0\n", graph)
    assert "Cant found path" in output


def test_shortest_path_printed_from_exit():
    graph = _line_graph()
    _, output = _run("8\n1 1\n1 3\n0\n", graph)
    assert "{1, 3, EXIT} <-- {1, 2, CONNECT} <-- {1, 1, ENTER}" in output
    assert "length : 2" in output


def test_shortest_path_missing():
    graph = _line_graph()
    _, output = _run("8\n1 2\n1 3\n0\n", graph)
    assert "Cant found path" in output
    assert "Your path:" not in output


def test_spanning_tree_without_entrance():
    graph = Graph()
    graph.add_vertex(1, 1, VertexType.CONNECT)
    _, output = _run("10\n0\n", graph)
    assert "Cant find vertex" in output


def test_spanning_tree_drops_unreached():
    graph = _line_graph()
    graph.add_vertex(9, 9, VertexType.CONNECT)
    _, output = _run("10\n0\n", graph)
    assert graph.find(9, 9) is None
    assert len(graph) == 3
    assert "{1, 1, ENTER}Successfully!" in output


@mock.patch("subprocess.run")
def test_dot_file_written(run, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    graph = _line_graph()
    _run("9\n0\n", graph)
    assert (tmp_path / DOT_FILE).read_text(encoding="utf-8") == graph.to_dot()
    assert run.call_args_list[0].args[0] == ["dot", "-Tpng", DOT_FILE, "-o", IMAGE_FILE]


def test_end_of_input_mid_action():
    graph, _ = _run("1\n1\n")
    assert len(graph) == 0
"""Interactive menu over a grid graph with entrances and exits."""

from __future__ import annotations

import argparse
import random
import subprocess
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence, Tuple, Type

from .console import Console, EndOfInput
from .graph import (
    DuplicateError,
    Graph,
    GraphError,
    NotAdjacentError,
    PathNotFoundError,
    VertexNotFoundError,
    VertexType,
    generate_file,
)

MENU = (
    "0. Quit",
    "1. Add vertex",
    "2. Add edge",
    "3. Delete vertex",
    "4. Delete edge",
    "5. Change vertex type",
    "6. Print graph",
    "7. Exit reachability check",
    "8. Finding the shortest path",
    "9. Create dot file",
    "10. Create spanning graph",
    "11. Dop process",
)

SUCCESS = "Successfully!\n"
_MESSAGES: Dict[Type[GraphError], str] = {
    DuplicateError: "Duplicate point!\n",
    NotAdjacentError: "Vertices not close!\n",
    VertexNotFoundError: "Cant find vertex\n",
    PathNotFoundError: "Cant found path\n",
}

TYPE_ERROR = "Enter the correct vertex type!"
DOT_FILE = "file.dot"
IMAGE_FILE = "image.png"
REACH_FILE = "reachability_check.txt"
SPANNING_FILE = "graph_after_spanning.txt"


def _message(error: GraphError) -> str:
    for kind, text in _MESSAGES.items():
        if isinstance(error, kind):
            return text
    return f"{error}\n"


def _attempt(console: Console, operation: Callable[[], object]) -> None:
    try:
        operation()
    except GraphError as error:
        console.write(_message(error))
    else:
        console.write(SUCCESS)


def _read_point(console: Console, title: str) -> Tuple[int, int]:
    console.write(f"{title}\n>")
    x = console.read_positive_int()
    console.write(">")
    y = console.read_positive_int()
    return x, y


def _read_type(console: Console) -> VertexType:
    console.write("Enter vertex type:\n\n")
    console.write("0. Enter\n1. Exit\n2. Connect\n")
    return VertexType(console.read_int_between(0, 2, TYPE_ERROR))


def _add_vertex(console: Console, graph: Graph) -> None:
    x, y = _read_point(console, "Enter point coordinates:")
    kind = _read_type(console)
    _attempt(console, lambda: graph.add_vertex(x, y, kind))


def _read_two_points(console: Console) -> Tuple[int, int, int, int]:
    x1, y1 = _read_point(console, "Enter first point coordinates:")
    x2, y2 = _read_point(console, "Enter second point coordinates:")
    return x1, y1, x2, y2


def _add_edge(console: Console, graph: Graph) -> None:
    points = _read_two_points(console)
    _attempt(console, lambda: graph.add_edge(*points))


def _delete_vertex(console: Console, graph: Graph) -> None:
    x, y = _read_point(console, "Enter point coordinates:")
    _attempt(console, lambda: graph.delete_vertex(x, y))


def _delete_edge(console: Console, graph: Graph) -> None:
    points = _read_two_points(console)
    _attempt(console, lambda: graph.delete_edge(*points))


def _change_type(console: Console, graph: Graph) -> None:
    x, y = _read_point(console, "Enter point coordinates:")
    kind = _read_type(console)
    _attempt(console, lambda: graph.change_type(x, y, kind))


def _print_graph(console: Console, graph: Graph) -> None:
    console.write("Your graph:\n")
    console.write(graph.describe())


def _reachability(console: Console, graph: Graph) -> None:
    x, y = _read_point(console, "Enter point coordinates:")
    _attempt(console, lambda: graph.find_exit(x, y))


def _shortest_path(console: Console, graph: Graph) -> None:
    points = _read_two_points(console)
    try:
        path = graph.shortest_path(*points)
    except GraphError as error:
        console.write(_message(error))
        return
    console.write("Your path:\n")
    console.write(" <-- ".join(str(vertex) for vertex in reversed(path)))
    console.write(f"\nlength : {len(path) - 1}\n")


def _run_tool(console: Console, command: Sequence[str]) -> None:
    try:
        subprocess.run(list(command), check=False)
    except FileNotFoundError:
        console.write(f"{command[0]} is not available!\n")


def _dot_file(console: Console, graph: Graph) -> None:
    Path(DOT_FILE).write_text(graph.to_dot(), encoding="utf-8")
    _run_tool(console, ["dot", "-Tpng", DOT_FILE, "-o", IMAGE_FILE])
    _run_tool(console, ["catimg", IMAGE_FILE])


def _spanning_tree(console: Console, graph: Graph) -> None:
    try:
        root = graph.spanning_tree()
    except GraphError as error:
        console.write(_message(error))
        return
    console.write(f"{root}{SUCCESS}")


def _process(console: Console, graph: Graph) -> None:
    filename = console.read_nonempty_line(">")
    rng = random.Random()
    generate_file(filename, rng)
    with open(filename, "r", encoding="utf-8") as source:
        graph.process_file(source, REACH_FILE, SPANNING_FILE, rng)


_ACTIONS: Dict[int, Callable[[Console, Graph], None]] = {
    1: _add_vertex,
    2: _add_edge,
    3: _delete_vertex,
    4: _delete_edge,
    5: _change_type,
    6: _print_graph,
    7: _reachability,
    8: _shortest_path,
    9: _dot_file,
    10: _spanning_tree,
    11: _process,
}


def run_session(console: Console, graph: Graph) -> None:
    """Serve menu choices until the user quits or input runs out."""
    try:
        while (choice := console.menu(MENU)) != 0:
            _ACTIONS[choice](console, graph)
    except EndOfInput:
        pass


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="grid-graph", description="Grid graph of entrances and exits.")
    parser.parse_args(argv)
    run_session(Console(), Graph())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
"""A directed graph of grid points with entrance, exit and connector vertices."""

from __future__ import annotations

import math
import os
import random
import re
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

PathLike = Union[str, os.PathLike]

GENERATED_LINES = 6000
COORDINATE_LIMIT = 100

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

REACHABLE_MESSAGE = "Successfully"
UNREACHABLE_MESSAGE = "Cant found path"


class VertexType(IntEnum):
    ENTER = 0
    EXIT = 1
    CONNECT = 2


class GraphError(Exception):
    """Base class for graph operation failures."""


class DuplicateError(GraphError):
    """The vertex or edge already exists."""


class NotAdjacentError(GraphError):
    """The two points are not neighbours on the grid."""


class VertexNotFoundError(GraphError):
    """No suitable vertex at the given point."""


class PathNotFoundError(GraphError):
    """The requested edge or path does not exist."""


@dataclass(eq=False)
class Vertex:
    x: int
    y: int
    kind: VertexType
    edges: List["Vertex"] = field(default_factory=list, repr=False)

    def __str__(self) -> str:
        return f"{{{self.x}, {self.y}, {self.kind.name}}}"


def _adjacent(x1: int, y1: int, x2: int, y2: int) -> bool:
    return (x1 == x2 and abs(y1 - y2) == 1) or (y1 == y2 and abs(x1 - x2) == 1)


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class Graph:
    """Vertices kept in insertion order; each edge leads to a grid neighbour."""

    def __init__(self) -> None:
        self.vertices: List[Vertex] = []

    def __len__(self) -> int:
        return len(self.vertices)

    def find(self, x: int, y: int) -> Optional[Vertex]:
        for vertex in self.vertices:
            if vertex.x == x and vertex.y == y:
                return vertex
        return None

    def _require(self, x: int, y: int) -> Vertex:
        vertex = self.find(x, y)
        if vertex is None:
            raise VertexNotFoundError(f"no vertex at ({x}, {y})")
        return vertex

    def add_vertex(self, x: int, y: int, kind: Union[VertexType, int]) -> Vertex:
        kind = VertexType(kind)
        if self.find(x, y) is not None:
            raise DuplicateError(f"vertex ({x}, {y}) already exists")
        vertex = Vertex(x, y, kind)
        self.vertices.append(vertex)
        return vertex

    def _endpoints(self, x1: int, y1: int, x2: int, y2: int) -> Tuple[Vertex, Vertex]:
        if not _adjacent(x1, y1, x2, y2):
            raise NotAdjacentError(f"({x1}, {y1}) and ({x2}, {y2}) are not close")
        return self._require(x1, y1), self._require(x2, y2)

    def add_edge(self, x1: int, y1: int, x2: int, y2: int) -> None:
        """Add a directed edge from the first point to the second."""
        source, target = self._endpoints(x1, y1, x2, y2)
        if any(edge is target for edge in source.edges):
            raise DuplicateError(f"edge ({x1}, {y1}) -> ({x2}, {y2}) already exists")
        source.edges.append(target)

    def delete_vertex(self, x: int, y: int) -> Vertex:
        vertex = self._require(x, y)
        for other in self.vertices:
            if other is vertex:
                continue
            for position, edge in enumerate(other.edges):
                if edge is vertex:
                    del other.edges[position]
                    break
        self.vertices.remove(vertex)
        return vertex

    def delete_edge(self, x1: int, y1: int, x2: int, y2: int) -> None:
        source, target = self._endpoints(x1, y1, x2, y2)
        for position, edge in enumerate(source.edges):
            if edge is target:
                del source.edges[position]
                return
        raise PathNotFoundError(f"no edge ({x1}, {y1}) -> ({x2}, {y2})")

    def change_type(self, x: int, y: int, kind: Union[VertexType, int]) -> None:
        kind = VertexType(kind)
        self._require(x, y).kind = kind

    def _dfs(self, start: Vertex) -> Tuple[Dict[Vertex, Vertex], Optional[Vertex]]:
        """Depth-first walk; returns tree parents and the last exit discovered."""
        visited = {start}
        parents: Dict[Vertex, Vertex] = {}
        last_exit: Optional[Vertex] = None
        stack = [(start, iter(start.edges))]
        while stack:
            node, edges = stack[-1]
            for neighbour in edges:
                if neighbour in visited:
                    continue
                visited.add(neighbour)
                if neighbour.kind is VertexType.EXIT:
                    last_exit = neighbour
                parents[neighbour] = node
                stack.append((neighbour, iter(neighbour.edges)))
                break
            else:
                stack.pop()
        return parents, last_exit

    def find_exit(self, x: int, y: int) -> Vertex:
        """The last exit a depth-first search from the entrance at (x, y) reaches."""
        start = self.find(x, y)
        if start is None or start.kind is not VertexType.ENTER:
            raise VertexNotFoundError(f"no entrance at ({x}, {y})")
        _, last_exit = self._dfs(start)
        if last_exit is None:
            raise PathNotFoundError(f"no exit reachable from ({x}, {y})")
        return last_exit

    def shortest_path(self, x1: int, y1: int, x2: int, y2: int) -> List[Vertex]:
        """Shortest path from an entrance to an exit, both ends included."""
        start, end = self.find(x1, y1), self.find(x2, y2)
        if (
            start is None
            or end is None
            or start.kind is not VertexType.ENTER
            or end.kind is not VertexType.EXIT
        ):
            raise PathNotFoundError(f"no path from ({x1}, {y1}) to ({x2}, {y2})")
        position = {vertex: index for index, vertex in enumerate(self.vertices)}
        distance = [math.inf] * len(self.vertices)
        previous: List[Optional[int]] = [None] * len(self.vertices)
        distance[position[start]] = 0
        for _ in range(len(self.vertices)):
            changed = False
            for index, vertex in enumerate(self.vertices):
                for edge in vertex.edges:
                    target = position[edge]
                    if distance[target] > distance[index] + 1:
                        distance[target] = distance[index] + 1
                        previous[target] = index
                        changed = True
            if not changed:
                break
        current = previous[position[end]]
        if current is None:
            raise PathNotFoundError(f"no path from ({x1}, {y1}) to ({x2}, {y2})")
        path = [end]
        while current is not None:
            path.append(self.vertices[current])
            current = previous[current]
        path.reverse()
        return path

    def spanning_tree(self) -> Vertex:
        """Reduce the graph to a depth-first tree from the first entrance that reaches an exit.

        Each reached vertex keeps only the edge from its tree parent among its
        incoming edges; unreached vertices are removed. Returns the root.
        """
        root = None
        for vertex in self.vertices:
            if vertex.kind is VertexType.ENTER:
                try:
                    self.find_exit(vertex.x, vertex.y)
                except PathNotFoundError:
                    continue
                root = vertex
                break
        if root is None:
            raise VertexNotFoundError("no entrance reaches an exit")
        parents, _ = self._dfs(root)
        for vertex in list(self.vertices):
            parent = parents.get(vertex)
            if parent is None:
                continue
            x, y = vertex.x, vertex.y
            for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
                if (nx, ny) == (parent.x, parent.y):
                    continue
                try:
                    self.delete_edge(nx, ny, x, y)
                except GraphError:
                    pass
        unreached = [v for v in self.vertices if v not in parents and v is not root]
        for vertex in unreached:
            self.delete_vertex(vertex.x, vertex.y)
        return root

    def describe(self) -> str:
        """One line per vertex listing the vertices its edges lead to."""
        return "".join(
            f"{vertex} --> " + "".join(f"{edge} " for edge in vertex.edges) + "\n"
            for vertex in self.vertices
        )

    def to_dot(self) -> str:
        """Graphviz source; entrance edges blue, edges into exits red."""
        lines = ["digraph {\n"]
        for vertex in self.vertices:
            for edge in vertex.edges:
                line = f'\t"{vertex.x};{vertex.y}" -> "{edge.x};{edge.y}"'
                if vertex.kind is VertexType.ENTER:
                    line += " [color = blue];\n"
                elif edge.kind is VertexType.EXIT:
                    line += " [color = red];\n"
                else:
                    line += ";\n"
                lines.append(line)
        lines.append("}")
        return "".join(lines)

    def process_file(
        self,
        lines: Iterable[str],
        reach_path: PathLike,
        spanning_path: PathLike,
        rng: random.Random,
    ) -> None:
        """Build vertices from "x y type" lines, then report reachability and the spanning tree.

        Each vertex is linked to three of its four neighbours, the one left
        out chosen at random; links to absent neighbours are skipped.
        """
        for line in lines:
            tokens = [token for token in line.rstrip("\r\n").split(" ") if token]
            if not tokens:
                continue
            if len(tokens) < 3:
                raise ValueError(f"malformed vertex line: {line!r}")
            x, y, kind = (_atoi(token) for token in tokens[:3])
            kind = VertexType(kind)
            try:
                self.add_vertex(x, y, kind)
            except DuplicateError:
                pass
            skipped = rng.randrange(4)
            neighbours = ((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y))
            for choice, (nx, ny) in enumerate(neighbours):
                if choice == skipped:
                    continue
                try:
                    self.add_edge(x, y, nx, ny)
                except GraphError:
                    pass

        with open(reach_path, "w", encoding="utf-8") as report:
            for vertex in self.vertices:
                if vertex.kind is not VertexType.ENTER:
                    continue
                try:
                    found = self.find_exit(vertex.x, vertex.y)
                except PathNotFoundError:
                    report.write(f"{vertex}:{UNREACHABLE_MESSAGE}\n\n")
                else:
                    report.write(f"{vertex}:{REACHABLE_MESSAGE}\n{found}\n\n")

        with open(spanning_path, "w", encoding="utf-8") as report:
            report.write("GRAPH BEFORE SPANNING:\n")
            report.write(self.describe())
            try:
                self.spanning_tree()
            except GraphError:
                pass
            report.write("\nGRAPH AFTER SPANNING:\n")
            report.write(self.describe())


def generate_file(path: PathLike, rng: random.Random) -> None:
    """Write random "x y type" lines with coordinates from 1 to 100."""
    lines = (
        f"{rng.randrange(COORDINATE_LIMIT) + 1} "
        f"{rng.randrange(COORDINATE_LIMIT) + 1} "
        f"{rng.randrange(len(VertexType))}\n"
        for _ in range(GENERATED_LINES)
    )
    Path(path).write_text("".join(lines), encoding="utf-8")
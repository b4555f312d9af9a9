###############################################################################
# Copyright (C) 2023 Oliver Michael Kamperis
# Email: olliekampo@gmail.com
#
# This program is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for details.
#
# You should have received a copy of the GNU General Public License along with
# this program. If not, see <https://www.gnu.org/licenses/>.

"""
Module defining an undirected, weighted graph data structure.

The graph supports adding vertices, connecting them with positively weighted
edges, direct connection queries, unweighted path search (depth-first and
breadth-first), and minimum spanning tree construction by Prim's algorithm.

Graphs are not thread-safe, callers that share a graph between threads must
guard all operations with their own lock.
"""

from collections import deque
import collections.abc
import itertools
import logging
from typing import Generic, Hashable, Iterable, Iterator, TypeVar

from ugraph.auxiliary.progressbars import ResourceProgressBar
from ugraph.datastructures.queues import PriorityQueue
from ugraph.datastructures.views import AdjacencyView

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "Edge",
    "UndirectedGraph"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


VT = TypeVar("VT", bound=Hashable)


class Edge(Generic[VT]):
    """
    An arc from a vertex to a destination vertex, with an integer cost.

    Edges are stored in the adjacency of the vertex they leave, and so only
    know their destination. Edges are ordered by their cost.
    """

    __slots__ = {
        "__destination": "The vertex the edge leads to.",
        "__cost": "The cost of traversing the edge."
    }

    def __init__(self, destination: VT, cost: int) -> None:
        """
        Create a new edge.

        Raises
        ------
        `ValueError` - If the cost is negative.
        """
        self.__destination: VT = destination
        self.__cost: int
        self.cost = cost

    def __str__(self) -> str:
        return f"to {self.__destination} costs {self.__cost}"

    def __repr__(self) -> str:
        return f"Edge({self.__destination!r}, {self.__cost!r})"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self.__cost < other.__cost

    @property
    def destination(self) -> VT:
        """The vertex the edge leads to."""
        return self.__destination

    @property
    def cost(self) -> int:
        """The cost of traversing the edge."""
        return self.__cost

    @cost.setter
    def cost(self, cost: int) -> None:
        if cost < 0:
            raise ValueError(f"Edge cost can't be negative. Got; {cost!r}.")
        self.__cost = cost

    def copy(self) -> "Edge[VT]":
        """Return a new edge with the same destination and cost."""
        return Edge(self.__destination, self.__cost)


class UndirectedGraph(collections.abc.Mapping, Generic[VT]):
    """
    Represents an undirected, weighted graph as an adjacency mapping.

    Internally it is a mapping, where the keys are the vertex set of the
    graph, and the values map each adjacent vertex to the edge leading to it.
    Every edge between two distinct vertices is stored twice, once in the
    adjacency of each vertex, and both copies always have the same cost. A
    loop (a vertex connected to itself) is stored once. There is at most one
    edge between any two vertices.

    Adjacency is kept in insertion order, so searches are reproducible.

    Example Usage
    -------------
    ```
    >>> graph = UndirectedGraph[str](nodes="ABCD")
    >>> graph.connect("A", "B", 2)
    True
    >>> graph.connect("B", "C", 3)
    True
    >>> graph.connect("A", "C", 1)
    True
    >>> graph.get_cost("C", "A")
    1
    >>> graph.breadth_first_search("A", "C")
    ['A', 'C']
    >>> graph.depth_first_search("A", "C")
    ['A', 'B', 'C']

    ## Vertex D is not connected to anything.
    >>> graph.breadth_first_search("A", "D")
    []

    >>> mst = graph.minimum_spanning_tree()
    >>> list(mst.iter_edges())
    [('A', 'C', 1), ('A', 'B', 2)]
    ```
    """

    __GRAPH_LOGGER = logging.getLogger("UndirectedGraph")

    __slots__ = {
        "__adjacency": "Dictionary mapping vertices to their adjacent edges.",
        "__number_of_edges": "The number of undirected edges in the graph."
    }

    def __init__(
        self,
        nodes: Iterable[VT] = (),
        edges: Iterable[tuple[VT, VT, int]] = ()
    ) -> None:
        """
        Create a new undirected graph.

        Parameters
        ----------
        `nodes: Iterable[VT]` - Vertices to add to the graph.

        `edges: Iterable[tuple[VT, VT, int]]` - Edges to add to the graph, as
        `(start, end, cost)` triples. Vertices at either end of an edge are
        added to the graph if they are not already in it.

        Raises
        ------
        `ValueError` - If any of the given edges has a cost that is not a
        positive integer.
        """
        self.__adjacency: dict[VT, dict[VT, Edge[VT]]] = {}
        self.__number_of_edges: int = 0

        for node in nodes:
            self.add(node)
        for start, end, cost in edges:
            self.add(start)
            self.add(end)
            if not self.connect(start, end, cost):
                raise ValueError(
                    f"Cannot connect {start!r} to {end!r} with cost "
                    f"{cost!r}, costs must be positive integers.")

    def __str__(self) -> str:
        return str({
            vertex: {
                neighbour: edge.cost
                for neighbour, edge in adjacency.items()
            }
            for vertex, adjacency in self.__adjacency.items()
        })

    def __repr__(self) -> str:
        return f"UndirectedGraph(nodes={list(self)!r}, " \
               f"edges={list(self.iter_edges())!r})"

    def __getitem__(self, vertex: VT) -> AdjacencyView[VT]:
        """Get a read-only view of the costs of edges from the given vertex."""
        return AdjacencyView(self.__adjacency[vertex])

    def __iter__(self) -> Iterator[VT]:
        """Iterate over the vertex set of this graph, in insertion order."""
        yield from self.__adjacency

    def __len__(self) -> int:
        """The number of vertices in the graph."""
        return len(self.__adjacency)

    def __contains__(self, vertex: object) -> bool:
        """Check if the given vertex is in the graph."""
        try:
            return vertex in self.__adjacency
        except TypeError:
            return False

    def add(self, node: VT) -> bool:
        """
        Add a vertex to the graph, with no edges.

        Returns True if the vertex was added, or False if it was already in
        the graph (or is not hashable), in which case the graph is unchanged.
        """
        try:
            if node in self.__adjacency:
                self.__GRAPH_LOGGER.debug(
                    "Vertex %r is already in the graph.", node)
                return False
        except TypeError:
            self.__GRAPH_LOGGER.debug(
                "Vertex %r is not hashable and cannot be added.", node)
            return False
        self.__adjacency[node] = {}
        return True

    def connect(self, start: VT, end: VT, cost: int) -> bool:
        """
        Connect two vertices in the graph with an edge of the given cost.

        Since the graph is undirected, the order of the vertices does not
        matter. A vertex may be connected to itself. If the vertices are
        already connected, the cost of the existing edge is updated instead
        of adding another edge.

        Parameters
        ----------
        `start: VT` - One vertex of the edge.

        `end: VT` - The other vertex of the edge.

        `cost: int` - The cost of the edge, must be a positive integer.

        Returns
        -------
        `bool` - True if both vertices are in the graph and the cost is
        valid, and so the vertices are now connected. False otherwise, in
        which case the graph is unchanged.
        """
        if isinstance(cost, bool) or not isinstance(cost, int) or cost <= 0:
            self.__GRAPH_LOGGER.debug(
                "Rejected edge from %r to %r with invalid cost %r.",
                start, end, cost)
            return False
        if start not in self or end not in self:
            self.__GRAPH_LOGGER.debug(
                "Rejected edge from %r to %r, both vertices must be in the "
                "graph.", start, end)
            return False

        edge = self.__adjacency[start].get(end)
        if edge is None:
            self.__adjacency[start][end] = Edge(end, cost)
            if start != end:
                self.__adjacency[end][start] = Edge(start, cost)
            self.__number_of_edges += 1
        else:
            self.__GRAPH_LOGGER.debug(
                "Updating cost of edge from %r to %r from %d to %d.",
                start, end, edge.cost, cost)
            edge.cost = cost
            if start != end:
                self.__adjacency[end][start].cost = cost
        return True

    def __get_edge(self, start: VT, end: VT) -> Edge[VT] | None:
        """Get the edge between two vertices, or None if there isn't one."""
        if start not in self or end not in self:
            return None
        return self.__adjacency[start].get(end)

    def is_connected(self, start: VT, end: VT) -> bool:
        """
        Whether the two vertices are directly connected by an edge.

        This does not check whether there is a longer path between them,
        use one of the search methods for that.
        """
        return self.__get_edge(start, end) is not None

    def get_cost(self, start: VT, end: VT) -> int:
        """
        Get the cost of the edge directly connecting two vertices.

        Returns -1 if the vertices are not directly connected, or either
        vertex is not in the graph.
        """
        edge = self.__get_edge(start, end)
        if edge is None:
            return -1
        return edge.cost

    def get_edges(self, vertex: VT) -> list[Edge[VT]]:
        """
        Get copies of the edges leaving the given vertex.

        Modifying the returned edges does not change the graph.

        Raises
        ------
        `ValueError` - If the vertex is not in the graph.
        """
        if vertex not in self:
            raise ValueError(f"Vertex {vertex!r} not in graph {self}.")
        return [edge.copy() for edge in self.__adjacency[vertex].values()]

    def get_number_of_nodes(self) -> int:
        """The number of vertices in the graph."""
        return len(self.__adjacency)

    def get_number_of_edges(self) -> int:
        """
        The number of undirected edges in the graph.

        Each connection counts once, whether it joins two vertices or is a
        loop. Updating the cost of an edge does not change the count.
        """
        return self.__number_of_edges

    def iter_edges(self) -> Iterator[tuple[VT, VT, int]]:
        """
        Iterate over the undirected edges of the graph.

        Each edge is yielded once, as a `(start, end, cost)` triple, where
        the start vertex was added to the graph before the end vertex (or is
        the same vertex for a loop).
        """
        expanded: set[VT] = set()
        for vertex, adjacency in self.__adjacency.items():
            for neighbour, edge in adjacency.items():
                if neighbour not in expanded:
                    yield vertex, neighbour, edge.cost
            expanded.add(vertex)

    def total_cost(self) -> int:
        """The sum of the costs of all undirected edges in the graph."""
        return sum(cost for *_, cost in self.iter_edges())

    @staticmethod
    def __gather_path(start: VT, end: VT, via: dict[VT, VT]) -> list[VT]:
        """Walk predecessors back from the end vertex to the start vertex."""
        path: list[VT] = [end]
        while path[-1] != start:
            path.append(via[path[-1]])
        path.reverse()
        return path

    def depth_first_search(self, start: VT, end: VT) -> list[VT]:
        """
        Find a path between two vertices by depth-first search.

        Edge costs are ignored, and the path found is not necessarily the
        shortest. Neighbours are expanded in the order they were connected.

        Parameters
        ----------
        `start: VT` - The vertex to start the path from.

        `end: VT` - The vertex to end the path at.

        Returns
        -------
        `list[VT]` - The vertices on the path, from start to end inclusive.
        The path is just the start vertex if it is also the end vertex. The
        list is empty if either vertex is not in the graph, or there is no
        path between them.
        """
        if start not in self or end not in self:
            return []
        if start == end:
            return [start]

        # Each stack frame holds a vertex and an iterator over its remaining
        # neighbours, so vertices are visited in the same order a recursive
        # search would visit them.
        visited: set[VT] = {start}
        via: dict[VT, VT] = {}
        stack: list[tuple[VT, Iterator[VT]]] = [
            (start, iter(self.__adjacency[start]))
        ]

        while stack:
            vertex, neighbours = stack[-1]
            for neighbour in neighbours:
                if neighbour not in visited:
                    visited.add(neighbour)
                    via[neighbour] = vertex
                    if neighbour == end:
                        return self.__gather_path(start, end, via)
                    stack.append(
                        (neighbour, iter(self.__adjacency[neighbour])))
                    break
            else:
                stack.pop()

        return []

    def breadth_first_search(self, start: VT, end: VT) -> list[VT]:
        """
        Find a shortest path between two vertices by breadth-first search.

        Edge costs are ignored, the path found has the fewest possible edges.

        Parameters
        ----------
        `start: VT` - The vertex to start the path from.

        `end: VT` - The vertex to end the path at.

        Returns
        -------
        `list[VT]` - The vertices on the path, from start to end inclusive.
        The path is just the start vertex if it is also the end vertex. The
        list is empty if either vertex is not in the graph, or there is no
        path between them.
        """
        if start not in self or end not in self:
            return []
        if start == end:
            return [start]

        # Vertices are marked as visited when they are added to the
        # frontier, so the first predecessor recorded is on a shortest path.
        visited: set[VT] = {start}
        via: dict[VT, VT] = {}
        frontier: deque[VT] = deque([start])

        while frontier:
            vertex: VT = frontier.popleft()
            for neighbour in self.__adjacency[vertex]:
                if neighbour not in visited:
                    visited.add(neighbour)
                    via[neighbour] = vertex
                    if neighbour == end:
                        return self.__gather_path(start, end, via)
                    frontier.append(neighbour)

        return []

    def is_connected_graph(self, start: VT | None = None) -> bool:
        """
        Determine if this graph is connected.

        A graph is connected if every vertex is reachable from every other
        vertex by some path. An empty graph is connected.

        Parameters
        ----------
        `start: VT | None` - A vertex to start searching from. If not given
        or None, the search starts from the first vertex added to the graph.

        Raises
        ------
        `ValueError` - If the start vertex is given but not in the graph.
        """
        if not self.__adjacency:
            return True
        if start is None:
            start = next(iter(self))
        elif start not in self:
            raise ValueError(f"Vertex {start!r} not in graph {self}.")

        reached: set[VT] = {start}
        frontier: list[VT] = [start]
        while frontier and len(reached) != len(self):
            vertex: VT = frontier.pop()
            new_vertices = self.__adjacency[vertex].keys() - reached
            reached |= new_vertices
            frontier.extend(new_vertices)

        return len(reached) == len(self)

    def __expand(
        self,
        vertex: VT,
        visited: set[VT],
        frontier: PriorityQueue[tuple[VT, VT], tuple[int, int]],
        counter: Iterator[int]
    ) -> None:
        """
        Mark a vertex as part of the spanning tree, and push the edges from it
        to vertices not yet in the tree onto the frontier. Loops are skipped.
        """
        visited.add(vertex)
        for neighbour, edge in self.__adjacency[vertex].items():
            if neighbour != vertex and neighbour not in visited:
                frontier.push((neighbour, vertex), (edge.cost, next(counter)))

    def minimum_spanning_tree(
        self,
        start: VT | None = None,
        raise_: bool = False,
        enable_progress_bar: bool = False
    ) -> "UndirectedGraph[VT]":
        """
        Get a minimum spanning tree of the graph using Prim's algorithm.

        The tree is a new graph, containing all the vertices of this graph
        and the subset of its edges that connects them all with minimal total
        cost. Loops are never part of the tree. Changing the tree does not
        change this graph.

        If the graph is disconnected, then by default a minimum spanning
        forest is returned instead, with one tree per connected component,
        each grown from the first vertex of its component not yet in the
        forest.

        Parameters
        ----------
        `start: VT | None = None` - The vertex to grow the tree from. If not
        given or None, the first vertex added to the graph is used.

        `raise_: bool = False` - Whether to raise a ValueError if the graph
        is disconnected, instead of returning a spanning forest.

        `enable_progress_bar: bool = False` - Whether to show a progress bar
        of the number of vertices added to the tree.

        Raises
        ------
        `ValueError` - If the start vertex is given but not in the graph, or
        if `raise_` is True and the graph is disconnected.
        """
        mst = UndirectedGraph[VT](nodes=self)
        if not self.__adjacency:
            return mst
        if start is None:
            start = next(iter(self))
        elif start not in self:
            raise ValueError(f"Vertex {start!r} not in graph {self}.")

        required_edges: int = len(self) - 1
        visited: set[VT] = set()
        counter = itertools.count()

        # Items are (end, start) vertex pairs of candidate edges, prioritised
        # by cost, ties broken in the order the edges were pushed.
        frontier = PriorityQueue[tuple[VT, VT], tuple[int, int]]()

        progress_bar: ResourceProgressBar | None = None
        if enable_progress_bar:
            progress_bar = ResourceProgressBar(
                total=len(self), desc="Spanning tree", unit="vertex")

        try:
            for root in itertools.chain((start,), self):
                if root in visited:
                    continue
                if visited:
                    if raise_:
                        raise ValueError(
                            f"Graph is disconnected, vertex {root!r} is not "
                            f"reachable from vertex {start!r}.")
                    self.__GRAPH_LOGGER.warning(
                        "Graph is disconnected, growing a new spanning tree "
                        "from vertex %r.", root)

                self.__expand(root, visited, frontier, counter)
                if progress_bar is not None:
                    progress_bar.update(1)

                while frontier and mst.get_number_of_edges() < required_edges:
                    (end, vertex), (cost, _) = frontier.pop_prio()
                    if end in visited:
                        continue
                    mst.connect(vertex, end, cost)
                    self.__expand(end, visited, frontier, counter)
                    if progress_bar is not None:
                        progress_bar.update(
                            1, data={"frontier": str(len(frontier))})
        finally:
            if progress_bar is not None:
                progress_bar.close()

        self.__GRAPH_LOGGER.debug(
            "Spanning tree over %d vertices has %d edges with total cost %d.",
            len(mst), mst.get_number_of_edges(), mst.total_cost())
        return mst


if __name__ == "__main__":
    import random
    graph = UndirectedGraph[int](nodes=range(1000))
    for vertex_ in range(1, 1000):
        graph.connect(vertex_, random.randrange(vertex_), random.randint(1, 100))
    for _ in range(10000):
        graph.connect(random.randrange(1000), random.randrange(1000),
                      random.randint(1, 100))
    tree = graph.minimum_spanning_tree(enable_progress_bar=True)
    print(tree.get_number_of_edges(), tree.total_cost())

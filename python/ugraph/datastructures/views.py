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

"""Module containing read-only views over graph adjacency."""

import collections.abc
from typing import TYPE_CHECKING, Generic, Hashable, Iterator, TypeVar, final

if TYPE_CHECKING:
    from ugraph.datastructures.graph import Edge

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "AdjacencyView",
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


VT = TypeVar("VT", bound=Hashable)


@final
class AdjacencyView(collections.abc.Mapping, Generic[VT]):
    """
    Class defining a view of the adjacency of a single vertex.

    The view maps each adjacent vertex to the cost of the edge leading to it.
    The adjacency cannot be modified through the view, but the view will
    reflect changes made to the adjacency (new edges, updated costs) by the
    graph that owns it.
    """

    __slots__ = {
        "__adjacency": "The neighbour to edge dictionary being viewed."
    }

    def __init__(self, adjacency: dict[VT, "Edge[VT]"], /) -> None:
        """Create a new adjacency view."""
        self.__adjacency: dict[VT, "Edge[VT]"] = adjacency

    def __repr__(self) -> str:
        """Get an instantiable string representation of the adjacency view."""
        return f"AdjacencyView({dict(self.items())!r})"

    def __contains__(self, vertex: object, /) -> bool:
        """Check if a vertex is adjacent."""
        try:
            return vertex in self.__adjacency
        except TypeError:
            return False

    def __getitem__(self, vertex: VT, /) -> int:
        """Get the cost of the edge to the given adjacent vertex."""
        return self.__adjacency[vertex].cost

    def __iter__(self) -> Iterator[VT]:
        """Iterate over the adjacent vertices in insertion order."""
        return iter(self.__adjacency)

    def __len__(self) -> int:
        """Get the number of adjacent vertices."""
        return len(self.__adjacency)

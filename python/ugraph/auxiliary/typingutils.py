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

"""Module defining typing protocols used by the graph data structures."""

from typing import Any, Hashable, Protocol, runtime_checkable

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "SupportsRichComparison",
    "HashableSupportsRichComparison"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


@runtime_checkable
class SupportsRichComparison(Protocol):
    """
    Protocol for values that can be ordered with `<` and `>`, such as edge
    costs and queue priorities.
    """

    def __lt__(self, __other: Any) -> bool:
        ...

    def __gt__(self, __other: Any) -> bool:
        ...


@runtime_checkable
class HashableSupportsRichComparison(
        Hashable, SupportsRichComparison, Protocol):
    """
    Protocol for orderable values that can also be stored in hash tables,
    as required of priorities in the priority queue's lazy delete set.
    """
    ...

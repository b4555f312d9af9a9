# Copyright (C) 2023 Oliver Michael Kamperis
# Email: o.m.kamperis@gmail.com
#
# This program is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for details.
#
# You should have received a copy of the GNU General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""
Module containing the priority queue used by the graph search algorithms.

The queue is for algorithmic use. It is not thread-safe, use the Python
standard library `queue` module for multi-threaded applications.
"""

import collections.abc
import heapq
from typing import Hashable, Iterable, Iterator, TypeVar

from ugraph.auxiliary.typingutils import HashableSupportsRichComparison

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "PriorityQueue",
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return tuple(sorted(__all__))


QT = TypeVar("QT", bound=Hashable)
PT = TypeVar("PT", bound=HashableSupportsRichComparison)


class PriorityQueue(collections.abc.Mapping[QT, PT]):
    """
    Class defining a min-priority queue.

    Items are popped lowest priority first. Each item is stored at most once;
    pushing an item that is already queued replaces its priority. Items must
    be hashable, and priorities must be both hashable and orderable (tuples
    of numbers work well, the trailing element acting as a tie breaker).

    Wraps Python's built-in heap-queue algorithm, adding fast membership
    tests and priority look-ups via a hash table, and fast removal via a lazy
    delete set.

    Iterating over the queue yields items in arbitrary order.

    Example Usage
    -------------
    ```
    >>> queue = PriorityQueue[str, int](("B", 2), ("A", 1))
    >>> queue.push("C", 0)
    >>> queue.pop_prio()
    ('C', 0)
    >>> queue.pop()
    'A'
    ```
    """

    __slots__ = {
        "__heap": "The heap-queue of priority-item tuple pairs.",
        "__members": "Mapping of queued items to their priorities.",
        "__delete": "Lazy delete set of stale priority-item pairs."
    }

    def __init__(self, *items: tuple[QT, PT]) -> None:
        """
        Create a priority queue from a series of item-priority tuple pairs.
        """
        self.__members: dict[QT, PT] = dict(items)
        self.__heap: list[tuple[PT, QT]] = [
            (priority, item) for item, priority in self.__members.items()
        ]
        heapq.heapify(self.__heap)
        self.__delete: set[tuple[PT, QT]] = set()

    @classmethod
    def from_iterable(
        cls,
        iterable: Iterable[tuple[QT, PT]], /
    ) -> "PriorityQueue[QT, PT]":
        """Create a priority queue from an iterable of item-priority pairs."""
        return cls(*iterable)

    def __str__(self) -> str:
        """Return a string representation of the queue."""
        return f"Priority Queue with {len(self)} items"

    def __repr__(self) -> str:
        """Return an instantiable string representation of the queue."""
        pairs = ", ".join(str(pair) for pair in self.__members.items())
        return f"{self.__class__.__name__}({pairs})"

    def __contains__(self, item: object) -> bool:
        """Return whether an item is in the queue."""
        return item in self.__members

    def __getitem__(self, item: QT) -> PT:
        """Return the priority of an item in the queue."""
        return self.__members[item]

    def __iter__(self) -> Iterator[QT]:
        """Iterate over the items in the queue, in arbitrary order."""
        yield from self.__members

    def __len__(self) -> int:
        """Return the number of items in the queue."""
        return len(self.__members)

    def __bool__(self) -> bool:
        """Return True if the queue is not empty."""
        return bool(self.__members)

    def push(self, item: QT, priority: PT, /) -> None:
        """
        Push an item onto the queue with the given priority.

        If the item is already queued, its priority is replaced.

        Parameters
        ----------
        `item: QT@PriorityQueue` - The item to push.

        `priority: PT@PriorityQueue` - The priority of the item.
        """
        if item not in self.__members:
            self.__members[item] = priority
            pair = (priority, item)
            if pair in self.__delete:
                # The stale pair is still on the heap, so revive it.
                self.__delete.remove(pair)
            else:
                heapq.heappush(self.__heap, pair)
        elif priority != (old_priority := self.__members[item]):
            self.__delete.add((old_priority, item))
            self.__members[item] = priority
            heapq.heappush(self.__heap, (priority, item))

    def __pop_pair(self) -> tuple[PT, QT]:
        """Pop the lowest live priority-item pair off the heap."""
        while self.__members:
            pair = heapq.heappop(self.__heap)
            if pair in self.__delete:
                self.__delete.remove(pair)
                continue
            del self.__members[pair[1]]
            return pair
        raise IndexError("Pop from empty priority queue.")

    def pop(self) -> QT:
        """
        Pop the lowest priority item from the queue.

        Raises
        ------
        `IndexError` - If the queue is empty.
        """
        return self.__pop_pair()[1]

    def pop_prio(self) -> tuple[QT, PT]:
        """
        Pop the lowest priority item and its priority from the queue.

        Returns
        -------
        `(QT@PriorityQueue, PT@PriorityQueue)` - The item and its priority.

        Raises
        ------
        `IndexError` - If the queue is empty.
        """
        priority, item = self.__pop_pair()
        return item, priority

    def peek_prio(self) -> tuple[QT, PT]:
        """
        Peek at the lowest priority item and its priority without removing it.

        Raises
        ------
        `IndexError` - If the queue is empty.
        """
        while self.__members:
            priority, item = self.__heap[0]
            if (priority, item) not in self.__delete:
                return item, priority
            self.__delete.remove(heapq.heappop(self.__heap))
        raise IndexError("Peek at empty priority queue.")

    def remove(self, item: QT, /) -> None:
        """
        Remove the given item from the queue.

        Raises
        ------
        `KeyError` - If the item is not in the queue.
        """
        if item not in self.__members:
            raise KeyError(f"The item {item} is not in the priority queue.")
        self.__delete.add((self.__members.pop(item), item))

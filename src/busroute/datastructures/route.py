""" Contains the Route, a circular doubly linked list of stops.

The ring is stored as an arena: every stop is addressed by its id, and
each link only holds the ids of its neighbors. The route keeps a separate
handle to the first stop, which is where traversal and export begin.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import fsum
from typing import Iterable, Iterator, Type, TypeVar

from busroute.datastructures.errors import RouteInvariantError
from busroute.datastructures.stop import Stop, StopRow
from busroute.utils import IdGenerator, normalize_name


logger = logging.getLogger(__name__)
RT = TypeVar("RT", bound="Route")


@dataclass
class _Link:
    """ The position of a single stop within the ring. """
    stop: Stop
    prev: int
    next: int


class StopsView:
    """ Read-only view of the stops of a route, in traversal order.

    The view is lazy and always reflects the current state of the route.
    Iterating it again starts from the first stop again.
    """

    def __init__(self, route: Route) -> None:
        self._route = route

    def __iter__(self) -> Iterator[Stop]:
        return iter(self._route)

    def __len__(self) -> int:
        return len(self._route)

    def __getitem__(self, key: slice | int) -> Stop | list[Stop]:
        if isinstance(key, int):
            if key < 0:
                stops = self._route.iter_backwards()
                index = -key - 1
            else:
                stops = iter(self._route)
                index = key
            for i, stop in enumerate(stops):
                if i == index:
                    return stop
            raise IndexError("route index out of range")
        if isinstance(key, slice):
            return list(self)[key]
        raise TypeError(
            f"route indices must be integers or slices, not {type(key)}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self)!r})"


class Route:
    """ An ordered, circular sequence of stops. """

    def __init__(self) -> None:
        self._links: dict[int, _Link] = {}
        self._first: int | None = None
        self._ids = IdGenerator()

    @classmethod
    def from_rows(cls: Type[RT], rows: Iterable[StopRow]) -> RT:
        """ Create a new route, containing a stop for each row. """
        route = cls()
        route.load_rows(rows)
        return route

    @property
    def first(self) -> Stop | None:
        """ The stop traversal begins with, or None if the route is empty. """
        if self._first is None:
            return None
        return self._get_link(self._first).stop

    def create_stop(self, name: str, passengers: int = 0,
                    distance_to_next: float = 0., time_to_next: float = 0.
                    ) -> Stop:
        """ Create a new stop with a fresh id. The stop is not inserted. """
        return Stop(self._ids.next(), name, passengers,
                    distance_to_next, time_to_next)

    def append(self, name: str, passengers: int = 0,
               distance_to_next: float = 0., time_to_next: float = 0.
               ) -> Stop:
        """ Create a new stop and insert it at the end of the route. """
        stop = self.create_stop(
            name, passengers, distance_to_next, time_to_next)
        self.insert_at_end(stop)
        return stop

    # Traversal and lookup.
    def _get_link(self, stop_id: int) -> _Link:
        try:
            return self._links[stop_id]
        except KeyError:
            raise RouteInvariantError(
                f"The ring references the stop with id {stop_id}, "
                f"which is not part of the route.") from None

    def _walk(self, start_id: int, direction: str = "next"
              ) -> Iterator[_Link]:
        """ Walk the ring once, beginning at the given stop.

        Never takes more hops than there are stops; if the start was not
        reached again by then, the ring is broken.
        """
        assert direction in ("prev", "next")
        current = start_id
        for _ in range(len(self._links)):
            link = self._get_link(current)
            yield link
            current = getattr(link, direction)
            if current == start_id:
                return
        raise RouteInvariantError(
            f"Following the ring from the stop with id {start_id} did not "
            f"return to it after {len(self._links)} hops.")

    def __iter__(self) -> Iterator[Stop]:
        if self._first is None:
            return
        for link in self._walk(self._first):
            yield link.stop

    def iter_backwards(self) -> Iterator[Stop]:
        """ Iterate over the stops in reverse order, starting at the last. """
        if self._first is None:
            return
        last_id = self._get_link(self._first).prev
        for link in self._walk(last_id, "prev"):
            yield link.stop

    def __len__(self) -> int:
        return len(self._links)

    def __contains__(self, stop: Stop) -> bool:
        if not isinstance(stop, Stop):
            return False
        link = self._links.get(stop.id)
        return link is not None and link.stop == stop

    def list_stops(self) -> StopsView:
        """ Return a read-only view of all stops, in traversal order. """
        return StopsView(self)

    def find_by_name(self, name: str) -> Stop | None:
        """ Return the first stop with the given name, ignoring case.

        :return: The stop or None, if no stop has the given name.
        """
        normalized = normalize_name(name)
        for stop in self:
            if normalize_name(stop.name) == normalized:
                return stop
        return None

    def find_by_id(self, stop_id: int) -> Stop | None:
        """ Return the stop with the given id or None, if there is none. """
        for stop in self:
            if stop.id == stop_id:
                return stop
        return None

    def next_stop(self, stop: Stop) -> Stop:
        """ The successor of the given stop. """
        return self._get_link(self._links[stop.id].next).stop

    def prev_stop(self, stop: Stop) -> Stop:
        """ The predecessor of the given stop. """
        return self._get_link(self._links[stop.id].prev).stop

    # Mutation.
    def _validate_new_stop(self, stop: Stop) -> None:
        if not isinstance(stop, Stop):
            raise TypeError(f"Can only insert stops, got '{type(stop)}'.")
        if stop.id in self._links:
            raise ValueError(f"A stop with id {stop.id} is already part "
                             f"of the route.")
        if not self._ids.is_used(stop.id):
            raise ValueError(f"The stop with id {stop.id} was not created "
                             f"by this route. Use Route.create_stop.")

    def _link_single(self, stop: Stop) -> None:
        self._links[stop.id] = _Link(stop, stop.id, stop.id)
        self._first = stop.id

    def _splice_after(self, prev_id: int, stop: Stop) -> None:
        prev_link = self._get_link(prev_id)
        next_id = prev_link.next
        next_link = self._get_link(next_id)
        self._links[stop.id] = _Link(stop, prev_id, next_id)
        prev_link.next = stop.id
        next_link.prev = stop.id

    def insert_at_end(self, stop: Stop) -> None:
        """ Insert the stop after the last stop, i.e. before the first one.

        If the route is empty, the stop becomes the first stop.
        """
        self._validate_new_stop(stop)
        if self._first is None:
            self._link_single(stop)
        else:
            self._splice_after(self._get_link(self._first).prev, stop)
        logger.debug(f"Inserted stop '{stop.name}' at the end.")

    def insert_after(self, existing: Stop | None, stop: Stop) -> bool:
        """ Insert the stop directly after the existing stop.

        :param existing: A stop of this route.
        :param stop: The stop that will be inserted.
        :return: True, if the stop was inserted after existing. False, if
         existing is not part of the route; the stop is then inserted at
         the end instead.
        """
        if existing is None or existing not in self:
            self.insert_at_end(stop)
            logger.info(f"Could not find the stop to insert '{stop.name}' "
                        f"after. Inserted it at the end instead.")
            return False
        self._validate_new_stop(stop)
        self._splice_after(existing.id, stop)
        logger.debug(f"Inserted stop '{stop.name}' after '{existing.name}'.")
        return True

    def insert_at_position(self, stop: Stop, position: int) -> None:
        """ Insert the stop at the given (1-based) position.

        Positions below 1 insert the stop as the new first stop, positions
        greater than the length of the route insert it at the end.
        """
        self._validate_new_stop(stop)
        if self._first is None:
            self._link_single(stop)
        elif position <= 1:
            self._splice_after(self._get_link(self._first).prev, stop)
            self._first = stop.id
        else:
            current = self._get_link(self._first)
            index = 1
            while current.next != self._first and index < position - 1:
                current = self._get_link(current.next)
                index += 1
            self._splice_after(current.stop.id, stop)
        logger.debug(f"Inserted stop '{stop.name}' at position {position}.")

    def delete_by_name(self, name: str) -> bool:
        """ Delete the first stop with the given name.

        :return: True, if a stop was deleted, False otherwise.
        """
        stop = self.find_by_name(name)
        if stop is None:
            return False
        link = self._links.pop(stop.id)
        if link.next == stop.id:
            self._first = None
        else:
            self._get_link(link.prev).next = link.next
            self._get_link(link.next).prev = link.prev
            if self._first == stop.id:
                self._first = link.next
        logger.debug(f"Deleted stop '{stop.name}' (id {stop.id}).")
        return True

    def clear(self) -> None:
        """ Remove all stops. Ids of removed stops will not be reused. """
        self._links.clear()
        self._first = None

    # Measurement.
    def total_distance_and_time(self) -> tuple[float, float]:
        """ Return the distance/time of one full round along the route. """
        edges = [stop.edge for stop in self]
        return fsum(e[0] for e in edges), fsum(e[1] for e in edges)

    def distance_and_time_between(self, start_name: str, end_name: str
                                  ) -> tuple[float, float] | None:
        """ Return the distance/time, when travelling from start to end.

        Travel is always forward, wrapping around at the end of the route.

        :return: The distance/time or None, if either stop does not exist.
        """
        start = self.find_by_name(start_name)
        target = self.find_by_name(end_name)
        if start is None or target is None:
            return None
        if start.id == target.id:
            return 0., 0.
        edges = []
        for link in self._walk(start.id):
            edges.append(link.stop.edge)
            if link.next == target.id:
                return fsum(e[0] for e in edges), fsum(e[1] for e in edges)
        raise RouteInvariantError(
            f"Went full circle from '{start.name}' without "
            f"reaching '{target.name}'.")

    def check_integrity(self) -> None:
        """ Check that the ring is a single cycle through every stop.

        :raises RouteInvariantError: If any link is dangling or asymmetric,
         or the ring does not contain every stop exactly once.
        """
        if self._first is None:
            if self._links:
                raise RouteInvariantError(
                    "The route has stops, but no first stop.")
            return
        seen: set[int] = set()
        current = self._first
        for _ in range(len(self._links)):
            link = self._get_link(current)
            if current in seen:
                raise RouteInvariantError(
                    f"The stop with id {current} was reached twice.")
            if link.stop.id != current:
                raise RouteInvariantError(
                    f"The stop with id {link.stop.id} is stored as {current}.")
            if self._get_link(link.next).prev != current:
                raise RouteInvariantError(
                    f"The links between {current} and {link.next} are not "
                    f"symmetric.")
            seen.add(current)
            current = link.next
        if current != self._first:
            raise RouteInvariantError(
                f"The ring did not return to the first stop after "
                f"{len(self._links)} hops.")

    # Rows.
    def to_rows(self) -> list[StopRow]:
        """ Return the rows of all stops, in traversal order. """
        return [stop.to_row() for stop in self]

    def load_rows(self, rows: Iterable[StopRow]) -> None:
        """ Replace all stops with new stops created from the rows.

        The ids of the rows are ignored; each stop gets a fresh id. The
        stops are created before the route is cleared, so an invalid row
        leaves the route untouched.
        """
        stops = [self.create_stop(*row[1:5]) for row in rows]
        self.clear()
        for stop in stops:
            self.insert_at_end(stop)
        logger.debug(f"Loaded {len(stops)} stops.")

    def copy(self: RT) -> RT:
        """ Return an independent route with the same stops. """
        return self.from_rows(self.to_rows())

    def __repr__(self) -> str:
        names = ", ".join(repr(stop.name) for stop in self)
        return f"{self.__class__.__name__}([{names}])"

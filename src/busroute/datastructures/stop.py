""" A single stop of a route and the row it is exported as. """

from __future__ import annotations

from dataclasses import astuple, dataclass
from typing import NamedTuple


class StopRow(NamedTuple):
    """ The values of a stop, as found within a route file. """
    id: int
    name: str
    passengers: int
    distance_to_next: float
    time_to_next: float


@dataclass(frozen=True)
class Stop:
    """ A single stop, including the edge to its successor.

    The id is minted by the route the stop is created for.
    """
    id: int
    name: str
    passengers: int = 0
    distance_to_next: float = 0.
    time_to_next: float = 0.

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError(f"Stop name needs to be a str, "
                            f"got '{type(self.name)}' instead.")
        if not self.name:
            raise ValueError("Stop name can not be empty.")
        # bool is an int as well, but never a proper count.
        if (not isinstance(self.passengers, int)
                or isinstance(self.passengers, bool)):
            raise TypeError(f"Passengers need to be an int, "
                            f"got '{type(self.passengers)}' instead.")
        if self.passengers < 0:
            raise ValueError(f"Passengers can not be negative, "
                             f"got {self.passengers}.")
        for attr in ("distance_to_next", "time_to_next"):
            value = getattr(self, attr)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise TypeError(f"{attr} needs to be a number, "
                                f"got '{type(value)}' instead.")
            if not value >= 0:
                raise ValueError(f"{attr} needs to be a non-negative "
                                 f"number, got {value}.")
            # Store ints as floats, so sums are always floats.
            object.__setattr__(self, attr, float(value))

    @property
    def edge(self) -> tuple[float, float]:
        """ The distance/time to the next stop. """
        return self.distance_to_next, self.time_to_next

    def to_row(self) -> StopRow:
        """ Return the row used to export this stop. """
        return StopRow(*astuple(self))

    def __str__(self) -> str:
        return (f"ID:{self.id}  Name:\"{self.name}\"  "
                f"Passengers:{self.passengers}  "
                f"dist_to_next:{self.distance_to_next:.2f} km  "
                f"time_to_next:{self.time_to_next:.2f} min")

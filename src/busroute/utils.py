""" Utils used across multiple files, to prevent circular imports. """

from __future__ import annotations


class IdGenerator:
    """ Mints integer ids for the stops of a single route.

    Ids start at 1 and are never handed out twice, even if the stop
    that used an id was deleted in the meantime.
    """

    def __init__(self, start: int = 1) -> None:
        self.id: int | None = None
        self.start = start

    def next(self) -> int:
        """ Return the next available id. """
        self.id = self.start if self.id is None else self.id + 1
        return self.id

    @property
    def last(self) -> int | None:
        """ The id returned by the last call of next, if any. """
        return self.id

    def is_used(self, id_: int) -> bool:
        """ Whether the id was already returned by next. """
        return self.id is not None and self.start <= id_ <= self.id


def normalize_name(name: str) -> str:
    """ Normalize the given name, so names can be compared ignoring case. """
    return name.casefold()

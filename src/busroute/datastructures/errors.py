""" Exceptions raised by the route and the route file. """


class RouteError(Exception):
    """ Base class for all errors raised by a route. """
    pass


class RouteInvariantError(RouteError):
    """ Raised, if the ring of a route is broken.

    This is never raised for an ordinary lookup miss; it means some
    mutation left a dangling or asymmetric link behind.
    """
    pass


class RouteFileError(Exception):
    """ Raised, if a route file could not be read or written. """
    pass


class RouteFileUnavailableError(RouteFileError):
    """ Raised, if the storage of the route file is not accessible. """

    def __init__(self, path, error: OSError | None = None) -> None:
        self.path = path
        msg = f"The route file '{path}' is not accessible"
        if error is not None:
            msg += f": {error.strerror or error}"
        super().__init__(msg)

""" Exceptions raised by properties. """

INVALID_CONFIG_EXIT_CODE = 1


class PropertyError(Exception):
    """ Base class for all errors raised by properties. """
    pass


class InvalidPropertyTypeError(PropertyError):
    """ Raised, if the value of a property has the wrong type. """
    pass


class MissingRequiredPropertyError(PropertyError):
    """ Raised, if a property is accessed, that was never set. """
    pass


class OutOfBoundsPropertyError(PropertyError):
    """ Raised, if the value of a bounded property is out of bounds. """
    pass


class UnknownPropertyError(PropertyError):
    """ Raised, if a config file contains an unknown key. """
    pass


class InvalidLogLevelError(PropertyError):
    """ Raised, if the given log level is not known by logging. """
    pass


class InvalidSampleStopsError(PropertyError):
    """ Raised, if an entry of sample_stops is not a list of name,
    passengers, distance and time. """
    pass

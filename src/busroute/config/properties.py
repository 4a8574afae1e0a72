""" Descriptors for the properties of the Config.

This is to enable a 'Config.some_property'-lookup, without the
need to hard-code each property.
"""

from __future__ import annotations

import logging
from types import UnionType
from typing import Any, get_args, get_origin, TYPE_CHECKING, TypeVar, Union

import busroute.config.errors as err


if TYPE_CHECKING:
    from busroute.config import InstanceDescriptorMixin  # noqa: F401

logger = logging.getLogger(__name__)
CType = TypeVar("CType", bound="InstanceDescriptorMixin")


class Property:
    """ Base class for config properties. """

    def __init__(self, cls: CType, attr: str, attr_type: type) -> None:
        self._register(cls, attr)
        self.attr = "__" + attr
        self.type = attr_type

    @property
    def name(self) -> str:
        """ The name of the property, as used in the config files. """
        return self.attr[2:]

    def _register(self, cls: CType, attr: str) -> None:
        """ Ensure the instance using this property knows of its existence. """
        self.cls = cls
        self.cls.properties.append(attr)

    def __get__(self, obj: CType, objtype=None) -> Any:
        try:
            return getattr(obj, self.attr)
        except AttributeError:
            raise err.MissingRequiredPropertyError

    def validate(self, value: Any) -> None:
        """ Checks if there are any obvious errors with the value. """
        self._validate_type(value)

    def _raise_type_error(self, typ: type) -> None:
        logger.error(
            f"Invalid config type for {self.name}. "
            f"Expected '{self.type}', got '{typ}' instead.")
        raise err.InvalidPropertyTypeError

    def _validate_type(self, value: Any) -> None:
        # bool is a subclass of int, but should never be used as one.
        is_bool = isinstance(value, bool)
        if isinstance(value, self.type) and (self.type is bool or not is_bool):
            return
        self._raise_type_error(type(value))

    def __set__(self, obj, value: Any):
        self.validate(value)
        setattr(obj, self.attr, value)


class BoundsProperty(Property):
    """ Used for properties with bounded values. """

    def __init__(self, cls, attr, attr_type: type, lower=None, upper=None
                 ) -> None:
        super().__init__(cls, attr, attr_type)
        self.lower = lower
        self.upper = upper

    def validate(self, value: Any) -> None:
        """ Checks if the value is within bounds. """
        super().validate(value)
        self._validate_within_bounds(value)

    def _validate_within_bounds(self, value: Any):
        upper_oob = self.upper is not None and value > self.upper
        lower_oob = self.lower is not None and value < self.lower
        if upper_oob or lower_oob:
            logger.error(f"The value {value} of '{self.name}' needs to be "
                         f"between {self.lower} and {self.upper}.")
            raise err.OutOfBoundsPropertyError


class IntBoundsProperty(BoundsProperty):
    """ Bounded property of type int. """

    def __init__(self, cls, attr, lower: int = None, upper: int = None
                 ) -> None:
        super().__init__(cls, attr, int, lower, upper)


class NestedTypeProperty(Property):
    """ Base class used by properties, which have a nested or generic type.
    This is necessary, because isinstance does not work with Generics. """

    def _validate_type(self, value: Any) -> None:
        try:
            self._validate_generic_type(value, self.type)
        except err.InvalidPropertyTypeError:
            self._raise_type_error(type(value))

    def _validate_generic_type(self, value: Any, typ: type) -> None:
        origin = get_origin(typ)
        if origin is None:
            if typ is Any:
                return
            if isinstance(value, bool) and typ is not bool:
                raise err.InvalidPropertyTypeError
            if not isinstance(value, typ):
                raise err.InvalidPropertyTypeError
            return
        if origin in [Union, UnionType]:
            self._validate_union(value, typ)
            return
        if not isinstance(value, origin):
            raise err.InvalidPropertyTypeError
        args = get_args(typ)
        if not args:
            return
        for item in value:
            self._validate_generic_type(item, args[0])

    def _validate_union(self, value: Any, typ: type) -> None:
        for arg in get_args(typ):
            try:
                self._validate_generic_type(value, arg)
                return
            except err.InvalidPropertyTypeError:
                pass
        raise err.InvalidPropertyTypeError


class FilenameProperty(Property):
    """ Property defining a filename. Unset filenames are empty. """

    def __init__(self, cls, attr) -> None:
        super().__init__(cls, attr, str)

    def __get__(self, obj, objtype=None) -> str:
        try:
            return getattr(obj, self.attr)
        except AttributeError:
            return ""

    def __set__(self, obj, value: Any) -> None:
        if value is None:
            value = ""
        super().__set__(obj, value.strip() if isinstance(value, str) else value)


class LogLevelProperty(Property):
    """ Property for the log level. Accepts level names like 'INFO'. """

    def __init__(self, cls, attr) -> None:
        super().__init__(cls, attr, str)

    def validate(self, value: Any) -> None:
        """ Checks if logging knows the given level. """
        super().validate(value)
        level = logging.getLevelName(value.strip().upper())
        if not isinstance(level, int):
            logger.error(f"Invalid log level '{value}' for '{self.name}'. "
                         f"Use one of DEBUG, INFO, WARNING, ERROR.")
            raise err.InvalidLogLevelError

    def __set__(self, obj, value: Any) -> None:
        self.validate(value)
        setattr(obj, self.attr, value.strip().upper())


class SampleStopsProperty(NestedTypeProperty):
    """ Property for the sample route.

    Each entry is a list of name, passengers, distance and time.
    """

    def __init__(self, cls, attr) -> None:
        super().__init__(cls, attr, list[list[str | int | float]])

    def validate(self, value: Any) -> None:
        """ Checks that every entry describes a valid stop. """
        super().validate(value)
        for entry in value:
            if self._is_valid_entry(entry):
                continue
            logger.error(f"Invalid entry {entry} in '{self.name}'. Every "
                         f"entry needs to be a list of name, passengers, "
                         f"distance and time, e.g. ['Park', 2, 2.0, 5.0].")
            raise err.InvalidSampleStopsError

    @staticmethod
    def _is_valid_entry(entry: list) -> bool:
        if len(entry) != 4:
            return False
        name, passengers, distance, time = entry
        if not isinstance(name, str) or not name:
            return False
        if not isinstance(passengers, int):
            return False
        if passengers < 0:
            return False
        for number in (distance, time):
            if not isinstance(number, (int, float)) or number < 0:
                return False
        return True

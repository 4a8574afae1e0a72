import logging
import os.path
import platform
import sys
from pathlib import Path
from typing import Any

from yaml import safe_load, YAMLError
from yaml.scanner import ScannerError

import busroute.config.errors as err
import busroute.config.properties as p


logger = logging.getLogger(__name__)


class InstanceDescriptorMixin:
    """ Enable descriptors on an instance instead of a class.
    See https://blog.brianbeck.com/post/74086029/instance-descriptors
    """

    def __getattribute__(self, name: str) -> Any:
        value = object.__getattribute__(self, name)
        if hasattr(value, '__get__'):
            value = value.__get__(self, self.__class__)
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            obj = object.__getattribute__(self, name)
        except AttributeError:
            pass
        else:
            if hasattr(obj, '__set__'):
                return obj.__set__(self, value)
        return object.__setattr__(self, name, value)


def _list_configs(directory: Path) -> list[Path]:
    if not directory.is_dir():
        logger.debug(f"Not reading configuration files from "
                     f"{directory}, because it is not a directory.")
        return []
    return sorted(directory.glob("*.yaml")) + sorted(directory.glob("*.yml"))


class _Config(InstanceDescriptorMixin):
    def __init__(self) -> None:
        self._initialize_config_properties()
        # Always load default config first, before loading any custom config
        # or program parameters.
        self.load_default_config()
        self.load_configs(self.config_dir)

    def _initialize_config_properties(self) -> None:
        self.properties = []
        self.filename = p.FilenameProperty(self, "filename")
        self.route_file = p.FilenameProperty(self, "route_file")
        self.float_precision = p.IntBoundsProperty(
            self, "float_precision", 0, 15)
        self.log_level = p.LogLevelProperty(self, "log_level")
        self.non_interactive = p.Property(self, "non_interactive", bool)
        self.sample_route = p.Property(self, "sample_route", bool)
        self.sample_stops = p.SampleStopsProperty(self, "sample_stops")

    def load_default_config(self) -> None:
        if not self.load_config(self.default_config_path):
            logger.error("Errors occurred when reading the given configs. "
                         "Exiting...")
            sys.exit(err.INVALID_CONFIG_EXIT_CODE)

    def load_configs(self, path: Path) -> None:
        configs = [path] if path.is_file() else _list_configs(path)
        if not configs:
            return

        valid = True
        for path in configs:
            if path == self.default_config_path:
                continue
            valid &= self.load_config(path)
        valid &= self._validate_no_missing_properties()
        if valid:
            return

        logger.error(
            "Errors occurred when reading the given configs. Exiting...")
        sys.exit(err.INVALID_CONFIG_EXIT_CODE)

    def load_config(self, path: Path) -> bool:
        """ Load the given config.

        :param path: Path to config file.
        :return: True, if loading was a success, False if any errors occurred.
        """
        if path.exists() and path.is_file():
            data, valid = _read_yaml(path)
            valid &= self._validate_no_invalid_properties(data)
            return valid

        logger.error(f"The given configuration file either does not "
                     f"exist or is not a proper file: '{path}'.")
        return False

    def load_args(self, args: dict[str, Any]) -> None:
        for config_path in args.pop("config", None) or []:
            path = Path(config_path).resolve()
            if path.is_dir():
                logger.info(
                    f"The given config path '{path}' leads to a directory. "
                    f"All configs in the directory will be read.")
            self.load_configs(path)

        for name, value in args.items():
            if value is None:
                # Nothing to log, cause this just means argument is unset.
                continue
            if name not in self.properties:
                logger.error(f"Tried to set unknown property '{name}'.")
                continue
            try:
                setattr(self, name, value)
            except err.PropertyError:
                logger.error(f"Invalid value '{value}' for argument "
                             f"'{name}'. Exiting...")
                sys.exit(err.INVALID_CONFIG_EXIT_CODE)

    def _validate_no_invalid_properties(self, data: dict[str, Any]) -> bool:
        valid = True
        for key, value in (data or {}).items():
            # Even if an item is invalid, continue reading to find all errors.
            try:
                if key not in self.properties:
                    logger.error(f"Invalid config key: {key}")
                    raise err.UnknownPropertyError
                setattr(self, key, value)
            except err.PropertyError:
                valid = False
        return valid

    def _validate_no_missing_properties(self) -> bool:
        missing_keys = []
        for key in self.properties:
            try:
                getattr(self, key)
            except err.MissingRequiredPropertyError:
                missing_keys.append(key)

        if missing_keys:
            logger.warning(
                "The following values are required, but are missing in "
                "the configuration: ['{}']. This usually only happens, "
                "if the default configuration was changed, instead of "
                "creating a custom one.".format("', '".join(missing_keys)))
            return False
        return True

    @property
    def br_dir(self) -> Path:
        """ Returns the path, where the busroute package is located. """
        return Path(__file__).parents[1]

    @property
    def config_dir(self) -> Path:
        system = platform.system().lower()
        if system == "linux":
            return Path(os.path.expanduser("~/.config/busroute/")).resolve()
        if system == "windows":
            return Path(
                os.path.expandvars("%PROGRAMDATA%/busroute/")).resolve()
        logger.warning("Currently only windows and linux are fully "
                       "supported.")
        return self.br_dir

    @property
    def default_config_path(self) -> Path:
        return self.br_dir.joinpath("config.template.yaml")

    def __str__(self) -> str:
        string_like = (str, Path)

        def get_property_string(_name: str, _value: Any) -> str:
            wrapper = "'" if isinstance(_value, string_like) else ""
            return f"\t{_name:{max_name_len}}: {wrapper}{_value}{wrapper}"

        base_string = "\nCurrent configuration: [\n{}\n]"

        property_names = self.properties + ["br_dir", "default_config_path"]
        max_name_len = max(len(name) for name in property_names)

        # This can only fail if some properties are missing. However, in
        # that case we have already quit.
        prop_strings = [get_property_string(name, getattr(self, name))
                        for name in property_names]

        return base_string.format("\n".join(prop_strings))


def _read_yaml(path: Path) -> tuple[dict[str, Any], bool]:
    try:
        with open(path, encoding="utf-8") as config_file:
            return safe_load(config_file) or {}, True
    except (ScannerError, YAMLError) as error:
        if isinstance(error, ScannerError):
            # Indent error message.
            message = "\n\t".join(str(error).split("\n"))
        else:
            message = str(error)
        logger.error(f"Could not read configuration:\n\t{message}")
    return {}, False


Config = _Config()

""" Handles the command line arguments given to busroute. """

from argparse import ArgumentParser, Namespace


def parse_args(args: list | None = None) -> Namespace:
    """ Create an argument parser and try to parse the given args. """
    # Create an argument parser with all arguments.
    parser = ArgumentParser("busroute")
    _add_positional_arguments(parser)
    _add_optional_arguments(parser)

    return parser.parse_args(args)


def _add_positional_arguments(parser: ArgumentParser):
    parser.add_argument(
        "filename", type=str, nargs="?", default=None,
        help="A route file (csv), which will be loaded at startup")


def _add_optional_arguments(parser: ArgumentParser):
    text = ("Path to a configuration file. If given multiple times, all "
            "files will be read in the order given. Config files read later "
            "may override the settings of previous config files.")
    parser.add_argument("--config", action="append", type=str,
                        help=text, default=[])

    text = ("The route file, that is suggested when saving or loading the "
            "route using the menu.")
    parser.add_argument("--route_file", type=str, help=text)

    text = ("Number of decimal digits used for the distance and time, "
            "when saving the route.")
    parser.add_argument("--float_precision", type=int, help=text)

    text = "The log level. One of DEBUG, INFO, WARNING, ERROR."
    parser.add_argument("--log_level", type=str, help=text)

    text = ("Disables the menu. The route and its total distance/time will "
            "be printed instead.")
    parser.add_argument("--non_interactive", const=True,
                        action="store_const", help=text)

    text = "Populate the sample route at startup."
    parser.add_argument("--sample_route", const=True,
                        action="store_const", help=text)

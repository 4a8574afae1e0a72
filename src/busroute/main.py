""" busroute main. From here the route is created and the menu is run. """

import logging
import sys
from time import time

from busroute.br_logging import initialize_logging
from busroute.config import Config
from busroute.datastructures.errors import RouteFileError
from busroute.datastructures.route import Route
from busroute.datastructures.route_file import RouteFile
from busroute.user_input.arg_parser import parse_args
from busroute.user_input.cli import (
    populate_sample, render_route, render_totals, run_menu)


logger = logging.getLogger(__name__)
LOAD_FAILED_EXIT_CODE = 3


def create_route() -> Route | None:
    """ Create the route, either from the given file, the sample stops,
    or empty. Returns None, if the route file could not be loaded. """
    route = Route()
    if Config.filename:
        try:
            RouteFile(Config.filename).load_into(route)
        except RouteFileError as error:
            logger.error(str(error))
            return None
    elif Config.sample_route:
        populate_sample(route)
    return route


def main(args: list | None = None) -> None:
    """ Main function. """
    start = time()
    Config.load_args(vars(parse_args(args)))
    initialize_logging(Config.log_level)
    logger.debug(Config)

    route = create_route()
    if route is None:
        sys.exit(LOAD_FAILED_EXIT_CODE)

    if Config.non_interactive:
        print(render_route(route))
        print(render_totals(route))
    else:
        print("Bus Route Simulator. "
              "Choose 12 in the menu to populate the sample route.")
        run_menu(route)
    logger.info(f"Done. Took {time() - start:.2f}s. Exiting...")


if __name__ == "__main__":
    main()

""" Functions/Classes used by many tests. """

from __future__ import annotations

import logging
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import TestCase

from busroute.config import Config
from busroute.datastructures.route import Route


def create_route(*stops: tuple[str, int, float, float]) -> Route:
    """ Create a route containing the given stops, in the given order. """
    route = Route()
    for stop in stops:
        route.append(*stop)
    return route


def create_abc_route() -> Route:
    """ The route used in most tests: A -> B -> C -> A. """
    return create_route(("A", 0, 1.0, 2.0),
                        ("B", 0, 3.0, 4.0),
                        ("C", 0, 5.0, 6.0))


class BRTestCase(TestCase):
    """ Base class for test cases (super().setUp() has to be called by subs).

    Ensures that we always use the default config, even if one test changed it.
    """

    temp_dir: TemporaryDirectory | None
    temp_path: Path | None

    @classmethod
    def setUpClass(cls: BRTestCase,
                   create_temp_dir: bool = False,
                   disable_logging: bool = False) -> None:
        super().setUpClass()
        cls.temp_dir = None
        cls.temp_path = None
        if create_temp_dir:
            cls.temp_dir = TemporaryDirectory(prefix="busroute_test_")
            cls.temp_path = Path(cls.temp_dir.name)
        if disable_logging:
            logging.disable(logging.CRITICAL)

    @classmethod
    def tearDownClass(cls: BRTestCase) -> None:
        super().tearDownClass()
        if cls.temp_dir is not None:
            cls.temp_dir.cleanup()
        # No need to check if disabled.
        logging.disable(logging.NOTSET)

    def setUp(self) -> None:
        super().setUp()
        # Reset the config. Easier/Less error-prone than cleaning up properly.
        Config.load_default_config()

    def assertRouteNames(self, route: Route, names: list[str]) -> None:
        """ Check the names of the stops of route, in traversal order. """
        self.assertEqual(names, [stop.name for stop in route.list_stops()])
        route.check_integrity()

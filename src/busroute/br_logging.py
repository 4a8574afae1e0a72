""" Functions to setup logging. """

import logging
import sys


def initialize_logging(level: int | str, *,
                       force: bool = False, handlers: list = None) -> None:
    """ Setup basic logging, writing to stdout by default. """
    if handlers is None:
        handlers = [logging.StreamHandler(stream=sys.stdout)]
    logging.basicConfig(level=level, force=force, handlers=handlers,
                        format="%(levelname)s: %(message)s")


def flush_all_loggers() -> None:
    """ Flush all handlers, to ensure all messages are displayed. """
    for handler in logging.getLogger().handlers:
        handler.flush()

""" Used to ask for userinput. Contains the menu of busroute. """

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, TypeAlias

from busroute.br_logging import flush_all_loggers
from busroute.datastructures.errors import RouteFileError
from busroute.datastructures.route import Route
from busroute.datastructures.route_file import RouteFile
from busroute.datastructures.stop import StopRow
from busroute.utils import normalize_name


logger = logging.getLogger(__name__)
CheckType: TypeAlias = list[str] | Callable[[str], bool]
MenuAction: TypeAlias = Callable[[Route], None]


def _get_input(prompt: str, check: CheckType, msg: str = "") -> str:
    flush_all_loggers()
    answer = input(prompt + "\n> ").strip()
    valid = answer in check if isinstance(check, list) else check(answer)
    if valid:
        return answer
    if msg:
        logger.warning(msg)
    return _get_input(prompt, check, msg)


def _to_int(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


def _to_float(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        return None


def _get_int(prompt: str) -> int:
    """ Ask for an integer. An empty answer is equal to 0. """
    def _is_int(answer: str) -> bool:
        return answer == "" or _to_int(answer) is not None

    answer = _get_input(prompt, _is_int, "Invalid integer, try again.")
    return _to_int(answer) if answer else 0


def _get_non_negative(prompt: str, convert: Callable[[str], int | float]
                      ) -> int | float:
    def _is_valid(answer: str) -> bool:
        if answer == "":
            return True
        value = convert(answer)
        return value is not None and value >= 0

    answer = _get_input(
        prompt, _is_valid, "Invalid number, it needs to be non-negative.")
    return convert(answer) if answer else 0


def _get_name(prompt: str) -> str:
    return _get_input(prompt, lambda answer: True)


def _get_new_name(prompt: str) -> str:
    return _get_input(prompt, bool, "The name of a stop can not be empty.")


def _create_stop(route: Route, name: str):
    passengers = _get_non_negative(
        "Enter waiting passengers (int):", _to_int)
    distance = _get_non_negative(
        "Enter distance to next stop (km):", _to_float)
    time = _get_non_negative("Enter time to next stop (min):", _to_float)
    return route.create_stop(name, passengers, distance, time)


def render_route(route: Route) -> str:
    """ Returns the full route, as it is shown to the user. """
    if not len(route):
        return "Route is empty."
    lines = ["Full route:"]
    for i, stop in enumerate(route.list_stops(), 1):
        lines.append(f"{i:2d}) {stop}")
    return "\n".join(lines)


def render_totals(route: Route) -> str:
    """ Returns the total distance and time of the route. """
    distance, time = route.total_distance_and_time()
    return (f"Total distance of route: {distance:.2f} km\n"
            f"Total time of route: {time:.2f} minutes")


def populate_sample(route: Route) -> None:
    """ Replace the stops of the route with the configured sample stops. """
    from busroute.config import Config

    route.load_rows([StopRow(0, *entry) for entry in Config.sample_stops])
    logger.info(f"Populated the sample route with {len(route)} stops.")


# Menu actions.
def view_route(route: Route) -> None:
    """ Print every stop of the route. """
    print(render_route(route))


def search_stop(route: Route) -> None:
    """ Ask for a name and print the stop with that name. """
    stop = route.find_by_name(_get_name("Enter stop name:"))
    print(stop if stop else "Stop not found.")


def insert_at_end(route: Route) -> None:
    """ Ask for a new stop and append it to the route. """
    stop = _create_stop(route, _get_new_name("Enter new stop name:"))
    route.insert_at_end(stop)
    print("Inserted at end.")


def insert_after(route: Route) -> None:
    """ Ask for a new stop and insert it after an existing stop. """
    name = _get_new_name("Enter new stop name:")
    after = _get_name("Insert after which stop (name)?")
    stop = _create_stop(route, name)
    existing = route.find_by_name(after)
    if route.insert_after(existing, stop):
        print(f"Inserted after \"{existing.name}\".")
    else:
        print("After-stop not found; appended at end.")


def insert_at_position(route: Route) -> None:
    """ Ask for a new stop and insert it at the given position. """
    name = _get_new_name("Enter new stop name:")
    position = _get_int("Enter position (1-based):")
    stop = _create_stop(route, name)
    route.insert_at_position(stop, position)
    print(f"Inserted at position {position} (or end if position > length).")


def delete_stop(route: Route) -> None:
    """ Ask for a name and delete the first stop with that name. """
    deleted = route.delete_by_name(_get_name("Enter stop name to delete:"))
    print("Deleted." if deleted else "Stop not found.")


def show_passengers(route: Route) -> None:
    """ Ask for a name and print the passengers waiting at that stop. """
    stop = route.find_by_name(_get_name("Enter stop name:"))
    if stop is None:
        print("Stop not found.")
        return
    print(f"Passengers waiting at \"{stop.name}\": {stop.passengers}")


def show_totals(route: Route) -> None:
    """ Print the total distance and time of the route. """
    print(render_totals(route))


def show_distance_between(route: Route) -> None:
    """ Ask for two names and print the distance/time between them. """
    start = _get_name("Start stop name:")
    end = _get_name("End stop name:")
    result = route.distance_and_time_between(start, end)
    if result is None:
        print("One or both stops not found or unreachable.")
        return
    if normalize_name(start) == normalize_name(end):
        print("Same stop. Distance=0, Time=0")
        return
    distance, time = result
    print(f"Distance from \"{start}\" to \"{end}\": {distance:.2f} km\n"
          f"Time: {time:.2f} minutes")


def _get_route_path(prompt: str) -> Path:
    from busroute.config import Config

    default = Config.route_file
    answer = _get_name(f"{prompt} (default: '{default}')")
    return Path(answer or default)


def save_route(route: Route) -> None:
    """ Ask for a filename and save the route to it. """
    if not len(route):
        print("No route to save.")
        return
    path = _get_route_path("Filename to save:")
    try:
        RouteFile(path).write(route)
    except RouteFileError as error:
        logger.error(str(error))
        print("Save failed.")
        return
    print(f"Saved to {path}")


def load_route(route: Route) -> None:
    """ Ask for a filename and replace the route with its content. """
    path = _get_route_path("Filename to load:")
    try:
        RouteFile(path).load_into(route)
    except RouteFileError as error:
        logger.error(str(error))
        print("Load failed.")
        return
    print(f"Loaded from {path}")


def sample_route(route: Route) -> None:
    """ Replace the route with the sample route. """
    populate_sample(route)
    print("Sample route populated.")


MENU: dict[str, tuple[str, MenuAction]] = {
    "1": ("View full route", view_route),
    "2": ("Search stop by name", search_stop),
    "3": ("Insert stop (end)", insert_at_end),
    "4": ("Insert stop (after a stop)", insert_after),
    "5": ("Insert stop (position)", insert_at_position),
    "6": ("Delete stop by name", delete_stop),
    "7": ("Passengers waiting at a stop", show_passengers),
    "8": ("Total distance & time", show_totals),
    "9": ("Distance & time between two stops", show_distance_between),
    "10": ("Save route to CSV", save_route),
    "11": ("Load route from CSV", load_route),
    "12": ("Populate sample route (demo)", sample_route),
    }
EXIT_OPTION = "0"


def _get_menu_prompt() -> str:
    lines = ["", "--- Bus Route Simulator ---"]
    lines += [f"{key}) {text}" for key, (text, _) in MENU.items()]
    lines += [f"{EXIT_OPTION}) Exit", "Choose option:"]
    return "\n".join(lines)


def run_menu(route: Route) -> None:
    """ Show the menu and run the chosen actions, until the user exits. """
    prompt = _get_menu_prompt()
    options = list(MENU) + [EXIT_OPTION]
    while True:
        try:
            answer = _get_input(prompt, options, "Unknown option.")
            if answer != EXIT_OPTION:
                _, action = MENU[answer]
                action(route)
                continue
        except EOFError:
            # Input was closed (e.g. Ctrl+D).
            pass
        print("Exiting.")
        return

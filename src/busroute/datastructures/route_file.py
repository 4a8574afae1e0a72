""" Read and write routes from/to the comma separated route file. """

from __future__ import annotations

import csv
import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import TYPE_CHECKING

import pandas as pd

from busroute.datastructures.errors import (
    RouteFileError, RouteFileUnavailableError)
from busroute.datastructures.stop import StopRow


if TYPE_CHECKING:
    from busroute.datastructures.route import Route

logger = logging.getLogger(__name__)
COLUMNS = StopRow._fields
SEPARATOR = ","


class MalformedRowError(RouteFileError):
    """ Raised, if a row does not contain all required values. """
    pass


class RouteFile:
    """ The file a route is exported to/imported from.

    Names are written as they are. A name containing the separator
    can not be read again.
    """

    def __init__(self, path: str | Path, precision: int | None = None
                 ) -> None:
        self.fp = Path(path)
        self._precision = precision

    @property
    def precision(self) -> int:
        """ The number of decimal digits used for distance/time. """
        if self._precision is not None:
            return self._precision
        from busroute.config import Config

        return Config.float_precision

    @staticmethod
    def get_header() -> str:
        """ Returns the column names of the route file. """
        return SEPARATOR.join(COLUMNS)

    def _row_to_output(self, row: StopRow) -> str:
        values = [str(row.id), row.name, str(row.passengers),
                  f"{row.distance_to_next:.{self.precision}f}",
                  f"{row.time_to_next:.{self.precision}f}"]
        return SEPARATOR.join(values)

    def to_output(self, route: Route) -> str:
        """ Return the content of the route file for the given route. """
        lines = [self.get_header()]
        lines += [self._row_to_output(row) for row in route.to_rows()]
        return "\n".join(lines) + "\n"

    def write(self, route: Route) -> None:
        """ Write the route to the file.

        The content is written to a temporary file first, which then
        replaces the route file. Either the full route is written or the
        route file stays as it was.
        """
        content = self.to_output(route)
        temp_path = None
        try:
            with NamedTemporaryFile(
                    "w", dir=self.fp.parent, prefix=f".{self.fp.name}.",
                    suffix=".tmp", delete=False, encoding="utf-8",
                    newline="") as fil:
                temp_path = Path(fil.name)
                fil.write(content)
            os.replace(temp_path, self.fp)
        except OSError as error:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink()
            raise RouteFileUnavailableError(self.fp, error) from error
        logger.info(f"Wrote {len(route)} stops to '{self.fp}'.")

    def read_df(self) -> pd.DataFrame:
        """ Read the route file into a dataframe containing only strings. """
        try:
            return pd.read_csv(
                self.fp, sep=SEPARATOR, header=0, names=list(COLUMNS),
                dtype=str, keep_default_na=False, quoting=csv.QUOTE_NONE,
                index_col=False, on_bad_lines="skip", skip_blank_lines=True,
                encoding="utf-8")
        except pd.errors.EmptyDataError as error:
            raise RouteFileError(
                f"The route file '{self.fp}' does not contain a header."
            ) from error
        except OSError as error:
            raise RouteFileUnavailableError(self.fp, error) from error

    def read(self) -> list[StopRow]:
        """ Read all valid rows of the route file. Invalid rows are skipped.

        :raises RouteFileUnavailableError: If the file can not be read.
        """
        rows = []
        # Row 1 is the header.
        for row, (_, series) in enumerate(self.read_df().iterrows(), 2):
            try:
                rows.append(row_from_series(series))
            except MalformedRowError as error:
                logger.debug(f"Skipping row {row} of '{self.fp}': {error}")
        return rows

    def load_into(self, route: Route) -> int:
        """ Replace the stops of route with the stops in the route file.

        The file is read completely, before the route is changed. If reading
        fails, the route keeps its stops.

        :return: The number of stops loaded.
        """
        rows = self.read()
        route.load_rows(rows)
        logger.info(f"Loaded {len(rows)} stops from '{self.fp}'.")
        return len(rows)


def _get_value(series: pd.Series, column: str) -> str:
    value = series.get(column)
    if value is None or pd.isna(value) or value == "":
        raise MalformedRowError(f"Missing value for '{column}'.")
    return value


def row_from_series(series: pd.Series) -> StopRow:
    """ Create a row from the given series. The id is not checked.

    :raises MalformedRowError: If any required value is missing or invalid.
    """
    name = _get_value(series, "name")
    try:
        passengers = int(_get_value(series, "passengers").strip())
        distance = float(_get_value(series, "distance_to_next").strip())
        time = float(_get_value(series, "time_to_next").strip())
    except ValueError as error:
        raise MalformedRowError(str(error)) from error
    if passengers < 0 or not distance >= 0 or not time >= 0:
        raise MalformedRowError("Values need to be non-negative.")
    row_id = series.get("id")
    row_id = int(row_id) if isinstance(row_id, str) and row_id.isdigit() else 0
    return StopRow(row_id, name, passengers, distance, time)

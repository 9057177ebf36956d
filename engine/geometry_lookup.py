"""
geometry_lookup.py

Looks up the old/new GeoJSON pair for a UUID in a flat CSV file.

The file is expected to look like:

    uuid,old_geojson,new_geojson
    id1,"{""type"":""Point"",""coordinates"":[77.2,28.6]}",
    id2,,"{""type"":""Polygon"",...}"

The file is re-read on every lookup. Nothing is cached between calls and
nothing is ever written.
"""

import json
import logging
import math
import os
from typing import Any, Dict, Optional

from engine.errors import (
    DataSourceMissing,
    MalformedHeader,
    MalformedPayload,
    NotFound,
)
from tools.csv_line_parser import parse_csv_line


logger = logging.getLogger(__name__)

DATA_PATH_ENV = "GEOCOMPARE_DATA_PATH"
STRICT_HEADER_ENV = "GEOCOMPARE_STRICT_HEADER"
DEFAULT_DATA_FILE = "data.csv"

REQUIRED_COLUMNS = ("uuid", "old_geojson", "new_geojson")


def _reject_constant(token: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {token}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


class GeometryLookup:
    """
    Example usage:

        lookup = GeometryLookup("data.csv")
        record = lookup.lookup("id1")

        -> {
            "uuid": "id1",
            "old_geojson": {"type": "Point", "coordinates": [77.2, 28.6]},
            "new_geojson": None,
        }

    Failures are raised as GeometryLookupError subclasses
    (DataSourceMissing, MalformedHeader, MalformedPayload, NotFound).
    """

    def __init__(self, data_path: Optional[str] = None, strict_header: Optional[bool] = None):
        self.data_path = data_path
        self.strict_header = strict_header

    # ---------------------------------------------------------
    # Configuration
    # ---------------------------------------------------------

    def resolve_data_path(self) -> str:
        if self.data_path:
            return self.data_path
        return os.getenv(DATA_PATH_ENV) or os.path.join(os.getcwd(), DEFAULT_DATA_FILE)

    def _strict_header_enabled(self) -> bool:
        if self.strict_header is not None:
            return self.strict_header
        return os.getenv(STRICT_HEADER_ENV, "0") == "1"

    # ---------------------------------------------------------
    # Public entry point
    # ---------------------------------------------------------

    def lookup(self, uuid: str) -> Dict[str, Any]:
        csv_path = self.resolve_data_path()
        logger.debug("Looking up %s in %s", uuid, csv_path)

        if not os.path.isfile(csv_path):
            logger.warning("Data file not found: %s", csv_path)
            raise DataSourceMissing()

        with open(csv_path, "r", encoding="utf-8", newline="\n") as csv_file:
            header = csv_file.readline()
            if not self._header_is_valid(header):
                logger.warning("Invalid header in %s: %r", csv_path, header)
                raise MalformedHeader()

            for raw_line in csv_file:
                line = raw_line.strip()
                if not line:
                    continue

                columns = parse_csv_line(line)
                if len(columns) >= 3 and columns[0] == uuid:
                    return {
                        "uuid": uuid,
                        "old_geojson": self._parse_payload(columns[1], "old_geojson", uuid),
                        "new_geojson": self._parse_payload(columns[2], "new_geojson", uuid),
                    }

        logger.info("UUID %s not found in %s", uuid, csv_path)
        raise NotFound()

    # ---------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------

    def _header_is_valid(self, header: str) -> bool:
        """
        Loose mode only checks that every column name occurs somewhere in
        the header line, so "my_uuid" satisfies "uuid". Strict mode wants
        each name as a whole column.
        """
        if self._strict_header_enabled():
            names = {name.strip() for name in parse_csv_line(header.strip())}
            return all(col in names for col in REQUIRED_COLUMNS)

        return all(col in header for col in REQUIRED_COLUMNS)

    def _parse_payload(self, raw: str, column: str, uuid: str) -> Optional[Any]:
        if not raw:
            return None

        try:
            return json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)
        except ValueError:
            logger.warning("Invalid JSON in %s for UUID %s", column, uuid)
            raise MalformedPayload(column, uuid)

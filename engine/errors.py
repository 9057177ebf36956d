"""
errors.py

Failure outcomes of a geometry lookup.

Each error carries the message shown to the user and the HTTP status class
the API answers with. Anything that is not one of these is treated as an
internal failure by the API layer.
"""

from typing import Optional


class GeometryLookupError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DataSourceMissing(GeometryLookupError):
    status_code = 404
    default_message = "Data file not found"


class MalformedHeader(GeometryLookupError):
    status_code = 400
    default_message = "Invalid CSV format. Expected: uuid,old_geojson,new_geojson"


class MalformedPayload(GeometryLookupError):
    status_code = 400

    def __init__(self, column: str, uuid: str):
        self.column = column
        self.uuid = uuid
        super().__init__(f"Invalid JSON in {column} for UUID {uuid}")


class NotFound(GeometryLookupError):
    status_code = 404
    default_message = "UUID not found"

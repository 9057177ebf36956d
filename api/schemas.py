from typing import Any, Optional
from pydantic import BaseModel


class GeometryResponse(BaseModel):
    """
    Field names follow the JSON contract the viewer consumes, hence camelCase.
    The GeoJSON documents are passed through as-is (no schema validation).
    """
    uuid: str
    oldGeojson: Optional[Any] = None
    newGeojson: Optional[Any] = None


class ErrorResponse(BaseModel):
    error: str

"""
geojson_bounds.py

Bounding boxes for arbitrary GeoJSON documents, in the
[[south, west], [north, east]] form Leaflet/folium expect.

GeoJSON stores positions as [lon, lat(, alt)], so the axes are swapped on
the way out.
"""

from typing import Any, Iterator, List, Optional, Tuple


Bounds = List[List[float]]


def _iter_positions(coords: Any) -> Iterator[Tuple[float, float]]:
    if not isinstance(coords, (list, tuple)) or not coords:
        return

    # A position is a list of numbers; anything else is a nested array
    if all(isinstance(c, (int, float)) and not isinstance(c, bool) for c in coords):
        if len(coords) >= 2:
            yield float(coords[0]), float(coords[1])
        return

    for item in coords:
        yield from _iter_positions(item)


def _iter_document_positions(doc: Any) -> Iterator[Tuple[float, float]]:
    if isinstance(doc, list):
        for item in doc:
            yield from _iter_document_positions(item)
        return

    if not isinstance(doc, dict):
        return

    doc_type = doc.get("type")

    if doc_type == "FeatureCollection":
        for feature in doc.get("features") or []:
            yield from _iter_document_positions(feature)
    elif doc_type == "Feature":
        yield from _iter_document_positions(doc.get("geometry"))
    elif doc_type == "GeometryCollection":
        for geometry in doc.get("geometries") or []:
            yield from _iter_document_positions(geometry)
    else:
        yield from _iter_positions(doc.get("coordinates"))


def geojson_bounds(doc: Any) -> Optional[Bounds]:
    """
    Returns [[min_lat, min_lon], [max_lat, max_lon]], or None when the
    document has no usable coordinates.
    """
    lats: List[float] = []
    lons: List[float] = []
    for lon, lat in _iter_document_positions(doc):
        lons.append(lon)
        lats.append(lat)

    if not lats:
        return None

    return [[min(lats), min(lons)], [max(lats), max(lons)]]


def union_bounds(*bounds: Optional[Bounds]) -> Optional[Bounds]:
    present = [b for b in bounds if b]
    if not present:
        return None

    return [
        [min(b[0][0] for b in present), min(b[0][1] for b in present)],
        [max(b[1][0] for b in present), max(b[1][1] for b in present)],
    ]


def pad_bounds(bounds: Bounds, ratio: float = 0.1) -> Bounds:
    """
    Grow the box by `ratio` of its height/width on every side
    (same as Leaflet's LatLngBounds.pad).
    """
    (south, west), (north, east) = bounds
    lat_pad = (north - south) * ratio
    lon_pad = (east - west) * ratio
    return [[south - lat_pad, west - lon_pad], [north + lat_pad, east + lon_pad]]

"""
comparison_map.py

Interactive old-vs-new geometry map built with folium (Leaflet).

- ComparisonMapSession: owns one folium.Map for the life of a viewer.
  show(old, new) swaps the overlays, the legend and the viewport fit;
  render() returns a standalone HTML page.

Usage:

    with ComparisonMapSession() as session:
        session.show(record["old_geojson"], record["new_geojson"])
        html = session.render(title="GeoJSON Comparison", subtitle="UUID: id1")
"""

import html
import logging
from typing import Any, Dict, List, Optional

import folium
from branca.element import Element, Figure, MacroElement, Template
from folium.map import FitBounds

from tools.geojson_bounds import geojson_bounds, pad_bounds, union_bounds


logger = logging.getLogger(__name__)

DEFAULT_CENTER = [20.5937, 78.9629]
DEFAULT_ZOOM = 5
MAX_ZOOM = 19
BOUNDS_PADDING = 0.1

OLD_COLOR = "#ef4444"
NEW_COLOR = "#3b82f6"


def overlay_style(color: str) -> Dict[str, Any]:
    return {
        "color": color,
        "weight": 3,
        "opacity": 0.8,
        "fillColor": color,
        "fillOpacity": 0.3,
    }


class ComparisonLegend(MacroElement):
    """
    Fixed top-right legend for the two overlay colors.
    """

    _template = Template(
        """
        {% macro html(this, kwargs) %}
        <div class="geocompare-legend" style="
            position: fixed; top: 12px; right: 12px; z-index: 1000;
            background: #fff; padding: 12px; border-radius: 4px;
            box-shadow: 0 2px 6px rgba(0,0,0,0.3);
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Helvetica, Arial, sans-serif;">
            <div style="font-size: 14px; font-weight: 600; margin-bottom: 8px;">Legend</div>
            <div style="display: flex; align-items: center; margin-bottom: 4px;">
                <div style="width: 16px; height: 16px; margin-right: 8px;
                            background: {{ this.old_color }}; border: 1px solid #b91c1c;"></div>
                <span style="font-size: 12px;">Old Geometry</span>
            </div>
            <div style="display: flex; align-items: center;">
                <div style="width: 16px; height: 16px; margin-right: 8px;
                            background: {{ this.new_color }}; border: 1px solid #1d4ed8;"></div>
                <span style="font-size: 12px;">New Geometry</span>
            </div>
        </div>
        {% endmacro %}
        """
    )

    def __init__(self, old_color: str = OLD_COLOR, new_color: str = NEW_COLOR):
        super().__init__()
        self._name = "ComparisonLegend"
        self.old_color = old_color
        self.new_color = new_color


class ComparisonMapSession:
    """
    Explicitly opened/closed wrapper around a folium.Map.

    Everything show() adds to the map is tracked, and removed again on the
    next show(), so repeated calls never stack overlays or legends.
    """

    def __init__(self, center: Optional[List[float]] = None, zoom_start: int = DEFAULT_ZOOM):
        self.center = center or list(DEFAULT_CENTER)
        self.zoom_start = zoom_start
        self._map: Optional[folium.Map] = None
        self._overlays: Dict[str, folium.GeoJson] = {}
        self._legend: Optional[ComparisonLegend] = None
        self._fit: Optional[FitBounds] = None

    # ---------------------------------------------------------
    # Lifecycle
    # ---------------------------------------------------------

    def open(self) -> "ComparisonMapSession":
        if self._map is None:
            self._map = folium.Map(
                location=self.center,
                zoom_start=self.zoom_start,
                tiles="OpenStreetMap",
                max_zoom=MAX_ZOOM,
            )
        return self

    def close(self) -> None:
        self._overlays = {}
        self._legend = None
        self._fit = None
        self._map = None

    @property
    def is_open(self) -> bool:
        return self._map is not None

    def __enter__(self) -> "ComparisonMapSession":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def map(self) -> folium.Map:
        if self._map is None:
            raise RuntimeError("Map session is not open")
        return self._map

    @property
    def overlays(self) -> Dict[str, folium.GeoJson]:
        return dict(self._overlays)

    @property
    def legend(self) -> Optional[ComparisonLegend]:
        return self._legend

    @property
    def fit(self) -> Optional[FitBounds]:
        return self._fit

    # ---------------------------------------------------------
    # Drawing
    # ---------------------------------------------------------

    def show(self, old_geojson: Optional[Any], new_geojson: Optional[Any]) -> None:
        fmap = self.map
        self._clear()

        bounds = []
        for role, payload, color in (
            ("old", old_geojson, OLD_COLOR),
            ("new", new_geojson, NEW_COLOR),
        ):
            if payload is None:
                continue

            style = overlay_style(color)
            layer = folium.GeoJson(
                payload,
                name=f"{role.title()} Geometry",
                style_function=lambda feature, style=style: style,
            )
            layer.add_to(fmap)
            self._overlays[role] = layer
            bounds.append(geojson_bounds(payload))

        target = union_bounds(*bounds)
        if target:
            self._fit = FitBounds(pad_bounds(target, BOUNDS_PADDING))
            fmap.add_child(self._fit)
        elif self._overlays:
            logger.info("Overlays have no coordinates; keeping default view")

        self._legend = ComparisonLegend()
        fmap.add_child(self._legend)

    def _clear(self) -> None:
        tracked = list(self._overlays.values()) + [self._legend, self._fit]
        for element in tracked:
            if element is not None:
                self._remove(element)

        self._overlays = {}
        self._legend = None
        self._fit = None

    def _remove(self, element) -> None:
        self.map._children.pop(element.get_name(), None)
        if getattr(element, "_parent", None) is self.map:
            element._parent = None

    # ---------------------------------------------------------
    # Output
    # ---------------------------------------------------------

    def render(self, title: Optional[str] = None, subtitle: Optional[str] = None) -> str:
        """
        Standalone HTML document for the current map state.

        A fresh Figure is used each time so elements removed by show()
        do not linger from an earlier render.
        """
        fmap = self.map
        figure = Figure()

        if title:
            subtitle_html = ""
            if subtitle:
                subtitle_html = f'<p style="margin: 4px 0 0; font-size: 14px; color: #4b5563;">{html.escape(subtitle)}</p>'

            header = f"""
            <div style="padding: 16px 24px; border-bottom: 1px solid #e5e7eb; background: #fff;
                        font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Helvetica, Arial, sans-serif;">
                <h1 style="margin: 0; font-size: 24px; color: #111827;">{html.escape(title)}</h1>
                {subtitle_html}
            </div>
            """
            figure.html.add_child(Element(header), name="page_header")

        figure.add_child(fmap)
        return figure.render()

"""
Map geometry model.

Turns a GeoJSON feature collection into an ordered list of named
multipolygons with fragment filtering, a bounding box over every vertex,
and a continent-aware highlight lookup.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Mapping
from typing import Any, Dict, List, Optional, Set, Tuple

import geopandas as gpd
import numpy as np
from shapely.errors import ShapelyError
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from .errors import GeometryError
from .utils import timer

logger = logging.getLogger(__name__)

NAME_PROPERTY = "ADMIN"

# Parts smaller than this share of the largest part are dropped
FRAGMENT_RATIO = 0.20

Bounds = Tuple[float, float]
Entry = Tuple[str, MultiPolygon]


def ring_area(coords) -> float:
    """
    Planar area of a ring via the shoelace formula.

    The sequence is treated as closed (last vertex joins the first), so an
    explicit closing vertex contributes nothing and any rotation or reversal
    gives the same result.
    """
    points = np.asarray(coords, dtype=float)
    if len(points) < 3:
        return 0.0
    x, y = points[:, 0], points[:, 1]
    cross = np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y)
    return float(abs(cross) * 0.5)


def to_multipolygon(geometry: Optional[BaseGeometry]) -> Optional[MultiPolygon]:
    """Polygon or MultiPolygon as a MultiPolygon; anything else is None."""
    if geometry is None or geometry.is_empty:
        return None
    if isinstance(geometry, MultiPolygon):
        return geometry
    if isinstance(geometry, Polygon):
        return MultiPolygon([geometry])
    return None


def filter_fragments(multipolygon: MultiPolygon, ratio: float = FRAGMENT_RATIO) -> MultiPolygon:
    """
    Drop polygon parts much smaller than the largest one.

    Parts whose exterior area is below ``ratio * max_area`` are removed. If
    that would remove every part the input is returned unchanged.
    """
    parts = list(multipolygon.geoms)
    if len(parts) <= 1:
        return multipolygon

    areas = [ring_area(part.exterior.coords) for part in parts]
    threshold = max(areas) * ratio
    kept = [part for part, area in zip(parts, areas) if area >= threshold]

    if not kept:
        return multipolygon
    if len(kept) < len(parts):
        logger.debug(f"Fragment filter kept {len(kept)} of {len(parts)} parts")
    return MultiPolygon(kept)


def compute_bounds(entries: List[Entry]) -> Tuple[Bounds, Bounds]:
    """
    Componentwise (min, max) over every exterior and interior vertex.

    Returns (+inf, -inf) on both axes when there is nothing to draw.
    """
    arrays = []
    for _, multipolygon in entries:
        for part in multipolygon.geoms:
            arrays.append(np.asarray(part.exterior.coords)[:, :2])
            arrays.extend(np.asarray(ring.coords)[:, :2] for ring in part.interiors)

    arrays = [a for a in arrays if len(a)]
    if not arrays:
        return (math.inf, -math.inf), (math.inf, -math.inf)

    points = np.vstack(arrays)
    mins = points.min(axis=0)
    maxs = points.max(axis=0)
    return (float(mins[0]), float(maxs[0])), (float(mins[1]), float(maxs[1]))


def _feature_name(value: Any) -> str:
    return value if isinstance(value, str) else ""


class GeometryModel:
    """
    Renderable map: named multipolygons, bounds and continent membership.

    Membership (continent name -> country names) is only used to resolve
    highlight selectors; it does not affect the geometry itself.
    """

    def __init__(self, entries: List[Entry], membership: Optional[Mapping[str, Set[str]]] = None):
        self._entries: List[Entry] = list(entries)
        self._membership: Dict[str, Set[str]] = {k: set(v) for k, v in (membership or {}).items()}
        self.x_bounds, self.y_bounds = compute_bounds(self._entries)

    @classmethod
    @timer
    def from_geojson(
        cls,
        document: Mapping[str, Any],
        membership: Optional[Mapping[str, Set[str]]] = None
    ) -> "GeometryModel":
        """
        Build the model from a GeoJSON FeatureCollection.

        Features without a polygonal geometry are skipped; a missing name
        property gives an empty name.

        Raises:
            GeometryError: If a feature's geometry object is malformed
        """
        features = [
            {
                "type": "Feature",
                "geometry": feature.get("geometry"),
                "properties": feature.get("properties") or {},
            }
            for feature in document.get("features", [])
            if isinstance(feature, Mapping)
        ]

        entries: List[Entry] = []
        if features:
            try:
                frame = gpd.GeoDataFrame.from_features(features)
            except (ShapelyError, KeyError, TypeError, ValueError) as e:
                raise GeometryError(f"Cannot convert feature geometry: {e}") from e

            if NAME_PROPERTY in frame.columns:
                names = [_feature_name(value) for value in frame[NAME_PROPERTY]]
            else:
                names = [""] * len(frame)

            skipped = 0
            for name, geometry in zip(names, frame.geometry):
                multipolygon = to_multipolygon(geometry)
                if multipolygon is None:
                    skipped += 1
                    continue
                entries.append((name, filter_fragments(multipolygon)))

            if skipped:
                logger.debug(f"Skipped {skipped} non-polygonal features")

        return cls(entries, membership)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def feature_count(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        """True when the bounds are the empty sentinel."""
        return self.x_bounds[0] > self.x_bounds[1] or self.y_bounds[0] > self.y_bounds[1]

    def is_highlighted(self, name: str, selector: Optional[str]) -> bool:
        if selector is None:
            return False
        countries = self._membership.get(selector)
        if countries is not None:
            return name in countries
        return name == selector

    def highlighted(self, selector: Optional[str]) -> List[Entry]:
        """Features a selector lights up: a whole continent or one country."""
        return [entry for entry in self._entries if self.is_highlighted(entry[0], selector)]

"""Boundary polygon conversion.

Turns the ``PLN`` records attached to a guidance group or pattern into a
single shapely ``MultiPolygon`` that the clipper can test lines against.
Overlapping records are dissolved into one area, so a line crossing the
overlap is never cut at an edge that lies inside the field.
Ring type 1 is the exterior, ring type 2 an interior (hole).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shapely.geometry import MultiPolygon, Polygon, mapping
from shapely.ops import unary_union
from shapely.validation import make_valid

from isoxml_guidance.core.constants import (
    LINE_STRING_TYPE_EXTERIOR,
    LINE_STRING_TYPE_INTERIOR,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from shapely.geometry.base import BaseGeometry

    from isoxml_guidance.models.guidance import Coordinate, PolygonRecord

logger = logging.getLogger("isoxml_guidance.activities.boundary_polygon")

# Minimum distinct vertices for a usable ring
MIN_RING_VERTICES = 3


def to_multi_polygon(polygons: Iterable[PolygonRecord]) -> MultiPolygon | None:
    """Convert polygon records into one multi-polygon.

    Args:
        polygons: Parsed ``PLN`` records, each holding its rings.

    Returns:
        A valid ``MultiPolygon`` covering the union of every usable
        record, or ``None`` if no record yields a usable polygon
        (including empty input).
    """
    parts: list[Polygon] = []
    for record in polygons:
        exterior: list[tuple[float, float]] | None = None
        holes: list[list[tuple[float, float]]] = []
        for ring in record.rings:
            coords = _ring_coords(ring.coordinates)
            if coords is None:
                logger.warning(
                    "Skipping degenerate ring %s in polygon %s (%d point(s))",
                    ring.line_id or "<unnamed>",
                    record.polygon_id or "<unnamed>",
                    len(ring.coordinates),
                )
                continue
            if ring.line_type == LINE_STRING_TYPE_EXTERIOR and exterior is None:
                exterior = coords
            elif ring.line_type == LINE_STRING_TYPE_INTERIOR:
                holes.append(coords)

        if exterior is None:
            logger.warning(
                "Polygon %s has no usable exterior ring, ignored",
                record.polygon_id or "<unnamed>",
            )
            continue

        parts.extend(_polygon_parts(Polygon(exterior, holes), record.polygon_id))

    if not parts:
        return None
    return MultiPolygon(_polygonal_members(unary_union(parts)))


def multi_polygon_to_geojson(boundary: MultiPolygon | None) -> dict[str, object] | None:
    """Serialise a boundary into a GeoJSON geometry dict (``None`` passes through)."""
    if boundary is None:
        return None
    return dict(mapping(boundary))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _ring_coords(points: Sequence[Coordinate]) -> list[tuple[float, float]] | None:
    """Return a closed 2-D ring, or ``None`` if it has too few distinct points."""
    coords = [(float(p[0]), float(p[1])) for p in points]
    if len(set(coords)) < MIN_RING_VERTICES:
        return None
    if coords[0] != coords[-1]:
        coords.append(coords[0])
    return coords


def _polygon_parts(poly: Polygon, polygon_id: str) -> list[Polygon]:
    """Return the polygonal parts of ``poly``, repairing it if invalid."""
    if poly.is_valid:
        return [poly]

    logger.warning("Invalid boundary polygon %s, attempting make_valid()", polygon_id)
    return _polygonal_members(make_valid(poly))


def _polygonal_members(geom: BaseGeometry) -> list[Polygon]:
    """Return the polygons of ``geom``, dropping lines and points."""
    if isinstance(geom, Polygon):
        return [geom] if not geom.is_empty else []
    if isinstance(geom, MultiPolygon):
        return list(geom.geoms)
    # GeometryCollection: keep polygonal members only
    parts: list[Polygon] = []
    for member in getattr(geom, "geoms", ()):
        parts.extend(_polygonal_members(member))
    return parts

"""Boundary clipping.

Restricts a swath line to the part of the field it may be driven on: the
line is split wherever it crosses the boundary outline and only the
pieces lying inside (or on) the boundary are kept.

Containment is inclusive and applies to the whole piece, not only its
vertices: a piece is kept when the boundary grown by ``tolerance_deg``
covers it, so pieces whose end points are the computed crossing points
are never rejected for floating-point noise, while a piece bridging a
concave notch or the gap between two fields is dropped.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shapely.geometry import LineString
from shapely.ops import linemerge, split

from isoxml_guidance.core.constants import DEFAULT_CONTAINMENT_TOLERANCE_DEG

if TYPE_CHECKING:
    from shapely.geometry import MultiPolygon
    from shapely.geometry.base import BaseGeometry

logger = logging.getLogger("isoxml_guidance.activities.clip_boundary")


def clip_to_boundary(
    line: LineString,
    boundary: MultiPolygon | None,
    *,
    tolerance_deg: float = DEFAULT_CONTAINMENT_TOLERANCE_DEG,
) -> list[LineString]:
    """Split ``line`` at ``boundary`` and keep the pieces inside it.

    Args:
        line: A WGS 84 line.
        boundary: The clipping area, or ``None`` for no clipping.
        tolerance_deg: Distance in degrees within which a point counts
            as lying on the boundary.

    Returns:
        ``[line]`` when there is no boundary or the line lies fully
        inside it; ``[]`` when the line lies fully outside; otherwise the
        interior pieces in line order.  Pieces no longer than
        ``tolerance_deg`` are dropped.
    """
    if boundary is None:
        return [line]

    try:
        pieces = [geom for geom in split(line, boundary).geoms if isinstance(geom, LineString)]
    except ValueError:
        # GEOS refuses to split a line that runs along the boundary outline
        logger.debug("Line overlaps boundary outline, clipping by intersection")
        pieces = _intersection_pieces(line, boundary)

    region = boundary.buffer(tolerance_deg) if tolerance_deg > 0 else boundary

    # slivers no longer than the tolerance come from crossings at a vertex
    return [piece for piece in pieces if piece.length > tolerance_deg and region.covers(piece)]


def _intersection_pieces(line: LineString, boundary: MultiPolygon) -> list[LineString]:
    """Return the linear parts of ``line`` inside ``boundary`` as merged pieces."""
    clipped = line.intersection(boundary)
    linear = [geom for geom in _flatten(clipped) if isinstance(geom, LineString)]
    if not linear:
        return []
    return [geom for geom in _flatten(linemerge(linear)) if isinstance(geom, LineString)]


def _flatten(geom: BaseGeometry) -> list[BaseGeometry]:
    """Flatten multi-part geometries and collections into their members."""
    if hasattr(geom, "geoms"):
        return [part for member in geom.geoms for part in _flatten(member)]
    return [geom]

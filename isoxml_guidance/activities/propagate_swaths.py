"""Swath propagation.

Replicates a guidance line into parallel passes spaced one implement
width apart.  Offsets are true parallel curves (shapely
``offset_curve``) computed in the local UTM zone, so multi-segment lines
stay gap-free and the spacing is in real metres rather than degrees.

Sign convention: a negative offset lies left of the direction of travel,
a positive offset right of it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shapely.geometry import LineString
from shapely.ops import linemerge

from isoxml_guidance.core.constants import MILLIMETRES_PER_METRE
from isoxml_guidance.core.exceptions import MissingGeometryError
from isoxml_guidance.core.geometry import local_transformers, reproject
from isoxml_guidance.models.guidance import PropagationDirection

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pyproj import Transformer

    from isoxml_guidance.models.guidance import Coordinate

logger = logging.getLogger("isoxml_guidance.activities.propagate_swaths")

_PROPAGATE_LEFT = frozenset({PropagationDirection.BOTH, PropagationDirection.LEFT})
_PROPAGATE_RIGHT = frozenset({PropagationDirection.BOTH, PropagationDirection.RIGHT})


def propagate_swaths(
    coordinates: Sequence[Coordinate],
    direction: PropagationDirection,
    swaths_left: int,
    swaths_right: int,
    width_mm: float,
) -> list[LineString]:
    """Generate the base line plus its parallel swaths.

    Args:
        coordinates: Base line vertices as ``(lon, lat[, elevation])``.
        direction: Side(s) on which swaths are generated.
        swaths_left: Number of swaths left of the base line.
        swaths_right: Number of swaths right of the base line.
        width_mm: Spacing between swaths in millimetres.

    Returns:
        ``[base, left_1 .. left_n, right_1 .. right_m]`` as WGS 84
        ``LineString`` objects.  With a zero width every swath would
        coincide with the base, so only the base line is returned.

    Raises:
        MissingGeometryError: If the base line has fewer than two points.
    """
    if len(coordinates) < 2:
        msg = f"Cannot propagate a line with {len(coordinates)} point(s), need at least 2"
        raise MissingGeometryError(msg)

    base = LineString([(c[0], c[1]) for c in coordinates])
    lines = [base]

    if not width_mm:
        logger.debug("Swath width is zero, emitting base line only")
        return lines

    offsets_mm: list[float] = []
    if direction in _PROPAGATE_LEFT:
        offsets_mm.extend(-i * width_mm for i in range(1, swaths_left + 1))
    if direction in _PROPAGATE_RIGHT:
        offsets_mm.extend(i * width_mm for i in range(1, swaths_right + 1))

    if not offsets_mm:
        return lines

    start = base.coords[0]
    to_utm, to_wgs = local_transformers(start[0], start[1])
    projected = reproject(base, to_utm)

    for offset_mm in offsets_mm:
        lines.append(_offset_line(projected, offset_mm / MILLIMETRES_PER_METRE, to_wgs))

    logger.debug(
        "Propagated %d swath(s) | direction=%s | width=%s mm",
        len(offsets_mm),
        direction.name,
        width_mm,
    )
    return lines


def _offset_line(projected: LineString, offset_m: float, to_wgs: Transformer) -> LineString:
    """Offset a projected line by ``offset_m`` (negative = left) and return it in WGS 84."""
    # shapely offsets positive distances to the left; mitred corners never
    # come closer than offset_m to the base line
    offset = projected.offset_curve(-offset_m, join_style="mitre")
    if offset.geom_type == "MultiLineString":
        offset = linemerge(offset)
    if offset.geom_type == "MultiLineString":
        logger.warning(
            "Offset of %.3f m split into %d parts, keeping the longest",
            offset_m,
            len(offset.geoms),
        )
        offset = max(offset.geoms, key=lambda part: part.length)
    return _clean_coords(reproject(offset, to_wgs))


def _clean_coords(line: LineString) -> LineString:
    """Drop consecutive duplicate vertices."""
    coords: list[tuple[float, ...]] = []
    for c in line.coords:
        if not coords or coords[-1] != c:
            coords.append(c)
    return LineString(coords)

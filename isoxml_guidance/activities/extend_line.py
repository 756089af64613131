"""Guidance line extension.

A guidance segment is normally just two points a few metres apart.
Pushing its ends far past the field (5 km by default) guarantees that the
boundary clip afterwards bounds the usable part of every swath,
regardless of field size.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from isoxml_guidance.core.exceptions import MissingGeometryError
from isoxml_guidance.core.geometry import bearing, destination
from isoxml_guidance.models.guidance import GuidancePatternExtension

if TYPE_CHECKING:
    from collections.abc import Sequence

    from isoxml_guidance.models.guidance import Coordinate

_EXTEND_FIRST = frozenset({GuidancePatternExtension.BOTH, GuidancePatternExtension.FIRST_ONLY})
_EXTEND_LAST = frozenset({GuidancePatternExtension.BOTH, GuidancePatternExtension.LAST_ONLY})


def extend_line(
    coordinates: Sequence[Coordinate],
    extension: GuidancePatternExtension,
    length_m: float,
) -> tuple[Coordinate, ...]:
    """Extend a line beyond its first and/or last point.

    The new leading point lies ``length_m`` before the first point on the
    bearing of the first segment; the new trailing point lies ``length_m``
    past the last point on the bearing of the last segment.

    Args:
        coordinates: Line vertices as ``(lon, lat[, elevation])``.
        extension: Which end(s) to extend.
        length_m: Extension distance in metres.

    Returns:
        A new coordinate tuple; the input is never modified.

    Raises:
        MissingGeometryError: If the line has fewer than two points.
    """
    if len(coordinates) < 2:
        msg = f"Cannot extend a line with {len(coordinates)} point(s), need at least 2"
        raise MissingGeometryError(msg)

    extended: list[Coordinate] = [tuple(c) for c in coordinates]

    if extension in _EXTEND_FIRST:
        first, after_first = extended[0], extended[1]
        extended.insert(0, destination(first, -length_m, bearing(first, after_first)))

    if extension in _EXTEND_LAST:
        before_last, last = extended[-2], extended[-1]
        extended.append(destination(last, length_m, bearing(before_last, last)))

    return tuple(extended)

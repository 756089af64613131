"""Guidance pattern rendering activity.

Turns one parsed ``GPN`` (GuidancePattern) into GeoJSON swath lines:

1. Derive the base segment from the pattern type
   (AB: first two points; A+: point A plus a point 1 m along the heading)
2. Extend the segment (default: both ends, 5 km)
3. Propagate parallel swaths at the implement width
4. Clip every swath to the pattern's own boundary, then to the boundary
   supplied by the caller (usually the guidance group's)
5. Attach shared display properties and return a FeatureCollection

Curve, Pivot and Spiral patterns are rejected explicitly.  Every failure
raises a ``GuidanceRenderError`` subclass; a failing pattern contributes
no features at all, never a partial set.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from isoxml_guidance.activities.boundary_polygon import (
    multi_polygon_to_geojson,
    to_multi_polygon,
)
from isoxml_guidance.activities.clip_boundary import clip_to_boundary
from isoxml_guidance.activities.extend_line import extend_line
from isoxml_guidance.activities.propagate_swaths import propagate_swaths
from isoxml_guidance.core.config import GuidanceConfig
from isoxml_guidance.core.exceptions import (
    GuidanceRenderError,
    MissingGeometryError,
    MissingHeadingError,
    UnsupportedPatternTypeError,
)
from isoxml_guidance.core.geometry import destination
from isoxml_guidance.models.contracts import feature_collection
from isoxml_guidance.models.guidance import (
    GuidancePatternExtension,
    GuidancePatternType,
    PropagationDirection,
)

if TYPE_CHECKING:
    from shapely.geometry import LineString, MultiPolygon

    from isoxml_guidance.models.contracts import FeatureCollection, SwathFeature, SwathProperties
    from isoxml_guidance.models.guidance import Coordinate, GuidanceShift, PatternAttributes

logger = logging.getLogger("isoxml_guidance.activities.render_pattern")

UNSUPPORTED_PATTERN_TYPES = frozenset(
    {
        GuidancePatternType.CURVE,
        GuidancePatternType.PIVOT,
        GuidancePatternType.SPIRAL,
    }
)


def render_pattern(
    pattern: PatternAttributes,
    boundary: MultiPolygon | None = None,
    guidance_shift: GuidanceShift | None = None,
    *,
    config: GuidanceConfig | None = None,
) -> FeatureCollection:
    """Render a guidance pattern into clipped swath line features.

    Args:
        pattern: The parsed guidance pattern.
        boundary: External clipping boundary, applied after the
            pattern's own boundary polygons.
        guidance_shift: Shift metadata copied into every feature's
            properties; not applied geometrically.
        config: Rendering configuration (defaults when ``None``).

    Returns:
        A GeoJSON FeatureCollection of ``LineString`` features.

    Raises:
        MissingGeometryError: If the reference line is absent, empty or
            too short for the pattern type.
        MissingHeadingError: If an A+ pattern has no heading.
        UnsupportedPatternTypeError: For Curve, Pivot and Spiral patterns.
    """
    config = config or GuidanceConfig()
    reference_line = pattern.reference_line

    base_segment = derive_base_segment(pattern, point_b_distance_m=config.point_b_distance_m)

    extension = pattern.extension or GuidancePatternExtension.BOTH
    extended = extend_line(base_segment, extension, config.extension_m)

    swaths = propagate_swaths(
        extended,
        pattern.propagation_direction or PropagationDirection.BOTH,
        _swath_count(pattern.swaths_left, config.default_swath_count),
        _swath_count(pattern.swaths_right, config.default_swath_count),
        (reference_line.width_mm if reference_line else None) or 0,
    )

    local_boundary = to_multi_polygon(pattern.boundary_polygons)
    clipped: list[LineString] = []
    for swath in swaths:
        for piece in clip_to_boundary(
            swath, local_boundary, tolerance_deg=config.containment_tolerance_deg
        ):
            clipped.extend(
                clip_to_boundary(piece, boundary, tolerance_deg=config.containment_tolerance_deg)
            )

    properties = _shared_properties(pattern, boundary, guidance_shift)
    features = [_to_feature(line, properties) for line in clipped if len(line.coords) > 0]

    logger.info(
        "Pattern rendered | pattern=%s | type=%s | swaths=%d | features=%d",
        pattern.pattern_id,
        pattern.pattern_type.name,
        len(swaths),
        len(features),
    )
    return feature_collection(features)


def derive_base_segment(
    pattern: PatternAttributes, *, point_b_distance_m: float
) -> tuple[Coordinate, Coordinate]:
    """Derive the two-point base segment for a pattern.

    Elevation is dropped; the rendering pipeline works in 2-D.

    Raises:
        MissingGeometryError: If the reference line is absent or too short.
        MissingHeadingError: If an A+ pattern has no heading.
        UnsupportedPatternTypeError: For Curve, Pivot and Spiral patterns.
    """
    pattern_id = pattern.pattern_id
    reference_line = pattern.reference_line
    if reference_line is None:
        msg = f"Guidance pattern {pattern_id} does not contain a line string"
        raise MissingGeometryError(msg, correlation_id=pattern_id)

    points = [(float(c[0]), float(c[1])) for c in reference_line.coordinates]
    pattern_type = pattern.pattern_type

    if pattern_type in UNSUPPORTED_PATTERN_TYPES:
        msg = f"Rendering guidance pattern type {pattern_type.name} is not supported"
        raise UnsupportedPatternTypeError(msg, correlation_id=pattern_id)

    if pattern_type == GuidancePatternType.A_PLUS:
        if pattern.heading is None:
            msg = f"Guidance pattern {pattern_id} of type A+ has no heading"
            raise MissingHeadingError(msg, correlation_id=pattern_id)
        if not points:
            msg = f"Guidance pattern {pattern_id} line string does not contain points"
            raise MissingGeometryError(msg, correlation_id=pattern_id)
        point_a = points[0]
        return (point_a, destination(point_a, point_b_distance_m, pattern.heading))

    if pattern_type == GuidancePatternType.AB:
        if len(points) < 2:
            msg = (
                f"Guidance pattern {pattern_id} of type AB requires two points, "
                f"got {len(points)}"
            )
            raise MissingGeometryError(msg, correlation_id=pattern_id)
        return (points[0], points[1])

    msg = f"Unknown guidance pattern type {pattern_type!r}"
    raise GuidanceRenderError(msg, correlation_id=pattern_id)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _swath_count(value: int | None, default: int) -> int:
    return default if value is None else value


def _shared_properties(
    pattern: PatternAttributes,
    boundary: MultiPolygon | None,
    guidance_shift: GuidanceShift | None,
) -> SwathProperties:
    reference_line = pattern.reference_line
    properties: SwathProperties = {
        "color": reference_line.colour if reference_line else None,
        "pattern_id": pattern.pattern_id,
    }
    if guidance_shift is not None:
        properties["guidance_shift"] = guidance_shift.to_dict()
    boundary_geojson = multi_polygon_to_geojson(boundary)
    if boundary_geojson is not None:
        properties["boundary_polygon"] = boundary_geojson
    return properties


def _to_feature(line: LineString, properties: SwathProperties) -> SwathFeature:
    return {
        "type": "Feature",
        "geometry": {
            "type": "LineString",
            "coordinates": [list(c) for c in line.coords],
        },
        "properties": dict(properties),  # type: ignore[typeddict-item]
    }

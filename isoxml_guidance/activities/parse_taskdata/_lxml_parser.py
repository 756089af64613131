"""lxml-based ISOXML task-data parser.

Walks the element tree of a validated ``ISO11783_TaskData`` root and
builds the guidance records: partfields, guidance groups, guidance
patterns with their line strings and boundary polygons, and guidance
shifts.

One bad pattern or shift does not stop the rest of the document from
being read: it is skipped and a warning is recorded.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from isoxml_guidance.activities.parse_taskdata._constants import (
    EXPECTED_PATTERN_LINE_STRINGS,
    TAG_GUIDANCE_GROUP,
    TAG_GUIDANCE_PATTERN,
    TAG_GUIDANCE_SHIFT,
    TAG_LINE_STRING,
    TAG_PARTFIELD,
    TAG_POINT,
    TAG_POLYGON,
)
from isoxml_guidance.activities.parse_taskdata._normalization import (
    optional_enum,
    optional_float,
    optional_int,
    point_to_coordinate,
    text_attr,
)
from isoxml_guidance.activities.parse_taskdata._validation import (
    TaskDataValidationError,
    validate_coordinates,
)
from isoxml_guidance.models.guidance import (
    GuidanceGroupAttributes,
    GuidancePatternExtension,
    GuidancePatternType,
    GuidanceShift,
    LineStringRecord,
    PartfieldRecord,
    PatternAttributes,
    PolygonRecord,
    PropagationDirection,
    TaskData,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("isoxml_guidance.activities.parse_taskdata")


def parse_with_lxml(root: _Element, source_filename: str) -> TaskData:
    """Build ``TaskData`` from a validated task-data root element."""
    warnings: list[str] = []

    partfields: list[PartfieldRecord] = []
    for pfd in root.findall(TAG_PARTFIELD):
        groups = [
            _parse_group(ggp, warnings, source_filename)
            for ggp in pfd.findall(TAG_GUIDANCE_GROUP)
        ]
        if not groups:
            continue
        partfields.append(
            PartfieldRecord(
                partfield_id=text_attr(pfd, "A"),
                designator=text_attr(pfd, "C"),
                guidance_groups=tuple(groups),
            )
        )

    shifts: list[GuidanceShift] = []
    for gst in root.iter(TAG_GUIDANCE_SHIFT):
        try:
            shifts.append(_parse_shift(gst))
        except TaskDataValidationError as exc:
            _warn(warnings, "Skipping invalid guidance shift in %s: %s", source_filename, exc)

    return TaskData(
        partfields=tuple(partfields),
        guidance_shifts=tuple(shifts),
        warnings=tuple(warnings),
        source_file=source_filename,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _warn(warnings: list[str], fmt: str, *args: object) -> None:
    """Log an advisory warning and record it for the caller."""
    logger.warning(fmt, *args)
    warnings.append(fmt % args)


def _parse_group(
    ggp: _Element, warnings: list[str], source_filename: str
) -> GuidanceGroupAttributes:
    group_id = text_attr(ggp, "A")

    patterns: list[PatternAttributes] = []
    for gpn in ggp.findall(TAG_GUIDANCE_PATTERN):
        pattern_id = text_attr(gpn, "A") or f"{group_id}/<unnamed pattern>"
        try:
            patterns.append(_parse_pattern(gpn, pattern_id, warnings))
        except TaskDataValidationError as exc:
            _warn(
                warnings,
                "Skipping invalid guidance pattern '%s' in %s: %s",
                pattern_id,
                source_filename,
                exc,
            )

    return GuidanceGroupAttributes(
        group_id=group_id,
        designator=text_attr(ggp, "B"),
        patterns=tuple(patterns),
        boundary_polygons=_parse_polygons(ggp, group_id, warnings),
    )


def _parse_pattern(gpn: _Element, pattern_id: str, warnings: list[str]) -> PatternAttributes:
    pattern_type = optional_enum(gpn, "C", GuidancePatternType, pattern_id)
    if pattern_type is None:
        msg = f"Guidance pattern {pattern_id} has no pattern type (C)"
        raise TaskDataValidationError(msg, correlation_id=pattern_id)

    line_strings = tuple(
        _parse_line_string(lsg, pattern_id) for lsg in gpn.findall(TAG_LINE_STRING)
    )
    if len(line_strings) != EXPECTED_PATTERN_LINE_STRINGS:
        _warn(
            warnings,
            "[%s] GuidancePattern requires one and only one LineString element, found %d",
            pattern_id,
            len(line_strings),
        )

    return PatternAttributes(
        pattern_id=pattern_id,
        pattern_type=pattern_type,
        designator=text_attr(gpn, "B"),
        heading=optional_float(gpn, "G", pattern_id),
        extension=optional_enum(gpn, "F", GuidancePatternExtension, pattern_id),
        propagation_direction=optional_enum(gpn, "E", PropagationDirection, pattern_id),
        swaths_left=_swath_count(gpn, "N", pattern_id),
        swaths_right=_swath_count(gpn, "O", pattern_id),
        line_strings=line_strings,
        boundary_polygons=_parse_polygons(gpn, pattern_id, warnings),
    )


def _swath_count(gpn: _Element, name: str, pattern_id: str) -> int | None:
    count = optional_int(gpn, name, pattern_id)
    if count is not None and count < 0:
        msg = f"Swath count {name}={count} in {pattern_id} must not be negative"
        raise TaskDataValidationError(msg, correlation_id=pattern_id)
    return count


def _parse_line_string(lsg: _Element, owner: str) -> LineStringRecord:
    line_type = optional_int(lsg, "A", owner)
    if line_type is None:
        msg = f"Line string in {owner} has no line string type (A)"
        raise TaskDataValidationError(msg, correlation_id=owner)

    coordinates = tuple(point_to_coordinate(pnt, owner) for pnt in lsg.findall(TAG_POINT))
    validate_coordinates(coordinates, owner)

    return LineStringRecord(
        line_type=line_type,
        designator=text_attr(lsg, "B"),
        width_mm=optional_int(lsg, "C", owner),
        length=optional_int(lsg, "D", owner),
        colour=optional_int(lsg, "E", owner),
        line_id=text_attr(lsg, "F"),
        coordinates=coordinates,
    )


def _parse_polygons(
    parent: _Element, owner: str, warnings: list[str]
) -> tuple[PolygonRecord, ...]:
    polygons: list[PolygonRecord] = []
    for pln in parent.findall(TAG_POLYGON):
        try:
            polygons.append(_parse_polygon(pln, owner))
        except TaskDataValidationError as exc:
            _warn(warnings, "Skipping invalid boundary polygon in %s: %s", owner, exc)
    return tuple(polygons)


def _parse_polygon(pln: _Element, owner: str) -> PolygonRecord:
    polygon_type = optional_int(pln, "A", owner)
    if polygon_type is None:
        msg = f"Polygon in {owner} has no polygon type (A)"
        raise TaskDataValidationError(msg, correlation_id=owner)

    return PolygonRecord(
        polygon_type=polygon_type,
        designator=text_attr(pln, "B"),
        area=optional_int(pln, "C", owner),
        colour=optional_int(pln, "D", owner),
        polygon_id=text_attr(pln, "E"),
        rings=tuple(_parse_line_string(lsg, owner) for lsg in pln.findall(TAG_LINE_STRING)),
    )


def _parse_shift(gst: _Element) -> GuidanceShift:
    owner = text_attr(gst, "A") or TAG_GUIDANCE_SHIFT
    return GuidanceShift(
        group_id_ref=text_attr(gst, "A"),
        pattern_id_ref=text_attr(gst, "B"),
        east_shift_mm=optional_int(gst, "C", owner),
        north_shift_mm=optional_int(gst, "D", owner),
        propagation_offset_mm=optional_int(gst, "E", owner),
    )

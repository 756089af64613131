"""Validation helpers for ISOXML task-data parsing.

Responsibilities:
- XML well-formedness and ``ISO11783_TaskData`` root validation
- Coordinate bounds checking (WGS 84)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from isoxml_guidance.activities.parse_taskdata._constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
    TASKDATA_ROOT_TAG,
)
from isoxml_guidance.core.exceptions import PipelineError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lxml.etree import _Element


# ---------------------------------------------------------------------------
# Exceptions (public API, re-exported from __init__)
# ---------------------------------------------------------------------------


class TaskDataParseError(PipelineError):
    """Raised when a task-data document cannot be parsed."""

    default_stage = "parse_taskdata"
    default_code = "TASKDATA_PARSE_FAILED"


class TaskDataValidationError(TaskDataParseError, ValidationError):
    """Raised when a document is well-formed but contains invalid data."""

    default_code = "TASKDATA_VALIDATION_FAILED"


class InvalidCoordinateError(TaskDataValidationError):
    """Raised when coordinates are outside valid WGS 84 bounds."""

    default_code = "TASKDATA_COORDINATE_INVALID"


# ---------------------------------------------------------------------------
# XML / root validation
# ---------------------------------------------------------------------------


def validate_xml(content: bytes) -> _Element:
    """Parse ``content`` and check it is an ISOXML task-data document.

    Returns:
        The root element.

    Raises:
        TaskDataParseError: If the content is empty, not valid XML, or
            its root element is not ``ISO11783_TaskData``.
    """
    from lxml import etree  # type: ignore[attr-defined]

    if not content.strip():
        msg = "Task data document is empty"
        raise TaskDataParseError(msg)

    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)
    try:
        root = etree.fromstring(content, parser=parser)
    except etree.XMLSyntaxError as exc:
        msg = f"Not valid XML: {exc}"
        raise TaskDataParseError(msg) from exc

    if root.tag != TASKDATA_ROOT_TAG:
        msg = f"Not an ISOXML task data document — root element is <{root.tag}>"
        raise TaskDataParseError(msg)

    return root


# ---------------------------------------------------------------------------
# Coordinate validation
# ---------------------------------------------------------------------------


def validate_coordinates(coords: Sequence[tuple[float, ...]], owner: str) -> None:
    """Validate that all coordinates are within WGS 84 bounds.

    Raises:
        InvalidCoordinateError: If any coordinate is out of bounds.
    """
    for coord in coords:
        lon, lat = coord[0], coord[1]
        if not (MIN_LONGITUDE <= lon <= MAX_LONGITUDE):
            msg = (
                f"Longitude {lon} out of WGS 84 range [{MIN_LONGITUDE}, {MAX_LONGITUDE}] "
                f"in {owner}"
            )
            raise InvalidCoordinateError(msg, correlation_id=owner)
        if not (MIN_LATITUDE <= lat <= MAX_LATITUDE):
            msg = (
                f"Latitude {lat} out of WGS 84 range [{MIN_LATITUDE}, {MAX_LATITUDE}] "
                f"in {owner}"
            )
            raise InvalidCoordinateError(msg, correlation_id=owner)

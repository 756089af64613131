"""Attribute normalization helpers for ISOXML parsing.

Responsibilities:
- Convert optional numeric XML attributes to ``int`` / ``float``
- Map numeric code attributes onto their ``IntEnum``
- Convert ``PNT`` elements to ``(lon, lat[, elevation])`` coordinates
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, TypeVar

from isoxml_guidance.activities.parse_taskdata._validation import TaskDataValidationError
from isoxml_guidance.core.constants import MILLIMETRES_PER_METRE

if TYPE_CHECKING:
    from enum import IntEnum

    from lxml.etree import _Element

    from isoxml_guidance.models.guidance import Coordinate

EnumT = TypeVar("EnumT", bound="IntEnum")


# ---------------------------------------------------------------------------
# Scalar attributes
# ---------------------------------------------------------------------------


def text_attr(elem: _Element, name: str) -> str:
    """Return a stripped string attribute, ``""`` when absent."""
    return (elem.get(name) or "").strip()


def optional_int(elem: _Element, name: str, owner: str) -> int | None:
    """Return an integer attribute, or ``None`` when absent.

    Raises:
        TaskDataValidationError: If the attribute is not an integer.
    """
    raw = elem.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        msg = f"Attribute {name}={raw!r} of <{elem.tag}> in {owner} is not an integer"
        raise TaskDataValidationError(msg, correlation_id=owner) from exc


def optional_float(elem: _Element, name: str, owner: str) -> float | None:
    """Return a decimal attribute, or ``None`` when absent.

    Raises:
        TaskDataValidationError: If the attribute is not a finite number.
    """
    raw = elem.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        msg = f"Attribute {name}={raw!r} of <{elem.tag}> in {owner} is not a number"
        raise TaskDataValidationError(msg, correlation_id=owner) from exc
    if not math.isfinite(value):
        msg = f"Attribute {name}={raw!r} of <{elem.tag}> in {owner} is not a finite number"
        raise TaskDataValidationError(msg, correlation_id=owner)
    return value


def optional_enum(elem: _Element, name: str, enum_cls: type[EnumT], owner: str) -> EnumT | None:
    """Return a code attribute as a member of ``enum_cls``, or ``None`` when absent.

    Raises:
        TaskDataValidationError: If the code is not a member of ``enum_cls``.
    """
    value = optional_int(elem, name, owner)
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError as exc:
        msg = (
            f"Attribute {name}={value} of <{elem.tag}> in {owner} "
            f"is not a valid {enum_cls.__name__}"
        )
        raise TaskDataValidationError(msg, correlation_id=owner) from exc


# ---------------------------------------------------------------------------
# Points
# ---------------------------------------------------------------------------


def point_to_coordinate(point: _Element, owner: str) -> Coordinate:
    """Convert a ``PNT`` element to ``(lon, lat)`` or ``(lon, lat, elevation_m)``.

    ``PNT`` stores north (latitude) in ``C``, east (longitude) in ``D`` and
    the optional height in millimetres in ``E``.

    Raises:
        TaskDataValidationError: If latitude or longitude is missing or
            malformed.
    """
    lat = optional_float(point, "C", owner)
    lon = optional_float(point, "D", owner)
    if lat is None or lon is None:
        msg = f"<{point.tag}> in {owner} is missing its north (C) or east (D) attribute"
        raise TaskDataValidationError(msg, correlation_id=owner)

    up_mm = optional_int(point, "E", owner)
    if up_mm is None:
        return (lon, lat)
    return (lon, lat, up_mm / MILLIMETRES_PER_METRE)

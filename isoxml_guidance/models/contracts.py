"""GeoJSON output contracts.

The renderer returns plain JSON-compatible dicts so callers can hand the
result straight to ``json.dumps`` or a map client.  These ``TypedDict``
definitions are the single source of truth for their keys.

Design notes:
- ``TypedDict`` was chosen over ``dataclass`` because the output is JSON.
- ``SwathProperties`` uses ``total=False``: ``guidance_shift`` and
  ``boundary_polygon`` only appear when the caller supplied them.
"""

from __future__ import annotations

from typing import Literal, TypedDict


class LineStringGeometry(TypedDict):
    """GeoJSON ``LineString`` geometry."""

    type: Literal["LineString"]
    coordinates: list[list[float]]


class SwathProperties(TypedDict, total=False):
    """Properties shared by every swath line of one pattern."""

    color: int | None
    pattern_id: str
    guidance_shift: dict[str, object]
    boundary_polygon: dict[str, object]


class SwathFeature(TypedDict):
    """GeoJSON ``Feature`` holding one clipped swath line."""

    type: Literal["Feature"]
    geometry: LineStringGeometry
    properties: SwathProperties


class FeatureCollection(TypedDict):
    """GeoJSON ``FeatureCollection`` of swath lines."""

    type: Literal["FeatureCollection"]
    features: list[SwathFeature]


def feature_collection(features: list[SwathFeature] | None = None) -> FeatureCollection:
    """Build a ``FeatureCollection`` dict from a list of features."""
    return {"type": "FeatureCollection", "features": list(features or [])}

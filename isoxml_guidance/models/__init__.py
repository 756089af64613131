"""Data models and schemas.

Defines the data structures used throughout the pipeline:
- PatternAttributes / GuidanceGroupAttributes: parsed guidance entities
- LineStringRecord / PolygonRecord: parsed ISOXML geometry
- GuidanceShift: opaque shift metadata passed through to output
- FeatureCollection: GeoJSON output contract
"""

from isoxml_guidance.models.contracts import (
    FeatureCollection,
    SwathFeature,
    SwathProperties,
    feature_collection,
)
from isoxml_guidance.models.guidance import (
    Coordinate,
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

__all__ = [
    "Coordinate",
    "FeatureCollection",
    "GuidanceGroupAttributes",
    "GuidancePatternExtension",
    "GuidancePatternType",
    "GuidanceShift",
    "LineStringRecord",
    "PartfieldRecord",
    "PatternAttributes",
    "PolygonRecord",
    "PropagationDirection",
    "SwathFeature",
    "SwathProperties",
    "TaskData",
    "feature_collection",
]

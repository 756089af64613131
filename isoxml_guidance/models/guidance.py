"""Data model for parsed ISOXML guidance entities.

These records are the output of the ``parse_taskdata`` activity and the
input to the rendering pipeline. They are plain frozen dataclasses: the
pipeline takes data, never objects with behaviour, so a record built by
hand in a test renders exactly like one read from ``TASKDATA.XML``.

Enum values are the numeric codes defined by ISO 11783-10 for the
``GPN`` (GuidancePattern) attributes ``C``, ``E`` and ``F``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

Coordinate = tuple[float, ...]
"""``(lon, lat)`` or ``(lon, lat, elevation)`` in WGS 84 degrees / metres."""


class GuidancePatternType(IntEnum):
    """``GPN`` attribute ``C``."""

    AB = 1
    A_PLUS = 2
    CURVE = 3
    PIVOT = 4
    SPIRAL = 5


class GuidancePatternExtension(IntEnum):
    """``GPN`` attribute ``F``: which ends of the line are extended."""

    BOTH = 1
    FIRST_ONLY = 2
    LAST_ONLY = 3
    NONE = 4


class PropagationDirection(IntEnum):
    """``GPN`` attribute ``E``: on which side swaths are propagated."""

    BOTH = 1
    LEFT = 2
    RIGHT = 3
    NONE = 4


@dataclass(frozen=True, slots=True)
class LineStringRecord:
    """An ISOXML ``LSG`` element with its ``PNT`` coordinates.

    Attributes:
        line_type: ``LSG`` attribute ``A`` (5 = guidance pattern,
            1 = polygon exterior, 2 = polygon interior).
        designator: Optional display name.
        width_mm: Implement width in millimetres; ``None`` if absent.
        length: Optional length in millimetres.
        colour: Optional ISOXML colour index (0-254).
        line_id: Optional ``LSG`` id (``"LSG1"``).
        coordinates: Point coordinates in document order.
    """

    line_type: int
    designator: str = ""
    width_mm: int | None = None
    length: int | None = None
    colour: int | None = None
    line_id: str = ""
    coordinates: tuple[Coordinate, ...] = ()


@dataclass(frozen=True, slots=True)
class PolygonRecord:
    """An ISOXML ``PLN`` element with its ring line strings."""

    polygon_type: int
    designator: str = ""
    area: int | None = None
    colour: int | None = None
    polygon_id: str = ""
    rings: tuple[LineStringRecord, ...] = ()


@dataclass(frozen=True, slots=True)
class PatternAttributes:
    """A parsed ``GPN`` (GuidancePattern) element.

    Optional fields are ``None`` when the attribute is absent from the
    document; the renderer substitutes its own defaults for them.
    """

    pattern_id: str
    pattern_type: GuidancePatternType
    designator: str = ""
    heading: float | None = None
    extension: GuidancePatternExtension | None = None
    propagation_direction: PropagationDirection | None = None
    swaths_left: int | None = None
    swaths_right: int | None = None
    line_strings: tuple[LineStringRecord, ...] = ()
    boundary_polygons: tuple[PolygonRecord, ...] = ()

    @property
    def reference_line(self) -> LineStringRecord | None:
        """The first line string, which defines the steering direction."""
        return self.line_strings[0] if self.line_strings else None


@dataclass(frozen=True, slots=True)
class GuidanceShift:
    """A parsed ``GST`` element; carried through to output properties only."""

    group_id_ref: str = ""
    pattern_id_ref: str = ""
    east_shift_mm: int | None = None
    north_shift_mm: int | None = None
    propagation_offset_mm: int | None = None

    def to_dict(self) -> dict[str, object]:
        """Serialise for GeoJSON feature properties."""
        return {
            "group_id_ref": self.group_id_ref,
            "pattern_id_ref": self.pattern_id_ref,
            "east_shift_mm": self.east_shift_mm,
            "north_shift_mm": self.north_shift_mm,
            "propagation_offset_mm": self.propagation_offset_mm,
        }


@dataclass(frozen=True, slots=True)
class GuidanceGroupAttributes:
    """A parsed ``GGP`` (GuidanceGroup) element."""

    group_id: str
    designator: str = ""
    patterns: tuple[PatternAttributes, ...] = ()
    boundary_polygons: tuple[PolygonRecord, ...] = ()


@dataclass(frozen=True, slots=True)
class PartfieldRecord:
    """A parsed ``PFD`` (Partfield) element, reduced to its guidance groups."""

    partfield_id: str
    designator: str = ""
    guidance_groups: tuple[GuidanceGroupAttributes, ...] = ()


@dataclass(frozen=True, slots=True)
class TaskData:
    """Everything the renderer needs from one ``TASKDATA.XML`` document.

    Attributes:
        partfields: Partfields that carry at least one guidance group.
        guidance_shifts: All ``GST`` elements found in the document.
        warnings: Advisory messages raised while parsing.
        source_file: Name of the parsed file.
    """

    partfields: tuple[PartfieldRecord, ...] = ()
    guidance_shifts: tuple[GuidanceShift, ...] = ()
    warnings: tuple[str, ...] = ()
    source_file: str = ""

    @property
    def guidance_groups(self) -> list[GuidanceGroupAttributes]:
        """All guidance groups across all partfields, in document order."""
        return [group for pfd in self.partfields for group in pfd.guidance_groups]

    def shift_for_group(self, group_id: str) -> GuidanceShift | None:
        """Return the first guidance shift that references ``group_id``."""
        for shift in self.guidance_shifts:
            if shift.group_id_ref == group_id:
                return shift
        return None

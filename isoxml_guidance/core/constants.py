"""Shared rendering constants, single source of truth.

Centralises the numeric defaults and ISOXML code values that are used by
the parser, the renderer and the configuration layer.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Rendering defaults
# ---------------------------------------------------------------------------

DEFAULT_EXTENSION_M: float = 5000.0
"""Metres by which a guidance line is extended past each extended end."""

DEFAULT_POINT_B_DISTANCE_M: float = 1.0
"""Metres from point A at which point B of an A+ pattern is placed."""

DEFAULT_SWATH_COUNT: int = 10
"""Swaths propagated per side when the pattern gives no count."""

DEFAULT_CONTAINMENT_TOLERANCE_DEG: float = 1e-9
"""Degrees (~0.1 mm) within which a vertex counts as on the boundary."""

MILLIMETRES_PER_METRE: float = 1000.0

# ---------------------------------------------------------------------------
# Coordinate reference systems
# ---------------------------------------------------------------------------

WGS84_CRS: str = "EPSG:4326"

# ---------------------------------------------------------------------------
# ISOXML polygon ring type codes (ISO 11783-10)
# ---------------------------------------------------------------------------

LINE_STRING_TYPE_EXTERIOR: int = 1
LINE_STRING_TYPE_INTERIOR: int = 2

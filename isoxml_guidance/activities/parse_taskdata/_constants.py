"""Shared constants for ISOXML task-data parsing."""

from __future__ import annotations

# Root element of an ISO 11783-10 TASKDATA.XML document
TASKDATA_ROOT_TAG = "ISO11783_TaskData"

# Element tags (ISO 11783-10 XML short names)
TAG_PARTFIELD = "PFD"
TAG_GUIDANCE_GROUP = "GGP"
TAG_GUIDANCE_PATTERN = "GPN"
TAG_GUIDANCE_SHIFT = "GST"
TAG_LINE_STRING = "LSG"
TAG_POLYGON = "PLN"
TAG_POINT = "PNT"

# WGS 84 coordinate bounds
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0

# A guidance pattern carries exactly one reference line string
EXPECTED_PATTERN_LINE_STRINGS = 1

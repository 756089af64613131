"""ISOXML Guidance Swath Renderer.

Reads ISO 11783-10 task data, extracts guidance groups and patterns, and
renders every parallel pass a vehicle should drive as GeoJSON line
features clipped to the field boundary.
"""

from isoxml_guidance.activities.boundary_polygon import to_multi_polygon
from isoxml_guidance.activities.parse_taskdata import parse_taskdata_file, parse_taskdata_xml
from isoxml_guidance.activities.render_pattern import render_pattern
from isoxml_guidance.orchestrators.guidance_group import render_group, render_task_data

__version__ = "0.1.0"

__all__ = [
    "parse_taskdata_file",
    "parse_taskdata_xml",
    "render_group",
    "render_pattern",
    "render_task_data",
    "to_multi_polygon",
]

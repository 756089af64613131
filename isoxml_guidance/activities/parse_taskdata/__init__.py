"""ISOXML task-data parsing activity.

Reads an ISO 11783-10 ``TASKDATA.XML`` document and extracts everything
the swath renderer needs: partfields with their guidance groups, each
group's boundary polygons and guidance patterns, and guidance shifts.

The parsing pipeline is split into focused stages:
- **_validation**: XML well-formedness, root element, coordinate bounds
- **_normalization**: attribute → int / float / enum, PNT → coordinate
- **_lxml_parser**: element-tree walk building the records

Supported structures:
- ``PFD`` → ``GGP`` → ``GPN`` → ``LSG`` → ``PNT``
- ``PLN`` boundary polygons on guidance groups and guidance patterns
- ``GST`` guidance shifts anywhere in the document

Document-level problems (not XML, not task data) raise.  Problems inside
a single pattern, polygon or shift skip that element and are recorded
in ``TaskData.warnings``; they never block the rest of the document.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from isoxml_guidance.activities.parse_taskdata._constants import TASKDATA_ROOT_TAG
from isoxml_guidance.activities.parse_taskdata._lxml_parser import parse_with_lxml
from isoxml_guidance.activities.parse_taskdata._validation import (
    InvalidCoordinateError,
    TaskDataParseError,
    TaskDataValidationError,
    validate_coordinates,
    validate_xml,
)

if TYPE_CHECKING:
    from pathlib import Path

    from isoxml_guidance.models.guidance import TaskData

logger = logging.getLogger("isoxml_guidance.activities.parse_taskdata")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "TASKDATA_ROOT_TAG",
    "InvalidCoordinateError",
    "TaskDataParseError",
    "TaskDataValidationError",
    "parse_taskdata_file",
    "parse_taskdata_xml",
    "parse_with_lxml",
    "validate_coordinates",
    "validate_xml",
]


def parse_taskdata_file(path: Path | str, *, source_filename: str = "") -> TaskData:
    """Parse a ``TASKDATA.XML`` file from disk.

    Args:
        path: Filesystem path to the task-data file (str or pathlib.Path).
        source_filename: Name recorded on the result (defaults to the file name).

    Returns:
        The parsed ``TaskData``.

    Raises:
        TaskDataParseError: If the file cannot be read, is not valid XML,
            or is not an ISOXML task-data document.
    """
    from pathlib import Path

    path = Path(path)
    if not source_filename:
        source_filename = path.name

    try:
        content = path.read_bytes()
    except OSError as exc:
        msg = f"Cannot read task data file: {exc}"
        raise TaskDataParseError(msg) from exc

    return parse_taskdata_xml(content, source_filename=source_filename)


def parse_taskdata_xml(content: bytes | str, *, source_filename: str = "") -> TaskData:
    """Parse a ``TASKDATA.XML`` document held in memory.

    Raises:
        TaskDataParseError: If the content is not valid XML or is not an
            ISOXML task-data document.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    logger.info("Parsing task data: %s", source_filename or "<memory>")

    root = validate_xml(content)
    task_data = parse_with_lxml(root, source_filename)

    logger.info(
        "Parsed %d guidance group(s), %d shift(s), %d warning(s) from %s",
        len(task_data.guidance_groups),
        len(task_data.guidance_shifts),
        len(task_data.warnings),
        source_filename or "<memory>",
    )
    return task_data

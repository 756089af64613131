"""Shared pytest fixtures for the ISOXML guidance test suite."""

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"
EDGE_CASES_DIR = DATA_DIR / "edge_cases"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def edge_cases_dir() -> Path:
    """Return the path to the edge-cases test data directory."""
    return EDGE_CASES_DIR


# ---------------------------------------------------------------------------
# Sample task data fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def taskdata_xml(data_dir: Path) -> Path:
    """Path to a task data file with one guidance group of three patterns.

    The group boundary is a ~716 m x 556 m rectangle at (10.00-10.01 E,
    50.000-50.005 N). GPN1 is an AB pattern (20 m swaths, 3 per side),
    GPN2 an A+ pattern heading east without propagation, GPN3 a pivot.
    """
    return data_dir / "TASKDATA.XML"


@pytest.fixture()
def not_xml_file(edge_cases_dir: Path) -> Path:
    """Path to a file that is not valid XML."""
    return edge_cases_dir / "not_xml.xml"


@pytest.fixture()
def wrong_root_file(edge_cases_dir: Path) -> Path:
    """Path to a well-formed XML file that is not ISOXML task data."""
    return edge_cases_dir / "wrong_root.xml"


@pytest.fixture()
def empty_file(edge_cases_dir: Path) -> Path:
    """Path to an empty file."""
    return edge_cases_dir / "empty.xml"

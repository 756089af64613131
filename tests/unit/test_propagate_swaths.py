"""Tests for swath propagation.

Covers:
- Line counts and order for every propagation direction
- Perpendicular spacing of i * width, left/right sign convention
- Zero width short-circuits to the base line
- Multi-segment lines produce gap-free parallel curves
"""

from __future__ import annotations

import warnings

import pytest
from shapely.geometry import LineString, Point

from isoxml_guidance.activities.propagate_swaths import propagate_swaths
from isoxml_guidance.core.exceptions import MissingGeometryError
from isoxml_guidance.core.geometry import geodesic_distance_m, local_transformers, reproject
from isoxml_guidance.models.guidance import PropagationDirection

# ~1.1 km line running due north at 10 E, 50 N
NORTH_LINE = [(10.0, 50.0), (10.0, 50.01)]

# Two-segment line: north, then east
BENT_LINE = [(10.0, 50.0), (10.0, 50.005), (10.007, 50.005)]


def _start(line: LineString) -> tuple[float, float]:
    x, y = line.coords[0][:2]
    return (x, y)


class TestPropagationCounts:
    """Number and order of generated lines."""

    def test_both_directions(self) -> None:
        lines = propagate_swaths(NORTH_LINE, PropagationDirection.BOTH, 2, 3, 3000)
        assert len(lines) == 1 + 2 + 3

    def test_base_line_first_and_unchanged(self) -> None:
        lines = propagate_swaths(NORTH_LINE, PropagationDirection.BOTH, 2, 3, 3000)
        assert list(lines[0].coords) == NORTH_LINE

    def test_left_only(self) -> None:
        lines = propagate_swaths(NORTH_LINE, PropagationDirection.LEFT, 2, 3, 3000)
        assert len(lines) == 3

    def test_right_only(self) -> None:
        lines = propagate_swaths(NORTH_LINE, PropagationDirection.RIGHT, 2, 3, 3000)
        assert len(lines) == 4

    def test_no_propagation(self) -> None:
        lines = propagate_swaths(NORTH_LINE, PropagationDirection.NONE, 2, 3, 3000)
        assert len(lines) == 1

    def test_zero_counts(self) -> None:
        lines = propagate_swaths(NORTH_LINE, PropagationDirection.BOTH, 0, 0, 3000)
        assert len(lines) == 1

    def test_zero_width_emits_base_only(self) -> None:
        """With no width every swath would coincide with the base line."""
        lines = propagate_swaths(NORTH_LINE, PropagationDirection.BOTH, 10, 10, 0)
        assert len(lines) == 1
        assert list(lines[0].coords) == NORTH_LINE

    def test_elevation_dropped(self) -> None:
        coords = [(10.0, 50.0, 120.0), (10.0, 50.01, 121.0)]
        lines = propagate_swaths(coords, PropagationDirection.NONE, 0, 0, 0)
        assert not lines[0].has_z

    def test_single_point_raises(self) -> None:
        with pytest.raises(MissingGeometryError):
            propagate_swaths([(10.0, 50.0)], PropagationDirection.BOTH, 1, 1, 3000)


class TestPropagationSpacing:
    """Swaths lie i * width from the base line, left is negative."""

    def test_left_swaths_are_west_of_northbound_line(self) -> None:
        lines = propagate_swaths(NORTH_LINE, PropagationDirection.BOTH, 2, 2, 3000)
        base_lon = _start(lines[0])[0]
        assert _start(lines[1])[0] < base_lon
        assert _start(lines[2])[0] < _start(lines[1])[0]

    def test_right_swaths_are_east_of_northbound_line(self) -> None:
        lines = propagate_swaths(NORTH_LINE, PropagationDirection.BOTH, 2, 2, 3000)
        base_lon = _start(lines[0])[0]
        assert _start(lines[3])[0] > base_lon
        assert _start(lines[4])[0] > _start(lines[3])[0]

    @pytest.mark.parametrize("index,expected_m", [(1, 3.0), (2, 6.0), (3, 3.0), (4, 6.0)])
    def test_spacing_is_multiple_of_width(self, index: int, expected_m: float) -> None:
        lines = propagate_swaths(NORTH_LINE, PropagationDirection.BOTH, 2, 2, 3000)
        distance = geodesic_distance_m(_start(lines[0]), _start(lines[index]))
        assert distance == pytest.approx(expected_m, rel=1e-2)

    def test_swaths_keep_travel_direction(self) -> None:
        lines = propagate_swaths(NORTH_LINE, PropagationDirection.BOTH, 1, 1, 3000)
        for line in lines:
            assert line.coords[-1][1] > line.coords[0][1]

    def test_bent_line_offset_is_parallel_curve(self) -> None:
        """A multi-segment line is offset along its full length without gaps."""
        lines = propagate_swaths(BENT_LINE, PropagationDirection.BOTH, 1, 1, 5000)
        to_utm, _to_wgs = local_transformers(*BENT_LINE[0])
        base = reproject(lines[0], to_utm)
        for swath in lines[1:]:
            projected = reproject(swath, to_utm)
            assert projected.is_simple
            assert projected.distance(base) == pytest.approx(5.0, rel=1e-3)

    def test_corner_vertices_never_closer_than_width(self) -> None:
        """The convex-side corner is mitred, not approximated by chords."""
        lines = propagate_swaths(BENT_LINE, PropagationDirection.BOTH, 1, 1, 5000)
        to_utm, _to_wgs = local_transformers(*BENT_LINE[0])
        base = reproject(lines[0], to_utm)
        for swath in lines[1:]:
            for coord in reproject(swath, to_utm).coords:
                assert base.distance(Point(coord)) >= 5.0 * (1 - 1e-3)

    def test_no_deprecation_warning(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            propagate_swaths(BENT_LINE, PropagationDirection.BOTH, 1, 1, 5000)

    def test_no_consecutive_duplicate_vertices(self) -> None:
        lines = propagate_swaths(BENT_LINE, PropagationDirection.BOTH, 2, 2, 5000)
        for line in lines[1:]:
            coords = list(line.coords)
            assert all(a != b for a, b in zip(coords, coords[1:], strict=False))

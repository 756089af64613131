"""Tests for boundary clipping.

Covers:
- No boundary is the identity
- Fully inside / fully outside / crossing lines
- Concave boundaries and multi-polygons yield several pieces
- Inclusive containment for vertices on the boundary
- Lines running along the boundary outline
- Idempotence and two-stage clipping
"""

from __future__ import annotations

import pytest
from shapely.geometry import LineString, MultiPolygon, Polygon, box

from isoxml_guidance.activities.clip_boundary import clip_to_boundary

UNIT_BOX = MultiPolygon([box(0.0, 0.0, 1.0, 1.0)])

# U-shaped field: two prongs at x=[0,1] and x=[2,3], joined below y=1
U_FIELD = MultiPolygon(
    [Polygon([(0, 0), (3, 0), (3, 3), (2, 3), (2, 1), (1, 1), (1, 3), (0, 3)])]
)


def _coords(line: LineString) -> list[tuple[float, float]]:
    return [(round(x, 9), round(y, 9)) for x, y in line.coords]


class TestNoBoundary:
    """Absent boundary."""

    def test_identity(self) -> None:
        line = LineString([(0.0, 0.0), (5.0, 5.0)])
        result = clip_to_boundary(line, None)
        assert result == [line]
        assert result[0] is line


class TestContainment:
    """Lines inside, outside and across the boundary."""

    def test_fully_inside_returned_unsplit(self) -> None:
        line = LineString([(0.2, 0.2), (0.5, 0.5), (0.8, 0.3)])
        result = clip_to_boundary(line, UNIT_BOX)
        assert len(result) == 1
        assert _coords(result[0]) == _coords(line)

    def test_fully_outside_returns_empty(self) -> None:
        line = LineString([(2.0, 2.0), (3.0, 3.0)])
        assert clip_to_boundary(line, UNIT_BOX) == []

    def test_crossing_line_clipped_to_interior(self) -> None:
        line = LineString([(-1.0, 0.5), (2.0, 0.5)])
        result = clip_to_boundary(line, UNIT_BOX)
        assert len(result) == 1
        assert _coords(result[0]) == [(0.0, 0.5), (1.0, 0.5)]

    def test_line_ending_inside(self) -> None:
        line = LineString([(-1.0, 0.5), (0.5, 0.5)])
        result = clip_to_boundary(line, UNIT_BOX)
        assert len(result) == 1
        assert _coords(result[0]) == [(0.0, 0.5), (0.5, 0.5)]

    def test_concave_boundary_yields_two_pieces(self) -> None:
        line = LineString([(-1.0, 2.0), (4.0, 2.0)])
        result = clip_to_boundary(line, U_FIELD)
        assert len(result) == 2
        assert _coords(result[0]) == [(0.0, 2.0), (1.0, 2.0)]
        assert _coords(result[1]) == [(2.0, 2.0), (3.0, 2.0)]

    def test_multi_polygon_yields_piece_per_member(self) -> None:
        boundary = MultiPolygon([box(0.0, 0.0, 1.0, 1.0), box(2.0, 0.0, 3.0, 1.0)])
        line = LineString([(-1.0, 0.5), (4.0, 0.5)])
        result = clip_to_boundary(line, boundary)
        assert [round(piece.length, 9) for piece in result] == [1.0, 1.0]


    def test_piece_bridging_gap_between_fields_dropped(self) -> None:
        """End points on both outlines do not make the gap between them inside."""
        boundary = MultiPolygon([box(0.0, 0.0, 1.0, 1.0), box(2.0, 0.0, 3.0, 1.0)])
        line = LineString([(1.0, 0.5), (2.0, 0.5)])
        assert clip_to_boundary(line, boundary) == []

    def test_piece_across_concave_notch_dropped(self) -> None:
        line = LineString([(1.0, 2.0), (2.0, 2.0)])
        assert clip_to_boundary(line, U_FIELD) == []

    def test_kept_pieces_lie_inside(self) -> None:
        line = LineString([(-1.0, 2.0), (4.0, 2.5), (-1.0, 2.9)])
        for piece in clip_to_boundary(line, U_FIELD):
            assert U_FIELD.buffer(1e-9).covers(piece)


class TestBoundaryEdges:
    """Vertices and segments on the outline count as inside."""

    def test_vertex_on_edge_is_inside(self) -> None:
        line = LineString([(0.0, 0.5), (0.5, 0.5)])
        result = clip_to_boundary(line, UNIT_BOX)
        assert len(result) == 1
        assert _coords(result[0]) == [(0.0, 0.5), (0.5, 0.5)]

    def test_line_along_outline_is_kept(self) -> None:
        line = LineString([(0.0, 0.0), (1.0, 0.0)])
        result = clip_to_boundary(line, UNIT_BOX)
        assert len(result) == 1
        assert result[0].length == pytest.approx(1.0)

    def test_line_along_outline_beyond_corner(self) -> None:
        line = LineString([(-1.0, 0.0), (2.0, 0.0)])
        result = clip_to_boundary(line, UNIT_BOX)
        assert len(result) == 1
        assert result[0].length == pytest.approx(1.0)


class TestRepeatedClipping:
    """Clipping composes."""

    def test_idempotent(self) -> None:
        line = LineString([(-1.0, 0.25), (2.0, 0.75)])
        first = clip_to_boundary(line, UNIT_BOX)
        second = [piece for p in first for piece in clip_to_boundary(p, UNIT_BOX)]
        assert [_coords(p) for p in second] == [_coords(p) for p in first]

    def test_two_stage_clip(self) -> None:
        """Local then external boundary: the result lies inside both."""
        local = MultiPolygon([box(0.0, 0.0, 3.0, 1.0)])
        external = MultiPolygon([box(0.5, 0.0, 1.0, 1.0), box(2.0, 0.0, 2.5, 1.0)])
        line = LineString([(-1.0, 0.5), (4.0, 0.5)])
        pieces = [
            final
            for piece in clip_to_boundary(line, local)
            for final in clip_to_boundary(piece, external)
        ]
        assert [_coords(p) for p in pieces] == [
            [(0.5, 0.5), (1.0, 0.5)],
            [(2.0, 0.5), (2.5, 0.5)],
        ]

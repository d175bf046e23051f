"""
test_hazard_evaluator.py — Tests for point-in-polygon hazard checks.

Validates:
  - Points inside / far outside a convex zone
  - Boundary (edge and vertex) points count as unsafe
  - Concave zones and rays through vertices
  - Degenerate rings never mark a point unsafe
  - Agreement with shapely away from the boundary
"""

import pytest
from shapely.geometry import Point, Polygon

from safe_route.geo.hazard_evaluator import (
    contains,
    drop_degenerate,
    is_degenerate,
    is_safe,
)

# (lat, lon) rings
SQUARE = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0), (0.0, 0.0)]

DEMO_ZONE = [
    (12.9700, 77.5910),
    (12.9730, 77.5920),
    (12.9740, 77.5970),
    (12.9710, 77.5960),
    (12.9700, 77.5910),
]

L_SHAPE = [(0.0, 0.0), (0.0, 2.0), (1.0, 2.0), (1.0, 1.0), (2.0, 1.0), (2.0, 0.0)]


class TestConvexZone:
    """Interior and exterior classification."""

    @pytest.mark.parametrize("point", [(0.5, 0.5), (0.1, 0.9), (0.99, 0.01)])
    def test_inside_is_unsafe(self, point):
        """Points strictly inside the square are not safe."""
        assert contains(SQUARE, point)
        assert not is_safe([SQUARE], point)

    @pytest.mark.parametrize("point", [(5.0, 5.0), (-3.0, 0.5), (0.5, 10.0)])
    def test_far_outside_is_safe(self, point):
        """Points well beyond the bounding box are safe."""
        assert not contains(SQUARE, point)
        assert is_safe([SQUARE], point)

    def test_demo_shelter_inside_zone(self):
        """City Hall Shelter lies inside the demo flood zone."""
        assert contains(DEMO_ZONE, (12.9721, 77.5933))

    def test_demo_shelters_outside_zone(self):
        """Community Center and VIT Shelter lie outside the demo zone."""
        assert is_safe([DEMO_ZONE], (12.9755, 77.5980))
        assert is_safe([DEMO_ZONE], (12.9680, 77.6000))

    def test_open_ring_same_as_closed(self):
        """A ring without the closing vertex gives the same answer."""
        open_ring = SQUARE[:-1]
        assert contains(open_ring, (0.5, 0.5))
        assert not contains(open_ring, (1.5, 0.5))


class TestBoundary:
    """Edge and vertex points are inside (boundary is unsafe)."""

    @pytest.mark.parametrize(
        "point",
        [(0.0, 0.5), (0.5, 1.0), (1.0, 0.25), (0.3, 0.0)],
    )
    def test_axis_aligned_edges(self, point):
        """Points on each side of the square are unsafe."""
        assert contains(SQUARE, point)
        assert not is_safe([SQUARE], point)

    @pytest.mark.parametrize("point", [(0.0, 0.0), (1.0, 1.0), (0.0, 1.0)])
    def test_vertices(self, point):
        """Vertices are unsafe."""
        assert not is_safe([SQUARE], point)

    def test_diagonal_edge_midpoint(self):
        """Midpoint of a slanted demo-zone edge is unsafe."""
        midpoint = (12.9715, 77.5915)
        assert contains(DEMO_ZONE, midpoint)

    def test_collinear_beyond_edge_is_safe(self):
        """A point on the edge's line but past its end is not on the boundary."""
        assert is_safe([DEMO_ZONE], (12.9760, 77.5930))


class TestConcaveZone:
    """Non-convex rings and awkward ray geometry."""

    def test_notch_is_outside(self):
        """The missing corner of an L-shape is safe."""
        assert not contains(L_SHAPE, (1.5, 1.5))

    def test_arms_are_inside(self):
        """Both arms of the L-shape are unsafe."""
        assert contains(L_SHAPE, (1.5, 0.5))
        assert contains(L_SHAPE, (0.5, 1.5))

    def test_ray_through_vertices(self):
        """Centre of a diamond is inside even though the ray hits vertices."""
        diamond = [(0.0, 1.0), (1.0, 2.0), (2.0, 1.0), (1.0, 0.0)]
        assert contains(diamond, (1.0, 1.0))
        assert not contains(diamond, (1.0, 2.5))


class TestDegenerate:
    """Rings with fewer than 3 distinct vertices contain nothing."""

    @pytest.mark.parametrize(
        "ring",
        [
            [],
            [(0.0, 0.0)],
            [(0.0, 0.0), (1.0, 1.0)],
            [(0.0, 0.0), (1.0, 1.0), (0.0, 0.0)],
        ],
    )
    def test_never_unsafe(self, ring):
        """Degenerate rings are ignored, even at their own vertices."""
        assert is_degenerate(ring)
        for point in [(0.0, 0.0), (0.5, 0.5), (1.0, 1.0)]:
            assert not contains(ring, point)
            assert is_safe([ring], point)

    def test_degenerate_does_not_mask_real_zone(self):
        """A valid zone still applies alongside a degenerate one."""
        assert not is_safe([[(0.0, 0.0)], SQUARE], (0.5, 0.5))

    def test_drop_degenerate_keeps_valid_zones(self):
        """Only usable rings survive, in their original order."""
        zones = drop_degenerate([[(0.0, 0.0)], SQUARE, [], L_SHAPE])
        assert zones == [SQUARE, L_SHAPE]

    def test_no_zones_is_safe(self):
        """With no hazard zones every point is safe."""
        assert is_safe([], (0.5, 0.5))


class TestShapelyAgreement:
    """Cross-check the ray cast against shapely away from edges."""

    def test_grid_matches_shapely(self):
        """Every grid point not touching the boundary agrees with shapely."""
        reference = Polygon([(lon, lat) for lat, lon in DEMO_ZONE])
        checked = 0

        for i in range(25):
            lat = 12.9690 + i * 0.00025
            for j in range(35):
                lon = 77.5900 + j * 0.00025
                pt = Point(lon, lat)
                if reference.boundary.distance(pt) < 1e-7:
                    continue
                assert contains(DEMO_ZONE, (lat, lon)) == reference.contains(pt)
                checked += 1

        assert checked > 500

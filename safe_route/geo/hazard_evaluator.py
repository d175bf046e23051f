"""
hazard_evaluator.py — Point-in-polygon checks against hazard zones.

Polygons and points arrive as (latitude, longitude) tuples.  All
geometry below runs on ``x = longitude, y = latitude`` so the ray is
always cast along the longitude axis; mixing the two orders is the
classic axis-swap bug for this calculation.

The hazard boundary is unsafe: a point on any edge or vertex counts
as inside.
"""

import logging

logger = logging.getLogger(__name__)

# Max distance (degrees) from an edge still treated as "on" the edge
BOUNDARY_TOLERANCE = 1e-9


def _to_xy(point: tuple[float, float]) -> tuple[float, float]:
    """(lat, lon) → (x=lon, y=lat)."""
    return (point[1], point[0])


def _ring_xy(polygon) -> list[tuple[float, float]]:
    """Convert a ring to (x, y) vertices, dropping the closing vertex."""
    ring = [_to_xy(p) for p in polygon]
    if len(ring) > 1 and ring[0] == ring[-1]:
        ring = ring[:-1]
    return ring


def is_degenerate(polygon) -> bool:
    """Return True if the ring has fewer than 3 distinct vertices."""
    return len(set(_ring_xy(polygon))) < 3


def _on_segment(
    px: float, py: float,
    ax: float, ay: float,
    bx: float, by: float,
) -> bool:
    """True if (px, py) lies on segment A–B within BOUNDARY_TOLERANCE."""
    if not (
        min(ax, bx) - BOUNDARY_TOLERANCE <= px <= max(ax, bx) + BOUNDARY_TOLERANCE
        and min(ay, by) - BOUNDARY_TOLERANCE <= py <= max(ay, by) + BOUNDARY_TOLERANCE
    ):
        return False

    dx, dy = bx - ax, by - ay
    length = (dx * dx + dy * dy) ** 0.5
    if length == 0.0:
        return abs(px - ax) <= BOUNDARY_TOLERANCE and abs(py - ay) <= BOUNDARY_TOLERANCE

    cross = dx * (py - ay) - dy * (px - ax)
    return abs(cross) / length <= BOUNDARY_TOLERANCE


def contains(polygon, point: tuple[float, float]) -> bool:
    """
    Check whether a hazard polygon contains a point.

    Args:
        polygon: Ordered ring of (lat, lon) vertices.  A closing vertex
                 equal to the first one is optional.
        point:   (lat, lon) to test.

    Returns:
        True if the point is strictly inside the ring or on its
        boundary.  Degenerate rings (fewer than 3 distinct vertices)
        contain nothing.
    """
    ring = _ring_xy(polygon)
    if len(set(ring)) < 3:
        return False

    px, py = _to_xy(point)
    n = len(ring)

    # Boundary first: ray casting is ambiguous on edges
    for i in range(n):
        ax, ay = ring[i]
        bx, by = ring[(i + 1) % n]
        if _on_segment(px, py, ax, ay, bx, by):
            return True

    # Even-odd ray cast towards +x
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = ring[i]
        xj, yj = ring[j]
        if (yi > py) != (yj > py):
            x_cross = xi + (py - yi) * (xj - xi) / (yj - yi)
            if px < x_cross:
                inside = not inside
        j = i

    return inside


def drop_degenerate(hazard_zones) -> list:
    """Return the usable zones, warning once for each degenerate one."""
    usable = []
    for idx, zone in enumerate(hazard_zones):
        if is_degenerate(zone):
            logger.warning(
                "Hazard zone %d is degenerate (%d vertices); ignoring it",
                idx, len(zone),
            )
            continue
        usable.append(zone)
    return usable


def is_safe(hazard_zones, point: tuple[float, float]) -> bool:
    """
    Return True if the point lies outside every hazard zone.

    Degenerate zones impose no constraint.  An empty zone list means
    every point is safe.
    """
    for zone in hazard_zones:
        if contains(zone, point):
            return False
    return True

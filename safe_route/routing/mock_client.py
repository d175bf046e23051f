"""
mock_client.py — Offline routing client for local runs and demos.

Returns a synthetic curved path between origin and destination without
touching the network.
"""

import math


class MockRoutingClient:
    """
    Mock routing client.

    Args:
        num_points: Number of path segments to generate.
    """

    def __init__(self, num_points: int = 10):
        self.num_points = num_points

    async def get_route(
        self,
        origin: tuple[float, float],
        destination: tuple[float, float],
    ) -> list[tuple[float, float]]:
        """Return a synthetic route from origin to destination."""
        route = []
        for i in range(self.num_points + 1):
            t = i / self.num_points
            lat = origin[0] + t * (destination[0] - origin[0])
            lon = origin[1] + t * (destination[1] - origin[1])
            # Slight bend; zero at both endpoints
            offset = 0.0002 * math.sin(t * math.pi)
            route.append((round(lat + offset, 6), round(lon - offset, 6)))
        return route

"""
osrm_client.py — Async HTTP client for a self-hosted OSRM backend.

Alternative to OpenRouteService for deployments running their own
OSRM instance with a foot profile.
"""

import logging
import os

import httpx

from safe_route.routing.errors import RoutingError

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "http://localhost:5000"
DEFAULT_PROFILE = "foot"
DEFAULT_TIMEOUT = 10.0


class OSRMClient:
    """
    HTTP client for the OSRM ``/route/v1/{profile}`` endpoint.

    Args:
        endpoint:  Base URL of the OSRM backend
                   (defaults to env ``OSRM_ENDPOINT``).
        profile:   OSRM profile name, ``foot`` by default.
        timeout:   Request timeout in seconds (env ``ROUTING_TIMEOUT``).
        transport: Optional httpx transport, used by tests.
    """

    def __init__(
        self,
        endpoint: str | None = None,
        profile: str = DEFAULT_PROFILE,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint = (
            endpoint
            or os.environ.get("OSRM_ENDPOINT", DEFAULT_ENDPOINT)
        ).rstrip("/")
        self.profile = profile
        self.timeout = (
            timeout
            if timeout is not None
            else float(os.environ.get("ROUTING_TIMEOUT", DEFAULT_TIMEOUT))
        )
        self._transport = transport

    async def get_route(
        self,
        origin: tuple[float, float],
        destination: tuple[float, float],
    ) -> list[tuple[float, float]]:
        """
        Query OSRM for a route between two points.

        Args:
            origin:      (latitude, longitude) of the start.
            destination: (latitude, longitude) of the end.

        Returns:
            List of (lat, lon) waypoints.

        Raises:
            RoutingError: on connection failure or when OSRM reports
                          anything other than ``code == "Ok"``.
        """
        # OSRM uses lon,lat ordering
        coords = (
            f"{origin[1]},{origin[0]};{destination[1]},{destination[0]}"
        )
        url = (
            f"{self.endpoint}/route/v1/{self.profile}/{coords}"
            f"?geometries=geojson&overview=full&alternatives=false"
        )

        logger.info("OSRM request: %s", url)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport,
            ) as client:
                response = await client.get(
                    url, headers={"Accept": "application/json"},
                )
                data = response.json()
        except httpx.HTTPError as e:
            raise RoutingError(f"OSRM unavailable: {e}") from e
        except ValueError as e:
            raise RoutingError(f"OSRM returned invalid JSON: {e}") from e

        if (
            response.status_code != 200
            or not isinstance(data, dict)
            or data.get("code") != "Ok"
            or not data.get("routes")
        ):
            message = data.get("message") if isinstance(data, dict) else None
            raise RoutingError(message or "No route found")

        try:
            route = data["routes"][0]
            return [
                (float(c[1]), float(c[0]))
                for c in route["geometry"]["coordinates"]
            ]
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise RoutingError(f"OSRM response has no route geometry: {e}") from e

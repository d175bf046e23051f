"""
ors_client.py — Async HTTP client for OpenRouteService directions.

Requests a walking route between two points and returns it as a list
of (lat, lon) waypoints.  The API key is sent in the ``Authorization``
header, so it never appears in logged URLs.
"""

import logging
import os

import httpx

from safe_route.routing.errors import RoutingError

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.openrouteservice.org"
DEFAULT_PROFILE = "foot-walking"
DEFAULT_TIMEOUT = 10.0


class ORSClient:
    """
    Client for the OpenRouteService ``/v2/directions/{profile}`` endpoint.

    Args:
        api_key:   ORS API key (defaults to env ``ORS_API_KEY``).
        endpoint:  Base URL (defaults to env ``ORS_ENDPOINT``).
        profile:   Directions profile, ``foot-walking`` by default.
        timeout:   Request timeout in seconds (env ``ROUTING_TIMEOUT``).
        transport: Optional httpx transport, used by tests.
    """

    def __init__(
        self,
        api_key: str | None = None,
        endpoint: str | None = None,
        profile: str = DEFAULT_PROFILE,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key or os.environ.get("ORS_API_KEY")
        self.endpoint = (
            endpoint
            or os.environ.get("ORS_ENDPOINT", DEFAULT_ENDPOINT)
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
        Query ORS for a walking route.

        Args:
            origin:      (latitude, longitude) of the start.
            destination: (latitude, longitude) of the end.

        Returns:
            List of (lat, lon) waypoints.

        Raises:
            RoutingError: missing API key, network failure, non-success
                          status, or a body without a route geometry.
        """
        if not self.api_key:
            raise RoutingError("ORS_API_KEY not set")

        # ORS uses lon,lat ordering
        params = {
            "start": f"{origin[1]},{origin[0]}",
            "end": f"{destination[1]},{destination[0]}",
        }
        url = f"{self.endpoint}/v2/directions/{self.profile}"
        headers = {
            "Authorization": self.api_key,
            "Accept": "application/json, application/geo+json",
        }

        logger.info("ORS request: %s start=%s end=%s",
                    url, params["start"], params["end"])

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport,
            ) as client:
                response = await client.get(url, params=params, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            raise RoutingError(f"ORS request failed: {e}") from e
        except ValueError as e:
            raise RoutingError(f"ORS returned invalid JSON: {e}") from e

        try:
            coordinates = data["features"][0]["geometry"]["coordinates"]
            # GeoJSON [lon, lat] → (lat, lon)
            return [(float(c[1]), float(c[0])) for c in coordinates]
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise RoutingError(f"ORS response has no route geometry: {e}") from e

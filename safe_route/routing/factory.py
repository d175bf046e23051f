"""
factory.py — Pick the routing client for the current environment.

Provider is chosen by argument or the ``ROUTING_PROVIDER`` env var:

    ors   (default)  OpenRouteService foot-walking directions
    osrm             self-hosted OSRM backend
    mock             offline synthetic routes

``ROUTING_MOCK=1`` forces the mock client regardless of provider.
"""

import logging
import os

from safe_route.routing.mock_client import MockRoutingClient
from safe_route.routing.ors_client import ORSClient
from safe_route.routing.osrm_client import OSRMClient

logger = logging.getLogger(__name__)

PROVIDERS = ("ors", "osrm", "mock")


def get_routing_client(
    provider: str | None = None,
    mock: bool = False,
) -> ORSClient | OSRMClient | MockRoutingClient:
    """
    Factory function: returns the configured routing client.

    Raises:
        ValueError: if the provider name is unknown.
    """
    if mock or os.environ.get("ROUTING_MOCK", "0") == "1":
        logger.info("Using MockRoutingClient")
        return MockRoutingClient()

    name = (provider or os.environ.get("ROUTING_PROVIDER", "ors")).lower()
    if name == "ors":
        return ORSClient()
    if name == "osrm":
        return OSRMClient()
    if name == "mock":
        return MockRoutingClient()
    raise ValueError(
        f"Unknown routing provider '{name}' (expected one of {PROVIDERS})"
    )

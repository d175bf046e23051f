"""
shelter_selector.py — Nearest safe shelter selection and route retrieval.

Orchestrates one safe-route request:
  1. Drop shelters that fall inside (or on the edge of) any hazard zone
  2. Pick the remaining shelter nearest the user by haversine distance
  3. Ask the routing client for a walking path to it
  4. Return a SelectionResult combining both outcomes

Selection is synchronous.  The routing call is the only await, and a
failed route never clears the selected shelter.
"""

import asyncio
import contextlib
import logging
import os

from safe_route.geo.distance import haversine_km
from safe_route.geo.hazard_evaluator import drop_degenerate, is_safe
from safe_route.models import SelectionResult, Shelter
from safe_route.routing.errors import RoutingError
from safe_route.routing.factory import get_routing_client

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1
DEFAULT_BACKOFF_SECONDS = 0.5


def _env_number(name: str, cast, default):
    """Read a numeric env var, falling back to *default* if unparseable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r; using %s", name, raw, default)
        return default


def _validate_route(route) -> list[tuple[float, float]] | None:
    """
    Normalise a client response to a list of (lat, lon) floats.

    Returns None for an empty path or anything that is not a sequence
    of numeric pairs.
    """
    if not route or isinstance(route, (str, bytes, dict)):
        if route:
            logger.warning(
                "Routing service returned a non-path %s", type(route).__name__,
            )
        else:
            logger.warning("Routing service returned an empty path")
        return None

    points = []
    try:
        for point in route:
            if isinstance(point, (str, bytes)) or len(point) != 2:
                raise ValueError(f"not a coordinate pair: {point!r}")
            lat, lon = point
            if isinstance(lat, bool) or isinstance(lon, bool):
                raise ValueError(f"not a coordinate pair: {point!r}")
            points.append((float(lat), float(lon)))
    except (TypeError, ValueError) as e:
        logger.warning("Routing service returned a malformed path: %s", e)
        return None

    return points


def select_nearest_safe_shelter(
    user_location: tuple[float, float] | None,
    shelters: list[Shelter],
    hazard_zones: list,
) -> Shelter | None:
    """
    Pick the nearest shelter outside every hazard zone.

    Args:
        user_location: (latitude, longitude) of the user, or None.
        shelters:      Candidate shelters in any order.
        hazard_zones:  List of (lat, lon) rings.

    Returns:
        The nearest eligible shelter (first in input order on exact
        distance ties), or None if there is no location, no candidate,
        or every candidate is inside a hazard zone.
    """
    if user_location is None or not shelters:
        return None

    hazard_zones = drop_degenerate(hazard_zones)
    nearest = None
    min_distance = float("inf")

    for shelter in shelters:
        if not is_safe(hazard_zones, shelter.location):
            logger.debug("Shelter '%s' is inside a hazard zone", shelter.name)
            continue
        dist = haversine_km(user_location, shelter.location)
        if dist < min_distance:
            min_distance = dist
            nearest = shelter

    if nearest is not None:
        logger.info(
            "Nearest safe shelter: %s (%.3f km)", nearest.name, min_distance,
        )
    else:
        logger.info("No safe shelter among %d candidates", len(shelters))

    return nearest


async def _await_unless_cancelled(coro, cancel_event: asyncio.Event):
    """
    Await *coro* unless *cancel_event* fires first.

    Returns ``(finished, result)``; the pending call is cancelled when
    the event wins.
    """
    route_task = asyncio.ensure_future(coro)
    cancel_task = asyncio.ensure_future(cancel_event.wait())
    try:
        await asyncio.wait(
            {route_task, cancel_task},
            return_when=asyncio.FIRST_COMPLETED,
        )
    finally:
        cancel_task.cancel()
        # Also reached when the caller itself is cancelled
        if not route_task.done():
            route_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await route_task

    if route_task.cancelled():
        return False, None
    return True, route_task.result()


async def request_route(
    origin: tuple[float, float],
    destination: tuple[float, float],
    client=None,
    cancel_event: asyncio.Event | None = None,
    max_attempts: int | None = None,
    backoff_seconds: float | None = None,
) -> list[tuple[float, float]] | None:
    """
    Fetch a walking route from the routing client.

    Args:
        origin:          (latitude, longitude) of the start.
        destination:     (latitude, longitude) of the end.
        client:          Object with ``async get_route(origin, destination)``;
                         defaults to :func:`get_routing_client`.
        cancel_event:    Optional token; setting it abandons the request.
        max_attempts:    Total attempts (env ``ROUTING_MAX_ATTEMPTS``,
                         default 1, i.e. no retry).
        backoff_seconds: Base delay between attempts, doubled each retry
                         (env ``ROUTING_BACKOFF_SECONDS``).

    Returns:
        List of (lat, lon) waypoints, or None on failure, cancellation
        or an empty path.  Never raises for routing failures.
    """
    if client is None:
        client = get_routing_client()
    if max_attempts is None:
        max_attempts = _env_number(
            "ROUTING_MAX_ATTEMPTS", int, DEFAULT_MAX_ATTEMPTS,
        )
    if backoff_seconds is None:
        backoff_seconds = _env_number(
            "ROUTING_BACKOFF_SECONDS", float, DEFAULT_BACKOFF_SECONDS,
        )
    max_attempts = max(1, max_attempts)
    backoff_seconds = max(0.0, backoff_seconds)

    for attempt in range(1, max_attempts + 1):
        if cancel_event is not None and cancel_event.is_set():
            logger.info("Route request cancelled before attempt %d", attempt)
            return None

        try:
            if cancel_event is None:
                route = await client.get_route(origin, destination)
            else:
                finished, route = await _await_unless_cancelled(
                    client.get_route(origin, destination), cancel_event,
                )
                if not finished:
                    logger.info("Route request cancelled")
                    return None
        except RoutingError as e:
            logger.warning(
                "Routing failed (attempt %d/%d): %s", attempt, max_attempts, e,
            )
        except Exception as e:
            # Only cancellation propagates past this point
            logger.warning(
                "Routing client error (attempt %d/%d): %s: %s",
                attempt, max_attempts, type(e).__name__, e,
            )
        else:
            return _validate_route(route)

        if attempt < max_attempts:
            await asyncio.sleep(backoff_seconds * 2 ** (attempt - 1))

    return None


async def find_safe_route(
    user_location: tuple[float, float] | None,
    shelters: list[Shelter],
    hazard_zones: list,
    client=None,
    cancel_event: asyncio.Event | None = None,
) -> SelectionResult:
    """
    Find the nearest safe shelter and a walking route to it.

    Args:
        user_location: (latitude, longitude) of the user, or None.
        shelters:      Candidate shelters.
        hazard_zones:  List of (lat, lon) rings; empty means no hazards.
        client:        Routing client, see :func:`request_route`.
        cancel_event:  Optional cancellation token for the route call.

    Returns:
        SelectionResult.  ``shelter`` is None when nothing is safe;
        ``route`` is None when the shelter was found but routing failed.
    """
    logger.info(
        "Safe-route request: location=%s shelters=%d hazard_zones=%d",
        user_location, len(shelters), len(hazard_zones),
    )

    shelter = select_nearest_safe_shelter(user_location, shelters, hazard_zones)
    if shelter is None:
        return SelectionResult()

    route = await request_route(
        user_location,
        shelter.location,
        client=client,
        cancel_event=cancel_event,
    )

    result = SelectionResult(
        shelter=shelter,
        route=tuple(route) if route is not None else None,
    )
    logger.info(
        "Safe-route response: status=%s shelter=%s waypoints=%d",
        result.status, shelter.name, len(route) if route else 0,
    )
    return result

"""
lambda_handler.py — AWS Lambda + API Gateway wrapper for safe routing.

Parses the ``location`` query parameter, loads hazard zones and
shelters (from the JSON request body when given, otherwise the demo
datasets), delegates to ``shelter_selector.find_safe_route()`` and
returns a JSON envelope.

Expected API Gateway query:
    GET /safe-route?location=12.9716,77.5946

Optional body:
    {"hazards": <FeatureCollection>, "shelters": <FeatureCollection>}
"""

import asyncio
import base64
import json
import logging
import traceback

from safe_route.data.demo_data import demo_hazards, demo_shelters
from safe_route.data.geojson_loader import load_hazard_zones, load_shelters
from safe_route.routing.shelter_selector import find_safe_route

logger = logging.getLogger(__name__)

_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}


def _parse_coord(value: str) -> tuple[float, float]:
    """Parse 'lat,lon' string to (lat, lon) tuple."""
    parts = value.strip().split(",")
    if len(parts) != 2:
        raise ValueError(f"Expected 'lat,lon', got '{value}'")
    lat, lon = float(parts[0]), float(parts[1])
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        raise ValueError(f"Coordinates out of range: '{value}'")
    return (lat, lon)


def _parse_body(event: dict) -> dict:
    raw = event.get("body")
    if not raw:
        return {}
    if event.get("isBase64Encoded"):
        raw = base64.b64decode(raw).decode("utf-8")
    body = json.loads(raw)
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body


def _error(status_code: int, message: str) -> dict:
    return {
        "statusCode": status_code,
        "headers": _HEADERS,
        "body": json.dumps({"status": "error", "message": message}),
    }


def handler(event, context):
    """
    AWS Lambda entrypoint for the safe-route API.

    Invoked via API Gateway HTTP API (v2 payload format).
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        params = event.get("queryStringParameters") or {}
        raw_location = params.get("location", "")

        if not raw_location:
            return _error(
                400,
                "Missing required query parameter: location (format: lat,lon)",
            )

        location = _parse_coord(raw_location)
        body = _parse_body(event)

        hazard_zones = load_hazard_zones(body.get("hazards") or demo_hazards())
        shelters = load_shelters(body.get("shelters") or demo_shelters())

        result = asyncio.run(find_safe_route(location, shelters, hazard_zones))

        return {
            "statusCode": 200,
            "headers": _HEADERS,
            "body": json.dumps(result.to_dict()),
        }

    except ValueError as e:
        logger.error("Invalid parameters: %s", e)
        return _error(400, f"Invalid parameters: {e}")

    except Exception as e:
        logger.error("Unhandled error: %s\n%s", e, traceback.format_exc())
        return _error(500, "Internal server error")

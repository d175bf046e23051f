"""
geojson_loader.py — Read hazard zones and shelters from GeoJSON.

Hazard FeatureCollections carry ``Polygon`` / ``MultiPolygon`` features
with metadata (type, severity, name, updated); only the exterior ring
geometry is kept.  Shelter FeatureCollections carry ``Point`` features
with a ``name`` property.

GeoJSON coordinates are ``[lon, lat]``; everything returned here is
``(lat, lon)``.
"""

import json
import logging

from shapely.errors import GEOSException
from shapely.geometry import MultiPolygon, Point, Polygon, shape

from safe_route.models import Shelter

logger = logging.getLogger(__name__)


def load_geojson_file(path: str) -> dict:
    """Read a GeoJSON document from disk."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _exterior_ring(polygon: Polygon) -> list[tuple[float, float]]:
    """Shapely (x=lon, y=lat) exterior → list of (lat, lon)."""
    return [(float(y), float(x)) for x, y in polygon.exterior.coords]


def load_hazard_zones(flood_geojson: dict) -> list[list[tuple[float, float]]]:
    """
    Extract hazard rings from a GeoJSON FeatureCollection.

    Interior rings (holes) are ignored; a hole inside a hazard zone is
    still treated as hazardous.  Features whose geometry cannot be
    parsed or has fewer than 3 distinct vertices are skipped with a
    warning.

    Args:
        flood_geojson: GeoJSON FeatureCollection of hazard features.

    Returns:
        List of closed (lat, lon) rings.
    """
    zones = []

    for idx, feature in enumerate(flood_geojson.get("features", [])):
        props = feature.get("properties") or {}
        label = props.get("name", f"hazard_{idx}")

        try:
            geometry = shape(feature["geometry"])
        except (
            AttributeError, KeyError, TypeError, ValueError, GEOSException,
        ) as e:
            logger.warning("Skipping hazard '%s': invalid geometry (%s)", label, e)
            continue

        if isinstance(geometry, Polygon):
            polygons = [geometry]
        elif isinstance(geometry, MultiPolygon):
            polygons = list(geometry.geoms)
        else:
            logger.warning(
                "Skipping hazard '%s': unsupported geometry %s",
                label, geometry.geom_type,
            )
            continue

        for polygon in polygons:
            ring = _exterior_ring(polygon)
            if len(set(ring)) < 3:
                logger.warning("Skipping hazard '%s': degenerate ring", label)
                continue
            zones.append(ring)

    logger.info("Loaded %d hazard zone(s)", len(zones))
    return zones


def load_shelters(shelter_geojson: dict) -> list[Shelter]:
    """
    Extract shelters from a GeoJSON FeatureCollection of Point features.

    Each shelter is named from ``properties.name``, falling back to
    ``shelter_<idx>``.  Non-point features are skipped.
    """
    shelters = []

    for idx, feature in enumerate(shelter_geojson.get("features", [])):
        props = feature.get("properties") or {}
        name = props.get("name") or f"shelter_{idx}"

        try:
            geometry = shape(feature["geometry"])
        except (
            AttributeError, KeyError, TypeError, ValueError, GEOSException,
        ) as e:
            logger.warning("Skipping shelter '%s': invalid geometry (%s)", name, e)
            continue

        if not isinstance(geometry, Point) or geometry.is_empty:
            logger.warning(
                "Skipping shelter '%s': expected Point, got %s",
                name, geometry.geom_type,
            )
            continue

        shelters.append(Shelter(name=name, location=(geometry.y, geometry.x)))

    logger.info("Loaded %d shelter(s)", len(shelters))
    return shelters

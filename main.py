"""
main.py — CLI entry point for SafeRoute.

Usage:
    python main.py --lat 12.9716 --lon 77.5946
    python main.py --lat 12.9716 --lon 77.5946 --provider mock
    python main.py --lat 12.97 --lon 77.59 --hazards zones.geojson \
        --shelters shelters.geojson --output result.json
"""

import argparse
import asyncio
import json
import logging
import sys

from safe_route.data.demo_data import demo_hazards, demo_shelters
from safe_route.data.geojson_loader import (
    load_geojson_file,
    load_hazard_zones,
    load_shelters,
)
from safe_route.routing.factory import PROVIDERS, get_routing_client
from safe_route.routing.shelter_selector import find_safe_route


def main():
    parser = argparse.ArgumentParser(
        prog="saferoute",
        description="SafeRoute — nearest safe shelter and walking route",
        epilog="Example: python main.py --lat 12.9716 --lon 77.5946 --provider mock",
    )
    parser.add_argument("--lat", type=float, required=True,
                        help="User latitude in decimal degrees")
    parser.add_argument("--lon", type=float, required=True,
                        help="User longitude in decimal degrees")
    parser.add_argument(
        "--hazards",
        default=None,
        help="GeoJSON FeatureCollection of hazard polygons (default: demo data)",
    )
    parser.add_argument(
        "--shelters",
        default=None,
        help="GeoJSON FeatureCollection of shelter points (default: demo data)",
    )
    parser.add_argument(
        "--provider", "-p",
        choices=PROVIDERS,
        default=None,
        help="Routing provider (default: $ROUTING_PROVIDER or ors)",
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to write the JSON result file (optional)",
        default=None,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        hazards = (
            load_geojson_file(args.hazards) if args.hazards else demo_hazards()
        )
        shelters = (
            load_geojson_file(args.shelters) if args.shelters else demo_shelters()
        )
    except (OSError, ValueError) as e:
        print(f"Error: could not read input data: {e}", file=sys.stderr)
        sys.exit(1)

    result = asyncio.run(
        find_safe_route(
            (args.lat, args.lon),
            load_shelters(shelters),
            load_hazard_zones(hazards),
            client=get_routing_client(provider=args.provider),
        )
    )

    output = result.to_dict()
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(output, f, indent=2)

    print(json.dumps(output, indent=2))
    if result.shelter is None:
        sys.exit(2)


if __name__ == "__main__":
    main()

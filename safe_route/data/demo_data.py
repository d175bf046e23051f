"""
demo_data.py — Static demo datasets for central Bengaluru.

One flood zone and three shelters, one of which sits inside the zone.
Used by the CLI and Lambda handler when no data is supplied.
"""

from datetime import datetime, timezone


def demo_hazards() -> dict:
    """Demo hazard FeatureCollection, stamped with the current time."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {
                    "type": "flood",
                    "severity": "high",
                    "name": "Demo Flood Zone",
                    "updated": datetime.now(timezone.utc).isoformat(),
                },
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [[
                        [77.5910, 12.9700],
                        [77.5920, 12.9730],
                        [77.5970, 12.9740],
                        [77.5960, 12.9710],
                        [77.5910, 12.9700],
                    ]],
                },
            }
        ],
    }


def demo_shelters() -> dict:
    """Demo shelter FeatureCollection."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "City Hall Shelter"},
                "geometry": {"type": "Point", "coordinates": [77.5933, 12.9721]},
            },
            {
                "type": "Feature",
                "properties": {"name": "Community Center"},
                "geometry": {"type": "Point", "coordinates": [77.5980, 12.9755]},
            },
            {
                "type": "Feature",
                "properties": {"name": "VIT Shelter"},
                "geometry": {"type": "Point", "coordinates": [77.6000, 12.9680]},
            },
        ],
    }

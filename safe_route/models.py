"""
models.py — Plain data types shared across the safe-route core.

Coordinates are ``(latitude, longitude)`` tuples in decimal degrees
(WGS84).  GeoJSON sources use ``[longitude, latitude]``; conversion
happens once, in :mod:`safe_route.data.geojson_loader`.
"""

from dataclasses import dataclass

Point = tuple[float, float]
Polygon = list[Point]

STATUS_OK = "ok"
STATUS_NO_ROUTE = "no_route"
STATUS_NO_SHELTER = "no_shelter"

_MESSAGES = {
    STATUS_OK: "Safe shelter found. Follow the highlighted walking route.",
    STATUS_NO_ROUTE: (
        "Safe shelter found, but a walking route is currently unavailable. "
        "Head towards the shelter and avoid the marked danger zone."
    ),
    STATUS_NO_SHELTER: (
        "No safe shelter is available outside the danger zone. "
        "Move away from the hazard and contact emergency services."
    ),
}


@dataclass(frozen=True)
class Shelter:
    """A named safe destination."""

    name: str
    location: Point

    def to_dict(self) -> dict:
        return {"name": self.name, "location": list(self.location)}


@dataclass(frozen=True)
class SelectionResult:
    """
    Outcome of one safe-route request.

    ``shelter`` is None when no candidate lies outside every hazard zone.
    ``route`` is None when a shelter was found but no walking path could
    be obtained.
    """

    shelter: Shelter | None = None
    route: tuple[Point, ...] | None = None

    @property
    def status(self) -> str:
        if self.shelter is None:
            return STATUS_NO_SHELTER
        if self.route is None:
            return STATUS_NO_ROUTE
        return STATUS_OK

    @property
    def message(self) -> str:
        return _MESSAGES[self.status]

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "message": self.message,
            "shelter": self.shelter.to_dict() if self.shelter else None,
            "route": (
                [list(p) for p in self.route]
                if self.route is not None
                else None
            ),
        }

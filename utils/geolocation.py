import math
from dataclasses import dataclass
from typing import Optional

import config

EARTH_RADIUS_M = 6371e3


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class LocationCheck:
    verified: bool
    distance: Optional[float]
    error: Optional[str] = None


def calculate_distance(coord1: Coordinates, coord2: Coordinates) -> float:
    """Great-circle distance between two points in meters (Haversine formula)."""
    phi1 = math.radians(coord1.latitude)
    phi2 = math.radians(coord2.latitude)
    dphi = math.radians(coord2.latitude - coord1.latitude)
    dlambda = math.radians(coord2.longitude - coord1.longitude)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def is_within_radius(user_coords: Coordinates, station_coords: Coordinates, radius_meters: float) -> bool:
    return calculate_distance(user_coords, station_coords) <= radius_meters


def verify_location(user_coords: Optional[Coordinates], station_coords: Coordinates,
                    radius_meters: float = config.DEFAULT_LOCATION_RADIUS_M) -> LocationCheck:
    if user_coords is None:
        return LocationCheck(
            verified=False,
            distance=None,
            error="Could not get your location. Check location permissions.",
        )

    distance = calculate_distance(user_coords, station_coords)
    if distance <= radius_meters:
        return LocationCheck(verified=True, distance=distance)

    return LocationCheck(
        verified=False,
        distance=distance,
        error=f"You are too far from the station. Distance: {round(distance)}m (max: {radius_meters}m)",
    )

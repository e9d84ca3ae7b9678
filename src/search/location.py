"""Location helpers: device fallback, reverse-geocode degradation, distance.

The device location provider and the geocoder are injected async
callables; both may fail and neither failure blocks a search.
"""

import logging
import math
from collections.abc import Awaitable, Callable

from src.core.schemas import GeoPoint

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0

LocationProvider = Callable[[], Awaitable[GeoPoint | None]]
ReverseGeocoder = Callable[[GeoPoint], Awaitable[str | None]]


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two coordinates in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


async def resolve_location(provider: LocationProvider | None, default: GeoPoint) -> GeoPoint:
    """Ask the device for its position, falling back to ``default``.

    Permission denial, an unavailable fix and provider errors all fall back.
    """
    if provider is None:
        return default
    try:
        point = await provider()
    except Exception:
        logger.info("Device location unavailable, using default", exc_info=True)
        return default
    if point is None:
        logger.info("Device returned no location, using default")
        return default
    return point


def format_coordinates(point: GeoPoint) -> str:
    return f"{point.latitude:.5f}, {point.longitude:.5f}"


async def describe_location(point: GeoPoint, geocoder: ReverseGeocoder | None) -> str:
    """Human-readable address for a point, or its raw coordinates on failure."""
    if geocoder is None:
        return format_coordinates(point)
    try:
        address = await geocoder(point)
    except Exception:
        logger.debug("Reverse geocoding failed for %s", point, exc_info=True)
        return format_coordinates(point)
    return address.strip() if address and address.strip() else format_coordinates(point)

"""Map scale - static satellite image URL and ground platform sizing."""

from __future__ import annotations
import math

from pydantic import BaseModel

# Web-Mercator ground resolution at the equator, zoom 0 (meters/pixel)
EQUATOR_RESOLUTION = 156543.03392

STATIC_MAP_ENDPOINT = "https://maps.googleapis.com/maps/api/staticmap"


class PlatformSize(BaseModel):
    """Real-world extent of the map image and of the platform under it."""
    meters_per_pixel: float
    map_width: float
    map_length: float
    platform_width: float
    platform_length: float


def meters_per_pixel(lat: float, zoom: int) -> float:
    return EQUATOR_RESOLUTION * math.cos(math.radians(lat)) / 2 ** zoom


def platform_size(
    lat: float,
    zoom: int,
    width_px: int,
    height_px: int,
    margin: float = 1.25,
) -> PlatformSize:
    """Size the ground platform as `margin` times the mapped area."""
    mpp = meters_per_pixel(lat, zoom)
    map_width = mpp * width_px
    map_length = mpp * height_px
    return PlatformSize(
        meters_per_pixel=mpp,
        map_width=map_width,
        map_length=map_length,
        platform_width=map_width * margin,
        platform_length=map_length * margin,
    )


def static_map_url(
    lat: float,
    lng: float,
    zoom: int = 17,
    width: int = 640,
    height: int = 640,
    api_key: str = "",
    map_type: str = "satellite",
) -> str:
    return (
        f"{STATIC_MAP_ENDPOINT}?center={lat},{lng}&zoom={zoom}"
        f"&size={width}x{height}&maptype={map_type}&key={api_key}"
    )

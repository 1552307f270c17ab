from __future__ import annotations

import re
from typing import Dict, Optional

from loguru import logger

from config import Configuration
from models import Location
from services.geoapify import GeoapifyClient, GeoapifyError

INDIAN_CITY_REGISTRY: Dict[str, Dict[str, object]] = {
    "delhi": {
        "canonical": "Delhi",
        "state": "Delhi",
        "center": (28.6139, 77.2090),
        "aliases": {"new delhi", "ncr", "delhi ncr"},
    },
    "mumbai": {
        "canonical": "Mumbai",
        "state": "Maharashtra",
        "center": (19.0760, 72.8777),
        "aliases": {"bombay"},
    },
    "bangalore": {
        "canonical": "Bangalore",
        "state": "Karnataka",
        "center": (12.9716, 77.5946),
        "aliases": {"bengaluru"},
    },
    "hyderabad": {
        "canonical": "Hyderabad",
        "state": "Telangana",
        "center": (17.3850, 78.4867),
        "aliases": set(),
    },
    "chennai": {
        "canonical": "Chennai",
        "state": "Tamil Nadu",
        "center": (13.0827, 80.2707),
        "aliases": {"madras"},
    },
    "kolkata": {
        "canonical": "Kolkata",
        "state": "West Bengal",
        "center": (22.5726, 88.3639),
        "aliases": {"calcutta"},
    },
}


def _normalize_city(text: Optional[str]) -> str:
    if not text:
        return ""
    return re.sub(r"[^a-z ]+", "", text.replace(",", " ").lower()).strip()


def lookup_city(city: Optional[str]) -> Optional[Location]:
    city_norm = _normalize_city(city)
    if not city_norm:
        return None

    entry = INDIAN_CITY_REGISTRY.get(city_norm)
    if not entry:
        for value in INDIAN_CITY_REGISTRY.values():
            if city_norm in value.get("aliases", set()):  # type: ignore[operator]
                entry = value
                break
    if not entry:
        return None

    lat, lon = entry["center"]  # type: ignore[misc]
    return Location(latitude=lat, longitude=lon, city=str(entry["canonical"]), state=str(entry["state"]))


def resolve_city_center(city: str, cfg: Configuration, client: Optional[GeoapifyClient] = None) -> Optional[Location]:
    """Registry first, then Geoapify when a key is configured. None when unknown."""
    known = lookup_city(city)
    if known is not None:
        return known
    if not cfg.has_geoapify():
        logger.debug("city {!r} not in registry and geocoding disabled", city)
        return None
    client = client or GeoapifyClient(cfg)
    try:
        return client.geocode_city(city)
    except GeoapifyError as exc:
        logger.warning("geocode failed for city {!r}: {}", city, exc)
        return None

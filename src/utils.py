"""Utility helpers for the local guide service."""

from __future__ import annotations

import math
import re
from typing import Optional

from errors import ValidationFailure

EARTH_RADIUS_KM = 6371.0

_PUNCTUATION = re.compile(r"[^\w\s]")


def mask_secret(value: Optional[str], visible: int = 4) -> str:
    if not value:
        return "unset"
    if len(value) <= visible * 2:
        return "*" * len(value)
    return f"{value[:visible]}...{value[-visible:]}"


def normalize_text(text: str) -> str:
    """Lowercase, trim and strip punctuation."""
    if not text:
        return ""
    return _PUNCTUATION.sub("", text.lower().strip())


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometers."""
    R = EARTH_RADIUS_KM
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return R * c


def validate_coordinates(lat: float, lon: float) -> None:
    errors: list[str] = []
    if not -90.0 <= lat <= 90.0:
        errors.append(f"latitude must be between -90 and 90 (got {lat})")
    if not -180.0 <= lon <= 180.0:
        errors.append(f"longitude must be between -180 and 180 (got {lon})")
    if errors:
        raise ValidationFailure("Invalid coordinates", errors)

from __future__ import annotations

import dataclasses
import math
import re
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from config import Configuration
from errors import NotFoundError, ValidationFailure
from models import (
    SPICE_LEVELS,
    WEEKDAYS,
    FoodFilters,
    FoodHub,
    FoodItem,
    FoodRecommendation,
    FoodVendor,
    Location,
    SafetyRating,
    TimeSlot,
)
from services.city_registry import resolve_city_center
from services.food_repository import FoodRepository
from services.geoapify import GeoapifyClient
from utils import haversine_km, validate_coordinates

NO_HOURS = "Check operating hours"
RATING_MIN = 1.0
RATING_MAX = 5.0

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def best_time(hours: Mapping[str, Sequence[TimeSlot]], today: Optional[str] = None) -> str:
    """First opening slot for today as ``"HH:MM - HH:MM"``."""
    day = (today or WEEKDAYS[datetime.now().weekday()]).lower()
    slots = hours.get(day) or []
    if not slots:
        return NO_HOURS
    first = slots[0]
    return f"{first.open} - {first.close}"


def _rating_errors(rating: SafetyRating) -> List[str]:
    errors = []
    for name in ("overall", "hygiene", "freshness", "popularity"):
        value = getattr(rating, name)
        if not RATING_MIN <= value <= RATING_MAX:
            errors.append(f"safety rating {name} must be between {RATING_MIN:g} and {RATING_MAX:g}")
    if rating.review_count < 0:
        errors.append("review count cannot be negative")
    return errors


def validate_safety_rating(rating: SafetyRating) -> None:
    errors = _rating_errors(rating)
    if errors:
        raise ValidationFailure("Invalid safety rating", errors)


def validate_food_item(item: FoodItem) -> None:
    errors = [f"{name} cannot be empty" for name in ("name", "description", "category", "region") if not getattr(item, name).strip()]
    if item.spice_level not in SPICE_LEVELS:
        errors.append(f"spice level must be one of: {', '.join(SPICE_LEVELS)}")
    if errors:
        raise ValidationFailure("Invalid food item", errors)


def validate_vendor(vendor: FoodVendor) -> None:
    errors: list[str] = []
    if not vendor.name.strip():
        errors.append("name cannot be empty")
    try:
        validate_coordinates(vendor.location.latitude, vendor.location.longitude)
    except ValidationFailure as exc:
        errors.extend(exc.errors)
    if vendor.price_range.min < 0:
        errors.append("minimum price cannot be negative")
    if vendor.price_range.max < vendor.price_range.min:
        errors.append("maximum price must be at least the minimum price")
    errors.extend(_rating_errors(vendor.safety_rating))
    for day, slots in vendor.operating_hours.items():
        if day not in WEEKDAYS:
            errors.append(f"unknown weekday {day!r} in operating hours")
        for slot in slots:
            if not (_HHMM.match(slot.open) and _HHMM.match(slot.close)):
                errors.append(f"operating hours on {day} must use HH:MM")
    if errors:
        raise ValidationFailure("Invalid vendor", errors)


def _hub_key(location: Location) -> str:
    return f"{location.city}-{math.floor(location.latitude * 100)}-{math.floor(location.longitude * 100)}"


class FoodRecommender:
    def __init__(
        self,
        repository: FoodRepository,
        cfg: Configuration,
        geocoder: Optional[GeoapifyClient] = None,
    ) -> None:
        self.repository = repository
        self.cfg = cfg
        self.geocoder = geocoder

    def _recommendation(self, vendor: FoodVendor, item: FoodItem, distance_km: float) -> FoodRecommendation:
        return FoodRecommendation(
            name=item.name,
            description=item.description,
            location=vendor.location,
            safety_rating=vendor.safety_rating,
            price_range=vendor.price_range,
            dietary_info=item.dietary_info,
            best_time=best_time(vendor.operating_hours),
            hygiene_notes=vendor.hygiene_notes,
            distance_km=round(distance_km, 3),
            vendor_id=vendor.id,
            vendor_name=vendor.name,
        )

    @staticmethod
    def _by_safety(pairs: List[Tuple[FoodRecommendation, float]]) -> List[FoodRecommendation]:
        pairs.sort(key=lambda p: (-p[0].safety_rating.overall, p[1]))
        return [rec for rec, _ in pairs]

    def recommend(self, location: Location, filters: Optional[FoodFilters] = None) -> List[FoodRecommendation]:
        """Safest offerings near location; ties go to the closer vendor."""
        filters = filters or FoodFilters()
        logger.debug("recommend lat={} lon={} filters={}", location.latitude, location.longitude, filters)
        validate_coordinates(location.latitude, location.longitude)

        radius = filters.radius_km if filters.radius_km is not None else self.cfg.default_radius_km
        if radius <= 0:
            raise ValidationFailure("Invalid filters", ["radius_km must be positive"])
        min_rating = filters.min_rating if filters.min_rating is not None else self.cfg.default_min_rating
        effective = dataclasses.replace(filters, min_rating=min_rating, radius_km=radius)

        scored: list[Tuple[FoodRecommendation, float]] = []
        for vendor, item in self.repository.find_offerings(effective):
            dist = haversine_km(location.latitude, location.longitude, vendor.location.latitude, vendor.location.longitude)
            if dist > radius:
                continue
            scored.append((self._recommendation(vendor, item, dist), dist))

        results = self._by_safety(scored)[: self.cfg.max_recommendations]
        logger.info("recommend returned {} of {} candidates", len(results), len(scored))
        return results

    def by_category(self, category: str, location: Location) -> List[FoodRecommendation]:
        logger.debug("food by category category={}", category)
        validate_coordinates(location.latitude, location.longitude)
        items = self.repository.search_food_items(category=category, limit=1000)
        if not items:
            return []

        scored: list[Tuple[FoodRecommendation, float]] = []
        for vendor, dist in self.repository.find_vendors_within_radius(location, self.cfg.category_radius_km):
            for item in items:
                if item.id in vendor.food_items:
                    scored.append((self._recommendation(vendor, item, dist), dist))
        return self._by_safety(scored)[: self.cfg.max_search_results]

    def search(self, query: str, location: Location) -> List[FoodRecommendation]:
        """Name matches first, then safety, then distance."""
        logger.debug("food search query={!r}", query)
        validate_coordinates(location.latitude, location.longitude)
        needle = query.lower().strip()
        if not needle:
            return []
        items = self.repository.search_food_items(query=needle, limit=1000)
        if not items:
            return []

        scored: list[Tuple[FoodRecommendation, float]] = []
        for vendor, dist in self.repository.find_vendors_within_radius(location, self.cfg.category_radius_km):
            for item in items:
                if item.id in vendor.food_items:
                    scored.append((self._recommendation(vendor, item, dist), dist))

        scored.sort(key=lambda p: (needle not in p[0].name.lower(), -p[0].safety_rating.overall, p[1]))
        return [rec for rec, _ in scored][: self.cfg.max_search_results]

    def popular_hubs(self, city: str) -> List[FoodHub]:
        logger.debug("popular hubs city={}", city)
        center = resolve_city_center(city, self.cfg, self.geocoder)
        if center is None:
            logger.info("no center known for city {!r}", city)
            return []

        hubs: Dict[str, FoodHub] = {}
        for vendor, _ in self.repository.find_vendors_within_radius(center, self.cfg.hub_radius_km):
            key = _hub_key(vendor.location)
            hub = hubs.get(key)
            if hub is None:
                hub = FoodHub(
                    name=f"{vendor.location.city} Food Hub",
                    location=vendor.location,
                    description=f"Popular food area in {vendor.location.city}",
                    best_time_to_visit=best_time(vendor.operating_hours),
                    safety_tips=[f"Accessible by local transport in {vendor.location.city}"],
                )
                hubs[key] = hub
            for item_id in vendor.food_items:
                item = self.repository.find_food_item(item_id)
                if item is not None and item.name not in hub.popular_items:
                    hub.popular_items.append(item.name)

        result = sorted(hubs.values(), key=lambda h: len(h.popular_items), reverse=True)
        logger.info("popular hubs city={} count={}", city, len(result))
        return result

    def rate_safety(self, vendor_id: str) -> SafetyRating:
        vendor = self.repository.find_vendor(vendor_id)
        if vendor is None:
            raise NotFoundError(f"Vendor {vendor_id}")
        return vendor.safety_rating

    def update_safety_rating(self, vendor_id: str, rating: SafetyRating) -> FoodVendor:
        validate_safety_rating(rating)
        return self.repository.update_safety_rating(vendor_id, rating)

    def add_food_item(self, item: FoodItem) -> FoodItem:
        validate_food_item(item)
        created = self.repository.create_food_item(item)
        logger.info("food item added name={!r} id={}", created.name, created.id)
        return created

    def add_vendor(self, vendor: FoodVendor) -> FoodVendor:
        validate_vendor(vendor)
        missing = [i for i in vendor.food_items if self.repository.find_food_item(i) is None]
        if missing:
            raise ValidationFailure("Invalid vendor", [f"unknown food item {i}" for i in missing])
        created = self.repository.create_vendor(vendor)
        logger.info("vendor added name={!r} id={}", created.name, created.id)
        return created

    def statistics(self) -> Dict[str, object]:
        return self.repository.statistics()

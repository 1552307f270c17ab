from __future__ import annotations

import dataclasses
from collections import Counter
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from errors import NotFoundError
from models import FoodFilters, FoodItem, FoodVendor, Location, SafetyRating, utcnow
from services.bbox_builder import bbox_contains, expand_bbox_from_center
from services.store import InMemoryStore
from utils import haversine_km

ITEMS = "food_items"
VENDORS = "food_vendors"


def _item_matches(item: FoodItem, filters: FoodFilters) -> bool:
    diet = item.dietary_info
    if filters.vegetarian_only and not diet.is_vegetarian:
        return False
    if filters.vegan_only and not diet.is_vegan:
        return False
    if filters.spice_level and item.spice_level != filters.spice_level:
        return False
    return True


def _vendor_matches(vendor: FoodVendor, filters: FoodFilters) -> bool:
    if filters.max_price is not None and vendor.price_range.max > filters.max_price:
        return False
    if filters.min_rating is not None and vendor.safety_rating.overall < filters.min_rating:
        return False
    return True


class FoodRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    # food items

    def create_food_item(self, item: FoodItem) -> FoodItem:
        now = utcnow()
        record = dataclasses.replace(item, id=None, created_at=now, updated_at=now)
        with self.store.transaction() as tx:
            return tx.insert(ITEMS, record)

    def find_food_item(self, item_id: str) -> Optional[FoodItem]:
        return self.store.get(ITEMS, item_id)

    def find_food_items_by_name(self, name: str) -> List[FoodItem]:
        wanted = name.lower().strip()
        return [i for i in self.store.all(ITEMS) if i.name.lower() == wanted]

    def search_food_items(self, query: str = "", category: Optional[str] = None, limit: int = 50) -> List[FoodItem]:
        """Substring match on name, description or category; empty query matches everything."""
        needle = query.lower().strip()
        wanted_category = category.lower().strip() if category else None
        hits: list[FoodItem] = []
        for item in self.store.all(ITEMS):
            if wanted_category is not None and item.category.lower() != wanted_category:
                continue
            text = (item.name.lower(), item.description.lower(), item.category.lower())
            if needle and not any(needle in field for field in text):
                continue
            hits.append(item)
        hits.sort(key=lambda i: i.name.lower())
        return hits[:limit]

    # vendors

    def create_vendor(self, vendor: FoodVendor) -> FoodVendor:
        now = utcnow()
        record = dataclasses.replace(vendor, id=None, created_at=now, updated_at=now)
        with self.store.transaction() as tx:
            return tx.insert(VENDORS, record)

    def find_vendor(self, vendor_id: str) -> Optional[FoodVendor]:
        return self.store.get(VENDORS, vendor_id)

    def add_items_to_vendor(self, vendor_id: str, item_ids: List[str]) -> FoodVendor:
        with self.store.transaction() as tx:
            vendor = tx.get(VENDORS, vendor_id)
            if vendor is None:
                raise NotFoundError(f"Vendor {vendor_id}")
            merged = list(vendor.food_items)
            merged.extend(i for i in item_ids if i not in merged)
            return tx.replace(VENDORS, dataclasses.replace(vendor, food_items=merged, updated_at=utcnow()))

    def update_safety_rating(self, vendor_id: str, rating: SafetyRating) -> FoodVendor:
        with self.store.transaction() as tx:
            vendor = tx.get(VENDORS, vendor_id)
            if vendor is None:
                raise NotFoundError(f"Vendor {vendor_id}")
            updated = tx.replace(VENDORS, dataclasses.replace(vendor, safety_rating=rating, updated_at=utcnow()))
        logger.info("safety rating updated vendor={} overall={}", vendor_id, rating.overall)
        return updated

    def find_vendors_within_radius(self, location: Location, radius_km: float) -> List[Tuple[FoodVendor, float]]:
        """Vendors within radius_km of location, nearest first, with their distance."""
        bbox = expand_bbox_from_center(location.latitude, location.longitude, radius_km)
        out: list[Tuple[FoodVendor, float]] = []
        for vendor in self.store.all(VENDORS):
            lat, lon = vendor.location.latitude, vendor.location.longitude
            if not bbox_contains(bbox, lat, lon):
                continue
            dist = haversine_km(location.latitude, location.longitude, lat, lon)
            if dist <= radius_km:
                out.append((vendor, dist))
        out.sort(key=lambda pair: pair[1])
        return out

    def find_offerings(self, filters: FoodFilters) -> List[Tuple[FoodVendor, FoodItem]]:
        """All (vendor, item) pairs that pass the dietary, price and rating filters."""
        items = {i.id: i for i in self.store.all(ITEMS)}
        pairs: list[Tuple[FoodVendor, FoodItem]] = []
        for vendor in self.store.all(VENDORS):
            if not _vendor_matches(vendor, filters):
                continue
            for item_id in vendor.food_items:
                item = items.get(item_id)
                if item is not None and _item_matches(item, filters):
                    pairs.append((vendor, item))
        return pairs

    def statistics(self) -> Dict[str, Any]:
        items = self.store.all(ITEMS)
        vendors = self.store.all(VENDORS)
        ratings = [v.safety_rating.overall for v in vendors]
        return {
            "total_food_items": len(items),
            "total_vendors": len(vendors),
            "items_by_category": dict(Counter(i.category for i in items)),
            "items_by_region": dict(Counter(i.region for i in items)),
            "average_safety_rating": round(sum(ratings) / len(ratings), 2) if ratings else 0.0,
        }

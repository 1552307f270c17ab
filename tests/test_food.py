from __future__ import annotations

from typing import Tuple

import pytest

from config import Configuration
from errors import NotFoundError, ValidationFailure
from models import (
    DietaryInfo,
    FoodFilters,
    FoodItem,
    FoodVendor,
    Location,
    PriceRange,
    SafetyRating,
    TimeSlot,
)
from services.food import FoodRecommender, best_time, validate_safety_rating
from services.food_repository import FoodRepository
from services.store import InMemoryStore
from utils import haversine_km

DELHI = Location(28.6139, 77.2090, "Delhi", "Delhi")


@pytest.fixture
def recommender() -> FoodRecommender:
    return FoodRecommender(FoodRepository(InMemoryStore()), Configuration(seed_on_startup=False))


def _item(recommender: FoodRecommender, name: str, category: str = "street food", veg: bool = True) -> FoodItem:
    return recommender.add_food_item(
        FoodItem(
            name=name,
            description=f"{name} from the lanes",
            category=category,
            region="delhi",
            dietary_info=DietaryInfo(is_vegetarian=veg),
        )
    )


def _vendor(
    recommender: FoodRecommender,
    name: str,
    at: Tuple[float, float],
    rating: float,
    *items: FoodItem,
    max_price: float = 100,
) -> FoodVendor:
    return recommender.add_vendor(
        FoodVendor(
            name=name,
            location=Location(at[0], at[1], "Delhi", "Delhi"),
            safety_rating=SafetyRating(overall=rating, hygiene=rating, freshness=rating, popularity=rating),
            price_range=PriceRange(10, max_price),
            food_items=[i.id for i in items],
            operating_hours={"monday": [TimeSlot("08:00", "22:00")]},
        )
    )


def test_vendor_beyond_radius_is_excluded(recommender: FoodRecommender) -> None:
    chaat = _item(recommender, "Aloo Chaat")
    _vendor(recommender, "Near", (28.6139, 77.2090), 4.0, chaat)
    far = (28.7218, 77.2090)  # ~12 km north
    assert 11.5 < haversine_km(DELHI.latitude, DELHI.longitude, *far) < 12.5
    _vendor(recommender, "Far", far, 5.0, chaat)

    results = recommender.recommend(DELHI, FoodFilters(radius_km=10))

    assert [r.vendor_name for r in results] == ["Near"]
    assert all(r.distance_km <= 10 for r in results)


def test_recommendations_sorted_by_rating_then_distance(recommender: FoodRecommender) -> None:
    chaat = _item(recommender, "Aloo Chaat")
    _vendor(recommender, "Close-OK", (28.6149, 77.2090), 4.0, chaat)
    _vendor(recommender, "Far-Best", (28.6339, 77.2090), 4.5, chaat)
    _vendor(recommender, "Mid-OK", (28.6239, 77.2090), 4.0, chaat)

    results = recommender.recommend(DELHI)

    assert [r.vendor_name for r in results] == ["Far-Best", "Close-OK", "Mid-OK"]


def test_default_min_rating_applies(recommender: FoodRecommender) -> None:
    chaat = _item(recommender, "Aloo Chaat")
    _vendor(recommender, "Shaky", (28.6139, 77.2090), 2.5, chaat)

    assert recommender.recommend(DELHI) == []
    assert len(recommender.recommend(DELHI, FoodFilters(min_rating=2.0))) == 1


def test_dietary_and_price_filters(recommender: FoodRecommender) -> None:
    chaat = _item(recommender, "Aloo Chaat")
    kebab = _item(recommender, "Seekh Kebab", category="mughlai", veg=False)
    _vendor(recommender, "Stall", (28.6139, 77.2090), 4.0, chaat, kebab, max_price=80)

    all_items = recommender.recommend(DELHI)
    veg = recommender.recommend(DELHI, FoodFilters(vegetarian_only=True))
    cheap = recommender.recommend(DELHI, FoodFilters(max_price=50))

    assert {r.name for r in all_items} == {"Aloo Chaat", "Seekh Kebab"}
    assert [r.name for r in veg] == ["Aloo Chaat"]
    assert cheap == []


def test_recommend_rejects_bad_coordinates(recommender: FoodRecommender) -> None:
    with pytest.raises(ValidationFailure):
        recommender.recommend(Location(120.0, 77.0))


def test_by_category_uses_ten_km(recommender: FoodRecommender) -> None:
    chaat = _item(recommender, "Aloo Chaat", category="Street Food")
    _vendor(recommender, "Eight-km", (28.6858, 77.2090), 4.0, chaat)
    _vendor(recommender, "Twelve-km", (28.7218, 77.2090), 4.0, chaat)

    results = recommender.by_category("street food", DELHI)

    assert [r.vendor_name for r in results] == ["Eight-km"]
    assert recommender.by_category("desserts", DELHI) == []


def test_search_puts_name_matches_first(recommender: FoodRecommender) -> None:
    paratha = _item(recommender, "Paratha")
    lassi = recommender.add_food_item(
        FoodItem(name="Lassi", description="Drink served with a paratha", category="drinks", region="punjab")
    )
    _vendor(recommender, "Best", (28.6139, 77.2090), 4.8, lassi)
    _vendor(recommender, "Good", (28.6139, 77.2090), 4.0, paratha)

    results = recommender.search("paratha", DELHI)

    assert [r.name for r in results] == ["Paratha", "Lassi"]
    assert recommender.search("   ", DELHI) == []


def test_popular_hubs_groups_vendors(recommender: FoodRecommender) -> None:
    chaat = _item(recommender, "Aloo Chaat")
    kulfi = _item(recommender, "Kulfi", category="desserts")
    _vendor(recommender, "A", (28.6562, 77.2410), 4.0, chaat)
    _vendor(recommender, "B", (28.6563, 77.2411), 4.0, kulfi, chaat)
    _vendor(recommender, "C", (28.5245, 77.1855), 4.0, kulfi)

    hubs = recommender.popular_hubs("New Delhi")

    assert [h.name for h in hubs] == ["Delhi Food Hub", "Delhi Food Hub"]
    assert hubs[0].popular_items == ["Aloo Chaat", "Kulfi"]
    assert hubs[1].popular_items == ["Kulfi"]


def test_popular_hubs_unknown_city(recommender: FoodRecommender) -> None:
    assert recommender.popular_hubs("Atlantis") == []


def test_rate_safety(recommender: FoodRecommender) -> None:
    vendor = _vendor(recommender, "Stall", (28.6139, 77.2090), 4.2)

    assert recommender.rate_safety(vendor.id).overall == 4.2
    with pytest.raises(NotFoundError):
        recommender.rate_safety("missing")


def test_update_safety_rating(recommender: FoodRecommender) -> None:
    vendor = _vendor(recommender, "Stall", (28.6139, 77.2090), 4.2)

    recommender.update_safety_rating(vendor.id, SafetyRating(3.0, 3.0, 3.0, 3.0, review_count=4))
    assert recommender.rate_safety(vendor.id).review_count == 4

    with pytest.raises(ValidationFailure):
        recommender.update_safety_rating(vendor.id, SafetyRating(6.0, 3.0, 3.0, 3.0))
    with pytest.raises(NotFoundError):
        recommender.update_safety_rating("missing", SafetyRating(3.0, 3.0, 3.0, 3.0))


def test_add_vendor_validation(recommender: FoodRecommender) -> None:
    bad = FoodVendor(
        name="",
        location=Location(95.0, 77.0),
        safety_rating=SafetyRating(4.0, 4.0, 4.0, 4.0),
        price_range=PriceRange(50, 10),
        food_items=["nope"],
    )
    with pytest.raises(ValidationFailure) as excinfo:
        recommender.add_vendor(bad)
    assert len(excinfo.value.errors) == 3

    zero_rated = FoodVendor(
        name="Zero Stall",
        location=Location(28.6139, 77.2090),
        safety_rating=SafetyRating(overall=0, hygiene=4.0, freshness=4.0, popularity=4.0),
        price_range=PriceRange(10, 50),
    )
    with pytest.raises(ValidationFailure) as excinfo:
        recommender.add_vendor(zero_rated)
    assert excinfo.value.errors == ["safety rating overall must be between 1 and 5"]


def test_safety_rating_below_one_rejected() -> None:
    with pytest.raises(ValidationFailure):
        validate_safety_rating(SafetyRating(0.5, 1.0, 1.0, 1.0))
    validate_safety_rating(SafetyRating(1.0, 1.0, 1.0, 1.0))


def test_best_time() -> None:
    hours = {"monday": [TimeSlot("06:30", "11:00"), TimeSlot("15:30", "20:30")], "sunday": []}

    assert best_time(hours, "monday") == "06:30 - 11:00"
    assert best_time(hours, "sunday") == "Check operating hours"
    assert best_time({}, "friday") == "Check operating hours"

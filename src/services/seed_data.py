"""Sample slang terms, dishes and vendors loaded at startup."""

from __future__ import annotations

import dataclasses
from typing import Dict, List

from loguru import logger

from errors import ConflictError
from models import (
    DietaryInfo,
    FoodItem,
    FoodVendor,
    Location,
    PriceRange,
    SafetyRating,
    SlangTerm,
    TimeSlot,
    Translation,
)
from services.food import FoodRecommender
from services.translation import SlangTranslator


def _term(term: str, region: str, context: str, popularity: int, translations, examples) -> SlangTerm:
    return SlangTerm(
        term=term,
        language="hindi",
        region=region,
        context=context,
        popularity=popularity,
        translations=[Translation(text, "english", ctx, conf) for text, ctx, conf in translations],
        usage_examples=list(examples),
    )


SLANG_TERMS: List[SlangTerm] = [
    _term(
        "jugaad", "delhi", "casual", 95,
        [("innovative solution", "casual", 0.9), ("makeshift fix", "casual", 0.8)],
        ["This is a jugaad solution to fix the problem", "He always finds a jugaad for everything"],
    ),
    _term(
        "timepass", "mumbai", "casual", 85,
        [("killing time", "casual", 0.9), ("leisure activity", "formal", 0.7), ("pastime", "casual", 0.8)],
        ["Just doing timepass at the mall", "This movie is good timepass"],
    ),
    _term(
        "fundoo", "delhi", "slang", 75,
        [("awesome", "slang", 0.9), ("cool", "casual", 0.8)],
        ["That movie was fundoo!", "Your new bike is fundoo"],
    ),
    _term(
        "bindaas", "mumbai", "slang", 80,
        [("awesome", "slang", 0.9), ("carefree", "casual", 0.8), ("fearless", "formal", 0.7)],
        ["He is bindaas about everything", "Live bindaas, don't worry"],
    ),
    _term(
        "bakchodi", "delhi", "slang", 70,
        [("nonsense talk", "slang", 0.9), ("fooling around", "casual", 0.8)],
        ["Stop this bakchodi and be serious", "Don't listen to his bakchodi"],
    ),
    _term(
        "bas yaar", "delhi", "casual", 90,
        [("enough man", "casual", 0.9), ("that's it buddy", "casual", 0.8)],
        ["Bas yaar, I can't eat anymore", "Bas yaar, let's go home now"],
    ),
    _term(
        "acha", "mumbai", "casual", 100,
        [("okay", "casual", 0.9), ("I see", "casual", 0.8), ("understood", "formal", 0.7)],
        ["Acha, I understand now", "Acha acha, tell me more"],
    ),
    _term(
        "chalta hai", "delhi", "casual", 85,
        [("it's okay", "casual", 0.9), ("that works", "casual", 0.8), ("acceptable", "formal", 0.7)],
        ["This quality is chalta hai", "Chalta hai, we can manage"],
    ),
]

FOOD_ITEMS: List[FoodItem] = [
    FoodItem(
        name="Vada Pav",
        description="Mumbai's iconic street food - spiced potato fritter in a bun with chutneys",
        category="street food",
        region="mumbai",
        ingredients=["potato", "gram flour", "bread", "green chutney", "tamarind chutney"],
        dietary_info=DietaryInfo(is_vegetarian=True, allergens=["gluten"]),
        preparation_time="15 minutes",
        spice_level="medium",
    ),
    FoodItem(
        name="Chole Bhature",
        description="Spicy chickpea curry served with deep-fried bread",
        category="north indian",
        region="delhi",
        ingredients=["chickpeas", "onions", "tomatoes", "flour", "spices"],
        dietary_info=DietaryInfo(is_vegetarian=True, allergens=["gluten", "dairy"]),
        preparation_time="45 minutes",
        spice_level="hot",
    ),
    FoodItem(
        name="Dosa",
        description="Crispy South Indian crepe made from fermented rice and lentil batter",
        category="south indian",
        region="bangalore",
        ingredients=["rice", "urad dal", "fenugreek seeds", "coconut chutney", "sambar"],
        dietary_info=DietaryInfo(is_vegetarian=True, is_vegan=True, is_gluten_free=True),
        preparation_time="20 minutes",
        spice_level="mild",
    ),
    FoodItem(
        name="Pav Bhaji",
        description="Spiced vegetable mash served with buttered bread rolls",
        category="street food",
        region="mumbai",
        ingredients=["mixed vegetables", "pav bread", "butter", "onions", "spices"],
        dietary_info=DietaryInfo(is_vegetarian=True, allergens=["gluten", "dairy"]),
        preparation_time="30 minutes",
        spice_level="medium",
    ),
    FoodItem(
        name="Biryani",
        description="Fragrant rice dish with meat or vegetables and aromatic spices",
        category="main course",
        region="hyderabad",
        ingredients=["basmati rice", "chicken/mutton", "yogurt", "saffron", "spices"],
        dietary_info=DietaryInfo(is_gluten_free=True, allergens=["dairy"]),
        preparation_time="90 minutes",
        spice_level="hot",
    ),
]


def _week(*slots: tuple[str, str], sunday=None) -> Dict[str, List[TimeSlot]]:
    days = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday")
    hours = {day: [TimeSlot(o, c) for o, c in slots] for day in days}
    hours["sunday"] = [TimeSlot(o, c) for o, c in (slots if sunday is None else sunday)]
    return hours


# vendor, dish names it sells
VENDORS: List[tuple[FoodVendor, tuple[str, ...]]] = [
    (
        FoodVendor(
            name="Ashok Vada Pav",
            location=Location(19.0176, 72.8562, "Mumbai", "Maharashtra"),
            safety_rating=SafetyRating(overall=4.2, hygiene=4.0, freshness=4.5, popularity=4.8, review_count=156),
            price_range=PriceRange(15, 25),
            operating_hours={
                **_week(("08:00", "22:00")),
                "saturday": [TimeSlot("08:00", "23:00")],
                "sunday": [TimeSlot("08:00", "23:00")],
            },
            hygiene_notes=["Fresh oil used daily", "Served hot", "Clean preparation area"],
        ),
        ("Vada Pav", "Pav Bhaji"),
    ),
    (
        FoodVendor(
            name="Sita Ram Diwan Chand",
            location=Location(28.6562, 77.2410, "Delhi", "Delhi"),
            safety_rating=SafetyRating(overall=4.5, hygiene=4.2, freshness=4.8, popularity=4.7, review_count=203),
            price_range=PriceRange(80, 150),
            operating_hours=_week(("07:00", "15:00"), sunday=()),
            hygiene_notes=["Made fresh daily", "Traditional recipes", "Clean kitchen"],
        ),
        ("Chole Bhature",),
    ),
    (
        FoodVendor(
            name="CTR (Central Tiffin Room)",
            location=Location(12.9716, 77.5946, "Bangalore", "Karnataka"),
            safety_rating=SafetyRating(overall=4.3, hygiene=4.1, freshness=4.6, popularity=4.4, review_count=89),
            price_range=PriceRange(40, 80),
            operating_hours=_week(("06:30", "11:00"), ("15:30", "20:30")),
            hygiene_notes=["Traditional South Indian preparation", "Fresh coconut chutney", "Authentic taste"],
        ),
        ("Dosa",),
    ),
]


def load_seed(translator: SlangTranslator, recommender: FoodRecommender) -> Dict[str, Dict[str, int]]:
    """Insert the sample data; terms and dishes that already exist are skipped."""
    logger.info("seeding sample data")
    terms_added = terms_skipped = 0
    for term in SLANG_TERMS:
        try:
            translator.add_term(term)
            terms_added += 1
        except ConflictError:
            logger.debug("skipping existing slang term term={} region={}", term.term, term.region)
            terms_skipped += 1

    item_ids: Dict[str, str] = {}
    items_added = 0
    for item in FOOD_ITEMS:
        existing = recommender.repository.find_food_items_by_name(item.name)
        if existing:
            item_ids[item.name] = existing[0].id
            continue
        item_ids[item.name] = recommender.add_food_item(item).id
        items_added += 1

    vendors_added = 0
    for vendor, dishes in VENDORS:
        stocked = [item_ids[name] for name in dishes if name in item_ids]
        recommender.add_vendor(dataclasses.replace(vendor, food_items=stocked))
        vendors_added += 1

    summary = {
        "slang_terms": {"added": terms_added, "skipped": terms_skipped, "total": len(SLANG_TERMS)},
        "food_items": {"added": items_added, "total": len(FOOD_ITEMS)},
        "food_vendors": {"added": vendors_added, "total": len(VENDORS)},
    }
    logger.info("seeding completed {}", summary)
    return summary

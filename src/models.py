"""Data models for the local guide service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

SOURCE_LANGUAGE = "hindi"
TARGET_LANGUAGE = "english"
LANGUAGES = (SOURCE_LANGUAGE, TARGET_LANGUAGE)
CONTEXTS = ("formal", "casual", "slang")
SPICE_LEVELS = ("mild", "medium", "hot", "very-hot")
ITEM_TYPES = ("slang", "food", "cultural")
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Location:
    latitude: float
    longitude: float
    city: str = ""
    state: str = ""
    country: str = "India"


# --- slang translation -----------------------------------------------------


@dataclass
class Translation:
    text: str
    target_language: str
    context: str
    confidence: float


@dataclass
class SlangTerm:
    term: str
    language: str
    region: str
    translations: list[Translation] = field(default_factory=list)
    context: str = "casual"
    popularity: int = 0
    usage_examples: list[str] = field(default_factory=list)
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def translations_to(self, language: str) -> list[Translation]:
        return [t for t in self.translations if t.target_language == language]


@dataclass
class Alternative:
    text: str
    confidence: float
    context: str


@dataclass
class TranslationResult:
    original_text: str
    translated_text: str
    confidence: float
    context: str
    source_language: str
    target_language: str
    region: str
    alternatives: list[Alternative] = field(default_factory=list)
    usage_examples: list[str] = field(default_factory=list)
    is_fuzzy_match: bool = False
    is_unknown: bool = False


@dataclass
class RegionalVariation:
    region: str
    term: str
    translation: str
    confidence: float
    context: str
    popularity: int
    usage_examples: list[str] = field(default_factory=list)
    alternative_terms: list[str] = field(default_factory=list)


# --- food ------------------------------------------------------------------


@dataclass
class DietaryInfo:
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_gluten_free: bool = False
    allergens: list[str] = field(default_factory=list)


@dataclass
class FoodItem:
    name: str
    description: str
    category: str
    region: str
    ingredients: list[str] = field(default_factory=list)
    dietary_info: DietaryInfo = field(default_factory=DietaryInfo)
    preparation_time: str = ""
    spice_level: str = "medium"
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class SafetyRating:
    overall: float
    hygiene: float
    freshness: float
    popularity: float
    review_count: int = 0
    last_updated: datetime = field(default_factory=utcnow)


@dataclass
class PriceRange:
    min: float
    max: float
    currency: str = "INR"


@dataclass
class TimeSlot:
    open: str  # HH:MM
    close: str  # HH:MM


@dataclass
class FoodVendor:
    name: str
    location: Location
    safety_rating: SafetyRating
    price_range: PriceRange
    food_items: list[str] = field(default_factory=list)  # food item ids
    operating_hours: Dict[str, List[TimeSlot]] = field(default_factory=dict)  # weekday -> slots
    hygiene_notes: list[str] = field(default_factory=list)
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class FoodFilters:
    vegetarian_only: bool = False
    vegan_only: bool = False
    spice_level: Optional[str] = None
    max_price: Optional[float] = None
    min_rating: Optional[float] = None
    radius_km: Optional[float] = None


@dataclass
class FoodRecommendation:
    name: str
    description: str
    location: Location
    safety_rating: SafetyRating
    price_range: PriceRange
    dietary_info: DietaryInfo
    best_time: str
    hygiene_notes: list[str] = field(default_factory=list)
    distance_km: float = 0.0
    vendor_id: Optional[str] = None
    vendor_name: str = ""


@dataclass
class FoodHub:
    name: str
    location: Location
    description: str
    popular_items: list[str] = field(default_factory=list)
    best_time_to_visit: str = ""
    safety_tips: list[str] = field(default_factory=list)


# --- cultural reference ----------------------------------------------------


@dataclass(frozen=True)
class Custom:
    name: str
    description: str
    significance: str
    dos_donts: tuple[str, ...] = ()


@dataclass(frozen=True)
class Festival:
    name: str
    date: str
    significance: str
    celebrations: tuple[str, ...] = ()
    regions: tuple[str, ...] = ()
    dos_donts: tuple[str, ...] = ()


@dataclass(frozen=True)
class EtiquetteRule:
    context: str
    rules: tuple[str, ...]
    importance: str  # high | medium | low


@dataclass(frozen=True)
class FareRange:
    min: float
    max: float
    currency: str = "INR"


@dataclass(frozen=True)
class TransportationInfo:
    public_transport: tuple[str, ...] = ()
    tips: tuple[str, ...] = ()
    costs: tuple[FareRange, ...] = ()


@dataclass(frozen=True)
class RegionalInfo:
    region: str
    languages: tuple[str, ...]
    customs: tuple[Custom, ...] = ()
    festivals: tuple[Festival, ...] = ()
    etiquette: tuple[EtiquetteRule, ...] = ()
    transportation: TransportationInfo = field(default_factory=TransportationInfo)


@dataclass(frozen=True)
class BargainingTip:
    context: str
    tips: tuple[str, ...]
    expected_discount: str
    cultural_notes: tuple[str, ...] = ()


@dataclass
class CulturalContribution:
    """User-submitted cultural content awaiting review."""

    category: str  # custom | festival | etiquette | bargaining
    title: str
    description: str
    region: Optional[str] = None
    details: list[str] = field(default_factory=list)
    status: str = "pending"
    id: Optional[str] = None
    submitted_at: datetime = field(default_factory=utcnow)


@dataclass
class SearchResult:
    id: str
    type: str
    title: str
    description: str
    relevance_score: float
    metadata: Dict[str, Any] = field(default_factory=dict)


# --- users -----------------------------------------------------------------


@dataclass
class UserPreferences:
    dietary_restrictions: list[str] = field(default_factory=list)
    spice_preference: str = "medium"
    preferred_regions: list[str] = field(default_factory=list)
    language_preference: str = TARGET_LANGUAGE
    budget_range: PriceRange = field(default_factory=lambda: PriceRange(min=0, max=500))


@dataclass
class Favorite:
    type: str  # slang | food | cultural
    item_id: str
    id: Optional[str] = None
    date_added: datetime = field(default_factory=utcnow)
    notes: Optional[str] = None


@dataclass
class User:
    preferences: UserPreferences = field(default_factory=UserPreferences)
    favorites: list[Favorite] = field(default_factory=list)
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class RecommendationHistory:
    user_id: str
    type: str
    query: str
    results: list[Any] = field(default_factory=list)
    id: Optional[str] = None
    timestamp: datetime = field(default_factory=utcnow)
    user_rating: Optional[int] = None

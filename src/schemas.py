"""Request payloads accepted by the HTTP API."""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from models import (
    DietaryInfo,
    FoodFilters,
    FoodItem,
    FoodVendor,
    Location,
    PriceRange,
    SafetyRating,
    SlangTerm,
    TimeSlot,
    Translation,
    UserPreferences,
)

Language = Literal["hindi", "english"]
Context = Literal["formal", "casual", "slang"]
SpiceLevel = Literal["mild", "medium", "hot", "very-hot"]
ItemType = Literal["slang", "food", "cultural"]


# --- translation -----------------------------------------------------------


class TranslateRequest(BaseModel):
    text: str = Field(..., description="Text to translate")
    region: Optional[str] = Field(None, description="Preferred region, e.g. delhi")
    context: Context = Field("casual", description="Preferred register of the translation")


class GenericTranslateRequest(TranslateRequest):
    source_language: Language = "hindi"
    target_language: Language = "english"


class TranslationPayload(BaseModel):
    text: str = Field(..., min_length=1)
    target_language: Language = "english"
    context: Context = "casual"
    confidence: float = Field(..., ge=0.0, le=1.0)

    def to_model(self) -> Translation:
        return Translation(
            text=self.text,
            target_language=self.target_language,
            context=self.context,
            confidence=self.confidence,
        )


class SlangTermPayload(BaseModel):
    term: str = Field(..., min_length=1)
    language: Language = "hindi"
    region: str = Field(..., min_length=1)
    translations: List[TranslationPayload] = Field(..., min_length=1)
    context: Context = "casual"
    popularity: int = Field(0, ge=0, le=100)
    usage_examples: List[str] = []

    def to_model(self) -> SlangTerm:
        return SlangTerm(
            term=self.term.strip(),
            language=self.language,
            region=self.region.strip(),
            translations=[t.to_model() for t in self.translations],
            context=self.context,
            popularity=self.popularity,
            usage_examples=list(self.usage_examples),
        )


class SlangTermUpdate(BaseModel):
    term: Optional[str] = Field(None, min_length=1)
    language: Optional[Language] = None
    region: Optional[str] = Field(None, min_length=1)
    translations: Optional[List[TranslationPayload]] = Field(None, min_length=1)
    context: Optional[Context] = None
    popularity: Optional[int] = Field(None, ge=0, le=100)
    usage_examples: Optional[List[str]] = None

    def to_updates(self) -> Dict[str, Any]:
        updates = self.model_dump(exclude_unset=True, exclude_none=True)
        if self.translations is not None:
            updates["translations"] = [t.to_model() for t in self.translations]
        return updates


# --- food ------------------------------------------------------------------


class LocationPayload(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    city: str = ""
    state: str = ""
    country: str = "India"

    def to_model(self) -> Location:
        return Location(**self.model_dump())


class FoodFiltersPayload(BaseModel):
    vegetarian_only: bool = False
    vegan_only: bool = False
    spice_level: Optional[SpiceLevel] = None
    max_price: Optional[float] = Field(None, ge=0)
    min_rating: Optional[float] = Field(None, ge=1, le=5)
    radius_km: Optional[float] = Field(None, gt=0)

    def to_model(self) -> FoodFilters:
        return FoodFilters(**self.model_dump())


class RecommendRequest(BaseModel):
    location: LocationPayload
    filters: FoodFiltersPayload = Field(default_factory=FoodFiltersPayload)


class DietaryInfoPayload(BaseModel):
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_gluten_free: bool = False
    allergens: List[str] = []


class FoodItemPayload(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    region: str = Field(..., min_length=1)
    ingredients: List[str] = []
    dietary_info: DietaryInfoPayload = Field(default_factory=DietaryInfoPayload)
    preparation_time: str = ""
    spice_level: SpiceLevel = "medium"

    def to_model(self) -> FoodItem:
        return FoodItem(
            name=self.name,
            description=self.description,
            category=self.category,
            region=self.region,
            ingredients=list(self.ingredients),
            dietary_info=DietaryInfo(**self.dietary_info.model_dump()),
            preparation_time=self.preparation_time,
            spice_level=self.spice_level,
        )


class SafetyRatingPayload(BaseModel):
    overall: float = Field(..., ge=1, le=5)
    hygiene: float = Field(..., ge=1, le=5)
    freshness: float = Field(..., ge=1, le=5)
    popularity: float = Field(..., ge=1, le=5)
    review_count: int = Field(0, ge=0)

    def to_model(self) -> SafetyRating:
        return SafetyRating(**self.model_dump())


class PriceRangePayload(BaseModel):
    min: float = Field(..., ge=0)
    max: float = Field(..., ge=0)
    currency: str = "INR"


class TimeSlotPayload(BaseModel):
    open: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    close: str = Field(..., pattern=r"^\d{2}:\d{2}$")


class VendorPayload(BaseModel):
    name: str = Field(..., min_length=1)
    location: LocationPayload
    safety_rating: SafetyRatingPayload
    price_range: PriceRangePayload
    food_items: List[str] = []
    operating_hours: Dict[str, List[TimeSlotPayload]] = {}
    hygiene_notes: List[str] = []

    def to_model(self) -> FoodVendor:
        return FoodVendor(
            name=self.name,
            location=self.location.to_model(),
            safety_rating=self.safety_rating.to_model(),
            price_range=PriceRange(**self.price_range.model_dump()),
            food_items=list(self.food_items),
            operating_hours={
                day.lower(): [TimeSlot(**slot.model_dump()) for slot in slots]
                for day, slots in self.operating_hours.items()
            },
            hygiene_notes=list(self.hygiene_notes),
        )


# --- content submissions ---------------------------------------------------


class SlangSubmission(SlangTermPayload):
    kind: Literal["slang"]


class FoodSubmission(FoodItemPayload):
    kind: Literal["food"]


class CulturalSubmission(BaseModel):
    kind: Literal["cultural"]
    category: Literal["custom", "festival", "etiquette", "bargaining"]
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    region: Optional[str] = None
    details: List[str] = []


ContentSubmission = Annotated[
    Union[SlangSubmission, FoodSubmission, CulturalSubmission],
    Field(discriminator="kind"),
]

_submission_adapter: TypeAdapter[ContentSubmission] = TypeAdapter(ContentSubmission)


def parse_submission(payload: Any) -> ContentSubmission:
    """Validate a raw submission body; raises pydantic.ValidationError."""
    return _submission_adapter.validate_python(payload)


# --- users -----------------------------------------------------------------


class PreferencesPayload(BaseModel):
    dietary_restrictions: List[str] = []
    spice_preference: SpiceLevel = "medium"
    preferred_regions: List[str] = []
    language_preference: Language = "english"
    budget_range: PriceRangePayload = Field(default_factory=lambda: PriceRangePayload(min=0, max=500))

    def to_model(self) -> UserPreferences:
        return UserPreferences(
            dietary_restrictions=list(self.dietary_restrictions),
            spice_preference=self.spice_preference,
            preferred_regions=list(self.preferred_regions),
            language_preference=self.language_preference,
            budget_range=PriceRange(**self.budget_range.model_dump()),
        )


class CreateUserRequest(BaseModel):
    preferences: PreferencesPayload = Field(default_factory=PreferencesPayload)


class FavoriteRequest(BaseModel):
    type: ItemType
    item_id: str = Field(..., min_length=1)
    notes: Optional[str] = None


class HistoryRequest(BaseModel):
    type: ItemType
    query: str
    results: List[Any] = []
    user_rating: Optional[int] = Field(None, ge=1, le=5)

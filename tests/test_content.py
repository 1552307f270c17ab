from __future__ import annotations

import pytest
from pydantic import ValidationError

from config import Configuration
from errors import ConflictError
from schemas import CulturalSubmission, FoodSubmission, SlangSubmission, parse_submission
from services.content import ContentService
from services.food import FoodRecommender
from services.food_repository import FoodRepository
from services.slang_repository import SlangRepository
from services.store import InMemoryStore
from services.translation import SlangTranslator

SLANG = {
    "kind": "slang",
    "term": "jhakaas",
    "region": "mumbai",
    "translations": [{"text": "excellent", "confidence": 0.9}],
    "popularity": 60,
}


@pytest.fixture
def content() -> ContentService:
    store = InMemoryStore()
    translator = SlangTranslator(SlangRepository(store))
    recommender = FoodRecommender(FoodRepository(store), Configuration(seed_on_startup=False))
    return ContentService(translator, recommender, store)


def test_parse_submission_picks_variant_by_kind() -> None:
    assert isinstance(parse_submission(SLANG), SlangSubmission)
    assert isinstance(
        parse_submission(
            {"kind": "food", "name": "Misal Pav", "description": "Spicy sprout curry", "category": "street food", "region": "pune"}
        ),
        FoodSubmission,
    )
    assert isinstance(
        parse_submission({"kind": "cultural", "category": "festival", "title": "Onam", "description": "Harvest festival"}),
        CulturalSubmission,
    )


@pytest.mark.parametrize(
    "payload",
    [
        {"kind": "review", "title": "x"},
        {"kind": "slang", "term": "jhakaas"},
        {"kind": "cultural", "category": "festival", "title": ""},
        {"term": "no kind"},
    ],
)
def test_parse_submission_rejects_bad_shapes(payload: dict) -> None:
    with pytest.raises(ValidationError):
        parse_submission(payload)


def test_slang_submission_goes_through_term_rules(content: ContentService) -> None:
    outcome = content.submit(parse_submission(SLANG))

    assert outcome["status"] == "created"
    assert content.translator.to_english("jhakaas").translated_text == "excellent"
    with pytest.raises(ConflictError):
        content.submit(parse_submission(SLANG))


def test_food_submission_creates_item(content: ContentService) -> None:
    outcome = content.submit(
        parse_submission(
            {"kind": "food", "name": "Misal Pav", "description": "Spicy sprout curry", "category": "street food", "region": "pune"}
        )
    )
    assert content.recommender.repository.find_food_item(outcome["id"]).name == "Misal Pav"


def test_cultural_submission_is_queued(content: ContentService) -> None:
    outcome = content.submit(
        parse_submission({"kind": "cultural", "category": "festival", "title": "Onam", "description": "Harvest festival", "region": "kerala"})
    )

    assert outcome["status"] == "pending"
    assert [c.title for c in content.pending_cultural()] == ["Onam"]

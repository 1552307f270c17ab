from __future__ import annotations

from typing import Any, Dict, List

from loguru import logger

from models import CulturalContribution
from schemas import ContentSubmission, CulturalSubmission, FoodSubmission, SlangSubmission
from services.food import FoodRecommender
from services.store import InMemoryStore
from services.translation import SlangTranslator

TABLE = "cultural_submissions"


class ContentService:
    """Routes admin content submissions to the component that owns them.

    Cultural submissions are parked in a pending table; the built-in
    reference tables are never modified at runtime.
    """

    def __init__(self, translator: SlangTranslator, recommender: FoodRecommender, store: InMemoryStore) -> None:
        self.translator = translator
        self.recommender = recommender
        self.store = store

    def submit(self, submission: ContentSubmission) -> Dict[str, Any]:
        logger.debug("content submission kind={}", submission.kind)
        if isinstance(submission, SlangSubmission):
            term = self.translator.add_term(submission.to_model())
            return {"kind": "slang", "id": term.id, "status": "created"}
        if isinstance(submission, FoodSubmission):
            item = self.recommender.add_food_item(submission.to_model())
            return {"kind": "food", "id": item.id, "status": "created"}
        if isinstance(submission, CulturalSubmission):
            record = CulturalContribution(
                category=submission.category,
                title=submission.title.strip(),
                description=submission.description.strip(),
                region=submission.region,
                details=list(submission.details),
            )
            with self.store.transaction() as tx:
                saved = tx.insert(TABLE, record)
            logger.info("cultural content queued title={!r} id={}", saved.title, saved.id)
            return {"kind": "cultural", "id": saved.id, "status": saved.status}
        raise TypeError(f"unsupported submission: {type(submission).__name__}")

    def pending_cultural(self) -> List[CulturalContribution]:
        return sorted(self.store.all(TABLE), key=lambda c: c.submitted_at)

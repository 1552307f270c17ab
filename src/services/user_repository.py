from __future__ import annotations

import dataclasses
from typing import Any, List, Optional

from loguru import logger

from errors import NotFoundError, ValidationFailure
from models import ITEM_TYPES, Favorite, RecommendationHistory, User, UserPreferences, utcnow
from services.history import HistoryLog
from services.store import InMemoryStore, generate_id

TABLE = "users"


def _check_item_type(item_type: str) -> None:
    if item_type not in ITEM_TYPES:
        raise ValidationFailure("Invalid item type", [f"type must be one of: {', '.join(ITEM_TYPES)}"])


class UserRepository:
    """Users, their favorites and their recommendation history.

    Favorites and history point at slang/food/cultural items by id only; the
    referenced item is not required to exist.
    """

    def __init__(self, store: InMemoryStore, history: Optional[HistoryLog] = None) -> None:
        self.store = store
        self.history_log = history or HistoryLog(store)

    def create_user(self, preferences: Optional[UserPreferences] = None) -> User:
        now = utcnow()
        user = User(preferences=preferences or UserPreferences(), created_at=now, updated_at=now)
        with self.store.transaction() as tx:
            created = tx.insert(TABLE, user)
        logger.info("user created id={}", created.id)
        return created

    def get_user(self, user_id: str) -> User:
        user = self.store.get(TABLE, user_id)
        if user is None:
            raise NotFoundError(f"User {user_id}")
        return user

    def update_preferences(self, user_id: str, preferences: UserPreferences) -> User:
        with self.store.transaction() as tx:
            user = self.get_user(user_id)
            return tx.replace(TABLE, dataclasses.replace(user, preferences=preferences, updated_at=utcnow()))

    def add_favorite(self, user_id: str, item_type: str, item_id: str, notes: Optional[str] = None) -> Favorite:
        _check_item_type(item_type)
        favorite = Favorite(id=generate_id(), type=item_type, item_id=item_id, notes=notes)
        with self.store.transaction() as tx:
            user = self.get_user(user_id)
            tx.replace(TABLE, dataclasses.replace(user, favorites=[*user.favorites, favorite], updated_at=utcnow()))
        return favorite

    def remove_favorite(self, user_id: str, favorite_id: str) -> None:
        with self.store.transaction() as tx:
            user = self.get_user(user_id)
            remaining = [f for f in user.favorites if f.id != favorite_id]
            if len(remaining) == len(user.favorites):
                raise NotFoundError(f"Favorite {favorite_id}")
            tx.replace(TABLE, dataclasses.replace(user, favorites=remaining, updated_at=utcnow()))

    def favorites(self, user_id: str, item_type: Optional[str] = None) -> List[Favorite]:
        user = self.get_user(user_id)
        if item_type is None:
            return user.favorites
        return [f for f in user.favorites if f.type == item_type]

    def record_history(
        self,
        user_id: str,
        item_type: str,
        query: str,
        results: List[Any],
        user_rating: Optional[int] = None,
    ) -> RecommendationHistory:
        _check_item_type(item_type)
        with self.store.transaction():
            self.get_user(user_id)
            return self.history_log.record(user_id, item_type, query, results, user_rating)

    def history(self, user_id: str, limit: Optional[int] = None) -> List[RecommendationHistory]:
        self.get_user(user_id)
        return self.history_log.get(user_id, limit)

from __future__ import annotations

from typing import Any, List, Optional

from models import RecommendationHistory
from services.store import InMemoryStore, generate_id

TABLE = "recommendation_history"


class HistoryLog:
    """Per-user recommendation history kept in the store, trimmed to ``max_entries``."""

    def __init__(self, store: InMemoryStore, max_entries: int = 50) -> None:
        self.store = store
        self.max_entries = max_entries

    def _entries_for(self, user_id: str) -> List[RecommendationHistory]:
        return [h for h in self.store.all(TABLE) if h.user_id == user_id]

    def get(self, user_id: str, limit: Optional[int] = None) -> List[RecommendationHistory]:
        """Newest entries last; ``limit`` keeps the most recent ones."""
        if not user_id:
            return []
        entries = self._entries_for(user_id)
        if limit is not None:
            entries = entries[-limit:] if limit > 0 else []
        return entries

    def record(
        self,
        user_id: str,
        item_type: str,
        query: str,
        results: List[Any],
        user_rating: Optional[int] = None,
    ) -> RecommendationHistory:
        entry = RecommendationHistory(
            id=generate_id(),
            user_id=user_id,
            type=item_type,
            query=query,
            results=list(results),
            user_rating=user_rating,
        )
        with self.store.transaction() as tx:
            stored = tx.insert(TABLE, entry)
            history = self._entries_for(user_id)
            for stale in history[: max(len(history) - self.max_entries, 0)]:
                tx.delete(TABLE, stale.id)
        return stored

    def reset(self, user_id: str) -> None:
        with self.store.transaction() as tx:
            for entry in self._entries_for(user_id):
                tx.delete(TABLE, entry.id)

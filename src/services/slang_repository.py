from __future__ import annotations

import dataclasses
from collections import Counter
from typing import Any, Dict, List, Optional

from loguru import logger

from errors import NotFoundError
from models import SlangTerm, utcnow
from services.store import InMemoryStore
from utils import normalize_text

TABLE = "slang_terms"

REPLACED_COLLECTIONS = {"translations", "usage_examples"}
IMMUTABLE_FIELDS = {"id", "created_at", "updated_at"}


def _by_popularity(terms: List[SlangTerm]) -> List[SlangTerm]:
    return sorted(terms, key=lambda t: (-t.popularity, t.term))


class SlangRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def create(self, term: SlangTerm) -> SlangTerm:
        now = utcnow()
        record = dataclasses.replace(term, id=None, created_at=now, updated_at=now)
        with self.store.transaction() as tx:
            return tx.insert(TABLE, record)

    def find_by_id(self, term_id: str) -> Optional[SlangTerm]:
        return self.store.get(TABLE, term_id)

    def find_exact(self, term: str, language: Optional[str] = None) -> List[SlangTerm]:
        wanted = normalize_text(term)
        return [
            t
            for t in self.store.all(TABLE)
            if normalize_text(t.term) == wanted and (language is None or t.language == language)
        ]

    def find_fuzzy(self, variant: str, limit: int = 10) -> List[SlangTerm]:
        """Terms whose normalized text contains the variant, most popular first."""
        needle = normalize_text(variant)
        if not needle:
            return []
        hits = [t for t in self.store.all(TABLE) if needle in normalize_text(t.term)]
        return _by_popularity(hits)[:limit]

    def find_by_translation(self, text: str, target_language: str) -> List[SlangTerm]:
        needle = normalize_text(text)
        if not needle:
            return []
        hits = [
            t
            for t in self.store.all(TABLE)
            if any(needle in normalize_text(tr.text) for tr in t.translations_to(target_language))
        ]
        return _by_popularity(hits)

    def search_text(self, query: str, limit: int = 20) -> List[SlangTerm]:
        """Case-insensitive substring search over term text, region and translations."""
        needle = query.lower().strip()
        if not needle:
            return []
        hits = []
        for t in self.store.all(TABLE):
            haystacks = [t.term.lower(), t.region.lower()]
            haystacks.extend(tr.text.lower() for tr in t.translations)
            if any(needle in h for h in haystacks):
                hits.append(t)
        return _by_popularity(hits)[:limit]

    def find_by_region(self, region: str, limit: int = 50) -> List[SlangTerm]:
        wanted = region.lower().strip()
        hits = [t for t in self.store.all(TABLE) if t.region.lower() == wanted]
        return _by_popularity(hits)[:limit]

    def find_popular(self, limit: int = 20) -> List[SlangTerm]:
        return _by_popularity(self.store.all(TABLE))[:limit]

    def update(self, term_id: str, updates: Dict[str, Any]) -> SlangTerm:
        """Apply field updates; translation and example lists are replaced wholesale."""
        with self.store.transaction() as tx:
            existing = tx.get(TABLE, term_id)
            if existing is None:
                raise NotFoundError(f"Slang term {term_id}")
            changes = {k: v for k, v in updates.items() if k not in IMMUTABLE_FIELDS}
            for name in REPLACED_COLLECTIONS & changes.keys():
                changes[name] = list(changes[name])
            updated = dataclasses.replace(existing, **changes, updated_at=utcnow())
            return tx.replace(TABLE, updated)

    def delete(self, term_id: str) -> SlangTerm:
        with self.store.transaction() as tx:
            existing = tx.get(TABLE, term_id)
            if existing is None:
                raise NotFoundError(f"Slang term {term_id}")
            tx.delete(TABLE, term_id)
        logger.info("slang term deleted id={} term={}", term_id, existing.term)
        return existing

    def statistics(self) -> Dict[str, Any]:
        terms = self.store.all(TABLE)
        by_language = Counter(t.language for t in terms)
        by_region = Counter(t.region for t in terms)
        avg = sum(t.popularity for t in terms) / len(terms) if terms else 0.0
        return {
            "total_terms": len(terms),
            "terms_by_language": dict(by_language),
            "terms_by_region": dict(by_region),
            "average_popularity": round(avg, 2),
        }

from __future__ import annotations

import dataclasses
from typing import Any, Dict, List, Optional, Sequence

from loguru import logger

from errors import ConflictError, NotFoundError, ValidationFailure
from models import (
    CONTEXTS,
    LANGUAGES,
    SOURCE_LANGUAGE,
    TARGET_LANGUAGE,
    Alternative,
    RegionalVariation,
    SlangTerm,
    Translation,
    TranslationResult,
)
from services.fuzzy import dedupe_terms, find_fuzzy_matches
from services.regional import group_by_region
from services.relevance import term_relevance
from services.slang_repository import SlangRepository
from utils import normalize_text

DEFAULT_CONTEXT = "casual"
FUZZY_PENALTY = 0.2
FUZZY_FLOOR = 0.3
REVERSE_CONFIDENCE = 0.8
BROAD_CONFIDENCE = 0.5
ALTERNATIVE_STEP = 0.1
MAX_ALTERNATIVES = 3
MAX_EXAMPLES = 2
VARIATION_FALLBACK_CONFIDENCE = 0.5

UPDATABLE_FIELDS = {"term", "language", "region", "context", "popularity", "translations", "usage_examples"}
KEY_FIELDS = {"term", "language", "region"}


def fuzzy_confidence(confidence: float) -> float:
    return round(max(FUZZY_FLOOR, confidence - FUZZY_PENALTY), 4)


def select_best_match(terms: Sequence[SlangTerm], preferred_region: Optional[str] = None) -> SlangTerm:
    """Preferred region wins outright; otherwise the most popular term (first on ties)."""
    if not terms:
        raise ValueError("No terms provided for selection")
    if preferred_region:
        wanted = preferred_region.lower()
        for t in terms:
            if t.region.lower() == wanted:
                return t
    return max(terms, key=lambda t: t.popularity)


def select_best_translation(translations: Sequence[Translation], preferred_context: Optional[str] = None) -> Translation:
    if not translations:
        raise ValueError("No translations provided for selection")
    if preferred_context:
        for t in translations:
            if t.context == preferred_context:
                return t
    return max(translations, key=lambda t: t.confidence)


def rank_translations(translations: Sequence[Translation], preferred_context: Optional[str] = None) -> List[Translation]:
    """Best translation first, then the rest by context preference and confidence."""
    best = select_best_translation(translations, preferred_context)
    rest = [t for t in translations if t is not best]
    rest.sort(key=lambda t: (t.context != preferred_context, -t.confidence))
    return [best, *rest]


def validate_term(term: SlangTerm) -> None:
    errors: list[str] = []
    if not term.term or not term.term.strip():
        errors.append("term cannot be empty")
    if term.language not in LANGUAGES:
        errors.append(f"language must be one of: {', '.join(LANGUAGES)}")
    if not term.region or not term.region.strip():
        errors.append("region cannot be empty")
    if term.context not in CONTEXTS:
        errors.append(f"context must be one of: {', '.join(CONTEXTS)}")
    if not isinstance(term.popularity, int) or not 0 <= term.popularity <= 100:
        errors.append("popularity must be an integer between 0 and 100")
    if not term.translations:
        errors.append("at least one translation is required")
    for idx, tr in enumerate(term.translations, start=1):
        if not tr.text or not tr.text.strip():
            errors.append(f"translation {idx} text cannot be empty")
        if tr.target_language not in LANGUAGES:
            errors.append(f"translation {idx} target language must be one of: {', '.join(LANGUAGES)}")
        if not 0.0 <= tr.confidence <= 1.0:
            errors.append(f"translation {idx} confidence must be between 0 and 1")
    if errors:
        raise ValidationFailure("Invalid slang term", errors)


class SlangTranslator:
    def __init__(self, repository: SlangRepository, max_similar: int = 10) -> None:
        self.repository = repository
        self.max_similar = max_similar

    # --- lookups -----------------------------------------------------------

    def translate(
        self,
        text: str,
        source_language: str = SOURCE_LANGUAGE,
        target_language: str = TARGET_LANGUAGE,
        preferred_region: Optional[str] = None,
        preferred_context: Optional[str] = DEFAULT_CONTEXT,
    ) -> TranslationResult:
        if (source_language, target_language) == (SOURCE_LANGUAGE, TARGET_LANGUAGE):
            return self.to_english(text, preferred_region, preferred_context)
        if (source_language, target_language) == (TARGET_LANGUAGE, SOURCE_LANGUAGE):
            return self.to_hindi(text, preferred_region)
        raise ValidationFailure(
            "Unsupported language pair",
            [f"cannot translate from {source_language!r} to {target_language!r}"],
        )

    def to_english(
        self,
        text: str,
        region: Optional[str] = None,
        preferred_context: Optional[str] = DEFAULT_CONTEXT,
    ) -> TranslationResult:
        logger.debug("translate to english text={!r} region={}", text, region)
        if not text or not text.strip():
            return self._unknown(text, SOURCE_LANGUAGE, TARGET_LANGUAGE, region)

        normalized = normalize_text(text)
        try:
            exact = self.repository.find_exact(normalized, language=SOURCE_LANGUAGE)
            result = self._forward_result(text, exact, region, preferred_context, fuzzy=False)
            if result is not None:
                return result

            fuzzy = [t for t in find_fuzzy_matches(self.repository, normalized) if t.language == SOURCE_LANGUAGE]
            result = self._forward_result(text, fuzzy, region, preferred_context, fuzzy=True)
            if result is not None:
                return result
        except Exception as exc:
            logger.exception("translation to english failed text={!r}: {}", text, exc)
            raise

        return self._unknown(text, SOURCE_LANGUAGE, TARGET_LANGUAGE, region)

    def to_hindi(self, text: str, region: Optional[str] = None) -> TranslationResult:
        logger.debug("translate to hindi text={!r} region={}", text, region)
        if not text or not text.strip():
            return self._unknown(text, TARGET_LANGUAGE, SOURCE_LANGUAGE, region)

        normalized = normalize_text(text)
        try:
            narrow = self.repository.find_by_translation(normalized, TARGET_LANGUAGE)
            if narrow:
                return self._reverse_result(text, narrow, region, REVERSE_CONFIDENCE, fuzzy=False)

            broad = [t for t in self.repository.search_text(text.strip()) if t.translations_to(TARGET_LANGUAGE)]
            if broad:
                return self._reverse_result(text, broad, region, BROAD_CONFIDENCE, fuzzy=True)
        except Exception as exc:
            logger.exception("translation to hindi failed text={!r}: {}", text, exc)
            raise

        return self._unknown(text, TARGET_LANGUAGE, SOURCE_LANGUAGE, region)

    def regional_variations(self, term: str) -> List[RegionalVariation]:
        logger.debug("regional variations term={!r}", term)
        normalized = normalize_text(term)
        if not normalized:
            return []

        matches = self.repository.find_exact(normalized)
        matches.extend(find_fuzzy_matches(self.repository, normalized))
        groups = group_by_region(dedupe_terms(matches), lambda t: t.region)

        variations: list[RegionalVariation] = []
        for region, terms in groups.items():
            top = max(terms, key=lambda t: t.popularity)
            english = top.translations_to(TARGET_LANGUAGE)
            primary = english[0] if english else None
            variations.append(
                RegionalVariation(
                    region=region,
                    term=top.term,
                    translation=primary.text if primary else "",
                    confidence=(primary.confidence if primary else 0.0) or VARIATION_FALLBACK_CONFIDENCE,
                    context=top.context,
                    popularity=top.popularity,
                    usage_examples=top.usage_examples[:MAX_EXAMPLES],
                    alternative_terms=[t.term for t in terms if t is not top],
                )
            )

        variations.sort(key=lambda v: v.popularity, reverse=True)
        return variations

    def search_similar(self, query: str) -> List[SlangTerm]:
        logger.debug("search similar query={!r}", query)
        normalized = normalize_text(query)
        if not normalized:
            return []

        results = self.repository.search_text(normalized, limit=20)
        results.extend(find_fuzzy_matches(self.repository, normalized))
        unique = dedupe_terms(results)
        unique.sort(key=lambda t: term_relevance(t.term, normalized, t.popularity), reverse=True)
        return unique[: self.max_similar]

    def get_term(self, term_id: str) -> SlangTerm:
        term = self.repository.find_by_id(term_id)
        if term is None:
            raise NotFoundError(f"Slang term {term_id}")
        return term

    def terms_by_region(self, region: str, limit: int = 50) -> List[SlangTerm]:
        return self.repository.find_by_region(region, limit)

    def popular_terms(self, limit: int = 20) -> List[SlangTerm]:
        return self.repository.find_popular(limit)

    def statistics(self) -> Dict[str, Any]:
        return self.repository.statistics()

    # --- mutations ---------------------------------------------------------

    def add_term(self, term: SlangTerm) -> SlangTerm:
        logger.debug("add slang term term={!r} region={}", term.term, term.region)
        validate_term(term)
        with self.repository.store.transaction():
            self._ensure_unique(term.term, term.language, term.region)
            created = self.repository.create(term)
        logger.info("slang term added term={!r} region={} id={}", created.term, created.region, created.id)
        return created

    def update_term(self, term_id: str, updates: Dict[str, Any]) -> SlangTerm:
        logger.debug("update slang term id={} fields={}", term_id, sorted(updates))
        unknown = set(updates) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationFailure("Invalid update", [f"field {name!r} cannot be updated" for name in sorted(unknown)])

        with self.repository.store.transaction():
            existing = self.get_term(term_id)
            if KEY_FIELDS & updates.keys():
                self._ensure_unique(
                    updates.get("term") or existing.term,
                    updates.get("language") or existing.language,
                    updates.get("region") or existing.region,
                    exclude_id=term_id,
                )
            validate_term(dataclasses.replace(existing, **updates))
            updated = self.repository.update(term_id, updates)
        logger.info("slang term updated id={}", term_id)
        return updated

    def delete_term(self, term_id: str) -> SlangTerm:
        return self.repository.delete(term_id)

    # --- helpers -----------------------------------------------------------

    def _ensure_unique(self, text: str, language: str, region: str, exclude_id: Optional[str] = None) -> None:
        wanted_region = region.lower()
        for other in self.repository.find_exact(text, language):
            if other.region.lower() == wanted_region and other.id != exclude_id:
                raise ConflictError(f'Slang term "{text}" already exists for region "{region}"')

    def _forward_result(
        self,
        text: str,
        candidates: List[SlangTerm],
        region: Optional[str],
        preferred_context: Optional[str],
        fuzzy: bool,
    ) -> Optional[TranslationResult]:
        candidates = [t for t in candidates if t.translations_to(TARGET_LANGUAGE)]
        if not candidates:
            return None

        best = select_best_match(candidates, region)
        ranked = rank_translations(best.translations_to(TARGET_LANGUAGE), preferred_context)
        chosen = ranked[0]

        def conf(value: float) -> float:
            return fuzzy_confidence(value) if fuzzy else value

        return TranslationResult(
            original_text=text,
            translated_text=chosen.text,
            confidence=conf(chosen.confidence),
            context=chosen.context,
            source_language=SOURCE_LANGUAGE,
            target_language=TARGET_LANGUAGE,
            region=best.region,
            alternatives=[
                Alternative(text=t.text, confidence=conf(t.confidence), context=t.context)
                for t in ranked[1 : 1 + MAX_ALTERNATIVES]
            ],
            usage_examples=best.usage_examples[:MAX_EXAMPLES],
            is_fuzzy_match=fuzzy,
        )

    def _reverse_result(
        self,
        text: str,
        candidates: List[SlangTerm],
        region: Optional[str],
        confidence: float,
        fuzzy: bool,
    ) -> TranslationResult:
        best = select_best_match(candidates, region)
        others = [t for t in candidates if t is not best][:MAX_ALTERNATIVES]
        alt_confidence = round(confidence - ALTERNATIVE_STEP, 4)
        return TranslationResult(
            original_text=text,
            translated_text=best.term,
            confidence=confidence,
            context=best.context,
            source_language=TARGET_LANGUAGE,
            target_language=SOURCE_LANGUAGE,
            region=best.region,
            alternatives=[Alternative(text=t.term, confidence=alt_confidence, context=t.context) for t in others],
            usage_examples=best.usage_examples[:MAX_EXAMPLES],
            is_fuzzy_match=fuzzy,
        )

    @staticmethod
    def _unknown(text: str, source: str, target: str, region: Optional[str]) -> TranslationResult:
        return TranslationResult(
            original_text=text,
            translated_text=text,
            confidence=0.0,
            context=DEFAULT_CONTEXT,
            source_language=source,
            target_language=target,
            region=region or "unknown",
            is_unknown=True,
        )

from __future__ import annotations

from typing import List

from models import SlangTerm
from services.fuzzy import dedupe_terms, find_fuzzy_matches, generate_variants


def test_generate_variants_applies_all_rewrites() -> None:
    assert generate_variants("jugad") == ["juga", "jugada", "jugadi", "jugaad"]


def test_generate_variants_drops_short_and_identical() -> None:
    # "ab"[:-1] is too short; no "i" so the ee rewrite equals the input
    assert generate_variants("ab") == ["aba", "abi", "aab"]
    assert "bindaas" not in generate_variants("bindaas")


class _Source:
    def __init__(self, terms: List[SlangTerm]) -> None:
        self.terms = terms
        self.calls: list[str] = []

    def find_fuzzy(self, variant: str) -> List[SlangTerm]:
        self.calls.append(variant)
        return [t for t in self.terms if variant in t.term]


def test_find_fuzzy_matches_dedupes_across_variants() -> None:
    jugaad = SlangTerm(term="jugaad", language="hindi", region="delhi")
    source = _Source([jugaad])

    matches = find_fuzzy_matches(source, "jugad")

    assert matches == [jugaad]
    assert source.calls == generate_variants("jugad")


def test_dedupe_terms_keys_on_text_region_language() -> None:
    a = SlangTerm(term="fundoo", language="hindi", region="delhi")
    b = SlangTerm(term="fundoo", language="hindi", region="mumbai")
    assert dedupe_terms([a, b, a]) == [a, b]

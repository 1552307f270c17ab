"""Heuristic spelling variants for slang lookups that miss an exact match.

Only five fixed rewrites are tried, so many real typos are not recovered.
"""

from __future__ import annotations

from typing import Iterable, List, Protocol, Tuple

from models import SlangTerm

MIN_VARIANT_LENGTH = 3


class FuzzySource(Protocol):
    def find_fuzzy(self, variant: str) -> List[SlangTerm]:
        ...


def generate_variants(term: str) -> List[str]:
    candidates = [
        term[:-1],
        term + "a",
        term + "i",
        term.replace("a", "aa"),
        term.replace("i", "ee"),
    ]
    variants: list[str] = []
    for variant in candidates:
        if variant == term or len(variant) < MIN_VARIANT_LENGTH:
            continue
        if variant not in variants:
            variants.append(variant)
    return variants


def term_key(term: SlangTerm) -> Tuple[str, str, str]:
    return (term.term, term.region, term.language)


def dedupe_terms(terms: Iterable[SlangTerm]) -> List[SlangTerm]:
    seen: set[Tuple[str, str, str]] = set()
    out: list[SlangTerm] = []
    for t in terms:
        key = term_key(t)
        if key in seen:
            continue
        seen.add(key)
        out.append(t)
    return out


def find_fuzzy_matches(source: FuzzySource, term: str) -> List[SlangTerm]:
    matches: list[SlangTerm] = []
    for variant in generate_variants(term):
        matches.extend(source.find_fuzzy(variant))
    return dedupe_terms(matches)

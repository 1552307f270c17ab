from __future__ import annotations


def _tier_score(candidate: str, query: str) -> float:
    if candidate == query:
        return 100.0
    if candidate.startswith(query):
        return 80.0
    if query in candidate:
        return 60.0
    return 0.0


def term_relevance(term: str, query: str, popularity: int) -> float:
    """Score a slang term against a search query, with a popularity bonus of at most 20."""
    term_lower = term.lower()
    query_lower = query.lower()

    score = _tier_score(term_lower, query_lower)
    if score == 0.0 and abs(len(term_lower) - len(query_lower)) <= 2:
        score = 30.0

    return score + min(20.0, popularity / 5)


def cultural_relevance(query: str, text: str) -> float:
    text_lower = text.lower()
    query_lower = query.lower()

    score = _tier_score(text_lower, query_lower)
    if query_lower in text_lower.split():
        score += 40.0
    return score

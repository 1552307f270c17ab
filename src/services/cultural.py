from __future__ import annotations

from typing import Dict, List, Optional

from loguru import logger

from errors import NotFoundError
from models import BargainingTip, EtiquetteRule, Festival, Location, RegionalInfo, SearchResult
from services.cultural_data import CulturalTables, default_regional_info
from services.regional import group_by_region
from services.relevance import cultural_relevance

GENERAL = "general"


class CulturalGuide:
    """Read-only lookups and search over the cultural reference tables."""

    def __init__(self, tables: CulturalTables, max_results: int = 20) -> None:
        self.tables = tables
        self.max_results = max_results

    def regional_info(self, region: str) -> RegionalInfo:
        logger.debug("regional info region={}", region)
        info = self.tables.regions.get(region.lower().strip())
        if info is None:
            return default_regional_info(region)
        return info

    def festival(self, name: str) -> Festival:
        info = self.tables.festivals.get(name.lower().strip())
        if info is None:
            raise NotFoundError(f"Festival '{name}'")
        return info

    def etiquette(self, context: str) -> List[EtiquetteRule]:
        return list(self.tables.etiquette.get(context.lower().strip(), ()))

    def bargaining_tips(self, location: Location) -> List[BargainingTip]:
        """City-specific tips, else state-specific, else the general set."""
        for key in (location.city.lower().strip(), location.state.lower().strip(), GENERAL):
            tips = self.tables.bargaining.get(key)
            if tips:
                return list(tips)
        return []

    def search(self, query: str, region: Optional[str] = None) -> List[SearchResult]:
        logger.debug("cultural search query={!r} region={}", query, region)
        q = query.lower().strip()
        if not q:
            return []
        wanted_region = region.lower().strip() if region else None

        results: list[SearchResult] = []
        for key, info in self.tables.regions.items():
            if wanted_region and key != wanted_region:
                continue
            if q in key or q in info.region.lower():
                results.append(
                    SearchResult(
                        id=f"region-{key}",
                        type="cultural",
                        title=f"{info.region} Regional Information",
                        description=f"Cultural information about {info.region}",
                        relevance_score=cultural_relevance(q, key),
                        metadata={"kind": "region", "region": info.region},
                    )
                )
            for idx, custom in enumerate(info.customs):
                if q in custom.name.lower() or q in custom.description.lower():
                    results.append(
                        SearchResult(
                            id=f"custom-{key}-{idx}",
                            type="cultural",
                            title=custom.name,
                            description=custom.description,
                            relevance_score=cultural_relevance(q, custom.name),
                            metadata={"kind": "custom", "region": info.region, "custom": custom},
                        )
                    )

        for key, fest in self.tables.festivals.items():
            if q in key or q in fest.name.lower() or q in fest.significance.lower():
                results.append(
                    SearchResult(
                        id=f"festival-{key}",
                        type="cultural",
                        title=fest.name,
                        description=fest.significance,
                        relevance_score=cultural_relevance(q, key),
                        metadata={"kind": "festival", "festival": fest},
                    )
                )

        results.sort(key=lambda r: r.relevance_score, reverse=True)
        logger.info("cultural search query={!r} hits={}", query, len(results))
        return results[: self.max_results]

    def search_grouped(self, query: str, region: Optional[str] = None) -> Dict[str, List[SearchResult]]:
        """Search results keyed by region; festivals fall under "general"."""
        return group_by_region(self.search(query, region), lambda r: r.metadata.get("region") or GENERAL)

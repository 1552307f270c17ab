from __future__ import annotations

import os
from typing import Any, Optional

from pydantic import BaseModel, Field

from utils import mask_secret


class Configuration(BaseModel):
    # Geoapify (optional city geocoding for food hubs)
    geoapify_api_key: Optional[str] = Field(default=None)
    geoapify_base_url: str = Field(default="https://api.geoapify.com")
    geoapify_timeout: int = Field(default=15)

    # Ranking
    default_radius_km: float = Field(default=5.0)
    category_radius_km: float = Field(default=10.0)
    hub_radius_km: float = Field(default=50.0)
    default_min_rating: float = Field(default=3.0)
    max_recommendations: int = Field(default=20)
    max_search_results: int = Field(default=15)
    max_similar_terms: int = Field(default=10)
    max_cultural_results: int = Field(default=20)

    # Users
    history_max_entries: int = Field(default=50)

    # Runtime
    seed_on_startup: bool = Field(default=True)
    log_level: str = Field(default="INFO")
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000", "http://localhost:3001"])

    @classmethod
    def from_env(cls, overrides: Optional[dict[str, Any]] = None) -> "Configuration":
        raw: dict[str, Any] = {}

        env_map = {
            "geoapify_api_key": os.getenv("GEOAPIFY_API_KEY"),
            "geoapify_base_url": os.getenv("GEOAPIFY_BASE_URL"),
            "geoapify_timeout": os.getenv("GEOAPIFY_TIMEOUT"),
            "default_radius_km": os.getenv("DEFAULT_RADIUS_KM"),
            "category_radius_km": os.getenv("CATEGORY_RADIUS_KM"),
            "hub_radius_km": os.getenv("HUB_RADIUS_KM"),
            "default_min_rating": os.getenv("DEFAULT_MIN_RATING"),
            "max_recommendations": os.getenv("MAX_RECOMMENDATIONS"),
            "max_search_results": os.getenv("MAX_SEARCH_RESULTS"),
            "max_similar_terms": os.getenv("MAX_SIMILAR_TERMS"),
            "max_cultural_results": os.getenv("MAX_CULTURAL_RESULTS"),
            "history_max_entries": os.getenv("HISTORY_MAX_ENTRIES"),
            "seed_on_startup": os.getenv("SEED_ON_STARTUP"),
            "log_level": os.getenv("LOG_LEVEL"),
            "cors_origins": os.getenv("CORS_ORIGIN"),
        }

        bool_fields = {"seed_on_startup"}
        list_fields = {"cors_origins"}

        for k, v in env_map.items():
            if v is None:
                continue
            if k in bool_fields:
                raw[k] = str(v).lower() in {"1", "true", "yes", "on"}
            elif k in list_fields:
                raw[k] = [part.strip() for part in str(v).split(",") if part.strip()]
            else:
                raw[k] = v

        if overrides:
            raw.update({k: v for k, v in overrides.items() if v is not None})

        return cls(**raw)

    def has_geoapify(self) -> bool:
        return bool(self.geoapify_api_key)

    def log_summary(self) -> str:
        return (
            "radius_km=%s category_radius_km=%s hub_radius_km=%s min_rating=%s seed=%s geoapify=%s api_key=%s"
            % (
                self.default_radius_km,
                self.category_radius_km,
                self.hub_radius_km,
                self.default_min_rating,
                self.seed_on_startup,
                self.has_geoapify(),
                mask_secret(self.geoapify_api_key),
            )
        )

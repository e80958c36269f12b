"""
Runtime settings read from the environment.

- EWG_SEARCH_URL: enrichment endpoint; leave unset to classify offline.
- EWG_SEARCH_TOKEN: bearer credential sent to the endpoint.
- EWG_TIMEOUT_SECONDS: per-lookup timeout (default 5).
- INGREDIENT_WORKERS: concurrent enrichment lookups per batch (default 1).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .ewg_client import EnrichmentSource, EWGSearchClient, NullEnrichmentSource


@dataclass(frozen=True)
class Settings:
    ewg_search_url: Optional[str] = None
    ewg_search_token: Optional[str] = None
    ewg_timeout_seconds: float = 5.0
    workers: int = 1

    @property
    def enrichment_enabled(self) -> bool:
        return bool(self.ewg_search_url)

    @staticmethod
    def from_env() -> "Settings":
        url = os.environ.get("EWG_SEARCH_URL", "").strip()
        token = os.environ.get("EWG_SEARCH_TOKEN", "").strip()
        timeout = float(os.environ.get("EWG_TIMEOUT_SECONDS", "5"))
        workers = int(os.environ.get("INGREDIENT_WORKERS", "1"))

        if timeout <= 0:
            raise ValueError("EWG_TIMEOUT_SECONDS must be positive")
        if workers < 1:
            raise ValueError("INGREDIENT_WORKERS must be at least 1")

        return Settings(
            ewg_search_url=url or None,
            ewg_search_token=token or None,
            ewg_timeout_seconds=timeout,
            workers=workers,
        )


def build_enrichment_source(settings: Settings) -> EnrichmentSource:
    """Pick the enrichment source the settings describe."""
    if not settings.enrichment_enabled:
        return NullEnrichmentSource()
    return EWGSearchClient(
        endpoint=settings.ewg_search_url,
        token=settings.ewg_search_token,
        timeout=settings.ewg_timeout_seconds,
    )

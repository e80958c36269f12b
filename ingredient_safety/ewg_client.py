"""
Enrichment source implementation for the EWG search proxy.
Fetches a JSON envelope carrying an HTML search-results fragment, reads the
first product listing (score, concern bullets, function and common use), and
exposes it as an ExternalDatum for the classifier.

Lookups are best-effort: every failure is logged and reported as "no datum".
"""

from __future__ import annotations

import logging
import re
import threading
from collections import OrderedDict
from typing import Dict, Optional

import requests
from bs4 import BeautifulSoup

from .models import ExternalDatum


class EnrichmentSource:
    """
    Base interface for any third-party ingredient data source.
    Implementations return None instead of raising.
    """

    def fetch(self, name: str) -> Optional[ExternalDatum]:
        raise NotImplementedError


class NullEnrichmentSource(EnrichmentSource):
    """Used when no enrichment endpoint is configured."""

    def fetch(self, name: str) -> Optional[ExternalDatum]:
        return None


class EWGSearchClient(EnrichmentSource):
    """
    Thin wrapper around the EWG search proxy to standardize ingredient data.
    """

    LISTING_SELECTOR = ".product-listing"
    SCORE_SELECTOR = ".product-score"
    CONCERNS_SELECTOR = ".product-concerns li"
    FUNCTION_SELECTOR = ".product-details .function"
    COMMON_USE_SELECTOR = ".product-details .common-use"

    def __init__(
        self,
        endpoint: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 5.0,
        cache_size: int = 512,
    ):
        self.endpoint = endpoint
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout
        self.log = logging.getLogger(self.__class__.__name__)
        self.cache_size = max(0, cache_size)
        self._cache: "OrderedDict[str, Optional[ExternalDatum]]" = OrderedDict()
        self._cache_lock = threading.Lock()

    def fetch(self, name: str) -> Optional[ExternalDatum]:
        key = (name or "").strip().lower()
        with self._cache_lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                return self._cache[key]

        try:
            response = self.session.get(
                self.endpoint,
                params={"ingredient": name},
                headers=self._headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except Exception as exc:
            self.log.warning("EWG lookup failed for %s: %s", name, exc)
            return None

        if not isinstance(data, dict):
            self.log.warning("EWG lookup for %s returned an unexpected payload", name)
            return None
        if data.get("error"):
            self.log.warning("EWG data error for %s: %s", name, data["error"])
            return None
        html = data.get("html")
        if not html:
            self.log.warning("EWG response for %s carried no html", name)
            return None
        if not isinstance(html, str):
            self.log.warning("EWG response for %s carried non-text html", name)
            return None

        datum = self.parse_listing(html)
        if datum is None:
            self.log.info("Ingredient %s not found on EWG", name)
        self._remember(key, datum)
        return datum

    def _remember(self, key: str, datum: Optional[ExternalDatum]) -> None:
        # Least recently used entries are evicted past cache_size.
        if not self.cache_size:
            return
        with self._cache_lock:
            self._cache[key] = datum
            self._cache.move_to_end(key)
            while len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)

    def _headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    @classmethod
    def parse_listing(cls, html: str) -> Optional[ExternalDatum]:
        """
        Read the first product listing out of a search-results fragment.
        Returns None when the fragment has no listing.
        """
        soup = BeautifulSoup(html, "html.parser")
        listing = soup.select_one(cls.LISTING_SELECTOR)
        if listing is None:
            return None

        concerns = ", ".join(
            item.get_text(strip=True)
            for item in listing.select(cls.CONCERNS_SELECTOR)
            if item.get_text(strip=True)
        )
        return ExternalDatum(
            score=cls._score_from_text(cls._text(listing, cls.SCORE_SELECTOR)),
            concerns=concerns or None,
            function=cls._text(listing, cls.FUNCTION_SELECTOR) or None,
            common_use=cls._text(listing, cls.COMMON_USE_SELECTOR) or None,
        )

    @staticmethod
    def _text(listing, selector: str) -> str:
        # Concatenate every match, like a jQuery-style .text() call.
        return "".join(node.get_text() for node in listing.select(selector)).strip()

    @staticmethod
    def _score_from_text(text: str) -> Optional[int]:
        match = re.search(r"\d+", text or "")
        return int(match.group(0)) if match else None

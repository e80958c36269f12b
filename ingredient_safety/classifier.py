"""
Central classification engine: resolves each ingredient against the curated
reference table, asks an injected enrichment source for third-party data, and
merges both with the pattern heuristics into one result per ingredient.

Key stages:
- split the raw ingredient list and drop empty or one-character tokens
- resolve the curated reference entry (exact, then first substring match)
- fetch optional enrichment data (best-effort, never fatal)
- pick every field from the first source that supplies it:
  enrichment -> reference -> heuristics
- keep input order, one result per surviving token
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Union

from .ewg_client import EnrichmentSource, NullEnrichmentSource
from .heuristics import (
    compute_default_score,
    default_concern_text,
    derive_common_use,
    derive_function,
    derive_safety_level,
)
from .models import (
    ClassificationSummary,
    ExternalDatum,
    IngredientResult,
    ReferenceEntry,
    SafetyLevel,
)
from .reference_db import resolve_reference

DELIMITERS = re.compile(r"[,;\n]+")


def normalize_name(name: str) -> str:
    return (name or "").lower().strip()


def split_ingredient_list(text: str) -> List[str]:
    """
    Split a free-text ingredient list on commas, semicolons and newlines.
    Tokens are lowercased and trimmed; empty or one-character tokens are dropped.
    """
    tokens = (normalize_name(piece) for piece in DELIMITERS.split(text or ""))
    return [token for token in tokens if len(token) > 1]


def display_name(name: str) -> str:
    """Capitalize the first letter of each space-separated word."""
    return " ".join(word[:1].upper() + word[1:] for word in name.split(" "))


def _joined(values: Optional[Iterable[str]]) -> Optional[str]:
    if not values:
        return None
    return ", ".join(values) or None


class IngredientClassifier:
    """
    Orchestrates reference lookup, enrichment and heuristics for a batch of
    ingredient names. Inject a different enrichment source to adapt to your
    stack; with none the classifier runs fully offline.
    """

    def __init__(
        self,
        enrichment_source: Optional[EnrichmentSource] = None,
        max_workers: int = 1,
    ):
        self.enrichment_source = enrichment_source or NullEnrichmentSource()
        self.max_workers = max(1, max_workers)
        self.log = logging.getLogger(self.__class__.__name__)

    def analyze_text(self, text: str) -> List[IngredientResult]:
        return self.classify(split_ingredient_list(text))

    def classify(self, names: Union[str, Iterable[str]]) -> List[IngredientResult]:
        """
        Classify every usable name, preserving input order and duplicates.
        A plain string is treated as a raw ingredient list and split first.
        """
        if isinstance(names, str):
            names = split_ingredient_list(names)
        normalized = [normalize_name(name) for name in names]
        normalized = [name for name in normalized if len(name) > 1]

        if self.max_workers > 1 and len(normalized) > 1:
            # Executor.map yields in submission order regardless of completion.
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                return list(pool.map(self.classify_one, normalized))
        return [self.classify_one(name) for name in normalized]

    def classify_one(self, name: str) -> IngredientResult:
        """Build the merged result for a single, already normalized name."""
        reference = resolve_reference(name)
        external = self._fetch_external(name)
        result = self._merge(name, reference, external)
        self.log.debug(
            "Classified %s (reference=%s, enrichment=%s): score=%s",
            name,
            reference is not None,
            external is not None,
            result.ewg_score,
        )
        return result

    def _fetch_external(self, name: str) -> Optional[ExternalDatum]:
        """Ask the enrichment source, treating any exception as no datum."""
        try:
            return self.enrichment_source.fetch(name)
        except Exception as exc:
            self.log.warning("Enrichment lookup raised for %s: %s", name, exc)
            return None

    @staticmethod
    def _merge(
        name: str,
        reference: Optional[ReferenceEntry],
        external: Optional[ExternalDatum],
    ) -> IngredientResult:
        ext = external or ExternalDatum()

        function = ext.function or (
            reference.category if reference else derive_function(name)
        )
        score = ext.score or (
            reference.base_score if reference else compute_default_score(name)
        )
        safety_level = derive_safety_level(
            ext.score
            or (reference.base_score if reference else compute_default_score(name))
        )
        # An enrichment score also drives the default text so it agrees with the level.
        reason = (
            ext.concerns
            or (_joined(reference.concerns) if reference else None)
            or default_concern_text(ext.score or compute_default_score(name))
        )
        common_use = ext.common_use or derive_common_use(name)

        return IngredientResult(
            name=display_name(name),
            function=function,
            ewg_score=score,
            safety_level=safety_level,
            reason_for_concern=reason,
            common_use=common_use,
            scientific_name=reference.scientific_name if reference else None,
            benefits=_joined(reference.benefits) if reference else None,
            restrictions=_joined(reference.restrictions) if reference else None,
        )

    @staticmethod
    def summarize(results: List[IngredientResult]) -> ClassificationSummary:
        """
        Roll a batch up into counts per safety level, the average score and
        the highest-scoring ingredient (first one wins on ties).
        """
        counts = Counter(result.safety_level for result in results)
        per_level = {level.value: counts.get(level, 0) for level in SafetyLevel}
        highest = None
        for result in results:
            if highest is None or result.ewg_score > highest.ewg_score:
                highest = result
        average = (
            round(sum(r.ewg_score for r in results) / len(results), 2)
            if results
            else 0.0
        )
        return ClassificationSummary(
            total=len(results),
            average_score=average,
            per_level=per_level,
            highest_concern=highest,
        )

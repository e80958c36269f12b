"""
Ingredient safety package for classifying cosmetic and skincare ingredient
names into risk scores, safety levels, functions and common uses.

Expose the main classes so consumers can import directly from the package.
"""

from .models import (
    ClassificationSummary,
    ExternalDatum,
    IngredientResult,
    ReferenceEntry,
    RiskTier,
    SafetyLevel,
)
from .classifier import IngredientClassifier, split_ingredient_list
from .config import Settings, build_enrichment_source
from .ewg_client import EnrichmentSource, EWGSearchClient, NullEnrichmentSource
from .heuristics import (
    compute_default_score,
    default_concern_text,
    derive_common_use,
    derive_function,
    derive_safety_level,
)
from .reference_db import lookup_reference, resolve_reference

__all__ = [
    "ClassificationSummary",
    "EnrichmentSource",
    "EWGSearchClient",
    "ExternalDatum",
    "IngredientClassifier",
    "IngredientResult",
    "NullEnrichmentSource",
    "ReferenceEntry",
    "RiskTier",
    "SafetyLevel",
    "Settings",
    "build_enrichment_source",
    "compute_default_score",
    "default_concern_text",
    "derive_common_use",
    "derive_function",
    "derive_safety_level",
    "lookup_reference",
    "resolve_reference",
    "split_ingredient_list",
]

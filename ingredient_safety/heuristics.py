"""
Pattern-based fallbacks used when neither the reference table nor the
enrichment source has anything to say about an ingredient.

All tables are ordered tuples evaluated top-down; the first match wins.
"""

from __future__ import annotations

import re
from typing import Iterable, Tuple

from .models import RiskTier, SafetyLevel

DEFAULT_SCORE = 5
UNKNOWN_FUNCTION = "Other/Unknown"
UNKNOWN_USE = "Various applications"


def _compile(patterns: Iterable[str]) -> Tuple[re.Pattern, ...]:
    return tuple(re.compile(pattern, re.IGNORECASE) for pattern in patterns)


# Evaluated high -> moderate -> low -> very_low.
RISK_TIERS: Tuple[RiskTier, ...] = (
    RiskTier(
        name="high",
        score=7,
        patterns=_compile(
            (
                r"paraben",
                r"phthalate",
                r"formaldehyde",
                r"triclosan",
                r"bha",
                r"bht",
                r"toluene",
                r"petroleum",
                r"lead",
                r"mercury",
                r"hydroquinone",
                r"oxybenzone",
                r"coal tar",
                r"ethanolamines",
            )
        ),
    ),
    RiskTier(
        name="moderate",
        score=4,
        patterns=_compile(
            (
                r"peg-\d+",
                r"phenoxyethanol",
                r"sodium lauryl sulfate",
                r"propylene",
                r"butylene",
                r"synthetic",
                r"fragrance",
                r"dmdm",
                r"diazolidinyl",
                r"quaternium",
            )
        ),
    ),
    RiskTier(
        name="low",
        score=2,
        patterns=_compile(
            (
                r"water",
                r"aqua",
                r"aloe",
                r"glycerin",
                r"vitamin",
                r"panthenol",
                r"allantoin",
                r"zinc",
                r"titanium dioxide",
                r"hyaluronic",
                r"ceramide",
                r"peptide",
            )
        ),
    ),
    RiskTier(
        name="very_low",
        score=1,
        patterns=_compile(
            (
                r"^water$",
                r"^aloe vera$",
                r"^glycerin$",
                r"^vitamin (a|b|c|d|e)$",
                r"^zinc oxide$",
                r"^green tea$",
                r"^chamomile$",
                r"^calendula$",
            )
        ),
    ),
)

FUNCTION_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (
        "Preservative",
        (
            "paraben",
            "phenoxyethanol",
            "benzoate",
            "sorbate",
            "formaldehyde",
            "methylisothiazolinone",
            "benzyl alcohol",
            "potassium sorbate",
        ),
    ),
    (
        "Surfactant",
        (
            "lauryl",
            "laureth",
            "sodium",
            "cocamide",
            "sulfate",
            "betaine",
            "decyl glucoside",
            "coco-glucoside",
            "polysorbate",
        ),
    ),
    (
        "Emollient",
        (
            "oil",
            "butter",
            "glycerin",
            "lanolin",
            "dimethicone",
            "squalane",
            "ceramide",
            "fatty acid",
            "triglyceride",
            "caprylic",
        ),
    ),
    (
        "Fragrance",
        (
            "fragrance",
            "parfum",
            "aroma",
            "essential oil",
            "limonene",
            "linalool",
            "citral",
            "geraniol",
        ),
    ),
    (
        "UV Filter",
        (
            "benzophenone",
            "avobenzone",
            "titanium dioxide",
            "zinc oxide",
            "octinoxate",
            "oxybenzone",
            "octocrylene",
            "homosalate",
        ),
    ),
    (
        "Antioxidant",
        (
            "tocopherol",
            "vitamin",
            "retinol",
            "ascorbic",
            "niacinamide",
            "flavonoid",
            "polyphenol",
            "resveratrol",
        ),
    ),
    (
        "Humectant",
        (
            "glycerin",
            "hyaluronic",
            "urea",
            "propylene glycol",
            "butylene glycol",
            "sodium pca",
            "sorbitol",
            "panthenol",
        ),
    ),
    (
        "Emulsifier",
        (
            "cetyl",
            "stearic",
            "glyceryl",
            "polysorbate",
            "cetearyl",
            "peg",
            "sorbitan",
            "carbomer",
        ),
    ),
)

USE_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (
        "Moisturizing agent",
        (
            "glycerin",
            "oil",
            "butter",
            "hyaluronic",
            "dimethicone",
            "squalane",
            "ceramide",
            "fatty acid",
            "jojoba",
        ),
    ),
    (
        "Cleansing agent",
        (
            "lauryl",
            "laureth",
            "cocamide",
            "sulfate",
            "glucoside",
            "betaine",
            "sodium cocoyl",
            "decyl",
        ),
    ),
    (
        "Preservative system",
        (
            "paraben",
            "phenoxyethanol",
            "benzoate",
            "formaldehyde",
            "methylisothiazolinone",
            "potassium sorbate",
        ),
    ),
    (
        "Fragrance component",
        (
            "fragrance",
            "parfum",
            "aroma",
            "essential oil",
            "limonene",
            "linalool",
            "citral",
            "geraniol",
        ),
    ),
    (
        "Sun protection",
        (
            "benzophenone",
            "avobenzone",
            "titanium",
            "zinc oxide",
            "octinoxate",
            "oxybenzone",
            "octocrylene",
        ),
    ),
    (
        "Antioxidant protection",
        (
            "tocopherol",
            "vitamin",
            "retinol",
            "ascorbic",
            "niacinamide",
            "flavonoid",
            "polyphenol",
        ),
    ),
    (
        "Thickening agent",
        (
            "carbomer",
            "xanthan",
            "cellulose",
            "guar",
            "carrageenan",
            "acacia",
            "agar",
            "alginate",
        ),
    ),
    (
        "Skin conditioning",
        (
            "aloe",
            "panthenol",
            "allantoin",
            "chamomile",
            "calendula",
            "green tea",
            "collagen",
            "peptide",
        ),
    ),
)


def _first_keyword_label(
    name: str, table: Tuple[Tuple[str, Tuple[str, ...]], ...], default: str
) -> str:
    lowered = (name or "").lower()
    for label, keywords in table:
        if any(keyword in lowered for keyword in keywords):
            return label
    return default


def compute_default_score(name: str) -> int:
    """
    Estimate a risk score from the name alone. Returns the score of the first
    tier with a matching pattern, or DEFAULT_SCORE when nothing matches.
    """
    text = name or ""
    for tier in RISK_TIERS:
        if tier.matches(text):
            return tier.score
    return DEFAULT_SCORE


def derive_safety_level(score: int) -> SafetyLevel:
    if score <= 2:
        return SafetyLevel.LOW
    if score <= 6:
        return SafetyLevel.MODERATE
    return SafetyLevel.HIGH


def default_concern_text(score: int) -> str:
    # Same 2/6 thresholds as derive_safety_level; keep both in step.
    if score <= 2:
        return "Generally recognized as safe with extensive safety data"
    if score <= 6:
        return "Moderate safety concerns, may require more research"
    return "High safety concerns, potential risks identified"


def derive_function(name: str) -> str:
    return _first_keyword_label(name, FUNCTION_KEYWORDS, UNKNOWN_FUNCTION)


def derive_common_use(name: str) -> str:
    return _first_keyword_label(name, USE_KEYWORDS, UNKNOWN_USE)

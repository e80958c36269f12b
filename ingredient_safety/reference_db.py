"""
Curated ingredient reference data and helpers.

Defines the hand-authored reference table (score, category, concerns,
benefits, scientific name and regulatory restrictions per ingredient family)
and utilities to resolve free-form ingredient names to an entry.

The table is an ordered sequence: substring resolution walks it top-down and
the first hit wins, so definition order decides between overlapping keys.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

from .models import ReferenceEntry

REFERENCE_ENTRIES: Tuple[Tuple[str, ReferenceEntry], ...] = (
    # Preservatives
    (
        "paraben",
        ReferenceEntry(
            base_score=7,
            category="Preservative",
            concerns=("Endocrine disruption", "Reproductive toxicity"),
            benefits=("Effective preservation", "Extends product shelf life"),
            restrictions=("Restricted in EU",),
        ),
    ),
    (
        "phenoxyethanol",
        ReferenceEntry(
            base_score=4,
            category="Preservative",
            concerns=(
                "Potential skin irritation",
                "Allergic reactions in sensitive individuals",
            ),
            benefits=("Broad spectrum preservation", "Stable in formulations"),
        ),
    ),
    (
        "sodium benzoate",
        ReferenceEntry(
            base_score=3,
            category="Preservative",
            concerns=("Potential irritation at high concentrations",),
            benefits=("Natural origin option", "Effective against mold"),
        ),
    ),
    # Surfactants
    (
        "sodium lauryl sulfate",
        ReferenceEntry(
            base_score=4,
            category="Surfactant",
            concerns=("Skin irritation", "Barrier disruption"),
            benefits=("Effective cleansing", "Good foaming"),
        ),
    ),
    (
        "cocamidopropyl betaine",
        ReferenceEntry(
            base_score=3,
            category="Surfactant",
            concerns=("Mild skin sensitization",),
            benefits=("Gentle cleansing", "Reduces irritation from other surfactants"),
        ),
    ),
    # Emollients and humectants
    (
        "glycerin",
        ReferenceEntry(
            base_score=1,
            category="Emollient",
            benefits=("Hydration", "Skin barrier support"),
            scientific_name="Glycerol",
        ),
    ),
    (
        "hyaluronic acid",
        ReferenceEntry(
            base_score=1,
            category="Humectant",
            benefits=("Deep hydration", "Anti-aging properties"),
            scientific_name="Sodium Hyaluronate",
        ),
    ),
    # Antioxidants
    (
        "vitamin e",
        ReferenceEntry(
            base_score=1,
            category="Antioxidant",
            benefits=("Antioxidant protection", "Skin conditioning"),
            scientific_name="Tocopherol",
        ),
    ),
    (
        "vitamin c",
        ReferenceEntry(
            base_score=1,
            category="Antioxidant",
            concerns=("Stability issues",),
            benefits=("Brightening", "Collagen support"),
            scientific_name="Ascorbic Acid",
        ),
    ),
    # UV filters
    (
        "titanium dioxide",
        ReferenceEntry(
            base_score=2,
            category="UV Filter",
            concerns=("Potential inhalation risk (powder form)",),
            benefits=("Broad spectrum protection", "Stable sun protection"),
            scientific_name="TiO2",
        ),
    ),
    (
        "zinc oxide",
        ReferenceEntry(
            base_score=2,
            category="UV Filter",
            concerns=("White cast on skin",),
            benefits=("Natural sun protection", "Skin soothing"),
            scientific_name="ZnO",
        ),
    ),
)

# Lower-case key -> entry, read-only view for exact lookups
REFERENCE_DATABASE: Mapping[str, ReferenceEntry] = MappingProxyType(
    dict(REFERENCE_ENTRIES)
)


def _normalize(text: str) -> str:
    return (text or "").lower()


def reference_keys() -> Iterator[str]:
    """Keys in definition order."""
    return (key for key, _entry in REFERENCE_ENTRIES)


def lookup_reference(name: str) -> Optional[ReferenceEntry]:
    """Case-insensitive exact key lookup."""
    return REFERENCE_DATABASE.get(_normalize(name))


def resolve_reference(name: str) -> Optional[ReferenceEntry]:
    """
    Resolve a free-form ingredient name to a reference entry.
    Tries an exact key match first, then the first key (in definition order)
    that the name contains or that contains the name. Returns None when
    nothing matches.
    """
    normalized = _normalize(name)
    if not normalized:
        return None
    exact = REFERENCE_DATABASE.get(normalized)
    if exact:
        return exact

    for key, entry in REFERENCE_ENTRIES:
        if key in normalized or normalized in key:
            return entry
    return None

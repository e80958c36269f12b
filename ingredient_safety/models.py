"""
Shared domain models used by the ingredient classifier.

- SafetyLevel: coarse three-value banding of a numeric risk score.
- ReferenceEntry: curated, hand-authored data for one ingredient family.
- RiskTier: a named score bucket with the patterns that select it.
- ExternalDatum: optional third-party override for one ingredient.
- IngredientResult: the merged, per-ingredient output of the classifier.
- ClassificationSummary: batch-level roll-up for reports and the API.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class SafetyLevel(str, Enum):
    LOW = "Low Concern"
    MODERATE = "Moderate Concern"
    HIGH = "High Concern"


@dataclass(frozen=True)
class ReferenceEntry:
    """
    Curated knowledge about one ingredient family. Instances live in the
    static reference table and are never mutated.
    """

    base_score: int
    category: str
    concerns: Tuple[str, ...] = ()
    benefits: Tuple[str, ...] = ()
    scientific_name: Optional[str] = None
    restrictions: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        if self.base_score < 1:
            raise ValueError(f"base_score must be positive, got {self.base_score}")
        if not self.category:
            raise ValueError("category must not be empty")


@dataclass(frozen=True)
class RiskTier:
    name: str
    score: int
    patterns: Tuple[re.Pattern, ...]

    def matches(self, text: str) -> bool:
        return any(pattern.search(text) for pattern in self.patterns)


@dataclass(frozen=True)
class ExternalDatum:
    """
    Whatever the enrichment source could read for one ingredient. Every field
    is optional; empty values mean "not supplied".
    """

    score: Optional[int] = None
    concerns: Optional[str] = None
    function: Optional[str] = None
    common_use: Optional[str] = None


@dataclass(frozen=True)
class IngredientResult:
    """
    One classified ingredient. Created once per input name and returned as
    part of the ordered result list.
    """

    name: str
    function: str
    ewg_score: int
    safety_level: SafetyLevel
    reason_for_concern: str
    common_use: str
    scientific_name: Optional[str] = None
    benefits: Optional[str] = None
    restrictions: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        """JSON-friendly form; optional keys are omitted when unset."""
        payload: Dict[str, object] = {
            "name": self.name,
            "function": self.function,
            "ewgScore": self.ewg_score,
            "safetyLevel": self.safety_level.value,
            "reasonForConcern": self.reason_for_concern,
            "commonUse": self.common_use,
        }
        optional = {
            "scientificName": self.scientific_name,
            "benefits": self.benefits,
            "restrictions": self.restrictions,
        }
        payload.update({key: value for key, value in optional.items() if value})
        return payload


@dataclass
class ClassificationSummary:
    total: int
    average_score: float
    per_level: Dict[str, int] = field(default_factory=dict)
    highest_concern: Optional[IngredientResult] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "total": self.total,
            "averageScore": self.average_score,
            "perLevel": dict(self.per_level),
            "highestConcern": self.highest_concern.to_dict()
            if self.highest_concern
            else None,
        }

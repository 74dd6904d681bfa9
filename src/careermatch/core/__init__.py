"""Core matching engine components."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

# NOTE: keep imports explicit for export clarity.
from .aggregation import Contribution, ScoreTrace, WeightedCriterion, aggregate
from .evaluators import CategoryScorer, Classifier, ConstraintEvaluator, OptionScorer
from .matching import DEFAULT_DISCLAIMER, MatchingCore
from .records import (
    CategoryResult,
    CategoryScore,
    RankedResult,
    RecommendedOption,
    ScoredOption,
    TierResult,
)


@runtime_checkable
class Matcher(Protocol):
    """Matcher contract for turning a profile into a ranked result."""

    def match(self, profile, *, limits=None) -> RankedResult:
        """Return the tiered recommendations for a profile."""


__all__ = [
    "Matcher",
    "MatchingCore",
    "DEFAULT_DISCLAIMER",
    "RankedResult",
    "RecommendedOption",
    "CategoryResult",
    "CategoryScore",
    "ScoredOption",
    "TierResult",
    "CategoryScorer",
    "OptionScorer",
    "ConstraintEvaluator",
    "Classifier",
    "Contribution",
    "ScoreTrace",
    "WeightedCriterion",
    "aggregate",
]

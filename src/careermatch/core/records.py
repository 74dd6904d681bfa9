"""Transient records produced inside one matching call."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Literal

from ..schemas import Option

TierName = Literal["top", "mid", "stretch", "excluded"]


@dataclass(frozen=True, slots=True)
class CategoryScore:
    """Score of one category with its reasoning trace."""

    category_id: str
    name: str
    score: float
    reasoning: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ScoredOption:
    """An option moving through option scoring, constraints and tiering."""

    option: Option
    raw_score: float
    adjusted_score: float
    reasoning: list[str] = field(default_factory=list)
    feasibility_notes: list[str] = field(default_factory=list)
    penalty: float = 0.0
    tier: TierName | None = None


@dataclass(slots=True)
class TierResult:
    """Options partitioned into ordered, capped tiers."""

    top: list[ScoredOption] = field(default_factory=list)
    mid: list[ScoredOption] = field(default_factory=list)
    stretch: list[ScoredOption] = field(default_factory=list)

    def tiered(self) -> list[ScoredOption]:
        return [*self.top, *self.mid, *self.stretch]


@dataclass(slots=True)
class RecommendedOption:
    option_id: str
    title: str
    tier: TierName
    score: int
    primary_category: str
    secondary_category: str | None
    reasoning: list[str]
    feasibility_notes: list[str]


@dataclass(slots=True)
class CategoryResult:
    category_id: str
    name: str
    score: int
    reasoning: list[str]


@dataclass(slots=True)
class ProfileSummary:
    grade: int
    readiness_level: str
    key_strengths: list[str]
    primary_interests: list[str]


@dataclass(slots=True)
class ComparisonQuestion:
    question: str
    option_a: str
    option_b: str
    factors: list[str]


@dataclass(slots=True)
class RankedResult:
    """Output record handed to the presentation and narration layer."""

    profile_id: str | None
    catalog_version: str
    top_tier: list[RecommendedOption]
    mid_tier: list[RecommendedOption]
    stretch_tier: list[RecommendedOption]
    top_categories: list[CategoryResult]
    profile_summary: ProfileSummary
    comparison_questions: list[ComparisonQuestion]
    disclaimer: str
    total_options: int
    total_retained: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def round_score(value: float) -> int:
    """Round half up to an integer score."""
    return int(math.floor(value + 0.5))

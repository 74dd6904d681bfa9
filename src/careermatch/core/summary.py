"""Deterministic profile summary and comparison prompts for the result record."""

from __future__ import annotations

from typing import Sequence

from ..schemas import Catalog, Profile
from .records import CategoryScore, ComparisonQuestion, ProfileSummary, ScoredOption

COMPARISON_FACTORS = (
    "Work environment",
    "Education requirements",
    "Income potential",
    "Job security",
)

STRONG_RATINGS = frozenset({"excellent", "good"})


def readiness_level(profile: Profile) -> str:
    score = profile.readiness_scalar()
    if score >= 0.75:
        return "High - Ready to make decisions"
    if score >= 0.5:
        return "Moderate - Exploring options"
    return "Early - Just beginning exploration"


def build_profile_summary(
    profile: Profile,
    category_scores: Sequence[CategoryScore],
    catalog: Catalog,
) -> ProfileSummary:
    strengths = [
        catalog.label("academic_interests", subject)
        for subject, rating in profile.academic_performance.items()
        if rating in STRONG_RATINGS
    ]
    strengths.extend(catalog.label("traits", trait) for trait in profile.traits[:3])

    interests = [item.name for item in category_scores[:3] if item.score > 0]
    interests.extend(catalog.label("work_style", style) for style in profile.work_style[:2])

    return ProfileSummary(
        grade=profile.grade,
        readiness_level=readiness_level(profile),
        key_strengths=strengths[:5],
        primary_interests=interests[:4],
    )


def build_comparison_questions(tiered: Sequence[ScoredOption]) -> list[ComparisonQuestion]:
    """Ask the student to compare the two highest tiered options."""
    if len(tiered) < 2:
        return []
    first, second = tiered[0].option, tiered[1].option
    return [
        ComparisonQuestion(
            question=f"Which appeals to you more: {first.title} or {second.title}?",
            option_a=first.title,
            option_b=second.title,
            factors=list(COMPARISON_FACTORS),
        )
    ]

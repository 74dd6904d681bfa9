"""Matching core orchestration."""

from __future__ import annotations

from typing import Sequence

from ..schemas import Catalog, Profile
from .evaluators import Classifier, ConstraintEvaluator, CategoryScorer, OptionScorer
from .records import (
    CategoryResult,
    CategoryScore,
    RankedResult,
    RecommendedOption,
    ScoredOption,
    round_score,
)
from .summary import build_comparison_questions, build_profile_summary

DEFAULT_DISCLAIMER = (
    "These recommendations are based on your assessment responses and are meant "
    "to guide your exploration. Consider your personal circumstances, local "
    "opportunities, and changing interests as you make decisions about your future."
)


class MatchingCore:
    """Runs Profile -> categories -> options -> constraints -> tiers.

    Every call is a pure function of the profile and the catalog held by
    the core; nothing is cached between calls.
    """

    DEFAULT_TOP_CATEGORIES = 3

    def __init__(
        self,
        *,
        catalog: Catalog,
        category_scorer: CategoryScorer | None = None,
        option_scorer: OptionScorer | None = None,
        constraint_evaluator: ConstraintEvaluator | None = None,
        classifier: Classifier | None = None,
        top_categories: int | None = None,
        disclaimer: str | None = None,
    ) -> None:
        self._catalog = catalog
        self._category_scorer = category_scorer or CategoryScorer()
        self._option_scorer = option_scorer or OptionScorer()
        self._constraints = constraint_evaluator or ConstraintEvaluator()
        self._classifier = classifier or Classifier()
        self._top_categories = top_categories or self.DEFAULT_TOP_CATEGORIES
        self._disclaimer = disclaimer or DEFAULT_DISCLAIMER

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def match(
        self,
        profile: Profile,
        *,
        limits: tuple[int, int, int] | None = None,
    ) -> RankedResult:
        catalog = self._catalog
        category_scores = self._category_scorer.score(profile, catalog)
        scored = self._option_scorer.score(category_scores, catalog)
        adjusted = self._constraints.apply(profile, scored)
        tiers = self._classifier.classify(adjusted, limits=limits)

        top_score = _top_score(adjusted)
        retained = sum(
            1
            for item in adjusted
            if self._classifier.assign_tier(item, top_score) != "excluded"
        )

        return RankedResult(
            profile_id=profile.profile_id,
            catalog_version=catalog.version,
            top_tier=[_recommended(item) for item in tiers.top],
            mid_tier=[_recommended(item) for item in tiers.mid],
            stretch_tier=[_recommended(item) for item in tiers.stretch],
            top_categories=[
                _category_result(item) for item in category_scores[: self._top_categories]
            ],
            profile_summary=build_profile_summary(profile, category_scores, catalog),
            comparison_questions=build_comparison_questions(tiers.tiered()),
            disclaimer=self._disclaimer,
            total_options=len(adjusted),
            total_retained=retained,
        )


def _top_score(options: Sequence[ScoredOption]) -> float:
    return max((item.adjusted_score for item in options), default=0.0)


def _recommended(item: ScoredOption) -> RecommendedOption:
    return RecommendedOption(
        option_id=item.option.id,
        title=item.option.title,
        tier=item.tier or "excluded",
        score=min(round_score(item.adjusted_score), 100),
        primary_category=item.option.primary_category,
        secondary_category=item.option.secondary_category,
        reasoning=list(item.reasoning),
        feasibility_notes=list(item.feasibility_notes),
    )


def _category_result(item: CategoryScore) -> CategoryResult:
    return CategoryResult(
        category_id=item.category_id,
        name=item.name,
        score=round_score(item.score),
        reasoning=list(item.reasoning),
    )

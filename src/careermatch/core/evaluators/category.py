"""Category (career cluster) scoring from profile answers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from ...schemas import Catalog, Profile
from ...schemas.catalog import VALUE_DIMENSIONS
from ...schemas.profile import PERFORMANCE_SCALE
from ..aggregation import Contribution, WeightedCriterion, aggregate
from ..records import CategoryScore

NONE_EXPERIENCE = frozenset({"none", "none yet", "n/a", "na", "no"})


@dataclass
class CategoryScorerConfig:
    """Group weights, per-attribute caps and reasoning cut-offs."""

    interests_weight: float = 0.35
    academic_weight: float = 0.25
    personality_weight: float = 0.20
    values_weight: float = 0.20
    experience_weight: float = 0.05

    interest_cap: float = 25.0
    academic_interest_cap: float = 15.0
    academic_performance_cap: float = 10.0
    trait_cap: float = 20.0
    values_cap: float = 20.0
    experience_cap: float = 100.0

    performance_scale: dict[str, float] = field(
        default_factory=lambda: dict(PERFORMANCE_SCALE)
    )
    performance_floor: float = 0.5
    performance_reason_level: float = 0.67
    values_reason_similarity: float = 0.7
    min_experience_chars: int = 10
    reasoning_epsilon: float = 0.01
    max_score: float = 100.0


class CategoryScorer:
    """Score every catalog category for one profile."""

    method = "category"

    def __init__(self, *, config: CategoryScorerConfig | None = None) -> None:
        self._config = config or CategoryScorerConfig()

    def score(self, profile: Profile, catalog: Catalog) -> list[CategoryScore]:
        """Return category scores sorted descending; ties keep catalog order."""
        criteria = self._build_criteria(catalog)
        trace = aggregate(
            criteria,
            profile,
            catalog.category_ids(),
            epsilon=self._config.reasoning_epsilon,
        )

        scores = [
            CategoryScore(
                category_id=category.id,
                name=category.name,
                score=min(max(trace.score(category.id), 0.0), self._config.max_score),
                reasoning=trace.reasoning(category.id),
            )
            for category in catalog.categories
        ]
        return sorted(scores, key=lambda item: item.score, reverse=True)

    def _build_criteria(self, catalog: Catalog) -> list[WeightedCriterion]:
        cfg = self._config
        return [
            self._lookup_criterion(
                catalog,
                "work_environment",
                cfg.interests_weight,
                cfg.interest_cap,
                "Prefers {label} work environment",
            ),
            self._lookup_criterion(
                catalog,
                "work_style",
                cfg.interests_weight,
                cfg.interest_cap,
                "Enjoys {label}",
            ),
            self._lookup_criterion(
                catalog,
                "thinking_style",
                cfg.interests_weight,
                cfg.interest_cap,
                "Likes {label}",
            ),
            self._lookup_criterion(
                catalog,
                "academic_interests",
                cfg.academic_weight,
                cfg.academic_interest_cap,
                "Strong interest in {label}",
                case=None,
            ),
            WeightedCriterion(
                name="academic_performance",
                extractor=self._rated_subjects,
                weight=cfg.academic_weight,
                scorer=lambda item: self._score_performance(catalog, item),
            ),
            self._lookup_criterion(
                catalog,
                "traits",
                cfg.personality_weight,
                cfg.trait_cap,
                "{label} personality trait",
                case="capitalize",
            ),
            WeightedCriterion(
                name="values",
                extractor=_answered_values,
                weight=cfg.values_weight,
                scorer=lambda preferences: self._score_values(catalog, preferences),
            ),
            WeightedCriterion(
                name="experience",
                extractor=self._experience,
                weight=cfg.experience_weight,
                scorer=lambda _: self._score_experience(catalog),
            ),
        ]

    @staticmethod
    def _lookup_criterion(
        catalog: Catalog,
        criterion: str,
        weight: float,
        cap: float,
        template: str,
        *,
        case: str | None = "lower",
    ) -> WeightedCriterion:
        def score_value(value: str) -> Iterable[Contribution]:
            matches = catalog.lookup(criterion, value)
            if not matches:
                return []
            label = catalog.label(criterion, value)
            if case == "lower":
                label = label.lower()
            elif case == "capitalize":
                label = label[:1].upper() + label[1:]
            reason = template.format(label=label)
            return [
                Contribution(target=category_id, points=partial * cap, reason=reason)
                for category_id, partial in matches
            ]

        return WeightedCriterion(
            name=criterion,
            extractor=lambda profile: getattr(profile, criterion),
            weight=weight,
            scorer=score_value,
        )

    def _rated_subjects(self, profile: Profile) -> list[tuple[str, float]]:
        rated: list[tuple[str, float]] = []
        for subject, rating in profile.academic_performance.items():
            level = self._config.performance_scale.get(rating, 0.0)
            if level > self._config.performance_floor:
                rated.append((subject, level))
        return rated

    def _score_performance(
        self,
        catalog: Catalog,
        item: tuple[str, float],
    ) -> list[Contribution]:
        subject, level = item
        reason = None
        if level >= self._config.performance_reason_level:
            reason = f"Strong performance in {catalog.label('academic_interests', subject)}"
        return [
            Contribution(
                target=category_id,
                points=partial * level * self._config.academic_performance_cap,
                reason=reason,
            )
            for category_id, partial in catalog.lookup("academic_interests", subject)
        ]

    def _score_values(
        self,
        catalog: Catalog,
        preferences: dict[str, float | None],
    ) -> list[Contribution]:
        contributions: list[Contribution] = []
        for category in catalog.categories:
            profile_values = category.value_profile.model_dump()
            # Unanswered dimensions add no similarity but still count in the mean.
            similarity = sum(
                1.0 - abs(student - profile_values[dimension])
                for dimension, student in preferences.items()
                if student is not None
            ) / len(VALUE_DIMENSIONS)
            reason = None
            if similarity > self._config.values_reason_similarity:
                reason = f"Values align well with {category.name.lower()}"
            contributions.append(
                Contribution(
                    target=category.id,
                    points=similarity * self._config.values_cap,
                    reason=reason,
                )
            )
        return contributions

    def _experience(self, profile: Profile) -> list[str]:
        text = (profile.experience or "").strip()
        if text.lower() in NONE_EXPERIENCE:
            return []
        if len(text) <= self._config.min_experience_chars:
            return []
        return [text]

    def _score_experience(self, catalog: Catalog) -> list[Contribution]:
        # Flat bonus: weight x cap points to every category.
        return [
            Contribution(
                target=category.id,
                points=self._config.experience_cap,
                reason="Prior work or volunteer experience",
            )
            for category in catalog.categories
        ]


def _answered_values(profile: Profile) -> list[dict[str, Any]]:
    preferences = profile.value_preferences()
    if all(value is None for value in preferences.values()):
        return []
    return [preferences]

"""Option scoring as a blend of its category scores."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ...schemas import Catalog, Option
from ..aggregation import Contribution, WeightedCriterion, aggregate
from ..records import CategoryScore, ScoredOption, round_score


@dataclass
class OptionScorerConfig:
    """Blend weights for primary and secondary categories."""

    primary_weight: float = 0.75
    secondary_weight: float = 0.25


class OptionScorer:
    """Blend category scores into a raw score per option."""

    method = "option"

    def __init__(self, *, config: OptionScorerConfig | None = None) -> None:
        self._config = config or OptionScorerConfig()

    def score(
        self,
        category_scores: Sequence[CategoryScore],
        catalog: Catalog,
    ) -> list[ScoredOption]:
        by_id = {item.category_id: item for item in category_scores}
        criteria = [
            WeightedCriterion(
                name="primary_category",
                extractor=_primary_refs,
                weight=self._config.primary_weight,
                scorer=lambda ref: self._contribution(ref, by_id, "match with"),
            ),
            WeightedCriterion(
                name="secondary_category",
                extractor=_secondary_refs,
                weight=self._config.secondary_weight,
                scorer=lambda ref: self._contribution(ref, by_id, "secondary match with"),
            ),
        ]
        trace = aggregate(criteria, catalog.options, [option.id for option in catalog.options])

        return [
            ScoredOption(
                option=option,
                raw_score=trace.score(option.id),
                adjusted_score=trace.score(option.id),
                reasoning=trace.reasoning(option.id),
            )
            for option in catalog.options
        ]

    @staticmethod
    def _contribution(
        ref: tuple[str, str],
        by_id: dict[str, CategoryScore],
        phrase: str,
    ) -> list[Contribution]:
        option_id, category_id = ref
        category = by_id.get(category_id)
        score = category.score if category else 0.0
        name = category.name if category else category_id
        return [
            Contribution(
                target=option_id,
                points=score,
                reason=f"{round_score(score)}% {phrase} {name}",
            )
        ]


def _primary_refs(options: Iterable[Option]) -> list[tuple[str, str]]:
    return [(option.id, option.primary_category) for option in options]


def _secondary_refs(options: Iterable[Option]) -> list[tuple[str, str]]:
    return [
        (option.id, option.secondary_category)
        for option in options
        if option.secondary_category
    ]

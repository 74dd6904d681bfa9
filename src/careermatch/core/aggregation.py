"""Weighted look-up-and-accumulate primitive shared by the scoring passes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence


@dataclass(frozen=True, slots=True)
class Contribution:
    """Unweighted points a criterion value adds to one target."""

    target: str
    points: float
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class WeightedCriterion:
    """A criterion applied uniformly to a subject.

    ``extractor`` pulls the values to score out of the subject, ``scorer``
    turns one value into contributions, and ``weight`` scales every
    contribution of this criterion.
    """

    name: str
    extractor: Callable[[Any], Iterable[Any]]
    weight: float
    scorer: Callable[[Any], Iterable[Contribution]]


class ScoreTrace:
    """Per-target accumulator keeping reasoning in computation order."""

    def __init__(self, targets: Iterable[str], *, epsilon: float | None = None) -> None:
        self._scores: dict[str, float] = {target: 0.0 for target in targets}
        self._reasoning: dict[str, list[str]] = {target: [] for target in self._scores}
        self._epsilon = epsilon

    def add(self, target: str, amount: float, reason: str | None = None) -> None:
        if target not in self._scores:
            return
        self._scores[target] += amount
        if reason is None:
            return
        if self._epsilon is None or abs(amount) > self._epsilon:
            self._reasoning[target].append(reason)

    def targets(self) -> list[str]:
        return list(self._scores)

    def score(self, target: str) -> float:
        return self._scores[target]

    def reasoning(self, target: str) -> list[str]:
        return list(self._reasoning[target])


def aggregate(
    criteria: Sequence[WeightedCriterion],
    subject: Any,
    targets: Iterable[str],
    *,
    epsilon: float | None = None,
) -> ScoreTrace:
    """Apply every criterion to ``subject`` and accumulate weighted points.

    Contributions aimed at targets outside ``targets`` are dropped. With
    ``epsilon`` set, a reason is only recorded when its weighted amount
    exceeds it; with ``epsilon=None`` every reason is recorded.
    """
    trace = ScoreTrace(targets, epsilon=epsilon)
    for criterion in criteria:
        for value in criterion.extractor(subject):
            for contribution in criterion.scorer(value):
                trace.add(
                    contribution.target,
                    contribution.points * criterion.weight,
                    contribution.reason,
                )
    return trace

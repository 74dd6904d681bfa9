"""Tier classification with dual absolute and relative thresholds."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from ..records import ScoredOption, TierName, TierResult


@dataclass
class ClassifierConfig:
    """Tier floors and per-tier caps."""

    top_absolute: float = 45.0
    top_relative: float = 0.85
    mid_absolute: float = 35.0
    mid_relative: float = 0.70
    stretch_absolute: float = 25.0
    stretch_challenge_level: int = 2
    top_limit: int = 3
    mid_limit: int = 3
    stretch_limit: int = 2


class Classifier:
    """Partition constraint-adjusted options into top, mid and stretch tiers."""

    method = "classifier"

    def __init__(self, *, config: ClassifierConfig | None = None) -> None:
        self._config = config or ClassifierConfig()

    def classify(
        self,
        adjusted_options: Sequence[ScoredOption],
        *,
        limits: tuple[int, int, int] | None = None,
    ) -> TierResult:
        top_limit, mid_limit, stretch_limit = limits or (
            self._config.top_limit,
            self._config.mid_limit,
            self._config.stretch_limit,
        )
        # sorted() is stable, so equal scores keep catalog order.
        ranked = sorted(adjusted_options, key=lambda item: item.adjusted_score, reverse=True)
        top_score = ranked[0].adjusted_score if ranked else 0.0

        result = TierResult()
        buckets = {"top": result.top, "mid": result.mid, "stretch": result.stretch}
        for item in ranked:
            tier = self.assign_tier(item, top_score)
            if tier == "excluded":
                continue
            buckets[tier].append(replace(item, tier=tier))

        del result.top[top_limit:]
        del result.mid[mid_limit:]
        del result.stretch[stretch_limit:]
        return result

    def assign_tier(self, item: ScoredOption, top_score: float) -> TierName:
        cfg = self._config
        score = item.adjusted_score
        relative = score / top_score if top_score > 0 else 0.0

        if (score >= cfg.top_absolute or relative >= cfg.top_relative) and not item.feasibility_notes:
            return "top"
        if score >= cfg.mid_absolute or relative >= cfg.mid_relative:
            return "mid"
        if score >= cfg.stretch_absolute or item.option.challenge_level >= cfg.stretch_challenge_level:
            return "stretch"
        return "excluded"

"""Feasibility penalties for real-world constraint mismatches."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Iterable, Sequence

from rapidfuzz import fuzz

from ...schemas import Profile
from ...schemas.profile import EDUCATION_LEVEL_NAMES
from ..records import ScoredOption

FAST_INCOME = "fast_income"
PHYSICAL_LIMITATION = "physical_limitation"

NEGATION_WORDS = frozenset({"no", "not", "never", "without", "nor", "none", "cannot"})
_WORD = re.compile(r"[a-z0-9_']+")

DEFAULT_CONSTRAINT_PHRASES: dict[str, tuple[str, ...]] = {
    FAST_INCOME: (
        "Start earning money as soon as possible",
        "Need to earn money quickly",
    ),
    PHYSICAL_LIMITATION: (
        "Physical work may be difficult for me",
        "I have a physical limitation",
    ),
}


@dataclass
class ConstraintConfig:
    """Penalty magnitudes and trigger thresholds."""

    preparation_penalty_per_level: float = 15.0
    entry_grace_years: float = 2.0
    entry_penalty_per_year: float = 10.0
    physical_demand_threshold: int = 2
    physical_penalty: float = 20.0
    support_threshold: float = 0.5
    cost_threshold: float = 0.6
    cost_penalty: float = 15.0
    min_similarity: float = 85.0
    phrases: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_CONSTRAINT_PHRASES)
    )


class ConstraintEvaluator:
    """Apply additive penalties and record feasibility notes."""

    method = "constraints"

    def __init__(self, *, config: ConstraintConfig | None = None) -> None:
        self._config = config or ConstraintConfig()

    def apply(
        self,
        profile: Profile,
        scored_options: Sequence[ScoredOption],
    ) -> list[ScoredOption]:
        declared = self.declared_constraints(profile)
        commitment = profile.commitment_level
        support = profile.support_scalar()
        return [
            self._evaluate(item, declared, commitment, support)
            for item in scored_options
        ]

    def declared_constraints(self, profile: Profile) -> set[str]:
        """Resolve constraint entries and free text against the phrase table."""
        declared: set[str] = set()
        for entry in profile.constraints:
            declared.update(self._match_entry(entry))
        if profile.constraints_text:
            declared.update(self._match_entry(profile.constraints_text))
        return declared

    def _evaluate(
        self,
        item: ScoredOption,
        declared: set[str],
        commitment: int,
        support: float,
    ) -> ScoredOption:
        cfg = self._config
        option = item.option
        penalty = 0.0
        notes: list[str] = []

        if option.required_level > commitment:
            penalty += cfg.preparation_penalty_per_level * (option.required_level - commitment)
            level_name = EDUCATION_LEVEL_NAMES.get(
                option.required_level, f"level {option.required_level} preparation"
            )
            notes.append(f"Requires {level_name} (higher than your stated preference)")

        if FAST_INCOME in declared and option.time_to_entry_years > cfg.entry_grace_years:
            penalty += cfg.entry_penalty_per_year * (
                option.time_to_entry_years - cfg.entry_grace_years
            )
            notes.append(
                f"Takes {option.time_to_entry_years:g} years to enter (you prefer quick income)"
            )

        if (
            PHYSICAL_LIMITATION in declared
            and option.physical_demand >= cfg.physical_demand_threshold
        ):
            penalty += cfg.physical_penalty
            notes.append("Involves significant physical demands")

        if support < cfg.support_threshold and option.cost_level > cfg.cost_threshold:
            penalty += cfg.cost_penalty
            notes.append("High education costs with limited support")

        return replace(
            item,
            adjusted_score=max(0.0, item.raw_score - penalty),
            penalty=penalty,
            feasibility_notes=[*item.feasibility_notes, *notes],
        )

    def _match_entry(self, text: str) -> Iterable[str]:
        normalized = _normalize(text)
        if not normalized:
            return []
        negations = _negations(normalized)
        matched: list[str] = []
        for tag, phrases in self._config.phrases.items():
            if normalized == tag:
                matched.append(tag)
                continue
            for phrase in phrases:
                phrase_normalized = _normalize(phrase)
                # A negated sentence never matches its affirmative phrase.
                if _negations(phrase_normalized) != negations:
                    continue
                if normalized == phrase_normalized or (
                    fuzz.token_sort_ratio(phrase_normalized, normalized)
                    >= self._config.min_similarity
                ):
                    matched.append(tag)
                    break
        return matched


def _normalize(text: str) -> str:
    return " ".join(_WORD.findall(text.lower().replace("\u2019", "'")))


def _negations(normalized: str) -> frozenset[str]:
    return frozenset(
        word for word in normalized.split() if word in NEGATION_WORDS or word.endswith("n't")
    )

"""Student profile schema and the scalar encodings of its enumerated answers."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

EducationCommitment = Literal[
    "high_school",
    "certificate",
    "associate",
    "bachelor",
    "advanced",
    "unsure",
]
Performance = Literal["excellent", "good", "average", "struggling", "not_taken"]
Importance = Literal["very", "somewhat", "not_very", "not_sure"]
RiskTolerance = Literal[
    "very_comfortable",
    "somewhat_comfortable",
    "prefer_stability",
    "not_sure",
]
SupportLevel = Literal["strong", "some", "limited", "not_sure"]
DecisionUrgency = Literal[
    "exploring",
    "narrow_this_year",
    "plan_soon",
    "ready_to_confirm",
]
ConfidenceLevel = Literal[
    "very_confident",
    "somewhat_confident",
    "unsure",
    "very_unsure",
]

# Ordinal preparation level the student is willing to commit to.
EDUCATION_LEVELS: dict[str, int] = {
    "high_school": 0,
    "certificate": 1,
    "associate": 2,
    "bachelor": 3,
    "advanced": 4,
    "unsure": 2,
}

EDUCATION_LEVEL_NAMES: dict[int, str] = {
    0: "High school diploma",
    1: "Certificate or apprenticeship",
    2: "Associate degree (2-4 years)",
    3: "Bachelor's degree",
    4: "Graduate or professional degree",
}

PERFORMANCE_SCALE: dict[str, float] = {
    "excellent": 1.0,
    "good": 0.67,
    "average": 0.33,
    "struggling": 0.0,
    "not_taken": 0.33,
}

IMPORTANCE_SCALE: dict[str, float] = {
    "very": 1.0,
    "somewhat": 0.67,
    "not_very": 0.33,
    "not_sure": 0.5,
}

RISK_SCALE: dict[str, float] = {
    "very_comfortable": 1.0,
    "somewhat_comfortable": 0.67,
    "prefer_stability": 0.33,
    "not_sure": 0.5,
}

SUPPORT_SCALE: dict[str, float] = {
    "strong": 1.0,
    "some": 0.67,
    "limited": 0.33,
    "not_sure": 0.5,
}

URGENCY_SCALE: dict[str, float] = {
    "exploring": 0.0,
    "narrow_this_year": 0.33,
    "plan_soon": 0.67,
    "ready_to_confirm": 1.0,
}

CONFIDENCE_SCALE: dict[str, float] = {
    "very_confident": 1.0,
    "somewhat_confident": 0.67,
    "unsure": 0.33,
    "very_unsure": 0.0,
}

NEUTRAL_SCALAR = 0.5


class Profile(BaseModel):
    """One student's self-reported answers for a single matching request."""

    profile_id: str | None = None
    grade: int = Field(ge=1, le=12)
    education_commitment: EducationCommitment

    work_environment: list[str] = Field(default_factory=list)
    work_style: list[str] = Field(default_factory=list)
    thinking_style: list[str] = Field(default_factory=list)
    academic_interests: list[str] = Field(default_factory=list)
    academic_performance: dict[str, Performance] = Field(default_factory=dict)
    traits: list[str] = Field(default_factory=list)

    income_importance: Importance | None = None
    stability_importance: Importance | None = None
    helping_importance: Importance | None = None
    risk_tolerance: RiskTolerance | None = None
    support_level: SupportLevel | None = None
    decision_urgency: DecisionUrgency | None = None
    confidence_level: ConfidenceLevel | None = None

    experience: str | None = None
    constraints: list[str] = Field(default_factory=list)
    constraints_text: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator(
        "work_environment",
        "work_style",
        "thinking_style",
        "academic_interests",
        "traits",
        "constraints",
    )
    @classmethod
    def _dedupe_in_order(cls, values: list[str]) -> list[str]:
        seen: set[str] = set()
        ordered: list[str] = []
        for value in values:
            cleaned = value.strip()
            if not cleaned or cleaned in seen:
                continue
            seen.add(cleaned)
            ordered.append(cleaned)
        return ordered

    @property
    def commitment_level(self) -> int:
        return EDUCATION_LEVELS[self.education_commitment]

    def value_preferences(self) -> dict[str, float | None]:
        """Scalar encoding of the four value dimensions; ``None`` when unanswered."""
        return {
            "income": _encode(IMPORTANCE_SCALE, self.income_importance),
            "stability": _encode(IMPORTANCE_SCALE, self.stability_importance),
            "helping": _encode(IMPORTANCE_SCALE, self.helping_importance),
            "risk": _encode(RISK_SCALE, self.risk_tolerance),
        }

    def support_scalar(self) -> float:
        return _encode(SUPPORT_SCALE, self.support_level, default=NEUTRAL_SCALAR)

    def readiness_scalar(self) -> float:
        confidence = _encode(CONFIDENCE_SCALE, self.confidence_level, default=NEUTRAL_SCALAR)
        urgency = _encode(URGENCY_SCALE, self.decision_urgency, default=NEUTRAL_SCALAR)
        return (confidence + urgency) / 2


def _encode(
    scale: dict[str, float],
    value: str | None,
    *,
    default: float | None = None,
) -> float | None:
    if value is None:
        return default
    return scale.get(value, default)

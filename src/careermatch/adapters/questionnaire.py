"""Adapter for raw questionnaire answers expressed as display labels."""

from __future__ import annotations

import json
from typing import Any

from ..schemas import Profile

WORK_ENVIRONMENT_LABELS: dict[str, str] = {
    "Outdoors (construction sites, farms, parks)": "outdoors",
    "Indoors (offices, hospitals, schools)": "indoors",
    "A mix of indoor and outdoor work": "indoor_outdoor_mix",
    "From home / remote": "remote",
    "Traveling to different locations": "traveling",
}

WORK_STYLE_LABELS: dict[str, str] = {
    "Building, fixing, or working with tools": "hands_on_tools",
    "Helping people directly": "helping_people",
    "Working with computers or technology": "technology",
    "Working with numbers, data, or analysis": "data_analysis",
    "Creating designs, art, music, or media": "creative_media",
}

THINKING_STYLE_LABELS: dict[str, str] = {
    "Troubleshooting and fixing things": "troubleshooting",
    "Helping people overcome challenges": "helping_overcome_challenges",
    "Understanding how systems or machines work": "understanding_systems",
    "Inventing or designing new solutions": "inventing_solutions",
    "Planning, organizing, or managing projects": "planning_projects",
}

SUBJECT_LABELS: dict[str, str] = {
    "Math": "math",
    "Science (Biology, Chemistry, Physics)": "science",
    "English / Language Arts": "english",
    "Social Studies / History": "social_studies",
    "Art / Creative Subjects": "art",
    "Physical Education / Health": "physical_education",
    "Technology / Computer Science": "technology",
    "Foreign Languages": "foreign_languages",
    "Business / Economics": "business",
    # short keys used by the v3 subject-strength matrix
    "history": "social_studies",
    "physical_ed": "physical_education",
}

TRAIT_LABELS: dict[str, str] = {
    "Creative and artistic": "creative",
    "Analytical and logical": "analytical",
    "Compassionate and caring": "compassionate",
    "Leadership-oriented": "leadership",
    "Detail-oriented and organized": "detail_oriented",
    "Adventurous and willing to take risks": "adventurous",
    "Patient and persistent": "patient",
    "Outgoing and social": "outgoing",
    "Independent and self-reliant": "independent",
    "Collaborative and team-focused": "collaborative",
    "Curious and inquisitive": "curious",
    "Practical and hands-on": "hands_on",
}

PERFORMANCE_LABELS: dict[str, str] = {
    "Excellent": "excellent",
    "Good": "good",
    "Average": "average",
    "Needs Improvement": "struggling",
    "Struggling": "struggling",
    "Haven't taken yet": "not_taken",
    "Not taken": "not_taken",
}

EDUCATION_LABELS: dict[str, str] = {
    "Start working right after high school": "high_school",
    "A few months to 2 years (certifications or training)": "certificate",
    "2–4 years (college or technical school)": "associate",
    "2-4 years (college or technical school)": "associate",
    "4+ years (college and possibly graduate school)": "bachelor",
    "Graduate or professional school": "advanced",
    "I'm not sure yet": "unsure",
}

IMPORTANCE_LABELS: dict[str, str] = {
    "Very important": "very",
    "Very": "very",
    "Somewhat important": "somewhat",
    "Somewhat": "somewhat",
    "Not very important": "not_very",
    "Not very": "not_very",
    "Not sure": "not_sure",
}

RISK_LABELS: dict[str, str] = {
    "Very comfortable with risk": "very_comfortable",
    "Somewhat comfortable": "somewhat_comfortable",
    "Prefer stability": "prefer_stability",
    "Not sure": "not_sure",
}

SUPPORT_LABELS: dict[str, str] = {
    "Strong family/financial support": "strong",
    "Some support available": "some",
    "Limited support": "limited",
    "Not sure about support": "not_sure",
}

URGENCY_LABELS: dict[str, str] = {
    "Just exploring options": "exploring",
    "Want to narrow this year": "narrow_this_year",
    "Need a plan soon": "plan_soon",
    "Ready to confirm path": "ready_to_confirm",
}

CONFIDENCE_LABELS: dict[str, str] = {
    "Very confident": "very_confident",
    "Somewhat confident": "somewhat_confident",
    "Unsure": "unsure",
    "Very unsure": "very_unsure",
}

CONSTRAINT_LABELS: dict[str, str] = {
    "Start earning money as soon as possible": "fast_income",
    "Physical work may be difficult for me": "physical_limitation",
}


class QuestionnaireAdapter:
    """Convert questionnaire payloads (display labels) into Profile dicts."""

    source = "questionnaire"

    def can_handle(self, payload: Any) -> bool:
        try:
            data = self._load(payload)
        except ValueError:
            return False
        return any(key in data for key in ("workEnvironment", "educationWillingness", "subject_strengths"))

    def parse_profile(self, payload: Any) -> dict[str, Any]:
        data = self._load(payload)

        grade = data.get("grade") or (data.get("basic_info") or {}).get("grade")
        if grade is None:
            raise ValueError("questionnaire payload is missing grade")
        education = data.get("education_commitment") or data.get("educationWillingness")
        if education is None:
            raise ValueError("questionnaire payload is missing education commitment")
        performance = data.get("academicPerformance") or data.get("subject_strengths") or {}

        constraints = [
            _map_label(CONSTRAINT_LABELS, entry)
            for entry in _as_list(data.get("constraints"))
        ]

        profile = Profile(
            profile_id=_optional_str(data.get("profile_id") or data.get("studentId")),
            grade=int(grade),
            education_commitment=_map_choice(EDUCATION_LABELS, education) or "unsure",
            work_environment=_map_many(WORK_ENVIRONMENT_LABELS, data.get("workEnvironment")),
            work_style=_map_many(WORK_STYLE_LABELS, data.get("workStyle")),
            thinking_style=_map_many(THINKING_STYLE_LABELS, data.get("thinkingStyle")),
            academic_interests=_map_many(SUBJECT_LABELS, data.get("academicInterests")),
            academic_performance=self._performance(performance),
            traits=_map_many(TRAIT_LABELS, data.get("traits")),
            income_importance=_map_choice(IMPORTANCE_LABELS, data.get("incomeImportance")),
            stability_importance=_map_choice(IMPORTANCE_LABELS, data.get("stabilityImportance")),
            helping_importance=_map_choice(IMPORTANCE_LABELS, data.get("helpingImportance")),
            risk_tolerance=_map_choice(RISK_LABELS, data.get("riskTolerance")),
            support_level=_map_choice(SUPPORT_LABELS, data.get("supportLevel")),
            decision_urgency=_map_choice(URGENCY_LABELS, data.get("decisionPressure")),
            confidence_level=_map_choice(CONFIDENCE_LABELS, data.get("careerConfidence")),
            experience=_optional_str(data.get("experience") or data.get("work_experience")),
            constraints=[entry for entry in constraints if entry],
            constraints_text=_optional_str(
                data.get("career_constraints") or data.get("constraints_considerations")
            ),
        )
        return profile.model_dump(mode="python")

    @staticmethod
    def _performance(raw: Any) -> dict[str, str]:
        if not isinstance(raw, dict):
            return {}
        ratings: dict[str, str] = {}
        for subject, rating in raw.items():
            mapped = _map_choice(PERFORMANCE_LABELS, rating)
            if mapped is None:
                continue
            ratings[_map_label(SUBJECT_LABELS, subject)] = mapped
        return ratings

    @staticmethod
    def _load(payload: Any) -> dict[str, Any]:
        if isinstance(payload, dict):
            return payload
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        try:
            data = json.loads(payload)
        except (TypeError, json.JSONDecodeError) as exc:
            raise ValueError("Invalid questionnaire payload") from exc
        if not isinstance(data, dict):
            raise ValueError("Questionnaire payload must be a JSON object")
        return data


def _map_label(table: dict[str, str], label: Any) -> str:
    """Map a display label to its value id; unknown labels pass through."""
    if label is None:
        return ""
    text = str(label).strip()
    if text in table:
        return table[text]
    lowered = text.lower()
    for key, value in table.items():
        if key.lower() == lowered:
            return value
    return text


def _map_choice(table: dict[str, str], label: Any) -> str | None:
    """Map a single-choice label; unknown labels become unanswered."""
    mapped = _map_label(table, label)
    if mapped in table.values():
        return mapped
    return None


def _map_many(table: dict[str, str], labels: Any) -> list[str]:
    return [mapped for mapped in (_map_label(table, label) for label in _as_list(labels)) if mapped]


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None

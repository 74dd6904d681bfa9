"""Dependency injection container for the matching engine."""

from __future__ import annotations

from dependency_injector import containers, providers

from .adapters import NativeProfileAdapter, QuestionnaireAdapter
from .config import load_default_catalog
from .core import (
    CategoryScorer,
    Classifier,
    ConstraintEvaluator,
    MatchingCore,
    OptionScorer,
)
from .core.evaluators.category import CategoryScorerConfig
from .core.evaluators.classifier import ClassifierConfig
from .core.evaluators.constraints import ConstraintConfig
from .core.evaluators.option import OptionScorerConfig
from .pipeline import AdapterRegistry, MatchingPipeline


class MatchingContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    questionnaire_adapter = providers.Singleton(QuestionnaireAdapter)
    native_adapter = providers.Singleton(NativeProfileAdapter)

    adapter_registry = providers.Singleton(
        AdapterRegistry,
        adapters=providers.List(questionnaire_adapter, native_adapter),
    )

    catalog = providers.Singleton(load_default_catalog, config.catalog_dir)

    category_scorer = providers.Singleton(CategoryScorer)
    option_scorer = providers.Singleton(OptionScorer)
    constraint_evaluator = providers.Singleton(ConstraintEvaluator)
    classifier = providers.Singleton(Classifier)

    matching_core = providers.Singleton(
        MatchingCore,
        catalog=catalog,
        category_scorer=category_scorer,
        option_scorer=option_scorer,
        constraint_evaluator=constraint_evaluator,
        classifier=classifier,
        top_categories=config.top_categories,
        disclaimer=config.disclaimer,
    )

    pipeline = providers.Factory(
        MatchingPipeline,
        core=matching_core,
        registry=adapter_registry,
    )


def create_container(*, settings: dict | None = None) -> MatchingContainer:
    """Instantiate container with optional overrides."""

    container = MatchingContainer()

    if not settings:
        return container

    core_settings = settings.get("core", {}) if isinstance(settings, dict) else {}
    if core_settings:
        container.config.override(core_settings)

    scorer_settings = settings.get("scorers", {}) if isinstance(settings, dict) else {}

    if "category" in scorer_settings:
        category_config = CategoryScorerConfig(**scorer_settings["category"])
        container.category_scorer.override(
            providers.Singleton(CategoryScorer, config=category_config)
        )

    if "option" in scorer_settings:
        option_config = OptionScorerConfig(**scorer_settings["option"])
        container.option_scorer.override(
            providers.Singleton(OptionScorer, config=option_config)
        )

    if "constraints" in scorer_settings:
        constraint_config = ConstraintConfig(**scorer_settings["constraints"])
        container.constraint_evaluator.override(
            providers.Singleton(ConstraintEvaluator, config=constraint_config)
        )

    if "classifier" in scorer_settings:
        classifier_config = ClassifierConfig(**scorer_settings["classifier"])
        container.classifier.override(
            providers.Singleton(Classifier, config=classifier_config)
        )

    return container

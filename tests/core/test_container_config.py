from __future__ import annotations

import pytest

from careermatch.container import create_container
from careermatch.schemas.config import AppConfig, load_config


def test_create_container_with_overrides():
    container = create_container(
        settings={
            "core": {"top_categories": 5, "disclaimer": "Just a starting point."},
            "scorers": {
                "category": {"interest_cap": 30.0},
                "option": {"primary_weight": 0.6, "secondary_weight": 0.4},
                "constraints": {"physical_penalty": 25.0},
                "classifier": {"top_limit": 5},
            },
        }
    )

    category = container.category_scorer()
    option = container.option_scorer()
    constraints = container.constraint_evaluator()
    classifier = container.classifier()
    core = container.matching_core()

    assert category._config.interest_cap == 30.0
    assert option._config.primary_weight == pytest.approx(0.6)
    assert constraints._config.physical_penalty == 25.0
    assert classifier._config.top_limit == 5
    assert core._top_categories == 5
    assert core._disclaimer == "Just a starting point."
    assert core._category_scorer is category


def test_default_container_uses_packaged_catalog():
    container = create_container()

    core = container.matching_core()

    assert len(core.catalog.categories) == 10
    assert core._top_categories == 3
    assert container.adapter_registry().sources() == ["questionnaire", "native"]


def test_load_config_validation():
    data = {
        "core": {"top_categories": 2},
        "scorers": {"classifier": {"mid_limit": 4}},
    }
    app_config = load_config(data)
    assert isinstance(app_config, AppConfig)
    settings = app_config.to_settings()
    assert settings["core"] == {"top_categories": 2}
    assert settings["scorers"] == {"classifier": {"mid_limit": 4}}


def test_load_config_rejects_bad_values():
    with pytest.raises(ValueError):
        load_config({"core": {"top_categories": 0}})
    with pytest.raises(ValueError):
        load_config(["not", "a", "mapping"])

from __future__ import annotations

from careermatch.core.evaluators.classifier import Classifier, ClassifierConfig
from careermatch.core.records import ScoredOption
from careermatch.schemas import Option


def _scored(option_id: str, score: float, *, notes=None, challenge: int = 0) -> ScoredOption:
    option = Option(
        id=option_id,
        title=option_id.title(),
        primary_category="A",
        required_level=0,
        time_to_entry_years=0,
        physical_demand=0,
        cost_level=0.0,
        challenge_level=challenge,
    )
    return ScoredOption(
        option=option,
        raw_score=score,
        adjusted_score=score,
        feasibility_notes=list(notes or []),
    )


def _ids(items):
    return [item.option.id for item in items]


def test_absolute_thresholds_assign_tiers():
    result = Classifier().classify(
        [_scored("low", 10.0), _scored("top", 60.0), _scored("mid", 40.0), _scored("stretch", 30.0)]
    )

    assert _ids(result.top) == ["top"]
    assert _ids(result.mid) == ["mid"]
    assert _ids(result.stretch) == ["stretch"]
    assert all(item.tier == "top" for item in result.top)


def test_relative_threshold_keeps_weak_field_usable():
    result = Classifier().classify([_scored("a", 20.0), _scored("b", 18.0), _scored("c", 15.0)])

    assert _ids(result.top) == ["a", "b"]
    assert _ids(result.mid) == ["c"]


def test_feasibility_notes_block_top_tier():
    result = Classifier().classify([_scored("noted", 90.0, notes=["Involves significant physical demands"])])

    assert result.top == []
    assert _ids(result.mid) == ["noted"]


def test_challenge_level_admits_low_scores_to_stretch():
    result = Classifier().classify(
        [_scored("lead", 50.0), _scored("hard", 5.0, challenge=2), _scored("easy", 5.0)]
    )

    assert _ids(result.stretch) == ["hard"]
    assert "easy" not in _ids(result.tiered())


def test_tier_caps_truncate_in_score_order():
    options = [_scored(f"o{idx}", 90.0 - idx) for idx in range(6)]

    result = Classifier().classify(options)

    assert _ids(result.top) == ["o0", "o1", "o2"]
    assert result.mid == [] and result.stretch == []


def test_ties_keep_input_order():
    result = Classifier().classify([_scored("first", 50.0), _scored("second", 50.0)])

    assert _ids(result.top) == ["first", "second"]


def test_limits_argument_overrides_config():
    options = [_scored(f"o{idx}", 90.0 - idx) for idx in range(4)]

    result = Classifier(config=ClassifierConfig(top_limit=1)).classify(options, limits=(2, 0, 0))

    assert _ids(result.top) == ["o0", "o1"]


def test_empty_input_and_zero_scores():
    classifier = Classifier()

    assert classifier.classify([]).tiered() == []
    assert classifier.classify([_scored("zero", 0.0)]).tiered() == []

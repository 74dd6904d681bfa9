"""Scoring stages for the matching core."""

from .category import CategoryScorer
from .option import OptionScorer
from .constraints import ConstraintEvaluator
from .classifier import Classifier

__all__ = [
    "CategoryScorer",
    "OptionScorer",
    "ConstraintEvaluator",
    "Classifier",
]

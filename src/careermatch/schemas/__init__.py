"""Pydantic schema definitions for profiles and the static catalog."""

from __future__ import annotations

from .catalog import (
    Catalog,
    CatalogValidationError,
    Category,
    CriterionEntry,
    Option,
    ValueProfile,
)
from .profile import Profile

__all__ = [
    "Catalog",
    "CatalogValidationError",
    "Category",
    "CriterionEntry",
    "Option",
    "Profile",
    "ValueProfile",
]

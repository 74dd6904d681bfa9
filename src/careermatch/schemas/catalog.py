"""Static category/option catalog and the criteria mapping table."""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    model_validator,
)

VALUE_DIMENSIONS: tuple[str, ...] = ("income", "stability", "helping", "risk")


class CatalogValidationError(ValueError):
    """Raised when a catalog fails startup validation."""

    def __init__(self, errors: list[str]):
        super().__init__("Catalog validation failed")
        self.errors = errors

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Catalog validation failed: {self.errors}"


class ValueProfile(BaseModel):
    """Normalized value affinities of a category."""

    income: float = Field(ge=0.0, le=1.0)
    stability: float = Field(ge=0.0, le=1.0)
    helping: float = Field(ge=0.0, le=1.0)
    risk: float = Field(ge=0.0, le=1.0)

    model_config = ConfigDict(extra="forbid", frozen=True)


class Category(BaseModel):
    """Coarse grouping of options (a career cluster)."""

    id: str
    name: str
    description: str = ""
    value_profile: ValueProfile

    model_config = ConfigDict(extra="forbid", frozen=True)


class Option(BaseModel):
    """A recommendable career."""

    id: str
    title: str
    primary_category: str
    secondary_category: str | None = None
    required_level: int = Field(ge=0)
    time_to_entry_years: float = Field(ge=0.0)
    physical_demand: int = Field(ge=0)
    cost_level: float = Field(ge=0.0, le=1.0)
    challenge_level: int = Field(default=0, ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True)


class CriterionEntry(BaseModel):
    """One (criterion, value, category, weight) row of the mapping table."""

    criterion: str
    value: str
    category: str
    weight: float = Field(ge=0.0)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _accept_rows(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 4:
                raise ValueError(
                    "criterion row must have 4 fields: criterion, value, category, weight"
                )
            criterion, value, category, weight = data
            return {
                "criterion": criterion,
                "value": value,
                "category": category,
                "weight": weight,
            }
        return data


class Catalog(BaseModel):
    """Immutable catalog shared by every matching request."""

    version: str = "1"
    categories: list[Category] = Field(default_factory=list)
    options: list[Option] = Field(default_factory=list)
    criteria: list[CriterionEntry] = Field(default_factory=list)
    labels: dict[str, dict[str, str]] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid", frozen=True)

    _categories_by_id: dict[str, Category] = PrivateAttr(default_factory=dict)
    _index: dict[str, dict[str, list[tuple[str, float]]]] = PrivateAttr(
        default_factory=dict
    )

    @model_validator(mode="after")
    def _check_references(self) -> "Catalog":
        errors: list[str] = []
        category_ids: set[str] = set()
        for category in self.categories:
            if category.id in category_ids:
                errors.append(f"duplicate category id '{category.id}'")
            category_ids.add(category.id)

        option_ids: set[str] = set()
        for option in self.options:
            if option.id in option_ids:
                errors.append(f"duplicate option id '{option.id}'")
            option_ids.add(option.id)
            if option.primary_category not in category_ids:
                errors.append(
                    f"option '{option.id}' references unknown primary category "
                    f"'{option.primary_category}'"
                )
            if (
                option.secondary_category is not None
                and option.secondary_category not in category_ids
            ):
                errors.append(
                    f"option '{option.id}' references unknown secondary category "
                    f"'{option.secondary_category}'"
                )

        for row in self.criteria:
            if row.category not in category_ids:
                errors.append(
                    f"criterion {row.criterion}/{row.value} references unknown "
                    f"category '{row.category}'"
                )

        if errors:
            raise ValueError("; ".join(errors))
        return self

    def model_post_init(self, __context: Any) -> None:
        self._categories_by_id = {category.id: category for category in self.categories}
        index: dict[str, dict[str, list[tuple[str, float]]]] = {}
        for row in self.criteria:
            index.setdefault(row.criterion, {}).setdefault(row.value, []).append(
                (row.category, row.weight)
            )
        self._index = index

    @classmethod
    def from_mapping(cls, raw: Any) -> "Catalog":
        """Validate a raw mapping, reporting every problem as a list."""
        if not isinstance(raw, dict):
            raise CatalogValidationError(["catalog must be a mapping"])
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise CatalogValidationError(
                [_format_error(error) for error in exc.errors()]
            ) from exc

    def category(self, category_id: str) -> Category | None:
        return self._categories_by_id.get(category_id)

    def category_ids(self) -> list[str]:
        return [category.id for category in self.categories]

    def lookup(self, criterion: str, value: str) -> list[tuple[str, float]]:
        """Per-category partial weights for one attribute value, in table order."""
        return list(self._index.get(criterion, {}).get(value, ()))

    def label(self, criterion: str, value: str) -> str:
        label = self.labels.get(criterion, {}).get(value)
        if label:
            return label
        return value.replace("_", " ")


def _format_error(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = str(error.get("msg", "invalid value"))
    return f"{location}: {message}" if location else message

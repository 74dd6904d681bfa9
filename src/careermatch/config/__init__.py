"""Configuration and catalog file loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..schemas import Catalog, CatalogValidationError

DEFAULT_CATALOG_DIR = Path(__file__).resolve().parent.parent / "data"
CATALOG_FILES: tuple[str, ...] = ("categories", "options", "criteria")


class ConfigManager:
    """Simple YAML-backed configuration loader."""

    def __init__(self, base_path: str | Path):
        self._base_path = Path(base_path)

    @property
    def base_path(self) -> Path:
        return self._base_path

    def load(self, name: str) -> dict[str, Any]:
        """Load a YAML configuration by name without file extension."""
        path = self._base_path / f"{name}.yaml"
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a mapping at the top level")
        return data

    def load_catalog(self) -> dict[str, Any]:
        """Merge the catalog files under the base path into one raw mapping."""
        merged: dict[str, Any] = {}
        for name in CATALOG_FILES:
            merged.update(self.load(name))
        return merged


def load_default_catalog(directory: str | Path | None = None) -> Catalog:
    """Load and validate the catalog shipped with the package (or ``directory``)."""
    manager = ConfigManager(directory or DEFAULT_CATALOG_DIR)
    try:
        raw = manager.load_catalog()
    except (ValueError, yaml.YAMLError) as exc:
        raise CatalogValidationError([str(exc)]) from exc
    return Catalog.from_mapping(raw)


__all__ = ["CATALOG_FILES", "ConfigManager", "DEFAULT_CATALOG_DIR", "load_default_catalog"]

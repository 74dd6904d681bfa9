"""Matching pipeline assembly and execution."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List

import pendulum
import structlog

from .adapters import NativeProfileAdapter, ProfileAdapter, QuestionnaireAdapter
from .config import load_default_catalog
from .core import MatchingCore, RankedResult
from .schemas import Catalog, Profile
from . import __version__


class AdapterRegistry:
    """Registry mapping questionnaire sources to profile adapters."""

    def __init__(self, adapters: Iterable[ProfileAdapter]):
        self._adapters = {adapter.source: adapter for adapter in adapters}

    def get(self, source: str) -> ProfileAdapter:
        try:
            return self._adapters[source]
        except KeyError as exc:
            raise KeyError(f"Unsupported source: {source!r}") from exc

    def sources(self) -> List[str]:
        return list(self._adapters.keys())


class ProfileLoadError(ValueError):
    """Raised when profile loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: list[Profile]):
        super().__init__("Profile loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Profile loading failed: {self.errors}"


class ProfileLoader:
    """Load profiles from JSONL records through adapters."""

    def __init__(self, registry: AdapterRegistry):
        self._registry = registry

    def load(self, path: Path) -> list[Profile]:
        profiles: list[Profile] = []
        errors: list[str] = []
        with path.open("r", encoding="utf-8") as handle:
            for idx, line in enumerate(handle, start=1):
                raw = line.strip()
                if not raw:
                    continue
                try:
                    record = json.loads(raw)
                except json.JSONDecodeError as exc:
                    errors.append(f"line {idx}: invalid JSON ({exc})")
                    continue
                if not isinstance(record, dict):
                    errors.append(f"line {idx}: record must be a JSON object")
                    continue
                source = record.get("source")
                if not source:
                    errors.append(f"line {idx}: missing source field")
                    continue
                try:
                    adapter = self._registry.get(source)
                except KeyError:
                    errors.append(f"line {idx}: unsupported source '{source}'")
                    continue
                payload = record.get("payload", record)
                try:
                    profile_dict = adapter.parse_profile(
                        json.dumps(payload, ensure_ascii=False)
                    )
                    if record.get("profile_id") is not None:
                        profile_dict["profile_id"] = str(record["profile_id"])
                    profile = Profile.model_validate(profile_dict)
                except Exception as exc:  # noqa: BLE001
                    errors.append(f"line {idx}: {exc}")
                    continue
                profiles.append(profile)
        if errors:
            raise ProfileLoadError(errors, profiles)
        return profiles


class CatalogLoader:
    """Load and validate a catalog directory of YAML files."""

    def load(self, directory: str | Path | None = None) -> Catalog:
        return load_default_catalog(directory)


class OutputWriter:
    """Persist matching outcomes."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class MatchingPipeline:
    """End-to-end matching orchestrator."""

    def __init__(
        self,
        *,
        core: MatchingCore,
        registry: AdapterRegistry,
        profile_loader: ProfileLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._core = core
        self._registry = registry
        self._profiles = profile_loader or ProfileLoader(registry)
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        *,
        profiles_path: Path,
        output_path: Path,
        audit_logger: "AuditLogger | None" = None,
    ) -> list[dict]:
        load_errors: list[str] = []
        try:
            profiles = self._profiles.load(profiles_path)
        except ProfileLoadError as exc:
            profiles = exc.partial
            load_errors.extend(exc.errors)
            self._logger.warning("profiles.partial_load", errors=exc.errors)

        serialized_results: list[dict] = []

        for profile in profiles:
            with structlog.contextvars.bound_contextvars(profile_id=profile.profile_id):
                result = self._core.match(profile)
                serialized_results.append(result.to_dict())

                if audit_logger:
                    audit_logger.append(_audit_record(result))

                self._logger.info(
                    "matching.result",
                    top_tier=len(result.top_tier),
                    mid_tier=len(result.mid_tier),
                    stretch_tier=len(result.stretch_tier),
                    top_category=(
                        result.top_categories[0].category_id if result.top_categories else None
                    ),
                )

        metadata = {
            "catalog_version": self._core.catalog.version,
            "profile_count": len(profiles),
            "errors": load_errors,
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        }
        payload_with_meta = {
            "metadata": metadata,
            "results": serialized_results,
        }

        self._writer.write(output_path, payload_with_meta)
        return serialized_results


def default_registry() -> AdapterRegistry:
    """Return the default adapter registry."""
    return AdapterRegistry(adapters=[QuestionnaireAdapter(), NativeProfileAdapter()])


def _audit_record(result: RankedResult) -> dict:
    tiers = {
        "top": result.top_tier,
        "mid": result.mid_tier,
        "stretch": result.stretch_tier,
    }
    return {
        "profile_id": result.profile_id,
        "catalog_version": result.catalog_version,
        "tiers": {name: [item.option_id for item in items] for name, items in tiers.items()},
        "scores": {
            item.option_id: item.score for items in tiers.values() for item in items
        },
        "feasibility_notes": {
            item.option_id: item.feasibility_notes
            for items in tiers.values()
            for item in items
            if item.feasibility_notes
        },
        "total_retained": result.total_retained,
    }


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False))
            handle.write("\n")

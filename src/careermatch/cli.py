"""Typer CLI entrypoint for the matching pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from .container import create_container
from .logging import configure_logging
from .pipeline import AuditLogger, CatalogLoader
from .schemas import CatalogValidationError
from .schemas.config import load_config

app = typer.Typer(help="Career category and option matching CLI.")


def _load_settings(config: Optional[Path]) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise typer.BadParameter("Config file must be a YAML object", param_name="config")
    try:
        return load_config(loaded).to_settings()
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid config: {exc}", param_name="config") from exc


@app.command()
def run(
    profiles: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Profiles JSONL path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    catalog: Optional[Path] = typer.Option(
        None, exists=True, file_okay=False, dir_okay=True, help="Catalog directory (YAML files)."
    ),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Run the matching pipeline."""
    settings = _load_settings(config)
    if catalog:
        settings.setdefault("core", {})["catalog_dir"] = str(catalog)

    configure_logging(log_level)

    container = create_container(settings=settings)
    try:
        pipeline = container.pipeline()
    except CatalogValidationError as exc:
        typer.echo(f"Catalog is invalid: {'; '.join(exc.errors)}", err=True)
        raise typer.Exit(code=1) from exc
    except OSError as exc:
        typer.echo(f"Cannot read catalog: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    audit_logger = AuditLogger(audit_log) if audit_log else None

    results = pipeline.run(
        profiles_path=profiles,
        output_path=output,
        audit_logger=audit_logger,
    )
    typer.echo(f"Processed {len(results)} profiles. Results saved to {output}.")


@app.command("check-catalog")
def check_catalog(
    catalog: Optional[Path] = typer.Option(
        None, exists=True, file_okay=False, dir_okay=True, help="Catalog directory (YAML files)."
    ),
) -> None:
    """Validate a catalog directory and print its size."""
    try:
        loaded = CatalogLoader().load(catalog)
    except CatalogValidationError as exc:
        for error in exc.errors:
            typer.echo(error, err=True)
        raise typer.Exit(code=1) from exc
    except OSError as exc:
        typer.echo(f"Cannot read catalog: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(
        f"Catalog {loaded.version}: {len(loaded.categories)} categories, "
        f"{len(loaded.options)} options, {len(loaded.criteria)} criteria rows."
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from careermatch.cli import app
from careermatch.config import DEFAULT_CATALOG_DIR


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def write_jsonl(path: Path, records: list[object]) -> None:
    path.write_text(
        "\n".join(json.dumps(item, ensure_ascii=False) for item in records),
        encoding="utf-8",
    )


def questionnaire_record(profile_id: str) -> dict:
    return {
        "source": "questionnaire",
        "profile_id": profile_id,
        "payload": {
            "grade": 11,
            "workEnvironment": ["Indoors (offices, hospitals, schools)"],
            "workStyle": ["Helping people directly"],
            "thinkingStyle": ["Helping people overcome challenges"],
            "academicInterests": ["Science (Biology, Chemistry, Physics)"],
            "academicPerformance": {"Science (Biology, Chemistry, Physics)": "Excellent"},
            "traits": ["Compassionate and caring", "Patient and persistent"],
            "educationWillingness": "2–4 years (college or technical school)",
            "helpingImportance": "Very important",
            "stabilityImportance": "Very important",
            "experience": "Volunteer at a senior care center",
        },
    }


def test_cli_runs_pipeline_and_writes_output(tmp_path: Path, runner: CliRunner) -> None:
    profiles_path = tmp_path / "profiles.jsonl"
    output_path = tmp_path / "results.json"
    write_jsonl(profiles_path, [questionnaire_record("S-001")])

    result = runner.invoke(
        app,
        [
            "run",
            "--profiles",
            str(profiles_path),
            "--output",
            str(output_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert output_path.exists()

    rendered = json.loads(output_path.read_text(encoding="utf-8"))
    assert rendered["metadata"]["profile_count"] == 1
    assert rendered["metadata"]["errors"] == []
    assert rendered["metadata"]["catalog_version"] == "2024.1"
    assert rendered["metadata"]["timestamp"]

    match = rendered["results"][0]
    assert match["profile_id"] == "S-001"
    assert match["top_categories"][0]["category_id"] == "C2"
    assert match["top_tier"], "top tier should not be empty"
    assert all(item["feasibility_notes"] == [] for item in match["top_tier"])
    assert match["disclaimer"]


def test_cli_applies_yaml_config(tmp_path: Path, runner: CliRunner) -> None:
    profiles_path = tmp_path / "profiles.jsonl"
    output_path = tmp_path / "results.json"
    config_path = tmp_path / "config.yaml"
    write_jsonl(profiles_path, [questionnaire_record("S-002")])
    config_path.write_text(
        yaml.safe_dump(
            {
                "core": {"top_categories": 1, "disclaimer": "Talk to your counselor."},
                "scorers": {"classifier": {"top_limit": 1}},
            }
        ),
        encoding="utf-8",
    )

    result = runner.invoke(
        app,
        [
            "run",
            "--profiles",
            str(profiles_path),
            "--output",
            str(output_path),
            "--config",
            str(config_path),
        ],
    )

    assert result.exit_code == 0, result.output
    match = json.loads(output_path.read_text(encoding="utf-8"))["results"][0]
    assert len(match["top_categories"]) == 1
    assert len(match["top_tier"]) == 1
    assert match["disclaimer"] == "Talk to your counselor."


def test_cli_rejects_invalid_config(tmp_path: Path, runner: CliRunner) -> None:
    profiles_path = tmp_path / "profiles.jsonl"
    config_path = tmp_path / "config.yaml"
    write_jsonl(profiles_path, [questionnaire_record("S-003")])
    config_path.write_text("- not\n- a mapping\n", encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "run",
            "--profiles",
            str(profiles_path),
            "--output",
            str(tmp_path / "out.json"),
            "--config",
            str(config_path),
        ],
    )

    assert result.exit_code != 0
    assert not (tmp_path / "out.json").exists()


def test_check_catalog_reports_counts(runner: CliRunner) -> None:
    result = runner.invoke(app, ["check-catalog", "--catalog", str(DEFAULT_CATALOG_DIR)])

    assert result.exit_code == 0, result.output
    assert "10 categories" in result.output


def test_check_catalog_fails_on_bad_reference(tmp_path: Path, runner: CliRunner) -> None:
    for name in ("categories", "criteria"):
        (tmp_path / f"{name}.yaml").write_text(
            (DEFAULT_CATALOG_DIR / f"{name}.yaml").read_text(encoding="utf-8"),
            encoding="utf-8",
        )
    (tmp_path / "options.yaml").write_text(
        yaml.safe_dump(
            {
                "options": [
                    {
                        "id": "ghost",
                        "title": "Ghost",
                        "primary_category": "C99",
                        "required_level": 0,
                        "time_to_entry_years": 0,
                        "physical_demand": 0,
                        "cost_level": 0.0,
                    }
                ]
            }
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["check-catalog", "--catalog", str(tmp_path)])

    assert result.exit_code == 1


def test_cli_run_reports_incomplete_catalog_directory(tmp_path: Path, runner: CliRunner) -> None:
    catalog_dir = tmp_path / "catalog"
    catalog_dir.mkdir()
    (catalog_dir / "categories.yaml").write_text(
        (DEFAULT_CATALOG_DIR / "categories.yaml").read_text(encoding="utf-8"),
        encoding="utf-8",
    )
    profiles_path = tmp_path / "profiles.jsonl"
    output_path = tmp_path / "results.json"
    write_jsonl(profiles_path, [questionnaire_record("S-004")])

    result = runner.invoke(
        app,
        [
            "run",
            "--profiles",
            str(profiles_path),
            "--output",
            str(output_path),
            "--catalog",
            str(catalog_dir),
        ],
    )

    assert result.exit_code == 1
    assert "Cannot read catalog" in result.output
    assert not isinstance(result.exception, FileNotFoundError)
    assert not output_path.exists()

from __future__ import annotations

import json
from pathlib import Path

from careermatch.container import create_container
from careermatch.pipeline import AuditLogger


def test_pipeline_writes_audit_log_and_records_load_errors(tmp_path: Path) -> None:
    profiles_path = tmp_path / "profiles.jsonl"
    output_path = tmp_path / "out" / "results.json"
    audit_path = tmp_path / "audit" / "audit.jsonl"

    lines = [
        json.dumps(
            {
                "source": "native",
                "profile_id": "N-1",
                "payload": {
                    "grade": 10,
                    "education_commitment": "certificate",
                    "work_style": ["hands_on_tools"],
                    "work_environment": ["outdoors"],
                    "traits": ["hands_on"],
                    "constraints": ["physical_limitation"],
                },
            }
        ),
        "{broken",
        json.dumps({"source": "carrier-pigeon", "payload": {}}),
        json.dumps({"source": "native", "payload": {"grade": 10}}),
        "",
    ]
    profiles_path.write_text("\n".join(lines), encoding="utf-8")

    container = create_container()
    pipeline = container.pipeline()

    results = pipeline.run(
        profiles_path=profiles_path,
        output_path=output_path,
        audit_logger=AuditLogger(audit_path),
    )

    assert len(results) == 1
    assert results[0]["profile_id"] == "N-1"

    envelope = json.loads(output_path.read_text(encoding="utf-8"))
    errors = envelope["metadata"]["errors"]
    assert envelope["metadata"]["profile_count"] == 1
    assert len(errors) == 3
    assert errors[0].startswith("line 2: invalid JSON")
    assert "unsupported source 'carrier-pigeon'" in errors[1]
    assert errors[2].startswith("line 4:")

    audit_lines = audit_path.read_text(encoding="utf-8").strip().splitlines()
    assert len(audit_lines) == 1
    record = json.loads(audit_lines[0])
    assert record["profile_id"] == "N-1"
    assert set(record["tiers"]) == {"top", "mid", "stretch"}
    for option_id in record["tiers"]["top"]:
        assert option_id not in record["feasibility_notes"]
    assert all(
        "Involves significant physical demands" in notes
        for option_id, notes in record["feasibility_notes"].items()
        if option_id in {"welder", "carpenter", "electrician"}
    )


def test_pipeline_results_are_identical_across_runs(tmp_path: Path) -> None:
    profiles_path = tmp_path / "profiles.jsonl"
    profiles_path.write_text(
        json.dumps(
            {
                "source": "native",
                "profile_id": "N-2",
                "payload": {"grade": 9, "education_commitment": "bachelor", "traits": ["curious"]},
            }
        ),
        encoding="utf-8",
    )
    pipeline = create_container().pipeline()

    first = pipeline.run(profiles_path=profiles_path, output_path=tmp_path / "a.json")
    second = pipeline.run(profiles_path=profiles_path, output_path=tmp_path / "b.json")

    assert json.dumps(first) == json.dumps(second)

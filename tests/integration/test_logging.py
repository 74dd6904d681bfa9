from __future__ import annotations

import json
from pathlib import Path

import pytest
import structlog

from careermatch import __version__
from careermatch.container import create_container
from careermatch.logging import add_app_context, configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


def _events(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def test_add_app_context_keeps_existing_keys():
    event = add_app_context(None, "info", {"event": "x", "app": "other"})

    assert event == {"event": "x", "app": "other", "app_version": __version__}


def test_pipeline_events_carry_app_and_profile_context(tmp_path: Path, capsys) -> None:
    profiles_path = tmp_path / "profiles.jsonl"
    profiles_path.write_text(
        json.dumps(
            {
                "source": "native",
                "profile_id": "N-9",
                "payload": {"grade": 10, "education_commitment": "bachelor"},
            }
        ),
        encoding="utf-8",
    )
    configure_logging("INFO")

    create_container().pipeline().run(
        profiles_path=profiles_path,
        output_path=tmp_path / "results.json",
    )

    events = _events(capsys.readouterr().out)
    (result_event,) = [event for event in events if event["event"] == "matching.result"]
    assert result_event["profile_id"] == "N-9"
    assert result_event["app"] == "careermatch"
    assert result_event["level"] == "info"
    assert "timestamp" in result_event


def test_log_level_filters_info_events(tmp_path: Path, capsys) -> None:
    profiles_path = tmp_path / "profiles.jsonl"
    profiles_path.write_text("{broken\n", encoding="utf-8")
    configure_logging("WARNING")

    create_container().pipeline().run(
        profiles_path=profiles_path,
        output_path=tmp_path / "results.json",
    )

    events = _events(capsys.readouterr().out)
    assert [event["event"] for event in events] == ["profiles.partial_load"]
    assert events[0]["level"] == "warning"

"""Tests for CLI commands: help, review, skip, show, due, upcoming, stats, config, serve."""

import json
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from woerter.infrastructure.adapters.review_state.json_store import JsonFileReviewStateStore
from woerter.interface.cli import app

runner = CliRunner()

AT = "2024-03-01T09:00:00"
T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def state_file(mock_home, tmp_path):
    return tmp_path / "state.json"


def invoke(state_file, *args, at=AT):
    base = ["--state-file", str(state_file)]
    if at:
        base += ["--at", at]
    return runner.invoke(app, [*base, *args])


# --- Help ---


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "spaced-repetition" in result.stdout
    assert "review" in result.stdout
    assert "migrate" in result.stdout


# --- Review ---


def test_review_new_item(state_file):
    result = invoke(state_file, "review", "Haus", "4")

    assert result.exit_code == 0
    assert "Haus: next review tomorrow" in result.stdout
    assert "interval 1d" in result.stdout

    state = JsonFileReviewStateStore(state_file).get("Haus")
    assert state.repetitions == 1
    assert state.next_review_at == T0 + timedelta(days=1)


def test_review_sequence_grows_interval(state_file):
    invoke(state_file, "review", "Haus", "5")
    invoke(state_file, "review", "Haus", "5", at="2024-03-02T09:00:00")
    result = invoke(state_file, "review", "Haus", "5", at="2024-03-08T09:00:00")

    assert result.exit_code == 0
    assert "interval 17d" in result.stdout
    assert "in 2 weeks" in result.stdout


def test_review_incorrect_caps_quality(state_file):
    result = invoke(state_file, "review", "Haus", "5", "--incorrect")

    assert result.exit_code == 0
    state = JsonFileReviewStateStore(state_file).get("Haus")
    assert state.last_quality == 2
    assert state.repetitions == 0


def test_review_out_of_range_quality_is_clamped(state_file):
    result = invoke(state_file, "review", "Haus", "9")

    assert result.exit_code == 0
    assert JsonFileReviewStateStore(state_file).get("Haus").last_quality == 5


def test_review_corrupt_state_file(state_file):
    state_file.write_text("{oops")

    result = invoke(state_file, "review", "Haus", "4")

    assert result.exit_code == 1
    assert "invalid JSON" in result.stdout


# --- Skip / Show ---


def test_skip_unknown_item(state_file):
    result = invoke(state_file, "skip", "Haus")
    assert result.exit_code == 1
    assert "No review state for 'Haus'" in result.stdout


def test_skip_known_item(state_file):
    invoke(state_file, "review", "Haus", "5")
    result = invoke(state_file, "skip", "Haus")

    assert result.exit_code == 0
    assert "skipped" in result.stdout
    assert JsonFileReviewStateStore(state_file).get("Haus").last_quality == 1


def test_show(state_file):
    invoke(state_file, "review", "Haus", "4")
    result = invoke(state_file, "show", "Haus")

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["item_key"] == "Haus"
    assert data["interval"] == 1
    assert data["last_quality"] == 4


def test_show_unknown(state_file):
    result = invoke(state_file, "show", "Auto")
    assert result.exit_code == 1


# --- Due / Upcoming / Stats ---


@pytest.fixture
def seeded(state_file):
    invoke(state_file, "review", "Haus", "4", at="2024-02-20T09:00:00")
    invoke(state_file, "review", "Auto", "4", at="2024-02-25T09:00:00")
    invoke(state_file, "review", "Baum", "4", at="2024-03-01T08:00:00")
    return state_file


def test_due_lists_most_overdue_first(seeded):
    result = invoke(seeded, "due")

    assert result.exit_code == 0
    lines = [line.strip() for line in result.stdout.splitlines()]
    assert lines[0].startswith("Haus")
    assert lines[1].startswith("Auto")
    assert "Due: 2" in result.stdout
    assert "Baum" not in result.stdout


def test_due_json_and_limit(seeded):
    result = invoke(seeded, "due", "--json", "--limit", "1")

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert [d["item_key"] for d in data] == ["Haus"]


@pytest.mark.parametrize("limit", ["0", "-1"])
def test_due_rejects_non_positive_limit(seeded, limit):
    result = invoke(seeded, "due", "--limit", limit)
    assert result.exit_code != 0


def test_due_nothing(state_file):
    result = invoke(state_file, "due")
    assert result.exit_code == 0
    assert "Nothing is due" in result.stdout


def test_upcoming(seeded):
    result = invoke(seeded, "upcoming", "--days", "7")
    assert result.exit_code == 0
    assert "Due within 7 days: 1" in result.stdout


def test_stats_json(seeded):
    result = invoke(seeded, "stats", "--json")

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["total"] == 3
    assert data["due_today"] == 2
    assert data["learning"] == 3
    assert data["learning"] + data["young"] + data["mature"] == data["total"]


def test_stats_text(seeded):
    result = invoke(seeded, "stats")
    assert result.exit_code == 0
    assert "Total: 3" in result.stdout
    assert "Learning: 3" in result.stdout


# --- Config / Server ---


def test_config_show(mock_home):
    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["state_file"] == str(mock_home / ".config/woerter/state.json")
    assert data["backend"] == "json"


@patch("uvicorn.run")
def test_serve_command(mock_run):
    result = runner.invoke(app, ["serve", "--port", "9000"])
    assert result.exit_code == 0
    mock_run.assert_called_with("woerter.server:app", host="127.0.0.1", port=9000, reload=False)

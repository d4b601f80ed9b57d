from pathlib import Path

import pytest
from pydantic import ValidationError

from woerter.application.config import resolve_config


def test_defaults_live_under_home(mock_home):
    config = resolve_config()

    assert config.state_file == mock_home / ".config/woerter/state.json"
    assert config.backend == "json"
    assert config.upcoming_days == 7
    assert config.due_limit is None


def test_toml_file_is_read(mock_home):
    cfg = mock_home / ".config/woerter/config.toml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text('upcoming_days = 14\nbackend = "memory"\n')

    config = resolve_config()

    assert config.upcoming_days == 14
    assert config.backend == "memory"


def test_env_beats_toml(mock_home, monkeypatch):
    cfg = mock_home / ".woerter.toml"
    cfg.write_text("upcoming_days = 14\n")
    monkeypatch.setenv("WOERTER_UPCOMING_DAYS", "3")

    assert resolve_config().upcoming_days == 3


def test_cli_overrides_beat_env(mock_home, monkeypatch, tmp_path):
    monkeypatch.setenv("WOERTER_STATE_FILE", str(tmp_path / "env.json"))

    config = resolve_config({"state_file": tmp_path / "cli.json", "backend": None})

    assert config.state_file == (tmp_path / "cli.json").resolve()
    assert config.backend == "json"


def test_state_file_is_made_absolute(mock_home, monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    config = resolve_config({"state_file": "progress.json"})

    assert config.state_file.is_absolute()
    assert config.state_file == Path(tmp_path / "progress.json").resolve()


def test_invalid_backend_rejected(mock_home):
    with pytest.raises(ValidationError):
        resolve_config({"backend": "sqlite"})


def test_config_fields(mock_home):
    assert set(resolve_config().model_dump()) == {
        "state_file",
        "backend",
        "upcoming_days",
        "due_limit",
        "verbose",
    }

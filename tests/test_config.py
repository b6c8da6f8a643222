# tests/test_config.py

from __future__ import annotations

import os
from pathlib import Path

import pytest

from taskboard.config import Settings


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in list(os.environ):
        if name.startswith("TASKBOARD_"):
            monkeypatch.delenv(name)
    return monkeypatch


def test_defaults(clean_env) -> None:
    s = Settings.from_env()
    assert s.app_name == "taskboard"
    assert s.console_enabled is True
    assert s.http_enabled is True
    assert (s.http_host, s.http_port) == ("127.0.0.1", 5000)
    assert s.cors_origins == ["*"]
    assert s.data_dir == Path(".local/taskboard")
    assert s.log_dir == Path(".local/taskboard/logs")


def test_env_overrides(clean_env, tmp_path: Path) -> None:
    clean_env.setenv("TASKBOARD_HTTP_ENABLED", "no")
    clean_env.setenv("TASKBOARD_HTTP_PORT", "8080")
    clean_env.setenv("TASKBOARD_CORS_ORIGINS", "http://localhost:5173, http://example.com")
    clean_env.setenv("TASKBOARD_DATA_DIR", str(tmp_path))

    s = Settings.from_env()

    assert s.http_enabled is False
    assert s.http_port == 8080
    assert s.cors_origins == ["http://localhost:5173", "http://example.com"]
    assert s.data_dir == tmp_path
    assert s.log_dir == tmp_path / "logs"


def test_bad_int_falls_back_to_default(clean_env) -> None:
    clean_env.setenv("TASKBOARD_HTTP_PORT", "eighty")
    assert Settings.from_env().http_port == 5000

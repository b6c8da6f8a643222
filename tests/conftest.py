# tests/conftest.py

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskboard.core.state import AppState
from taskboard.tasks.task_store import TaskStore


class FakeClock:
    """
    Deterministic clock for the store.

    Every call returns the current instant and then advances by `step`,
    so consecutive creations get strictly increasing timestamps.
    """

    def __init__(
        self,
        start: datetime = datetime(2025, 1, 1, 9, 0, tzinfo=UTC),
        step: timedelta = timedelta(seconds=1),
    ) -> None:
        self.now = start
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        current = self.now
        self.now = current + self.step
        return current


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the connectors.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskboard-test",
        log_level="DEBUG",
        console_enabled=False,
        http_enabled=False,
        http_host="127.0.0.1",
        http_port=0,
        cors_origins=["*"],
        data_dir=tmp_path,
        log_dir=tmp_path / "logs",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(clock: FakeClock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, task_store=store)

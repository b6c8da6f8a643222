# src/taskboard/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from .ports import TaskRepo


@dataclass
class AppState:
    # Settings object (config.Settings in the app, a SimpleNamespace in tests).
    settings: object

    task_store: TaskRepo

    # Serializes console command handling against other in-process callers.
    lock: threading.RLock = field(default_factory=threading.RLock)

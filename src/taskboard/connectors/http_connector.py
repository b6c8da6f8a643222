# src/taskboard/connectors/http_connector.py

"""
HTTP connector: the JSON API consumed by the browser task table.

Routes (all under /api):
- GET    /tasks?search=&status=&priority=
- GET    /tasks/{task_id}
- POST   /tasks
- PUT    /tasks/{task_id}
- DELETE /tasks/{task_id}
- POST   /tasks/{task_id}/duplicate
- GET    /health

Request bodies are validated by pydantic before they reach the store.
Absence results from the store become 404 responses.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.state import AppState
from ..tasks.task_api import duplicate_task, find_tasks
from ..tasks.task_models import TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

NOT_FOUND = "Task not found"


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class _TaskFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="ignore")

    @field_validator("description", "assignee", "due_date", mode="before", check_fields=False)
    @classmethod
    def _blank_is_none(cls, v: Any) -> Any:
        # The table's form posts "" for cleared optional fields.
        if isinstance(v, str) and not v.strip():
            return None
        return v


class TaskCreate(_TaskFields):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[date] = Field(default=None, alias="dueDate")
    assignee: Optional[str] = Field(default=None, max_length=200)


class TaskUpdate(_TaskFields):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = Field(default=None, alias="dueDate")
    assignee: Optional[str] = Field(default=None, max_length=200)

    @field_validator("status", "priority", mode="before")
    @classmethod
    def _not_null(cls, v: Any) -> Any:
        # May be left out, but never cleared.
        if v is None:
            raise ValueError("may not be null")
        return v


# ============================================================================
# APP
# ============================================================================

def _message(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


def create_app(state: AppState) -> FastAPI:
    """Build the FastAPI app around an already-wired AppState."""
    settings = state.settings
    store = state.task_store

    app = FastAPI(
        title=str(getattr(settings, "app_name", "taskboard")),
        description="Task table API: CRUD, search and filter over in-memory tasks",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(getattr(settings, "cors_origins", None) or ["*"]),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _message(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def _validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {"field": ".".join(str(p) for p in err.get("loc", ())[1:]), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        return _message(400, "Invalid task data", errors=errors)

    @app.exception_handler(ValueError)
    async def _value_error(_request: Request, exc: ValueError) -> JSONResponse:
        return _message(400, str(exc))

    @app.get("/api/health")
    async def health():
        return {"status": "ok", "tasks": store.count_tasks()}

    @app.get("/api/tasks")
    async def list_tasks(
        search: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
    ):
        tasks = find_tasks(store, search=search, status=status, priority=priority)
        return [t.to_dict() for t in tasks]

    @app.get("/api/tasks/{task_id}")
    async def get_task(task_id: str):
        task = store.get_task(task_id)
        if task is None:
            return _message(404, NOT_FOUND)
        return task.to_dict()

    @app.post("/api/tasks", status_code=201)
    async def create_task(data: TaskCreate):
        task = store.add_task(**data.model_dump())
        logger.info("Task created via HTTP id=%s", task.id)
        return task.to_dict()

    @app.put("/api/tasks/{task_id}")
    async def update_task(task_id: str, data: TaskUpdate):
        changes = data.model_dump(exclude_unset=True)
        task = store.update_task(task_id, changes)
        if task is None:
            return _message(404, NOT_FOUND)
        return task.to_dict()

    @app.delete("/api/tasks/{task_id}")
    async def delete_task(task_id: str):
        if not store.delete_task(task_id):
            return _message(404, NOT_FOUND)
        return {"success": True}

    @app.post("/api/tasks/{task_id}/duplicate", status_code=201)
    async def duplicate(task_id: str):
        task = duplicate_task(store, task_id)
        if task is None:
            return _message(404, NOT_FOUND)
        return task.to_dict()

    return app


# ============================================================================
# BACKGROUND RUNNER
# ============================================================================

@dataclass
class HttpBackgroundRunner:
    thread: threading.Thread
    server: uvicorn.Server

    def stop(self) -> None:
        self.server.should_exit = True

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_http_in_background(state: AppState) -> HttpBackgroundRunner | None:
    """
    Start the HTTP API in a background thread (so the console REPL can run in parallel).

    uvicorn runs its own event loop inside the thread; stop() asks it to exit.
    """
    settings = state.settings
    if not getattr(settings, "http_enabled", False):
        logger.info("HTTP connector disabled, not starting.")
        return None

    host = str(getattr(settings, "http_host", "127.0.0.1"))
    port = int(getattr(settings, "http_port", 5000))

    config = uvicorn.Config(
        create_app(state),
        host=host,
        port=port,
        log_level="info",
        # Keep our logging_setup handlers instead of uvicorn's defaults.
        log_config=None,
    )
    server = uvicorn.Server(config)

    t = threading.Thread(target=server.run, name="http-connector", daemon=True)
    t.start()

    deadline = time.monotonic() + 5.0
    while not server.started and t.is_alive() and time.monotonic() < deadline:
        time.sleep(0.05)

    if not server.started:
        logger.error("HTTP server did not start on %s:%s.", host, port)
        server.should_exit = True
        return None

    logger.info("HTTP API listening on http://%s:%s/api/tasks", host, port)
    return HttpBackgroundRunner(thread=t, server=server)

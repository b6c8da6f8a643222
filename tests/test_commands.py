# tests/test_commands.py

from __future__ import annotations

from taskboard.cli.commands import CommandRegistry, parse_field_args, registry
from taskboard.tasks.task_models import TaskPriority, TaskStatus


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}
    notes: list[str] = []

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bee"])

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/BEE y", emit=notes.append) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_value_errors_become_replies(state) -> None:
    reply = registry.handle(state, "/add Broken priority=urgent")
    assert reply is not None and reply.startswith("Error: invalid priority")
    assert state.task_store.count_tasks() == 0


def test_parse_field_args() -> None:
    words, fields = parse_field_args(
        ["Review", "report", "p=high", "assignee=Sarah_Miller", "due=2025-03-01", "x=y"]
    )
    assert words == ["Review", "report", "x=y"]
    assert fields == {"priority": "high", "assignee": "Sarah Miller", "due_date": "2025-03-01"}


def test_underscores_kept_outside_assignee(state) -> None:
    words, fields = parse_field_args(["desc=snake_case", "assignee=Sarah_Miller"])
    assert words == []
    assert fields == {"description": "snake_case", "assignee": "Sarah Miller"}

    registry.handle(state, "/add Rename my_var desc=use_snake_case")
    task = state.task_store.list_tasks()[0]
    assert task.title == "Rename my_var"
    assert task.description == "use_snake_case"


def test_add_rejects_title_twice(state) -> None:
    reply = registry.handle(state, "/add Fix login title=Other")
    assert reply is not None and reply.startswith("Usage: /add")
    assert state.task_store.count_tasks() == 0

    assert registry.handle(state, "/add title=Other").startswith("Added task ")


def test_add_list_and_search(state) -> None:
    assert registry.handle(state, "/add Write report").startswith("Added task ")
    registry.handle(state, "/add Review report assignee=Sarah_Miller priority=high")

    tasks = state.task_store.list_tasks()
    assert [t.title for t in tasks] == ["Review report", "Write report"]
    assert tasks[0].assignee == "Sarah Miller"
    assert tasks[0].priority is TaskPriority.HIGH

    listing = registry.handle(state, "/list high")
    assert "Review report" in listing and "Write report" not in listing

    found = registry.handle(state, "/search sarah")
    assert "Review report" in found and "Write report" not in found

    assert registry.handle(state, "/list completed") == "No tasks found."
    assert "Unknown filter" in registry.handle(state, "/list urgent")


def test_add_warns_about_same_title(state) -> None:
    notes: list[str] = []
    registry.handle(state, "/add Standup", emit=notes.append)
    registry.handle(state, "/add Standup", emit=notes.append)
    assert notes == ["Note: 1 task(s) with this title already exist."]


def test_commands_accept_id_prefix(state) -> None:
    task = state.task_store.add_task(title="Write report")
    prefix = task.id[:6]

    assert "Write report" in registry.handle(state, f"/show {prefix}")
    assert registry.handle(state, f"/done {prefix}").startswith("Marked task")
    assert state.task_store.get_task(task.id).status is TaskStatus.COMPLETED

    reply = registry.handle(state, f"/set {prefix} status=in-progress assignee=John_Doe")
    assert reply.startswith("Updated task")
    updated = state.task_store.get_task(task.id)
    assert updated.status is TaskStatus.IN_PROGRESS
    assert updated.assignee == "John Doe"

    assert "(Copy)" in registry.handle(state, f"/dup {task.id}")
    assert state.task_store.count_tasks() == 2

    assert registry.handle(state, f"/rm {task.id}").startswith("Deleted task")
    assert state.task_store.get_task(task.id) is None
    assert registry.handle(state, f"/rm {task.id}") == f"Task {task.id} not found."


def test_set_clears_field_with_empty_value(state) -> None:
    task = state.task_store.add_task(title="x", assignee="John Doe")
    registry.handle(state, f"/set {task.id} assignee=")
    assert state.task_store.get_task(task.id).assignee is None


def test_status_command_counts(state) -> None:
    state.task_store.add_task(title="a")
    state.task_store.add_task(title="b", status="completed")
    reply = registry.handle(state, "/status")
    assert "Tasks: 2" in reply
    assert "pending: 1" in reply and "completed: 1" in reply
    assert "HTTP API: OFF" in reply

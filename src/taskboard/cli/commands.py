# src/taskboard/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_api import duplicate_task, find_tasks
from ..tasks.task_models import Task, TaskPriority, TaskStatus

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

# key=value names accepted by /add and /set -> Task field names.
FIELD_ALIASES = {
    "title": "title",
    "desc": "description",
    "description": "description",
    "status": "status",
    "priority": "priority",
    "p": "priority",
    "due": "due_date",
    "duedate": "due_date",
    "assignee": "assignee",
    "to": "assignee",
}


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)

            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except ValueError as e:
            # Store-side coercion errors are user errors, not crashes.
            return f"Error: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----

def _short_id(task: Task) -> str:
    return task.id[:8]


def format_task_line(task: Task) -> str:
    due = task.due_date.isoformat() if task.due_date else ""
    who = task.assignee or ""
    return (
        f"{_short_id(task):<8}  {task.status.value:<11} {task.priority.value:<6}  "
        f"{due:<10}  {who:<16}  {task.title}"
    )


def format_task_table(tasks: list[Task]) -> str:
    if not tasks:
        return "No tasks found."
    header = f"{'ID':<8}  {'STATUS':<11} {'PRIO':<6}  {'DUE':<10}  {'ASSIGNEE':<16}  TITLE"
    return "\n".join([header, "-" * 72, *(format_task_line(t) for t in tasks)])


def format_task_detail(task: Task) -> str:
    return "\n".join(
        [
            f"Task {task.id}",
            f"  Title:       {task.title}",
            f"  Description: {task.description or '-'}",
            f"  Status:      {task.status.value}",
            f"  Priority:    {task.priority.value}",
            f"  Due:         {task.due_date.isoformat() if task.due_date else '-'}",
            f"  Assignee:    {task.assignee or '-'}",
            f"  Created:     {task.created_at.isoformat()}",
            f"  Updated:     {task.updated_at.isoformat()}",
        ]
    )


def resolve_task(state: AppState, ref: str) -> Task | str:
    """
    Find a task by full id or unique id prefix.
    Returns the task, or a user-facing error message.
    """
    store = state.task_store
    task = store.get_task(ref)
    if task is not None:
        return task

    matches = [t for t in store.list_tasks() if t.id.startswith(ref.lower())]
    if not matches:
        return f"Task {ref} not found."
    if len(matches) > 1:
        return f"Task id {ref} is ambiguous ({len(matches)} matches), type more characters."
    return matches[0]


def parse_field_args(args: list[str]) -> tuple[list[str], dict[str, str]]:
    """
    Split args into free words and key=value pairs.

    "Fix login key=value" style: words without "=" (or with an unknown key)
    are returned as free words, so titles may contain "=".
    """
    words: list[str] = []
    fields: dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        field_name = FIELD_ALIASES.get(key.lower()) if sep else None
        if field_name is None:
            words.append(arg)
            continue
        # Names only: assignee=Sarah_Miller -> "Sarah Miller".
        if field_name == "assignee":
            value = value.replace("_", " ")
        fields[field_name] = value
    return words, fields


# ---- commands ----

def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    store = state.task_store
    counts = {s: len(store.filter_tasks(status=s)) for s in TaskStatus}
    http = "ON" if getattr(settings, "http_enabled", False) else "OFF"
    host = getattr(settings, "http_host", "-")
    port = getattr(settings, "http_port", "-")
    return (
        "Status:\n"
        f"  Tasks: {store.count_tasks()} "
        f"({', '.join(f'{s.value}: {n}' for s, n in counts.items())})\n"
        f"  HTTP API: {http} (http://{host}:{port}/api/tasks)"
    )


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list                   -> all tasks
    /list completed         -> by status
    /list high              -> by priority
    /list pending high      -> both
    """
    status: str | None = None
    priority: str | None = None
    for arg in args:
        a = arg.lower()
        if a in {s.value for s in TaskStatus}:
            status = a
        elif a in {p.value for p in TaskPriority}:
            priority = a
        else:
            return (
                f"Unknown filter: {arg}. Use a status "
                f"({', '.join(s.value for s in TaskStatus)}) or a priority "
                f"({', '.join(p.value for p in TaskPriority)})."
            )
    return format_task_table(find_tasks(state.task_store, status=status, priority=priority))


def cmd_search(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /search <text>"
    return format_task_table(find_tasks(state.task_store, search=" ".join(args)))


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add Write report
    /add Review report priority=high assignee=Sarah_Miller due=2025-03-01
    """
    usage = "Usage: /add <title> [priority=.. status=.. due=YYYY-MM-DD assignee=.. desc=..]"
    words, fields = parse_field_args(args)
    if words and "title" in fields:
        return usage
    title = fields.pop("title", " ".join(words))
    if not title.strip():
        return usage

    if emit is not None:
        same = [t for t in state.task_store.search_tasks(title.strip()) if t.title == title.strip()]
        if same:
            emit(f"Note: {len(same)} task(s) with this title already exist.")

    task = state.task_store.add_task(title=title, **fields)
    logger.debug("Task created via console id=%s", task.id)
    return f"Added task {_short_id(task)}: {task.title}"


def cmd_show(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /show <id>"
    found = resolve_task(state, args[0])
    if isinstance(found, str):
        return found
    return format_task_detail(found)


def cmd_set(state: AppState, args: list[str]) -> str:
    """
    /set <id> status=in-progress priority=high
    /set <id> assignee=       -> clears the assignee
    """
    if len(args) < 2:
        return "Usage: /set <id> key=value [key=value ...]"
    found = resolve_task(state, args[0])
    if isinstance(found, str):
        return found

    words, fields = parse_field_args(args[1:])
    if words or not fields:
        return f"Expected key=value pairs, keys: {', '.join(sorted(FIELD_ALIASES))}."

    task = state.task_store.update_task(found.id, fields)
    if task is None:
        return f"Task {args[0]} not found."
    return f"Updated task {_short_id(task)}: {', '.join(sorted(fields))}"


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <id>"
    found = resolve_task(state, args[0])
    if isinstance(found, str):
        return found
    task = state.task_store.update_task(found.id, {"status": TaskStatus.COMPLETED})
    if task is None:
        return f"Task {args[0]} not found."
    return f"Marked task {_short_id(task)} as completed."


def cmd_dup(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /dup <id>"
    found = resolve_task(state, args[0])
    if isinstance(found, str):
        return found
    copy = duplicate_task(state.task_store, found.id)
    if copy is None:
        return f"Task {args[0]} not found."
    return f"Duplicated task {_short_id(found)} as {_short_id(copy)}: {copy.title}"


def cmd_rm(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /rm <id>"
    found = resolve_task(state, args[0])
    if isinstance(found, str):
        return found
    if not state.task_store.delete_task(found.id):
        return f"Task {args[0]} not found."
    return f"Deleted task {_short_id(found)}: {found.title}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show task counts and API address.")
registry.register(
    "list", cmd_list, help_text="List tasks: /list [status] [priority].", aliases=["ls"]
)
registry.register("search", cmd_search, help_text="Search title/description/assignee.", aliases=["s"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add <title> [priority=.. due=.. assignee=..]."
)
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register("set", cmd_set, help_text="Update fields: /set <id> key=value ...")
registry.register("done", cmd_done, help_text="Mark a task as completed: /done <id>.")
registry.register("dup", cmd_dup, help_text="Duplicate a task: /dup <id>.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["del"])

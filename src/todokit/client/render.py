"""Plain-text rendering of client state."""

from __future__ import annotations

from datetime import datetime

from todokit.modules.todo.models import Priority
from todokit.modules.todo.schemas import SortDirection, TodoFilter, TodoOut, TodoSort

from .store import TodoState

PRIORITY_LABELS: dict[Priority, str] = {
    Priority.LOW: "Low",
    Priority.MEDIUM: "Medium",
    Priority.HIGH: "High",
}

EMPTY_MESSAGE = "No tasks found"
LOADING_MESSAGE = "Loading todos..."


def format_timestamp(value: datetime) -> str:
    """Short month/day/time form, e.g. ``Oct 19 14:05``."""
    return value.strftime("%b %d %H:%M")


def render_todo(todo: TodoOut, *, selected: bool = False) -> str:
    """One task as ``<sel> [x] #id [Priority] title - description (updated)``."""
    select_marker = "*" if selected else " "
    done_marker = "[x]" if todo.completed else "[ ]"
    line = f"{select_marker} {done_marker} #{todo.id} [{PRIORITY_LABELS[todo.priority]}] {todo.title}"
    if todo.description:
        line += f" - {todo.description}"
    return f"{line} ({format_timestamp(todo.updated_at)})"


def render_filter_bar(filter: TodoFilter, sort: TodoSort) -> str:
    """Active filter and sort as one line."""
    if filter.completed is None:
        status = "all"
    else:
        status = "completed" if filter.completed else "incomplete"
    priority = filter.priority.value if filter.priority else "all"
    arrow = "^" if sort.direction == SortDirection.ASC else "v"
    parts = [f"status: {status}", f"priority: {priority}"]
    if filter.search:
        parts.append(f"search: {filter.search!r}")
    parts.append(f"sort: {sort.field.value} {arrow}")
    return " | ".join(parts)


def render_status(state: TodoState) -> str:
    """Loading, error and selection summary; empty when there is nothing to report."""
    if state.loading:
        return LOADING_MESSAGE
    if state.error:
        return f"Error: {state.error}"
    if state.selected:
        return f"{len(state.selected)} of {len(state.todos)} selected"
    return ""


def render_list(state: TodoState) -> list[str]:
    if not state.todos:
        return [EMPTY_MESSAGE]
    return [render_todo(todo, selected=todo.id in state.selected) for todo in state.todos]


def render(state: TodoState) -> str:
    """Full screen: filter bar, task list, then status line if any."""
    lines = [render_filter_bar(state.filter, state.sort), *render_list(state)]
    status = render_status(state)
    if status:
        lines.append(status)
    return "\n".join(lines)

"""Tests for plain-text rendering of client state."""

from __future__ import annotations

from datetime import datetime, timezone

from todokit.client import TodoState, render, render_filter_bar, render_status, render_todo
from todokit.modules.todo import Priority, SortDirection, SortField, TodoFilter, TodoOut, TodoSort

STAMP = datetime(2026, 10, 19, 14, 5, tzinfo=timezone.utc)


def make_todo(id: int, title: str, **fields: object) -> TodoOut:
    values: dict[str, object] = {
        "id": id,
        "title": title,
        "description": "",
        "completed": False,
        "priority": Priority.MEDIUM,
        "created_at": STAMP,
        "updated_at": STAMP,
    }
    values.update(fields)
    return TodoOut.model_validate(values)


def test_render_todo_open() -> None:
    todo = make_todo(3, "Call mum", description="Sunday", priority=Priority.HIGH)

    assert render_todo(todo) == "  [ ] #3 [High] Call mum - Sunday (Oct 19 14:05)"


def test_render_todo_selected_and_completed() -> None:
    todo = make_todo(4, "Taxes", completed=True, priority=Priority.LOW)

    assert render_todo(todo, selected=True) == "* [x] #4 [Low] Taxes (Oct 19 14:05)"


def test_filter_bar_defaults() -> None:
    assert render_filter_bar(TodoFilter(), TodoSort()) == "status: all | priority: all | sort: createdAt v"


def test_filter_bar_with_everything_set() -> None:
    line = render_filter_bar(
        TodoFilter(completed=False, priority=Priority.HIGH, search="mum"),
        TodoSort(field=SortField.TITLE, direction=SortDirection.ASC),
    )

    assert line == "status: incomplete | priority: high | search: 'mum' | sort: title ^"


def test_status_line_precedence() -> None:
    todos = [make_todo(1, "a"), make_todo(2, "b")]

    assert render_status(TodoState(todos=todos)) == ""
    assert render_status(TodoState(todos=todos, selected={2})) == "1 of 2 selected"
    assert render_status(TodoState(todos=todos, error="Oops", selected={2})) == "Error: Oops"
    assert render_status(TodoState(todos=todos, loading=True, error="Oops")) == "Loading todos..."


def test_render_empty_list() -> None:
    assert render(TodoState()) == "status: all | priority: all | sort: createdAt v\nNo tasks found"


def test_render_full_screen() -> None:
    state = TodoState(todos=[make_todo(2, "b"), make_todo(1, "a", completed=True)], selected={1})

    assert render(state).splitlines() == [
        "status: all | priority: all | sort: createdAt v",
        "  [ ] #2 [Medium] b (Oct 19 14:05)",
        "* [x] #1 [Medium] a (Oct 19 14:05)",
        "1 of 2 selected",
    ]

"""Command-line front end for a running todokit server.

Usage:
    todokit list --priority high --sort priority
    todokit add "Buy milk" --description "2 litres" --priority low
    todokit done 3
    todokit rm-selected 1 2 5
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from collections.abc import Sequence

from todokit.modules.todo.models import Priority
from todokit.modules.todo.schemas import SortDirection, SortField, TodoFilter, TodoIn, TodoSort, TodoUpdate

from .render import render
from .service import DEFAULT_API_URL, TodoService
from .store import TodoStore


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with one subcommand per store action."""
    parser = argparse.ArgumentParser(prog="todokit", description="Manage tasks on a todokit server")
    parser.add_argument(
        "--api-url",
        default=os.getenv("TODOKIT_API_URL", DEFAULT_API_URL),
        help="Task collection URL (default: $TODOKIT_API_URL or %(default)s)",
    )

    view = parser.add_argument_group("list view")
    status = view.add_mutually_exclusive_group()
    status.add_argument("--completed", dest="completed", action="store_const", const=True, help="Only completed")
    status.add_argument("--incomplete", dest="completed", action="store_const", const=False, help="Only open")
    view.add_argument("--priority", dest="filter_priority", choices=[p.value for p in Priority])
    view.add_argument("--search", help="Substring of title or description")
    view.add_argument("--sort", choices=[f.value for f in SortField], default=SortField.CREATED_AT.value)
    view.add_argument("--direction", choices=[d.value for d in SortDirection], default=SortDirection.DESC.value)

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="Show tasks")

    add = commands.add_parser("add", help="Create a task")
    add.add_argument("title")
    add.add_argument("--description", default="")
    add.add_argument("--priority", choices=[p.value for p in Priority], default=Priority.MEDIUM.value)
    add.add_argument("--done", action="store_true", help="Create already completed")

    edit = commands.add_parser("edit", help="Change fields of a task")
    edit.add_argument("id", type=int)
    edit.add_argument("--title")
    edit.add_argument("--description")
    edit.add_argument("--priority", choices=[p.value for p in Priority])

    for name, help_text in (("done", "Mark a task completed"), ("undo", "Mark a task open"), ("rm", "Delete a task")):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("id", type=int)

    remove_many = commands.add_parser("rm-selected", help="Delete several tasks at once")
    remove_many.add_argument("ids", type=int, nargs="+")

    return parser


async def run(args: argparse.Namespace, service: TodoService) -> TodoStore:
    """Apply the parsed command through a fresh store and return it."""
    store = TodoStore(service)
    store.state.filter = TodoFilter(completed=args.completed, priority=args.filter_priority, search=args.search)
    store.state.sort = TodoSort.parse(args.sort, args.direction)

    match args.command:
        case "list":
            await store.fetch_todos()
        case "add":
            data = TodoIn(title=args.title, description=args.description, priority=args.priority, completed=args.done)
            await store.add_todo(data)
        case "edit":
            fields = {
                name: value
                for name in ("title", "description", "priority")
                if (value := getattr(args, name)) is not None
            }
            await store.edit_todo(args.id, TodoUpdate(**fields))
        case "done" | "undo":
            await store.toggle_status(args.id, args.command == "done")
        case "rm":
            await store.remove_todo(args.id)
        case "rm-selected":
            store.state.selected = set(args.ids)
            await store.remove_selected()

    return store


async def _main(args: argparse.Namespace) -> int:
    async with TodoService(args.api_url) as service:
        store = await run(args, service)
    print(render(store.state))
    return 1 if store.state.error else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Console script entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "add" and not args.title:
        parser.error("title must not be empty")
    if args.command == "edit" and args.title is None and args.description is None and args.priority is None:
        parser.error("edit needs at least one of --title, --description, --priority")
    return asyncio.run(_main(args))


if __name__ == "__main__":
    sys.exit(main())

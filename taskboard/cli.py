"""
Taskboard CLI - a text front end over the client state container.

Usage:
    taskboard users
    taskboard register Alice --avatar https://example.com/alice.svg
    taskboard categories
    taskboard add-category Work --color "#10B981"
    taskboard --user 1 todos --status active --sort alphabetical
    taskboard --user 1 add "Ship report" --category 2
    taskboard --user 1 toggle 5
"""

import argparse
import asyncio
import sys
from typing import List, Optional

import httpx

from taskboard.client.api_client import ApiClient, ApiError
from taskboard.client.state import AppState
from taskboard.client.views import SORT_ORDERS, STATUS_FILTERS, category_usage, summarize, visible_todos
from taskboard.utils.helpers import CATEGORY_COLORS, DEFAULT_AVATARS, format_date
from taskboard.utils.logger import get_logger

logger = get_logger("taskboard")


# ─────────────────────────────────────────────────────────────
#  Rendering
# ─────────────────────────────────────────────────────────────

def print_users(state: AppState):
    if not state.users:
        print("No users yet. Register one with: taskboard register NAME")
        return
    for user in state.users:
        marker = "*" if state.current_user and user.id == state.current_user.id else " "
        print(f"{marker} {user.id:>4}  {user.name}")


def print_categories(state: AppState):
    usage = category_usage(state.todos)
    for category in state.categories:
        count = usage.get(category.id, 0)
        print(f"  {category.id:>4}  {category.name:<20} {category.color or '':<8} {count} todo(s)")


def print_todos(state: AppState, status: str, category_id: Optional[int], order: str):
    names = {c.id: c.name for c in state.categories}
    todos = visible_todos(state.todos, status=status, category_id=category_id, order=order)
    for todo in todos:
        box = "[x]" if todo.completed else "[ ]"
        category = names.get(todo.category_id, "-")
        print(f"  {todo.id:>4} {box} {todo.text}  ({category}, {format_date(todo.created_at)})")

    stats = summarize(state.todos)
    print(f"\n{stats['completed']}/{stats['total']} done ({stats['rate']}%)")


# ─────────────────────────────────────────────────────────────
#  Commands
# ─────────────────────────────────────────────────────────────

async def cmd_users(state: AppState, args):
    print_users(state)


async def cmd_register(state: AppState, args):
    user = await state.register_user(args.name, args.avatar)
    print(f"Registered {user.name} (id {user.id})")


async def cmd_categories(state: AppState, args):
    print_categories(state)


async def cmd_add_category(state: AppState, args):
    category = await state.add_category(args.name, args.color)
    print(f"Created category {category.name} (id {category.id})")


async def cmd_edit_category(state: AppState, args):
    category = await state.update_category(args.id, args.name, args.color)
    print(f"Updated category {category.id}: {category.name}")


async def cmd_delete_category(state: AppState, args):
    await state.delete_category(args.id)
    print(f"Deleted category {args.id}")


async def cmd_todos(state: AppState, args):
    print_todos(state, args.status, args.category, args.sort)


async def cmd_add(state: AppState, args):
    todo = await state.add_todo(args.text, args.category)
    print(f"Added todo {todo.id}: {todo.text}")


async def cmd_edit(state: AppState, args):
    todo = await state.update_todo(args.id, args.text, args.category)
    print(f"Updated todo {todo.id}: {todo.text}")


async def cmd_toggle(state: AppState, args):
    todo = await state.toggle_todo(args.id)
    print(f"Todo {todo.id} is now {'done' if todo.completed else 'open'}")


async def cmd_delete(state: AppState, args):
    await state.delete_todo(args.id)
    print(f"Deleted todo {args.id}")


COMMANDS = {
    "users": cmd_users,
    "register": cmd_register,
    "categories": cmd_categories,
    "add-category": cmd_add_category,
    "edit-category": cmd_edit_category,
    "delete-category": cmd_delete_category,
    "todos": cmd_todos,
    "add": cmd_add,
    "edit": cmd_edit,
    "toggle": cmd_toggle,
    "delete": cmd_delete,
}

# Commands that act on the current user's todos
NEEDS_USER = {"todos", "add", "edit", "toggle", "delete"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskboard", description="Taskboard command-line client")
    parser.add_argument("--api", default=None, help="API base URL (default: API_BASE_URL setting)")
    parser.add_argument("--user", type=int, default=None,
                        help="Act as this user id (default: the first registered user)")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("users", help="List users")

    p_register = subparsers.add_parser("register", help="Register a new user")
    p_register.add_argument("name")
    p_register.add_argument("--avatar", default=DEFAULT_AVATARS[0], help="Avatar image URL")

    subparsers.add_parser("categories", help="List categories")

    p_add_cat = subparsers.add_parser("add-category", help="Create a category")
    p_add_cat.add_argument("name")
    p_add_cat.add_argument("--color", default=CATEGORY_COLORS[0], help="Hex color")

    p_edit_cat = subparsers.add_parser("edit-category", help="Rename / recolor a category")
    p_edit_cat.add_argument("id", type=int)
    p_edit_cat.add_argument("name")
    p_edit_cat.add_argument("--color", default=None, help="Hex color")

    p_del_cat = subparsers.add_parser("delete-category", help="Delete an unused category")
    p_del_cat.add_argument("id", type=int)

    p_todos = subparsers.add_parser("todos", help="List the current user's todos")
    p_todos.add_argument("--status", choices=STATUS_FILTERS, default="all")
    p_todos.add_argument("--category", type=int, default=None, help="Only this category id")
    p_todos.add_argument("--sort", choices=SORT_ORDERS, default="newest")

    p_add = subparsers.add_parser("add", help="Add a todo")
    p_add.add_argument("text")
    p_add.add_argument("--category", type=int, required=True, help="Category id")

    p_edit = subparsers.add_parser("edit", help="Change a todo's text and category")
    p_edit.add_argument("id", type=int)
    p_edit.add_argument("text")
    p_edit.add_argument("--category", type=int, required=True, help="Category id")

    p_toggle = subparsers.add_parser("toggle", help="Mark a todo done / not done")
    p_toggle.add_argument("id", type=int)

    p_delete = subparsers.add_parser("delete", help="Delete a todo")
    p_delete.add_argument("id", type=int)

    return parser


async def run(argv: Optional[List[str]] = None, http: Optional[httpx.AsyncClient] = None) -> int:
    """Parse `argv`, execute one command and return the process exit code"""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command not in COMMANDS:
        parser.print_help()
        return 1

    async with ApiClient(base_url=args.api, http=http) as api:
        state = AppState(api)
        try:
            await state.load()
            if args.user is not None:
                await state.select_user(args.user)
            if args.command in NEEDS_USER and state.current_user is None:
                print("No user selected. Register one first or pass --user.", file=sys.stderr)
                return 1
            await COMMANDS[args.command](state, args)
        except ApiError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1
    return 0


def main():
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()

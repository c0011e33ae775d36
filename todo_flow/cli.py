"""todo-flow CLI.

Each invocation builds a fresh in-memory store from a dataset (built-in
stub tasks or a JSON seed file) and prints query results over it.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from dotenv import load_dotenv

from .config import ConfigError, Settings, load_settings
from .dataset import build_store
from .models import Task
from .query import SORT_ORDERS, STATUS_FILTERS, TaskQuery, apply_query, count_tasks_by_status
from .task_store import TaskStore

logger = logging.getLogger(__name__)


def _add_dataset_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--source",
        choices=("auto", "stub", "file"),
        default="auto",
        help="Dataset to load: stub tasks, a seed file, or auto (seed file if configured).",
    )
    parser.add_argument(
        "--seed",
        type=Path,
        help="JSON seed file (overrides TODO_FLOW_SEED_FILE).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todo-flow",
        description="Query a task dataset through the todo-flow storage engine.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List tasks.")
    _add_dataset_arguments(list_parser)
    list_parser.add_argument(
        "--status",
        choices=STATUS_FILTERS,
        default="all",
        help="Completion state filter.",
    )
    list_parser.add_argument("--search", default="", help="Case-insensitive text/category match.")
    list_parser.add_argument("--category", help="Exact category match.")
    list_parser.add_argument(
        "--sort",
        choices=SORT_ORDERS,
        default="newest",
        help="Ordering of the listing.",
    )

    categories_parser = subparsers.add_parser("categories", help="List distinct categories.")
    _add_dataset_arguments(categories_parser)

    stats_parser = subparsers.add_parser("stats", help="Show task counts.")
    _add_dataset_arguments(stats_parser)

    subparsers.add_parser(
        "check-config",
        help="Validate TODO_FLOW_* environment configuration.",
    )
    return parser


def format_task_rows(tasks: Iterable[Task]) -> str:
    """Return a human-friendly summary table string."""

    lines = ["ID | Text | Done | Priority | Category"]
    for task in tasks:
        lines.append(
            f"{task.id[:8]} | {task.text} | {'x' if task.completed else ' '} | "
            f"{task.priority} | {task.category or '-'}"
        )
    return "\n".join(lines)


def _load_store(settings: Settings, source: str, seed: Optional[Path]) -> TaskStore:
    seed_file = seed or settings.seed_file
    if source == "auto":
        source = "file" if seed_file else "stub"
    logger.debug("Loading %s dataset seed_file=%s", source, seed_file)
    return build_store(
        source=source,
        seed_file=seed_file,
        enforce_unique_usernames=settings.enforce_unique_usernames,
    )


def _cmd_list(store: TaskStore, query: TaskQuery) -> int:
    tasks = apply_query(store.get_all_tasks(), query)
    if not tasks:
        print("No tasks match.")
        return 0
    print(format_task_rows(tasks))
    return 0


def _cmd_categories(store: TaskStore) -> int:
    categories = store.get_categories()
    if not categories:
        print("No categories.")
        return 0
    for category in categories:
        print(category)
    return 0


def _cmd_stats(store: TaskStore) -> int:
    counts = count_tasks_by_status(store.get_all_tasks())
    print(f"{counts.total} tasks | {counts.active} active | {counts.completed} completed")
    return 0


def _cmd_check_config(settings: Settings) -> int:
    print(
        "Configuration OK",
        f"environment={settings.environment}",
        f"log_level={settings.log_level}",
        f"seed_file={settings.seed_file or '-'}",
        f"unique_usernames={'on' if settings.enforce_unique_usernames else 'off'}",
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    load_dotenv()
    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if args.debug else settings.log_level,
    )

    if args.command == "check-config":
        return _cmd_check_config(settings)

    try:
        store = _load_store(settings, args.source, args.seed)
    except (OSError, ValueError) as exc:
        print(f"Failed to load tasks: {exc}", file=sys.stderr)
        return 1

    if args.command == "list":
        return _cmd_list(
            store,
            TaskQuery(
                status=args.status,
                search=args.search,
                category=args.category,
                sort=args.sort,
            ),
        )
    if args.command == "categories":
        return _cmd_categories(store)
    if args.command == "stats":
        return _cmd_stats(store)

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())

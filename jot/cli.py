from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from jot import __version__
from jot.app import main as run_app
from jot.core.config import get_runtime_config
from jot.core.paths import AppPaths
from jot.core.settings_store import SettingsStore
from jot.core.state import TaskFilter
from jot.core.storage import FileKeyValueStore
from jot.core.task_store import TaskStore, filter_tasks


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jot",
        description="jot - a small terminal task list",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Print version and exit.",
    )

    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Parse CLI arguments without launching the UI.",
    )

    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Keep config, tasks and logs under this directory.",
    )

    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser(
        "list",
        help="Print stored tasks without launching the UI.",
    )
    list_parser.add_argument(
        "--filter",
        dest="task_filter",
        choices=[task_filter.value for task_filter in TaskFilter],
        default=TaskFilter.ALL.value,
        help="Which tasks to show (default: all).",
    )
    list_parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print the stored records as JSON.",
    )
    list_parser.set_defaults(handler=handle_list)

    config_parser = subparsers.add_parser(
        "print-config",
        help="Print resolved runtime config, paths and settings to stdout.",
    )
    config_parser.set_defaults(handler=handle_print_config)

    return parser


def _resolve_paths(args: argparse.Namespace) -> AppPaths:
    return AppPaths.resolve(args.data_dir or get_runtime_config().data_dir)


def _open_store(paths: AppPaths) -> TaskStore:
    store = TaskStore(
        FileKeyValueStore(paths.data_dir),
        key=get_runtime_config().storage_key,
    )
    store.load()
    return store


def handle_list(args: argparse.Namespace) -> None:
    store = _open_store(_resolve_paths(args))
    task_filter = TaskFilter(args.task_filter)
    tasks = filter_tasks(store.all(), task_filter)

    if args.as_json:
        print(json.dumps([task.to_json() for task in tasks], indent=2, ensure_ascii=False))
        return

    if not tasks:
        print(f"{task_filter.empty_title}. {task_filter.empty_description}")
    for task in tasks:
        mark = "x" if task.completed else " "
        print(f"[{mark}] {task.text}  ({task.id})")
    stats = store.stats()
    print(f"{stats.completed} / {stats.total} completed, {stats.pending} pending")


def handle_print_config(args: argparse.Namespace) -> None:
    paths = _resolve_paths(args)
    settings_store = SettingsStore(paths.settings_file)
    payload = {
        "runtime": get_runtime_config().model_dump(mode="json"),
        "paths": {
            "config_dir": str(paths.config_dir),
            "settings_file": str(paths.settings_file),
            "data_dir": str(paths.data_dir),
            "logs_dir": str(paths.logs_dir),
        },
        "settings": settings_store.load(),
    }
    print(json.dumps(payload, indent=2))


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        get_runtime_config()
    except ValidationError as exc:
        parser.exit(2, f"jot: invalid JOT_* environment settings\n{exc}\n")

    if args.command in {"list", "print-config"}:
        args.handler(args)
        return

    if args.no_ui:
        return

    run_app(args.data_dir)


if __name__ == "__main__":
    main()

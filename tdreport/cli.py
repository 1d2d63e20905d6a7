"""Command-line interface for tdreport."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tdreport import config
from tdreport.engine.catalog import projects_by_id
from tdreport.engine.filtering import parse_priorities
from tdreport.engine.hierarchy import child_project_ids, format_tree
from tdreport.engine.report import ReportOptions, build_report
from tdreport.errors import HierarchyCycleError, ResolutionError, TodoistAPIError
from tdreport.integrations.todoist import TaskQuery, TodoistClient
from tdreport.render import render_html, render_text

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_USAGE = 2
EXIT_FETCH = 3
EXIT_RESOLUTION = 4
EXIT_CYCLE = 5

COMMANDS = ("report", "projects", "labels", "comments")


def _priorities(text: str) -> List[int]:
    try:
        return sorted(parse_priorities(text))
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tdreport",
        description="Show your active Todoist tasks, filtered, sorted and grouped by project.",
    )
    parser.add_argument("--token", type=Path, help="path to a token file (default: .token.todoist)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")
    subparsers = parser.add_subparsers(dest="command")

    report = subparsers.add_parser("report", help="print the task report (default)")
    _add_report_arguments(report)

    projects = subparsers.add_parser("projects", help="list projects")
    projects.add_argument("--tree", action="store_true", help="print the project hierarchy")

    labels = subparsers.add_parser("labels", help="list labels")
    labels.add_argument("--shared", action="store_true", help="list shared label names instead")

    comments = subparsers.add_parser("comments", help="list the comments of a task")
    comments.add_argument("task_id", help="task id")

    return parser


def _add_report_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--label", help="only tasks with this label")
    parser.add_argument("--project", help="only tasks in this project")
    parser.add_argument(
        "--priorities",
        type=_priorities,
        default=[1, 2, 3, 4],
        help="comma-separated priorities to show (default: 1,2,3,4)",
    )
    parser.add_argument("--tree", action="store_true", help="nest projects by hierarchy")
    parser.add_argument("--no-group", dest="grouped", action="store_false", help="do not group tasks by project")
    parser.add_argument("--html", action="store_true", help="print HTML instead of text")
    parser.add_argument("--filter", help="Todoist filter expression, applied by the server")
    parser.add_argument("--ids", help="comma-separated task ids, applied by the server")


def _report_options(args: argparse.Namespace) -> ReportOptions:
    query = None
    if args.filter or args.ids:
        ids = [task_id.strip() for task_id in (args.ids or "").split(",") if task_id.strip()]
        query = TaskQuery(filter=args.filter, ids=ids)
    return ReportOptions(
        label=args.label,
        project=args.project,
        priorities=args.priorities,
        grouped=args.grouped,
        tree=args.tree,
        query=query,
    )


def _dump(items) -> str:
    return json.dumps([item.model_dump(mode="json") for item in items], indent=2)


def run(args: argparse.Namespace, client: TodoistClient) -> int:
    """Execute a parsed command and print its output."""
    if args.command == "projects":
        projects = projects_by_id(client.get_all_projects())
        if args.tree:
            print("\n".join(format_tree(child_project_ids(projects.values()), projects)))
        else:
            print(_dump(projects.values()))
    elif args.command == "labels":
        if args.shared:
            print("\n".join(client.get_all_shared_labels()))
        else:
            print(_dump(client.get_all_labels()))
    elif args.command == "comments":
        print(_dump(client.get_task_comments(args.task_id)))
    else:
        report = build_report(client, _report_options(args))
        print(render_html(report) if args.html else render_text(report))
    return EXIT_OK


def with_default_command(argv: List[str]) -> List[str]:
    """Insert the "report" command when argv starts with report options."""
    index = 0
    while index < len(argv):
        arg = argv[index]
        if arg in ("-v", "--verbose") or arg.startswith("--token="):
            index += 1
        elif arg == "--token":
            index += 2
        else:
            break
    if index < len(argv) and (argv[index] in COMMANDS or argv[index] in ("-h", "--help")):
        return argv
    return argv[:index] + ["report"] + argv[index:]


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    argv = with_default_command(list(sys.argv[1:] if argv is None else argv))
    args = parser.parse_args(argv)
    config.configure_logging(args.verbose)

    try:
        token = config.get_api_token(args.token)
    except ValueError as e:
        print(f"Cannot get credentials: {e}", file=sys.stderr)
        return EXIT_CONFIG
    try:
        timeout = config.get_timeout()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_CONFIG

    try:
        with TodoistClient(api_token=token, timeout=timeout) as client:
            return run(args, client)
    except ResolutionError as e:
        print(f"{e}.", file=sys.stderr)
        return EXIT_RESOLUTION
    except HierarchyCycleError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CYCLE
    except TodoistAPIError as e:
        print(f"Error retrieving data from Todoist: {e}", file=sys.stderr)
        return EXIT_FETCH


if __name__ == "__main__":
    sys.exit(main())

"""CLI parser construction for the todoist CLI."""

import argparse
from typing import Any


def _priority(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("priority must be 1-4") from None
    if not 1 <= number <= 4:
        raise argparse.ArgumentTypeError("priority must be 1-4")
    return number


def build_parser(commands: Any) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todoist",
        description="todoist: command-line client for Todoist with positional task ordering",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging on stderr")

    def add_order_args(sp):
        sp.add_argument("--top", action="store_true", help="place the task first among its siblings")
        sp.add_argument("--order", metavar="POSITION", help='"top" or a 1-based position among siblings')
        return sp

    sub = parser.add_subparsers(dest="command", help="Commands")

    # auth
    ap = sub.add_parser("auth", help="Store or clear the Todoist API token")
    ap.add_argument("--token", help="API token from Todoist settings → Integrations")
    ap.add_argument("--unset", action="store_true", help="remove the stored token")
    ap.set_defaults(func=commands.cmd_auth)

    # add
    addp = sub.add_parser("add", help="Create a task")
    addp.add_argument("content", nargs="+")
    addp.add_argument("--project-id", dest="project_id")
    addp.add_argument("--section-id", dest="section_id")
    addp.add_argument("--parent", dest="parent_id", help="parent task id (creates a sub-task)")
    addp.add_argument("--description", "-d")
    addp.add_argument("--label", "-l", dest="labels", action="append", default=[], help="label (repeatable)")
    addp.add_argument("--priority", "-p", type=_priority, help="1 (highest) .. 4 (lowest)")
    addp.add_argument("--due", help="natural-language due date")
    add_order_args(addp)
    addp.set_defaults(func=commands.cmd_add)

    # move
    mp = sub.add_parser(
        "move",
        help="Move a task to another project, section or parent",
        description="Exactly one of --project-id, --section-id, --parent is required.",
    )
    mp.add_argument("task_id")
    mp.add_argument("--project-id", dest="project_id")
    mp.add_argument("--section-id", dest="section_id")
    mp.add_argument("--parent", dest="parent_id")
    add_order_args(mp)
    mp.set_defaults(func=commands.cmd_move)

    # reorder
    rp = sub.add_parser("reorder", help="Reposition a task among its current siblings")
    rp.add_argument("task_id")
    add_order_args(rp)
    rp.set_defaults(func=commands.cmd_reorder)

    return parser

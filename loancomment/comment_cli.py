from __future__ import annotations

import argparse
import json
import sys

from rich.console import Console

from .comment_render import BorderStyle, CommentRenderer
from .comment_view import render_field_table, render_preview
from .fields import FieldRegistry


def _event(kind: str):
    def tag(item: str) -> tuple[str, str]:
        return kind, item

    return tag


def parse_comment_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build a formatted loan review comment from field values.",
        epilog="Field options are applied in command-line order.",
    )
    # Field options share one list to keep command-line order.
    parser.add_argument(
        "--set",
        dest="events",
        action="append",
        type=_event("set"),
        default=[],
        metavar="KEY=VALUE",
        help="Set a field value and enable the field (repeatable).",
    )
    parser.add_argument(
        "--value",
        dest="events",
        action="append",
        type=_event("value"),
        metavar="KEY=VALUE",
        help="Set a field value without enabling it (repeatable).",
    )
    parser.add_argument(
        "--enable", dest="events", action="append", type=_event("enable"), metavar="KEY", help="Enable a field (repeatable)."
    )
    parser.add_argument(
        "--disable", dest="events", action="append", type=_event("disable"), metavar="KEY", help="Disable a field (repeatable)."
    )
    parser.add_argument("--top-char", default="-", help="Header border top/bottom character (default: -).")
    parser.add_argument("--side-char", default="|", help="Header border side character (default: |).")
    parser.add_argument("--corner-char", default="+", help="Header border corner character (default: +).")
    parser.add_argument("--border-padding", type=int, default=1, help="Spaces around header titles (default: 1).")
    parser.add_argument("--panel", action="store_true", help="Show the comment inside a preview panel.")
    parser.add_argument("--json", dest="as_json", action="store_true", help="Output comment and field state as JSON.")
    parser.add_argument("--list-fields", action="store_true", help="Show the field catalog and exit.")
    return parser.parse_args(argv)


def split_assignment(item: str) -> tuple[str, str]:
    key, sep, value = item.partition("=")
    key = key.strip()
    if not sep or not key:
        raise ValueError(f"Expected KEY=VALUE: {item}")
    return key, value


def apply_arguments(registry: FieldRegistry, args: argparse.Namespace) -> None:
    for kind, item in args.events:
        if kind in {"set", "value"}:
            key, value = split_assignment(item)
            registry.set_value(key, value)
            if kind == "set":
                registry.set_enabled(key, True)
        else:
            registry.set_enabled(item, kind == "enable")


def run_comment(argv: list[str]) -> int:
    args = parse_comment_args(argv)
    console = Console()
    registry = FieldRegistry(strict=True)

    if args.list_fields:
        render_field_table(console, registry)
        return 0

    try:
        style = BorderStyle(
            top_char=args.top_char,
            side_char=args.side_char,
            corner_char=args.corner_char,
            lr_padding=args.border_padding,
        )
        renderer = CommentRenderer(registry, style)
        apply_arguments(registry, args)
    except KeyError as error:
        print(f"[error] {error.args[0]}", file=sys.stderr)
        return 2
    except ValueError as error:
        print(f"[error] {error}", file=sys.stderr)
        return 2

    comment = renderer.render()
    if args.as_json:
        payload = {"comment": comment, "fields": registry.snapshot()}
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0
    if args.panel:
        render_preview(console, comment)
        return 0
    sys.stdout.write(comment)
    return 0


def main() -> int:
    return run_comment(sys.argv[1:])

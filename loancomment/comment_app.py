from __future__ import annotations

import argparse
import sys

from rich.console import Console
from rich.prompt import Prompt

from .comment_render import CommentRenderer
from .comment_view import render_command_help, render_field_table, render_preview
from .fields import FieldRegistry


def parse_app_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive loan review comment builder.")
    parser.add_argument("--once", action="store_true", help="Print field table and empty preview, then exit.")
    parser.add_argument(
        "--ui",
        choices=["textual", "prompt"],
        default="textual",
        help="Builder mode (default: textual).",
    )
    return parser.parse_args(argv)


def run_prompt_app(console: Console, renderer: CommentRenderer) -> int:
    registry = renderer.registry
    render_field_table(console, registry)
    render_command_help(console)

    while True:
        command_line = Prompt.ask("[bold green]comment>[/bold green]").strip()
        if not command_line:
            continue
        parts = command_line.split(maxsplit=2)
        command = parts[0].lower()
        key = parts[1] if len(parts) > 1 else ""
        value = parts[2] if len(parts) > 2 else ""

        if command in {"quit", "exit"}:
            return 0
        if command == "help":
            render_command_help(console)
            continue
        if command == "fields":
            render_field_table(console, registry)
            continue
        if command == "show":
            render_preview(console, renderer.render())
            continue
        if command == "reset":
            registry.reset()
            render_preview(console, renderer.render())
            continue
        if command in {"set", "value", "enable", "disable"}:
            if not key:
                console.print(f"[red]Usage: {command} <key>{' <value>' if command in {'set', 'value'} else ''}[/red]")
                continue
            if key not in registry:
                console.print(f"[red]Unknown field: {key}[/red]")
                continue
            if command in {"set", "value"}:
                renderer.apply_value(key, value)
            if command in {"set", "enable"}:
                renderer.apply_enabled(key, True)
            if command == "disable":
                renderer.apply_enabled(key, False)
            render_preview(console, renderer.render())
            continue

        console.print(f"[red]Unknown command: {command}[/red]")
        render_command_help(console)


def run_textual_app(renderer: CommentRenderer) -> int:
    try:
        from .comment_textual import launch_comment_builder
    except Exception as error:  # noqa: BLE001
        print(
            f"[error] textual UI is unavailable: {error}. "
            "Install dependencies: python -m pip install -e .",
            file=sys.stderr,
        )
        return 1
    return launch_comment_builder(renderer)


def run_app(argv: list[str]) -> int:
    args = parse_app_args(argv)
    console = Console()
    renderer = CommentRenderer(FieldRegistry())

    if args.once:
        render_field_table(console, renderer.registry)
        render_preview(console, renderer.render())
        return 0

    if args.ui == "prompt":
        return run_prompt_app(console, renderer)
    return run_textual_app(renderer)


def main() -> int:
    return run_app(sys.argv[1:])

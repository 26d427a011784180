from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .fields import FieldRegistry


def enabled_style(enabled: bool) -> str:
    return "green" if enabled else "dim"


def render_field_table(console: Console, registry: FieldRegistry) -> None:
    table = Table(title=f"Fields ({len(registry)})", header_style="bold magenta")
    table.add_column("on", no_wrap=True)
    table.add_column("key", style="cyan", no_wrap=True)
    table.add_column("label")
    table.add_column("type", no_wrap=True)
    table.add_column("section", no_wrap=True)
    table.add_column("value", overflow="ellipsis")
    for field in registry.fields():
        table.add_row(
            Text("x" if field.enabled else "-", style=enabled_style(field.enabled)),
            field.key,
            field.label or "(free text)",
            field.type.value,
            field.section.value if field.section is not None else "-",
            Text(field.display_value(), style=enabled_style(field.enabled)),
        )
    console.print(table)


def render_preview(console: Console, comment: str) -> None:
    body = Text(comment) if comment else Text("(empty comment: enable a field)", style="dim")
    console.print(Panel(body, title="Loan Comment", border_style="blue"))


def render_command_help(console: Console) -> None:
    help_table = Table(title="Commands", header_style="bold magenta")
    help_table.add_column("command", style="cyan", no_wrap=True)
    help_table.add_column("description")
    help_table.add_row("help", "Show this help.")
    help_table.add_row("fields", "Show field table.")
    help_table.add_row("set <key> <value>", "Set a field value and enable it.")
    help_table.add_row("value <key> <value>", "Set a field value only.")
    help_table.add_row("enable <key>", "Include a field in the comment.")
    help_table.add_row("disable <key>", "Omit a field from the comment.")
    help_table.add_row("show", "Show the generated comment.")
    help_table.add_row("reset", "Clear all values and disable every field.")
    help_table.add_row("quit", "Exit application.")
    console.print(help_table)

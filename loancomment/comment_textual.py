from __future__ import annotations

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Checkbox, Footer, Header, Input, Static, TextArea

from .comment_render import CommentRenderer
from .fields import ENABLED_SUFFIX, VALUE_SUFFIX, Field


def field_caption(field: Field) -> str:
    if field.label:
        return field.label
    return field.key.replace("-", " ").title()


def initial_input_value(field: Field) -> str:
    if field.value is None:
        return ""
    return str(field.value)


class CommentBuilderApp(App[None]):
    CSS = """
    Screen { layout: vertical; }
    #main { height: 1fr; }
    #form { width: 50%; border: round #4cc9f0; }
    #preview { width: 50%; border: round #f72585; }
    .field-row { height: 3; }
    .field-row Checkbox { width: 32; }
    .field-row Input { width: 1fr; }
    #status { height: 1; padding: 0 1; }
    #final-output { height: 1fr; }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("ctrl+y", "copy_comment", "Copy"),
        Binding("ctrl+r", "reset_fields", "Reset"),
    ]

    def __init__(self, renderer: CommentRenderer) -> None:
        super().__init__()
        self.renderer = renderer
        self.registry = renderer.registry
        self.comment_text = ""

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="main"):
            with VerticalScroll(id="form"):
                for field in self.registry.fields():
                    with Horizontal(classes="field-row"):
                        yield Checkbox(
                            field_caption(field),
                            value=field.enabled,
                            id=f"{field.key}{ENABLED_SUFFIX}",
                        )
                        yield Input(
                            value=initial_input_value(field),
                            placeholder=field_caption(field),
                            id=f"{field.key}{VALUE_SUFFIX}",
                        )
            with Vertical(id="preview"):
                yield Static("", id="status")
                yield TextArea("", id="final-output", read_only=True)
        yield Footer()

    def on_mount(self) -> None:
        self._refresh_comment()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id is None:
            return
        self.renderer.apply_value(event.input.id, event.value)
        self._refresh_comment()

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        if event.checkbox.id is None:
            return
        self.renderer.apply_enabled(event.checkbox.id, event.value)
        self._refresh_comment()

    def action_copy_comment(self) -> None:
        self.copy_to_clipboard(self.comment_text)
        self.notify("Comment copied", timeout=1.2)

    def action_reset_fields(self) -> None:
        self.registry.reset()
        for field in self.registry.fields():
            self.query_one(f"#{field.key}{ENABLED_SUFFIX}", Checkbox).value = field.enabled
            self.query_one(f"#{field.key}{VALUE_SUFFIX}", Input).value = initial_input_value(field)
        self._refresh_comment()

    def _refresh_comment(self) -> None:
        self.comment_text = self.renderer.render()
        self.query_one("#final-output", TextArea).load_text(self.comment_text)
        enabled = len(self.registry.enabled_fields())
        self.query_one("#status", Static).update(f"{enabled}/{len(self.registry)} fields enabled")


def launch_comment_builder(renderer: CommentRenderer) -> int:
    app = CommentBuilderApp(renderer)
    app.run()
    return 0

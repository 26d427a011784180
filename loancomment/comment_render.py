from __future__ import annotations

from dataclasses import dataclass

from .fields import SECTION_ORDER, SECTION_TITLES, SUMMARY_KEY, FieldRegistry, FieldValue, Section


@dataclass(frozen=True)
class BorderStyle:
    top_char: str = "-"
    side_char: str = "|"
    corner_char: str = "+"
    lr_padding: int = 1

    def __post_init__(self) -> None:
        if self.lr_padding < 0:
            raise ValueError("lr_padding must be >= 0")


DEFAULT_BORDER_STYLE = BorderStyle()


def render_border(title: str, style: BorderStyle = DEFAULT_BORDER_STYLE) -> str:
    """Surround ``title`` in a three-line box. No trailing newline."""
    width = len(title) + style.lr_padding * 2
    edge = style.corner_char + (style.top_char * width) + style.corner_char
    pad = " " * style.lr_padding
    middle = f"{style.side_char}{pad}{title}{pad}{style.side_char}"
    return "\n".join([edge, middle, edge])


def compute_key_val_padding(registry: FieldRegistry) -> int:
    return max((len(field.label) for field in registry.enabled_fields()), default=0)


def section_is_active(registry: FieldRegistry, section: Section) -> bool:
    return any(field.enabled for field in registry.section_fields(section))


def render_attribute(registry: FieldRegistry, key: str, padding: int) -> str:
    field = registry.get(key)
    if field is None or not field.enabled:
        return ""
    spaces = " " * max(0, padding - len(field.label))
    return f"{field.label}: {spaces}{field.display_value()}\n"


def render_section(
    registry: FieldRegistry,
    section: Section,
    padding: int,
    style: BorderStyle = DEFAULT_BORDER_STYLE,
) -> str:
    if not section_is_active(registry, section):
        return ""
    parts = [render_border(SECTION_TITLES[section], style), "\n"]
    for field in registry.section_fields(section):
        if field.label:
            parts.append(render_attribute(registry, field.key, padding))
        elif field.enabled:
            # Free text is appended as-is: no label, padding or newline.
            parts.append(field.display_value())
    parts.append("\n")
    return "".join(parts)


def render_comment(registry: FieldRegistry, style: BorderStyle = DEFAULT_BORDER_STYLE) -> str:
    padding = compute_key_val_padding(registry)
    parts: list[str] = []

    summary = registry.get(SUMMARY_KEY)
    if summary is not None and summary.enabled:
        parts.append(summary.display_value())
        parts.append("\n\n")

    for section in SECTION_ORDER:
        parts.append(render_section(registry, section, padding, style))
    return "".join(parts)


class CommentRenderer:
    def __init__(self, registry: FieldRegistry, style: BorderStyle = DEFAULT_BORDER_STYLE) -> None:
        self.registry = registry
        self.style = style

    def render(self) -> str:
        return render_comment(self.registry, self.style)

    def apply_value(self, key: str, raw_value: FieldValue) -> str:
        self.registry.set_value(key, raw_value)
        return self.render()

    def apply_enabled(self, control_key: str, is_enabled: bool) -> str:
        self.registry.set_enabled(control_key, is_enabled)
        return self.render()

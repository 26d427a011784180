from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Union

FieldValue = Union[str, int, float, None]


class FieldType(str, Enum):
    TEXT = "text"
    DOLLAR = "dollar"
    PERCENT = "percent"
    NUMBER = "number"


class Section(str, Enum):
    LOAN_INFO = "loan-info"
    APPLICANT_INFO = "applicant-info"
    RECOMMENDATION = "recommendation"


SECTION_ORDER: tuple[Section, ...] = (Section.LOAN_INFO, Section.APPLICANT_INFO, Section.RECOMMENDATION)

SECTION_TITLES: dict[Section, str] = {
    Section.LOAN_INFO: "Loan Information",
    Section.APPLICANT_INFO: "Applicant Information",
    Section.RECOMMENDATION: "Recommendation",
}

SUMMARY_KEY = "summary"
VALUE_SUFFIX = "-value"
ENABLED_SUFFIX = "-enabled"


@dataclass(frozen=True)
class FieldSpec:
    key: str
    label: str
    type: FieldType
    section: Section | None
    default: FieldValue = ""


FIELD_CATALOG: tuple[FieldSpec, ...] = (
    FieldSpec(SUMMARY_KEY, "", FieldType.TEXT, None, ""),
    FieldSpec("loan-name", "Loan Name", FieldType.TEXT, Section.LOAN_INFO, ""),
    FieldSpec("loan-amount", "Loan Amount", FieldType.DOLLAR, Section.LOAN_INFO, 0.0),
    FieldSpec("loan-term", "Loan Term", FieldType.TEXT, Section.LOAN_INFO, ""),
    FieldSpec("interest-rate", "Interest Rate", FieldType.PERCENT, Section.LOAN_INFO, 0.0),
    FieldSpec("monthly-income", "Monthly Income", FieldType.DOLLAR, Section.APPLICANT_INFO, 0.0),
    FieldSpec("income-verification", "Income Verification Src", FieldType.TEXT, Section.APPLICANT_INFO, ""),
    FieldSpec("dti-before", "DTI Before", FieldType.PERCENT, Section.APPLICANT_INFO, 0.0),
    FieldSpec("dti-after", "DTI After", FieldType.PERCENT, Section.APPLICANT_INFO, 0.0),
    FieldSpec("discretionary-income", "Discretionary Income", FieldType.DOLLAR, Section.APPLICANT_INFO, 0.0),
    FieldSpec("credit-score", "Credit Score", FieldType.NUMBER, Section.APPLICANT_INFO, 0),
    FieldSpec("recommendation", "Recommendation", FieldType.TEXT, Section.RECOMMENDATION, ""),
    # Unlabeled: rendered as raw text right after the recommendation line.
    FieldSpec("written-rec", "", FieldType.TEXT, Section.RECOMMENDATION, ""),
)


def build_control_keys(catalog: Iterable[FieldSpec]) -> dict[str, str]:
    """Map every UI control id (value input and enabled checkbox) to its field key."""
    table: dict[str, str] = {}
    for spec in catalog:
        table[spec.key] = spec.key
        table[f"{spec.key}{VALUE_SUFFIX}"] = spec.key
        table[f"{spec.key}{ENABLED_SUFFIX}"] = spec.key
    return table


CONTROL_KEYS: dict[str, str] = build_control_keys(FIELD_CATALOG)


def _format_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _format_dollar(value: Any) -> str:
    # Unparseable or non-finite input renders as zero.
    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        amount = 0.0
    if not math.isfinite(amount):
        amount = 0.0
    return f"${amount:.2f}"


def _format_percent(value: Any) -> str:
    return f"{_format_text(value)}%"


def _format_number(value: Any) -> str:
    # Whole floats drop the trailing ".0" (720.0 renders as "720").
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return _format_text(value)


_FORMATTERS: dict[FieldType, Callable[[Any], str]] = {
    FieldType.TEXT: _format_text,
    FieldType.DOLLAR: _format_dollar,
    FieldType.PERCENT: _format_percent,
    FieldType.NUMBER: _format_number,
}


def format_value(field_type: FieldType, value: Any) -> str:
    return _FORMATTERS[FieldType(field_type)](value)


class Field:
    def __init__(
        self,
        key: str,
        label: str,
        type: FieldType,
        value: FieldValue = "",
        enabled: bool = False,
        section: Section | None = None,
    ) -> None:
        self._key = key
        self.label = label
        self.type = FieldType(type)
        self.value = value
        self.enabled = enabled
        self.section = section

    @property
    def key(self) -> str:
        return self._key

    @classmethod
    def from_spec(cls, spec: FieldSpec) -> "Field":
        return cls(spec.key, spec.label, spec.type, spec.default, False, spec.section)

    def display_value(self) -> str:
        return format_value(self.type, self.value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "type": self.type.value,
            "section": self.section.value if self.section is not None else None,
            "value": self.value,
            "enabled": self.enabled,
            "display": self.display_value(),
        }

    def __repr__(self) -> str:
        return f"Field(key={self.key!r}, type={self.type.value!r}, enabled={self.enabled!r}, value={self.value!r})"


class FieldRegistry:
    """Ordered catalog of comment fields plus their mutable value/enabled state.

    Keys may be given as the bare field key or as a control id
    (``<key>-value`` / ``<key>-enabled``). Unknown keys are ignored on
    mutation and report ``False``/``None`` on query unless ``strict`` is set,
    in which case mutations raise ``KeyError``.
    """

    def __init__(self, catalog: Iterable[FieldSpec] = FIELD_CATALOG, *, strict: bool = False) -> None:
        self._catalog = tuple(catalog)
        keys = [spec.key for spec in self._catalog]
        if len(keys) != len(set(keys)):
            raise ValueError("Duplicate field keys in catalog.")
        self.strict = strict
        self._control_keys = build_control_keys(self._catalog)
        self._fields: dict[str, Field] = {}
        self.reset()

    def reset(self) -> None:
        self._fields = {spec.key: Field.from_spec(spec) for spec in self._catalog}

    def resolve_key(self, key: str) -> str | None:
        return self._control_keys.get(key)

    def _lookup(self, key: str) -> Field | None:
        field_key = self.resolve_key(key)
        if field_key is None:
            if self.strict:
                raise KeyError(f"Unknown field: {key}")
            return None
        return self._fields[field_key]

    def set_value(self, key: str, raw_value: FieldValue) -> None:
        field = self._lookup(key)
        if field is None:
            return
        field.value = raw_value

    def set_enabled(self, key: str, is_enabled: bool) -> None:
        field = self._lookup(key)
        if field is None:
            return
        field.enabled = bool(is_enabled)

    def is_enabled(self, key: str) -> bool:
        field_key = self.resolve_key(key)
        if field_key is None:
            return False
        return self._fields[field_key].enabled

    def get(self, key: str) -> Field | None:
        field_key = self.resolve_key(key)
        if field_key is None:
            return None
        return self._fields[field_key]

    def keys(self) -> list[str]:
        return list(self._fields.keys())

    def fields(self) -> list[Field]:
        return list(self._fields.values())

    def enabled_fields(self) -> list[Field]:
        return [field for field in self._fields.values() if field.enabled]

    def section_fields(self, section: Section) -> list[Field]:
        return [field for field in self._fields.values() if field.section == section]

    def snapshot(self) -> list[dict[str, Any]]:
        return [field.to_dict() for field in self._fields.values()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.resolve_key(key) is not None

    def __len__(self) -> int:
        return len(self._fields)

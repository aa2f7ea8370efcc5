"""Declarative argument validation for tool calls.

A :class:`ToolSchema` is an ordered set of :class:`FieldRule` objects.
:func:`validate_arguments` checks a raw argument mapping against it and
raises :class:`~athena.core.errors.InvalidParamsError` on the first
violation. Fields not named in the schema are never inspected.

The same schema renders the JSON Schema published to MCP clients via
:meth:`ToolSchema.to_json_schema`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

from athena.core.errors import InvalidParamsError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

FieldType = Literal["string", "number", "integer", "boolean", "object"]

_MISSING = object()


@dataclass(frozen=True, slots=True)
class FieldRule:
    """Validation rules for one argument field."""

    type: FieldType | None = None
    required: bool = False
    min_length: int | None = None
    max_length: int | None = None
    min: float | None = None
    max: float | None = None
    enum: tuple[Any, ...] | None = None
    description: str = ""
    default: Any = None

    def to_json_schema(self) -> dict[str, Any]:
        """Render this rule as a JSON Schema property."""
        prop: dict[str, Any] = {}
        if self.type is not None:
            prop["type"] = self.type
        if self.description:
            prop["description"] = self.description
        if self.min_length is not None:
            prop["minLength"] = self.min_length
        if self.max_length is not None:
            prop["maxLength"] = self.max_length
        if self.min is not None:
            prop["minimum"] = self.min
        if self.max is not None:
            prop["maximum"] = self.max
        if self.enum is not None:
            prop["enum"] = list(self.enum)
        if self.default is not None:
            prop["default"] = self.default
        return prop


@dataclass(frozen=True, slots=True)
class ToolSchema:
    """Ordered per-field rules for one tool's arguments."""

    fields: dict[str, FieldRule] = field(default_factory=dict)

    def __iter__(self) -> Iterator[tuple[str, FieldRule]]:
        return iter(self.fields.items())

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def required_fields(self) -> list[str]:
        return [name for name, rule in self.fields.items() if rule.required]

    def to_json_schema(self) -> dict[str, Any]:
        """Render as a JSON Schema ``object`` suitable for an MCP tool listing."""
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {
                name: rule.to_json_schema() for name, rule in self.fields.items()
            },
        }
        required = self.required_fields
        if required:
            schema["required"] = required
        return schema


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    # JSON clients may send 2.0 for 2
    if isinstance(value, float):
        return value.is_integer()
    return _is_number(value)


def _type_error(name: str, rule: FieldRule, value: Any) -> str | None:
    if rule.type == "string" and not isinstance(value, str):
        return f"Field {name} must be a string"
    if rule.type == "number" and not _is_number(value):
        return f"Field {name} must be a number"
    if rule.type == "integer" and not _is_integer(value):
        return f"Field {name} must be an integer"
    if rule.type == "boolean" and not isinstance(value, bool):
        return f"Field {name} must be a boolean"
    if rule.type == "object" and not isinstance(value, dict):
        return f"Field {name} must be an object"
    return None


def _check_field(name: str, rule: FieldRule, value: Any) -> str | None:
    """Return the first violation message for one field, or None."""
    if rule.required and (value is _MISSING or value is None):
        return f"Missing required field: {name}"
    if value is _MISSING:
        return None

    message = _type_error(name, rule, value)
    if message:
        return message

    sized = hasattr(value, "__len__")
    if rule.min_length is not None and sized and len(value) < rule.min_length:
        return f"Field {name} must be at least {rule.min_length} characters"
    if rule.max_length is not None and sized and len(value) > rule.max_length:
        return f"Field {name} must be at most {rule.max_length} characters"

    numeric = _is_number(value)
    if rule.min is not None and numeric and value < rule.min:
        return f"Field {name} must be at least {_fmt(rule.min)}"
    if rule.max is not None and numeric and value > rule.max:
        return f"Field {name} must be at most {_fmt(rule.max)}"

    if rule.enum is not None and value not in rule.enum:
        allowed = ", ".join(str(v) for v in rule.enum)
        return f"Field {name} must be one of: {allowed}"
    return None


def _fmt(bound: float) -> str:
    """Render 4.0 as 4 so messages read like the declared bound."""
    if isinstance(bound, float) and bound.is_integer():
        return str(int(bound))
    return str(bound)


def validate_arguments(
    tool_name: str,
    schema: ToolSchema | None,
    arguments: Mapping[str, Any],
) -> None:
    """Validate arguments against a schema, in the schema's field order.

    A missing schema passes unconditionally.

    Raises:
        InvalidParamsError: On the first rule violation.
    """
    if schema is None:
        return
    for name, rule in schema:
        message = _check_field(name, rule, arguments.get(name, _MISSING))
        if message is not None:
            raise InvalidParamsError(tool_name, message)

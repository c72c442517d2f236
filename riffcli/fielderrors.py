"""Validation errors tied to the field they concern."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any, Iterable

__all__ = [
    "CURRENT_FIELD",
    "ErrorType",
    "FieldError",
    "AggregateError",
    "FieldErrors",
    "err_disallowed_fields",
    "err_invalid_array_value",
    "err_invalid_value",
    "err_missing_field",
    "err_missing_one_of",
    "err_multiple_one_of",
]

CURRENT_FIELD = "[]"


class ErrorType(enum.Enum):
    """Kinds of field error."""

    NOT_FOUND = "FieldValueNotFound"
    REQUIRED = "FieldValueRequired"
    DUPLICATE = "FieldValueDuplicate"
    INVALID = "FieldValueInvalid"
    NOT_SUPPORTED = "FieldValueNotSupported"
    FORBIDDEN = "FieldValueForbidden"
    TOO_LONG = "FieldValueTooLong"
    TOO_MANY = "FieldValueTooMany"
    INTERNAL = "InternalError"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    ErrorType.NOT_FOUND: "Not found",
    ErrorType.REQUIRED: "Required value",
    ErrorType.DUPLICATE: "Duplicate value",
    ErrorType.INVALID: "Invalid value",
    ErrorType.NOT_SUPPORTED: "Unsupported value",
    ErrorType.FORBIDDEN: "Forbidden",
    ErrorType.TOO_LONG: "Too long",
    ErrorType.TOO_MANY: "Too many",
    ErrorType.INTERNAL: "Internal error",
}

_SHOWS_VALUE = {ErrorType.INVALID, ErrorType.NOT_SUPPORTED, ErrorType.DUPLICATE, ErrorType.NOT_FOUND}


@dataclass
class FieldError:
    """A problem with the value of one field."""

    type: ErrorType | None = None
    field: str = ""
    bad_value: Any = ""
    detail: str = ""

    def body(self) -> str:
        text = self.type.description if self.type is not None else ""
        if self.type in _SHOWS_VALUE:
            value = json.dumps(self.bad_value) if isinstance(self.bad_value, str) else repr(self.bad_value)
            text = f"{text}: {value}"
        if self.detail:
            text = f"{text}: {self.detail}"
        return text

    def __str__(self) -> str:
        return f"{self.field}: {self.body()}"


class AggregateError(Exception):
    """Several errors reported together."""

    def __init__(self, errors: Iterable[BaseException | FieldError]) -> None:
        self.errors = list(errors)
        super().__init__(str(self))

    def __str__(self) -> str:
        messages = []
        for err in self.errors:
            msg = str(err)
            if msg not in messages:
                messages.append(msg)
        if len(messages) == 1:
            return messages[0]
        return "[" + ", ".join(messages) + "]"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, AggregateError) and self.errors == other.errors

    __hash__ = None  # type: ignore[assignment]


class FieldErrors(list):
    """A list of :class:`FieldError` with helpers to nest them under parents."""

    def also(self, *args: Iterable[FieldError]) -> FieldErrors:
        """Return these errors followed by all the given ones."""
        result = FieldErrors(self)
        for errs in args:
            result.extend(errs)
        return result

    def _rename(self, rename) -> FieldErrors:
        return FieldErrors(
            FieldError(e.type, rename(e.field), e.bad_value, e.detail) for e in self
        )

    def via_field(self, *args: str) -> FieldErrors:
        """Return the errors nested under the given parent field path."""
        prefix = ".".join(args)

        def rename(name: str) -> str:
            if name == CURRENT_FIELD:
                return prefix
            if name.startswith("["):
                return prefix + name
            return f"{prefix}.{name}"

        return self._rename(rename)

    def via_index(self, index: int) -> FieldErrors:
        """Return the errors nested under an array index."""
        prefix = f"[{index}]"

        def rename(name: str) -> str:
            if name == CURRENT_FIELD:
                return prefix
            if name.startswith("["):
                return prefix + name
            return f"{prefix}.{name}"

        return self._rename(rename)

    def via_field_index(self, field: str, index: int) -> FieldErrors:
        """Return the errors nested under ``field[index]``."""
        return self.via_index(index).via_field(field)

    def error_list(self) -> list[FieldError]:
        """Return the errors as a plain list."""
        return list(self)

    def to_aggregate(self) -> AggregateError | None:
        """Return the errors as one exception, or None when there are none."""
        return AggregateError(self) if self else None


def err_disallowed_fields(name: str, detail: str) -> FieldErrors:
    return FieldErrors([FieldError(ErrorType.FORBIDDEN, name, "", detail)])


def err_invalid_array_value(value: Any, field: str, index: int) -> FieldErrors:
    return FieldErrors([FieldError(ErrorType.INVALID, f"{field}[{index}]", value, "")])


def err_invalid_value(value: Any, field: str) -> FieldErrors:
    return FieldErrors([FieldError(ErrorType.INVALID, field, value, "")])


def err_missing_field(field: str) -> FieldErrors:
    return FieldErrors([FieldError(ErrorType.REQUIRED, field, "", "")])


def err_missing_one_of(*args: str) -> FieldErrors:
    return FieldErrors([
        FieldError(ErrorType.REQUIRED, "[" + ", ".join(args) + "]", "", "expected exactly one, got neither")
    ])


def err_multiple_one_of(*args: str) -> FieldErrors:
    return FieldErrors([
        FieldError(ErrorType.REQUIRED, "[" + ", ".join(args) + "]", "", "expected exactly one, got both")
    ])
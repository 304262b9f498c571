"""Field-scoped error codes returned by guarded credential operations."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Final


class ErrorCode(StrEnum):
    """Symbolic error codes attached to record fields."""

    BLANK = "blank"
    INVALID = "invalid"
    NOT_NEW = "not_new"
    NOT_COMPLEX = "not_complex"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"


NOT_NEW_MESSAGE: Final[str] = "New password must be different from old one"
NOT_COMPLEX_MESSAGE: Final[str] = (
    "Password must contain at least 1 lower case character, "
    "1 upper case character and a number"
)


def too_short_message(min_length: int) -> str:
    """Return the user-facing minimum length message."""

    return f"Password must be at least {min_length} characters long"


@dataclass(frozen=True)
class FieldError:
    """One error descriptor attached to a field."""

    code: ErrorCode
    message: str | None = None


class FieldErrors:
    """Ordered mapping from field name to the errors collected for it."""

    def __init__(self) -> None:
        self._errors: dict[str, list[FieldError]] = {}

    def add(self, field: str, code: ErrorCode, message: str | None = None) -> None:
        """Attach one error to field, preserving insertion order."""

        self._errors.setdefault(field, []).append(FieldError(code=code, message=message))

    def merge(self, other: FieldErrors) -> None:
        """Append every error from other."""

        for field, errors in other.items():
            for error in errors:
                self.add(field, error.code, error.message)

    def on(self, field: str) -> list[FieldError]:
        """Return errors attached to field, empty when none."""

        return list(self._errors.get(field, []))

    def codes(self, field: str) -> list[ErrorCode]:
        return [error.code for error in self._errors.get(field, [])]

    def items(self) -> Iterator[tuple[str, list[FieldError]]]:
        for field, errors in self._errors.items():
            yield field, list(errors)

    def as_dict(self) -> dict[str, list[FieldError]]:
        return {field: list(errors) for field, errors in self._errors.items()}

    def __contains__(self, field: object) -> bool:
        return field in self._errors

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __len__(self) -> int:
        return sum(len(errors) for errors in self._errors.values())

    def __repr__(self) -> str:
        return f"FieldErrors({self._errors!r})"

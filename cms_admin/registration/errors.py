"""
Registration error collection.

One ErrorCollection is created by the host per submission and handed to
every field's validator in turn. Validators only ever append to it.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from cms_admin.exceptions import RegistrationValidationError


@dataclass(frozen=True)
class FieldError:
    code: str
    message: str
    data: Any = None


class ErrorCollection:
    """Ordered, append-only list of registration errors."""

    def __init__(self, errors: list[FieldError] | None = None):
        self._errors: list[FieldError] = list(errors or [])

    def add(self, code: str, message: str, data: Any = None) -> FieldError:
        error = FieldError(code=code, message=message, data=data)
        self._errors.append(error)
        return error

    def has_errors(self) -> bool:
        return bool(self._errors)

    def get_error_codes(self) -> list[str]:
        """Distinct error codes in the order they were first added."""
        return list(dict.fromkeys(error.code for error in self._errors))

    def get_error_messages(self, code: str | None = None) -> list[str]:
        return [error.message for error in self._errors if code is None or error.code == code]

    def get_error_message(self, code: str | None = None) -> str:
        """First message for ``code`` (or overall), empty string when there is none."""
        messages = self.get_error_messages(code)
        return messages[0] if messages else ""

    def as_dict(self) -> dict[str, list[str]]:
        return {code: self.get_error_messages(code) for code in self.get_error_codes()}

    def raise_for_errors(self) -> None:
        """Raise RegistrationValidationError if any error has been collected."""
        if self._errors:
            raise RegistrationValidationError(errors=self.as_dict())

    def __iter__(self) -> Iterator[FieldError]:
        return iter(list(self._errors))

    def __len__(self) -> int:
        return len(self._errors)

    def __contains__(self, code: object) -> bool:
        return any(error.code == code for error in self._errors)

    def __repr__(self) -> str:
        return f"ErrorCollection({self.get_error_codes()!r})"

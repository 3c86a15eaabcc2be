"""
Built-in registration field types.

    text      - single-line input (text, email, url, password...)
    checkbox  - single checkbox, typically "I accept the terms"
    select    - drop-down list of options
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import field_validator

from cms_admin.registration.base import AbstractField, FieldProperties, submitted_scalar
from cms_admin.registration.errors import ErrorCollection
from cms_admin.registration.factory import register_field_type


def _required_code(name: str) -> str:
    return f"empty_{name}"


def _invalid_code(name: str) -> str:
    return f"invalid_{name}"


# ── Text ──────────────────────────────────────────────────────────────────────


class TextFieldProperties(FieldProperties):
    value: str
    input_type: str
    placeholder: str
    min_length: int
    max_length: int | None
    pattern: str | None

    @field_validator("pattern")
    @classmethod
    def pattern_compiles(cls, value: str | None) -> str | None:
        if value:
            try:
                re.compile(value)
            except re.error as exc:
                raise ValueError(f"invalid regular expression: {exc}") from exc
        return value

    @property
    def compiled_pattern(self) -> re.Pattern[str] | None:
        # re keeps its own cache of compiled expressions
        return re.compile(self.pattern) if self.pattern else None


@register_field_type("text", template="registration/text_field.html")
class TextField(AbstractField):
    """Single-line text input with length and pattern constraints."""

    properties_model = TextFieldProperties

    def defaults(self) -> dict[str, Any]:
        return {
            "name": "",
            "label": "",
            "description": "",
            "required": False,
            "error_message": "",
            "value": "",
            "input_type": "text",
            "placeholder": "",
            "min_length": 0,
            "max_length": None,
            "pattern": None,
        }

    def _failure(self) -> str | None:
        value = self.config.value.strip()
        if not value:
            return "required" if self.config.required else None
        if len(value) < self.config.min_length:
            return "too_short"
        if self.config.max_length is not None and len(value) > self.config.max_length:
            return "too_long"
        pattern = self.config.compiled_pattern
        if pattern is not None and pattern.fullmatch(value) is None:
            return "pattern"
        return None

    def validate(self) -> bool:
        return self._failure() is None

    def on_error(self, errors: ErrorCollection) -> None:
        reason = self._failure()
        label = self.config.label or self.name
        if reason == "required":
            code = _required_code(self.name)
            message = self.config.error_message or f"Please enter {label}."
        else:
            code = _invalid_code(self.name)
            if self.config.error_message:
                message = self.config.error_message
            elif reason == "too_short":
                message = f"{label} must be at least {self.config.min_length} characters."
            elif reason == "too_long":
                message = f"{label} must be at most {self.config.max_length} characters."
            else:
                message = f"{label} is not valid."
        errors.add(code, message, data={"field": self.name, "reason": reason})


# ── Checkbox ──────────────────────────────────────────────────────────────────


class CheckboxFieldProperties(FieldProperties):
    value: str
    checked: bool


@register_field_type("checkbox", template="registration/checkbox_field.html")
class CheckboxField(AbstractField):
    """A single checkbox; when required it must be ticked."""

    properties_model = CheckboxFieldProperties

    def defaults(self) -> dict[str, Any]:
        return {
            "name": "",
            "label": "",
            "description": "",
            "required": False,
            "error_message": "",
            "value": "1",
            "checked": False,
        }

    def submitted_values(self, submission: Mapping[str, Any]) -> dict[str, Any]:
        # An unticked checkbox is simply absent from the submission
        if not self.name:
            return {}
        return {"checked": submitted_scalar(submission, self.name) == self.config.value}

    def validate(self) -> bool:
        return self.config.checked or not self.config.required

    def on_error(self, errors: ErrorCollection) -> None:
        label = self.config.label or self.name
        errors.add(
            _required_code(self.name),
            self.config.error_message or f"You must check {label}.",
            data={"field": self.name, "reason": "required"},
        )


# ── Select ────────────────────────────────────────────────────────────────────


class SelectFieldProperties(FieldProperties):
    value: str
    options: dict[str, str]
    placeholder: str


@register_field_type("select", template="registration/select_field.html")
class SelectField(AbstractField):
    """Drop-down list; the submitted value must be one of ``options``."""

    properties_model = SelectFieldProperties

    def defaults(self) -> dict[str, Any]:
        return {
            "name": "",
            "label": "",
            "description": "",
            "required": False,
            "error_message": "",
            "value": "",
            "options": {},
            "placeholder": "",
        }

    def validate(self) -> bool:
        value = self.config.value
        if not value:
            return not self.config.required
        return value in self.config.options

    def on_error(self, errors: ErrorCollection) -> None:
        label = self.config.label or self.name
        if not self.config.value:
            errors.add(
                _required_code(self.name),
                self.config.error_message or f"Please select {label}.",
                data={"field": self.name, "reason": "required"},
            )
        else:
            errors.add(
                _invalid_code(self.name),
                self.config.error_message or f"{label} is not a valid choice.",
                data={"field": self.name, "reason": "choice", "value": self.config.value},
            )

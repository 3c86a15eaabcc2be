"""
Field Factory

Registry of field variants keyed by type name. Registering a variant also
declares the template it renders with.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from jinja2 import Environment

from cms_admin.exceptions import ConfigurationError, UnknownFieldTypeError
from cms_admin.registration.base import AbstractField

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=type[AbstractField])


class FieldFactory:
    """Maps field type names to AbstractField subclasses."""

    def __init__(self) -> None:
        self._types: dict[str, type[AbstractField]] = {}

    def register(self, field_type: str, template: str) -> Callable[[F], F]:
        """
        Class decorator registering a field variant.

        Example:
            @field_factory.register("text", template="registration/text_field.html")
            class TextField(AbstractField):
                ...
        """

        def decorator(cls: F) -> F:
            if field_type in self._types:
                raise ConfigurationError(
                    f"Field type '{field_type}' is already registered",
                    details={"field_type": field_type, "field_class": self._types[field_type].__name__},
                )
            cls.field_type = field_type
            cls.template_name = template
            self._types[field_type] = cls
            logger.debug("Field type registered: %s -> %s", field_type, template)
            return cls

        return decorator

    def get(self, field_type: str) -> type[AbstractField] | None:
        return self._types.get(field_type)

    def available_types(self) -> list[str]:
        return sorted(self._types)

    def create(
        self,
        field_type: str,
        config: Mapping[str, Any] | None = None,
        environment: Environment | None = None,
    ) -> AbstractField:
        """Instantiate the variant registered as ``field_type``."""
        cls = self._types.get(field_type)
        if cls is None:
            raise UnknownFieldTypeError(field_type, self.available_types())
        return cls(config, environment=environment)


# ── Global singleton ──────────────────────────────────────────────────────────
field_factory = FieldFactory()
register_field_type = field_factory.register

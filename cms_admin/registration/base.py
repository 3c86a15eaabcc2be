"""
Registration Field Base Classes

FieldProperties: typed property bag shared by every field variant. Declared
attributes are the variant's known properties; any extra configuration key is
kept in the model's extras so templates can use it.

AbstractField: merges a variant's defaults with caller configuration, renders
the result through the variant's template and takes part in the host's
render-form / validate-submission lifecycle.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar

from jinja2 import Environment
from pydantic import BaseModel, ConfigDict, ValidationError

from cms_admin.exceptions import ConfigurationError, UnknownPropertyError
from cms_admin.plugins.hooks import HOOK_REGISTER_FORM, HOOK_REGISTRATION_ERRORS
from cms_admin.plugins.registry import HookRegistry, hook_registry
from cms_admin.registration.errors import ErrorCollection
from cms_admin.templating.output import echo as write_output
from cms_admin.templating.renderer import Template, TemplateRenderer

logger = logging.getLogger(__name__)


def submitted_scalar(submission: Mapping[str, Any], name: str) -> str:
    """
    Read one submitted value as a string.

    Multi-valued inputs (e.g. a repeated query parameter) keep their last
    value, like most form parsers do.
    """
    value = submission.get(name)
    if isinstance(value, (list, tuple)):
        value = value[-1] if value else None
    return "" if value is None else str(value)


class FieldProperties(BaseModel):
    """
    Properties common to every field.

    Values come from the variant's defaults() merged with the caller's
    configuration, so the model declares types only.
    """

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    name: str
    label: str
    description: str
    required: bool
    error_message: str


class AbstractField(ABC):
    """
    Abstract base class for registration form fields.

    Subclasses declare ``properties_model`` and implement defaults(),
    validate() and on_error(). ``field_type`` and ``template_name`` are set
    when the subclass is registered with the field factory.
    """

    properties_model: ClassVar[type[FieldProperties]] = FieldProperties
    field_type: ClassVar[str | None] = None
    template_name: ClassVar[str | None] = None

    def __init__(self, config: Mapping[str, Any] | None = None, environment: Environment | None = None):
        if not self.template_name:
            raise ConfigurationError(
                f"{type(self).__name__} has no template; register it with the field factory",
                details={"field_class": type(self).__name__},
            )
        self.template: TemplateRenderer = Template(self.template_name, environment)

        self.config = self._validated({**self.defaults(), **(config or {})})

    def _validated(self, values: Mapping[str, Any]) -> FieldProperties:
        try:
            return self.properties_model.model_validate(dict(values))
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid configuration for field '{self.field_type}'",
                details={"field_type": self.field_type, "errors": exc.errors(include_url=False)},
            ) from exc

    # ── Properties ────────────────────────────────────────────────────────────

    @property
    def properties(self) -> dict[str, Any]:
        """Snapshot of every property value, declared and extra."""
        return self.config.model_dump()

    @property
    def name(self) -> str:
        return self.config.name

    def update(self, **values: Any) -> None:
        """
        Change the value of existing properties.

        The set of keys is fixed: a new key raises UnknownPropertyError and a
        value of the wrong type raises ConfigurationError. Either way nothing
        is changed.
        """
        known = self.properties
        for key in values:
            if key not in known:
                raise UnknownPropertyError(key, self.field_type or type(self).__name__)
        self.config = self._validated({**known, **values})

    def submitted_values(self, submission: Mapping[str, Any]) -> dict[str, Any]:
        """Map a submitted form onto property values for this field."""
        if not self.name:
            return {}
        return {"value": submitted_scalar(submission, self.name)}

    def populate(self, submission: Mapping[str, Any]) -> None:
        """Copy this field's submitted value into the property bag."""
        self.update(**self.submitted_values(submission))

    # ── Rendering ─────────────────────────────────────────────────────────────

    def render(self, echo: bool = False) -> str | None:
        """
        Render the field through its template.

        Returns the markup, or writes it to the active output stream and
        returns None when ``echo`` is true.
        """
        self.template.set_properties(self.properties)
        markup = self.template.render()
        logger.debug(
            "Rendered field %s (%s)",
            self.name,
            self.field_type,
            extra={"field_type": self.field_type, "field_name": self.name},
        )
        if echo:
            write_output(markup)
            return None
        return markup

    # ── Host lifecycle ────────────────────────────────────────────────────────

    def on_render_form_event(self) -> None:
        self.render(echo=True)

    def on_validate_submission_event(
        self,
        errors: ErrorCollection,
        sanitized_user_login: str | None = None,
        user_email: str | None = None,
    ) -> ErrorCollection:
        """
        Validate the field and report a failure into ``errors``.

        The same collection is returned so the host can chain every field's
        validator over it.
        """
        if not self.validate():
            logger.debug(
                "Field %s rejected submission",
                self.name,
                extra={"field_type": self.field_type, "field_name": self.name},
            )
            self.on_error(errors)
        return errors

    def register(self, hooks: HookRegistry | None = None) -> None:
        """Bind this field to the host's render-form and registration-errors hooks."""
        hooks = hooks if hooks is not None else hook_registry
        hooks.add_action(HOOK_REGISTER_FORM, self.on_render_form_event)
        hooks.add_filter(HOOK_REGISTRATION_ERRORS, self.on_validate_submission_event, accepted_args=3)
        logger.info(
            "Registration field registered: %s (%s)",
            self.name,
            self.field_type,
            extra={"field_type": self.field_type, "field_name": self.name},
        )

    # ── Variant contract ──────────────────────────────────────────────────────

    @abstractmethod
    def defaults(self) -> dict[str, Any]:
        """Return the variant's default property values."""
        ...

    @abstractmethod
    def validate(self) -> bool:
        """Return True if the current property values are acceptable."""
        ...

    @abstractmethod
    def on_error(self, errors: ErrorCollection) -> None:
        """Append this field's validation failure to ``errors``."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

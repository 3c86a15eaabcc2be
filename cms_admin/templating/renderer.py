"""
Template Renderer

TemplateRenderer is the contract fields render through: give it a property
mapping, then ask for markup. Template is the Jinja2 implementation.

Templates are looked up in the integrator's template directory first
(Settings.template_dir), then in the templates bundled with the package, so a
site can override the markup of any field type by name.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from cms_admin.config import settings
from cms_admin.exceptions import TemplateNotFoundError

BUNDLED_TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


@runtime_checkable
class TemplateRenderer(Protocol):
    """Anything that turns a property mapping into markup."""

    def set_properties(self, properties: Mapping[str, Any]) -> None: ...

    def render(self) -> str: ...


def create_environment(template_dir: str | Path | None = None) -> Environment:
    """Build a Jinja2 environment searching ``template_dir`` before the bundled templates."""
    loaders = []
    if template_dir:
        loaders.append(FileSystemLoader(str(template_dir)))
    loaders.append(FileSystemLoader(str(BUNDLED_TEMPLATE_DIR)))

    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    """Shared environment configured from settings."""
    return create_environment(settings.template_dir)


class Template:
    """A named Jinja2 template plus the properties it will be rendered with."""

    def __init__(self, name: str, environment: Environment | None = None):
        self.name = name
        env = environment or get_environment()
        try:
            self._template = env.get_template(name)
        except TemplateNotFound as exc:
            raise TemplateNotFoundError(name) from exc
        self._properties: dict[str, Any] = {}

    def set_properties(self, properties: Mapping[str, Any]) -> None:
        self._properties = dict(properties)

    def render(self) -> str:
        return self._template.render(**self._properties)

    def __repr__(self) -> str:
        return f"Template({self.name!r})"

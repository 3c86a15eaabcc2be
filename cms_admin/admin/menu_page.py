"""
Admin Menu Page

A top-level admin sidebar menu with one or more pages.

Example usage:

    page = MenuPage({
        "title": "My Admin Page",
        "icon": "my-page-icon.png",
        "class": "my-icon",
        "style": {"padding-top": "7px"},
    })
    page.add_page({
        "title": "My Admin Submenu",
        "capability": "manage_options",
        "content": render_my_page,
    })
    page.register(hooks)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cms_admin.admin.navigation import Navigation
from cms_admin.exceptions import ConfigurationError, MissingParameterError
from cms_admin.plugins.hooks import HOOK_ADMIN_MENU
from cms_admin.plugins.registry import HookRegistry, hook_registry
from cms_admin.utils.slugify import slugify

logger = logging.getLogger(__name__)

MENU_REQUIRED_PARAMS = ("title",)
PAGE_REQUIRED_PARAMS = ("title", "capability", "content")


class SubmenuPage(BaseModel):
    """
    A page under a menu.

    Attributes:
        title:      Submenu title and page title.
        capability: Capability a user needs to see the page.
        content:    Callable producing the page content.
        slug:       Derived from the title unless given.
    """

    model_config = ConfigDict(extra="allow")

    title: str
    capability: str
    content: Callable[[], Any]
    slug: str


class MenuConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    title: str
    slug: str
    icon: str = ""
    icon_class: str = Field(default="", alias="class")
    style: dict[str, Any] = Field(default_factory=dict)
    position: int | None = None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _require(config: Mapping[str, Any], params: tuple[str, ...], entity: str) -> None:
    missing = [param for param in params if _is_blank(config.get(param))]
    if missing:
        raise MissingParameterError(missing[0], entity, missing)


def _validated(model: type[BaseModel], config: Mapping[str, Any], entity: str) -> Any:
    try:
        return model.model_validate(dict(config))
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid configuration for {entity}",
            details={"entity": entity, "errors": exc.errors(include_url=False)},
        ) from exc


def rules_to_css(rules: Mapping[str, Any]) -> str:
    """Convert ``{rule: value}`` into ``rule:value;`` CSS declarations."""
    return "".join(f"{rule}:{value};" for rule, value in rules.items())


class MenuPage:
    """
    A menu page for the admin sidebar.

    If only one page is added, the menu links straight to it and no submenu
    is created.
    """

    def __init__(self, config: Mapping[str, Any] | None = None):
        config = dict(config or {})
        pages = config.pop("pages", [])
        _require(config, MENU_REQUIRED_PARAMS, "menu")
        if _is_blank(config.get("slug")):
            config["slug"] = slugify(config["title"])
        self.config: MenuConfig = _validated(MenuConfig, config, "menu")
        self.pages: list[SubmenuPage] = []
        for page in pages:
            self.add_page(page)

    @property
    def slug(self) -> str:
        return self.config.slug

    @property
    def title(self) -> str:
        return self.config.title

    def add_page(self, config: Mapping[str, Any]) -> SubmenuPage:
        """
        Add a page to this menu.

        Required options: title, capability, content.

        Raises:
            MissingParameterError: a required option was not set.
        """
        _require(config, PAGE_REQUIRED_PARAMS, "submenu")
        config = dict(config)
        if _is_blank(config.get("slug")):
            config["slug"] = slugify(config["title"])
        page = _validated(SubmenuPage, config, "submenu")
        self.pages.append(page)
        return page

    def register(self, hooks: HookRegistry | None = None) -> None:
        """Add this menu to the admin sidebar when the host fires admin_menu."""
        hooks = hooks if hooks is not None else hook_registry
        hooks.add_action(HOOK_ADMIN_MENU, self.add_menu_page)
        logger.info("Menu page registered: %s", self.slug, extra={"slug": self.slug})

    def add_menu_page(self, navigation: Navigation) -> None:
        """
        Add this menu and all its pages to ``navigation``.

        With several pages, the first page is added twice: as the top-level
        menu target and as the first submenu entry under the menu's own slug,
        so the menu title always has a matching submenu item.
        """
        if not self.pages:
            logger.warning("Menu %s has no pages; nothing added", self.slug, extra={"slug": self.slug})
            return

        first, *rest = self.pages
        navigation.add_menu_page(
            page_title=self.title,
            menu_title=self.title,
            capability=first.capability,
            slug=self.slug,
            callback=first.content,
            icon=self.config.icon,
            position=self.config.position,
            icon_class=self.config.icon_class,
            icon_style=rules_to_css(self.config.style),
        )

        if rest:
            navigation.add_submenu_page(
                parent_slug=self.slug,
                page_title=first.title,
                menu_title=first.title,
                capability=first.capability,
                slug=self.slug,
                callback=first.content,
            )

        for page in rest:
            navigation.add_submenu_page(
                parent_slug=self.slug,
                page_title=page.title,
                menu_title=page.title,
                capability=page.capability,
                slug=page.slug,
                callback=page.content,
            )

"""
Admin Navigation

Navigation is the host-side interface menu pages register into.
AdminNavigation is an in-memory implementation that keeps the resulting menu
tree, filters it by user capability and dispatches a slug to its page
content.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from typing import Any, Protocol

from cms_admin.exceptions import AccessDeniedError, ConfigurationError, PageNotFoundError

logger = logging.getLogger(__name__)


class Navigation(Protocol):
    def add_menu_page(
        self,
        page_title: str,
        menu_title: str,
        capability: str,
        slug: str,
        callback: Callable[[], Any],
        icon: str = "",
        position: int | None = None,
        icon_class: str = "",
        icon_style: str = "",
    ) -> None: ...

    def add_submenu_page(
        self,
        parent_slug: str,
        page_title: str,
        menu_title: str,
        capability: str,
        slug: str,
        callback: Callable[[], Any],
    ) -> None: ...


@dataclass
class SubmenuEntry:
    parent_slug: str
    page_title: str
    menu_title: str
    capability: str
    slug: str
    callback: Callable[[], Any]


@dataclass
class MenuEntry:
    page_title: str
    menu_title: str
    capability: str
    slug: str
    callback: Callable[[], Any]
    icon: str = ""
    position: int | None = None
    icon_class: str = ""
    icon_style: str = ""
    submenus: list[SubmenuEntry] = field(default_factory=list)


class AdminNavigation:
    """In-memory admin sidebar."""

    def __init__(self) -> None:
        self._menus: dict[str, MenuEntry] = {}

    # ── Navigation protocol ───────────────────────────────────────────────────

    def add_menu_page(
        self,
        page_title: str,
        menu_title: str,
        capability: str,
        slug: str,
        callback: Callable[[], Any],
        icon: str = "",
        position: int | None = None,
        icon_class: str = "",
        icon_style: str = "",
    ) -> None:
        self._menus[slug] = MenuEntry(
            page_title=page_title,
            menu_title=menu_title,
            capability=capability,
            slug=slug,
            callback=callback,
            icon=icon,
            position=position,
            icon_class=icon_class,
            icon_style=icon_style,
        )
        logger.debug("Menu page added: %s", slug, extra={"slug": slug})

    def add_submenu_page(
        self,
        parent_slug: str,
        page_title: str,
        menu_title: str,
        capability: str,
        slug: str,
        callback: Callable[[], Any],
    ) -> None:
        parent = self._menus.get(parent_slug)
        if parent is None:
            raise ConfigurationError(
                f"Cannot add submenu '{slug}': no menu registered as '{parent_slug}'",
                details={"parent_slug": parent_slug, "slug": slug},
            )
        parent.submenus.append(SubmenuEntry(parent_slug, page_title, menu_title, capability, slug, callback))
        logger.debug("Submenu page added: %s -> %s", parent_slug, slug, extra={"slug": slug})

    # ── Lookup ────────────────────────────────────────────────────────────────

    def get(self, slug: str) -> MenuEntry | None:
        return self._menus.get(slug)

    def entries(self) -> list[MenuEntry]:
        """Top-level menus ordered by position; menus without one keep insertion order at the end."""
        indexed = list(enumerate(self._menus.values()))
        indexed.sort(key=lambda item: (item[1].position is None, item[1].position or 0, item[0]))
        return [entry for _, entry in indexed]

    def visible_entries(self, capabilities: Iterable[str]) -> list[MenuEntry]:
        """Menus (and submenus) the holder of ``capabilities`` may see."""
        allowed = set(capabilities)
        visible = []
        for entry in self.entries():
            if entry.capability not in allowed:
                continue
            submenus = [sub for sub in entry.submenus if sub.capability in allowed]
            visible.append(replace(entry, submenus=submenus))
        return visible

    # ── Dispatch ──────────────────────────────────────────────────────────────

    def dispatch(self, slug: str, capabilities: Iterable[str] | None = None) -> Any:
        """
        Call the content callback registered under ``slug``.

        Top-level menus are matched first, then submenus. When
        ``capabilities`` is given the page's capability must be among them.
        """
        target: MenuEntry | SubmenuEntry | None = self._menus.get(slug)
        if target is None:
            target = next(
                (sub for entry in self._menus.values() for sub in entry.submenus if sub.slug == slug),
                None,
            )
        if target is None:
            raise PageNotFoundError(slug)
        if capabilities is not None and target.capability not in set(capabilities):
            raise AccessDeniedError(slug, target.capability)
        return target.callback()

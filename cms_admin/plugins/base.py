"""
Plugin Base Classes

PluginMeta: declarative metadata for a plugin (name, version, author).
PluginBase: abstract base class bundling a plugin's registration fields,
admin menus and asset manifest.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cms_admin.admin.menu_page import MenuPage
    from cms_admin.assets.manifest import AssetManifest
    from cms_admin.plugins.registry import HookRegistry
    from cms_admin.registration.base import AbstractField

logger = logging.getLogger(__name__)


@dataclass
class PluginMeta:
    """
    Declarative metadata describing a plugin.

    Attributes:
        name:        Machine-readable slug, e.g. "terms-of-service".
        version:     Semver string, e.g. "1.0.0".
        description: Human-readable description shown in the admin UI.
        author:      Plugin author (defaults to "CMS Core Team").
    """

    name: str
    version: str
    description: str
    author: str = "CMS Core Team"


class PluginBase(ABC):
    """
    Abstract base class for admin plugins.

    Subclasses must implement the `meta` property and override whichever of
    fields(), menu_pages() and asset_manifest() they contribute to.
    """

    @property
    @abstractmethod
    def meta(self) -> PluginMeta:
        """Return the plugin's metadata."""
        ...

    def fields(self) -> list[AbstractField]:
        """Registration form fields added by this plugin."""
        return []

    def menu_pages(self) -> list[MenuPage]:
        """Admin menus added by this plugin."""
        return []

    def asset_manifest(self) -> AssetManifest | None:
        """Scripts and styles loaded by this plugin."""
        return None

    def register(self, hooks: HookRegistry) -> None:
        """
        Wire everything the plugin declares into ``hooks``.

        Called by PluginRegistry.register(); fields are built once here and
        then live as long as the registration.
        """
        fields = self.fields()
        menus = self.menu_pages()
        manifest = self.asset_manifest()

        for field in fields:
            field.register(hooks)
        for menu in menus:
            menu.register(hooks)
        if manifest is not None:
            manifest.register(hooks)

        logger.debug(
            "Plugin %s wired: %d fields, %d menus, assets=%s",
            self.meta.name,
            len(fields),
            len(menus),
            manifest is not None,
            extra={"plugin": self.meta.name},
        )

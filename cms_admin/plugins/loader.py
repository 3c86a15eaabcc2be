"""
Plugin Loader

Reads declarative plugin definitions from a JSON file
(Settings.plugins_config_file) and registers them at host startup.

File format:

    {
      "plugins": [
        {
          "name": "terms",
          "version": "1.0.0",
          "description": "Terms of service checkbox",
          "fields": [{"type": "checkbox", "name": "accept_terms", "required": true}],
          "menus": [
            {
              "title": "Terms",
              "pages": [{"title": "Settings", "capability": "manage_options",
                         "content": "my_site.admin:terms_settings"}]
            }
          ],
          "assets": {"css": {"register": [{"handle": "terms", "url": "{assets_url}css/terms.css"}]}}
        }
      ]
    }

Menu page ``content`` is given as a "module:function" import path.
"""

from __future__ import annotations

import copy
import importlib
import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cms_admin.admin.menu_page import MenuPage
from cms_admin.assets.manifest import AssetManifest
from cms_admin.config import settings
from cms_admin.exceptions import ConfigurationError, MissingParameterError
from cms_admin.plugins.base import PluginBase, PluginMeta
from cms_admin.registration import field_factory
from cms_admin.utils.logging import configure_logging

if TYPE_CHECKING:
    from cms_admin.plugins.registry import PluginRegistry
    from cms_admin.registration.base import AbstractField

logger = logging.getLogger(__name__)

# ── Default plugin config (no plugins declared) ──────────────────────────────
_DEFAULT_CONFIG: dict[str, Any] = {"plugins": []}


# ── Config I/O ────────────────────────────────────────────────────────────────


def _config_path(path: str | Path | None) -> Path:
    return Path(path) if path is not None else Path(settings.plugins_config_file)


def load_plugins_config(path: str | Path | None = None) -> dict[str, Any]:
    """
    Load plugin definitions from disk.

    Returns defaults if the file does not exist or cannot be parsed.
    """
    config_file = _config_path(path)
    if config_file.exists():
        try:
            return json.loads(config_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to read plugins config: %s", exc)
    return copy.deepcopy(_DEFAULT_CONFIG)


def save_plugins_config(config: dict[str, Any], path: str | Path | None = None) -> None:
    """Persist plugin definitions to disk."""
    config_file = _config_path(path)
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(
        json.dumps(config, indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


# ── Declarative plugins ───────────────────────────────────────────────────────


def resolve_callable(import_path: str) -> Callable[..., Any]:
    """Import ``"package.module:function"`` and return the function."""
    module_name, _, attribute = import_path.partition(":")
    if not module_name or not attribute:
        raise ConfigurationError(
            f"Invalid callable path '{import_path}', expected 'module:function'",
            details={"path": import_path},
        )
    try:
        target = getattr(importlib.import_module(module_name), attribute)
    except (ImportError, AttributeError) as exc:
        raise ConfigurationError(
            f"Cannot import '{import_path}': {exc}",
            details={"path": import_path},
        ) from exc
    if not callable(target):
        raise ConfigurationError(f"'{import_path}' is not callable", details={"path": import_path})
    return target


class DeclarativePlugin(PluginBase):
    """A plugin built from one entry of the plugins config file."""

    def __init__(self, definition: dict[str, Any]):
        for key in ("name", "version"):
            if not definition.get(key):
                raise MissingParameterError(key, "plugin")
        self.definition = copy.deepcopy(definition)
        self._meta = PluginMeta(
            name=definition["name"],
            version=definition["version"],
            description=definition.get("description", ""),
            author=definition.get("author", "CMS Core Team"),
        )

    @property
    def meta(self) -> PluginMeta:
        return self._meta

    def fields(self) -> list[AbstractField]:
        built = []
        for field_config in self.definition.get("fields", []):
            field_config = dict(field_config)
            field_type = field_config.pop("type", None)
            if not field_type:
                raise MissingParameterError("type", f"field in plugin '{self.meta.name}'")
            built.append(field_factory.create(field_type, field_config))
        return built

    def menu_pages(self) -> list[MenuPage]:
        menus = []
        for menu_config in self.definition.get("menus", []):
            menu_config = dict(menu_config)
            pages = []
            for page in menu_config.pop("pages", []):
                page = dict(page)
                if isinstance(page.get("content"), str):
                    page["content"] = resolve_callable(page["content"])
                pages.append(page)
            menus.append(MenuPage({**menu_config, "pages": pages}))
        return menus

    def asset_manifest(self) -> AssetManifest | None:
        assets = self.definition.get("assets")
        if not assets:
            return None
        return AssetManifest.from_mapping(assets)


# ── Startup initialisation ────────────────────────────────────────────────────


def initialize_plugins(registry: PluginRegistry, path: str | Path | None = None) -> list[PluginBase]:
    """
    Build and register every plugin declared in the plugins config file.

    Called once at host startup, so it also sets up package logging from
    settings. Configuration errors propagate to the caller.
    """
    configure_logging()
    config = load_plugins_config(path)
    plugins: list[PluginBase] = []

    for definition in config.get("plugins", []):
        plugin = DeclarativePlugin(definition)
        registry.register(plugin)
        plugins.append(plugin)

    logger.info("Plugin initialisation complete: %d plugins loaded", len(plugins))
    return plugins

"""
Asset Manifest

Declarative lists of scripts and stylesheets for the admin UI. Each group has
handles the host already knows ("enqueue") and assets that must be
registered first ("register"). An asset's ``facing`` tags decide which page
contexts load it:

    admin           every admin page
    admin-<page>    one admin page, e.g. "admin-post.php"
    public          the front end
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Protocol

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cms_admin.config import settings
from cms_admin.exceptions import ConfigurationError
from cms_admin.plugins.hooks import HOOK_ADMIN_ENQUEUE_SCRIPTS, HOOK_ENQUEUE_SCRIPTS
from cms_admin.plugins.registry import HookRegistry, hook_registry

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_FILE = Path(__file__).parent / "manifest.yaml"
ASSETS_URL_PLACEHOLDER = "{assets_url}"

ADMIN = "admin"
PUBLIC = "public"


def admin_context(page: str | None = None) -> str:
    """Page context for an admin page (``"admin"`` when the page is unknown)."""
    return f"{ADMIN}-{page}" if page else ADMIN


def facing_matches(facing: list[str], context: str) -> bool:
    if context == PUBLIC:
        return PUBLIC in facing
    return ADMIN in facing or context in facing


# ── Models ────────────────────────────────────────────────────────────────────


class Asset(BaseModel):
    handle: str
    url: str
    dependencies: list[str] = Field(default_factory=list)
    version: str | None = None
    facing: list[str] = Field(default_factory=lambda: [ADMIN])


class ScriptAsset(Asset):
    in_footer: bool = False


class StyleAsset(Asset):
    media: str = "all"


class ScriptGroup(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    enqueue: list[str] = Field(default_factory=list)
    to_register: list[ScriptAsset] = Field(default_factory=list, alias="register")


class StyleGroup(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    enqueue: list[str] = Field(default_factory=list)
    to_register: list[StyleAsset] = Field(default_factory=list, alias="register")


# ── Host asset queue ──────────────────────────────────────────────────────────


class AssetQueue(Protocol):
    def register_script(
        self,
        handle: str,
        url: str,
        dependencies: list[str],
        version: str | None = None,
        in_footer: bool = False,
    ) -> None: ...

    def enqueue_script(self, handle: str) -> None: ...

    def register_style(
        self,
        handle: str,
        url: str,
        dependencies: list[str],
        version: str | None = None,
        media: str = "all",
    ) -> None: ...

    def enqueue_style(self, handle: str) -> None: ...


class InMemoryAssetQueue:
    """Records registrations and enqueues. Enqueueing the same handle twice is a no-op."""

    def __init__(self) -> None:
        self.scripts: dict[str, dict[str, Any]] = {}
        self.styles: dict[str, dict[str, Any]] = {}
        self.enqueued_scripts: list[str] = []
        self.enqueued_styles: list[str] = []

    def register_script(self, handle, url, dependencies, version=None, in_footer=False) -> None:
        self.scripts[handle] = {
            "url": url,
            "dependencies": list(dependencies),
            "version": version,
            "in_footer": in_footer,
        }

    def enqueue_script(self, handle: str) -> None:
        if handle not in self.enqueued_scripts:
            self.enqueued_scripts.append(handle)

    def register_style(self, handle, url, dependencies, version=None, media="all") -> None:
        self.styles[handle] = {
            "url": url,
            "dependencies": list(dependencies),
            "version": version,
            "media": media,
        }

    def enqueue_style(self, handle: str) -> None:
        if handle not in self.enqueued_styles:
            self.enqueued_styles.append(handle)


# ── Manifest ──────────────────────────────────────────────────────────────────


class AssetManifest(BaseModel):
    js: ScriptGroup = Field(default_factory=ScriptGroup)
    css: StyleGroup = Field(default_factory=StyleGroup)

    @classmethod
    def from_yaml(cls, path: str | Path, assets_url: str | None = None) -> AssetManifest:
        """Load a manifest file, replacing ``{assets_url}`` in asset URLs."""
        path = Path(path)
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(
                f"Cannot read asset manifest {path}: {exc}",
                details={"path": str(path)},
            ) from exc
        return cls.from_mapping(raw, assets_url=assets_url)

    @classmethod
    def from_mapping(cls, raw: dict[str, Any], assets_url: str | None = None) -> AssetManifest:
        raw = copy.deepcopy(raw)
        url = assets_url if assets_url is not None else settings.assets_url
        for group in ("js", "css"):
            for entry in (raw.get(group) or {}).get("register") or []:
                if isinstance(entry, dict) and isinstance(entry.get("url"), str):
                    entry["url"] = entry["url"].replace(ASSETS_URL_PLACEHOLDER, url)
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise ConfigurationError(
                "Invalid asset manifest",
                details={"errors": exc.errors(include_url=False)},
            ) from exc

    @classmethod
    def default(cls, assets_url: str | None = None) -> AssetManifest:
        """The admin UI's bundled manifest."""
        return cls.from_yaml(DEFAULT_MANIFEST_FILE, assets_url=assets_url)

    # ── Selection ─────────────────────────────────────────────────────────────

    def scripts_for(self, context: str) -> list[ScriptAsset]:
        return [asset for asset in self.js.to_register if facing_matches(asset.facing, context)]

    def styles_for(self, context: str) -> list[StyleAsset]:
        return [asset for asset in self.css.to_register if facing_matches(asset.facing, context)]

    # ── Enqueueing ────────────────────────────────────────────────────────────

    def enqueue(self, queue: AssetQueue, context: str) -> None:
        """
        Register and enqueue every asset facing ``context``.

        Handles listed under "enqueue" are pre-registered by the host and are
        loaded on every admin page.
        """
        is_admin = context != PUBLIC

        if is_admin:
            for handle in self.js.enqueue:
                queue.enqueue_script(handle)
        for script in self.scripts_for(context):
            queue.register_script(
                script.handle,
                script.url,
                script.dependencies,
                version=script.version,
                in_footer=script.in_footer,
            )
            queue.enqueue_script(script.handle)

        if is_admin:
            for handle in self.css.enqueue:
                queue.enqueue_style(handle)
        for style in self.styles_for(context):
            queue.register_style(
                style.handle,
                style.url,
                style.dependencies,
                version=style.version,
                media=style.media,
            )
            queue.enqueue_style(style.handle)

        logger.debug("Assets enqueued for %s", context)

    def enqueue_admin(self, queue: AssetQueue, page: str | None = None) -> None:
        self.enqueue(queue, admin_context(page))

    def enqueue_public(self, queue: AssetQueue) -> None:
        self.enqueue(queue, PUBLIC)

    def register(self, hooks: HookRegistry | None = None) -> None:
        """Enqueue this manifest's assets when the host fires its enqueue hooks."""
        hooks = hooks if hooks is not None else hook_registry
        hooks.add_action(HOOK_ADMIN_ENQUEUE_SCRIPTS, self.enqueue_admin)
        hooks.add_action(HOOK_ENQUEUE_SCRIPTS, self.enqueue_public)
        logger.info(
            "Asset manifest registered: %d scripts, %d styles",
            len(self.js.to_register),
            len(self.css.to_register),
        )

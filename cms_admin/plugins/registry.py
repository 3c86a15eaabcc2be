"""
Hook and Plugin Registries

HookRegistry: in-process store of action and filter callbacks keyed by hook
name. Actions are fire-and-forget; filters thread a value through every
callback and return the result.

PluginRegistry: registers plugins by name and wires each one into a
HookRegistry.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from itertools import count
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cms_admin.plugins.base import PluginBase

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10


@dataclass(frozen=True)
class _Callback:
    priority: int
    order: int
    callback: Callable[..., Any]
    accepted_args: int


class HookRegistry:
    """
    Action/filter dispatcher.

    Callbacks run in ascending priority; callbacks with the same priority run
    in the order they were added.
    """

    def __init__(self) -> None:
        self._hooks: dict[str, list[_Callback]] = defaultdict(list)
        self._counter = count()

    # ── Registration ──────────────────────────────────────────────────────────

    def add_action(self, hook_name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        """Subscribe ``callback`` to an action; it receives every argument passed to do_action()."""
        self._add(hook_name, callback, priority, accepted_args=-1)

    def add_filter(
        self,
        hook_name: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = 1,
    ) -> None:
        """
        Subscribe ``callback`` to a filter.

        The callback is called with the current value followed by the first
        ``accepted_args - 1`` extra arguments given to apply_filters().
        """
        if accepted_args < 1:
            raise ValueError("accepted_args must be at least 1")
        self._add(hook_name, callback, priority, accepted_args=accepted_args)

    def _add(self, hook_name: str, callback: Callable[..., Any], priority: int, accepted_args: int) -> None:
        entries = self._hooks[hook_name]
        entries.append(_Callback(priority, next(self._counter), callback, accepted_args))
        entries.sort(key=lambda entry: (entry.priority, entry.order))
        logger.debug("Hook callback added: %s (priority=%d)", hook_name, priority)

    def remove_hook(self, hook_name: str, callback: Callable[..., Any]) -> bool:
        """Remove every subscription of ``callback`` to ``hook_name``. Returns True if any was removed."""
        entries = self._hooks.get(hook_name, [])
        kept = [entry for entry in entries if entry.callback != callback]
        removed = len(kept) != len(entries)
        if removed:
            self._hooks[hook_name] = kept
        return removed

    # ── Lookup ────────────────────────────────────────────────────────────────

    def has_hook(self, hook_name: str, callback: Callable[..., Any] | None = None) -> bool:
        entries = self._hooks.get(hook_name, [])
        if callback is None:
            return bool(entries)
        return any(entry.callback == callback for entry in entries)

    def callbacks(self, hook_name: str) -> list[Callable[..., Any]]:
        """Return the callbacks for a hook in dispatch order."""
        return [entry.callback for entry in self._hooks.get(hook_name, [])]

    # ── Dispatch ──────────────────────────────────────────────────────────────

    def do_action(self, hook_name: str, *args: Any) -> None:
        """
        Fire an action to all subscribers.

        Exceptions are caught and logged so that one misbehaving callback
        never prevents the others from running.
        """
        for entry in list(self._hooks.get(hook_name, [])):
            try:
                entry.callback(*args)
            except Exception as exc:
                logger.warning(
                    "Action %s callback %s raised: %s",
                    hook_name,
                    getattr(entry.callback, "__qualname__", repr(entry.callback)),
                    exc,
                    extra={"hook": hook_name},
                )

    def apply_filters(self, hook_name: str, value: Any, *args: Any) -> Any:
        """
        Pass ``value`` through every filter subscribed to ``hook_name``.

        Each callback's return value becomes the input of the next one.
        Exceptions propagate to the caller.
        """
        for entry in list(self._hooks.get(hook_name, [])):
            value = entry.callback(value, *args[: entry.accepted_args - 1])
        return value


class PluginRegistry:
    """
    In-process registry for admin plugins.

    Registering a plugin wires its fields, menus and assets into the hook
    registry this PluginRegistry was built with.
    """

    def __init__(self, hooks: HookRegistry | None = None) -> None:
        self.hooks = hooks if hooks is not None else hook_registry
        self._plugins: dict[str, PluginBase] = {}

    # ── Registration ──────────────────────────────────────────────────────────

    def register(self, plugin: PluginBase) -> None:
        """Register a plugin and wire it into the hook registry."""
        plugin.register(self.hooks)
        self._plugins[plugin.meta.name] = plugin
        logger.info(
            "Plugin registered: %s v%s",
            plugin.meta.name,
            plugin.meta.version,
            extra={"plugin": plugin.meta.name},
        )

    # ── Lookup ────────────────────────────────────────────────────────────────

    def get(self, name: str) -> PluginBase | None:
        """Return the plugin with the given name, or None if not registered."""
        return self._plugins.get(name)

    def all_plugins(self) -> list[PluginBase]:
        """Return all registered plugins in registration order."""
        return list(self._plugins.values())

    def is_registered(self, name: str) -> bool:
        """Return True if a plugin with the given name has been registered."""
        return name in self._plugins


# ── Global singletons ─────────────────────────────────────────────────────────
# The host fires its lifecycle events through hook_registry.
hook_registry = HookRegistry()
plugin_registry = PluginRegistry(hook_registry)

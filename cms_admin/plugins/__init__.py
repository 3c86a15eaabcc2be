"""
CMS Admin Plugin System

Public API for the plugin system:
    PluginMeta      - plugin metadata dataclass
    PluginBase      - abstract base class for all plugins
    HookRegistry    - action/filter dispatcher for host lifecycle events
    PluginRegistry  - plugin registry wiring plugins into a HookRegistry
    hook_registry   - global singleton hook registry
    plugin_registry - global singleton plugin registry
"""

from .base import PluginBase, PluginMeta
from .registry import HookRegistry, PluginRegistry, hook_registry, plugin_registry

__all__ = ["HookRegistry", "PluginBase", "PluginMeta", "PluginRegistry", "hook_registry", "plugin_registry"]

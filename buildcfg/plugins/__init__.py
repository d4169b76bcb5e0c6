"""Plugin registry, hook driver and output flattening."""

# Import built-ins to trigger registration
from buildcfg.plugins.builtin import define_env, input_glob  # noqa: F401

# Public API
from buildcfg.plugins.base import Plugin
from buildcfg.plugins.driver import PluginDriver
from buildcfg.plugins.exceptions import (
    ElementResolutionFailedError,
    PluginError,
    PluginNotFoundError,
    UnresolvableStructureError,
)
from buildcfg.plugins.flatten import async_flatten
from buildcfg.plugins.registry import get_plugin, register_plugin

__all__ = [
    "Plugin",
    "PluginDriver",
    "PluginError",
    "PluginNotFoundError",
    "ElementResolutionFailedError",
    "UnresolvableStructureError",
    "async_flatten",
    "register_plugin",
    "get_plugin",
]

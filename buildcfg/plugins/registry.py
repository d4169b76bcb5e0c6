"""Plugin registry with decorator pattern."""

from buildcfg.plugins.exceptions import PluginNotFoundError

PLUGINS = {}


def register_plugin(name: str):
    """
    Decorator to register a plugin class.

    Usage:
        @register_plugin("define-env")
        class DefineEnvPlugin(Plugin):
            ...
    """

    def decorator(cls):
        cls.name = name
        PLUGINS[name] = cls
        return cls

    return decorator


def get_plugin(name: str):
    """
    Get plugin class by name.

    Args:
        name: Plugin identifier as written in the config's `plugins` list

    Returns:
        Plugin class (not instance)

    Raises:
        PluginNotFoundError: If plugin not registered
    """
    if name not in PLUGINS:
        available = ", ".join(sorted(PLUGINS)) or "none"
        raise PluginNotFoundError(f"Unknown plugin: '{name}'. Available: {available}")
    return PLUGINS[name]

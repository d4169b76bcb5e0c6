"""Calls hooks on every configured plugin and merges or flattens the results."""

import logging
from typing import Any, List

from buildcfg.config.merger import deep_merge
from buildcfg.plugins.base import Plugin
from buildcfg.plugins.flatten import async_flatten, discard_pending
from buildcfg.utils.decorators import log_time

logger = logging.getLogger(__name__)


class PluginDriver:
    """
    Runs plugin hooks in plugin order.

    Usage:
        driver = PluginDriver(loader.load_plugins(config))
        config = driver.apply_config(config)
        inputs = await driver.call("resolve_inputs", config)
    """

    def __init__(self, plugins: List[Plugin]):
        self.plugins = list(plugins)

    def apply_config(self, config: dict) -> dict:
        """Merge each plugin's config fragment on top of config, left to right."""
        for plugin in self.plugins:
            fragment = plugin.config(config)
            if not fragment:
                continue
            config = deep_merge(config, fragment)
            logger.info(f"Merged config from plugin '{plugin.name}'")
        return config

    def plugins_with_hook(self, hook: str) -> List[Plugin]:
        """Plugins that define the hook, in order."""
        return [p for p in self.plugins if callable(getattr(p, hook, None))]

    @log_time
    async def call(self, hook: str, *args: Any, **kwargs: Any) -> list:
        """
        Call a hook on every plugin that defines it.

        Async hooks all run concurrently. Return values may be plain
        values, awaitables or nested lists of either; the result is one
        flat list in plugin order, with None results dropped.

        Raises:
            ElementResolutionFailedError: If any hook (or anything it returned) failed
        """
        plugins = self.plugins_with_hook(hook)
        logger.debug(f"Calling '{hook}' on {len(plugins)} plugin(s)")

        returned = []
        try:
            for plugin in plugins:
                returned.append(getattr(plugin, hook)(*args, **kwargs))
        except Exception:
            # Hooks already called never get awaited
            discard_pending(returned)
            raise

        results = await async_flatten(returned)

        return [r for r in results if r is not None]

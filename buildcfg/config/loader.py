"""Configuration loader - loads build config files and folds in plugin config."""

import logging
from pathlib import Path
from typing import List, Optional

import yaml

from buildcfg.config.exceptions import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)
from buildcfg.config.interpolate import EnvInterpolator
from buildcfg.config.merger import deep_merge
from buildcfg.plugins import Plugin, PluginDriver, get_plugin
from buildcfg.utils.decorators import log_time
from buildcfg.utils.share import is_object, to_array

logger = logging.getLogger(__name__)

BASE_CONFIG = "build.yaml"
MODES_DIR = "modes"


class ConfigLoader:
    """
    Loads and merges build configuration from multiple sources.

    Load order (later wins):
        1. build.yaml (user config)
        2. modes/{mode}.yaml (optional mode overrides, e.g. production)
        3. Resolve ${env:NAME} patterns
        4. config() fragment of each plugin in the `plugins` list, in order

    Usage:
        loader = ConfigLoader(config_dir="./project")
        config = loader.load(mode="production")
    """

    def __init__(self, config_dir: Optional[Path] = None, env_prefix: str = ""):
        self.config_dir = Path(config_dir) if config_dir else Path.cwd()
        self.interpolator = EnvInterpolator(prefix=env_prefix)

    def _load_yaml(self, path: Path) -> dict:
        """Load and parse a YAML file. The top level must be a mapping."""
        if not path.exists():
            raise ConfigNotFoundError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                content = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Invalid YAML in {path}: {e}")

        if not is_object(content):
            raise ConfigValidationError(
                f"Top level of {path} must be a mapping, got {type(content).__name__}"
            )

        logger.debug(f"Loaded config: {path}")
        return content

    def _load_if_exists(self, path: Path) -> dict:
        """Load YAML file if it exists, otherwise return empty dict."""
        if path.exists():
            return self._load_yaml(path)
        return {}

    @log_time
    def load(self, mode: Optional[str] = None) -> dict:
        """
        Load the fully resolved build configuration.

        Args:
            mode: Optional mode (e.g., "development", "production")

        Returns:
            Merged and resolved configuration dict
        """
        # 1. Load user config
        base_path = self.config_dir / BASE_CONFIG
        config = self._load_yaml(base_path)
        logger.info(f"Loaded build config: {base_path}")

        # 2. Merge mode overrides (if specified)
        if mode:
            mode_path = self.config_dir / MODES_DIR / f"{mode}.yaml"
            mode_config = self._load_if_exists(mode_path)
            if mode_config:
                config = deep_merge(config, mode_config)
                logger.info(f"Merged mode config: {mode_path}")

        # 3. Resolve env references
        config = self.interpolator.resolve_config(config)

        # 4. Merge plugin fragments
        driver = PluginDriver(self.load_plugins(config))
        config = driver.apply_config(config)

        return config

    def load_plugins(self, config: dict) -> List[Plugin]:
        """
        Instantiate the plugins listed under `plugins`.

        Entries are either a plugin name or a mapping:
            plugins:
              - define-env
              - name: input-glob
                options:
                  patterns: ["src/**/*.ts"]

        Raises:
            PluginNotFoundError: If an entry names an unregistered plugin
            ConfigValidationError: If an entry is malformed
        """
        plugins = []
        for entry in to_array(config.get("plugins")):
            if isinstance(entry, str):
                name, options = entry, {}
            elif is_object(entry) and isinstance(entry.get("name"), str):
                name, options = entry["name"], entry.get("options") or {}
            else:
                raise ConfigValidationError(f"Invalid plugin entry: {entry!r}")

            if not is_object(options):
                raise ConfigValidationError(f"Options for plugin '{name}' must be a mapping")

            plugin_cls = get_plugin(name)
            try:
                plugins.append(plugin_cls(**options))
            except TypeError as e:
                raise ConfigValidationError(f"Plugin '{name}' options error: {e}")

        return plugins

    def health_check(self) -> bool:
        """Check if config directory exists."""
        return self.config_dir.exists()

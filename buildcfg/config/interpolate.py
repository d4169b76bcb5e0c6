"""Resolves ${env:NAME} patterns in config values."""

import logging
import os
import re
from typing import Any, Mapping, Optional

from buildcfg.config.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

ENV_PATTERN = re.compile(r"\$\{env:([^}]+)\}")


class EnvInterpolator:
    """
    Replaces ${env:NAME} with the value of environment variable NAME.

    Usage:
        interpolator = EnvInterpolator(prefix="APP_")
        config = interpolator.resolve_config({"output": {"path": "${env:OUT_DIR}"}})
    """

    def __init__(self, prefix: str = "", environ: Optional[Mapping[str, str]] = None):
        """
        Args:
            prefix: Optional prefix for env vars (e.g., 'APP_' -> APP_OUT_DIR)
            environ: Mapping to read from; defaults to os.environ at lookup time
        """
        self.prefix = prefix
        self.environ = environ

    def lookup(self, name: str) -> str:
        env_key = f"{self.prefix}{name}"
        environ = os.environ if self.environ is None else self.environ
        value = environ.get(env_key)

        if value is None:
            raise ConfigValidationError(
                f"Config references ${{env:{name}}} but {env_key} is not set"
            )

        logger.debug(f"Resolved '{name}' from env var '{env_key}'")
        return value

    def resolve_value(self, value: Any) -> Any:
        """Resolve ${env:NAME} patterns in a string."""
        if not isinstance(value, str):
            return value

        return ENV_PATTERN.sub(lambda match: self.lookup(match.group(1)), value)

    def resolve_config(self, config: Any) -> Any:
        """Recursively resolve all env references in a config structure."""
        if isinstance(config, dict):
            return {k: self.resolve_config(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self.resolve_config(item) for item in config]
        elif isinstance(config, str):
            return self.resolve_value(config)
        else:
            return config

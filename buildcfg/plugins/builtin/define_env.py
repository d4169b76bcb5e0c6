"""Exposes prefixed environment variables to the bundle via compilation.define."""

import logging
import os
from typing import Optional

from buildcfg.plugins.base import Plugin
from buildcfg.plugins.registry import register_plugin

logger = logging.getLogger(__name__)


@register_plugin("define-env")
class DefineEnvPlugin(Plugin):
    """
    Copies environment variables into `compilation.define`.

    Only variables starting with the prefix are exposed, so secrets in
    the environment don't leak into client code.

    Examples:
        BUILD_API_URL=https://api -> define["process.env.BUILD_API_URL"] = "https://api"
    """

    def __init__(self, prefix: str = "BUILD_", **options):
        """
        Args:
            prefix: Only env vars starting with this are exposed
        """
        super().__init__(prefix=prefix, **options)
        self.prefix = prefix

    def config(self, config: dict) -> Optional[dict]:
        define = {
            f"process.env.{key}": value
            for key, value in sorted(os.environ.items())
            if key.startswith(self.prefix)
        }
        if not define:
            return None

        logger.debug(f"Defining {len(define)} env var(s) with prefix '{self.prefix}'")
        return {"compilation": {"define": define}}

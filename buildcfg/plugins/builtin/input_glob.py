"""Resolves build inputs from glob patterns."""

import asyncio
import logging
import stat
from pathlib import Path
from typing import List

from buildcfg.plugins.base import Plugin
from buildcfg.plugins.registry import register_plugin
from buildcfg.utils.share import get_file_system_stats, normalize_path, to_array

logger = logging.getLogger(__name__)


@register_plugin("input-glob")
class InputGlobPlugin(Plugin):
    """
    Provides the `resolve_inputs` hook.

    Options:
        patterns: Glob pattern or list of patterns, relative to root
        root: Directory to search (defaults to compilation.root, then ".")

    Each pattern is expanded concurrently; the hook returns one list per
    pattern, which the driver flattens.
    """

    async def resolve_inputs(self, config: dict) -> List[list]:
        compilation = config.get("compilation") or {}
        root = self.options.get("root") or compilation.get("root") or "."
        patterns = to_array(self.options.get("patterns"))

        return [self._expand(Path(root), pattern) for pattern in patterns]

    async def _expand(self, root: Path, pattern: str) -> List[str]:
        candidates = await asyncio.to_thread(lambda: sorted(root.glob(pattern)))

        files = []
        for candidate in candidates:
            stats = get_file_system_stats(str(candidate))
            if stats is not None and stat.S_ISREG(stats.st_mode):
                files.append(normalize_path(str(candidate)))

        logger.debug(f"Pattern '{pattern}' matched {len(files)} file(s) under {root}")
        return files

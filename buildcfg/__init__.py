"""Configuration merge and plugin-output flattening core for the build tool."""

from buildcfg.config.merger import deep_merge, merge_all
from buildcfg.plugins.flatten import async_flatten

__version__ = "1.0.0"

__all__ = ["deep_merge", "merge_all", "async_flatten", "__version__"]

"""Plugin-related exceptions."""

from typing import Optional


class PluginError(Exception):
    """Base exception for plugin errors."""

    pass


class PluginNotFoundError(PluginError):
    """Raised when a config names a plugin that isn't registered."""

    pass


class ElementResolutionFailedError(PluginError):
    """
    Raised when a pending element fails while flattening plugin output.

    The original failure is available as `cause` (and as __cause__).
    """

    def __init__(self, message: str, cause: BaseException, index: Optional[int] = None):
        super().__init__(message)
        self.cause = cause
        self.index = index


class UnresolvableStructureError(PluginError):
    """Raised when plugin output can't reach a flat, resolved form."""

    pass

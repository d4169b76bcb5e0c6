"""Base class for build plugins."""

from typing import Optional


class Plugin:
    """
    Base class all plugins derive from.

    A plugin contributes a partial config through `config()` and may
    define any number of other hooks as plain or async methods. Hooks
    may return a value, a list, a nested list, or awaitables of those;
    the driver flattens everything into one list.
    """

    name = "anonymous"

    def __init__(self, **options):
        self.options = options

    def config(self, config: dict) -> Optional[dict]:
        """
        Return a partial config to merge on top of the current one.

        Args:
            config: Config resolved so far (treat as read-only)

        Returns:
            Partial config dict, or None to contribute nothing
        """
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, options={self.options!r})"

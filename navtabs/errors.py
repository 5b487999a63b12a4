from __future__ import annotations


class NavTabsError(Exception):
    """Base error for navtabs."""


class InvalidConfigurationError(NavTabsError, ValueError):
    """A menu, tab, selector or setting was assembled with unusable values."""

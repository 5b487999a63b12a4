from __future__ import annotations

from .builder import MenuBuilder
from .config import MenuSettings
from .errors import InvalidConfigurationError, NavTabsError
from .flask_ext import NavTabs
from .menu_template import DEFAULT_MENU_TEMPLATE, render_menu, validate_menu_template
from .page_selector import (
    CustomCondition,
    OptionsCondition,
    PageSelector,
    RegexCondition,
)
from .renderers import (
    LinkRenderer,
    ScriptLinkRenderer,
    StandardLinkRenderer,
    TabAwareLinkRenderer,
    renderer_for,
)
from .tab import Tab
from .values import Computed, RouteIdentity, Static
from .view_context import FlaskViewContext, StaticViewContext, ViewContext

__version__ = "0.1.0"

__all__ = [
    "Computed",
    "CustomCondition",
    "DEFAULT_MENU_TEMPLATE",
    "FlaskViewContext",
    "InvalidConfigurationError",
    "LinkRenderer",
    "MenuBuilder",
    "MenuSettings",
    "NavTabs",
    "NavTabsError",
    "OptionsCondition",
    "PageSelector",
    "RegexCondition",
    "RouteIdentity",
    "ScriptLinkRenderer",
    "StandardLinkRenderer",
    "Static",
    "StaticViewContext",
    "Tab",
    "TabAwareLinkRenderer",
    "ViewContext",
    "render_menu",
    "renderer_for",
    "validate_menu_template",
]

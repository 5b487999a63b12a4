from __future__ import annotations

import logging
from typing import Any

from flask import Flask
from markupsafe import Markup

from .builder import MenuBuilder
from .config import MenuSettings
from .view_context import FlaskViewContext


logger = logging.getLogger(__name__)

EXTENSION_KEY = "navtabs"


class NavTabs:
    """Flask extension exposing tab menus to views and templates.

    Templates get ``navtabs_menu()``, which returns an empty ``MenuBuilder``
    bound to the current request, and ``render_menu(menu)``.
    """

    def __init__(self, app: Flask | None = None, settings: MenuSettings | None = None) -> None:
        self.settings = settings
        self.view_context = FlaskViewContext()
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        if self.settings is None:
            self.settings = MenuSettings.from_env()
        self.settings.validate()
        logging.getLogger("navtabs").setLevel(
            getattr(logging, self.settings.log_level.upper(), logging.INFO)
        )

        app.extensions[EXTENSION_KEY] = self
        app.context_processor(self._template_context)
        app.add_template_global(self._render_menu, "render_menu")
        logger.info(
            "navtabs ready (renderer=%s, tab_class=%r)",
            self.settings.renderer,
            self.settings.tab_class,
        )

    def menu(self) -> MenuBuilder:
        if self.settings is None:
            raise RuntimeError("NavTabs.init_app() must be called before building menus.")
        return MenuBuilder.from_settings(self.view_context, self.settings)

    def _template_context(self) -> dict[str, Any]:
        return {"navtabs_menu": self.menu}

    def _render_menu(self, builder: MenuBuilder, template_text: str | None = None) -> Markup:
        return builder.render(template_text)

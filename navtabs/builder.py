from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any, Callable

from markupsafe import Markup

from .menu_template import render_menu
from .page_selector import PageSelector, PatternLike
from .renderers import StandardLinkRenderer, renderer_for
from .tab import Tab
from .values import Computed

if TYPE_CHECKING:
    from .config import MenuSettings
    from .renderers import LinkRenderer
    from .view_context import ViewContext


logger = logging.getLogger(__name__)


class MenuBuilder:
    """Declares a tabbed menu once and hands its tabs to the view.

    The builder does not render list markup around the tabs itself (see
    ``render`` for the template-driven shortcut); each tab renders its own
    link with the selection state and attributes it was given.

    ``default_html_attrs`` and ``default_selected_attrs`` are copied into
    every tab when it is added, so changing them later does not affect tabs
    that already exist.
    """

    def __init__(
        self,
        view_context: ViewContext,
        default_selected_attrs: Mapping[str, Any] | None = None,
        default_html_attrs: Mapping[str, Any] | None = None,
        renderer: LinkRenderer | None = None,
        *,
        menu_class: str = "tabs",
    ) -> None:
        self.view_context = view_context
        self.default_selected_attrs: dict[str, Any] = dict(default_selected_attrs or {})
        self.default_html_attrs: dict[str, Any] = dict(default_html_attrs or {})
        self.renderer = renderer if renderer is not None else StandardLinkRenderer(view_context)
        self.menu_class = menu_class
        self._tabs: list[Tab] = []

    @classmethod
    def from_settings(cls, view_context: ViewContext, settings: MenuSettings) -> "MenuBuilder":
        settings.validate()
        return cls(
            view_context,
            settings.default_selected_attrs(),
            settings.default_html_attrs(),
            renderer_for(settings.renderer, view_context),
            menu_class=settings.menu_css_class,
        )

    def add_tab(self, name: Any, target: Any, page_selector: PageSelector | None = None) -> Tab:
        tab = Tab(self.view_context, self.renderer, name, target, page_selector)
        tab.html_attrs = dict(self.default_html_attrs)
        tab.selected_attrs = dict(self.default_selected_attrs)
        self._tabs.append(tab)
        logger.debug("Added tab %r -> %r", name, target)
        return tab

    def add_tab_selected_on_options(self, name: Any, target: Any, *descriptors: Any) -> Tab:
        """Add a tab selected on any of ``descriptors``, or on ``target`` when none are given.

        A computed ``target`` used as the descriptor is resolved through the
        tab, with the same ``(tab, controller_path, action)`` arguments it
        gets when the link is rendered.
        """
        if descriptors:
            return self.add_tab(
                name, target, PageSelector.selected_on_options(self.view_context, *descriptors)
            )
        if not isinstance(target, Computed):
            return self.add_tab(
                name, target, PageSelector.selected_on_options(self.view_context, target)
            )
        tab = self.add_tab(name, target)
        tab.selected_on_options(Computed(tab.link_target))
        return tab

    def add_tab_selected_on_match(
        self,
        name: Any,
        target: Any,
        controller_regex: PatternLike | None,
        action_regex: PatternLike | None = None,
    ) -> Tab:
        return self.add_tab(
            name,
            target,
            PageSelector.selected_on_match(self.view_context, controller_regex, action_regex),
        )

    def add_tab_selected_on(
        self,
        name: Any,
        target: Any,
        predicate: Callable[..., Any],
        *,
        tab_scoped: bool = False,
        takes_route: bool = True,
    ) -> Tab:
        return self.add_tab(
            name,
            target,
            PageSelector.selected_on(
                self.view_context, predicate, tab_scoped=tab_scoped, takes_route=takes_route
            ),
        )

    add_item = add_tab
    add_item_selected_on_options = add_tab_selected_on_options
    add_item_selected_on_match = add_tab_selected_on_match
    add_item_selected_on = add_tab_selected_on

    add_option = add_tab
    add_option_selected_on_options = add_tab_selected_on_options
    add_option_selected_on_match = add_tab_selected_on_match
    add_option_selected_on = add_tab_selected_on

    def each_visible(self, visitor: Callable[[Tab], Any]) -> None:
        for tab in self._tabs:
            if tab.is_visible():
                visitor(tab)

    def each_all(self, visitor: Callable[[Tab], Any]) -> None:
        for tab in self._tabs:
            visitor(tab)

    def visible_tabs(self) -> list[Tab]:
        return [tab for tab in self._tabs if tab.is_visible()]

    def all_tabs(self) -> list[Tab]:
        return list(self._tabs)

    def __iter__(self) -> Iterator[Tab]:
        for tab in self._tabs:
            if tab.is_visible():
                yield tab

    def render(self, template_text: str | None = None) -> Markup:
        return render_menu(self, template_text, menu_class=self.menu_class)

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable

from markupsafe import Markup

from .page_selector import PageSelector, PatternLike
from .renderers import TabAwareLinkRenderer
from .values import Computed, RouteIdentity, resolve

if TYPE_CHECKING:
    from .renderers import LinkRenderer
    from .view_context import ViewContext


class Tab:
    """One menu entry.

    ``name`` and ``target`` may be plain values or ``Computed`` values, which
    are called with ``(tab, controller_path, action)`` at render time.
    Selected and visible state are recomputed on every call.
    """

    def __init__(
        self,
        view_context: ViewContext,
        renderer: LinkRenderer,
        name: Any,
        target: Any,
        page_selector: PageSelector | None = None,
    ) -> None:
        self.view_context = view_context
        self.renderer = renderer
        self.name = name
        self.target = target
        self.html_attrs: dict[str, Any] = {}
        self.selected_attrs: dict[str, Any] = {}
        self.page_selector = page_selector if page_selector is not None else PageSelector(view_context)
        self._visible_predicate: Callable[..., Any] | Computed | None = None

    def __repr__(self) -> str:
        return f"Tab(name={self.name!r}, target={self.target!r})"

    def _route(self) -> RouteIdentity:
        return self.view_context.current_route()

    def visible_on(self, predicate: Callable[..., Any] | Computed | None) -> "Tab":
        """Show the tab only while ``predicate`` is true.

        A plain callable is called with no arguments; a ``Computed`` is called
        with ``(tab, controller_path, action)``.
        """
        self._visible_predicate = predicate
        return self

    def selected_on_match(
        self, controller_regex: PatternLike | None, action_regex: PatternLike | None = None
    ) -> "Tab":
        self.page_selector.add_regex_condition(controller_regex, action_regex)
        return self

    def selected_on_options(self, *descriptors: Any) -> "Tab":
        self.page_selector.add_options_condition(*descriptors)
        return self

    def selected_on(
        self, predicate: Callable[..., Any], *, tab_scoped: bool = False, takes_route: bool = True
    ) -> "Tab":
        self.page_selector.add_custom_condition(
            predicate, tab_scoped=tab_scoped, takes_route=takes_route
        )
        return self

    def is_visible(self) -> bool:
        if self._visible_predicate is None:
            return True
        if isinstance(self._visible_predicate, Computed):
            return bool(self._visible_predicate.resolve(self, *self._route()))
        return bool(self._visible_predicate())

    def is_selected(self) -> bool:
        controller_path, action = self._route()
        return self.page_selector.is_selected(controller_path, action, self)

    def label(self) -> Any:
        return resolve(self.name, self, *self._route())

    def link_target(self) -> Any:
        return resolve(self.target, self, *self._route())

    def effective_attrs(self) -> dict[str, Any]:
        attrs = dict(self.html_attrs)
        if self.is_selected():
            attrs.update(self.selected_attrs)
        return attrs

    def render(self) -> Markup:
        label = self.label()
        target = self.link_target()
        attrs = self.effective_attrs()
        if isinstance(self.renderer, TabAwareLinkRenderer):
            return self.renderer.render_tab(self, label, target, attrs)
        return self.renderer.render(label, target, attrs)

    def __html__(self) -> str:
        return str(self.render())

    def set_html_attrs(self, attrs: Mapping[str, Any]) -> "Tab":
        self.html_attrs = dict(attrs)
        return self

    def set_selected_attrs(self, attrs: Mapping[str, Any]) -> "Tab":
        self.selected_attrs = dict(attrs)
        return self

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from markupsafe import Markup

from .errors import InvalidConfigurationError

if TYPE_CHECKING:
    from .tab import Tab
    from .view_context import ViewContext


class LinkRenderer:
    """Turns a tab's label, target and attributes into link markup."""

    def __init__(self, view_context: ViewContext) -> None:
        self.view_context = view_context

    def render(self, label: Any, target: Any, attrs: Mapping[str, Any]) -> Markup:
        raise NotImplementedError


class TabAwareLinkRenderer(LinkRenderer):
    """Renderer that also receives the tab being rendered.

    ``Tab.render`` calls ``render_tab`` on these instead of ``render``.
    """

    def render_tab(self, tab: Tab, label: Any, target: Any, attrs: Mapping[str, Any]) -> Markup:
        return self.render(label, target, attrs)


class StandardLinkRenderer(LinkRenderer):
    def render(self, label: Any, target: Any = "", attrs: Mapping[str, Any] | None = None) -> Markup:
        return self.view_context.link_to(label, target, attrs or {})


class ScriptLinkRenderer(LinkRenderer):
    """Links that run a client-side script; ``target`` is the script."""

    def render(self, label: Any, target: Any = "", attrs: Mapping[str, Any] | None = None) -> Markup:
        return self.view_context.link_to_function(label, target or "", attrs or {})


RENDERERS: dict[str, type[LinkRenderer]] = {
    "link": StandardLinkRenderer,
    "script": ScriptLinkRenderer,
}


def renderer_for(name: str, view_context: ViewContext) -> LinkRenderer:
    renderer_cls = RENDERERS.get(str(name or "").strip().lower())
    if renderer_cls is None:
        allowed = ", ".join(sorted(RENDERERS))
        raise InvalidConfigurationError(f"Unknown renderer '{name}'. Expected one of: {allowed}.")
    return renderer_cls(view_context)

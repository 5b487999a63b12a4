from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import unquote, urlencode, urlsplit

from flask import request, url_for
from markupsafe import Markup, escape

from .errors import InvalidConfigurationError
from .values import RouteIdentity


logger = logging.getLogger(__name__)


def _attr_value(value: Any) -> str:
    if isinstance(value, (list, tuple, set, frozenset)):
        return " ".join(str(item) for item in value if item not in (None, ""))
    return str(value)


def html_attributes(attrs: Mapping[str, Any] | None) -> Markup:
    if not attrs:
        return Markup("")
    parts: list[Markup] = []
    for key, value in attrs.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(Markup(" {}").format(key))
            continue
        parts.append(Markup(' {}="{}"').format(key, _attr_value(value)))
    return Markup("").join(parts)


def _normalize_path(path: str) -> str:
    path = unquote(path or "/")
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


class ViewContext:
    """Route identity and link markup for one rendering scope.

    Subclasses supply the current request's path, query string and endpoint
    name, and turn ``{"endpoint": ..., **values}`` descriptors into URLs.
    """

    def current_route(self) -> RouteIdentity:
        raise NotImplementedError

    def request_path(self) -> str:
        raise NotImplementedError

    def request_query_string(self) -> str:
        raise NotImplementedError

    def build_url(self, endpoint: str, values: dict[str, Any]) -> str:
        raise NotImplementedError

    def resolve_url(self, descriptor: Any) -> str:
        if isinstance(descriptor, str):
            return descriptor
        if isinstance(descriptor, Mapping):
            values = dict(descriptor)
            endpoint = values.pop("endpoint", None)
            if not isinstance(endpoint, str) or not endpoint.strip():
                raise InvalidConfigurationError(
                    f"Route descriptor mapping requires an 'endpoint' key: {descriptor!r}"
                )
            return self.build_url(endpoint.strip(), values)
        raise InvalidConfigurationError(f"Unsupported route descriptor: {descriptor!r}")

    def is_current_route(self, descriptor: Any) -> bool:
        url = urlsplit(self.resolve_url(descriptor))
        target = _normalize_path(url.path)
        current = _normalize_path(self.request_path())
        if url.query:
            target = f"{target}?{url.query}"
            query = self.request_query_string()
            current = f"{current}?{query}" if query else current
        matched = target == current
        logger.debug("Route %r current=%s (request %s)", descriptor, matched, current)
        return matched

    def link_to(self, label: Any, target: Any, attrs: Mapping[str, Any] | None = None) -> Markup:
        options = dict(attrs or {})
        href = options.pop("href", None) or self.resolve_url(target)
        return Markup('<a href="{}"{}>{}</a>').format(href, html_attributes(options), label)

    def link_to_function(
        self, label: Any, script: str = "", attrs: Mapping[str, Any] | None = None
    ) -> Markup:
        options = dict(attrs or {})
        href = options.pop("href", None) or "#"
        existing = options.pop("onclick", None)
        onclick = f"{existing}; " if existing else ""
        onclick += f"{script}; return false;"
        options["onclick"] = onclick
        return Markup('<a href="{}"{}>{}</a>').format(href, html_attributes(options), label)


class StaticViewContext(ViewContext):
    """Fixed route identity, for rendering outside a live request."""

    def __init__(
        self,
        controller_path: str,
        action: str = "",
        *,
        query_string: str = "",
        urls: Mapping[str, str] | None = None,
    ) -> None:
        self.controller_path = controller_path
        self.action = action
        self.query_string = query_string.lstrip("?")
        self.urls = dict(urls or {})

    def current_route(self) -> RouteIdentity:
        return RouteIdentity(self.controller_path, self.action)

    def request_path(self) -> str:
        return self.controller_path

    def request_query_string(self) -> str:
        return self.query_string

    def build_url(self, endpoint: str, values: dict[str, Any]) -> str:
        base = self.urls.get(endpoint)
        if base is None:
            raise InvalidConfigurationError(f"Unknown endpoint: {endpoint}")
        query = urlencode(values)
        return f"{base}?{query}" if query else base


class FlaskViewContext(ViewContext):
    """Reads the active Flask request on every call.

    The controller path is ``request.path``; the action is the view name at
    the end of ``request.endpoint`` (``"users.edit"`` -> ``"edit"``).
    """

    def current_route(self) -> RouteIdentity:
        endpoint = request.endpoint or ""
        return RouteIdentity(request.path, endpoint.rsplit(".", 1)[-1])

    def request_path(self) -> str:
        return request.path

    def request_query_string(self) -> str:
        return request.query_string.decode("utf-8", "replace")

    def build_url(self, endpoint: str, values: dict[str, Any]) -> str:
        return url_for(endpoint, **values)

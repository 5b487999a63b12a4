from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable

from dotenv import load_dotenv

from .errors import InvalidConfigurationError
from .renderers import RENDERERS


load_dotenv()

logger = logging.getLogger(__name__)

EnvGetter = Callable[[str], str | None]

RENDERER_KEYS = frozenset(RENDERERS)
LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def _bool_env(name: str, default: bool, *, getenv: EnvGetter = os.getenv) -> bool:
    value = getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _str_env(*names: str, default: str = "", getenv: EnvGetter = os.getenv) -> str:
    for name in names:
        value = getenv(name)
        if value is not None:
            return value.strip()
    return default


def _choice_env(
    *names: str,
    choices: frozenset[str],
    default: str,
    getenv: EnvGetter = os.getenv,
) -> str:
    value = _str_env(*names, default=default, getenv=getenv).lower()
    if value in {choice.lower() for choice in choices}:
        return value
    logger.warning("Unsupported value '%s' for %s; using '%s'.", value, names[0], default)
    return default


@dataclass(frozen=True)
class MenuSettings:
    tab_class: str = "tab"
    selected_class: str = "tab is-active"
    mark_current_page: bool = True
    renderer: str = "link"
    menu_css_class: str = "tabs"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, *, getenv: EnvGetter = os.getenv) -> "MenuSettings":
        log_level = _choice_env(
            "NAVTABS_LOG_LEVEL",
            "LOG_LEVEL",
            choices=LOG_LEVELS,
            default="info",
            getenv=getenv,
        )
        return cls(
            tab_class=_str_env("NAVTABS_TAB_CLASS", default="tab", getenv=getenv),
            selected_class=_str_env(
                "NAVTABS_SELECTED_CLASS", default="tab is-active", getenv=getenv
            ),
            mark_current_page=_bool_env("NAVTABS_MARK_CURRENT_PAGE", True, getenv=getenv),
            renderer=_choice_env(
                "NAVTABS_RENDERER", choices=RENDERER_KEYS, default="link", getenv=getenv
            ),
            menu_css_class=_str_env("NAVTABS_MENU_CLASS", default="tabs", getenv=getenv),
            log_level=log_level.upper(),
        )

    def validate(self) -> None:
        if self.renderer not in RENDERER_KEYS:
            allowed = ", ".join(sorted(RENDERER_KEYS))
            raise InvalidConfigurationError(
                f"Unknown renderer '{self.renderer}'. Expected one of: {allowed}."
            )
        if self.log_level.upper() not in LOG_LEVELS:
            raise InvalidConfigurationError(f"Unknown log level '{self.log_level}'.")

    def default_html_attrs(self) -> dict[str, Any]:
        if not self.tab_class:
            return {}
        return {"class": self.tab_class}

    def default_selected_attrs(self) -> dict[str, Any]:
        attrs: dict[str, Any] = {}
        if self.selected_class:
            attrs["class"] = self.selected_class
        if self.mark_current_page:
            attrs["aria-current"] = "page"
        return attrs

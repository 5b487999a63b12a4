from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from .errors import InvalidConfigurationError
from .values import resolve

if TYPE_CHECKING:
    from .tab import Tab
    from .view_context import ViewContext


logger = logging.getLogger(__name__)

MATCH_ALL = re.compile(r".*")

PatternLike = str | re.Pattern[str]


def _compile(pattern: PatternLike | None) -> re.Pattern[str]:
    if pattern is None:
        return MATCH_ALL
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(str(pattern))
    except re.error as exc:
        raise InvalidConfigurationError(f"Invalid route pattern {pattern!r}: {exc}") from exc


@dataclass(frozen=True)
class RegexCondition:
    controller_pattern: re.Pattern[str]
    action_pattern: re.Pattern[str]

    def matches(
        self, view_context: ViewContext, controller_path: str, action: str, tab: Tab | None
    ) -> bool:
        return bool(
            self.controller_pattern.search(controller_path or "")
            and self.action_pattern.search(action or "")
        )


@dataclass(frozen=True)
class OptionsCondition:
    descriptors: tuple[Any, ...]

    def matches(
        self, view_context: ViewContext, controller_path: str, action: str, tab: Tab | None
    ) -> bool:
        return any(
            view_context.is_current_route(resolve(descriptor)) for descriptor in self.descriptors
        )


@dataclass(frozen=True)
class CustomCondition:
    predicate: Callable[..., Any]
    tab_scoped: bool = False
    takes_route: bool = True

    def matches(
        self, view_context: ViewContext, controller_path: str, action: str, tab: Tab | None
    ) -> bool:
        if not self.takes_route:
            return bool(self.predicate())
        if self.tab_scoped:
            return bool(self.predicate(tab, controller_path, action))
        return bool(self.predicate(controller_path, action))


Condition = RegexCondition | OptionsCondition | CustomCondition


class PageSelector:
    """The set of pages on which a tab counts as selected.

    Conditions are OR-ed: the selector matches as soon as one of them does,
    and never matches when it has none.
    """

    def __init__(self, view_context: ViewContext) -> None:
        self.view_context = view_context
        self._conditions: list[Condition] = []

    @classmethod
    def selected_on_match(
        cls,
        view_context: ViewContext,
        controller_regex: PatternLike | None,
        action_regex: PatternLike | None = None,
    ) -> "PageSelector":
        selector = cls(view_context)
        selector.add_regex_condition(controller_regex, action_regex)
        return selector

    @classmethod
    def selected_on_options(cls, view_context: ViewContext, *descriptors: Any) -> "PageSelector":
        selector = cls(view_context)
        selector.add_options_condition(*descriptors)
        return selector

    @classmethod
    def selected_on(
        cls,
        view_context: ViewContext,
        predicate: Callable[..., Any],
        *,
        tab_scoped: bool = False,
        takes_route: bool = True,
    ) -> "PageSelector":
        selector = cls(view_context)
        selector.add_custom_condition(predicate, tab_scoped=tab_scoped, takes_route=takes_route)
        return selector

    @property
    def conditions(self) -> tuple[Condition, ...]:
        return tuple(self._conditions)

    def __len__(self) -> int:
        return len(self._conditions)

    def __bool__(self) -> bool:
        return True

    def add_regex_condition(
        self,
        controller_regex: PatternLike | None = None,
        action_regex: PatternLike | None = None,
    ) -> RegexCondition:
        """Select when the controller path and the action both match.

        Patterns are searched, not anchored; a side left as ``None`` matches
        anything, but at least one side is required.
        """
        if controller_regex is None and action_regex is None:
            raise InvalidConfigurationError(
                "Regular expressions for at least one of controller path and action name must be provided."
            )
        condition = RegexCondition(_compile(controller_regex), _compile(action_regex))
        self._conditions.append(condition)
        logger.debug(
            "Added regex condition controller=%r action=%r",
            condition.controller_pattern.pattern,
            condition.action_pattern.pattern,
        )
        return condition

    def add_options_condition(self, *descriptors: Any) -> OptionsCondition:
        """Select when any of the route descriptors is the current route.

        ``Computed`` descriptors are resolved on every check.
        """
        if not descriptors:
            raise InvalidConfigurationError("At least one route descriptor must be provided.")
        condition = OptionsCondition(tuple(descriptors))
        self._conditions.append(condition)
        logger.debug("Added options condition with %s descriptor(s)", len(descriptors))
        return condition

    def add_custom_condition(
        self,
        predicate: Callable[..., Any],
        *,
        tab_scoped: bool = False,
        takes_route: bool = True,
    ) -> CustomCondition:
        """Select when ``predicate`` returns true.

        The predicate is called with ``(controller_path, action)``, with
        ``(tab, controller_path, action)`` when ``tab_scoped``, or with no
        arguments when ``takes_route`` is false.
        """
        if not callable(predicate):
            raise InvalidConfigurationError(f"Selection predicate must be callable: {predicate!r}")
        condition = CustomCondition(predicate, tab_scoped=tab_scoped, takes_route=takes_route)
        self._conditions.append(condition)
        logger.debug("Added custom condition %r (tab_scoped=%s)", predicate, tab_scoped)
        return condition

    on_match = add_regex_condition
    on_options = add_options_condition
    on = add_custom_condition

    def is_selected(self, controller_path: str, action: str, tab: Tab | None = None) -> bool:
        for index, condition in enumerate(self._conditions):
            if condition.matches(self.view_context, controller_path, action, tab):
                logger.debug(
                    "Selected by condition %s (%s) for %s#%s",
                    index,
                    type(condition).__name__,
                    controller_path,
                    action,
                )
                return True
        return False

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, NamedTuple


class RouteIdentity(NamedTuple):
    controller_path: str
    action: str


@dataclass(frozen=True)
class Static:
    value: Any

    def resolve(self, *context: Any) -> Any:
        return self.value


@dataclass(frozen=True)
class Computed:
    """A value known only at render time.

    Names and link targets are called with ``(tab, controller_path, action)``;
    route descriptors passed to an options condition are called with no
    arguments.
    """

    fn: Callable[..., Any]

    def resolve(self, *context: Any) -> Any:
        return self.fn(*context)


LateBound = Static | Computed


def as_late_bound(value: Any) -> LateBound:
    if isinstance(value, (Static, Computed)):
        return value
    return Static(value)


def resolve(value: Any, *context: Any) -> Any:
    return as_late_bound(value).resolve(*context)

"""Caller-supplied page interactions run after navigating to a host."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from playwright.async_api import Page

from niffy.models.result import Role

Interaction = Callable[[Page, str], Optional[Awaitable[Any]]]


@dataclass(frozen=True)
class Interactions:
    """Interactions for the base and test hosts.

    When only ``base`` is given it runs against both hosts; branch on the
    role argument inside it for host-specific steps.
    """

    base: Optional[Interaction] = None
    test: Optional[Interaction] = None

    @classmethod
    def of(cls, fn: Optional[Interaction] = None, fn2: Optional[Interaction] = None) -> "Interactions":
        return cls(base=fn, test=fn2 if fn2 is not None else fn)

    def for_role(self, role: Role) -> Optional[Interaction]:
        return self.base if role == Role.BASE else self.test


async def run_interaction(fn: Callable[..., Any], *args: Any) -> None:
    """Call ``fn`` and await its result when it is a coroutine."""
    result = fn(*args)
    if inspect.isawaitable(result):
        await result

from __future__ import annotations

import abc
from typing import Callable, Iterable, Optional, Sequence

from .router import CommandRouter, Resolution


class CommandResolver(abc.ABC):
    """Strategy used by a CommandRegistry to turn raw tokens into a command id."""

    @abc.abstractmethod
    def resolve(self, tokens: Sequence[str]) -> Resolution:
        raise NotImplementedError()


class SpacesResolver(CommandResolver):
    """Resolve space-separated invocations against colon-namespaced ids.

    The router is built once, on first use, from `identifiers`. Pass a
    callable to defer enumerating identifiers until every command has been
    registered.
    """

    def __init__(
        self,
        identifiers: Callable[[], Iterable[str]],
        separator: Optional[str] = None,
        casefold: Optional[bool] = None,
    ):
        self._identifiers = identifiers
        self._separator: Optional[str] = separator
        self._casefold: Optional[bool] = casefold
        self._router: Optional[CommandRouter] = None

    @property
    def router(self) -> CommandRouter:
        if self._router is None:
            self._router = CommandRouter.build(
                self._identifiers(),
                separator=self._separator,
                casefold=self._casefold,
            )
        return self._router

    def invalidate(self):
        self._router = None

    def resolve(self, tokens: Sequence[str]) -> Resolution:
        return self.router.resolve(tokens)

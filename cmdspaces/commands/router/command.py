from __future__ import annotations

import inspect
import logging
from typing import Optional, List, Tuple, Set, Iterable, Sequence

from . import Trie
from ... import config
from ...helper import InvalidIdentifierError, checked_segments, display_name, split_id


log = logging.getLogger(__name__)


class CommandNotFoundError(Exception):
    pass


class Resolution(object):
    """The outcome of matching a raw token sequence against a CommandRouter."""

    def __init__(
        self,
        node: Optional[Trie],
        path: Sequence[str],
        separator: str = ":",
        registered: bool = False,
    ):
        self.node: Optional[Trie] = node
        self.path: Tuple[str, ...] = tuple(path)
        self.separator: str = separator
        self.registered: bool = registered

    @property
    def found(self) -> bool:
        return self.node is not None

    @property
    def consumed(self) -> int:
        return len(self.path)

    @property
    def identifier(self) -> Optional[str]:
        if not self.found:
            return None
        return self.separator.join(self.path)

    @property
    def is_command(self) -> bool:
        if not self.found:
            return False
        return self.node.is_leaf or self.registered

    @property
    def is_topic(self) -> bool:
        return self.found and not self.is_command

    def remaining(self, tokens: Sequence[str], offset: int = 0) -> List[str]:
        return list(tokens[self.consumed + offset :])

    def __iter__(self):
        # unpacks as (identifier, consumed count)
        return iter((self.identifier, self.consumed))

    def __repr__(self) -> str:
        if not self.found:
            return "Resolution(<no match>)"

        kind = "command" if self.is_command else "topic"
        return "Resolution({!r}, {})".format(self.identifier, kind)


class CommandRouter(Trie):
    """Root of the tree of every known command name and alias.

    Identifiers like `foo:bar:baz` are stored as chains of segment nodes, so
    that a raw invocation like `foo bar baz --flag` can be matched one token
    at a time.
    """

    def __init__(self, separator: str = ":", casefold: bool = False):
        super().__init__()
        self.separator: str = separator
        self.casefold: bool = casefold
        self._registered: Set[Tuple[str, ...]] = set()

    @classmethod
    def build(
        cls,
        identifiers: Iterable[str],
        separator: Optional[str] = None,
        casefold: Optional[bool] = None,
    ) -> CommandRouter:
        if separator is None:
            separator = config.get().separator
        if casefold is None:
            casefold = config.get().casefold

        router = cls(separator, casefold)
        for identifier in identifiers:
            router.add(identifier)

        log.debug(
            "Built command router with {} identifiers ({} top-level segments)".format(
                len(router._registered), len(router)
            )
        )
        return router

    def add(self, identifier: str) -> Trie:
        if self.casefold:
            identifier = identifier.casefold()

        segments = checked_segments(identifier, self.separator)

        self._registered.add(tuple(segments))
        return self.insert_path(segments)

    def is_registered(self, path: Sequence[str]) -> bool:
        return tuple(path) in self._registered

    def find_most_progressive_match(
        self, tokens: Sequence[str]
    ) -> Tuple[Optional[Trie], List[str]]:
        """Walk `tokens` down the tree for as long as each one names a child.

        Returns the deepest node reached (None if the first token matched
        nothing) and the tokens consumed to reach it. The token that failed
        to match, and everything after it, is not consumed.
        """

        cur_node: Trie = self
        path: List[str] = []

        for token in tokens:
            if self.casefold:
                token = token.casefold()

            next_node = cur_node.child_search(token)
            if next_node is None:
                break

            cur_node = next_node
            path.append(token)

        if len(path) == 0:
            return (None, [])
        return (cur_node, path)

    def resolve(self, tokens: Sequence[str]) -> Resolution:
        node, path = self.find_most_progressive_match(tokens)
        return Resolution(
            node,
            path,
            separator=self.separator,
            registered=node is not None and self.is_registered(path),
        )


def build(identifiers: Iterable[str], **kwargs) -> CommandRouter:
    return CommandRouter.build(identifiers, **kwargs)


def resolve(router: CommandRouter, tokens: Sequence[str]) -> Tuple[Optional[str], int]:
    resolution = router.resolve(tokens)
    return (resolution.identifier, resolution.consumed)


class Command(object):
    def __init__(
        self,
        func,
        id: str,
        summary: Optional[str] = None,
        aliases: Iterable[str] = tuple(),
        hidden: bool = False,
        usage_args: Iterable[str] = tuple(),
        separator: Optional[str] = None,
    ):
        if summary is None and func.__doc__ is not None:
            docstring = inspect.cleandoc(func.__doc__)
            if len(docstring) > 0:
                summary = docstring.split("\n")[0]

        self.func = func
        self.id: str = id
        self.summary: Optional[str] = summary
        self.aliases: Tuple[str, ...] = tuple(aliases)
        self.hidden: bool = hidden
        self.usage_args: Tuple[str, ...] = tuple(usage_args)
        self.separator: Optional[str] = separator

    @property
    def cmd_path(self) -> Tuple[str, ...]:
        return tuple(split_id(self.id, self.separator))

    @property
    def display_name(self) -> str:
        return display_name(self.id, self.separator)

    def usage(self) -> str:
        return " ".join((self.display_name,) + self.usage_args)

    def summary_entry(self) -> str:
        if self.summary is not None:
            return "{} - {}".format(self.display_name, self.summary)
        else:
            return "{} - No summary available.".format(self.display_name)

    def help_text(self, bin: Optional[str] = None) -> str:
        if bin is None:
            bin = config.get().bin

        text: str = "USAGE\n  $ {} {}".format(bin, self.usage())

        if self.func.__doc__ is not None:
            text += "\n\nDESCRIPTION\n  "
            text += "\n  ".join(inspect.cleandoc(self.func.__doc__).split("\n"))
        elif self.summary is not None:
            text += "\n\nDESCRIPTION\n  " + self.summary

        if len(self.aliases) > 0:
            text += "\n\nALIASES\n  "
            text += "\n  ".join(
                "$ {} {}".format(bin, display_name(alias, self.separator))
                for alias in self.aliases
            )

        return text

    def __call__(self, context, args: Tuple[str]):
        return self.func(context, args, self)

    def __repr__(self) -> str:
        return "Command({!r})".format(self.id)


class Topic(object):
    def __init__(
        self,
        name: str,
        description: Optional[str] = None,
        hidden: bool = False,
        separator: Optional[str] = None,
    ):
        self.name: str = name
        self.description: Optional[str] = description
        self.hidden: bool = hidden
        self.separator: Optional[str] = separator

    @property
    def display_name(self) -> str:
        return display_name(self.name, self.separator)

    def summary_entry(self) -> str:
        if self.description:
            return "{} - {}".format(self.display_name, self.description.split("\n")[0])
        else:
            return self.display_name

    def __repr__(self) -> str:
        return "Topic({!r})".format(self.name)

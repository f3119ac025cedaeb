from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, IO, Iterable, List, Optional, Sequence

from .router import (
    Command,
    CommandNotFoundError,
    Resolution,
    Topic,
)
from .resolver import CommandResolver, SpacesResolver
from .context import CommandContext
from .help_cmd import install_help, topic_help
from .. import config as _config
from ..config import Config
from ..helper import checked_segments, convert_argv, display_name, split_id, join_id


log = logging.getLogger(__name__)

HOOK_EVENTS = ("command_not_found", "prerun")


class CommandRegistry(object):
    """The host's table of commands.

    Looking up a command from a raw invocation is delegated to a
    CommandResolver, which by default matches space-separated tokens against
    the colon-namespaced ids and aliases registered here.
    """

    def __init__(
        self,
        resolver: Optional[CommandResolver] = None,
        config: Optional[Config] = None,
        with_help: bool = True,
    ):
        self.config: Config = config if config is not None else _config.get()
        self.commands: Dict[str, Command] = {}
        self.aliases: Dict[str, Command] = {}
        self.topics: Dict[str, Topic] = {}
        self.hooks: Dict[str, List[Callable]] = defaultdict(list)

        if resolver is None:
            resolver = SpacesResolver(
                lambda: self.identifiers,
                separator=self.config.separator,
                casefold=self.config.casefold,
            )
        self.resolver: CommandResolver = resolver

        if with_help:
            install_help(self)

    def _normalize(self, identifier: str) -> str:
        if self.config.casefold:
            return identifier.casefold()
        return identifier

    @property
    def command_ids(self) -> List[str]:
        return list(self.commands.keys())

    @property
    def identifiers(self) -> List[str]:
        return self.command_ids + list(self.aliases.keys())

    def add_command(self, cmd: Command) -> Command:
        names = [self._normalize(cmd.id)] + [self._normalize(a) for a in cmd.aliases]
        for name in names:
            checked_segments(name, self.config.separator)
            if name in self.commands or name in self.aliases:
                raise KeyError("command or alias already registered: " + name)

        cmd.separator = self.config.separator
        self.commands[names[0]] = cmd
        for alias in names[1:]:
            self.aliases[alias] = cmd

        if isinstance(self.resolver, SpacesResolver):
            self.resolver.invalidate()

        return cmd

    def command(
        self,
        id: str,
        *,
        summary: Optional[str] = None,
        aliases: Iterable[str] = tuple(),
        hidden: bool = False,
        usage_args: Iterable[str] = tuple(),
    ):
        """Register the decorated coroutine function as a command."""

        def wrapper(func):
            cmd = Command(
                func,
                id,
                summary=summary,
                aliases=aliases,
                hidden=hidden,
                usage_args=usage_args,
            )
            return self.add_command(cmd)

        return wrapper

    def add_topic(self, name: str, description: Optional[str] = None, hidden: bool = False) -> Topic:
        topic = Topic(
            self._normalize(name),
            description,
            hidden=hidden,
            separator=self.config.separator,
        )
        self.topics[topic.name] = topic
        return topic

    def hook(self, event: str):
        if event not in HOOK_EVENTS:
            raise KeyError("unknown hook event: " + event)

        def wrapper(func):
            self.hooks[event].append(func)
            return func

        return wrapper

    async def run_hook(self, event: str, **kwargs):
        for func in self.hooks[event]:
            await func(self, **kwargs)

    def resolve(self, tokens: Sequence[str]) -> Resolution:
        return self.resolver.resolve(tokens)

    def lookup(self, identifier: str) -> Optional[Command]:
        identifier = self._normalize(identifier)
        try:
            return self.commands[identifier]
        except KeyError:
            return self.aliases.get(identifier)

    def find_command(self, tokens: Sequence[str]) -> Optional[Command]:
        resolution = self.resolve(tokens)
        if not resolution.is_command:
            return None
        return self.lookup(resolution.identifier)

    def find_topic(self, tokens: Sequence[str]) -> Optional[Topic]:
        resolution = self.resolve(tokens)
        if not resolution.found:
            return None

        try:
            return self.topics[resolution.identifier]
        except KeyError:
            return Topic(resolution.identifier, separator=self.config.separator)

    def subtopics(self, prefix: Sequence[str] = tuple()) -> List[Topic]:
        """Namespaces one level below `prefix` that have commands beneath them.

        A name that is both a command and a namespace is listed here as well
        as in `subcommands`.
        """
        depth = len(prefix) + 1
        names = set()

        for identifier in self.command_ids:
            segments = split_id(identifier, self.config.separator)
            if len(segments) > depth and tuple(segments[: len(prefix)]) == tuple(prefix):
                names.add(join_id(segments[:depth], self.config.separator))

        ret = []
        for name in sorted(names):
            if name in self.topics:
                ret.append(self.topics[name])
            else:
                ret.append(Topic(name, separator=self.config.separator))

        return [t for t in ret if not t.hidden]

    def subcommands(self, prefix: Sequence[str] = tuple()) -> List[Command]:
        depth = len(prefix) + 1
        ret = []

        for identifier, cmd in sorted(self.commands.items(), key=lambda kv: kv[0]):
            segments = split_id(identifier, self.config.separator)
            if len(segments) == depth and tuple(segments[: len(prefix)]) == tuple(prefix):
                if not cmd.hidden:
                    ret.append(cmd)

        return ret

    async def run_command(
        self,
        raw: Sequence[str],
        out: Optional[IO[str]] = None,
    ) -> Any:
        """Resolve a raw invocation and run the command it names.

        Everything after the matched command name (and after the host's
        `argv_offset` leading tokens) is handed to the command as its args.
        """

        offset = self.config.argv_offset
        tokens = list(raw[offset:])
        resolution = self.resolve(tokens)

        cmd = self.lookup(resolution.identifier) if resolution.is_command else None
        if cmd is None:
            attempted = display_name(resolution.identifier or "", self.config.separator)
            if not attempted:
                attempted = " ".join(tokens[:1])

            await self.run_hook("command_not_found", id=attempted, resolution=resolution)
            raise CommandNotFoundError(attempted)

        argv = convert_argv(
            resolution.identifier, raw, offset=offset, separator=self.config.separator
        )
        ctx = CommandContext(self, tuple(raw), resolution, out=out)

        await self.run_hook("prerun", command=cmd, argv=argv)
        log.debug("Running {} with args {}".format(cmd.id, argv))
        return await cmd(ctx, tuple(argv))

    async def dispatch(
        self,
        raw: Sequence[str],
        out: Optional[IO[str]] = None,
    ) -> Any:
        tokens = list(raw)
        if len(tokens) <= self.config.argv_offset:
            tokens += [""] * (self.config.argv_offset - len(tokens)) + ["help"]

        try:
            return await self.run_command(tokens, out=out)
        except CommandNotFoundError as e:
            log.info("Command not found: {}".format(e.args[0]))

            resolution = self.resolve(tokens[self.config.argv_offset :])
            ctx = CommandContext(self, tuple(tokens), resolution, out=out)
            if resolution.is_topic:
                return await ctx.reply(topic_help(self, resolution.path))

            return await ctx.reply(
                "command {} not found. Try `{} help` for a list of commands.".format(
                    e.args[0], self.config.bin
                )
            )
        except Exception:
            log.exception("Caught exception while running {}".format(" ".join(tokens)))
            raise

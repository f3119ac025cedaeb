from __future__ import annotations

from typing import Sequence, Tuple, TYPE_CHECKING

from .router import Command
from .context import CommandContext
from ..helper import display_name, join_id

if TYPE_CHECKING:
    from . import CommandRegistry


def render_list(entries: Sequence[str]) -> str:
    return "\n".join("  " + entry for entry in entries)


def topic_help(registry: CommandRegistry, path: Sequence[str]) -> str:
    """Help for a topic: its usage line, description, and what lives below it."""

    name = join_id(path, registry.config.separator)
    topic = registry.topics.get(name)
    spaced = display_name(name, registry.config.separator)

    sections = []
    if topic is not None and topic.description:
        sections.append(topic.description.split("\n")[0])

    sections.append("USAGE\n  $ {} {} COMMAND".format(registry.config.bin, spaced))

    if topic is not None and topic.description and "\n" in topic.description:
        description = topic.description.split("\n", 1)[1].strip("\n")
        if description:
            sections.append("DESCRIPTION\n" + render_list(description.split("\n")))

    sections.extend(listing(registry, path))
    return "\n\n".join(sections)


def listing(registry: CommandRegistry, path: Sequence[str] = tuple()) -> Tuple[str, ...]:
    sections = []

    topics = registry.subtopics(path)
    if len(topics) > 0:
        sections.append("TOPICS\n" + render_list([t.summary_entry() for t in topics]))

    commands = registry.subcommands(path)
    if len(commands) > 0:
        sections.append("COMMANDS\n" + render_list([c.summary_entry() for c in commands]))

    return tuple(sections)


async def help_cmd(ctx: CommandContext, args: Tuple[str], cmd: Command):
    """Display help for a command or topic.

    Pass the command name the same way you would type it, e.g. `help foo bar`.
    """

    registry = ctx.registry

    if len(args) > 0:
        resolution = registry.resolve(args)
        if resolution.is_command:
            found = registry.lookup(resolution.identifier)
            if found is not None:
                return await ctx.reply(found.help_text(registry.config.bin))
        if resolution.found:
            return await ctx.reply(topic_help(registry, resolution.path))

        return await ctx.reply(
            "command {} not found. Try `{} help` for a list of commands.".format(
                " ".join(args), registry.config.bin
            )
        )

    lines = ["USAGE\n  $ {} [COMMAND]".format(registry.config.bin)]
    lines.extend(listing(registry))
    return await ctx.reply("\n\n".join(lines))


def install_help(registry: CommandRegistry) -> Command:
    return registry.add_command(Command(help_cmd, "help", usage_args=("[COMMAND]",)))

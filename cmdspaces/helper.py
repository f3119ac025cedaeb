from __future__ import annotations

from typing import List, Optional, Sequence

from . import config


class InvalidIdentifierError(ValueError):
    pass


def split_id(identifier: str, separator: Optional[str] = None) -> List[str]:
    if separator is None:
        separator = config.get().separator
    if len(identifier) == 0:
        return []
    return identifier.split(separator)


def checked_segments(identifier: str, separator: Optional[str] = None) -> List[str]:
    """Split `identifier`, rejecting empty ids and empty segments like `foo::bar`."""
    segments = split_id(identifier, separator)
    if len(segments) == 0 or any(len(s) == 0 for s in segments):
        raise InvalidIdentifierError(identifier)
    return segments


def join_id(segments: Sequence[str], separator: Optional[str] = None) -> str:
    if separator is None:
        separator = config.get().separator
    return separator.join(segments)


def display_name(identifier: str, separator: Optional[str] = None) -> str:
    """Convert a namespaced identifier (`foo:bar`) into the spaced form users type."""
    return " ".join(split_id(identifier, separator))


def convert_argv(
    identifier: str,
    raw: Sequence[str],
    offset: Optional[int] = None,
    separator: Optional[str] = None,
) -> List[str]:
    """Slice the command's own arguments off a raw token sequence.

    `offset` is the number of leading tokens (program path, script name)
    the host prepends before the command name.
    """

    if offset is None:
        offset = config.get().argv_offset
    keys = split_id(identifier, separator)
    return list(raw[len(keys) + offset :])

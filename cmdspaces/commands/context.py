from __future__ import annotations

import sys
from typing import IO, List, Optional, Tuple, TYPE_CHECKING

from ..config import Config
from .router import Resolution

if TYPE_CHECKING:
    from . import CommandRegistry


class CommandContext(object):
    def __init__(
        self,
        registry: CommandRegistry,
        raw: Tuple[str, ...],
        resolution: Resolution,
        out: Optional[IO[str]] = None,
    ):
        self.registry: CommandRegistry = registry
        self.raw: Tuple[str, ...] = tuple(raw)
        self.resolution: Resolution = resolution
        self.out: IO[str] = out if out is not None else sys.stdout
        self.replies: List[str] = []

    @property
    def config(self) -> Config:
        return self.registry.config

    @property
    def command_id(self) -> Optional[str]:
        return self.resolution.identifier

    async def reply(self, content: str) -> str:
        self.replies.append(content)
        self.out.write(content + "\n")
        return content

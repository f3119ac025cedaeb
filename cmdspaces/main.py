from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any, Optional, Sequence

from . import config
from .commands import CommandRegistry

LOG_FORMAT = "%(asctime)s:%(levelname)s:%(name)s: %(message)s"

root_logger = logging.getLogger("cmdspaces")


def setup_logging(level: Optional[int] = None) -> logging.Handler:
    if level is None:
        level = config.get().numeric_log_level

    root_logger.setLevel(level)

    # at most one cmdspaces handler on the logger
    for handler in root_logger.handlers:
        if getattr(handler, "_cmdspaces", False):
            return handler

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._cmdspaces = True

    root_logger.addHandler(handler)
    return handler


def app_main(registry: CommandRegistry, argv: Optional[Sequence[str]] = None) -> Any:
    """Run one invocation of a host tool built on `registry`.

    `argv` defaults to the process arguments without the program name.
    """

    if argv is None:
        argv = sys.argv[1:]

    setup_logging(registry.config.numeric_log_level)
    return asyncio.run(registry.dispatch(list(argv)))

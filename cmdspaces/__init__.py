from .commands.router import (
    Trie,
    CommandRouter,
    Command,
    Resolution,
    Topic,
    CommandNotFoundError,
    InvalidIdentifierError,
    build,
    resolve,
)
from .commands import CommandRegistry
from .commands.resolver import CommandResolver, SpacesResolver
from .config import Config, ConfigError

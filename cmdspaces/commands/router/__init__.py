from .trie import Trie
from .command import (
    CommandRouter,
    Command,
    Resolution,
    Topic,
    CommandNotFoundError,
    InvalidIdentifierError,
    build,
    resolve,
)

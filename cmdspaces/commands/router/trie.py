from __future__ import annotations
from typing import Dict, Optional, Generator, Iterable, Tuple

from rich.console import Console
from rich.tree import Tree as RichTree


class Trie(object):
    """A tree of string-keyed nodes.

    Each edge is labelled with one command name segment. Nodes carry no value:
    the existence of a node records that some registered name has that prefix.
    """

    def __init__(self, segment: str = "", parent: Optional[Trie] = None):
        self._segment: str = segment
        self._parent: Optional[Trie] = parent
        self._children: Dict[str, Trie] = {}

    @property
    def segment(self) -> str:
        return self._segment

    @property
    def parent(self) -> Optional[Trie]:
        return self._parent

    @property
    def children(self) -> Dict[str, Trie]:
        return self._children

    @property
    def is_leaf(self) -> bool:
        return len(self._children) == 0

    def insert(self, segment: str, child: Optional[Trie] = None) -> Trie:
        """Attach `child` (or a new empty node) under `segment`.

        Replaces whatever was previously stored under that segment, and
        returns this node so calls can be chained.
        """

        if child is None:
            child = Trie(segment, self)
        else:
            child._segment = segment
            child._parent = self

        self._children[segment] = child
        return self

    def child_search(self, segment: str) -> Optional[Trie]:
        return self._children.get(segment)

    def find_or_insert(self, segment: str) -> Trie:
        try:
            return self._children[segment]
        except KeyError:
            self.insert(segment)
            return self._children[segment]

    def insert_path(self, segments: Iterable[str]) -> Trie:
        cur_node: Trie = self

        for segment in segments:
            cur_node = cur_node.find_or_insert(segment)

        return cur_node

    def find_path(self, segments: Iterable[str]) -> Optional[Trie]:
        cur_node: Optional[Trie] = self

        for segment in segments:
            cur_node = cur_node.child_search(segment)
            if cur_node is None:
                return None

        return cur_node

    def path(self) -> Tuple[str, ...]:
        """Segments on the way from the root down to this node."""
        segments = []
        cur_node: Optional[Trie] = self

        while cur_node is not None and cur_node._parent is not None:
            segments.append(cur_node._segment)
            cur_node = cur_node._parent

        return tuple(reversed(segments))

    def paths(self, prefix: Tuple[str, ...] = tuple()) -> Generator[Tuple[str, ...], None, None]:
        """Yield the segment path of every leaf below this node, in sorted order."""
        if self.is_leaf:
            if len(prefix) > 0:
                yield prefix
            return

        for segment, child in sorted(self._children.items(), key=lambda kv: kv[0]):
            yield from child.paths(prefix + (segment,))

    def as_tree(self, label: str = ".") -> RichTree:
        tree = RichTree(label)

        def add_nodes(parent: RichTree, node: Trie):
            for segment, child in sorted(node._children.items(), key=lambda kv: kv[0]):
                add_nodes(parent.add(segment), child)

        add_nodes(tree, self)
        return tree

    def display(self, console: Optional[Console] = None, label: str = "."):
        if console is None:
            console = Console()
        console.print(self.as_tree(label))

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Generator[str, None, None]:
        yield from sorted(self._children.keys())

    def __contains__(self, segment: str) -> bool:
        return segment in self._children

    def __repr__(self) -> str:
        return "Trie({!r}, children={!r})".format(self._segment, sorted(self._children))

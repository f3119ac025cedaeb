"""Tests for cmdspaces.commands.router.trie: the segment tree."""

import io

from rich.console import Console

from cmdspaces.commands.router import Trie


def _build(*identifiers: str) -> Trie:
    root = Trie()
    for identifier in identifiers:
        root.insert_path(identifier.split(":"))
    return root


class TestFindOrInsert:
    def test_creates_missing_child(self) -> None:
        root = Trie()
        child = root.find_or_insert("foo")
        assert "foo" in root
        assert child.segment == "foo"
        assert child.parent is root
        assert child.is_leaf

    def test_returns_existing_child(self) -> None:
        root = Trie()
        first = root.find_or_insert("foo")
        first.find_or_insert("bar")
        second = root.find_or_insert("foo")
        assert second is first
        assert "bar" in second

    def test_threads_a_path(self) -> None:
        root = Trie()
        cur = root
        for segment in ["foo", "bar", "baz"]:
            cur = cur.find_or_insert(segment)
        assert cur.path() == ("foo", "bar", "baz")
        assert root.insert_path(["foo", "bar", "baz"]) is cur


class TestChildSearch:
    def test_direct_child(self) -> None:
        root = _build("foo:bar")
        assert root.child_search("foo") is not None

    def test_absent_is_none(self) -> None:
        root = _build("foo:bar")
        assert root.child_search("baz") is None

    def test_does_not_recurse(self) -> None:
        root = _build("foo:bar")
        assert root.child_search("bar") is None

    def test_exact_match_only(self) -> None:
        root = _build("foo")
        assert root.child_search("fo") is None
        assert root.child_search("Foo") is None


class TestInsert:
    def test_insert_chains(self) -> None:
        root = Trie()
        assert root.insert("a").insert("b") is root
        assert list(root) == ["a", "b"]

    def test_insert_replaces(self) -> None:
        root = _build("foo:bar")
        replacement = Trie()
        root.insert("foo", replacement)
        assert root.child_search("foo") is replacement
        assert replacement.segment == "foo"
        assert replacement.parent is root
        assert replacement.is_leaf


class TestShape:
    def test_idempotent_insertion(self) -> None:
        once = _build("foo:bar:baz")
        twice = _build("foo:bar:baz", "foo:bar:baz")
        assert list(once.paths()) == list(twice.paths()) == [("foo", "bar", "baz")]

    def test_prefix_closure(self) -> None:
        root = _build("a:b:c")
        assert root.find_path(["a"]) is not None
        assert root.find_path(["a", "b"]) is not None
        assert root.find_path(["a", "b", "c"]) is not None
        assert len(root) == 1
        assert len(root.find_path(["a"])) == 1
        assert len(root.find_path(["a", "b"])) == 1
        assert root.find_path(["a", "b", "c"]).is_leaf

    def test_find_path_missing(self) -> None:
        root = _build("a:b")
        assert root.find_path(["a", "c"]) is None
        assert root.find_path([]) is root

    def test_paths_sorted(self) -> None:
        root = _build("b:x", "a:z", "a:y")
        assert list(root.paths()) == [("a", "y"), ("a", "z"), ("b", "x")]

    def test_empty_root_has_no_paths(self) -> None:
        assert list(Trie().paths()) == []


class TestDisplay:
    def test_renders_every_segment(self) -> None:
        root = _build("foo:bar", "foo:baz", "qux")
        buf = io.StringIO()
        root.display(Console(file=buf, width=80, color_system=None), label="commands")
        out = buf.getvalue()
        for segment in ("commands", "foo", "bar", "baz", "qux"):
            assert segment in out

"""Tests for cmdspaces.helper and cmdspaces.main."""

import logging

import pytest

from cmdspaces import main
from cmdspaces.commands import CommandRegistry
from cmdspaces.config import Config
from cmdspaces.helper import (
    InvalidIdentifierError,
    checked_segments,
    convert_argv,
    display_name,
    join_id,
    split_id,
)


class TestIdentifiers:
    def test_split_and_join(self) -> None:
        assert split_id("foo:bar:baz") == ["foo", "bar", "baz"]
        assert join_id(["foo", "bar", "baz"]) == "foo:bar:baz"
        assert split_id("") == []

    def test_custom_separator(self) -> None:
        assert split_id("foo.bar", ".") == ["foo", "bar"]
        assert join_id(["foo", "bar"], ".") == "foo.bar"

    def test_checked_segments(self) -> None:
        assert checked_segments("foo:bar") == ["foo", "bar"]
        for bad in ("", "foo::bar", ":foo", "foo:"):
            with pytest.raises(InvalidIdentifierError):
                checked_segments(bad)

    def test_display_name(self) -> None:
        assert display_name("foo:bar:baz") == "foo bar baz"
        assert display_name("foo") == "foo"


class TestConvertArgv:
    def test_slices_after_command(self) -> None:
        assert convert_argv("foo:bar", ["foo", "bar", "--flag", "x"]) == ["--flag", "x"]

    def test_host_offset(self) -> None:
        raw = ["node", "bin/run", "foo", "bar", "--flag"]
        assert convert_argv("foo:bar", raw, offset=2) == ["--flag"]

    def test_configured_offset(self, default_config) -> None:
        default_config.argv_offset = 1
        assert convert_argv("foo", ["tool", "foo", "a"]) == ["a"]

    def test_nothing_left(self) -> None:
        assert convert_argv("foo:bar", ["foo", "bar"]) == []


class TestMain:
    def test_setup_logging(self) -> None:
        handler = main.setup_logging(logging.DEBUG)
        try:
            assert handler in main.root_logger.handlers
            assert main.root_logger.level == logging.DEBUG
        finally:
            main.root_logger.removeHandler(handler)

    def test_setup_logging_twice_keeps_one_handler(self) -> None:
        before = list(main.root_logger.handlers)
        first = main.setup_logging(logging.INFO)
        try:
            second = main.setup_logging(logging.WARNING)
            assert second is first
            assert len(main.root_logger.handlers) == len(before) + 1
            assert main.root_logger.level == logging.WARNING
        finally:
            main.root_logger.removeHandler(first)

    def test_app_main(self, monkeypatch) -> None:
        registry = CommandRegistry(config=Config(), with_help=False)

        @registry.command("foo:bar")
        async def bar(ctx, args, cmd):
            return args

        monkeypatch.setattr(main.sys, "argv", ["tool", "foo", "bar", "x"])
        before = len(main.root_logger.handlers)
        assert main.app_main(registry) == ("x",)
        assert main.app_main(registry, ["foo", "bar"]) == ()
        assert len(main.root_logger.handlers) <= before + 1

        for handler in list(main.root_logger.handlers):
            if getattr(handler, "_cmdspaces", False):
                main.root_logger.removeHandler(handler)

"""Tests for cli_extensions/enable_commands.py."""

import argparse
from unittest.mock import Mock, patch

import pytest

from plugman.cli_extensions.enable_commands import EnableCommands
from plugman.core.errors import ArgumentError


class TestEnableAddCliArguments:

    def test_adds_enable_and_disable(self):
        mock_subparsers = Mock()
        EnableCommands.add_cli_arguments(mock_subparsers)

        calls = [c[0][0] for c in mock_subparsers.add_parser.call_args_list]
        assert "enable" in calls
        assert "disable" in calls

    def test_accepts_several_repositories(self):
        parser = argparse.ArgumentParser()
        subparsers = parser.add_subparsers(dest="command")
        EnableCommands.add_cli_arguments(subparsers)

        args = parser.parse_args(["enable", "a/b", "c/d"])
        assert args.repos == ["a/b", "c/d"]


class TestEnableProcessCliCommand:

    def test_enable_normalizes_and_delegates(self):
        args = Mock()
        args.command = "enable"
        args.repos = ["a/b", "https://github.com/c/d.git"]
        config = Mock()
        messages = []

        with patch(
            "plugman.cli_extensions.enable_commands.enable_repositories",
            return_value=["github.com/a/b"],
        ) as mock_enable, patch(
            "plugman.cli_extensions.enable_commands.message",
            side_effect=lambda t, *a, **kw: messages.append(t),
        ):
            EnableCommands.process_cli_command(args, config)

        mock_enable.assert_called_once_with(config, ["github.com/a/b", "github.com/c/d"])
        assert "Enabled 'github.com/a/b'" in messages

    def test_disable_delegates(self):
        args = Mock()
        args.command = "disable"
        args.repos = ["a/b"]
        config = Mock()

        with patch(
            "plugman.cli_extensions.enable_commands.disable_repositories", return_value=[],
        ) as mock_disable, patch("plugman.cli_extensions.enable_commands.message"):
            EnableCommands.process_cli_command(args, config)

        mock_disable.assert_called_once_with(config, ["github.com/a/b"])

    def test_malformed_identifier_does_not_call_operation(self):
        args = Mock()
        args.command = "enable"
        args.repos = ["a/b", "not valid"]

        with patch("plugman.cli_extensions.enable_commands.enable_repositories") as mock_enable:
            with pytest.raises(ArgumentError):
                EnableCommands.process_cli_command(args, Mock())

        mock_enable.assert_not_called()

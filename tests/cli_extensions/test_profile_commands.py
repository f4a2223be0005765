"""Tests for cli_extensions/profile_commands.py."""

from unittest.mock import Mock, patch

import pytest

from plugman.cli_extensions.profile_commands import ProfileCommands
from plugman.core.errors import ProfileNotFound


def _capture():
    messages = []
    return messages, patch(
        "plugman.cli_extensions.profile_commands.message",
        side_effect=lambda t, *a, **kw: messages.append(t),
    )


class TestProfileAddCliArguments:

    def test_adds_subcommands(self):
        mock_subparsers = Mock()
        mock_profile_parser = Mock()
        mock_profile_sub = Mock()
        mock_profile_parser.add_subparsers.return_value = mock_profile_sub
        mock_subparsers.add_parser.return_value = mock_profile_parser

        ProfileCommands.add_cli_arguments(mock_subparsers)

        calls = [c[0][0] for c in mock_profile_sub.add_parser.call_args_list]
        assert calls == ["list", "show", "new", "set", "add", "rm"]


class TestProfileProcessCliCommand:

    def test_no_subcommand_shows_usage(self):
        args = Mock()
        args.profile_command = None
        messages, patcher = _capture()

        with patcher:
            ProfileCommands.process_cli_command(args, Mock())

        assert "Usage: plugman profile <command>" in "\n".join(messages)

    def test_add_delegates(self):
        args = Mock()
        args.profile_command = "add"
        args.name = "work"
        args.repos = ["a/b"]
        config = Mock()

        with patch(
            "plugman.cli_extensions.profile_commands.add_to_named_profile", return_value=["github.com/a/b"],
        ) as mock_add, patch("plugman.cli_extensions.profile_commands.message"):
            ProfileCommands.process_cli_command(args, config)

        mock_add.assert_called_once_with(config, "work", ["github.com/a/b"])

    def test_rm_delegates(self):
        args = Mock()
        args.profile_command = "rm"
        args.name = "work"
        args.repos = ["a/b"]
        config = Mock()

        with patch(
            "plugman.cli_extensions.profile_commands.remove_from_named_profile", return_value=[],
        ) as mock_rm:
            ProfileCommands.process_cli_command(args, config)

        mock_rm.assert_called_once_with(config, "work", ["github.com/a/b"])

    def test_new_and_set_delegate(self):
        config = Mock()
        with patch("plugman.cli_extensions.profile_commands.create_profile") as mock_new, \
                patch("plugman.cli_extensions.profile_commands.switch_profile") as mock_set, \
                patch("plugman.cli_extensions.profile_commands.message"):
            for cmd in ("new", "set"):
                args = Mock()
                args.profile_command = cmd
                args.name = "x"
                ProfileCommands.process_cli_command(args, config)

        mock_new.assert_called_once()
        mock_set.assert_called_once()


class TestProfileListAndShow:

    def test_list_marks_current(self, config, seeded_manifest):
        seeded_manifest()
        messages, patcher = _capture()

        with patcher:
            ProfileCommands.list_profiles(config)

        assert messages == ["* default", "  work"]

    def test_show_current(self, config, seeded_manifest):
        seeded_manifest(enabled=["github.com/a/b"])
        messages, patcher = _capture()

        with patcher:
            ProfileCommands.show_profile(config, None)

        assert messages[0] == "name: default (current)"
        assert "  github.com/a/b" in messages

    def test_show_empty_profile(self, config, seeded_manifest):
        seeded_manifest()
        messages, patcher = _capture()

        with patcher:
            ProfileCommands.show_profile(config, "work")

        assert messages == ["name: work", "repos path:", "  (none)"]

    def test_show_unknown_profile(self, config, seeded_manifest):
        seeded_manifest()
        with pytest.raises(ProfileNotFound):
            ProfileCommands.show_profile(config, "nope")

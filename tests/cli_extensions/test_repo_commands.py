"""Tests for cli_extensions/repo_commands.py - list, rebuild and unlock."""

import argparse
from unittest.mock import Mock, patch

from plugman.cli_extensions.repo_commands import RepoCommands


def _capture():
    messages = []
    return messages, patch(
        "plugman.cli_extensions.repo_commands.message",
        side_effect=lambda t, *a, **kw: messages.append(t),
    )


class TestRepoCommandsAddCliArguments:

    def test_adds_parsers(self):
        mock_subparsers = Mock()
        RepoCommands.add_cli_arguments(mock_subparsers)

        calls = [c[0][0] for c in mock_subparsers.add_parser.call_args_list]
        assert calls == ["list", "rebuild", "unlock"]

    def test_unlock_force_flag(self):
        parser = argparse.ArgumentParser()
        subparsers = parser.add_subparsers(dest="command")
        RepoCommands.add_cli_arguments(subparsers)

        assert parser.parse_args(["unlock"]).force is False
        assert parser.parse_args(["unlock", "--force"]).force is True


class TestRepoCommandsProcess:

    def test_unlock_delegates(self):
        args = Mock()
        args.command = "unlock"
        args.force = True
        config = Mock()

        with patch("plugman.cli_extensions.repo_commands.unlock") as mock_unlock:
            RepoCommands.process_cli_command(args, config)

        mock_unlock.assert_called_once_with(
            config.transaction_file, config.stale_transaction_seconds, force=True,
        )

    def test_rebuild_delegates(self):
        args = Mock()
        args.command = "rebuild"
        config = Mock()

        with patch(
            "plugman.cli_extensions.repo_commands.rebuild_runtime", return_value=["github.com/a/b"],
        ) as mock_rebuild, patch("plugman.cli_extensions.repo_commands.message"):
            RepoCommands.process_cli_command(args, config)

        mock_rebuild.assert_called_once_with(config)


class TestListRepos:

    def test_empty(self, config):
        messages, patcher = _capture()
        with patcher:
            RepoCommands.list_repos(config)

        output = "\n".join(messages)
        assert "No repositories imported." in output
        assert "Total: 0 repositories, 0 enabled" in output

    def test_marks_enabled(self, config, seeded_manifest):
        seeded_manifest(enabled=["github.com/c/d"])
        messages, patcher = _capture()
        with patcher:
            RepoCommands.list_repos(config)

        assert "  [ ] github.com/a/b (static, trx 1, static)" in messages
        assert "  [x] github.com/c/d (static, trx 2, static)" in messages
        assert "Total: 2 repositories, 1 enabled" in messages

    def test_reports_orphans(self, config, seeded_manifest):
        seeded_manifest()
        (config.repos_directory / "github.com" / "lost" / "one").mkdir(parents=True)
        messages, patcher = _capture()
        with patcher:
            RepoCommands.list_repos(config)

        assert "  github.com/lost/one" in messages

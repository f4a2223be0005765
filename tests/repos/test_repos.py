"""Tests for repos/ - Repository plugins."""

import os
from unittest.mock import patch

import git
import pytest

from plugman.core.manifest import Repository, RepoType
from plugman.repos import GitRepo, StaticRepo, create_repo


def _commit(path, files: dict[str, str], message="commit") -> git.Repo:
    repo = git.Repo.init(path) if not (path / ".git").exists() else git.Repo(path)
    for rel, text in files.items():
        target = path / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text)
    repo.index.add(list(files))
    repo.index.commit(message)
    return repo


class TestCreateRepo:

    def test_static(self, tmp_path):
        repo = create_repo(Repository(RepoType.STATIC, 1, "github.com/a/b"), tmp_path)
        assert isinstance(repo, StaticRepo)
        assert repo.get_path() == tmp_path / "github.com" / "a" / "b"

    def test_vcs(self, tmp_path):
        repo = create_repo(Repository(RepoType.VCS, 1, "github.com/a/b"), tmp_path)
        assert isinstance(repo, GitRepo)

    def test_repr_and_str(self, tmp_path):
        repo = StaticRepo("github.com/a/b", tmp_path)
        assert "github.com/a/b" in str(repo)
        assert "StaticRepo" in repr(repo)


class TestStaticRepo:

    def test_install_copies_everything(self, tmp_path):
        repos_dir = tmp_path / "repos"
        src = repos_dir / "github.com" / "a" / "b"
        (src / "plugin").mkdir(parents=True)
        (src / "plugin" / "x.vim").write_text("x")
        (src / ".hidden").write_text("h")

        StaticRepo("github.com/a/b", repos_dir).install(tmp_path / "out")

        assert (tmp_path / "out" / "plugin" / "x.vim").read_text() == "x"
        assert (tmp_path / "out" / ".hidden").exists()

    def test_exists(self, tmp_path):
        repo = StaticRepo("github.com/a/b", tmp_path)
        assert not repo.exists()
        repo.get_path().mkdir(parents=True)
        assert repo.exists()

    def test_describe(self, tmp_path):
        assert StaticRepo("github.com/a/b", tmp_path).describe() == "static"


class TestGitRepo:

    @pytest.fixture
    def repos_dir(self, tmp_path):
        return tmp_path / "repos"

    @pytest.fixture
    def local_path(self, repos_dir):
        path = repos_dir / "github.com" / "a" / "b"
        path.mkdir(parents=True)
        return path

    def test_install_writes_head_tree_only(self, tmp_path, repos_dir, local_path):
        _commit(local_path, {"plugin/x.vim": "committed", "doc/x.txt": "doc"})
        (local_path / "plugin" / "x.vim").write_text("edited")
        (local_path / "scratch.vim").write_text("untracked")

        GitRepo("github.com/a/b", repos_dir).install(tmp_path / "out")

        out = tmp_path / "out"
        assert (out / "plugin" / "x.vim").read_text() == "committed"
        assert (out / "doc" / "x.txt").read_text() == "doc"
        assert not (out / "scratch.vim").exists()
        assert not (out / ".git").exists()

    def test_install_keeps_executable_bit(self, tmp_path, repos_dir, local_path):
        script = local_path / "bin" / "tool"
        script.parent.mkdir()
        script.write_text("#!/bin/sh\n")
        script.chmod(0o755)
        repo = git.Repo.init(local_path)
        repo.index.add(["bin/tool"])
        repo.index.commit("tool")

        GitRepo("github.com/a/b", repos_dir).install(tmp_path / "out")

        assert os.access(tmp_path / "out" / "bin" / "tool", os.X_OK)

    def test_install_without_commits_copies_worktree(self, tmp_path, repos_dir, local_path):
        git.Repo.init(local_path)
        (local_path / "x.vim").write_text("x")

        GitRepo("github.com/a/b", repos_dir).install(tmp_path / "out")

        assert (tmp_path / "out" / "x.vim").exists()
        assert not (tmp_path / "out" / ".git").exists()

    def test_install_invalid_repository(self, tmp_path, repos_dir, local_path):
        with pytest.raises(OSError, match="not a valid git repository"):
            GitRepo("github.com/a/b", repos_dir).install(tmp_path / "out")

    def test_install_and_describe_close_repository(self, tmp_path, repos_dir, local_path):
        _commit(local_path, {"x.vim": "x"}).close()
        repo = GitRepo("github.com/a/b", repos_dir)

        with patch.object(git.Repo, "close", autospec=True) as mock_close:
            repo.install(tmp_path / "out")
            repo.describe()

        assert mock_close.call_count >= 2

    def test_describe_head(self, repos_dir, local_path):
        repo = _commit(local_path, {"x.vim": "x"})
        assert GitRepo("github.com/a/b", repos_dir).describe() == repo.head.commit.hexsha[:8]

    def test_describe_no_commits(self, repos_dir, local_path):
        git.Repo.init(local_path)
        assert GitRepo("github.com/a/b", repos_dir).describe() == "(no commits)"

    def test_describe_invalid(self, repos_dir, local_path):
        assert GitRepo("github.com/a/b", repos_dir).describe() == "(invalid git repository)"

    def test_is_valid(self, repos_dir, local_path):
        repo = GitRepo("github.com/a/b", repos_dir)
        (local_path / ".git").mkdir()
        assert not repo.is_valid()

        (local_path / ".git").rmdir()
        git.Repo.init(local_path)
        assert repo.is_valid()

    def test_static_is_valid_when_present(self, tmp_path):
        repo = StaticRepo("github.com/a/b", tmp_path)
        assert not repo.is_valid()
        repo.get_path().mkdir(parents=True)
        assert repo.is_valid()

"""Shared fixtures for plugman tests."""

from pathlib import Path

import pytest

from plugman.config import Config
from plugman.core.manifest import Manifest, Profile, Repository, RepoType, write_manifest
from plugman.output import get_output


@pytest.fixture(autouse=True)
def _reset_output():
    """Keep verbosity changes made by main() from leaking between tests."""
    output = get_output()
    verbosity, use_color = output.verbosity, output.use_color
    yield
    output.verbosity, output.use_color = verbosity, use_color


@pytest.fixture
def config(tmp_path, monkeypatch):
    """A Config rooted in a fresh temporary home directory."""
    monkeypatch.delenv("PLUGMAN_HOME", raising=False)
    cfg = Config(tmp_path / "home")
    cfg.ensure_directories()
    return cfg


@pytest.fixture
def plugin_source(tmp_path):
    """Factory for a small static plugin directory outside the home."""

    def _make(name: str = "src-plugin", files: dict[str, str] | None = None) -> Path:
        root = tmp_path / "sources" / name
        for rel, text in (files or {"plugin/foo.vim": "echo 'foo'\n"}).items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text)
        return root

    return _make


@pytest.fixture
def seeded_manifest(config):
    """Write a manifest with two registered repositories and two profiles."""

    def _seed(enabled: list[str] | None = None) -> Manifest:
        manifest = Manifest(
            trx_id=2,
            active_profile="default",
            repos=[
                Repository(type=RepoType.STATIC, trx_id=1, path="github.com/a/b"),
                Repository(type=RepoType.STATIC, trx_id=2, path="github.com/c/d"),
            ],
            profiles=[
                Profile(name="default", repos_path=list(enabled or [])),
                Profile(name="work"),
            ],
        )
        for repo in manifest.repos:
            (config.repos_directory.joinpath(*repo.path.split("/")) / "plugin").mkdir(parents=True)
        write_manifest(config.manifest_file, manifest)
        return manifest

    return _seed

"""Shared pytest fixtures for all tests."""

from pathlib import Path

import pytest

from repo_router.commands import CommandResult
from repo_router.config import RouterConfig


def make_tree(root: Path, files: dict[str, str]) -> Path:
    """Create ``files`` (relative path -> content) under ``root``."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


class FakeRunner:
    """CommandRunner that records calls and simulates ``git clone``."""

    def __init__(self, checkout_files: dict[str, str] | None = None, returncode: int = 0):
        self.checkout_files = checkout_files or {}
        self.returncode = returncode
        self.calls: list[tuple[str, ...]] = []

    def run(self, args, cwd=None, quiet=False):
        args = tuple(str(a) for a in args)
        self.calls.append(args)
        if args[:2] == ("git", "clone") and self.returncode == 0:
            target = Path(args[-1])
            target.mkdir(parents=True)
            make_tree(target, {".git/HEAD": "ref: refs/heads/main\n", **self.checkout_files})
        return CommandResult(args=args, returncode=self.returncode)


@pytest.fixture
def repo_dir(tmp_path):
    """An empty repository working copy."""
    path = tmp_path / "repo"
    path.mkdir()
    return path


@pytest.fixture
def destination_root(tmp_path):
    """Root directory for the per-language folders."""
    path = tmp_path / "Documents"
    path.mkdir()
    return path


@pytest.fixture
def router_config(destination_root):
    """Router configuration pointing at a temporary destination root."""
    return RouterConfig(destination_root=destination_root)


@pytest.fixture
def build_tree():
    """Return the ``make_tree`` helper."""
    return make_tree


@pytest.fixture
def fake_runner():
    """Return a factory for FakeRunner instances."""
    return FakeRunner

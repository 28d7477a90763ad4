"""Configuration for repo-router."""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path


DEFAULT_DESTINATION_ROOT = Path.home() / "Documents"


@dataclass
class RouterConfig:
    """Where sorted repositories end up and which editor opens them."""

    destination_root: Path = field(default_factory=lambda: DEFAULT_DESTINATION_ROOT)
    editor: str = "code"

    def __post_init__(self):
        """Normalize the destination root."""
        if not str(self.destination_root).strip():
            raise ValueError("Destination root cannot be empty")
        self.destination_root = Path(self.destination_root).expanduser()
        if not self.editor or not self.editor.strip():
            raise ValueError("Editor command cannot be empty")
        self.editor = self.editor.strip()

    @classmethod
    def from_env(cls, destination_root: str | Path | None = None) -> "RouterConfig":
        """
        Create configuration from environment variables.

        Args:
            destination_root: Explicit root, takes precedence over the environment

        Returns:
            RouterConfig instance
        """
        root = destination_root or os.getenv("REPO_ROUTER_DESTINATION_ROOT")
        return cls(
            destination_root=Path(root) if root else DEFAULT_DESTINATION_ROOT,
            editor=os.getenv("REPO_ROUTER_EDITOR", "code"),
        )


@dataclass
class CloneRequest:
    """Everything needed to clone and sort one repository."""

    url: str
    branch: str | None = None
    depth: int | None = None
    recursive: bool = False
    quiet: bool = False
    force: bool = False
    language: str | None = None
    name: str | None = None
    open_after: bool = False

    def __post_init__(self):
        """Validate the request."""
        if not self.url or not self.url.strip():
            raise ValueError("No git URL provided")
        self.url = self.url.strip()
        if self.depth is not None and self.depth < 1:
            raise ValueError("Clone depth must be a positive integer")
        if self.name is not None:
            self.name = validate_repository_name(self.name)
        else:
            self.name = repository_name_from_url(self.url)

    @property
    def repository_name(self) -> str:
        return self.name


def validate_repository_name(name: str) -> str:
    """
    Validate a directory name for a cloned repository.

    Raises:
        ValueError: If the name is empty or would escape its parent directory
    """
    name = name.strip()
    if not name:
        raise ValueError("Repository name cannot be empty")
    if name in (".", "..") or re.search(r"[/\\]", name):
        raise ValueError(f"Invalid repository name: {name!r}")
    return name


def repository_name_from_url(url: str) -> str:
    """Derive the checkout directory name the way ``basename URL .git`` does."""
    trimmed = url.strip().rstrip("/")
    # scp-like URLs (git@host:user/repo.git) use ':' before the path
    base = re.split(r"[/:]", trimmed)[-1]
    if base.endswith(".git") and base != ".git":
        base = base[: -len(".git")]
    return validate_repository_name(base)

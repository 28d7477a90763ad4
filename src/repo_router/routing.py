"""Mapping language tags to destination directories and moving checkouts there."""

import logging
import shutil
from collections.abc import Callable
from pathlib import Path

from .errors import DestinationExistsError, PlacementCancelled
from .language_detection import LanguageTag

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[Path], bool]


def destination_for(tag: LanguageTag, destination_root: Path) -> Path:
    """Return the per-language directory, e.g. ``<root>/Rust_projects``."""
    return Path(destination_root) / f"{LanguageTag(tag).value}_projects"


class RepositoryRouter:
    """Moves a checkout into the directory for its language."""

    def __init__(self, destination_root: Path):
        self.destination_root = Path(destination_root)

    def target_path(self, tag: LanguageTag, name: str) -> Path:
        return destination_for(tag, self.destination_root) / name

    def place(
        self,
        source: Path,
        tag: LanguageTag,
        name: str,
        force: bool = False,
        confirm: ConfirmCallback | None = None,
    ) -> Path:
        """
        Move ``source`` to ``<root>/<Tag>_projects/<name>``.

        Args:
            source: Directory to move
            tag: Language the repository was sorted into
            name: Directory name at the destination
            force: Replace an existing directory without asking
            confirm: Asked whether to replace an existing directory

        Returns:
            Final location of the repository

        Raises:
            DestinationExistsError: Target exists and neither force nor confirm given
            PlacementCancelled: confirm declined the replacement
        """
        language_dir = destination_for(tag, self.destination_root)
        language_dir.mkdir(parents=True, exist_ok=True)
        target = language_dir / name

        if target.exists() or target.is_symlink():
            if force:
                logger.info(f"Force replacing existing repository at {target}")
            elif confirm is None:
                raise DestinationExistsError(target)
            elif not confirm(target):
                raise PlacementCancelled(target)
            _remove(target)

        shutil.move(str(source), str(target))
        logger.info(f"Moved {source} to {target}")
        return target


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()

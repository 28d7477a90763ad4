"""Error taxonomy for cloning and placing repositories."""

from pathlib import Path
from typing import Any


class CloneError(Exception):
    """Base class for clone workflow errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "CLONE_ERROR",
        technical_details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.user_message = message
        self.technical_details = technical_details or {}


class CloneFailedError(CloneError):
    """git clone exited with a non-zero status."""

    def __init__(self, message: str, technical_details: dict[str, Any] | None = None):
        super().__init__(message, "CLONE_FAILED", technical_details)


class DestinationExistsError(CloneError):
    """The target directory already holds a repository of that name."""

    def __init__(self, path: Path):
        super().__init__(
            f"Repository '{path.name}' already exists in {path.parent}",
            "DESTINATION_EXISTS",
            {"path": str(path)},
        )
        self.path = path


class PlacementCancelled(CloneError):
    """The user declined to replace an existing repository."""

    def __init__(self, path: Path):
        super().__init__("Cloning cancelled.", "PLACEMENT_CANCELLED", {"path": str(path)})
        self.path = path

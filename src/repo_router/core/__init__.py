"""Core clone-and-sort workflow shared between the CLI and the MCP server."""

from ..config import CloneRequest
from ..errors import (
    CloneError,
    CloneFailedError,
    DestinationExistsError,
    PlacementCancelled,
)
from .workflow import CloneOutcome, CloneWorkflow, StatusCallback, build_clone_command

__all__ = [
    "CloneWorkflow",
    "CloneRequest",
    "CloneOutcome",
    "StatusCallback",
    "build_clone_command",
    "CloneError",
    "CloneFailedError",
    "DestinationExistsError",
    "PlacementCancelled",
]

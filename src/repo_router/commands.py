"""External command execution for git and editor invocations."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

logger = logging.getLogger(__name__)

# Shell convention for "command not found"
COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class CommandResult:
    """Exit status of an external command."""

    args: tuple[str, ...]
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    """Runs an external command and reports its exit status."""

    def run(
        self,
        args: Sequence[str],
        cwd: Path | None = None,
        quiet: bool = False,
    ) -> CommandResult: ...


class SubprocessRunner:
    """CommandRunner backed by :func:`subprocess.run`."""

    def run(
        self,
        args: Sequence[str],
        cwd: Path | None = None,
        quiet: bool = False,
    ) -> CommandResult:
        """
        Run ``args`` without a shell.

        Args:
            args: Program and arguments
            cwd: Working directory for the command
            quiet: Discard the command's stderr

        Returns:
            CommandResult with the exit status
        """
        args = tuple(str(a) for a in args)
        logger.debug(f"Running: {' '.join(args)}")
        try:
            completed = subprocess.run(
                args,
                cwd=cwd,
                stderr=subprocess.DEVNULL if quiet else None,
                check=False,
            )
        except FileNotFoundError:
            logger.error(f"Command not found: {args[0]}")
            return CommandResult(args=args, returncode=COMMAND_NOT_FOUND)

        if completed.returncode != 0:
            logger.debug(f"Command exited with {completed.returncode}: {' '.join(args)}")
        return CommandResult(args=args, returncode=completed.returncode)

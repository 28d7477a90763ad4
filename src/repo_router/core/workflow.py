"""Clone a repository, classify it and move it into its language directory."""

import logging
import shutil
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..commands import CommandRunner, SubprocessRunner
from ..config import CloneRequest, RouterConfig
from ..errors import CloneFailedError
from ..language_detection import LanguageTag, RepositoryClassifier
from ..routing import ConfirmCallback, RepositoryRouter

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]


@dataclass
class CloneOutcome:
    """Where a cloned repository ended up and why."""

    repository_name: str
    language: LanguageTag
    location: Path
    overridden: bool = False
    branch: str | None = None
    warnings: list[str] = field(default_factory=list)


def build_clone_command(request: CloneRequest, target: Path) -> list[str]:
    """Assemble the ``git clone`` argument list for a request."""
    args = ["git", "clone"]
    if request.branch:
        args += ["-b", request.branch]
    if request.depth:
        args += ["--depth", str(request.depth)]
    if request.recursive:
        args.append("--recursive")
    if request.quiet:
        args.append("-q")
    args += [request.url, str(target)]
    return args


class CloneWorkflow:
    """Runs clone, detection and placement for one request."""

    def __init__(
        self,
        config: RouterConfig,
        runner: CommandRunner | None = None,
        classifier: RepositoryClassifier | None = None,
        confirm: ConfirmCallback | None = None,
        status_callback: StatusCallback | None = None,
        which: Callable[[str], str | None] = shutil.which,
    ):
        """
        Initialize the workflow.

        Args:
            config: Destination root and editor settings
            runner: Executes git and the editor; defaults to subprocess
            classifier: Language classifier to use
            confirm: Asked before replacing an existing checkout
            status_callback: Receives human-readable progress messages
            which: Looks up an executable on PATH
        """
        self.config = config
        self.runner = runner or SubprocessRunner()
        self.classifier = classifier or RepositoryClassifier()
        self.router = RepositoryRouter(config.destination_root)
        self.confirm = confirm
        self.status_callback = status_callback
        self.which = which

    def _status(self, message: str) -> None:
        logger.debug(message)
        if self.status_callback:
            self.status_callback(message)

    def run(self, request: CloneRequest) -> CloneOutcome:
        """
        Clone ``request.url`` and sort it by language.

        Raises:
            CloneFailedError: git clone returned a non-zero status
            DestinationExistsError: Target exists and no way to resolve it
            PlacementCancelled: The user declined to replace the target
        """
        name = request.repository_name
        warnings: list[str] = []

        with tempfile.TemporaryDirectory(prefix="repo-router-") as temp_dir:
            checkout = Path(temp_dir) / name
            self._status("Cloning repository...")
            result = self.runner.run(build_clone_command(request, checkout), quiet=request.quiet)
            if not result.ok:
                raise CloneFailedError(
                    "Failed to clone repository",
                    {"url": request.url, "returncode": result.returncode},
                )

            detection = self.classifier.detect(checkout, override=request.language)
            if detection.warning:
                warnings.append(detection.warning)

            if self.router.target_path(detection.language, name).exists() and request.force:
                self._status("Force replacing existing repository...")
            location = self.router.place(
                checkout,
                detection.language,
                name,
                force=request.force,
                confirm=self.confirm,
            )

        outcome = CloneOutcome(
            repository_name=name,
            language=detection.language,
            location=location,
            overridden=detection.overridden,
            branch=request.branch,
            warnings=warnings,
        )

        if request.open_after:
            self._open_in_editor(outcome)

        return outcome

    def _open_in_editor(self, outcome: CloneOutcome) -> None:
        editor = self.config.editor
        if self.which(editor) is None:
            warning = (
                f"Editor command '{editor}' not found. "
                "Please install it or add it to PATH."
            )
            logger.warning(warning)
            outcome.warnings.append(warning)
            return

        self._status("Opening in editor...")
        result = self.runner.run([editor, str(outcome.location)])
        if not result.ok:
            warning = f"Editor exited with status {result.returncode}"
            logger.warning(warning)
            outcome.warnings.append(warning)

"""Repository language classification by file-extension counts and marker files."""

import logging
from pathlib import Path
from typing import Iterable

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern

from .models import (
    ClassificationResult,
    DetectionMethod,
    ExtensionCount,
    LanguageTag,
    MarkerFile,
)

logger = logging.getLogger(__name__)


class RepositoryClassifier:
    """Picks the primary language of a cloned repository working copy."""

    # File extension to language mapping
    EXTENSION_MAP = {
        ".py": LanguageTag.PYTHON,
        ".go": LanguageTag.GO,
        ".js": LanguageTag.JAVASCRIPT,
        ".jsx": LanguageTag.JAVASCRIPT,
        ".ts": LanguageTag.JAVASCRIPT,
        ".tsx": LanguageTag.JAVASCRIPT,
        ".rs": LanguageTag.RUST,
        ".java": LanguageTag.JAVA,
        ".c": LanguageTag.C,
        ".cpp": LanguageTag.C,
        ".cc": LanguageTag.C,
        ".h": LanguageTag.C,
        ".hpp": LanguageTag.C,
        ".rb": LanguageTag.RUBY,
        ".php": LanguageTag.PHP,
        ".swift": LanguageTag.SWIFT,
    }

    # Each marker is checked on its own; several present markers for one
    # language each add their bonus.
    MARKER_FILES = (
        MarkerFile("package.json", LanguageTag.JAVASCRIPT),
        MarkerFile("requirements.txt", LanguageTag.PYTHON),
        MarkerFile("setup.py", LanguageTag.PYTHON),
        MarkerFile("pyproject.toml", LanguageTag.PYTHON),
        MarkerFile("go.mod", LanguageTag.GO),
        MarkerFile("Cargo.toml", LanguageTag.RUST),
        MarkerFile("pom.xml", LanguageTag.JAVA),
        MarkerFile("build.gradle", LanguageTag.JAVA),
        MarkerFile("Gemfile", LanguageTag.RUBY),
        MarkerFile("composer.json", LanguageTag.PHP),
        MarkerFile("Package.swift", LanguageTag.SWIFT),
    )

    # Language name normalization mapping for user overrides
    LANGUAGE_ALIASES = {
        "python": LanguageTag.PYTHON,
        "py": LanguageTag.PYTHON,
        "go": LanguageTag.GO,
        "golang": LanguageTag.GO,
        "javascript": LanguageTag.JAVASCRIPT,
        "js": LanguageTag.JAVASCRIPT,
        "typescript": LanguageTag.JAVASCRIPT,
        "ts": LanguageTag.JAVASCRIPT,
        "rust": LanguageTag.RUST,
        "rs": LanguageTag.RUST,
        "java": LanguageTag.JAVA,
        "c": LanguageTag.C,
        "cpp": LanguageTag.C,
        "c++": LanguageTag.C,
        "ruby": LanguageTag.RUBY,
        "rb": LanguageTag.RUBY,
        "php": LanguageTag.PHP,
        "swift": LanguageTag.SWIFT,
        "other": LanguageTag.OTHER,
    }

    DEFAULT_EXCLUDE_PATTERNS = (".git/",)

    def __init__(self, exclude_patterns: Iterable[str] | None = None):
        """
        Initialize the classifier.

        Args:
            exclude_patterns: Extra gitignore-style patterns to skip while
                counting, on top of the version-control metadata directory
        """
        patterns = list(self.DEFAULT_EXCLUDE_PATTERNS)
        if exclude_patterns:
            patterns.extend(p.strip() for p in exclude_patterns if p and p.strip())
        self.exclude_patterns = patterns
        self.exclude_spec = PathSpec.from_lines(GitWildMatchPattern, patterns)

    def normalize_override(self, value: str) -> tuple[LanguageTag, str | None]:
        """
        Map a free-text language choice onto a tag.

        Returns:
            The tag and a warning message, which is None for known values
        """
        normalized = value.strip().lower()
        tag = self.LANGUAGE_ALIASES.get(normalized)
        if tag is None:
            warning = f"Unknown language '{value}', using 'Other'"
            logger.info(warning)
            return LanguageTag.OTHER, warning
        return tag, None

    def _is_excluded(self, relative_path: Path, is_dir: bool) -> bool:
        path = relative_path.as_posix()
        if is_dir:
            path += "/"
        return self.exclude_spec.match_file(path)

    def count_extensions(self, root: Path) -> dict[LanguageTag, int]:
        """Count files per language under ``root``, skipping excluded directories.

        Unreadable directories contribute nothing.
        """
        counts = {tag: 0 for tag in LanguageTag.scored()}
        dirs_to_scan = [root]

        while dirs_to_scan:
            current_dir = dirs_to_scan.pop()

            try:
                entries = list(current_dir.iterdir())
            except OSError as e:
                logger.debug(f"Could not read directory {current_dir}: {e}")
                continue

            for item in entries:
                try:
                    if item.is_symlink():
                        continue
                    relative_path = item.relative_to(root)
                    if item.is_dir():
                        if not self._is_excluded(relative_path, is_dir=True):
                            dirs_to_scan.append(item)
                    elif item.is_file():
                        tag = self.EXTENSION_MAP.get(_extension(item.name))
                        if tag is not None and not self._is_excluded(relative_path, is_dir=False):
                            counts[tag] += 1
                except OSError as e:
                    logger.debug(f"Could not inspect {item}: {e}")

        return counts

    def apply_markers(self, root: Path, counts: dict[LanguageTag, int]) -> dict[LanguageTag, int]:
        """Add the bonus of every marker file present at the repository root."""
        scores = dict(counts)
        for marker in self.MARKER_FILES:
            try:
                present = (root / marker.filename).is_file()
            except OSError:
                present = False
            if present:
                scores[marker.language] = scores.get(marker.language, 0) + marker.bonus
                logger.debug(f"Marker {marker.filename} found: +{marker.bonus} {marker.language}")
        return scores

    @staticmethod
    def pick_leader(scores: ExtensionCount) -> LanguageTag:
        """Return the highest-scoring tag; earlier tags win ties, all-zero is Other."""
        max_count = 0
        primary = LanguageTag.OTHER
        for tag in LanguageTag.scored():
            if scores[tag] > max_count:
                max_count = scores[tag]
                primary = tag
        return primary

    def score(self, root: str | Path) -> ExtensionCount:
        """Compute the full score table for a repository directory."""
        root = Path(root)
        try:
            is_dir = root.is_dir()
        except OSError:
            is_dir = False
        if not is_dir:
            logger.debug(f"Not a directory, nothing to score: {root}")
            return ExtensionCount()

        counts = self.count_extensions(root)
        return ExtensionCount(self.apply_markers(root, counts))

    def detect(self, root: str | Path, override: str | None = None) -> ClassificationResult:
        """
        Classify a repository working copy.

        Args:
            root: Path to the repository (its ``.git`` directory is ignored)
            override: Optional user-chosen language; bypasses detection

        Returns:
            ClassificationResult with the tag, the scores and how it was reached
        """
        if override:
            tag, warning = self.normalize_override(override)
            return ClassificationResult(
                language=tag,
                method=DetectionMethod.OVERRIDE,
                warning=warning,
            )

        scores = self.score(root)
        tag = self.pick_leader(scores)
        method = DetectionMethod.DEFAULT if tag is LanguageTag.OTHER else DetectionMethod.EXTENSION_COUNT
        logger.info(f"Detected {tag} for {root} ({scores})")
        return ClassificationResult(language=tag, method=method, scores=scores)


def classify(
    root: str | Path,
    override: str | None = None,
    classifier: RepositoryClassifier | None = None,
) -> LanguageTag:
    """Return the primary language tag for the repository at ``root``."""
    classifier = classifier or RepositoryClassifier()
    return classifier.detect(root, override=override).language


def _extension(filename: str) -> str:
    """Text from the last dot on, so a bare ``.py`` counts like ``*.py``."""
    _, dot, ext = filename.rpartition(".")
    return f".{ext}" if dot else ""

"""Data models for repository language detection."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class LanguageTag(str, Enum):
    """Language buckets a repository can be sorted into.

    Declaration order is the evaluation order used to break ties: an earlier
    tag keeps the lead unless a later one scores strictly higher.
    """

    PYTHON = "Python"
    GO = "Go"
    JAVASCRIPT = "JavaScript"
    RUST = "Rust"
    JAVA = "Java"
    C = "C"
    RUBY = "Ruby"
    PHP = "PHP"
    SWIFT = "Swift"
    OTHER = "Other"

    @classmethod
    def scored(cls) -> tuple["LanguageTag", ...]:
        """Tags that take part in scoring, in priority order."""
        return tuple(tag for tag in cls if tag is not cls.OTHER)

    def __str__(self) -> str:
        return self.value


class DetectionMethod(Enum):
    """How a classification result was reached."""

    EXTENSION_COUNT = "extension_count"
    OVERRIDE = "override"
    DEFAULT = "default"


@dataclass(frozen=True)
class MarkerFile:
    """A root-level file whose presence adds a bonus to one language."""

    filename: str
    language: LanguageTag
    bonus: int = 10


class ExtensionCount:
    """Per-language scores for a single classification run.

    Built once and read-only afterwards. Every scored tag is present, missing
    ones default to zero.
    """

    __slots__ = ("_scores",)

    def __init__(self, scores: Mapping[LanguageTag, int] | None = None):
        scores = scores or {}
        values = {}
        for tag in LanguageTag.scored():
            value = int(scores.get(tag, 0))
            if value < 0:
                raise ValueError(f"Score for {tag} cannot be negative: {value}")
            values[tag] = value
        self._scores = MappingProxyType(values)

    def __getitem__(self, tag: LanguageTag) -> int:
        return self._scores[tag]

    def __iter__(self):
        return iter(self._scores)

    def __len__(self) -> int:
        return len(self._scores)

    def __eq__(self, other) -> bool:
        if isinstance(other, ExtensionCount):
            return dict(self._scores) == dict(other._scores)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._scores.items()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{tag.value}={count}" for tag, count in self._scores.items())
        return f"ExtensionCount({inner})"

    def items(self):
        return self._scores.items()

    def as_dict(self) -> dict[str, int]:
        """Plain ``{tag name: score}`` mapping, in priority order."""
        return {tag.value: count for tag, count in self._scores.items()}

    @property
    def total(self) -> int:
        return sum(self._scores.values())


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of classifying one repository working copy."""

    language: LanguageTag
    method: DetectionMethod
    scores: ExtensionCount = field(default_factory=ExtensionCount)
    warning: str | None = None

    @property
    def overridden(self) -> bool:
        return self.method is DetectionMethod.OVERRIDE

    def __repr__(self) -> str:
        return (
            f"ClassificationResult(language='{self.language.value}', "
            f"method={self.method.value}, total={self.scores.total})"
        )

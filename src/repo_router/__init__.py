"""repo-router - clone git repositories into per-language project directories."""

__version__ = "0.1.0"

from .cli import cli, main
from .language_detection import LanguageTag, RepositoryClassifier, classify
from .server import create_mcp_server

__all__ = [
    "main", "cli", "classify", "LanguageTag", "RepositoryClassifier",
    "create_mcp_server", "__version__",
]

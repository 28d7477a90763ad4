"""FastMCP server exposing repository language detection and routing."""

import logging
from pathlib import Path

from fastmcp.exceptions import ToolError
from fastmcp.server import FastMCP
from fastmcp.tools.tool import TextContent, ToolResult
from mcp.types import ToolAnnotations

from .config import RouterConfig, validate_repository_name
from .language_detection import RepositoryClassifier
from .routing import RepositoryRouter

logger = logging.getLogger(__name__)


def create_mcp_server(
    config: RouterConfig,
    classifier: RepositoryClassifier | None = None,
) -> FastMCP:
    """
    Create an MCP server for classifying and routing repositories.

    Args:
        config: Router configuration (destination root)
        classifier: Classifier instance, a default one is built if omitted

    Returns:
        FastMCP server instance
    """
    classifier = classifier or RepositoryClassifier()
    router = RepositoryRouter(config.destination_root)
    logger.info(f"Creating MCP server with destination root: {config.destination_root}")
    mcp = FastMCP("repo-router")

    @mcp.tool(
        annotations=ToolAnnotations(
            title="Detect Repository Language",
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=False,
        )
    )
    async def detect_repository_language(path: str, language: str | None = None) -> ToolResult:
        """
        Detect the primary language of a local repository checkout.

        Counts source files by extension (ignoring .git) and adds a bonus of 10
        for each ecosystem marker file at the root, such as go.mod or
        Cargo.toml. The highest score wins; earlier languages in the order
        Python, Go, JavaScript, Rust, Java, C, Ruby, PHP, Swift win ties.

        Args:
            path: Directory of the repository checkout
            language: Optional override such as "py", "ts" or "c++"

        Returns:
            ToolResult with language, method, per-language scores and any warning

        Raises:
            ToolError: When the path is not a directory
        """
        repo_path = Path(path).expanduser()
        if not repo_path.is_dir():
            raise ToolError(f"Not a directory: {path}")

        result = classifier.detect(repo_path, override=language)
        message = f"Language: {result.language.value} ({result.method.value})"
        if result.warning:
            message += f". Warning: {result.warning}"

        return ToolResult(
            content=[TextContent(type="text", text=message)],
            structured_content={
                "language": result.language.value,
                "method": result.method.value,
                "scores": result.scores.as_dict(),
                "warning": result.warning,
            },
        )

    @mcp.tool(
        annotations=ToolAnnotations(
            title="Resolve Destination",
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=False,
        )
    )
    async def resolve_destination(language: str, repository_name: str) -> ToolResult:
        """
        Show where a repository of the given language would be placed.

        Args:
            language: Language name or alias, e.g. "python", "golang", "rs"
            repository_name: Directory name of the checkout

        Returns:
            ToolResult with the normalized language and the destination path

        Raises:
            ToolError: When the repository name is not a valid directory name
        """
        try:
            name = validate_repository_name(repository_name)
        except ValueError as e:
            raise ToolError(str(e)) from e

        tag, warning = classifier.normalize_override(language)
        target = router.target_path(tag, name)

        return ToolResult(
            content=[TextContent(type="text", text=str(target))],
            structured_content={
                "language": tag.value,
                "destination": str(target),
                "exists": target.exists(),
                "warning": warning,
            },
        )

    return mcp

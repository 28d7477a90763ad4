"""Command-line interface for repo-router."""

import argparse
import logging
import sys
from pathlib import Path

from .config import CloneRequest, RouterConfig
from .core import CloneError, CloneWorkflow, PlacementCancelled
from .language_detection import LanguageTag, RepositoryClassifier
from .routing import destination_for
from .server import create_mcp_server

# Configure logging - default to WARNING to reduce verbosity
logging.basicConfig(
    level=logging.WARNING, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = "python, go, javascript/js, rust, java, c, ruby, php, swift, other"


def _destination_help() -> str:
    lines = []
    for tag in LanguageTag:
        lines.append(f"  <root>/{tag.value}_projects")
    return "\n".join(lines)


def build_clone_parser() -> argparse.ArgumentParser:
    """Parser for ``repo-router [OPTIONS] GIT_URL``."""
    parser = argparse.ArgumentParser(
        prog="repo-router",
        description=(
            "Clone a git repository into a language-specific directory based on "
            "the primary language detected in the repository."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Supported languages:
  {SUPPORTED_LANGUAGES}

The repository is moved into one of:
{_destination_help()}
where <root> is --destination-root, REPO_ROUTER_DESTINATION_ROOT or ~/Documents.

Examples:
  repo-router https://github.com/user/repo.git
  repo-router -b develop https://github.com/user/repo.git
  repo-router --shallow https://github.com/user/repo.git
  repo-router -l rust -n my-project https://github.com/user/repo.git
  repo-router -o https://github.com/user/repo.git  # Clone and open in editor

Other commands:
  repo-router detect PATH [-l LANGUAGE]   Classify an existing checkout
  repo-router serve                       Run the MCP server over stdio
        """,
    )
    parser.add_argument("url", metavar="GIT_URL", nargs="?", help="Repository to clone")
    parser.add_argument("-b", "--branch", default=None, help="Clone a specific branch")
    parser.add_argument(
        "-s", "--shallow", action="store_true", help="Shallow clone (depth=1)"
    )
    parser.add_argument(
        "-d", "--depth", type=int, default=None, help="Shallow clone with depth N"
    )
    parser.add_argument(
        "-r", "--recursive", action="store_true", help="Clone submodules recursively"
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress output")
    parser.add_argument(
        "-f", "--force", action="store_true", help="Replace an existing checkout without asking"
    )
    parser.add_argument("-l", "--lang", default=None, help="Override language detection")
    parser.add_argument("-n", "--name", default=None, help="Use custom directory name")
    parser.add_argument(
        "-o", "--open", dest="open_after", action="store_true", help="Open in editor after cloning"
    )
    _add_common_arguments(parser)
    return parser


def build_detect_parser() -> argparse.ArgumentParser:
    """Parser for ``repo-router detect PATH``."""
    parser = argparse.ArgumentParser(
        prog="repo-router detect",
        description="Detect the primary language of an existing checkout.",
    )
    parser.add_argument("path", help="Repository directory")
    parser.add_argument("-l", "--lang", default=None, help="Override language detection")
    _add_common_arguments(parser)
    return parser


def build_serve_parser() -> argparse.ArgumentParser:
    """Parser for ``repo-router serve``."""
    parser = argparse.ArgumentParser(
        prog="repo-router serve",
        description="Run the repo-router MCP server over stdio.",
    )
    _add_common_arguments(parser)
    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--destination-root",
        default=None,
        help="Directory holding the <Language>_projects folders (default: ~/Documents)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )


def _set_verbosity(verbose: bool) -> None:
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


def confirm_replace(path: Path) -> bool:
    """Ask on the terminal whether an existing checkout may be replaced."""
    print(f"Warning: Repository '{path.name}' already exists in {path.parent}")
    try:
        response = input("Do you want to replace it? (y/N): ")
    except EOFError:
        return False
    return response.strip() in ("y", "Y")


def clone_main(argv: list[str]) -> int:
    """
    Clone and sort a repository.

    Returns:
        Exit code: 0 for success or cancellation, 1 for failure
    """
    parser = build_clone_parser()
    args = parser.parse_args(argv)
    _set_verbosity(args.verbose)

    if not args.url:
        print("Error: No git URL provided", file=sys.stderr)
        print("Use -h or --help for usage information", file=sys.stderr)
        return 1

    depth = args.depth if args.depth is not None else (1 if args.shallow else None)
    try:
        request = CloneRequest(
            url=args.url,
            branch=args.branch,
            depth=depth,
            recursive=args.recursive,
            quiet=args.quiet,
            force=args.force,
            language=args.lang,
            name=args.name,
            open_after=args.open_after,
        )
        config = RouterConfig.from_env(args.destination_root)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    workflow = CloneWorkflow(
        config=config,
        confirm=confirm_replace,
        status_callback=None if args.quiet else print,
    )

    try:
        outcome = workflow.run(request)
    except PlacementCancelled as e:
        print(e.user_message)
        return 0
    except CloneError as e:
        logger.debug(f"Clone failed: {e.error_code} {e.technical_details}")
        print(f"Error: {e.user_message}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Clone interrupted by user")
        return 1
    except OSError as e:
        logger.error(f"Clone failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for warning in outcome.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    if not request.quiet:
        print()
        print("Repository cloned successfully!")
        if outcome.overridden:
            print(f"Language: {outcome.language.value} (manually specified)")
        else:
            print(f"Language detected: {outcome.language.value}")
        print(f"Location: {outcome.location}")
        if outcome.branch:
            print(f"Branch: {outcome.branch}")
        print()
        print("To navigate to the project:")
        print(f"  cd {outcome.location}")

    return 0


def detect_main(argv: list[str]) -> int:
    """Print the detected language and score table for a checkout."""
    parser = build_detect_parser()
    args = parser.parse_args(argv)
    _set_verbosity(args.verbose)

    repo_path = Path(args.path)
    if not repo_path.is_dir():
        parser.error(f"Repository path is not a directory: {args.path}")

    config = RouterConfig.from_env(args.destination_root)
    result = RepositoryClassifier().detect(repo_path, override=args.lang)
    if result.warning:
        print(f"Warning: {result.warning}", file=sys.stderr)

    print(f"Language: {result.language.value} ({result.method.value})")
    if not result.overridden:
        for name, score in result.scores.as_dict().items():
            print(f"  {name:<12}{score:>6}")
    print(f"Destination: {destination_for(result.language, config.destination_root)}")
    return 0


def serve_main(argv: list[str]) -> int:
    """Run the MCP server over stdio."""
    parser = build_serve_parser()
    args = parser.parse_args(argv)
    _set_verbosity(args.verbose)

    mcp = create_mcp_server(RouterConfig.from_env(args.destination_root))
    try:
        mcp.run()
    except KeyboardInterrupt:
        logger.info("Shutting down gracefully...")
    return 0


COMMANDS = {
    "detect": detect_main,
    "serve": serve_main,
}


def main(argv: list[str] | None = None) -> int:
    """Dispatch to a subcommand, or clone when the first argument is a URL."""
    argv = list(sys.argv[1:] if argv is None else argv)
    if argv and argv[0] in COMMANDS:
        return COMMANDS[argv[0]](argv[1:])
    return clone_main(argv)


def cli():
    """Console entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()

"""Entry point for jbtheme."""

import argparse
import dataclasses
import sys
import traceback
from importlib.metadata import version
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from jbtheme.convert import build_repository, convert_scheme, run_conversion
from jbtheme.logger import enable_stderr, get_logger
from jbtheme.mappings import DEFAULT_TOKEN_MAPPINGS, MappingTableError, load_mapping_table
from jbtheme.scheme.errors import SchemeError
from jbtheme.scheme.resolver import SchemeResolver
from jbtheme.settings import LOG_LEVELS, RESOLUTION_FULL, Settings, load_settings
from jbtheme.source import SchemeSourceError, load_document

logger = get_logger(__name__)

console = Console()


def get_version() -> str:
    """Get the installed package version.

    Returns:
        The version string, or "unknown" if it cannot be determined.
    """
    try:
        return version("jbtheme")
    except Exception:
        return "unknown"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments to parse (defaults to sys.argv[1:]).

    Returns:
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="jbtheme",
        description="Convert IntelliJ color schemes into VS Code color themes.",
    )
    parser.add_argument("--source", help="URL or path of the IntelliJ scheme XML")
    parser.add_argument(
        "--scheme",
        action="append",
        dest="schemes",
        metavar="NAME",
        help="scheme to convert (repeatable)",
    )
    parser.add_argument("--output", help="directory for the generated theme files")
    parser.add_argument("--mapping", help="JSON mapping table replacing the built-in one")
    parser.add_argument(
        "--full-chain",
        action="store_true",
        help="merge the whole parent chain instead of the direct parent only",
    )
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="console log level")
    parser.add_argument("--list", action="store_true", help="list the schemes in the source and exit")
    parser.add_argument("--preview", metavar="NAME", help="preview one converted scheme in the terminal")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    return parser.parse_args(argv)


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Apply command line overrides on top of stored settings.

    Args:
        settings: Settings loaded from disk.
        args: Parsed command line arguments.

    Returns:
        The effective settings.
    """
    overrides: dict[str, object] = {}
    if args.source:
        overrides["source"] = args.source
    if args.schemes:
        overrides["schemes"] = tuple(args.schemes)
    if args.output:
        overrides["output_dir"] = args.output
    if args.mapping:
        overrides["mapping_file"] = args.mapping
    if args.full_chain:
        overrides["resolution_depth"] = RESOLUTION_FULL
    if args.log_level:
        overrides["log_level"] = args.log_level
    return dataclasses.replace(settings, **overrides)


def list_schemes(settings: Settings) -> None:
    """Print the scheme names found in the configured source."""
    repository = build_repository(load_document(settings.source, timeout=settings.request_timeout))
    for scheme in repository:
        parent = f" [dim](parent: {escape(scheme.parent_name)})[/dim]" if scheme.parent_name else ""
        console.print(f"{escape(scheme.name)}{parent}", highlight=False)


def preview_scheme(settings: Settings, name: str) -> None:
    """Open the Textual preview for one scheme."""
    from jbtheme.preview import ThemePreview

    mapping_table = (
        load_mapping_table(Path(settings.mapping_file)) if settings.mapping_file else DEFAULT_TOKEN_MAPPINGS
    )
    repository = build_repository(load_document(settings.source, timeout=settings.request_timeout))
    scheme = SchemeResolver(repository, full_chain=settings.full_chain).resolve(name)
    ThemePreview(convert_scheme(scheme, mapping_table)).run()


def main(args: argparse.Namespace) -> int:
    """Run jbtheme with parsed arguments.

    Args:
        args: Parsed command line arguments.

    Returns:
        Process exit code.
    """
    settings = apply_overrides(load_settings(), args)
    enable_stderr(settings.log_level)
    logger.debug(f"Effective settings: {settings.to_dict()}")

    try:
        if args.list:
            list_schemes(settings)
        elif args.preview:
            preview_scheme(settings, args.preview)
        else:
            for path in run_conversion(settings):
                console.print(f"Wrote {path}", highlight=False)
    except (SchemeError, SchemeSourceError, MappingTableError) as exc:
        logger.error(str(exc))
        return 1
    except OSError as exc:
        logger.error(f"Failed to write theme: {exc}")
        return 1
    return 0


def run() -> None:
    """Run the CLI with standard Python tracebacks."""
    args = parse_args()
    try:
        exit_code = main(args)
    except Exception:
        # Print standard Python traceback instead of Rich's fancy one
        traceback.print_exc()
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    run()

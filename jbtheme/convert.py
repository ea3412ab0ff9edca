"""End-to-end conversion of IntelliJ color schemes into VS Code themes."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from jbtheme.logger import get_logger
from jbtheme.mappings import DEFAULT_COLOR_MAPPINGS, DEFAULT_TOKEN_MAPPINGS, load_mapping_table
from jbtheme.projector import ColorMappingEntry, MappingEntry, OutputToken, project, project_colors
from jbtheme.scheme.model import Scheme
from jbtheme.scheme.repository import SchemeRepository
from jbtheme.scheme.resolver import SchemeResolver
from jbtheme.scheme.xml_loader import parse_schemes
from jbtheme.settings import Settings
from jbtheme.source import load_document
from jbtheme.writer import build_theme, theme_filenames, write_theme

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConvertedTheme:
    """A resolved scheme together with its projected theme document."""

    scheme: Scheme
    tokens: tuple[OutputToken, ...]
    colors: dict[str, str]
    document: dict[str, object]


def build_repository(document: str | bytes) -> SchemeRepository:
    """Parse an XML document into a scheme repository.

    Raises:
        SchemeParseError: If the document is not valid scheme XML.
    """
    return SchemeRepository(parse_schemes(document))


def convert_scheme(
    scheme: Scheme,
    mapping_table: Sequence[MappingEntry] = DEFAULT_TOKEN_MAPPINGS,
    color_table: Sequence[ColorMappingEntry] = DEFAULT_COLOR_MAPPINGS,
) -> ConvertedTheme:
    """Project one resolved scheme into a theme.

    Args:
        scheme: An effective (resolved) scheme.
        mapping_table: Token mapping entries in precedence order.
        color_table: Editor color mapping entries.

    Returns:
        The converted theme.
    """
    tokens = project(scheme, mapping_table)
    colors = project_colors(scheme, color_table)
    return ConvertedTheme(
        scheme=scheme,
        tokens=tokens,
        colors=colors,
        document=build_theme(scheme.name, tokens, colors),
    )


def convert_schemes(
    repository: SchemeRepository,
    names: Sequence[str],
    mapping_table: Sequence[MappingEntry] = DEFAULT_TOKEN_MAPPINGS,
    color_table: Sequence[ColorMappingEntry] = DEFAULT_COLOR_MAPPINGS,
    full_chain: bool = False,
    max_workers: int | None = None,
) -> list[ConvertedTheme]:
    """Resolve and project several schemes.

    Args:
        repository: Parsed schemes.
        names: Names of the schemes to convert.
        mapping_table: Token mapping entries in precedence order.
        color_table: Editor color mapping entries.
        full_chain: Merge whole ancestor chains instead of one level.
        max_workers: Thread pool size for resolution.

    Returns:
        Converted themes in the order of ``names``.

    Raises:
        SchemeNotFoundError: If a name is not in the repository.
        CyclicInheritanceError: In full-chain mode, if a chain loops.
    """
    resolver = SchemeResolver(repository, full_chain=full_chain)
    resolved = resolver.resolve_many(names, max_workers=max_workers)
    return [convert_scheme(scheme, mapping_table, color_table) for scheme in resolved.values()]


def run_conversion(settings: Settings) -> list[Path]:
    """Run the whole pipeline described by the settings.

    Args:
        settings: Source, scheme names, output directory and options.

    Returns:
        Paths of the written theme files.

    Raises:
        SchemeSourceError: If the source document cannot be retrieved.
        MappingTableError: If the configured mapping table is unusable.
        SchemeError: If parsing or resolution fails.
        OSError: If a theme file cannot be written.
    """
    mapping_table = (
        load_mapping_table(Path(settings.mapping_file)) if settings.mapping_file else DEFAULT_TOKEN_MAPPINGS
    )
    repository = build_repository(load_document(settings.source, timeout=settings.request_timeout))
    themes = convert_schemes(
        repository,
        settings.schemes,
        mapping_table=mapping_table,
        full_chain=settings.full_chain,
        max_workers=settings.max_workers,
    )

    output_dir = Path(settings.output_dir).expanduser()
    filenames = theme_filenames(theme.scheme.name for theme in themes)
    paths = [
        write_theme(theme.document, output_dir, filename) for theme, filename in zip(themes, filenames, strict=True)
    ]
    logger.info(f"Converted {len(paths)} color schemes into {output_dir}")
    return paths

"""Project resolved schemes onto target-format token rules."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import reduce

from jbtheme.logger import get_logger
from jbtheme.scheme.model import ColorToken, Scheme, TokenName

logger = get_logger(__name__)


@dataclass(frozen=True)
class MappingEntry:
    """Links a scheme attribute to an output scope."""

    attribute_name: str
    output_scope: str
    color_override: str | None = None


@dataclass(frozen=True)
class ColorMappingEntry:
    """Links a scheme color slot (or an attribute token) to an editor color key.

    With ``token`` unset, ``source`` names an entry of the scheme's ``colors``.
    Otherwise ``source`` is an attribute name and ``token`` the slot inside it.
    """

    source: str
    output_key: str
    token: TokenName | None = None


@dataclass(frozen=True)
class OutputToken:
    """One token rule of the generated theme.

    ``color`` is None when the FOREGROUND token exists but carries no value.
    """

    scope: str
    color: str | None
    style: str | None = None


def as_hex(value: str) -> str:
    """Prefix a bare hex value with '#'.

    Args:
        value: Color such as "CC7832" or "#CC7832".

    Returns:
        The value with a leading '#'. Nothing else is validated.
    """
    return value if value.startswith("#") else f"#{value}"


def token_color(token: ColorToken) -> str | None:
    """Pick the color to emit for a token: variant A first, then the primary value."""
    return token.variant_a or token.value or None


def token_style(token: ColorToken) -> str | None:
    """Pick the style to emit for a FONT_TYPE token: variant A, then variant B."""
    return token.variant_a or token.variant_b or None


def project_entry(scheme: Scheme, entry: MappingEntry) -> OutputToken | None:
    """Project a single mapping entry.

    Args:
        scheme: A resolved scheme.
        entry: The mapping entry to apply.

    Returns:
        The output token, or None when the scheme has no matching attribute
        or the attribute has no FOREGROUND token.
    """
    attribute = scheme.attribute(entry.attribute_name)
    if attribute is None:
        return None
    foreground = attribute.token(TokenName.FOREGROUND)
    if foreground is None:
        return None

    color = entry.color_override or token_color(foreground)
    if color is None:
        logger.debug(f"{entry.attribute_name!r} in {scheme.name!r} has an empty FOREGROUND")

    font_type = attribute.token(TokenName.FONT_TYPE)
    style = token_style(font_type) if font_type is not None else None
    return OutputToken(scope=entry.output_scope, color=as_hex(color) if color else None, style=style)


def project(scheme: Scheme, mapping_table: Iterable[MappingEntry]) -> tuple[OutputToken, ...]:
    """Turn a resolved scheme into ordered token rules.

    Output order follows the mapping table. Entries without a matching
    attribute or FOREGROUND token produce nothing.

    Args:
        scheme: A resolved scheme.
        mapping_table: Ordered mapping entries.

    Returns:
        The output tokens.
    """

    def step(acc: tuple[OutputToken, ...], entry: MappingEntry) -> tuple[OutputToken, ...]:
        token = project_entry(scheme, entry)
        return acc if token is None else (*acc, token)

    tokens: tuple[OutputToken, ...] = reduce(step, mapping_table, ())
    logger.debug(f"Projected {len(tokens)} token rules for scheme {scheme.name!r}")
    return tokens


def project_colors(scheme: Scheme, color_table: Iterable[ColorMappingEntry]) -> dict[str, str]:
    """Collect editor-level colors for the target format.

    Missing sources are skipped. A later entry for the same output key wins.

    Args:
        scheme: A resolved scheme.
        color_table: Color mapping entries.

    Returns:
        Mapping of output key to '#'-prefixed color.
    """
    colors: dict[str, str] = {}
    for entry in color_table:
        if entry.token is None:
            token = scheme.color(entry.source)
        else:
            attribute = scheme.attribute(entry.source)
            token = attribute.token(entry.token) if attribute is not None else None
        if token is None:
            continue
        color = token_color(token)
        if color is not None:
            colors[entry.output_key] = as_hex(color)
    return colors

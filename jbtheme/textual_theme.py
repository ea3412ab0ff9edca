"""Build Textual themes from converted color schemes."""

from __future__ import annotations

import re
from collections.abc import Iterable

from textual.theme import Theme

from jbtheme.convert import ConvertedTheme
from jbtheme.projector import OutputToken
from jbtheme.writer import THEME_TYPE_DARK, theme_slug

_HEX_COLOR = re.compile(r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")

FALLBACK_BACKGROUND = "#2b2b2b"
FALLBACK_FOREGROUND = "#a9b7c6"
FALLBACK_ERROR = "#bc3f3c"
FALLBACK_WARNING = "#bbb529"
FALLBACK_SUCCESS = "#6a8759"


def _is_hex_color(value: str) -> bool:
    """Check if a string is a hex color.

    Args:
        value: Value to check.

    Returns:
        True if value is a hex color string.
    """
    return _HEX_COLOR.match(value) is not None


def _normalize_color(value: str | None, fallback: str) -> str:
    """Normalize a color value to a hex string.

    Args:
        value: Candidate color value.
        fallback: Fallback color when value is missing or not a hex color.

    Returns:
        Hex color string.
    """
    return value if value is not None and _is_hex_color(value) else fallback


def _scope_color(tokens: Iterable[OutputToken], scope: str) -> str | None:
    """Return the color of the last colored rule for a scope (later rules win)."""
    color = None
    for token in tokens:
        if token.scope == scope and token.color is not None:
            color = token.color
    return color


def textual_theme(theme: ConvertedTheme) -> Theme:
    """Build a Textual Theme from a converted scheme.

    Args:
        theme: Converted scheme with projected tokens and editor colors.

    Returns:
        A Textual Theme named after the scheme slug.
    """
    colors = theme.colors
    background = _normalize_color(colors.get("editor.background"), FALLBACK_BACKGROUND)
    foreground = _normalize_color(colors.get("editor.foreground"), FALLBACK_FOREGROUND)
    surface = _normalize_color(colors.get("editor.lineHighlightBackground"), background)
    panel = _normalize_color(colors.get("editorGutter.background"), surface)
    primary = _normalize_color(_scope_color(theme.tokens, "keyword"), foreground)
    secondary = _normalize_color(_scope_color(theme.tokens, "string"), primary)
    accent = _normalize_color(_scope_color(theme.tokens, "entity.name.function"), primary)
    muted = _normalize_color(_scope_color(theme.tokens, "comment.line"), foreground)

    return Theme(
        name=theme_slug(theme.scheme.name),
        primary=primary,
        secondary=secondary,
        accent=accent,
        warning=FALLBACK_WARNING,
        error=_normalize_color(_scope_color(theme.tokens, "invalid.illegal"), FALLBACK_ERROR),
        success=FALLBACK_SUCCESS,
        foreground=foreground,
        background=background,
        surface=surface,
        panel=panel,
        dark=theme.document.get("type", THEME_TYPE_DARK) == THEME_TYPE_DARK,
        variables={
            "text-muted": muted,
            "border": _normalize_color(colors.get("editorIndentGuide.background"), surface),
        },
    )

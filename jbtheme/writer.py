"""Assemble and persist VS Code color theme documents."""

from __future__ import annotations

import colorsys
import json
import re
from collections.abc import Iterable, Mapping
from pathlib import Path

from jbtheme.logger import get_logger
from jbtheme.projector import OutputToken

logger = get_logger(__name__)

THEME_TYPE_DARK = "dark"
THEME_TYPE_LIGHT = "light"
BACKGROUND_KEY = "editor.background"

# IntelliJ FONT_TYPE codes; 0 means plain and is omitted
FONT_STYLES: dict[str, str | None] = {
    "0": None,
    "1": "bold",
    "2": "italic",
    "3": "bold italic",
}

_HEX_COLOR = re.compile(r"^#?([0-9A-Fa-f]{6})$")
_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


def hex_to_yiq(color: str) -> tuple[float, float, float] | None:
    """Convert a 6-digit hex color to YIQ.

    Args:
        color: Color such as "#2B2B2B" or "2B2B2B".

    Returns:
        (y, i, q) tuple, or None if the value is not a 6-digit hex color.
    """
    match = _HEX_COLOR.match(color)
    if match is None:
        return None
    digits = match.group(1)
    r, g, b = (int(digits[i : i + 2], 16) / 255 for i in (0, 2, 4))
    return colorsys.rgb_to_yiq(r, g, b)


def theme_type(background: str | None) -> str:
    """Classify a theme as dark or light from its editor background.

    Args:
        background: Editor background color, if known.

    Returns:
        "dark" when the background luma is below 0.5 or unknown, else "light".
    """
    if background is None:
        return THEME_TYPE_DARK
    yiq = hex_to_yiq(background)
    if yiq is None:
        return THEME_TYPE_DARK
    return THEME_TYPE_DARK if yiq[0] < 0.5 else THEME_TYPE_LIGHT


def font_style(style: str | None) -> str | None:
    """Translate an IntelliJ FONT_TYPE code to a VS Code fontStyle.

    Unknown values pass through unchanged.
    """
    if style is None:
        return None
    return FONT_STYLES.get(style, style)


def token_rule(token: OutputToken) -> dict[str, object]:
    """Render an output token as a VS Code ``tokenColors`` rule.

    A token without a color keeps its rule but omits ``foreground``.
    """
    settings: dict[str, str] = {}
    if token.color is not None:
        settings["foreground"] = token.color
    style = font_style(token.style)
    if style is not None:
        settings["fontStyle"] = style
    return {"scope": token.scope, "settings": settings}


def build_theme(name: str, tokens: Iterable[OutputToken], colors: Mapping[str, str]) -> dict[str, object]:
    """Build a VS Code color theme document.

    Args:
        name: Theme name.
        tokens: Token rules in precedence order.
        colors: Editor (workbench) colors.

    Returns:
        JSON-serializable theme document.
    """
    return {
        "name": name,
        "type": theme_type(colors.get(BACKGROUND_KEY)),
        "colors": dict(colors),
        "tokenColors": [token_rule(token) for token in tokens],
    }


def theme_slug(name: str) -> str:
    """Lower-case a scheme name and collapse non-alphanumerics to '-'."""
    return _SLUG_SEPARATORS.sub("-", name.lower()).strip("-") or "theme"


def theme_filename(name: str) -> str:
    """Return the file name used for a theme.

    Args:
        name: Scheme name, e.g. "Darcula Contrast".

    Returns:
        File name such as "darcula-contrast-color-theme.json".
    """
    return f"{theme_slug(name)}-color-theme.json"


def theme_filenames(names: Iterable[str]) -> list[str]:
    """Return one distinct file name per scheme name.

    Names that collapse to an already used slug (e.g. "Darcula" and
    "darcula!") get a numeric suffix, and a warning is logged.

    Args:
        names: Scheme names in output order.

    Returns:
        File names in the same order.
    """
    used: set[str] = set()
    filenames: list[str] = []
    for name in names:
        slug = theme_slug(name)
        candidate = slug
        counter = 2
        while candidate in used:
            candidate = f"{slug}-{counter}"
            counter += 1
        if candidate != slug:
            logger.warning(f"Theme {name!r} clashes with slug {slug!r}, writing it as {candidate!r}")
        used.add(candidate)
        filenames.append(f"{candidate}-color-theme.json")
    return filenames


def write_theme(theme: Mapping[str, object], output_dir: Path, filename: str | None = None) -> Path:
    """Write a theme document to the output directory.

    Args:
        theme: Theme document produced by build_theme.
        output_dir: Directory to write into (created if missing).
        filename: File name to use instead of the one derived from the theme name.

    Returns:
        Path of the written file.

    Raises:
        OSError: If the file cannot be written.
    """
    path = output_dir / (filename or theme_filename(str(theme["name"])))
    output_dir.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(theme, indent=2) + "\n", encoding="utf-8")
    logger.info(f"Wrote theme {theme['name']!r} to {path}")
    return path

"""Textual app previewing the token rules of a converted scheme."""

from typing import ClassVar

from rich.errors import StyleSyntaxError
from rich.markup import escape
from rich.style import Style
from rich.text import Text
from textual.app import App, ComposeResult
from textual.widgets import DataTable, Footer, Header, Static

from jbtheme.convert import ConvertedTheme
from jbtheme.logger import get_logger
from jbtheme.textual_theme import textual_theme
from jbtheme.writer import font_style

logger = get_logger(__name__)

SAMPLE_TEXT = "def fn(x): return 42"


def _safe_style(style: str) -> str:
    """Return the style if Rich can parse it, else an empty style."""
    try:
        Style.parse(style)
    except StyleSyntaxError:
        return ""
    return style


class ThemePreview(App[None]):
    """Shows each projected token rule with its color applied."""

    TITLE = "jbtheme preview"
    BINDINGS: ClassVar[tuple[tuple[str, str, str], ...]] = (("q", "quit", "Quit"),)

    def __init__(self, theme: ConvertedTheme) -> None:
        """Initialize the preview.

        Args:
            theme: The converted scheme to display.
        """
        super().__init__()
        self._converted = theme
        self._textual_theme = textual_theme(theme)

    def compose(self) -> ComposeResult:
        """Create the preview layout.

        Yields:
            The widgets that make up the preview.
        """
        yield Header()
        yield Static(self._summary(), id="summary")
        yield DataTable(id="token-table", cursor_type="row", zebra_stripes=True)
        yield Footer()

    def on_mount(self) -> None:
        """Register the scheme's theme and fill the token table."""
        self.register_theme(self._textual_theme)
        self.theme = self._textual_theme.name
        self.sub_title = self._converted.scheme.name

        table = self.query_one("#token-table", DataTable)
        table.add_columns("Scope", "Color", "Style", "Sample")
        for token in self._converted.tokens:
            style = font_style(token.style)
            color = token.color or ""
            sample_style = f"{style} {color}".strip() if style else color
            table.add_row(
                token.scope,
                Text(color, style=_safe_style(color)),
                style or "",
                Text(SAMPLE_TEXT, style=_safe_style(sample_style)),
            )
        logger.debug(f"Previewing {len(self._converted.tokens)} token rules of {self._converted.scheme.name!r}")

    def _summary(self) -> str:
        scheme = self._converted.scheme
        parent = f" (inherits {escape(scheme.parent_name)})" if scheme.parent_name else ""
        return f"[bold]{escape(scheme.name)}[/bold]{parent}: {len(self._converted.tokens)} token rules"

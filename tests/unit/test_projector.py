"""Tests for projecting schemes onto token rules."""

from jbtheme.projector import (
    ColorMappingEntry,
    MappingEntry,
    OutputToken,
    as_hex,
    project,
    project_colors,
)
from jbtheme.scheme.model import Attribute, ColorToken, Scheme, TokenName
from jbtheme.scheme.repository import SchemeRepository
from jbtheme.scheme.resolver import SchemeResolver

FOREGROUND = TokenName.FOREGROUND.value
FONT_TYPE = TokenName.FONT_TYPE.value


def _scheme(*attributes: Attribute) -> Scheme:
    return Scheme("S", attributes=attributes)


class TestAsHex:
    """Tests for as_hex."""

    def test_prefixes_bare_hex(self) -> None:
        assert as_hex("CC7832") == "#CC7832"

    def test_keeps_prefixed_value(self) -> None:
        assert as_hex("#CC7832") == "#CC7832"

    def test_malformed_values_pass_through(self) -> None:
        assert as_hex("not-a-color") == "#not-a-color"


class TestProject:
    """Tests for project."""

    def test_keyword_scenario(self) -> None:
        parent = Scheme(
            "Base",
            attributes=(Attribute("DEFAULT_KEYWORD", (ColorToken(FOREGROUND, value="A9B7C6"),)),),
        )
        child = Scheme(
            "Derived",
            parent_name="Base",
            attributes=(Attribute("DEFAULT_KEYWORD", (ColorToken(FOREGROUND, variant_a="CC7832"),)),),
        )
        resolved = SchemeResolver(SchemeRepository([parent, child])).resolve("Derived")

        tokens = project(resolved, [MappingEntry("DEFAULT_KEYWORD", "keyword")])

        assert tokens == (OutputToken(scope="keyword", color="#CC7832"),)

    def test_uses_primary_value_without_variant(self) -> None:
        scheme = _scheme(Attribute("DEFAULT_STRING", (ColorToken(FOREGROUND, value="6A8759", variant_b="111111"),)))

        tokens = project(scheme, [MappingEntry("DEFAULT_STRING", "string")])

        assert tokens == (OutputToken("string", "#6A8759"),)

    def test_override_wins(self) -> None:
        scheme = _scheme(Attribute("DEFAULT_STRING", (ColorToken(FOREGROUND, value="6A8759", variant_a="111111"),)))

        tokens = project(scheme, [MappingEntry("DEFAULT_STRING", "string", color_override="#FFFFFF")])

        assert tokens == (OutputToken("string", "#FFFFFF"),)

    def test_style_prefers_variant_a_then_variant_b(self) -> None:
        scheme = _scheme(
            Attribute("A", (ColorToken(FOREGROUND, value="111111"), ColorToken(FONT_TYPE, value="1", variant_a="2"))),
            Attribute("B", (ColorToken(FOREGROUND, value="222222"), ColorToken(FONT_TYPE, value="1", variant_b="3"))),
            Attribute("C", (ColorToken(FOREGROUND, value="333333"), ColorToken(FONT_TYPE, value="1"))),
        )

        tokens = project(scheme, [MappingEntry("A", "a"), MappingEntry("B", "b"), MappingEntry("C", "c")])

        assert [t.style for t in tokens] == ["2", "3", None]

    def test_order_follows_mapping_table(self) -> None:
        scheme = _scheme(
            Attribute("A", (ColorToken(FOREGROUND, value="111111"),)),
            Attribute("B", (ColorToken(FOREGROUND, value="222222"),)),
        )

        tokens = project(scheme, [MappingEntry("B", "b"), MappingEntry("A", "a"), MappingEntry("B", "b.again")])

        assert [t.scope for t in tokens] == ["b", "a", "b.again"]

    def test_skips_missing_attribute_and_foreground(self) -> None:
        scheme = _scheme(
            Attribute("A", (ColorToken(FOREGROUND, value="111111"),)),
            Attribute("NO_FG", (ColorToken(TokenName.BACKGROUND.value, value="222222"),)),
        )
        table = [MappingEntry("A", "a"), MappingEntry("MISSING", "m"), MappingEntry("NO_FG", "n")]

        tokens = project(scheme, table)

        assert [t.scope for t in tokens] == ["a"]

    def test_unmatched_entry_removes_exactly_one_token(self, parent_scheme: Scheme) -> None:
        base_table = [MappingEntry("DEFAULT_KEYWORD", "keyword"), MappingEntry("DEFAULT_STRING", "string")]
        with_missing = [*base_table[:1], MappingEntry("DEFAULT_ABSENT", "absent"), *base_table[1:]]

        assert len(project(parent_scheme, with_missing)) == len(project(parent_scheme, base_table))
        assert len(project(parent_scheme, with_missing)) == len(with_missing) - 1

    def test_empty_foreground_still_emits_token(self) -> None:
        scheme = _scheme(Attribute("A", (ColorToken(FOREGROUND),)))

        assert project(scheme, [MappingEntry("A", "a")]) == (OutputToken("a", None),)

    def test_count_matches_entries_with_foreground(self) -> None:
        scheme = _scheme(
            Attribute("A", (ColorToken(FOREGROUND),)),
            Attribute("B", (ColorToken(FOREGROUND, value="111111"),)),
            Attribute("C", (ColorToken(FONT_TYPE, value="1"),)),
        )
        table = [MappingEntry("A", "a"), MappingEntry("B", "b"), MappingEntry("C", "c"), MappingEntry("D", "d")]

        assert len(project(scheme, table)) == 2

    def test_empty_table(self, parent_scheme: Scheme) -> None:
        assert project(parent_scheme, []) == ()

    def test_returns_tuple(self, parent_scheme: Scheme) -> None:
        assert isinstance(project(parent_scheme, [MappingEntry("DEFAULT_KEYWORD", "keyword")]), tuple)


class TestProjectColors:
    """Tests for project_colors."""

    def test_color_slots_and_attribute_tokens(self) -> None:
        scheme = Scheme(
            "S",
            colors=(ColorToken("CARET_ROW_COLOR", value="323232"),),
            attributes=(
                Attribute(
                    "TEXT",
                    (ColorToken(FOREGROUND, value="A9B7C6"), ColorToken(TokenName.BACKGROUND.value, value="2B2B2B")),
                ),
            ),
        )
        table = [
            ColorMappingEntry("TEXT", "editor.foreground", TokenName.FOREGROUND),
            ColorMappingEntry("TEXT", "editor.background", TokenName.BACKGROUND),
            ColorMappingEntry("CARET_ROW_COLOR", "editor.lineHighlightBackground"),
            ColorMappingEntry("MISSING", "editorCursor.foreground"),
            ColorMappingEntry("NO_SUCH_ATTRIBUTE", "x", TokenName.FOREGROUND),
        ]

        assert project_colors(scheme, table) == {
            "editor.foreground": "#A9B7C6",
            "editor.background": "#2B2B2B",
            "editor.lineHighlightBackground": "#323232",
        }

    def test_variant_preferred(self) -> None:
        scheme = Scheme("S", colors=(ColorToken("CARET_COLOR", value="BBBBBB", variant_a="AAAAAA"),))

        colors = project_colors(scheme, [ColorMappingEntry("CARET_COLOR", "editorCursor.foreground")])

        assert colors == {"editorCursor.foreground": "#AAAAAA"}

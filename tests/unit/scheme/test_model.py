"""Tests for the scheme records."""

import dataclasses

import pytest
from jbtheme.scheme.errors import SchemeParseError
from jbtheme.scheme.model import Attribute, ColorToken, Scheme, TokenName


class TestTokenName:
    """Tests for TokenName."""

    def test_parse_known_name(self) -> None:
        assert TokenName.parse("FOREGROUND") is TokenName.FOREGROUND

    def test_parse_unknown_name(self) -> None:
        assert TokenName.parse("ERROR_STRIPE_COLOR") is None

    def test_compares_equal_to_plain_string(self) -> None:
        assert TokenName.FONT_TYPE == "FONT_TYPE"


class TestRecords:
    """Tests for ColorToken, Attribute and Scheme."""

    def test_records_are_frozen(self) -> None:
        token = ColorToken("FOREGROUND", value="A9B7C6")
        with pytest.raises(dataclasses.FrozenInstanceError):
            token.value = "000000"  # type: ignore[misc]

    def test_attribute_tokens_unique_by_name(self) -> None:
        attribute = Attribute(
            "DEFAULT_KEYWORD",
            (
                ColorToken("FOREGROUND", value="111111"),
                ColorToken("FONT_TYPE", value="1"),
                ColorToken("FOREGROUND", value="222222"),
            ),
        )
        assert [t.name for t in attribute.tokens] == ["FOREGROUND", "FONT_TYPE"]
        assert attribute.token(TokenName.FOREGROUND) == ColorToken("FOREGROUND", value="222222")

    def test_attribute_token_lookup_missing(self) -> None:
        assert Attribute("DEFAULT_KEYWORD").token(TokenName.FOREGROUND) is None

    def test_scheme_lookups(self, parent_scheme: Scheme) -> None:
        assert parent_scheme.attribute("DEFAULT_STRING") is not None
        assert parent_scheme.attribute("DEFAULT_NUMBER") is None
        assert parent_scheme.color("CARET_ROW_COLOR") == ColorToken("CARET_ROW_COLOR", "323232", "333333")
        assert parent_scheme.color("CARET_COLOR") is None

    def test_scheme_attributes_unique_by_name(self) -> None:
        scheme = Scheme("S", attributes=(Attribute("A"), Attribute("B"), Attribute("A")))
        assert [a.name for a in scheme.attributes] == ["A", "B"]


class TestFromMapping:
    """Tests for building records from JSON-style mappings."""

    def test_scheme_from_mapping(self) -> None:
        scheme = Scheme.from_mapping(
            {
                "name": "Darcula",
                "parent": "Default",
                "colors": [{"name": "CARET_ROW_COLOR", "value": "323232"}],
                "attributes": [
                    {
                        "name": "DEFAULT_KEYWORD",
                        "tokens": [{"name": "FOREGROUND", "value": "A9B7C6", "variantA": "CC7832"}],
                    }
                ],
            }
        )

        assert scheme.name == "Darcula"
        assert scheme.parent_name == "Default"
        assert scheme.colors == (ColorToken("CARET_ROW_COLOR", value="323232"),)
        keyword = scheme.attribute("DEFAULT_KEYWORD")
        assert keyword is not None
        assert keyword.token("FOREGROUND") == ColorToken("FOREGROUND", value="A9B7C6", variant_a="CC7832")

    def test_missing_optional_fields(self) -> None:
        scheme = Scheme.from_mapping({"name": "Bare"})
        assert scheme == Scheme("Bare")

    def test_empty_parent_is_none(self) -> None:
        assert Scheme.from_mapping({"name": "Bare", "parent": ""}).parent_name is None

    def test_numeric_values_become_strings(self) -> None:
        token = ColorToken.from_mapping({"name": "FONT_TYPE", "value": 1})
        assert token.value == "1"

    def test_non_record_entries_ignored(self) -> None:
        scheme = Scheme.from_mapping({"name": "S", "colors": ["junk", {"name": "X", "value": "000000"}]})
        assert [c.name for c in scheme.colors] == ["X"]

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"name": ""},
            {"name": "S", "colors": [{"value": "000000"}]},
            {"name": "S", "attributes": [{"tokens": []}]},
        ],
    )
    def test_missing_names_raise(self, data: dict[str, object]) -> None:
        with pytest.raises(SchemeParseError):
            Scheme.from_mapping(data)

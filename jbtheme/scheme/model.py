"""Immutable records describing IntelliJ-style color schemes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, TypeVar

from jbtheme.scheme.errors import SchemeParseError


class TokenName(str, Enum):
    """Value slots an attribute can define."""

    FOREGROUND = "FOREGROUND"
    BACKGROUND = "BACKGROUND"
    FONT_TYPE = "FONT_TYPE"
    EFFECT_COLOR = "EFFECT_COLOR"
    EFFECT_TYPE = "EFFECT_TYPE"

    @classmethod
    def parse(cls, value: str) -> TokenName | None:
        """Return the matching token name, or None for slots we do not model.

        Args:
            value: Raw option name such as "FOREGROUND".

        Returns:
            The TokenName member or None.
        """
        try:
            return cls(value)
        except ValueError:
            return None


class _Named(Protocol):
    @property
    def name(self) -> str: ...


N = TypeVar("N", bound=_Named)


def unique_by_name(items: Iterable[N]) -> tuple[N, ...]:
    """Deduplicate records by name.

    A later record replaces an earlier one but keeps the earlier position.

    Args:
        items: Records carrying a ``name`` attribute.

    Returns:
        Tuple of records with unique names.
    """
    by_name: dict[str, N] = {}
    for item in items:
        by_name[item.name] = item
    return tuple(by_name.values())


@dataclass(frozen=True)
class ColorToken:
    """A named value slot with a primary value and two accessibility variants.

    Values are kept exactly as they appear in the source (usually bare hex such
    as "A9B7C6", or a numeric code for FONT_TYPE/EFFECT_TYPE). ``None`` and the
    empty string both mean "not provided".
    """

    name: str
    value: str | None = None
    variant_a: str | None = None
    variant_b: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> ColorToken:
        """Create a token from a JSON-style record.

        Args:
            data: Mapping with "name" and optional "value", "variantA", "variantB".

        Returns:
            A ColorToken.

        Raises:
            SchemeParseError: If the record has no name.
        """
        name = _coerce_str(data.get("name"))
        if not name:
            raise SchemeParseError(f"Color token record without a name: {dict(data)!r}")
        return cls(
            name=name,
            value=_coerce_str(data.get("value")),
            variant_a=_coerce_str(data.get("variantA", data.get("variant_a"))),
            variant_b=_coerce_str(data.get("variantB", data.get("variant_b"))),
        )


@dataclass(frozen=True)
class Attribute:
    """A semantic highlighting concept (keyword, string, ...) and its tokens."""

    name: str
    tokens: tuple[ColorToken, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", unique_by_name(self.tokens))

    def token(self, name: str) -> ColorToken | None:
        """Look up a token by name.

        Args:
            name: Token name, e.g. TokenName.FOREGROUND.

        Returns:
            The token or None if this attribute does not define it.
        """
        for token in self.tokens:
            if token.name == name:
                return token
        return None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> Attribute:
        """Create an attribute from a JSON-style record.

        Args:
            data: Mapping with "name" and a "tokens" list.

        Returns:
            An Attribute.

        Raises:
            SchemeParseError: If the record or one of its tokens has no name.
        """
        name = _coerce_str(data.get("name"))
        if not name:
            raise SchemeParseError(f"Attribute record without a name: {dict(data)!r}")
        return cls(name=name, tokens=tuple(ColorToken.from_mapping(t) for t in _coerce_records(data.get("tokens"))))


@dataclass(frozen=True)
class Scheme:
    """A named color scheme, optionally inheriting from a parent scheme."""

    name: str
    parent_name: str | None = None
    colors: tuple[ColorToken, ...] = ()
    attributes: tuple[Attribute, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "colors", unique_by_name(self.colors))
        object.__setattr__(self, "attributes", unique_by_name(self.attributes))

    def attribute(self, name: str) -> Attribute | None:
        """Look up an attribute by name.

        Args:
            name: Attribute name such as "DEFAULT_KEYWORD".

        Returns:
            The attribute or None.
        """
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None

    def color(self, name: str) -> ColorToken | None:
        """Look up an editor-level color slot by name.

        Args:
            name: Color key such as "CARET_ROW_COLOR".

        Returns:
            The token or None.
        """
        for token in self.colors:
            if token.name == name:
                return token
        return None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> Scheme:
        """Create a scheme from a JSON-style record.

        Args:
            data: Mapping with "name", optional "parent", "colors" and "attributes".

        Returns:
            A Scheme.

        Raises:
            SchemeParseError: If a name is missing anywhere in the record.
        """
        name = _coerce_str(data.get("name"))
        if not name:
            raise SchemeParseError(f"Scheme record without a name: {dict(data)!r}")
        return cls(
            name=name,
            parent_name=_coerce_str(data.get("parent", data.get("parent_name"))) or None,
            colors=tuple(ColorToken.from_mapping(c) for c in _coerce_records(data.get("colors"))),
            attributes=tuple(Attribute.from_mapping(a) for a in _coerce_records(data.get("attributes"))),
        )


def _coerce_str(value: object) -> str | None:
    """Coerce a value into a string if possible.

    Args:
        value: Raw value to coerce.

    Returns:
        String value or None.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


def _coerce_records(value: object) -> list[Mapping[str, object]]:
    """Keep only mapping entries of a list-like value.

    Args:
        value: Raw value that should be a list of records.

    Returns:
        List of mappings (empty for anything else).
    """
    if not isinstance(value, list | tuple):
        return []
    return [item for item in value if isinstance(item, Mapping)]

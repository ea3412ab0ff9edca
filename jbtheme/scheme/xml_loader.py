"""Parse IntelliJ color scheme XML into scheme records.

Both a single ``.icls`` scheme file and the ``DefaultColorSchemesManager.xml``
bundle (several ``<scheme>`` elements under one root) are accepted::

    <scheme name="Darcula" parent_scheme="Default">
      <colors>
        <option name="CARET_ROW_COLOR" value="323232"/>
      </colors>
      <attributes>
        <option name="DEFAULT_KEYWORD">
          <value>
            <option name="FOREGROUND" value="CC7832" deuteranopia="D88A46"/>
          </value>
        </option>
      </attributes>
    </scheme>
"""

import xml.etree.ElementTree as ET

from jbtheme.logger import get_logger
from jbtheme.scheme.errors import SchemeParseError
from jbtheme.scheme.model import Attribute, ColorToken, Scheme, TokenName

logger = get_logger(__name__)

# Option attributes carrying the accessibility variants
VARIANT_A_KEY = "deuteranopia"
VARIANT_B_KEY = "protanopia"


def _token_from_option(option: ET.Element, name: str) -> ColorToken:
    return ColorToken(
        name=name,
        value=option.get("value") or None,
        variant_a=option.get(VARIANT_A_KEY) or None,
        variant_b=option.get(VARIANT_B_KEY) or None,
    )


def _parse_attribute(option: ET.Element, scheme_name: str) -> Attribute:
    """Build an attribute from an ``<attributes>/<option>`` element."""
    attribute_name = option.get("name", "")
    tokens: list[ColorToken] = []
    for value_option in option.findall("./value/option"):
        token_name = TokenName.parse(value_option.get("name", ""))
        if token_name is None:
            logger.debug(
                f"Ignoring option {value_option.get('name')!r} of {attribute_name!r} in scheme {scheme_name!r}"
            )
            continue
        tokens.append(_token_from_option(value_option, token_name.value))
    return Attribute(name=attribute_name, tokens=tuple(tokens))


def _parse_scheme(element: ET.Element) -> Scheme:
    """Build a scheme from a ``<scheme>`` element.

    Raises:
        SchemeParseError: If the element or one of its options has no name.
    """
    name = element.get("name")
    if not name:
        raise SchemeParseError("<scheme> element without a name attribute")

    colors: list[ColorToken] = []
    for option in element.findall("./colors/option"):
        color_name = option.get("name")
        if not color_name:
            raise SchemeParseError(f"Color option without a name in scheme {name!r}")
        colors.append(_token_from_option(option, color_name))

    attributes: list[Attribute] = []
    for option in element.findall("./attributes/option"):
        if not option.get("name"):
            raise SchemeParseError(f"Attribute option without a name in scheme {name!r}")
        attributes.append(_parse_attribute(option, name))

    return Scheme(
        name=name,
        parent_name=element.get("parent_scheme") or None,
        colors=tuple(colors),
        attributes=tuple(attributes),
    )


def parse_schemes(document: str | bytes) -> list[Scheme]:
    """Parse every ``<scheme>`` element of an XML document.

    Args:
        document: Raw XML text.

    Returns:
        Schemes in document order.

    Raises:
        SchemeParseError: If the document is not well-formed XML or a scheme is
            missing a required name.
    """
    try:
        root = ET.fromstring(document)
    except ET.ParseError as exc:
        raise SchemeParseError(f"Invalid scheme XML: {exc}") from exc

    schemes = [_parse_scheme(element) for element in root.iter("scheme")]
    logger.debug(f"Parsed {len(schemes)} schemes from XML")
    return schemes

"""Shared test fixtures for jbtheme."""

from pathlib import Path

import pytest
from jbtheme.scheme.model import Attribute, ColorToken, Scheme, TokenName
from jbtheme.scheme.repository import SchemeRepository

SAMPLE_SCHEMES_XML = """<?xml version="1.0" encoding="UTF-8"?>
<component name="DefaultColorSchemesManager">
  <scheme name="Default" version="142">
    <colors>
      <option name="CARET_COLOR" value="000000"/>
      <option name="CARET_ROW_COLOR" value="FFFAE3"/>
    </colors>
    <attributes>
      <option name="TEXT">
        <value>
          <option name="FOREGROUND" value="000000"/>
          <option name="BACKGROUND" value="FFFFFF"/>
        </value>
      </option>
      <option name="DEFAULT_KEYWORD">
        <value>
          <option name="FOREGROUND" value="000080"/>
          <option name="FONT_TYPE" value="1"/>
        </value>
      </option>
      <option name="DEFAULT_STRING">
        <value>
          <option name="FOREGROUND" value="008000" deuteranopia="067D17"/>
          <option name="FONT_TYPE" value="1"/>
        </value>
      </option>
    </attributes>
  </scheme>
  <scheme name="Darcula" parent_scheme="Default" version="142">
    <colors>
      <option name="CARET_ROW_COLOR" value="323232"/>
      <option name="SELECTION_BACKGROUND" value="214283"/>
    </colors>
    <attributes>
      <option name="TEXT">
        <value>
          <option name="FOREGROUND" value="A9B7C6"/>
          <option name="BACKGROUND" value="2B2B2B"/>
        </value>
      </option>
      <option name="DEFAULT_KEYWORD">
        <value>
          <option name="FOREGROUND" value="CC7832"/>
          <option name="ERROR_STRIPE_COLOR" value="FF0000"/>
        </value>
      </option>
      <option name="DEFAULT_NUMBER">
        <value>
          <option name="FOREGROUND" value="6897BB"/>
        </value>
      </option>
      <option name="DEFAULT_METADATA" baseAttributes="DEFAULT_IDENTIFIER"/>
    </attributes>
  </scheme>
  <scheme name="Darcula Contrast" parent_scheme="Darcula">
    <attributes>
      <option name="DEFAULT_NUMBER">
        <value>
          <option name="FOREGROUND" value="7AB0E0"/>
        </value>
      </option>
    </attributes>
  </scheme>
  <scheme name="Orphan" parent_scheme="Missing">
    <attributes>
      <option name="DEFAULT_KEYWORD">
        <value>
          <option name="FOREGROUND" value="112233"/>
        </value>
      </option>
    </attributes>
  </scheme>
</component>
"""


@pytest.fixture
def sample_schemes_xml() -> str:
    """A DefaultColorSchemesManager-style document with four schemes."""
    return SAMPLE_SCHEMES_XML


@pytest.fixture
def sample_schemes_file(tmp_path: Path) -> Path:
    """The sample document written to disk."""
    path = tmp_path / "schemes.xml"
    path.write_text(SAMPLE_SCHEMES_XML, encoding="utf-8")
    return path


@pytest.fixture
def parent_scheme() -> Scheme:
    """A root scheme defining a keyword with variants and a string."""
    return Scheme(
        name="Parent",
        colors=(ColorToken("CARET_ROW_COLOR", value="323232", variant_a="333333"),),
        attributes=(
            Attribute(
                "DEFAULT_KEYWORD",
                (
                    ColorToken(TokenName.FOREGROUND.value, value="A9B7C6", variant_b="B0B0B0"),
                    ColorToken(TokenName.FONT_TYPE.value, value="1", variant_a="2"),
                ),
            ),
            Attribute("DEFAULT_STRING", (ColorToken(TokenName.FOREGROUND.value, value="6A8759"),)),
        ),
    )


@pytest.fixture
def child_scheme() -> Scheme:
    """A scheme overriding the keyword variant and adding a number attribute."""
    return Scheme(
        name="Child",
        parent_name="Parent",
        colors=(ColorToken("SELECTION_BACKGROUND", value="214283"),),
        attributes=(
            Attribute("DEFAULT_KEYWORD", (ColorToken(TokenName.FOREGROUND.value, variant_a="CC7832"),)),
            Attribute("DEFAULT_NUMBER", (ColorToken(TokenName.FOREGROUND.value, value="6897BB"),)),
        ),
    )


@pytest.fixture
def repository(parent_scheme: Scheme, child_scheme: Scheme) -> SchemeRepository:
    """Repository holding the parent and child schemes."""
    return SchemeRepository([parent_scheme, child_scheme])

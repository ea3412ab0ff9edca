"""Static tables linking IntelliJ scheme names to VS Code theme keys."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from jbtheme.logger import get_logger
from jbtheme.projector import ColorMappingEntry, MappingEntry
from jbtheme.scheme.model import TokenName

logger = get_logger(__name__)

TEXT_ATTRIBUTE = "TEXT"


class MappingTableError(ValueError):
    """Raised when a mapping table file cannot be used."""


# Order matters: later rules take precedence over earlier ones in VS Code
DEFAULT_TOKEN_MAPPINGS: tuple[MappingEntry, ...] = (
    MappingEntry("DEFAULT_IDENTIFIER", "variable"),
    MappingEntry("DEFAULT_LOCAL_VARIABLE", "variable.other.readwrite"),
    MappingEntry("DEFAULT_PARAMETER", "variable.parameter"),
    MappingEntry("DEFAULT_INSTANCE_FIELD", "variable.other.property"),
    MappingEntry("DEFAULT_STATIC_FIELD", "variable.other.static"),
    MappingEntry("DEFAULT_CONSTANT", "variable.other.constant"),
    MappingEntry("DEFAULT_KEYWORD", "keyword"),
    MappingEntry("DEFAULT_KEYWORD", "storage.type"),
    MappingEntry("DEFAULT_KEYWORD", "storage.modifier"),
    MappingEntry("DEFAULT_OPERATION_SIGN", "keyword.operator"),
    MappingEntry("DEFAULT_NUMBER", "constant.numeric"),
    MappingEntry("DEFAULT_PREDEFINED_SYMBOL", "support.function"),
    MappingEntry("DEFAULT_STRING", "string"),
    MappingEntry("DEFAULT_VALID_STRING_ESCAPE", "constant.character.escape"),
    MappingEntry("DEFAULT_INVALID_STRING_ESCAPE", "invalid.illegal"),
    MappingEntry("DEFAULT_LINE_COMMENT", "comment.line"),
    MappingEntry("DEFAULT_BLOCK_COMMENT", "comment.block"),
    MappingEntry("DEFAULT_DOC_COMMENT", "comment.block.documentation"),
    MappingEntry("DEFAULT_DOC_COMMENT_TAG", "storage.type.class.jsdoc"),
    MappingEntry("DEFAULT_FUNCTION_DECLARATION", "entity.name.function"),
    MappingEntry("DEFAULT_FUNCTION_CALL", "meta.function-call entity.name.function"),
    MappingEntry("DEFAULT_CLASS_NAME", "entity.name.type.class"),
    MappingEntry("DEFAULT_INTERFACE_NAME", "entity.name.type.interface"),
    MappingEntry("DEFAULT_METADATA", "meta.decorator"),
    MappingEntry("DEFAULT_METADATA", "entity.name.function.decorator"),
    MappingEntry("DEFAULT_LABEL", "entity.name.label"),
    MappingEntry("DEFAULT_TAG", "entity.name.tag"),
    MappingEntry("DEFAULT_ATTRIBUTE", "entity.other.attribute-name"),
    MappingEntry("DEFAULT_ENTITY", "constant.character.entity"),
    MappingEntry("DEFAULT_BRACES", "punctuation.section.block"),
    MappingEntry("DEFAULT_BRACKETS", "punctuation.section.brackets"),
    MappingEntry("DEFAULT_PARENTHS", "punctuation.section.parens"),
    MappingEntry("DEFAULT_COMMA", "punctuation.separator"),
    MappingEntry("DEFAULT_SEMICOLON", "punctuation.terminator"),
    MappingEntry("DEFAULT_DOT", "punctuation.accessor"),
    MappingEntry("DEFAULT_TEMPLATE_LANGUAGE_COLOR", "meta.embedded"),
)

DEFAULT_COLOR_MAPPINGS: tuple[ColorMappingEntry, ...] = (
    ColorMappingEntry(TEXT_ATTRIBUTE, "editor.foreground", TokenName.FOREGROUND),
    ColorMappingEntry(TEXT_ATTRIBUTE, "editor.background", TokenName.BACKGROUND),
    ColorMappingEntry("CARET_COLOR", "editorCursor.foreground"),
    ColorMappingEntry("CARET_ROW_COLOR", "editor.lineHighlightBackground"),
    ColorMappingEntry("SELECTION_BACKGROUND", "editor.selectionBackground"),
    ColorMappingEntry("LINE_NUMBERS_COLOR", "editorLineNumber.foreground"),
    ColorMappingEntry("LINE_NUMBER_ON_CARET_ROW_COLOR", "editorLineNumber.activeForeground"),
    ColorMappingEntry("GUTTER_BACKGROUND", "editorGutter.background"),
    ColorMappingEntry("INDENT_GUIDE", "editorIndentGuide.background"),
    ColorMappingEntry("SELECTED_INDENT_GUIDE", "editorIndentGuide.activeBackground"),
    ColorMappingEntry("WHITESPACES", "editorWhitespace.foreground"),
    ColorMappingEntry("RIGHT_MARGIN_COLOR", "editorRuler.foreground"),
    ColorMappingEntry("ADDED_LINES_COLOR", "editorGutter.addedBackground"),
    ColorMappingEntry("MODIFIED_LINES_COLOR", "editorGutter.modifiedBackground"),
    ColorMappingEntry("DELETED_LINES_COLOR", "editorGutter.deletedBackground"),
)


def mapping_entry_from_mapping(data: Mapping[str, object]) -> MappingEntry | None:
    """Create a mapping entry from a JSON record.

    Args:
        data: Mapping with "attributeName", "outputScope" and an optional
            "explicitColorOverride".

    Returns:
        The entry, or None if a required key is missing or not a string.
    """
    attribute_name = data.get("attributeName")
    output_scope = data.get("outputScope")
    if not isinstance(attribute_name, str) or not attribute_name:
        return None
    if not isinstance(output_scope, str) or not output_scope:
        return None
    override = data.get("explicitColorOverride")
    return MappingEntry(
        attribute_name=attribute_name,
        output_scope=output_scope,
        color_override=override if isinstance(override, str) and override else None,
    )


def load_mapping_table(path: Path) -> tuple[MappingEntry, ...]:
    """Load a token mapping table from a JSON file.

    Args:
        path: File containing a list of mapping records.

    Returns:
        The entries in file order. Invalid records are skipped.

    Raises:
        MappingTableError: If the file cannot be read, is not JSON, or does
            not contain a list.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise MappingTableError(f"Failed to read mapping table {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise MappingTableError(f"Failed to parse mapping table {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise MappingTableError(f"Mapping table {path} must contain a JSON list")

    entries: list[MappingEntry] = []
    for index, record in enumerate(raw):
        entry = mapping_entry_from_mapping(record) if isinstance(record, dict) else None
        if entry is None:
            logger.warning(f"Skipping invalid mapping record #{index} in {path}: {record!r}")
            continue
        entries.append(entry)
    logger.debug(f"Loaded {len(entries)} mapping entries from {path}")
    return tuple(entries)

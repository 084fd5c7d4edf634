"""Context-specific escaping for text, comments, attributes and raw text.

Each helper returns the serialized form of one piece of input, or raises a
``RenderError`` if the input cannot be represented in that position.
"""

from __future__ import annotations

import enum
import re

from .constants import (
    END_TAG_NAME_TERMINATORS,
    FORBIDDEN_ATTRIBUTE_NAME_CHARS,
    UNQUOTED_ATTRIBUTE_VALUE_BREAKERS,
)
from .errors import ElementClosedInRawText, InvalidAttributeName

_TEXT_PATTERN = re.compile(r"[<&]")
_ESCAPABLE_RAW_TEXT_PATTERN = re.compile(r"</|&")
_COMMENT_PATTERN = re.compile(r"<!--|-->|--!>")
_COMMENT_REPLACEMENTS = {"<!--": "<!==", "-->": "==>", "--!>": "==!>"}
_TEXT_REPLACEMENTS = {"<": "&lt;", "&": "&amp;", "</": "&lt;/"}


class AttributeValueMode(enum.Enum):
    EMPTY = "empty"
    UNQUOTED = "unquoted"
    SINGLE_QUOTED = "single-quoted"
    DOUBLE_QUOTED = "double-quoted"


def attribute_value_mode(value: str) -> AttributeValueMode:
    if not value:
        return AttributeValueMode.EMPTY

    unquoted = True
    single_quoted = True
    double_quoted = True
    for ch in value:
        if ch == '"':
            unquoted = False
            double_quoted = False
        elif ch == "'":
            unquoted = False
            single_quoted = False
        elif ch in UNQUOTED_ATTRIBUTE_VALUE_BREAKERS:
            unquoted = False

    if unquoted:
        return AttributeValueMode.UNQUOTED
    if double_quoted:
        return AttributeValueMode.DOUBLE_QUOTED
    if single_quoted:
        return AttributeValueMode.SINGLE_QUOTED
    # Both quote characters present: double quotes get escaped.
    return AttributeValueMode.DOUBLE_QUOTED


def escape_attribute_value(value: str, mode: AttributeValueMode | None = None) -> str:
    """Return ``value`` as it appears after ``=``, quotes included.

    The EMPTY mode has no ``=value`` part at all, so it returns ``""``.
    """
    if mode is None:
        mode = attribute_value_mode(value)
    if mode is AttributeValueMode.EMPTY:
        return ""
    escaped = value.replace("&", "&amp;")
    if mode is AttributeValueMode.UNQUOTED:
        return escaped
    if mode is AttributeValueMode.SINGLE_QUOTED:
        return f"'{escaped}'"
    return '"' + escaped.replace('"', "&quot;") + '"'


def _is_forbidden_attribute_name_char(ch: str) -> bool:
    code = ord(ch)
    if code <= 0x1F or 0x7F <= code <= 0x9F:
        return True
    if ch in FORBIDDEN_ATTRIBUTE_NAME_CHARS:
        return True
    if 0xFDD0 <= code <= 0xFDEF:
        return True
    return (code & 0xFFFE) == 0xFFFE


def validate_attribute_name(name: str) -> str:
    if not name or any(_is_forbidden_attribute_name_char(ch) for ch in name):
        raise InvalidAttributeName(name)
    return name


def rewrite_comment(body: str) -> str:
    """Return the full ``<!--...-->`` markup for a comment body.

    Only the sequences that would end the comment early are touched:
    ``<!--``, ``-->`` and ``--!>`` have their dashes turned into ``=``, and a
    ``|`` is added where the body would otherwise merge with the delimiters.
    """
    parts = ["<!--"]
    if body.startswith((">", "->")):
        parts.append("|")
    parts.append(_COMMENT_PATTERN.sub(lambda m: _COMMENT_REPLACEMENTS[m.group()], body))
    if body.endswith("<!-"):
        parts.append("|")
    parts.append("-->")
    return "".join(parts)


def escape_text(text: str) -> str:
    return _TEXT_PATTERN.sub(lambda m: _TEXT_REPLACEMENTS[m.group()], text)


def check_raw_text(text: str, element_name: str) -> str:
    """Return raw text unchanged, or raise ``ElementClosedInRawText``.

    Raw text cannot be escaped, so the only option is to refuse text that
    contains an end tag the tokenizer would accept for ``element_name``.
    """
    pattern = re.compile(
        "</" + re.escape(element_name) + "[" + re.escape(END_TAG_NAME_TERMINATORS) + "]",
        re.IGNORECASE | re.ASCII,
    )
    match = pattern.search(text)
    if match is not None:
        raise ElementClosedInRawText(match.group())
    return text


def escape_escapable_raw_text(text: str) -> str:
    return _ESCAPABLE_RAW_TEXT_PATTERN.sub(lambda m: _TEXT_REPLACEMENTS[m.group()], text)

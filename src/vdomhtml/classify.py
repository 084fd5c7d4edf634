"""Element name classification.

Maps a tag name to the ``ElementKind`` that decides how its content and end tag
are serialized. Fixed names are looked up in a table after ASCII lowercasing;
everything else has to look like a plain alphanumeric tag name or a valid
custom element name.
"""

from __future__ import annotations

import enum
import re

from .constants import (
    ASCII_LOWER_TABLE,
    CUSTOM_ELEMENT_CONTINUATION_RANGES,
    ESCAPABLE_RAW_TEXT_ELEMENTS,
    ESCAPABLE_RAW_TEXT_PRE_ELEMENTS,
    NORMAL_PRE_ELEMENTS,
    RAW_TEXT_ELEMENTS,
    TEMPLATE_ELEMENTS,
    VOID_ELEMENTS,
)
from .errors import InvalidElementName
from .node import Node


class ElementKind(enum.Enum):
    VOID = "void"
    TEMPLATE = "template"
    RAW_TEXT = "raw-text"
    ESCAPABLE_RAW_TEXT = "escapable-raw-text"
    ESCAPABLE_RAW_TEXT_PRE = "escapable-raw-text-pre"
    FOREIGN_SELF_CLOSING = "foreign-self-closing"
    FOREIGN_NOT_SELF_CLOSING = "foreign-not-self-closing"
    NORMAL_PRE = "normal-pre"
    NORMAL = "normal"
    CUSTOM_ELEMENT = "custom-element"

    @property
    def has_end_tag(self) -> bool:
        return self not in (ElementKind.VOID, ElementKind.FOREIGN_SELF_CLOSING)

    @property
    def leading_newline(self) -> bool:
        return self in (ElementKind.NORMAL_PRE, ElementKind.ESCAPABLE_RAW_TEXT_PRE)


_FIXED_KINDS: dict[str, ElementKind] = {}
for _names, _kind in (
    (VOID_ELEMENTS, ElementKind.VOID),
    (TEMPLATE_ELEMENTS, ElementKind.TEMPLATE),
    (RAW_TEXT_ELEMENTS, ElementKind.RAW_TEXT),
    (ESCAPABLE_RAW_TEXT_ELEMENTS, ElementKind.ESCAPABLE_RAW_TEXT),
    (ESCAPABLE_RAW_TEXT_PRE_ELEMENTS, ElementKind.ESCAPABLE_RAW_TEXT_PRE),
    (NORMAL_PRE_ELEMENTS, ElementKind.NORMAL_PRE),
):
    for _name in _names:
        _FIXED_KINDS[_name] = _kind
del _names, _kind, _name

# Tag names must start with an ASCII letter: "<1a>" is tokenized as text, not a start tag.
_LEADING_RUN_PATTERN = re.compile(r"[A-Za-z][0-9A-Za-z]*")
_CONTINUATION_CLASS = "".join(
    re.escape(chr(low)) if low == high else f"{re.escape(chr(low))}-{re.escape(chr(high))}"
    for low, high in CUSTOM_ELEMENT_CONTINUATION_RANGES
)
# One alternative per lexer token after the leading run: alphanumeric runs,
# dashes and continuation code points.
_TAIL_TOKEN_PATTERN = re.compile(rf"(?P<run>[0-9A-Za-z]+)|(?P<dash>-)|(?P<cont>[{_CONTINUATION_CLASS}])")


def ascii_lower(value: str) -> str:
    return value.translate(ASCII_LOWER_TABLE)


def classify_element_name(name: str) -> ElementKind:
    """Classify an HTML element name, or raise ``InvalidElementName``.

    - A fixed name (any ASCII case) gets its table kind.
    - A bare ``[A-Za-z][0-9A-Za-z]*`` name is ``NORMAL``.
    - Anything longer must consist of alphanumerics, ``-`` and custom element
      continuation code points. Continuation code points are only allowed when
      at least one ``-`` is present. Such names are ``CUSTOM_ELEMENT``.
    """
    fixed = _FIXED_KINDS.get(ascii_lower(name))
    if fixed is not None:
        return fixed

    leading = _LEADING_RUN_PATTERN.match(name)
    if leading is None:
        raise InvalidElementName(name)
    if leading.end() == len(name):
        return ElementKind.NORMAL

    has_dash = False
    has_continuation = False
    pos = leading.end()
    while pos < len(name):
        token = _TAIL_TOKEN_PATTERN.match(name, pos)
        if token is None:
            raise InvalidElementName(name)
        if token.lastgroup == "dash":
            has_dash = True
        elif token.lastgroup == "cont":
            has_continuation = True
        pos = token.end()

    if has_continuation and not has_dash:
        raise InvalidElementName(name)
    return ElementKind.CUSTOM_ELEMENT


def classify_svg_element_name(name: str, content: Node) -> ElementKind:
    """Classify an SVG element name.

    The name is validated like an HTML name, but foreign elements never get
    the HTML void/raw text/pre treatment: they self-close when empty.
    """
    classify_element_name(name)
    if content.dom_empty():
        return ElementKind.FOREIGN_SELF_CLOSING
    return ElementKind.FOREIGN_NOT_SELF_CLOSING

"""HTML5 Serialization Constants

This module defines the element name tables and code point classes the renderer
uses to decide how an element is serialized. Element lists are lowercase and kept
as lists to maintain consistent iteration order; matching is ASCII
case-insensitive and goes through ``ASCII_LOWER_TABLE``.

Usage:
    from vdomhtml.constants import VOID_ELEMENTS, RAW_TEXT_ELEMENTS

References:
    - https://html.spec.whatwg.org/multipage/syntax.html#elements-2
    - https://html.spec.whatwg.org/multipage/custom-elements.html#valid-custom-element-name
    - https://html.spec.whatwg.org/multipage/syntax.html#attributes-2
"""

# HTML Element Sets
VOID_ELEMENTS = [
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
]

TEMPLATE_ELEMENTS = ["template"]

RAW_TEXT_ELEMENTS = [
    "script",
    "style",
]

ESCAPABLE_RAW_TEXT_ELEMENTS = ["title"]

# The tokenizer drops one newline directly after these start tags, so the
# serializer always puts one there.
ESCAPABLE_RAW_TEXT_PRE_ELEMENTS = ["textarea"]

NORMAL_PRE_ELEMENTS = [
    "pre",
    "listing",
]

DOCTYPE = "<!DOCTYPE html>"

# Only uppercase ASCII is folded. str.lower() would also map e.g. U+212A KELVIN
# SIGN to "k", which the HTML tokenizer does not do.
ASCII_LOWER_TABLE = str.maketrans({chr(code): chr(code + 32) for code in range(65, 91)})

# Characters after "</name" that make the tokenizer treat it as an end tag.
END_TAG_NAME_TERMINATORS = "\t\n\f\r />"

# Characters that force an attribute value to be quoted.
UNQUOTED_ATTRIBUTE_VALUE_BREAKERS = "\t\n\f\r =<>`"

# PCENChar from the custom element name production, minus "-" and ASCII
# alphanumerics (those are scanned separately). Inclusive ranges.
CUSTOM_ELEMENT_CONTINUATION_RANGES = [
    (0x2E, 0x2E),  # .
    (0x5F, 0x5F),  # _
    (0xB7, 0xB7),
    (0xC0, 0xD6),
    (0xD8, 0xF6),
    (0xF8, 0x37D),
    (0x37F, 0x1FFF),
    (0x200C, 0x200D),
    (0x203F, 0x2040),
    (0x2070, 0x218F),
    (0x2C00, 0x2FEF),
    (0x3001, 0xD7FF),
    (0xF900, 0xFDCF),
    (0xFDF0, 0xFFFD),
    (0x10000, 0xEFFFF),
]

# Code points that may never appear in an attribute name, besides the
# noncharacters which are checked arithmetically.
FORBIDDEN_ATTRIBUTE_NAME_CHARS = " \"'>/="

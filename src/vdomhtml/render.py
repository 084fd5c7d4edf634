"""HTML serialization of vdom trees."""

from __future__ import annotations

import io
import os
import sys
from typing import Any

from .classify import ElementKind, classify_element_name, classify_svg_element_name
from .constants import DOCTYPE
from .errors import (
    DepthLimitExceeded,
    NonEmptyVoidElementContent,
    NonTextDomNodeInEscapableRawTextPosition,
    NonTextDomNodeInRawTextPosition,
    RemnantSiteNotImplemented,
    SinkError,
)
from .escape import (
    AttributeValueMode,
    attribute_value_mode,
    check_raw_text,
    escape_attribute_value,
    escape_escapable_raw_text,
    escape_text,
    rewrite_comment,
    validate_attribute_name,
)
from .node import (
    Comment,
    Element,
    HtmlElement,
    Keyed,
    Memoized,
    Multi,
    Node,
    RemnantSite,
    SvgElement,
    Text,
)

DEFAULT_DEPTH_LIMIT = 256


class RenderOpts:
    __slots__ = ("debug",)

    def __init__(self, debug=None):
        if debug is None:
            debug = os.environ.get("VDOMHTML_DEBUG", "0") == "1"
        self.debug = bool(debug)


def serialize_attribute(name: str, value: str) -> str:
    validate_attribute_name(name)
    mode = attribute_value_mode(value)
    if mode is AttributeValueMode.EMPTY:
        return f" {name}"
    return f" {name}={escape_attribute_value(value, mode)}"


def serialize_start_tag(element: Element, kind: ElementKind) -> str:
    parts: list[str] = ["<", element.name]
    is_ = element.creation_options.is_
    if is_ is not None:
        parts.append(serialize_attribute("is", is_))
    for attribute in element.attributes:
        parts.append(serialize_attribute(attribute.name, attribute.value))

    # The space keeps "/" out of a trailing unquoted attribute value.
    if kind is ElementKind.FOREIGN_SELF_CLOSING:
        parts.append(" />")
    else:
        parts.append(">")
    if kind.leading_newline:
        parts.append("\n")
    return "".join(parts)


def serialize_end_tag(name: str) -> str:
    return f"</{name}>"


class Renderer:
    """Walks a vdom tree and writes its HTML into a sink.

    The walk uses an explicit work stack instead of recursion, so deep trees
    are bounded only by the depth limit and not by the interpreter's stack.
    """

    __slots__ = ("env_debug", "sink")

    def __init__(self, sink: Any, opts: RenderOpts | None = None) -> None:
        self.sink = sink
        self.env_debug = (opts or RenderOpts()).debug

    def debug(self, message: str, indent: int = 0) -> None:
        # Only format when debugging is on
        if self.env_debug:
            print(f"{' ' * indent}{message}", file=sys.stderr)

    def write(self, fragment: str) -> None:
        if not fragment:
            return
        try:
            self.sink.write(fragment)
        except (OSError, ValueError) as exc:
            raise SinkError(exc) from exc

    def render_document(self, tree: Node, depth_limit: int) -> None:
        if depth_limit < 1:
            raise DepthLimitExceeded(tree)
        self.write(DOCTYPE)
        self.render_fragment(tree, depth_limit)

    def render_fragment(self, tree: Node, depth_limit: int) -> None:
        # Items are either (node, depth, level) frames or literal markup.
        stack: list[Any] = [(tree, depth_limit, 0)]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                self.write(item)
                continue

            node, depth, level = item
            if depth < 1:
                raise DepthLimitExceeded(node)

            if isinstance(node, Text):
                self.debug(f"text ({depth})", indent=level)
                self.write(escape_text(node.text))
            elif isinstance(node, (HtmlElement, SvgElement)):
                self._render_element(node, depth, level, stack)
            elif isinstance(node, Multi):
                self.debug(f"multi[{len(node.nodes)}] ({depth})", indent=level)
                stack.extend((child, depth - 1, level + 1) for child in reversed(node.nodes))
            elif isinstance(node, Keyed):
                self.debug(f"keyed[{len(node.reorderable_fragments)}] ({depth})", indent=level)
                stack.extend(
                    (fragment.content, depth - 1, level + 1) for fragment in reversed(node.reorderable_fragments)
                )
            elif isinstance(node, Memoized):
                self.debug(f"memoized ({depth})", indent=level)
                stack.append((node.content, depth - 1, level + 1))
            elif isinstance(node, Comment):
                self.debug(f"comment ({depth})", indent=level)
                self.write(rewrite_comment(node.comment))
            elif isinstance(node, RemnantSite):
                raise RemnantSiteNotImplemented
            else:
                msg = f"Not a vdom node: {node!r}"
                raise TypeError(msg)

    def _render_element(self, node: HtmlElement | SvgElement, depth: int, level: int, stack: list[Any]) -> None:
        element = node.element
        name = element.name
        content = element.content
        if isinstance(node, SvgElement):
            kind = classify_svg_element_name(name, content)
        else:
            kind = classify_element_name(name)
        self.debug(f"<{name}> {kind.value} ({depth})", indent=level)

        self.write(serialize_start_tag(element, kind))

        if kind.has_end_tag:
            stack.append(serialize_end_tag(name))

        if kind in (ElementKind.VOID, ElementKind.FOREIGN_SELF_CLOSING):
            if not content.dom_empty():
                raise NonEmptyVoidElementContent(content)
        elif kind is ElementKind.RAW_TEXT:
            text = self._gather_text(content, depth - 1, NonTextDomNodeInRawTextPosition)
            self.write(check_raw_text(text, name))
        elif kind in (ElementKind.ESCAPABLE_RAW_TEXT, ElementKind.ESCAPABLE_RAW_TEXT_PRE):
            text = self._gather_text(content, depth - 1, NonTextDomNodeInEscapableRawTextPosition)
            self.write(escape_escapable_raw_text(text))
        else:
            stack.append((content, depth - 1, level + 1))

    def _gather_text(self, content: Node, depth: int, non_text_error: type) -> str:
        """Concatenate the text of a raw text subtree.

        Joining first means an end tag split across adjacent text nodes is
        still caught by the raw text check.
        """
        parts: list[str] = []
        stack: list[tuple[Node, int]] = [(content, depth)]
        while stack:
            node, remaining = stack.pop()
            if remaining < 1:
                raise DepthLimitExceeded(node)
            if isinstance(node, Text):
                parts.append(node.text)
            elif isinstance(node, Multi):
                stack.extend((child, remaining - 1) for child in reversed(node.nodes))
            elif isinstance(node, Keyed):
                stack.extend((fragment.content, remaining - 1) for fragment in reversed(node.reorderable_fragments))
            elif isinstance(node, Memoized):
                stack.append((node.content, remaining - 1))
            elif isinstance(node, RemnantSite):
                raise RemnantSiteNotImplemented
            elif isinstance(node, (Comment, HtmlElement, SvgElement)):
                raise non_text_error(node)
            else:
                msg = f"Not a vdom node: {node!r}"
                raise TypeError(msg)
        return "".join(parts)


def render_document(tree: Node, sink: Any, depth_limit: int, *, opts: RenderOpts | None = None) -> None:
    """Write ``<!DOCTYPE html>`` followed by the HTML for ``tree`` into ``sink``."""
    Renderer(sink, opts).render_document(tree, depth_limit)


def render_fragment(tree: Node, sink: Any, depth_limit: int, *, opts: RenderOpts | None = None) -> None:
    """Write the HTML for ``tree`` into ``sink``.

    ``depth_limit`` is the number of nesting levels that may be entered,
    counting the root. Every step into element content, a ``Memoized`` node or
    the children of a ``Multi``/``Keyed`` node uses one level.
    """
    Renderer(sink, opts).render_fragment(tree, depth_limit)


def to_html(
    tree: Node,
    depth_limit: int = DEFAULT_DEPTH_LIMIT,
    *,
    document: bool = False,
    opts: RenderOpts | None = None,
) -> str:
    """Render ``tree`` to a string."""
    buffer = io.StringIO()
    if document:
        render_document(tree, buffer, depth_limit, opts=opts)
    else:
        render_fragment(tree, buffer, depth_limit, opts=opts)
    return buffer.getvalue()

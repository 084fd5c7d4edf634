"""Virtual DOM nodes consumed by the renderer.

The tree is immutable. Fields the renderer never reads (DOM bindings, event
bindings, memoization keys, reorder keys) are kept so trees built for a
client-side DOM can be rendered unchanged.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any


class Node:
    """Base class of all vdom node variants."""

    __slots__ = ()

    def dom_empty(self) -> bool:
        """True if this node stands for no DOM nodes at all.

        Only empty wrappers (`Multi`, `Keyed`, `Memoized`) are dom-empty. Wrapper
        chains are walked with an explicit stack, not recursion.
        """
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            if isinstance(node, Multi):
                stack.extend(node.nodes)
            elif isinstance(node, Keyed):
                stack.extend(fragment.content for fragment in node.reorderable_fragments)
            elif isinstance(node, Memoized):
                stack.append(node.content)
            else:
                return False
        return True

    # Thread-safety markers. Both spellings are accepted by the renderer.
    def prefer_thread_safe(self) -> Node:
        return self

    def prefer_thread_local(self) -> Node:
        return self


@dataclass(frozen=True, slots=True)
class Attribute:
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class ElementCreationOptions:
    # Rendered as an `is` attribute ahead of the element's own attributes.
    is_: str | None = None

    def with_is(self, is_: str | None) -> ElementCreationOptions:
        return ElementCreationOptions(is_=is_)


@dataclass(frozen=True, slots=True)
class Comment(Node):
    comment: str
    dom_binding: Any = None


@dataclass(frozen=True, slots=True)
class Multi(Node):
    nodes: Sequence[Node] = ()


@dataclass(frozen=True, slots=True)
class Element:
    name: str
    attributes: Sequence[Attribute] = ()
    content: Node = field(default_factory=Multi)
    creation_options: ElementCreationOptions = field(default_factory=ElementCreationOptions)
    event_bindings: Sequence[Any] = ()


@dataclass(frozen=True, slots=True)
class HtmlElement(Node):
    element: Element
    dom_binding: Any = None


@dataclass(frozen=True, slots=True)
class SvgElement(Node):
    element: Element
    dom_binding: Any = None


@dataclass(frozen=True, slots=True)
class Memoized(Node):
    state_key: Any
    content: Node


@dataclass(frozen=True, slots=True)
class ReorderableFragment:
    dom_key: Any
    content: Node


@dataclass(frozen=True, slots=True)
class Keyed(Node):
    reorderable_fragments: Sequence[ReorderableFragment] = ()


@dataclass(frozen=True, slots=True)
class Text(Node):
    text: str
    dom_binding: Any = None


@dataclass(frozen=True, slots=True)
class RemnantSite(Node):
    content: Any = None

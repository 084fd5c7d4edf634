from .classify import ElementKind, classify_element_name
from .errors import (
    DepthLimitExceeded,
    ElementClosedInRawText,
    InvalidAttributeName,
    InvalidElementName,
    NonEmptyVoidElementContent,
    NonTextDomNodeInEscapableRawTextPosition,
    NonTextDomNodeInRawTextPosition,
    RemnantSiteNotImplemented,
    RenderError,
    SinkError,
)
from .node import (
    Attribute,
    Comment,
    Element,
    ElementCreationOptions,
    HtmlElement,
    Keyed,
    Memoized,
    Multi,
    Node,
    RemnantSite,
    ReorderableFragment,
    SvgElement,
    Text,
)
from .render import RenderOpts, render_document, render_fragment, to_html

__all__ = [
    "Attribute",
    "Comment",
    "DepthLimitExceeded",
    "Element",
    "ElementClosedInRawText",
    "ElementCreationOptions",
    "ElementKind",
    "HtmlElement",
    "InvalidAttributeName",
    "InvalidElementName",
    "Keyed",
    "Memoized",
    "Multi",
    "Node",
    "NonEmptyVoidElementContent",
    "NonTextDomNodeInEscapableRawTextPosition",
    "NonTextDomNodeInRawTextPosition",
    "RemnantSite",
    "RemnantSiteNotImplemented",
    "RenderError",
    "RenderOpts",
    "ReorderableFragment",
    "SinkError",
    "SvgElement",
    "Text",
    "classify_element_name",
    "render_document",
    "render_fragment",
    "to_html",
]

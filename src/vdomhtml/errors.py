"""Render failures.

Every failure aborts the whole render call. The sink may already hold part of
the output when one is raised.
"""

from __future__ import annotations

from typing import Any


class RenderError(Exception):
    """Base class for all render failures.

    Each subclass carries a stable ``code`` and a user-facing ``description``.
    """

    code = "render-error"

    @property
    def description(self) -> str:
        return "Rendering failed."

    def __str__(self) -> str:
        return f"{self.code} - {self.description}"


class InvalidElementName(RenderError):
    code = "invalid-element-name"

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    @property
    def description(self) -> str:
        return f"Invalid element name {self.name!r}."


class InvalidAttributeName(RenderError):
    code = "invalid-attribute-name"

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    @property
    def description(self) -> str:
        return f"Invalid attribute name {self.name!r}."


class NonEmptyVoidElementContent(RenderError):
    """A void or self-closing foreign element was given content."""

    code = "non-empty-void-element-content"

    def __init__(self, content: Any) -> None:
        super().__init__(content)
        self.content = content

    @property
    def description(self) -> str:
        return "Void and self-closing elements cannot have content."


class NonTextDomNodeInRawTextPosition(RenderError):
    code = "non-text-dom-node-in-raw-text-position"

    def __init__(self, node: Any) -> None:
        super().__init__(node)
        self.node = node

    @property
    def description(self) -> str:
        return f"Only text may appear inside a raw text element (found {type(self.node).__name__})."


class NonTextDomNodeInEscapableRawTextPosition(RenderError):
    code = "non-text-dom-node-in-escapable-raw-text-position"

    def __init__(self, node: Any) -> None:
        super().__init__(node)
        self.node = node

    @property
    def description(self) -> str:
        return f"Only text may appear inside an escapable raw text element (found {type(self.node).__name__})."


class ElementClosedInRawText(RenderError):
    """The raw text contains an end tag for its own element."""

    code = "element-closed-in-raw-text"

    def __init__(self, span: str) -> None:
        super().__init__(span)
        self.span = span

    @property
    def description(self) -> str:
        return f"Raw text would close its element early at {self.span!r}."


class DepthLimitExceeded(RenderError):
    code = "depth-limit-exceeded"

    def __init__(self, node: Any) -> None:
        super().__init__(node)
        self.node = node

    @property
    def description(self) -> str:
        return f"Depth limit exceeded at {type(self.node).__name__} node."


class SinkError(RenderError):
    """The sink failed to accept a fragment. The original error is ``inner``."""

    code = "sink-error"

    def __init__(self, inner: BaseException) -> None:
        super().__init__(inner)
        self.inner = inner

    @property
    def description(self) -> str:
        return f"Writing to the output failed: {self.inner}"


class RemnantSiteNotImplemented(RenderError):
    code = "remnant-site-not-implemented"

    @property
    def description(self) -> str:
        return "Remnant sites are not supported yet."

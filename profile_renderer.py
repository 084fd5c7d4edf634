#!/usr/bin/env python3
"""Profile the vdom renderer to find performance bottlenecks."""

import cProfile
import io
import pstats

from vdomhtml import Attribute, Comment, Element, HtmlElement, Multi, Text, to_html


def el(name, *children, **attrs):
    return HtmlElement(
        Element(
            name,
            attributes=tuple(Attribute(k.rstrip("_").replace("_", "-"), v) for k, v in attrs.items()),
            content=Multi(children),
        )
    )


# Sample tree
row = el("tr", el("td", Text("Cell 1 & 2")), el("td", Text("Cell <3>")))
page = el(
    "html",
    el("head", el("title", Text("Test")), el("style", Text("p > a { color: red }"))),
    el(
        "body",
        el(
            "div",
            Comment(" content -->"),
            el("p", Text("Paragraph 1"), class_="lead"),
            el("p", Text("Paragraph 2"), title="a \"quoted\" value"),
            el("table", *[row] * 20),
            el("br"),
            class_="container",
        ),
    ),
)
tree = Multi((page,) * 100)  # Repeat for more meaningful results

# Profile
pr = cProfile.Profile()
pr.enable()

for _ in range(10):
    result = to_html(tree, 16)

pr.disable()

# Print stats
s = io.StringIO()
ps = pstats.Stats(pr, stream=s).sort_stats("cumulative")
ps.print_stats(50)  # Top 50 functions
print(s.getvalue())

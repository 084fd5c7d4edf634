"""End-to-end rendering of small vdom trees."""

import io
import unittest

from vdomhtml import (
    Attribute,
    Comment,
    Element,
    ElementClosedInRawText,
    ElementCreationOptions,
    HtmlElement,
    InvalidAttributeName,
    InvalidElementName,
    Keyed,
    Memoized,
    Multi,
    NonEmptyVoidElementContent,
    NonTextDomNodeInEscapableRawTextPosition,
    NonTextDomNodeInRawTextPosition,
    RemnantSite,
    RemnantSiteNotImplemented,
    ReorderableFragment,
    SvgElement,
    Text,
    render_document,
    render_fragment,
    to_html,
)


def html(name, content=None, attributes=(), **options):
    return HtmlElement(
        Element(
            name,
            attributes=tuple(Attribute(n, v) for n, v in attributes),
            content=content if content is not None else Multi(()),
            creation_options=ElementCreationOptions(**options),
        )
    )


def svg(name, content=None, attributes=()):
    return SvgElement(
        Element(
            name,
            attributes=tuple(Attribute(n, v) for n, v in attributes),
            content=content if content is not None else Multi(()),
        )
    )


class TestElements(unittest.TestCase):
    def test_br(self):
        assert to_html(html("br"), 1) == "<br>"

    def test_br_keeps_case(self):
        assert to_html(html("BR"), 1) == "<BR>"

    def test_div(self):
        assert to_html(html("div"), 2) == "<div></div>"
        assert to_html(html("DIV"), 2) == "<DIV></DIV>"

    def test_nested_div(self):
        assert to_html(html("div", html("div")), 3) == "<div><div></div></div>"

    def test_custom_is_attribute(self):
        tree = html("div", attributes=[("is", "custom-div")])
        assert to_html(tree, 2) == "<div is=custom-div></div>"

    def test_is_creation_option(self):
        """The `is` option is written before the element's own attributes."""
        tree = html("DIV", is_="CUSTOM-DIV")
        assert to_html(tree, 2) == "<DIV is=CUSTOM-DIV></DIV>"

        tree = html("div", attributes=[("id", "x")], is_="my-div")
        assert to_html(tree, 2) == "<div is=my-div id=x></div>"

        options = ElementCreationOptions().with_is("fancy-p")
        assert options.is_ == "fancy-p"
        tree = HtmlElement(Element("p", creation_options=options))
        assert to_html(tree, 2) == "<p is=fancy-p></p>"
        assert to_html(HtmlElement(Element("p", creation_options=options.with_is(None))), 2) == "<p></p>"

    def test_custom_element(self):
        tree = html("my-widget", Text("hi"))
        assert to_html(tree, 2) == "<my-widget>hi</my-widget>"

    def test_template(self):
        tree = html("template", html("p", Text("x")))
        assert to_html(tree, 3) == "<template><p>x</p></template>"

    def test_invalid_element_name(self):
        with self.assertRaises(InvalidElementName) as ctx:
            to_html(html("a b"), 2)
        assert ctx.exception.name == "a b"

    def test_void_with_empty_content(self):
        tree = html("img", Multi((Multi(()), Keyed(()))))
        assert to_html(tree, 1) == "<img>"

    def test_void_with_content_fails(self):
        content = Text("")
        with self.assertRaises(NonEmptyVoidElementContent) as ctx:
            to_html(html("input", content), 5)
        assert ctx.exception.content is content

    def test_pre_leading_newline(self):
        assert to_html(html("pre", Text("x")), 2) == "<pre>\nx</pre>"
        assert to_html(html("listing"), 2) == "<listing>\n</listing>"


class TestAttributes(unittest.TestCase):
    def render_attribute(self, name, value):
        return to_html(html("p", attributes=[(name, value)]), 2)

    def test_empty_value(self):
        assert self.render_attribute("hidden", "") == "<p hidden></p>"

    def test_unquoted(self):
        assert self.render_attribute("class", "a-b") == "<p class=a-b></p>"

    def test_unquoted_ampersand(self):
        assert self.render_attribute("data-x", "a&b") == "<p data-x=a&amp;b></p>"

    def test_double_quoted(self):
        assert self.render_attribute("title", "a b") == '<p title="a b"></p>'
        assert self.render_attribute("href", "?a=1&b=2") == '<p href="?a=1&amp;b=2"></p>'

    def test_single_quoted(self):
        assert self.render_attribute("title", 'say "hi"') == "<p title='say \"hi\"'></p>"

    def test_both_quotes(self):
        assert self.render_attribute("title", "a\"b'c") == "<p title=\"a&quot;b'c\"></p>"

    def test_attribute_order_is_kept(self):
        tree = html("p", attributes=[("b", "1"), ("a", "2")])
        assert to_html(tree, 2) == "<p b=1 a=2></p>"

    def test_invalid_attribute_name(self):
        for name in ["", "a b", "a=b", "a/b", "a>b", 'a"', "a'", "a\x00", "a\x85", "\ufdd0", "a\U0001fffe"]:
            with self.assertRaises(InvalidAttributeName) as ctx:
                self.render_attribute(name, "x")
            assert ctx.exception.name == name


class TestForeign(unittest.TestCase):
    def test_self_closing(self):
        tree = svg("circle", attributes=[("r", "5")])
        assert to_html(tree, 1) == "<circle r=5 />"

    def test_self_closing_keeps_slash_out_of_value(self):
        tree = svg("path", attributes=[("d", "M0/")])
        assert to_html(tree, 1) == "<path d=M0/ />"

    def test_not_self_closing(self):
        tree = svg("svg", svg("g", Text("x")))
        assert to_html(tree, 3) == "<svg><g>x</g></svg>"

    def test_svg_script_is_not_raw_text(self):
        tree = svg("script", Text("a < b"))
        assert to_html(tree, 2) == "<script>a &lt; b</script>"


class TestText(unittest.TestCase):
    def test_escape(self):
        assert to_html(Text("a < b & c"), 1) == "a &lt; b &amp; c"

    def test_plain_text_is_verbatim(self):
        assert to_html(Text("a > b \"quoted\" 'x'"), 1) == "a > b \"quoted\" 'x'"

    def test_comment(self):
        tree = Comment("><!-- Hello! --!> --><!-")
        assert to_html(tree, 1) == "<!--|><!== Hello! ==!> ==><!-|-->"

    def test_wrappers(self):
        tree = Multi(
            (
                Memoized(object(), Text("a")),
                Keyed((ReorderableFragment(2, Text("b")), ReorderableFragment(1, Text("c")))),
            )
        )
        assert to_html(tree, 3) == "abc"

    def test_remnant_site(self):
        with self.assertRaises(RemnantSiteNotImplemented):
            to_html(Multi((RemnantSite(),)), 2)


class TestRawText(unittest.TestCase):
    def test_script_verbatim(self):
        tree = html("script", Text("if (a < b && c) {}"))
        assert to_html(tree, 2) == "<script>if (a < b && c) {}</script>"

    def test_script_closed_in_raw_text(self):
        with self.assertRaises(ElementClosedInRawText) as ctx:
            to_html(html("script", Text("x </script>")), 2)
        assert ctx.exception.span == "</script>"

    def test_script_similar_end_tag(self):
        tree = html("script", Text("x </scripting>"))
        assert to_html(tree, 2) == "<script>x </scripting></script>"

    def test_end_tag_is_case_insensitive(self):
        with self.assertRaises(ElementClosedInRawText) as ctx:
            to_html(html("style", Text("</STYLE\n")), 2)
        assert ctx.exception.span == "</STYLE\n"

    def test_end_tag_split_across_text_nodes(self):
        tree = html("script", Multi((Text("</scr"), Memoized(None, Text("ipt>")))))
        with self.assertRaises(ElementClosedInRawText):
            to_html(tree, 4)

    def test_comment_in_raw_text(self):
        comment = Comment("x")
        with self.assertRaises(NonTextDomNodeInRawTextPosition) as ctx:
            to_html(html("style", Multi((comment,))), 3)
        assert ctx.exception.node is comment

    def test_element_in_raw_text(self):
        with self.assertRaises(NonTextDomNodeInRawTextPosition):
            to_html(html("script", html("b")), 3)


class TestEscapableRawText(unittest.TestCase):
    def test_title(self):
        tree = html("title", Text("a </b> & <c>"))
        assert to_html(tree, 2) == "<title>a &lt;/b> &amp; <c></title>"

    def test_title_own_end_tag(self):
        tree = html("title", Text("</title>"))
        assert to_html(tree, 2) == "<title>&lt;/title></title>"

    def test_textarea_leading_newline(self):
        tree = html("textarea", Keyed((ReorderableFragment("k", Text("\nx")),)))
        assert to_html(tree, 3) == "<textarea>\n\nx</textarea>"

    def test_element_in_escapable_raw_text(self):
        with self.assertRaises(NonTextDomNodeInEscapableRawTextPosition):
            to_html(html("textarea", svg("g")), 3)


class TestEntryPoints(unittest.TestCase):
    def test_document(self):
        sink = io.StringIO()
        render_document(html("br"), sink, 1)
        assert sink.getvalue() == "<!DOCTYPE html><br>"

    def test_document_is_doctype_plus_fragment(self):
        tree = html("div", Multi((Comment("c"), Text("t & u"), html("hr"))), attributes=[("id", "main")])
        fragment = io.StringIO()
        document = io.StringIO()
        render_fragment(tree, fragment, 3)
        render_document(tree, document, 3)
        assert document.getvalue() == "<!DOCTYPE html>" + fragment.getvalue()
        assert to_html(tree, 3, document=True) == document.getvalue()

    def test_input_is_not_mutated(self):
        element = Element("p", attributes=(Attribute("a", "b c"),), content=Text("<x>"))
        tree = HtmlElement(element)
        to_html(tree, 2)
        assert tree.element is element
        assert element.attributes == (Attribute("a", "b c"),)
        assert element.content == Text("<x>")

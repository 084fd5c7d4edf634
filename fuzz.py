#!/usr/bin/env python3
"""
Random fuzzer for the vdom HTML renderer.
Builds hostile vdom trees and checks that rendering either succeeds with
well-formed output or fails with a RenderError.
"""

import argparse
import io
import random
import string
import sys
import time
import traceback

from vdomhtml import (
    Attribute,
    Comment,
    Element,
    HtmlElement,
    Keyed,
    Memoized,
    Multi,
    RenderError,
    ReorderableFragment,
    SvgElement,
    Text,
    render_document,
    render_fragment,
)

# Fuzzing strategies
TAGS = [
    "div", "span", "a", "ul", "li", "section", "article", "em", "b", "code",
    "br", "hr", "img", "input", "meta", "wbr",
    "script", "style", "title", "textarea", "pre", "listing", "template",
    "my-element", "x-foo", "DIV", "Script", "TITLE",
]

# Tags whose reparsed structure matches the tree without tree-construction fixups.
# script is left out: "<!--<script>" in its body can keep the end tag from closing it.
REPARSE_TAGS = [
    "div", "span", "section", "article", "em", "code", "br", "hr", "img", "wbr",
    "style", "title", "textarea", "pre", "listing", "my-element", "x-foo",
]

SVG_TAGS = ["g", "circle", "path", "rect", "text", "script", "foreignObject"]

ATTRIBUTES = [
    "id", "class", "style", "href", "src", "alt", "title", "data-x", "aria-label",
    "hidden", "onclick", "is",
]

SPECIAL_CHARS = [
    "\x00", "\x01", "\x0b", "\x0c", "\x7f", "\x85",
    "\ufffd", "\ufdd0", "\uffff",
    "\u00a0", "\u2028", "\u200b", "\u200c", "\ufeff",
    "\t", "\n", "\r", " ",
]

MARKUP_FRAGMENTS = [
    "<", ">", "&", "&amp;", "&lt", "</", "<!--", "-->", "--!>", "<!-", "->", "-", "--",
    '"', "'", "=", "`", "/", "</script>", "</style ", "</title>", "</textarea>",
    "<script>", "<![CDATA[", "]]>",
]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def random_markup_text(max_parts=8):
    """Mix plain text with markup-significant fragments."""
    parts = []
    for _ in range(random.randint(0, max_parts)):
        choice = random.random()
        if choice < 0.4:
            parts.append(random_string(0, 6))
        elif choice < 0.8:
            parts.append(random.choice(MARKUP_FRAGMENTS))
        else:
            parts.append(random.choice(SPECIAL_CHARS))
    return "".join(parts)


def fuzz_tag_name():
    """Generate valid and malformed tag names."""
    strategies = [
        lambda: random.choice(TAGS),
        lambda: random.choice(TAGS).upper(),
        lambda: random.choice(TAGS) + random_string(1, 3),
        lambda: random.choice(TAGS) + "-" + random.choice(["x", "\u00e9", "\u00b7", ".", "_"]),
        lambda: random_string(1, 8),
        lambda: "",
        lambda: "0" + random.choice(TAGS),
        lambda: "-" + random.choice(TAGS),
        lambda: random.choice(TAGS) + random.choice(SPECIAL_CHARS),
        lambda: random.choice(TAGS) + "/" + random.choice(TAGS),
    ]
    return random.choice(strategies)()


def fuzz_attribute():
    """Generate attribute name/value pairs, some of them invalid."""
    name_strategies = [
        lambda: random.choice(ATTRIBUTES),
        lambda: random.choice(ATTRIBUTES) + random.choice(SPECIAL_CHARS),
        lambda: random.choice(["", "=", "/", '"', "a b"]),
    ]
    name = random.choices(name_strategies, weights=[8, 1, 1])[0]()
    value = random.choice(["", random_string(1, 10), random_markup_text(4)])
    return Attribute(name, value)


def fuzz_text():
    return Text(random_markup_text())


def fuzz_comment():
    return Comment(random_markup_text())


def fuzz_element(depth, max_depth, tags=None, valid_only=False):
    name = random.choice(tags) if tags else fuzz_tag_name()
    attributes = tuple(fuzz_attribute() for _ in range(random.randint(0, 3)))
    if valid_only:
        attributes = tuple(a for a in attributes if a.name in ATTRIBUTES)
    lowered = name.lower()
    if lowered in {"br", "hr", "img", "input", "meta", "wbr"} and (valid_only or random.random() < 0.9):
        content = Multi(())
    elif lowered in {"script", "style", "title", "textarea"} and (valid_only or random.random() < 0.9):
        content = Multi(tuple(fuzz_text() for _ in range(random.randint(0, 3))))
    else:
        content = fuzz_children(depth + 1, max_depth, tags=tags, valid_only=valid_only)
    return HtmlElement(Element(name, attributes=attributes, content=content))


def fuzz_svg(depth, max_depth):
    name = random.choice(SVG_TAGS)
    content = fuzz_children(depth + 1, max_depth) if random.random() < 0.5 else Multi(())
    return SvgElement(Element(name, content=content))


def fuzz_node(depth, max_depth, tags=None, valid_only=False):
    if depth >= max_depth:
        return fuzz_text()
    strategies = [
        lambda: fuzz_element(depth, max_depth, tags=tags, valid_only=valid_only),
        fuzz_text,
        fuzz_comment,
    ]
    weights = [6, 4, 2]
    if not valid_only:
        strategies.append(lambda: fuzz_svg(depth, max_depth))
        strategies.append(lambda: Memoized(random.random(), fuzz_node(depth + 1, max_depth)))
        weights += [1, 1]
    return random.choices(strategies, weights=weights)[0]()


def fuzz_children(depth, max_depth, tags=None, valid_only=False):
    children = tuple(fuzz_node(depth + 1, max_depth, tags=tags, valid_only=valid_only) for _ in range(random.randint(0, 4)))
    if not valid_only and random.random() < 0.2:
        return Keyed(tuple(ReorderableFragment(i, child) for i, child in enumerate(children)))
    return Multi(children)


def generate_fuzzed_tree(valid_only=False):
    """Generate a random vdom tree."""
    max_depth = random.randint(1, 12)
    tags = REPARSE_TAGS if valid_only else None
    return fuzz_children(0, max_depth, tags=tags, valid_only=valid_only)


def check_invariants(tree, fragment, depth_limit):
    """Return a list of invariant violations for one rendered tree."""
    problems = []
    document = io.StringIO()
    render_document(tree, document, depth_limit)
    if document.getvalue() != "<!DOCTYPE html>" + fragment:
        problems.append("document output is not doctype + fragment output")

    deeper = io.StringIO()
    render_fragment(tree, deeper, depth_limit * 2)
    if deeper.getvalue() != fragment:
        problems.append("larger depth limit changed the output")
    return problems


def element_names(node):
    """Pre-order element names of a vdom tree, lowercased."""
    names = []
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, (HtmlElement, SvgElement)):
            names.append(current.element.name.lower())
            stack.append(current.element.content)
        elif isinstance(current, Multi):
            stack.extend(reversed(current.nodes))
        elif isinstance(current, Keyed):
            stack.extend(fragment.content for fragment in reversed(current.reorderable_fragments))
        elif isinstance(current, Memoized):
            stack.append(current.content)
    return names


def reparsed_element_names(fragment):
    import html5lib

    root = html5lib.parseFragment(fragment, container="div", namespaceHTMLElements=False)
    names = []
    stack = list(reversed(list(root)))
    while stack:
        current = stack.pop()
        if isinstance(current.tag, str):
            names.append(current.tag.lower())
            stack.extend(reversed(list(current)))
    return names


def run_fuzzer(num_tests, seed=None, verbose=False, save_failures=False, reparse=False):
    """Run the fuzzer against the renderer."""
    if seed is not None:
        random.seed(seed)

    crashes = []
    violations = []
    hangs = []
    rejected = 0
    successes = 0

    print(f"Fuzzing vdomhtml with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        tree = generate_fuzzed_tree(valid_only=reparse)
        depth_limit = random.randint(1, 30)

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            start = time.perf_counter()
            sink = io.StringIO()
            render_fragment(tree, sink, depth_limit)
            elapsed = time.perf_counter() - start
            fragment = sink.getvalue()

            problems = check_invariants(tree, fragment, depth_limit)
            if reparse and element_names(tree) != reparsed_element_names(fragment):
                problems.append("reparsed element structure differs")

            if problems:
                violations.append({"test_num": i, "tree": repr(tree), "problems": problems})
                if verbose:
                    print(f"  VIOLATION: Test {i}: {problems}")
            elif elapsed > 5.0:
                hangs.append({"test_num": i, "tree": repr(tree), "time": elapsed})
                if verbose:
                    print(f"  HANG: Test {i} took {elapsed:.2f}s")
            else:
                successes += 1

        except RenderError as e:
            rejected += 1
            if verbose:
                print(f"  Rejected: Test {i}: {e}")
        except Exception as e:
            crashes.append({
                "test_num": i,
                "tree": repr(tree),
                "error": str(e),
                "traceback": traceback.format_exc(),
            })
            if verbose:
                print(f"  CRASH: Test {i}: {e}")

    elapsed_total = time.time() - start_time

    # Report results
    print(f"\n{'='*60}")
    print("FUZZING RESULTS: vdomhtml")
    print(f"{'='*60}")
    print(f"Total tests:    {num_tests}")
    print(f"Successes:      {successes}")
    print(f"Rejected:       {rejected}")
    print(f"Violations:     {len(violations)}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Hangs (>5s):    {len(hangs)}")
    print(f"Total time:     {elapsed_total:.2f}s")
    print(f"Tests/second:   {num_tests/elapsed_total:.1f}")

    if crashes:
        print(f"\n{'='*60}")
        print("CRASH DETAILS:")
        print(f"{'='*60}")
        for crash in crashes[:10]:
            print(f"\nTest #{crash['test_num']}:")
            print(f"  Tree: {crash['tree'][:200]}...")
            print(f"  Error: {crash['error']}")
        if len(crashes) > 10:
            print(f"\n... and {len(crashes) - 10} more crashes")

    if violations:
        print(f"\n{'='*60}")
        print("VIOLATION DETAILS:")
        print(f"{'='*60}")
        for violation in violations[:10]:
            print(f"\nTest #{violation['test_num']}:")
            print(f"  Tree: {violation['tree'][:200]}...")
            print(f"  Problems: {', '.join(violation['problems'])}")

    if save_failures and (crashes or violations or hangs):
        filename = f"fuzz_failures_vdomhtml_{int(time.time())}.txt"
        with open(filename, "w") as f:
            f.write("Fuzzing results for vdomhtml\n")
            f.write(f"Seed: {seed}\n\n")
            for crash in crashes:
                f.write(f"=== CRASH #{crash['test_num']} ===\n")
                f.write(f"Tree:\n{crash['tree']}\n")
                f.write(f"Error: {crash['error']}\n")
                f.write(f"Traceback:\n{crash['traceback']}\n\n")
            for violation in violations:
                f.write(f"=== VIOLATION #{violation['test_num']} ===\n")
                f.write(f"Tree:\n{violation['tree']}\n")
                f.write(f"Problems: {', '.join(violation['problems'])}\n\n")
            for hang in hangs:
                f.write(f"=== HANG #{hang['test_num']} ({hang['time']:.2f}s) ===\n")
                f.write(f"Tree:\n{hang['tree']}\n\n")
        print(f"\nFailures saved to {filename}")

    return not crashes and not violations and not hangs


def main():
    parser = argparse.ArgumentParser(description="Fuzz the vdom HTML renderer with hostile trees")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=1000,
        help="Number of test cases to generate (default: 1000)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--save-failures",
        action="store_true",
        help="Save failures to a file",
    )
    parser.add_argument(
        "--reparse",
        action="store_true",
        help="Only build well-formed trees and compare them with html5lib's parse of the output",
    )
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample rendered trees",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i+1} ===")
            sink = io.StringIO()
            try:
                render_fragment(generate_fuzzed_tree(), sink, 64)
            except RenderError as e:
                print(f"(rejected: {e})")
            else:
                print(sink.getvalue())
            print()
        return

    success = run_fuzzer(
        args.num_tests,
        seed=args.seed,
        verbose=args.verbose,
        save_failures=args.save_failures,
        reparse=args.reparse,
    )

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()

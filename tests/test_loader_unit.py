import os
import tempfile
import unittest

from html_templates.config import WRAPPER_TAG, RenderConfig
from html_templates.html_renderer.loader import (
    TemplateLoader,
    parse_document,
    parse_fragment,
    rewrite_wrapper_tags,
    serialize,
)
from html_templates.html_renderer.tree_utils import (
    clone_before,
    remove_node,
    unwrap_node,
)
from html_templates.templating.exceptions import (
    FragmentStructureException,
    TemplateNotFoundException,
)


class TestDocuments(unittest.TestCase):
    def test_fragment_round_trip_keeps_leading_text(self):
        document = parse_document("Hello & <b>bye</b> tail")
        self.assertFalse(document.full)
        self.assertEqual(serialize(document), "Hello &amp; <b>bye</b> tail")

    def test_full_document(self):
        document = parse_document("<!doctype html><html><body><p>x</p></body></html>")
        self.assertTrue(document.full)
        self.assertEqual(document.root.tag, "html")

    def test_malformed_markup_is_repaired(self):
        document = parse_document("<div><p>unclosed</div>")
        self.assertIn("unclosed", serialize(document))

    def test_empty_markup(self):
        self.assertEqual(serialize(parse_document("")), "")

    def test_parse_fragment_single_root(self):
        root = parse_fragment("<!-- c -->\n<section><p>a</p></section>\n")
        self.assertEqual(root.tag, "section")

    def test_parse_fragment_rejects_several_roots(self):
        with self.assertRaises(FragmentStructureException):
            parse_fragment("<p>1</p><p>2</p>")
        with self.assertRaises(FragmentStructureException):
            parse_fragment("just text")

    def test_marker_wrapper_tags_are_renamed(self):
        self.assertEqual(
            rewrite_wrapper_tags('<: :foreach="x"><li></li></:>'),
            f'<{WRAPPER_TAG} :foreach="x"><li></li></{WRAPPER_TAG}>',
        )
        self.assertEqual(rewrite_wrapper_tags("<:/>"), f"<{WRAPPER_TAG}/>")

    def test_other_tags_are_not_renamed(self):
        markup = '<a :href="x"><::b></a>'
        self.assertEqual(rewrite_wrapper_tags(markup), markup)

    def test_wrapper_tags_follow_configuration(self):
        config = RenderConfig(marker="x-", wrapper_tag="group")
        self.assertEqual(
            rewrite_wrapper_tags("<x-><p></p></x->", config), "<group><p></p></group>"
        )

    def test_parse_marker_wrapper(self):
        root = parse_fragment("<:><p>a</p><p>b</p></:>")
        self.assertEqual(root.tag, WRAPPER_TAG)
        self.assertEqual([child.tag for child in root], ["p", "p"])


class TestTreeUtils(unittest.TestCase):
    def test_clone_before_and_remove(self):
        document = parse_document("<p>a<b>x</b>z</p>")
        b = document.root[0][0]
        copy = clone_before(b)
        copy.text = "y"
        remove_node(b)
        self.assertEqual(serialize(document), "<p>a<b>y</b>z</p>")

    def test_unwrap(self):
        document = parse_document("<div>a<span>b<i>c</i>d</span>e</div>")
        span = document.root[0][0]
        unwrap_node(span)
        remove_node(span)
        self.assertEqual(serialize(document), "<div>ab<i>c</i>de</div>")


class TestTemplateLoader(unittest.TestCase):
    def test_loads_from_folder(self):
        with tempfile.TemporaryDirectory() as folder:
            with open(os.path.join(folder, "a.html"), "w", encoding="utf-8") as f:
                f.write("<p>a</p>")
            loader = TemplateLoader(folder)
            self.assertEqual(loader.load_fragment_text("a.html"), "<p>a</p>")
            self.assertEqual(serialize(loader.load_document("a.html")), "<p>a</p>")

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as folder:
            with self.assertRaises(TemplateNotFoundException):
                TemplateLoader(folder).load_document("missing.html")


if __name__ == "__main__":
    unittest.main()

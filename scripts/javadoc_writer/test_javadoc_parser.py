#!/usr/bin/env python3
"""
Unit tests for the Javadoc model, parser and renderer.
"""

import unittest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from javadoc_model import JavaDoc, JavaDocTag, TagKind
from javadoc_parser import parse_javadoc, render_javadoc


class TestJavadocParsing(unittest.TestCase):
    """Test parsing of existing Javadoc comments."""

    def test_parse_with_params(self):
        """Test parsing Javadoc with @param and @return tags."""
        javadoc = """/**
         * This is a test method.
         * @param name The name parameter
         * @param age The age parameter
         * @return The result
         */"""
        parsed = parse_javadoc(javadoc)

        self.assertEqual(parsed.description, 'This is a test method.')
        self.assertEqual(parsed.find_tag(TagKind.PARAM, 'name').body, 'The name parameter')
        self.assertEqual(parsed.find_tag(TagKind.PARAM, 'age').body, 'The age parameter')
        self.assertEqual(parsed.find_tag(TagKind.RETURN).body, 'The result')

    def test_parse_empty(self):
        """Test parsing empty input gives an empty model."""
        self.assertTrue(parse_javadoc("").is_empty)
        self.assertTrue(parse_javadoc("/** */").is_empty)

    def test_parse_single_line(self):
        """Test parsing a one-line comment."""
        parsed = parse_javadoc("/** Returns the size. */")
        self.assertEqual(parsed.description, 'Returns the size.')
        self.assertEqual(parsed.tags, [])

    def test_parse_type_param_and_exception(self):
        """Test that <T> params and @exception tags get their own kinds."""
        parsed = parse_javadoc("""/**
         * @param <T> the element type
         * @exception java.io.IOException if reading fails
         */""")
        type_param = parsed.find_tag(TagKind.TYPE_PARAM, 'T')
        self.assertEqual(type_param.body, 'the element type')
        throws = parsed.find_tag(TagKind.THROWS)
        self.assertEqual(throws.name, 'java.io.IOException')
        self.assertEqual(throws.key, 'IOException')
        self.assertEqual(throws.body, 'if reading fails')

    def test_parse_multiline_tag_body(self):
        """Test that continuation lines belong to the preceding tag."""
        parsed = parse_javadoc("""/**
         * Does things.
         *
         * @param value the value,
         *              never null
         * @see Other#thing
         */""")
        self.assertEqual(parsed.find_tag(TagKind.PARAM, 'value').body, 'the value,\nnever null')
        custom = parsed.find_tag(TagKind.CUSTOM)
        self.assertEqual(custom.keyword, 'see')
        self.assertEqual(custom.body, 'Other#thing')

    def test_parse_orders_tags_canonically(self):
        """Test that tags come out in canonical order whatever the source order."""
        parsed = parse_javadoc("""/**
         * @throws IOException on error
         * @return the sum
         * @param b second
         * @param a first
         * @param <T> type
         */""")
        kinds = [tag.kind for tag in parsed.tags]
        self.assertEqual(kinds, [TagKind.TYPE_PARAM, TagKind.PARAM, TagKind.PARAM,
                                 TagKind.RETURN, TagKind.THROWS])
        self.assertEqual([tag.name for tag in parsed.tags_of(TagKind.PARAM)], ['b', 'a'])

    def test_duplicate_param_names_are_dropped(self):
        """Test that a parameter name appears only once."""
        parsed = parse_javadoc("""/**
         * @param a first
         * @param a again
         */""")
        self.assertEqual(len(parsed.tags_of(TagKind.PARAM)), 1)
        self.assertEqual(parsed.find_tag(TagKind.PARAM, 'a').body, 'first')


class TestJavadocRendering(unittest.TestCase):
    """Test rendering of Javadoc models."""

    def test_render_method_javadoc(self):
        """Test the layout of a rendered method comment."""
        javadoc = JavaDoc("Add.", [
            JavaDocTag(TagKind.THROWS, 'IOException', 'the io exception'),
            JavaDocTag(TagKind.PARAM, 'a', 'the a'),
            JavaDocTag(TagKind.RETURN, body='the int'),
        ])
        expected = "\n".join([
            "/**",
            " * Add.",
            " *",
            " * @param a the a",
            " * @return the int",
            " * @throws IOException the io exception",
            " */",
        ])
        self.assertEqual(render_javadoc(javadoc), expected)

    def test_render_without_description(self):
        """Test that an empty description leaves no blank line."""
        javadoc = JavaDoc("", [JavaDocTag(TagKind.TYPE_PARAM, 'T', 'the T type')])
        self.assertEqual(render_javadoc(javadoc), "/**\n * @param <T> the T type\n */")

    def test_render_empty_tag_body(self):
        """Test that a tag without body has no trailing space."""
        javadoc = JavaDoc("", [JavaDocTag(TagKind.PARAM, 'a', '')])
        self.assertIn(" * @param a\n", render_javadoc(javadoc))

    def test_round_trip(self):
        """Test that parse(render(doc)) gives back the same model."""
        javadoc = JavaDoc("Computes the total.\n\nSecond paragraph.", [
            JavaDocTag(TagKind.TYPE_PARAM, 'K', 'the key type'),
            JavaDocTag(TagKind.PARAM, 'items', 'the items,\nnever empty'),
            JavaDocTag(TagKind.PARAM, 'flag', ''),
            JavaDocTag(TagKind.RETURN, body='the total'),
            JavaDocTag(TagKind.THROWS, 'IllegalStateException', 'when closed'),
            JavaDocTag(TagKind.AUTHOR, body='Jane Doe'),
            JavaDocTag(TagKind.CUSTOM, body='1.2', keyword='since'),
            JavaDocTag(TagKind.CUSTOM, body='', keyword='deprecated'),
        ])
        self.assertEqual(parse_javadoc(render_javadoc(javadoc)), javadoc)

    def test_round_trip_description_only(self):
        """Test round trip of a comment without tags."""
        javadoc = JavaDoc("The constant MAX.")
        self.assertEqual(parse_javadoc(render_javadoc(javadoc)), javadoc)

    def test_description_line_starting_with_at_sign(self):
        """Test that such a line is escaped instead of becoming a tag."""
        javadoc = JavaDoc("Holds the\n@Nullable values.", [JavaDocTag(TagKind.RETURN, body='the values')])
        rendered = render_javadoc(javadoc)
        self.assertIn(" * {@literal @}Nullable values.\n", rendered)
        self.assertEqual(parse_javadoc(rendered), javadoc)

    def test_render_and_parse_crlf(self):
        javadoc = JavaDoc("Add.", [JavaDocTag(TagKind.PARAM, 'a', 'the a')])
        rendered = render_javadoc(javadoc, '\r\n')
        self.assertEqual(rendered, "/**\r\n * Add.\r\n *\r\n * @param a the a\r\n */")
        self.assertEqual(parse_javadoc(rendered), javadoc)


if __name__ == '__main__':
    unittest.main()

#!/usr/bin/env python3
"""
Unit tests for parsing Java into the mutable source tree.
"""

import unittest
import sys
import os
import tempfile

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from errors import IncorrectOperationError
from java_parser import (
    ElementKind,
    classify,
    collect_declarations,
    extract_signature_facts,
    load_java_file,
    parse_java_file,
)
from source_tree import DocCommentNode, WhitespaceNode, create_doc_comment
from tree_sitter_utils import extract_field_names, get_identifier_from_node

SAMPLE = """package com.example;

import java.io.IOException;

/**
 * Calculator with memory.
 */
public class Calculator<T extends Number> {

    // Café au lait
    private int total;

    public Calculator() {
    }

    /**
     * Adds.
     */
    public <R> int add(int a, final int b) throws IOException, IllegalStateException {
        return a + b;
    }

    public void log(String format, Object... args) {
    }

    public enum Mode {
        FAST,
        SLOW
    }
}

class Second {
    Second() {
    }
}
"""


def element_name(node):
    names = extract_field_names(node)
    return names[0] if names else get_identifier_from_node(node)


class TestSourceTree(unittest.TestCase):
    """Test the tree built from tree-sitter output."""

    def setUp(self):
        self.source_file = parse_java_file(SAMPLE)
        self.elements = collect_declarations(self.source_file.root)
        self.by_name = {}
        for element in self.elements:
            self.by_name.setdefault(element_name(element), element)

    def test_text_round_trip(self):
        """Test that the tree text is exactly the source text."""
        self.assertEqual(self.source_file.text, SAMPLE)
        self.assertEqual(self.source_file.document.text, SAMPLE)

    def test_doc_comment_is_first_child_of_declaration(self):
        """Test that a preceding Javadoc belongs to the declaration."""
        calculator = self.by_name['Calculator']
        self.assertIsInstance(calculator.first_child, DocCommentNode)
        self.assertTrue(calculator.text.startswith('/**\n * Calculator with memory.\n */\npublic class'))

        add = self.by_name['add']
        self.assertIsInstance(add.first_child, DocCommentNode)
        self.assertIsInstance(add.children[1], WhitespaceNode)

        total = self.by_name['total']
        self.assertNotIsInstance(total.first_child, DocCommentNode)

    def test_collect_order(self):
        """Test classes first (outer before inner), then methods, then fields."""
        names = [(classify(e).value, element_name(e)) for e in self.elements]
        self.assertEqual(names, [
            ('class', 'Calculator'),
            ('class', 'Mode'),
            ('class', 'Second'),
            ('method', 'Calculator'),
            ('method', 'add'),
            ('method', 'log'),
            ('field', 'total'),
            ('field', 'FAST'),
            ('field', 'SLOW'),
            ('method', 'Second'),
        ])

    def test_collect_single_member(self):
        add = self.by_name['add']
        self.assertEqual(collect_declarations(add), [add])

    def test_signature_facts(self):
        facts = extract_signature_facts(self.by_name['add'])
        self.assertIs(facts.kind, ElementKind.METHOD)
        self.assertEqual(facts.parameter_names, ['a', 'b'])
        self.assertEqual(list(facts.type_parameters), ['R'])
        self.assertEqual(facts.return_type, 'int')
        self.assertEqual(list(facts.exceptions), ['IOException', 'IllegalStateException'])
        self.assertIn('public', facts.modifiers)

        log = extract_signature_facts(self.by_name['log'])
        self.assertEqual(log.parameter_names, ['format', 'args'])
        self.assertIsNone(log.return_type)

        calculator = extract_signature_facts(self.by_name['Calculator'])
        self.assertEqual(list(calculator.type_parameters), ['T'])

        fast = extract_signature_facts(self.by_name['FAST'])
        self.assertEqual(fast.node_type, 'enum_constant')
        self.assertEqual(fast.enclosing_class, 'Mode')

    def test_mutation_outside_write_command_fails(self):
        total = self.by_name['total']
        with self.assertRaises(IncorrectOperationError):
            total.add_child(WhitespaceNode(' '), before=total.first_child)
        with self.assertRaises(IncorrectOperationError):
            total.first_child.delete()
        self.assertEqual(self.source_file.text, SAMPLE)

    def test_failed_write_command_is_rolled_back(self):
        total = self.by_name['total']
        with self.assertRaises(RuntimeError):
            with self.source_file.write_command("broken"):
                total.add_child(create_doc_comment("/** x */"), before=total.first_child)
                self.by_name['add'].first_child.delete()
                raise RuntimeError("boom")
        self.assertEqual(self.source_file.text, SAMPLE)
        self.assertEqual(self.source_file.undo_names, [])

    def test_undo_completed_command(self):
        total = self.by_name['total']
        with self.source_file.write_command("add comment"):
            total.add_child(create_doc_comment("/** x */"), before=total.first_child)
        self.assertIn('/** x */private int total;', self.source_file.document.text)

        self.assertEqual(self.source_file.undo(), "add comment")
        self.assertEqual(self.source_file.document.text, SAMPLE)
        self.assertIsNone(self.source_file.undo())

    def test_create_doc_comment_rejects_other_text(self):
        with self.assertRaises(IncorrectOperationError):
            create_doc_comment("// not a javadoc")

    def test_text_offset(self):
        add = self.by_name['add']
        self.assertEqual(add.text_offset, SAMPLE.index('/**\n     * Adds.'))

    def test_doc_comment_attached_across_plain_comments(self):
        """Test that line and block comments between Javadoc and declaration are skipped."""
        source = "class A {\n    /** Doc. */\n    // note\n    /* more */\n    void f() {}\n}\n"
        source_file = parse_java_file(source)
        f = collect_declarations(source_file.root)[1]

        self.assertIsInstance(f.first_child, DocCommentNode)
        self.assertEqual(f.first_child.text, '/** Doc. */')
        self.assertTrue(f.text.startswith('/** Doc. */\n    // note\n    /* more */\n    void f()'))
        self.assertEqual(source_file.text, source)

    def test_earlier_doc_comment_is_not_attached(self):
        source = "class A {\n    /** Old. */\n    /** New. */\n    void f() {}\n}\n"
        f = collect_declarations(parse_java_file(source).root)[1]
        self.assertEqual(f.first_child.text, '/** New. */')

    def test_empty_block_comment_is_not_a_javadoc(self):
        source = "class A {\n    /**/\n    void f() {}\n}\n"
        f = collect_declarations(parse_java_file(source).root)[1]
        self.assertNotIsInstance(f.first_child, DocCommentNode)
        with self.assertRaises(IncorrectOperationError):
            create_doc_comment("/**/")

    def test_line_separator(self):
        self.assertEqual(self.source_file.line_separator, '\n')
        self.assertEqual(parse_java_file("class A {\r\n}\r\n").line_separator, '\r\n')
        self.assertEqual(parse_java_file("class A {}").line_separator, '\n')


class TestSourceFileOnDisk(unittest.TestCase):
    """Test validity and writability of files loaded from disk."""

    def setUp(self):
        handle, self.path = tempfile.mkstemp(suffix='.java')
        with os.fdopen(handle, 'w', encoding='utf-8') as f:
            f.write("class A {\n}\n")

    def tearDown(self):
        if os.path.exists(self.path):
            os.chmod(self.path, 0o644)
            os.remove(self.path)

    def test_loaded_file_is_valid_and_writable(self):
        source_file = load_java_file(self.path)
        self.assertTrue(source_file.is_valid())
        self.assertFalse(source_file.ensure_writable().has_readonly_files)

    def test_deleted_file_is_not_valid(self):
        source_file = load_java_file(self.path)
        os.remove(self.path)
        self.assertFalse(source_file.is_valid())

    def test_read_only_flag(self):
        source_file = parse_java_file("class A {}", path=self.path, read_only=True)
        status = source_file.ensure_writable()
        self.assertTrue(status.has_readonly_files)
        self.assertIn(self.path, status.readonly_files_message)


if __name__ == '__main__':
    unittest.main()

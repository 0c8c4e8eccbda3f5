#!/usr/bin/env python3
"""
End-to-end tests for the command line entry point.
"""

import unittest
import sys
import os
import tempfile
from unittest.mock import patch

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from settings import Mode
from standalone import build_parser, main, settings_from_args

SOURCE = """package demo;

public class Greeter {

    public String greet(String name) {
        return "Hello " + name;
    }
}
"""

EXPECTED = """package demo;

/**
 * The type Greeter.
 *
 * @author Jane Doe
 */
public class Greeter {

    /**
     * Greet.
     *
     * @param name the name
     * @return the string
     */
    public String greet(String name) {
        return "Hello " + name;
    }
}
"""


@patch.dict(os.environ, {}, clear=True)
class TestStandalone(unittest.TestCase):

    def setUp(self):
        handle, self.path = tempfile.mkstemp(suffix='.java')
        with os.fdopen(handle, 'w', encoding='utf-8') as f:
            f.write(SOURCE)

    def tearDown(self):
        os.remove(self.path)

    def read(self):
        with open(self.path, 'r', encoding='utf-8') as f:
            return f.read()

    def test_generate_and_remove(self):
        self.assertEqual(main([self.path, '--author', 'Jane Doe']), 0)
        self.assertEqual(self.read(), EXPECTED)

        self.assertEqual(main([self.path, '--author', 'Jane Doe']), 0)
        self.assertEqual(self.read(), EXPECTED)

        self.assertEqual(main([self.path, '--remove']), 0)
        self.assertEqual(self.read(), SOURCE)

    def test_dry_run_does_not_modify(self):
        self.assertEqual(main([self.path, '--dry-run']), 0)
        self.assertEqual(self.read(), SOURCE)

    def test_output_only_does_not_modify(self):
        self.assertEqual(main([self.path, '--output-only']), 0)
        self.assertEqual(self.read(), SOURCE)

    def test_missing_file_fails(self):
        self.assertEqual(main([self.path + '.missing']), 1)

    def test_flags_override_environment(self):
        with patch.dict(os.environ, {'JAVADOC_MODE': 'keep', 'JAVADOC_AUTHOR': 'Env'}):
            args = build_parser().parse_args([self.path, '--mode', 'replace', '--skip-overridden'])
            settings = settings_from_args(args)
        self.assertIs(settings.mode, Mode.REPLACE)
        self.assertEqual(settings.author, 'Env')
        self.assertFalse(settings.overridden_methods)


if __name__ == '__main__':
    unittest.main()

#!/usr/bin/env python3
"""
Unit tests for settings loaded from the environment.
"""

import unittest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from java_parser import ElementKind
from settings import Level, Mode, VISIBILITIES, load_settings, parse_levels, parse_mode


class TestSettings(unittest.TestCase):
    """Test defaults, environment overrides and fallbacks."""

    def test_defaults(self):
        settings = load_settings({})
        self.assertIs(settings.mode, Mode.UPDATE)
        self.assertIsNone(settings.author)
        self.assertEqual(settings.levels, frozenset(Level))
        self.assertEqual(settings.visibilities, frozenset(VISIBILITIES))
        self.assertTrue(settings.overridden_methods)
        self.assertFalse(settings.describe)

    def test_environment_overrides(self):
        settings = load_settings({
            'JAVADOC_MODE': 'Replace',
            'JAVADOC_AUTHOR': 'Jane Doe',
            'JAVADOC_LEVELS': 'type, method',
            'JAVADOC_VISIBILITY': 'public,protected',
            'JAVADOC_OVERRIDDEN_METHODS': 'false',
            'JAVADOC_DESCRIBE': 'true',
        })
        self.assertIs(settings.mode, Mode.REPLACE)
        self.assertEqual(settings.author, 'Jane Doe')
        self.assertTrue(settings.is_level_enabled(ElementKind.CLASS))
        self.assertFalse(settings.is_level_enabled(ElementKind.FIELD))
        self.assertTrue(settings.is_visibility_enabled('protected'))
        self.assertFalse(settings.is_visibility_enabled('private'))
        self.assertFalse(settings.overridden_methods)
        self.assertTrue(settings.describe)

    def test_invalid_values_fall_back(self):
        self.assertIs(parse_mode('sometimes'), Mode.UPDATE)
        self.assertEqual(parse_levels('nothing'), frozenset(Level))
        self.assertEqual(parse_levels('field,bogus'), frozenset([Level.FIELD]))


if __name__ == '__main__':
    unittest.main()

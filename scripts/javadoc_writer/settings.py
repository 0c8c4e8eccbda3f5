#!/usr/bin/env python3
"""
Generation settings.

Defaults come from this module, can be overridden with environment variables
and then with command line flags (see standalone.py):

    JAVADOC_MODE                keep | update | replace      (default: update)
    JAVADOC_AUTHOR              author name for class comments
    JAVADOC_LEVELS              comma list of type, method, field
    JAVADOC_VISIBILITY          comma list of public, protected, default, private
    JAVADOC_OVERRIDDEN_METHODS  'true' to also document @Override methods
    JAVADOC_DESCRIBE            'true' to ask Claude for missing descriptions
"""

import os
from enum import Enum
from typing import Iterable, Optional

from java_parser import ElementKind
from logger import get_logger

logger = get_logger(__name__)


class Mode(Enum):
    """What to do with a declaration that already has a Javadoc."""
    KEEP = 'keep'
    UPDATE = 'update'
    REPLACE = 'replace'


class Level(Enum):
    """Which kinds of declarations get a Javadoc."""
    TYPE = 'type'
    METHOD = 'method'
    FIELD = 'field'


LEVEL_FOR_KIND = {
    ElementKind.CLASS: Level.TYPE,
    ElementKind.METHOD: Level.METHOD,
    ElementKind.FIELD: Level.FIELD,
}

VISIBILITIES = ('public', 'protected', 'default', 'private')


class JavaDocSettings:
    """Settings consumed by the generators."""

    def __init__(self, mode: Mode = Mode.UPDATE, author: Optional[str] = None,
                 levels: Iterable[Level] = tuple(Level), visibilities: Iterable[str] = VISIBILITIES,
                 overridden_methods: bool = True, describe: bool = False):
        self.mode = mode
        self.author = author
        self.levels = frozenset(levels)
        self.visibilities = frozenset(visibilities)
        self.overridden_methods = overridden_methods
        self.describe = describe

    def is_level_enabled(self, kind: ElementKind) -> bool:
        return LEVEL_FOR_KIND[kind] in self.levels

    def is_visibility_enabled(self, visibility: str) -> bool:
        return visibility in self.visibilities

    def __repr__(self):
        levels = ','.join(sorted(level.value for level in self.levels))
        visibilities = ','.join(v for v in VISIBILITIES if v in self.visibilities)
        return (f"JavaDocSettings(mode={self.mode.value}, author={self.author!r}, levels={levels}, "
                f"visibility={visibilities}, overridden_methods={self.overridden_methods}, "
                f"describe={self.describe})")


def parse_mode(value: Optional[str], default: Mode = Mode.UPDATE) -> Mode:
    """Parse a mode name; unknown values fall back to the default."""
    if not value:
        return default
    try:
        return Mode(value.strip().lower())
    except ValueError:
        logger.warning(f"Unknown javadoc mode '{value}', using '{default.value}'")
        return default


def parse_levels(value: Optional[str]) -> frozenset:
    """Parse 'type,method' into levels; unknown names are ignored."""
    if not value:
        return frozenset(Level)
    levels = set()
    for name in value.split(','):
        name = name.strip().lower()
        if not name:
            continue
        try:
            levels.add(Level(name))
        except ValueError:
            logger.warning(f"Unknown javadoc level '{name}' ignored")
    return frozenset(levels) or frozenset(Level)


def parse_visibilities(value: Optional[str]) -> frozenset:
    """Parse 'public,protected' into visibilities; unknown names are ignored."""
    if not value:
        return frozenset(VISIBILITIES)
    visibilities = set()
    for name in value.split(','):
        name = name.strip().lower()
        if not name:
            continue
        if name in VISIBILITIES:
            visibilities.add(name)
        else:
            logger.warning(f"Unknown visibility '{name}' ignored")
    return frozenset(visibilities) or frozenset(VISIBILITIES)


def _flag(environ, name: str, default: bool) -> bool:
    value = environ.get(name)
    if value is None:
        return default
    return value.strip().lower() == 'true'


def load_settings(environ=None) -> JavaDocSettings:
    """Build settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        JavaDocSettings
    """
    environ = os.environ if environ is None else environ
    return JavaDocSettings(
        mode=parse_mode(environ.get('JAVADOC_MODE')),
        author=environ.get('JAVADOC_AUTHOR') or None,
        levels=parse_levels(environ.get('JAVADOC_LEVELS')),
        visibilities=parse_visibilities(environ.get('JAVADOC_VISIBILITY')),
        overridden_methods=_flag(environ, 'JAVADOC_OVERRIDDEN_METHODS', True),
        describe=_flag(environ, 'JAVADOC_DESCRIBE', False),
    )

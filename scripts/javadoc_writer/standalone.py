#!/usr/bin/env python3

import argparse
import sys

from description_provider import ClaudeDescriptionProvider
from errors import JavadocError
from java_parser import collect_declarations, describe_element, load_java_file
from javadoc_action import JavaDocAction
from javadoc_writer import JavaDocWriter
from logger import LogLevel, configure_logging, get_logger
from settings import JavaDocSettings, load_settings, parse_levels, parse_mode, parse_visibilities
from source_tree import is_doc_comment

logger = get_logger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(description='Generate or remove Javadoc comments in Java files')
    parser.add_argument('java_files', nargs='+', help='Paths to Java files')
    parser.add_argument('--remove', action='store_true', help='Remove Javadocs instead of generating them')
    parser.add_argument('--mode', choices=['keep', 'update', 'replace'],
                        help='What to do with existing Javadocs (or set JAVADOC_MODE)')
    parser.add_argument('--author', help='Author name for class Javadocs (or set JAVADOC_AUTHOR)')
    parser.add_argument('--levels', help='Comma list of type,method,field (or set JAVADOC_LEVELS)')
    parser.add_argument('--visibility', help='Comma list of public,protected,default,private (or set JAVADOC_VISIBILITY)')
    parser.add_argument('--skip-overridden', action='store_true', help='Do not document @Override methods')
    parser.add_argument('--describe', action='store_true', help='Ask Claude for missing descriptions (needs ANTHROPIC_API_KEY)')
    parser.add_argument('--dry-run', action='store_true', help='Only list the declarations that would be processed')
    parser.add_argument('--output-only', action='store_true', help='Print the updated source, do not modify files')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    return parser


def settings_from_args(args) -> JavaDocSettings:
    """Environment settings, overridden by command line flags."""
    settings = load_settings()
    if args.mode:
        settings.mode = parse_mode(args.mode)
    if args.author:
        settings.author = args.author
    if args.levels:
        settings.levels = parse_levels(args.levels)
    if args.visibility:
        settings.visibilities = parse_visibilities(args.visibility)
    if args.skip_overridden:
        settings.overridden_methods = False
    if args.describe:
        settings.describe = True
    return settings


def print_items_summary(source_file):
    elements = collect_declarations(source_file.root)
    logger.info(f"Found {len(elements)} declarations in {source_file.name}:")
    for element in elements:
        existing = "✔" if is_doc_comment(element.first_child) else "✗"
        logger.info(f"  - {describe_element(element)} (existing: {existing})")


def process_file(path, action, args) -> bool:
    """Run the action on one file. Returns False if the file failed."""
    logger.group(f"Processing {path}")
    try:
        try:
            source_file = load_java_file(path)
        except (OSError, UnicodeDecodeError, JavadocError) as e:
            logger.error(f"Error reading file {path}: {e}")
            return False

        if args.dry_run:
            print_items_summary(source_file)
            return True

        summary = action.remove(source_file.root) if args.remove else action.generate(source_file.root)
        logger.info(f"{path}: {summary}")

        if args.output_only:
            source_file.commit_document()
            print(source_file.document.text)
            return summary.failed == 0

        if summary.changed:
            try:
                source_file.save()
            except OSError as e:
                logger.error(f"Error updating file {path}: {e}")
                return False
            logger.success(f"Updated {path}")
        return summary.failed == 0
    finally:
        logger.endgroup()


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.debug:
        configure_logging(LogLevel.DEBUG)

    settings = settings_from_args(args)
    logger.debug(repr(settings))

    description_provider = None
    if settings.describe and not args.remove and not args.dry_run:
        description_provider = ClaudeDescriptionProvider.from_environment()

    action = JavaDocAction(JavaDocWriter(), settings, description_provider)
    results = [process_file(path, action, args) for path in args.java_files]
    if description_provider is not None:
        logger.info(description_provider.usage_summary())
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())

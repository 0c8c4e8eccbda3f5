#!/usr/bin/env python3
"""
Batch generation and removal of Javadocs for a file or class.

Targets are collected once up front, then each one is handled on its own:
a failure is logged and counted, and the batch moves on. Elements written
before a failure stay written.
"""

from typing import Optional

from java_parser import collect_declarations, describe_element
from javadoc_generator import get_generator
from javadoc_writer import JavaDocWriter
from logger import get_logger
from settings import JavaDocSettings
from source_tree import SourceNode, is_doc_comment

logger = get_logger(__name__)


class ActionSummary:
    """Counts of what a batch did."""

    def __init__(self):
        self.written = 0
        self.removed = 0
        self.skipped = 0
        self.failed = 0

    @property
    def changed(self) -> int:
        return self.written + self.removed

    def __repr__(self):
        return (f"ActionSummary(written={self.written}, removed={self.removed}, "
                f"skipped={self.skipped}, failed={self.failed})")


class JavaDocAction:
    """Generates or removes Javadocs for every declaration below a root."""

    def __init__(self, writer: Optional[JavaDocWriter] = None, settings: Optional[JavaDocSettings] = None,
                 description_provider=None):
        self.writer = writer or JavaDocWriter()
        self.settings = settings or JavaDocSettings()
        self.description_provider = description_provider

    def generate(self, root: SourceNode) -> ActionSummary:
        """Write Javadocs for root (a file root, class, method or field)."""
        summary = ActionSummary()
        if not self.writer.check_access(root):
            summary.failed += 1
            return summary
        for element in collect_declarations(root):
            self.process_element(element, summary)
        return summary

    def remove(self, root: SourceNode) -> ActionSummary:
        """Remove the Javadocs of every declaration below root."""
        summary = ActionSummary()
        if not self.writer.check_access(root):
            summary.failed += 1
            return summary
        for element in collect_declarations(root):
            if not is_doc_comment(element.first_child):
                summary.skipped += 1
                continue
            if self.writer.remove(element):
                logger.debug(f"Removed javadoc of {describe_element(element)}")
                summary.removed += 1
            else:
                summary.failed += 1
        return summary

    def process_element(self, element: SourceNode, summary: Optional[ActionSummary] = None) -> bool:
        """Generate and write the Javadoc of a single declaration."""
        summary = summary if summary is not None else ActionSummary()
        generator = get_generator(element, self.settings, self.description_provider)
        if generator is None:
            summary.skipped += 1
            return False

        try:
            javadoc = generator.generate(element)
        except Exception as e:
            logger.error(f"Could not generate javadoc for {describe_element(element)}: {e!r}")
            summary.failed += 1
            return False

        if javadoc is None:
            summary.skipped += 1
            return False

        if self.writer.write(javadoc, element):
            logger.debug(f"Wrote javadoc of {describe_element(element)}")
            summary.written += 1
            return True
        summary.failed += 1
        return False

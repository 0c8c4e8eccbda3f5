#!/usr/bin/env python3
"""
Per-declaration Javadoc generation.

A generator reads the signature of a declaration, synthesizes the Javadoc it
should have and reconciles it with the existing comment according to the
configured mode. Generators only read the tree; writing is left to
JavaDocWriter.
"""

from typing import Optional

from comment_merger import merge
from java_parser import ElementKind, SignatureFacts, classify, extract_signature_facts, get_visibility
from javadoc_model import JavaDoc
from javadoc_parser import parse_javadoc
from logger import get_logger
from settings import JavaDocSettings, Mode
from source_tree import SourceNode, is_doc_comment
from tag_synthesizer import synthesize

logger = get_logger(__name__)


def find_existing_javadoc(element: SourceNode) -> Optional[JavaDoc]:
    """Parse the Javadoc that currently documents element, if any."""
    first_child = element.first_child
    if not is_doc_comment(first_child):
        return None
    return parse_javadoc(first_child.text)


class JavaDocGenerator:
    """Base generator; subclasses fix the element kind they handle."""

    kind: ElementKind = None

    def __init__(self, settings: Optional[JavaDocSettings] = None, description_provider=None):
        self.settings = settings or JavaDocSettings()
        self.description_provider = description_provider

    def generate(self, element: SourceNode) -> Optional[JavaDoc]:
        """Build the Javadoc to write for element.

        Returns:
            JavaDoc or None when the element should be left alone
        """
        facts = extract_signature_facts(element)
        if facts is None or facts.kind is not self.kind:
            return None
        if not self.should_document(element, facts):
            return None

        existing = find_existing_javadoc(element)
        mode = self.settings.mode
        if existing is not None and mode is Mode.KEEP:
            logger.debug(f"Keeping existing javadoc of {facts.name}")
            return None

        synthesized = synthesize(facts, self.kind, self.settings)
        if self._needs_description(existing, mode):
            synthesized = self._describe(element, facts, synthesized)

        if existing is None or mode is Mode.REPLACE:
            return synthesized
        return merge(existing, synthesized)

    def should_document(self, element: SourceNode, facts: SignatureFacts) -> bool:
        if not self.settings.is_level_enabled(self.kind):
            return False
        return self.settings.is_visibility_enabled(get_visibility(element, facts))

    def _needs_description(self, existing: Optional[JavaDoc], mode: Mode) -> bool:
        if self.description_provider is None:
            return False
        return existing is None or not existing.description or mode is Mode.REPLACE

    def _describe(self, element, facts, synthesized):
        description = self.description_provider.describe(facts, element.text)
        if not description:
            return synthesized
        return JavaDoc(description, synthesized.tags)


class ClassJavaDocGenerator(JavaDocGenerator):
    kind = ElementKind.CLASS


class MethodJavaDocGenerator(JavaDocGenerator):
    kind = ElementKind.METHOD

    def should_document(self, element, facts):
        if not self.settings.overridden_methods and 'Override' in facts.annotations:
            return False
        return super().should_document(element, facts)


class FieldJavaDocGenerator(JavaDocGenerator):
    kind = ElementKind.FIELD


GENERATORS = {
    ElementKind.CLASS: ClassJavaDocGenerator,
    ElementKind.METHOD: MethodJavaDocGenerator,
    ElementKind.FIELD: FieldJavaDocGenerator,
}


def get_generator(element: SourceNode, settings: Optional[JavaDocSettings] = None,
                  description_provider=None) -> Optional[JavaDocGenerator]:
    """Pick the generator for element's kind; None for anything else."""
    kind = classify(element)
    if kind is None:
        return None
    return GENERATORS[kind](settings, description_provider)

#!/usr/bin/env python3
"""
Reconciles a freshly synthesized Javadoc with the one already in the source.

The signature decides which structural tags exist; the existing comment
decides what they say. Text the user wrote survives regeneration, tags for
parameters that no longer exist do not.
"""

from typing import Optional

from javadoc_model import KEYED_KINDS, JavaDoc, TagKind


def _merge_keyed(existing: JavaDoc, synthesized: JavaDoc, kind: TagKind):
    existing_by_key = {}
    for tag in existing.tags_of(kind):
        existing_by_key.setdefault(tag.key, tag)
    merged = []
    for tag in synthesized.tags_of(kind):
        previous = existing_by_key.get(tag.key)
        merged.append(tag.with_body(previous.body) if previous is not None else tag)
    return merged


def merge(existing: Optional[JavaDoc], synthesized: JavaDoc) -> JavaDoc:
    """Merge an existing Javadoc into the synthesized one.

    Args:
        existing: Javadoc parsed from the current comment, or None
        synthesized: Javadoc built from the current signature

    Returns:
        JavaDoc: Merged Javadoc in canonical tag order
    """
    if existing is None:
        return synthesized

    description = existing.description or synthesized.description

    tags = []
    for kind in KEYED_KINDS:
        tags.extend(_merge_keyed(existing, synthesized, kind))

    synthesized_return = synthesized.find_tag(TagKind.RETURN)
    if synthesized_return is not None:
        existing_return = existing.find_tag(TagKind.RETURN)
        tags.append(existing_return if existing_return is not None else synthesized_return)

    authors = existing.tags_of(TagKind.AUTHOR) or synthesized.tags_of(TagKind.AUTHOR)
    tags.extend(authors)

    tags.extend(existing.tags_of(TagKind.CUSTOM))
    return JavaDoc(description, tags)

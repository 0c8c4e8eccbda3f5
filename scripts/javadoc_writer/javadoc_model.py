#!/usr/bin/env python3
"""
Structured representation of a Javadoc comment.

A JavaDoc is a description plus a list of tags. Tags are always kept in
canonical order (type parameters, parameters, return, throws, author, then
any other tag) so that regenerating a comment never shuffles it.
"""

from enum import Enum
from typing import Iterable, List, Optional

from constants import TAG_AUTHOR, TAG_PARAM, TAG_RETURN, TAG_THROWS


class TagKind(Enum):
    """Kinds of Javadoc tags, in canonical order."""
    TYPE_PARAM = 0
    PARAM = 1
    RETURN = 2
    THROWS = 3
    AUTHOR = 4
    CUSTOM = 5


# Tag kinds whose tags are identified by their name
KEYED_KINDS = (TagKind.TYPE_PARAM, TagKind.PARAM, TagKind.THROWS)

_KEYWORDS = {
    TagKind.TYPE_PARAM: TAG_PARAM,
    TagKind.PARAM: TAG_PARAM,
    TagKind.RETURN: TAG_RETURN,
    TagKind.THROWS: TAG_THROWS,
    TagKind.AUTHOR: TAG_AUTHOR,
}


class JavaDocTag:
    """One tag of a Javadoc comment, e.g. '@param name the name'."""

    def __init__(self, kind: TagKind, name: Optional[str] = None, body: str = "",
                 keyword: Optional[str] = None):
        self.kind = kind
        self.name = name
        self.body = body
        self._keyword = keyword

    @property
    def keyword(self) -> str:
        """The tag name without '@' ('param', 'throws', 'see', ...)."""
        return _KEYWORDS.get(self.kind) or self._keyword

    @property
    def key(self) -> Optional[str]:
        """Identity of a keyed tag; exceptions match on their simple name."""
        if self.kind is TagKind.THROWS and self.name:
            return self.name.split('.')[-1]
        return self.name

    def with_body(self, body: str) -> 'JavaDocTag':
        return JavaDocTag(self.kind, self.name, body, self._keyword)

    def __eq__(self, other):
        if not isinstance(other, JavaDocTag):
            return NotImplemented
        return (self.kind, self.name, self.body, self.keyword) == \
            (other.kind, other.name, other.body, other.keyword)

    def __hash__(self):
        return hash((self.kind, self.name, self.body, self.keyword))

    def __repr__(self):
        name = f" {self.name}" if self.name else ""
        return f"JavaDocTag(@{self.keyword}{name}: {self.body!r})"


class JavaDoc:
    """A Javadoc comment: description and tags in canonical order."""

    def __init__(self, description: str = "", tags: Iterable[JavaDocTag] = ()):
        self.description = description
        self.tags = sort_tags(tags)

    def tags_of(self, kind: TagKind) -> List[JavaDocTag]:
        return [tag for tag in self.tags if tag.kind is kind]

    def find_tag(self, kind: TagKind, name: Optional[str] = None) -> Optional[JavaDocTag]:
        for tag in self.tags:
            if tag.kind is kind and (name is None or tag.name == name):
                return tag
        return None

    @property
    def is_empty(self) -> bool:
        return not self.description and not self.tags

    def __eq__(self, other):
        if not isinstance(other, JavaDoc):
            return NotImplemented
        return self.description == other.description and self.tags == other.tags

    def __repr__(self):
        return f"JavaDoc({self.description!r}, {self.tags!r})"


def sort_tags(tags: Iterable[JavaDocTag]) -> List[JavaDocTag]:
    """Sort tags into canonical order; keeps relative order within a kind.

    A second tag with the same kind and key as an earlier one is dropped, so
    parameter names stay unique.
    """
    unique = []
    seen = set()
    for tag in tags:
        if tag.kind in KEYED_KINDS:
            if (tag.kind, tag.key) in seen:
                continue
            seen.add((tag.kind, tag.key))
        unique.append(tag)
    return sorted(unique, key=lambda tag: tag.kind.value)

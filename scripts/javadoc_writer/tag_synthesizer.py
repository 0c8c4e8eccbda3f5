#!/usr/bin/env python3
"""
Javadoc skeleton synthesis.

Builds the JavaDoc a declaration should have from its signature alone:
a template description plus type parameter, parameter, return and throws
tags with placeholder bodies derived from names. This is a pure function of
its inputs and never touches the source tree.
"""

import re
from typing import List, Optional

from constants import (
    BOOLEAN_GETTER_DESCRIPTION,
    CLASS_DESCRIPTION_TEMPLATES,
    CONSTANT_DESCRIPTION,
    CONSTRUCTOR_DESCRIPTION,
    FIELD_DESCRIPTION,
    GETTER_DESCRIPTION,
    PARAM_BODY,
    RETURN_BODY,
    SETTER_DESCRIPTION,
    THROWS_BODY,
    TYPE_PARAM_BODY,
)
from java_parser import ElementKind, SignatureFacts
from javadoc_model import JavaDoc, JavaDocTag, TagKind

_WORD = re.compile(r'[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+')
_BOOLEAN_TYPES = ('boolean', 'Boolean')


def split_words(name: str) -> List[str]:
    """Split an identifier into lower-case words.

    'userName' -> ['user', 'name'], 'IOException' -> ['io', 'exception'],
    'MAX_SIZE' -> ['max', 'size'].
    """
    return [word.lower() for word in _WORD.findall(name or '')]


def _words(name: str) -> str:
    return ' '.join(split_words(name)) or name


def _simple_type(type_name: str) -> str:
    """'java.util.List<String>' -> 'List', 'int[]' -> 'int'."""
    base = type_name.split('<')[0].replace('[]', '').replace('...', '').strip()
    return base.split('.')[-1]


def _accessor_parts(method_name: str):
    """Split 'getUserName' into ('get', 'UserName'); None if not an accessor."""
    for prefix in ('get', 'set', 'is', 'has'):
        if method_name.startswith(prefix) and len(method_name) > len(prefix) \
                and method_name[len(prefix)].isupper():
            return prefix, method_name[len(prefix):]
    return None


def _is_constant(facts: SignatureFacts) -> bool:
    if facts.node_type == 'enum_constant':
        return True
    return 'static' in facts.modifiers and 'final' in facts.modifiers


def class_description(facts: SignatureFacts) -> str:
    template = CLASS_DESCRIPTION_TEMPLATES.get(facts.node_type, CLASS_DESCRIPTION_TEMPLATES['class_declaration'])
    return template.format(name=facts.name)


def method_description(facts: SignatureFacts) -> str:
    if facts.is_constructor:
        return CONSTRUCTOR_DESCRIPTION.format(words=_words(facts.name))
    accessor = _accessor_parts(facts.name)
    if accessor:
        prefix, rest = accessor
        if prefix == 'set' and len(facts.parameters) == 1:
            return SETTER_DESCRIPTION.format(words=_words(rest))
        if prefix in ('is', 'has') and facts.return_type in _BOOLEAN_TYPES:
            return BOOLEAN_GETTER_DESCRIPTION.format(words=_words(rest))
        if prefix == 'get' and facts.has_return and not facts.parameters:
            return GETTER_DESCRIPTION.format(words=_words(rest))
    sentence = _words(facts.name)
    return sentence[:1].upper() + sentence[1:] + '.'


def field_description(facts: SignatureFacts) -> str:
    if _is_constant(facts):
        return CONSTANT_DESCRIPTION.format(name=facts.name)
    return FIELD_DESCRIPTION.format(words=_words(facts.name))


def return_body(facts: SignatureFacts) -> str:
    """Placeholder for the @return tag, from the method name or the type."""
    accessor = _accessor_parts(facts.name)
    if accessor:
        prefix, rest = accessor
        if prefix in ('is', 'has') and facts.return_type in _BOOLEAN_TYPES:
            return RETURN_BODY.format(words='boolean')
        if prefix == 'get':
            return RETURN_BODY.format(words=_words(rest))
    return RETURN_BODY.format(words=_words(_simple_type(facts.return_type)))


def synthesize(facts: SignatureFacts, kind: Optional[ElementKind] = None, settings=None) -> JavaDoc:
    """Build the Javadoc skeleton for a declaration.

    Args:
        facts: Signature of the declaration
        kind: Element kind; defaults to facts.kind
        settings: Optional JavaDocSettings (supplies the author name)

    Returns:
        JavaDoc: Description and tags in canonical order
    """
    kind = kind or facts.kind
    tags = [JavaDocTag(TagKind.TYPE_PARAM, name, TYPE_PARAM_BODY.format(name=name))
            for name in facts.type_parameters]

    if kind is ElementKind.FIELD:
        return JavaDoc(field_description(facts), tags)

    tags.extend(JavaDocTag(TagKind.PARAM, name, PARAM_BODY.format(words=_words(name)))
                for name in facts.parameter_names)

    if kind is ElementKind.CLASS:
        author = getattr(settings, 'author', None)
        if author:
            tags.append(JavaDocTag(TagKind.AUTHOR, body=author))
        return JavaDoc(class_description(facts), tags)

    if facts.has_return:
        tags.append(JavaDocTag(TagKind.RETURN, body=return_body(facts)))
    tags.extend(JavaDocTag(TagKind.THROWS, exception, THROWS_BODY.format(words=_words(_simple_type(exception))))
                for exception in facts.exceptions)
    return JavaDoc(method_description(facts), tags)

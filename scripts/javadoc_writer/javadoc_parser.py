#!/usr/bin/env python3
"""
Javadoc parsing and rendering.
Turns the literal text of a Javadoc comment into a JavaDoc model and back.
"""

import re

from constants import (
    DOC_COMMENT_END,
    DOC_COMMENT_LINE_PREFIX,
    DOC_COMMENT_LITERAL_AT,
    DOC_COMMENT_START,
    TAG_AUTHOR,
    TAG_EXCEPTION,
    TAG_PARAM,
    TAG_RETURN,
    TAG_THROWS,
)
from javadoc_model import JavaDoc, JavaDocTag, TagKind

_TAG_LINE = re.compile(r'^@(\w+)(?:\s+(.*))?$')
_TYPE_PARAM = re.compile(r'^<\s*(\w+)\s*>\s*(.*)$')
_NAMED = re.compile(r'^(\S+)\s*(.*)$')


def _strip_comment_line(line):
    """Remove indentation and the leading '*' of a comment line."""
    cleaned = line.strip()
    if cleaned.startswith('*') and not cleaned.startswith(DOC_COMMENT_END):
        cleaned = cleaned[1:]
        if cleaned.startswith(' '):
            cleaned = cleaned[1:]
    return cleaned.rstrip()


def _content_lines(javadoc_content):
    text = javadoc_content.strip()
    if text.startswith(DOC_COMMENT_START):
        text = text[len(DOC_COMMENT_START):]
    if text.endswith(DOC_COMMENT_END):
        text = text[:-len(DOC_COMMENT_END)]
    return [_strip_comment_line(line) for line in text.split('\n')]


def _make_tag(keyword, rest):
    """Build a tag from its keyword and the text after it on the first line."""
    if keyword == TAG_PARAM:
        type_param = _TYPE_PARAM.match(rest)
        if type_param:
            return JavaDocTag(TagKind.TYPE_PARAM, type_param.group(1), type_param.group(2))
        named = _NAMED.match(rest)
        if named:
            return JavaDocTag(TagKind.PARAM, named.group(1), named.group(2))
    elif keyword in (TAG_THROWS, TAG_EXCEPTION):
        named = _NAMED.match(rest)
        if named:
            return JavaDocTag(TagKind.THROWS, named.group(1), named.group(2))
    elif keyword == TAG_RETURN:
        return JavaDocTag(TagKind.RETURN, body=rest)
    elif keyword == TAG_AUTHOR:
        return JavaDocTag(TagKind.AUTHOR, body=rest)
    return JavaDocTag(TagKind.CUSTOM, body=rest, keyword=keyword)


def parse_javadoc(javadoc_content):
    """Parse the text of a Javadoc comment into a JavaDoc.

    Lines before the first tag form the description. A tag continues until
    the next tag, so multi-line tag bodies are kept (joined with newlines).

    Args:
        javadoc_content: Comment text including the /** and */ delimiters

    Returns:
        JavaDoc: Parsed model (empty for empty input)
    """
    if not javadoc_content or not javadoc_content.strip():
        return JavaDoc()

    description = []
    tags = []
    current = None

    for cleaned in _content_lines(javadoc_content):
        match = _TAG_LINE.match(cleaned)
        if match:
            if current is not None:
                tags.append(current)
            keyword, rest = match.group(1), (match.group(2) or '').strip()
            current = [keyword, [rest]]
        elif current is not None:
            current[1].append(cleaned.strip())
        else:
            description.append(_unescape_description_line(cleaned))

    if current is not None:
        tags.append(current)

    parsed_tags = []
    for keyword, lines in tags:
        tag = _make_tag(keyword, lines[0])
        continuation = lines[1:]
        if continuation:
            tag = tag.with_body('\n'.join([tag.body] + continuation).strip())
        parsed_tags.append(tag)

    return JavaDoc('\n'.join(description).strip(), parsed_tags)


def _tag_header(tag):
    header = f"@{tag.keyword}"
    if tag.kind is TagKind.TYPE_PARAM:
        header += f" <{tag.name}>"
    elif tag.name:
        header += f" {tag.name}"
    return header


def _escape_description_line(line):
    # a description line starting with @ would read back as a tag
    if line.startswith('@'):
        return DOC_COMMENT_LITERAL_AT + line[1:]
    return line


def _unescape_description_line(line):
    if line.startswith(DOC_COMMENT_LITERAL_AT):
        return '@' + line[len(DOC_COMMENT_LITERAL_AT):]
    return line


def _comment_line(text):
    return f"{DOC_COMMENT_LINE_PREFIX} {text}" if text else DOC_COMMENT_LINE_PREFIX


def render_javadoc(javadoc, line_separator='\n'):
    """Render a JavaDoc as comment text.

    The result is not indented; the reformatter aligns it with the
    declaration once it is in the tree.

    Args:
        javadoc: JavaDoc model
        line_separator: Line break to join the comment lines with

    Returns:
        str: Comment text from /** to */
    """
    lines = [DOC_COMMENT_START]

    if javadoc.description:
        lines.extend(_comment_line(_escape_description_line(line))
                     for line in javadoc.description.split('\n'))
        if javadoc.tags:
            lines.append(DOC_COMMENT_LINE_PREFIX)

    for tag in javadoc.tags:
        body_lines = tag.body.split('\n') if tag.body else ['']
        first = _tag_header(tag)
        if body_lines[0]:
            first += f" {body_lines[0]}"
        lines.append(_comment_line(first))
        lines.extend(_comment_line(line) for line in body_lines[1:])

    lines.append(f" {DOC_COMMENT_END}")
    return line_separator.join(lines)

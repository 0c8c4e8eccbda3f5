#!/usr/bin/env python3
"""
Minimal code style formatter for Javadoc comments.

Only the part of the file inside the requested text range is touched: doc
comments starting in the range are re-indented to the column they start at,
and the whitespace right after such a comment becomes a single line break
(in the line separator of the file) followed by the same indentation.
"""

from constants import DOC_COMMENT_LINE_PREFIX
from source_tree import DocCommentNode, LeafNode, WhitespaceNode


def line_indentation(text, offset):
    """Indentation of the line containing offset, up to offset."""
    line_start = text.rfind('\n', 0, offset) + 1
    prefix = text[line_start:offset]
    return prefix[:len(prefix) - len(prefix.lstrip())]


def align_doc_comment(comment_text, indentation, line_separator='\n'):
    """Re-indent every line after the first and align the leading '*'."""
    lines = comment_text.split('\n')
    if len(lines) == 1:
        return comment_text
    aligned = [lines[0].strip()]
    for line in lines[1:]:
        stripped = line.strip()
        if stripped.startswith('*'):
            aligned.append(f"{indentation} {stripped}")
        elif stripped:
            aligned.append(f"{indentation}{DOC_COMMENT_LINE_PREFIX} {stripped}")
        else:
            aligned.append(f"{indentation}{DOC_COMMENT_LINE_PREFIX}")
    return line_separator.join(aligned)


def _leaves_with_offsets(root):
    offset = 0
    for node in root.walk():
        if isinstance(node, LeafNode):
            yield node, offset
            offset += node.text_length


class CodeStyleFormatter:
    """Reformats Javadoc comments in a range of a SourceFile."""

    def reformat_text(self, source_file, start_offset, end_offset):
        """Reformat doc comments starting in [start_offset, end_offset).

        Must run inside a write command; the document is committed first so
        offsets refer to the current tree.

        Returns:
            int: Number of nodes whose text changed
        """
        source_file.commit_document()
        text = source_file.document.text
        line_separator = source_file.line_separator

        changes = []
        indentation = None
        for leaf, offset in _leaves_with_offsets(source_file.root):
            if not start_offset <= offset < end_offset:
                indentation = None
                continue
            if isinstance(leaf, DocCommentNode):
                indentation = line_indentation(text, offset)
                changes.append((leaf, align_doc_comment(leaf.text, indentation, line_separator)))
                continue
            if isinstance(leaf, WhitespaceNode) and indentation is not None \
                    and isinstance(leaf.prev_sibling, DocCommentNode):
                changes.append((leaf, line_separator + indentation))
            indentation = None

        changed = 0
        for leaf, new_text in changes:
            if leaf.text != new_text:
                leaf.set_text(new_text)
                changed += 1
        source_file.commit_document()
        return changed

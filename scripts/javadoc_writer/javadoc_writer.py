#!/usr/bin/env python3
"""
Writes and removes Javadoc comments in the source tree.

Each write or remove runs as one write command on the containing file: the
old comment is deleted, the new one inserted, whitespace fixed and the
comment reformatted, or nothing happens at all. The file is checked for
validity and writability before anything is touched.
"""

from typing import Optional

from code_style import CodeStyleFormatter, line_indentation
from constants import FILE_NOT_VALID_MSG, INDENT_UNIT, JAVADOCS_NOT_AVAILABLE_MSG, JAVADOCS_PLUGIN_TITLE_MSG
from errors import FileNotValidError
from javadoc_model import JavaDoc
from javadoc_parser import render_javadoc
from logger import get_logger
from messages import Messages
from source_tree import SourceNode, WhitespaceNode, create_doc_comment, is_doc_comment

logger = get_logger(__name__)


class JavaDocWriter:
    """Applies Javadoc changes to declarations, one write command each."""

    def __init__(self, messages: Optional[Messages] = None, formatter: Optional[CodeStyleFormatter] = None):
        self.messages = messages or Messages()
        self.formatter = formatter or CodeStyleFormatter()

    def write(self, javadoc: JavaDoc, before_element: SourceNode) -> bool:
        """Write javadoc as the comment of before_element.

        Returns:
            bool: True if the tree was updated, False if a failure was reported
        """
        return self._execute("Write javadoc", WriteJavaDocAction(javadoc, before_element, self.formatter),
                             before_element)

    def remove(self, before_element: SourceNode) -> bool:
        """Remove the Javadoc of before_element, if it has one."""
        return self._execute("Remove javadoc", RemoveJavaDocAction(before_element), before_element)

    def check_access(self, element: SourceNode) -> bool:
        """Check the containing file of element, reporting a failure once."""
        try:
            check_files_access(element)
        except FileNotValidError as e:
            logger.error(str(e))
            self.report_failure(e)
            return False
        return True

    def report_failure(self, error: Exception):
        self.messages.show_error(JAVADOCS_NOT_AVAILABLE_MSG + str(error), JAVADOCS_PLUGIN_TITLE_MSG)

    def _execute(self, command_name, action, element):
        if not self.check_access(element):
            return False

        source_file = element.containing_file
        try:
            with source_file.write_command(command_name):
                action.run()
        except Exception as e:
            logger.error(f"{command_name} failed in {source_file.name}: {e!r}")
            self.report_failure(e)
            return False
        return True


class WriteJavaDocAction:
    """Replaces or adds the Javadoc of one declaration."""

    def __init__(self, javadoc: JavaDoc, element: SourceNode, formatter: CodeStyleFormatter):
        self.javadoc = javadoc
        self.element = element
        self.formatter = formatter

    def run(self):
        if self.javadoc is None:
            return
        line_separator = self.element.containing_file.line_separator
        place_javadoc(render_javadoc(self.javadoc, line_separator), self.element, self.formatter)


class RemoveJavaDocAction:
    """Deletes the Javadoc of one declaration."""

    def __init__(self, element: SourceNode):
        self.element = element

    def run(self):
        if is_doc_comment(self.element.first_child):
            delete_javadoc(self.element)


def place_javadoc(comment_text: str, element: SourceNode, formatter: CodeStyleFormatter):
    """Put comment_text in front of element, replacing any existing Javadoc."""
    doc_comment = create_doc_comment(comment_text)
    if is_doc_comment(element.first_child):
        replace_javadoc(element, doc_comment)
    else:
        add_javadoc(element, doc_comment)
    ensure_line_break_before_javadoc(element)
    ensure_whitespace_after_javadoc(element)
    reformat_javadoc(element, formatter)


def ensure_line_break_before_javadoc(element: SourceNode):
    """Start the comment on a line of its own, e.g. for `enum E { A, B }`."""
    source_file = element.containing_file
    push_all_changes(element)
    text = source_file.document.text
    offset = element.text_offset
    line_start = text.rfind('\n', 0, offset) + 1
    before = text[line_start:offset]
    if not before.strip() or element.parent is None:
        return

    indentation = line_indentation(text, offset)
    if before.rstrip().endswith('{'):
        indentation += INDENT_UNIT
    separator = source_file.line_separator + indentation
    previous = element.prev_sibling
    if isinstance(previous, WhitespaceNode):
        previous.set_text(separator)
    else:
        element.parent.add_child(WhitespaceNode(separator), before=element)


def ensure_whitespace_after_javadoc(element: SourceNode):
    # enum constants and bare declarations have no whitespace after the comment
    first_child = element.first_child
    if not is_doc_comment(first_child):
        return
    next_element = first_child.next_sibling
    if next_element is None or isinstance(next_element, WhitespaceNode):
        return
    push_all_changes(element)
    element.add_child(WhitespaceNode(element.containing_file.line_separator), before=next_element)


def delete_javadoc(element: SourceNode):
    push_all_changes(element)
    doc_comment = element.first_child
    separator = doc_comment.next_sibling
    doc_comment.delete()
    if isinstance(separator, WhitespaceNode):
        separator.delete()


def add_javadoc(element: SourceNode, doc_comment):
    push_all_changes(element)
    element.add_child(doc_comment, before=element.first_child)


def replace_javadoc(element: SourceNode, doc_comment):
    delete_javadoc(element)
    add_javadoc(element, doc_comment)


def reformat_javadoc(element: SourceNode, formatter: CodeStyleFormatter) -> bool:
    push_all_changes(element)
    javadoc_offset = find_javadoc_text_offset(element)
    code_offset = find_java_code_text_offset(element)
    if javadoc_offset is None or code_offset is None:
        logger.info("Could not reformat javadoc since cannot find required elements")
        return False
    formatter.reformat_text(element.containing_file, javadoc_offset, code_offset + 1)
    return True


def find_javadoc_text_offset(element: SourceNode) -> Optional[int]:
    javadoc_element = element.first_child
    if not is_doc_comment(javadoc_element):
        return None
    return javadoc_element.text_offset


def find_java_code_text_offset(element: SourceNode) -> Optional[int]:
    children = element.significant_children()
    if len(children) < 2:
        return None
    return children[1].text_offset


def push_all_changes(element: SourceNode):
    """Synchronize the document with the tree before reading or changing it."""
    source_file = element.containing_file
    if source_file is not None:
        source_file.commit_document()


def check_files_access(element: SourceNode):
    """Raise FileNotValidError unless the containing file can be changed."""
    source_file = element.containing_file
    if source_file is None or not source_file.is_valid():
        raise FileNotValidError(FILE_NOT_VALID_MSG)
    status = source_file.ensure_writable()
    if status.has_readonly_files:
        raise FileNotValidError(status.readonly_files_message)

#!/usr/bin/env python3
"""
Mutable source tree for Java files.

tree-sitter trees are read-only, so parsed files are converted into this
small node model (see tree_sitter_utils.build_source_tree). Every character of
the file belongs to exactly one leaf, whitespace included, so the text of the
root is always the text of the file.

A Javadoc comment that directly precedes a declaration is owned by that
declaration as its first child. Writing or removing a Javadoc therefore only
touches the children of the declaration itself.

Tree mutations are only allowed inside SourceFile.write_command(). Each
mutation records its inverse in the command journal; a command that raises
is rolled back and a completed command can be undone.
"""

import os
from contextlib import contextmanager
from typing import List, Optional

from constants import DOC_COMMENT_START, DOC_COMMENT_END
from errors import IncorrectOperationError

WHITESPACE_TYPE = 'whitespace'
DOC_COMMENT_TYPE = 'block_comment'


class SourceNode:
    """Base class of all tree nodes."""

    def __init__(self, node_type: str, field: Optional[str] = None):
        self.type = node_type
        self.field = field
        self.parent: Optional['CompositeNode'] = None

    @property
    def children(self) -> List['SourceNode']:
        return []

    @property
    def text(self) -> str:
        raise NotImplementedError

    @property
    def text_length(self) -> int:
        return len(self.text)

    @property
    def containing_file(self) -> Optional['SourceFile']:
        node = self
        while node.parent is not None:
            node = node.parent
        return getattr(node, 'source_file', None)

    @property
    def first_child(self) -> Optional['SourceNode']:
        children = self.children
        return children[0] if children else None

    @property
    def next_sibling(self) -> Optional['SourceNode']:
        if self.parent is None:
            return None
        siblings = self.parent.children
        index = _index_of(siblings, self)
        return siblings[index + 1] if index + 1 < len(siblings) else None

    @property
    def prev_sibling(self) -> Optional['SourceNode']:
        if self.parent is None:
            return None
        siblings = self.parent.children
        index = _index_of(siblings, self)
        return siblings[index - 1] if index > 0 else None

    @property
    def text_offset(self) -> int:
        """Offset of the first character of this node in the file text."""
        offset = 0
        node = self
        while node.parent is not None:
            for sibling in node.parent.children:
                if sibling is node:
                    break
                offset += sibling.text_length
            node = node.parent
        return offset

    def significant_children(self) -> List['SourceNode']:
        """Children without the whitespace between them."""
        return [child for child in self.children if not isinstance(child, WhitespaceNode)]

    def child_by_field(self, field: str) -> Optional['SourceNode']:
        for child in self.children:
            if child.field == field:
                return child
        return None

    def children_of_type(self, *node_types: str) -> List['SourceNode']:
        return [child for child in self.children if child.type in node_types]

    def walk(self):
        """Yield this node and all of its descendants in document order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def delete(self):
        """Remove this node from its parent."""
        parent = self.parent
        if parent is None:
            raise IncorrectOperationError(f"Cannot delete detached {self.type} node")
        source_file = parent.containing_file
        _check_write_allowed(source_file)
        index = _index_of(parent._children, self)
        parent._children.pop(index)
        self.parent = None

        def restore():
            parent._children.insert(index, self)
            self.parent = parent

        _record(source_file, restore)

    def __repr__(self):
        text = self.text
        if len(text) > 30:
            text = text[:27] + '...'
        return f"{self.__class__.__name__}({self.type!r}, {text!r})"


class LeafNode(SourceNode):
    """A token: identifier, keyword, punctuation, comment."""

    def __init__(self, node_type: str, text: str, field: Optional[str] = None):
        super().__init__(node_type, field)
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    def set_text(self, text: str):
        source_file = self.containing_file
        _check_write_allowed(source_file)
        old_text = self._text
        self._text = text

        def restore():
            self._text = old_text

        _record(source_file, restore)


class WhitespaceNode(LeafNode):
    """Whitespace between two tokens."""

    def __init__(self, text: str):
        super().__init__(WHITESPACE_TYPE, text)


class DocCommentNode(LeafNode):
    """A /** ... */ comment."""

    def __init__(self, text: str, field: Optional[str] = None):
        super().__init__(DOC_COMMENT_TYPE, text, field)


class CompositeNode(SourceNode):
    """A node with children, e.g. a method declaration."""

    def __init__(self, node_type: str, field: Optional[str] = None):
        super().__init__(node_type, field)
        self._children: List[SourceNode] = []

    @property
    def children(self) -> List[SourceNode]:
        return list(self._children)

    @property
    def text(self) -> str:
        return ''.join(child.text for child in self._children)

    @property
    def text_length(self) -> int:
        return sum(child.text_length for child in self._children)

    def append(self, child: SourceNode):
        """Attach a child while the tree is being built (not journaled)."""
        child.parent = self
        self._children.append(child)

    def add_child(self, child: SourceNode, before: Optional[SourceNode] = None):
        """Insert child before the given anchor child (or at the end)."""
        if child.parent is not None:
            raise IncorrectOperationError(f"{child.type} node is already attached")
        source_file = self.containing_file
        _check_write_allowed(source_file)
        if before is None:
            index = len(self._children)
        else:
            if before.parent is not self:
                raise IncorrectOperationError(f"{before.type} node is not a child of {self.type}")
            index = _index_of(self._children, before)
        self._children.insert(index, child)
        child.parent = self

        def restore():
            self._children.remove(child)
            child.parent = None

        _record(source_file, restore)


class FileNode(CompositeNode):
    """Root of a source tree, linked back to its SourceFile."""

    def __init__(self):
        super().__init__('file')
        self.source_file: Optional['SourceFile'] = None


class Document:
    """Text of a source file, synchronized from the tree on commit."""

    def __init__(self, text: str):
        self.text = text
        self.line_separator = detect_line_separator(text)

    def set_text(self, text: str):
        self.text = text


class WritableStatus:
    """Result of SourceFile.ensure_writable()."""

    def __init__(self, readonly_files: List[str] = None):
        self.readonly_files = readonly_files or []

    @property
    def has_readonly_files(self) -> bool:
        return bool(self.readonly_files)

    @property
    def readonly_files_message(self) -> str:
        if not self.readonly_files:
            return ""
        return "Read-only file(s): " + ', '.join(self.readonly_files)


class SourceFile:
    """A parsed Java file: tree, document, write commands and undo history."""

    def __init__(self, root: FileNode, path: Optional[str] = None, read_only: bool = False):
        self.root = root
        root.source_file = self
        self.path = path
        self.read_only = read_only
        self.document = Document(root.text)
        self._valid = True
        self._disk_stamp = _disk_stamp(path)
        self._journal: Optional[list] = None
        self._undo_stack: List[tuple] = []
        self._uncommitted = False

    @property
    def name(self) -> str:
        return os.path.basename(self.path) if self.path else '<memory>'

    @property
    def text(self) -> str:
        return self.root.text

    @property
    def line_separator(self) -> str:
        return self.document.line_separator

    def is_valid(self) -> bool:
        """False once the file was invalidated, deleted or changed on disk."""
        if not self._valid:
            return False
        if self.path is None:
            return True
        return _disk_stamp(self.path) == self._disk_stamp

    def invalidate(self):
        self._valid = False

    def ensure_writable(self) -> WritableStatus:
        if self.read_only:
            return WritableStatus([self.path or self.name])
        if self.path is not None and not os.access(self.path, os.W_OK):
            return WritableStatus([self.path])
        return WritableStatus()

    @property
    def in_write_command(self) -> bool:
        return self._journal is not None

    def commit_document(self):
        """Flush pending tree changes into the document."""
        if self._uncommitted:
            self.document.set_text(self.root.text)
            self._uncommitted = False

    @contextmanager
    def write_command(self, name: str):
        """
        Run tree mutations as one undoable unit.

        If the body raises, every mutation made inside it is reverted before
        the exception propagates. Nested commands join the outer one.
        """
        if self._journal is not None:
            yield
            return
        self._journal = []
        try:
            yield
        except BaseException:
            journal = self._journal
            self._journal = None
            self._replay(journal)
            raise
        else:
            if self._journal:
                self._undo_stack.append((name, self._journal))
        finally:
            self._journal = None
        self.commit_document()

    def undo(self) -> Optional[str]:
        """Revert the last completed write command and return its name."""
        if self._journal is not None:
            raise IncorrectOperationError("Cannot undo while a write command is running")
        if not self._undo_stack:
            return None
        name, journal = self._undo_stack.pop()
        self._replay(journal)
        self.commit_document()
        return name

    @property
    def undo_names(self) -> List[str]:
        return [name for name, _ in self._undo_stack]

    def save(self):
        """Write the committed document back to disk."""
        if self.path is None:
            raise IncorrectOperationError("In-memory file cannot be saved")
        self.commit_document()
        with open(self.path, 'w', encoding='utf-8') as f:
            f.write(self.document.text)
        self._disk_stamp = _disk_stamp(self.path)

    def _record(self, inverse):
        self._journal.append(inverse)
        self._uncommitted = True

    def _replay(self, journal):
        for inverse in reversed(journal):
            inverse()
        self._uncommitted = True


def create_doc_comment(text: str) -> DocCommentNode:
    """Create a detached Javadoc comment node from its literal text."""
    stripped = text.strip()
    if not is_doc_comment_text(stripped):
        raise IncorrectOperationError(f"Not a doc comment: {text!r}")
    return DocCommentNode(stripped)


def is_doc_comment(node: Optional[SourceNode]) -> bool:
    return isinstance(node, DocCommentNode)


def _check_write_allowed(source_file: Optional[SourceFile]):
    if source_file is not None and not source_file.in_write_command:
        raise IncorrectOperationError("Must not change the source tree outside of a write command")


def _record(source_file: Optional[SourceFile], inverse):
    if source_file is not None:
        source_file._record(inverse)


def _index_of(nodes: List[SourceNode], node: SourceNode) -> int:
    for index, candidate in enumerate(nodes):
        if candidate is node:
            return index
    raise IncorrectOperationError(f"{node.type} node is not a child of its parent")


def _disk_stamp(path: Optional[str]):
    if path is None:
        return None
    try:
        return os.stat(path).st_mtime_ns
    except OSError:
        return None


def is_doc_comment_text(text: str) -> bool:
    """True for /** ... */ text; the empty block comment /**/ is not a Javadoc."""
    return text.startswith(DOC_COMMENT_START) and text.endswith(DOC_COMMENT_END) and len(text) >= 5


def detect_line_separator(text: str) -> str:
    """Line separator used by text, '\\n' when it has no line break yet."""
    index = text.find('\n')
    if index > 0 and text[index - 1] == '\r':
        return '\r\n'
    return '\n'

#!/usr/bin/env python3
"""
Main Java file parsing module.
Parses Java files into source trees, classifies declarations and collects the
ones that can carry a Javadoc comment.
"""

import os
from enum import Enum
from typing import List, Optional

from errors import JavaParseError
from logger import get_logger
from source_tree import SourceFile, SourceNode
from tree_sitter_utils import (
    BODY_TYPES,
    CLASS_TYPES,
    FIELD_TYPES,
    METHOD_TYPES,
    build_source_tree,
    extract_field_names,
    extract_field_type,
    extract_modifiers,
    extract_parameters,
    extract_return_type,
    extract_throws,
    extract_type_parameters,
    get_identifier_from_node,
    get_java_parser,
    get_node_line,
)

logger = get_logger(__name__)


class ElementKind(Enum):
    """The three kinds of declarations that get a Javadoc."""
    CLASS = 'class'
    METHOD = 'method'
    FIELD = 'field'


class SignatureFacts:
    """Read-only snapshot of a declaration's shape.

    Computed fresh for each generation request; never cached, since the
    declaration may be edited between two requests.
    """

    def __init__(self, kind: ElementKind, name: str, node_type: str,
                 parameters: List[dict] = None, type_parameters: List[str] = None,
                 exceptions: List[str] = None, return_type: Optional[str] = None,
                 modifiers: List[str] = None, annotations: List[str] = None,
                 field_type: Optional[str] = None, enclosing_class: Optional[str] = None):
        self.kind = kind
        self.name = name
        self.node_type = node_type
        self.parameters = tuple(parameters or ())
        self.type_parameters = tuple(type_parameters or ())
        self.exceptions = tuple(exceptions or ())
        self.return_type = return_type
        self.modifiers = tuple(modifiers or ())
        self.annotations = tuple(annotations or ())
        self.field_type = field_type
        self.enclosing_class = enclosing_class

    @property
    def parameter_names(self) -> List[str]:
        return [param['name'] for param in self.parameters]

    @property
    def has_return(self) -> bool:
        return self.return_type is not None

    @property
    def is_constructor(self) -> bool:
        return self.node_type in ('constructor_declaration', 'compact_constructor_declaration')

    def __repr__(self):
        return (f"SignatureFacts({self.kind.value} {self.name}, params={self.parameter_names}, "
                f"type_params={list(self.type_parameters)}, return={self.return_type}, "
                f"throws={list(self.exceptions)})")


def parse_java_file(java_content: str, path: Optional[str] = None, read_only: bool = False) -> SourceFile:
    """Parse Java source into a SourceFile.

    Args:
        java_content: Full Java file content
        path: Optional path the content was read from
        read_only: Mark the file as not writable

    Returns:
        SourceFile: The parsed file

    Raises:
        JavaParseError: If tree-sitter cannot produce a tree
    """
    source_bytes = java_content.encode('utf-8')
    try:
        tree = get_java_parser().parse(source_bytes)
    except (ValueError, TypeError) as e:
        raise JavaParseError(f"Error parsing Java file {path or ''}: {e}") from e

    if tree.root_node.has_error:
        logger.warning("Java source contains syntax errors, results may be incomplete", file=path)

    root = build_source_tree(tree, source_bytes)
    return SourceFile(root, path=path, read_only=read_only)


def load_java_file(path: str) -> SourceFile:
    """Read and parse a Java file from disk."""
    with open(path, 'r', encoding='utf-8') as f:
        java_content = f.read()
    return parse_java_file(java_content, path=path, read_only=not os.access(path, os.W_OK))


def classify(node: SourceNode) -> Optional[ElementKind]:
    """Map a node to the kind of Javadoc it gets, or None if it gets none."""
    if node.type in CLASS_TYPES:
        return ElementKind.CLASS
    if node.type in METHOD_TYPES:
        return ElementKind.METHOD
    if node.type in FIELD_TYPES:
        return ElementKind.FIELD
    return None


def member_declarations(node: SourceNode) -> List[SourceNode]:
    """Direct member declarations of a file, class or body node.

    Looks through body nodes (class_body, enum_body, ...) and the program node
    but never into a member itself.
    """
    members = []
    for child in node.children:
        if classify(child) is not None:
            members.append(child)
        elif child.type in BODY_TYPES or child.type == 'program':
            members.extend(member_declarations(child))
    return members


def collect_classes(node: SourceNode) -> List[SourceNode]:
    """Class-like declarations below node, outer before inner, depth first."""
    classes = []
    for member in member_declarations(node):
        if classify(member) is ElementKind.CLASS:
            classes.append(member)
            classes.extend(collect_classes(member))
    return classes


def collect_declarations(root: SourceNode) -> List[SourceNode]:
    """Collect every declaration to document below root, in processing order.

    All class-like declarations come first (outer before inner), followed by
    the methods and then the fields of each class in declaration order.
    """
    kind = classify(root)
    if kind in (ElementKind.METHOD, ElementKind.FIELD):
        return [root]

    classes = collect_classes(root)
    if kind is ElementKind.CLASS:
        classes.insert(0, root)

    elements = list(classes)
    for class_node in classes:
        members = member_declarations(class_node)
        elements.extend(m for m in members if classify(m) is ElementKind.METHOD)
        elements.extend(m for m in members if classify(m) is ElementKind.FIELD)
    return elements


def enclosing_class(node: SourceNode) -> Optional[SourceNode]:
    parent = node.parent
    while parent is not None:
        if parent.type in CLASS_TYPES:
            return parent
        parent = parent.parent
    return None


def extract_signature_facts(node: SourceNode) -> Optional[SignatureFacts]:
    """Read the signature of a declaration node.

    Returns:
        SignatureFacts or None when the node is not a documentable declaration
        or has no name
    """
    kind = classify(node)
    if kind is None:
        return None

    owner = enclosing_class(node)
    owner_name = get_identifier_from_node(owner) if owner is not None else None
    modifiers, annotations = extract_modifiers(node)

    if kind is ElementKind.FIELD:
        names = extract_field_names(node)
        if not names:
            return None
        if node.type in ('enum_constant', 'constant_declaration'):
            modifiers = list(modifiers) + [m for m in ('static', 'final') if m not in modifiers]
        return SignatureFacts(kind, names[0], node.type,
                              modifiers=modifiers, annotations=annotations,
                              field_type=extract_field_type(node), enclosing_class=owner_name)

    name = get_identifier_from_node(node)
    if not name:
        return None

    if kind is ElementKind.CLASS:
        parameters = extract_parameters(node) if node.type == 'record_declaration' else []
        return SignatureFacts(kind, name, node.type,
                              parameters=parameters,
                              type_parameters=extract_type_parameters(node),
                              modifiers=modifiers, annotations=annotations,
                              enclosing_class=owner_name)

    return SignatureFacts(kind, name, node.type,
                          parameters=extract_parameters(node),
                          type_parameters=extract_type_parameters(node),
                          exceptions=extract_throws(node),
                          return_type=extract_return_type(node),
                          modifiers=modifiers, annotations=annotations,
                          enclosing_class=owner_name)


def get_visibility(node: SourceNode, facts: SignatureFacts) -> str:
    """Return 'public', 'protected', 'private' or 'default' for a declaration."""
    for visibility in ('public', 'protected', 'private'):
        if visibility in facts.modifiers:
            return visibility
    if node.type in ('enum_constant', 'constant_declaration'):
        return 'public'
    if node.parent is not None and node.parent.type in ('interface_body', 'annotation_type_body'):
        return 'public'
    return 'default'


def describe_element(node: SourceNode) -> str:
    """Short human-readable label for log lines, e.g. 'method add (line 12)'."""
    kind = classify(node)
    name = get_identifier_from_node(node)
    if kind is ElementKind.FIELD:
        names = extract_field_names(node)
        name = names[0] if names else name
    label = kind.value if kind else node.type
    return f"{label} {name or '?'} (line {get_node_line(node)})"

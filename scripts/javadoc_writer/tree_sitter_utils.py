#!/usr/bin/env python3
"""
Tree-sitter utilities for parsing Java code.
Converts tree-sitter syntax trees into the mutable source tree and reads
declaration details (modifiers, parameters, types) back out of it.
"""

import tree_sitter_java
from tree_sitter import Language, Parser

from source_tree import (
    CompositeNode,
    DocCommentNode,
    FileNode,
    LeafNode,
    WhitespaceNode,
    is_doc_comment_text,
)

CLASS_TYPES = (
    'class_declaration',
    'interface_declaration',
    'enum_declaration',
    'record_declaration',
    'annotation_type_declaration',
)
METHOD_TYPES = (
    'method_declaration',
    'constructor_declaration',
    'compact_constructor_declaration',
)
FIELD_TYPES = (
    'field_declaration',
    'constant_declaration',
    'enum_constant',
)
DOCUMENTABLE_TYPES = CLASS_TYPES + METHOD_TYPES + FIELD_TYPES

# Nodes whose children are the members of a class
BODY_TYPES = (
    'class_body',
    'interface_body',
    'enum_body',
    'enum_body_declarations',
    'annotation_type_body',
)

COMMENT_TYPES = ('block_comment', 'line_comment', 'comment')

TYPE_NODE_TYPES = (
    'type_identifier',
    'scoped_type_identifier',
    'generic_type',
    'array_type',
    'integral_type',
    'floating_point_type',
    'boolean_type',
    'void_type',
)

MODIFIER_KEYWORDS = (
    'public', 'private', 'protected', 'static', 'final', 'abstract',
    'synchronized', 'native', 'strictfp', 'transient', 'volatile', 'default',
    'sealed', 'non-sealed',
)

_parser = None


def get_java_parser():
    """Get a tree-sitter parser for Java."""
    global _parser
    if _parser is None:
        _parser = Parser(Language(tree_sitter_java.language()))
    return _parser


def build_source_tree(ts_tree, source_bytes):
    """Convert a tree-sitter tree into a mutable FileNode.

    Args:
        ts_tree: Tree returned by the tree-sitter parser
        source_bytes: The UTF-8 source the tree was parsed from

    Returns:
        FileNode: Root whose text equals the decoded source
    """
    root = FileNode()
    ts_root = ts_tree.root_node
    _append_gap(root, source_bytes, 0, ts_root.start_byte)
    root.append(_convert(ts_root, source_bytes))
    _append_gap(root, source_bytes, ts_root.end_byte, len(source_bytes))
    return root


def _convert(ts_node, source_bytes, field=None):
    if ts_node.child_count == 0:
        text = source_bytes[ts_node.start_byte:ts_node.end_byte].decode('utf-8')
        if ts_node.type in COMMENT_TYPES and is_doc_comment_text(text):
            return DocCommentNode(text, field)
        return LeafNode(ts_node.type, text, field)

    node = CompositeNode(ts_node.type, field)
    cursor = ts_node.start_byte
    for index, ts_child in enumerate(ts_node.children):
        _append_gap(node, source_bytes, cursor, ts_child.start_byte)
        node.append(_convert(ts_child, source_bytes, ts_node.field_name_for_child(index)))
        cursor = max(cursor, ts_child.end_byte)
    _append_gap(node, source_bytes, cursor, ts_node.end_byte)
    _attach_doc_comments(node)
    return node


def _append_gap(node, source_bytes, start, end):
    if end <= start:
        return
    text = source_bytes[start:end].decode('utf-8')
    if text.strip():
        node.append(LeafNode('text', text))
    else:
        node.append(WhitespaceNode(text))


def _is_skipped_before_declaration(node):
    # whitespace and plain comments may sit between a Javadoc and its declaration
    if isinstance(node, WhitespaceNode):
        return True
    return node.type in COMMENT_TYPES and not isinstance(node, DocCommentNode)


def _attach_doc_comments(node):
    """Move each doc comment into the declaration that follows it.

    Whitespace and non-doc comments between the two move along with the doc
    comment. Another doc comment in between means the first one is orphaned.
    """
    children = node.children
    kept = []
    index = 0
    while index < len(children):
        child = children[index]
        if isinstance(child, DocCommentNode):
            target_index = index + 1
            while target_index < len(children) and _is_skipped_before_declaration(children[target_index]):
                target_index += 1
            if target_index < len(children) and children[target_index].type in DOCUMENTABLE_TYPES:
                target = children[target_index]
                moved = children[index:target_index]
                target._children[0:0] = moved
                for moved_child in moved:
                    moved_child.parent = target
                kept.append(target)
                index = target_index + 1
                continue
        kept.append(child)
        index += 1
    node._children = kept


def get_node_line(node):
    """Get the line number (1-indexed) of a source node."""
    source_file = node.containing_file
    text = source_file.text if source_file else node.text
    return text.count('\n', 0, node.text_offset) + 1


def get_identifier_from_node(node):
    """Extract identifier (name) from a declaration node.

    Args:
        node: Source node

    Returns:
        str: Identifier name or None
    """
    name_node = node.child_by_field('name')
    if name_node is not None:
        return name_node.text
    for child in node.children:
        if child.type == 'identifier':
            return child.text
    return None


def extract_modifiers(node):
    """Extract modifier keywords and annotation names from a declaration."""
    modifiers = []
    annotations = []
    for child in node.children:
        if child.type == 'modifiers':
            for modifier_child in child.significant_children():
                if modifier_child.type in ('annotation', 'marker_annotation'):
                    annotations.append(_annotation_name(modifier_child))
                elif modifier_child.text in MODIFIER_KEYWORDS:
                    modifiers.append(modifier_child.text)
        elif child.type in MODIFIER_KEYWORDS:
            modifiers.append(child.text)
    return modifiers, annotations


def _annotation_name(annotation_node):
    name_node = annotation_node.child_by_field('name')
    text = name_node.text if name_node is not None else annotation_node.text.lstrip('@').split('(')[0]
    return text.strip().split('.')[-1]


def extract_type_parameters(node):
    """Extract generic type parameter names, e.g. ['K', 'V']."""
    names = []
    for type_parameters in node.children_of_type('type_parameters'):
        for type_parameter in type_parameters.children_of_type('type_parameter'):
            for child in type_parameter.children:
                if child.type in ('type_identifier', 'identifier'):
                    names.append(child.text)
                    break
    return names


def extract_parameters(node):
    """Extract parameter information from a method, constructor or record declaration."""
    params = []
    formal_parameters = node.child_by_field('parameters')
    if formal_parameters is None:
        found = node.children_of_type('formal_parameters')
        formal_parameters = found[0] if found else None
    if formal_parameters is None:
        return params

    for child in formal_parameters.children:
        if child.type == 'formal_parameter':
            name = get_identifier_from_node(child)
            param_type = child.child_by_field('type')
            if name:
                params.append({'type': param_type.text if param_type else '', 'name': name})
        elif child.type == 'spread_parameter':
            declarators = child.children_of_type('variable_declarator')
            name = get_identifier_from_node(declarators[0]) if declarators else get_identifier_from_node(child)
            types = [c for c in child.children if c.type in TYPE_NODE_TYPES]
            if name:
                params.append({'type': (types[0].text + '...') if types else '', 'name': name})
    return params


def extract_return_type(node):
    """Extract the declared return type, or None for void and constructors."""
    if node.type != 'method_declaration':
        return None
    type_node = node.child_by_field('type')
    if type_node is None:
        for child in node.children:
            if child.type in TYPE_NODE_TYPES:
                type_node = child
                break
    if type_node is None or type_node.type == 'void_type':
        return None
    return type_node.text


def extract_throws(node):
    """Extract declared exception type names from a throws clause."""
    exceptions = []
    for throws in node.children_of_type('throws'):
        for child in throws.significant_children():
            if child.type in TYPE_NODE_TYPES:
                exceptions.append(child.text)
    return exceptions


def extract_field_names(node):
    """Extract declared names of a field, constant or enum constant."""
    if node.type == 'enum_constant':
        name = get_identifier_from_node(node)
        return [name] if name else []
    names = []
    for declarator in node.children_of_type('variable_declarator'):
        name = get_identifier_from_node(declarator)
        if name:
            names.append(name)
    return names


def extract_field_type(node):
    """Extract the declared type of a field."""
    type_node = node.child_by_field('type')
    return type_node.text if type_node is not None else None

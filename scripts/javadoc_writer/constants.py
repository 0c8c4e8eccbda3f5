#!/usr/bin/env python3
"""
Configuration constants for Javadoc generation.
Shared across all modules.
"""

# User-facing messages
JAVADOCS_PLUGIN_TITLE_MSG = "Javadocs"
JAVADOCS_NOT_AVAILABLE_MSG = "Javadocs plugin is not available, cause: "
FILE_NOT_VALID_MSG = "File cannot be used to generate javadocs"

# Claude description enrichment (optional)
CLAUDE_MODEL_HAIKU = "claude-3-5-haiku-20241022"
DESCRIPTION_MAX_TOKENS = 200
HAIKU_INPUT_TOKEN_COST = 0.000001
HAIKU_OUTPUT_TOKEN_COST = 0.000005

# Tag keywords
TAG_PARAM = "param"
TAG_RETURN = "return"
TAG_THROWS = "throws"
TAG_EXCEPTION = "exception"
TAG_AUTHOR = "author"

# Description templates, keyed by declaration node type
CLASS_DESCRIPTION_TEMPLATES = {
    'class_declaration': "The type {name}.",
    'interface_declaration': "The interface {name}.",
    'enum_declaration': "The enum {name}.",
    'record_declaration': "The record {name}.",
    'annotation_type_declaration': "The annotation {name}.",
}
CONSTRUCTOR_DESCRIPTION = "Instantiates a new {words}."
GETTER_DESCRIPTION = "Gets {words}."
BOOLEAN_GETTER_DESCRIPTION = "Is {words} boolean."
SETTER_DESCRIPTION = "Sets {words}."
CONSTANT_DESCRIPTION = "The constant {name}."
FIELD_DESCRIPTION = "The {words}."

# Tag body templates
TYPE_PARAM_BODY = "the {name} type"
PARAM_BODY = "the {words}"
RETURN_BODY = "the {words}"
THROWS_BODY = "the {words}"

# Reformatting
DOC_COMMENT_START = "/**"
DOC_COMMENT_END = "*/"
DOC_COMMENT_LINE_PREFIX = " *"
DOC_COMMENT_LITERAL_AT = "{@literal @}"
INDENT_UNIT = "    "

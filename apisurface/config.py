"""
Configuration constants for Kotlin public API extraction.

Defines the tree-sitter node type strings used for declaration rendering
and the fixed layout of the textual report.
"""

from typing import Set

# File root node type
SOURCE_FILE_NODE: str = "source_file"

# Declaration node types
CLASS_NODE: str = "class_declaration"
OBJECT_NODE: str = "object_declaration"
COMPANION_NODE: str = "companion_object"
FUNCTION_NODE: str = "function_declaration"
PROPERTY_NODE: str = "property_declaration"
ENUM_ENTRY_NODE: str = "enum_entry"

# Class body node types (enum classes get their own body type)
CLASS_BODY_NODE: str = "class_body"
ENUM_CLASS_BODY_NODE: str = "enum_class_body"
BODY_TYPES: Set[str] = {CLASS_BODY_NODE, ENUM_CLASS_BODY_NODE}

# Top-level declarations reported per file
TOP_LEVEL_TYPES: Set[str] = {
    CLASS_NODE,
    OBJECT_NODE,
    FUNCTION_NODE,
    PROPERTY_NODE,
}

# Members rendered from a class body, in source order
BODY_MEMBER_TYPES: Set[str] = {
    CLASS_NODE,
    OBJECT_NODE,
    FUNCTION_NODE,
    PROPERTY_NODE,
    ENUM_ENTRY_NODE,
}

# Header parts
MODIFIERS_NODE: str = "modifiers"
VISIBILITY_MODIFIER: str = "visibility_modifier"
PRIMARY_CONSTRUCTOR_NODE: str = "primary_constructor"
DELEGATION_SPECIFIERS_NODE: str = "delegation_specifiers"
DELEGATION_SPECIFIER_NODE: str = "delegation_specifier"
PARAMETERS_NODE: str = "function_value_parameters"
FUNCTION_BODY_NODE: str = "function_body"

# Identifier node types across grammar releases
NAME_TYPES: Set[str] = {
    "identifier",
    "simple_identifier",
    "type_identifier",
}

# Comment node types across grammar releases
COMMENT_TYPES: Set[str] = {
    "comment",
    "line_comment",
    "block_comment",
    "multiline_comment",
}

# Keyword tokens that open a class-like declaration
CLASS_KEYWORDS: Set[str] = {"class", "interface", "object"}

# Modifier keywords the renderer reads
PUBLIC_MODIFIER: str = "public"
ENUM_MODIFIER: str = "enum"
ABSTRACT_MODIFIER: str = "abstract"
OVERRIDE_MODIFIER: str = "override"

# Kotlin file extensions
KOTLIN_EXTENSIONS: Set[str] = {".kt"}

# Prefix of the virtual name each file is parsed under
VIRTUAL_DIR_PREFIX: str = "tmp/"

# Directories skipped while walking a source tree
SKIPPED_DIRECTORIES: Set[str] = {
    "build",
    "out",
    "node_modules",
    "__pycache__",
}

# Report layout
INDENT_UNIT: str = "\t"
SEPARATOR_SYMBOL: str = "="
SEPARATOR_WIDTH: int = 100
HEADER_PREFIX: str = "Declarations for "
NO_DECLARATIONS_PREFIX: str = "No declaration found in "
USAGE: str = "Usage: api-surface <path>"

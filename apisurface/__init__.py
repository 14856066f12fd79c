"""
Kotlin public API surface extraction.

Tree-sitter-based Kotlin parser and declaration renderer. Renders the
publicly visible classes, functions, properties and enum entries of Kotlin
sources with implementation bodies elided.
"""

from apisurface.models import (
    ClassBody,
    ClassDeclaration,
    CompanionObject,
    EnumEntryDeclaration,
    FunctionDeclaration,
    PropertyDeclaration,
)
from apisurface.parser import (
    count_error_nodes,
    create_parser,
    parse_bytes,
    parse_file,
    parse_source,
)
from apisurface.traversal import build_declaration, extract_declarations_from_tree
from apisurface.renderer import indent, is_public, render
from apisurface.extractor import (
    FileRendering,
    RenderStats,
    discover_kotlin_files,
    format_file_report,
    print_public_declarations,
    process_path,
    render_file,
)

__all__ = [
    # Data models
    "ClassBody",
    "ClassDeclaration",
    "CompanionObject",
    "EnumEntryDeclaration",
    "FunctionDeclaration",
    "PropertyDeclaration",
    "FileRendering",
    "RenderStats",
    # Low-level parsing
    "create_parser",
    "parse_bytes",
    "parse_source",
    "parse_file",
    "count_error_nodes",
    # Tree to models
    "build_declaration",
    "extract_declarations_from_tree",
    # Rendering
    "indent",
    "is_public",
    "render",
    # High-level orchestration
    "discover_kotlin_files",
    "render_file",
    "format_file_report",
    "print_public_declarations",
    "process_path",
]

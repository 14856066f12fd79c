"""
Tree-sitter parser initialization and Kotlin source parsing utilities.

This module is the parser adapter: it turns source text into a syntax tree
and is the only place that knows which grammar is in use.
"""

import logging
from typing import Optional, Tuple

import tree_sitter_kotlin as tskotlin
from tree_sitter import Language, Node, Parser, Tree

from apisurface.config import SOURCE_FILE_NODE
from common.errors import KotlinParseError

# Configure logging
logger = logging.getLogger(__name__)

# Module-level language constant
KOTLIN_LANGUAGE = Language(tskotlin.language())


def create_parser() -> Parser:
    """Create and configure a tree-sitter parser for Kotlin.

    A fresh parser is created per file so that no parser state is shared
    between files.

    Returns:
        A Parser instance configured with the Kotlin language.

    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"fun main() {}")
    """
    parser = Parser(KOTLIN_LANGUAGE)
    logger.debug("Created tree-sitter Kotlin parser")
    return parser


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and MISSING nodes produced by tree-sitter error recovery.

    Args:
        tree: A parsed syntax tree.

    Returns:
        Number of error nodes in the tree, 0 for a clean parse.
    """
    if not tree.root_node.has_error:
        return 0

    def _count(node: Node) -> int:
        count = 1 if node.type == "ERROR" or node.is_missing else 0
        for child in node.children:
            if child.has_error or child.is_missing:
                count += _count(child)
        return count

    return _count(tree.root_node)


def parse_bytes(source: bytes) -> Tree:
    """Parse raw bytes of Kotlin source code.

    Args:
        source: UTF-8 encoded bytes of Kotlin source code.

    Returns:
        A Tree object representing the parsed syntax tree.

    Raises:
        TypeError: If source is not bytes.

    Example:
        >>> tree = parse_bytes(b"class A")
        >>> tree.root_node.type
        'source_file'
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    parser = create_parser()
    tree = parser.parse(source)

    if tree.root_node.has_error:
        logger.debug("Parsed tree contains syntax errors")

    logger.debug("Parsed %d bytes of Kotlin code", len(source))
    return tree


def parse_source(source_text: str, virtual_name: str, strict: bool = False) -> Tree:
    """Parse Kotlin source text registered under a virtual file name.

    Args:
        source_text: Kotlin source code.
        virtual_name: Name used to identify the source in logs and errors.
        strict: If True, a tree with syntax error nodes is a parse failure.
            Otherwise the recovered tree is returned and a warning is logged.

    Returns:
        The parsed syntax tree.

    Raises:
        KotlinParseError: If the tree is not a Kotlin source file, or if
            strict is set and the tree contains syntax errors.
    """
    tree = parse_bytes(source_text.encode("utf-8"))

    if tree.root_node.type != SOURCE_FILE_NODE:
        raise KotlinParseError(
            virtual_name, f"unexpected root node {tree.root_node.type!r}"
        )

    error_count = count_error_nodes(tree)
    if error_count:
        if strict:
            raise KotlinParseError(virtual_name, f"{error_count} syntax error nodes")
        logger.warning("%s contains %d syntax error nodes", virtual_name, error_count)

    return tree


def parse_file(
    file_path: str,
    virtual_name: Optional[str] = None,
    strict: bool = False,
) -> Tuple[Tree, bytes]:
    """Parse a Kotlin source file from disk.

    Args:
        file_path: Path to the .kt file.
        virtual_name: Name to parse the file under. Defaults to file_path.
        strict: Treat syntax error nodes as a parse failure.

    Returns:
        A tuple of (Tree, source_bytes) where:
        - Tree is the parsed syntax tree
        - source_bytes is the UTF-8 encoded source the tree spans index into

    Raises:
        FileNotFoundError: If the file does not exist.
        KotlinParseError: If the file is not valid UTF-8 or fails to parse.
    """
    name = virtual_name or file_path
    try:
        with open(file_path, "rb") as f:
            raw = f.read()
    except FileNotFoundError:
        logger.error("File not found: %s", file_path)
        raise

    try:
        source_text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise KotlinParseError(name, f"not valid UTF-8 ({e.reason})") from e

    tree = parse_source(source_text, name, strict=strict)
    logger.info("Successfully parsed file: %s", name)
    return tree, source_text.encode("utf-8")

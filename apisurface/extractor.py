"""
High-level orchestrator for public API rendering.

This module provides the entry points for rendering the public declarations
of single files or entire directory trees and printing the per-file report.
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional, TextIO

from apisurface.config import (
    HEADER_PREFIX,
    KOTLIN_EXTENSIONS,
    NO_DECLARATIONS_PREFIX,
    SEPARATOR_SYMBOL,
    SEPARATOR_WIDTH,
    SKIPPED_DIRECTORIES,
    VIRTUAL_DIR_PREFIX,
)
from apisurface.parser import count_error_nodes, parse_file
from apisurface.renderer import render
from apisurface.traversal import extract_declarations_from_tree
from common.structured_logging import file_scope

logger = logging.getLogger(__name__)


@dataclass
class FileRendering:
    """Rendered public declarations of one file.

    Attributes:
        path: Absolute path of the source file.
        declarations: Non-empty renderings of top-level declarations,
            in source order.
        parse_error_count: Number of syntax error nodes in the tree.
    """

    path: str
    declarations: List[str] = field(default_factory=list)
    parse_error_count: int = 0


class RenderStats:
    """Statistics for a rendering run."""

    def __init__(self):
        self.files_processed = 0
        self.declarations_rendered = 0
        self.files_without_declarations = 0
        self.parse_errors = 0

    def record(self, rendering: FileRendering) -> None:
        self.files_processed += 1
        self.declarations_rendered += len(rendering.declarations)
        if not rendering.declarations:
            self.files_without_declarations += 1
        self.parse_errors += rendering.parse_error_count

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_processed": self.files_processed,
            "declarations_rendered": self.declarations_rendered,
            "files_without_declarations": self.files_without_declarations,
            "parse_errors": self.parse_errors,
        }

    def __str__(self) -> str:
        return (
            f"RenderStats(processed={self.files_processed}, "
            f"declarations={self.declarations_rendered}, "
            f"empty={self.files_without_declarations}, "
            f"parse_errors={self.parse_errors})"
        )


def is_kotlin_file(path: str) -> bool:
    return os.path.isfile(path) and os.path.splitext(path)[1] in KOTLIN_EXTENSIONS


def discover_kotlin_files(root: str) -> List[str]:
    """Recursively discover all Kotlin source files under a root.

    Args:
        root: A directory to search, or a single file.

    Returns:
        Sorted list of absolute paths to Kotlin files. A file root yields
        itself if it is a Kotlin file and nothing otherwise.

    Raises:
        FileNotFoundError: If root does not exist.

    Example:
        >>> files = discover_kotlin_files("/path/to/project")
    """
    root = os.path.abspath(root)

    if os.path.isfile(root):
        return [root] if is_kotlin_file(root) else []
    if not os.path.isdir(root):
        raise FileNotFoundError(f"Path not found: {root}")

    logger.info("Discovering Kotlin files in %s", root)

    kotlin_files = []
    for current, dirs, files in os.walk(root):
        # Skip hidden directories and build output
        dirs[:] = [
            d for d in dirs if not d.startswith(".") and d not in SKIPPED_DIRECTORIES
        ]
        for name in files:
            path = os.path.join(current, name)
            if os.path.splitext(name)[1] in KOTLIN_EXTENSIONS:
                kotlin_files.append(path)

    logger.info("Found %d Kotlin files", len(kotlin_files))
    # Path order, so a directory sorts among the files beside it
    return sorted(kotlin_files)


def virtual_name_for(file_path: str, base_dir: Optional[str] = None) -> str:
    """Build the virtual name a file is parsed under.

    The name is the file path relative to ``base_dir`` (the file's own
    directory when omitted), prefixed with ``tmp/``.
    """
    file_path = os.path.abspath(file_path)
    if base_dir is None:
        base_dir = os.path.dirname(file_path)
    elif os.path.isfile(base_dir):
        base_dir = os.path.dirname(os.path.abspath(base_dir))
    relative = os.path.relpath(file_path, os.path.abspath(base_dir))
    return VIRTUAL_DIR_PREFIX + relative.replace(os.sep, "/")


def render_file(
    file_path: str,
    base_dir: Optional[str] = None,
    strict: bool = False,
) -> FileRendering:
    """Parse one Kotlin file and render its public top-level declarations.

    Args:
        file_path: Path to the Kotlin file.
        base_dir: Walk root used to build the virtual file name.
        strict: Treat syntax error nodes as a parse failure.

    Returns:
        The file's rendering. Declarations that render empty (non-public)
        are left out.

    Raises:
        FileNotFoundError: If the file does not exist.
        KotlinParseError: If the file cannot be parsed.
        MalformedDeclarationError: If a declaration node is malformed.
    """
    file_path = os.path.abspath(file_path)
    virtual_name = virtual_name_for(file_path, base_dir)

    with file_scope(virtual_name):
        tree, source_bytes = parse_file(file_path, virtual_name, strict=strict)
        rendering = FileRendering(
            path=file_path,
            parse_error_count=count_error_nodes(tree),
        )
        for declaration in extract_declarations_from_tree(tree, source_bytes):
            text = render(declaration, 0, "\n")
            if text:
                rendering.declarations.append(text)
        logger.info("Rendered %d public declarations", len(rendering.declarations))

    return rendering


def format_file_report(rendering: FileRendering) -> str:
    """Format the printed report block for one file.

    The block is a separator line, a header naming the absolute path, a
    blank line, then every rendered declaration followed by a newline, or
    the no-declarations notice.
    """
    lines = [
        SEPARATOR_SYMBOL * SEPARATOR_WIDTH,
        HEADER_PREFIX + rendering.path,
        "",
    ]
    if rendering.declarations:
        lines.extend(rendering.declarations)
    else:
        lines.append(NO_DECLARATIONS_PREFIX + rendering.path)
    return "\n".join(lines) + "\n"


def print_public_declarations(rendering: FileRendering, out: Optional[TextIO] = None) -> None:
    """Write the report block for one file to ``out`` (stdout by default)."""
    stream = out if out is not None else sys.stdout
    stream.write(format_file_report(rendering))


def process_path(
    root: str,
    out: Optional[TextIO] = None,
    strict: bool = False,
) -> RenderStats:
    """Render and print the public declarations of every Kotlin file under root.

    Files are processed one at a time in sorted walk order. The first
    failure propagates and stops the run.

    Args:
        root: A Kotlin file or a directory to walk.
        out: Stream to print reports to (stdout by default).
        strict: Treat syntax error nodes as a parse failure.

    Returns:
        Statistics for the run.

    Raises:
        FileNotFoundError: If root does not exist.
        KotlinParseError: If any file cannot be parsed.
    """
    root = os.path.abspath(root)
    stats = RenderStats()

    kotlin_files = discover_kotlin_files(root)
    if not kotlin_files:
        logger.warning("No Kotlin files found in %s", root)
        return stats

    for file_path in kotlin_files:
        rendering = render_file(file_path, base_dir=root, strict=strict)
        print_public_declarations(rendering, out)
        stats.record(rendering)

    logger.info("Rendering complete: %s", stats)
    return stats

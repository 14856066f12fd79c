"""Exception hierarchy shared by the extraction engine and the CLI."""

from __future__ import annotations


class SurfaceError(RuntimeError):
    """Base class for failures while extracting a public API surface."""


class KotlinParseError(SurfaceError):
    """Raised when a source file cannot be parsed into a Kotlin syntax tree."""

    def __init__(self, virtual_name: str, reason: str) -> None:
        super().__init__(f"Cannot parse {virtual_name}: {reason}")
        self.virtual_name = virtual_name
        self.reason = reason


class MalformedDeclarationError(SurfaceError):
    """Raised when a declaration node lacks a child its grammar guarantees."""

    def __init__(self, node_type: str, line: int, missing: str) -> None:
        super().__init__(f"{node_type} at line {line} has no {missing}")
        self.node_type = node_type
        self.line = line
        self.missing = missing

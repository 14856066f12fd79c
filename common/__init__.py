"""Shared error types and logging utilities."""

from common.errors import (
    KotlinParseError,
    MalformedDeclarationError,
    SurfaceError,
)
from common.structured_logging import (
    configure_structured_logging,
    file_scope,
    get_run_id,
    set_run_id,
)

__all__ = [
    "KotlinParseError",
    "MalformedDeclarationError",
    "SurfaceError",
    "configure_structured_logging",
    "file_scope",
    "get_run_id",
    "set_run_id",
]

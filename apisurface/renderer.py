"""
Declaration renderer.

Renders declaration models as simplified Kotlin: full headers with
implementation bodies elided, keeping only publicly visible declarations.
Rendering is a pure function of the model and the indent level.
"""

import logging
from typing import List, Union

from apisurface.config import INDENT_UNIT, PUBLIC_MODIFIER
from apisurface.models import (
    ClassBody,
    ClassDeclaration,
    CompanionObject,
    Declaration,
    EnumEntryDeclaration,
    FunctionDeclaration,
    PropertyDeclaration,
)

logger = logging.getLogger(__name__)


def indent(level: int) -> str:
    """Return the indentation prefix for a nesting level (one tab per level)."""
    return INDENT_UNIT * level


def is_public(
    declaration: Union[ClassDeclaration, CompanionObject, FunctionDeclaration, PropertyDeclaration],
) -> bool:
    """Check whether a declaration is publicly visible.

    A declaration is public when it has no explicit visibility modifier or
    when its modifier is ``public``.
    """
    return declaration.visibility is None or declaration.visibility == PUBLIC_MODIFIER


def render_class(node: ClassDeclaration, level: int = 0, end: str = "") -> str:
    """Render a class-like declaration with its public members.

    Companion objects are rendered first, then the structural children in
    source order. A non-public class renders as an empty string and none
    of its members are visited.

    Args:
        node: The class declaration.
        level: Indentation level of the header line.
        end: Terminator appended after the closing brace.

    Returns:
        The rendered class, or "" if it is not public.
    """
    if not is_public(node):
        logger.debug("Skipping non-public %s %s", node.keyword, node.name)
        return ""

    parts: List[str] = [indent(level)]
    if node.is_enum:
        parts.append("enum ")
    if node.is_abstract:
        parts.append("abstract ")
    parts.append(node.keyword)
    parts.append(" ")
    parts.append(node.name)
    parts.append(node.primary_constructor)
    if node.supertypes:
        parts.append(" : " + ", ".join(node.supertypes))
    parts.append(" {\n")

    for companion in node.companions:
        parts.append(render_companion(companion, level + 1, "\n"))

    for child in node.children:
        if isinstance(child, ClassBody):
            parts.append(render_class_body(child, level + 1))
        elif isinstance(child, ClassDeclaration):
            parts.append(render_class(child, level + 1, "\n"))

    parts.append(indent(level))
    parts.append("}")
    parts.append(end)
    return "".join(parts)


def render_companion(node: CompanionObject, level: int = 0, end: str = "") -> str:
    """Render a companion object and its public members.

    Companion objects are rendered regardless of their own visibility
    modifier; their members are still filtered.
    """
    parts: List[str] = [indent(level), "companion object "]
    if node.name:
        parts.append(node.name + " ")
    parts.append("{\n")

    if node.body is not None:
        parts.append(render_class_body(node.body, level + 1))

    parts.append(indent(level))
    parts.append("}")
    parts.append(end)
    return "".join(parts)


def render_class_body(node: ClassBody, level: int = 0) -> str:
    """Render every member of a class body at ``level``, newline-terminated."""
    parts: List[str] = []
    for member in node.members:
        if isinstance(member, FunctionDeclaration):
            parts.append(render_function(member, level, "\n"))
        elif isinstance(member, PropertyDeclaration):
            parts.append(render_property(member, level, "\n"))
        elif isinstance(member, EnumEntryDeclaration):
            parts.append(render_enum_entry(member, level) + "\n")
        elif isinstance(member, ClassDeclaration):
            parts.append(render_class(member, level, "\n"))
    return "".join(parts)


def render_function(node: FunctionDeclaration, level: int = 0, end: str = "") -> str:
    """Render a function header.

    Block bodies are elided entirely; a single-expression body is kept
    after ``=``.
    """
    if not is_public(node):
        logger.debug("Skipping non-public fun %s", node.name)
        return ""

    text = indent(level)
    if node.is_override:
        text += "override "
    text += "fun " + node.name + "(" + ", ".join(node.parameters) + ")"
    if node.return_type is not None:
        text += ": " + node.return_type
    if node.expression_body is not None:
        text += " = " + node.expression_body
    return text + end


def render_property(node: PropertyDeclaration, level: int = 0, end: str = "") -> str:
    """Render a property as its verbatim source text."""
    if not is_public(node):
        return ""
    return indent(level) + node.text + end


def render_enum_entry(node: EnumEntryDeclaration, level: int = 0) -> str:
    return indent(level) + node.text


def render(node: Declaration, level: int = 0, end: str = "") -> str:
    """Render any declaration model.

    Args:
        node: A declaration model of any kind.
        level: Indentation level.
        end: Terminator for kinds that take one. Class bodies terminate
            each member themselves and enum entries take none.

    Returns:
        The rendered text, or "" for a non-public declaration.

    Raises:
        TypeError: If node is not a declaration model.
    """
    if isinstance(node, ClassDeclaration):
        return render_class(node, level, end)
    if isinstance(node, CompanionObject):
        return render_companion(node, level, end)
    if isinstance(node, ClassBody):
        return render_class_body(node, level)
    if isinstance(node, FunctionDeclaration):
        return render_function(node, level, end)
    if isinstance(node, PropertyDeclaration):
        return render_property(node, level, end)
    if isinstance(node, EnumEntryDeclaration):
        return render_enum_entry(node, level)
    raise TypeError(f"Unsupported declaration node: {type(node).__name__}")

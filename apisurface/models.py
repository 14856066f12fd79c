"""
Data models for Kotlin declarations.

Each model is a read-only view of one declaration kind. Models are built
from the syntax tree by ``apisurface.traversal`` and consumed by
``apisurface.renderer``; they can also be constructed directly, which is
how the renderer is tested without a parser.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class PropertyDeclaration:
    """A ``val``/``var`` declaration, kept as its verbatim source text.

    Attributes:
        text: Full declaration text including accessors.
        visibility: Explicit visibility modifier, or None when absent.
    """

    text: str
    visibility: Optional[str] = None


@dataclass(frozen=True)
class EnumEntryDeclaration:
    """A single enum entry, kept as its verbatim source text."""

    text: str


@dataclass(frozen=True)
class FunctionDeclaration:
    """A named function.

    Attributes:
        name: Function name.
        parameters: Raw source text of each value parameter, in order.
        return_type: Declared return type text, or None when not declared.
        expression_body: Source text of a single-expression body, or None
            for a block body or a missing body.
        is_override: Whether the function carries ``override``.
        visibility: Explicit visibility modifier, or None when absent.
    """

    name: str
    parameters: Tuple[str, ...] = ()
    return_type: Optional[str] = None
    expression_body: Optional[str] = None
    is_override: bool = False
    visibility: Optional[str] = None


@dataclass(frozen=True)
class ClassBody:
    """Members of a class body in declaration order.

    Companion objects are not members here; they are lifted onto the
    owning declaration.
    """

    members: Tuple["Member", ...] = ()


@dataclass(frozen=True)
class CompanionObject:
    """A companion object attached to a class."""

    name: Optional[str] = None
    body: Optional[ClassBody] = None
    visibility: Optional[str] = None


@dataclass(frozen=True)
class ClassDeclaration:
    """A class, interface, enum class or object declaration.

    Attributes:
        name: Declared name.
        keyword: Keyword that opened the declaration (class/interface/object).
        is_enum: Whether the ``enum`` modifier is present.
        is_abstract: Whether the ``abstract`` modifier is present.
        primary_constructor: Raw primary-constructor text, empty if none.
        supertypes: Raw text of each supertype entry, in order.
        companions: Companion objects, rendered before other children.
        children: Structural children (the class body, nested classes).
        visibility: Explicit visibility modifier, or None when absent.
    """

    name: str
    keyword: str = "class"
    is_enum: bool = False
    is_abstract: bool = False
    primary_constructor: str = ""
    supertypes: Tuple[str, ...] = ()
    companions: Tuple[CompanionObject, ...] = ()
    children: Tuple[Union[ClassBody, "ClassDeclaration"], ...] = ()
    visibility: Optional[str] = None


Member = Union[
    ClassDeclaration,
    FunctionDeclaration,
    PropertyDeclaration,
    EnumEntryDeclaration,
]

Declaration = Union[
    ClassDeclaration,
    CompanionObject,
    ClassBody,
    FunctionDeclaration,
    PropertyDeclaration,
    EnumEntryDeclaration,
]

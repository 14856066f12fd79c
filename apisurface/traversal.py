"""
Syntax tree traversal and declaration model construction.

This module walks the Kotlin syntax tree produced by ``apisurface.parser``
and builds the declaration models consumed by ``apisurface.renderer``.
Both the current and the older tree-sitter-kotlin node naming are accepted.
"""

import logging
from typing import List, Optional, Set, Tuple

from tree_sitter import Node, Tree

from apisurface.config import (
    ABSTRACT_MODIFIER,
    BODY_MEMBER_TYPES,
    BODY_TYPES,
    CLASS_KEYWORDS,
    CLASS_NODE,
    COMMENT_TYPES,
    COMPANION_NODE,
    DELEGATION_SPECIFIER_NODE,
    DELEGATION_SPECIFIERS_NODE,
    ENUM_ENTRY_NODE,
    ENUM_MODIFIER,
    FUNCTION_BODY_NODE,
    FUNCTION_NODE,
    MODIFIERS_NODE,
    NAME_TYPES,
    OBJECT_NODE,
    OVERRIDE_MODIFIER,
    PARAMETERS_NODE,
    PRIMARY_CONSTRUCTOR_NODE,
    PROPERTY_NODE,
    TOP_LEVEL_TYPES,
    VISIBILITY_MODIFIER,
)
from apisurface.models import (
    ClassBody,
    ClassDeclaration,
    CompanionObject,
    Declaration,
    EnumEntryDeclaration,
    FunctionDeclaration,
    Member,
    PropertyDeclaration,
)
from common.errors import MalformedDeclarationError

logger = logging.getLogger(__name__)

# Wrappers some grammar releases put around body members
_TRANSPARENT_BODY_WRAPPERS: Set[str] = {
    "class_member_declarations",
    "enum_entries",
}


def node_text(node: Node, source_bytes: bytes) -> str:
    """Return the exact source text spanned by a node."""
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8")


def find_child(node: Node, node_types: Set[str]) -> Optional[Node]:
    """Return the first direct child whose type is in ``node_types``."""
    for child in node.children:
        if child.type in node_types:
            return child
    return None


def read_modifiers(node: Node, source_bytes: bytes) -> Tuple[Optional[str], Set[str]]:
    """Read the modifier list of a declaration.

    Args:
        node: A declaration node.
        source_bytes: The raw source file bytes.

    Returns:
        A tuple of (visibility, keywords) where visibility is the explicit
        visibility modifier text or None, and keywords holds every other
        modifier keyword (annotations excluded).
    """
    visibility = None
    keywords: Set[str] = set()

    modifiers = find_child(node, {MODIFIERS_NODE})
    if modifiers is None:
        return visibility, keywords

    for child in modifiers.named_children:
        if child.type == VISIBILITY_MODIFIER:
            visibility = node_text(child, source_bytes)
        elif child.type != "annotation" and child.type not in COMMENT_TYPES:
            keywords.add(node_text(child, source_bytes))
    return visibility, keywords


def declaration_name(node: Node, source_bytes: bytes) -> str:
    """Extract the declared name of a class, object or function node.

    Raises:
        MalformedDeclarationError: If the node carries no name.
    """
    name_node = node.child_by_field_name("name")
    if name_node is None:
        name_node = find_child(node, NAME_TYPES)
    if name_node is None:
        raise MalformedDeclarationError(node.type, node.start_point[0] + 1, "name")
    return node_text(name_node, source_bytes)


def extract_supertypes(node: Node, source_bytes: bytes) -> Tuple[str, ...]:
    """Collect the raw text of each supertype entry, in source order."""
    supertypes: List[str] = []
    for child in node.children:
        if child.type == DELEGATION_SPECIFIER_NODE:
            supertypes.append(node_text(child, source_bytes))
        elif child.type == DELEGATION_SPECIFIERS_NODE:
            for entry in child.named_children:
                if entry.type == DELEGATION_SPECIFIER_NODE:
                    supertypes.append(node_text(entry, source_bytes))
    return tuple(supertypes)


def extract_parameters(params_node: Node, source_bytes: bytes) -> Tuple[str, ...]:
    """Split a parameter list into the raw text of each parameter.

    Each parameter spans from its first token (modifiers included) to its
    last token (default value included).
    """
    groups: List[List[Node]] = []
    current: List[Node] = []
    for child in params_node.children:
        if child.type in ("(", ")") or child.type in COMMENT_TYPES:
            continue
        if child.type == ",":
            if current:
                groups.append(current)
            current = []
            continue
        current.append(child)
    if current:
        groups.append(current)

    return tuple(
        source_bytes[group[0].start_byte:group[-1].end_byte].decode("utf-8")
        for group in groups
    )


def _expression_after_equals(node: Node, source_bytes: bytes) -> Optional[str]:
    seen_equals = False
    for child in node.children:
        if child.type == "=":
            seen_equals = True
        elif seen_equals and child.type not in COMMENT_TYPES:
            # Literals such as null are anonymous tokens in some releases
            return node_text(child, source_bytes)
    return None


def extract_function_signature(
    node: Node, source_bytes: bytes
) -> Tuple[Tuple[str, ...], Optional[str], Optional[str]]:
    """Extract parameters, declared return type and expression body.

    Returns:
        A tuple of (parameters, return_type, expression_body). The return
        type is None when not declared; the expression body is None for a
        block body or no body.

    Raises:
        MalformedDeclarationError: If the function has no parameter list.
    """
    params_node = find_child(node, {PARAMETERS_NODE})
    if params_node is None:
        raise MalformedDeclarationError(
            node.type, node.start_point[0] + 1, "parameter list"
        )
    parameters = extract_parameters(params_node, source_bytes)

    return_type = None
    expression_body = None
    after_params = False
    expect_type = False
    for child in node.children:
        if child.type in COMMENT_TYPES:
            continue
        if child == params_node:
            after_params = True
        elif not after_params:
            continue
        elif child.type == ":" and return_type is None:
            expect_type = True
        elif expect_type:
            return_type = node_text(child, source_bytes)
            expect_type = False
        elif child.type == FUNCTION_BODY_NODE:
            expression_body = _expression_after_equals(child, source_bytes)
        elif child.type == "=":
            # Grammar releases without a function_body wrapper
            expression_body = _expression_after_equals(node, source_bytes)
            break

    return parameters, return_type, expression_body


def build_class_body(body_node: Node, source_bytes: bytes) -> Tuple[ClassBody, Tuple[CompanionObject, ...]]:
    """Build a class body, separating companion objects from other members.

    Args:
        body_node: A class_body or enum_class_body node.
        source_bytes: The raw source file bytes.

    Returns:
        A tuple of (body, companions).
    """
    members: List[Member] = []
    companions: List[CompanionObject] = []

    def collect(container: Node) -> None:
        for child in container.named_children:
            if child.type == COMPANION_NODE:
                companions.append(build_companion(child, source_bytes))
            elif child.type in BODY_MEMBER_TYPES:
                members.append(build_declaration(child, source_bytes))
            elif child.type in _TRANSPARENT_BODY_WRAPPERS:
                collect(child)
            else:
                logger.debug(
                    "Ignoring %s at line %d", child.type, child.start_point[0] + 1
                )

    collect(body_node)
    return ClassBody(members=tuple(members)), tuple(companions)


def build_class(node: Node, source_bytes: bytes) -> ClassDeclaration:
    """Build a class-like declaration from a class or object node."""
    visibility, keywords = read_modifiers(node, source_bytes)

    keyword_node = find_child(node, CLASS_KEYWORDS)
    if keyword_node is None:
        raise MalformedDeclarationError(node.type, node.start_point[0] + 1, "keyword")

    constructor = find_child(node, {PRIMARY_CONSTRUCTOR_NODE})
    body_node = find_child(node, BODY_TYPES)

    children: Tuple[ClassBody, ...] = ()
    companions: Tuple[CompanionObject, ...] = ()
    if body_node is not None:
        body, companions = build_class_body(body_node, source_bytes)
        children = (body,)

    return ClassDeclaration(
        name=declaration_name(node, source_bytes),
        keyword=keyword_node.type,
        # Older grammars emit enum as a bare token before the keyword
        is_enum=ENUM_MODIFIER in keywords or find_child(node, {ENUM_MODIFIER}) is not None,
        is_abstract=ABSTRACT_MODIFIER in keywords,
        primary_constructor=node_text(constructor, source_bytes) if constructor else "",
        supertypes=extract_supertypes(node, source_bytes),
        companions=companions,
        children=children,
        visibility=visibility,
    )


def build_companion(node: Node, source_bytes: bytes) -> CompanionObject:
    """Build a companion object; its name is optional."""
    visibility, _ = read_modifiers(node, source_bytes)
    name_node = node.child_by_field_name("name") or find_child(node, NAME_TYPES)
    body_node = find_child(node, BODY_TYPES)

    body = None
    if body_node is not None:
        body, nested = build_class_body(body_node, source_bytes)
        if nested:
            logger.warning(
                "Ignoring companion nested in companion at line %d",
                node.start_point[0] + 1,
            )

    return CompanionObject(
        name=node_text(name_node, source_bytes) if name_node else None,
        body=body,
        visibility=visibility,
    )


def build_function(node: Node, source_bytes: bytes) -> FunctionDeclaration:
    visibility, keywords = read_modifiers(node, source_bytes)
    parameters, return_type, expression_body = extract_function_signature(
        node, source_bytes
    )
    return FunctionDeclaration(
        name=declaration_name(node, source_bytes),
        parameters=parameters,
        return_type=return_type,
        expression_body=expression_body,
        is_override=OVERRIDE_MODIFIER in keywords,
        visibility=visibility,
    )


def build_property(node: Node, source_bytes: bytes) -> PropertyDeclaration:
    visibility, _ = read_modifiers(node, source_bytes)
    return PropertyDeclaration(text=node_text(node, source_bytes), visibility=visibility)


def build_enum_entry(node: Node, source_bytes: bytes) -> EnumEntryDeclaration:
    """Build an enum entry; its text runs through the comma that follows it."""
    end_byte = node.end_byte
    separator = node.next_sibling
    if separator is not None and separator.type == ",":
        end_byte = separator.end_byte
    return EnumEntryDeclaration(
        text=source_bytes[node.start_byte:end_byte].decode("utf-8")
    )


def build_declaration(node: Node, source_bytes: bytes) -> Optional[Declaration]:
    """Build the declaration model for a syntax tree node.

    Args:
        node: Any syntax tree node.
        source_bytes: The raw source file bytes.

    Returns:
        The declaration model, or None if the node is not a declaration
        kind the renderer knows.

    Raises:
        MalformedDeclarationError: If the node violates the grammar shape
            its kind guarantees.
    """
    if node.type in (CLASS_NODE, OBJECT_NODE):
        return build_class(node, source_bytes)
    if node.type == COMPANION_NODE:
        return build_companion(node, source_bytes)
    if node.type in BODY_TYPES:
        body, _ = build_class_body(node, source_bytes)
        return body
    if node.type == FUNCTION_NODE:
        return build_function(node, source_bytes)
    if node.type == PROPERTY_NODE:
        return build_property(node, source_bytes)
    if node.type == ENUM_ENTRY_NODE:
        return build_enum_entry(node, source_bytes)
    return None


def extract_declarations_from_tree(tree: Tree, source_bytes: bytes) -> List[Declaration]:
    """Build models for the top-level declarations of a parsed file.

    Only classes, objects, functions and properties are returned, in
    source order. Visibility is not filtered here.

    Args:
        tree: The parsed syntax tree.
        source_bytes: The raw source file bytes.

    Returns:
        List of top-level declaration models.
    """
    declarations = []
    for child in tree.root_node.named_children:
        if child.type in TOP_LEVEL_TYPES:
            declarations.append(build_declaration(child, source_bytes))
    logger.debug("Found %d top-level declarations", len(declarations))
    return declarations

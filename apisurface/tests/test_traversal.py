"""
Unit tests for traversal.py

Tests building declaration models from parsed Kotlin and rendering them.
"""

import unittest

from apisurface.models import (
    ClassBody,
    ClassDeclaration,
    EnumEntryDeclaration,
    FunctionDeclaration,
    PropertyDeclaration,
)
from apisurface.parser import parse_bytes
from apisurface.renderer import render
from apisurface.traversal import (
    build_declaration,
    extract_declarations_from_tree,
    extract_parameters,
    find_child,
    read_modifiers,
)


def _declarations(source: bytes):
    tree = parse_bytes(source)
    return extract_declarations_from_tree(tree, source)


def _render_all(source: bytes) -> str:
    return "".join(render(d, 0, "\n") for d in _declarations(source))


class TestModifiers(unittest.TestCase):
    """Test reading modifier lists."""

    def test_visibility_and_keywords(self):
        source = b"private abstract class A\n"
        tree = parse_bytes(source)
        node = tree.root_node.named_children[0]
        visibility, keywords = read_modifiers(node, source)
        self.assertEqual(visibility, "private")
        self.assertIn("abstract", keywords)

    def test_no_modifiers(self):
        source = b"class A\n"
        tree = parse_bytes(source)
        visibility, keywords = read_modifiers(tree.root_node.named_children[0], source)
        self.assertIsNone(visibility)
        self.assertEqual(keywords, set())


class TestFunctionModels(unittest.TestCase):
    """Test function declaration models."""

    def test_expression_body_and_return_type(self):
        decls = _declarations(b"fun f(): Int = 1\n")
        self.assertEqual(
            decls,
            [FunctionDeclaration(name="f", return_type="Int", expression_body="1")],
        )

    def test_block_body_is_not_captured(self):
        decls = _declarations(b"fun g(a: Int) {\n    val secretValue = a * 2\n}\n")
        func = decls[0]
        self.assertIsNone(func.expression_body)
        self.assertIsNone(func.return_type)
        self.assertEqual(func.parameters, ("a: Int",))
        self.assertNotIn("secretValue", render(func))

    def test_parameter_defaults_kept(self):
        source = b'fun greet(name: String, greeting: String = "Hi"): String = greeting + name\n'
        tree = parse_bytes(source)
        node = tree.root_node.named_children[0]
        params = find_child(node, {"function_value_parameters"})
        self.assertEqual(
            extract_parameters(params, source),
            ("name: String", 'greeting: String = "Hi"'),
        )

    def test_override_flag(self):
        source = b"class A {\n    override fun toString(): String = \"A\"\n}\n"
        cls = _declarations(source)[0]
        body = cls.children[0]
        self.assertTrue(body.members[0].is_override)

    def test_visibility(self):
        decls = _declarations(b"internal fun hidden() {}\n")
        self.assertEqual(decls[0].visibility, "internal")
        self.assertEqual(render(decls[0]), "")


class TestClassModels(unittest.TestCase):
    """Test class-like declaration models."""

    def test_primary_constructor_and_supertypes(self):
        source = b"class Circle(val radius: Double) : Shape, Comparable<Circle>\n"
        cls = _declarations(source)[0]
        self.assertIsInstance(cls, ClassDeclaration)
        self.assertEqual(cls.name, "Circle")
        self.assertEqual(cls.keyword, "class")
        self.assertEqual(cls.primary_constructor, "(val radius: Double)")
        self.assertEqual(cls.supertypes, ("Shape", "Comparable<Circle>"))

    def test_interface_keyword(self):
        cls = _declarations(b"interface Shape {\n    fun area(): Double\n}\n")[0]
        self.assertEqual(cls.keyword, "interface")
        self.assertEqual(
            render(cls, 0, "\n"),
            "interface Shape {\n\tfun area(): Double\n}\n",
        )

    def test_enum_entries(self):
        cls = _declarations(b"enum class Color { RED, GREEN }\n")[0]
        self.assertTrue(cls.is_enum)
        self.assertEqual(
            cls.children,
            (ClassBody(members=(EnumEntryDeclaration("RED,"), EnumEntryDeclaration("GREEN"))),),
        )

    def test_enum_entry_with_arguments(self):
        cls = _declarations(b"enum class Level(val code: Int) { LOW(1), HIGH(2); }\n")[0]
        self.assertEqual(
            cls.children[0].members,
            (EnumEntryDeclaration("LOW(1),"), EnumEntryDeclaration("HIGH(2)")),
        )

    def test_enum_only_from_modifier(self):
        source = b"fun interface Action { fun run() }\n"
        for decl in _declarations(source):
            self.assertFalse(getattr(decl, "is_enum", False))
        self.assertNotIn("enum", _render_all(source))

    def test_property_keeps_accessors(self):
        source = b"""
class Counter {
    var count: Int = 0
        private set
    val size: Int
        get() = 3
}
"""
        members = _declarations(source)[0].children[0].members
        self.assertEqual(len(members), 2)
        self.assertTrue(members[0].text.startswith("var count: Int = 0"))
        self.assertIn("private set", members[0].text)
        self.assertTrue(members[1].text.startswith("val size: Int"))
        self.assertIn("get() = 3", members[1].text)

    def test_object_declaration(self):
        cls = _declarations(b"object Registry {\n    val items = 1\n}\n")[0]
        self.assertEqual(cls.keyword, "object")
        self.assertEqual(render(cls, 0, "\n"), "object Registry {\n\tval items = 1\n}\n")

    def test_companion_lifted_out_of_body(self):
        source = b"""
class Factory {
    val id: Int = 0
    companion object Builder {
        fun create(): Factory = Factory()
    }
}
"""
        cls = _declarations(source)[0]
        self.assertEqual(len(cls.companions), 1)
        self.assertEqual(cls.companions[0].name, "Builder")
        self.assertEqual(cls.children[0].members, (PropertyDeclaration("val id: Int = 0"),))

    def test_build_declaration_ignores_other_nodes(self):
        source = b"package demo\n"
        tree = parse_bytes(source)
        self.assertIsNone(build_declaration(tree.root_node.named_children[0], source))


class TestRenderedSource(unittest.TestCase):
    """End-to-end rendering of parsed snippets."""

    def test_public_class_and_private_function(self):
        source = b"class A(val x: Int) { fun f(): Int = 1 }\nprivate fun hidden() {}\n"
        self.assertEqual(_render_all(source), "class A(val x: Int) {\n\tfun f(): Int = 1\n}\n")

    def test_enum_rendering(self):
        self.assertEqual(
            _render_all(b"enum class Color { RED, GREEN }\n"),
            "enum class Color {\n\tRED,\n\tGREEN\n}\n",
        )

    def test_private_class_hides_public_members(self):
        source = b"private class Secret {\n    fun reveal(): String = \"x\"\n}\n"
        self.assertEqual(_render_all(source), "")

    def test_abstract_class_with_companion(self):
        source = b"""
abstract class Base : Runnable {
    companion object Factory {
        fun create(): Int = 1
    }

    override fun run() {
        println("running")
    }

    internal fun hidden() = 2
}
"""
        self.assertEqual(
            _render_all(source),
            "abstract class Base : Runnable {\n"
            "\tcompanion object Factory {\n"
            "\t\tfun create(): Int = 1\n"
            "\t}\n"
            "\toverride fun run()\n"
            "}\n",
        )

    def test_private_companion_still_rendered(self):
        source = b"""
class Config {
    private companion object {
        fun secret() = 1
        private fun hidden() = 2
    }
}
"""
        self.assertEqual(
            _render_all(source),
            "class Config {\n\tcompanion object {\n\t\tfun secret() = 1\n\t}\n}\n",
        )

    def test_accessors_rendered_verbatim(self):
        source = b"class Counter {\n    var count: Int = 0\n        private set\n}\n"
        self.assertEqual(
            _render_all(source),
            "class Counter {\n\tvar count: Int = 0\n        private set\n}\n",
        )

    def test_nested_classes(self):
        source = b"""
class Outer {
    class Inner {
        fun x() = 1
    }
    private class Hidden {
        fun y() = 2
    }
}
"""
        self.assertEqual(
            _render_all(source),
            "class Outer {\n\tclass Inner {\n\t\tfun x() = 1\n\t}\n}\n",
        )

    def test_top_level_properties(self):
        source = b"val answer: Int = 42\nprivate val secret = 1\n"
        self.assertEqual(_render_all(source), "val answer: Int = 42\n")

    def test_class_without_body(self):
        self.assertEqual(_render_all(b"class Empty\n"), "class Empty {\n}\n")


if __name__ == "__main__":
    unittest.main()

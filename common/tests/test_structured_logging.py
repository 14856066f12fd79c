"""Tests for structured logging helpers."""

import io
import logging
import unittest

from common.errors import KotlinParseError, MalformedDeclarationError, SurfaceError
from common.structured_logging import (
    _RunContextFilter,
    configure_structured_logging,
    file_scope,
    get_run_id,
    set_run_id,
)


class TestRunContext(unittest.TestCase):
    def test_set_run_id_generates_value(self) -> None:
        run_id = set_run_id()
        self.assertEqual(get_run_id(), run_id)
        self.assertNotEqual(run_id, "-")

    def test_set_explicit_run_id(self) -> None:
        self.assertEqual(set_run_id("run-42"), "run-42")
        self.assertEqual(get_run_id(), "run-42")

    def test_file_scope_resets(self) -> None:
        inside = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        after = logging.LogRecord("x", logging.INFO, __file__, 2, "msg", None, None)
        with file_scope("tmp/A.kt"):
            _RunContextFilter().filter(inside)
        _RunContextFilter().filter(after)
        self.assertEqual(inside.source_file, "tmp/A.kt")
        self.assertEqual(after.source_file, "-")

    def test_filter_injects_fields(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        set_run_id("run-7")
        with file_scope("tmp/B.kt"):
            self.assertTrue(_RunContextFilter().filter(record))
        self.assertEqual(record.run_id, "run-7")
        self.assertEqual(record.source_file, "tmp/B.kt")


class TestConfigureLogging(unittest.TestCase):
    def setUp(self) -> None:
        self.root = logging.getLogger()
        self.saved_handlers = self.root.handlers[:]
        self.saved_level = self.root.level
        self.stream = io.StringIO()
        self.root.handlers = [logging.StreamHandler(self.stream)]

    def tearDown(self) -> None:
        self.root.handlers = self.saved_handlers
        self.root.setLevel(self.saved_level)

    def test_format_carries_context(self) -> None:
        configure_structured_logging(logging.INFO)
        set_run_id("run-9")
        with file_scope("tmp/C.kt"):
            logging.getLogger("apisurface.test").info("rendered")
        line = self.stream.getvalue()
        self.assertIn("run_id=run-9", line)
        self.assertIn("file=tmp/C.kt", line)
        self.assertIn("rendered", line)


class TestErrors(unittest.TestCase):
    def test_hierarchy(self) -> None:
        self.assertTrue(issubclass(KotlinParseError, SurfaceError))
        self.assertTrue(issubclass(MalformedDeclarationError, SurfaceError))
        self.assertTrue(issubclass(SurfaceError, RuntimeError))

    def test_messages(self) -> None:
        self.assertEqual(
            str(KotlinParseError("tmp/A.kt", "not valid UTF-8")),
            "Cannot parse tmp/A.kt: not valid UTF-8",
        )
        self.assertEqual(
            str(MalformedDeclarationError("class_declaration", 3, "name")),
            "class_declaration at line 3 has no name",
        )


if __name__ == "__main__":
    unittest.main()

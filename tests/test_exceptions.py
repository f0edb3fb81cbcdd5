"""
Tests for the exception hierarchy.
"""

import pytest

from modcompile.exceptions import (
    CompileError,
    ConfigurationError,
    ModcompileError,
    OutputError,
    ResolutionError,
    SessionClosedError,
)


class TestHierarchy:
    """Verify all exceptions inherit from ModcompileError."""

    @pytest.mark.parametrize(
        "exc_class",
        [ConfigurationError, ResolutionError, CompileError, OutputError, SessionClosedError],
    )
    def test_inherits_from_modcompile_error(self, exc_class):
        assert issubclass(exc_class, ModcompileError)


class TestExceptionMessages:
    """Test exception constructors and details."""

    def test_modcompile_error(self):
        e = ModcompileError("boom", details={"key": "val"})
        assert str(e) == "boom"
        assert e.message == "boom"
        assert e.details == {"key": "val"}

    def test_default_details(self):
        assert ConfigurationError("bad").details == {}

    def test_resolution_error(self):
        e = ResolutionError("lib/a.js", "no such file", referrer="main.js")
        assert "lib/a.js" in str(e)
        assert "main.js" in str(e)
        assert e.name == "lib/a.js"
        assert e.referrer == "main.js"
        assert e.details == {"name": "lib/a.js", "referrer": "main.js"}

    def test_resolution_error_without_referrer(self):
        e = ResolutionError("a.js", "no such file")
        assert "imported from" not in str(e)
        assert e.referrer is None

    def test_compile_error(self):
        cause = SyntaxError("unexpected token")
        e = CompileError("a.js", "bad syntax", cause=cause)
        assert "a.js" in str(e)
        assert "bad syntax" in str(e)
        assert e.name == "a.js"
        assert e.__cause__ is cause

    def test_output_error(self):
        e = OutputError("/out/x.js", "Permission denied")
        assert "/out/x.js" in str(e)
        assert e.path == "/out/x.js"
        assert e.details["path"] == "/out/x.js"

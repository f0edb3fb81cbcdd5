"""
Tests for the loader session.
"""

import pytest

from modcompile.core.elements import CompiledUnit, EvaluationStatement, Tree
from modcompile.core.session import LoaderSession
from modcompile.exceptions import SessionClosedError


class TestLoaderSession:
    def test_finish_returns_elements_in_append_order(self, tmp_path):
        session = LoaderSession(tmp_path)
        elements = [CompiledUnit("b"), CompiledUnit("a"), EvaluationStatement("a")]
        for element in elements:
            session.append(element)

        tree = session.finish()

        assert isinstance(tree, Tree)
        assert list(tree) == elements
        assert tree.names == ["b", "a", "a"]

    def test_finish_with_dependency_target_returns_none(self, tmp_path):
        session = LoaderSession(tmp_path)
        session.append(CompiledUnit("a"))

        assert session.finish("out.js") is None
        assert session.closed

    def test_empty_session_gives_empty_tree(self, tmp_path):
        tree = LoaderSession(tmp_path).finish()
        assert len(tree) == 0

    def test_append_after_finish_rejected(self, tmp_path):
        session = LoaderSession(tmp_path)
        session.finish()

        with pytest.raises(SessionClosedError):
            session.append(CompiledUnit("late"))

    def test_finish_twice_rejected(self, tmp_path):
        session = LoaderSession(tmp_path)
        session.finish()

        with pytest.raises(SessionClosedError):
            session.finish()

    def test_mark_loaded(self, tmp_path):
        session = LoaderSession(tmp_path)
        assert session.mark_loaded("a.js") is True
        assert session.mark_loaded("a.js") is False
        assert session.mark_loaded("b.js") is True

    def test_elements_snapshot_is_immutable(self, tmp_path):
        session = LoaderSession(tmp_path)
        session.append(CompiledUnit("a"))
        snapshot = session.elements
        session.append(CompiledUnit("b"))

        assert snapshot == (CompiledUnit("a"),)
        assert session.base_dir == tmp_path

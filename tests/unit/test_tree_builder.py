"""Tests for the marker-based tree builder."""

import pytest

from spatialschema.core.errors import TreeBuilderError
from spatialschema.core.lexer import tokenize
from spatialschema.core.syntax import NodeKind
from spatialschema.core.token_source import TokenSource
from spatialschema.core.tree_builder import TreeBuilder


def _builder(text: str) -> TreeBuilder:
    return TreeBuilder(TokenSource(tokenize(text)))


class TestClosing:
    def test_close_wraps_consumed_tokens(self):
        builder = _builder("package a;")
        root = builder.open()
        marker = builder.open()
        builder.advance()
        builder.advance()
        builder.advance()
        node = marker.close(NodeKind.PACKAGE_DEFINITION)

        assert node.kind == NodeKind.PACKAGE_DEFINITION
        assert (node.start, node.end) == (0, 10)
        assert [c.text for c in node.children] == ["package", "a", ";"]
        assert all(c.is_token for c in node.children)

        tree = builder.finish(root)
        assert tree.children == [node]

    def test_nested_markers(self):
        builder = _builder("a b")
        root = builder.open()
        outer = builder.open()
        inner = builder.open()
        builder.advance()
        inner.close(NodeKind.TYPE_NAME)
        builder.advance()
        outer.close(NodeKind.FIELD_DEFINITION)
        tree = builder.finish(root)

        field = tree.children[0]
        assert field.child_kinds() == [NodeKind.TYPE_NAME]
        assert (field.start, field.end) == (0, 3)

    def test_closing_outer_before_inner_raises(self):
        builder = _builder("a")
        builder.open()
        outer = builder.open()
        builder.open()
        with pytest.raises(TreeBuilderError):
            outer.close(NodeKind.TYPE_NAME)

    def test_closing_twice_raises(self):
        builder = _builder("a")
        builder.open()
        marker = builder.open()
        marker.close(NodeKind.TYPE_NAME)
        with pytest.raises(TreeBuilderError):
            marker.close(NodeKind.TYPE_NAME)

    def test_advance_without_marker_raises(self):
        with pytest.raises(TreeBuilderError):
            _builder("a").advance()


class TestDropAndError:
    def test_drop_moves_children_to_parent(self):
        builder = _builder("a b")
        root = builder.open()
        dropped = builder.open()
        builder.advance()
        builder.advance()
        dropped.drop()
        tree = builder.finish(root)
        assert [c.text for c in tree.children] == ["a", "b"]

    def test_error_records_diagnostic(self):
        builder = _builder("x\n  y ;")
        root = builder.open()
        builder.advance()
        marker = builder.open()
        builder.advance()
        node = marker.error("Something went wrong")
        builder.finish(root)

        assert node.is_error
        assert node.message == "Something went wrong"
        assert len(builder.diagnostics) == 1
        diagnostic = builder.diagnostics[0]
        assert (diagnostic.line, diagnostic.column) == (2, 3)
        assert (diagnostic.start, diagnostic.end) == (4, 5)

    def test_empty_error_at_eof(self):
        builder = _builder("a")
        root = builder.open()
        builder.advance()
        node = builder.open().error("Unexpected end")
        builder.finish(root)
        assert (node.start, node.end) == (1, 1)
        assert node.children == []


class TestFinish:
    def test_root_spans_whole_input(self):
        text = "   a  \n"
        builder = _builder(text)
        root = builder.open()
        builder.advance()
        tree = builder.finish(root)
        assert tree.kind == NodeKind.SCHEMA_FILE
        assert (tree.start, tree.end) == (0, len(text))

    def test_finish_with_open_markers_raises(self):
        builder = _builder("a")
        root = builder.open()
        builder.open()
        with pytest.raises(TreeBuilderError):
            builder.finish(root)

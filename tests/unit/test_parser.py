"""Tests for the schema parser: tree shape for well-formed input."""

from pathlib import Path

import pytest

from spatialschema.core.config import ParserOptions
from spatialschema.core.errors import SchemaError
from spatialschema.core.lexer import TokenType, tokenize
from spatialschema.core.parser import parse_file, parse_files, parse_schema
from spatialschema.core.syntax import NodeKind, SyntaxNode


def _tokens_in_tree(tree: SyntaxNode) -> list[str]:
    return [node.text or "" for node in tree.walk() if node.is_token]


class TestWellFormedSchema:
    def test_sample_parses_without_errors(self, sample_schema: str):
        result = parse_schema(sample_schema)
        assert result.ok, result.format_diagnostics()
        assert result.tree.errors() == []

    def test_top_level_kinds(self, sample_schema: str):
        tree = parse_schema(sample_schema).tree
        assert tree.kind == NodeKind.SCHEMA_FILE
        assert tree.child_kinds() == [
            NodeKind.PACKAGE_DEFINITION,
            NodeKind.IMPORT_DEFINITION,
            NodeKind.ENUM_DEFINITION,
            NodeKind.TYPE_DEFINITION,
            NodeKind.ANNOTATION,
            NodeKind.COMPONENT_DEFINITION,
        ]

    def test_component_members(self, sample_schema: str):
        tree = parse_schema(sample_schema).tree
        component = tree.first(NodeKind.COMPONENT_DEFINITION)
        assert component is not None
        assert component.child_kinds() == [
            NodeKind.KEYWORD,
            NodeKind.DEFINITION_NAME,
            NodeKind.COMPONENT_ID_DEFINITION,
            NodeKind.DATA_DEFINITION,
            NodeKind.EVENT_DEFINITION,
            NodeKind.COMMAND_DEFINITION,
            NodeKind.FIELD_DEFINITION,
        ]
        command = component.first(NodeKind.COMMAND_DEFINITION)
        assert command.first(NodeKind.COMMAND_NAME).token_text() == "move"
        assert [n.token_text() for n in command.find_all(NodeKind.TYPE_NAME)] == [
            "MoveResponse",
            "MoveRequest",
        ]

    def test_nested_definitions_inside_type(self, sample_schema: str):
        tree = parse_schema(sample_schema).tree
        outer = tree.first(NodeKind.TYPE_DEFINITION)
        assert NodeKind.ENUM_DEFINITION in outer.child_kinds()
        assert NodeKind.TYPE_DEFINITION in outer.child_kinds()
        assert NodeKind.OPTION_DEFINITION in outer.child_kinds()

    def test_every_token_appears_once_in_order(self, sample_schema: str):
        tree = parse_schema(sample_schema).tree
        lexed = [t.value for t in tokenize(sample_schema) if t.type != TokenType.EOF]
        assert _tokens_in_tree(tree) == lexed

    def test_reparse_is_identical(self, sample_schema: str):
        first = parse_schema(sample_schema)
        second = parse_schema(sample_schema)
        assert first.tree == second.tree
        assert first.diagnostics == second.diagnostics == []


class TestRootSpan:
    def test_empty_input(self):
        tree = parse_schema("").tree
        assert (tree.start, tree.end) == (0, 0)
        assert tree.children == []

    def test_whitespace_and_comments_are_covered(self):
        text = "  // header\n  package a;  \n\n"
        tree = parse_schema(text).tree
        assert (tree.start, tree.end) == (0, len(text))

    def test_children_nest_within_parents(self, sample_schema: str):
        tree = parse_schema(sample_schema).tree
        for node in tree.walk():
            for child in node.children:
                assert node.start <= child.start <= child.end <= node.end


class TestFields:
    def test_generic_map_field(self):
        text = "type T { Map<EntityId, float> positions = 1; }"
        result = parse_schema(text)
        assert result.ok

        fields = result.tree.find_all(NodeKind.FIELD_DEFINITION)
        assert len(fields) == 1
        field = fields[0]
        assert field.first(NodeKind.FIELD_TYPE).text_of(text) == "Map<EntityId, float>"
        assert field.first(NodeKind.FIELD_NAME).token_text() == "positions"
        assert field.first(NodeKind.FIELD_NUMBER).token_text() == "1"
        assert [n.token_text() for n in field.find_all(NodeKind.TYPE_PARAMETER_NAME)] == [
            "EntityId",
            "float",
        ]

    def test_reconstructed_type_text_in_message(self):
        result = parse_schema("type T { Map<A,B> ; }")
        assert [d.message for d in result.diagnostics] == [
            "Expected field name after 'Map<A, B>'."
        ]

    def test_option_typed_field(self):
        result = parse_schema("type T { option<int32> maybe = 1; }")
        assert result.ok
        field = result.tree.first(NodeKind.FIELD_DEFINITION)
        assert field.first(NodeKind.TYPE_NAME).token_text() == "option"
        assert result.tree.first(NodeKind.OPTION_DEFINITION) is None

    def test_out_of_range_number_is_reported_as_zero(self):
        result = parse_schema("type T { int32 x = 99999999999 }")
        assert [d.message for d in result.diagnostics] == ["Expected ';' after 'int32 x = 0'."]


class TestGenericTypeDefinition:
    def test_option_as_generic_definition_name(self):
        result = parse_schema("type option<T> { }")
        assert result.ok

        definition = result.tree.first(NodeKind.TYPE_DEFINITION)
        name = definition.first(NodeKind.DEFINITION_NAME)
        assert name.first(NodeKind.FIELD_TYPE) is not None
        assert name.first(NodeKind.TYPE_NAME).token_text() == "option"
        assert name.first(NodeKind.TYPE_PARAMETER_NAME).token_text() == "T"
        assert result.tree.first(NodeKind.OPTION_DEFINITION) is None

    def test_generic_definition_with_body(self):
        result = parse_schema("type Pair<A, B> { A first = 1; B second = 2; }")
        assert result.ok
        assert len(result.tree.find_all(NodeKind.FIELD_DEFINITION)) == 2


class TestStatements:
    def test_package_name(self):
        tree = parse_schema("package improbable.demo;").tree
        assert tree.first(NodeKind.PACKAGE_NAME).token_text() == "improbable.demo"

    def test_import_filename(self):
        tree = parse_schema('import "improbable/vector3.schema";').tree
        assert tree.first(NodeKind.IMPORT_FILENAME).token_text() == '"improbable/vector3.schema"'

    def test_option_inside_component(self):
        result = parse_schema("component C { option java_package = demo; id = 1; }")
        assert result.ok
        option = result.tree.first(NodeKind.OPTION_DEFINITION)
        assert option.first(NodeKind.OPTION_NAME).token_text() == "java_package"
        assert option.first(NodeKind.OPTION_VALUE).token_text() == "demo"

    def test_enum_values(self):
        result = parse_schema("enum Color { RED = 0; GREEN = -1; }")
        assert result.ok
        values = result.tree.find_all(NodeKind.ENUM_VALUE_DEFINITION)
        assert [v.first(NodeKind.FIELD_NAME).token_text() for v in values] == ["RED", "GREEN"]
        assert [v.first(NodeKind.FIELD_NUMBER).token_text() for v in values] == ["0", "-1"]


class TestQuoteStripping:
    def test_message_strips_exactly_the_quotes(self):
        result = parse_schema('import "a.schema"')
        assert [d.message for d in result.diagnostics] == [
            "Expected ';' after 'import \"a.schema\"'."
        ]

    def test_legacy_stripping_drops_one_more_character(self):
        result = parse_schema(
            'import "a.schema"', options=ParserOptions(legacy_quote_stripping=True)
        )
        assert [d.message for d in result.diagnostics] == [
            "Expected ';' after 'import \"a.schem\"'."
        ]


class TestFacade:
    def test_parse_file(self, tmp_path: Path):
        path = tmp_path / "a.schema"
        path.write_text("package a;\n")
        result = parse_file(path)
        assert result.ok
        assert result.file == path

    def test_parse_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(SchemaError):
            parse_file(tmp_path / "missing.schema")

    def test_parse_non_utf8_file_raises(self, tmp_path: Path):
        path = tmp_path / "latin1.schema"
        path.write_bytes(b"package a;\n\xff\xfe type T { }\n")
        with pytest.raises(SchemaError, match="Cannot read schema file"):
            parse_file(path)

    def test_parse_files_keeps_order(self, tmp_path: Path):
        good = tmp_path / "good.schema"
        bad = tmp_path / "bad.schema"
        good.write_text("package a;")
        bad.write_text("package")
        results = parse_files([bad, good])
        assert [r.file for r in results] == [bad, good]
        assert [r.ok for r in results] == [False, True]

    def test_format_diagnostics(self):
        result = parse_schema("type T {\n  int32 x = ;\n}", file=Path("t.schema"))
        assert result.format_diagnostics() == (
            "t.schema:2:13: error: Expected field number after 'int32 x = '."
        )

    def test_format_diagnostics_with_snippet(self):
        result = parse_schema("type T {\n  int32 x = ;\n}")
        report = result.format_diagnostics(with_snippets=True)
        assert report.startswith("<input>:2:13: error:")
        assert "   2 |   int32 x = ;" in report
        assert "^^^" in report

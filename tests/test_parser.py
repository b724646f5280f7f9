"""
Tests for the parser package: tree-sitter lowering and the tinycss2 layer.
"""

import pytest

from jsmods.exceptions import InvalidInput, ParseError
from jsmods.parser import parse, parse_stylesheet, validate_syntax
from jsmods.parser.ast import (
    Comment,
    ImportDeclaration,
    NewExpression,
    NodeKind,
    ObjectExpression,
    Opaque,
    PropertyKind,
    VariableDeclaration,
)
from jsmods.parser.css_parser import parse_declarations, selector_of, serialize
from jsmods.parser.languages import get_language, new_parser


class TestLanguages:
    """Test grammar loading."""

    def test_language_is_cached(self):
        assert get_language("javascript") is get_language("javascript")

    def test_parsers_are_not_shared(self):
        assert new_parser("javascript") is not new_parser("javascript")

    def test_css_is_not_a_script_language(self):
        with pytest.raises(InvalidInput):
            get_language("css")


class TestParse:
    """Test JavaScript/TypeScript parsing into the domain AST."""

    def test_program_statements_in_order(self, app_js):
        unit = parse(app_js)
        kinds = [node.kind for node in unit.program.body]

        assert kinds[0] == NodeKind.COMMENT
        assert kinds[1:5] == [NodeKind.IMPORT_DECLARATION] * 4
        assert NodeKind.VARIABLE_DECLARATION in kinds
        assert kinds[-1] == NodeKind.OPAQUE

    def test_spans_increase(self, app_js):
        body = parse(app_js).program.body
        for previous, current in zip(body, body[1:]):
            assert previous.span.end <= current.span.start

    def test_import_sources(self, app_js):
        imports = parse(app_js).program.imports
        assert [decl.source for decl in imports] == [
            "phoenix_html",
            "phoenix",
            "phoenix_live_view",
            "../vendor/topbar",
        ]
        assert imports[1].raw == 'import { Socket } from "phoenix"'

    def test_live_socket_declarator(self, app_js):
        unit = parse(app_js)
        declarator = next(d for d in unit.program.declarators if d.name == "liveSocket")

        assert isinstance(declarator.init, NewExpression)
        assert declarator.init.callee == "LiveSocket"
        options = declarator.init.options_object()
        assert isinstance(options, ObjectExpression)
        assert [entry.name for entry in options.entries] == ["longPollFallbackMs", "params", "hooks"]

    def test_property_kinds(self):
        unit = parse("const o = { a, ...b, c: 1, 'd': 2, e() {}, [f]: 3 };")
        entries = unit.program.declarators[0].init.entries

        assert [entry.kind for entry in entries] == [
            PropertyKind.SHORTHAND,
            PropertyKind.SPREAD,
            PropertyKind.KEYED,
            PropertyKind.KEYED,
            PropertyKind.METHOD,
            PropertyKind.KEYED,
        ]
        assert [entry.name for entry in entries] == ["a", "b", "c", "d", "e", None]

    def test_spread_and_shorthand_identities_differ(self):
        entries = parse("const o = { Foo, ...Foo };").program.declarators[0].init.entries
        assert entries[0].identity != entries[1].identity

    def test_object_comments_attach_to_entries(self):
        source = "const o = {\n  // leading\n  a, // trailing\n  b,\n  // dangling\n};\n"
        obj = parse(source).program.declarators[0].init

        assert obj.multiline
        assert obj.trailing_comma
        assert obj.entries[0].leading_comments[0].slice(source.encode()) == "// leading"
        assert obj.entries[0].trailing_comment.slice(source.encode()) == "// trailing"
        assert obj.entries[1].trailing_comment is None
        assert len(obj.dangling_comments) == 1

    def test_inline_object_without_trailing_comma(self):
        obj = parse("const o = { a, b };").program.declarators[0].init
        assert not obj.multiline
        assert not obj.trailing_comma

    def test_exported_declaration(self):
        program = parse("export const Hooks = {};\n").program
        declaration = program.body[0]

        assert isinstance(declaration, VariableDeclaration)
        assert declaration.exported
        assert declaration.keyword == "const"
        assert program.declarators[0].name == "Hooks"

    def test_destructuring_has_no_name(self):
        program = parse("const { a, b } = obj;").program
        assert program.declarators[0].name is None

    def test_other_statements_are_opaque(self):
        body = parse("function f() {}\nf();\n").program.body
        assert all(isinstance(node, Opaque) for node in body)

    def test_top_level_comment(self):
        body = parse("/* header */\nimport x from 'x';").program.body
        assert isinstance(body[0], Comment)
        assert isinstance(body[1], ImportDeclaration)

    def test_typescript(self, test_files_dir):
        source = (test_files_dir / "app.ts").read_text()
        unit = parse(source, "typescript")
        declarator = unit.program.declarators[-1]

        assert declarator.name == "liveSocket"
        # `{...} as LiveSocketOptions` still exposes the options object
        assert declarator.init.options_object() is not None

    def test_typescript_rejected_by_javascript_grammar(self):
        with pytest.raises(ParseError):
            parse("const x: number = 1;", "javascript")

    def test_empty_source(self):
        unit = parse("")
        assert unit.program.body == []


class TestParseErrors:
    """Test syntax error reporting."""

    def test_error_names_position(self):
        with pytest.raises(ParseError) as exc_info:
            parse("const a = 1;\nconst b = ;\n")
        assert exc_info.value.language == "javascript"
        assert "line 2" in exc_info.value.message

    def test_validate_syntax(self):
        assert validate_syntax("const a = 1;") == []
        assert len(validate_syntax("const a = ;")) == 1

    def test_unclosed_object(self):
        with pytest.raises(ParseError):
            parse("let liveSocket = new LiveSocket('/live', Socket, {")


class TestCssParser:
    """Test the tinycss2 layer."""

    def test_roundtrip(self, app_css):
        assert serialize(parse_stylesheet(app_css)) == app_css

    def test_rules_and_comments(self, app_css):
        nodes = [node for node in parse_stylesheet(app_css) if node.type != "whitespace"]
        types = [node.type for node in nodes]

        assert types.count("at-rule") == 2
        assert types.count("comment") == 2
        selectors = [selector_of(node) for node in nodes if node.type == "qualified-rule"]
        assert selectors == [".hide-scrollbar", ".hide-scrollbar::-webkit-scrollbar", ".other-class"]

    def test_declarations(self):
        rule = next(node for node in parse_stylesheet(".a { color: red; display: none }") if node.type == "qualified-rule")
        declarations = [node for node in parse_declarations(rule.content) if node.type == "declaration"]
        assert [node.lower_name for node in declarations] == ["color", "display"]

    def test_invalid_declaration_is_recoverable(self):
        rule = next(node for node in parse_stylesheet(".a { color red; display: none }") if node.type == "qualified-rule")
        nodes = parse_declarations(rule.content)
        assert any(node.type == "error" for node in nodes)
        assert [node.lower_name for node in nodes if node.type == "declaration"] == ["display"]

    def test_rule_without_block(self):
        with pytest.raises(ParseError) as exc_info:
            parse_stylesheet(".hide-scrollbar")
        assert exc_info.value.language == "css"

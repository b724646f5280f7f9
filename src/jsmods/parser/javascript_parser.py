"""
JavaScript / TypeScript parser.

Parses source text with tree-sitter and lowers the concrete tree into the
domain AST defined in `jsmods.parser.ast`.
"""

from typing import List, Optional

from tree_sitter import Node

from jsmods.logging_config import logger
from jsmods.exceptions import ParseError
from .languages import new_parser
from .ast import (
    Comment,
    Expression,
    ImportDeclaration,
    NewExpression,
    ObjectExpression,
    Opaque,
    Program,
    PropertyEntry,
    PropertyKind,
    SourceUnit,
    Span,
    Statement,
    VariableDeclaration,
    VariableDeclarator,
)

DECLARATION_TYPES = ("lexical_declaration", "variable_declaration")

# Wrappers whose first named child is the expression we care about
TRANSPARENT_EXPRESSIONS = ("parenthesized_expression", "as_expression", "satisfies_expression")


def parse(text: str, language: str = "javascript") -> SourceUnit:
    """
    Parse source text into a SourceUnit.

    Args:
        text: Source code
        language: "javascript" or "typescript"

    Returns:
        SourceUnit holding the tree-sitter tree and the lowered Program

    Raises:
        ParseError: If the tree contains ERROR or MISSING nodes
    """
    source = text.encode("utf-8")
    tree = new_parser(language).parse(source)
    root = tree.root_node

    if root.has_error:
        error_nodes = find_error_nodes(root)
        if error_nodes:
            line = error_nodes[0].start_point[0] + 1
            col = error_nodes[0].start_point[1] + 1
            message = f"Syntax error at line {line}, column {col}"
        else:
            message = "Syntax error"
        logger.debug(f"{language} parse failed: {message}")
        raise ParseError(language, message)

    body = [_lower_statement(child, source) for child in root.named_children]
    program = Program(span=Span(0, len(source)), body=body)
    return SourceUnit(text=text, source=source, language=language, tree=tree, program=program)


def validate_syntax(text: str, language: str = "javascript") -> List[str]:
    """Return syntax error messages for `text` (empty when it parses cleanly)."""
    try:
        parse(text, language)
    except ParseError as e:
        return [e.message]
    return []


def find_error_nodes(root: Node) -> List[Node]:
    """
    Find all ERROR and MISSING nodes in document order.

    Args:
        root: Root node to search from

    Returns:
        List of error nodes
    """
    errors = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            errors.append(node)
        stack.extend(reversed(node.children))
    return errors


def _span(node: Node) -> Span:
    return Span(node.start_byte, node.end_byte)


def _text(node: Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8")


def _string_value(node: Node, source: bytes) -> str:
    raw = _text(node, source)
    if len(raw) >= 2 and raw[0] in "'\"`" and raw[-1] == raw[0]:
        return raw[1:-1]
    return raw


def _first_descendant(node: Node, node_type: str) -> Optional[Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == node_type:
            return current
        stack.extend(reversed(current.children))
    return None


def _lower_statement(node: Node, source: bytes) -> Statement:
    if node.type == "import_statement":
        return _lower_import(node, source)
    if node.type in DECLARATION_TYPES:
        return _lower_declaration(node, node, source, exported=False)
    if node.type == "export_statement":
        declaration = node.child_by_field_name("declaration")
        if declaration is not None and declaration.type in DECLARATION_TYPES:
            return _lower_declaration(node, declaration, source, exported=True)
    if node.type in ("comment", "hash_bang_line"):
        return Comment(span=_span(node))
    return Opaque(span=_span(node))


def _lower_import(node: Node, source: bytes) -> ImportDeclaration:
    source_node = node.child_by_field_name("source")
    if source_node is None:
        # import x = require("y") in TypeScript
        source_node = _first_descendant(node, "string")
    module = _string_value(source_node, source) if source_node is not None else ""
    return ImportDeclaration(span=_span(node), source=module, raw=_text(node, source))


def _lower_declaration(outer: Node, node: Node, source: bytes, exported: bool) -> VariableDeclaration:
    keyword = _text(node.children[0], source) if node.children else ""
    declarators = []
    for child in node.named_children:
        if child.type != "variable_declarator":
            continue
        name_node = child.child_by_field_name("name")
        value_node = child.child_by_field_name("value")
        declarators.append(
            VariableDeclarator(
                span=_span(child),
                name=_text(name_node, source) if name_node is not None and name_node.type == "identifier" else None,
                init=lower_expression(value_node, source) if value_node is not None else None,
            )
        )
    return VariableDeclaration(span=_span(outer), keyword=keyword, declarators=declarators, exported=exported)


def lower_expression(node: Node, source: bytes) -> Expression:
    """Lower an expression node; shapes we do not model become Opaque."""
    if node.type == "object":
        return _lower_object(node, source)
    if node.type == "new_expression":
        constructor = node.child_by_field_name("constructor")
        arguments_node = node.child_by_field_name("arguments")
        arguments = []
        if arguments_node is not None:
            arguments = [
                lower_expression(child, source)
                for child in arguments_node.named_children
                if child.type != "comment"
            ]
        return NewExpression(
            span=_span(node),
            callee=_text(constructor, source) if constructor is not None else None,
            arguments=arguments,
        )
    if node.type in TRANSPARENT_EXPRESSIONS:
        inner = [child for child in node.named_children if child.type != "comment"]
        if inner:
            return lower_expression(inner[0], source)
    return Opaque(span=_span(node))


def _lower_object(node: Node, source: bytes) -> ObjectExpression:
    entries: List[PropertyEntry] = []
    pending: List[Span] = []
    previous: Optional[PropertyEntry] = None
    trailing_comma = False

    for child in node.children:
        if child.type == "comment":
            span = _span(child)
            same_line = previous is not None and b"\n" not in source[previous.span.end:child.start_byte]
            if same_line and previous.trailing_comment is None and not pending:
                previous.trailing_comment = span
            else:
                pending.append(span)
            continue
        if not child.is_named:
            if child.type == ",":
                trailing_comma = True
            continue

        entry = _lower_property(child, source)
        entry.leading_comments = pending
        pending = []
        entries.append(entry)
        previous = entry
        trailing_comma = False

    return ObjectExpression(
        span=_span(node),
        entries=entries,
        multiline=b"\n" in source[node.start_byte:node.end_byte],
        trailing_comma=trailing_comma and bool(entries),
        dangling_comments=pending,
    )


def _lower_property(node: Node, source: bytes) -> PropertyEntry:
    span = _span(node)
    if node.type == "shorthand_property_identifier":
        return PropertyEntry(kind=PropertyKind.SHORTHAND, name=_text(node, source), span=span)
    if node.type == "spread_element":
        argument = [child for child in node.named_children if child.type != "comment"]
        name = _text(argument[0], source) if argument else None
        return PropertyEntry(kind=PropertyKind.SPREAD, name=name, span=span)
    if node.type == "pair":
        key = node.child_by_field_name("key")
        value = node.child_by_field_name("value")
        return PropertyEntry(
            kind=PropertyKind.KEYED,
            name=_property_key_name(key, source),
            span=span,
            value=lower_expression(value, source) if value is not None else None,
        )
    if node.type == "method_definition":
        name_node = node.child_by_field_name("name")
        name = _property_key_name(name_node, source) if name_node is not None else None
        return PropertyEntry(kind=PropertyKind.METHOD, name=name, span=span)
    return PropertyEntry(kind=PropertyKind.OTHER, name=None, span=span)


def _property_key_name(key: Optional[Node], source: bytes) -> Optional[str]:
    if key is None or key.type == "computed_property_name":
        return None
    if key.type == "string":
        return _string_value(key, source)
    return _text(key, source)

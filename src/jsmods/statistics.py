"""
Single-pass node statistics over a parsed JavaScript/TypeScript module.
"""

from tree_sitter import Node

from jsmods.logging_config import logger
from jsmods.parser import parse
from jsmods.parser.ast import NodeKind
from jsmods.schemas import StatisticsReport

# tree-sitter node types -> counted kinds.
# Methods and arrow functions are not counted as functions.
COUNTED_NODE_TYPES = {
    "function_declaration": NodeKind.FUNCTION,
    "generator_function_declaration": NodeKind.FUNCTION,
    "function_expression": NodeKind.FUNCTION,
    "function": NodeKind.FUNCTION,
    "generator_function": NodeKind.FUNCTION,
    "class_declaration": NodeKind.CLASS,
    "abstract_class_declaration": NodeKind.CLASS,
    "class": NodeKind.CLASS,
    "debugger_statement": NodeKind.DEBUGGER_STATEMENT,
    "import_statement": NodeKind.IMPORT_DECLARATION,
    "try_statement": NodeKind.TRY_STATEMENT,
    "throw_statement": NodeKind.THROW_STATEMENT,
}

REPORT_FIELDS = {
    NodeKind.FUNCTION: "functions",
    NodeKind.CLASS: "classes",
    NodeKind.DEBUGGER_STATEMENT: "debuggers",
    NodeKind.IMPORT_DECLARATION: "imports",
    NodeKind.TRY_STATEMENT: "trys",
    NodeKind.THROW_STATEMENT: "throws",
}


def count_nodes(root: Node) -> StatisticsReport:
    """Walk the tree once and count the node kinds of interest."""
    counts = {field: 0 for field in REPORT_FIELDS.values()}
    stack = [root]
    while stack:
        node = stack.pop()
        # Keywords such as `function` and `class` are anonymous nodes with the same type name
        if node.is_named:
            kind = COUNTED_NODE_TYPES.get(node.type)
            if kind is not None:
                counts[REPORT_FIELDS[kind]] += 1
        stack.extend(node.children)
    return StatisticsReport(**counts)


def statistics(text: str, language: str = "javascript") -> StatisticsReport:
    """
    Collect statistics for a source text.

    Raises:
        ParseError: If the source does not parse
    """
    unit = parse(text, language)
    report = count_nodes(unit.tree.root_node)
    logger.debug(f"Statistics: {report.model_dump()}")
    return report

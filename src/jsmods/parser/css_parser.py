"""
CSS parser.

Thin layer over tinycss2 that keeps comments and whitespace so that every
node can be re-serialized unchanged.
"""

from typing import List

import tinycss2
from tinycss2.ast import Node

from jsmods.logging_config import logger
from jsmods.exceptions import ParseError


def parse_stylesheet(text: str) -> List[Node]:
    """
    Parse a stylesheet into tinycss2 nodes (rules, at-rules, comments, whitespace).

    Raises:
        ParseError: If tinycss2 reports a parse error node
    """
    nodes = tinycss2.parse_stylesheet(text, skip_comments=False, skip_whitespace=False)
    _raise_on_error(nodes)
    return nodes


def parse_declarations(content: List[Node]) -> List[Node]:
    """
    Parse the content of a qualified rule into declarations, keeping comments.

    An invalid declaration is dropped by CSS error recovery, so it comes back
    as an `error` node next to the valid ones instead of raising.
    """
    nodes = tinycss2.parse_blocks_contents(content, skip_comments=False, skip_whitespace=False)
    for node in nodes:
        if node.type == "error":
            logger.debug(f"Skipping invalid declaration at line {node.source_line}: {node.message}")
    return nodes


def selector_of(rule: Node) -> str:
    """Serialized, stripped prelude of a qualified rule."""
    return tinycss2.serialize(rule.prelude).strip()


def serialize(nodes: List[Node]) -> str:
    return tinycss2.serialize(nodes)


def _raise_on_error(nodes: List[Node]) -> None:
    for node in nodes:
        if node.type == "error":
            message = f"{node.message} at line {node.source_line}, column {node.source_column}"
            logger.debug(f"css parse failed: {message}")
            raise ParseError("css", message)

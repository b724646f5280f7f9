"""
CSS rule mutator.

tinycss2 decides what the stylesheet contains; edits are spliced into the
original text so every untouched byte, comments included, is kept as is.
"""

import re
from typing import List, Optional, Tuple

import tinycss2
from tinycss2.ast import Node

from jsmods.logging_config import logger
from jsmods.config import CSS_RULE
from jsmods.parser.css_parser import parse_declarations, parse_stylesheet, selector_of
from .editor import detect_line_ending, normalize_line_endings

_NEWLINE = re.compile(r"\r\n|\r|\n|\f")
_TRAILING_COMMENTS = re.compile(r"(?:\s*/\*.*?\*/)*\s*$", re.DOTALL)
_SELECTOR_WHITESPACE = re.compile(r"\s+")


def _declaration_text() -> str:
    return f"{CSS_RULE['property']}: {CSS_RULE['value']};"


def _new_rule_block(line_ending: str = "\n") -> str:
    return normalize_line_endings(f"{CSS_RULE['selector']} {{\n  {_declaration_text()}\n}}\n", line_ending)


def _offset(text: str, line: int, column: int) -> int:
    """Character offset of a 1-based tinycss2 (line, column) position."""
    line_start = 0
    if line > 1:
        for index, match in enumerate(_NEWLINE.finditer(text), start=2):
            if index == line:
                line_start = match.end()
                break
    return line_start + column - 1


def _skip_comment_or_string(text: str, i: int) -> int:
    """Index after the comment or string starting at `i` (or `i` when there is none)."""
    if text.startswith("/*", i):
        end = text.find("*/", i + 2)
        return len(text) if end == -1 else end + 2
    if text[i] in "\"'":
        quote = text[i]
        j = i + 1
        while j < len(text):
            if text[j] == "\\":
                j += 2
                continue
            if text[j] == quote or text[j] == "\n":
                return j + 1
            j += 1
        return len(text)
    return i


def _block_bounds(text: str, start: int) -> Optional[Tuple[int, int]]:
    """Offsets of the `{` opening the rule at `start` and of its matching `}`."""
    depth = 0
    opening = None
    i = start
    while i < len(text):
        skipped = _skip_comment_or_string(text, i)
        if skipped != i:
            i = skipped
            continue
        char = text[i]
        if char == "{":
            if opening is None:
                opening = i
            depth += 1
        elif char == "}" and opening is not None:
            depth -= 1
            if depth == 0:
                return opening, i
        i += 1
    return None


def _find_rule(nodes: List[Node]) -> Optional[Node]:
    target = CSS_RULE["selector"]
    for node in nodes:
        if node.type != "qualified-rule":
            continue
        if _SELECTOR_WHITESPACE.sub(" ", selector_of(node)) == target:
            return node
    return None


def _has_declaration(rule: Node) -> bool:
    # Invalid declarations come back as error nodes and are skipped
    for node in parse_declarations(rule.content):
        if node.type != "declaration" or node.lower_name != CSS_RULE["property"]:
            continue
        if tinycss2.serialize(node.value).strip().lower() == CSS_RULE["value"]:
            return True
    return False


def _rule_indent(text: str, offset: int) -> str:
    line_start = max(text.rfind("\n", 0, offset), text.rfind("\r", 0, offset)) + 1
    line = text[line_start:offset]
    return line[:len(line) - len(line.lstrip())]


def _extend_content(content: str, closing_indent: str, line_ending: str = "\n") -> str:
    """Append the declaration to a rule body, keeping its layout."""
    declaration = _declaration_text()
    multiline = "\n" in content or "\r" in content

    if not content.strip():
        if multiline:
            return f"{line_ending}{closing_indent}  {declaration}{line_ending}{closing_indent}"
        return f" {declaration} "

    significant = _TRAILING_COMMENTS.sub("", content)
    body_end = len(content.rstrip())
    needs_semicolon = bool(significant.strip()) and not significant.rstrip().endswith((";", "{", "}"))

    if multiline:
        indent = closing_indent + "  "
        for line in content.splitlines():
            if line.strip():
                indent = line[:len(line) - len(line.lstrip())]
                break
        addition = line_ending + indent + declaration
    else:
        addition = " " + declaration

    return (
        content[:len(significant)]
        + (";" if needs_semicolon else "")
        + content[len(significant):body_end]
        + addition
        + content[body_end:]
    )


def ensure_hide_scrollbar(text: str) -> str:
    """
    Ensure a top-level `.hide-scrollbar` rule declares `display: none`.

    Args:
        text: Stylesheet source

    Returns:
        Modified stylesheet, or the input unchanged when already compliant

    Raises:
        ParseError: If the stylesheet does not parse
    """
    nodes = parse_stylesheet(text)
    rule = _find_rule(nodes)
    line_ending = detect_line_ending(text)

    if rule is None:
        logger.debug(f"No {CSS_RULE['selector']} rule, appending one")
        if not text.strip():
            return _new_rule_block(line_ending)
        separator = line_ending if text.endswith(("\n", "\r")) else line_ending * 2
        return text + separator + _new_rule_block(line_ending)

    if _has_declaration(rule):
        return text

    start = _offset(text, rule.source_line, rule.source_column)
    indent = _rule_indent(text, start)
    bounds = _block_bounds(text, start)
    if bounds is None:
        # tinycss2 accepts a rule left open at end of file
        opening = text.index("{", start)
        content = text[opening + 1:]
        extended = _extend_content(content, indent, line_ending)
        return text[:opening + 1] + extended + line_ending + "}" + line_ending

    opening, closing = bounds
    content = text[opening + 1:closing]
    logger.debug(f"Adding {_declaration_text()} to {CSS_RULE['selector']}")
    return text[:opening + 1] + _extend_content(content, indent, line_ending) + text[closing:]


def css_module_imported(text: str, path: str) -> bool:
    """True iff an `@import "path"` or `@import url("path")` rule names `path`."""
    for node in parse_stylesheet(text):
        if node.type != "at-rule" or node.lower_at_keyword != "import":
            continue
        for token in node.prelude:
            if token.type in ("whitespace", "comment"):
                continue
            if token.type in ("string", "url") and token.value == path:
                return True
            if token.type == "function" and token.lower_name == "url":
                for argument in token.arguments:
                    if argument.type == "string" and argument.value == path:
                        return True
            break
    return False

"""
Object-literal entry merging and the generic variable/object extender.

The merge rule is shared by the hooks mutator: entries already present stay
where they are, new spread entries then new shorthand entries are appended,
each group sorted by name.
"""

import re
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from jsmods.logging_config import logger
from jsmods.exceptions import InvalidInput, StructureNotFound
from jsmods.parser import parse
from jsmods.parser.ast import ObjectExpression, PropertyEntry, PropertyKind, SourceUnit
from .editor import CodeEditor, synthesize_shorthand, synthesize_spread
from .locator import find_variable

IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")
# Spread arguments may be member chains (...window.Hooks)
MEMBER_CHAIN = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")

Names = Union[str, Sequence[str]]


def as_name_list(names: Names) -> List[str]:
    """Accept a single name or a list of names."""
    if isinstance(names, str):
        return [names]
    return list(names)


def classify_entry(raw: str) -> Tuple[PropertyKind, str]:
    """
    Classify a requested entry as spread or shorthand.

    Raises:
        InvalidInput: If the name is not a valid identifier
    """
    name = raw.strip()
    if name.startswith("..."):
        identifier = name[3:].strip()
        if not MEMBER_CHAIN.match(identifier):
            raise InvalidInput(f"'{raw}' is not a valid spread entry")
        return PropertyKind.SPREAD, identifier
    if not IDENTIFIER.match(name):
        raise InvalidInput(f"'{raw}' is not a valid identifier")
    return PropertyKind.SHORTHAND, name


def _identities(entries: Iterable[PropertyEntry]):
    return {entry.identity for entry in entries if entry.identity is not None}


def merge_entries(existing: Sequence[PropertyEntry], requested: Names) -> Optional[List[PropertyEntry]]:
    """
    Merge requested names into an entry list.

    Returns:
        The new entry list, or None when every requested entry is already present
    """
    present = _identities(existing)
    new_spreads = set()
    new_shorthands = set()

    for raw in as_name_list(requested):
        kind, name = classify_entry(raw)
        identity = (PropertyKind.SPREAD if kind == PropertyKind.SPREAD else PropertyKind.SHORTHAND, name)
        if identity in present:
            continue
        if kind == PropertyKind.SPREAD:
            new_spreads.add(name)
        else:
            new_shorthands.add(name)

    if not new_spreads and not new_shorthands:
        return None

    logger.debug(f"Appending spreads={sorted(new_spreads)} shorthands={sorted(new_shorthands)}")
    return (
        list(existing)
        + [synthesize_spread(name) for name in sorted(new_spreads)]
        + [synthesize_shorthand(name) for name in sorted(new_shorthands)]
    )


def remove_entries(existing: Sequence[PropertyEntry], requested: Names) -> Optional[List[PropertyEntry]]:
    """
    Drop entries whose identity matches a requested name.

    Returns:
        The remaining entries in order, or None when nothing matched
    """
    targets = set()
    for raw in as_name_list(requested):
        kind, name = classify_entry(raw)
        targets.add((PropertyKind.SPREAD if kind == PropertyKind.SPREAD else PropertyKind.SHORTHAND, name))

    kept = [entry for entry in existing if entry.identity not in targets]
    if len(kept) == len(existing):
        return None
    return kept


def extend_object(
    unit: SourceUnit,
    obj: ObjectExpression,
    names: Names,
    editor: CodeEditor,
) -> SourceUnit:
    """Merge names into `obj` and return the rewritten unit (the same unit if unchanged)."""
    merged = merge_entries(obj.entries, names)
    if merged is None:
        return unit
    indent_unit = editor.detect_indentation(unit.text)
    return editor.rewrite(unit, [editor.replace_object(unit.source, obj, merged, indent_unit)])


def exist_var(text: str, var_name: str, language: str = "javascript") -> bool:
    """True iff a top-level variable named `var_name` is declared."""
    unit = parse(text, language)
    return find_variable(unit.program, var_name) is not None


def extend_var_object_by_object_names(
    text: str,
    var_name: str,
    names: Names,
    language: str = "javascript",
    editor: Optional[CodeEditor] = None,
) -> str:
    """
    Add shorthand/spread entries to the object literal assigned to `var_name`.

    Raises:
        ParseError: If the source does not parse
        StructureNotFound: If the variable is missing or not an object literal
        InvalidInput: If a requested name is not an identifier
    """
    editor = editor or CodeEditor()
    unit = parse(text, language)

    declarator = find_variable(unit.program, var_name)
    if declarator is None:
        raise StructureNotFound(f"variable {var_name} not found.")
    if not isinstance(declarator.init, ObjectExpression):
        raise StructureNotFound(f"variable {var_name} is not an object.")

    return extend_object(unit, declarator.init, names, editor).text

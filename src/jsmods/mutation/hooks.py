"""
LiveSocket hook-object mutator.

Drives the LiveSocketState machine resolved by the locator: fails when the
call site or its options object is missing, synthesizes a `hooks` key when
absent, and merges into or removes from an existing hooks object.
"""

from typing import Optional

from jsmods.logging_config import logger
from jsmods.config import LIVE_SOCKET
from jsmods.exceptions import StructureNotFound
from jsmods.parser import parse
from jsmods.parser.ast import SourceUnit
from .editor import CodeEditor, synthesize_keyed_object
from .locator import LiveSocketSite, LiveSocketState, find_live_socket, resolve_live_socket
from .objects import Names, extend_object, merge_entries, remove_entries

LIVE_SOCKET_NOT_FOUND = "liveSocket not found."
PROPERTIES_NOT_FOUND = "properties not found in the AST."
HOOKS_NOT_OBJECT = "hooks is not an object expression."


def exist_live_socket(text: str, language: str = "javascript") -> bool:
    """True iff a LiveSocket declaration exists (options are not inspected)."""
    unit = parse(text, language)
    return find_live_socket(unit.program) is not None


def _require_site(unit: SourceUnit) -> LiveSocketSite:
    site = resolve_live_socket(unit.program)
    logger.debug(f"LiveSocket state: {site.state.value}")

    if site.state == LiveSocketState.NO_LIVE_SOCKET:
        raise StructureNotFound(LIVE_SOCKET_NOT_FOUND)
    if site.state == LiveSocketState.NO_OPTIONS_OBJECT:
        raise StructureNotFound(PROPERTIES_NOT_FOUND)
    if site.state == LiveSocketState.HOOKS_NOT_OBJECT:
        raise StructureNotFound(HOOKS_NOT_OBJECT)
    return site


def extend_hook_object(
    text: str,
    names: Names,
    language: str = "javascript",
    editor: Optional[CodeEditor] = None,
) -> str:
    """
    Add hook entries to the LiveSocket `hooks` object.

    Args:
        text: Source text
        names: One name or a list; a leading "..." marks a spread entry
        language: "javascript" or "typescript"
        editor: Optional editor (layout config)

    Returns:
        Rewritten source, or the input unchanged when every entry is present

    Raises:
        ParseError: If the source does not parse
        StructureNotFound: If the LiveSocket call site or its options are missing
    """
    editor = editor or CodeEditor()
    unit = parse(text, language)
    site = _require_site(unit)

    if site.state == LiveSocketState.HAS_HOOKS_KEY:
        return extend_object(unit, site.hooks, names, editor).text

    # NO_HOOKS_KEY: build `hooks: { ... }` from an empty set and append it to the options
    hook_entries = merge_entries([], names)
    if hook_entries is None:
        return text
    options = site.options
    entries = list(options.entries) + [synthesize_keyed_object(LIVE_SOCKET["hooks_key"], hook_entries)]
    indent_unit = editor.detect_indentation(unit.text)
    logger.debug("Synthesizing hooks key in LiveSocket options")
    return editor.rewrite(unit, [editor.replace_object(unit.source, options, entries, indent_unit)]).text


def remove_objects_from_hooks(
    text: str,
    names: Names,
    language: str = "javascript",
    editor: Optional[CodeEditor] = None,
) -> str:
    """
    Remove hook entries from the LiveSocket `hooks` object.

    Absent entries and a missing hooks key are no-ops.

    Raises:
        ParseError: If the source does not parse
        StructureNotFound: If the LiveSocket call site or its options are missing
    """
    editor = editor or CodeEditor()
    unit = parse(text, language)
    site = _require_site(unit)

    if site.state == LiveSocketState.NO_HOOKS_KEY:
        logger.debug("No hooks key to remove from")
        return text

    hooks = site.hooks
    remaining = remove_entries(hooks.entries, names)
    if remaining is None:
        return text

    indent_unit = editor.detect_indentation(unit.text)
    return editor.rewrite(unit, [editor.replace_object(unit.source, hooks, remaining, indent_unit)]).text

"""
Mutation package: structural edits over JavaScript, TypeScript and CSS sources.

Every mutator takes source text and returns new text (or raises); unedited
bytes are always copied through unchanged.
"""

from .editor import CodeEditor
from .formatter import CodeFormatter
from .import_manager import ImportManager
from .locator import ImportMatcher, LiveSocketSite, LiveSocketState, resolve_live_socket
from .hooks import exist_live_socket, extend_hook_object, remove_objects_from_hooks
from .objects import exist_var, extend_var_object_by_object_names, merge_entries, remove_entries
from .css import css_module_imported, ensure_hide_scrollbar
from .config import (
    FORMATTERS,
    LAYOUT,
    INDENT_DETECTION,
    get_mutation_config,
)

__all__ = [
    # Components
    "CodeEditor",
    "CodeFormatter",
    "ImportManager",
    "ImportMatcher",

    # LiveSocket
    "LiveSocketSite",
    "LiveSocketState",
    "resolve_live_socket",
    "exist_live_socket",
    "extend_hook_object",
    "remove_objects_from_hooks",

    # Objects
    "exist_var",
    "extend_var_object_by_object_names",
    "merge_entries",
    "remove_entries",

    # CSS
    "css_module_imported",
    "ensure_hide_scrollbar",

    # Configuration
    "FORMATTERS",
    "LAYOUT",
    "INDENT_DETECTION",
    "get_mutation_config",
]
